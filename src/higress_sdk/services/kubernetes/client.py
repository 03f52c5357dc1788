"""Kubernetes service facade.

Wires configuration, credential resolution, the API client, every resource
manager and the controller client into one object for domain services.
"""

from __future__ import annotations

from typing import Any

import structlog

from higress_sdk.integrations.controller.client import ControllerClient
from higress_sdk.integrations.kubernetes.client import KubernetesClient
from higress_sdk.integrations.kubernetes.config import HigressConfig
from higress_sdk.integrations.kubernetes.connectivity import CredentialResolver
from higress_sdk.services.kubernetes.configuration_manager import (
    ConfigMapManager,
    SecretManager,
)
from higress_sdk.services.kubernetes.custom_resource_manager import (
    McpBridgeManager,
    WasmPluginManager,
)
from higress_sdk.services.kubernetes.namespace_manager import NamespaceManager
from higress_sdk.services.kubernetes.networking_manager import IngressManager

logger = structlog.get_logger()


class KubernetesClientService:
    """Entry point to the gateway's Kubernetes resources.

    Example:
        >>> with KubernetesClientService.from_config(HigressConfig.load()) as k8s:
        ...     routes = k8s.ingresses.list_ingresses()
        ...     plugins = k8s.wasm_plugins.list_plugins(name="key-auth")
    """

    def __init__(
        self,
        client: KubernetesClient,
        controller: ControllerClient | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            client: Kubernetes API client.
            controller: Controller client; built from the client's resolver
                when omitted.
        """
        self._client = client
        self.controller = controller or ControllerClient(client.resolver)
        self.ingresses = IngressManager(client)
        self.config_maps = ConfigMapManager(client)
        self.secrets = SecretManager(client)
        self.mcp_bridges = McpBridgeManager(client)
        self.wasm_plugins = WasmPluginManager(client)
        self.namespaces = NamespaceManager(client)

    @classmethod
    def from_config(cls, config: HigressConfig) -> KubernetesClientService:
        """Build the service, resolving connectivity once for all components."""
        resolver = CredentialResolver(config)
        client = KubernetesClient(config, resolver)
        logger.info("kubernetes_service_ready", in_cluster=resolver.in_cluster)
        return cls(client)

    @property
    def client(self) -> KubernetesClient:
        """Underlying Kubernetes API client."""
        return self._client

    @property
    def in_cluster(self) -> bool:
        """Whether the process runs inside the managed cluster."""
        return self._client.resolver.in_cluster

    def is_namespace_protected(self, namespace: str) -> bool:
        """Whether a namespace is protected from destructive operations."""
        return self.namespaces.is_namespace_protected(namespace)

    def close(self) -> None:
        """Release the HTTP and API clients."""
        self.controller.close()
        self._client.close()

    def __enter__(self) -> KubernetesClientService:
        """Context manager entry."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit."""
        self.close()

"""Kubernetes API client wrapper.

Wraps the official kubernetes Python client around a single ``ApiClient``
built by the :class:`CredentialResolver`, with lazy API group initialization
and consistent error translation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog

from higress_sdk.integrations.kubernetes.connectivity import CredentialResolver
from higress_sdk.integrations.kubernetes.exceptions import (
    KubernetesAuthError,
    KubernetesConfigurationError,
    KubernetesConflictError,
    KubernetesError,
    KubernetesNotFoundError,
    KubernetesUpstreamError,
    KubernetesValidationError,
)

if TYPE_CHECKING:
    from kubernetes.client import (
        ApiClient,
        CoreV1Api,
        CustomObjectsApi,
        NetworkingV1Api,
        VersionApi,
    )

    from higress_sdk.integrations.kubernetes.config import HigressConfig

logger = structlog.get_logger()


class KubernetesClient:
    """Kubernetes API client scoped to the gateway's operating namespace.

    Wraps the official kubernetes Python client with:
    - Credential resolution for in-cluster and kubeconfig execution
    - Lazy API group initialization
    - Consistent error translation to custom exceptions
    - Context manager support

    The underlying ``ApiClient`` is built eagerly in the constructor, so it
    is fully initialized before any concurrent caller can reach it.

    Example:
        ```python
        from higress_sdk.integrations.kubernetes import HigressConfig, KubernetesClient

        with KubernetesClient(HigressConfig.from_env()) as client:
            ingresses = client.networking_v1.list_namespaced_ingress(client.namespace)
        ```
    """

    def __init__(
        self,
        config: HigressConfig,
        resolver: CredentialResolver | None = None,
    ) -> None:
        """Initialize Kubernetes client from config.

        Args:
            config: Layer configuration.
            resolver: Shared credential resolver; one is created from
                ``config`` when omitted.

        Raises:
            KubernetesConfigurationError: If no API client can be built.
        """
        self._config = config
        self._resolver = resolver or CredentialResolver(config)
        self._api_client: ApiClient | None = self._resolver.build_api_client()

        # Lazy-loaded API group instances
        self._core_v1: CoreV1Api | None = None
        self._networking_v1: NetworkingV1Api | None = None
        self._custom_objects: CustomObjectsApi | None = None
        self._version_api: VersionApi | None = None

        logger.info(
            "Kubernetes client initialized",
            in_cluster=self._resolver.in_cluster,
            namespace=config.controller_namespace,
        )

    # =========================================================================
    # Lazy API Group Accessors
    # =========================================================================

    def _live_api_client(self) -> ApiClient:
        """Return the ApiClient, refusing to hand out API groups after close."""
        if self._api_client is None:
            raise KubernetesConfigurationError(message="Kubernetes client is closed")
        return self._api_client

    @property
    def core_v1(self) -> CoreV1Api:
        """Get CoreV1Api instance (configmaps, secrets, namespaces)."""
        if self._core_v1 is None:
            from kubernetes.client import CoreV1Api

            self._core_v1 = CoreV1Api(self._live_api_client())
        return self._core_v1

    @property
    def networking_v1(self) -> NetworkingV1Api:
        """Get NetworkingV1Api instance (ingresses)."""
        if self._networking_v1 is None:
            from kubernetes.client import NetworkingV1Api

            self._networking_v1 = NetworkingV1Api(self._live_api_client())
        return self._networking_v1

    @property
    def custom_objects(self) -> CustomObjectsApi:
        """Get CustomObjectsApi instance (McpBridge, WasmPlugin)."""
        if self._custom_objects is None:
            from kubernetes.client import CustomObjectsApi

            self._custom_objects = CustomObjectsApi(self._live_api_client())
        return self._custom_objects

    @property
    def version_api(self) -> VersionApi:
        """Get VersionApi instance for cluster version info."""
        if self._version_api is None:
            from kubernetes.client import VersionApi

            self._version_api = VersionApi(self._live_api_client())
        return self._version_api

    # =========================================================================
    # Error Translation
    # =========================================================================

    @staticmethod
    def translate_api_exception(
        e: Exception,
        resource_type: str | None = None,
        resource_name: str | None = None,
        namespace: str | None = None,
    ) -> KubernetesError:
        """Translate a kubernetes ApiException to a custom exception.

        Args:
            e: The original ApiException.
            resource_type: Type of resource being operated on.
            resource_name: Name of the resource.
            namespace: Namespace of the resource.

        Returns:
            An appropriate KubernetesError subclass.
        """
        from kubernetes.client import ApiException

        if isinstance(e, KubernetesError):
            return e

        if not isinstance(e, ApiException):
            return KubernetesUpstreamError(
                message=str(e),
                resource_type=resource_type,
                resource_name=resource_name,
                namespace=namespace,
            )

        status = e.status

        if status in (401, 403):
            return KubernetesAuthError(
                message=e.reason or "Authentication/authorization failed",
                status_code=status,
                reason=e.reason,
            )

        if status == 404:
            return KubernetesNotFoundError(
                resource_type=resource_type,
                resource_name=resource_name,
                namespace=namespace,
            )

        if status == 409:
            return KubernetesConflictError(
                resource_type=resource_type,
                resource_name=resource_name,
                namespace=namespace,
            )

        if status in (400, 422):
            return KubernetesValidationError(
                message=e.reason or "Validation failed",
                status_code=status,
            )

        return KubernetesUpstreamError(
            message=e.reason or f"Kubernetes API error: {status}",
            status_code=status,
            resource_type=resource_type,
            resource_name=resource_name,
            namespace=namespace,
            reason=e.reason,
        )

    # =========================================================================
    # Connection Check
    # =========================================================================

    def check_connection(self) -> bool:
        """Check if connection to the Kubernetes API server is working.

        Returns:
            True if connection is successful, False otherwise.
        """
        try:
            self.version_api.get_code()
            return True
        except Exception as e:
            logger.debug("connection_check_failed", error=str(e))
            return False

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def resolver(self) -> CredentialResolver:
        """Credential resolver shared with the controller client."""
        return self._resolver

    @property
    def namespace(self) -> str:
        """The single namespace this layer manages."""
        return self._config.controller_namespace

    @property
    def ingress_class_name(self) -> str:
        """Ingress class forced onto every managed Ingress."""
        return self._config.ingress_class_name

    @property
    def protected_namespaces(self) -> set[str]:
        """Namespaces flagged as protected."""
        return self._config.protected_namespaces

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def close(self) -> None:
        """Close the client and release resources."""
        if self._api_client is not None:
            self._api_client.close()
            self._api_client = None
        self._core_v1 = None
        self._networking_v1 = None
        self._custom_objects = None
        self._version_api = None
        logger.debug("Kubernetes client closed")

    def __enter__(self) -> KubernetesClient:
        """Context manager entry."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit."""
        self.close()

"""Execution context detection and credential resolution.

The process either runs as a workload inside the managed cluster, using its
mounted service account, or externally with a kubeconfig. The decision is
made once per :class:`CredentialResolver` and drives both how the Kubernetes
API client is built and which bearer token is sent to the controller.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

import structlog
import yaml

from higress_sdk.integrations.kubernetes.config import JwtPolicy
from higress_sdk.integrations.kubernetes.exceptions import KubernetesConfigurationError

if TYPE_CHECKING:
    from kubernetes.client import ApiClient

    from higress_sdk.integrations.kubernetes.config import HigressConfig

logger = structlog.get_logger()

SERVICE_ACCOUNT_TOKEN_PATH = Path("/var/run/secrets/kubernetes.io/serviceaccount/token")
CONTROLLER_ACCESS_TOKEN_PATH = Path("/var/run/secrets/access-token/token")


@dataclass(frozen=True)
class ConnectivityContext:
    """Where this process runs relative to the managed cluster."""

    in_cluster: bool


class CredentialResolver:
    """Resolves connectivity and credentials for one process.

    Create a single resolver at startup and hand it to every component that
    needs it. The in-cluster check touches the filesystem at most once; the
    result is published under a lock so concurrent first calls agree.

    Example:
        >>> resolver = CredentialResolver(HigressConfig.from_env())
        >>> api_client = resolver.build_api_client()
        >>> token = resolver.resolve_controller_token()
    """

    def __init__(
        self,
        config: HigressConfig,
        *,
        service_account_token_path: Path = SERVICE_ACCOUNT_TOKEN_PATH,
        access_token_path: Path = CONTROLLER_ACCESS_TOKEN_PATH,
    ) -> None:
        """Initialize the resolver.

        Args:
            config: Layer configuration.
            service_account_token_path: Mounted service account token; its
                presence marks in-cluster execution.
            access_token_path: Separately mounted controller access token.
        """
        self._config = config
        self._service_account_token_path = service_account_token_path
        self._access_token_path = access_token_path
        self._connectivity: ConnectivityContext | None = None
        self._lock = threading.Lock()

    @property
    def config(self) -> HigressConfig:
        """Configuration this resolver was built from."""
        return self._config

    def resolve_connectivity(self) -> ConnectivityContext:
        """Return the execution context, detecting it on first use."""
        if self._connectivity is None:
            with self._lock:
                if self._connectivity is None:
                    in_cluster = self._service_account_token_path.exists()
                    self._connectivity = ConnectivityContext(in_cluster=in_cluster)
                    logger.info("resolved_connectivity", in_cluster=in_cluster)
        return self._connectivity

    @property
    def in_cluster(self) -> bool:
        """Whether the process runs inside the managed cluster."""
        return self.resolve_connectivity().in_cluster

    def build_api_client(self) -> ApiClient:
        """Build a Kubernetes API client for the current execution context.

        Returns:
            An ``ApiClient`` using the mounted service account in-cluster,
            or the configured kubeconfig otherwise.

        Raises:
            KubernetesConfigurationError: If the kubeconfig is missing or
                cannot be parsed, or the in-cluster config cannot be loaded.
        """
        from kubernetes import client, config
        from kubernetes.config import ConfigException

        if self.in_cluster:
            configuration = client.Configuration()
            try:
                config.load_incluster_config(client_configuration=configuration)
            except ConfigException as e:
                raise KubernetesConfigurationError(
                    message="Cannot load in-cluster service account configuration",
                    original_error=e,
                ) from e
            logger.info("loaded_incluster_config")
            return client.ApiClient(configuration)

        kubeconfig_path = self._config.kubeconfig_path
        if not kubeconfig_path.is_file():
            raise KubernetesConfigurationError(
                message=f"Kubeconfig not found: {kubeconfig_path}",
            )
        try:
            api_client = config.new_client_from_config(config_file=str(kubeconfig_path))
        except (ConfigException, yaml.YAMLError, OSError) as e:
            raise KubernetesConfigurationError(
                message=f"Cannot load kubeconfig: {kubeconfig_path}",
                original_error=e,
            ) from e
        logger.info("loaded_kubeconfig", kubeconfig=str(kubeconfig_path))
        return api_client

    def resolve_controller_token(self) -> str:
        """Return the bearer token for controller calls.

        In-cluster the token is read from a mounted file chosen by the JWT
        policy; externally the statically configured token is returned. An
        empty string means no Authorization header should be sent.

        Raises:
            OSError: If the selected token file cannot be read.
        """
        if not self.in_cluster:
            return self._config.controller_token()

        token_path = self._access_token_path
        if self._config.controller_jwt_policy == JwtPolicy.FIRST_PARTY:
            token_path = self._service_account_token_path
        return token_path.read_text(encoding="utf-8").strip()

    def controller_address(self) -> str:
        """Return the controller host, as seen from the execution context."""
        if self.in_cluster:
            return f"{self._config.controller_service_name}.{self._config.controller_namespace}"
        return self._config.controller_service_host

    def controller_base_url(self) -> str:
        """Return the base URL of the controller debug endpoints."""
        return f"http://{self.controller_address()}:{self._config.controller_service_port}"

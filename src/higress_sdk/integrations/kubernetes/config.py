"""Configuration for the Kubernetes resource-access layer."""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, SecretStr, ValidationError, field_validator

from higress_sdk.integrations.kubernetes.exceptions import KubernetesConfigurationError

DEFAULT_KUBECONFIG_PATH = "~/.kube/config"
DEFAULT_CONFIG_PATH = Path.home() / ".config" / "higress" / "config.yaml"
LIST_SEPARATOR = ","

# Environment variable -> config field
_ENV_OVERRIDES = {
    "HIGRESS_KUBECONFIG": "kubeconfig",
    "HIGRESS_CONTROLLER_SERVICE_NAME": "controller_service_name",
    "HIGRESS_CONTROLLER_NAMESPACE": "controller_namespace",
    "HIGRESS_CONTROLLER_SERVICE_HOST": "controller_service_host",
    "HIGRESS_CONTROLLER_SERVICE_PORT": "controller_service_port",
    "HIGRESS_CONTROLLER_JWT_POLICY": "controller_jwt_policy",
    "HIGRESS_CONTROLLER_ACCESS_TOKEN": "controller_access_token",
    "HIGRESS_INGRESS_CLASS_NAME": "ingress_class_name",
}


class JwtPolicy(str, Enum):
    """Token policy of the cluster the controller runs in."""

    FIRST_PARTY = "first-party-jwt"
    THIRD_PARTY = "third-party-jwt"


class HigressConfig(BaseModel):
    """Settings for the resource-access layer and the controller proxy."""

    model_config = ConfigDict(extra="forbid")

    kubeconfig: str | None = Field(default=None, description="Kubeconfig used outside a cluster")
    controller_service_name: str = "higress-controller"
    controller_namespace: str = Field(
        default="higress-system", description="The single namespace managed by this layer"
    )
    controller_service_host: str = "localhost"
    controller_service_port: int = 15014
    controller_jwt_policy: JwtPolicy = JwtPolicy.THIRD_PARTY
    controller_access_token: SecretStr | None = None
    protected_namespaces: set[str] = Field(default_factory=lambda: {"kube-system"})
    ingress_class_name: str = "higress"

    @field_validator("controller_service_port")
    @classmethod
    def validate_port(cls, v: int) -> int:
        """Validate the controller port is a TCP port."""
        if not 0 < v < 65536:
            raise ValueError("controller_service_port must be between 1 and 65535")
        return v

    @field_validator("controller_jwt_policy", mode="before")
    @classmethod
    def normalize_jwt_policy(cls, v: Any) -> Any:
        """Treat any policy other than first-party as third-party."""
        if isinstance(v, JwtPolicy):
            return v
        if isinstance(v, str) and v.strip().lower() == JwtPolicy.FIRST_PARTY.value:
            return JwtPolicy.FIRST_PARTY
        return JwtPolicy.THIRD_PARTY

    @field_validator("protected_namespaces", mode="before")
    @classmethod
    def split_protected_namespaces(cls, v: Any) -> Any:
        """Accept a comma-separated string as well as a list."""
        if isinstance(v, str):
            return {ns.strip() for ns in v.split(LIST_SEPARATOR) if ns.strip()}
        return v

    @property
    def kubeconfig_path(self) -> Path:
        """Kubeconfig path with the default applied and ``~`` expanded."""
        return Path(self.kubeconfig or DEFAULT_KUBECONFIG_PATH).expanduser()

    @classmethod
    def from_env(cls, base_config: dict[str, Any] | None = None) -> HigressConfig:
        """Create configuration with environment variable overrides.

        Environment variables take precedence over base_config values.

        Supported environment variables:
            HIGRESS_KUBECONFIG: Kubeconfig path used outside a cluster
            HIGRESS_CONTROLLER_SERVICE_NAME: Controller service name
            HIGRESS_CONTROLLER_NAMESPACE: Operating namespace
            HIGRESS_CONTROLLER_SERVICE_HOST: Controller host used outside a cluster
            HIGRESS_CONTROLLER_SERVICE_PORT: Controller debug port
            HIGRESS_CONTROLLER_JWT_POLICY: first-party-jwt; any other value
                means third-party-jwt
            HIGRESS_CONTROLLER_ACCESS_TOKEN: Static controller token
            HIGRESS_PROTECTED_NAMESPACES: Comma-separated protected namespaces
            HIGRESS_INGRESS_CLASS_NAME: Ingress class forced on managed Ingresses
        """
        config_dict = base_config.copy() if base_config else {}

        for env_var, field_name in _ENV_OVERRIDES.items():
            if value := os.environ.get(env_var):
                config_dict[field_name] = value

        if protected := os.environ.get("HIGRESS_PROTECTED_NAMESPACES"):
            config_dict["protected_namespaces"] = protected

        try:
            return cls.model_validate(config_dict)
        except ValidationError as e:
            raise KubernetesConfigurationError(
                message=f"Invalid configuration: {e.error_count()} validation error(s)",
                original_error=e,
            ) from e

    @classmethod
    def load(cls, path: Path | None = None) -> HigressConfig:
        """Load configuration from a YAML file, then apply environment overrides.

        A missing file is not an error; defaults are used instead.

        Args:
            path: Config file path (defaults to ~/.config/higress/config.yaml).

        Returns:
            Loaded configuration.

        Raises:
            KubernetesConfigurationError: If the file is not valid YAML or
                does not describe a valid configuration.
        """
        config_path = path or DEFAULT_CONFIG_PATH
        data: dict[str, Any] = {}
        if config_path.exists():
            try:
                with config_path.open() as f:
                    data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise KubernetesConfigurationError(
                    message=f"Invalid config file format: {config_path}",
                    original_error=e,
                ) from e
            if not isinstance(data, dict):
                raise KubernetesConfigurationError(
                    message=f"Config file must contain a mapping: {config_path}"
                )
        return cls.from_env(data)

    def controller_token(self) -> str:
        """Return the static controller token, or an empty string when unset."""
        if self.controller_access_token is None:
            return ""
        return self.controller_access_token.get_secret_value()

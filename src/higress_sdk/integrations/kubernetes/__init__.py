"""Kubernetes integration - API client, credentials and configuration models."""

from higress_sdk.integrations.kubernetes.client import KubernetesClient
from higress_sdk.integrations.kubernetes.config import HigressConfig, JwtPolicy
from higress_sdk.integrations.kubernetes.connectivity import (
    ConnectivityContext,
    CredentialResolver,
)
from higress_sdk.integrations.kubernetes.exceptions import (
    KubernetesAuthError,
    KubernetesConfigurationError,
    KubernetesConflictError,
    KubernetesError,
    KubernetesInvalidArgumentError,
    KubernetesNotFoundError,
    KubernetesUpstreamError,
    KubernetesValidationError,
)

__all__ = [
    "ConnectivityContext",
    "CredentialResolver",
    "HigressConfig",
    "JwtPolicy",
    "KubernetesAuthError",
    "KubernetesClient",
    "KubernetesConfigurationError",
    "KubernetesConflictError",
    "KubernetesError",
    "KubernetesInvalidArgumentError",
    "KubernetesNotFoundError",
    "KubernetesUpstreamError",
    "KubernetesValidationError",
]

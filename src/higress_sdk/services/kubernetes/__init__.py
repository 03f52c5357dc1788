"""Kubernetes service module.

Resource managers implementing one CRUD protocol for every kind the gateway
owns, plus the facade that wires them together.
"""

from higress_sdk.services.kubernetes.base import K8sBaseManager, K8sResourceManager
from higress_sdk.services.kubernetes.client import KubernetesClientService
from higress_sdk.services.kubernetes.configuration_manager import (
    ConfigMapManager,
    SecretManager,
)
from higress_sdk.services.kubernetes.custom_resource_manager import (
    CustomResourceManager,
    McpBridgeManager,
    WasmPluginManager,
)
from higress_sdk.services.kubernetes.namespace_manager import NamespaceManager
from higress_sdk.services.kubernetes.networking_manager import IngressManager

__all__ = [
    "ConfigMapManager",
    "CustomResourceManager",
    "IngressManager",
    "K8sBaseManager",
    "K8sResourceManager",
    "KubernetesClientService",
    "McpBridgeManager",
    "NamespaceManager",
    "SecretManager",
    "WasmPluginManager",
]

"""Typed models for the gateway's custom resources."""

from higress_sdk.integrations.kubernetes.models.base import (
    CamelModel,
    CustomResource,
    ObjectMeta,
)
from higress_sdk.integrations.kubernetes.models.mcp_bridge import (
    McpBridge,
    McpBridgeSpec,
    RegistryConfig,
)
from higress_sdk.integrations.kubernetes.models.wasm_plugin import (
    MatchRule,
    WasmPlugin,
    WasmPluginSpec,
)

__all__ = [
    "CamelModel",
    "CustomResource",
    "MatchRule",
    "McpBridge",
    "McpBridgeSpec",
    "ObjectMeta",
    "RegistryConfig",
    "WasmPlugin",
    "WasmPluginSpec",
]

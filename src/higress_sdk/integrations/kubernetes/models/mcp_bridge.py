"""McpBridge custom resource: service registries bridged into the gateway."""

from __future__ import annotations

from typing import ClassVar

from pydantic import Field

from higress_sdk.integrations.kubernetes.models.base import CamelModel, CustomResource


class RegistryConfig(CamelModel):
    """One upstream service registry (nacos, zookeeper, consul, eureka, dns, static)."""

    name: str
    type: str
    domain: str | None = None
    port: int | None = None
    protocol: str | None = None
    sni: str | None = None
    auth_secret_name: str | None = None
    nacos_address_server: str | None = None
    nacos_access_key: str | None = None
    nacos_secret_key: str | None = None
    nacos_namespace_id: str | None = None
    nacos_namespace: str | None = None
    nacos_groups: list[str] | None = None
    nacos_refresh_interval: int | None = None
    consul_namespace: str | None = None
    zk_services_path: list[str] | None = None


class McpBridgeSpec(CamelModel):
    """McpBridge spec."""

    registries: list[RegistryConfig] = Field(default_factory=list)


class McpBridge(CustomResource):
    """McpBridge resource (networking.higress.io/v1)."""

    API_GROUP: ClassVar[str] = "networking.higress.io"
    VERSION: ClassVar[str] = "v1"
    PLURAL: ClassVar[str] = "mcpbridges"
    KIND: ClassVar[str] = "McpBridge"

    spec: McpBridgeSpec | None = None

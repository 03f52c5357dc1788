"""Models for the controller's service registry and endpoint debug payloads.

The controller emits Go-style field names (``Attributes``, ``Shards``) next
to lower camelCase ones (``hostname``, ``creationTime``); aliases map both.
Unknown fields are kept.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class _DebugModel(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)


class ServicePort(_DebugModel):
    """Port exposed by a registered service."""

    name: str | None = None
    port: int | None = None
    protocol: str | None = None


class ServiceAttributes(_DebugModel):
    """Registry attributes of a service."""

    service_registry: str | None = Field(default=None, alias="ServiceRegistry")
    name: str | None = Field(default=None, alias="Name")
    namespace: str | None = Field(default=None, alias="Namespace")
    labels: dict[str, str] | None = Field(default=None, alias="Labels")


class RegistryzService(_DebugModel):
    """A service known to the controller, as listed by ``/debug/registryz``."""

    attributes: ServiceAttributes | None = Field(default=None, alias="Attributes")
    ports: list[ServicePort] | None = None
    creation_time: str | None = Field(default=None, alias="creationTime")
    hostname: str | None = None
    default_address: str | None = Field(default=None, alias="defaultAddress")
    resolution: int | None = Field(default=None, alias="Resolution")
    mesh_external: bool | None = Field(default=None, alias="MeshExternal")
    resource_version: str | None = Field(default=None, alias="ResourceVersion")


class EndpointLocality(_DebugModel):
    """Locality of an endpoint."""

    label: str | None = Field(default=None, alias="Label")
    cluster_id: str | None = Field(default=None, alias="ClusterID")


class IstioEndpoint(_DebugModel):
    """A single workload endpoint behind a service."""

    labels: dict[str, str] | None = Field(default=None, alias="Labels")
    address: str | None = Field(default=None, alias="Address")
    service_port_name: str | None = Field(default=None, alias="ServicePortName")
    service_account: str | None = Field(default=None, alias="ServiceAccount")
    network: str | None = Field(default=None, alias="Network")
    locality: EndpointLocality | None = Field(default=None, alias="Locality")
    endpoint_port: int | None = Field(default=None, alias="EndpointPort")
    lb_weight: int | None = Field(default=None, alias="LbWeight")
    tls_mode: str | None = Field(default=None, alias="TLSMode")
    namespace: str | None = Field(default=None, alias="Namespace")
    workload_name: str | None = Field(default=None, alias="WorkloadName")
    hostname: str | None = Field(default=None, alias="HostName")
    health_status: int | None = Field(default=None, alias="HealthStatus")


class IstioEndpointShard(_DebugModel):
    """Endpoints of one service in one namespace, sharded by cluster key."""

    shards: dict[str, list[IstioEndpoint]] | None = Field(default=None, alias="Shards")
    service_accounts: dict[str, Any] | None = Field(default=None, alias="ServiceAccounts")

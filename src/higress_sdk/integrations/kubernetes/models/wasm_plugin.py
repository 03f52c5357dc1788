"""WasmPlugin custom resource: a WASM extension loaded by the gateway."""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import Field

from higress_sdk.integrations.kubernetes.models.base import CamelModel, CustomResource


class MatchRule(CamelModel):
    """Plugin configuration scoped to domains, ingresses or services."""

    config: dict[str, Any] | None = None
    config_disable: bool | None = None
    domain: list[str] | None = None
    ingress: list[str] | None = None
    service: list[str] | None = None


class WasmPluginSpec(CamelModel):
    """WasmPlugin spec."""

    url: str | None = Field(default=None, description="OCI image or HTTP URL of the module")
    sha256: str | None = None
    image_pull_policy: str | None = None
    image_pull_secret: str | None = None
    plugin_name: str | None = None
    phase: str | None = None
    priority: int | None = None
    fail_strategy: str | None = None
    default_config: dict[str, Any] | None = None
    default_config_disable: bool | None = None
    match_rules: list[MatchRule] | None = None


class WasmPlugin(CustomResource):
    """WasmPlugin resource (extensions.higress.io/v1alpha1)."""

    API_GROUP: ClassVar[str] = "extensions.higress.io"
    VERSION: ClassVar[str] = "v1alpha1"
    PLURAL: ClassVar[str] = "wasmplugins"
    KIND: ClassVar[str] = "WasmPlugin"

    spec: WasmPluginSpec | None = None

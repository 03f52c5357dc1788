"""Managers for the gateway's custom resources (McpBridge, WasmPlugin).

Custom kinds go through the schema-agnostic CustomObjectsApi. Bodies and
responses are plain dicts; the typed models in
:mod:`higress_sdk.integrations.kubernetes.models` convert them centrally.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeVar

from higress_sdk.integrations.kubernetes.labels import (
    WASM_PLUGIN_BUILT_IN_KEY,
    WASM_PLUGIN_NAME_KEY,
    WASM_PLUGIN_VERSION_KEY,
    build_label_selector,
)
from higress_sdk.integrations.kubernetes.models import (
    CustomResource,
    McpBridge,
    ObjectMeta,
    WasmPlugin,
)
from higress_sdk.services.kubernetes.base import K8sResourceManager

if TYPE_CHECKING:
    from higress_sdk.integrations.kubernetes.client import KubernetesClient

T = TypeVar("T", bound=CustomResource)


class CustomResourceManager(K8sResourceManager[T]):
    """CRUD for one custom kind, driven by the model's group/version/plural.

    Example:
        >>> class McpBridgeManager(CustomResourceManager[McpBridge]):
        ...     _entity_name = "mcpbridge"
        ...     _model_class = McpBridge
    """

    _model_class: type[T]

    def __init__(self, client: KubernetesClient) -> None:
        super().__init__(client)
        self._resource_type = self._model_class.KIND

    def _coordinates(self) -> dict[str, str]:
        return {
            "group": self._model_class.API_GROUP,
            "version": self._model_class.VERSION,
            "namespace": self.namespace,
            "plural": self._model_class.PLURAL,
        }

    def _list_objects(self, label_selector: str, field_selector: str | None) -> list[T]:
        kwargs: dict[str, Any] = {"label_selector": label_selector}
        if field_selector:
            kwargs["field_selector"] = field_selector
        response = self._client.custom_objects.list_namespaced_custom_object(
            **self._coordinates(), **kwargs
        )
        return self._model_class.parse_list(response)

    def _read_object(self, name: str) -> T:
        response = self._client.custom_objects.get_namespaced_custom_object(
            **self._coordinates(), name=name
        )
        return self._model_class.from_body(response)

    def _create_object(self, obj: T) -> T:
        response = self._client.custom_objects.create_namespaced_custom_object(
            **self._coordinates(), body=obj.to_body()
        )
        return self._model_class.from_body(response)

    def _replace_object(self, name: str, obj: T) -> T:
        response = self._client.custom_objects.replace_namespaced_custom_object(
            **self._coordinates(), name=name, body=obj.to_body()
        )
        return self._model_class.from_body(response)

    def _delete_object(self, name: str) -> Any:
        return self._client.custom_objects.delete_namespaced_custom_object(
            **self._coordinates(), name=name
        )

    def _new_metadata(self) -> ObjectMeta:
        return ObjectMeta()


class McpBridgeManager(CustomResourceManager[McpBridge]):
    """Manager for McpBridge resources."""

    _entity_name = "mcpbridge"
    _model_class = McpBridge

    def list_mcp_bridges(self) -> list[McpBridge]:
        """List all owned McpBridges, sorted by name."""
        return self.list()


class WasmPluginManager(CustomResourceManager[WasmPlugin]):
    """Manager for WasmPlugin resources."""

    _entity_name = "wasmplugin"
    _model_class = WasmPlugin

    def list_plugins(
        self,
        name: str | None = None,
        version: str | None = None,
        built_in: bool | None = None,
    ) -> list[WasmPlugin]:
        """List owned plugins, narrowed by any of name, version and built-in flag.

        Omitted filters add no selector fragment.

        Args:
            name: Plugin name label.
            version: Plugin version label.
            built_in: Whether to match built-in (True) or custom (False) plugins.

        Returns:
            Matching plugins sorted by name.
        """
        return self.list(*self.build_plugin_selectors(name, version, built_in))

    @staticmethod
    def build_plugin_selectors(
        name: str | None = None,
        version: str | None = None,
        built_in: bool | None = None,
    ) -> list[str]:
        """Build the plugin-specific selector fragments, in fixed order."""
        selectors: list[str] = []
        if name:
            selectors.append(build_label_selector(WASM_PLUGIN_NAME_KEY, name))
        if version:
            selectors.append(build_label_selector(WASM_PLUGIN_VERSION_KEY, version))
        if built_in is not None:
            selectors.append(build_label_selector(WASM_PLUGIN_BUILT_IN_KEY, str(built_in).lower()))
        return selectors

"""ConfigMap and Secret managers.

ConfigMaps hold gateway-wide settings; Secrets mostly hold TLS certificates
for gateway domains.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from higress_sdk.integrations.kubernetes.labels import TYPE_FIELD, build_field_selector
from higress_sdk.services.kubernetes.base import K8sResourceManager

if TYPE_CHECKING:
    from kubernetes.client import V1ConfigMap, V1ObjectMeta, V1Secret


class ConfigMapManager(K8sResourceManager["V1ConfigMap"]):
    """Manager for gateway-owned ConfigMaps."""

    _entity_name = "configmap"
    _resource_type = "ConfigMap"

    def list_config_maps(self) -> list[V1ConfigMap]:
        """List all owned ConfigMaps, sorted by name."""
        return self.list()

    def _list_objects(
        self, label_selector: str, field_selector: str | None
    ) -> list[V1ConfigMap]:
        kwargs: dict[str, Any] = {"label_selector": label_selector}
        if field_selector:
            kwargs["field_selector"] = field_selector
        result = self._client.core_v1.list_namespaced_config_map(namespace=self.namespace, **kwargs)
        return (result.items if result is not None else None) or []

    def _read_object(self, name: str) -> V1ConfigMap:
        return self._client.core_v1.read_namespaced_config_map(name=name, namespace=self.namespace)

    def _create_object(self, obj: V1ConfigMap) -> V1ConfigMap:
        return self._client.core_v1.create_namespaced_config_map(
            namespace=self.namespace, body=obj
        )

    def _replace_object(self, name: str, obj: V1ConfigMap) -> V1ConfigMap:
        return self._client.core_v1.replace_namespaced_config_map(
            name=name, namespace=self.namespace, body=obj
        )

    def _delete_object(self, name: str) -> Any:
        return self._client.core_v1.delete_namespaced_config_map(
            name=name, namespace=self.namespace
        )

    def _new_metadata(self) -> V1ObjectMeta:
        from kubernetes.client import V1ObjectMeta

        return V1ObjectMeta()


class SecretManager(K8sResourceManager["V1Secret"]):
    """Manager for gateway-owned Secrets."""

    _entity_name = "secret"
    _resource_type = "Secret"

    def list_secrets(self, secret_type: str | None = None) -> list[V1Secret]:
        """List owned Secrets, optionally of one type, sorted by name.

        Args:
            secret_type: Secret type to match, e.g. ``kubernetes.io/tls``.
        """
        field_selector = build_field_selector(TYPE_FIELD, secret_type) if secret_type else None
        return self.list(field_selector=field_selector)

    def _list_objects(self, label_selector: str, field_selector: str | None) -> list[V1Secret]:
        kwargs: dict[str, Any] = {"label_selector": label_selector}
        if field_selector:
            kwargs["field_selector"] = field_selector
        result = self._client.core_v1.list_namespaced_secret(namespace=self.namespace, **kwargs)
        return (result.items if result is not None else None) or []

    def _read_object(self, name: str) -> V1Secret:
        return self._client.core_v1.read_namespaced_secret(name=name, namespace=self.namespace)

    def _create_object(self, obj: V1Secret) -> V1Secret:
        return self._client.core_v1.create_namespaced_secret(namespace=self.namespace, body=obj)

    def _replace_object(self, name: str, obj: V1Secret) -> V1Secret:
        return self._client.core_v1.replace_namespaced_secret(
            name=name, namespace=self.namespace, body=obj
        )

    def _delete_object(self, name: str) -> Any:
        return self._client.core_v1.delete_namespaced_secret(name=name, namespace=self.namespace)

    def _new_metadata(self) -> V1ObjectMeta:
        from kubernetes.client import V1ObjectMeta

        return V1ObjectMeta()

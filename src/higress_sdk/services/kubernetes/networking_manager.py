"""Ingress manager.

Ingresses are the Kubernetes form of gateway routes. Every Ingress written
through this manager is bound to the gateway's ingress class.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from higress_sdk.integrations.kubernetes.exceptions import KubernetesInvalidArgumentError
from higress_sdk.integrations.kubernetes.labels import build_domain_label_selector
from higress_sdk.services.kubernetes.base import K8sResourceManager

if TYPE_CHECKING:
    from kubernetes.client import V1Ingress, V1ObjectMeta


class IngressManager(K8sResourceManager["V1Ingress"]):
    """Manager for gateway-owned Ingresses."""

    _entity_name = "ingress"
    _resource_type = "Ingress"

    def list_ingresses(self) -> list[V1Ingress]:
        """List all owned Ingresses, sorted by name."""
        return self.list()

    def list_ingresses_by_domain(self, domain_name: str) -> list[V1Ingress]:
        """List owned Ingresses generated for one domain, sorted by name."""
        return self.list(build_domain_label_selector(domain_name))

    def _validate(self, obj: V1Ingress) -> None:
        if obj.spec is None:
            raise KubernetesInvalidArgumentError(
                message="Ingress doesn't have a valid spec.",
                resource_type=self._resource_type,
            )

    def _prepare(self, obj: V1Ingress) -> None:
        obj.spec.ingress_class_name = self._client.ingress_class_name

    def _list_objects(self, label_selector: str, field_selector: str | None) -> list[V1Ingress]:
        kwargs: dict[str, Any] = {"label_selector": label_selector}
        if field_selector:
            kwargs["field_selector"] = field_selector
        result = self._client.networking_v1.list_namespaced_ingress(
            namespace=self.namespace, **kwargs
        )
        return (result.items if result is not None else None) or []

    def _read_object(self, name: str) -> V1Ingress:
        return self._client.networking_v1.read_namespaced_ingress(name=name, namespace=self.namespace)

    def _create_object(self, obj: V1Ingress) -> V1Ingress:
        return self._client.networking_v1.create_namespaced_ingress(
            namespace=self.namespace, body=obj
        )

    def _replace_object(self, name: str, obj: V1Ingress) -> V1Ingress:
        return self._client.networking_v1.replace_namespaced_ingress(
            name=name, namespace=self.namespace, body=obj
        )

    def _delete_object(self, name: str) -> Any:
        return self._client.networking_v1.delete_namespaced_ingress(
            name=name, namespace=self.namespace
        )

    def _new_metadata(self) -> V1ObjectMeta:
        from kubernetes.client import V1ObjectMeta

        return V1ObjectMeta()

"""Route service: gateway routes stored as owned Ingresses.

Converting between a route and its Ingress is delegated to a
:class:`RouteConverter`; pagination of results is left to the caller.
"""

from __future__ import annotations

import builtins
from typing import TYPE_CHECKING, Any, Generic, Protocol, TypeVar

import structlog

from higress_sdk.integrations.kubernetes.exceptions import (
    KubernetesConflictError,
    KubernetesError,
)
from higress_sdk.services.gateway.exceptions import GatewayServiceError, ResourceConflictError

if TYPE_CHECKING:
    from kubernetes.client import V1Ingress

    from higress_sdk.services.kubernetes.networking_manager import IngressManager

logger = structlog.get_logger()

ROUTE_SCOPE = "ROUTE"

RouteT = TypeVar("RouteT")


class RouteConverter(Protocol[RouteT]):
    """Maps gateway routes to and from Ingresses."""

    def is_ingress_supported(self, ingress: V1Ingress) -> bool: ...

    def ingress_to_route(self, ingress: V1Ingress) -> RouteT: ...

    def route_to_ingress(self, route: RouteT) -> V1Ingress: ...


class PluginInstanceCleaner(Protocol):
    """Removes plugin instances attached to a scope target."""

    def delete_all(self, scope: str, target: str) -> None: ...


class RouteService(Generic[RouteT]):
    """CRUD for gateway routes."""

    def __init__(
        self,
        ingresses: IngressManager,
        converter: RouteConverter[RouteT],
        plugin_instances: PluginInstanceCleaner | None = None,
    ) -> None:
        """Initialize the route service.

        Args:
            ingresses: Ingress manager routes are stored through.
            converter: Route/Ingress converter.
            plugin_instances: Cleaner invoked when a route is deleted.
        """
        self._ingresses = ingresses
        self._converter = converter
        self._plugin_instances = plugin_instances
        self._log = logger.bind(entity="route")

    def list(self, domain_name: str | None = None) -> builtins.list[RouteT]:
        """List routes, optionally only those of one domain.

        Ingresses the converter cannot represent are skipped.
        """
        try:
            if domain_name:
                ingresses = self._ingresses.list_ingresses_by_domain(domain_name)
            else:
                ingresses = self._ingresses.list_ingresses()
        except KubernetesError as e:
            raise GatewayServiceError("Error occurs when listing Ingresses.") from e
        return [
            self._converter.ingress_to_route(ingress)
            for ingress in ingresses
            if self._converter.is_ingress_supported(ingress)
        ]

    def query(self, route_name: str) -> RouteT | None:
        """Return the route with the given name, or None."""
        try:
            ingress = self._ingresses.read(route_name)
        except KubernetesError as e:
            raise GatewayServiceError(
                f"Error occurs when reading the Ingress with name: {route_name}"
            ) from e
        return self._converter.ingress_to_route(ingress) if ingress is not None else None

    def add(self, route: RouteT) -> RouteT:
        """Create a route.

        Raises:
            ResourceConflictError: If a route with the same name exists.
        """
        ingress = self._converter.route_to_ingress(route)
        try:
            created = self._ingresses.create(ingress)
        except KubernetesConflictError as e:
            raise ResourceConflictError() from e
        except KubernetesError as e:
            raise GatewayServiceError(
                f"Error occurs when adding the ingress generated by route with name: {_name(route)}"
            ) from e
        return self._converter.ingress_to_route(created)

    def update(self, route: RouteT) -> RouteT:
        """Replace a route.

        Raises:
            ResourceConflictError: If the route was modified concurrently.
        """
        ingress = self._converter.route_to_ingress(route)
        try:
            updated = self._ingresses.replace(ingress)
        except KubernetesConflictError as e:
            raise ResourceConflictError() from e
        except KubernetesError as e:
            raise GatewayServiceError(
                f"Error occurs when updating the ingress generated by route with name: {_name(route)}"
            ) from e
        return self._converter.ingress_to_route(updated)

    def delete(self, name: str) -> None:
        """Delete a route and every plugin instance bound to it."""
        try:
            self._ingresses.delete(name)
        except KubernetesError as e:
            raise GatewayServiceError(f"Error occurs when deleting ingress with name: {name}") from e
        self._log.info("deleted_route", name=name)

        if self._plugin_instances is not None:
            self._plugin_instances.delete_all(ROUTE_SCOPE, name)


def _name(route: Any) -> str | None:
    return getattr(route, "name", None)

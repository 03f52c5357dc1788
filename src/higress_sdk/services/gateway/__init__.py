"""Gateway domain services built on the Kubernetes resource managers."""

from higress_sdk.services.gateway.exceptions import GatewayServiceError, ResourceConflictError
from higress_sdk.services.gateway.route_service import (
    PluginInstanceCleaner,
    RouteConverter,
    RouteService,
)

__all__ = [
    "GatewayServiceError",
    "PluginInstanceCleaner",
    "ResourceConflictError",
    "RouteConverter",
    "RouteService",
]

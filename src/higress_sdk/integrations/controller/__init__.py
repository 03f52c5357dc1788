"""Gateway controller integration - debug endpoint client and models."""

from higress_sdk.integrations.controller.client import ControllerClient
from higress_sdk.integrations.controller.exceptions import (
    ControllerApiError,
    ControllerConnectionError,
    ControllerError,
)
from higress_sdk.integrations.controller.models import (
    IstioEndpoint,
    IstioEndpointShard,
    RegistryzService,
    ServiceAttributes,
    ServicePort,
)

__all__ = [
    "ControllerApiError",
    "ControllerClient",
    "ControllerConnectionError",
    "ControllerError",
    "IstioEndpoint",
    "IstioEndpointShard",
    "RegistryzService",
    "ServiceAttributes",
    "ServicePort",
]

"""HTTP client for the gateway controller's debug endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeVar

import httpx
import structlog
from pydantic import TypeAdapter, ValidationError

from higress_sdk.integrations.controller.exceptions import (
    ControllerApiError,
    ControllerConnectionError,
)
from higress_sdk.integrations.controller.models import IstioEndpointShard, RegistryzService

if TYPE_CHECKING:
    from higress_sdk.integrations.kubernetes.connectivity import CredentialResolver

logger = structlog.get_logger()

T = TypeVar("T")

REGISTRYZ_PATH = "/debug/registryz"
ENDPOINT_SHARDZ_PATH = "/debug/endpointShardz"

_SERVICES_ADAPTER = TypeAdapter(list[RegistryzService])
_ENDPOINTS_ADAPTER = TypeAdapter(dict[str, dict[str, IstioEndpointShard]])


class ControllerClient:
    """Client for live service and endpoint introspection on the controller.

    The base URL and bearer token are resolved through the shared
    :class:`CredentialResolver` on every request, so a rotated token file is
    picked up without restarting. Requests are synchronous and never retried.

    Example:
        ```python
        resolver = CredentialResolver(HigressConfig.from_env())
        with ControllerClient(resolver) as controller:
            for service in controller.fetch_registered_services() or []:
                print(service.hostname)
        ```
    """

    def __init__(
        self,
        resolver: CredentialResolver,
        timeout: float = 30.0,
        http_client: httpx.Client | None = None,
    ) -> None:
        """Initialize the controller client.

        Args:
            resolver: Shared credential resolver.
            timeout: Request timeout in seconds.
            http_client: Preconfigured httpx client (mainly for tests).
        """
        self._resolver = resolver
        self._client = http_client or httpx.Client(timeout=httpx.Timeout(timeout))

    def _build_request(self, path: str) -> httpx.Request:
        """Build a GET request for a debug path, attaching auth when available."""
        url = f"{self._resolver.controller_base_url()}{path}"
        headers: dict[str, str] = {}
        token = self._resolver.resolve_controller_token()
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return self._client.build_request("GET", url, headers=headers)

    def _get_text(self, path: str) -> str:
        """Execute a GET against a debug path and return the raw body.

        Raises:
            ControllerConnectionError: On transport failure.
            ControllerApiError: On an HTTP error status.
        """
        request = self._build_request(path)
        logger.info("calling_controller", url=str(request.url))
        try:
            response = self._client.send(request)
        except httpx.TransportError as e:
            logger.error("controller_unreachable", url=str(request.url), error=str(e))
            raise ControllerConnectionError(
                message=f"Failed to reach gateway controller: {e}",
                endpoint=path,
                original_error=e,
            ) from e

        if response.is_error:
            raise ControllerApiError(
                message=f"Controller request failed: {response.reason_phrase}",
                status_code=response.status_code,
                endpoint=path,
            )
        return response.text

    def _decode(self, adapter: TypeAdapter[T], body: str, path: str) -> T:
        """Parse a debug body, reporting a malformed payload as an API error."""
        try:
            return adapter.validate_json(body)
        except ValidationError as e:
            logger.error("controller_payload_invalid", endpoint=path, errors=e.error_count())
            raise ControllerApiError(
                message=f"Malformed controller response: {e.error_count()} error(s)",
                endpoint=path,
            ) from e

    def fetch_registered_services(self) -> list[RegistryzService] | None:
        """Fetch every service registered with the controller.

        Returns:
            The registered services, or None when the controller sent an
            empty body.
        """
        body = self._get_text(REGISTRYZ_PATH)
        if not body:
            return None
        return self._decode(_SERVICES_ADAPTER, body, REGISTRYZ_PATH)

    def fetch_service_endpoints(self) -> dict[str, dict[str, IstioEndpointShard]] | None:
        """Fetch endpoint shards keyed by service name, then by shard key.

        Returns:
            The endpoint shards, or None when the controller sent an empty
            body.
        """
        body = self._get_text(ENDPOINT_SHARDZ_PATH)
        if not body:
            return None
        return self._decode(_ENDPOINTS_ADAPTER, body, ENDPOINT_SHARDZ_PATH)

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._client.close()
        logger.debug("Controller client closed")

    def __enter__(self) -> ControllerClient:
        """Context manager entry."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit."""
        self.close()

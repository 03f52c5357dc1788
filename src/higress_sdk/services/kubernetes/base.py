"""Base managers for Kubernetes resources owned by the gateway.

Provides the shared infrastructure (client access, structured logging, error
translation) and the CRUD protocol applied identically to every managed
kind: ownership labels on write, ownership selector on list, name ordering,
not-found-as-None on read and idempotent delete.
"""

from __future__ import annotations

import builtins
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Generic, NoReturn, TypeVar

import structlog

from higress_sdk.integrations.kubernetes.exceptions import (
    KubernetesInvalidArgumentError,
    KubernetesNotFoundError,
    KubernetesUpstreamError,
)
from higress_sdk.integrations.kubernetes.labels import (
    DEFAULT_LABEL_SELECTOR,
    RESOURCE_DEFINER_KEY,
    RESOURCE_DEFINER_VALUE,
    join_label_selectors,
    set_label,
)

if TYPE_CHECKING:
    from higress_sdk.integrations.kubernetes.client import KubernetesClient

logger = structlog.get_logger()

STATUS_SUCCESS = "Success"


class K8sBaseManager:
    """Base class for Kubernetes service managers.

    Provides shared concerns for all managers:
    - Client reference and API group access
    - Structured logging with entity binding
    - The operating namespace
    - Consistent API error translation

    Subclasses set ``_entity_name`` for structured log context.
    """

    _entity_name: str = ""

    def __init__(self, client: KubernetesClient) -> None:
        """Initialize the manager.

        Args:
            client: Kubernetes API client instance.
        """
        self._client = client
        self._log = logger.bind(entity=self._entity_name)

    @property
    def namespace(self) -> str:
        """The single namespace this manager operates in."""
        return self._client.namespace

    def _handle_api_error(
        self,
        e: Exception,
        resource_type: str | None = None,
        resource_name: str | None = None,
        namespace: str | None = None,
    ) -> NoReturn:
        """Log a Kubernetes API exception, translate it and re-raise.

        Args:
            e: The original exception (typically ApiException).
            resource_type: Type of resource being operated on.
            resource_name: Name of the resource.
            namespace: Namespace of the resource.

        Raises:
            KubernetesError: Always raises an appropriate subclass.
        """
        self._log.error(
            "kubernetes_api_error",
            resource_type=resource_type,
            resource_name=resource_name,
            namespace=namespace,
            status_code=getattr(e, "status", None),
            reason=getattr(e, "reason", None),
            response_body=getattr(e, "body", None),
            response_headers=dict(getattr(e, "headers", None) or {}),
        )
        translated = self._client.translate_api_exception(
            e,
            resource_type=resource_type,
            resource_name=resource_name,
            namespace=namespace,
        )
        if translated is e:
            raise translated
        raise translated from e


T = TypeVar("T")


def _sort_key(obj: Any) -> tuple[bool, str]:
    """Order by metadata name; objects without a name sort first."""
    metadata = getattr(obj, "metadata", None)
    name = getattr(metadata, "name", None) if metadata is not None else None
    return (name is not None, name or "")


def sort_kubernetes_objects(objects: list[T]) -> list[T]:
    """Return objects sorted ascending by name."""
    return sorted(objects, key=_sort_key)


class K8sResourceManager(K8sBaseManager, ABC, Generic[T]):
    """CRUD protocol shared by every managed kind.

    Subclasses supply the raw API calls; this class owns the selector
    composition, labeling, ordering and error normalization so built-in and
    custom kinds behave identically.
    """

    _resource_type: str = ""

    # =========================================================================
    # Raw API calls (per kind)
    # =========================================================================

    @abstractmethod
    def _list_objects(self, label_selector: str, field_selector: str | None) -> list[T]:
        """List objects in the namespace; an absent collection yields []."""

    @abstractmethod
    def _read_object(self, name: str) -> T:
        """Read one object by name."""

    @abstractmethod
    def _create_object(self, obj: T) -> T:
        """Submit a new object."""

    @abstractmethod
    def _replace_object(self, name: str, obj: T) -> T:
        """Submit a full replacement of an existing object."""

    @abstractmethod
    def _delete_object(self, name: str) -> Any:
        """Delete one object by name and return the API response."""

    @abstractmethod
    def _new_metadata(self) -> Any:
        """Create an empty metadata object of the kind's type."""

    def _validate(self, obj: T) -> None:
        """Reject an unusable object before create and replace touch it."""

    def _prepare(self, obj: T) -> None:
        """Apply kind-specific rewrites before create and replace."""

    # =========================================================================
    # Protocol
    # =========================================================================

    def list(
        self, *label_selectors: str | None, field_selector: str | None = None
    ) -> builtins.list[T]:
        """List owned objects, sorted by name.

        Args:
            *label_selectors: Extra selector fragments ANDed after the
                ownership fragment, in order. None or empty ones are skipped.
            field_selector: Optional field selector.

        Returns:
            Objects sorted ascending by name; empty when nothing matches.

        Raises:
            KubernetesError: If the query fails.
        """
        selector = join_label_selectors(
            DEFAULT_LABEL_SELECTOR, *(s for s in label_selectors if s)
        )
        self._log.debug(
            "listing_resources",
            kind=self._resource_type,
            namespace=self.namespace,
            label_selector=selector,
            field_selector=field_selector,
        )
        try:
            items = self._list_objects(selector, field_selector)
        except Exception as e:
            self._handle_api_error(e, self._resource_type, None, self.namespace)

        result = sort_kubernetes_objects(list(items or []))
        self._log.debug("listed_resources", kind=self._resource_type, count=len(result))
        return result

    def read(self, name: str) -> T | None:
        """Read an owned object by name.

        Returns:
            The object, or None if it does not exist.
        """
        self._log.debug("reading_resource", kind=self._resource_type, name=name)
        try:
            return self._read_object(name)
        except Exception as e:
            if is_not_found(e):
                return None
            self._handle_api_error(e, self._resource_type, name, self.namespace)

    def create(self, obj: T) -> T:
        """Create an object, stamping the ownership label.

        Raises:
            KubernetesConflictError: If an object with the same name exists.
            KubernetesError: For other API failures.
        """
        self._validate(obj)
        metadata = getattr(obj, "metadata", None)
        if metadata is None:
            metadata = self._new_metadata()
            obj.metadata = metadata  # type: ignore[attr-defined]
        metadata.namespace = self.namespace
        self._prepare(obj)
        self._render_default_labels(obj)

        self._log.info("creating_resource", kind=self._resource_type, name=metadata.name)
        try:
            result = self._create_object(obj)
        except Exception as e:
            self._handle_api_error(e, self._resource_type, metadata.name, self.namespace)
        self._log.info("created_resource", kind=self._resource_type, name=metadata.name)
        return result

    def replace(self, obj: T) -> T:
        """Replace an existing object, re-stamping the ownership label.

        Raises:
            KubernetesInvalidArgumentError: If the object has no metadata or
                no name. No request is issued in that case.
            KubernetesConflictError: If the submitted version is stale.
            KubernetesError: For other API failures.
        """
        metadata = getattr(obj, "metadata", None)
        if metadata is None or not metadata.name:
            raise KubernetesInvalidArgumentError(
                message=f"{self._resource_type} doesn't have a valid metadata.",
                resource_type=self._resource_type,
            )
        self._validate(obj)
        metadata.namespace = self.namespace
        self._prepare(obj)
        self._render_default_labels(obj)

        self._log.info("replacing_resource", kind=self._resource_type, name=metadata.name)
        try:
            result = self._replace_object(metadata.name, obj)
        except Exception as e:
            self._handle_api_error(e, self._resource_type, metadata.name, self.namespace)
        self._log.info("replaced_resource", kind=self._resource_type, name=metadata.name)
        return result

    def delete(self, name: str) -> None:
        """Delete an object by name. Deleting a missing object succeeds.

        Raises:
            KubernetesUpstreamError: If the API reports a non-success status.
            KubernetesError: For other API failures.
        """
        self._log.info("deleting_resource", kind=self._resource_type, name=name)
        try:
            status = self._delete_object(name)
        except Exception as e:
            if is_not_found(e):
                self._log.debug("resource_already_gone", kind=self._resource_type, name=name)
                return
            self._handle_api_error(e, self._resource_type, name, self.namespace)
        self._check_response_status(status, name)
        self._log.info("deleted_resource", kind=self._resource_type, name=name)

    # =========================================================================
    # Helpers
    # =========================================================================

    def _render_default_labels(self, obj: T) -> None:
        set_label(obj, RESOURCE_DEFINER_KEY, RESOURCE_DEFINER_VALUE)

    def _check_response_status(self, status: Any, name: str) -> None:
        """Raise when a delete response is a Status reporting failure.

        A response that is the deleted object itself, or a Status without an
        outcome, counts as success.
        """
        if status is None:
            return
        if isinstance(status, dict):
            if status.get("kind") != "Status":
                return
            outcome = status.get("status")
            code = status.get("code")
            message = status.get("message")
            reason = status.get("reason")
        else:
            outcome = getattr(status, "status", None)
            code = getattr(status, "code", None)
            message = getattr(status, "message", None)
            reason = getattr(status, "reason", None)

        if outcome is None or outcome == STATUS_SUCCESS:
            return
        self._log.error(
            "delete_status_failure",
            kind=self._resource_type,
            name=name,
            status=outcome,
            code=code,
            reason=reason,
        )
        raise KubernetesUpstreamError(
            message=message or f"Delete reported status {outcome}",
            status_code=code if isinstance(code, int) else None,
            resource_type=self._resource_type,
            resource_name=name,
            namespace=self.namespace,
            reason=reason,
        )


def is_not_found(e: Exception) -> bool:
    """Whether an exception means the target object does not exist."""
    return isinstance(e, KubernetesNotFoundError) or getattr(e, "status", None) == 404

"""Base models for custom resources served by the generic custom-object API.

The kubernetes client only offers a schema-agnostic interface for custom
resources: request bodies and responses are plain dicts. These models give
the custom kinds a typed shape and convert to and from that wire format in
one place.
"""

from __future__ import annotations

from typing import Any, ClassVar, Self

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Model whose fields travel as camelCase JSON keys.

    Unknown keys are kept so a resource written by a newer controller
    survives a read-modify-replace cycle unchanged.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )


class ObjectMeta(CamelModel):
    """Subset of Kubernetes ObjectMeta used by custom resources."""

    name: str | None = None
    namespace: str | None = None
    labels: dict[str, str] | None = None
    annotations: dict[str, str] | None = None
    resource_version: str | None = None
    uid: str | None = None
    generation: int | None = None
    creation_timestamp: str | None = None


class CustomResource(CamelModel):
    """Base class for typed custom resources.

    Subclasses set the group/version/plural/kind class constants and give
    ``spec`` a concrete type.
    """

    API_GROUP: ClassVar[str] = ""
    VERSION: ClassVar[str] = ""
    PLURAL: ClassVar[str] = ""
    KIND: ClassVar[str] = ""

    api_version: str = ""
    kind: str = ""
    metadata: ObjectMeta | None = None
    status: dict[str, Any] | None = None

    def model_post_init(self, context: Any, /) -> None:
        """Fill apiVersion and kind from the class constants when missing."""
        if not self.api_version:
            self.api_version = f"{self.API_GROUP}/{self.VERSION}"
        if not self.kind:
            self.kind = self.KIND

    def to_body(self) -> dict[str, Any]:
        """Serialize to the dict body expected by CustomObjectsApi."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")

    @classmethod
    def from_body(cls, body: dict[str, Any]) -> Self:
        """Deserialize a CustomObjectsApi response body."""
        return cls.model_validate(body)

    @classmethod
    def parse_list(cls, body: dict[str, Any] | None) -> list[Self]:
        """Deserialize the items of a list response.

        Returns an empty list when the body or its ``items`` field is absent.
        """
        if not body:
            return []
        return [cls.from_body(item) for item in body.get("items") or []]


"""Value objects — self-validating domain primitives."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping

from study_aids.domain.exceptions import InvalidSchemaError, MalformedResponseError


class SchemaKind(str, Enum):
    """JSON shapes a response schema can describe."""

    OBJECT = "object"
    ARRAY = "array"
    STRING = "string"
    INTEGER = "integer"


@dataclass(frozen=True, slots=True)
class SchemaDescriptor:
    """Recursive description of the JSON shape expected from the provider.

    Objects carry ``properties`` (and the subset of names listed in
    ``required``), arrays carry ``items``.  The tree is checked for
    well-formedness on construction and never changes afterwards.
    """

    kind: SchemaKind
    properties: Mapping[str, SchemaDescriptor] = field(default_factory=dict)
    required: tuple[str, ...] = ()
    items: SchemaDescriptor | None = None
    description: str | None = None

    def __post_init__(self) -> None:
        try:
            kind = SchemaKind(self.kind)
        except ValueError:
            allowed = ", ".join(member.value for member in SchemaKind)
            raise InvalidSchemaError(
                f"Unknown schema kind {self.kind!r}. Expected one of: {allowed}."
            ) from None
        object.__setattr__(self, "kind", kind)
        object.__setattr__(self, "properties", MappingProxyType(dict(self.properties)))
        object.__setattr__(self, "required", tuple(self.required))

        for name, child in self.properties.items():
            if not isinstance(child, SchemaDescriptor):
                raise InvalidSchemaError(
                    f"Property '{name}' must be a SchemaDescriptor, got {type(child).__name__}."
                )
        if self.items is not None and not isinstance(self.items, SchemaDescriptor):
            raise InvalidSchemaError(
                f"Array items must be a SchemaDescriptor, got {type(self.items).__name__}."
            )

        if kind is SchemaKind.OBJECT:
            if not self.properties:
                raise InvalidSchemaError("Object schema must declare at least one property.")
            unknown = [name for name in self.required if name not in self.properties]
            if unknown:
                raise InvalidSchemaError(
                    f"Required fields {unknown} are not declared as properties."
                )
            if self.items is not None:
                raise InvalidSchemaError("Object schema cannot declare 'items'.")
        elif kind is SchemaKind.ARRAY:
            if self.items is None:
                raise InvalidSchemaError("Array schema must declare 'items'.")
            if self.properties or self.required:
                raise InvalidSchemaError("Array schema cannot declare properties.")
        elif self.properties or self.required or self.items is not None:
            raise InvalidSchemaError(f"{kind.value} schema cannot have children.")

    def __hash__(self) -> int:
        return hash(
            (
                self.kind,
                tuple(self.properties.items()),
                self.required,
                self.items,
                self.description,
            )
        )

    # ── Constructors ────────────────────────────────────────────────────

    @classmethod
    def string(cls, description: str | None = None) -> SchemaDescriptor:
        return cls(SchemaKind.STRING, description=description)

    @classmethod
    def integer(cls, description: str | None = None) -> SchemaDescriptor:
        return cls(SchemaKind.INTEGER, description=description)

    @classmethod
    def array_of(
        cls, items: SchemaDescriptor, description: str | None = None
    ) -> SchemaDescriptor:
        return cls(SchemaKind.ARRAY, items=items, description=description)

    @classmethod
    def object_of(
        cls,
        properties: Mapping[str, SchemaDescriptor],
        required: tuple[str, ...] | list[str] = (),
        description: str | None = None,
    ) -> SchemaDescriptor:
        return cls(
            SchemaKind.OBJECT,
            properties=properties,
            required=tuple(required),
            description=description,
        )

    # ── Validation ──────────────────────────────────────────────────────

    def validate(self, value: Any, path: str = "$") -> None:
        """Raise :class:`MalformedResponseError` if *value* does not fit this tree."""
        if self.kind is SchemaKind.STRING:
            if not isinstance(value, str):
                raise _mismatch(path, "a string", value)

        elif self.kind is SchemaKind.INTEGER:
            # bool is an int subclass; JSON true/false is not an integer.
            if isinstance(value, bool) or not isinstance(value, int):
                raise _mismatch(path, "an integer", value)

        elif self.kind is SchemaKind.ARRAY:
            if not isinstance(value, list):
                raise _mismatch(path, "an array", value)
            assert self.items is not None
            for index, item in enumerate(value):
                self.items.validate(item, f"{path}[{index}]")

        else:
            if not isinstance(value, dict):
                raise _mismatch(path, "an object", value)
            for name in self.required:
                if value.get(name) is None:
                    raise MalformedResponseError(
                        f"Response is missing required field '{path}.{name}'."
                    )
            for name, child in self.properties.items():
                if value.get(name) is not None:
                    child.validate(value[name], f"{path}.{name}")

    # ── Rendering ───────────────────────────────────────────────────────

    def to_json_schema(self) -> dict[str, Any]:
        """Render as a plain JSON-Schema dict."""
        schema: dict[str, Any] = {"type": self.kind.value}
        if self.description:
            schema["description"] = self.description
        if self.kind is SchemaKind.OBJECT:
            schema["properties"] = {
                name: child.to_json_schema() for name, child in self.properties.items()
            }
            if self.required:
                schema["required"] = list(self.required)
        elif self.kind is SchemaKind.ARRAY:
            assert self.items is not None
            schema["items"] = self.items.to_json_schema()
        return schema


def _mismatch(path: str, expected: str, value: Any) -> MalformedResponseError:
    return MalformedResponseError(
        f"Expected {expected} at '{path}', got {type(value).__name__}."
    )


_UNSET_CREDENTIALS = frozenset({"", "undefined"})


def configured_credential(api_key: str | None) -> str | None:
    """Return the stripped *api_key*, or ``None`` if it is missing, blank or ``"undefined"``."""
    if api_key is None:
        return None
    stripped = api_key.strip()
    return None if stripped in _UNSET_CREDENTIALS else stripped

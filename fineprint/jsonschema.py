"""JSON Schema descriptions of tool inputs, in the form the model API accepts."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Optional


class JSONSchemaType(str, enum.Enum):
    """The types a JSON Schema can describe."""

    OBJECT = "object"
    ARRAY = "array"
    STRING = "string"
    NUMBER = "number"  # integers and floats
    INTEGER = "integer"
    BOOLEAN = "boolean"
    NULL = "null"


@dataclass
class JSONSchema:
    """A JSON Schema node.

    Unset optional fields are None (or empty) and are left out of
    :meth:`to_dict`; numeric bounds of zero are kept.
    """

    type: JSONSchemaType
    description: str = ""
    properties: dict[str, "JSONSchema"] = field(default_factory=dict)
    required: list[str] = field(default_factory=list)
    items: Optional["JSONSchema"] = None
    enum: list[Any] = field(default_factory=list)
    format: str = ""
    minimum: Optional[float] = None
    maximum: Optional[float] = None
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    pattern: str = ""
    default: Any = None
    examples: list[Any] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.type = JSONSchemaType(self.type)

    def to_dict(self) -> dict[str, Any]:
        """Return the schema as a JSON-ready dictionary."""
        out: dict[str, Any] = {"type": self.type.value}
        if self.description:
            out["description"] = self.description
        if self.properties:
            out["properties"] = {
                name: schema.to_dict() for name, schema in self.properties.items()
            }
        if self.required:
            out["required"] = list(self.required)
        if self.items is not None:
            out["items"] = self.items.to_dict()
        if self.enum:
            out["enum"] = list(self.enum)
        if self.format:
            out["format"] = self.format
        if self.minimum is not None:
            out["minimum"] = self.minimum
        if self.maximum is not None:
            out["maximum"] = self.maximum
        if self.min_length is not None:
            out["minLength"] = self.min_length
        if self.max_length is not None:
            out["maxLength"] = self.max_length
        if self.pattern:
            out["pattern"] = self.pattern
        if self.default is not None:
            out["default"] = self.default
        if self.examples:
            out["examples"] = list(self.examples)
        return out
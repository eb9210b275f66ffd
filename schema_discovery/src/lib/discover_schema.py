#!/usr/bin/env python3
"""
JSON Schema Discovery Library

Discovers the structural schema of a single JSON document: which shapes
(null, boolean, number, string, array, object) occur at each position, with
the distinct sub-shapes of every array and object recorded side by side.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, IO, Iterable, Iterator, List, Mapping, Optional, Tuple
import json


class SchemaError(ValueError):
    """Raised for inconsistent or malformed schemas."""


class SchemaKind(str, Enum):
    """The six shapes a JSON value can take."""

    NULL = "null"
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"


@dataclass(frozen=True, repr=False)
class ArraySchema:
    """Distinct item schemas of an array, in first-seen order."""

    items: Tuple["Schema", ...] = ()

    def __post_init__(self):
        items = tuple(self.items)
        for item in items:
            if not isinstance(item, Schema):
                raise SchemaError(f"Array items must be schemas, got {type(item).__name__}")
        if len(set(items)) != len(items):
            raise SchemaError("Array items must be structurally distinct")
        object.__setattr__(self, "items", items)
        object.__setattr__(self, "_hash", hash(items))

    def __hash__(self):
        return self._hash

    def __repr__(self):
        return f"ArraySchema({list(self.items)!r})"


@dataclass(frozen=True, repr=False)
class ObjectSchema:
    """
    Schemas observed for each property of an object, keyed by property name.

    Keys are kept in sorted order. Each key maps to every schema seen for it,
    so an object decoded with repeated keys keeps one entry per occurrence.
    """

    properties: Mapping[str, Tuple["Schema", ...]] = field(default_factory=dict)

    def __post_init__(self):
        for key in self.properties:
            if not isinstance(key, str):
                raise SchemaError(f"Property names must be strings, got {type(key).__name__}")

        ordered = {}
        for key in sorted(self.properties):
            schemas = tuple(self.properties[key])
            for schema in schemas:
                if not isinstance(schema, Schema):
                    raise SchemaError(
                        f"Property {key!r} must map to schemas, got {type(schema).__name__}"
                    )
            ordered[key] = schemas
        object.__setattr__(self, "properties", MappingProxyType(ordered))
        object.__setattr__(self, "_hash", hash(tuple(ordered.items())))

    def __hash__(self):
        return self._hash

    def __repr__(self):
        return f"ObjectSchema({ {k: list(v) for k, v in self.properties.items()}!r})"


@dataclass(frozen=True, repr=False)
class Schema:
    """
    Inferred shape of a JSON value.

    `kind` is the discriminant: match on it before reading a payload.
    Exactly one of the payloads is set for the composite kinds and neither is
    set for the primitive kinds. Equality is structural.
    """

    kind: SchemaKind
    array_schema: Optional[ArraySchema] = None
    object_schema: Optional[ObjectSchema] = None

    def __post_init__(self):
        try:
            kind = SchemaKind(self.kind)
        except ValueError:
            raise SchemaError(f"Unknown schema kind: {self.kind!r}") from None
        object.__setattr__(self, "kind", kind)

        if (kind is SchemaKind.ARRAY) != (self.array_schema is not None):
            raise SchemaError(f"Array payload does not match schema kind {kind.value!r}")
        if (kind is SchemaKind.OBJECT) != (self.object_schema is not None):
            raise SchemaError(f"Object payload does not match schema kind {kind.value!r}")
        object.__setattr__(self, "_hash", hash((kind, self.array_schema, self.object_schema)))

    def __hash__(self):
        return self._hash

    @classmethod
    def array_of(cls, items: Iterable["Schema"] = ()) -> "Schema":
        return cls(SchemaKind.ARRAY, array_schema=ArraySchema(tuple(items)))

    @classmethod
    def object_of(cls, properties: Optional[Mapping[str, Iterable["Schema"]]] = None) -> "Schema":
        return cls(SchemaKind.OBJECT, object_schema=ObjectSchema(dict(properties or {})))

    @property
    def items(self) -> Tuple["Schema", ...]:
        """Item schemas of an array schema."""
        if self.array_schema is None:
            raise AttributeError(f"A {self.kind.value} schema has no items")
        return self.array_schema.items

    @property
    def properties(self) -> Mapping[str, Tuple["Schema", ...]]:
        """Property schemas of an object schema."""
        if self.object_schema is None:
            raise AttributeError(f"A {self.kind.value} schema has no properties")
        return self.object_schema.properties

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to plain JSON-ready data tagged with a "kind" field."""
        if self.kind is SchemaKind.ARRAY:
            return {"kind": "array", "items": [item.to_dict() for item in self.items]}
        if self.kind is SchemaKind.OBJECT:
            return {
                "kind": "object",
                "properties": {
                    key: [schema.to_dict() for schema in schemas]
                    for key, schemas in self.properties.items()
                },
            }
        return {"kind": self.kind.value}

    @classmethod
    def from_dict(cls, data: Any) -> "Schema":
        """Rebuild a schema from the output of to_dict()."""
        if not isinstance(data, dict):
            raise SchemaError(f"Schema must be an object, got {type(data).__name__}")
        if "kind" not in data:
            raise SchemaError("Schema is missing its 'kind' field")

        kind = data["kind"]
        if kind == "array":
            items = data.get("items")
            if not isinstance(items, list):
                raise SchemaError("Array schema requires an 'items' list")
            return cls.array_of(cls.from_dict(item) for item in items)

        if kind == "object":
            properties = data.get("properties")
            if not isinstance(properties, dict):
                raise SchemaError("Object schema requires a 'properties' object")
            parsed = {}
            for key, schemas in properties.items():
                if not isinstance(schemas, list):
                    raise SchemaError(f"Property {key!r} must map to a list of schemas")
                parsed[key] = [cls.from_dict(schema) for schema in schemas]
            return cls.object_of(parsed)

        return cls(kind)

    def __repr__(self):
        if self.kind is SchemaKind.ARRAY:
            return f"Array({list(self.items)!r})"
        if self.kind is SchemaKind.OBJECT:
            return f"Object({ {k: list(v) for k, v in self.properties.items()}!r})"
        return self.kind.name.capitalize()


NULL = Schema(SchemaKind.NULL)
BOOLEAN = Schema(SchemaKind.BOOLEAN)
NUMBER = Schema(SchemaKind.NUMBER)
STRING = Schema(SchemaKind.STRING)


class ObjectPairs:
    """
    A decoded JSON object that keeps every (key, value) pair in input order.

    Used as json's object_pairs_hook so repeated keys survive decoding.
    """

    __slots__ = ("_pairs",)

    def __init__(self, pairs: Iterable[Tuple[str, Any]]):
        self._pairs = tuple(pairs)

    def items(self) -> Iterator[Tuple[str, Any]]:
        return iter(self._pairs)

    def __len__(self):
        return len(self._pairs)

    def __eq__(self, other):
        if not isinstance(other, ObjectPairs):
            return NotImplemented
        return self._pairs == other._pairs

    __hash__ = None

    def __repr__(self):
        return f"ObjectPairs({list(self._pairs)!r})"


def load_json(fp: IO[str], keep_duplicate_keys: bool = False) -> Any:
    """
    Decode a JSON document from a text file object.

    Args:
        fp: Open file object to read from
        keep_duplicate_keys: Decode objects as ObjectPairs so repeated keys
            are all kept instead of the last one winning

    Returns:
        The decoded JSON value
    """
    if keep_duplicate_keys:
        return json.load(fp, object_pairs_hook=ObjectPairs)
    return json.load(fp)


def discover_schema(value: Any) -> Schema:
    """
    Main entry point: Discover the schema of a decoded JSON value.

    Args:
        value: A JSON value as produced by the json module (None, bool,
            int/float/Decimal, str, list, dict or ObjectPairs)

    Returns:
        The Schema describing every shape found in the value
    """
    if value is None:
        return NULL
    # bool is a subclass of int
    if isinstance(value, bool):
        return BOOLEAN
    if isinstance(value, (int, float, Decimal)):
        return NUMBER
    if isinstance(value, str):
        return STRING
    if isinstance(value, (list, tuple)):
        return _discover_array_schema(value)
    if isinstance(value, (dict, ObjectPairs)):
        return _discover_object_schema(value.items())

    raise TypeError(f"Cannot discover the schema of a non-JSON value of type {type(value).__name__}")


def _discover_array_schema(arr: Iterable[Any]) -> Schema:
    """Discover schema for an array, keeping each distinct item shape once."""
    items: List[Schema] = []

    for element in arr:
        item_schema = discover_schema(element)
        # Structural comparison against every shape seen so far
        if item_schema not in items:
            items.append(item_schema)

    return Schema.array_of(items)


def _discover_object_schema(pairs: Iterable[Tuple[Any, Any]]) -> Schema:
    """Discover schema for an object."""
    properties: Dict[str, List[Schema]] = {}

    for key, value in pairs:
        if not isinstance(key, str):
            raise TypeError(f"JSON object keys must be strings, got {type(key).__name__}")
        properties.setdefault(key, []).append(discover_schema(value))

    return Schema.object_of(properties)

#!/usr/bin/env python3
"""
Integration tests over generated corpora.

Tests that every document conforms to the schema discovered from it, and
that the schema records nothing the document does not contain.
"""

import pytest
from pathlib import Path
import sys
from typing import Any

sys.path.insert(0, str(Path(__file__).parent.parent / "lib"))

from discover_schema import Schema, SchemaKind, discover_schema
from generate_examples import DocumentGenerator


def conforms_to_discovered_schema(value: Any, schema: Schema) -> bool:
    """
    Check a value against a discovered schema.

    Args:
        value: The JSON value to check
        schema: The schema to check against

    Returns:
        True if every position of value has a shape recorded in schema
    """
    if schema.kind is SchemaKind.NULL:
        return value is None
    elif schema.kind is SchemaKind.BOOLEAN:
        return isinstance(value, bool)
    elif schema.kind is SchemaKind.NUMBER:
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    elif schema.kind is SchemaKind.STRING:
        return isinstance(value, str)
    elif schema.kind is SchemaKind.ARRAY:
        if not isinstance(value, list):
            return False
        return all(
            any(conforms_to_discovered_schema(item, item_schema) for item_schema in schema.items)
            for item in value
        )
    else:
        if not isinstance(value, dict):
            return False
        if set(value) != set(schema.properties):
            return False
        return all(
            any(conforms_to_discovered_schema(item, s) for s in schema.properties[key])
            for key, item in value.items()
        )


def count_schema_depth(schema: Schema) -> int:
    """Number of nested container levels in a schema."""
    if schema.kind is SchemaKind.ARRAY:
        return 1 + max((count_schema_depth(item) for item in schema.items), default=0)
    if schema.kind is SchemaKind.OBJECT:
        children = [s for schemas in schema.properties.values() for s in schemas]
        return 1 + max((count_schema_depth(child) for child in children), default=0)
    return 0


class TestIntegrationWithGeneratedCorpus:
    """Integration tests over a reproducible generated corpus."""

    @pytest.fixture(scope="class")
    def documents(self):
        """Get generated documents."""
        return DocumentGenerator(seed=7, max_depth=5, max_width=8).generate_documents(200)

    def test_every_document_conforms(self, documents):
        """Main integration test: each document conforms to its own schema."""
        failures = [
            idx for idx, document in enumerate(documents)
            if not conforms_to_discovered_schema(document, discover_schema(document))
        ]
        assert failures == []

    def test_discovery_is_deterministic(self, documents):
        for document in documents:
            assert discover_schema(document) == discover_schema(document)

    def test_array_items_are_distinct(self, documents):
        def check(schema: Schema):
            if schema.kind is SchemaKind.ARRAY:
                items = list(schema.items)
                for i, item in enumerate(items):
                    assert item not in items[i + 1:]
                    check(item)
            elif schema.kind is SchemaKind.OBJECT:
                for schemas in schema.properties.values():
                    assert len(schemas) == 1
                    check(schemas[0])

        for document in documents:
            check(discover_schema(document))

    def test_doubling_arrays_changes_nothing(self, documents):
        for document in documents:
            assert discover_schema([document, document]) == discover_schema([document])

    def test_round_trip_through_serialized_form(self, documents):
        for document in documents:
            schema = discover_schema(document)
            assert Schema.from_dict(schema.to_dict()) == schema


class TestScaling:
    """Wide and deep documents."""

    def test_wide_array_keeps_one_entry_per_shape(self):
        generator = DocumentGenerator()
        schema = discover_schema(generator.generate_wide_array(width=1000, shapes=7))
        assert len(schema.items) == 7

    def test_first_seen_shape_order(self):
        generator = DocumentGenerator()
        schema = discover_schema(generator.generate_wide_array(width=9, shapes=3))
        assert [sorted(item.properties) for item in schema.items] == [
            ["id"], ["field_0", "id"], ["field_0", "field_1", "id"],
        ]

    def test_deep_nesting(self):
        generator = DocumentGenerator()
        document = generator.generate_nested(150)
        assert count_schema_depth(discover_schema(document)) == 150


if __name__ == "__main__":
    pytest.main([__file__, "-v", "-s"])

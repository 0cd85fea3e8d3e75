"""Shared fixtures for ontoschema tests."""

import pytest

from ontoschema.compiler import SchemaCompiler
from ontoschema.models import TypeTermRecord
from ontoschema.ontology import TermRegistry


def make_node(key: str, category: str, **fields) -> TypeTermRecord:
    """Build a hierarchy node by hand."""
    return TypeTermRecord(id=f"terms/{key}", key=key, category=category, **fields)


@pytest.fixture
def node():
    """Factory for hand-built hierarchy nodes."""
    return make_node


@pytest.fixture
def registry():
    """Built-in ontology plus a few domain terms."""
    registry = TermRegistry.builtin()
    registry.add({
        "_id": "terms/percentage", "_key": "percentage", "category": "numeric",
        "parent": ":type:data:numeric", "range": [0, 100, True, True],
    })
    registry.add({
        "_id": "terms/iso_code", "_key": "iso_code", "category": "text",
        "parent": ":type:value:str", "length": [2, 3, True, True], "regex": "^[A-Z]+$",
    })
    registry.add({
        "_id": "terms/country", "_key": "country", "category": "text",
        "parent": ":type:value:enum", "terms": [":enum:country"],
    })
    registry.add({
        "_id": "terms/:descriptor:name", "_key": ":descriptor:name", "category": "text",
        "parent": None,
    })
    return registry


@pytest.fixture
def compiler(registry):
    """Compiler over the test registry."""
    return SchemaCompiler(provider=registry)

"""Tests for the in-memory type hierarchy provider."""

import json

import pytest

from ontoschema.errors import (
    HierarchyTooDeepError,
    InvalidTermRecordError,
    NotATypeHierarchyError,
    UnknownTypeError,
)
from ontoschema.ontology import TermRegistry, TypeHierarchyProvider, builtin_terms


class TestBuiltinOntology:
    """Test the bundled base ontology."""

    def test_base_types_present(self):
        registry = TermRegistry.builtin()
        for key in [":type:data:any", ":type:data:bool", ":type:data:text", ":type:data:numeric",
                    ":type:data:list", ":type:data:struct", ":type:data:object"]:
            assert key in registry

    def test_terms_have_identity(self):
        for term in builtin_terms():
            assert term["_id"] == f"terms/{term['_key']}"

    def test_is_a_provider(self):
        assert isinstance(TermRegistry.builtin(), TypeHierarchyProvider)


class TestResolveHierarchy:
    """Test hierarchy resolution."""

    def test_most_specific_first(self):
        registry = TermRegistry.builtin()
        chain = registry.describe(":type:value:enum")
        assert chain == [
            (":type:value:enum", "text"),
            (":type:value:ref:key", "text"),
            (":type:value:ref", "text"),
            (":type:data:text", "text"),
        ]

    def test_root_excluded(self):
        registry = TermRegistry.builtin()
        keys = [node.key for node in registry.resolve_hierarchy(":type:data:list")]
        assert keys == [":type:data:list"]

    def test_fresh_copies(self):
        registry = TermRegistry.builtin()
        first = registry.resolve_hierarchy(":type:value:key")
        first[0].length = None
        second = registry.resolve_hierarchy(":type:value:key")

        assert second[0].length is not None
        assert first[0] is not second[0]

    def test_unknown_reference(self):
        with pytest.raises(UnknownTypeError) as exc_info:
            TermRegistry.builtin().resolve_hierarchy(":type:value:missing")
        assert ":type:value:missing" in str(exc_info.value)

    def test_term_outside_taxonomy(self, registry):
        with pytest.raises(NotATypeHierarchyError):
            registry.resolve_hierarchy(":descriptor:name")

    def test_dangling_parent(self):
        registry = TermRegistry([{"_id": "terms/a", "_key": "a", "category": "text", "parent": "ghost"}])
        with pytest.raises(NotATypeHierarchyError):
            registry.resolve_hierarchy("a")

    def test_cycle(self):
        registry = TermRegistry([
            {"_id": "terms/a", "_key": "a", "category": "text", "parent": "b"},
            {"_id": "terms/b", "_key": "b", "category": "text", "parent": "a"},
        ])
        with pytest.raises(NotATypeHierarchyError):
            registry.resolve_hierarchy("a")

    def test_max_depth(self):
        registry = TermRegistry.builtin(max_depth=2)
        with pytest.raises(HierarchyTooDeepError) as exc_info:
            registry.resolve_hierarchy(":type:value:enum")
        assert exc_info.value.max_depth == 2


class TestLoading:
    """Test loading terms from files."""

    def test_from_file_list(self, tmp_path):
        path = tmp_path / "terms.json"
        path.write_text(json.dumps([
            {"_id": "terms/zip", "_key": "zip", "category": "text",
             "parent": ":type:value:str", "regex": "^\\d{5}$"},
        ]), encoding="utf-8")

        registry = TermRegistry.from_file(path)
        assert [n.key for n in registry.resolve_hierarchy("zip")] == [
            "zip", ":type:value:str", ":type:data:text"
        ]

    def test_from_file_wrapped_without_builtin(self, tmp_path):
        path = tmp_path / "terms.json"
        path.write_text(json.dumps({"terms": [
            {"_id": "terms/flag", "_key": "flag", "category": "boolean", "parent": ":type"},
        ]}), encoding="utf-8")

        registry = TermRegistry.from_file(path, include_builtin=False)
        assert len(registry) == 1
        assert registry.describe("flag") == [("flag", "boolean")]

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "terms.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(InvalidTermRecordError):
            TermRegistry.from_file(path)

    def test_invalid_shape(self, tmp_path):
        path = tmp_path / "terms.json"
        path.write_text('{"other": 1}', encoding="utf-8")
        with pytest.raises(InvalidTermRecordError):
            TermRegistry.from_file(path)

    def test_malformed_term(self):
        with pytest.raises(InvalidTermRecordError):
            TermRegistry([{"_key": "no-id", "category": "text"}])

    def test_missing_file(self, tmp_path):
        with pytest.raises(InvalidTermRecordError, match="Cannot read terms file") as exc_info:
            TermRegistry.from_file(tmp_path / "missing.json")
        assert exc_info.value.reference == str(tmp_path / "missing.json")

"""Type hierarchy resolution over an in-memory ontology of terms.

The compiler never talks to storage directly: it receives hierarchies from a
`TypeHierarchyProvider`. Providers must hand out fresh copies on every call,
since compilation mutates and consumes the nodes it is given.
"""

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Iterable

from pydantic import ValidationError

from .constants import (
    TYPE_ANY,
    TYPE_BOOLEAN,
    TYPE_EMAIL,
    TYPE_ENUM,
    TYPE_HEX,
    TYPE_INTEGER,
    TYPE_KEY,
    TYPE_LIST,
    TYPE_NUMERIC,
    TYPE_OBJECT,
    TYPE_REFERENCE,
    TYPE_REFERENCE_GID,
    TYPE_REFERENCE_ID,
    TYPE_REFERENCE_KEY,
    TYPE_ROOT,
    TYPE_SET,
    TYPE_STRING,
    TYPE_STRUCT,
    TYPE_TEXT,
    TYPE_TIMESTAMP,
    TYPE_URL,
)
from .errors import (
    HierarchyTooDeepError,
    InvalidTermRecordError,
    NotATypeHierarchyError,
    UnknownTypeError,
)
from .models import TypeTermRecord

logger = logging.getLogger(__name__)

TERMS_COLLECTION = "terms"
DEFAULT_MAX_DEPTH = 10


class TypeHierarchyProvider(ABC):
    """Resolves a type reference to its ordered ancestor chain."""

    @abstractmethod
    def resolve_hierarchy(self, type_ref: str) -> list[TypeTermRecord]:
        """Resolve a type reference.

        Args:
            type_ref: Term `_key` or `_id`

        Returns:
            Fresh copies of the chain, most specific first, universal root excluded

        Raises:
            UnknownTypeError: If the reference does not resolve
            NotATypeHierarchyError: If the term is outside the type taxonomy
        """
        pass


def _term(key: str, category: str, parent: str, **fields: Any) -> dict[str, Any]:
    return {
        "_id": f"{TERMS_COLLECTION}/{key}",
        "_key": key,
        "category": category,
        "parent": parent,
        **fields,
    }


def builtin_terms() -> list[dict[str, Any]]:
    """Base types of the taxonomy and their well-known descendants."""
    return [
        _term(TYPE_ANY, "any", TYPE_ROOT),
        _term(TYPE_BOOLEAN, "boolean", TYPE_ROOT, cast=[":rule:castBoolean"]),
        _term(TYPE_TEXT, "text", TYPE_ROOT, cast=[":rule:castString"]),
        _term(TYPE_STRING, "text", TYPE_TEXT),
        _term(TYPE_KEY, "text", TYPE_STRING, length=[1, 255, True, True]),
        _term(TYPE_URL, "text", TYPE_STRING, custom=[":rule:customUrl"]),
        _term(TYPE_HEX, "text", TYPE_STRING,
              cast=[":rule:castHexadecimal"], custom=[":rule:customHex"]),
        _term(TYPE_EMAIL, "text", TYPE_STRING, custom=[":rule:customEmail"]),
        _term(TYPE_REFERENCE, "text", TYPE_TEXT),
        _term(TYPE_REFERENCE_ID, "text", TYPE_REFERENCE),
        # Collections are set per descriptor
        _term(TYPE_REFERENCE_KEY, "text", TYPE_REFERENCE),
        _term(TYPE_REFERENCE_GID, "text", TYPE_REFERENCE),
        _term(TYPE_ENUM, "text", TYPE_REFERENCE_KEY),
        _term(TYPE_NUMERIC, "numeric", TYPE_ROOT, cast=[":rule:castNumber"]),
        _term(TYPE_INTEGER, "numeric", TYPE_NUMERIC, custom=[":rule:customInt"]),
        _term(TYPE_TIMESTAMP, "numeric", TYPE_NUMERIC, custom=[":rule:customTimeStamp"]),
        _term(TYPE_LIST, "list", TYPE_ROOT),
        _term(TYPE_SET, "list", TYPE_LIST),
        _term(TYPE_STRUCT, "struct", TYPE_ROOT),
        _term(TYPE_OBJECT, "object", TYPE_ROOT),
    ]


class TermRegistry(TypeHierarchyProvider):
    """In-memory ontology indexed by term key."""

    def __init__(self, terms: Iterable[TypeTermRecord | dict] = (), max_depth: int = DEFAULT_MAX_DEPTH):
        self.max_depth = max_depth
        self._terms: dict[str, TypeTermRecord] = {}
        for term in terms:
            self.add(term)

    def add(self, term: TypeTermRecord | dict) -> TypeTermRecord:
        """Add or replace a term."""
        if isinstance(term, dict):
            try:
                term = TypeTermRecord.model_validate(term)
            except ValidationError as e:
                raise InvalidTermRecordError(f"Invalid term record: {e}", term.get("_key")) from e
        self._terms[term.key] = term
        return term

    def __contains__(self, type_ref: str) -> bool:
        return self._lookup(type_ref) is not None

    def __len__(self) -> int:
        return len(self._terms)

    def _lookup(self, type_ref: str) -> TypeTermRecord | None:
        if type_ref in self._terms:
            return self._terms[type_ref]
        # Accept `_id` references ("terms/<key>")
        if "/" in type_ref:
            return self._terms.get(type_ref.split("/", 1)[1])
        return None

    def _chain(self, type_ref: str) -> list[TypeTermRecord]:
        term = self._lookup(type_ref)
        if term is None:
            raise UnknownTypeError(type_ref)

        chain: list[TypeTermRecord] = []
        seen: set[str] = set()
        while True:
            if term.key in seen:
                logger.warning(f"Cycle in type-of chain of {type_ref} at {term.key}")
                raise NotATypeHierarchyError(type_ref)
            seen.add(term.key)
            chain.append(term)

            if term.parent == TYPE_ROOT:
                break
            if term.parent is None:
                return []
            parent = self._lookup(term.parent)
            if parent is None:
                return []
            term = parent

        if len(chain) > self.max_depth:
            raise HierarchyTooDeepError(type_ref, self.max_depth)
        return chain

    def resolve_hierarchy(self, type_ref: str) -> list[TypeTermRecord]:
        chain = self._chain(type_ref)
        if not chain:
            raise NotATypeHierarchyError(type_ref)
        logger.debug(f"Resolved {type_ref} to {len(chain)} levels")
        return [term.model_copy(deep=True) for term in chain]

    def describe(self, type_ref: str) -> list[tuple[str, str]]:
        """Return the resolved chain as (key, category) pairs, most specific first."""
        return [(term.key, term.category) for term in self.resolve_hierarchy(type_ref)]

    @classmethod
    def builtin(cls, max_depth: int = DEFAULT_MAX_DEPTH) -> "TermRegistry":
        """Registry holding only the built-in base ontology."""
        return cls(builtin_terms(), max_depth=max_depth)

    @classmethod
    def from_file(cls, path: str | Path, include_builtin: bool = True,
                  max_depth: int = DEFAULT_MAX_DEPTH) -> "TermRegistry":
        """Load terms from a JSON file.

        The file holds either a list of term objects or `{"terms": [...]}`.
        File terms replace built-in terms with the same key.

        Raises:
            InvalidTermRecordError: If the file cannot be read, is not valid JSON
                or a term is malformed
        """
        path = Path(path)
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise InvalidTermRecordError(f"Invalid JSON in terms file: {e}", str(path)) from e
        except OSError as e:
            raise InvalidTermRecordError(f"Cannot read terms file: {e.strerror}", str(path)) from e

        if isinstance(data, dict):
            data = data.get("terms")
        if not isinstance(data, list):
            raise InvalidTermRecordError("Terms file must contain a list of terms", str(path))

        registry = cls(builtin_terms() if include_builtin else (), max_depth=max_depth)
        for term in data:
            if not isinstance(term, dict):
                raise InvalidTermRecordError("Term entries must be objects", str(path))
            registry.add(term)

        logger.info(f"Loaded {len(data)} terms from {path}")
        return registry

"""Exception types raised while resolving and compiling type hierarchies.

Reference and structural errors are deterministic functions of ontology data:
they are raised immediately and never retried.
"""

from typing import Any


class OntoschemaError(Exception):
    """Base class for all ontoschema errors."""

    def __init__(self, message: str, reference: Any = None):
        super().__init__(message)
        self.message = message
        self.reference = reference

    def __str__(self) -> str:
        if self.reference is None:
            return self.message
        return f"{self.message}: {self.reference}"


class UnknownTypeError(OntoschemaError):
    """The type reference does not resolve to a term."""

    def __init__(self, reference: Any):
        super().__init__("Unknown type reference", reference)


class NotATypeHierarchyError(OntoschemaError):
    """The term exists but lies outside the type taxonomy."""

    def __init__(self, reference: Any):
        super().__init__("Term is not a data type", reference)


class HierarchyTooDeepError(OntoschemaError):
    """The ancestor chain exceeds the configured maximum depth."""

    def __init__(self, reference: Any, max_depth: int):
        super().__init__(f"Type hierarchy deeper than {max_depth} levels", reference)
        self.max_depth = max_depth


class UnrecognizedBaseCategoryError(OntoschemaError):
    """A hierarchy node carries a category outside the seven base categories."""

    def __init__(self, reference: Any, category: Any):
        super().__init__(f"Unrecognized base category '{category}'", reference)
        self.category = category


class KeyMustBeTextError(OntoschemaError):
    """An object key axis resolved to a category other than text."""

    def __init__(self, reference: Any, category: Any):
        super().__init__(f"Object keys must be text, got '{category}'", reference)
        self.category = category


class InvalidTermRecordError(OntoschemaError):
    """A raw term record or terms file is malformed."""


class UnknownHookError(OntoschemaError):
    """A cast or custom hook name has no registered function."""

    def __init__(self, reference: Any):
        super().__init__("Unknown validation hook", reference)


class ValueCheckError(OntoschemaError):
    """A concrete value does not satisfy a rendered rule."""

    def __init__(self, message: str, path: str = "", value: Any = None):
        super().__init__(message, value)
        self.path = path
        self.value = value

    def __str__(self) -> str:
        location = f" at {self.path}" if self.path else ""
        return f"{self.message}{location}"

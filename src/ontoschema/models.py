"""Data models for ontology terms, descriptor options and validation records."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, NamedTuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


class BaseCategory(str, Enum):
    """Root classification of a type term."""
    ANY = "any"
    BOOLEAN = "boolean"
    TEXT = "text"
    NUMERIC = "numeric"
    LIST = "list"
    STRUCT = "struct"
    OBJECT = "object"


class Interval(NamedTuple):
    """Closed/open interval as `[lower, upper, lower_inclusive, upper_inclusive]`."""
    lower: int | float
    upper: int | float
    lower_inclusive: bool = True
    upper_inclusive: bool = True


def _as_list(value: Any) -> Any:
    if isinstance(value, str):
        return [value]
    return value


class TypeTermRecord(BaseModel):
    """One node of a type hierarchy.

    Ontology data is read-only: the compiler mutates nodes in place, so it must
    only ever see private copies (see `TypeHierarchyProvider`).
    """
    id: str = Field(alias="_id")
    key: str = Field(alias="_key")
    category: str
    parent: str | None = None

    # Text
    length: Interval | None = None
    regex: list[str] | None = None

    # Numeric
    range: Interval | None = None
    decimals: int | None = None

    # List
    size: Interval | None = None

    # References
    collection: str | None = None
    instance: str | None = None
    terms: list[str] | None = None
    fields: list[str] | None = None

    # Behavior hooks
    cast: list[str] = Field(alias="type-cast", default_factory=list)
    custom: list[str] = Field(alias="type-custom", default_factory=list)

    # Object axes, embedded most-specific-first
    key_hierarchy: list["TypeTermRecord"] | None = Field(alias="type-key", default=None)
    value_hierarchy: list["TypeTermRecord"] | None = Field(alias="type-value", default=None)

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @field_validator("category", mode="before")
    @classmethod
    def validate_category(cls, v):
        # Kept as a raw string: unknown tags are reported by the compiler
        if isinstance(v, Enum):
            return v.value
        return v

    @field_validator("regex", "cast", "custom", mode="before")
    @classmethod
    def validate_string_list(cls, v):
        return _as_list(v)


class DescriptorOptions(BaseModel):
    """Per-field override options of a descriptor.

    Carries the constraint subset of `TypeTermRecord`; for object descriptors
    `key`/`value` hold the options of the key and value axes.
    """
    type: str | None = None
    format: str | None = None

    length: Interval | None = None
    regex: list[str] | None = None
    range: Interval | None = None
    decimals: int | None = None
    size: Interval | None = None
    collection: str | None = None
    instance: str | None = None
    terms: list[str] | None = None
    fields: list[str] | None = None

    key: "DescriptorOptions | None" = Field(alias="type-key", default=None)
    value: "DescriptorOptions | None" = Field(alias="type-value", default=None)

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @field_validator("regex", mode="before")
    @classmethod
    def validate_regex(cls, v):
        return _as_list(v)


@dataclass
class ValidationRecord:
    """Compiled, hierarchy-merged constraints of one field.

    `child` is only present when a container's element category differs from
    the container's own; `key_record`/`value_record` only for objects.
    """
    category: BaseCategory | None = None

    length: Interval | None = None
    regex: list[str] = field(default_factory=list)
    range: Interval | None = None
    decimals: int | None = None
    size: Interval | None = None

    is_url: bool = False
    is_hex: bool = False
    is_email: bool = False
    is_int: bool = False
    is_stamp: bool = False
    is_set: bool = False
    is_ref: bool = False

    collection: str | None = None
    instance: str | None = None
    terms: list[str] | None = None
    fields: list[str] | None = None

    cast: list[str] = field(default_factory=list)
    custom: list[str] = field(default_factory=list)

    child: "ValidationRecord | None" = None
    key_record: "ValidationRecord | None" = None
    value_record: "ValidationRecord | None" = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON output, omitting unset fields."""
        data: dict[str, Any] = {
            "category": self.category.value if self.category else None
        }

        for name in ("length", "range", "size"):
            value = getattr(self, name)
            if value is not None:
                data[name] = list(value)

        if self.decimals is not None:
            data["decimals"] = self.decimals
        if self.regex:
            data["regex"] = list(self.regex)

        for flag in ("is_url", "is_hex", "is_email", "is_int", "is_stamp", "is_set", "is_ref"):
            if getattr(self, flag):
                data[flag] = True

        for name in ("collection", "instance", "terms", "fields"):
            value = getattr(self, name)
            if value is not None:
                data[name] = list(value) if isinstance(value, list) else value

        if self.cast:
            data["cast"] = list(self.cast)
        if self.custom:
            data["custom"] = list(self.custom)

        if self.child is not None:
            data["child"] = self.child.to_dict()
        if self.key_record is not None:
            data["key_record"] = self.key_record.to_dict()
        if self.value_record is not None:
            data["value_record"] = self.value_record.to_dict()

        return data

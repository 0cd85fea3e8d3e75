"""Back-end agnostic rule tree produced from validation records."""

import copy
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class RuleKind(str, Enum):
    """Base rule kinds, one per base category."""
    ANY = "any"
    BOOLEAN = "boolean"
    STRING = "string"
    NUMBER = "number"
    ARRAY = "array"
    STRUCT = "struct"
    OBJECT = "object"


class DirectiveName(str, Enum):
    """Directive vocabulary. Bound directives are inclusive except `greater` and `less`."""
    REQUIRED = "required"

    EXACT_LENGTH = "exact_length"
    MIN_LENGTH = "min_length"
    MAX_LENGTH = "max_length"
    MATCHES = "matches"
    URI = "uri"
    HEX = "hex"
    EMAIL = "email"

    EXACT = "exact"
    MIN = "min"
    MAX = "max"
    GREATER = "greater"
    LESS = "less"
    PRECISION = "precision"
    INTEGER = "integer"
    TIMESTAMP = "timestamp"

    EXACT_SIZE = "exact_size"
    MIN_SIZE = "min_size"
    MAX_SIZE = "max_size"
    UNIQUE = "unique"


@dataclass
class Directive:
    """A single constraint on a value."""
    name: DirectiveName
    value: Any = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"name": self.name.value}
        if self.value is not None:
            data["value"] = self.value
        return data


def _number(value: Any) -> str:
    if isinstance(value, float) and not math.isinf(value) and value.is_integer():
        value = int(value)
    return str(value)


def _bounds(subject: str, low: Any, high: Any, exact: Any,
            low_strict: bool = False, high_strict: bool = False) -> str | None:
    if exact is not None:
        return f"{subject} = {_number(exact)}"
    below = "<" if low_strict else "≤"
    above = "<" if high_strict else "≤"
    if low is not None and high is not None:
        return f"{_number(low)} {below} {subject} {above} {_number(high)}"
    if low is not None:
        return f"{subject} {'>' if low_strict else '≥'} {_number(low)}"
    if high is not None:
        return f"{subject} {above} {_number(high)}"
    return None


_FLAG_LABELS: dict[DirectiveName, str] = {
    DirectiveName.REQUIRED: "required",
    DirectiveName.URI: "uri",
    DirectiveName.HEX: "hexadecimal",
    DirectiveName.EMAIL: "e-mail",
    DirectiveName.INTEGER: "integer",
    DirectiveName.TIMESTAMP: "timestamp",
    DirectiveName.UNIQUE: "unique elements",
}


@dataclass
class RenderedRule:
    """Directive tree for one value.

    `items` constrains each element of an array, `keys`/`values` every key and
    value of an object.
    """
    kind: RuleKind
    directives: list[Directive] = field(default_factory=list)
    references: dict[str, Any] = field(default_factory=dict)
    cast: list[str] = field(default_factory=list)
    custom: list[str] = field(default_factory=list)
    items: "RenderedRule | None" = None
    keys: "RenderedRule | None" = None
    values: "RenderedRule | None" = None

    def get(self, name: DirectiveName | str) -> Directive | None:
        """Return the first directive with the given name."""
        name = DirectiveName(name)
        for directive in self.directives:
            if directive.name == name:
                return directive
        return None

    def has(self, name: DirectiveName | str) -> bool:
        return self.get(name) is not None

    def all(self, name: DirectiveName | str) -> list[Directive]:
        name = DirectiveName(name)
        return [directive for directive in self.directives if directive.name == name]

    def required(self) -> "RenderedRule":
        """Return a copy of the rule with a leading `required` directive."""
        rule = copy.deepcopy(self)
        if not rule.has(DirectiveName.REQUIRED):
            rule.directives.insert(0, Directive(DirectiveName.REQUIRED))
        return rule

    def _value(self, name: DirectiveName) -> Any:
        directive = self.get(name)
        return directive.value if directive else None

    def describe(self) -> str:
        """Human readable summary, e.g. `number, 0 ≤ x ≤ 100, ≤ 2 decimal places`."""
        parts = [self.kind.value]

        for name, label in _FLAG_LABELS.items():
            if self.has(name):
                parts.append(label)

        exact_length = self._value(DirectiveName.EXACT_LENGTH)
        if exact_length is not None:
            parts.append(f"exact length {_number(exact_length)}")
        else:
            text = _bounds("length", self._value(DirectiveName.MIN_LENGTH),
                           self._value(DirectiveName.MAX_LENGTH), None)
            if text:
                parts.append(text)

        low, high = self._value(DirectiveName.MIN), self._value(DirectiveName.MAX)
        low_strict = low is None and self.has(DirectiveName.GREATER)
        high_strict = high is None and self.has(DirectiveName.LESS)
        if low_strict:
            low = self._value(DirectiveName.GREATER)
        if high_strict:
            high = self._value(DirectiveName.LESS)
        text = _bounds("x", low, high, self._value(DirectiveName.EXACT), low_strict, high_strict)
        if text:
            parts.append(text)

        precision = self._value(DirectiveName.PRECISION)
        if precision is not None:
            parts.append(f"≤ {precision} decimal places")

        exact_size = self._value(DirectiveName.EXACT_SIZE)
        if exact_size is not None:
            parts.append(f"exact size {_number(exact_size)}")
        else:
            text = _bounds("size", self._value(DirectiveName.MIN_SIZE),
                           self._value(DirectiveName.MAX_SIZE), None)
            if text:
                parts.append(text)

        for directive in self.all(DirectiveName.MATCHES):
            parts.append(f"matches /{directive.value}/")

        if "collection" in self.references:
            parts.append(f"references {self.references['collection']}")

        if self.items is not None:
            parts.append(f"each element: ({self.items.describe()})")
        if self.keys is not None:
            parts.append(f"keys: ({self.keys.describe()})")
        if self.values is not None:
            parts.append(f"values: ({self.values.describe()})")

        return ", ".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON output."""
        data: dict[str, Any] = {
            "kind": self.kind.value,
            "directives": [directive.to_dict() for directive in self.directives],
        }
        if self.references:
            data["references"] = copy.deepcopy(self.references)
        if self.cast:
            data["cast"] = list(self.cast)
        if self.custom:
            data["custom"] = list(self.custom)
        if self.items is not None:
            data["items"] = self.items.to_dict()
        if self.keys is not None:
            data["keys"] = self.keys.to_dict()
        if self.values is not None:
            data["values"] = self.values.to_dict()
        return data

"""Check concrete values against rendered rules.

Each level runs its cast hooks, then its directives, then its custom hooks,
and recurses into array elements and object keys/values. The checked value is
returned normalized (cast) or a `ValueCheckError` is raised with the property
path of the offending value.
"""

import logging
import re
from decimal import Decimal, InvalidOperation
from typing import Any

from ..errors import InvalidTermRecordError, ValueCheckError
from .hooks import EMAIL_PATTERN, HEX_PATTERN, HookRegistry, custom_url
from .models import Directive, DirectiveName, RenderedRule, RuleKind

logger = logging.getLogger(__name__)


def _decimal_places(value: int | float) -> int:
    try:
        exponent = Decimal(str(value)).normalize().as_tuple().exponent
    except InvalidOperation:
        return 0
    return -exponent if isinstance(exponent, int) and exponent < 0 else 0


def _pattern(pattern: str) -> re.Pattern:
    try:
        return re.compile(pattern)
    except re.error as e:
        raise InvalidTermRecordError(f"Invalid regular expression: {e}", pattern) from e


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class RuleChecker:
    """Validates values against `RenderedRule` trees."""

    def __init__(self, hooks: HookRegistry | None = None):
        self.hooks = hooks or HookRegistry.default()

    def check(self, rule: RenderedRule, value: Any, path: str = "") -> Any:
        """Check a value and return it normalized.

        Raises:
            ValueCheckError: If the value violates the rule
            UnknownHookError: If the rule names an unregistered hook
            InvalidTermRecordError: If a `matches` pattern is not a valid regular expression
        """
        if value is None:
            if rule.has(DirectiveName.REQUIRED):
                raise ValueCheckError("Value is required", path, value)
            return None

        value = self._cast(rule, value, path)
        self._check_kind(rule, value, path)

        for directive in rule.directives:
            self._check_directive(directive, value, path)

        if rule.kind == RuleKind.ARRAY and rule.items is not None:
            value = [
                self.check(rule.items, item, f"{path}[{index}]")
                for index, item in enumerate(value)
            ]
        elif rule.kind == RuleKind.OBJECT and (rule.keys is not None or rule.values is not None):
            value = self._check_mapping(rule, value, path)

        for name in rule.custom:
            value = self.hooks.custom(name)(rule, value, path)

        return value

    def is_valid(self, rule: RenderedRule, value: Any) -> bool:
        """Return True if the value satisfies the rule."""
        try:
            self.check(rule, value)
        except ValueCheckError as e:
            logger.debug(f"Value rejected: {e}")
            return False
        return True

    def _cast(self, rule: RenderedRule, value: Any, path: str) -> Any:
        if not rule.cast or rule.kind == RuleKind.ANY:
            return value
        if isinstance(value, (list, dict)):
            raise ValueCheckError("Value must be a scalar", path, value)
        for name in rule.cast:
            value = self.hooks.cast(name)(value, path)
        return value

    def _check_kind(self, rule: RenderedRule, value: Any, path: str) -> None:
        kind = rule.kind
        if kind == RuleKind.BOOLEAN and not isinstance(value, bool):
            raise ValueCheckError("Value must be a boolean", path, value)
        if kind == RuleKind.STRING and not isinstance(value, str):
            raise ValueCheckError("Value must be a string", path, value)
        if kind == RuleKind.NUMBER and not _is_number(value):
            raise ValueCheckError("Value must be a number", path, value)
        if kind == RuleKind.ARRAY and not isinstance(value, list):
            raise ValueCheckError("Value must be an array", path, value)
        if kind in (RuleKind.STRUCT, RuleKind.OBJECT) and not isinstance(value, dict):
            raise ValueCheckError("Value must be an object", path, value)

    def _check_mapping(self, rule: RenderedRule, value: dict, path: str) -> dict:
        result = {}
        for key, item in value.items():
            item_path = f"{path}.{key}" if path else str(key)
            if rule.keys is not None:
                key = self.check(rule.keys, key, item_path)
            if rule.values is not None:
                item = self.check(rule.values, item, item_path)
            result[key] = item
        return result

    def _check_directive(self, directive: Directive, value: Any, path: str) -> None:
        name = directive.name
        limit = directive.value

        if name == DirectiveName.REQUIRED:
            return

        if name in (DirectiveName.EXACT_LENGTH, DirectiveName.EXACT_SIZE):
            if len(value) != limit:
                raise ValueCheckError(f"Length must be {limit}", path, value)
        elif name in (DirectiveName.MIN_LENGTH, DirectiveName.MIN_SIZE):
            if len(value) < limit:
                raise ValueCheckError(f"Length must be at least {limit}", path, value)
        elif name in (DirectiveName.MAX_LENGTH, DirectiveName.MAX_SIZE):
            if len(value) > limit:
                raise ValueCheckError(f"Length must be at most {limit}", path, value)
        elif name == DirectiveName.EXACT:
            if value != limit:
                raise ValueCheckError(f"Value must be {limit}", path, value)
        elif name == DirectiveName.MIN:
            if value < limit:
                raise ValueCheckError(f"Value must be at least {limit}", path, value)
        elif name == DirectiveName.MAX:
            if value > limit:
                raise ValueCheckError(f"Value must be at most {limit}", path, value)
        elif name == DirectiveName.GREATER:
            if value <= limit:
                raise ValueCheckError(f"Value must be greater than {limit}", path, value)
        elif name == DirectiveName.LESS:
            if value >= limit:
                raise ValueCheckError(f"Value must be less than {limit}", path, value)
        elif name == DirectiveName.PRECISION:
            if _decimal_places(value) > limit:
                raise ValueCheckError(f"Value must have at most {limit} decimal places", path, value)
        elif name == DirectiveName.INTEGER:
            if isinstance(value, float) and not value.is_integer():
                raise ValueCheckError("Value must be an integer", path, value)
        elif name == DirectiveName.MATCHES:
            if not _pattern(limit).search(value):
                raise ValueCheckError(f"Value must match /{limit}/", path, value)
        elif name == DirectiveName.URI:
            custom_url(None, value, path)
        elif name == DirectiveName.HEX:
            if not HEX_PATTERN.match(value):
                raise ValueCheckError("Value must be hexadecimal", path, value)
        elif name == DirectiveName.EMAIL:
            if not EMAIL_PATTERN.match(value):
                raise ValueCheckError("Value must be an e-mail address", path, value)
        elif name == DirectiveName.UNIQUE:
            seen: list[Any] = []
            for item in value:
                if item in seen:
                    raise ValueCheckError("Elements must be unique", path, item)
                seen.append(item)

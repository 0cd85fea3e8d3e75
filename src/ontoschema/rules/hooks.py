"""Cast and custom validation hooks referenced by type terms.

Terms name their hooks with rule term keys such as `:rule:castNumber`; the
registry resolves them by local identifier (`castNumber`).
"""

import re
from typing import Any, Callable
from urllib.parse import urlparse

from ..errors import UnknownHookError, ValueCheckError

CastHook = Callable[[Any, str], Any]
CustomHook = Callable[[Any, Any, str], Any]

HEX_PATTERN = re.compile(r"^[0-9a-fA-F]+$")
EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def local_name(name: str) -> str:
    """Strip the term prefix from a hook reference (`:rule:castNumber` -> `castNumber`)."""
    return name.rsplit(":", 1)[-1]


def cast_string(value: Any, path: str) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def cast_number(value: Any, path: str) -> int | float:
    if isinstance(value, bool):
        raise ValueCheckError("Value is not a number", path, value)
    if isinstance(value, (int, float)):
        return value
    try:
        text = str(value).strip()
        return int(text) if re.fullmatch(r"[+-]?\d+", text) else float(text)
    except ValueError:
        raise ValueCheckError("Value is not a number", path, value) from None


def cast_boolean(value: Any, path: str) -> bool:
    if isinstance(value, str):
        return value.strip().lower() not in ("", "0", "false", "no", "off")
    return bool(value)


def cast_hexadecimal(value: Any, path: str) -> str:
    # Lowercased so that hexadecimal strings compare equal
    return cast_string(value, path).lower()


def custom_url(rule: Any, value: Any, path: str) -> Any:
    parsed = urlparse(str(value))
    if not parsed.scheme or not parsed.netloc:
        raise ValueCheckError("Value is not a valid URL", path, value)
    return value


def custom_hex(rule: Any, value: Any, path: str) -> Any:
    if not HEX_PATTERN.match(str(value)):
        raise ValueCheckError("Value is not a hexadecimal string", path, value)
    return value


def custom_email(rule: Any, value: Any, path: str) -> Any:
    if not EMAIL_PATTERN.match(str(value)):
        raise ValueCheckError("Value is not a valid e-mail address", path, value)
    return value


def custom_int(rule: Any, value: Any, path: str) -> Any:
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueCheckError("Value is not an integer", path, value)
        return int(value)
    return value


def custom_timestamp(rule: Any, value: Any, path: str) -> Any:
    if value < 0:
        raise ValueCheckError("Time stamp cannot be negative", path, value)
    return value


class HookRegistry:
    """Maps hook names to cast and custom functions."""

    def __init__(self):
        self.casts: dict[str, CastHook] = {}
        self.customs: dict[str, CustomHook] = {}

    def register_cast(self, name: str, hook: CastHook) -> None:
        self.casts[local_name(name)] = hook

    def register_custom(self, name: str, hook: CustomHook) -> None:
        self.customs[local_name(name)] = hook

    def cast(self, name: str) -> CastHook:
        try:
            return self.casts[local_name(name)]
        except KeyError:
            raise UnknownHookError(name) from None

    def custom(self, name: str) -> CustomHook:
        try:
            return self.customs[local_name(name)]
        except KeyError:
            raise UnknownHookError(name) from None

    @classmethod
    def default(cls) -> "HookRegistry":
        """Registry with the hooks used by the built-in ontology."""
        registry = cls()
        registry.register_cast("castString", cast_string)
        registry.register_cast("castNumber", cast_number)
        registry.register_cast("castBoolean", cast_boolean)
        registry.register_cast("castHexadecimal", cast_hexadecimal)
        registry.register_custom("customUrl", custom_url)
        registry.register_custom("customHex", custom_hex)
        registry.register_custom("customEmail", custom_email)
        registry.register_custom("customInt", custom_int)
        registry.register_custom("customTimeStamp", custom_timestamp)
        return registry

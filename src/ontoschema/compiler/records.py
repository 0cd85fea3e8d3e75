"""Compile a type hierarchy into a validation record.

The hierarchy is walked from general to specific by popping its last element.
Each node's constraints are merged into the current record level; when a node
switches to a different base category (a list of text), a child level is
opened and the walk continues there.
"""

import copy
import logging
from typing import Callable

from ..constants import (
    REFERENCE_KEYS,
    TYPE_EMAIL,
    TYPE_HEX,
    TYPE_INTEGER,
    TYPE_SET,
    TYPE_TIMESTAMP,
    TYPE_URL,
)
from ..errors import KeyMustBeTextError, UnrecognizedBaseCategoryError
from ..models import BaseCategory, TypeTermRecord, ValidationRecord
from .merger import merge_interval

logger = logging.getLogger(__name__)

REFERENCE_FIELDS: tuple[str, ...] = ("collection", "instance", "terms", "fields")


def _compile_nothing(current: ValidationRecord, node: TypeTermRecord) -> None:
    pass


def _compile_text(current: ValidationRecord, node: TypeTermRecord) -> None:
    current.length = merge_interval(current.length, node.length)
    if node.regex:
        current.regex.extend(node.regex)

    if node.key == TYPE_URL:
        current.is_url = True
    elif node.key == TYPE_HEX:
        current.is_hex = True
    elif node.key == TYPE_EMAIL:
        current.is_email = True

    _compile_reference(current, node)


def _compile_reference(current: ValidationRecord, node: TypeTermRecord) -> None:
    # References are textual; the most specific node wins
    if node.key in REFERENCE_KEYS:
        current.is_ref = True
    for name in REFERENCE_FIELDS:
        value = getattr(node, name)
        if value is not None:
            setattr(current, name, copy.copy(value))
            current.is_ref = True


def _compile_numeric(current: ValidationRecord, node: TypeTermRecord) -> None:
    current.range = merge_interval(current.range, node.range)
    if node.decimals is not None:
        if current.decimals is None:
            current.decimals = node.decimals
        else:
            current.decimals = min(current.decimals, node.decimals)

    if node.key == TYPE_INTEGER:
        current.is_int = True
    elif node.key == TYPE_TIMESTAMP:
        current.is_stamp = True


def _compile_list(current: ValidationRecord, node: TypeTermRecord) -> None:
    current.size = merge_interval(current.size, node.size)
    if node.key == TYPE_SET:
        current.is_set = True


def _compile_object(current: ValidationRecord, node: TypeTermRecord) -> None:
    if node.key_hierarchy:
        key_record = compile_hierarchy(node.key_hierarchy)
        if key_record.category != BaseCategory.TEXT:
            category = key_record.category.value if key_record.category else None
            raise KeyMustBeTextError(node.id, category)
        current.key_record = key_record

    if node.value_hierarchy:
        current.value_record = compile_hierarchy(node.value_hierarchy)


# Struct contents are validated field by field elsewhere
CATEGORY_COMPILERS: dict[BaseCategory, Callable[[ValidationRecord, TypeTermRecord], None]] = {
    BaseCategory.ANY: _compile_nothing,
    BaseCategory.BOOLEAN: _compile_nothing,
    BaseCategory.TEXT: _compile_text,
    BaseCategory.NUMERIC: _compile_numeric,
    BaseCategory.LIST: _compile_list,
    BaseCategory.STRUCT: _compile_nothing,
    BaseCategory.OBJECT: _compile_object,
}


def _category_of(node: TypeTermRecord) -> BaseCategory:
    try:
        return BaseCategory(node.category)
    except ValueError:
        raise UnrecognizedBaseCategoryError(node.id, node.category) from None


def _append_hooks(current: ValidationRecord, node: TypeTermRecord) -> None:
    # Every ancestor contributes; a hook named twice is kept once, at its first position
    for name in node.cast:
        if name not in current.cast:
            current.cast.append(name)
    for name in node.custom:
        if name not in current.custom:
            current.custom.append(name)


def compile_hierarchy(hierarchy: list[TypeTermRecord]) -> ValidationRecord:
    """Compile a most-specific-first hierarchy into a validation record.

    The list is consumed: it is empty when the function returns, and its nodes
    may have been mutated. Callers must pass a hierarchy they own.

    Args:
        hierarchy: Ordered ancestor chain, most specific first

    Returns:
        ValidationRecord: Fresh record tree

    Raises:
        UnrecognizedBaseCategoryError: If a node's category is not a base category
        KeyMustBeTextError: If an object's key axis does not resolve to text
    """
    record = ValidationRecord()
    current = record

    while hierarchy:
        node = hierarchy.pop()
        category = _category_of(node)

        if current.category is not None and current.category != category:
            current.child = ValidationRecord()
            current = current.child
            logger.debug(f"Category switch at {node.key}: opened {category.value} child level")

        current.category = category
        CATEGORY_COMPILERS[category](current, node)
        _append_hooks(current, node)

    return record

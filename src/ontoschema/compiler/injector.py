"""Overlay descriptor options onto the matching nodes of a type hierarchy.

Three independent axis scans are performed over a most-specific-first
hierarchy: the scalar base node, the outermost list node and the outermost
reference node. An axis that is not found is skipped.
"""

import copy
import logging

from ..constants import REFERENCE_KEYS
from ..models import BaseCategory, DescriptorOptions, TypeTermRecord

logger = logging.getLogger(__name__)

SCALAR_OPTION_FIELDS: tuple[str, ...] = ("length", "regex", "range", "decimals")
LIST_OPTION_FIELDS: tuple[str, ...] = ("size",)
REFERENCE_OPTION_FIELDS: tuple[str, ...] = ("collection", "instance", "terms", "fields")


def _is_list(node: TypeTermRecord) -> bool:
    return node.category == BaseCategory.LIST.value


def _is_reference(node: TypeTermRecord) -> bool:
    return node.key in REFERENCE_KEYS


def _overlay(node: TypeTermRecord, options: DescriptorOptions, fields: tuple[str, ...]) -> list[str]:
    """Copy the option fields that are set onto the node, return their names."""
    applied = []
    for name in fields:
        value = getattr(options, name)
        if value is None:
            continue
        setattr(node, name, copy.copy(value))
        applied.append(name)
    return applied


def find_scalar_node(hierarchy: list[TypeTermRecord]) -> TypeTermRecord | None:
    """Locate the scalar base node.

    This is the last element, unless the hierarchy ends with a list container
    appended for a list-formatted descriptor: then the last non-list node
    scanning from the end.
    """
    for node in reversed(hierarchy):
        if not _is_list(node):
            return node
    return None


def find_list_node(hierarchy: list[TypeTermRecord]) -> TypeTermRecord | None:
    """Locate the outermost list node, scanning from the end."""
    for node in reversed(hierarchy):
        if _is_list(node):
            return node
    return None


def find_reference_node(hierarchy: list[TypeTermRecord]) -> TypeTermRecord | None:
    """Locate the outermost reference node, scanning from the end."""
    for node in reversed(hierarchy):
        if _is_reference(node):
            return node
    return None


def inject_scalar_options(hierarchy: list[TypeTermRecord], options: DescriptorOptions) -> TypeTermRecord | None:
    """Overlay length, regex, range and decimals onto the scalar base node."""
    node = find_scalar_node(hierarchy)
    if node is None:
        return None
    applied = _overlay(node, options, SCALAR_OPTION_FIELDS)
    if applied:
        logger.debug(f"Injected scalar options {applied} into {node.key}")
    return node


def inject_list_options(hierarchy: list[TypeTermRecord], options: DescriptorOptions) -> TypeTermRecord | None:
    """Overlay size onto the outermost list node."""
    node = find_list_node(hierarchy)
    if node is None:
        return None
    applied = _overlay(node, options, LIST_OPTION_FIELDS)
    if applied:
        logger.debug(f"Injected list options {applied} into {node.key}")
    return node


def inject_reference_options(hierarchy: list[TypeTermRecord], options: DescriptorOptions) -> TypeTermRecord | None:
    """Overlay collection, instance and enumeration lists onto the outermost reference node."""
    node = find_reference_node(hierarchy)
    if node is None:
        return None
    applied = _overlay(node, options, REFERENCE_OPTION_FIELDS)
    if applied:
        logger.debug(f"Injected reference options {applied} into {node.key}")
    return node


def inject_options(hierarchy: list[TypeTermRecord], options: DescriptorOptions | dict | None) -> None:
    """Overlay descriptor options onto a hierarchy in place.

    Args:
        hierarchy: Most-specific-first hierarchy, owned by the caller
        options: Descriptor options; None leaves the hierarchy unchanged
    """
    if options is None or not hierarchy:
        return
    if isinstance(options, dict):
        options = DescriptorOptions.model_validate(options)

    inject_scalar_options(hierarchy, options)
    inject_list_options(hierarchy, options)
    inject_reference_options(hierarchy, options)

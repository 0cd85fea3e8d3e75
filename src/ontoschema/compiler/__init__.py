"""Validation record compiler.

Stages, leaves first: interval merging, option injection, record compilation.
`SchemaCompiler` drives them from a type reference or descriptor.
"""

from .driver import SchemaCompiler, registry_from_config
from .injector import (
    inject_list_options,
    inject_options,
    inject_reference_options,
    inject_scalar_options,
)
from .merger import combine_ranges, normalize_interval
from .records import compile_hierarchy

__all__ = [
    "SchemaCompiler",
    "registry_from_config",
    "inject_options",
    "inject_scalar_options",
    "inject_list_options",
    "inject_reference_options",
    "combine_ranges",
    "normalize_interval",
    "compile_hierarchy",
]

"""Compilation driver: resolve, inject, compile and render.

`SchemaCompiler` is the entry point used by the persistence and form layers.
It owns the only I/O of the pipeline (the provider call); every later stage is
a pure function over private copies of the hierarchy.
"""

import logging
from typing import Any

from pydantic import ValidationError

from ..config import OntoschemaConfig, create_default_config
from ..constants import FORMAT_CONTAINERS, FORMAT_SCALAR, TYPE_OBJECT
from ..errors import InvalidTermRecordError
from ..models import DescriptorOptions, TypeTermRecord, ValidationRecord
from ..ontology import TermRegistry, TypeHierarchyProvider
from ..rules.models import RenderedRule
from ..rules.renderer import render_record
from .injector import inject_options
from .records import compile_hierarchy

logger = logging.getLogger(__name__)

TypeSource = str | TypeTermRecord | dict | list


def registry_from_config(config: OntoschemaConfig) -> TermRegistry:
    """Build the term registry described by the ontology section."""
    ontology = config.ontology
    if ontology.terms_file:
        return TermRegistry.from_file(
            ontology.terms_file,
            include_builtin=ontology.use_builtin,
            max_depth=ontology.max_depth,
        )
    if ontology.use_builtin:
        return TermRegistry.builtin(max_depth=ontology.max_depth)
    return TermRegistry(max_depth=ontology.max_depth)


def _raw_record(data: TypeTermRecord | dict) -> TypeTermRecord:
    if isinstance(data, TypeTermRecord):
        return data.model_copy(deep=True)
    try:
        return TypeTermRecord.model_validate(data)
    except ValidationError as e:
        reference = data.get("_key", data.get("key")) if isinstance(data, dict) else None
        raise InvalidTermRecordError(
            f"Raw type record needs identifier, key and category: {e}", reference
        ) from e


def _as_descriptor(descriptor: DescriptorOptions | dict) -> DescriptorOptions:
    if isinstance(descriptor, DescriptorOptions):
        return descriptor
    try:
        return DescriptorOptions.model_validate(descriptor)
    except ValidationError as e:
        reference = descriptor.get("type") if isinstance(descriptor, dict) else None
        raise InvalidTermRecordError(f"Invalid descriptor options: {e}", reference) from e


class SchemaCompiler:
    """Compiles type references and descriptors into validation records and rules."""

    def __init__(self, provider: TypeHierarchyProvider | None = None,
                 config: OntoschemaConfig | None = None):
        self.config = config or create_default_config()
        self.provider = provider or registry_from_config(self.config)

    def hierarchy_for(self, source: TypeSource) -> list[TypeTermRecord]:
        """Return an owned hierarchy for a type reference or raw record(s).

        Raw records bypass the provider; they are copied so the caller's
        objects are never consumed.
        """
        if isinstance(source, str):
            return self.provider.resolve_hierarchy(source)
        if isinstance(source, list):
            return [_raw_record(item) for item in source]
        return [_raw_record(source)]

    def compile_type(self, source: TypeSource, options: DescriptorOptions | dict | None = None) -> Any:
        """Compile a type into a validation record.

        Args:
            source: Type `_key`/`_id`, a raw record, a hand-built hierarchy
                    (list of records) or a list of references (batch)
            options: Optional per-field overrides

        Returns:
            ValidationRecord, or a list of them for a batch of references
        """
        if isinstance(source, list) and source and all(isinstance(item, str) for item in source):
            return [self.compile_type(item, options) for item in source]

        hierarchy = self.hierarchy_for(source)
        if options is not None:
            inject_options(hierarchy, options)

        reference = source if isinstance(source, str) else hierarchy[0].key if hierarchy else None
        logger.info(f"Compiling type {reference} ({len(hierarchy)} levels)")
        return compile_hierarchy(hierarchy)

    def _resolve_axis(self, options: DescriptorOptions | None) -> list[TypeTermRecord] | None:
        if options is None or options.type is None:
            return None
        hierarchy = self.provider.resolve_hierarchy(options.type)
        inject_options(hierarchy, options)
        return hierarchy

    def compile_descriptor(self, descriptor: DescriptorOptions | dict | list) -> Any:
        """Compile a descriptor (field definition) into a validation record.

        The descriptor's type hierarchy is extended with the list or set
        container named by its format, object key/value axes are resolved and
        embedded, and the descriptor's own options are injected.

        Returns:
            ValidationRecord, or a list of them for a list of descriptors
        """
        if isinstance(descriptor, list):
            return [self.compile_descriptor(item) for item in descriptor]

        descriptor = _as_descriptor(descriptor)
        if descriptor.type is None:
            raise InvalidTermRecordError("Descriptor has no data type")

        fmt = descriptor.format or FORMAT_SCALAR
        if fmt != FORMAT_SCALAR and fmt not in FORMAT_CONTAINERS:
            raise InvalidTermRecordError(f"Unknown descriptor format '{fmt}'", descriptor.type)

        types = self.provider.resolve_hierarchy(descriptor.type)

        # Key/value axes apply to the object type itself, not to derived types
        is_object = types[0].key == TYPE_OBJECT
        if is_object:
            types[0].key_hierarchy = self._resolve_axis(descriptor.key)
            types[0].value_hierarchy = self._resolve_axis(descriptor.value)

        container = FORMAT_CONTAINERS.get(fmt)
        if container is not None:
            types.extend(self.provider.resolve_hierarchy(container))

        if not is_object:
            inject_options(types, descriptor)

        logger.info(f"Compiling descriptor of type {descriptor.type} as {fmt} ({len(types)} levels)")
        return compile_hierarchy(types)

    def render(self, record: ValidationRecord) -> RenderedRule:
        """Lower a validation record into a rendered rule."""
        return render_record(record, exclusive_adjust=self.config.render.exclusive_adjust)

    def rule_for_type(self, source: TypeSource, options: DescriptorOptions | dict | None = None) -> Any:
        """Compile and render a type."""
        result = self.compile_type(source, options)
        if isinstance(result, list):
            return [self.render(record) for record in result]
        return self.render(result)

    def rule_for_descriptor(self, descriptor: DescriptorOptions | dict | list) -> Any:
        """Compile and render a descriptor."""
        result = self.compile_descriptor(descriptor)
        if isinstance(result, list):
            return [self.render(record) for record in result]
        return self.render(result)

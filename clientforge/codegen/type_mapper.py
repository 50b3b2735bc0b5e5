"""Mapping of schema nodes to type descriptors.

This module provides the SchemaTypeMapper class that converts OpenAPI schema
nodes into ``TypeDescriptor`` values and registers a ``Record`` for every
object component schema it reaches.
"""

import logging

from clientforge.codegen.schema_resolver import ResolvedSchema, SchemaResolver
from clientforge.codegen.type_registry import TypeRegistry
from clientforge.codegen.types import (
    Named,
    Primitive,
    PrimitiveKind,
    Record,
    RecordField,
    Sequence,
    TypeDescriptor,
)
from clientforge.codegen.utils import pointer_child, sanitize_identifier
from clientforge.exceptions import SchemaResolutionError, UnsupportedConstructError
from clientforge.openapi.v3 import Reference, Schema, Type

logger = logging.getLogger(__name__)

__all__ = ['SchemaTypeMapper']

NUMBER_FORMATS = {
    'int32': PrimitiveKind.INT32,
    'int64': PrimitiveKind.INT64,
    'float': PrimitiveKind.FLOAT32,
    'double': PrimitiveKind.FLOAT64,
}

# Used for integer and number schemas without a recognised format.
DEFAULT_NUMBER_KIND = PrimitiveKind.FLOAT64

_COMPOSITION_KEYWORDS = (
    ('allOf', 'allOf'),
    ('oneOf', 'oneOf'),
    ('anyOf', 'anyOf'),
    ('not_', 'not'),
)


class SchemaTypeMapper:
    """Converts schema nodes to type descriptors.

    Object component schemas become records registered under an identifier
    derived from the component name. Non-object components are mapped
    transparently to the type of their target, so an alias never becomes a
    named type of its own.

    Example:
        >>> mapper = SchemaTypeMapper(resolver, registry)
        >>> mapper.map(Reference(ref='#/components/schemas/Pet'), location)
        Named(identifier='Pet')
    """

    def __init__(self, resolver: SchemaResolver, registry: TypeRegistry):
        self.resolver = resolver
        self.registry = registry
        self._aliases_resolving: set[str] = set()

    def map(self, schema: Schema | Reference, location: str) -> TypeDescriptor:
        """Map a schema node to a type descriptor.

        Args:
            schema: The schema node or a reference to a component schema.
            location: JSON pointer of the node.

        Returns:
            The type descriptor of the node.

        Raises:
            SchemaResolutionError: For undefined references and shapes without
                a named representation (inline objects, composition,
                additional properties).
            UnsupportedConstructError: For enums, null types and untyped schemas.
        """
        if not isinstance(schema, Reference):
            return self._map_inline(schema, location)

        resolved = self.resolver.resolve_schema(schema, location)
        if self._is_object(resolved.schema, resolved.location):
            return self._map_record(resolved)

        # A non-object component is an alias for its target type
        if resolved.location in self._aliases_resolving:
            raise SchemaResolutionError(
                resolved.location, 'recursive schema without an object to name'
            )
        self._aliases_resolving.add(resolved.location)
        try:
            return self._map_inline(resolved.schema, resolved.location)
        finally:
            self._aliases_resolving.discard(resolved.location)

    def map_component(self, name: str) -> TypeDescriptor:
        """Map the component schema ``name`` as if it were referenced."""
        return self.map(
            Reference(ref=pointer_child('#/components/schemas', name)),
            pointer_child('#/components/schemas', name),
        )

    def _schema_type(self, schema: Schema, location: str) -> Type | None:
        schema_type = schema.type
        if isinstance(schema_type, list):
            if Type.null in schema_type:
                raise UnsupportedConstructError(
                    'nullable type', location, 'Declare the property as optional instead.'
                )
            if len(schema_type) != 1:
                raise UnsupportedConstructError(
                    f'multiple types {[t.value for t in schema_type]}', location
                )
            schema_type = schema_type[0]
        return schema_type

    def _is_object(self, schema: Schema, location: str) -> bool:
        schema_type = self._schema_type(schema, location)
        if schema_type is None:
            return schema.properties is not None
        return schema_type == Type.object

    def _check_supported(self, schema: Schema, location: str) -> None:
        for attribute, keyword in _COMPOSITION_KEYWORDS:
            if getattr(schema, attribute) is not None:
                raise SchemaResolutionError(
                    pointer_child(location, keyword), f"'{keyword}' composition"
                )
        if schema.nullable:
            raise UnsupportedConstructError(
                'nullable schema',
                pointer_child(location, 'nullable'),
                'Declare the property as optional instead.',
            )

    def _map_inline(self, schema: Schema, location: str) -> TypeDescriptor:
        self._check_supported(schema, location)
        schema_type = self._schema_type(schema, location)

        if schema_type is None:
            if schema.properties is not None:
                raise SchemaResolutionError(location, 'anonymous inline object schema')
            raise UnsupportedConstructError('schema without a type', location)

        if schema_type == Type.null:
            raise UnsupportedConstructError('null type', location)

        if schema_type == Type.object:
            raise SchemaResolutionError(
                location,
                'anonymous inline object schema',
            )

        if schema.enum is not None:
            raise UnsupportedConstructError(
                f'enum-constrained {schema_type.value}', pointer_child(location, 'enum')
            )

        if schema_type == Type.array:
            if schema.items is None:
                raise SchemaResolutionError(location, "array without 'items'")
            return Sequence(self.map(schema.items, pointer_child(location, 'items')))

        if schema_type in (Type.integer, Type.number):
            kind = NUMBER_FORMATS.get(schema.format)
            if kind is None:
                if schema.format is not None:
                    logger.debug(
                        f"Unrecognised {schema_type.value} format '{schema.format}' "
                        f'at {location}, using {DEFAULT_NUMBER_KIND.value}'
                    )
                kind = DEFAULT_NUMBER_KIND
            return Primitive(kind)

        if schema_type == Type.boolean:
            return Primitive(PrimitiveKind.BOOLEAN)

        return Primitive(PrimitiveKind.TEXT)

    def _map_record(self, resolved: ResolvedSchema) -> Named:
        identifier = sanitize_identifier(resolved.name)
        source = resolved.location

        if identifier in self.registry:
            # Either done, or resolving further up the stack (a cycle)
            self.registry.claim(identifier, source)
            return Named(identifier)

        schema = resolved.schema
        self._check_supported(schema, source)
        additional = schema.additionalProperties
        if additional is not None and additional is not False:
            raise SchemaResolutionError(
                pointer_child(source, 'additionalProperties'),
                'additionalProperties map',
            )

        self.registry.begin(identifier, source)
        logger.debug(f"Resolving record '{identifier}' from {source}")

        required = set(schema.required or [])
        fields = []
        for name, property_schema in (schema.properties or {}).items():
            fields.append(
                RecordField(
                    name=name,
                    type=self.map(
                        property_schema, pointer_child(source, 'properties', name)
                    ),
                    required=name in required,
                )
            )

        self.registry.complete(Record(identifier, tuple(fields)), source)
        return Named(identifier)

"""Schema resolution utilities for OpenAPI documents.

This module provides the SchemaResolver class for dereferencing local $ref
references to component schemas, responses, parameters and request bodies.
"""

from clientforge.codegen.utils import json_pointer
from clientforge.exceptions import SchemaReferenceError
from clientforge.openapi.v3 import (
    OpenAPI,
    Parameter,
    Reference,
    RequestBody,
    Response,
    Schema,
)

__all__ = ['ResolvedSchema', 'SchemaResolver']

_COMPONENT_SECTIONS = ('schemas', 'responses', 'parameters', 'requestBodies')

# Bound on chains of component aliases (a component that is only a $ref).
_MAX_ALIAS_DEPTH = 64


class ResolvedSchema:
    """A schema together with the component it was found under.

    Attributes:
        schema: The dereferenced schema node.
        name: The component name when the schema was reached via a reference.
        location: JSON pointer of the schema node.
    """

    __slots__ = ('schema', 'name', 'location')

    def __init__(self, schema: Schema, name: str | None, location: str):
        self.schema = schema
        self.name = name
        self.location = location


class SchemaResolver:
    """Resolves $ref references and manages component lookups in OpenAPI documents.

    Only local references of the form ``#/components/{section}/{name}`` are
    supported. Anything else raises SchemaReferenceError.

    Example:
        >>> resolver = SchemaResolver(openapi_doc)
        >>> resolved = resolver.resolve_schema(ref)
        >>> all_schemas = resolver.get_all_schemas()
    """

    def __init__(self, openapi: OpenAPI):
        """Initialize the schema resolver.

        Args:
            openapi: The OpenAPI document to resolve references from.
        """
        self.openapi = openapi

    def parse_reference(self, ref: str, location: str | None = None) -> tuple[str, str]:
        """Split a local component reference into its section and name.

        Args:
            ref: The $ref string (e.g., '#/components/schemas/Pet').
            location: Location of the node holding the reference.

        Returns:
            Tuple of (section, component name).

        Raises:
            SchemaReferenceError: If the reference is not a local component reference.
        """
        if ref.startswith(('http://', 'https://')):
            raise SchemaReferenceError(
                ref, 'external URL references are not supported', location
            )
        if not ref.startswith('#/'):
            raise SchemaReferenceError(
                ref, 'only local references are supported', location
            )

        parts = [
            part.replace('~1', '/').replace('~0', '~') for part in ref[2:].split('/')
        ]
        if len(parts) != 3 or parts[0] != 'components' or parts[1] not in _COMPONENT_SECTIONS:
            raise SchemaReferenceError(
                ref, 'unsupported reference path', location
            )
        return parts[1], parts[2]

    def _component(self, section: str, ref: str, location: str | None):
        expected_section, name = self.parse_reference(ref, location)
        if expected_section != section:
            raise SchemaReferenceError(
                ref, f"expected a reference into '#/components/{section}/'", location
            )

        components = self.openapi.components
        entries = getattr(components, section, None) if components else None
        if not entries or name not in entries:
            raise SchemaReferenceError(ref, f"component '{name}' not found", location)
        return name, entries[name]

    def _follow(self, section: str, node, location: str):
        name = None
        seen: set[str] = set()
        while isinstance(node, Reference):
            if node.ref in seen or len(seen) >= _MAX_ALIAS_DEPTH:
                raise SchemaReferenceError(node.ref, 'circular alias chain', location)
            seen.add(node.ref)
            name, node = self._component(section, node.ref, location)
            location = json_pointer('components', section, name)
        return name, node, location

    def resolve_schema(
        self, schema: Schema | Reference, location: str
    ) -> ResolvedSchema:
        """Dereference a schema, following chains of component aliases.

        Args:
            schema: A Schema or a Reference to one.
            location: JSON pointer of the node holding ``schema``.

        Returns:
            The dereferenced schema; ``name`` is the last component name on
            the reference chain, or None for an inline schema.

        Raises:
            SchemaReferenceError: If a reference cannot be resolved.
        """
        name, schema, location = self._follow('schemas', schema, location)
        return ResolvedSchema(schema, name, location)

    def resolve_response(
        self, response: Response | Reference, location: str
    ) -> tuple[Response, str]:
        """Dereference a response, returning it with its own location."""
        _, response, location = self._follow('responses', response, location)
        return response, location

    def resolve_parameter(
        self, parameter: Parameter | Reference, location: str
    ) -> tuple[Parameter, str]:
        """Dereference a parameter, returning it with its own location."""
        _, parameter, location = self._follow('parameters', parameter, location)
        return parameter, location

    def resolve_request_body(
        self, body: RequestBody | Reference, location: str
    ) -> tuple[RequestBody, str]:
        """Dereference a request body, returning it with its own location."""
        _, body, location = self._follow('requestBodies', body, location)
        return body, location

    def get_all_schemas(self) -> dict[str, Schema | Reference]:
        """Get all schemas defined in the components/schemas section, in declaration order."""
        if not self.openapi.components or not self.openapi.components.schemas:
            return {}
        return dict(self.openapi.components.schemas)

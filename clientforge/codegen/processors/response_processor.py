"""Response processing utilities for OpenAPI operations.

This module provides the two rules that shape what an operation returns:

- ``MediaTypeRule`` turns a content map into a type descriptor, synthesizing
  a sum type when more than one media type is declared
- ``ResponseProcessor`` partitions the declared responses of an operation
  into success and error and synthesizes the operation's result types
"""

import dataclasses
import logging
import re
from collections.abc import Mapping

from clientforge.codegen.naming import (
    content_type_name,
    media_fragment,
    operation_type_fragment,
    status_fragment,
)
from clientforge.codegen.schema_resolver import SchemaResolver
from clientforge.codegen.type_mapper import SchemaTypeMapper
from clientforge.codegen.type_registry import TypeRegistry
from clientforge.codegen.types import (
    UNIT,
    DeclaredResponse,
    Opaque,
    OpaqueKind,
    SumType,
    TypeDescriptor,
    Variant,
)
from clientforge.codegen.utils import pointer_child
from clientforge.exceptions import (
    NamingCollisionError,
    SchemaResolutionError,
    UnsupportedConstructError,
)
from clientforge.openapi.v3 import MediaType, Operation
from clientforge.runtime import OTHER_ERROR_VARIANT, UNKNOWN_RESPONSE_VARIANT

logger = logging.getLogger(__name__)

__all__ = ['MediaTypeRule', 'ResponseProcessor', 'ResponseTaxonomy']

_STATUS_RANGE = re.compile(r'^[1-5]XX$', re.IGNORECASE)


class MediaTypeRule:
    """Maps content maps to type descriptors.

    An absent or empty map is ``Unit``; a single entry is its schema's type;
    several entries become a sum type with one variant per media type, in the
    order the map declares them.
    """

    def __init__(self, mapper: SchemaTypeMapper, registry: TypeRegistry):
        self.mapper = mapper
        self.registry = registry

    def content_type(
        self,
        content: Mapping[str, MediaType] | None,
        name: str,
        location: str,
    ) -> TypeDescriptor:
        """Map a content map to a type descriptor.

        Args:
            content: The media type to media object map, possibly absent.
            name: Identifier of the sum type synthesized for several entries.
            location: JSON pointer of the node holding the content map.

        Raises:
            NamingCollisionError: If two media types derive the same fragment.
        """
        if not content:
            return UNIT

        content_location = pointer_child(location, 'content')
        variants: list[Variant] = []
        sources: dict[str, str] = {}
        for media_type, media in content.items():
            entry_location = pointer_child(content_location, media_type)
            if media.schema_ is None:
                payload = UNIT
            else:
                payload = self.mapper.map(
                    media.schema_, pointer_child(entry_location, 'schema')
                )

            fragment = media_fragment(media_type)
            if fragment in sources:
                raise NamingCollisionError(
                    f'{name}.{fragment}', sources[fragment], entry_location
                )
            sources[fragment] = entry_location
            variants.append(Variant(fragment, payload))

        if len(variants) == 1:
            return variants[0].payload

        return self.registry.register(SumType(name, tuple(variants)), content_location)


@dataclasses.dataclass(frozen=True)
class ResponseTaxonomy:
    """The result shape of one operation.

    Attributes:
        success: Type returned when a declared 2xx response is received.
        error: The operation's error sum type.
        responses: Every declared response in declaration order.
    """

    success: TypeDescriptor
    error: TypeDescriptor
    responses: tuple[DeclaredResponse, ...]


class ResponseProcessor:
    """Builds the success and error types of OpenAPI operations.

    Success responses are the declared 2xx statuses; every other declared
    status is an error. Zero success responses give ``Unit``, a single one
    is returned unwrapped, and several are wrapped in a
    ``{Operation}Success`` sum type. The ``{Operation}Error`` sum type is
    always synthesized: one variant per declared error response followed by
    the fixed ``UnknownResponse`` and ``OtherError`` variants.

    Example:
        >>> processor = ResponseProcessor(resolver, media_rule, registry)
        >>> taxonomy = processor.build('/pet', 'put', operation, location)
        >>> taxonomy.error
        Named(identifier='PutPetError')
    """

    def __init__(
        self,
        resolver: SchemaResolver,
        media_rule: MediaTypeRule,
        registry: TypeRegistry,
    ):
        self.resolver = resolver
        self.media_rule = media_rule
        self.registry = registry

    def parse_status_code(self, key: str, location: str) -> int:
        """Parse a response key into a status code.

        Raises:
            UnsupportedConstructError: For ``default`` and range keys.
            SchemaResolutionError: For anything else that is not a status code.
        """
        if key == 'default':
            raise UnsupportedConstructError(
                "'default' response",
                location,
                'Declare the status codes the operation returns explicitly.',
            )
        if _STATUS_RANGE.match(key):
            raise UnsupportedConstructError(
                f"status code range '{key}'",
                location,
                'Declare the status codes the operation returns explicitly.',
            )
        if len(key) != 3 or not key.isdigit() or not 100 <= int(key) <= 599:
            raise SchemaResolutionError(location, f"invalid status code '{key}'")
        return int(key)

    def build(
        self, path: str, method: str, operation: Operation, location: str
    ) -> ResponseTaxonomy:
        """Synthesize the success and error types of an operation.

        Args:
            path: The path template of the operation.
            method: The HTTP verb of the operation.
            operation: The operation object.
            location: JSON pointer of the operation.

        Returns:
            The operation's ResponseTaxonomy.
        """
        type_fragment = operation_type_fragment(path, method)
        responses_location = pointer_child(location, 'responses')

        success: list[Variant] = []
        errors: list[Variant] = []
        declared: list[DeclaredResponse] = []

        for key, response in operation.responses.items():
            response_location = pointer_child(responses_location, key)
            status_code = self.parse_status_code(key, response_location)
            response, resolved_location = self.resolver.resolve_response(
                response, response_location
            )

            fragment = status_fragment(status_code)
            payload = self.media_rule.content_type(
                response.content,
                content_type_name(type_fragment, fragment),
                resolved_location,
            )

            is_success = 200 <= status_code < 300
            (success if is_success else errors).append(Variant(fragment, payload))
            declared.append(DeclaredResponse(status_code, fragment, is_success))

        if not success:
            success_type = UNIT
        elif len(success) == 1:
            success_type = success[0].payload
        else:
            success_type = self.registry.register(
                SumType(f'{type_fragment}Success', tuple(success)),
                responses_location,
            )

        error_type = self.registry.register(
            SumType(
                f'{type_fragment}Error',
                tuple(errors)
                + (
                    Variant(UNKNOWN_RESPONSE_VARIANT, Opaque(OpaqueKind.RAW_RESPONSE)),
                    Variant(OTHER_ERROR_VARIANT, Opaque(OpaqueKind.ERROR)),
                ),
            ),
            responses_location,
        )

        logger.debug(
            f'{method.upper()} {path}: {len(success)} success and '
            f'{len(errors)} error responses'
        )
        return ResponseTaxonomy(success_type, error_type, tuple(declared))

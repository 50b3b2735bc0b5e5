"""Parameter processing utilities for OpenAPI operations.

This module provides the ParameterProcessor class that turns the parameters
of a path item and of one of its operations into parameter descriptors.
"""

import logging

from clientforge.codegen.naming import (
    content_type_name,
    operation_type_fragment,
    parameter_name,
    pascal_case,
    uncollide,
)
from clientforge.codegen.processors.response_processor import MediaTypeRule
from clientforge.codegen.schema_resolver import SchemaResolver
from clientforge.codegen.type_mapper import SchemaTypeMapper
from clientforge.codegen.types import ParameterDescriptor
from clientforge.codegen.utils import pointer_child
from clientforge.exceptions import SchemaResolutionError
from clientforge.openapi.v3 import Operation, Parameter, PathItem

logger = logging.getLogger(__name__)

__all__ = ['ParameterProcessor']


class ParameterProcessor:
    """Handles extraction of OpenAPI parameters.

    Path-item parameters come first, except those an operation parameter with
    the same name and location overrides; the operation's own parameters
    follow in declaration order. Python names that collide within one
    operation get ``_`` appended until they are unique.

    Example:
        >>> processor = ParameterProcessor(resolver, mapper, media_rule)
        >>> parameters = processor.extract('/pet/{petId}', 'get', path_item, operation)
    """

    def __init__(
        self,
        resolver: SchemaResolver,
        mapper: SchemaTypeMapper,
        media_rule: MediaTypeRule,
    ):
        """Initialize the parameter processor.

        Args:
            resolver: Resolver for parameter references.
            mapper: Mapper for parameter schemas.
            media_rule: Rule for parameters declaring ``content``.
        """
        self.resolver = resolver
        self.mapper = mapper
        self.media_rule = media_rule

    def _resolve_all(self, parameters, location: str) -> list[tuple[Parameter, str]]:
        resolved = []
        for index, parameter in enumerate(parameters or []):
            resolved.append(
                self.resolver.resolve_parameter(
                    parameter, pointer_child(location, 'parameters', index)
                )
            )
        return resolved

    def extract(
        self, path: str, method: str, path_item: PathItem, operation: Operation
    ) -> tuple[ParameterDescriptor, ...]:
        """Extract the parameters of an operation.

        Args:
            path: The path template.
            method: The HTTP verb.
            path_item: The path item holding the operation.
            operation: The operation object.

        Returns:
            Parameter descriptors in call order.
        """
        path_location = pointer_child('#/paths', path)
        operation_location = pointer_child(path_location, method)

        own = self._resolve_all(operation.parameters, operation_location)
        overridden = {(p.name, p.in_) for p, _ in own}
        inherited = [
            (p, location)
            for p, location in self._resolve_all(path_item.parameters, path_location)
            if (p.name, p.in_) not in overridden
        ]

        type_fragment = operation_type_fragment(path, method)
        descriptors: list[ParameterDescriptor] = []
        taken: set[str] = {'self'}
        for parameter, location in inherited + own:
            name = uncollide(parameter_name(parameter.name), taken)
            taken.add(name)
            descriptors.append(
                ParameterDescriptor(
                    name=name,
                    type=self._parameter_type(parameter, location, type_fragment),
                    original_name=parameter.name,
                    location=parameter.in_,
                    required=bool(parameter.required) or parameter.in_ == 'path',
                )
            )
        return tuple(descriptors)

    def _parameter_type(self, parameter: Parameter, location: str, type_fragment: str):
        if parameter.schema_ is not None:
            return self.mapper.map(parameter.schema_, pointer_child(location, 'schema'))
        if parameter.content is not None:
            return self.media_rule.content_type(
                parameter.content,
                content_type_name(
                    type_fragment, f'{pascal_case(parameter.name)}Param'
                ),
                location,
            )
        raise SchemaResolutionError(
            location, f"parameter '{parameter.name}' has neither 'schema' nor 'content'"
        )

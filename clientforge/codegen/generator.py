"""Assembly of a generated module from an OpenAPI document."""

import logging

from clientforge.codegen.naming import HTTP_METHODS
from clientforge.codegen.operations import OperationSynthesizer
from clientforge.codegen.processors import (
    MediaTypeRule,
    ParameterProcessor,
    ResponseProcessor,
)
from clientforge.codegen.schema_resolver import SchemaResolver
from clientforge.codegen.type_mapper import SchemaTypeMapper
from clientforge.codegen.type_registry import GeneratedModule, TypeRegistry
from clientforge.codegen.utils import pointer_child
from clientforge.openapi.v3 import OpenAPI

logger = logging.getLogger(__name__)

__all__ = ['ModuleAssembler', 'assemble']


class ModuleAssembler:
    """Builds the GeneratedModule of one document.

    Component schemas are mapped first in declaration order, so components
    nothing references are generated as well. Operations follow, path by
    path in declaration order and, within a path, in the fixed verb order
    of ``HTTP_METHODS``. A fresh registry is used for every run.

    Example:
        >>> module = ModuleAssembler(openapi).assemble()
        >>> [op.identifier for op in module.operations]
        ['pet_put', 'pet_post']
    """

    def __init__(self, openapi: OpenAPI):
        self.openapi = openapi
        self.registry = TypeRegistry()
        self.resolver = SchemaResolver(openapi)
        self.mapper = SchemaTypeMapper(self.resolver, self.registry)
        media_rule = MediaTypeRule(self.mapper, self.registry)
        self.synthesizer = OperationSynthesizer(
            self.resolver,
            ParameterProcessor(self.resolver, self.mapper, media_rule),
            ResponseProcessor(self.resolver, media_rule, self.registry),
        )

    def assemble(self) -> GeneratedModule:
        """Map every component schema and operation and seal the result.

        Raises:
            SchemaResolutionError: For schemas that cannot be mapped and for
                references to undefined types.
            NamingCollisionError: If two entities derive the same identifier.
            UnsupportedConstructError: For constructs that are not implemented.
        """
        for name in self.resolver.get_all_schemas():
            self.mapper.map_component(name)

        for path, path_item in (self.openapi.paths or {}).items():
            for method in HTTP_METHODS:
                operation = getattr(path_item, method)
                if operation is None:
                    continue
                descriptor = self.synthesizer.synthesize(
                    path, method, path_item, operation
                )
                self.registry.add_operation(
                    descriptor, pointer_child('#/paths', path, method)
                )

        return self.registry.seal(title=self.openapi.info.title)


def assemble(openapi: OpenAPI) -> GeneratedModule:
    """Assemble the GeneratedModule of ``openapi``."""
    return ModuleAssembler(openapi).assemble()

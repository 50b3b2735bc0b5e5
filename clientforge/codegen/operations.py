"""Synthesis of client operation descriptors.

One operation descriptor is produced per path and HTTP verb. Its identifier,
parameters and result types are each derived from that operation alone.
"""

import logging

from clientforge.codegen.naming import operation_fragment
from clientforge.codegen.processors import ParameterProcessor, ResponseProcessor
from clientforge.codegen.schema_resolver import SchemaResolver
from clientforge.codegen.types import OperationDescriptor
from clientforge.codegen.utils import pointer_child
from clientforge.openapi.v3 import Operation, PathItem

logger = logging.getLogger(__name__)

__all__ = ['OperationSynthesizer']


class OperationSynthesizer:
    """Assembles one OperationDescriptor per path and verb.

    Request bodies are not part of the generated signature; an operation
    declaring one is still generated and the body is reported at debug level.
    """

    def __init__(
        self,
        resolver: SchemaResolver,
        parameters: ParameterProcessor,
        responses: ResponseProcessor,
    ):
        self.resolver = resolver
        self.parameters = parameters
        self.responses = responses

    def synthesize(
        self, path: str, method: str, path_item: PathItem, operation: Operation
    ) -> OperationDescriptor:
        """Build the descriptor of one operation.

        Args:
            path: The path template (e.g. '/pet/{petId}').
            method: The lower-case HTTP verb.
            path_item: The path item holding the operation.
            operation: The operation object.

        Returns:
            The operation descriptor.
        """
        location = pointer_child('#/paths', path, method)
        identifier = operation_fragment(path, method)

        if operation.requestBody is not None:
            body, body_location = self.resolver.resolve_request_body(
                operation.requestBody, pointer_child(location, 'requestBody')
            )
            logger.debug(
                f"Request body of '{identifier}' at {body_location} is not mapped "
                f'({", ".join(body.content) or "no content"})'
            )

        parameters = self.parameters.extract(path, method, path_item, operation)
        taxonomy = self.responses.build(path, method, operation, location)

        logger.debug(
            f"Synthesized '{identifier}' with {len(parameters)} parameters"
        )
        return OperationDescriptor(
            identifier=identifier,
            parameters=parameters,
            success=taxonomy.success,
            error=taxonomy.error,
            method=method,
            path=path,
            responses=taxonomy.responses,
            summary=operation.summary,
        )

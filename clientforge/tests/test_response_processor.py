"""Tests for response processing and the media-type rule."""

import pytest

from clientforge.codegen.processors import (
    MediaTypeRule,
    ResponseProcessor,
    ResponseTaxonomy,
)
from clientforge.codegen.schema_loader import SchemaLoader
from clientforge.codegen.schema_resolver import SchemaResolver
from clientforge.codegen.type_mapper import SchemaTypeMapper
from clientforge.codegen.type_registry import TypeRegistry
from clientforge.codegen.types import (
    UNIT,
    DeclaredResponse,
    Named,
    Opaque,
    OpaqueKind,
    Primitive,
    PrimitiveKind,
    Sequence,
    Variant,
)
from clientforge.codegen.utils import json_pointer
from clientforge.exceptions import (
    NamingCollisionError,
    SchemaResolutionError,
    UnsupportedConstructError,
)

from .fixtures import PETSTORE_SPEC, RESPONSES_SPEC, SIMPLE_API_SPEC, make_spec

FIXED_ERRORS = (
    Variant('UnknownResponse', Opaque(OpaqueKind.RAW_RESPONSE)),
    Variant('OtherError', Opaque(OpaqueKind.ERROR)),
)


class _Built:
    def __init__(self, taxonomy: ResponseTaxonomy, registry: TypeRegistry):
        self.taxonomy = taxonomy
        self.registry = registry

    def definition(self, descriptor):
        assert isinstance(descriptor, Named)
        return self.registry.get_type(descriptor.identifier)


def _processor(spec: dict) -> tuple[ResponseProcessor, SchemaResolver]:
    openapi = SchemaLoader().load_from_dict(spec)
    resolver = SchemaResolver(openapi)
    registry = TypeRegistry()
    mapper = SchemaTypeMapper(resolver, registry)
    return ResponseProcessor(resolver, MediaTypeRule(mapper, registry), registry), resolver


def _build(spec: dict, path: str, method: str) -> _Built:
    processor, resolver = _processor(spec)
    operation = getattr(resolver.openapi.paths[path], method)
    taxonomy = processor.build(
        path, method, operation, json_pointer('paths', path, method)
    )
    return _Built(taxonomy, processor.registry)


def _single_operation(responses: dict, schemas: dict | None = None) -> dict:
    return make_spec(
        paths={'/things': {'get': {'responses': responses}}}, schemas=schemas
    )


class TestSuccessMultiplicity:
    """Tests for the shape of the success type."""

    def test_single_success_is_unwrapped(self):
        """A single success response returns its payload type directly."""
        built = _build(PETSTORE_SPEC, '/pet', 'post')
        assert built.taxonomy.success == Named('Pet')
        assert not built.registry.has_type('PostPetSuccess')

    def test_single_success_array(self):
        built = _build(PETSTORE_SPEC, '/pet/findByStatus', 'get')
        assert built.taxonomy.success == Sequence(Named('Pet'))

    def test_no_success_is_unit(self):
        built = _build(SIMPLE_API_SPEC, '/foo/bar', 'get')
        assert built.taxonomy.success == UNIT

    def test_success_without_content_is_unit(self):
        built = _build(_single_operation({'200': {'description': 'OK'}}), '/things', 'get')
        assert built.taxonomy.success == UNIT

    def test_success_with_empty_content_is_unit(self):
        built = _build(
            _single_operation({'200': {'description': 'OK', 'content': {}}}),
            '/things',
            'get',
        )
        assert built.taxonomy.success == UNIT

    def test_several_successes_are_a_sum(self):
        """Several success responses are wrapped in a Success sum type."""
        built = _build(RESPONSES_SPEC, '/jobs', 'post')

        assert built.taxonomy.success == Named('PostJobsSuccess')
        success = built.definition(built.taxonomy.success)
        assert success.variants == (
            Variant('Ok200', Named('Job')),
            Variant('Accepted202', UNIT),
        )


class TestErrorType:
    """Tests for the error sum type."""

    def test_put_pet(self):
        """Declared errors come first, followed by the fixed variants."""
        built = _build(PETSTORE_SPEC, '/pet', 'put')

        assert built.taxonomy.error == Named('PutPetError')
        error = built.definition(built.taxonomy.error)
        assert error.variants == (
            Variant('BadRequest400', UNIT),
            Variant('NotFound404', UNIT),
            Variant('MethodNotAllowed405', UNIT),
            *FIXED_ERRORS,
        )

    def test_error_type_without_declared_errors(self):
        """The error type exists even when no error response is declared."""
        built = _build(
            _single_operation({'204': {'description': 'No content'}}), '/things', 'get'
        )
        error = built.definition(built.taxonomy.error)
        assert error.identifier == 'GetThingsError'
        assert error.variants == FIXED_ERRORS

    def test_redirect_is_an_error(self):
        """Non-2xx statuses outside 4xx and 5xx are errors too."""
        built = _build(RESPONSES_SPEC, '/jobs', 'post')
        error = built.definition(built.taxonomy.error)
        assert error.variant_names() == [
            'MovedPermanently301',
            'ServiceUnavailable503',
            'UnknownResponse',
            'OtherError',
        ]

    def test_referenced_response_with_several_media_types(self):
        """A referenced response's content sum type is sourced at the component."""
        built = _build(RESPONSES_SPEC, '/jobs', 'post')
        error = built.definition(built.taxonomy.error)

        payload = error.variant('ServiceUnavailable503').payload
        assert payload == Named('PostJobsServiceUnavailable503Content')
        content = built.definition(payload)
        assert content.variants == (
            Variant('ApplicationProblemJson', Named('Problem')),
            Variant('TextAny', Primitive(PrimitiveKind.TEXT)),
        )
        assert built.registry.source_of(payload.identifier) == (
            '#/components/responses/Unavailable/content'
        )

    def test_unknown_status_code_fragment(self):
        built = _build(
            _single_operation({'299': {'description': 'Odd'}, '499': {'description': 'Odder'}}),
            '/things',
            'get',
        )
        assert built.taxonomy.success == UNIT
        assert built.definition(built.taxonomy.error).variant_names()[0] == 'Status499'


class TestDeclaredResponses:
    """Tests for the declared status table of an operation."""

    def test_declaration_order(self):
        built = _build(PETSTORE_SPEC, '/pet', 'put')
        assert built.taxonomy.responses == (
            DeclaredResponse(200, 'Ok200', True),
            DeclaredResponse(400, 'BadRequest400', False),
            DeclaredResponse(404, 'NotFound404', False),
            DeclaredResponse(405, 'MethodNotAllowed405', False),
        )


class TestMediaTypes:
    """Tests for the media-type rule."""

    def test_several_media_types(self):
        """Several media types of one response form a Content sum type."""
        built = _build(PETSTORE_SPEC, '/pet', 'put')

        assert built.taxonomy.success == Named('PutPetOk200Content')
        content = built.definition(built.taxonomy.success)
        assert content.variants == (
            Variant('ApplicationJson', Named('Pet')),
            Variant('ApplicationXml', Named('Pet')),
        )

    def test_media_type_without_schema(self):
        built = _build(
            _single_operation(
                {'200': {'description': 'OK', 'content': {'application/octet-stream': {}}}}
            ),
            '/things',
            'get',
        )
        assert built.taxonomy.success == UNIT

    def test_media_fragment_collision(self):
        """Media types deriving the same fragment are a naming collision."""
        spec = _single_operation(
            {
                '200': {
                    'description': 'OK',
                    'content': {
                        'text/plain': {'schema': {'type': 'string'}},
                        'text/plain; charset=utf-8': {'schema': {'type': 'string'}},
                    },
                }
            }
        )
        with pytest.raises(NamingCollisionError) as exc_info:
            _build(spec, '/things', 'get')

        assert exc_info.value.identifier == 'GetThingsOk200Content.TextPlain'
        assert exc_info.value.first == (
            '#/paths/~1things/get/responses/200/content/text~1plain'
        )


class TestStatusKeys:
    """Tests for response keys that are not plain status codes."""

    def test_default_response(self):
        spec = _single_operation(
            {'200': {'description': 'OK'}, 'default': {'description': 'Error'}}
        )
        with pytest.raises(UnsupportedConstructError) as exc_info:
            _build(spec, '/things', 'get')
        assert exc_info.value.location == '#/paths/~1things/get/responses/default'

    @pytest.mark.parametrize('key', ['2XX', '5xx'])
    def test_status_range(self, key):
        spec = _single_operation({key: {'description': 'Range'}})
        with pytest.raises(UnsupportedConstructError, match='range'):
            _build(spec, '/things', 'get')

    @pytest.mark.parametrize('key', ['600', '99', 'ok', '20'])
    def test_invalid_status(self, key):
        spec = _single_operation({key: {'description': 'Bad'}})
        with pytest.raises(SchemaResolutionError, match='invalid status code'):
            _build(spec, '/things', 'get')

    def test_parse_status_code(self):
        processor, _ = _processor(SIMPLE_API_SPEC)
        assert processor.parse_status_code('404', '#/x') == 404

    def test_undefined_response_reference(self):
        spec = _single_operation({'404': {'$ref': '#/components/responses/Missing'}})
        with pytest.raises(SchemaResolutionError):
            _build(spec, '/things', 'get')

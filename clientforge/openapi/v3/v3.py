from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Discriminator,
    Field,
    StringConstraints,
    Tag,
    field_validator,
)


def _reference_or_object(value: Any) -> str:
    """Discriminator separating ``$ref`` objects from inline objects."""
    if isinstance(value, dict):
        return 'reference' if '$ref' in value else 'object'
    return 'reference' if isinstance(value, Reference) else 'object'


class Reference(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    ref: str = Field(..., alias='$ref')


class Type(Enum):
    array = 'array'
    boolean = 'boolean'
    integer = 'integer'
    number = 'number'
    object = 'object'
    string = 'string'
    null = 'null'


SchemaOrReference = Annotated[
    Union[
        Annotated[Reference, Tag('reference')],
        Annotated['Schema', Tag('object')],
    ],
    Discriminator(_reference_or_object),
]


class Info(BaseModel):
    model_config = ConfigDict(extra='ignore', frozen=True)

    title: str
    description: Optional[str] = None
    version: str


class Schema(BaseModel):
    model_config = ConfigDict(extra='ignore', frozen=True, populate_by_name=True)

    title: Optional[str] = None
    description: Optional[str] = None
    type: Optional[Union[Type, List[Type]]] = None
    format: Optional[str] = None
    enum: Optional[List[Any]] = None
    required: Optional[List[str]] = None
    items: Optional[SchemaOrReference] = None
    properties: Optional[Dict[str, SchemaOrReference]] = None
    additionalProperties: Optional[Union[bool, SchemaOrReference]] = None
    allOf: Optional[List[SchemaOrReference]] = None
    oneOf: Optional[List[SchemaOrReference]] = None
    anyOf: Optional[List[SchemaOrReference]] = None
    not_: Optional[SchemaOrReference] = Field(None, alias='not')
    nullable: Optional[bool] = None
    default: Optional[Any] = None
    deprecated: Optional[bool] = None


class MediaType(BaseModel):
    model_config = ConfigDict(extra='ignore', frozen=True, populate_by_name=True)

    schema_: Optional[SchemaOrReference] = Field(None, alias='schema')


class Response(BaseModel):
    model_config = ConfigDict(extra='ignore', frozen=True)

    description: Optional[str] = None
    content: Optional[Dict[str, MediaType]] = None


ResponseOrReference = Annotated[
    Union[
        Annotated[Reference, Tag('reference')],
        Annotated[Response, Tag('object')],
    ],
    Discriminator(_reference_or_object),
]


class Parameter(BaseModel):
    model_config = ConfigDict(extra='ignore', frozen=True, populate_by_name=True)

    name: str
    in_: Literal['path', 'query', 'header', 'cookie'] = Field(..., alias='in')
    description: Optional[str] = None
    required: Optional[bool] = False
    deprecated: Optional[bool] = False
    schema_: Optional[SchemaOrReference] = Field(None, alias='schema')
    content: Optional[Dict[str, MediaType]] = None


ParameterOrReference = Annotated[
    Union[
        Annotated[Reference, Tag('reference')],
        Annotated[Parameter, Tag('object')],
    ],
    Discriminator(_reference_or_object),
]


class RequestBody(BaseModel):
    model_config = ConfigDict(extra='ignore', frozen=True)

    description: Optional[str] = None
    content: Dict[str, MediaType]
    required: Optional[bool] = False


RequestBodyOrReference = Annotated[
    Union[
        Annotated[Reference, Tag('reference')],
        Annotated[RequestBody, Tag('object')],
    ],
    Discriminator(_reference_or_object),
]


class Operation(BaseModel):
    model_config = ConfigDict(extra='ignore', frozen=True)

    tags: Optional[List[str]] = None
    summary: Optional[str] = None
    description: Optional[str] = None
    operationId: Optional[str] = None
    parameters: Optional[List[ParameterOrReference]] = None
    requestBody: Optional[RequestBodyOrReference] = None
    responses: Dict[str, ResponseOrReference] = Field(default_factory=dict)
    deprecated: Optional[bool] = False

    @field_validator('responses', mode='before')
    @classmethod
    def _status_keys_as_strings(cls, value: Any) -> Any:
        # YAML reads unquoted status codes as integers
        if isinstance(value, dict):
            return {str(key): response for key, response in value.items()}
        return value if value is not None else {}


class PathItem(BaseModel):
    model_config = ConfigDict(extra='ignore', frozen=True)

    summary: Optional[str] = None
    description: Optional[str] = None
    get: Optional[Operation] = None
    put: Optional[Operation] = None
    post: Optional[Operation] = None
    delete: Optional[Operation] = None
    options: Optional[Operation] = None
    head: Optional[Operation] = None
    patch: Optional[Operation] = None
    trace: Optional[Operation] = None
    parameters: Optional[List[ParameterOrReference]] = None


class Components(BaseModel):
    model_config = ConfigDict(extra='ignore', frozen=True)

    schemas: Optional[
        Dict[Annotated[str, StringConstraints(pattern=r'^[a-zA-Z0-9\.\-_]+$')], SchemaOrReference]
    ] = None
    responses: Optional[
        Dict[Annotated[str, StringConstraints(pattern=r'^[a-zA-Z0-9\.\-_]+$')], ResponseOrReference]
    ] = None
    parameters: Optional[
        Dict[Annotated[str, StringConstraints(pattern=r'^[a-zA-Z0-9\.\-_]+$')], ParameterOrReference]
    ] = None
    requestBodies: Optional[
        Dict[Annotated[str, StringConstraints(pattern=r'^[a-zA-Z0-9\.\-_]+$')], RequestBodyOrReference]
    ] = None


class OpenAPI(BaseModel):
    model_config = ConfigDict(extra='ignore', frozen=True)

    openapi: Annotated[str, StringConstraints(pattern=r'^3\.[01]\.\d+(-.+)?$')]
    info: Info
    paths: Optional[
        Dict[Annotated[str, StringConstraints(pattern=r'^\/')], PathItem]
    ] = None
    components: Optional[Components] = None

    @field_validator('paths', mode='before')
    @classmethod
    def _drop_path_extensions(cls, value: Any) -> Any:
        if isinstance(value, dict):
            return {key: item for key, item in value.items() if not key.startswith('x-')}
        return value


Schema.model_rebuild()
MediaType.model_rebuild()
Response.model_rebuild()
Parameter.model_rebuild()
RequestBody.model_rebuild()
Operation.model_rebuild()
PathItem.model_rebuild()
Components.model_rebuild()
OpenAPI.model_rebuild()

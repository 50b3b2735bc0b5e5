"""OpenAPI 3.0 document models.

Only the parts of the document the generator reads are modelled; every
other keyword is ignored on load.
"""

from clientforge.openapi.v3.v3 import (
    Components,
    Info,
    MediaType,
    OpenAPI,
    Operation,
    Parameter,
    PathItem,
    Reference,
    RequestBody,
    Response,
    Schema,
    Type,
)

__all__ = [
    'Components',
    'Info',
    'MediaType',
    'OpenAPI',
    'Operation',
    'Parameter',
    'PathItem',
    'Reference',
    'RequestBody',
    'Response',
    'Schema',
    'Type',
]

"""clientforge - Generate typed Python clients from OpenAPI documents.

clientforge maps the schemas of an OpenAPI 3.0 document to pydantic models
and its operations to the methods of a typed client protocol whose return
types reflect every declared response.

Quick Start:
    >>> from clientforge import Codegen, DocumentConfig
    >>>
    >>> config = DocumentConfig(source='./petstore.yaml', output='./client')
    >>> Codegen(config).generate()

CLI Usage:
    $ clientforge generate --config clientforge.yaml
    $ clientforge validate ./petstore.yaml
"""

from importlib.metadata import PackageNotFoundError, version

from clientforge.codegen import (
    Codegen,
    GeneratedModule,
    ModuleAssembler,
    SchemaLoader,
    SchemaResolver,
    TypeRegistry,
    assemble,
)
from clientforge.config import CodegenConfig, DocumentConfig, get_config
from clientforge.exceptions import (
    ClientForgeError,
    CodeGenerationError,
    ConfigurationError,
    NamingCollisionError,
    OutputError,
    SchemaError,
    SchemaLoadError,
    SchemaReferenceError,
    SchemaResolutionError,
    SchemaValidationError,
    UnsupportedConstructError,
)
from clientforge.runtime import ResponseClassification, classify_status

__all__ = [
    # Main classes
    'Codegen',
    'ModuleAssembler',
    'assemble',
    'GeneratedModule',
    'SchemaLoader',
    'SchemaResolver',
    'TypeRegistry',
    # Runtime
    'ResponseClassification',
    'classify_status',
    # Configuration
    'CodegenConfig',
    'DocumentConfig',
    'get_config',
    # Exceptions
    'ClientForgeError',
    'SchemaError',
    'SchemaLoadError',
    'SchemaValidationError',
    'SchemaResolutionError',
    'SchemaReferenceError',
    'CodeGenerationError',
    'NamingCollisionError',
    'UnsupportedConstructError',
    'ConfigurationError',
    'OutputError',
]

try:
    __version__ = version('clientforge')
except PackageNotFoundError:
    __version__ = 'unknown'

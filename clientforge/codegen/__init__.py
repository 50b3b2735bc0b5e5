"""Code generation module for clientforge.

This module provides the core code generation functionality for creating
typed Python clients from OpenAPI documents.

Main Components:
    - Codegen: The main orchestrator for code generation
    - ModuleAssembler: Builds the GeneratedModule of a document
    - SchemaTypeMapper: Maps schema nodes to type descriptors
    - SchemaLoader: Loads OpenAPI documents from URLs or files
    - SchemaResolver: Resolves local $ref references
    - TypeRegistry: Owns the namespace of generated types
    - CodeEmitter: Renders a GeneratedModule

Example:
    >>> from clientforge.codegen import Codegen
    >>> from clientforge.config import DocumentConfig
    >>>
    >>> config = DocumentConfig(source='./openapi.json', output='./client')
    >>> Codegen(config).generate()
"""

from clientforge.codegen.codegen import Codegen
from clientforge.codegen.emitter import CodeEmitter, EmittedModules, PythonEmitter
from clientforge.codegen.file_writer import PythonFileWriter
from clientforge.codegen.generator import ModuleAssembler, assemble
from clientforge.codegen.operations import OperationSynthesizer
from clientforge.codegen.processors import (
    MediaTypeRule,
    ParameterProcessor,
    ResponseProcessor,
)
from clientforge.codegen.schema_loader import SchemaLoader
from clientforge.codegen.schema_resolver import SchemaResolver
from clientforge.codegen.type_mapper import SchemaTypeMapper
from clientforge.codegen.type_registry import GeneratedModule, TypeRegistry
from clientforge.codegen.types import (
    UNIT,
    Named,
    NamedTypeDefinition,
    Opaque,
    OpaqueKind,
    OperationDescriptor,
    ParameterDescriptor,
    Primitive,
    PrimitiveKind,
    Record,
    RecordField,
    Sequence,
    SumType,
    TypeDescriptor,
    Unit,
    Variant,
)

__all__ = [
    # Orchestration
    'Codegen',
    'ModuleAssembler',
    'assemble',
    'GeneratedModule',
    # Core
    'SchemaTypeMapper',
    'MediaTypeRule',
    'ResponseProcessor',
    'ParameterProcessor',
    'OperationSynthesizer',
    'TypeRegistry',
    # Document access
    'SchemaLoader',
    'SchemaResolver',
    # Rendering
    'CodeEmitter',
    'EmittedModules',
    'PythonEmitter',
    'PythonFileWriter',
    # Descriptors
    'UNIT',
    'Named',
    'NamedTypeDefinition',
    'Opaque',
    'OpaqueKind',
    'OperationDescriptor',
    'ParameterDescriptor',
    'Primitive',
    'PrimitiveKind',
    'Record',
    'RecordField',
    'Sequence',
    'SumType',
    'TypeDescriptor',
    'Unit',
    'Variant',
]

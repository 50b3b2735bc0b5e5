"""Code emitter interfaces and implementations for code generation output.

This module provides the CodeEmitter interface, the seam between the
language-independent GeneratedModule and a rendering backend, and the
PythonEmitter that renders a module as two Python modules:

- a models module with one pydantic model per named type
- a client module with a ``typing.Protocol`` declaring one method per
  operation and the statuses each operation declares
"""

import ast
import logging
from abc import ABC, abstractmethod

from clientforge.codegen.ast_utils import (
    ImportCollector,
    _all,
    _ann_assign,
    _argument,
    _assign,
    _attr,
    _call,
    _class,
    _docstring,
    _func,
    _name,
    _subscript,
    _union_expr,
)
from clientforge.codegen.naming import uncollide
from clientforge.codegen.type_registry import GeneratedModule
from clientforge.codegen.types import (
    Named,
    Opaque,
    OpaqueKind,
    OperationDescriptor,
    Primitive,
    PrimitiveKind,
    Record,
    Sequence,
    SumType,
    TypeDescriptor,
    Unit,
)
from clientforge.codegen.utils import sanitize_parameter_field_name

logger = logging.getLogger(__name__)

__all__ = ['CodeEmitter', 'EmittedModules', 'PythonEmitter']

PRIMITIVE_NAMES = {
    PrimitiveKind.INT32: 'int',
    PrimitiveKind.INT64: 'int',
    PrimitiveKind.FLOAT32: 'float',
    PrimitiveKind.FLOAT64: 'float',
    PrimitiveKind.BOOLEAN: 'bool',
    PrimitiveKind.TEXT: 'str',
}

# Names generated annotations may refer to in a models module.
ANNOTATION_NAMES = frozenset(
    {*PRIMITIVE_NAMES.values(), 'list', 'pydantic', 'typing', 'httpx', 'builtins'}
)

# Attributes of pydantic.BaseModel a generated field must not shadow.
RESERVED_FIELD_NAMES = frozenset(
    {
        'model_config',
        'model_fields',
        'model_computed_fields',
        'model_extra',
        'model_fields_set',
        'model_construct',
        'model_copy',
        'model_dump',
        'model_dump_json',
        'model_json_schema',
        'model_post_init',
        'model_rebuild',
        'model_validate',
        'model_validate_json',
        'copy',
        'dict',
        'json',
        'schema',
        'validate',
        'construct',
    }
)


class EmittedModules:
    """AST bodies of the two rendered Python modules."""

    def __init__(self, models: list[ast.stmt], client: list[ast.stmt]):
        self.models = models
        self.client = client


class CodeEmitter(ABC):
    """Abstract base class for rendering backends.

    A CodeEmitter consumes a sealed GeneratedModule and renders it. It must
    honour the order of definitions, fields and variants verbatim.
    """

    @abstractmethod
    def emit_models(self, module: GeneratedModule) -> list[ast.stmt]:
        """Render the named type definitions of ``module``."""

    @abstractmethod
    def emit_client(self, module: GeneratedModule) -> list[ast.stmt]:
        """Render the operations of ``module``."""

    def emit(self, module: GeneratedModule) -> EmittedModules:
        return EmittedModules(self.emit_models(module), self.emit_client(module))


def record_field_names(
    record: Record, module_names: frozenset[str] = frozenset()
) -> list[str]:
    """Python attribute names of a record's fields, in field order.

    Args:
        record: The record to name the fields of.
        module_names: Names the annotations of the models module refer to.
            A field with one of these names would shadow it in the class body.
    """
    names: list[str] = []
    for field in record.fields:
        name = sanitize_parameter_field_name(field.name)
        if name.startswith('_'):
            # pydantic treats underscore names as private attributes
            name = f'field{name}'
        if name in RESERVED_FIELD_NAMES or name in module_names:
            name += '_'
        names.append(uncollide(name, names))
    return names


class PythonEmitter(CodeEmitter):
    """Renders a GeneratedModule as pydantic models and a client protocol.

    Example:
        >>> emitter = PythonEmitter(client_class='PetstoreClient')
        >>> emitted = emitter.emit(module)
        >>> emitted.models  # list of ast.stmt

    Args:
        client_class: Name of the generated protocol class.
        models_module: Module name of the models module, without suffix.
        models_import_path: Absolute import path of the models module used by
            the client module. Defaults to a relative import.
    """

    def __init__(
        self,
        client_class: str = 'Client',
        models_module: str = 'models',
        models_import_path: str | None = None,
    ):
        self.client_class = client_class
        self.models_module = models_module
        self.models_import_path = models_import_path

    # -------------------------------------------------------------------------
    # Type rendering
    # -------------------------------------------------------------------------

    def annotation(
        self,
        descriptor: TypeDescriptor,
        imports: ImportCollector,
        qualifier: str | None = None,
        shadowed: frozenset[str] = frozenset(),
    ) -> ast.expr:
        """Render a type descriptor as an annotation expression.

        Args:
            descriptor: The descriptor to render.
            imports: Collector receiving the imports the annotation needs.
            qualifier: Module name to qualify named types with.
            shadowed: Builtin names redefined by the rendered module.
        """
        if isinstance(descriptor, Primitive):
            return _name(PRIMITIVE_NAMES[descriptor.kind])
        if isinstance(descriptor, Named):
            if qualifier:
                return _attr(qualifier, descriptor.identifier)
            return _name(descriptor.identifier)
        if isinstance(descriptor, Sequence):
            return _subscript(
                'list',
                self.annotation(descriptor.element, imports, qualifier, shadowed),
            )
        if isinstance(descriptor, Unit):
            return ast.Constant(value=None)
        if isinstance(descriptor, Opaque):
            if descriptor.capture == OpaqueKind.RAW_RESPONSE:
                imports.add_module('httpx')
                return _attr('httpx', 'Response')
            if 'Exception' in shadowed:
                imports.add_module('builtins')
                return _attr('builtins', 'Exception')
            return _name('Exception')
        raise TypeError(f'Not a type descriptor: {descriptor!r}')

    # -------------------------------------------------------------------------
    # Models module
    # -------------------------------------------------------------------------

    def _record_class(
        self,
        record: Record,
        imports: ImportCollector,
        shadowed: frozenset[str],
        module_names: frozenset[str],
    ) -> ast.ClassDef:
        body: list[ast.stmt] = []
        field_names = record_field_names(record, module_names)
        aliased = False

        for field, name in zip(record.fields, field_names):
            annotation = self.annotation(field.type, imports, shadowed=shadowed)
            keywords = []
            if name != field.name:
                aliased = True
                keywords.append(ast.keyword(arg='alias', value=ast.Constant(field.name)))
            if not field.required:
                annotation = _union_expr([annotation, ast.Constant(value=None)])
                keywords.insert(0, ast.keyword(arg='default', value=ast.Constant(None)))

            if not keywords:
                value = None
            elif len(keywords) == 1 and keywords[0].arg == 'default':
                value = ast.Constant(value=None)
            else:
                imports.add_module('pydantic')
                value = _call(_attr('pydantic', 'Field'), keywords=keywords)
            body.append(_ann_assign(name, annotation, value))

        if aliased:
            imports.add_module('pydantic')
            body.insert(
                0,
                _assign(
                    _name('model_config'),
                    _call(
                        _attr('pydantic', 'ConfigDict'),
                        keywords=[
                            ast.keyword(arg='populate_by_name', value=ast.Constant(True))
                        ],
                    ),
                ),
            )

        imports.add_module('pydantic')
        return _class(record.identifier, [_attr('pydantic', 'BaseModel')], body)

    def _sum_type_class(
        self, sum_type: SumType, imports: ImportCollector, shadowed: frozenset[str]
    ) -> ast.ClassDef:
        imports.add_module('typing')
        imports.add_module('pydantic')

        config = [ast.keyword(arg='frozen', value=ast.Constant(True))]
        if any(isinstance(v.payload, Opaque) for v in sum_type.variants):
            config.append(
                ast.keyword(arg='arbitrary_types_allowed', value=ast.Constant(True))
            )

        variant_names = ', '.join(sum_type.variant_names())
        body: list[ast.stmt] = [
            _docstring(f'One of: {variant_names}.'),
            _assign(
                _name('model_config'),
                _call(_attr('pydantic', 'ConfigDict'), keywords=config),
            ),
            _ann_assign(
                'variant',
                _subscript(
                    _attr('typing', 'Literal'),
                    ast.Tuple(
                        elts=[ast.Constant(v.name) for v in sum_type.variants],
                        ctx=ast.Load(),
                    ),
                ),
            ),
            _ann_assign(
                'value',
                _union_expr(
                    [
                        self.annotation(v.payload, imports, shadowed=shadowed)
                        for v in sum_type.variants
                    ]
                ),
            ),
        ]
        return _class(sum_type.identifier, [_attr('pydantic', 'BaseModel')], body)

    def emit_models(self, module: GeneratedModule) -> list[ast.stmt]:
        imports = ImportCollector()
        shadowed = frozenset(module.definitions) & {'Exception'}
        module_names = ANNOTATION_NAMES | frozenset(module.definitions)

        classes: list[ast.stmt] = []
        for definition in module:
            if isinstance(definition, Record):
                classes.append(self._record_class(
                        definition, imports, shadowed, module_names
                    ))
            else:
                classes.append(self._sum_type_class(definition, imports, shadowed))

        rebuilds = [
            ast.Expr(value=_call(_attr(identifier, 'model_rebuild')))
            for identifier in module.definitions
        ]

        title = module.title or 'the API document'
        return [
            _docstring(f'Data types generated from {title}.'),
            ast.ImportFrom(module='__future__', names=[ast.alias('annotations')], level=0),
            *imports.to_ast(),
            _all(module.definitions),
            *classes,
            *rebuilds,
        ]

    # -------------------------------------------------------------------------
    # Client module
    # -------------------------------------------------------------------------

    def _models_import(self) -> tuple[ast.stmt, str]:
        if self.models_import_path:
            package, _, name = self.models_import_path.rpartition('.')
            if not package:
                return ast.Import(names=[ast.alias(name=name)]), name
            return ast.ImportFrom(module=package, names=[ast.alias(name)], level=0), name
        return (
            ast.ImportFrom(module=None, names=[ast.alias(self.models_module)], level=1),
            self.models_module,
        )

    def _operation_method(
        self, operation: OperationDescriptor, imports: ImportCollector, qualifier: str
    ) -> ast.FunctionDef:
        kwonlyargs = []
        kw_defaults: list[ast.expr | None] = []
        for parameter in operation.parameters:
            annotation = self.annotation(parameter.type, imports, qualifier)
            if parameter.required:
                kw_defaults.append(None)
            else:
                annotation = _union_expr([annotation, ast.Constant(value=None)])
                kw_defaults.append(ast.Constant(value=None))
            kwonlyargs.append(_argument(parameter.name, annotation))

        doc = f'{operation.method.upper()} {operation.path}'
        if operation.summary:
            doc += f'\n\n{operation.summary}\n'
        returns = _union_expr(
            [
                self.annotation(operation.success, imports, qualifier),
                self.annotation(operation.error, imports, qualifier),
            ]
        )
        return _func(
            operation.identifier,
            [_argument('self')],
            [_docstring(doc), ast.Expr(value=ast.Constant(value=Ellipsis))],
            returns=returns,
            kwonlyargs=kwonlyargs,
            kw_defaults=kw_defaults,
        )

    def _declared_statuses(self, module: GeneratedModule) -> ast.stmt:
        return _ann_assign(
            'DECLARED_STATUSES',
            _subscript(
                'dict',
                ast.Tuple(
                    elts=[
                        _name('str'),
                        _subscript(
                            'dict', ast.Tuple(elts=[_name('int'), _name('str')], ctx=ast.Load())
                        ),
                    ],
                    ctx=ast.Load(),
                ),
            ),
            ast.Dict(
                keys=[ast.Constant(op.identifier) for op in module.operations],
                values=[
                    ast.Dict(
                        keys=[ast.Constant(r.status_code) for r in op.responses],
                        values=[ast.Constant(r.fragment) for r in op.responses],
                    )
                    for op in module.operations
                ],
            ),
        )

    def _classify_function(self) -> ast.FunctionDef:
        return _func(
            'classify',
            [_argument('operation', _name('str')), _argument('status_code', _name('int'))],
            [
                _docstring('Classify a status code observed for ``operation``.'),
                ast.Return(
                    value=_call(
                        _name('classify_status'),
                        args=[
                            _subscript(_name('DECLARED_STATUSES'), _name('operation')),
                            _name('status_code'),
                        ],
                    )
                ),
            ],
            returns=_name('ResponseClassification'),
        )

    def emit_client(self, module: GeneratedModule) -> list[ast.stmt]:
        imports = ImportCollector()
        imports.add_module('typing')
        imports.add_import('clientforge.runtime', 'ResponseClassification')
        imports.add_import('clientforge.runtime', 'classify_status')
        models_import, qualifier = self._models_import()

        methods = [
            self._operation_method(operation, imports, qualifier)
            for operation in module.operations
        ]
        title = module.title or 'the API document'
        protocol = _class(
            self.client_class,
            [_attr('typing', 'Protocol')],
            [_docstring(f'Operations of {title}.'), *methods],
        )

        return [
            _docstring(f'Client protocol generated from {title}.'),
            ast.ImportFrom(module='__future__', names=[ast.alias('annotations')], level=0),
            *imports.to_ast(),
            models_import,
            _all([self.client_class, 'DECLARED_STATUSES', 'classify']),
            self._declared_statuses(module),
            self._classify_function(),
            protocol,
        ]

"""AST utilities and import collection for code generation.

This module provides helper functions for building Python AST nodes
and utilities for collecting and organizing imports during code generation.
"""

import ast
import sys
from collections.abc import Iterable

__all__ = [
    # AST helpers
    '_name',
    '_attr',
    '_subscript',
    '_union_expr',
    '_argument',
    '_assign',
    '_ann_assign',
    '_call',
    '_func',
    '_class',
    '_docstring',
    '_all',
    # Import collection
    'ImportCollector',
]


def _name(name: str) -> ast.Name:
    return ast.Name(id=name, ctx=ast.Load())


def _attr(value: str | ast.expr, attr: str) -> ast.Attribute:
    return ast.Attribute(
        value=_name(value) if isinstance(value, str) else value,
        attr=attr,
        ctx=ast.Load(),
    )


def _subscript(generic: str | ast.expr, inner: ast.expr) -> ast.Subscript:
    return ast.Subscript(
        value=_name(generic) if isinstance(generic, str) else generic,
        slice=inner,
        ctx=ast.Load(),
    )


def _union_expr(types: list[ast.expr]) -> ast.expr:
    # A | B | C, with structurally equal members dropped (None | None is a TypeError)
    unique: list[ast.expr] = []
    seen: set[str] = set()
    for t in types:
        key = ast.dump(t)
        if key not in seen:
            seen.add(key)
            unique.append(t)

    if not unique:
        raise ValueError('_union_expr requires at least one type')
    result = unique[0]
    for t in unique[1:]:
        result = ast.BinOp(left=result, op=ast.BitOr(), right=t)
    return result


def _argument(name: str, value: ast.expr | None = None) -> ast.arg:
    return ast.arg(arg=name, annotation=value)


def _assign(target: ast.expr, value: ast.expr) -> ast.Assign:
    if isinstance(target, ast.Name):
        target = ast.Name(id=target.id, ctx=ast.Store())
    return ast.Assign(targets=[target], value=value)


def _ann_assign(
    target: str, annotation: ast.expr, value: ast.expr | None = None
) -> ast.AnnAssign:
    return ast.AnnAssign(
        target=ast.Name(id=target, ctx=ast.Store()),
        annotation=annotation,
        value=value,
        simple=1,
    )


def _call(
    func: ast.expr,
    args: list[ast.expr] | None = None,
    keywords: list[ast.keyword] | None = None,
) -> ast.Call:
    return ast.Call(func=func, args=args or [], keywords=keywords or [])


def _func(
    name: str,
    args: list[ast.arg],
    body: list[ast.stmt],
    returns: ast.expr | None = None,
    kwonlyargs: list[ast.arg] | None = None,
    kw_defaults: list[ast.expr | None] | None = None,
) -> ast.FunctionDef:
    return ast.FunctionDef(
        name=name,
        args=ast.arguments(
            posonlyargs=[],
            args=args,
            kwarg=None,
            kwonlyargs=kwonlyargs or [],
            kw_defaults=kw_defaults or [],
            defaults=[],
        ),
        body=body,
        decorator_list=[],
        returns=returns,
        type_params=[],
    )


def _class(name: str, bases: list[ast.expr], body: list[ast.stmt]) -> ast.ClassDef:
    return ast.ClassDef(
        name=name,
        bases=bases,
        keywords=[],
        body=body or [ast.Pass()],
        decorator_list=[],
        type_params=[],
    )


def _docstring(text: str) -> ast.Expr:
    return ast.Expr(value=ast.Constant(value=text))


def _all(names: Iterable[str]) -> ast.Assign:
    return _assign(
        target=_name('__all__'),
        value=ast.Tuple(
            elts=[ast.Constant(value=name) for name in names], ctx=ast.Load()
        ),
    )


# =============================================================================
# Import Collection
# =============================================================================


class ImportCollector:
    """Collects imports for a generated module and renders them sorted.

    Two kinds of imports are tracked: ``from module import name`` and plain
    ``import module``. Both are deduplicated and rendered standard library
    first, then third-party, then relative imports.

    Example:
        >>> collector = ImportCollector()
        >>> collector.add_import('pydantic', 'BaseModel')
        >>> collector.add_module('httpx')
        >>> imports = collector.to_ast()
    """

    def __init__(self):
        self._imports: dict[str, set[str]] = {}
        self._modules: set[str] = set()

    def add_import(self, module: str, name: str) -> None:
        """Add ``from module import name``."""
        self._imports.setdefault(module, set()).add(name)

    def add_module(self, module: str) -> None:
        """Add ``import module``."""
        self._modules.add(module)

    def _get_import_category(self, module: str) -> int:
        """Return 0 for the standard library, 1 for third-party and 2 for relative imports."""
        if module.startswith('.'):
            return 2
        if module.split('.')[0] in sys.stdlib_module_names:
            return 0
        return 1

    def to_ast(self) -> list[ast.stmt]:
        """Render the collected imports as AST statements, sorted."""
        entries = [(module, None) for module in self._modules] + [
            (module, names) for module, names in self._imports.items()
        ]
        entries.sort(
            key=lambda e: (self._get_import_category(e[0]), e[1] is not None, e[0])
        )

        stmts: list[ast.stmt] = []
        for module, names in entries:
            if names is None:
                stmts.append(ast.Import(names=[ast.alias(name=module)]))
                continue
            level = len(module) - len(module.lstrip('.'))
            stmts.append(
                ast.ImportFrom(
                    module=module.lstrip('.') or None,
                    names=[ast.alias(name=name) for name in sorted(names)],
                    level=level,
                )
            )
        return stmts

    def has_imports(self) -> bool:
        return bool(self._imports or self._modules)

"""Type registry for managing generated types during code generation.

This module provides the TypeRegistry class, the single owner of the
namespace of named types while a document is being assembled, and the
GeneratedModule it produces once sealed.
"""

import dataclasses
import logging
from collections.abc import Iterator, Mapping
from types import MappingProxyType

from clientforge.codegen.types import (
    Named,
    NamedTypeDefinition,
    OperationDescriptor,
    Record,
    SumType,
    TypeDescriptor,
    referenced_names,
)
from clientforge.exceptions import NamingCollisionError, SchemaResolutionError

logger = logging.getLogger(__name__)

__all__ = ['GeneratedModule', 'TypeRegistry']


@dataclasses.dataclass(frozen=True)
class GeneratedModule:
    """A complete, consistent set of generated entities.

    Attributes:
        definitions: Named type definitions by identifier, in generation order.
        operations: Operation descriptors in document order.
        title: Title of the source document, if known.
    """

    definitions: Mapping[str, NamedTypeDefinition]
    operations: tuple[OperationDescriptor, ...]
    title: str | None = None

    def resolve(self, named: Named) -> NamedTypeDefinition:
        return self.definitions[named.identifier]

    def records(self) -> list[Record]:
        return [d for d in self.definitions.values() if isinstance(d, Record)]

    def sum_types(self) -> list[SumType]:
        return [d for d in self.definitions.values() if isinstance(d, SumType)]

    def operation(self, identifier: str) -> OperationDescriptor | None:
        for op in self.operations:
            if op.identifier == identifier:
                return op
        return None

    def __len__(self) -> int:
        return len(self.definitions)

    def __iter__(self) -> Iterator[NamedTypeDefinition]:
        return iter(self.definitions.values())

    def __contains__(self, identifier: str) -> bool:
        return identifier in self.definitions


class TypeRegistry:
    """Registry for managing generated types during code generation.

    Registration is first-writer-wins: registering a definition that is
    identical to the one already held under its identifier is a no-op, while
    a different definition under a taken identifier is a naming collision.

    Recursive schemas are supported through a "currently resolving" set. A
    record's slot is reserved by ``begin`` when its resolution starts, so the
    generation order follows the order in which types are first touched, and
    filled by ``complete`` once its fields are known.

    Example:
        >>> registry = TypeRegistry()
        >>> registry.begin('Pet', '#/components/schemas/Pet')
        >>> registry.complete(Record('Pet', fields), '#/components/schemas/Pet')
        >>> module = registry.seal()
    """

    def __init__(self):
        self._definitions: dict[str, NamedTypeDefinition | None] = {}
        self._sources: dict[str, str] = {}
        self._resolving: set[str] = set()
        self._operations: list[OperationDescriptor] = []
        self._operation_sources: dict[str, str] = {}
        self._sealed = False

    def _check_open(self) -> None:
        if self._sealed:
            raise RuntimeError('The registry has been sealed')

    def claim(self, identifier: str, source: str) -> None:
        """Check that ``identifier`` is free or already owned by ``source``.

        Raises:
            NamingCollisionError: If another source owns the identifier.
        """
        first = self._sources.get(identifier)
        if first is not None and first != source:
            raise NamingCollisionError(identifier, first, source)

    def is_resolving(self, identifier: str) -> bool:
        return identifier in self._resolving

    def begin(self, identifier: str, source: str) -> None:
        """Reserve the slot of a named type whose resolution is starting.

        Args:
            identifier: The identifier of the type.
            source: Location of the schema the type derives from.

        Raises:
            NamingCollisionError: If the identifier is taken by another source.
        """
        self._check_open()
        self.claim(identifier, source)
        if identifier in self._definitions:
            return
        self._definitions[identifier] = None
        self._sources[identifier] = source
        self._resolving.add(identifier)

    def complete(self, definition: NamedTypeDefinition, source: str) -> None:
        """Fill a slot reserved with ``begin``."""
        self._check_open()
        self.claim(definition.identifier, source)
        self._resolving.discard(definition.identifier)
        self._definitions[definition.identifier] = definition
        logger.debug(f"Registered '{definition.identifier}' from {source}")

    def register(self, definition: NamedTypeDefinition, source: str) -> Named:
        """Register a named type definition.

        Args:
            definition: The record or sum type to register.
            source: Location of the document node the definition derives from.

        Returns:
            A ``Named`` descriptor referring to the definition.

        Raises:
            NamingCollisionError: If a different definition already holds
                the identifier.
        """
        self._check_open()
        identifier = definition.identifier
        existing = self._definitions.get(identifier)
        if identifier in self._definitions:
            if existing == definition:
                return Named(identifier)
            raise NamingCollisionError(identifier, self._sources[identifier], source)

        self._definitions[identifier] = definition
        self._sources[identifier] = source
        logger.debug(f"Registered '{identifier}' from {source}")
        return Named(identifier)

    def add_operation(self, operation: OperationDescriptor, source: str) -> None:
        """Append an operation descriptor.

        Raises:
            NamingCollisionError: If another operation has the same identifier.
        """
        self._check_open()
        first = self._operation_sources.get(operation.identifier)
        if first is not None:
            raise NamingCollisionError(operation.identifier, first, source)
        self._operation_sources[operation.identifier] = source
        self._operations.append(operation)

    def has_type(self, identifier: str) -> bool:
        return identifier in self._definitions

    def get_type(self, identifier: str) -> NamedTypeDefinition | None:
        return self._definitions.get(identifier)

    def source_of(self, identifier: str) -> str | None:
        return self._sources.get(identifier)

    def __len__(self) -> int:
        return len(self._definitions)

    def __contains__(self, identifier: str) -> bool:
        return identifier in self._definitions

    def _dangling(self, descriptor: TypeDescriptor) -> set[str]:
        return {
            name
            for name in referenced_names(descriptor)
            if self._definitions.get(name) is None
        }

    def _check_references(self, descriptors, source: str) -> None:
        for descriptor in descriptors:
            missing = self._dangling(descriptor)
            if missing:
                raise SchemaResolutionError(
                    source, f"reference to undefined type '{sorted(missing)[0]}'"
                )

    def seal(self, title: str | None = None) -> GeneratedModule:
        """Check the registry for consistency and freeze it into a module.

        Raises:
            SchemaResolutionError: If a type is still unresolved or a
                ``Named`` descriptor refers to no registered definition.
        """
        self._check_open()
        for identifier, definition in self._definitions.items():
            source = self._sources[identifier]
            if definition is None:
                raise SchemaResolutionError(
                    source, f"type '{identifier}' was never resolved"
                )
            if isinstance(definition, Record):
                self._check_references((f.type for f in definition.fields), source)
            else:
                self._check_references((v.payload for v in definition.variants), source)

        for operation in self._operations:
            self._check_references(
                [p.type for p in operation.parameters]
                + [operation.success, operation.error],
                self._operation_sources[operation.identifier],
            )

        self._sealed = True
        logger.info(
            f'Sealed module with {len(self._definitions)} types '
            f'and {len(self._operations)} operations'
        )
        return GeneratedModule(
            definitions=MappingProxyType(dict(self._definitions)),
            operations=tuple(self._operations),
            title=title,
        )

"""Type descriptors and descriptors of generated entities.

This module provides the closed set of value types the generator produces:

- ``TypeDescriptor``: how a value is typed (``Primitive``, ``Named``,
  ``Sequence``, ``Unit`` or ``Opaque``)
- ``NamedTypeDefinition``: a generated record or sum type
- ``ParameterDescriptor`` and ``OperationDescriptor``: one generated client
  operation

All of them are frozen dataclasses. A descriptor is never mutated once
produced and may be shared freely between definitions.
"""

import dataclasses
import enum
from typing import Literal, Union

from clientforge.runtime import ResponseClassification, classify_status

__all__ = [
    'PrimitiveKind',
    'OpaqueKind',
    'Primitive',
    'Named',
    'Sequence',
    'Unit',
    'Opaque',
    'UNIT',
    'TypeDescriptor',
    'RecordField',
    'Record',
    'Variant',
    'SumType',
    'NamedTypeDefinition',
    'ParameterDescriptor',
    'DeclaredResponse',
    'OperationDescriptor',
    'referenced_names',
]


class PrimitiveKind(enum.Enum):
    INT32 = 'int32'
    INT64 = 'int64'
    FLOAT32 = 'float32'
    FLOAT64 = 'float64'
    BOOLEAN = 'boolean'
    TEXT = 'text'


class OpaqueKind(enum.Enum):
    """Capture payloads of the fixed error variants."""

    RAW_RESPONSE = 'raw_response'
    ERROR = 'error'


@dataclasses.dataclass(frozen=True)
class Primitive:
    kind: PrimitiveKind


@dataclasses.dataclass(frozen=True)
class Named:
    identifier: str


@dataclasses.dataclass(frozen=True)
class Sequence:
    element: 'TypeDescriptor'


@dataclasses.dataclass(frozen=True)
class Unit:
    pass


@dataclasses.dataclass(frozen=True)
class Opaque:
    capture: OpaqueKind


UNIT = Unit()

TypeDescriptor = Union[Primitive, Named, Sequence, Unit, Opaque]


@dataclasses.dataclass(frozen=True)
class RecordField:
    """A record field.

    Attributes:
        name: The property name exactly as declared in the document.
        type: The mapped type of the property.
        required: Whether the property is in the schema's required set.
    """

    name: str
    type: TypeDescriptor
    required: bool = False


@dataclasses.dataclass(frozen=True)
class Record:
    identifier: str
    fields: tuple[RecordField, ...] = ()

    def field_names(self) -> list[str]:
        return [f.name for f in self.fields]


@dataclasses.dataclass(frozen=True)
class Variant:
    name: str
    payload: TypeDescriptor


@dataclasses.dataclass(frozen=True)
class SumType:
    identifier: str
    variants: tuple[Variant, ...] = ()

    def variant_names(self) -> list[str]:
        return [v.name for v in self.variants]

    def variant(self, name: str) -> Variant | None:
        for v in self.variants:
            if v.name == name:
                return v
        return None


NamedTypeDefinition = Union[Record, SumType]


@dataclasses.dataclass(frozen=True)
class ParameterDescriptor:
    """A generated method parameter.

    Attributes:
        name: The Python parameter name.
        type: The mapped type of the parameter.
        original_name: The parameter name as declared in the document.
        location: Where the parameter is sent.
        required: Whether the document marks the parameter as required.
    """

    name: str
    type: TypeDescriptor
    original_name: str
    location: Literal['path', 'query', 'header', 'cookie']
    required: bool = False


@dataclasses.dataclass(frozen=True)
class DeclaredResponse:
    status_code: int
    fragment: str
    is_success: bool


@dataclasses.dataclass(frozen=True)
class OperationDescriptor:
    """Represents one generated client operation (a path + verb pair)."""

    identifier: str
    parameters: tuple[ParameterDescriptor, ...]
    success: TypeDescriptor
    error: TypeDescriptor
    method: str = ''
    path: str = ''
    responses: tuple[DeclaredResponse, ...] = ()
    summary: str | None = None

    @property
    def declared_statuses(self) -> dict[int, str]:
        return {r.status_code: r.fragment for r in self.responses}

    def classify(self, status_code: int) -> ResponseClassification:
        """Classify a status observed at call time against the declared responses."""
        return classify_status(
            self.declared_statuses,
            status_code,
            success_codes={r.status_code for r in self.responses if r.is_success},
        )


def referenced_names(descriptor: TypeDescriptor) -> set[str]:
    """Collect the identifiers of all named types a descriptor refers to."""
    if isinstance(descriptor, Named):
        return {descriptor.identifier}
    if isinstance(descriptor, Sequence):
        return referenced_names(descriptor.element)
    if isinstance(descriptor, (Primitive, Unit, Opaque)):
        return set()
    raise TypeError(f'Not a type descriptor: {descriptor!r}')

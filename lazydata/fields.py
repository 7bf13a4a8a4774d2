"""Field catalog: the ordered, typed field list of a record type."""

# Module responsibilities:
# - Resolve each public field of a record type to a FieldDescriptor in declaration order.
# - Support dataclasses, pydantic models and explicitly registered descriptor tables.
# - Construct records from name -> value mappings, filling in field defaults.

from __future__ import annotations

import dataclasses
import datetime as dt
import types
import typing
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Callable, Dict, Iterable, Mapping, Optional, Sequence, Tuple, Union

from pydantic import BaseModel

from .errors import UnsupportedFieldError


class FieldKind(str, Enum):
    """Coercion family of a declared field type."""

    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    DATE = "date"
    STRING = "string"
    OTHER = "other"


class _Missing:
    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()

_NAMED_TYPES: Dict[str, type] = {
    "int": int,
    "float": float,
    "bool": bool,
    "str": str,
    "Decimal": Decimal,
    "datetime": dt.datetime,
    "datetime.datetime": dt.datetime,
    "date": dt.date,
    "datetime.date": dt.date,
}


@dataclass(frozen=True)
class FieldDescriptor:
    """Name, coercion kind and ordinal position of one record field."""

    name: str
    kind: FieldKind
    position: int
    python_type: Any = str
    nullable: bool = False
    default_value: Any = MISSING
    default_factory: Optional[Callable[[], Any]] = None

    def get(self, record: Any) -> Any:
        return getattr(record, self.name)

    def set(self, record: Any, value: Any) -> None:
        setattr(record, self.name, value)

    def default(self) -> Any:
        """Declared default of the field, or its zero value when none is declared."""

        if self.default_factory is not None:
            return self.default_factory()
        if self.default_value is not MISSING:
            return self.default_value
        return self.zero()

    def zero(self) -> Any:
        """Value assigned when a cell is empty."""

        if self.nullable:
            return None
        if self.kind is FieldKind.INTEGER:
            return 0
        if self.kind is FieldKind.FLOAT:
            return Decimal(0) if _is_subclass(self.python_type, Decimal) else 0.0
        if self.kind is FieldKind.BOOLEAN:
            return False
        if self.kind is FieldKind.STRING:
            return ""
        return None


FieldSpec = Union[FieldDescriptor, Tuple[str, Any]]

_REGISTRY: Dict[type, Tuple[FieldDescriptor, ...]] = {}


def _is_subclass(candidate: Any, parent: type) -> bool:
    return isinstance(candidate, type) and issubclass(candidate, parent)


def resolve_kind(annotation: Any) -> Tuple[FieldKind, Any, bool]:
    """Map a type annotation to ``(kind, python_type, nullable)``.

    ``Optional[X]`` resolves like ``X`` with ``nullable`` set. Unions of more
    than one concrete type resolve to ``FieldKind.OTHER``.
    """

    if isinstance(annotation, str):
        annotation = _NAMED_TYPES.get(annotation.strip(), annotation)

    origin = typing.get_origin(annotation)
    if origin is Union or origin is getattr(types, "UnionType", None):
        members = [arg for arg in typing.get_args(annotation) if arg is not type(None)]
        if len(members) == 1:
            kind, python_type, _ = resolve_kind(members[0])
            return kind, python_type, True
        return FieldKind.OTHER, annotation, True

    if _is_subclass(annotation, bool):
        return FieldKind.BOOLEAN, annotation, False
    if _is_subclass(annotation, int) and not _is_subclass(annotation, Enum):
        return FieldKind.INTEGER, annotation, False
    if _is_subclass(annotation, (float, Decimal)):
        return FieldKind.FLOAT, annotation, False
    if _is_subclass(annotation, dt.date):
        return FieldKind.DATE, annotation, False
    if annotation is str:
        return FieldKind.STRING, annotation, False
    return FieldKind.OTHER, annotation, False


def _type_hints(record_type: type) -> Dict[str, Any]:
    try:
        return typing.get_type_hints(record_type)
    except (NameError, TypeError):
        # Unresolvable forward references fall back to the raw annotations.
        return dict(getattr(record_type, "__annotations__", {}))


def _descriptor(
    name: str,
    annotation: Any,
    position: int,
    default_value: Any = MISSING,
    default_factory: Optional[Callable[[], Any]] = None,
) -> FieldDescriptor:
    kind, python_type, nullable = resolve_kind(annotation)
    return FieldDescriptor(
        name=name,
        kind=kind,
        position=position,
        python_type=python_type,
        nullable=nullable,
        default_value=default_value,
        default_factory=default_factory,
    )


def _dataclass_fields(record_type: type) -> Tuple[FieldDescriptor, ...]:
    hints = _type_hints(record_type)
    descriptors = []
    for field in dataclasses.fields(record_type):
        if field.name.startswith("_") or not field.init:
            continue
        default_factory = (
            field.default_factory if field.default_factory is not dataclasses.MISSING else None
        )
        default_value = field.default if field.default is not dataclasses.MISSING else MISSING
        descriptors.append(
            _descriptor(
                field.name,
                hints.get(field.name, field.type),
                len(descriptors),
                default_value,
                default_factory,
            )
        )
    return tuple(descriptors)


def _pydantic_fields(record_type: type) -> Tuple[FieldDescriptor, ...]:
    descriptors = []
    for name, info in record_type.model_fields.items():
        if name.startswith("_"):
            continue
        default_value = MISSING if info.is_required() or info.default_factory else info.default
        descriptors.append(
            _descriptor(name, info.annotation, len(descriptors), default_value, info.default_factory)
        )
    return tuple(descriptors)


def register_record(record_type: type, fields: Sequence[FieldSpec]) -> Tuple[FieldDescriptor, ...]:
    """Install an explicit field table for *record_type*.

    Registered types are built by calling ``record_type()`` without arguments
    and assigning every field afterwards, so they need a no-argument
    constructor and writable attributes.

    Args:
        record_type: Class whose instances will be exported/imported.
        fields: ``(name, python_type)`` pairs or ready-made descriptors, in
            column order. Positions are renumbered to match the sequence.

    Returns:
        The registered descriptors.
    """

    descriptors = []
    for position, entry in enumerate(fields):
        if isinstance(entry, FieldDescriptor):
            descriptors.append(dataclasses.replace(entry, position=position))
        else:
            name, annotation = entry
            descriptors.append(_descriptor(name, annotation, position))
    names = [descriptor.name for descriptor in descriptors]
    if len(set(names)) != len(names):
        raise ValueError(f"Duplicate field names registered for {record_type.__name__}: {names}")
    _REGISTRY[record_type] = tuple(descriptors)
    return _REGISTRY[record_type]


def unregister_record(record_type: type) -> None:
    """Remove an explicit field table; introspection applies again afterwards."""

    _REGISTRY.pop(record_type, None)


def catalog(record_type: type) -> Tuple[FieldDescriptor, ...]:
    """Return the field descriptors of *record_type* in declaration order.

    Raises:
        UnsupportedFieldError: When the type is neither registered, a
            dataclass, nor a pydantic model.
    """

    if record_type in _REGISTRY:
        return _REGISTRY[record_type]
    if dataclasses.is_dataclass(record_type) and isinstance(record_type, type):
        return _dataclass_fields(record_type)
    if _is_subclass(record_type, BaseModel):
        return _pydantic_fields(record_type)
    raise UnsupportedFieldError(
        f"Cannot catalog fields of {record_type!r}: use a dataclass, a pydantic model "
        "or register_record()"
    )


def field_names(record_type: type) -> Tuple[str, ...]:
    return tuple(descriptor.name for descriptor in catalog(record_type))


def build_record(
    record_type: type,
    values: Mapping[str, Any],
    fields: Optional[Iterable[FieldDescriptor]] = None,
) -> Any:
    """Construct a record, defaulting every field absent from *values*."""

    descriptors = tuple(fields) if fields is not None else catalog(record_type)
    if record_type in _REGISTRY:
        record = record_type()
        for descriptor in descriptors:
            descriptor.set(record, values[descriptor.name] if descriptor.name in values else descriptor.default())
        return record

    kwargs = {
        descriptor.name: values[descriptor.name] if descriptor.name in values else descriptor.default()
        for descriptor in descriptors
    }
    return record_type(**kwargs)

"""Target type descriptors.

A TargetDescriptor lists every writable field of a target class. It is
built once per class from the class annotations (or from ``model_fields``
for Pydantic models) and cached for as long as the class is alive.

Annotations naming a type that cannot be resolved at runtime (for example
one imported under ``TYPE_CHECKING``) are kept unresolved; such fields
are read as raw driver values.
"""

from __future__ import annotations

import dataclasses
import inspect
import logging
import sys
import types
import weakref
from dataclasses import dataclass
from typing import Annotated, Any, ClassVar, Union, get_args, get_origin, get_type_hints

from pydantic import BaseModel

from row_reflect.core.exceptions import AnnotationResolutionError
from row_reflect.mapping.column import Column

logger = logging.getLogger(__name__)

_NoneType = type(None)


@dataclass(frozen=True)
class FieldDescriptor:
    """One settable slot on a target class.

    ``name`` is the declared name without leading underscores or private
    name mangling; ``attribute`` is the real attribute written on the
    instance.
    """

    name: str
    attribute: str
    field_type: Any
    nullable: bool = False
    column: str | None = None

    @property
    def lookup_name(self) -> str:
        """Name matched against column labels."""
        return self.column or self.name


@dataclass(frozen=True)
class TargetDescriptor:
    """Immutable field layout of a target class."""

    class_name: str
    fields: tuple[FieldDescriptor, ...]

    def field(self, name: str) -> FieldDescriptor | None:
        """Look up a field by declared name."""
        for descriptor in self.fields:
            if descriptor.name == name:
                return descriptor
        return None


# Written once per class; a concurrent duplicate build stores an equal value.
_descriptor_cache: weakref.WeakKeyDictionary[type, TargetDescriptor] = (
    weakref.WeakKeyDictionary()
)


def describe(target_class: type) -> TargetDescriptor:
    """Return the descriptor for ``target_class``, cached when it is a class."""
    if not isinstance(target_class, type):
        return _build_descriptor(target_class)
    descriptor = _descriptor_cache.get(target_class)
    if descriptor is None:
        descriptor = _build_descriptor(target_class)
        _descriptor_cache[target_class] = descriptor
    return descriptor


def _is_pydantic_model(cls: type) -> bool:
    return isinstance(cls, type) and issubclass(cls, BaseModel)


def _unwrap(annotation: Any) -> tuple[Any, bool, str | None]:
    """Strip Annotated and Optional wrappers.

    Returns:
        (field_type, nullable, column) where column comes from a Column marker.
    """
    column: str | None = None
    nullable = False
    while True:
        origin = get_origin(annotation)
        if origin is Annotated:
            base, *extras = get_args(annotation)
            if column is None:
                column = next((e.name for e in extras if isinstance(e, Column)), None)
            annotation = base
        elif origin is Union or origin is types.UnionType:
            members = get_args(annotation)
            non_none = [m for m in members if m is not _NoneType]
            if len(non_none) == len(members):
                break
            nullable = True
            if len(non_none) != 1:
                break
            annotation = non_none[0]
        else:
            break
    return annotation, nullable, column


def _declared_name(owner: type, attribute: str) -> str:
    """Undo private name mangling and strip leading underscores."""
    mangled_prefix = f"_{owner.__name__.lstrip('_')}__"
    if attribute.startswith(mangled_prefix):
        attribute = attribute[len(mangled_prefix) :]
    return attribute.lstrip("_") or attribute


def _is_skipped(annotation: Any) -> bool:
    if annotation is ClassVar or get_origin(annotation) is ClassVar:
        return True
    return isinstance(annotation, dataclasses.InitVar)


def _pydantic_fields(target_class: type[BaseModel]) -> list[FieldDescriptor]:
    result: list[FieldDescriptor] = []
    for name, info in target_class.model_fields.items():
        field_type, nullable, column = _unwrap(info.annotation)
        if column is None:
            column = next((m.name for m in info.metadata if isinstance(m, Column)), None)
        if column is None and info.alias:
            column = info.alias
        result.append(
            FieldDescriptor(
                name=name,
                attribute=name,
                field_type=field_type,
                nullable=nullable,
                column=column,
            )
        )
    return result


def _raw_annotations(owner: type) -> dict[str, Any]:
    """Annotations declared directly on ``owner``, without evaluating names."""
    if sys.version_info >= (3, 14):
        import annotationlib

        return annotationlib.get_annotations(owner, format=annotationlib.Format.FORWARDREF)
    return inspect.get_annotations(owner)


def _resolve_annotation(owner: type, attribute: str, raw: Any) -> Any:
    """Evaluate one string annotation in the scope of its declaring class.

    Unresolvable names leave the annotation as is, unless it carries a
    Column marker, which must be readable.
    """
    if not isinstance(raw, str):
        return raw
    module = sys.modules.get(owner.__module__)
    globalns = dict(vars(module)) if module is not None else {}
    try:
        return eval(raw, globalns, dict(vars(owner)))  # noqa: S307
    except NameError as e:
        if "Column(" in raw:
            raise AnnotationResolutionError(owner.__qualname__, attribute, raw, str(e)) from e
        logger.debug(
            "Leaving annotation %r of %s.%s unresolved: %s",
            raw,
            owner.__qualname__,
            attribute,
            e,
        )
        return raw


def _resolve_hints(target_class: type, owners: dict[str, type]) -> dict[str, Any]:
    try:
        return get_type_hints(target_class, include_extras=True)
    except NameError as e:
        logger.debug(
            "Resolving annotations of %s field by field: %s", target_class.__qualname__, e
        )
    return {
        attribute: _resolve_annotation(owner, attribute, _raw_annotations(owner)[attribute])
        for attribute, owner in owners.items()
    }


def _annotated_fields(target_class: type) -> list[FieldDescriptor]:
    # attribute -> declaring class, base classes first
    owners: dict[str, type] = {}
    for owner in reversed(target_class.__mro__):
        if owner is object:
            continue
        for attribute in _raw_annotations(owner):
            owners.setdefault(attribute, owner)

    hints = _resolve_hints(target_class, owners)

    result: list[FieldDescriptor] = []
    for attribute, owner in owners.items():
        if attribute.startswith("__") and attribute.endswith("__"):
            continue
        annotation = hints.get(attribute)
        if annotation is None or _is_skipped(annotation):
            continue
        field_type, nullable, column = _unwrap(annotation)
        result.append(
            FieldDescriptor(
                name=_declared_name(owner, attribute),
                attribute=attribute,
                field_type=field_type,
                nullable=nullable,
                column=column,
            )
        )
    return result


def _build_descriptor(target_class: type) -> TargetDescriptor:
    if _is_pydantic_model(target_class):
        fields = _pydantic_fields(target_class)
    else:
        fields = _annotated_fields(target_class)

    logger.debug(
        "Built descriptor for %s with %d field(s): %s",
        getattr(target_class, "__qualname__", target_class),
        len(fields),
        [f.name for f in fields],
    )
    return TargetDescriptor(
        class_name=getattr(target_class, "__qualname__", repr(target_class)),
        fields=tuple(fields),
    )

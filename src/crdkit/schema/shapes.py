"""Field shape model and structural inference from type annotations."""

from __future__ import annotations

import collections.abc as cabc
import types
from dataclasses import dataclass, replace
from enum import Enum
from typing import Annotated, Any, Iterator, Literal, Union, get_args, get_origin

from pydantic import BaseModel

from crdkit.schema.base import Record


class ScalarKind(str, Enum):
    SIGNED_INT = "signed-int"
    UNSIGNED_INT = "unsigned-int"
    FLOAT = "float"
    BOOL = "bool"
    STRING = "string"
    ENUM = "enum"
    OPAQUE = "opaque"


class ContainerKind(str, Enum):
    SEQUENCE = "sequence"
    MAP = "map"


NUMERIC_KINDS = frozenset(
    {ScalarKind.SIGNED_INT, ScalarKind.UNSIGNED_INT, ScalarKind.FLOAT}
)
LITERAL_KINDS = NUMERIC_KINDS | {ScalarKind.BOOL, ScalarKind.STRING}


@dataclass(frozen=True)
class Kind:
    """Annotation marker that refines the scalar kind of a field."""

    kind: ScalarKind


@dataclass(frozen=True)
class ScalarShape:
    kind: ScalarKind
    # Enum class or tuple of Literal values for ScalarKind.ENUM.
    variants: Any = None

    @property
    def tag(self) -> ScalarKind:
        return self.kind

    def describe(self) -> str:
        return self.kind.value


@dataclass(frozen=True)
class OptionalShape:
    inner: FieldShape

    @property
    def tag(self) -> None:
        return None

    def describe(self) -> str:
        return f"optional[{self.inner.describe()}]"


@dataclass(frozen=True)
class SequenceShape:
    inner: FieldShape

    @property
    def tag(self) -> ContainerKind:
        return ContainerKind.SEQUENCE

    def describe(self) -> str:
        return f"sequence[{self.inner.describe()}]"


@dataclass(frozen=True)
class MapShape:
    key: FieldShape
    value: FieldShape

    @property
    def tag(self) -> ContainerKind:
        return ContainerKind.MAP

    def describe(self) -> str:
        return f"map[{self.key.describe()}, {self.value.describe()}]"


@dataclass(frozen=True)
class RecordShape:
    record_type: Any

    @property
    def tag(self) -> None:
        return None

    @property
    def is_record(self) -> bool:
        return isinstance(self.record_type, type) and issubclass(
            self.record_type, Record
        )

    def describe(self) -> str:
        return f"record[{getattr(self.record_type, '__name__', self.record_type)}]"


FieldShape = ScalarShape | OptionalShape | SequenceShape | MapShape | RecordShape

OPAQUE = ScalarShape(ScalarKind.OPAQUE)

_SEQUENCE_TYPES = (list, tuple, set, frozenset)
_MAP_TYPES = (dict,)


def infer_shape(annotation: Any, metadata: cabc.Iterable[Any] = ()) -> FieldShape:
    """Classify a field annotation.

    `metadata` holds the annotation extras pydantic moved off the outermost
    `Annotated`; a `Kind` marker there refines the innermost scalar.
    """
    shape = _infer(annotation)
    hints = [item.kind for item in metadata if isinstance(item, Kind)]
    if hints:
        shape = _with_kind(shape, hints[-1])
    return shape


def _infer(annotation: Any) -> FieldShape:
    origin = get_origin(annotation)
    if origin is Annotated:
        base, *extras = get_args(annotation)
        return infer_shape(base, extras)
    if origin is Union or origin is types.UnionType:
        return _infer_union(get_args(annotation))
    if origin is Literal:
        return ScalarShape(ScalarKind.ENUM, variants=get_args(annotation))
    if origin is not None:
        return _infer_generic(origin, get_args(annotation))
    return _infer_plain(annotation)


def _infer_union(args: tuple[Any, ...]) -> FieldShape:
    members = [arg for arg in args if arg is not types.NoneType]
    if len(members) == len(args):
        return OPAQUE
    if len(members) == 1:
        return OptionalShape(_infer(members[0]))
    return OptionalShape(OPAQUE)


def _infer_generic(origin: Any, args: tuple[Any, ...]) -> FieldShape:
    if _is_map_type(origin):
        key = _infer(args[0]) if args else OPAQUE
        value = _infer(args[1]) if len(args) > 1 else OPAQUE
        return MapShape(key, value)
    if _is_sequence_type(origin):
        return SequenceShape(_infer(args[0]) if args else OPAQUE)
    return RecordShape(origin)


def _infer_plain(annotation: Any) -> FieldShape:
    if annotation is Any or not isinstance(annotation, type):
        return OPAQUE
    if annotation is bool:
        return ScalarShape(ScalarKind.BOOL)
    if issubclass(annotation, Enum):
        return ScalarShape(ScalarKind.ENUM, variants=annotation)
    if issubclass(annotation, int):
        return ScalarShape(ScalarKind.SIGNED_INT)
    if issubclass(annotation, float):
        return ScalarShape(ScalarKind.FLOAT)
    if issubclass(annotation, str):
        return ScalarShape(ScalarKind.STRING)
    if issubclass(annotation, Record):
        return RecordShape(annotation)
    if issubclass(annotation, BaseModel):
        return OPAQUE
    if _is_map_type(annotation):
        return MapShape(OPAQUE, OPAQUE)
    if _is_sequence_type(annotation):
        return SequenceShape(OPAQUE)
    return OPAQUE


def _is_map_type(origin: Any) -> bool:
    return isinstance(origin, type) and (
        issubclass(origin, _MAP_TYPES) or issubclass(origin, cabc.Mapping)
    )


def _is_sequence_type(origin: Any) -> bool:
    if not isinstance(origin, type) or issubclass(origin, (str, bytes)):
        return False
    return (
        issubclass(origin, _SEQUENCE_TYPES)
        or issubclass(origin, (cabc.Sequence, cabc.Set))
    )


def _with_kind(shape: FieldShape, kind: ScalarKind) -> FieldShape:
    if isinstance(shape, ScalarShape):
        return replace(shape, kind=kind)
    if isinstance(shape, OptionalShape):
        return OptionalShape(_with_kind(shape.inner, kind))
    return shape


def unwrap_optional(shape: FieldShape) -> tuple[FieldShape, bool]:
    """Strip one level of optionality."""
    if isinstance(shape, OptionalShape):
        return shape.inner, True
    return shape, False


def iter_record_shapes(shape: FieldShape) -> Iterator[RecordShape]:
    """Yield every nested-record shape reachable through wrappers."""
    if isinstance(shape, RecordShape):
        yield shape
    elif isinstance(shape, (OptionalShape, SequenceShape)):
        yield from iter_record_shapes(shape.inner)
    elif isinstance(shape, MapShape):
        yield from iter_record_shapes(shape.value)


def contains_record(shape: FieldShape) -> bool:
    return next(iter_record_shapes(shape), None) is not None


def iter_nested_records(
    shape: FieldShape, value: Any, label: str
) -> Iterator[tuple[str, Any]]:
    """Yield `(label, record)` for each present nested record in `value`."""
    if value is None:
        return
    if isinstance(shape, RecordShape):
        yield label, value
    elif isinstance(shape, OptionalShape):
        yield from iter_nested_records(shape.inner, value, label)
    elif isinstance(shape, SequenceShape):
        for index, item in enumerate(value):
            yield from iter_nested_records(shape.inner, item, f"{label}[{index}]")
    elif isinstance(shape, MapShape):
        for key, item in value.items():
            yield from iter_nested_records(shape.value, item, f"{label}[{key}]")

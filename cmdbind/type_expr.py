"""Data model for value type expressions found in signatures and fields."""

from collections.abc import Iterator
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Primitive:
    """Scalar or well-known external type (String, i32, Uuid, ...)."""

    name: str


@dataclass(frozen=True)
class ListOf:
    """Homogeneous sequence, e.g. Vec<T> or [T]."""

    inner: "TypeExpr"


@dataclass(frozen=True)
class OptionalOf:
    """Nullable value, e.g. Option<T>."""

    inner: "TypeExpr"


@dataclass(frozen=True)
class Fallible:
    """Result<T, E>; only the success payload is kept."""

    ok: "TypeExpr"


@dataclass(frozen=True)
class MapOf:
    """Key/value mapping, e.g. HashMap<K, V>."""

    key: "TypeExpr"
    value: "TypeExpr"


@dataclass(frozen=True)
class TupleOf:
    """Fixed-size heterogeneous tuple."""

    items: tuple["TypeExpr", ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class CustomRef:
    """Reference to a user-declared type; `name` may be a `::` path.

    `args` holds the type arguments of a generic custom type (Page<User>).
    """

    name: str
    args: tuple["TypeExpr", ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class GenericParam:
    """Generic parameter of the enclosing declaration (T, K, V, ...)."""

    name: str


@dataclass(frozen=True)
class Unit:
    """The empty value ()."""


@dataclass(frozen=True)
class Unrecognized:
    """Type the extractor could not classify."""

    desc: str


TypeExpr = (
    Primitive
    | ListOf
    | OptionalOf
    | Fallible
    | MapOf
    | TupleOf
    | CustomRef
    | GenericParam
    | Unit
    | Unrecognized
)


def iter_custom_refs(expr: TypeExpr) -> Iterator[str]:
    """Yield every custom type reference inside a type expression.

    Containers (list, optional, fallible, map, tuple) are walked
    transparently. References are yielded in first-seen order, without
    duplicates.
    """
    seen: set[str] = set()
    stack: list[TypeExpr] = [expr]
    while stack:
        current = stack.pop()
        if isinstance(current, CustomRef):
            if current.name not in seen:
                seen.add(current.name)
                yield current.name
            stack.extend(reversed(current.args))
        elif isinstance(current, (ListOf, OptionalOf)):
            stack.append(current.inner)
        elif isinstance(current, Fallible):
            stack.append(current.ok)
        elif isinstance(current, MapOf):
            stack.append(current.value)
            stack.append(current.key)
        elif isinstance(current, TupleOf):
            stack.extend(reversed(current.items))

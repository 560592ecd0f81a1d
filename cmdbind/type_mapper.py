"""Logic for rendering type expressions as TypeScript types."""

import logging
from collections.abc import Collection
from pathlib import Path

from cmdbind.path_resolver import PathResolver
from cmdbind.resolution_result import declared_name, is_found
from cmdbind.type_expr import (
    CustomRef,
    Fallible,
    GenericParam,
    ListOf,
    MapOf,
    OptionalOf,
    Primitive,
    TupleOf,
    TypeExpr,
    Unit,
    Unrecognized,
    iter_custom_refs,
)

logger = logging.getLogger(__name__)

PRIMITIVE_TS = {
    "String": "string",
    "str": "string",
    "char": "string",
    "bool": "boolean",
    "Duration": "number",
    "Value": "unknown",
    "Bytes": "number[]",
}
NUMBER_NAMES = {
    "i8",
    "i16",
    "i32",
    "i64",
    "i128",
    "isize",
    "u8",
    "u16",
    "u32",
    "u64",
    "u128",
    "usize",
    "f32",
    "f64",
}
STRING_LIKE_NAMES = {
    "DateTime",
    "NaiveDateTime",
    "NaiveDate",
    "NaiveTime",
    "OffsetDateTime",
    "PrimitiveDateTime",
    "Date",
    "Time",
    "Uuid",
    "Decimal",
    "BigDecimal",
    "PathBuf",
    "Path",
    "Url",
    "IpAddr",
    "Ipv4Addr",
    "Ipv6Addr",
}


class TypeMapper:
    """Maps TypeExpr values to TypeScript type text.

    Custom references are resolved from the file they appear in, so an
    aliased import renders under the declared name of its target.
    """

    def __init__(
        self,
        collected: Collection[str] = (),
        resolver: PathResolver | None = None,
        type_prefix: str = "",
        type_suffix: str = "",
    ) -> None:
        """Initialize the mapper with the collected type names and naming affixes."""
        self.collected = set(collected)
        self.resolver = resolver
        self.type_prefix = type_prefix
        self.type_suffix = type_suffix

    def type_name(self, name: str) -> str:
        """Apply the configured affixes to a declared type name."""
        return f"{self.type_prefix}{name}{self.type_suffix}"

    def map(self, expr: TypeExpr, context: Path | None = None) -> str:
        """Render `expr`; `context` is the file the expression was written in."""
        if isinstance(expr, Primitive):
            return _primitive(expr.name)
        if isinstance(expr, ListOf):
            return f"{_wrap_union(self.map(expr.inner, context))}[]"
        if isinstance(expr, OptionalOf):
            return f"{self.map(expr.inner, context)} | null"
        if isinstance(expr, Fallible):
            # Errors surface as a rejected promise.
            return self.map(expr.ok, context)
        if isinstance(expr, MapOf):
            key = self.map(expr.key, context)
            value = self.map(expr.value, context)
            return f"Record<{key}, {value}>"
        if isinstance(expr, TupleOf):
            if not expr.items:
                return "void"
            return "[" + ", ".join(self.map(t, context) for t in expr.items) + "]"
        if isinstance(expr, CustomRef):
            return self._custom(expr, context)
        if isinstance(expr, GenericParam):
            return expr.name
        if isinstance(expr, Unit):
            return "void"
        if isinstance(expr, Unrecognized):
            logger.warning(f"Unknown type '{expr.desc}', using 'unknown'")
            return "unknown"
        raise TypeError(f"Not a type expression: {expr!r}")

    def referenced_types(
        self, expr: TypeExpr, context: Path | None = None
    ) -> list[str]:
        """Return the collected type names `expr` renders, in first-seen order."""
        names = []
        for type_path in iter_custom_refs(expr):
            name = self._declared(type_path, context)
            if name is not None and name in self.collected and name not in names:
                names.append(name)
        return names

    def _custom(self, expr: CustomRef, context: Path | None) -> str:
        name = self._declared(expr.name, context)
        if name is None:
            logger.warning(
                f"Type '{expr.name}' in {context} does not resolve to a single "
                "file, using 'unknown'"
            )
            return "unknown"
        rendered = self.type_name(name) if name in self.collected else name
        if expr.args:
            rendered += "<" + ", ".join(self.map(a, context) for a in expr.args) + ">"
        return rendered

    def _declared(self, type_path: str, context: Path | None) -> str | None:
        """Return the declared name behind `type_path`, or None if unresolved.

        Without a resolver or context the final path segment is used as is.
        """
        if self.resolver is None or context is None:
            return type_path.rsplit("::", 1)[-1].strip()
        result = self.resolver.resolve_type(type_path, context)
        if not is_found(result):
            return None
        return declared_name(type_path, result)


def _primitive(name: str) -> str:
    if name in PRIMITIVE_TS:
        return PRIMITIVE_TS[name]
    if name in NUMBER_NAMES:
        return "number"
    if name in STRING_LIKE_NAMES:
        return "string"
    logger.warning(f"Unknown primitive type '{name}', using 'unknown'")
    return "unknown"


def _wrap_union(ts: str) -> str:
    return f"({ts})" if " | " in ts else ts

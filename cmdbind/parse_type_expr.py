"""Logic for parsing textual type annotations from fact documents."""

import re
from collections.abc import Collection

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
)

TOKEN_RE = re.compile(r"\s*(::|'[A-Za-z_]\w*|[A-Za-z_]\w*|\d+|[<>()\[\],;&])")

STRING_NAMES = {"String", "str", "char"}
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
# Serialized as strings or numbers by the usual serde impls.
WELL_KNOWN_NAMES = {
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
    "Duration",
    "Value",
    "Bytes",
}
SEQUENCE_NAMES = {"Vec", "VecDeque", "HashSet", "BTreeSet", "IndexSet"}
MAP_NAMES = {"HashMap", "BTreeMap", "IndexMap"}
TRANSPARENT_NAMES = {"Box", "Arc", "Rc", "Cow"}


class _TypeSyntaxError(ValueError):
    pass


def parse_type_expr(text: str, generic_params: Collection[str] = ()) -> TypeExpr:
    """Parse a type such as `Result<Vec<crate::models::User>, String>`.

    Names listed in `generic_params` become GenericParam. Unparsable input
    yields Unrecognized instead of raising.
    """
    try:
        tokens = _tokenize(text)
        parser = _TypeParser(tokens, set(generic_params))
        expr = parser.parse_type()
        if not parser.at_end():
            raise _TypeSyntaxError(f"trailing input in {text!r}")
    except _TypeSyntaxError:
        return Unrecognized(text.strip())
    return expr


def _tokenize(text: str) -> list[str]:
    tokens = []
    pos = 0
    stripped = text.rstrip()
    while pos < len(stripped):
        match = TOKEN_RE.match(stripped, pos)
        if not match:
            raise _TypeSyntaxError(f"unexpected character at {pos} in {text!r}")
        tokens.append(match.group(1))
        pos = match.end()
    if not tokens:
        raise _TypeSyntaxError("empty type")
    return tokens


class _TypeParser:
    """Recursive-descent parser over the token list."""

    def __init__(self, tokens: list[str], generic_params: set[str]) -> None:
        self.tokens = tokens
        self.pos = 0
        self.generic_params = generic_params

    def at_end(self) -> bool:
        return self.pos >= len(self.tokens)

    def peek(self) -> str | None:
        return None if self.at_end() else self.tokens[self.pos]

    def advance(self) -> str:
        if self.at_end():
            raise _TypeSyntaxError("unexpected end of type")
        tok = self.tokens[self.pos]
        self.pos += 1
        return tok

    def expect(self, tok: str) -> None:
        got = self.advance()
        if got != tok:
            raise _TypeSyntaxError(f"expected {tok!r}, got {got!r}")

    def parse_type(self) -> TypeExpr:
        tok = self.peek()
        if tok == "&":
            self.advance()
            if self.peek() is not None and self.peek().startswith("'"):
                self.advance()
            if self.peek() == "mut":
                self.advance()
            return self.parse_type()
        if tok == "(":
            return self._parse_tuple()
        if tok == "[":
            return self._parse_slice()
        return self._parse_path()

    def _parse_tuple(self) -> TypeExpr:
        self.expect("(")
        items: list[TypeExpr] = []
        while self.peek() != ")":
            items.append(self.parse_type())
            if self.peek() == ",":
                self.advance()
            elif self.peek() != ")":
                raise _TypeSyntaxError("expected ',' or ')' in tuple")
        self.expect(")")
        if not items:
            return Unit()
        return TupleOf(tuple(items))

    def _parse_slice(self) -> TypeExpr:
        self.expect("[")
        inner = self.parse_type()
        if self.peek() == ";":
            self.advance()
            self.advance()  # array length
        self.expect("]")
        return ListOf(inner)

    def _parse_path(self) -> TypeExpr:
        segments: list[str] = []
        if self.peek() == "::":
            self.advance()
        while True:
            seg = self.advance()
            if not (seg[0].isalpha() or seg[0] == "_"):
                raise _TypeSyntaxError(f"expected identifier, got {seg!r}")
            if seg in {"dyn", "impl"}:
                raise _TypeSyntaxError("trait objects are not value types")
            segments.append(seg)
            if self.peek() != "::":
                break
            self.advance()

        args: list[TypeExpr] = []
        if self.peek() == "<":
            args = self._parse_generic_args()
        return self._classify(segments, args)

    def _parse_generic_args(self) -> list[TypeExpr]:
        self.expect("<")
        args: list[TypeExpr] = []
        while self.peek() != ">":
            tok = self.peek()
            if tok is not None and tok.startswith("'"):
                self.advance()  # lifetimes carry no type information
            else:
                args.append(self.parse_type())
            if self.peek() == ",":
                self.advance()
            elif self.peek() != ">":
                raise _TypeSyntaxError("expected ',' or '>' in generic arguments")
        self.expect(">")
        return args

    def _classify(self, segments: list[str], args: list[TypeExpr]) -> TypeExpr:
        name = segments[-1]
        if len(segments) == 1 and name in self.generic_params:
            return GenericParam(name)
        if name in STRING_NAMES:
            return Primitive("String")
        if name in NUMBER_NAMES or name == "bool" or name in WELL_KNOWN_NAMES:
            return Primitive(name)
        if name in SEQUENCE_NAMES:
            return ListOf(args[0]) if args else Unrecognized(f"{name}<?>")
        if name == "Option":
            return OptionalOf(args[0]) if args else Unrecognized("Option<?>")
        if name == "Result":
            return Fallible(args[0]) if args else Unrecognized("Result<?>")
        if name in MAP_NAMES:
            if len(args) < 2:
                return Unrecognized(f"{name}<?, ?>")
            return MapOf(args[0], args[1])
        if name in TRANSPARENT_NAMES:
            return args[0] if args else Unrecognized(f"{name}<?>")
        return CustomRef("::".join(segments), tuple(args))

"""Data models for per-file facts supplied by the extraction layer."""

from dataclasses import dataclass, field
from pathlib import Path

from cmdbind.type_expr import TypeExpr

STRUCT = "struct"
ENUM = "enum"
ALIAS = "alias"
DECLARATION_KINDS = {STRUCT, ENUM, ALIAS}

ORIGIN_SOURCE = "source"
ORIGIN_SYNTHETIC = "synthetic"


@dataclass
class FieldFact:
    """Named field of a struct or struct-like enum variant."""

    name: str
    type: TypeExpr
    optional: bool = False  # skipped by the serializer when absent


@dataclass
class VariantFact:
    """Enum variant; at most one of `tuple` and `fields` is non-empty."""

    name: str
    tuple: list[TypeExpr] = field(default_factory=list)
    fields: list[FieldFact] = field(default_factory=list)

    @property
    def is_unit(self) -> bool:
        """Check whether the variant carries no payload."""
        return not self.tuple and not self.fields


@dataclass
class DeclarationFact:
    """A struct, enum or type alias declared in one file."""

    name: str
    kind: str
    file: Path
    generics: list[str] = field(default_factory=list)
    fields: list[FieldFact] = field(default_factory=list)
    variants: list[VariantFact] = field(default_factory=list)
    alias_type: TypeExpr | None = None
    base_name: str | None = None  # outermost name of `alias_type`

    def referenced_types(self) -> list[TypeExpr]:
        """Return every type expression this declaration's shape mentions."""
        refs = [f.type for f in self.fields]
        for variant in self.variants:
            refs.extend(variant.tuple)
            refs.extend(f.type for f in variant.fields)
        if self.alias_type is not None:
            refs.append(self.alias_type)
        return refs


@dataclass
class ImportFact:
    """A single normalized import; `local_name` is None unless renamed."""

    path: list[str]
    local_name: str | None = None
    wildcard: bool = False


@dataclass
class CommandArg:
    """Argument of an exported command."""

    name: str
    type: TypeExpr


@dataclass
class CommandSignature:
    """Exported entry point callable from the client."""

    name: str
    args: list[CommandArg]
    return_type: TypeExpr | None
    source_file: Path
    rename_all: str | None = None

    def type_exprs(self) -> list[TypeExpr]:
        """Return argument types followed by the return type, if any."""
        exprs = [a.type for a in self.args]
        if self.return_type is not None:
            exprs.append(self.return_type)
        return exprs


@dataclass
class FileFacts:
    """Everything the extractor reported for one source file."""

    file: Path
    module_path: list[str] | None = None
    origin: str = ORIGIN_SOURCE
    declarations: list[DeclarationFact] = field(default_factory=list)
    imports: list[ImportFact] = field(default_factory=list)
    commands: list[CommandSignature] = field(default_factory=list)

    @property
    def is_synthetic(self) -> bool:
        """Check whether the facts come from a lower-priority source."""
        return self.origin == ORIGIN_SYNTHETIC

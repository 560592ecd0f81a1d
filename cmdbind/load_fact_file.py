"""Logic for loading a per-file fact document."""

import re
from pathlib import Path
from typing import Any

import yaml

from cmdbind.errors import FactFormatError
from cmdbind.facts import (
    ALIAS,
    DECLARATION_KINDS,
    ORIGIN_SOURCE,
    ORIGIN_SYNTHETIC,
    CommandArg,
    CommandSignature,
    DeclarationFact,
    FieldFact,
    FileFacts,
    ImportFact,
    VariantFact,
)
from cmdbind.parse_type_expr import parse_type_expr
from cmdbind.type_expr import CustomRef, TypeExpr

# Injected by the host framework, never sent by the client.
FRAMEWORK_ARG_TYPES = {"State", "Window", "AppHandle", "Webview", "WebviewWindow"}

OUTER_NAME_RE = re.compile(r"^\s*(?:&\s*)?(?:'\w+\s+)?(?:mut\s+)?((?:::)?[\w:]+)")


def load_fact_file(path: Path, source_root: Path | None = None) -> FileFacts:
    """Load one fact document into FileFacts.

    The `file` key is taken relative to `source_root` when one is given.
    """
    try:
        doc = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise FactFormatError(path, f"invalid YAML ({e})") from e

    if not isinstance(doc, dict):
        raise FactFormatError(path, "expected a mapping at the top level")
    if not doc.get("file"):
        raise FactFormatError(path, "missing 'file'")

    file = Path(str(doc["file"]))
    if source_root is not None and not file.is_absolute():
        file = source_root / file

    origin = str(doc.get("origin") or ORIGIN_SOURCE)
    if origin not in {ORIGIN_SOURCE, ORIGIN_SYNTHETIC}:
        raise FactFormatError(path, f"unknown origin {origin!r}")

    module_path = doc.get("module_path")
    if module_path is not None:
        module_path = [str(s) for s in _as_list(path, module_path, "module_path")]

    return FileFacts(
        file=file,
        module_path=module_path,
        origin=origin,
        declarations=[
            _declaration(path, file, d)
            for d in _as_list(path, doc.get("declarations"), "declarations")
        ],
        imports=[
            _import(path, i) for i in _as_list(path, doc.get("imports"), "imports")
        ],
        commands=[
            _command(path, file, c)
            for c in _as_list(path, doc.get("commands"), "commands")
        ],
    )


def _declaration(path: Path, file: Path, raw: Any) -> DeclarationFact:
    entry = _as_mapping(path, raw, "declaration")
    name = _required(path, entry, "name")
    kind = str(entry.get("kind") or "")
    if kind not in DECLARATION_KINDS:
        raise FactFormatError(path, f"declaration {name} has unknown kind {kind!r}")

    generics = [str(g) for g in _as_list(path, entry.get("generics"), "generics")]
    decl = DeclarationFact(name=name, kind=kind, file=file, generics=generics)
    decl.fields = [
        _field(path, f, generics) for f in _as_list(path, entry.get("fields"), "fields")
    ]

    for raw_variant in _as_list(path, entry.get("variants"), "variants"):
        variant = _as_mapping(path, raw_variant, "variant")
        decl.variants.append(
            VariantFact(
                name=_required(path, variant, "name"),
                tuple=[
                    parse_type_expr(str(t), generics)
                    for t in _as_list(path, variant.get("tuple"), "tuple")
                ],
                fields=[
                    _field(path, f, generics)
                    for f in _as_list(path, variant.get("fields"), "fields")
                ],
            )
        )

    if kind == ALIAS:
        target = entry.get("type")
        if not target:
            raise FactFormatError(path, f"alias {name} has no 'type'")
        decl.alias_type = parse_type_expr(str(target), generics)
        decl.base_name = _outer_name(str(target))
    return decl


def _field(path: Path, raw: Any, generics: list[str]) -> FieldFact:
    entry = _as_mapping(path, raw, "field")
    return FieldFact(
        name=_required(path, entry, "name"),
        type=parse_type_expr(_required(path, entry, "type"), generics),
        optional=bool(entry.get("optional", False)),
    )


def _import(path: Path, raw: Any) -> ImportFact:
    entry = _as_mapping(path, raw, "import")
    segments = entry.get("path")
    if isinstance(segments, str):
        segments = [s for s in segments.split("::") if s]
    segments = [str(s) for s in _as_list(path, segments, "import path")]
    if not segments:
        raise FactFormatError(path, "import with an empty path")
    local_name = entry.get("as")
    return ImportFact(
        path=segments,
        local_name=str(local_name) if local_name else None,
        wildcard=bool(entry.get("wildcard", False)),
    )


def _command(path: Path, file: Path, raw: Any) -> CommandSignature:
    entry = _as_mapping(path, raw, "command")
    args = []
    for raw_arg in _as_list(path, entry.get("args"), "args"):
        arg = _as_mapping(path, raw_arg, "argument")
        expr = parse_type_expr(_required(path, arg, "type"))
        if _is_framework_arg(expr):
            continue
        args.append(CommandArg(name=_required(path, arg, "name"), type=expr))

    returns = entry.get("returns")
    rename_all = entry.get("rename_all")
    return CommandSignature(
        name=_required(path, entry, "name"),
        args=args,
        return_type=parse_type_expr(str(returns)) if returns else None,
        source_file=file,
        rename_all=str(rename_all) if rename_all else None,
    )


def _is_framework_arg(expr: TypeExpr) -> bool:
    if isinstance(expr, CustomRef):
        return expr.name.rsplit("::", 1)[-1] in FRAMEWORK_ARG_TYPES
    return False


def _outer_name(type_text: str) -> str | None:
    """Return the last segment of the outermost path, e.g. Vec for Vec<User>."""
    match = OUTER_NAME_RE.match(type_text)
    if not match:
        return None
    segments = [s for s in match.group(1).split("::") if s]
    return segments[-1] if segments else None


def _required(path: Path, entry: dict[str, Any], key: str) -> str:
    value = entry.get(key)
    if value is None or value == "":
        raise FactFormatError(path, f"missing {key!r} in {entry!r}")
    return str(value)


def _as_list(path: Path, value: Any, what: str) -> list[Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise FactFormatError(path, f"{what} must be a list")
    return value


def _as_mapping(path: Path, value: Any, what: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise FactFormatError(path, f"{what} must be a mapping")
    return value

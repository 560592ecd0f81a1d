"""Logic for rendering the generated TypeScript types module."""

import json
import re

from cmdbind.facts import ALIAS, ENUM, DeclarationFact, FieldFact, VariantFact
from cmdbind.type_mapper import TypeMapper

GENERATED_HEADER = "// This file was generated by cmdbind. Do not edit by hand."

IDENTIFIER_RE = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


def render_types_file(declarations: list[DeclarationFact], mapper: TypeMapper) -> str:
    """Render every declaration as an exported TypeScript type."""
    parts = [GENERATED_HEADER, ""]
    for decl in declarations:
        if decl.kind == ALIAS:
            parts.append(_render_alias(decl, mapper))
        elif decl.kind == ENUM:
            parts.append(_render_enum(decl, mapper))
        else:
            parts.append(_render_struct(decl, mapper))
        parts.append("")
    return "\n".join(parts).rstrip() + "\n"


def _generic_suffix(decl: DeclarationFact) -> str:
    return f"<{', '.join(decl.generics)}>" if decl.generics else ""


def _render_struct(decl: DeclarationFact, mapper: TypeMapper) -> str:
    name = mapper.type_name(decl.name) + _generic_suffix(decl)
    if not decl.fields:
        return f"export interface {name} {{}}"
    lines = [f"export interface {name} {{"]
    lines.extend(f"  {_render_field(f, decl, mapper)};" for f in decl.fields)
    lines.append("}")
    return "\n".join(lines)


def _render_field(f: FieldFact, decl: DeclarationFact, mapper: TypeMapper) -> str:
    ts = mapper.map(f.type, decl.file)
    if f.optional:
        if not ts.endswith(" | null"):
            ts += " | null"
        return f"{property_name(f.name)}?: {ts}"
    return f"{property_name(f.name)}: {ts}"


def _render_enum(decl: DeclarationFact, mapper: TypeMapper) -> str:
    name = mapper.type_name(decl.name) + _generic_suffix(decl)
    if not decl.variants:
        return f"export type {name} = never;"
    members = [_render_variant(v, decl, mapper) for v in decl.variants]
    if all(v.is_unit for v in decl.variants):
        return f"export type {name} = {' | '.join(members)};"
    lines = [f"export type {name} ="]
    lines.extend(f"  | {m}" for m in members)
    lines[-1] += ";"
    return "\n".join(lines)


def _render_variant(v: VariantFact, decl: DeclarationFact, mapper: TypeMapper) -> str:
    """Externally tagged: unit variants are bare strings, payloads are objects."""
    if v.is_unit:
        return f'"{v.name}"'
    if v.fields:
        body = "; ".join(_render_field(f, decl, mapper) for f in v.fields)
        return f"{{ {property_name(v.name)}: {{ {body} }} }}"
    items = [mapper.map(t, decl.file) for t in v.tuple]
    payload = items[0] if len(items) == 1 else f"[{', '.join(items)}]"
    return f"{{ {property_name(v.name)}: {payload} }}"


def _render_alias(decl: DeclarationFact, mapper: TypeMapper) -> str:
    name = mapper.type_name(decl.name) + _generic_suffix(decl)
    target = mapper.map(decl.alias_type, decl.file) if decl.alias_type else "unknown"
    return f"export type {name} = {target};"


def property_name(name: str) -> str:
    """Quote `name` unless it is usable bare as an object key (`user-id`)."""
    return name if IDENTIFIER_RE.match(name) else json.dumps(name)

"""Logic for indexing declaration shapes by their defining file."""

from collections.abc import Iterable
from pathlib import Path

from cmdbind.facts import DeclarationFact
from cmdbind.type_expr import TypeExpr

FieldFacts = dict[tuple[str, Path], list[TypeExpr]]


def build_field_facts(declarations: Iterable[DeclarationFact]) -> FieldFacts:
    """Map each (name, file) pair to the type expressions its shape mentions."""
    field_facts: FieldFacts = {}
    for decl in declarations:
        field_facts.setdefault((decl.name, decl.file), []).extend(
            decl.referenced_types()
        )
    return field_facts

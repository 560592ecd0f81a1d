"""Logic for narrowing declarations to the types commands actually use."""

from collections.abc import Iterable, Mapping
from pathlib import Path

from cmdbind.facts import DeclarationFact


def filter_declarations(
    declarations: Iterable[DeclarationFact], resolved: Mapping[str, Path]
) -> list[DeclarationFact]:
    """Keep declarations whose (name, file) pair was resolved, in input order."""
    kept: list[DeclarationFact] = []
    seen: set[str] = set()
    for decl in declarations:
        if decl.name in seen or resolved.get(decl.name) != decl.file:
            continue
        seen.add(decl.name)
        kept.append(decl)
    return kept

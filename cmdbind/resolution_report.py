"""Logic for generating reports on command type resolution."""

import json
import time
from pathlib import Path
from typing import Any

from cmdbind.facts import CommandSignature
from cmdbind.path_resolver import PathResolver
from cmdbind.resolution_result import (
    Ambiguous,
    Found,
    FoundWithAlias,
    ResolutionResult,
    declared_name,
)
from cmdbind.type_collection_result import TypeCollectionResult
from cmdbind.type_expr import iter_custom_refs


class ResolutionReport:
    """Records how each command's type references resolved."""

    def __init__(self, resolver: PathResolver) -> None:
        """Initialize the report over the resolver used for the run."""
        self.resolver = resolver
        self.commands: list[dict[str, Any]] = []
        self.start_time = time.time()

    def add_command(self, sig: CommandSignature) -> None:
        """Resolve and record every custom reference in one signature.

        References that land on a type alias also record the alias chain's
        final base name under `alias_of`.
        """
        references = []
        for expr in sig.type_exprs():
            for type_path in iter_custom_refs(expr):
                result = self.resolver.resolve_type(type_path, sig.source_file)
                entry = {"type": type_path, **_describe(result)}
                if isinstance(result, (Found, FoundWithAlias)):
                    name = declared_name(type_path, result)
                    base = self.resolver.resolve_alias_target(name, result.file)
                    if base is not None:
                        entry["alias_of"] = base
                references.append(entry)
        self.commands.append(
            {
                "name": sig.name,
                "source_file": str(sig.source_file),
                "references": references,
            }
        )

    def generate_report(self, path: str | Path, result: TypeCollectionResult) -> None:
        """Write the summary report to a JSON file."""
        report = {
            "meta": {
                "timestamp": time.time(),
                "duration": time.time() - self.start_time,
                "total_commands": len(self.commands),
                "total_types": len(result.resolved),
            },
            "resolved": {name: str(f) for name, f in sorted(result.resolved.items())},
            "conflicts": {
                name: [str(f) for f in files]
                for name, files in sorted(result.conflicts.items())
            },
            "commands": self.commands,
        }
        out = Path(path)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(json.dumps(report, indent=2), encoding="utf-8")


def _describe(result: ResolutionResult) -> dict[str, Any]:
    if isinstance(result, Found):
        return {"outcome": "found", "file": str(result.file)}
    if isinstance(result, FoundWithAlias):
        return {
            "outcome": "found_with_alias",
            "file": str(result.file),
            "original_name": result.original_name,
        }
    if isinstance(result, Ambiguous):
        return {"outcome": "ambiguous", "files": [str(f) for f in result.files]}
    return {"outcome": "not_found"}

"""Logic for collecting every custom type reachable from exported commands."""

import logging
from collections.abc import Iterable, Mapping
from pathlib import Path

from cmdbind.facts import CommandSignature
from cmdbind.path_resolver import PathResolver
from cmdbind.resolution_result import Ambiguous, declared_name, is_found
from cmdbind.type_collection_result import TypeCollectionResult
from cmdbind.type_expr import TypeExpr, iter_custom_refs

logger = logging.getLogger(__name__)


class UsageCollector:
    """Computes the transitive closure of types used by command signatures."""

    def __init__(self, resolver: PathResolver) -> None:
        """Initialize the collector with a resolver over frozen scopes."""
        self.resolver = resolver

    def collect(
        self,
        signatures: Iterable[CommandSignature],
        field_facts: Mapping[tuple[str, Path], Iterable[TypeExpr]],
    ) -> TypeCollectionResult:
        """Resolve signature types, then follow field and variant references.

        Each reference is resolved in the context of the file it appears in:
        the command's source file for signature types, the declaring file for
        field types. Unresolved and ambiguous references are dropped; a name
        reaching two distinct files becomes a conflict.
        """
        result = TypeCollectionResult()
        worklist: list[tuple[str, Path]] = []

        for sig in signatures:
            for expr in sig.type_exprs():
                self._visit(expr, sig.source_file, result, worklist)

        processed: set[tuple[str, Path]] = set()
        while worklist:
            item = worklist.pop()
            if item in processed:
                continue
            processed.add(item)
            for expr in field_facts.get(item, ()):
                self._visit(expr, item[1], result, worklist)

        logger.debug(
            f"Collected {len(result.resolved)} types "
            f"({len(processed)} declarations expanded, "
            f"{len(result.conflicts)} conflicts)"
        )
        return result

    def _visit(
        self,
        expr: TypeExpr,
        context: Path,
        result: TypeCollectionResult,
        worklist: list[tuple[str, Path]],
    ) -> None:
        for type_path in iter_custom_refs(expr):
            outcome = self.resolver.resolve_type(type_path, context)
            if not is_found(outcome):
                kind = "ambiguous" if isinstance(outcome, Ambiguous) else "not found"
                logger.debug(f"Dropping {type_path} from {context}: {kind}")
                continue

            name = declared_name(type_path, outcome)
            file = outcome.file
            _record(result, name, file)
            worklist.append((name, file))


def _record(result: TypeCollectionResult, name: str, file: Path) -> None:
    existing = result.resolved.get(name)
    if existing is None:
        result.resolved[name] = file
        return
    if existing == file:
        return

    files = result.conflicts.setdefault(name, [existing])
    if file not in files:
        files.append(file)
        logger.debug(f"{name} resolves to both {existing} and {file}")

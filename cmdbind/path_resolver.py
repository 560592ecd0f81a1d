"""Logic for resolving type references to their defining files."""

import logging
from collections.abc import Mapping, Sequence
from pathlib import Path

from cmdbind.file_scope import FileScope, ImportedName
from cmdbind.global_index import GlobalIndex
from cmdbind.module_path import ModulePath, canonicalize_path, split_type_path
from cmdbind.resolution_result import (
    Ambiguous,
    Found,
    FoundWithAlias,
    NotFound,
    ResolutionResult,
    is_found,
)

logger = logging.getLogger(__name__)

MAX_ALIAS_HOPS = 10

Visited = set[tuple[ModulePath, str]]


class PathResolver:
    """Resolves type references against frozen scopes and the global index.

    Shadowing follows the host module system: a local declaration beats an
    explicit import, which beats a wildcard import, which beats the global
    by-name fallback. The resolver holds no mutable state, so one instance
    can serve any number of lookups.
    """

    def __init__(self, scopes: Mapping[Path, FileScope], index: GlobalIndex) -> None:
        """Initialize the resolver over a finished scan."""
        self.scopes = scopes
        self.index = index

    def resolve_type(self, type_path: str, from_file: Path) -> ResolutionResult:
        """Resolve `type_path` (e.g. `User` or `super::models::User`) from a file."""
        segments = split_type_path(type_path)
        if not segments:
            return NotFound()

        scope = self.scopes.get(from_file)
        if scope is None:
            # Synthetic facts have no imports to consult.
            result = self._lookup_global(segments[-1], None)
        elif len(segments) == 1:
            result = self._resolve_name(segments[0], scope, set())
        else:
            result = self._resolve_segments(segments, scope, set())

        logger.debug(f"{type_path} from {from_file}: {result}")
        return result

    def resolve_alias_target(self, name: str, from_file: Path) -> str | None:
        """Follow a type alias chain to its final non-alias base name.

        Returns None when `name` is not an alias. Chains longer than
        MAX_ALIAS_HOPS (including cycles) stop at the last name reached.
        """
        current = self._alias_base(name, from_file)
        if current is None:
            return None
        for _ in range(MAX_ALIAS_HOPS - 1):
            nxt = self._alias_base(current, from_file)
            if nxt is None:
                return current
            current = nxt
        logger.warning(
            f"Alias chain for {name} did not terminate within {MAX_ALIAS_HOPS} hops"
        )
        return current

    def _resolve_name(
        self, name: str, scope: FileScope, visited: Visited
    ) -> ResolutionResult:
        if name in scope.local_types:
            return Found(scope.file)

        imported = scope.imports.get(name)
        if imported is not None:
            return self._resolve_import(imported, scope, visited)

        for wildcard in scope.wildcard_imports:
            target = canonicalize_path(wildcard, scope.module_path)
            if target is None:
                continue
            found = self._find_in_module(name, ModulePath(target), visited)
            if found is not None:
                return found

        return self._lookup_global(name, scope.module_path)

    def _resolve_segments(
        self, segments: Sequence[str], scope: FileScope, visited: Visited
    ) -> ResolutionResult:
        head = scope.imports.get(segments[0])
        if head is not None:
            # `use crate::shared;` then `shared::Config`
            absolute = canonicalize_path([*head.path, *segments[1:]], scope.module_path)
        else:
            absolute = canonicalize_path(segments, scope.module_path)
        if absolute is None:
            return NotFound()
        return self._resolve_absolute(absolute, scope.module_path, visited)

    def _resolve_import(
        self, imported: ImportedName, scope: FileScope, visited: Visited
    ) -> ResolutionResult:
        absolute = canonicalize_path(imported.path, scope.module_path)
        if absolute is None:
            return NotFound()
        result = self._resolve_absolute(absolute, scope.module_path, visited)
        if isinstance(result, Found) and imported.original_name != imported.local_name:
            return FoundWithAlias(result.file, imported.original_name)
        return result

    def _resolve_absolute(
        self, absolute: Sequence[str], from_module: ModulePath, visited: Visited
    ) -> ResolutionResult:
        if len(absolute) < 2:
            return NotFound()
        module = ModulePath(tuple(absolute[:-1]))
        name = absolute[-1]

        found = self._find_in_module(name, module, visited)
        if found is not None:
            return found
        # Covers unregistered modules and declarations without a scope.
        return self._lookup_global(name, from_module)

    def _find_in_module(
        self, name: str, module: ModulePath, visited: Visited
    ) -> ResolutionResult | None:
        """Look `name` up as seen from inside `module`, following re-exports."""
        key = (module, name)
        if key in visited:
            logger.debug(f"Re-export cycle reached {module}::{name}; not revisiting")
            return None
        visited.add(key)

        file = self.index.file_for_module(module)
        scope = self.scopes.get(file) if file is not None else None
        if scope is None:
            return None

        if name in scope.local_types:
            return Found(scope.file)

        imported = scope.imports.get(name)
        if imported is not None:
            result = self._resolve_import(imported, scope, visited)
            return result if is_found(result) else None

        for wildcard in scope.wildcard_imports:
            target = canonicalize_path(wildcard, scope.module_path)
            if target is None:
                continue
            found = self._find_in_module(name, ModulePath(target), visited)
            if found is not None:
                return found
        return None

    def _lookup_global(
        self, name: str, from_module: ModulePath | None
    ) -> ResolutionResult:
        candidates = self.index.locations(name)
        if not candidates:
            return NotFound()
        if len(candidates) == 1:
            return Found(candidates[0])

        if from_module is not None:
            siblings = []
            for candidate in candidates:
                scope = self.scopes.get(candidate)
                if scope is not None and scope.module_path.is_sibling_of(from_module):
                    siblings.append(candidate)
            if len(siblings) == 1:
                return Found(siblings[0])

        return Ambiguous(candidates)

    def _alias_base(self, name: str, from_file: Path) -> str | None:
        scope = self.scopes.get(from_file)
        if scope is not None and name in scope.type_aliases:
            return scope.type_aliases[name]
        for other in self.scopes.values():
            if name in other.type_aliases:
                return other.type_aliases[name]
        return None

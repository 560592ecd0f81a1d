"""Logic for turning per-file facts into file scopes and a frozen global index."""

import logging
from collections.abc import Collection, Mapping
from pathlib import Path
from types import MappingProxyType

from cmdbind.facts import ALIAS, FileFacts
from cmdbind.file_scope import FileScope, ImportedName
from cmdbind.global_index import GlobalIndex
from cmdbind.module_path import SELF_SEGMENT, ModulePath
from cmdbind.module_path_for_file import (
    DEFAULT_INDEX_FILE_STEMS,
    module_path_for_file,
)

logger = logging.getLogger(__name__)


class ScopeBuilder:
    """Accumulates facts during the scan phase, then freezes them.

    Real source facts go through `add_file`; lower-priority synthetic facts
    (e.g. macro expansion output) go through `add_synthetic` and only reach
    the index for names no real file declares.
    """

    def __init__(
        self,
        source_root: Path | None = None,
        index_file_stems: Collection[str] = DEFAULT_INDEX_FILE_STEMS,
    ) -> None:
        """Initialize an empty builder."""
        self.source_root = source_root
        self.index_file_stems = tuple(index_file_stems)

        self.scopes: dict[Path, FileScope] = {}
        self.type_locations: dict[str, list[Path]] = {}
        self.module_to_file: dict[ModulePath, Path] = {}
        self.synthetic: list[tuple[str, Path]] = []
        self._built = False

    def add_file(self, facts: FileFacts) -> FileScope | None:
        """Register a scanned source file and return its scope."""
        self._check_open()
        if facts.file in self.scopes:
            logger.warning(f"Facts for {facts.file} supplied twice; keeping the first")
            return None

        if facts.module_path:
            module_path = ModulePath(tuple(facts.module_path))
        else:
            module_path = module_path_for_file(
                facts.file, self.source_root, self.index_file_stems
            )

        scope = FileScope(file=facts.file, module_path=module_path)
        for decl in facts.declarations:
            scope.local_types[decl.name] = decl.kind
            if decl.kind == ALIAS and decl.base_name:
                scope.type_aliases[decl.name] = decl.base_name
            self._add_location(decl.name, facts.file)

        for imp in facts.imports:
            path = tuple(imp.path)
            if not path:
                continue
            if imp.wildcard:
                scope.wildcard_imports.append(path)
                continue
            if path[-1] == SELF_SEGMENT:
                # `use a::b::{self}` binds `b`
                path = path[:-1]
                if not path:
                    continue
            original = path[-1]
            local = imp.local_name or original
            scope.imports[local] = ImportedName(local, path, original)

        owner = self.module_to_file.get(module_path)
        if owner is None:
            self.module_to_file[module_path] = facts.file
        else:
            logger.warning(
                f"Module {module_path} already registered for {owner}; "
                f"ignoring claim from {facts.file}"
            )

        self.scopes[facts.file] = scope
        return scope

    def add_synthetic(self, facts: FileFacts) -> None:
        """Queue declarations that have no owning scope."""
        self._check_open()
        for decl in facts.declarations:
            self.synthetic.append((decl.name, facts.file))

    def build(self) -> tuple[Mapping[Path, FileScope], GlobalIndex]:
        """Freeze the scan phase and return the scope table and index."""
        self._check_open()
        for name, file in self.synthetic:
            real = [f for f in self.type_locations.get(name, []) if f in self.scopes]
            if real:
                logger.debug(f"Synthetic {name} from {file} shadowed by {real[0]}")
                continue
            self._add_location(name, file)

        self._built = True
        index = GlobalIndex(
            type_locations=MappingProxyType(
                {name: tuple(files) for name, files in self.type_locations.items()}
            ),
            module_to_file=MappingProxyType(dict(self.module_to_file)),
        )
        logger.debug(
            f"Indexed {len(index.type_locations)} type names across "
            f"{len(self.scopes)} files"
        )
        return MappingProxyType(dict(self.scopes)), index

    def _add_location(self, name: str, file: Path) -> None:
        files = self.type_locations.setdefault(name, [])
        if file not in files:
            files.append(file)

    def _check_open(self) -> None:
        if self._built:
            msg = "ScopeBuilder already built; create a new one per analysis pass"
            raise RuntimeError(msg)

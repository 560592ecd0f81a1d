"""Read-only index of type names and module paths across all scanned files."""

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from cmdbind.module_path import ModulePath


@dataclass(frozen=True)
class GlobalIndex:
    """Frozen snapshot built by ScopeBuilder.

    type_locations: type name -> defining files, first-seen order.
    module_to_file: canonical module path -> the one file registered for it.
    """

    type_locations: Mapping[str, tuple[Path, ...]]
    module_to_file: Mapping[ModulePath, Path]

    def locations(self, name: str) -> tuple[Path, ...]:
        """Return every file declaring `name`."""
        return self.type_locations.get(name, ())

    def file_for_module(self, module_path: ModulePath) -> Path | None:
        """Return the file registered for a module path, if any."""
        return self.module_to_file.get(module_path)

"""Data model for the name scope of a single scanned file."""

from dataclasses import dataclass, field
from pathlib import Path

from cmdbind.module_path import ModulePath


@dataclass(frozen=True)
class ImportedName:
    """Explicit import binding `local_name` to the path it was imported from."""

    local_name: str
    path: tuple[str, ...]  # as written; may be relative
    original_name: str


@dataclass
class FileScope:
    """Names visible at the top level of one file."""

    file: Path
    module_path: ModulePath
    local_types: dict[str, str] = field(default_factory=dict)  # name -> kind
    imports: dict[str, ImportedName] = field(default_factory=dict)
    wildcard_imports: list[tuple[str, ...]] = field(default_factory=list)
    type_aliases: dict[str, str] = field(default_factory=dict)  # alias -> base

"""Utility for deriving a file's module path from its location."""

from collections.abc import Collection
from pathlib import Path, PurePosixPath

from cmdbind.module_path import ROOT_SEGMENT, ModulePath

DEFAULT_INDEX_FILE_STEMS = ("mod", "lib", "main")


def module_path_for_file(
    file: Path,
    source_root: Path | None = None,
    index_file_stems: Collection[str] = DEFAULT_INDEX_FILE_STEMS,
) -> ModulePath:
    """Map e.g. `resources/types.rs` to crate::resources::types.

    Index files (`mod.rs`, `lib.rs`, `main.rs`) name their directory's module,
    so `resources/mod.rs` maps to crate::resources.
    """
    relative = PurePosixPath(file.as_posix())
    if source_root is not None:
        try:
            relative = PurePosixPath(file.relative_to(source_root).as_posix())
        except ValueError:
            pass

    parts = [ROOT_SEGMENT]
    names = [p for p in relative.parts if p not in {"", ".", "/"}]
    for i, name in enumerate(names):
        if i == len(names) - 1:
            stem = PurePosixPath(name).stem
            if stem in index_file_stems:
                continue
            parts.append(stem)
        else:
            parts.append(name)
    return ModulePath(tuple(parts))

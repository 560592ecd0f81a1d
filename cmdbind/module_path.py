"""Data model and canonicalization for root-anchored module paths."""

from collections.abc import Sequence
from dataclasses import dataclass

PATH_SEPARATOR = "::"
ROOT_SEGMENT = "crate"
SUPER_SEGMENT = "super"
SELF_SEGMENT = "self"


@dataclass(frozen=True)
class ModulePath:
    """Ordered, root-anchored sequence of module segments, e.g. crate::a::b."""

    segments: tuple[str, ...]

    @classmethod
    def root(cls) -> "ModulePath":
        """Return the path of the crate root module."""
        return cls((ROOT_SEGMENT,))

    @classmethod
    def parse(cls, text: str) -> "ModulePath":
        """Build a path from its `::`-joined textual form."""
        return cls(tuple(s for s in text.split(PATH_SEPARATOR) if s))

    @property
    def depth(self) -> int:
        """Number of segments, including the root anchor."""
        return len(self.segments)

    @property
    def parent(self) -> "ModulePath | None":
        """Enclosing module, or None for the root."""
        if len(self.segments) <= 1:
            return None
        return ModulePath(self.segments[:-1])

    def child(self, name: str) -> "ModulePath":
        """Return the path of a direct submodule."""
        return ModulePath((*self.segments, name))

    def is_sibling_of(self, other: "ModulePath") -> bool:
        """Check that both paths share a parent and sit at the same depth.

        Top-level files (depth < 2) never count as siblings.
        """
        if self.depth < 2 or other.depth < 2 or self.depth != other.depth:
            return False
        return self.segments[:-1] == other.segments[:-1]

    def __str__(self) -> str:
        return PATH_SEPARATOR.join(self.segments)


def split_type_path(type_path: str) -> list[str]:
    """Split a `::`-joined reference into segments, dropping empty ones."""
    return [s.strip() for s in type_path.split(PATH_SEPARATOR) if s.strip()]


def canonicalize_path(
    segments: Sequence[str], current: ModulePath
) -> tuple[str, ...] | None:
    """Turn a possibly relative path into an absolute, root-anchored one.

    `crate` resets to the root, a leading `self` or bare segment starts at
    `current`, each `super` pops one level and later `self` segments are
    no-ops. Returns None when `super` would climb above the root.
    """
    if not segments:
        return None

    if segments[0] == ROOT_SEGMENT:
        resolved = [ROOT_SEGMENT]
        rest = segments[1:]
    else:
        resolved = list(current.segments)
        rest = segments[1:] if segments[0] == SELF_SEGMENT else segments

    for seg in rest:
        if seg == SUPER_SEGMENT:
            if len(resolved) <= 1:
                return None
            resolved.pop()
        elif seg == SELF_SEGMENT:
            continue
        else:
            resolved.append(seg)
    return tuple(resolved)

"""Data models for the outcome of resolving a type reference to a file."""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class Found:
    """The reference resolves to exactly one defining file."""

    file: Path


@dataclass(frozen=True)
class FoundWithAlias:
    """Resolved through a renaming import; the declaration is `original_name`."""

    file: Path
    original_name: str


@dataclass(frozen=True)
class Ambiguous:
    """Several files declare the name and no rule picks one."""

    files: tuple[Path, ...]


@dataclass(frozen=True)
class NotFound:
    """No reachable declaration."""


ResolutionResult = Found | FoundWithAlias | Ambiguous | NotFound


def is_found(result: ResolutionResult) -> bool:
    """Check whether a result names a single defining file."""
    return isinstance(result, (Found, FoundWithAlias))


def declared_name(type_path: str, result: ResolutionResult) -> str:
    """Return the name the type is declared under in its defining file.

    A renaming import (`use models::User as Member`) resolves `Member` to the
    declaration `User`; everything else keeps its final path segment.
    """
    if isinstance(result, FoundWithAlias):
        return result.original_name
    return type_path.rsplit("::", 1)[-1].strip()

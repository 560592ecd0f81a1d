"""Data model for the outcome of a type-usage collection run."""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class TypeCollectionResult:
    """Types reachable from exported signatures.

    resolved: declared type name -> the file defining it.
    conflicts: name -> every distinct defining file seen, in discovery order.
    """

    resolved: dict[str, Path] = field(default_factory=dict)
    conflicts: dict[str, list[Path]] = field(default_factory=dict)

    @property
    def has_conflicts(self) -> bool:
        """Check whether any name resolved to more than one file."""
        return bool(self.conflicts)

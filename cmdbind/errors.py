"""Exceptions raised by the loading and generation pipeline."""

from pathlib import Path


class ConfigError(ValueError):
    """The configuration cannot drive a generation run."""


class FactFormatError(ValueError):
    """A fact document is not valid YAML or does not match the fact schema."""

    def __init__(self, path: Path, reason: str) -> None:
        """Initialize the error with the offending file."""
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class TypeConflictError(RuntimeError):
    """One or more type names resolve to several distinct files."""

    def __init__(self, conflicts: dict[str, list[Path]]) -> None:
        """Initialize the error with every conflicting name and its files."""
        lines = ["Type name conflicts detected:"]
        for name, files in sorted(conflicts.items()):
            lines.append(f"  {name}: " + ", ".join(str(f) for f in files))
        super().__init__("\n".join(lines))
        self.conflicts = conflicts

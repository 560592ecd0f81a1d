"""Logic for checking that a configuration can drive a generation run."""

from pathlib import Path
from typing import Any

from cmdbind.errors import ConfigError

REQUIRED_OUTPUTS = ("types_file", "commands_file")


def validate_config(config: dict[str, Any]) -> None:
    """Raise ConfigError for a missing facts directory or output path."""
    inputs = config.get("input") or {}
    facts_dir = inputs.get("facts_dir")
    if not facts_dir:
        raise ConfigError("input.facts_dir is not set")
    if not Path(facts_dir).is_dir():
        raise ConfigError(f"Facts directory not found: {facts_dir}")

    synthetic_dir = inputs.get("synthetic_facts_dir")
    if synthetic_dir and not Path(synthetic_dir).is_dir():
        raise ConfigError(f"Synthetic facts directory not found: {synthetic_dir}")

    outputs = config.get("output") or {}
    for key in REQUIRED_OUTPUTS:
        if not outputs.get(key):
            raise ConfigError(f"output.{key} is not set")
    if Path(outputs["types_file"]) == Path(outputs["commands_file"]):
        raise ConfigError("output.types_file and output.commands_file must differ")

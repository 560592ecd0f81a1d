"""Logic for loading and merging configuration files."""

import copy
from pathlib import Path
from typing import Any

import yaml

from cmdbind.deep_merge import deep_merge
from cmdbind.errors import ConfigError

DEFAULT_CONFIG_FILE = "cmdbind.yml"

DEFAULT_CONFIG: dict[str, Any] = {
    "input": {
        "facts_dir": "facts",
        "source_root": "src-tauri/src",
        "exclude": ["target", "node_modules", ".git"],
        "synthetic_facts_dir": None,
        "index_file_stems": ["mod", "lib", "main"],
    },
    "output": {
        "types_file": "src/generated/types.ts",
        "commands_file": "src/generated/commands.ts",
        "invoke_import": "@tauri-apps/api/core",
    },
    "naming": {
        "type_prefix": "",
        "type_suffix": "",
        "function_prefix": "",
        "function_suffix": "",
    },
}


def load_config(path: str | Path | None = None) -> dict[str, Any]:
    """Load configuration from a YAML file and merge it with defaults.

    A missing file yields the defaults.
    """
    config = copy.deepcopy(DEFAULT_CONFIG)
    if path:
        p = Path(path)
        if p.exists():
            try:
                user_config = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
            except yaml.YAMLError as e:
                raise ConfigError(f"Invalid YAML in {p}: {e}") from e
            if not isinstance(user_config, dict):
                raise ConfigError(f"{p} must contain a mapping")
            config = deep_merge(config, user_config)
    return config


def write_default_config(path: Path, force: bool = False) -> Path:
    """Write the default configuration to `path`."""
    if path.exists() and not force:
        raise ConfigError(f"{path} already exists; pass --force to overwrite")
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.safe_dump(DEFAULT_CONFIG, sort_keys=False), encoding="utf-8")
    return path

"""Tests for configuration loading, merging and validation."""

from pathlib import Path

import pytest
import yaml

from cmdbind.deep_merge import deep_merge
from cmdbind.errors import ConfigError
from cmdbind.load_config import DEFAULT_CONFIG, load_config, write_default_config
from cmdbind.validate_config import validate_config


def test_deep_merge_nested_and_additive() -> None:
    """Verify recursive merging, list replacement and additive excludes."""
    base = {"input": {"exclude": ["target"], "stems": ["mod"]}, "x": 1}
    update = {"input": {"exclude": ["target", "vendor"], "stems": ["index"]}}
    merged = deep_merge(base, update)

    assert merged["input"]["exclude"] == ["target", "vendor"]
    assert merged["input"]["stems"] == ["index"]
    assert merged["x"] == 1
    assert base["input"]["exclude"] == ["target"]


def test_load_config_defaults_are_isolated() -> None:
    """Verify that mutating a loaded config leaves the defaults untouched."""
    config = load_config(None)
    config["input"]["exclude"].append("mutated")
    assert "mutated" not in DEFAULT_CONFIG["input"]["exclude"]


def test_load_config_merges_user_file(tmp_path: Path) -> None:
    """Verify that user settings override defaults section by section."""
    path = tmp_path / "cmdbind.yml"
    path.write_text(
        "output:\n  types_file: web/types.ts\ninput:\n  exclude: [fixtures]\n",
        encoding="utf-8",
    )
    config = load_config(path)

    assert config["output"]["types_file"] == "web/types.ts"
    assert config["output"]["commands_file"] == "src/generated/commands.ts"
    assert config["input"]["exclude"][-1] == "fixtures"
    assert "target" in config["input"]["exclude"]


def test_load_config_missing_file_uses_defaults(tmp_path: Path) -> None:
    """Verify that a missing file is not an error."""
    assert load_config(tmp_path / "absent.yml") == DEFAULT_CONFIG


def test_load_config_rejects_invalid_yaml(tmp_path: Path) -> None:
    """Verify that unreadable configuration raises ConfigError."""
    path = tmp_path / "cmdbind.yml"
    path.write_text("input: [\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(path)


def make_config(tmp_path: Path) -> dict:
    """Create a valid configuration rooted in tmp_path."""
    facts = tmp_path / "facts"
    facts.mkdir()
    config = load_config(None)
    config["input"]["facts_dir"] = str(facts)
    config["output"]["types_file"] = str(tmp_path / "out" / "types.ts")
    config["output"]["commands_file"] = str(tmp_path / "out" / "commands.ts")
    return config


def test_validate_config_accepts_valid(tmp_path: Path) -> None:
    """Verify that a complete configuration passes."""
    validate_config(make_config(tmp_path))


def test_validate_config_missing_facts_dir(tmp_path: Path) -> None:
    """Verify that a missing facts directory is rejected."""
    config = make_config(tmp_path)
    config["input"]["facts_dir"] = str(tmp_path / "nope")
    with pytest.raises(ConfigError, match="Facts directory not found"):
        validate_config(config)


def test_validate_config_missing_output(tmp_path: Path) -> None:
    """Verify that an unset output path is rejected."""
    config = make_config(tmp_path)
    config["output"]["commands_file"] = ""
    with pytest.raises(ConfigError, match="commands_file"):
        validate_config(config)


def test_validate_config_same_output_paths(tmp_path: Path) -> None:
    """Verify that both generated files cannot share a path."""
    config = make_config(tmp_path)
    config["output"]["commands_file"] = config["output"]["types_file"]
    with pytest.raises(ConfigError):
        validate_config(config)


def test_write_default_config(tmp_path: Path) -> None:
    """Verify that init writes loadable defaults and refuses to overwrite."""
    path = tmp_path / "cmdbind.yml"
    write_default_config(path)
    assert yaml.safe_load(path.read_text(encoding="utf-8")) == DEFAULT_CONFIG

    with pytest.raises(ConfigError):
        write_default_config(path)
    write_default_config(path, force=True)

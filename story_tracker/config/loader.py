"""TOML configuration layers for the story tracker.

Layers are merged in order, later ones winning key by key:

1. config/default.toml (required)
2. config/{STORY_TRACKER_ENV}.toml
3. config/local.toml, per-machine overrides kept out of version control
4. the file named by STORY_TRACKER_CONFIG_FILE, usually the host
   application's own config; only its [story_tracker] table is read when
   it has one
"""

import os
import tomllib
from pathlib import Path
from typing import Any

CONFIG_DIR_ENV = "STORY_TRACKER_CONFIG_DIR"
CONFIG_FILE_ENV = "STORY_TRACKER_CONFIG_FILE"
ENVIRONMENT_ENV = "STORY_TRACKER_ENV"

HOST_TABLE = "story_tracker"
LOCAL_FILE = "local.toml"


def get_config_dir() -> Path:
    """Locate the config directory.

    STORY_TRACKER_CONFIG_DIR wins and must exist. Otherwise the nearest
    `config/` in the working directory or up to four parents is used.
    """
    configured = os.environ.get(CONFIG_DIR_ENV)
    if configured:
        path = Path(configured)
        if not path.exists():
            raise FileNotFoundError(f"Config directory not found: {configured}")
        return path

    current = Path.cwd()
    for _ in range(5):
        candidate = current / "config"
        if candidate.exists():
            return candidate
        current = current.parent

    return Path("config")


def get_environment() -> str:
    """Name of the active environment layer, 'development' by default."""
    return os.environ.get(ENVIRONMENT_ENV, "development")


def load_toml(file_path: Path) -> dict[str, Any]:
    """Read one TOML file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        tomllib.TOMLDecodeError: If the TOML syntax is invalid
    """
    if not file_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {file_path}")

    with file_path.open("rb") as f:
        return tomllib.load(f)


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Merge override into a copy of base; tables merge, anything else replaces."""
    merged = base.copy()
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def host_section(config: dict[str, Any]) -> dict[str, Any]:
    """Return the [story_tracker] table of a host config, or the config itself."""
    scoped = config.get(HOST_TABLE)
    return scoped if isinstance(scoped, dict) else config


def config_layers(config_dir: Path | None = None) -> list[Path]:
    """List the existing layer files in merge order.

    Raises:
        FileNotFoundError: If default.toml is missing, or the file named by
            STORY_TRACKER_CONFIG_FILE does not exist
    """
    config_dir = config_dir or get_config_dir()

    default_path = config_dir / "default.toml"
    if not default_path.exists():
        raise FileNotFoundError(
            f"Default configuration file not found: {default_path}. "
            f"Create config/default.toml or set {CONFIG_DIR_ENV}."
        )

    layers = [default_path]
    for name in (f"{get_environment()}.toml", LOCAL_FILE):
        path = config_dir / name
        if path.exists() and path not in layers:
            layers.append(path)

    host_file = os.environ.get(CONFIG_FILE_ENV)
    if host_file:
        path = Path(host_file)
        if not path.exists():
            raise FileNotFoundError(f"{CONFIG_FILE_ENV} points to a missing file: {host_file}")
        layers.append(path)

    return layers


def load_config() -> dict[str, Any]:
    """Load and merge every configuration layer."""
    config: dict[str, Any] = {}
    host_file = os.environ.get(CONFIG_FILE_ENV)

    for path in config_layers():
        data = load_toml(path)
        if host_file and path == Path(host_file):
            data = host_section(data)
        config = deep_merge(config, data)

    return config

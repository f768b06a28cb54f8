"""Terrain settings loading from TOML files."""

import tomllib
from pathlib import Path
from typing import Any, Mapping

from pydantic import ValidationError

from .exceptions import ConfigurationError
from .terrain.config import TerrainSettings


def parse_settings(data: Mapping[str, Any]) -> TerrainSettings:
    """Validate a raw settings mapping.

    Raises:
        ConfigurationError: If any value is missing, malformed or out of range.
    """
    try:
        return TerrainSettings.model_validate(data)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid terrain settings:\n{exc}") from exc


def load_settings(settings_path: Path) -> TerrainSettings:
    """Load terrain settings from a TOML file.

    Args:
        settings_path: Path to the TOML settings file.

    Returns:
        Parsed TerrainSettings object.

    Raises:
        FileNotFoundError: If settings file doesn't exist.
        ConfigurationError: If the TOML is malformed or fails validation.
    """
    with open(settings_path, "rb") as f:
        try:
            data = tomllib.load(f)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigurationError(f"Malformed TOML in {settings_path}: {exc}") from exc
    return parse_settings(data)


def _configs_dir() -> Path:
    return Path(__file__).parent.parent.parent / "configs"


def find_settings(name: str) -> Path:
    """Find a settings file by name.

    Searches in the following order:
    1. Exact path if name contains path separator or ends with .toml
    2. configs/{name}.toml
    3. configs/{name}

    Args:
        name: Preset name or path.

    Returns:
        Path to the settings file.

    Raises:
        FileNotFoundError: If settings file is not found.
    """
    if "/" in name or name.endswith(".toml"):
        path = Path(name)
        if path.exists():
            return path
        raise FileNotFoundError(f"Settings file not found: {name}")

    configs_dir = _configs_dir()

    settings_path = configs_dir / f"{name}.toml"
    if settings_path.exists():
        return settings_path

    settings_path = configs_dir / name
    if settings_path.exists():
        return settings_path

    raise FileNotFoundError(
        f"Settings '{name}' not found in {configs_dir}. "
        f"Available presets: {list_settings()}"
    )


def list_settings() -> list[str]:
    """List available preset names."""
    configs_dir = _configs_dir()
    if not configs_dir.exists():
        return []
    return sorted(p.stem for p in configs_dir.glob("*.toml"))

"""
Lanes Settings

This module locates the lanes configuration directory and reads and writes
the global configuration file (``lanes.yml``) that lives next to the
profile files. The global configuration holds the default profile name and
a fallback region for profiles that do not specify one.
"""

import os
import stat
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from ..errors import ConfigError

CONFIG_FILENAME = "lanes.yml"
DEFAULT_PROFILE = "default"

DIR_MODE = stat.S_IRWXU  # 0700
FILE_MODE = stat.S_IRUSR | stat.S_IWUSR  # 0600


def get_config_dir() -> Path:
    """
    Get the directory holding the lanes configuration and profiles.

    ``LANES_CONFIG_DIR`` overrides the default of ``~/.lanes``.

    Returns:
        Path: The configuration directory
    """
    override = os.environ.get("LANES_CONFIG_DIR")
    if override:
        return Path(override).expanduser()
    return Path.home() / ".lanes"


def get_config_path() -> Path:
    """Get the path to the global configuration file."""
    return get_config_dir() / CONFIG_FILENAME


class Config:
    """Global settings shared by every profile."""

    def __init__(self, profile: Optional[str] = None, region: Optional[str] = None):
        self.profile = profile
        self.region = region

    def __repr__(self) -> str:
        return f"Config(profile={self.profile!r}, region={self.region!r})"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Config":
        return cls(profile=data.get("profile") or None, region=data.get("region") or None)

    def to_dict(self) -> Dict[str, str]:
        out = {}
        if self.profile:
            out["profile"] = self.profile
        if self.region:
            out["region"] = self.region
        return out

    def write(self, path: Optional[Path] = None) -> Path:
        """
        Save the configuration to disk.

        Args:
            path: Destination file (defaults to the global configuration path)

        Returns:
            Path: The file that was written
        """
        dest = Path(path) if path else get_config_path()
        try:
            dest.parent.mkdir(mode=DIR_MODE, parents=True, exist_ok=True)
            with open(dest, "w") as f:
                yaml.safe_dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)
            os.chmod(dest, FILE_MODE)
        except OSError as e:
            raise ConfigError(f"unable to write config: {e}") from e
        return dest


def load_config(path: Optional[Path] = None) -> Config:
    """
    Load the global configuration.

    A missing file is not an error; an empty configuration is returned.

    Args:
        path: File to read (defaults to the global configuration path)

    Returns:
        Config: The loaded configuration
    """
    src = Path(path) if path else get_config_path()
    if not src.exists():
        return Config()

    try:
        with open(src, "r") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"unable to read config {src}: {e}") from e

    if data is None:
        return Config()
    if not isinstance(data, dict):
        raise ConfigError(f"unable to read config {src}: expected a mapping")

    return Config.from_dict(data)


def resolve_profile_name(explicit: Optional[str] = None, config: Optional[Config] = None) -> str:
    """
    Work out which profile to use.

    Order: explicit name, ``LANES_PROFILE``, the global config, ``default``.
    """
    if explicit:
        return explicit

    env_profile = os.environ.get("LANES_PROFILE")
    if env_profile:
        return env_profile

    if config is not None and config.profile:
        return config.profile

    return DEFAULT_PROFILE

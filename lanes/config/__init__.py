"""
Global lanes configuration and the location of profile files.
"""

from .settings import (
    Config,
    get_config_dir,
    get_config_path,
    load_config,
    resolve_profile_name,
    CONFIG_FILENAME,
    DEFAULT_PROFILE,
)

__all__ = [
    'Config',
    'get_config_dir',
    'get_config_path',
    'load_config',
    'resolve_profile_name',
    'CONFIG_FILENAME',
    'DEFAULT_PROFILE',
]

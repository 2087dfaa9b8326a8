"""
AWS CLI Import

Helpers for seeding a lanes profile from credentials already configured
for the AWS CLI in ``~/.aws/credentials`` and ``~/.aws/config``.
"""

import configparser
import os
from pathlib import Path
from typing import List, Optional, Tuple

from ..errors import ConfigError, ProfileNotFoundError
from ..ssh.config import SSHConfig
from .profile import Profile

__all__ = [
    'list_aws_profiles',
    'read_aws_credentials',
    'profile_from_aws',
]


def _get_aws_config_path() -> Path:
    """Get the path to the AWS config file."""
    override = os.environ.get("AWS_CONFIG_FILE")
    if override:
        return Path(override).expanduser()
    return Path.home() / ".aws" / "config"


def _get_aws_credentials_path() -> Path:
    """Get the path to the AWS credentials file."""
    override = os.environ.get("AWS_SHARED_CREDENTIALS_FILE")
    if override:
        return Path(override).expanduser()
    return Path.home() / ".aws" / "credentials"


def _read_ini(path: Path) -> configparser.ConfigParser:
    parser = configparser.ConfigParser()
    if path.exists():
        try:
            parser.read(path)
        except configparser.Error as e:
            raise ConfigError(f"unable to read {path}: {e}") from e
    return parser


def _config_section(profile_name: str) -> str:
    return f"profile {profile_name}" if profile_name != "default" else "default"


def list_aws_profiles() -> List[str]:
    """
    List the AWS CLI profiles configured on the system.

    Returns:
        List[str]: Sorted profile names from the credentials and config files
    """
    names = set(_read_ini(_get_aws_credentials_path()).sections())

    for section in _read_ini(_get_aws_config_path()).sections():
        if section == "default":
            names.add("default")
        elif section.startswith("profile "):
            names.add(section[8:])  # Remove "profile " prefix

    return sorted(names)


def read_aws_credentials(profile_name: str) -> Tuple[str, str, Optional[str]]:
    """
    Read static credentials for an AWS CLI profile.

    Args:
        profile_name: AWS CLI profile name

    Returns:
        Tuple[str, str, Optional[str]]: (access key ID, secret access key, region)
    """
    creds = _read_ini(_get_aws_credentials_path())
    config = _read_ini(_get_aws_config_path())
    section = _config_section(profile_name)

    access_key = creds.get(profile_name, "aws_access_key_id", fallback=None)
    secret_key = creds.get(profile_name, "aws_secret_access_key", fallback=None)

    # Credentials may also live in the config file
    if not access_key:
        access_key = config.get(section, "aws_access_key_id", fallback=None)
    if not secret_key:
        secret_key = config.get(section, "aws_secret_access_key", fallback=None)

    if profile_name not in creds and section not in config:
        raise ProfileNotFoundError(f"AWS profile {profile_name!r} not found")

    region = config.get(section, "region", fallback=None)
    if not region:
        region = creds.get(profile_name, "region", fallback=None)

    return access_key or "", secret_key or "", region


def profile_from_aws(profile_name: str, template: Optional[Profile] = None) -> Profile:
    """
    Build a lanes profile from an AWS CLI profile.

    Args:
        profile_name: AWS CLI profile to import
        template: Optional profile whose lanes are copied

    Returns:
        Profile: A new, unvalidated profile
    """
    access_key, secret_key, region = read_aws_credentials(profile_name)
    ssh = SSHConfig(template.ssh.mods) if template is not None else SSHConfig()
    return Profile(
        aws_access_key_id=access_key,
        aws_secret_access_key=secret_key,
        region=region,
        ssh=ssh,
    )

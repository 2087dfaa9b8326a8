"""
Lane Profiles

A profile bundles a set of AWS credentials, an optional default region and
the SSH settings for each lane. Profiles are stored as YAML files in the
lanes configuration directory, one file per profile.
"""

import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import boto3
import yaml

from ..config.settings import (
    CONFIG_FILENAME,
    DIR_MODE,
    FILE_MODE,
    Config,
    get_config_dir,
    load_config,
)
from ..ec2.servers import Server, create_lane_filter, fetch_servers_by
from ..errors import (
    InvalidProfileError,
    MissingAccessKeyError,
    MissingSecretKeyError,
    ProfileExistsError,
    ProfileLoadError,
)
from ..ssh.config import SSHConfig, SSHProfile
from .permissions import check_profile_permissions

__all__ = [
    'Profile',
    'get_sample_profile',
    'get_profile_path',
    'list_profiles',
    'load_profile',
    'load_profile_bytes',
]

PROFILE_SUFFIX = ".yml"


def _as_str(value: Any) -> str:
    return "" if value is None else str(value)


class Profile:
    """AWS credentials, region and per-lane SSH settings."""

    def __init__(self, aws_access_key_id: str = "", aws_secret_access_key: str = "",
                 region: Optional[str] = None, ssh: Optional[SSHConfig] = None):
        self.aws_access_key_id = aws_access_key_id
        self.aws_secret_access_key = aws_secret_access_key
        self.region = region
        self.ssh = ssh if ssh is not None else SSHConfig()

        self._global: Optional[Config] = None
        self._overwrite = False

    def __repr__(self) -> str:
        return f"Profile(region={self.region!r}, lanes={self.ssh.lanes()!r})"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Profile":
        return cls(
            aws_access_key_id=_as_str(data.get("aws_access_key_id")),
            aws_secret_access_key=_as_str(data.get("aws_secret_access_key")),
            region=data.get("region") or None,
            ssh=SSHConfig.from_dict(data.get("ssh")),
        )

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "aws_access_key_id": self.aws_access_key_id,
            "aws_secret_access_key": self.aws_secret_access_key,
        }
        if self.region:
            out["region"] = self.region
        out["ssh"] = self.ssh.to_dict()
        return out

    def to_yaml(self) -> str:
        """Marshal the profile to YAML."""
        return yaml.safe_dump(self.to_dict(), default_flow_style=False, sort_keys=False)

    def set_global(self, config: Optional[Config]) -> None:
        """Give the profile access to the global configuration values."""
        self._global = config

    def set_overwrite(self, value: bool) -> None:
        """Mark this profile as one that can safely overwrite an existing file."""
        self._overwrite = value

    def validate(self) -> None:
        """
        Check that the profile can be used to talk to AWS.

        The region falls back to the global configuration and then to the
        ``LANES_REGION`` environment variable.

        Raises:
            MissingAccessKeyError: The access key ID is empty
            MissingSecretKeyError: The secret access key is empty
        """
        if not self.aws_access_key_id:
            raise MissingAccessKeyError()

        if not self.aws_secret_access_key:
            raise MissingSecretKeyError()

        if not self.region and self._global is not None:
            self.region = self._global.region

        if not self.region:
            self.region = os.environ.get("LANES_REGION") or None

    def activate(self) -> None:
        """Set the AWS credential environment variables for this profile."""
        os.environ["AWS_ACCESS_KEY_ID"] = self.aws_access_key_id
        os.environ["AWS_SECRET_ACCESS_KEY"] = self.aws_secret_access_key

    def deactivate(self) -> None:
        """Remove the AWS credential environment variables."""
        os.environ.pop("AWS_ACCESS_KEY_ID", None)
        os.environ.pop("AWS_SECRET_ACCESS_KEY", None)

    def get_session(self) -> boto3.session.Session:
        """Create a boto3 session using this profile's credentials and region."""
        return boto3.session.Session(
            aws_access_key_id=self.aws_access_key_id,
            aws_secret_access_key=self.aws_secret_access_key,
            region_name=self.region,
        )

    def fetch_servers(self, client=None) -> List[Server]:
        """Retrieve all EC2 instances for this profile."""
        return self.fetch_servers_by(None, client)

    def fetch_servers_in_lane(self, lane: str, client=None) -> List[Server]:
        """Retrieve the EC2 instances in one lane for this profile."""
        return self.fetch_servers_by(create_lane_filter(lane), client)

    def fetch_servers_by(self, filters: Optional[List[Dict[str, Any]]] = None,
                         client=None) -> List[Server]:
        """
        Retrieve EC2 instances and attach the SSH settings for their lane.

        Servers in a lane with no SSH settings are still returned; a warning
        is printed for each of them.

        Args:
            filters: Optional ``describe_instances`` filters
            client: EC2 client to use (created from the profile if None)

        Returns:
            List[Server]: The matching servers
        """
        if client is None:
            client = self.get_session().client("ec2")

        servers = fetch_servers_by(client, filters)

        for server in servers:
            server.ssh_profile = self.ssh.get(server.lane)
            if server.ssh_profile is None:
                print(f"WARNING: no profile found for {server} in lane {server.lane!r}")

        return servers

    def write(self, name: str) -> Path:
        """Save the profile to the configuration directory under the given name."""
        return self.write_file(name, get_profile_path(name, False))

    def write_file(self, name: str, dest: Union[str, Path]) -> Path:
        """
        Save the profile to a specific file.

        Existing files are only replaced when overwriting is allowed. The
        file is written with mode 0600 inside a 0700 directory.

        Args:
            name: Profile name, used in messages
            dest: Destination file

        Returns:
            Path: The file that was written
        """
        dest = Path(dest)
        if dest.exists() and not self._overwrite:
            raise ProfileExistsError(name)

        out = self.to_yaml()

        dest.parent.mkdir(mode=DIR_MODE, parents=True, exist_ok=True)

        fd = os.open(dest, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, FILE_MODE)
        os.fchmod(fd, FILE_MODE)
        with os.fdopen(fd, "w") as f:
            f.write(out)

        print(f"Profile {name!r} written to {dest}")
        return dest


def get_sample_profile() -> Profile:
    """Return a sample profile that is easy to use as an example."""
    return Profile(
        ssh=SSHConfig({
            "dev": SSHProfile(
                identity="~/.ssh/id_rsa_dev",
                tunnels=["8080:127.0.0.1:80", "3306:127.0.0.1:3306"],
            ),
            "stage": SSHProfile(
                identity="~/.ssh/id_rsa_stage",
                tunnel="8080:127.0.0.1:80",
            ),
            "prod": SSHProfile(identity="~/.ssh/id_rsa_prod"),
        }),
    )


def get_profile_path(name: str, check_perms: bool) -> Path:
    """
    Get the file expected to hold the named profile.

    Args:
        name: Profile name
        check_perms: Whether to check the file and directory permissions

    Returns:
        Path: Path to the profile file
    """
    path = get_config_dir() / f"{name}{PROFILE_SUFFIX}"

    if check_perms:
        check_profile_permissions(path)

    return path


def list_profiles() -> List[str]:
    """List the names of the profiles in the configuration directory."""
    config_dir = get_config_dir()
    if not config_dir.is_dir():
        return []

    return sorted(
        p.stem for p in config_dir.glob(f"*{PROFILE_SUFFIX}")
        if p.name != CONFIG_FILENAME
    )


def load_profile(name: str, config: Optional[Config] = None) -> Profile:
    """
    Read the named profile from the configuration directory.

    Args:
        name: Profile name
        config: Global configuration (loaded from disk if None)

    Returns:
        Profile: The validated profile
    """
    path = get_profile_path(name, True)
    try:
        data = path.read_bytes()
    except OSError as e:
        raise ProfileLoadError(f"unable to read profile: {e}") from e

    if config is None:
        config = load_config()

    return load_profile_bytes(data, config)


def load_profile_bytes(data: Union[bytes, str], config: Optional[Config] = None) -> Profile:
    """
    Load a profile from YAML.

    Args:
        data: YAML document
        config: Global configuration used for fallback values

    Returns:
        Profile: The validated profile
    """
    try:
        parsed = yaml.safe_load(data)
    except yaml.YAMLError as e:
        raise ProfileLoadError(f"unable to parse lane profile: {e}") from e

    if parsed is None:
        parsed = {}
    if not isinstance(parsed, dict):
        raise ProfileLoadError("unable to parse lane profile: expected a mapping")

    try:
        prof = Profile.from_dict(parsed)
    except (AttributeError, TypeError) as e:
        raise ProfileLoadError(f"unable to parse lane profile: {e}") from e

    prof.set_global(config)

    try:
        prof.validate()
    except InvalidProfileError as e:
        raise InvalidProfileError(f"invalid profile: {e}") from e

    return prof

from typing import Any, Dict, List, Optional

from ..errors import MissingSSHProfileError, NoAddressError
from ..ssh.config import SSHProfile

LANE_TAG = "Lane"
NAME_TAG = "Name"


def _get_tag(instance: Dict[str, Any], key: str) -> Optional[str]:
    for tag in instance.get("Tags") or []:
        if tag.get("Key") == key:
            return tag.get("Value")
    return None


class Server:
    """An EC2 instance along with the lane it belongs to."""

    def __init__(self, id: str, name: Optional[str] = None, lane: Optional[str] = None,
                 ip: Optional[str] = None, state: Optional[str] = None,
                 private_ip: Optional[str] = None, instance_type: Optional[str] = None):
        self.id = id
        self.name = name or ""
        self.lane = lane or ""
        self.ip = ip
        self.state = state
        self.private_ip = private_ip
        self.instance_type = instance_type
        self.ssh_profile: Optional[SSHProfile] = None

    def __str__(self) -> str:
        return f"{self.name} ({self.id})"

    def __repr__(self) -> str:
        return f"Server(id={self.id!r}, name={self.name!r}, lane={self.lane!r})"

    @classmethod
    def from_instance(cls, instance: Dict[str, Any]) -> "Server":
        """
        Create a server from an instance returned by ``describe_instances``.

        Args:
            instance: Instance dictionary from the EC2 API

        Returns:
            Server: The server with its name and lane taken from the tags
        """
        return cls(
            id=instance["InstanceId"],
            name=_get_tag(instance, NAME_TAG),
            lane=_get_tag(instance, LANE_TAG),
            ip=instance.get("PublicIpAddress"),
            state=(instance.get("State") or {}).get("Name"),
            private_ip=instance.get("PrivateIpAddress"),
            instance_type=instance.get("InstanceType"),
        )

    @property
    def address(self) -> Optional[str]:
        return self.ip or self.private_ip

    def get_ssh_args(self) -> List[str]:
        """
        Build the ``ssh`` command line for this server.

        Raises:
            MissingSSHProfileError: No SSH settings are attached for the lane
            NoAddressError: The server has no IP address
        """
        if self.ssh_profile is None:
            raise MissingSSHProfileError(f"no SSH profile for {self} in lane {self.lane!r}")
        if not self.address:
            raise NoAddressError(f"{self} has no IP address (state: {self.state})")
        return self.ssh_profile.get_ssh_args(self.address)


def create_lane_filter(lane: str) -> List[Dict[str, Any]]:
    """
    Create the ``describe_instances`` filter for a single lane.

    Args:
        lane: Name of the lane

    Returns:
        List[Dict[str, Any]]: Filters matching instances tagged with the lane
    """
    return [{"Name": f"tag:{LANE_TAG}", "Values": [lane]}]


def fetch_servers_by(client, filters: Optional[List[Dict[str, Any]]] = None) -> List[Server]:
    """
    Retrieve all EC2 instances matching the filters.

    Args:
        client: boto3 EC2 client
        filters: Optional ``describe_instances`` filters

    Returns:
        List[Server]: Servers sorted by lane, then name
    """
    paginator = client.get_paginator("describe_instances")
    kwargs = {"Filters": filters} if filters else {}

    servers = []
    for page in paginator.paginate(**kwargs):
        for reservation in page.get("Reservations", []):
            for instance in reservation.get("Instances", []):
                servers.append(Server.from_instance(instance))

    servers.sort(key=lambda s: (s.lane, s.name, s.id))
    return servers


def fetch_servers(client) -> List[Server]:
    """Retrieve every EC2 instance visible to the client."""
    return fetch_servers_by(client)


def fetch_servers_in_lane(client, lane: str) -> List[Server]:
    """Retrieve the EC2 instances in a single lane."""
    return fetch_servers_by(client, create_lane_filter(lane))

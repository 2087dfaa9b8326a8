import os
from typing import Any, Dict, List, Optional


def _as_text(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    return str(value)


class SSHProfile:
    """SSH settings used to reach every server in one lane."""

    def __init__(self, identity: str = "", tunnel: Optional[str] = None,
                 tunnels: Optional[List[str]] = None, user: Optional[str] = None):
        self.identity = identity
        self.tunnel = tunnel
        self.tunnels = list(tunnels) if tunnels else []
        self.user = user

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SSHProfile):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return f"SSHProfile(identity={self.identity!r}, tunnels={self.get_tunnels()!r})"

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "SSHProfile":
        data = data or {}
        tunnels = data.get("tunnels") or []
        if isinstance(tunnels, str):
            tunnels = [tunnels]
        return cls(
            identity=_as_text(data.get("identity")) or "",
            tunnel=_as_text(data.get("tunnel")),
            tunnels=[str(t) for t in tunnels],
            user=_as_text(data.get("user")),
        )

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"identity": self.identity}
        if self.tunnel:
            out["tunnel"] = self.tunnel
        if self.tunnels:
            out["tunnels"] = list(self.tunnels)
        if self.user:
            out["user"] = self.user
        return out

    def get_tunnels(self) -> List[str]:
        """
        Get every tunnel spec for this lane.

        The single ``tunnel`` comes first, followed by ``tunnels``. Repeated
        specs are only returned once.

        Returns:
            List[str]: Tunnel specs in ``local_port:host:remote_port`` form
        """
        specs = []
        for spec in [self.tunnel] + self.tunnels:
            if spec and spec not in specs:
                specs.append(spec)
        return specs

    def get_ssh_args(self, host: str) -> List[str]:
        """
        Build the command line for the system ``ssh`` binary.

        Args:
            host: Address of the server to connect to

        Returns:
            List[str]: Arguments suitable for ``subprocess.call``
        """
        args = ["ssh"]
        if self.identity:
            args.extend(["-i", os.path.expanduser(self.identity)])
        for spec in self.get_tunnels():
            args.extend(["-L", spec])
        args.append(f"{self.user}@{host}" if self.user else host)
        return args


class SSHConfig:
    """Maps lane names to their SSH settings."""

    def __init__(self, mods: Optional[Dict[str, SSHProfile]] = None):
        self.mods = dict(mods) if mods else {}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SSHConfig):
            return NotImplemented
        return self.mods == other.mods

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "SSHConfig":
        mods = (data or {}).get("mods") or {}
        return cls({str(lane): SSHProfile.from_dict(prof) for lane, prof in mods.items()})

    def to_dict(self) -> Dict[str, Any]:
        return {"mods": {lane: prof.to_dict() for lane, prof in self.mods.items()}}

    def get(self, lane: Optional[str]) -> Optional[SSHProfile]:
        """Get the SSH settings for a lane, or None if the lane is unknown."""
        if lane is None:
            return None
        return self.mods.get(lane)

    def lanes(self) -> List[str]:
        return sorted(self.mods)

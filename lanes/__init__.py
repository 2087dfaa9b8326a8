"""
Lanes: reach EC2 instances grouped into lanes with per-lane SSH settings,
using named profiles that bundle AWS credentials and a default region.
"""

__version__ = "0.1.0"

from .profiles import Profile, load_profile, load_profile_bytes
from .ec2 import Server
from .ssh import SSHConfig, SSHProfile

__all__ = [
    'Profile',
    'load_profile',
    'load_profile_bytes',
    'Server',
    'SSHConfig',
    'SSHProfile',
]

"""
SSH settings attached to each lane.
"""

from .config import SSHConfig, SSHProfile

__all__ = [
    'SSHConfig',
    'SSHProfile',
]

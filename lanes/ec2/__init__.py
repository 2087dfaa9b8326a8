"""
EC2 inventory grouped by lane.
"""

from .servers import (
    Server,
    create_lane_filter,
    fetch_servers,
    fetch_servers_by,
    fetch_servers_in_lane,
    LANE_TAG,
)

__all__ = [
    'Server',
    'create_lane_filter',
    'fetch_servers',
    'fetch_servers_by',
    'fetch_servers_in_lane',
    'LANE_TAG',
]

"""
Lane profile management: loading, validating, persisting and checking the
permissions of profile files.
"""

from .profile import (
    Profile,
    get_sample_profile,
    get_profile_path,
    list_profiles,
    load_profile,
    load_profile_bytes,
)
from .permissions import (
    check_permissions,
    check_profile_permissions,
    harden_permissions,
)
from .aws_import import (
    list_aws_profiles,
    read_aws_credentials,
    profile_from_aws,
)

__all__ = [
    'Profile',
    'get_sample_profile',
    'get_profile_path',
    'list_profiles',
    'load_profile',
    'load_profile_bytes',
    'check_permissions',
    'check_profile_permissions',
    'harden_permissions',
    'list_aws_profiles',
    'read_aws_credentials',
    'profile_from_aws',
]

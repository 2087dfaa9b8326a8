"""
Profile Permissions

Profiles hold AWS credentials, so both the profile file and the directory
containing it should only be accessible by their owner. This module reports
anything more permissive than that.
"""

import os
import stat
import sys
from pathlib import Path
from typing import List, Tuple, Union

from ..config.settings import DIR_MODE, FILE_MODE

__all__ = [
    'check_permissions',
    'check_profile_permissions',
    'harden_permissions',
]


def check_permissions(path: Union[str, Path]) -> Tuple[bool, List[str]]:
    """
    Look for possible concerns with directory and file permissions.

    An owner without read access is fatal, as is a path that cannot be
    stat'ed. Any group or world access is only a warning.

    Args:
        path: File or directory to check

    Returns:
        Tuple[bool, List[str]]: (fatal, problems)
    """
    problems = []
    fatal = False

    try:
        mode = os.stat(path).st_mode
    except OSError as e:
        return True, [str(e)]

    if (mode & stat.S_IRWXU) >> 6 <= 3:
        fatal = True
        problems.append(f"{path} is not user-accessible")

    if mode & stat.S_IRWXG:
        problems.append(f"{path} is group-accessible")

    if mode & stat.S_IRWXO:
        problems.append(f"{path} is world-accessible")

    return fatal, problems


def check_profile_permissions(path: Union[str, Path]) -> None:
    """
    Check a profile and its directory, exiting the process on fatal problems.

    Args:
        path: Path to the profile file
    """
    dir_fatal, dir_problems = check_permissions(os.path.dirname(os.path.abspath(path)))
    file_fatal, file_problems = check_permissions(path)

    problems = dir_problems + file_problems
    fatal = dir_fatal or file_fatal

    if problems:
        prefix = "ERROR" if fatal else "WARNING"
        print(f"{prefix}: checking profile permissions, {'; '.join(problems)}\n")

    if fatal:
        sys.exit(1)


def harden_permissions(path: Union[str, Path]) -> None:
    """Restrict a profile to 0600 and its directory to 0700."""
    os.chmod(os.path.dirname(os.path.abspath(path)), DIR_MODE)
    os.chmod(path, FILE_MODE)

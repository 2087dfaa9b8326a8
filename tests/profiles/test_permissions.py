"""
Tests for the profile permission checks.
"""

import os
import stat

import pytest

from lanes.profiles.permissions import (
    check_permissions,
    check_profile_permissions,
    harden_permissions,
)


@pytest.fixture
def profile_file(config_dir):
    path = config_dir / "work.yml"
    path.write_text("aws_access_key_id: a\n")
    os.chmod(path, 0o600)
    return path


@pytest.mark.parametrize("mode, fatal, problems", [
    (0o600, False, []),
    (0o700, False, []),
    (0o400, False, []),
    (0o640, False, ["group-accessible"]),
    (0o604, False, ["world-accessible"]),
    (0o644, False, ["group-accessible", "world-accessible"]),
    (0o755, False, ["group-accessible", "world-accessible"]),
    (0o200, True, ["not user-accessible"]),
    (0o300, True, ["not user-accessible"]),
    (0o000, True, ["not user-accessible"]),
    (0o077, True, ["not user-accessible", "group-accessible", "world-accessible"]),
])
def test_check_permissions_modes(tmp_path, mode, fatal, problems):
    """Test classifying file modes as fatal, warning or fine."""
    path = tmp_path / "profile.yml"
    path.write_text("")
    os.chmod(path, mode)

    is_fatal, found = check_permissions(path)

    assert is_fatal is fatal
    assert found == [f"{path} is {p}" for p in problems]


def test_check_permissions_directory(tmp_path):
    """Test that directories are classified the same way."""
    path = tmp_path / "dir"
    path.mkdir()
    os.chmod(path, 0o750)

    is_fatal, found = check_permissions(path)

    assert is_fatal is False
    assert found == [f"{path} is group-accessible"]


def test_check_permissions_missing_path(tmp_path):
    """Test that a path which cannot be stat'ed is fatal."""
    is_fatal, found = check_permissions(tmp_path / "missing.yml")

    assert is_fatal is True
    assert len(found) == 1
    assert "missing.yml" in found[0]


def test_check_profile_permissions_clean(profile_file, capsys):
    """Test that private profiles pass silently."""
    check_profile_permissions(profile_file)

    assert capsys.readouterr().out == ""


def test_check_profile_permissions_warning(profile_file, capsys):
    """Test that loose permissions only print a warning."""
    os.chmod(profile_file, 0o644)
    os.chmod(profile_file.parent, 0o755)

    check_profile_permissions(profile_file)

    out = capsys.readouterr().out
    assert out.startswith("WARNING: checking profile permissions, ")
    assert f"{profile_file.parent} is world-accessible" in out
    assert f"{profile_file} is group-accessible" in out


def test_check_profile_permissions_fatal(profile_file, capsys):
    """Test that an unreadable profile exits the process."""
    os.chmod(profile_file, 0o200)

    with pytest.raises(SystemExit) as exc_info:
        check_profile_permissions(profile_file)

    assert exc_info.value.code == 1
    assert capsys.readouterr().out.startswith("ERROR: checking profile permissions, ")


def test_check_profile_permissions_aggregates(profile_file, capsys):
    """Test that directory warnings are reported along with fatal file problems."""
    os.chmod(profile_file.parent, 0o770)
    os.chmod(profile_file, 0o000)

    with pytest.raises(SystemExit):
        check_profile_permissions(profile_file)

    out = capsys.readouterr().out
    assert f"{profile_file.parent} is group-accessible" in out
    assert f"{profile_file} is not user-accessible" in out


def test_harden_permissions(profile_file):
    """Test restricting a profile and its directory."""
    os.chmod(profile_file, 0o644)
    os.chmod(profile_file.parent, 0o755)

    harden_permissions(profile_file)

    assert stat.S_IMODE(os.stat(profile_file).st_mode) == 0o600
    assert stat.S_IMODE(os.stat(profile_file.parent).st_mode) == 0o700
    assert check_permissions(profile_file) == (False, [])

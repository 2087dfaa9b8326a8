import os

from lanes.ssh.config import SSHConfig, SSHProfile


def test_get_tunnels_order():
    """Test that the single tunnel comes before the tunnel list."""
    prof = SSHProfile("~/.ssh/id", tunnel="9000:127.0.0.1:9000",
                      tunnels=["8080:127.0.0.1:80", "3306:127.0.0.1:3306"])

    assert prof.get_tunnels() == [
        "9000:127.0.0.1:9000",
        "8080:127.0.0.1:80",
        "3306:127.0.0.1:3306",
    ]


def test_get_tunnels_skips_duplicates():
    prof = SSHProfile("~/.ssh/id", tunnel="8080:127.0.0.1:80",
                      tunnels=["8080:127.0.0.1:80", "", "3306:127.0.0.1:3306"])

    assert prof.get_tunnels() == ["8080:127.0.0.1:80", "3306:127.0.0.1:3306"]


def test_get_ssh_args_minimal():
    """Test the ssh command without identity or tunnels."""
    assert SSHProfile().get_ssh_args("203.0.113.1") == ["ssh", "203.0.113.1"]


def test_get_ssh_args_expands_identity():
    prof = SSHProfile("~/.ssh/id_rsa_prod")

    args = prof.get_ssh_args("203.0.113.1")

    assert args == ["ssh", "-i", os.path.expanduser("~/.ssh/id_rsa_prod"), "203.0.113.1"]


def test_from_dict():
    """Test reading SSH settings as they appear in a profile."""
    config = SSHConfig.from_dict({
        "mods": {
            "dev": {"identity": "~/.ssh/dev", "tunnels": ["8080:127.0.0.1:80"]},
            "stage": {"identity": "~/.ssh/stage", "tunnel": "8080:127.0.0.1:80", "user": "ec2-user"},
            "prod": None,
        }
    })

    assert config.lanes() == ["dev", "prod", "stage"]
    assert config.get("dev").tunnels == ["8080:127.0.0.1:80"]
    assert config.get("stage").user == "ec2-user"
    assert config.get("prod").identity == ""
    assert config.get("qa") is None
    assert config.get(None) is None


def test_from_dict_single_tunnel_string_in_list_key():
    prof = SSHProfile.from_dict({"identity": "~/.ssh/dev", "tunnels": "8080:127.0.0.1:80"})

    assert prof.tunnels == ["8080:127.0.0.1:80"]


def test_from_dict_empty():
    assert SSHConfig.from_dict(None).mods == {}
    assert SSHConfig.from_dict({}).mods == {}


def test_to_dict_omits_empty_values():
    config = SSHConfig({
        "prod": SSHProfile("~/.ssh/prod"),
        "dev": SSHProfile("~/.ssh/dev", tunnels=["8080:127.0.0.1:80"]),
    })

    assert config.to_dict() == {
        "mods": {
            "prod": {"identity": "~/.ssh/prod"},
            "dev": {"identity": "~/.ssh/dev", "tunnels": ["8080:127.0.0.1:80"]},
        }
    }


def test_from_dict_converts_non_text_values():
    """Test that numeric YAML scalars are usable as identity, tunnel and user."""
    prof = SSHProfile.from_dict({"identity": 1234, "tunnel": 8080, "user": 1000})

    assert prof.identity == "1234"
    assert prof.tunnel == "8080"
    assert prof.user == "1000"
    assert prof.get_ssh_args("203.0.113.1") == [
        "ssh", "-i", "1234", "-L", "8080", "1000@203.0.113.1",
    ]

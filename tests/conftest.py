"""
Shared test fixtures and configuration.
"""

import os
import sys
from unittest.mock import MagicMock

import pytest

# Add the parent directory to the path so we can import the lanes package
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


def make_instance(instance_id, name=None, lane=None, ip=None, state="running",
                  private_ip=None, instance_type="t3.micro"):
    """Build an instance dictionary shaped like describe_instances output."""
    tags = []
    if name is not None:
        tags.append({"Key": "Name", "Value": name})
    if lane is not None:
        tags.append({"Key": "Lane", "Value": lane})

    instance = {
        "InstanceId": instance_id,
        "InstanceType": instance_type,
        "State": {"Code": 16, "Name": state},
        "Tags": tags,
    }
    if ip is not None:
        instance["PublicIpAddress"] = ip
    if private_ip is not None:
        instance["PrivateIpAddress"] = private_ip
    return instance


def make_ec2_client(*pages):
    """
    Create a mock EC2 client whose describe_instances paginator yields the
    given pages. Each page is a list of reservations (lists of instances).
    """
    client = MagicMock()
    paginator = MagicMock()
    paginator.paginate.return_value = [
        {"Reservations": [{"Instances": instances} for instances in page]}
        for page in pages
    ]
    client.get_paginator.return_value = paginator
    return client


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the developer's lanes settings out of the tests."""
    for var in ("LANES_PROFILE", "LANES_REGION", "LANES_CONFIG_DIR",
                "AWS_ACCESS_KEY_ID", "AWS_SECRET_ACCESS_KEY"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def config_dir(tmp_path, monkeypatch):
    """A private lanes configuration directory."""
    path = tmp_path / "lanes"
    path.mkdir()
    os.chmod(path, 0o700)
    monkeypatch.setenv("LANES_CONFIG_DIR", str(path))
    return path


@pytest.fixture
def sample_yaml():
    return """
aws_access_key_id: AKIAEXAMPLE
aws_secret_access_key: secretEXAMPLEkey
region: us-east-2
ssh:
  mods:
    dev:
      identity: ~/.ssh/id_rsa_dev
      tunnels:
        - 8080:127.0.0.1:80
    prod:
      identity: ~/.ssh/id_rsa_prod
"""


@pytest.fixture
def instance_factory():
    return make_instance


@pytest.fixture
def ec2_client_factory():
    return make_ec2_client

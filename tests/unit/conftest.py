"""Pytest configuration and fixtures for ec2ssh tests."""

import os
import sys
from collections.abc import Generator
from pathlib import Path
from typing import Any

import boto3
import pytest
import yaml
from moto import mock_aws

tests_root = Path(__file__).parent
if str(tests_root) not in sys.path:
    sys.path.insert(0, str(tests_root))

from fakes.fake_inventory import FakeInventory, make_record  # noqa: E402
from fakes.fake_launcher import FakeLauncher  # noqa: E402


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the user's config file and key path out of every test.

    Points EC2SSH_CONFIG at a file that does not exist and removes
    AWS_KEY_PATH and EC2SSH_DEBUG, so tests start from built-in defaults.
    """
    monkeypatch.setenv("EC2SSH_CONFIG", str(tmp_path / "missing.yaml"))
    monkeypatch.delenv("AWS_KEY_PATH", raising=False)
    monkeypatch.delenv("EC2SSH_DEBUG", raising=False)


@pytest.fixture
def aws_credentials() -> Generator[None, None, None]:
    """Fixture to set AWS credentials for testing with proper cleanup.

    Sets mock AWS credentials in environment variables for the duration of the test,
    then restores the original environment state.

    Yields
    ------
    None
        Control back to test after setting credentials
    """
    names = [
        "AWS_ACCESS_KEY_ID",
        "AWS_SECRET_ACCESS_KEY",
        "AWS_DEFAULT_REGION",
        "AWS_PROFILE",
    ]
    saved = {name: os.environ.get(name) for name in names}

    os.environ["AWS_ACCESS_KEY_ID"] = "testing"
    os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"
    os.environ["AWS_DEFAULT_REGION"] = "us-east-1"
    os.environ.pop("AWS_PROFILE", None)

    yield

    for name, value in saved.items():
        if value is not None:
            os.environ[name] = value
        else:
            os.environ.pop(name, None)


@pytest.fixture
def ec2_client(aws_credentials: None) -> Generator[Any, None, None]:
    """Mocked EC2 client in us-east-1 with a key pair named ``deploy``."""
    with mock_aws():
        client = boto3.client("ec2", region_name="us-east-1")
        client.create_key_pair(KeyName="deploy")
        yield client


@pytest.fixture
def registered_ami(ec2_client: Any) -> str:
    """Register an AMI for launching mocked instances.

    Parameters
    ----------
    ec2_client : Any
        Mocked EC2 client

    Returns
    -------
    str
        AMI ID of registered image
    """
    response = ec2_client.register_image(
        Name="test-ami-image",
        Description="Test AMI",
        Architecture="x86_64",
        RootDeviceName="/dev/sda1",
        VirtualizationType="hvm",
    )
    return response["ImageId"]


@pytest.fixture
def launch_instance(ec2_client: Any, registered_ami: str):
    """Helper fixture launching one mocked instance per call.

    Returns
    -------
    callable
        Function taking an optional Name tag and returning the instance record
    """

    def _launch(name: str | None = None) -> dict[str, Any]:
        kwargs: dict[str, Any] = {
            "ImageId": registered_ami,
            "MinCount": 1,
            "MaxCount": 1,
            "InstanceType": "t3.micro",
            "KeyName": "deploy",
        }
        if name is not None:
            kwargs["TagSpecifications"] = [
                {"ResourceType": "instance", "Tags": [{"Key": "Name", "Value": name}]}
            ]
        instance = ec2_client.run_instances(**kwargs)["Instances"][0]
        response = ec2_client.describe_instances(InstanceIds=[instance["InstanceId"]])
        return response["Reservations"][0]["Instances"][0]

    return _launch


@pytest.fixture
def config_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point EC2SSH_CONFIG at a writable temporary config file path."""
    config_path = tmp_path / "ec2ssh.yaml"
    monkeypatch.setenv("EC2SSH_CONFIG", str(config_path))
    return config_path


@pytest.fixture
def write_config(config_file: Path):
    """Helper fixture to write config data to file.

    Parameters
    ----------
    config_file : Path
        Path to config file from config_file fixture

    Returns
    -------
    callable
        Function that takes config_data dict and writes to file
    """

    def _write(config_data: dict[str, Any]) -> None:
        with open(config_file, "w") as f:
            yaml.dump(config_data, f)

    return _write


@pytest.fixture
def three_records() -> list[dict[str, Any]]:
    """Three records returned in non-alphabetical provider order."""
    return [
        make_record("i-0000000000000000c", "10.0.0.3", name="web-c"),
        make_record("i-0000000000000000a", "10.0.0.1", name="web-a"),
        make_record("i-0000000000000000b", "10.0.0.2", name="web-b"),
    ]


@pytest.fixture
def fake_launcher() -> FakeLauncher:
    return FakeLauncher()


@pytest.fixture
def fake_inventory(three_records: list[dict[str, Any]]) -> FakeInventory:
    return FakeInventory(three_records)

"""Tests for ConfigLoader and Settings."""

import pytest

from ec2ssh.core.config import ConfigLoader, Settings


@pytest.fixture
def loader() -> ConfigLoader:
    return ConfigLoader()


class TestLoadConfig:
    """Tests for ConfigLoader.load_config."""

    def test_missing_file_is_empty(self, loader, config_file) -> None:
        assert loader.load_config() == {}

    def test_reads_file_from_env_var(self, loader, write_config) -> None:
        write_config({"username": "ubuntu", "region": "eu-west-1"})

        assert loader.load_config() == {"username": "ubuntu", "region": "eu-west-1"}

    def test_explicit_path_wins(self, loader, tmp_path) -> None:
        path = tmp_path / "other.yaml"
        path.write_text("profile: staging\n")

        assert loader.load_config(str(path)) == {"profile": "staging"}

    def test_empty_file(self, loader, config_file) -> None:
        config_file.write_text("")

        assert loader.load_config() == {}

    def test_interpolation_is_resolved(self, loader, config_file, monkeypatch) -> None:
        monkeypatch.setenv("TEAM_KEYS", "/srv/keys")
        config_file.write_text("key_path: ${oc.env:TEAM_KEYS}/ec2\n")

        assert loader.load_config() == {"key_path": "/srv/keys/ec2"}

    def test_invalid_yaml(self, loader, config_file) -> None:
        config_file.write_text("username: [unclosed\n")

        with pytest.raises(ValueError, match="Invalid YAML"):
            loader.load_config()

    def test_unknown_keys(self, loader, write_config) -> None:
        write_config({"username": "ubuntu", "instance_type": "t3.micro"})

        with pytest.raises(ValueError, match="instance_type"):
            loader.load_config()

    def test_non_mapping(self, loader, config_file) -> None:
        config_file.write_text("- one\n- two\n")

        with pytest.raises(ValueError, match="mapping"):
            loader.load_config()

    def test_undefined_variable(self, loader, config_file) -> None:
        config_file.write_text("key_path: ${nowhere}\n")

        with pytest.raises(ValueError, match="resolution"):
            loader.load_config()


class TestBuildSettings:
    """Tests for ConfigLoader.build_settings precedence."""

    def test_built_in_defaults(self, loader, monkeypatch) -> None:
        monkeypatch.setenv("HOME", "/home/dev")

        settings = loader.build_settings({})

        assert settings == Settings(key_path="/home/dev/.ssh/", username="ec2-user")

    def test_file_overrides_defaults(self, loader) -> None:
        settings = loader.build_settings(
            {"key_path": "/keys", "username": "ubuntu", "region": "us-west-2"}
        )

        assert settings.key_path == "/keys"
        assert settings.username == "ubuntu"
        assert settings.region == "us-west-2"

    def test_env_key_path_overrides_file(self, loader, monkeypatch) -> None:
        monkeypatch.setenv("AWS_KEY_PATH", "/env/keys")

        settings = loader.build_settings({"key_path": "/file/keys"})

        assert settings.key_path == "/env/keys"

    def test_flags_override_everything(self, loader, monkeypatch) -> None:
        monkeypatch.setenv("AWS_KEY_PATH", "/env/keys")

        settings = loader.build_settings(
            {"key_path": "/file/keys", "username": "ubuntu", "profile": "dev"},
            key_path="/flag/keys",
            username="admin",
            profile="prod",
            region="ap-south-1",
            verbose=True,
            command="uptime",
        )

        assert settings == Settings(
            key_path="/flag/keys",
            username="admin",
            region="ap-south-1",
            profile="prod",
            verbose=True,
            command="uptime",
        )

    def test_empty_command_is_none(self, loader) -> None:
        assert loader.build_settings({}, command="").command is None

    def test_settings_are_immutable(self, loader) -> None:
        settings = loader.build_settings({})

        with pytest.raises(AttributeError):
            settings.verbose = True

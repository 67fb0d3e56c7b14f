"""Settings for a single ec2ssh invocation.

Settings are built once at the CLI boundary from, in order of precedence,
command-line flags, environment variables, the YAML config file and built-in
defaults. The resulting :class:`Settings` value is passed explicitly to the
inventory and launcher factories.
"""

from __future__ import annotations

import copy
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from omegaconf import OmegaConf
from omegaconf.errors import OmegaConfBaseException

from ec2ssh.constants import DEFAULT_SSH_USERNAME

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "EC2SSH_CONFIG"
KEY_PATH_ENV_VAR = "AWS_KEY_PATH"
DEFAULT_CONFIG_FILE = "~/.ec2ssh.yaml"


@dataclass(frozen=True)
class Settings:
    """Resolved settings for one invocation."""

    key_path: str
    username: str = DEFAULT_SSH_USERNAME
    region: str | None = None
    profile: str | None = None
    verbose: bool = False
    command: str | None = None


def default_key_path() -> str:
    """Return ``$HOME/.ssh/``, the directory searched for ``<KeyName>.pem``."""
    return os.environ.get("HOME", str(Path.home())) + "/.ssh/"


class ConfigLoader:
    """Load the optional YAML config file and merge it into Settings."""

    KNOWN_KEYS = frozenset(("key_path", "username", "region", "profile"))

    def __init__(self) -> None:
        self.BUILT_IN_DEFAULTS: dict[str, Any] = {
            "key_path": None,
            "username": DEFAULT_SSH_USERNAME,
            "region": None,
            "profile": None,
        }

    def load_config(self, config_path: str | None = None) -> dict[str, Any]:
        """Load configuration from YAML file.

        Parameters
        ----------
        config_path : str | None
            Path to YAML config file. If None, checks EC2SSH_CONFIG env var,
            then falls back to ~/.ec2ssh.yaml

        Returns
        -------
        dict[str, Any]
            Parsed configuration with interpolations resolved, empty when the
            file does not exist

        Raises
        ------
        ValueError
            If the file is not valid YAML, is not a mapping, contains unknown
            keys, or references undefined variables
        RuntimeError
            If the file exists but cannot be read
        """
        if config_path is None:
            config_path = os.environ.get(CONFIG_ENV_VAR, DEFAULT_CONFIG_FILE)

        config_file = Path(config_path).expanduser()

        if not config_file.exists():
            logger.debug("config file %s not found, using defaults", config_file)
            return {}

        try:
            cfg = OmegaConf.load(config_file)
        except yaml.YAMLError as e:
            logger.error("Failed to parse YAML config file %s: %s", config_file, e)
            raise ValueError(f"Invalid YAML in {config_file}: {e}") from e
        except OSError as e:
            logger.error("Failed to read config file %s: %s", config_file, e)
            raise RuntimeError(f"Failed to read config file {config_file}: {e}") from e

        if cfg is None:
            return {}

        if not OmegaConf.is_dict(cfg):
            raise ValueError(f"Config file {config_file} must contain a mapping")

        try:
            config = OmegaConf.to_container(cfg, resolve=True, throw_on_missing=True)
        except OmegaConfBaseException as e:
            logger.error("Failed to resolve configuration variables: %s", e)
            raise ValueError(f"Configuration variable resolution error: {e}") from e

        unknown = sorted(set(config) - self.KNOWN_KEYS)
        if unknown:
            raise ValueError(
                f"Unknown keys in {config_file}: {', '.join(map(str, unknown))}"
            )

        logger.debug("loaded config file %s", config_file)
        return config

    def build_settings(
        self,
        config: dict[str, Any],
        key_path: str | None = None,
        username: str | None = None,
        region: str | None = None,
        profile: str | None = None,
        verbose: bool = False,
        command: str | None = None,
    ) -> Settings:
        """Merge built-in defaults, file config, environment and flags.

        Parameters
        ----------
        config : dict[str, Any]
            Parsed config file from :meth:`load_config`
        key_path : str | None
            Directory holding ``<KeyName>.pem`` files, from the command line
        username : str | None
            Login user, from the command line
        region : str | None
            AWS region, from the command line
        profile : str | None
            AWS profile, from the command line
        verbose : bool
            Debug tracing and ``ssh -v``
        command : str | None
            Remote command instead of an interactive shell

        Returns
        -------
        Settings
            Settings for this invocation
        """
        merged = copy.deepcopy(self.BUILT_IN_DEFAULTS)

        for key, value in config.items():
            if value is not None:
                merged[key] = value

        env_key_path = os.environ.get(KEY_PATH_ENV_VAR)
        if env_key_path:
            merged["key_path"] = env_key_path

        overrides = {
            "key_path": key_path,
            "username": username,
            "region": region,
            "profile": profile,
        }
        for key, value in overrides.items():
            if value is not None:
                merged[key] = value

        if not merged["key_path"]:
            merged["key_path"] = default_key_path()

        return Settings(
            key_path=str(merged["key_path"]),
            username=str(merged["username"]),
            region=merged["region"],
            profile=merged["profile"],
            verbose=bool(verbose),
            command=command or None,
        )

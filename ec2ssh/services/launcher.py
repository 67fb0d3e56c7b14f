"""Remote shell launch through the local ``ssh`` client."""

from __future__ import annotations

import logging
import os
import shutil
import subprocess

from ec2ssh.constants import DEFAULT_SSH_USERNAME, KEY_FILE_SUFFIX
from ec2ssh.exceptions import LaunchError

logger = logging.getLogger(__name__)


class SSHLauncher:
    """Run ``ssh`` against a resolved instance with inherited stdio.

    Parameters
    ----------
    key_path : str
        Directory containing ``<KeyName>.pem`` private keys
    username : str
        Remote login user (default: ec2-user)
    ssh_binary : str
        Name or path of the ssh client to look up on PATH
    """

    def __init__(
        self,
        key_path: str,
        username: str = DEFAULT_SSH_USERNAME,
        ssh_binary: str = "ssh",
    ) -> None:
        self.key_path = key_path
        self.username = username
        self.ssh_binary = ssh_binary

    def key_file(self, key_name: str) -> str:
        """Return the private key path for an instance key-pair name."""
        logger.debug("key path is: %s", self.key_path)
        return os.path.join(self.key_path, key_name + KEY_FILE_SUFFIX)

    def build_args(
        self,
        host: str,
        key_name: str,
        command: str | None = None,
        verbose: bool = False,
    ) -> list[str]:
        """Build the ssh argument list, program excluded.

        Parameters
        ----------
        host : str
            Address to connect to
        key_name : str
            Key-pair name used to locate the private key
        command : str | None
            Remote command; an interactive shell when None or empty
        verbose : bool
            Append ``-v``

        Returns
        -------
        list[str]
            Arguments in the order ``-i KEY -l USER HOST [-v] [COMMAND]``
        """
        args = ["-i", self.key_file(key_name), "-l", self.username, host]
        if verbose:
            args.append("-v")
        if command:
            args.append(command)
        return args

    def launch(
        self,
        host: str,
        key_name: str,
        command: str | None = None,
        verbose: bool = False,
    ) -> int:
        """Run ssh in the foreground and wait for it to exit.

        Parameters
        ----------
        host : str
            Address to connect to
        key_name : str
            Key-pair name used to locate the private key
        command : str | None
            Remote command; an interactive shell when None or empty
        verbose : bool
            Pass ``-v`` to ssh

        Returns
        -------
        int
            Exit status of ssh, always 0

        Raises
        ------
        LaunchError
            If ssh is not on PATH, cannot be executed, or exits non-zero
        """
        binary = shutil.which(self.ssh_binary)
        if binary is None:
            raise LaunchError(f'exec: "{self.ssh_binary}": executable file not found in $PATH')

        argv = [binary, *self.build_args(host, key_name, command, verbose)]
        logger.debug("running command %s", argv)

        try:
            result = subprocess.run(argv, check=False)
        except OSError as e:
            raise LaunchError(f"Failed to run {binary}: {e}") from e

        if result.returncode != 0:
            raise LaunchError(
                f"{self.ssh_binary} exited with status {result.returncode}",
                exit_code=result.returncode,
            )

        return result.returncode

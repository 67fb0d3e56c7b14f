"""ec2ssh: connect to an EC2 instance by ID, private IP, or Name tag."""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable
from typing import Any, TextIO

from ec2ssh.constants import EXIT_ERROR, EXIT_SUCCESS
from ec2ssh.core.config import ConfigLoader, Settings
from ec2ssh.core.interfaces import InventoryProvider, Launcher
from ec2ssh.core.resolution import InstanceResolver, list_query, project
from ec2ssh.core.selection import Disambiguator
from ec2ssh.display import format_instance_list
from ec2ssh.exceptions import InstanceDataError, NoMatchError
from ec2ssh.logging import set_verbose
from ec2ssh.providers.aws.inventory import EC2Inventory
from ec2ssh.services.launcher import SSHLauncher

logger = logging.getLogger(__name__)

USAGE = """\
Usage: {prog} [options] {{instance id|private IPv4 address|name}}

Options:
  -v, --verbose         be verbose (passes -v to underlying SSH invocation)
  -p, --pem_path        path to SSH key files
  -l, --list_instances  list running and pending AWS instances
  -c, --command         run a command on the remote server
  -u, --user            remote login user (default: ec2-user)
  -r, --region          AWS region
  -a, --aws_profile     AWS named profile
"""


def _default_inventory_factory(settings: Settings) -> InventoryProvider:
    return EC2Inventory(region=settings.region, profile=settings.profile)


def _default_launcher_factory(settings: Settings) -> Launcher:
    return SSHLauncher(key_path=settings.key_path, username=settings.username)


class Ec2Ssh:
    """Resolve a lookup key to one instance and open ssh to it.

    Parameters
    ----------
    inventory_factory : Callable[[Settings], InventoryProvider] | None
        Builds the inventory provider from the invocation settings.
        If None, an :class:`EC2Inventory` is used
    launcher_factory : Callable[[Settings], Launcher] | None
        Builds the launcher from the invocation settings.
        If None, an :class:`SSHLauncher` is used
    input_stream : TextIO | None
        Stream the selection prompt reads from (default: sys.stdin)
    output_stream : TextIO | None
        Stream for the selection prompt (default: sys.stdout)
    config_loader : ConfigLoader | None
        Loader for the YAML config file
    """

    prog = "ec2ssh"

    def __init__(
        self,
        inventory_factory: Callable[[Settings], InventoryProvider] | None = None,
        launcher_factory: Callable[[Settings], Launcher] | None = None,
        input_stream: TextIO | None = None,
        output_stream: TextIO | None = None,
        config_loader: ConfigLoader | None = None,
    ) -> None:
        self._inventory_factory = inventory_factory or _default_inventory_factory
        self._launcher_factory = launcher_factory or _default_launcher_factory
        self._input_stream = input_stream
        self._output_stream = output_stream
        self._config_loader = config_loader or ConfigLoader()

    def usage(self) -> str:
        return USAGE.format(prog=self.prog)

    def run(
        self,
        target: str | None = None,
        *,
        command: str | None = None,
        verbose: bool = False,
        pem_path: str | None = None,
        list_instances: bool = False,
        user: str | None = None,
        region: str | None = None,
        aws_profile: str | None = None,
    ) -> int:
        """Connect to the instance matching TARGET, or list instances.

        Parameters
        ----------
        target : str | None
            Instance ID, private IP address, or Name tag
        command : str | None
            Command to run on the remote server
        verbose : bool
            Log debug traces and pass -v to ssh
        pem_path : str | None
            Directory containing <KeyName>.pem files (default: $AWS_KEY_PATH,
            then $HOME/.ssh/)
        list_instances : bool
            List running and pending instances when no TARGET is given
        user : str | None
            Remote login user
        region : str | None
            AWS region
        aws_profile : str | None
            AWS named profile

        Returns
        -------
        int
            Process exit status
        """
        set_verbose(bool(verbose))

        settings = self._config_loader.build_settings(
            self._config_loader.load_config(),
            key_path=pem_path,
            username=user,
            region=region,
            profile=aws_profile,
            verbose=bool(verbose),
            command=None if command is None else str(command),
        )
        logger.debug("settings: %s", settings)

        if target is None or str(target).strip() == "":
            if list_instances:
                self.list(settings)
                return EXIT_SUCCESS

            print(self.usage(), file=sys.stderr, end="")
            return EXIT_ERROR

        return self.connect(str(target).strip(), settings)

    def resolve(self, lookup: str, settings: Settings) -> dict[str, Any]:
        """Resolve ``lookup`` to exactly one inventory record.

        Raises
        ------
        NoMatchError
            If nothing matches
        InvalidSelectionError
            If the user's choice is invalid
        SelectionCancelled
            If the prompt reaches end of input
        """
        resolver = InstanceResolver(
            inventory=self._inventory_factory(settings),
            disambiguator=Disambiguator(
                input_stream=self._input_stream,
                output_stream=self._output_stream,
            ),
        )
        return resolver.resolve(lookup)

    def connect(self, lookup: str, settings: Settings) -> int:
        """Resolve ``lookup`` and run ssh against the instance's private IP.

        Parameters
        ----------
        lookup : str
            Instance ID, private IP address, or Name tag
        settings : Settings
            Invocation settings

        Returns
        -------
        int
            Exit status of ssh

        Raises
        ------
        InstanceDataError
            If the instance has no private IP or key pair
        LaunchError
            If ssh cannot be run or fails
        """
        instance = self.resolve(lookup, settings)

        host = instance.get("PrivateIpAddress")
        key_name = instance.get("KeyName")
        instance_id = instance.get("InstanceId", lookup)

        if not host:
            raise InstanceDataError(f"Instance {instance_id} has no PrivateIpAddress")
        if not key_name:
            raise InstanceDataError(f"Instance {instance_id} has no KeyName")

        logger.debug("connecting to %s (%s) as %s", instance_id, host, settings.username)

        launcher = self._launcher_factory(settings)
        return launcher.launch(
            host, key_name, command=settings.command, verbose=settings.verbose
        )

    def list(self, settings: Settings) -> None:
        """Log every running or pending instance as a table on the stdout stream.

        Raises
        ------
        NoMatchError
            If the inventory has no running or pending instances
        """
        inventory = self._inventory_factory(settings)

        logger.debug("aws api: describing instances")
        candidates = project(inventory.describe(list_query()))

        if not candidates:
            raise NoMatchError()

        for line in format_instance_list(candidates).splitlines():
            logger.info(line, extra={"stream": "stdout"})

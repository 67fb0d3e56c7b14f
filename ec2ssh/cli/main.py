"""CLI entry point for ec2ssh."""

from __future__ import annotations

import logging
import os
import sys
from typing import Any

import fire
from fire import decorators

from ec2ssh.app import Ec2Ssh
from ec2ssh.cli.parsing import split_arguments
from ec2ssh.constants import EXIT_CONFIG_ERROR, EXIT_ERROR, EXIT_SUCCESS, EXIT_USAGE_ERROR
from ec2ssh.exceptions import (
    InstanceDataError,
    InvalidSelectionError,
    LaunchError,
    NoMatchError,
    SelectionCancelled,
)
from ec2ssh.logging import configure_logging
from ec2ssh.providers.exceptions import (
    ProviderAPIError,
    ProviderConnectionError,
    ProviderCredentialsError,
)

logger = logging.getLogger("ec2ssh.cli")

DEBUG_ENV_VAR = "EC2SSH_DEBUG"


class Ec2SshCLI(Ec2Ssh):
    """CLI wrapper that turns the run result into the process exit code."""

    @decorators.SetParseFns(
        target=str, command=str, pem_path=str, user=str, region=str, aws_profile=str
    )
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
    ) -> None:
        """Connect to the instance matching TARGET, or list instances with -l.

        Parameters
        ----------
        target : str | None
            Instance ID, private IPv4 address, or Name tag, exactly as typed
        command : str | None
            Command to run on the remote server
        verbose : bool
            Be verbose (passes -v to the underlying ssh invocation)
        pem_path : str | None
            Path to SSH key files (default: $AWS_KEY_PATH, then $HOME/.ssh/)
        list_instances : bool
            List running and pending instances
        user : str | None
            Remote login user (default: ec2-user)
        region : str | None
            AWS region
        aws_profile : str | None
            AWS named profile
        """
        sys.exit(
            super().run(
                target=target,
                command=command,
                verbose=verbose,
                pem_path=pem_path,
                list_instances=list_instances,
                user=user,
                region=region,
                aws_profile=aws_profile,
            )
        )


def report_error(message: str, *args: Any) -> None:
    """Log an ``Error:`` line to stderr."""
    logger.error("Error: " + message, *args)


def handle_credentials_error(error: ProviderCredentialsError, debug_mode: bool) -> None:
    """Handle provider credentials error.

    Parameters
    ----------
    error : ProviderCredentialsError
        The credentials error that was raised
    debug_mode : bool
        Whether debug mode is enabled

    Raises
    ------
    ProviderCredentialsError
        Re-raised if debug mode is enabled
    """
    if debug_mode:
        raise

    report_error("%s", error)
    print(
        "\nConfigure your credentials:\n"
        "  aws configure\n\n"
        "Or set environment variables:\n"
        "  export AWS_ACCESS_KEY_ID=...\n"
        "  export AWS_SECRET_ACCESS_KEY=...",
        file=sys.stderr,
    )
    sys.exit(EXIT_ERROR)


def handle_provider_error(
    error: ProviderAPIError | ProviderConnectionError, debug_mode: bool
) -> None:
    """Handle inventory API failures; the provider message is shown verbatim.

    Raises
    ------
    ProviderAPIError, ProviderConnectionError
        Re-raised if debug mode is enabled
    """
    if debug_mode:
        raise

    report_error("%s", error)
    sys.exit(EXIT_ERROR)


def handle_resolution_error(
    error: NoMatchError | InvalidSelectionError | InstanceDataError,
    debug_mode: bool,
) -> None:
    """Handle lookups that cannot be resolved to exactly one instance.

    Raises
    ------
    NoMatchError, InvalidSelectionError, InstanceDataError
        Re-raised if debug mode is enabled
    """
    if debug_mode:
        raise

    report_error("%s", error)
    sys.exit(EXIT_ERROR)


def handle_launch_error(error: LaunchError, debug_mode: bool) -> None:
    """Handle ssh launch failures, exiting with ssh's status when it ran.

    Raises
    ------
    LaunchError
        Re-raised if debug mode is enabled
    """
    if debug_mode:
        raise

    report_error("%s", error)
    sys.exit(error.exit_code or EXIT_ERROR)


def handle_value_error(error: ValueError, debug_mode: bool) -> None:
    """Handle configuration errors.

    Raises
    ------
    ValueError
        Re-raised if debug mode is enabled
    """
    if debug_mode:
        raise

    print(f"Configuration error: {error}", file=sys.stderr)
    sys.exit(EXIT_CONFIG_ERROR)


def handle_runtime_error(error: RuntimeError, debug_mode: bool) -> None:
    """Handle unexpected runtime error.

    Raises
    ------
    RuntimeError
        Re-raised if debug mode is enabled
    """
    if debug_mode:
        raise

    print(f"Unexpected error: {error}", file=sys.stderr)
    sys.exit(EXIT_ERROR)


def main(argv: list[str] | None = None) -> None:
    """Entry point for the Fire CLI with graceful error handling.

    Parameters
    ----------
    argv : list[str] | None
        Arguments without the program name (default: sys.argv[1:])

    Notes
    -----
    Every fatal condition ends the process here. Cancelling the selection
    prompt with end of input is not an error and exits with status 0.
    """
    prog = os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else "ec2ssh"
    if prog in ("__main__.py", "-c", ""):
        prog = "ec2ssh"

    configure_logging(prog=prog)

    debug_mode = os.environ.get(DEBUG_ENV_VAR) == "1"

    cli = Ec2SshCLI()
    cli.prog = prog

    try:
        positionals, flags = split_arguments(sys.argv[1:] if argv is None else argv)
    except ValueError as e:
        report_error("%s", e)
        print(cli.usage(), file=sys.stderr, end="")
        sys.exit(EXIT_USAGE_ERROR)

    if len(positionals) > 1:
        print(cli.usage(), file=sys.stderr, end="")
        sys.exit(EXIT_ERROR)

    if positionals:
        flags.append(f"--target={positionals[0]}")

    try:
        fire.Fire(cli.run, command=flags, name=prog)
    except SelectionCancelled:
        sys.exit(EXIT_SUCCESS)
    except ProviderCredentialsError as e:
        handle_credentials_error(e, debug_mode)
    except (ProviderAPIError, ProviderConnectionError) as e:
        handle_provider_error(e, debug_mode)
    except (NoMatchError, InvalidSelectionError, InstanceDataError) as e:
        handle_resolution_error(e, debug_mode)
    except LaunchError as e:
        handle_launch_error(e, debug_mode)
    except ValueError as e:
        handle_value_error(e, debug_mode)
    except RuntimeError as e:
        handle_runtime_error(e, debug_mode)

"""Logging setup for ec2ssh.

Two handlers are installed on the root logger: one for stdout and one for
stderr. A record reaches stdout only when logged with ``extra={"stream":
"stdout"}``; everything else, including the ``--verbose`` debug traces, goes
to stderr prefixed with the program name.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

from ec2ssh.logging.filters import StreamRoutingFilter
from ec2ssh.logging.formatters import ProgramFormatter

PACKAGE_LOGGER = "ec2ssh"

QUIET_LOGGERS = ["botocore", "boto3", "urllib3"]


def configure_logging(
    prog: str = "ec2ssh",
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
) -> None:
    """Install the stdout/stderr routing handlers on the root logger.

    Parameters
    ----------
    prog : str
        Program name used as the stderr line prefix
    stdout : TextIO | None
        Stream for user-facing output (default: sys.stdout)
    stderr : TextIO | None
        Stream for diagnostics (default: sys.stderr)
    """
    stdout_handler = logging.StreamHandler(stdout or sys.stdout)
    stdout_handler.setFormatter(ProgramFormatter(prog))
    stdout_handler.addFilter(StreamRoutingFilter("stdout"))

    stderr_handler = logging.StreamHandler(stderr or sys.stderr)
    stderr_handler.setFormatter(ProgramFormatter(prog))
    stderr_handler.addFilter(StreamRoutingFilter("stderr"))

    logging.basicConfig(
        level=logging.INFO,
        handlers=[stdout_handler, stderr_handler],
        force=True,
    )

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def set_verbose(verbose: bool) -> None:
    """Enable or disable debug tracing for the ec2ssh loggers.

    Parameters
    ----------
    verbose : bool
        True to emit debug records from every ``ec2ssh.*`` logger
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.getLogger(PACKAGE_LOGGER).setLevel(level)


__all__ = [
    "ProgramFormatter",
    "StreamRoutingFilter",
    "configure_logging",
    "set_verbose",
]

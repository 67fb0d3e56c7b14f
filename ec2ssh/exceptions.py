"""Exceptions raised while resolving and connecting to an instance."""

from __future__ import annotations


class Ec2SshError(Exception):
    """Base class for ec2ssh errors."""


class NoMatchError(Ec2SshError):
    """Raised when a lookup key matches no running or pending instance.

    Parameters
    ----------
    lookup : str | None
        The lookup key supplied by the user, None when listing all instances
    """

    def __init__(self, lookup: str | None = None) -> None:
        self.lookup = lookup
        if lookup is None:
            super().__init__("Found no instances")
        else:
            super().__init__(f"Found no instance '{lookup}'")


class InstanceDataError(Ec2SshError):
    """Raised when an inventory record lacks a field resolution depends on."""


class InvalidSelectionError(Ec2SshError):
    """Raised when the selection prompt receives an unusable answer.

    Parameters
    ----------
    message : str
        Explanation naming the offending value
    value : str
        Raw value entered by the user
    """

    def __init__(self, message: str, value: str) -> None:
        self.value = value
        super().__init__(message)


class SelectionCancelled(Ec2SshError):
    """Raised when the selection prompt reaches end of input.

    This is a clean abort, not a failure: the CLI exits successfully.
    """


class LaunchError(Ec2SshError):
    """Raised when the remote shell cannot be started or exits non-zero.

    Parameters
    ----------
    message : str
        Error description
    exit_code : int | None
        Exit status of the ssh process, None if it never ran
    """

    def __init__(self, message: str, exit_code: int | None = None) -> None:
        self.exit_code = exit_code
        super().__init__(message)

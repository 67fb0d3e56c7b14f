"""Protocols for the external collaborators of the resolution engine.

The resolver and the CLI only depend on these protocols, so tests can inject
fakes returning canned records without network or subprocess access.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ec2ssh.core.resolution import InventoryQuery


@runtime_checkable
class InventoryProvider(Protocol):
    """Executes inventory queries against a cloud provider."""

    def describe(self, query: InventoryQuery) -> list[dict[str, Any]]:
        """Return the instance records matching every filter of the query.

        Parameters
        ----------
        query : InventoryQuery
            Filters and explicit instance IDs, ANDed together

        Returns
        -------
        list[dict[str, Any]]
            Provider-native instance records, reservation grouping removed

        Raises
        ------
        ProviderError
            If the provider call fails
        """
        ...


@runtime_checkable
class Launcher(Protocol):
    """Starts a remote shell on a resolved instance."""

    def launch(
        self,
        host: str,
        key_name: str,
        command: str | None = None,
        verbose: bool = False,
    ) -> int:
        """Run the remote shell and return its exit status.

        Parameters
        ----------
        host : str
            Address to connect to (the instance's private IP)
        key_name : str
            Key-pair name of the instance
        command : str | None
            Command to run remotely instead of an interactive shell
        verbose : bool
            Ask the remote-shell client for verbose output

        Returns
        -------
        int
            Exit status of the remote-shell client

        Raises
        ------
        LaunchError
            If the client cannot be found or exits non-zero
        """
        ...

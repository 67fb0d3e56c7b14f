"""Provider-agnostic exceptions for inventory API failures."""

from __future__ import annotations

from ec2ssh.exceptions import Ec2SshError


class ProviderError(Ec2SshError):
    """Base class for errors reported by a cloud inventory provider."""


class ProviderCredentialsError(ProviderError):
    """Raised when provider credentials are missing or unusable."""


class ProviderAPIError(ProviderError):
    """Raised when the provider API rejects a request.

    Parameters
    ----------
    message : str
        Message returned by the provider
    error_code : str | None
        Provider error code, e.g. ``UnauthorizedOperation``
    operation_name : str | None
        API operation that failed
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        operation_name: str | None = None,
    ) -> None:
        self.error_code = error_code
        self.operation_name = operation_name
        super().__init__(message)

    def __str__(self) -> str:
        message = super().__str__()
        if self.error_code:
            return f"{self.error_code}: {message}"
        return message


class ProviderConnectionError(ProviderError):
    """Raised when the provider endpoint cannot be reached."""

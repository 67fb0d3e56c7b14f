"""Cloud inventory providers.

Only AWS EC2 is implemented. Provider failures are reported through the
provider-agnostic exceptions re-exported here.
"""

from __future__ import annotations

from ec2ssh.providers.aws import EC2Inventory
from ec2ssh.providers.exceptions import (
    ProviderAPIError,
    ProviderConnectionError,
    ProviderCredentialsError,
    ProviderError,
)

__all__ = [
    "EC2Inventory",
    "ProviderError",
    "ProviderCredentialsError",
    "ProviderAPIError",
    "ProviderConnectionError",
]

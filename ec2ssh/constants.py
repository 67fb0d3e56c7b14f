"""Global constants for ec2ssh.

This module contains application-wide constants that are shared between the
resolution engine, the launcher and the CLI front end.
"""

from enum import Enum

RESOLVABLE_INSTANCE_STATES = [
    "running",
    "pending",
]
"""Instance states a lookup may resolve to.

Stopped, stopping and terminated instances have no reachable private address,
so they are excluded from every inventory query.
"""

INSTANCE_ID_PATTERN = r"i-[0-9a-fA-F]{8,17}\Z"
"""Pattern recognising an EC2 instance ID at the end of a lookup key.

Legacy IDs carry 8 hex digits, current ones 17. The pattern is searched,
not matched, so only the end of the key is anchored.
"""

NAME_TAG_KEY = "Name"
"""Tag key holding the human-readable instance name."""

NO_NAME_PLACEHOLDER = "[None]"
"""Display name used for instances without a Name tag."""

DEFAULT_SELECTION = 1
"""1-based candidate index chosen when the selection prompt gets a blank line."""

SELECTION_PROMPT = "Which would you like to connect to? [{default}]\n>>> "
"""Prompt written after the candidate table."""

DEFAULT_SSH_USERNAME = "ec2-user"
"""Login user passed to ssh when no other user is configured."""

KEY_FILE_SUFFIX = ".pem"
"""Suffix appended to the instance key-pair name to locate the private key."""

TABLE_PADDING = 4
"""Spaces added after the widest cell of each table column."""

TABLE_MIN_WIDTH = 4
"""Minimum width of a table column, padding included."""

EXIT_SUCCESS = 0
"""Exit code indicating successful program completion."""

EXIT_ERROR = 1
"""Exit code indicating a general application error.

Used for unresolvable lookups, invalid selections, provider failures and
launch failures.
"""

EXIT_CONFIG_ERROR = 2
"""Exit code indicating a configuration error."""

EXIT_USAGE_ERROR = 2
"""Exit code for a malformed command line."""


class KeyKind(str, Enum):
    """Query dimension selected for a lookup key."""

    IPV4_ADDRESS = "ipv4-address"
    INSTANCE_ID = "instance-id"
    NAME = "name"

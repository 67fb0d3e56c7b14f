"""Provider-agnostic services."""

from __future__ import annotations

from ec2ssh.services.launcher import SSHLauncher

__all__ = ["SSHLauncher"]

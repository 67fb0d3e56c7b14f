"""Command-line front end."""

from ec2ssh.cli.main import Ec2SshCLI, main

__all__ = ["Ec2SshCLI", "main"]

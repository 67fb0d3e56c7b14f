"""AWS provider implementation."""

from ec2ssh.providers.aws.inventory import EC2Inventory

__all__ = ["EC2Inventory"]

"""Core ec2ssh functionality: settings, resolution, and selection."""

from __future__ import annotations

from ec2ssh.core.config import ConfigLoader, Settings
from ec2ssh.core.interfaces import InventoryProvider, Launcher
from ec2ssh.core.resolution import (
    Candidate,
    InstanceResolver,
    InventoryQuery,
    QueryFilter,
    build_query,
    classify,
    list_query,
    project,
)
from ec2ssh.core.selection import Disambiguator

__all__ = [
    "Candidate",
    "ConfigLoader",
    "Disambiguator",
    "InstanceResolver",
    "InventoryProvider",
    "InventoryQuery",
    "Launcher",
    "QueryFilter",
    "Settings",
    "build_query",
    "classify",
    "list_query",
    "project",
]

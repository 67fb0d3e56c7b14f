"""Instance resolution: lookup key classification, query building, projection.

A lookup key is turned into exactly one inventory record by

1. classifying the key (IP literal, instance ID, or Name tag),
2. building an inventory query restricted to running and pending instances,
3. describing matching instances through an :class:`InventoryProvider`,
4. projecting the records to display candidates sorted by name, and
5. asking the user to choose when more than one record matched.
"""

from __future__ import annotations

import ipaddress
import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any
from urllib.parse import quote_plus

from ec2ssh.constants import (
    INSTANCE_ID_PATTERN,
    NAME_TAG_KEY,
    NO_NAME_PLACEHOLDER,
    RESOLVABLE_INSTANCE_STATES,
    KeyKind,
)
from ec2ssh.exceptions import InstanceDataError, NoMatchError

if TYPE_CHECKING:
    from ec2ssh.core.interfaces import InventoryProvider
    from ec2ssh.core.selection import Disambiguator

logger = logging.getLogger(__name__)

_INSTANCE_ID_RE = re.compile(INSTANCE_ID_PATTERN)


@dataclass(frozen=True)
class QueryFilter:
    """Named filter matching any of its values."""

    name: str
    values: tuple[str, ...]

    def to_boto3(self) -> dict[str, Any]:
        return {"Name": self.name, "Values": list(self.values)}


@dataclass(frozen=True)
class InventoryQuery:
    """Inventory query; every filter and the ID restriction are ANDed."""

    filters: tuple[QueryFilter, ...] = ()
    instance_ids: tuple[str, ...] = ()

    def to_boto3_kwargs(self) -> dict[str, Any]:
        """Render the query as ``describe_instances`` keyword arguments.

        Returns
        -------
        dict[str, Any]
            ``Filters`` always, ``InstanceIds`` only when IDs are restricted
        """
        kwargs: dict[str, Any] = {
            "Filters": [query_filter.to_boto3() for query_filter in self.filters]
        }
        if self.instance_ids:
            kwargs["InstanceIds"] = list(self.instance_ids)
        return kwargs


@dataclass(frozen=True)
class Candidate:
    """Display projection of one inventory record."""

    display_name: str
    instance_id: str
    private_ip: str


def classify(raw: str) -> KeyKind:
    """Decide which query dimension a lookup key selects.

    Parameters
    ----------
    raw : str
        Lookup key as supplied by the user

    Returns
    -------
    KeyKind
        IPV4_ADDRESS for any IP literal, INSTANCE_ID when the key ends in an
        instance ID, NAME otherwise
    """
    try:
        ipaddress.ip_address(raw)
    except ValueError:
        pass
    else:
        return KeyKind.IPV4_ADDRESS

    if _INSTANCE_ID_RE.search(raw):
        return KeyKind.INSTANCE_ID

    return KeyKind.NAME


def state_filter() -> QueryFilter:
    return QueryFilter("instance-state-name", tuple(RESOLVABLE_INSTANCE_STATES))


def list_query() -> InventoryQuery:
    """Query matching every running or pending instance."""
    return InventoryQuery(filters=(state_filter(),))


def build_query(raw: str, kind: KeyKind) -> InventoryQuery:
    """Build the inventory query for a classified lookup key.

    Parameters
    ----------
    raw : str
        Lookup key
    kind : KeyKind
        Classification of ``raw``

    Returns
    -------
    InventoryQuery
        Query restricted to running or pending instances matching ``raw``
    """
    if kind is KeyKind.IPV4_ADDRESS:
        return InventoryQuery(
            filters=(QueryFilter("private-ip-address", (raw,)), state_filter())
        )

    if kind is KeyKind.INSTANCE_ID:
        return InventoryQuery(filters=(state_filter(),), instance_ids=(raw,))

    return InventoryQuery(
        filters=(QueryFilter(f"tag:{NAME_TAG_KEY}", (raw,)), state_filter())
    )


def flatten_reservations(
    reservations: Iterable[dict[str, Any]],
) -> list[dict[str, Any]]:
    """Flatten the reservation grouping of a describe_instances response."""
    return [
        instance
        for reservation in reservations
        for instance in reservation.get("Instances", [])
    ]


def display_name(record: dict[str, Any]) -> str:
    """Return the URL-escaped Name tag of a record, or the no-name placeholder.

    Parameters
    ----------
    record : dict[str, Any]
        Inventory record

    Returns
    -------
    str
        Escaped Name tag value, ``"[None]"`` when the tag is absent
    """
    name = NO_NAME_PLACEHOLDER
    for tag in record.get("Tags") or []:
        if tag.get("Key") == NAME_TAG_KEY:
            name = quote_plus(tag.get("Value", ""))
    return name


def _required(record: dict[str, Any], key: str) -> str:
    value = record.get(key)
    if not value:
        instance_id = record.get("InstanceId", "<unknown>")
        raise InstanceDataError(f"Instance {instance_id} has no {key}")
    return value


def project(records: Iterable[dict[str, Any]]) -> list[Candidate]:
    """Project inventory records to candidates sorted by display name.

    The sort is stable, so records with equal names keep provider order.

    Parameters
    ----------
    records : Iterable[dict[str, Any]]
        Inventory records

    Returns
    -------
    list[Candidate]
        One candidate per record

    Raises
    ------
    InstanceDataError
        If a record has no InstanceId or PrivateIpAddress
    """
    candidates = [
        Candidate(
            display_name=display_name(record),
            instance_id=_required(record, "InstanceId"),
            private_ip=_required(record, "PrivateIpAddress"),
        )
        for record in records
    ]
    candidates.sort(key=lambda candidate: candidate.display_name)
    return candidates


def find_record(
    candidate: Candidate, records: Iterable[dict[str, Any]]
) -> dict[str, Any]:
    """Map a candidate back to the record it was projected from.

    Raises
    ------
    InstanceDataError
        If no record carries the candidate's instance ID
    """
    for record in records:
        if record.get("InstanceId") == candidate.instance_id:
            return record
    raise InstanceDataError(f"Unable to find instance {candidate!r}")


class InstanceResolver:
    """Resolve a lookup key to exactly one running or pending instance.

    Parameters
    ----------
    inventory : InventoryProvider
        Provider used to describe instances
    disambiguator : Disambiguator
        Interactive chooser used when several instances match
    """

    def __init__(
        self, inventory: InventoryProvider, disambiguator: Disambiguator
    ) -> None:
        self.inventory = inventory
        self.disambiguator = disambiguator

    def resolve(self, lookup: str) -> dict[str, Any]:
        """Resolve ``lookup`` to one inventory record.

        Parameters
        ----------
        lookup : str
            Instance ID, IP address or Name tag

        Returns
        -------
        dict[str, Any]
            The resolved inventory record

        Raises
        ------
        NoMatchError
            If no running or pending instance matches
        InvalidSelectionError
            If the user picks an invalid candidate
        SelectionCancelled
            If the selection prompt reaches end of input
        ProviderError
            If the inventory call fails
        """
        kind = classify(lookup)
        logger.debug("describing instance(s) by %s", kind.value)
        query = build_query(lookup, kind)

        logger.debug("aws api: describing instances")
        records = self.inventory.describe(query)
        logger.debug("aws api: got %d instance(s)", len(records))

        if not records:
            raise NoMatchError(lookup)

        if len(records) == 1:
            return records[0]

        return self.disambiguator.choose(lookup, records)

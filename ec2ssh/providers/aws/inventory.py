"""EC2 inventory queries for ec2ssh."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

import boto3
from botocore.config import Config

from ec2ssh.core.resolution import InventoryQuery, flatten_reservations
from ec2ssh.providers.aws.errors import handle_aws_errors
from ec2ssh.providers.exceptions import ProviderAPIError

logger = logging.getLogger(__name__)

SINGLE_ATTEMPT = Config(retries={"mode": "standard", "total_max_attempts": 1})
"""Client configuration disabling botocore's automatic retries."""

INSTANCE_NOT_FOUND_CODE = "InvalidInstanceID.NotFound"


class EC2Inventory:
    """Describe EC2 instances matching an inventory query.

    Parameters
    ----------
    region : str | None
        AWS region, None to let boto3 resolve it from the environment
    profile : str | None
        AWS named profile, None for the default credential chain
    boto3_client_factory : Callable[..., Any] | None
        Optional factory for creating the EC2 client. If None, a
        ``boto3.Session`` built from ``region`` and ``profile`` is used
    """

    def __init__(
        self,
        region: str | None = None,
        profile: str | None = None,
        boto3_client_factory: Callable[..., Any] | None = None,
    ) -> None:
        self.region = region
        self.profile = profile

        if boto3_client_factory is None:
            with handle_aws_errors():
                session = boto3.Session(profile_name=profile, region_name=region)
            boto3_client_factory = session.client

        self.boto3_client_factory = boto3_client_factory
        self._ec2_client: Any | None = None

    @property
    def ec2_client(self) -> Any:
        """EC2 client, created on first use."""
        if self._ec2_client is None:
            with handle_aws_errors():
                self._ec2_client = self.boto3_client_factory(
                    "ec2", region_name=self.region, config=SINGLE_ATTEMPT
                )
        return self._ec2_client

    def describe(self, query: InventoryQuery) -> list[dict[str, Any]]:
        """Return all instances matching ``query``.

        Every page of the response is read; reservations are flattened.

        Parameters
        ----------
        query : InventoryQuery
            Filters and instance IDs to describe

        Returns
        -------
        list[dict[str, Any]]
            Instance records in response order

        Raises
        ------
        ProviderCredentialsError
            If AWS credentials are missing or rejected
        ProviderAPIError
            If EC2 rejects the request
        ProviderConnectionError
            If the EC2 endpoint cannot be reached
        """
        kwargs = query.to_boto3_kwargs()
        logger.debug("aws api: describe_instances %s", kwargs)

        records: list[dict[str, Any]] = []
        reservation_count = 0

        try:
            with handle_aws_errors():
                paginator = self.ec2_client.get_paginator("describe_instances")
                for page in paginator.paginate(**kwargs):
                    reservations = page.get("Reservations", [])
                    reservation_count += len(reservations)
                    records.extend(flatten_reservations(reservations))
        except ProviderAPIError as e:
            # EC2 rejects unknown IDs instead of returning an empty result.
            if e.error_code != INSTANCE_NOT_FOUND_CODE:
                raise
            logger.debug("aws api: %s", e)
            return []

        logger.debug(
            "aws api: got %d reservation(s), %d instance(s)",
            reservation_count,
            len(records),
        )
        return records

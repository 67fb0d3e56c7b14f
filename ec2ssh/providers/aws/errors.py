"""Translation of botocore failures into provider exceptions."""

from __future__ import annotations

import logging
from collections.abc import Generator
from contextlib import contextmanager

from botocore.exceptions import (
    BotoCoreError,
    ClientError,
    EndpointConnectionError,
    NoCredentialsError,
    NoRegionError,
    PartialCredentialsError,
    ProfileNotFound,
)

from ec2ssh.providers.exceptions import (
    ProviderAPIError,
    ProviderConnectionError,
    ProviderCredentialsError,
)

logger = logging.getLogger(__name__)

CREDENTIAL_ERROR_CODES = frozenset(
    (
        "AuthFailure",
        "ExpiredToken",
        "ExpiredTokenException",
        "InvalidClientTokenId",
        "RequestExpired",
        "UnrecognizedClientException",
    )
)


@contextmanager
def handle_aws_errors() -> Generator[None, None, None]:
    """Re-raise botocore exceptions as provider exceptions.

    The provider's own message is kept verbatim. Nothing is retried.

    Raises
    ------
    ProviderCredentialsError
        If credentials are missing, partial or rejected
    ProviderConnectionError
        If the EC2 endpoint cannot be reached
    ProviderAPIError
        For any other error response from EC2
    """
    try:
        yield
    except (NoCredentialsError, PartialCredentialsError, ProfileNotFound) as e:
        raise ProviderCredentialsError(str(e)) from e
    except NoRegionError as e:
        raise ProviderAPIError(str(e), error_code="NoRegion") from e
    except EndpointConnectionError as e:
        raise ProviderConnectionError(str(e)) from e
    except ClientError as e:
        error = e.response.get("Error", {})
        code = error.get("Code")
        message = error.get("Message") or str(e)
        logger.debug("aws api: %s failed with %s", e.operation_name, code)

        if code in CREDENTIAL_ERROR_CODES:
            raise ProviderCredentialsError(f"{code}: {message}") from e

        raise ProviderAPIError(
            message, error_code=code, operation_name=e.operation_name
        ) from e
    except BotoCoreError as e:
        raise ProviderAPIError(str(e)) from e

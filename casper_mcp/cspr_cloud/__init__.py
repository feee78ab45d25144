"""HTTP client wrappers for the CSPR.cloud REST API."""

from .client import (
    ApiSession,
    CsprCloudClient,
    CsprCloudError,
    CsprCloudNotFoundError,
    CsprCloudUnauthorizedError,
    CsprCloudUnreachableError,
    NetworkEndpoint,
)

__all__ = [
    "ApiSession",
    "CsprCloudClient",
    "CsprCloudError",
    "CsprCloudNotFoundError",
    "CsprCloudUnauthorizedError",
    "CsprCloudUnreachableError",
    "NetworkEndpoint",
]

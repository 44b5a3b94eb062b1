"""LaunchPd API client and error taxonomy"""

from .exceptions import (
    ErrorKind,
    LaunchpdError,
    APIError,
    MaintenanceError,
    AuthError,
    TwoFactorRequiredError,
    RateLimitError,
    QuotaError,
    NetworkError,
)
from .client import ApiClient, sign_request, validate_endpoint
from .metadata import LegacyMetadataClient

__all__ = [
    "ErrorKind",
    "LaunchpdError",
    "APIError",
    "MaintenanceError",
    "AuthError",
    "TwoFactorRequiredError",
    "RateLimitError",
    "QuotaError",
    "NetworkError",
    "ApiClient",
    "sign_request",
    "validate_endpoint",
    "LegacyMetadataClient",
]

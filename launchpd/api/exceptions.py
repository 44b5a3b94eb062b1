"""Exception definitions for launchpd"""

from enum import Enum
from typing import Any, Dict, List, Optional

from ..constants import ErrorCode


class ErrorKind(Enum):
    """Closed set of failure kinds callers branch on"""
    MAINTENANCE = "maintenance"
    NETWORK = "network"
    AUTH = "auth"
    TWO_FACTOR_REQUIRED = "two_factor_required"
    RATE_LIMIT = "rate_limit"
    QUOTA = "quota"
    VALIDATION = "validation"
    API = "api"
    LOCAL = "local"


class LaunchpdError(Exception):
    """Base exception for launchpd"""

    kind = ErrorKind.LOCAL

    def __init__(self, message: str, error_code: str = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.suggestions: List[str] = []


# Remote API errors

class APIError(LaunchpdError):
    """Remote API returned a non-success response"""

    kind = ErrorKind.API

    def __init__(self, message: str, status_code: int = 0,
                 data: Optional[Dict[str, Any]] = None,
                 error_code: str = ErrorCode.API_ERROR):
        super().__init__(message, error_code)
        self.status_code = status_code
        self.data = data or {}


class MaintenanceError(APIError):
    """Service is in maintenance mode"""

    kind = ErrorKind.MAINTENANCE

    def __init__(self, message: str = "LaunchPd is under maintenance",
                 data: Optional[Dict[str, Any]] = None):
        super().__init__(message, 503, data, ErrorCode.SERVICE_MAINTENANCE)


class AuthError(APIError):
    """Credentials were rejected"""

    kind = ErrorKind.AUTH

    def __init__(self, message: str = "Authentication failed",
                 data: Optional[Dict[str, Any]] = None):
        super().__init__(message, 401, data, ErrorCode.AUTHENTICATION_FAILED)


class TwoFactorRequiredError(APIError):
    """Login needs a second factor before it can complete"""

    kind = ErrorKind.TWO_FACTOR_REQUIRED

    def __init__(self, two_factor_type: str = "totp",
                 message: str = "Two-factor authentication required",
                 data: Optional[Dict[str, Any]] = None):
        super().__init__(message, 401, data, ErrorCode.TWO_FACTOR_REQUIRED)
        self.two_factor_type = two_factor_type


class RateLimitError(APIError):
    """Too many requests"""

    kind = ErrorKind.RATE_LIMIT

    def __init__(self, message: str = "Too many requests",
                 data: Optional[Dict[str, Any]] = None):
        super().__init__(message, 429, data, ErrorCode.RATE_LIMITED)


class QuotaError(APIError):
    """Server-side quota denial"""

    kind = ErrorKind.QUOTA

    def __init__(self, message: str = "Quota exceeded",
                 data: Optional[Dict[str, Any]] = None):
        super().__init__(message, 403, data, ErrorCode.QUOTA_EXCEEDED)


class NetworkError(LaunchpdError):
    """The service could not be reached"""

    kind = ErrorKind.NETWORK

    def __init__(self, message: str = "Unable to connect to LaunchPd servers",
                 cause: Optional[BaseException] = None):
        super().__init__(message, ErrorCode.NETWORK_UNREACHABLE)
        self.cause = cause


# Local errors

class ValidationError(LaunchpdError):
    """Validation error"""

    kind = ErrorKind.VALIDATION

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.STATIC_VALIDATION_FAILED)


class ConfigError(LaunchpdError):
    """Configuration error"""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.CONFIG_FORMAT_ERROR)


class NotAvailableError(LaunchpdError):
    """Operation is not offered by the CLI"""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.NOT_AVAILABLE)


class LoginRequiredError(LaunchpdError):
    """Command needs stored credentials"""

    kind = ErrorKind.AUTH

    def __init__(self, message: str = "You must be logged in to do this."):
        super().__init__(message, ErrorCode.AUTHENTICATION_FAILED)
        self.suggestions = [
            'Run "launchpd login" to log in',
            'Run "launchpd register" to create an account',
        ]


class InvalidProjectError(LaunchpdError):
    """Project link file exists but cannot be used"""

    def __init__(self, path: str):
        super().__init__("Invalid project configuration.", ErrorCode.CONFIG_FORMAT_ERROR)
        self.path = path
        self.suggestions = [
            'Try deleting .launchpd.json and running "launchpd init" again',
        ]


class DeployError(LaunchpdError):
    """Deployment operation error

    Carries the actionable suggestions shown beneath the message and,
    for late-stage failures, the underlying cause.
    """

    def __init__(self, message: str, error_code: str = None,
                 suggestions: Optional[List[str]] = None,
                 cause: Optional[BaseException] = None):
        super().__init__(message, error_code)
        self.suggestions = list(suggestions or [])
        self.cause = cause
        if cause is not None and isinstance(cause, LaunchpdError):
            self.kind = cause.kind


class ExpirationError(DeployError):
    """Invalid or too short expiration"""

    def __init__(self, message: str):
        super().__init__(
            message,
            ErrorCode.EXPIRATION_FORMAT_ERROR,
            suggestions=[
                "Use format like: 30m, 2h, 1d, 7d",
                "Minimum expiration is 30 minutes",
                "Examples: --expires 1h, --expires 2d",
            ],
        )


class MissingMessageError(DeployError):
    """Deployment message was not supplied"""

    def __init__(self):
        super().__init__(
            "Deployment message is required.",
            ErrorCode.MISSING_REQUIRED_PARAMETER,
            suggestions=[
                "Use -m or --message to provide a description",
                'Example: launchpd deploy . -m "Fix layout"',
            ],
        )


class FolderNotFoundError(DeployError):
    """Source folder does not exist"""

    def __init__(self, folder: str):
        super().__init__(
            f"Folder not found: {folder}",
            ErrorCode.FOLDER_NOT_FOUND,
            suggestions=[
                "Check the path is correct",
                "Use an absolute path or a path relative to the current directory",
            ],
        )
        self.folder = folder


class EmptyFolderError(DeployError):
    """Nothing deployable in the folder"""

    def __init__(self, folder: str):
        super().__init__(
            "Nothing to deploy.",
            ErrorCode.EMPTY_FOLDER,
            suggestions=[
                f"Add some files to {folder}",
                "Ignored files (node_modules, .git, build output) are not counted",
            ],
        )
        self.folder = folder


class StaticContentError(DeployError):
    """Folder contains non-static content"""

    kind = ErrorKind.VALIDATION

    def __init__(self, violations: List[str], max_listed: int = 10):
        listed = [f"- {v}" for v in violations[:max_listed]]
        if len(violations) > max_listed:
            listed.append(f"- ...and {len(violations) - max_listed} more")
        super().__init__(
            "Your project contains files that are not allowed.",
            ErrorCode.STATIC_VALIDATION_FAILED,
            suggestions=listed + [
                "LaunchPd only hosts static content (HTML, CSS, JS, images, fonts, media).",
                "Use --force to deploy anyway",
            ],
        )
        self.violations = list(violations)


class InvalidSubdomainError(DeployError):
    """Subdomain is not a valid DNS label"""

    def __init__(self, subdomain: str):
        super().__init__(
            f'Invalid subdomain "{subdomain}"',
            ErrorCode.SUBDOMAIN_INVALID,
            suggestions=["Use lowercase letters, numbers and hyphens only"],
        )
        self.subdomain = subdomain


class SubdomainTakenError(DeployError):
    """Subdomain belongs to somebody else"""

    def __init__(self, subdomain: str):
        super().__init__(
            f'Subdomain "{subdomain}" is already taken by another user',
            ErrorCode.SUBDOMAIN_TAKEN,
            suggestions=["Choose a different name with --name"],
        )
        self.subdomain = subdomain


class QuotaExceededError(DeployError):
    """Quota gate denied the deployment"""

    kind = ErrorKind.QUOTA

    def __init__(self, reason: str = "Deployment blocked due to quota limits"):
        super().__init__(
            reason,
            ErrorCode.QUOTA_EXCEEDED,
            suggestions=[
                'Run "launchpd quota" to see your usage',
                "Use --force to deploy anyway",
            ],
        )


class UploadError(DeployError):
    """Upload or finalize failed"""

    def __init__(self, message: str, suggestions: Optional[List[str]] = None,
                 cause: Optional[BaseException] = None):
        super().__init__(message, ErrorCode.UPLOAD_FAILED, suggestions, cause)


class VersionNotFoundError(LaunchpdError):
    """No versions could be found"""

    def __init__(self, subdomain: str, version: Optional[int] = None):
        if version is None:
            message = f"No deployments found for: {subdomain}"
        else:
            message = f"Version {version} does not exist for {subdomain}"
        super().__init__(message, ErrorCode.VERSION_NOT_FOUND)
        self.subdomain = subdomain
        self.version = version


class RollbackError(LaunchpdError):
    """Rollback could not be performed"""

    def __init__(self, message: str, available_versions: Optional[List[int]] = None):
        super().__init__(message, ErrorCode.ROLLBACK_FAILED)
        self.available_versions = list(available_versions or [])


class UserCancelledError(LaunchpdError):
    """User cancelled the operation"""

    def __init__(self):
        super().__init__("Operation cancelled by user", ErrorCode.USER_CANCELLED)

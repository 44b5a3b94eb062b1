"""Signed HTTP client for the LaunchPd API"""

import hashlib
import hmac
import json
import logging
import time
from typing import Any, Dict, List, Optional, Union
from urllib.parse import quote

import httpx

from ..__version__ import __version__
from ..constants import ENDPOINT_ALLOWED_PATTERN, PUBLIC_BETA_API_KEY
from ..utils.machine_id import get_machine_id
from .exceptions import (
    APIError,
    AuthError,
    MaintenanceError,
    NetworkError,
    RateLimitError,
    TwoFactorRequiredError,
)

logger = logging.getLogger(__name__)


def validate_endpoint(endpoint: str) -> str:
    """Reject endpoints that could redirect a request off the API host

    Args:
        endpoint: Path beginning with ``/``

    Returns:
        The endpoint unchanged

    Raises:
        APIError: (400) when the endpoint is not a plain relative path
    """
    if (
        not isinstance(endpoint, str)
        or not endpoint.startswith("/")
        or "//" in endpoint
        or "://" in endpoint
        or ".." in endpoint
        or not ENDPOINT_ALLOWED_PATTERN.match(endpoint)
    ):
        raise APIError(f"Invalid API endpoint: {endpoint!r}", 400)
    return endpoint


def sign_request(secret: str, method: str, endpoint: str, timestamp: str,
                 body: Union[str, bytes]) -> str:
    """HMAC-SHA256 over method, endpoint, timestamp and body, hex encoded"""
    mac = hmac.new(secret.encode("utf-8"), digestmod=hashlib.sha256)
    mac.update(method.encode("utf-8"))
    mac.update(endpoint.encode("utf-8"))
    mac.update(timestamp.encode("utf-8"))
    mac.update(body if isinstance(body, bytes) else body.encode("utf-8"))
    return mac.hexdigest()


class ApiClient:
    """JSON-over-HTTPS client

    Every request carries the identity key and a device fingerprint.
    When a secret is available the request is also signed. Non-success
    responses are raised as typed errors so callers can branch on
    ``error.kind``.
    """

    def __init__(self, settings, credential_store=None,
                 transport: Optional[httpx.AsyncBaseTransport] = None,
                 use_credentials: bool = True):
        """
        Args:
            settings: Resolved settings
            credential_store: Store providing the saved API key and secret
            transport: Optional httpx transport (used by tests)
            use_credentials: When False only the environment or public key
                is sent and requests are never signed
        """
        self.settings = settings
        self.credential_store = credential_store
        self.transport = transport
        self.use_credentials = use_credentials
        self._fingerprint: Optional[str] = None

    @property
    def fingerprint(self) -> str:
        if self._fingerprint is None:
            self._fingerprint = get_machine_id()
        return self._fingerprint

    async def _identity(self):
        """Resolve the API key and optional secret for this request"""
        creds = None
        if self.use_credentials and self.credential_store is not None:
            creds = await self.credential_store.get_credentials()

        api_key = (creds.api_key if creds else None) or self.settings.api_key or PUBLIC_BETA_API_KEY
        secret = None
        if self.use_credentials:
            secret = (creds.api_secret if creds else None) or self.settings.api_secret
        return api_key, secret

    async def request(self, endpoint: str, method: str = "GET",
                      json_body: Any = None, content: Optional[bytes] = None,
                      headers: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
        """Send a request and return the parsed JSON body

        Args:
            endpoint: API path, e.g. ``/api/versions/mysite``
            method: HTTP method
            json_body: Object serialized as the JSON body
            content: Raw bytes body (takes precedence over ``json_body``)
            headers: Extra headers

        Returns:
            Parsed response body (``{}`` for an empty body)
        """
        validate_endpoint(endpoint)
        method = method.upper()

        if content is not None:
            body: Union[str, bytes] = content
        elif json_body is not None:
            body = json.dumps(json_body)
        else:
            body = ""

        api_key, secret = await self._identity()
        request_headers = {
            "Content-Type": "application/json",
            "X-API-Key": api_key,
            "X-Device-Fingerprint": self.fingerprint,
            "X-CLI-Version": __version__,
        }
        request_headers.update(headers or {})

        if secret:
            timestamp = str(int(time.time() * 1000))
            request_headers["X-Timestamp"] = timestamp
            request_headers["X-Signature"] = sign_request(secret, method, endpoint, timestamp, body)

        logger.debug(f"{method} {endpoint}")

        try:
            async with httpx.AsyncClient(base_url=self.settings.api_url,
                                         transport=self.transport,
                                         timeout=self.settings.timeout) as client:
                response = await client.request(
                    method,
                    endpoint,
                    content=body if body else None,
                    headers=request_headers,
                )
        except httpx.TransportError as e:
            logger.debug(f"{method} {endpoint} failed: {e}")
            raise NetworkError(cause=e)

        return self._handle_response(response)

    @staticmethod
    def _handle_response(response: httpx.Response) -> Dict[str, Any]:
        """Classify a response into data or a typed error"""
        status = response.status_code
        data: Dict[str, Any] = {}
        parse_failed = False

        if response.content:
            try:
                parsed = response.json()
                data = parsed if isinstance(parsed, dict) else {"data": parsed}
            except ValueError:
                parse_failed = True

        message = data.get("error") or data.get("message") or f"API error: {status}"

        if status == 503:
            if data.get("maintenance_mode"):
                raise MaintenanceError(data.get("message") or "LaunchPd is under maintenance", data)
            raise APIError(message, status, data)

        if status == 401:
            if data.get("requires_2fa"):
                raise TwoFactorRequiredError(data.get("two_factor_type") or "totp",
                                             data.get("message") or "Two-factor authentication required",
                                             data)
            raise AuthError(message, data)

        if status == 429:
            raise RateLimitError(message, data)

        if not response.is_success:
            raise APIError(message, status, data)

        if parse_failed:
            raise APIError("Invalid JSON in API response", status)

        return data

    # Versions

    async def get_versions(self, subdomain: str) -> Dict[str, Any]:
        return await self.request(f"/api/versions/{subdomain}")

    async def get_next_version(self, subdomain: str) -> int:
        """Highest existing version plus one, or 1"""
        result = await self.get_versions(subdomain)
        versions = result.get("versions") or []
        if not versions:
            return 1
        return max(int(v["version"]) for v in versions) + 1

    async def rollback_version(self, subdomain: str, version: int) -> Dict[str, Any]:
        return await self.request(f"/api/versions/{subdomain}/rollback",
                                  method="PUT", json_body={"version": version})

    # Subdomains

    async def check_subdomain_available(self, subdomain: str) -> bool:
        result = await self.request(f"/api/public/check/{subdomain}")
        available = result.get("available")
        return True if available is None else bool(available)

    async def reserve_subdomain(self, subdomain: str) -> Dict[str, Any]:
        return await self.request("/api/subdomains/reserve", method="POST",
                                  json_body={"subdomain": subdomain})

    async def list_subdomains(self) -> List[str]:
        result = await self.request("/api/subdomains")
        return [s["subdomain"] for s in result.get("subdomains") or [] if s.get("subdomain")]

    # Deployments

    async def list_deployments(self, limit: int = 50, offset: int = 0) -> Dict[str, Any]:
        return await self.request(f"/api/deployments?limit={limit}&offset={offset}")

    async def get_deployment(self, subdomain: str) -> Dict[str, Any]:
        return await self.request(f"/api/deployments/{subdomain}")

    # Quota and account

    async def get_quota(self, is_update: bool = False) -> Dict[str, Any]:
        endpoint = "/api/quota?is_update=true" if is_update else "/api/quota"
        return await self.request(endpoint)

    async def get_anonymous_quota(self, client_token: str) -> Dict[str, Any]:
        return await self.request("/api/quota/anonymous", method="POST",
                                  json_body={"clientToken": client_token})

    async def get_current_user(self) -> Dict[str, Any]:
        return await self.request("/api/users/me")

    async def health_check(self) -> Dict[str, Any]:
        return await self.request("/api/health")

    async def login(self, email: str, password: str,
                    two_factor_code: Optional[str] = None) -> Dict[str, Any]:
        body = {"email": email, "password": password}
        if two_factor_code:
            body["two_factor_code"] = two_factor_code
        return await self.request("/api/auth/login", method="POST", json_body=body)

    async def logout(self) -> Dict[str, Any]:
        return await self.request("/api/auth/logout", method="POST")

    async def resend_verification(self) -> Dict[str, Any]:
        return await self.request("/api/auth/resend-verification", method="POST")

    async def regenerate_api_key(self) -> Dict[str, Any]:
        return await self.request("/api/api-key/regenerate", method="POST")

    async def change_password(self, current_password: str, new_password: str) -> Dict[str, Any]:
        return await self.request("/api/auth/change-password", method="POST", json_body={
            "current_password": current_password,
            "new_password": new_password,
        })

    # Upload

    async def upload_file(self, content: bytes, subdomain: str, version: int,
                          file_path: str, content_type: str) -> Dict[str, Any]:
        """
        Upload one file of a version

        ``X-File-Path`` carries the relative POSIX path percent-encoded as
        UTF-8 (``/`` kept literal), since header values must be ASCII.
        """
        return await self.request("/api/upload/file", method="POST", content=content, headers={
            "Content-Type": "application/octet-stream",
            "X-Subdomain": subdomain,
            "X-Version": str(version),
            "X-File-Path": quote(file_path, safe="/"),
            "X-Content-Type": content_type,
        })

    async def complete_upload(self, subdomain: str, version: int, file_count: int,
                              total_bytes: int, folder_name: str,
                              expires_at: Optional[str] = None,
                              message: Optional[str] = None) -> Dict[str, Any]:
        return await self.request("/api/upload/complete", method="POST", json_body={
            "subdomain": subdomain,
            "version": version,
            "fileCount": file_count,
            "totalBytes": total_bytes,
            "folderName": folder_name,
            "expiresAt": expires_at,
            "message": message,
        })

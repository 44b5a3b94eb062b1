"""Account operations: login, logout, account status and verification"""

import logging
from dataclasses import replace
from typing import Any, Dict, Optional

from ..api.client import ApiClient
from ..api.exceptions import (
    APIError,
    AuthError,
    ErrorKind,
    LaunchpdError,
    LoginRequiredError,
    TwoFactorRequiredError,
)
from ..constants import API_KEY_PREFIX, DEFAULT_TIER
from ..core.reporter import AutoConfirmPrompter, LoggingReporter
from ..models.project import Credentials
from ..models.quota import QuotaSnapshot

logger = logging.getLogger(__name__)


class AuthService:
    """Service for managing the stored login"""

    def __init__(self, settings, api_client, credential_store, reporter=None, prompter=None):
        self.settings = settings
        self.api = api_client
        self.credentials = credential_store
        self.reporter = reporter or LoggingReporter()
        self.prompter = prompter or AutoConfirmPrompter()

    def _client_for_key(self, api_key: str) -> ApiClient:
        """Client that identifies with ``api_key`` only, unsigned"""
        settings = replace(self.settings, api_key=api_key, api_secret=None)
        return ApiClient(settings, transport=self.api.transport, use_credentials=False)

    async def validate_api_key(self, api_key: Optional[str]) -> Optional[QuotaSnapshot]:
        """
        Ask the service whether an API key belongs to an account

        Args:
            api_key: Key to check

        Returns:
            Quota snapshot of the account, or None when the key is rejected

        Raises:
            MaintenanceError, NetworkError: The service could not answer
        """
        if not api_key or not api_key.startswith(API_KEY_PREFIX):
            return None

        try:
            data = await self._client_for_key(api_key).get_quota()
        except AuthError:
            return None
        except APIError as e:
            if e.kind != ErrorKind.API:
                raise
            logger.debug(f"API key validation failed: {e}")
            return None

        if not data.get("authenticated"):
            return None
        return QuotaSnapshot.from_dict(data)

    async def login_with_api_key(self, api_key: str) -> QuotaSnapshot:
        """
        Validate an API key and store it

        Raises:
            AuthError: The key is malformed or rejected
        """
        self.reporter.start("Validating API key...")
        snapshot = await self.validate_api_key(api_key)
        if snapshot is None:
            self.reporter.fail("Invalid API key")
            error = AuthError("Please check and try again.")
            error.suggestions = [
                f"Get your API key at: https://portal.{self.settings.domain}/api-keys",
                "Make sure you copied the full key",
                f'API keys start with "{API_KEY_PREFIX}"',
            ]
            raise error

        self.reporter.succeed("Logged in successfully!")
        await self.save_login(api_key, snapshot)
        return snapshot

    async def login_with_password(self, email: str, password: str) -> QuotaSnapshot:
        """
        Log in with email and password, asking for a second factor if needed

        Returns:
            Snapshot built from the login response

        Raises:
            AuthError: Credentials or verification code rejected
        """
        self.reporter.start("Authenticating...")
        try:
            data = await self.api.login(email, password)
            two_factor_type = (data.get("two_factor_type") or "totp") if data.get("requires_2fa") else None
        except TwoFactorRequiredError as e:
            data = e.data
            two_factor_type = e.two_factor_type

        if two_factor_type is not None:
            self.reporter.stop()
            if two_factor_type == "email":
                self.reporter.info("A verification code has been sent to your email")
                code_type = "email verification code"
            else:
                self.reporter.info("Two-factor authentication required")
                code_type = "authenticator code"

            code = self.prompter.ask(f"Enter {code_type}").strip()
            if not code:
                raise AuthError("Verification code is required")

            self.reporter.start("Verifying code...")
            try:
                data = await self.api.login(email, password, two_factor_code=code)
            except AuthError:
                self.reporter.fail("Verification failed")
                raise
            if not data.get("success"):
                self.reporter.fail("Verification failed")
                raise AuthError(data.get("message") or "Invalid verification code", data)
            self.reporter.succeed("Verified!")
        elif data.get("success"):
            self.reporter.succeed("Authenticated!")
        else:
            self.reporter.fail("Authentication failed")
            raise AuthError(data.get("message") or "Invalid email or password", data)

        snapshot = QuotaSnapshot.from_dict(data)
        api_key = snapshot.user.get("api_key")
        if not api_key:
            raise AuthError("Login response did not include an API key", data)
        await self.save_login(api_key, snapshot)
        return snapshot

    async def save_login(self, api_key: str, snapshot: QuotaSnapshot) -> Credentials:
        user = snapshot.user
        credentials = Credentials(
            api_key=api_key,
            api_secret=user.get("api_secret"),
            user_id=user.get("id"),
            email=user.get("email"),
            tier=snapshot.tier or DEFAULT_TIER,
        )
        await self.credentials.save_credentials(credentials)
        logger.debug(f"Saved credentials for {credentials.email or credentials.user_id}")
        return credentials

    async def logout(self) -> Optional[Credentials]:
        """
        Invalidate the server session when possible and forget the login

        Returns:
            The credentials that were removed, or None if not logged in
        """
        creds = await self.credentials.get_credentials()
        if creds is None:
            return None

        try:
            await self.api.logout()
        except LaunchpdError as e:
            logger.debug(f"Server logout failed: {e}")

        await self.credentials.clear_credentials()
        return creds

    async def upgrade_credentials(self, creds: Credentials, snapshot: QuotaSnapshot) -> bool:
        """Store the request-signing secret once the service hands one out"""
        secret = snapshot.user.get("api_secret")
        if not secret or creds.api_secret:
            return False
        await self.credentials.save_credentials(replace(
            creds,
            api_secret=secret,
            user_id=snapshot.user.get("id") or creds.user_id,
            email=snapshot.user.get("email") or creds.email,
        ))
        logger.debug("Stored API secret for request signing")
        return True

    async def account_status(self, clear_invalid: bool = True) -> Optional[QuotaSnapshot]:
        """
        Current account and quota for the stored login

        Args:
            clear_invalid: Forget the stored login when its key is rejected

        Returns:
            Snapshot, or None when no one is logged in

        Raises:
            AuthError: The stored key was rejected
        """
        creds = await self.credentials.get_credentials()
        if creds is None:
            return None

        snapshot = await self.validate_api_key(creds.api_key)
        if snapshot is None:
            if clear_invalid:
                await self.credentials.clear_credentials()
                error = AuthError("Session expired or API key invalid")
                error.suggestions = ["Please login again with: launchpd login"]
            else:
                error = AuthError("API key may be invalid.")
                error.suggestions = [
                    'Run "launchpd login" to re-authenticate',
                    "Check your internet connection",
                ]
            raise error

        await self.upgrade_credentials(creds, snapshot)
        return snapshot

    async def resend_verification(self) -> Dict[str, Any]:
        """
        Request a new verification email

        Returns:
            Service response; ``already_verified`` is set when nothing was sent

        Raises:
            LoginRequiredError: Not logged in
        """
        if not await self.credentials.is_logged_in():
            raise LoginRequiredError("Not logged in")

        try:
            return await self.api.resend_verification()
        except APIError as e:
            if "already verified" in e.message.lower():
                return {"success": True, "already_verified": True}
            raise

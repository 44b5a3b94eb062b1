"""Unit tests for account operations."""

import pytest

from conftest import (
    TEST_API_KEY,
    FakeServer,
    RecordingReporter,
    ScriptedPrompter,
    quota_response,
    request_json,
    write_credentials,
)
from launchpd.api.exceptions import AuthError, LoginRequiredError, MaintenanceError
from launchpd.services import AuthService


def login_response(**overrides) -> dict:
    data = {
        "success": True,
        "tier": "pro",
        "user": {"id": "user-9", "email": "dev@example.com", "api_key": "lpd_fromlogin",
                 "api_secret": "sec"},
    }
    data.update(overrides)
    return data


class TestAuthService:
    """Tests for AuthService."""

    @pytest.fixture
    def service(self, settings, api, credential_store, reporter, prompter) -> AuthService:
        return AuthService(settings, api, credential_store, reporter=reporter, prompter=prompter)

    @pytest.mark.asyncio
    async def test_malformed_key_not_sent(self, service: AuthService, server: FakeServer):
        assert await service.validate_api_key("sk_live_123") is None
        assert await service.validate_api_key(None) is None
        assert server.requests == []

    @pytest.mark.asyncio
    async def test_validate_uses_candidate_key_unsigned(self, service: AuthService, server: FakeServer,
                                                        config_dir):
        write_credentials(config_dir, apiSecret="stored-secret")
        server.add("GET", "/api/quota", quota_response())

        snapshot = await service.validate_api_key("lpd_candidate")

        assert snapshot.authenticated
        headers = server.requests[0].headers
        assert headers["X-API-Key"] == "lpd_candidate"
        assert "X-Signature" not in headers

    @pytest.mark.asyncio
    async def test_rejected_key(self, service: AuthService, server: FakeServer):
        server.add("GET", "/api/quota", {"error": "bad key"}, status=401)

        assert await service.validate_api_key("lpd_nope") is None

    @pytest.mark.asyncio
    async def test_unauthenticated_quota_means_invalid(self, service: AuthService, server: FakeServer):
        server.add("GET", "/api/quota", quota_response(authenticated=False))

        assert await service.validate_api_key("lpd_nope") is None

    @pytest.mark.asyncio
    async def test_maintenance_propagates(self, service: AuthService, server: FakeServer):
        server.add("GET", "/api/quota", {"maintenance_mode": True}, status=503)

        with pytest.raises(MaintenanceError):
            await service.validate_api_key("lpd_key")

    @pytest.mark.asyncio
    async def test_login_with_api_key(self, service: AuthService, server: FakeServer, credential_store):
        server.add("GET", "/api/quota", quota_response(
            tier="pro", user={"id": "u2", "email": "me@example.com", "api_secret": "sec"},
        ))

        await service.login_with_api_key("lpd_good")

        creds = await credential_store.get_credentials()
        assert creds.api_key == "lpd_good"
        assert creds.api_secret == "sec"
        assert creds.email == "me@example.com"
        assert creds.tier == "pro"

    @pytest.mark.asyncio
    async def test_login_with_invalid_api_key(self, service: AuthService, server: FakeServer,
                                              credential_store, reporter: RecordingReporter):
        server.add("GET", "/api/quota", {"error": "bad"}, status=401)

        with pytest.raises(AuthError) as exc_info:
            await service.login_with_api_key("lpd_bad")

        assert exc_info.value.suggestions[-1] == 'API keys start with "lpd_"'
        assert "portal.launchpd.test" in exc_info.value.suggestions[0]
        assert reporter.messages("fail") == ["Invalid API key"]
        assert await credential_store.get_credentials() is None

    @pytest.mark.asyncio
    async def test_login_with_password(self, service: AuthService, server: FakeServer, credential_store):
        server.add("POST", "/api/auth/login", login_response())

        snapshot = await service.login_with_password("dev@example.com", "pw")

        assert snapshot.tier == "pro"
        body = request_json(server.requests[0])
        assert body == {"email": "dev@example.com", "password": "pw"}
        creds = await credential_store.get_credentials()
        assert creds.api_key == "lpd_fromlogin"
        assert creds.user_id == "user-9"

    @pytest.mark.asyncio
    async def test_password_with_email_code(self, settings, api, credential_store, server: FakeServer):
        def login(request):
            if "two_factor_code" in request_json(request):
                return login_response()
            return 401, {"requires_2fa": True, "two_factor_type": "email"}

        server.add("POST", "/api/auth/login", login)
        prompter = ScriptedPrompter(answers=["123456"])
        service = AuthService(settings, api, credential_store, RecordingReporter(), prompter)

        await service.login_with_password("dev@example.com", "pw")

        assert prompter.questions == ["Enter email verification code"]
        assert request_json(server.requests[1])["two_factor_code"] == "123456"
        assert await credential_store.is_logged_in()

    @pytest.mark.asyncio
    async def test_two_factor_flag_without_type(self, settings, api, credential_store, server: FakeServer):
        def login(request):
            if "two_factor_code" in request_json(request):
                return login_response()
            return {"requires_2fa": True}

        server.add("POST", "/api/auth/login", login)
        prompter = ScriptedPrompter(answers=["654321"])
        service = AuthService(settings, api, credential_store, RecordingReporter(), prompter)

        await service.login_with_password("dev@example.com", "pw")

        assert prompter.questions == ["Enter authenticator code"]

    @pytest.mark.asyncio
    async def test_empty_verification_code(self, settings, api, credential_store, server: FakeServer):
        server.add("POST", "/api/auth/login", {"requires_2fa": True, "two_factor_type": "totp"}, status=401)
        service = AuthService(settings, api, credential_store, RecordingReporter(), ScriptedPrompter())

        with pytest.raises(AuthError) as exc_info:
            await service.login_with_password("dev@example.com", "pw")

        assert exc_info.value.message == "Verification code is required"
        assert len(server.requests) == 1

    @pytest.mark.asyncio
    async def test_rejected_verification_code(self, settings, api, credential_store, server: FakeServer):
        def login(request):
            if "two_factor_code" in request_json(request):
                return {"success": False, "message": "Code expired"}
            return {"requires_2fa": True}

        server.add("POST", "/api/auth/login", login)
        service = AuthService(settings, api, credential_store, RecordingReporter(),
                              ScriptedPrompter(answers=["000000"]))

        with pytest.raises(AuthError) as exc_info:
            await service.login_with_password("dev@example.com", "pw")

        assert exc_info.value.message == "Code expired"
        assert not await credential_store.is_logged_in()

    @pytest.mark.asyncio
    async def test_wrong_password(self, service: AuthService, server: FakeServer):
        server.add("POST", "/api/auth/login", {"success": False})

        with pytest.raises(AuthError) as exc_info:
            await service.login_with_password("dev@example.com", "bad")

        assert exc_info.value.message == "Invalid email or password"

    @pytest.mark.asyncio
    async def test_login_response_without_key(self, service: AuthService, server: FakeServer):
        server.add("POST", "/api/auth/login", login_response(user={"id": "u"}))

        with pytest.raises(AuthError):
            await service.login_with_password("dev@example.com", "pw")

    @pytest.mark.asyncio
    async def test_logout(self, service: AuthService, server: FakeServer, credential_store, logged_in):
        server.add("POST", "/api/auth/logout", {"error": "boom"}, status=500)

        creds = await service.logout()

        assert creds.email == "dev@example.com"
        assert not await credential_store.is_logged_in()
        assert len(server.calls("POST", "/api/auth/logout")) == 1

    @pytest.mark.asyncio
    async def test_logout_when_anonymous(self, service: AuthService, server: FakeServer):
        assert await service.logout() is None
        assert server.requests == []

    @pytest.mark.asyncio
    async def test_account_status_anonymous(self, service: AuthService):
        assert await service.account_status() is None

    @pytest.mark.asyncio
    async def test_account_status_stores_new_secret(self, service: AuthService, server: FakeServer,
                                                    credential_store, logged_in):
        server.add("GET", "/api/quota", quota_response(
            user={"id": "user-1", "email": "dev@example.com", "api_secret": "fresh"},
        ))

        snapshot = await service.account_status()

        assert snapshot.user["email"] == "dev@example.com"
        assert server.requests[0].headers["X-API-Key"] == TEST_API_KEY
        assert (await credential_store.get_credentials()).api_secret == "fresh"

    @pytest.mark.asyncio
    async def test_invalid_session_is_cleared(self, service: AuthService, server: FakeServer,
                                              credential_store, logged_in):
        server.add("GET", "/api/quota", {"error": "revoked"}, status=401)

        with pytest.raises(AuthError) as exc_info:
            await service.account_status()

        assert exc_info.value.message == "Session expired or API key invalid"
        assert not await credential_store.is_logged_in()

    @pytest.mark.asyncio
    async def test_invalid_key_kept_when_asked(self, service: AuthService, server: FakeServer,
                                               credential_store, logged_in):
        server.add("GET", "/api/quota", {"error": "revoked"}, status=401)

        with pytest.raises(AuthError) as exc_info:
            await service.account_status(clear_invalid=False)

        assert exc_info.value.message == "API key may be invalid."
        assert await credential_store.is_logged_in()

    @pytest.mark.asyncio
    async def test_resend_verification_requires_login(self, service: AuthService):
        with pytest.raises(LoginRequiredError):
            await service.resend_verification()

    @pytest.mark.asyncio
    async def test_already_verified(self, service: AuthService, server: FakeServer, logged_in):
        server.add("POST", "/api/auth/resend-verification",
                   {"error": "Email already verified"}, status=400)

        assert await service.resend_verification() == {"success": True, "already_verified": True}

    @pytest.mark.asyncio
    async def test_resend_verification(self, service: AuthService, server: FakeServer, logged_in):
        server.add("POST", "/api/auth/resend-verification", {"success": True})

        assert await service.resend_verification() == {"success": True}

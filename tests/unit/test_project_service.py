"""Unit tests for project linking, status and deployment listing."""

import json
from pathlib import Path

import pytest

from conftest import FakeServer, RecordingReporter, ScriptedPrompter, request_json, write_link
from launchpd.api.exceptions import (
    APIError,
    InvalidProjectError,
    InvalidSubdomainError,
    LoginRequiredError,
    SubdomainTakenError,
    UserCancelledError,
)
from launchpd.models import Deployment
from launchpd.services import ProjectService


@pytest.fixture
def project(tmp_path: Path) -> Path:
    folder = tmp_path / "project"
    folder.mkdir()
    return folder


def make_service(settings, api, credential_store, link_store, history, prompter=None) -> ProjectService:
    return ProjectService(settings, api, credential_store, link_store, history,
                          reporter=RecordingReporter(), prompter=prompter or ScriptedPrompter())


class TestInit:
    """Tests for ProjectService.init."""

    @pytest.mark.asyncio
    async def test_requires_login(self, settings, api, credential_store, link_store, history,
                                  server: FakeServer, project: Path):
        service = make_service(settings, api, credential_store, link_store, history)

        with pytest.raises(LoginRequiredError):
            await service.init(project, "my-site")
        assert server.requests == []

    @pytest.mark.asyncio
    async def test_links_available_name(self, settings, api, credential_store, link_store, history,
                                        server: FakeServer, project: Path, logged_in):
        server.add("GET", "/api/public/check/my-site", {"available": True})
        server.add("POST", "/api/subdomains/reserve", {"success": True})
        service = make_service(settings, api, credential_store, link_store, history)

        result = await service.init(project, "My-Site")

        assert result.subdomain == "my-site"
        assert not result.owned
        assert not result.relinked
        assert request_json(server.calls("POST", "/api/subdomains/reserve")[0]) == {"subdomain": "my-site"}
        data = json.loads((project / ".launchpd.json").read_text())
        assert data["subdomain"] == "my-site"

    @pytest.mark.asyncio
    async def test_owned_name_is_not_reserved_again(self, settings, api, credential_store, link_store,
                                                    history, server: FakeServer, project: Path, logged_in):
        server.add("GET", "/api/public/check/mine", {"available": False})
        server.add("GET", "/api/subdomains", {"subdomains": [{"subdomain": "mine"}]})
        service = make_service(settings, api, credential_store, link_store, history)

        result = await service.init(project, "mine")

        assert result.owned
        assert server.calls("POST", "/api/subdomains/reserve") == []
        assert (project / ".launchpd.json").exists()

    @pytest.mark.asyncio
    async def test_taken_name(self, settings, api, credential_store, link_store, history,
                              server: FakeServer, project: Path, logged_in):
        server.add("GET", "/api/public/check/theirs", {"available": False})
        server.add("GET", "/api/subdomains", {"subdomains": []})
        service = make_service(settings, api, credential_store, link_store, history)

        with pytest.raises(SubdomainTakenError):
            await service.init(project, "theirs")
        assert not (project / ".launchpd.json").exists()

    @pytest.mark.asyncio
    async def test_reservation_refused(self, settings, api, credential_store, link_store, history,
                                       server: FakeServer, project: Path, logged_in):
        server.add("GET", "/api/public/check/my-site", {"available": True})
        server.add("POST", "/api/subdomains/reserve", {"success": False, "error": "Reserved word"})
        service = make_service(settings, api, credential_store, link_store, history)

        with pytest.raises(APIError) as exc_info:
            await service.init(project, "my-site")
        assert exc_info.value.message == "Reserved word"

    @pytest.mark.asyncio
    async def test_asks_for_name(self, settings, api, credential_store, link_store, history,
                                 server: FakeServer, project: Path, logged_in):
        server.add("GET", "/api/public/check/asked-site", {"available": True})
        server.add("POST", "/api/subdomains/reserve", {"success": True})
        prompter = ScriptedPrompter(answers=["Asked-Site"])
        service = make_service(settings, api, credential_store, link_store, history, prompter)

        result = await service.init(project)

        assert result.subdomain == "asked-site"
        assert prompter.questions == ["Enter subdomain name (e.g. my-awesome-site)"]

    @pytest.mark.asyncio
    async def test_invalid_name(self, settings, api, credential_store, link_store, history,
                                project: Path, logged_in):
        service = make_service(settings, api, credential_store, link_store, history)

        with pytest.raises(InvalidSubdomainError):
            await service.init(project, "not_valid")

    @pytest.mark.asyncio
    async def test_already_linked_to_same_name(self, settings, api, credential_store, link_store,
                                               history, server: FakeServer, project: Path, logged_in):
        write_link(project, "my-site")
        service = make_service(settings, api, credential_store, link_store, history)

        result = await service.init(project, "my-site")

        assert result.owned
        assert server.requests == []

    @pytest.mark.asyncio
    async def test_relink_declined(self, settings, api, credential_store, link_store, history,
                                   server: FakeServer, project: Path, logged_in):
        write_link(project, "old-site")
        service = make_service(settings, api, credential_store, link_store, history,
                               ScriptedPrompter(confirms=[False]))

        with pytest.raises(UserCancelledError):
            await service.init(project, "new-site")
        assert server.requests == []

    @pytest.mark.asyncio
    async def test_relink_from_subdirectory(self, settings, api, credential_store, link_store, history,
                                            server: FakeServer, project: Path, logged_in):
        write_link(project, "old-site")
        nested = project / "src"
        nested.mkdir()
        server.add("GET", "/api/public/check/new-site", {"available": True})
        server.add("POST", "/api/subdomains/reserve", {"success": True})
        service = make_service(settings, api, credential_store, link_store, history,
                               ScriptedPrompter(confirms=[True]))

        result = await service.init(nested, "new-site")

        assert result.relinked
        assert result.project_root == project.resolve()
        assert json.loads((project / ".launchpd.json").read_text())["subdomain"] == "new-site"
        assert not (nested / ".launchpd.json").exists()


class TestStatus:
    """Tests for ProjectService.status."""

    @pytest.mark.asyncio
    async def test_not_a_project(self, settings, api, credential_store, link_store, history, project: Path):
        service = make_service(settings, api, credential_store, link_store, history)

        assert await service.status(project) is None

    @pytest.mark.asyncio
    async def test_invalid_link_file(self, settings, api, credential_store, link_store, history,
                                     project: Path):
        (project / ".launchpd.json").write_text("{}")
        service = make_service(settings, api, credential_store, link_store, history)

        with pytest.raises(InvalidProjectError):
            await service.status(project)

    @pytest.mark.asyncio
    async def test_active_version(self, settings, api, credential_store, link_store, history,
                                  server: FakeServer, project: Path):
        write_link(project, "my-site")
        server.add("GET", "/api/deployments/my-site", {
            "versions": [
                {"version": 1, "message": "first"},
                {"version": 2, "message": "second", "file_count": 4},
                {"version": 3, "message": "third"},
            ],
            "activeVersion": 2,
        })
        service = make_service(settings, api, credential_store, link_store, history)

        status = await service.status(project)

        assert status.url == "https://my-site.launchpd.test"
        assert status.active.version == 2
        assert status.active.file_count == 4
        assert status.error is None

    @pytest.mark.asyncio
    async def test_no_deployments_yet(self, settings, api, credential_store, link_store, history,
                                      server: FakeServer, project: Path):
        write_link(project, "my-site")
        server.add("GET", "/api/deployments/my-site", {"versions": []})
        service = make_service(settings, api, credential_store, link_store, history)

        status = await service.status(project)

        assert status.active is None
        assert status.error is None

    @pytest.mark.asyncio
    async def test_lookup_failure_is_reported(self, settings, api, credential_store, link_store, history,
                                              server: FakeServer, project: Path):
        write_link(project, "my-site")
        server.add("GET", "/api/deployments/my-site", {"error": "boom"}, status=500)
        service = make_service(settings, api, credential_store, link_store, history)

        status = await service.status(project)

        assert status.subdomain == "my-site"
        assert status.error == "boom"


class TestListDeployments:
    """Tests for ProjectService.list_deployments."""

    async def _seed(self, history) -> None:
        for version in (1, 2):
            await history.append(Deployment(subdomain="site", version=version, folder_name="dist",
                                            file_count=1, total_bytes=10))

    @pytest.mark.asyncio
    async def test_from_api(self, settings, api, credential_store, link_store, history, server: FakeServer):
        server.add("GET", "/api/deployments", {"deployments": [
            {"subdomain": "a", "version": 2, "active_version": 2, "folder_name": "dist",
             "file_count": 3, "total_bytes": 30, "created_at": "2026-02-01T00:00:00Z"},
            {"subdomain": "a", "version": 1, "active_version": 2},
        ]})
        service = make_service(settings, api, credential_store, link_store, history)

        listing = await service.list_deployments()

        assert listing.synced
        assert [(d.version, d.is_active) for d in listing.deployments] == [(2, True), (1, False)]
        assert listing.deployments[0].file_count == 3
        assert listing.to_list()[0]["isActive"] is True

    @pytest.mark.asyncio
    async def test_falls_back_to_local_history(self, settings, api, credential_store, link_store, history,
                                               server: FakeServer):
        await self._seed(history)
        server.add("GET", "/api/deployments", {"error": "down"}, status=500)
        service = make_service(settings, api, credential_store, link_store, history)

        listing = await service.list_deployments()

        assert not listing.synced
        assert [d.version for d in listing.deployments] == [2, 1]

    @pytest.mark.asyncio
    async def test_local_only(self, settings, api, credential_store, link_store, history, server: FakeServer):
        await self._seed(history)
        service = make_service(settings, api, credential_store, link_store, history)

        listing = await service.list_deployments(local_only=True)

        assert listing.source == "local"
        assert len(listing.deployments) == 2
        assert server.requests == []

"""Pytest configuration and fixtures."""

import json
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

import httpx
import pytest

from launchpd.api import ApiClient
from launchpd.config import Settings
from launchpd.core import CredentialStore, LocalHistory, ProjectLinkStore
from launchpd.core.reporter import Prompter, StatusReporter

Responder = Union[Dict[str, Any], Callable[[httpx.Request], Any]]

TEST_API_KEY = "lpd_testkey"


class FakeServer:
    """In-memory LaunchPd API behind an httpx.MockTransport.

    Routes are keyed by method and path. A path ending in ``*`` matches
    any path with that prefix. Unrouted requests get a 404.
    """

    def __init__(self):
        self.routes: Dict[Tuple[str, str], Tuple[int, Responder]] = {}
        self.requests: List[httpx.Request] = []
        self.transport = httpx.MockTransport(self.handle)

    def add(self, method: str, path: str, response: Responder, status: int = 200) -> None:
        self.routes[(method.upper(), path)] = (status, response)

    def _lookup(self, method: str, path: str) -> Optional[Tuple[int, Responder]]:
        if (method, path) in self.routes:
            return self.routes[(method, path)]
        for (route_method, route_path), route in self.routes.items():
            if route_method == method and route_path.endswith("*") and path.startswith(route_path[:-1]):
                return route
        return None

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self._lookup(request.method, request.url.path)
        if route is None:
            return httpx.Response(404, json={"error": "Not found"})

        status, response = route
        if callable(response):
            response = response(request)
            if isinstance(response, httpx.Response):
                return response
            if isinstance(response, tuple):
                status, response = response
        return httpx.Response(status, json=response)

    def calls(self, method: str, path: str) -> List[httpx.Request]:
        return [r for r in self.requests if r.method == method.upper() and r.url.path == path]

    def paths(self) -> List[str]:
        return [f"{r.method} {r.url.path}" for r in self.requests]


class RecordingReporter(StatusReporter):
    """Status reporter that keeps every event for assertions."""

    def __init__(self):
        self.events: List[Tuple[str, Optional[str]]] = []

    def start(self, text):
        self.events.append(("start", text))

    def update(self, text):
        self.events.append(("update", text))

    def succeed(self, text=None):
        self.events.append(("succeed", text))

    def fail(self, text=None):
        self.events.append(("fail", text))

    def warn(self, text=None):
        self.events.append(("warn", text))

    def stop(self):
        self.events.append(("stop", None))

    def info(self, message):
        self.events.append(("info", message))

    def warning(self, message):
        self.events.append(("warning", message))

    def success(self, message):
        self.events.append(("success", message))

    def messages(self, kind: str) -> List[str]:
        return [text for event, text in self.events if event == kind]


class ScriptedPrompter(Prompter):
    """Prompter answering from queues; falls back to the question default."""

    def __init__(self, confirms: Optional[List[bool]] = None, answers: Optional[List[str]] = None):
        self.confirms = list(confirms or [])
        self.answers = list(answers or [])
        self.questions: List[str] = []

    def confirm(self, question, default=True):
        self.questions.append(question)
        return self.confirms.pop(0) if self.confirms else default

    def ask(self, question, default=None):
        self.questions.append(question)
        return self.answers.pop(0) if self.answers else (default or "")

    def ask_secret(self, question):
        self.questions.append(question)
        return self.answers.pop(0) if self.answers else ""


def write_credentials(config_dir: Path, **overrides) -> Dict[str, Any]:
    """Store a login the same way the credential store does."""
    data = {
        "apiKey": TEST_API_KEY,
        "apiSecret": None,
        "userId": "user-1",
        "email": "dev@example.com",
        "tier": "free",
        "savedAt": "2026-01-01T00:00:00Z",
    }
    data.update(overrides)
    config_dir.mkdir(parents=True, exist_ok=True)
    (config_dir / "credentials.json").write_text(json.dumps(data), encoding="utf-8")
    return data


def write_link(root: Path, subdomain: str) -> Path:
    """Create a project link file in ``root``."""
    path = root / ".launchpd.json"
    path.write_text(json.dumps({
        "subdomain": subdomain,
        "createdAt": "2026-01-01T00:00:00Z",
        "updatedAt": "2026-01-01T00:00:00Z",
    }), encoding="utf-8")
    return path


def request_json(request: httpx.Request) -> Dict[str, Any]:
    return json.loads(request.content.decode("utf-8"))


def quota_response(**overrides) -> Dict[str, Any]:
    """Quota payload of a healthy authenticated account."""
    data = {
        "authenticated": True,
        "tier": "free",
        "canDeploy": True,
        "canCreateNewSite": True,
        "usage": {"siteCount": 1, "storageUsed": 1024, "storageUsedMB": 0.1},
        "limits": {"maxSites": 10, "maxStorageBytes": 100 * 1024 * 1024,
                   "maxVersionsPerSite": 10, "retentionDays": 30},
        "warnings": [],
        "user": {"id": "user-1", "email": "dev@example.com", "email_verified": True},
    }
    data.update(overrides)
    return data


@pytest.fixture
def config_dir(tmp_path: Path) -> Path:
    return tmp_path / "cfg"


@pytest.fixture
def settings(config_dir: Path) -> Settings:
    """Settings pointing at a throwaway config directory."""
    return Settings(domain="launchpd.test", api_url="https://api.test", config_dir=config_dir)


@pytest.fixture
def server() -> FakeServer:
    return FakeServer()


@pytest.fixture
def credential_store(config_dir: Path) -> CredentialStore:
    return CredentialStore(config_dir)


@pytest.fixture
def link_store() -> ProjectLinkStore:
    return ProjectLinkStore()


@pytest.fixture
def history(config_dir: Path) -> LocalHistory:
    return LocalHistory(config_dir)


@pytest.fixture
def api(settings: Settings, credential_store: CredentialStore, server: FakeServer) -> ApiClient:
    return ApiClient(settings, credential_store, transport=server.transport)


@pytest.fixture
def reporter() -> RecordingReporter:
    return RecordingReporter()


@pytest.fixture
def prompter() -> ScriptedPrompter:
    return ScriptedPrompter()


@pytest.fixture
def logged_in(config_dir: Path) -> Dict[str, Any]:
    """Stored login without a signing secret."""
    return write_credentials(config_dir)


@pytest.fixture
def site(tmp_path: Path) -> Path:
    """A small static site folder."""
    folder = tmp_path / "site"
    folder.mkdir()
    (folder / "index.html").write_bytes(b"<p>hi</p>\n")
    return folder

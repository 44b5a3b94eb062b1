"""Unit tests for subdomain resolution."""

from pathlib import Path

import pytest

from conftest import FakeServer, RecordingReporter, ScriptedPrompter, write_link
from launchpd.api.exceptions import InvalidSubdomainError, SubdomainTakenError
from launchpd.constants import MSG_AVAILABILITY_UNVERIFIED
from launchpd.core import SubdomainResolver


def make_resolver(api, credential_store, link_store, reporter, prompter) -> SubdomainResolver:
    return SubdomainResolver(api, credential_store, link_store, reporter, prompter)


class TestResolve:
    """Tests for SubdomainResolver.resolve."""

    @pytest.mark.asyncio
    async def test_anonymous_name_is_ignored(self, api, credential_store, link_store,
                                             reporter: RecordingReporter, prompter, site: Path):
        resolver = make_resolver(api, credential_store, link_store, reporter, prompter)

        resolution = await resolver.resolve(site, "wanted")

        assert resolution.subdomain != "wanted"
        assert resolution.generated
        assert not resolution.authenticated
        assert "Custom subdomains require registration!" in reporter.messages("warning")

    @pytest.mark.asyncio
    async def test_explicit_name_when_logged_in(self, api, credential_store, link_store,
                                                reporter, prompter, site: Path, logged_in):
        resolver = make_resolver(api, credential_store, link_store, reporter, prompter)

        resolution = await resolver.resolve(site, "  My-Site ")

        assert resolution.subdomain == "my-site"
        assert resolution.explicit
        assert resolution.authenticated

    @pytest.mark.asyncio
    async def test_linked_subdomain(self, api, credential_store, link_store,
                                    reporter: RecordingReporter, prompter, site: Path):
        write_link(site, "linked-site")
        resolver = make_resolver(api, credential_store, link_store, reporter, prompter)

        resolution = await resolver.resolve(site)

        assert resolution.subdomain == "linked-site"
        assert resolution.linked_subdomain == "linked-site"
        assert resolution.project_root == site.resolve()
        assert "Using project subdomain: linked-site" in reporter.messages("info")

    @pytest.mark.asyncio
    async def test_invalid_name(self, api, credential_store, link_store, reporter, prompter,
                                site: Path, logged_in):
        resolver = make_resolver(api, credential_store, link_store, reporter, prompter)

        with pytest.raises(InvalidSubdomainError):
            await resolver.resolve(site, "bad_name")


class TestLinkHandling:
    """Tests for mismatch handling and auto-init."""

    @pytest.mark.asyncio
    async def test_mismatch_declined(self, api, credential_store, link_store, reporter,
                                     site: Path, logged_in):
        write_link(site, "linked-site")
        prompter = ScriptedPrompter(confirms=[False])
        resolver = make_resolver(api, credential_store, link_store, reporter, prompter)
        resolution = await resolver.resolve(site, "other-site")

        assert await resolver.handle_mismatch(resolution) is False
        assert (await link_store.read_link(site)).subdomain == "linked-site"
        assert len(prompter.questions) == 1

    @pytest.mark.asyncio
    async def test_mismatch_auto_yes(self, api, credential_store, link_store,
                                     reporter: RecordingReporter, prompter: ScriptedPrompter,
                                     site: Path, logged_in):
        write_link(site, "linked-site")
        resolver = make_resolver(api, credential_store, link_store, reporter, prompter)
        resolution = await resolver.resolve(site, "other-site")

        assert await resolver.handle_mismatch(resolution, auto_yes=True) is True
        assert (await link_store.read_link(site)).subdomain == "other-site"
        assert prompter.questions == []

    @pytest.mark.asyncio
    async def test_no_mismatch(self, api, credential_store, link_store, reporter, prompter, site: Path):
        write_link(site, "linked-site")
        resolver = make_resolver(api, credential_store, link_store, reporter, prompter)
        resolution = await resolver.resolve(site)

        assert await resolver.handle_mismatch(resolution) is False

    @pytest.mark.asyncio
    async def test_auto_init_links_folder(self, api, credential_store, link_store, reporter,
                                          site: Path, logged_in):
        prompter = ScriptedPrompter(confirms=[True])
        resolver = make_resolver(api, credential_store, link_store, reporter, prompter)
        resolution = await resolver.resolve(site, "new-site")

        assert await resolver.auto_init(resolution, site) is True
        assert (await link_store.read_link(site)).subdomain == "new-site"

    @pytest.mark.asyncio
    async def test_auto_init_only_for_explicit_names(self, api, credential_store, link_store,
                                                     reporter, prompter: ScriptedPrompter, site: Path):
        resolver = make_resolver(api, credential_store, link_store, reporter, prompter)
        resolution = await resolver.resolve(site)

        assert await resolver.auto_init(resolution, site) is False
        assert prompter.questions == []


class TestAvailability:
    """Tests for SubdomainResolver.check_availability."""

    @pytest.mark.asyncio
    async def test_available(self, api, credential_store, link_store, reporter, prompter,
                             server: FakeServer):
        server.add("GET", "/api/public/check/free-site", {"available": True})
        resolver = make_resolver(api, credential_store, link_store, reporter, prompter)

        assert await resolver.check_availability("free-site") is False

    @pytest.mark.asyncio
    async def test_owned(self, api, credential_store, link_store, reporter, prompter,
                         server: FakeServer, logged_in):
        server.add("GET", "/api/public/check/mine", {"available": False})
        server.add("GET", "/api/subdomains", {"subdomains": [{"subdomain": "mine"}]})
        resolver = make_resolver(api, credential_store, link_store, reporter, prompter)

        assert await resolver.check_availability("mine") is True

    @pytest.mark.asyncio
    async def test_taken(self, api, credential_store, link_store, reporter: RecordingReporter,
                         prompter, server: FakeServer):
        server.add("GET", "/api/public/check/theirs", {"available": False})
        server.add("GET", "/api/subdomains", {"subdomains": []})
        resolver = make_resolver(api, credential_store, link_store, reporter, prompter)

        with pytest.raises(SubdomainTakenError):
            await resolver.check_availability("theirs")
        assert reporter.messages("fail")

    @pytest.mark.asyncio
    async def test_check_failure_only_warns(self, api, credential_store, link_store,
                                            reporter: RecordingReporter, prompter, server: FakeServer):
        server.add("GET", "/api/public/check/site", {"error": "down"}, status=500)
        resolver = make_resolver(api, credential_store, link_store, reporter, prompter)

        assert await resolver.check_availability("site") is False
        assert reporter.messages("warn") == [MSG_AVAILABILITY_UNVERIFIED]

"""
Tests for ghsource testing utilities.

Verifies that MockGitHub and fixtures work correctly.
"""

import httpx
import pytest

from ghsource.testing import MockGitHub, create_manifest, create_ref_payload, create_repo_payload, fake_sha
from ghsource.testing import conftest as plugin


class TestMockGitHub:
    """Tests for MockGitHub."""

    async def test_unknown_url_is_404(self) -> None:
        github = MockGitHub()

        async with httpx.AsyncClient(transport=github.transport) as client:
            response = await client.get("https://api.github.com/repos/o/r")

        assert response.status_code == 404
        assert response.json() == {"message": "Not Found"}

    async def test_call_tracking_ignores_query(self) -> None:
        github = MockGitHub()
        github.add("GET", github.api("/search/repositories"), json={"items": []})

        async with httpx.AsyncClient(transport=github.transport) as client:
            await client.get(github.api("/search/repositories"), params={"q": "led"})
            await client.get(github.api("/search/repositories"), params={"q": "servo"})

        assert github.call_count("GET", github.api("/search/repositories")) == 2
        assert [call.params["q"] for call in github.get_calls()] == ["led", "servo"]
        assert not github.was_called("POST")

    async def test_configured_error_is_raised(self) -> None:
        github = MockGitHub()
        github.add("GET", github.api("/rate_limit"), error=httpx.ReadTimeout("slow"))

        async with httpx.AsyncClient(transport=github.transport) as client:
            with pytest.raises(httpx.ReadTimeout):
                await client.get(github.api("/rate_limit"))

    async def test_route_counts_its_calls(self) -> None:
        github = MockGitHub()
        route = github.add("GET", github.api("/repos/o/r"), json={})

        async with httpx.AsyncClient(transport=github.transport) as client:
            await client.get(github.api("/repos/o/r"))

        assert route.call_count == 1

    def test_reset(self) -> None:
        github = MockGitHub()
        github.add_repo("o/r")
        github.reset()

        assert github.get_calls() == []
        assert github._routes == {}

    def test_url_builders(self) -> None:
        github = MockGitHub()

        assert github.api("/gists") == "https://api.github.com/gists"
        assert github.raw("o/r", "v1", "pxt.json") == "https://raw.githubusercontent.com/o/r/v1/pxt.json"
        assert github.proxy("o/r", "refs") == "https://proxy.test/api/gh/o/r/refs"


class TestPayloads:
    def test_fake_sha(self) -> None:
        assert len(fake_sha("a")) == 40
        assert fake_sha("a") == fake_sha("a")
        assert fake_sha("a") != fake_sha("b")

    def test_repo_payload(self) -> None:
        payload = create_repo_payload("Octocat/Hello-World", default_branch="main")

        assert payload["owner"]["login"] == "Octocat"
        assert payload["name"] == "Hello-World"
        assert payload["default_branch"] == "main"

    def test_annotated_tag_payload_points_at_tag_object(self) -> None:
        github = MockGitHub()

        payload = create_ref_payload(github.settings, "o/r", "refs/tags/v1", "abc", ref_type="tag")

        assert payload["object"]["url"] == "https://api.github.com/repos/o/r/git/tags/abc"

    def test_manifest(self) -> None:
        assert create_manifest("x", ["a.ts"]) == '{"name": "x", "files": ["a.ts"]}'


class TestPlugin:
    def test_plugin_exports_fixtures(self) -> None:
        assert set(plugin.__all__) == {
            "direct_client",
            "direct_settings",
            "mock_github",
            "proxy_client",
            "proxy_settings",
            "sample_policy",
        }

    def test_sample_policy_fixture(self, sample_policy) -> None:
        assert sample_policy.approved_orgs == ("microsoft",)

    async def test_client_fixtures_are_open(self, direct_client, proxy_client) -> None:
        assert not direct_client.transport._client.is_closed
        assert not proxy_client.transport._client.is_closed

"""
Tests for settings and client construction.

Feature: ghsource
"""

import pytest

from ghsource import PackageSourceClient, SourceSettings, use_proxy
from ghsource.exceptions import ConfigurationError
from ghsource.sources import DirectSource, ProxySource, select_source
from ghsource.testing import MockGitHub

ENV_VARS = [
    "GHSOURCE_PROXY_ROOT",
    "GHSOURCE_NO_PROXY",
    "GHSOURCE_PLATFORM_ID",
    "GHSOURCE_CONFIG_FILE",
    "GHSOURCE_TIMEOUT",
    "GITHUB_TOKEN",
]


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestSourceSettings:
    def test_defaults(self) -> None:
        settings = SourceSettings()

        assert settings.proxy_root is None
        assert settings.github_api_url == "https://api.github.com"
        assert settings.config_file_name == "pxt.json"
        assert settings.max_concurrent_downloads == 8

    def test_urls_are_normalized(self) -> None:
        settings = SourceSettings(
            proxy_root="https://makecode.com/api",
            github_api_url="https://ghe.example.com/api/v3/",
        )

        assert settings.proxy_root == "https://makecode.com/api/"
        assert settings.github_api_url == "https://ghe.example.com/api/v3"

    @pytest.mark.parametrize(
        "kwargs",
        [{"timeout": 0}, {"max_concurrent_downloads": 0}, {"config_file_name": ""}],
    )
    def test_invalid_values(self, kwargs: dict) -> None:
        with pytest.raises(ConfigurationError):
            SourceSettings(**kwargs)


class TestFromEnv:
    def test_reads_variables(self, clean_env: pytest.MonkeyPatch) -> None:
        clean_env.setenv("GHSOURCE_PROXY_ROOT", "https://makecode.com/api/")
        clean_env.setenv("GHSOURCE_PLATFORM_ID", "microbit")
        clean_env.setenv("GHSOURCE_CONFIG_FILE", "package.json")
        clean_env.setenv("GHSOURCE_TIMEOUT", "5")
        clean_env.setenv("GITHUB_TOKEN", "ghp_env")

        settings = SourceSettings.from_env()

        assert settings.proxy_root == "https://makecode.com/api/"
        assert settings.platform_id == "microbit"
        assert settings.config_file_name == "package.json"
        assert settings.timeout == 5.0
        assert settings.token == "ghp_env"
        assert settings.no_github_proxy is False

    def test_empty_environment(self, clean_env: pytest.MonkeyPatch) -> None:
        assert SourceSettings.from_env() == SourceSettings()

    @pytest.mark.parametrize(("raw", "expected"), [("1", True), ("TRUE", True), ("off", False)])
    def test_no_proxy_flag(self, clean_env: pytest.MonkeyPatch, raw: str, expected: bool) -> None:
        clean_env.setenv("GHSOURCE_NO_PROXY", raw)

        assert SourceSettings.from_env().no_github_proxy is expected

    def test_bad_no_proxy_flag(self, clean_env: pytest.MonkeyPatch) -> None:
        clean_env.setenv("GHSOURCE_NO_PROXY", "sometimes")

        with pytest.raises(ConfigurationError):
            SourceSettings.from_env()

    def test_bad_timeout(self, clean_env: pytest.MonkeyPatch) -> None:
        clean_env.setenv("GHSOURCE_TIMEOUT", "soon")

        with pytest.raises(ConfigurationError):
            SourceSettings.from_env()


class TestUseProxy:
    def test_no_root_means_direct(self) -> None:
        assert use_proxy(SourceSettings()) is False

    def test_root_means_proxy(self) -> None:
        assert use_proxy(SourceSettings(proxy_root="https://makecode.com/api/")) is True

    def test_opt_out_wins(self) -> None:
        assert use_proxy(SourceSettings(proxy_root="https://makecode.com/api/", no_github_proxy=True)) is False

    async def test_strategy_follows_settings(self, direct_client: PackageSourceClient, proxy_client: PackageSourceClient) -> None:
        assert isinstance(select_source(direct_client.transport), DirectSource)
        assert isinstance(select_source(proxy_client.transport), ProxySource)
        assert direct_client.uses_proxy is False
        assert proxy_client.uses_proxy is True


class TestClient:
    def test_from_env(self, clean_env: pytest.MonkeyPatch) -> None:
        clean_env.setenv("GHSOURCE_PLATFORM_ID", "arcade")

        client = PackageSourceClient.from_env()

        assert client.settings.platform_id == "arcade"

    async def test_context_manager_closes(self, mock_github: MockGitHub) -> None:
        async with PackageSourceClient(http_transport=mock_github.transport) as client:
            assert client.refs.repos is client.repos

        assert client.transport._client.is_closed

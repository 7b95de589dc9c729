"""
Pytest fixtures for ghsource testing.

Provides a mock GitHub and clients wired to it in both transport modes.
"""

from typing import AsyncGenerator, Generator

import pytest
import pytest_asyncio

from ghsource.client import PackageSourceClient
from ghsource.config import SourceSettings
from ghsource.policy import PolicyConfig
from ghsource.testing.mock import MockGitHub

PROXY_ROOT = "https://proxy.test/api/"


# ============================================================================
# Settings Fixtures
# ============================================================================


@pytest.fixture
def direct_settings() -> SourceSettings:
    """Settings that talk to the GitHub API directly."""
    return SourceSettings(platform_id="microbit")


@pytest.fixture
def proxy_settings() -> SourceSettings:
    """Settings that go through the caching proxy."""
    return SourceSettings(proxy_root=PROXY_ROOT, platform_id="microbit")


# ============================================================================
# Mock GitHub Fixtures
# ============================================================================


@pytest.fixture
def mock_github() -> Generator[MockGitHub, None, None]:
    """
    Provide a MockGitHub serving both the API and the proxy.

    Example:
        ```python
        async def test_lookup(mock_github, direct_client, sample_policy):
            mock_github.add_repo("microsoft/pxt-neopixel")
            repo = await direct_client.repos.get("microsoft/pxt-neopixel", sample_policy)
            assert repo.status is RepoStatus.APPROVED
        ```
    """
    github = MockGitHub(SourceSettings(proxy_root=PROXY_ROOT))
    yield github
    github.reset()


@pytest_asyncio.fixture
async def direct_client(
    mock_github: MockGitHub, direct_settings: SourceSettings
) -> AsyncGenerator[PackageSourceClient, None]:
    """Client in direct mode backed by mock_github, closed after the test."""
    client = PackageSourceClient(direct_settings, http_transport=mock_github.transport)
    yield client
    await client.close()


@pytest_asyncio.fixture
async def proxy_client(
    mock_github: MockGitHub, proxy_settings: SourceSettings
) -> AsyncGenerator[PackageSourceClient, None]:
    """Client in proxy mode backed by mock_github, closed after the test."""
    client = PackageSourceClient(proxy_settings, http_transport=mock_github.transport)
    yield client
    await client.close()


# ============================================================================
# Policy Fixtures
# ============================================================================


@pytest.fixture
def sample_policy() -> PolicyConfig:
    """A policy approving one org and one repo and banning one of each."""
    return PolicyConfig(
        banned_orgs=("evilcorp",),
        banned_repos=("microsoft/pxt-banned",),
        approved_orgs=("microsoft",),
        approved_repos=("octocat/approved-sample",),
        allow_unapproved=False,
    )

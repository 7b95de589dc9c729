"""Shared fixtures: the mock GitHub and clients from ghsource.testing."""

from ghsource.testing.fixtures import (  # noqa: F401
    direct_client,
    direct_settings,
    mock_github,
    proxy_client,
    proxy_settings,
    sample_policy,
)

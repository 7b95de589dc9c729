"""
Pytest plugin for ghsource testing fixtures.

To use these fixtures in your tests, add this to your conftest.py:

    pytest_plugins = ["ghsource.testing.conftest"]
"""

from ghsource.testing.fixtures import (
    direct_client,
    direct_settings,
    mock_github,
    proxy_client,
    proxy_settings,
    sample_policy,
)

__all__ = [
    "direct_client",
    "direct_settings",
    "mock_github",
    "proxy_client",
    "proxy_settings",
    "sample_policy",
]

"""ghsource testing utilities.

Provides a mock GitHub and fixtures for testing code that resolves packages.
"""

from ghsource.testing.mock import (
    MockCall,
    MockGitHub,
    MockResponse,
    create_manifest,
    create_ref_payload,
    create_repo_payload,
    fake_sha,
)

__all__ = [
    # Mock GitHub
    "MockGitHub",
    "MockCall",
    "MockResponse",
    # Helper functions
    "fake_sha",
    "create_repo_payload",
    "create_ref_payload",
    "create_manifest",
]

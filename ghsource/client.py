"""
ghsource async client.

Provides the async interface for resolving GitHub-hosted packages.
"""

from typing import Any

import httpx

from ghsource.clients import GistsClient, PackagesClient, RefsClient, ReposClient
from ghsource.config import SourceSettings, use_proxy
from ghsource.transport import AsyncHTTPTransport


class PackageSourceClient:
    """
    Async client for GitHub-hosted packages.

    Aggregates the resource clients over one shared HTTP transport.

    Example:
        ```python
        import asyncio
        from ghsource import PackageSourceClient, PolicyConfig, SourceSettings

        async def main():
            policy = PolicyConfig(approved_orgs=("microsoft",))
            async with PackageSourceClient(SourceSettings()) as client:
                snapshot = await client.packages.fetch("microsoft/pxt-neopixel#v0.7.2", policy)
                print(snapshot.sha, sorted(snapshot.files))

        asyncio.run(main())
        ```
    """

    def __init__(
        self,
        settings: SourceSettings | None = None,
        http_transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            settings: Endpoints and behavior switches (default: direct GitHub access)
            http_transport: Optional httpx transport, mainly for tests
        """
        self.settings = settings or SourceSettings()

        self._transport = AsyncHTTPTransport(self.settings, http_transport=http_transport)

        self.repos = ReposClient(self._transport)
        self.refs = RefsClient(self._transport, self.repos)
        self.packages = PackagesClient(self._transport)
        self.gists = GistsClient(self._transport)

    @classmethod
    def from_env(
        cls, http_transport: httpx.AsyncBaseTransport | None = None
    ) -> "PackageSourceClient":
        """
        Create a client from environment variables.

        See SourceSettings.from_env for the variables read.

        Raises:
            ConfigurationError: If a variable holds an invalid value
        """
        return cls(SourceSettings.from_env(), http_transport=http_transport)

    @property
    def transport(self) -> AsyncHTTPTransport:
        """Get the underlying async HTTP transport (for advanced use cases)."""
        return self._transport

    @property
    def uses_proxy(self) -> bool:
        """Whether requests currently go through the caching proxy."""
        return use_proxy(self.settings)

    async def close(self) -> None:
        """Close the client and release resources."""
        await self._transport.close()

    async def __aenter__(self) -> "PackageSourceClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Async context manager exit - closes the client."""
        await self.close()

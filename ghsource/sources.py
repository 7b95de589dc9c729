"""
Proxy and direct GitHub access strategies.

Both strategies expose the same operations, so ref resolution and package
fetching above this layer never branch on the transport mode. The mode is
picked per call with ``select_source``.
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Any

from ghsource.config import use_proxy
from ghsource.exceptions import NotFoundError, TransportError
from ghsource.logging import get_logger
from ghsource.policy import PolicyConfig, classify
from ghsource.refs import resolve_tag_or_sha
from ghsource.transport import AsyncHTTPTransport
from ghsource.types.identifiers import DEFAULT_TAG, RepoIdentifier
from ghsource.types.packages import PackageManifest, PackageSnapshot
from ghsource.types.refs import RefObject
from ghsource.types.repos import GitRepo, RepoStatus

logger = get_logger("sources")


class GitHubSource(ABC):
    """Operations the resolver needs from GitHub, whichever way it is reached."""

    def __init__(self, transport: AsyncHTTPTransport) -> None:
        self.transport = transport
        self.settings = transport.settings

    @property
    def manifest_name(self) -> str:
        return self.settings.config_file_name

    @abstractmethod
    async def get_repo(
        self, identifier: RepoIdentifier, config: PolicyConfig | None
    ) -> GitRepo | None:
        """Repository metadata, or None if there is no such repository."""

    @abstractmethod
    async def list_ref_objects(
        self, full_name: str, namespace: str
    ) -> tuple[list[RefObject], str | None]:
        """Ref objects under ``refs/<namespace>/`` and the HEAD SHA if known."""

    @abstractmethod
    async def resolve_commit(self, full_name: str, tag: str) -> str | None:
        """Commit SHA for a tag, branch or SHA; None if this source cannot tell."""

    @abstractmethod
    async def download_files(
        self, full_name: str, version: str, snapshot: PackageSnapshot
    ) -> None:
        """Fill ``snapshot.files`` with every package file at ``version``."""

    @abstractmethod
    async def package_config(self, full_name: str, tag: str) -> PackageManifest:
        """Fetch and parse only the manifest."""


class ProxySource(GitHubSource):
    """Caching proxy: bulk endpoints, annotated tags already resolved server-side."""

    def _url(self, full_name: str, *parts: str) -> str:
        return "/".join([f"{self.settings.proxy_root}gh/{full_name}", *parts])

    async def get_repo(
        self, identifier: RepoIdentifier, config: PolicyConfig | None
    ) -> GitRepo | None:
        try:
            meta = await self.transport.get_json(self._url(identifier.full_name))
        except NotFoundError:
            return None
        if not meta:
            return None

        return GitRepo(
            owner=identifier.owner,
            full_name=identifier.full_name,
            name=meta.get("name", identifier.repo),
            description=meta.get("description"),
            default_branch=(
                meta.get("defaultBranch") or meta.get("default_branch") or DEFAULT_TAG
            ),
            tag=identifier.tag,
            status=classify(identifier, config),
        )

    async def list_ref_objects(
        self, full_name: str, namespace: str
    ) -> tuple[list[RefObject], str | None]:
        data = await self.transport.get_json(self._url(full_name, "refs"))
        refs: dict[str, str] = data.get("refs") or {}
        prefix = f"refs/{namespace}/"
        objects = [
            RefObject(ref=name, sha=sha)
            for name, sha in refs.items()
            if name.startswith(prefix)
        ]
        return objects, refs.get("HEAD")

    async def resolve_commit(self, full_name: str, tag: str) -> str | None:
        # the proxy does not expose commit SHAs
        return None

    async def _text_map(self, full_name: str, tag: str) -> dict[str, str]:
        files = await self.transport.get_json(self._url(full_name, tag, "text"))
        if not isinstance(files, dict):
            raise TransportError(
                "BAD_RESPONSE", f"Proxy returned no file map for {full_name}#{tag}"
            )
        return files

    async def download_files(
        self, full_name: str, version: str, snapshot: PackageSnapshot
    ) -> None:
        snapshot.files = await self._text_map(full_name, version)

    async def package_config(self, full_name: str, tag: str) -> PackageManifest:
        files = await self._text_map(full_name, tag)
        if self.manifest_name not in files:
            raise NotFoundError(
                "HTTP_404", f"{self.manifest_name} missing in {full_name}#{tag}", 404
            )
        return PackageManifest.from_json(files[self.manifest_name])


class DirectSource(GitHubSource):
    """GitHub REST API plus the raw content host."""

    def _raw_url(self, full_name: str, version: str, path: str) -> str:
        return f"{self.settings.raw_content_url}/{full_name}/{version}/{path}"

    async def get_repo(
        self, identifier: RepoIdentifier, config: PolicyConfig | None
    ) -> GitRepo | None:
        url = self.transport.github_url(f"/repos/{identifier.full_name}")
        try:
            data = await self.transport.get_json(url)
        except NotFoundError:
            return None
        return make_repo(data, config, identifier.tag)

    async def list_ref_objects(
        self, full_name: str, namespace: str
    ) -> tuple[list[RefObject], str | None]:
        url = self.transport.github_url(f"/repos/{full_name}/git/refs/{namespace}/")
        data = await self.transport.get_json(url, params={"per_page": 100})
        if isinstance(data, dict):
            data = [data]
        return [RefObject.from_github(item) for item in data], None

    async def resolve_commit(self, full_name: str, tag: str) -> str | None:
        return await resolve_tag_or_sha(self.transport, full_name, tag)

    async def download_files(
        self, full_name: str, version: str, snapshot: PackageSnapshot
    ) -> None:
        manifest_text = await self.transport.get_text(
            self._raw_url(full_name, version, self.manifest_name)
        )
        snapshot.files[self.manifest_name] = manifest_text
        manifest = PackageManifest.from_json(manifest_text)

        semaphore = asyncio.Semaphore(self.settings.max_concurrent_downloads)

        async def fetch(path: str) -> str:
            async with semaphore:
                return await self.transport.get_text(self._raw_url(full_name, version, path))

        paths = manifest.all_files
        tasks = [asyncio.create_task(fetch(path)) for path in paths]
        try:
            contents = await asyncio.gather(*tasks)
        except BaseException:
            # one failure aborts the package; stop the remaining downloads
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise
        snapshot.files.update(zip(paths, contents))

    async def package_config(self, full_name: str, tag: str) -> PackageManifest:
        text = await self.transport.get_text(
            self._raw_url(full_name, tag, self.manifest_name)
        )
        return PackageManifest.from_json(text)


def make_repo(
    data: dict[str, Any], config: PolicyConfig | None, tag: str | None = None
) -> GitRepo | None:
    """Build a descriptor from a GitHub repository object."""
    if not data:
        return None
    repo = GitRepo(
        owner=data["owner"]["login"].lower(),
        full_name=data["full_name"].lower(),
        name=data["name"],
        description=data.get("description"),
        default_branch=data.get("default_branch") or DEFAULT_TAG,
        tag=tag,
        status=RepoStatus.UNKNOWN,
    )
    repo.status = classify(repo, config)
    return repo


def select_source(transport: AsyncHTTPTransport) -> GitHubSource:
    """Pick the proxy or direct strategy for this call."""
    if use_proxy(transport.settings):
        return ProxySource(transport)
    return DirectSource(transport)

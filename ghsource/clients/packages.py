"""Packages resource client: policy-checked, commit-keyed package downloads."""

from typing import TYPE_CHECKING

from ghsource.exceptions import GhSourceError, PackageFetchError
from ghsource.identifiers import parse_identifier
from ghsource.logging import get_logger, log_event
from ghsource.policy import PolicyConfig, classify
from ghsource.sources import select_source
from ghsource.types.identifiers import DEFAULT_TAG, RepoIdentifier
from ghsource.types.packages import PackageManifest, PackageSnapshot
from ghsource.types.repos import RepoStatus

if TYPE_CHECKING:
    from ghsource.transport import AsyncHTTPTransport

logger = get_logger("packages")


class PackagesClient:
    """Client for downloading package files."""

    def __init__(self, transport: "AsyncHTTPTransport") -> None:
        """
        Initialize the packages client.

        Args:
            transport: Async HTTP transport for making requests
        """
        self.transport = transport

    async def fetch(
        self,
        identifier: RepoIdentifier | str,
        config: PolicyConfig | None,
        previous: PackageSnapshot | None = None,
    ) -> PackageSnapshot | None:
        """
        Fetch the current files of a package.

        ``previous`` is never modified. When it already holds the resolved
        commit it is returned as is and no file is downloaded.

        Args:
            identifier: Parsed identifier or any accepted reference string
            config: Policy lists
            previous: Snapshot from an earlier fetch, if any

        Returns:
            A complete snapshot, ``previous`` on a cache hit, or None for
            unparsable or banned references (banned ones are never fetched)

        Raises:
            PackageFetchError: If a download fails; ``.snapshot`` has an empty sha
            GhSourceError: If the tag cannot be resolved
        """
        if isinstance(identifier, str):
            parsed = parse_identifier(identifier)
            if not parsed:
                logger.info("Unknown github syntax: %s", identifier)
                return None
            identifier = parsed

        if classify(identifier, config) == RepoStatus.BANNED:
            log_event("github.download.banned", repo=identifier.full_name)
            logger.info("Github repo is banned: %s", identifier.full_name)
            return None

        source = select_source(self.transport)
        tag = identifier.tag or DEFAULT_TAG

        commit = await source.resolve_commit(identifier.full_name, tag)
        if commit and previous is not None and previous.sha == commit:
            log_event("github.download.cached", repo=identifier.full_name, sha=commit)
            return previous

        version = commit or tag
        logger.info("Downloading %s -> %s", identifier, version)

        snapshot = PackageSnapshot()
        try:
            await source.download_files(identifier.full_name, version, snapshot)
        except GhSourceError as e:
            snapshot.sha = ""
            raise PackageFetchError(
                f"Download of {identifier} at {version} failed: {e.message}", snapshot
            ) from e

        snapshot.sha = version
        return snapshot

    async def package_config(self, full_name: str, tag: str = DEFAULT_TAG) -> PackageManifest:
        """Fetch and parse only the manifest of a package."""
        source = select_source(self.transport)
        return await source.package_config(full_name, tag)

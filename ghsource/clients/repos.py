"""Repositories resource client: lookup and discovery."""

import asyncio
from typing import TYPE_CHECKING

from ghsource.exceptions import GhSourceError
from ghsource.identifiers import parse_identifier, parse_repo_url
from ghsource.logging import get_logger, log_event
from ghsource.policy import PolicyConfig, classify
from ghsource.sources import make_repo, select_source
from ghsource.types.identifiers import RepoIdentifier
from ghsource.types.repos import GitRepo, RepoStatus

if TYPE_CHECKING:
    from ghsource.transport import AsyncHTTPTransport

logger = get_logger("repos")


class ReposClient:
    """Client for repository lookup and search."""

    def __init__(self, transport: "AsyncHTTPTransport") -> None:
        """
        Initialize the repos client.

        Args:
            transport: Async HTTP transport for making requests
        """
        self.transport = transport

    async def get(
        self, identifier: RepoIdentifier | str, config: PolicyConfig | None
    ) -> GitRepo | None:
        """
        Look up a repository.

        Args:
            identifier: Parsed identifier or any accepted reference string
            config: Policy lists

        Returns:
            GitRepo with its policy status, or None when the reference is
            banned (no request is made) or the repository does not exist
        """
        if isinstance(identifier, str):
            parsed = parse_identifier(identifier)
            if not parsed:
                return None
            identifier = parsed

        if classify(identifier, config) == RepoStatus.BANNED:
            return None

        source = select_source(self.transport)
        repo = await source.get_repo(identifier, config)
        # a rename or transfer can land in a banned org
        if repo is not None and repo.status == RepoStatus.BANNED:
            log_event("github.repo.banned", repo=repo.full_name)
            logger.info("Github repo is banned: %s", repo.full_name)
            return None
        return repo

    async def search(self, query: str, config: PolicyConfig | None) -> list[GitRepo]:
        """
        Find repositories.

        A query made only of ``|``-separated repository links looks each one
        up and keeps everything not banned. Any other query is a free-text
        GitHub search scoped to the target platform, keeping approved
        repositories (and unknown ones when the policy allows unapproved).

        Failures are logged and yield an empty list.
        """
        if config is None:
            return []

        links = [parse_repo_url(part) for part in query.split("|")]
        links = [link for link in links if link is not None]

        try:
            if links:
                return await self._lookup_links(links, config)
            return await self._search_text(query, config)
        except (GhSourceError, AttributeError, KeyError, TypeError) as e:
            logger.warning("Repository search for %r failed: %s", query, e)
            return []

    async def _lookup_links(
        self, links: list[RepoIdentifier], config: PolicyConfig
    ) -> list[GitRepo]:
        repos = await asyncio.gather(*(self.get(link, config) for link in links))
        # explicit links skip the approval filter; get already drops banned repos
        return [repo for repo in repos if repo is not None]

    async def _search_text(self, query: str, config: PolicyConfig) -> list[GitRepo]:
        platform = self.transport.settings.platform_id
        scoped = f'{query} in:name,description,readme "for PXT/{platform}"'
        data = await self.transport.get_json(
            self.transport.github_url("/search/repositories"), params={"q": scoped}
        )

        repos = [make_repo(item, config) for item in data.get("items", [])]
        return [
            repo
            for repo in repos
            if repo is not None
            and (
                repo.status == RepoStatus.APPROVED
                or (config.allow_unapproved and repo.status == RepoStatus.UNKNOWN)
            )
        ]

"""Refs resource client."""

from typing import TYPE_CHECKING

from ghsource.exceptions import NotFoundError
from ghsource.identifiers import parse_identifier
from ghsource.policy import PolicyConfig
from ghsource.refs import build_refs_snapshot, resolve_ref_object, resolve_tag_or_sha
from ghsource.sources import select_source
from ghsource.types.identifiers import RepoIdentifier
from ghsource.types.refs import RefObject, RefsSnapshot

if TYPE_CHECKING:
    from ghsource.clients.repos import ReposClient
    from ghsource.transport import AsyncHTTPTransport


class RefsClient:
    """Client for listing refs and resolving them to commits."""

    def __init__(self, transport: "AsyncHTTPTransport", repos: "ReposClient") -> None:
        """
        Initialize the refs client.

        Args:
            transport: Async HTTP transport for making requests
            repos: Repository lookup, used by latest_version
        """
        self.transport = transport
        self.repos = repos

    async def list_refs(self, full_name: str, namespace: str = "tags") -> RefsSnapshot:
        """
        List refs in one namespace.

        Args:
            full_name: ``owner/repo``
            namespace: ``tags`` or ``heads``

        Returns:
            RefsSnapshot in version order; empty if the repository has no
            such refs (404)
        """
        source = select_source(self.transport)
        try:
            objects, head = await source.list_ref_objects(full_name, namespace)
        except NotFoundError:
            return RefsSnapshot()
        return build_refs_snapshot(objects, head)

    async def list_ref_names(self, full_name: str, namespace: str = "tags") -> list[str]:
        """Stripped ref names in version order."""
        snapshot = await self.list_refs(full_name, namespace)
        return snapshot.names()

    async def resolve_ref_object(self, obj: RefObject) -> str:
        """Resolve a ref object to its commit SHA, dereferencing one annotated tag."""
        return await resolve_ref_object(self.transport, obj)

    async def resolve(self, full_name: str, tag_or_sha: str) -> str:
        """Resolve a tag, branch or SHA to a commit SHA."""
        return await resolve_tag_or_sha(self.transport, full_name, tag_or_sha)

    async def latest_version(
        self, identifier: RepoIdentifier | str, config: PolicyConfig | None
    ) -> str | None:
        """
        Latest version of a repository.

        Args:
            identifier: Parsed identifier or any accepted reference string
            config: Policy; banned repositories have no version

        Returns:
            The highest tag name, else the remote HEAD SHA, else the commit of
            the default branch. None if no repository resolves.
        """
        if isinstance(identifier, str):
            parsed = parse_identifier(identifier)
            if not parsed:
                return None
            identifier = parsed

        repo = await self.repos.get(identifier.with_tag(None), config)
        if repo is None:
            return None

        refs = await self.list_refs(repo.full_name, "tags")
        tags = refs.names()
        if tags:
            return tags[-1]
        if refs.head:
            return refs.head
        return await self.resolve(repo.full_name, repo.default_branch)

"""Gists resource client."""

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from ghsource.exceptions import AuthScopeError, GistNotFoundError, GistPublishError
from ghsource.logging import get_logger

if TYPE_CHECKING:
    from ghsource.transport import AsyncHTTPTransport

logger = get_logger("gists")


class GistsClient:
    """Client for publishing shareable gists."""

    def __init__(self, transport: "AsyncHTTPTransport") -> None:
        """
        Initialize the gists client.

        Args:
            transport: Async HTTP transport for making requests
        """
        self.transport = transport

    async def publish(
        self,
        token: str | None,
        force_new: bool,
        files: Mapping[str, Any],
        name: str,
        current_gist_id: str | None = None,
    ) -> str:
        """
        Create a gist, or update the current one.

        The existing gist is updated only when there is a gist id and a token
        and ``force_new`` is false. New gists are always private; visibility
        can only be changed afterwards on GitHub.

        Args:
            token: GitHub token with the ``gist`` scope
            force_new: Always create a new gist
            files: File name mapped to its content, or to a GitHub file object
            name: Gist description
            current_gist_id: Gist previously published for this project

        Returns:
            The gist id

        Raises:
            GistNotFoundError: If the gist to update does not exist
            AuthScopeError: If GitHub answers 404 to a create
            GistPublishError: For any other failure, with the raw response body
        """
        body = {
            "description": name,
            "public": False,
            "files": {
                filename: {"content": content} if isinstance(content, str) else content
                for filename, content in files.items()
            },
        }

        url = self.transport.github_url("/gists")
        if current_gist_id and token and not force_new:
            method = "PATCH"
            url += f"/{current_gist_id}"
        else:
            method = "POST"

        response = await self.transport.request(method, url, body=body, token=token)

        if response.status_code in (200, 201):
            try:
                gist_id = response.json().get("id")
            except (ValueError, AttributeError):
                gist_id = None
            if gist_id:
                logger.info("Published gist %s (%s)", gist_id, method)
                return str(gist_id)
        elif response.status_code == 404 and method == "PATCH":
            raise GistNotFoundError(current_gist_id)
        elif response.status_code == 404:
            raise AuthScopeError(response.text)
        raise GistPublishError(response.status_code, response.text)

"""Repository identifier models."""

from dataclasses import dataclass

DEFAULT_TAG = "master"


@dataclass(frozen=True)
class RepoIdentifier:
    """A parsed GitHub repository reference."""

    owner: str | None
    full_name: str  # lowercase "owner/repo"
    tag: str | None = None

    @property
    def repo(self) -> str:
        """Repository name without the owner."""
        return self.full_name.split("/", 1)[-1]

    def with_tag(self, tag: str | None) -> "RepoIdentifier":
        """Return a copy pointing at another tag."""
        return RepoIdentifier(owner=self.owner, full_name=self.full_name, tag=tag)

    def __str__(self) -> str:
        return f"github:{self.full_name}#{self.tag or DEFAULT_TAG}"


@dataclass(frozen=True)
class Unparsable:
    """Input that is not a repository reference."""

    raw: str

    def __bool__(self) -> bool:
        return False

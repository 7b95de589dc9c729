"""Repository descriptor models."""

from dataclasses import dataclass
from enum import Enum


class RepoStatus(Enum):
    """Policy classification of a repository."""

    UNKNOWN = "unknown"
    APPROVED = "approved"
    BANNED = "banned"


@dataclass
class GitRepo:
    """Repository information with its policy status."""

    owner: str | None
    full_name: str
    name: str
    description: str | None
    default_branch: str
    status: RepoStatus
    tag: str | None = None

"""Git ref data models."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType


@dataclass(frozen=True)
class RefObject:
    """
    One entry from a refs listing.

    Mirrors GitHub's ``{"ref": ..., "object": {"sha", "type", "url"}}`` shape.
    Proxy listings carry no type or url; the proxy resolves annotated tags
    itself, so those entries are always commits.
    """

    ref: str  # "refs/tags/v1.0.0"
    sha: str
    type: str = "commit"  # "commit", "tag", or anything GitHub sends
    url: str | None = None

    @classmethod
    def from_github(cls, data: dict) -> "RefObject":
        obj = data.get("object") or {}
        return cls(
            ref=data.get("ref", ""),
            sha=obj.get("sha", ""),
            type=obj.get("type", ""),
            url=obj.get("url"),
        )


@dataclass(frozen=True)
class RefsSnapshot:
    """Stripped ref names mapped to SHAs, in version order, plus the remote HEAD."""

    refs: Mapping[str, str] = field(default_factory=dict)
    head: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "refs", MappingProxyType(dict(self.refs)))

    def names(self) -> list[str]:
        return list(self.refs)

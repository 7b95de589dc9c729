"""
Organization and repository allow/deny policy.

Rules are evaluated in table order and the first match wins, so bans take
precedence over approvals and, within each direction, organizations are
checked before individual repositories.
"""

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from ghsource.types.identifiers import RepoIdentifier, Unparsable
from ghsource.types.repos import GitRepo, RepoStatus


def _normalized(values: Iterable[str] | None) -> tuple[str, ...]:
    return tuple(v.lower() for v in values or ())


@dataclass(frozen=True)
class PolicyConfig:
    """Allow and deny lists for GitHub packages."""

    banned_orgs: tuple[str, ...] = ()
    banned_repos: tuple[str, ...] = ()
    approved_orgs: tuple[str, ...] = ()
    approved_repos: tuple[str, ...] = ()
    allow_unapproved: bool = False

    def __post_init__(self) -> None:
        for name in ("banned_orgs", "banned_repos", "approved_orgs", "approved_repos"):
            object.__setattr__(self, name, _normalized(getattr(self, name)))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PolicyConfig":
        """Build from a packages config JSON object (camelCase keys)."""
        return cls(
            banned_orgs=data.get("bannedOrgs") or (),
            banned_repos=data.get("bannedRepos") or (),
            approved_orgs=data.get("approvedOrgs") or (),
            approved_repos=data.get("approvedRepos") or (),
            allow_unapproved=bool(data.get("allowUnapproved", False)),
        )


@dataclass(frozen=True)
class _Rule:
    status: RepoStatus
    subject: Callable[[RepoIdentifier | GitRepo], str | None]
    entries: Callable[[PolicyConfig], tuple[str, ...]]


def _owner(repo: RepoIdentifier | GitRepo) -> str | None:
    return repo.owner.lower() if repo.owner else None


def _full_name(repo: RepoIdentifier | GitRepo) -> str | None:
    return repo.full_name.lower() if repo.full_name else None


_RULES: tuple[_Rule, ...] = (
    _Rule(RepoStatus.BANNED, _owner, lambda c: c.banned_orgs),
    _Rule(RepoStatus.BANNED, _full_name, lambda c: c.banned_repos),
    _Rule(RepoStatus.APPROVED, _owner, lambda c: c.approved_orgs),
    _Rule(RepoStatus.APPROVED, _full_name, lambda c: c.approved_repos),
)


def classify(
    repo: RepoIdentifier | GitRepo | Unparsable | None,
    config: PolicyConfig | None,
) -> RepoStatus:
    """
    Classify a repository against a policy.

    Args:
        repo: Parsed identifier or repository descriptor
        config: Policy lists; None means policy cannot be evaluated

    Returns:
        UNKNOWN without a config, BANNED for malformed or ownerless input,
        otherwise the status of the first matching rule (UNKNOWN if none).
    """
    if config is None:
        return RepoStatus.UNKNOWN
    if not repo or not repo.owner or not repo.full_name:
        return RepoStatus.BANNED

    for rule in _RULES:
        subject = rule.subject(repo)
        if subject is not None and subject in rule.entries(config):
            return rule.status
    return RepoStatus.UNKNOWN


repo_status = classify


def repo_icon_url(repo: GitRepo, proxy_root: str | None) -> str | None:
    """Proxy icon URL, offered for approved repositories only."""
    if repo.status != RepoStatus.APPROVED or not proxy_root:
        return None
    return f"{proxy_root}gh/{repo.full_name}/icon"

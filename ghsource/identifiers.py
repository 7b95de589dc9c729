"""
Parsing and canonical formatting of GitHub repository references.

Accepted surface forms:

- ``owner/repo``
- ``owner/repo#tag``
- ``https://github.com/owner/repo`` (optionally ``#tag``)
- ``github:owner/repo#tag``

The canonical form is ``github:<owner/repo>#<tag or master>``. Owner and
repository names are case-insensitive on GitHub and are lowercased; tags are
kept verbatim.
"""

import re

from ghsource.types.identifiers import DEFAULT_TAG, RepoIdentifier, Unparsable

_GITHUB_ID_PREFIX = re.compile(r"^github:", re.IGNORECASE)
_GITHUB_URL_PREFIX = re.compile(r"^(?:https?://)?(?:www\.)?github\.com/", re.IGNORECASE)
_REPO_PATH = re.compile(r"^([^/#\s]+)/([^/#\s]+)/?(?:#(.*))?$")

# Explicit repository links inside search queries: no "github:" prefix and
# only word characters in the tag.
_REPO_LINK = re.compile(r"^(?:(?:https://)?github\.com/)?([^/\s]+/[^/#\s]+)(?:#(\w+))?$", re.IGNORECASE)


def parse_identifier(text: str | None) -> RepoIdentifier | Unparsable:
    """
    Parse a free-form repository reference.

    Args:
        text: User input in any accepted surface form

    Returns:
        RepoIdentifier, or Unparsable when the input names no ``owner/repo``.
        Unparsable is falsy, so ``if not parse_identifier(x)`` reads naturally.
    """
    if not text:
        return Unparsable(raw=text or "")

    stripped = _GITHUB_ID_PREFIX.sub("", text.strip(), count=1)
    stripped, is_url = _GITHUB_URL_PREFIX.subn("", stripped, count=1)

    m = _REPO_PATH.match(stripped)
    if not m:
        return Unparsable(raw=text)

    owner = m.group(1).lower()
    repo = m.group(2).lower()
    # clone URLs end in .git; plain ids keep the name as written
    if is_url and repo.endswith(".git") and len(repo) > 4:
        repo = repo[:-4]
    return RepoIdentifier(
        owner=owner,
        full_name=f"{owner}/{repo}",
        tag=m.group(3) or None,
    )


def canonicalize(identifier: RepoIdentifier) -> str:
    """Format an identifier as ``github:<full_name>#<tag or master>``."""
    return f"github:{identifier.full_name.lower()}#{identifier.tag or DEFAULT_TAG}"


def normalize_repo_id(text: str | None) -> str | None:
    """Canonical form of any accepted reference, or None if it is not one."""
    parsed = parse_identifier(text)
    if not parsed:
        return None
    return canonicalize(parsed)


def is_github_id(text: str) -> bool:
    """True for references written with the ``github:`` scheme."""
    return text[:7] == "github:"


def parse_repo_url(text: str | None) -> RepoIdentifier | None:
    """
    Recognize an explicit repository link.

    Stricter than parse_identifier: used to tell deep links apart from
    free-text search terms.
    """
    if not text:
        return None

    m = _REPO_LINK.match(text.strip())
    if not m:
        return None

    full_name = m.group(1).lower()
    return RepoIdentifier(
        owner=full_name.split("/", 1)[0],
        full_name=full_name,
        tag=m.group(2) or None,
    )

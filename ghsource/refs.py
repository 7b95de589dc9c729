"""
Git ref resolution.

Turns ref listings into ordered snapshots and resolves tags, branches and
literal SHAs to commit SHAs through the GitHub git data API. Annotated tags
are dereferenced by exactly one extra request; a tag object that points at
anything but a commit is rejected.
"""

import re
from collections.abc import Iterable
from enum import Enum
from typing import TYPE_CHECKING, Any

from ghsource.exceptions import BadRefTypeError, NotFoundError, TransportError
from ghsource.logging import get_logger
from ghsource.types.refs import RefObject, RefsSnapshot

if TYPE_CHECKING:
    from ghsource.transport import AsyncHTTPTransport

logger = get_logger("refs")

_SHA = re.compile(r"^[a-f0-9]{40}$")
_REF_NAMESPACE = re.compile(r"^refs/[^/]+/")
_VERSION = re.compile(r"^v?(\d+(?:\.\d+)*)(?:-([0-9A-Za-z.-]+))?(?:\+[0-9A-Za-z.-]+)?$")
_DIGITS = re.compile(r"(\d+)")


def is_sha(text: str) -> bool:
    """True for a full 40 character lowercase hex SHA."""
    return bool(_SHA.match(text))


def strip_namespace(ref: str) -> str:
    """``refs/tags/v1.0.0`` -> ``v1.0.0``."""
    return _REF_NAMESPACE.sub("", ref, count=1)


def _natural_key(text: str) -> tuple[tuple[int, int, str], ...]:
    return tuple(
        (0, int(part), "") if part.isdigit() else (1, 0, part)
        for part in _DIGITS.split(text)
        if part
    )


def version_key(name: str) -> tuple[Any, ...]:
    """
    Sort key for ref names.

    Dotted versions of any length (``v2.0``, ``1.5.0``, with or without a
    leading ``v``) order segment by segment as numbers, so ``v2.0`` sorts
    after ``v1.5.0``. A prerelease sorts before its release. Other names
    order naturally, digit runs compared as numbers, and sort before any
    version.
    """
    m = _VERSION.match(name)
    if not m:
        return (0, (), 0, _natural_key(name), name)
    numbers = tuple(int(part) for part in m.group(1).split("."))
    pre = m.group(2)
    if pre is None:
        return (1, numbers, 1, (), name)
    return (1, numbers, 0, _natural_key(pre), name)


def build_refs_snapshot(
    objects: Iterable[RefObject], head: str | None = None
) -> RefsSnapshot:
    """Order ref objects by version and key them by stripped name."""
    ordered = sorted(objects, key=lambda obj: version_key(strip_namespace(obj.ref)))
    return RefsSnapshot(
        refs={strip_namespace(obj.ref): obj.sha for obj in ordered},
        head=head,
    )


class ResolveState(Enum):
    """Steps of a ref-to-commit resolution."""

    FETCHED_REF_OBJECT = "fetched_ref_object"
    FETCHED_TAG_OBJECT = "fetched_tag_object"
    RESOLVED = "resolved"
    FAILED = "failed"


async def resolve_ref_object(transport: "AsyncHTTPTransport", obj: RefObject) -> str:
    """
    Resolve a fetched ref object to a commit SHA.

    Args:
        transport: Transport used to fetch an annotated tag object
        obj: Ref object as returned by the refs API

    Returns:
        The commit SHA

    Raises:
        BadRefTypeError: If the ref (or the tag it names) is not a commit
    """
    state = ResolveState.FETCHED_REF_OBJECT
    current = obj

    while state is not ResolveState.RESOLVED:
        if current.type == "commit":
            state = ResolveState.RESOLVED
        elif state is ResolveState.FETCHED_REF_OBJECT and current.type == "tag" and current.url:
            data = await transport.get_json(current.url)
            current = RefObject.from_github(data)
            state = ResolveState.FETCHED_TAG_OBJECT
        else:
            second_order = state is ResolveState.FETCHED_TAG_OBJECT
            state = ResolveState.FAILED
            raise BadRefTypeError(current.type, second_order=second_order)

    return current.sha


async def fetch_ref(
    transport: "AsyncHTTPTransport", full_name: str, namespace: str, name: str
) -> RefObject:
    """
    Fetch a single ref object.

    GitHub answers a prefix match with a list; only an exact match counts.

    Raises:
        NotFoundError: If no ref has exactly this name
    """
    url = transport.github_url(f"/repos/{full_name}/git/refs/{namespace}/{name}")
    data = await transport.get_json(url)
    wanted = f"refs/{namespace}/{name}"

    candidates = data if isinstance(data, list) else [data]
    for candidate in candidates:
        if isinstance(candidate, dict) and candidate.get("ref") == wanted:
            return RefObject.from_github(candidate)
    raise NotFoundError("HTTP_404", f"No ref {wanted} in {full_name}", 404)


async def resolve_tag_or_sha(
    transport: "AsyncHTTPTransport", full_name: str, tag_or_sha: str
) -> str:
    """
    Resolve a tag, branch or literal SHA to a commit SHA.

    A full SHA is returned as is. Otherwise the name is looked up as a tag
    and then as a branch; if both lookups fail, the branch error propagates.
    """
    if is_sha(tag_or_sha):
        return tag_or_sha

    try:
        obj = await fetch_ref(transport, full_name, "tags", tag_or_sha)
    except TransportError as e:
        logger.debug("No tag %s in %s (%s), trying branch", tag_or_sha, full_name, e)
        obj = await fetch_ref(transport, full_name, "heads", tag_or_sha)

    return await resolve_ref_object(transport, obj)

"""
Property-based tests for repository identifier parsing.

Feature: ghsource
"""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from ghsource.identifiers import (
    canonicalize,
    is_github_id,
    normalize_repo_id,
    parse_identifier,
    parse_repo_url,
)
from ghsource.types.identifiers import RepoIdentifier, Unparsable

# Strategies for generating valid references
name_strategy = st.text(
    alphabet=st.characters(whitelist_categories=("Lu", "Ll", "Nd"), whitelist_characters="-_."),
    min_size=1,
    max_size=30,
)
tag_strategy = st.text(
    alphabet=st.characters(whitelist_categories=("Lu", "Ll", "Nd"), whitelist_characters="-_./"),
    min_size=1,
    max_size=20,
)


@given(owner=name_strategy, repo=name_strategy, tag=st.one_of(st.none(), tag_strategy))
@settings(max_examples=200)
def test_canonicalize_round_trip_is_idempotent(owner: str, repo: str, tag: str | None) -> None:
    """
    Property 1: Canonical round-trip

    For any ``owner/repo[#tag]`` string s, canonicalizing the parse of the
    canonical form of s yields the canonical form of s again.
    """
    text = f"{owner}/{repo}" + (f"#{tag}" if tag is not None else "")

    parsed = parse_identifier(text)
    assert parsed, f"{text!r} should parse"

    canonical = canonicalize(parsed)
    reparsed = parse_identifier(canonical)
    assert reparsed
    assert canonicalize(reparsed) == canonical


@given(owner=name_strategy, repo=name_strategy, tag=tag_strategy)
@settings(max_examples=100)
def test_owner_lowercased_tag_verbatim(owner: str, repo: str, tag: str) -> None:
    """
    Property 2: Case handling

    Owner and full name are always lowercase; the tag keeps its case.
    """
    parsed = parse_identifier(f"{owner}/{repo}#{tag}")

    assert parsed.owner == owner.lower()
    assert parsed.full_name == f"{owner}/{repo}".lower()
    assert parsed.tag == tag


class TestSurfaceForms:
    """Each accepted way of writing a reference."""

    @pytest.mark.parametrize(
        "text",
        [
            "Microsoft/pxt-neopixel#v0.7.2",
            "github:Microsoft/pxt-neopixel#v0.7.2",
            "GITHUB:microsoft/pxt-neopixel#v0.7.2",
            "https://github.com/Microsoft/pxt-neopixel#v0.7.2",
            "github.com/microsoft/pxt-neopixel#v0.7.2",
            "  microsoft/pxt-neopixel#v0.7.2  ",
        ],
    )
    def test_forms_with_tag(self, text: str) -> None:
        assert parse_identifier(text) == RepoIdentifier(
            owner="microsoft", full_name="microsoft/pxt-neopixel", tag="v0.7.2"
        )

    def test_plain_owner_repo_has_no_tag(self) -> None:
        parsed = parse_identifier("octocat/Hello-World")
        assert parsed == RepoIdentifier(owner="octocat", full_name="octocat/hello-world", tag=None)

    def test_url_without_tag(self) -> None:
        parsed = parse_identifier("https://github.com/octocat/hello-world")
        assert parsed.full_name == "octocat/hello-world"
        assert parsed.tag is None

    def test_clone_url_drops_git_suffix(self) -> None:
        parsed = parse_identifier("https://github.com/octocat/hello-world.git")
        assert parsed.full_name == "octocat/hello-world"

    def test_tag_case_preserved(self) -> None:
        assert parse_identifier("a/b#Release-1.0").tag == "Release-1.0"

    def test_empty_tag_is_none(self) -> None:
        assert parse_identifier("a/b#").tag is None


class TestUnparsable:
    """Input that does not name a repository."""

    @pytest.mark.parametrize(
        "text",
        ["", "   ", "justaword", "microbit led", "https://gitlab.com/a/b/c", "a/b/c/d"],
    )
    def test_returns_falsy_unparsable(self, text: str) -> None:
        parsed = parse_identifier(text)
        assert isinstance(parsed, Unparsable)
        assert not parsed

    def test_none_is_unparsable(self) -> None:
        assert isinstance(parse_identifier(None), Unparsable)

    def test_normalize_returns_none(self) -> None:
        assert normalize_repo_id("not a repo") is None


class TestCanonicalForm:
    def test_defaults_tag_to_master(self) -> None:
        assert canonicalize(parse_identifier("Octocat/Hello-World")) == "github:octocat/hello-world#master"

    def test_keeps_tag(self) -> None:
        assert normalize_repo_id("github:a/b#v1") == "github:a/b#v1"

    def test_str_matches_canonical(self) -> None:
        parsed = parse_identifier("a/b#v2")
        assert str(parsed) == canonicalize(parsed)

    def test_is_github_id(self) -> None:
        assert is_github_id("github:a/b#v1")
        assert not is_github_id("a/b#v1")


class TestRepoUrl:
    """Explicit links used by search."""

    def test_link_forms(self) -> None:
        assert parse_repo_url("https://github.com/Octocat/Hello-World").full_name == "octocat/hello-world"
        assert parse_repo_url("octocat/hello-world#v1").tag == "v1"

    def test_free_text_is_not_a_link(self) -> None:
        assert parse_repo_url("neopixel strip") is None
        assert parse_repo_url("") is None

    def test_non_word_tag_is_not_a_link(self) -> None:
        assert parse_repo_url("a/b#v1.0") is None

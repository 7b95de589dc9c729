#!/usr/bin/env python3
"""
Basic ghsource usage example.

Runs offline against MockGitHub, so every step shows real resolver behavior
without network access.
Run with: python examples/basic_usage.py
"""

import asyncio

from ghsource import (
    GhSourceError,
    PackageSourceClient,
    PolicyConfig,
    SourceSettings,
    canonicalize,
    parse_identifier,
)
from ghsource.testing import MockGitHub, create_manifest, fake_sha

REPO = "microsoft/pxt-neopixel"


async def main() -> None:
    print("=== ghsource Basic Usage Example ===\n")

    # 1. Identifiers
    print("1. Parsing references...")
    for text in ["Microsoft/pxt-neopixel#v0.7.2", "https://github.com/microsoft/pxt-neopixel", "not a repo"]:
        parsed = parse_identifier(text)
        print(f"   {text!r} -> {canonicalize(parsed) if parsed else 'unparsable'}")
    print("\n   OK: Identifiers working\n")

    # 2. A mock GitHub with one tagged package
    github = MockGitHub()
    commit = fake_sha("v0.7.2")
    github.add_repo(REPO)
    github.add_ref(REPO, "tags", "v0.7.2", fake_sha("tag"), ref_type="tag")
    github.add_tag_object(REPO, fake_sha("tag"), commit)
    github.add_package(
        REPO,
        commit,
        {"pxt.json": create_manifest("neopixel", ["main.ts"]), "main.ts": "// strip"},
    )

    policy = PolicyConfig(approved_orgs=("microsoft",), banned_orgs=("evilcorp",))

    async with PackageSourceClient(SourceSettings(), http_transport=github.transport) as client:
        # 3. Fetch, then fetch again with the previous snapshot
        print("2. Fetching a package...")
        snapshot = await client.packages.fetch(f"{REPO}#v0.7.2", policy)
        print(f"   sha={snapshot.sha[:12]} files={sorted(snapshot.files)}")

        again = await client.packages.fetch(f"{REPO}#v0.7.2", policy, snapshot)
        assert again is snapshot, "Unchanged commit should reuse the snapshot"
        print("   Second fetch reused the cached snapshot")
        print("\n   OK: Package fetch working\n")

        # 4. Policy
        print("3. Checking policy...")
        banned = await client.packages.fetch("evilcorp/pxt-thing", policy)
        print(f"   Banned fetch result: {banned}")
        print("\n   OK: Policy working\n")

        # 5. Errors
        print("4. Handling errors...")
        try:
            await client.refs.resolve(REPO, "v9.9.9")
        except GhSourceError as e:
            print(f"   Caught {type(e).__name__}: code={e.code}")
        print("\n   OK: Errors working\n")


if __name__ == "__main__":
    asyncio.run(main())

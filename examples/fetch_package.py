#!/usr/bin/env python3
"""
ghsource - fetch a package from GitHub

This example talks to the real GitHub API:
1. Look up the repository and its policy status
2. Find the latest version
3. Download the package files at that version

Set GITHUB_TOKEN for a higher rate limit, or GHSOURCE_PROXY_ROOT to go
through a caching proxy.
"""

import asyncio
import logging
import sys

from ghsource import GhSourceError, PackageSourceClient, PolicyConfig, configure_logging


async def run(reference: str) -> int:
    policy = PolicyConfig(approved_orgs=("microsoft",))

    async with PackageSourceClient.from_env() as client:
        print(f"Using {'proxy' if client.uses_proxy else 'GitHub API'}\n")

        # Step 1: Repository
        print(f"1. Looking up {reference}...")
        repo = await client.repos.get(reference, policy)
        if repo is None:
            print("   Not found or banned")
            return 1
        print(f"   {repo.full_name}: {repo.status.value}, default branch {repo.default_branch}")

        # Step 2: Latest version
        print("\n2. Finding the latest version...")
        latest = await client.refs.latest_version(repo.full_name, policy)
        print(f"   Latest: {latest}")

        # Step 3: Files
        print("\n3. Downloading...")
        try:
            snapshot = await client.packages.fetch(f"{repo.full_name}#{latest}", policy)
        except GhSourceError as e:
            print(f"   Failed: {e}")
            return 1
        for path, content in sorted(snapshot.files.items()):
            print(f"   {path} ({len(content)} chars)")

    return 0


def main() -> None:
    configure_logging(level=logging.INFO)
    reference = sys.argv[1] if len(sys.argv) > 1 else "microsoft/pxt-neopixel"
    sys.exit(asyncio.run(run(reference)))


if __name__ == "__main__":
    main()

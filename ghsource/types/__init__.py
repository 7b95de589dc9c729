"""ghsource type definitions.

This module exports all data model types used by the resolver.
"""

from ghsource.types.identifiers import DEFAULT_TAG, RepoIdentifier, Unparsable
from ghsource.types.packages import PackageManifest, PackageSnapshot
from ghsource.types.refs import RefObject, RefsSnapshot
from ghsource.types.repos import GitRepo, RepoStatus

__all__ = [
    # Identifier types
    "DEFAULT_TAG",
    "RepoIdentifier",
    "Unparsable",
    # Ref types
    "RefObject",
    "RefsSnapshot",
    # Package types
    "PackageManifest",
    "PackageSnapshot",
    # Repository types
    "GitRepo",
    "RepoStatus",
]

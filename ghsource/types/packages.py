"""Package snapshot and manifest models."""

import json
from dataclasses import dataclass, field

from ghsource.exceptions import ManifestError


@dataclass
class PackageSnapshot:
    """
    Files of a package as of one resolved commit.

    ``sha`` is empty while the snapshot is being filled or after a failed
    download. A non-empty ``sha`` means ``files`` is the complete set for
    that commit.
    """

    sha: str = ""
    files: dict[str, str] = field(default_factory=dict)

    @property
    def is_complete(self) -> bool:
        return bool(self.sha)


@dataclass(frozen=True)
class PackageManifest:
    """The parts of a package manifest (``pxt.json``) the fetcher needs."""

    name: str
    files: tuple[str, ...]
    test_files: tuple[str, ...] = ()
    dependencies: dict[str, str] = field(default_factory=dict)

    @property
    def all_files(self) -> list[str]:
        """Source files followed by test files, without duplicates."""
        return list(dict.fromkeys(self.files + self.test_files))

    @classmethod
    def from_json(cls, text: str) -> "PackageManifest":
        """
        Parse a manifest.

        Raises:
            ManifestError: If the text is not a JSON object with a ``files`` list
        """
        try:
            data = json.loads(text)
        except ValueError as e:
            raise ManifestError(f"Manifest is not valid JSON: {e}") from e

        if not isinstance(data, dict):
            raise ManifestError("Manifest must be a JSON object")

        files = data.get("files")
        if not isinstance(files, list) or not all(isinstance(f, str) for f in files):
            raise ManifestError("Manifest must declare a 'files' list of paths")

        test_files = data.get("testFiles") or []
        if not isinstance(test_files, list) or not all(isinstance(f, str) for f in test_files):
            raise ManifestError("Manifest 'testFiles' must be a list of paths")

        return cls(
            name=str(data.get("name", "")),
            files=tuple(files),
            test_files=tuple(test_files),
            dependencies=dict(data.get("dependencies") or {}),
        )

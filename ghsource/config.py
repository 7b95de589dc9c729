"""
Settings for the GitHub package source.

Holds the endpoints and knobs that select between the caching proxy and the
direct GitHub API, and which manifest file drives package downloads.
"""

import os
from dataclasses import dataclass

from ghsource.exceptions import ConfigurationError

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class SourceSettings:
    """Endpoints and behavior switches for GitHub access."""

    proxy_root: str | None = None  # e.g. "https://makecode.com/api/"
    no_github_proxy: bool = False
    github_api_url: str = "https://api.github.com"
    raw_content_url: str = "https://raw.githubusercontent.com"
    platform_id: str = ""
    config_file_name: str = "pxt.json"
    token: str | None = None
    timeout: float = 30.0
    max_concurrent_downloads: int = 8

    def __post_init__(self) -> None:
        if self.proxy_root is not None and not self.proxy_root.endswith("/"):
            object.__setattr__(self, "proxy_root", self.proxy_root + "/")
        object.__setattr__(self, "github_api_url", self.github_api_url.rstrip("/"))
        object.__setattr__(self, "raw_content_url", self.raw_content_url.rstrip("/"))

        if self.timeout <= 0:
            raise ConfigurationError(f"timeout must be positive, got {self.timeout}")
        if self.max_concurrent_downloads < 1:
            raise ConfigurationError(
                "max_concurrent_downloads must be at least 1, "
                f"got {self.max_concurrent_downloads}"
            )
        if not self.config_file_name:
            raise ConfigurationError("config_file_name must not be empty")

    @classmethod
    def from_env(cls) -> "SourceSettings":
        """
        Create settings from environment variables.

        Environment variables:
            GHSOURCE_PROXY_ROOT: Proxy API root; unset means direct GitHub access
            GHSOURCE_NO_PROXY: "1"/"true" to bypass the proxy even when a root is set
            GHSOURCE_PLATFORM_ID: Target platform used to scope free-text search
            GHSOURCE_CONFIG_FILE: Manifest file name (default: pxt.json)
            GHSOURCE_TIMEOUT: Request timeout in seconds (default: 30)
            GITHUB_TOKEN: Token sent with GitHub API requests (optional)

        Raises:
            ConfigurationError: If a variable holds an invalid value
        """
        no_proxy_raw = os.environ.get("GHSOURCE_NO_PROXY", "").strip().lower()
        if no_proxy_raw in _TRUTHY:
            no_proxy = True
        elif no_proxy_raw in _FALSY:
            no_proxy = False
        else:
            raise ConfigurationError(
                f"Invalid GHSOURCE_NO_PROXY: {no_proxy_raw}. Must be a boolean"
            )

        timeout_raw = os.environ.get("GHSOURCE_TIMEOUT")
        timeout = cls.timeout
        if timeout_raw:
            try:
                timeout = float(timeout_raw)
            except ValueError:
                raise ConfigurationError(
                    f"Invalid GHSOURCE_TIMEOUT: {timeout_raw}. Must be a number"
                ) from None

        return cls(
            proxy_root=os.environ.get("GHSOURCE_PROXY_ROOT") or None,
            no_github_proxy=no_proxy,
            platform_id=os.environ.get("GHSOURCE_PLATFORM_ID", ""),
            config_file_name=os.environ.get("GHSOURCE_CONFIG_FILE") or cls.config_file_name,
            token=os.environ.get("GITHUB_TOKEN") or None,
            timeout=timeout,
        )


def use_proxy(settings: SourceSettings) -> bool:
    """Return True when requests should go through the caching proxy."""
    if not settings.proxy_root:
        return False  # no hosted proxy, e.g. command line use
    if settings.no_github_proxy:
        return False  # target requests no proxy
    return True

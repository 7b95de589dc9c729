"""ghsource resource clients."""

from ghsource.clients.gists import GistsClient
from ghsource.clients.packages import PackagesClient
from ghsource.clients.refs import RefsClient
from ghsource.clients.repos import ReposClient

__all__ = [
    "GistsClient",
    "PackagesClient",
    "RefsClient",
    "ReposClient",
]

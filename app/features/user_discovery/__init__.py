"""
User discovery feature package.

Everything behind the "people you may know" and "all people" views lives
here: domain models, the read ports and their HTTP adapters, the
aggregation engine and the API router.
"""

# Re-export the primary building blocks for easy access.
from .api.router import router as discovery_router  # noqa: F401
from .clients import FollowGraphClient, UserDirectoryClient  # noqa: F401
from .domain.models import AllUserDataResult, DiscoveryResult, UserRecord  # noqa: F401
from .ports import PortUnavailableError  # noqa: F401
from .services.aggregation_engine import AggregationEngine  # noqa: F401

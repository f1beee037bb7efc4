"""
Domain subpackage for the user discovery feature.
"""

from .models import (
    AllUserDataResult,
    DiscoveryResult,
    FetchResult,
    FollowedUser,
    FollowingSet,
    UserRecord,
)
from .normalization import DEFAULT_PROFILE_PICTURE, normalize_user_record

__all__ = [
    "AllUserDataResult",
    "DEFAULT_PROFILE_PICTURE",
    "DiscoveryResult",
    "FetchResult",
    "FollowedUser",
    "FollowingSet",
    "UserRecord",
    "normalize_user_record",
]

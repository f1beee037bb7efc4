"""
Identity normalization for directory records.

The user service has exposed the identity under both ``id`` and the legacy
``userID`` key. Records are normalized once, when they enter the service,
so the rest of the code only ever reads ``UserRecord.id``.
"""

from collections.abc import Mapping
from typing import Any

from app.config import settings
from app.features.user_discovery.domain.models import UserRecord

DEFAULT_PROFILE_PICTURE = settings.DEFAULT_PROFILE_PICTURE


def resolve_identity(raw: Mapping[str, Any]) -> str:
    """Return ``userID`` when present, else ``id``, else an empty string."""
    for key in ("userID", "user_id", "id"):
        value = raw.get(key)
        if value is not None:
            return str(value)
    return ""


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes")
    return bool(value)


def _as_count(value: Any) -> int | None:
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return None


def normalize_user_record(raw: Mapping[str, Any] | UserRecord) -> UserRecord:
    """
    Build a canonical UserRecord from a raw directory entry.

    Both identity fields end up equal, the profile picture is never empty and
    any upstream ``isFollowing`` value is discarded. Never raises; an empty
    mapping yields a record with an empty id.
    """
    if isinstance(raw, UserRecord):
        raw = raw.model_dump(by_alias=True)

    identity = resolve_identity(raw)
    picture = raw.get("profilePicture") or raw.get("profile_picture")
    if not isinstance(picture, str) or not picture:
        picture = DEFAULT_PROFILE_PICTURE
    private = raw.get("isProfilePrivate", raw.get("is_profile_private", False))
    username = raw.get("username")

    return UserRecord(
        id=identity,
        user_id=identity,
        username=str(username) if username is not None else None,
        profile_picture=picture,
        is_profile_private=_as_bool(private),
        is_following=False,
        num_followers=_as_count(raw.get("numFollowers", raw.get("num_followers"))),
        num_following=_as_count(raw.get("numFollowing", raw.get("num_following"))),
    )

"""
Domain models for the user discovery feature.

Wire-facing records are pydantic models so the same objects can be parsed
from upstream payloads and returned from the API with camelCase field
names. Internal plumbing (FetchResult) is a plain dataclass.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")

FollowingSet = frozenset[str]


class UserRecord(BaseModel):
    """A directory profile after identity normalization."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    user_id: str = Field(alias="userID")
    username: str | None = None
    profile_picture: str | None = Field(default=None, alias="profilePicture")
    is_profile_private: bool = Field(default=False, alias="isProfilePrivate")
    is_following: bool = Field(default=False, alias="isFollowing")
    num_followers: int | None = Field(default=None, alias="numFollowers")
    num_following: int | None = Field(default=None, alias="numFollowing")


class FollowedUser(BaseModel):
    """One entry of the follow graph response; only ``id`` is consumed."""

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    id: str | None = None
    username: str | None = None
    profile_picture: str | None = Field(default=None, alias="profilePicture")
    points: int | None = None


class DiscoveryResult(BaseModel):
    """Response for the discover and suggestions operations."""

    model_config = ConfigDict(populate_by_name=True)

    users: list[UserRecord] = Field(default_factory=list)
    total_count: int = Field(default=0, alias="totalCount")
    following_count: int = Field(default=0, alias="followingCount")
    limit: int
    offset: int

    @classmethod
    def empty(cls, limit: int, offset: int) -> DiscoveryResult:
        return cls(users=[], total_count=0, following_count=0, limit=limit, offset=offset)


class AllUserDataResult(BaseModel):
    """Response for the all-users operation. Offset pagination is not supported."""

    model_config = ConfigDict(populate_by_name=True)

    friends: list[UserRecord] = Field(default_factory=list)
    other_users: list[UserRecord] = Field(default_factory=list, alias="otherUsers")
    total_friends_count: int = Field(default=0, alias="totalFriendsCount")
    total_other_users_count: int = Field(default=0, alias="totalOtherUsersCount")
    limit: int
    offset: int = 0

    @classmethod
    def empty(cls, limit: int) -> AllUserDataResult:
        return cls(
            friends=[],
            other_users=[],
            total_friends_count=0,
            total_other_users_count=0,
            limit=limit,
            offset=0,
        )


@dataclass(slots=True)
class FetchResult(Generic[T]):
    """Outcome of a port call: either a value or the reason it is missing."""

    ok: bool
    value: T | None = None
    error: str | None = None

    @classmethod
    def success(cls, value: T) -> FetchResult[T]:
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: str) -> FetchResult[T]:
        return cls(ok=False, error=error)

"""
Read ports consumed by the aggregation engine.

Adapters must raise PortUnavailableError for every failure (timeouts,
connection errors, bad status codes, malformed payloads) and nothing else.
"""

from typing import Protocol

from app.features.user_discovery.domain.models import FollowedUser, UserRecord


class PortUnavailableError(Exception):
    """An upstream data source could not produce a usable response."""

    def __init__(self, message: str, service: str, status_code: int | None = None):
        super().__init__(message)
        self.service = service
        self.status_code = status_code


class UserDirectoryPort(Protocol):
    async def list_users(self, page_size: int) -> list[UserRecord]:
        """Return up to ``page_size`` normalized directory records."""
        ...


class FollowGraphPort(Protocol):
    async def get_following(self, user_id: str) -> list[FollowedUser]:
        """Return the accounts ``user_id`` follows."""
        ...

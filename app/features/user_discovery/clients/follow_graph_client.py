"""
Follow service adapter implementing FollowGraphPort.
"""

from pydantic import ValidationError

from app.config import settings
from app.features.user_discovery.clients.base import ServiceClient
from app.features.user_discovery.domain.models import FollowedUser
from app.features.user_discovery.ports import PortUnavailableError

FOLLOWING_PATH = "/api/follow/following/{user_id}"


class FollowGraphClient(ServiceClient):
    """Reads the outbound follow edges of a user from the follow service."""

    service_name = "follow-service"

    def __init__(self, base_url: str | None = None, **kwargs):
        super().__init__(base_url or settings.FOLLOW_SERVICE_URL, **kwargs)

    async def get_following(self, user_id: str) -> list[FollowedUser]:
        """
        Fetch everyone ``user_id`` follows.

        The flat ``{"following": ["id", ...], "count": n}`` body is the
        canonical shape; the nested ``{"following": [{"id": ...}], "pagination"}``
        body is still accepted.

        Raises:
            PortUnavailableError: if the call fails or the body is malformed
        """
        data = await self._get_json(
            FOLLOWING_PATH.format(user_id=user_id), "get_following"
        )

        if isinstance(data, list):
            entries = data
        elif isinstance(data, dict):
            entries = data.get("following") or []
        else:
            entries = None
        if not isinstance(entries, list):
            raise PortUnavailableError(
                "follow-service get_following returned a non-list following field",
                service=self.service_name,
            )

        following: list[FollowedUser] = []
        try:
            for entry in entries:
                if isinstance(entry, dict):
                    following.append(FollowedUser.model_validate(entry))
                elif entry is not None:
                    following.append(FollowedUser(id=str(entry)))
        except ValidationError as e:
            raise PortUnavailableError(
                "follow-service get_following returned malformed entries",
                service=self.service_name,
            ) from e

        return following

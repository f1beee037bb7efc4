"""
User service adapter implementing UserDirectoryPort.
"""

from pydantic import ValidationError

from app.config import settings
from app.features.user_discovery.clients.base import ServiceClient
from app.features.user_discovery.domain.models import UserRecord
from app.features.user_discovery.domain.normalization import normalize_user_record
from app.features.user_discovery.ports import PortUnavailableError
from app.infrastructure.observability.logging import get_logger

logger = get_logger(__name__)

LIST_USERS_PATH = "/api/users/all"


class UserDirectoryClient(ServiceClient):
    """Reads a bounded page of profiles from the user service."""

    service_name = "user-service"

    def __init__(self, base_url: str | None = None, **kwargs):
        super().__init__(base_url or settings.USER_SERVICE_URL, **kwargs)

    async def list_users(self, page_size: int) -> list[UserRecord]:
        """
        Fetch up to ``page_size`` users and normalize them.

        Accepts the paginated ``{"users": [...], "pagination": {...}}`` body
        and the older bare-list body. Pagination metadata is ignored.

        Raises:
            PortUnavailableError: if the call fails or the body has neither shape
        """
        data = await self._get_json(LIST_USERS_PATH, "list_users", params={"limit": page_size})

        if isinstance(data, dict):
            entries = data.get("users") or []
        elif isinstance(data, list):
            entries = data
        else:
            raise PortUnavailableError(
                "user-service list_users returned an unexpected payload",
                service=self.service_name,
            )

        if not isinstance(entries, list):
            raise PortUnavailableError(
                "user-service list_users returned a non-list users field",
                service=self.service_name,
            )

        try:
            normalized = [
                normalize_user_record(entry) for entry in entries if isinstance(entry, dict)
            ]
        except ValidationError as e:
            raise PortUnavailableError(
                "user-service list_users returned malformed entries",
                service=self.service_name,
            ) from e

        # Records without any identity cannot be filtered or followed.
        users = [user for user in normalized if user.id]
        skipped = len(entries) - len(users)
        if skipped:
            logger.warning("Skipped malformed directory entries", skipped=skipped)

        return users

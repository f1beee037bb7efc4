"""
Aggregation engine for user discovery.

Reconciles a directory snapshot from the user service with the subject's
follow set from the follow service into the "suggested users" and "all
users" views. Port failures never escape: the directory failing yields an
empty result, the follow graph failing yields an empty follow set.
"""

from __future__ import annotations

import asyncio
import random

from app.config import settings
from app.features.user_discovery.domain.models import (
    AllUserDataResult,
    DiscoveryResult,
    FetchResult,
    FollowingSet,
    UserRecord,
)
from app.features.user_discovery.domain.normalization import normalize_user_record
from app.features.user_discovery.ports import (
    FollowGraphPort,
    PortUnavailableError,
    UserDirectoryPort,
)
from app.infrastructure.observability.logging import get_logger

logger = get_logger(__name__)


class AggregationEngine:
    def __init__(
        self,
        directory: UserDirectoryPort,
        follow_graph: FollowGraphPort,
        discovery_page_size: int | None = None,
        all_users_page_size: int | None = None,
        rng: random.Random | None = None,
    ):
        self._directory = directory
        self._follow_graph = follow_graph
        self.discovery_page_size = discovery_page_size or settings.DISCOVERY_DIRECTORY_PAGE_SIZE
        self.all_users_page_size = all_users_page_size or settings.ALL_USERS_DIRECTORY_PAGE_SIZE
        self._rng = rng or random.Random()

    # ------------------------------------------------------------------
    # Port access
    # ------------------------------------------------------------------

    async def _fetch_directory(self, page_size: int) -> FetchResult[list[UserRecord]]:
        try:
            users = await self._directory.list_users(page_size)
        except PortUnavailableError as e:
            logger.error(
                "Directory snapshot unavailable",
                service=e.service,
                status_code=e.status_code,
                error=str(e),
            )
            return FetchResult.failure(str(e))
        return FetchResult.success(list(users or []))

    async def _fetch_following(self, user_id: str) -> FetchResult[FollowingSet]:
        try:
            following = await self._follow_graph.get_following(user_id)
        except PortUnavailableError as e:
            return FetchResult.failure(str(e))
        return FetchResult.success(
            frozenset(entry.id for entry in following or [] if entry.id is not None)
        )

    async def resolve_following_ids(self, user_id: str) -> FollowingSet:
        """IDs ``user_id`` follows; empty when the follow graph is unavailable."""
        result = await self._fetch_following(user_id)
        if not result.ok:
            logger.warning(
                "Could not retrieve following list, continuing without it",
                user_id=user_id,
                error=result.error,
            )
            return frozenset()
        return result.value

    async def _snapshot(
        self, user_id: str, page_size: int
    ) -> tuple[FetchResult[list[UserRecord]], FollowingSet]:
        # Independent reads; both finish before any filtering.
        directory, following_ids = await asyncio.gather(
            self._fetch_directory(page_size),
            self.resolve_following_ids(user_id),
        )
        return directory, following_ids

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def discover_users(
        self,
        user_id: str,
        limit: int,
        offset: int,
        suggestions_only: bool = False,
    ) -> DiscoveryResult:
        """
        Build the paginated list of accounts ``user_id`` could follow.

        Excludes the subject, accounts already followed and private accounts.
        ``total_count`` is the size of the filtered candidate set before
        pagination. With ``suggestions_only`` the returned page is shuffled;
        this reorders the page only and does not sample the full pool.
        """
        logger.info(
            "Discovering users",
            user_id=user_id,
            limit=limit,
            offset=offset,
            suggestions_only=suggestions_only,
        )

        directory, following_ids = await self._snapshot(user_id, self.discovery_page_size)
        if not directory.ok:
            return DiscoveryResult.empty(limit=limit, offset=offset)

        logger.info(
            "Snapshot loaded",
            user_id=user_id,
            directory_size=len(directory.value),
            following_count=len(following_ids),
        )

        candidates: list[UserRecord] = []
        for record in directory.value:
            user = normalize_user_record(record)
            if user.id == user_id:
                continue
            if user.id in following_ids:
                continue
            if user.is_profile_private:
                continue
            user.is_following = False
            candidates.append(user)

        total_count = len(candidates)
        start = min(max(offset, 0), total_count)
        end = min(start + max(limit, 0), total_count)
        page = candidates[start:end]

        if suggestions_only and page:
            self._rng.shuffle(page)
            page = page[: max(limit, 0)]

        logger.info(
            "Discovery completed",
            user_id=user_id,
            total_count=total_count,
            returned=len(page),
        )

        return DiscoveryResult(
            users=page,
            total_count=total_count,
            following_count=len(following_ids),
            limit=limit,
            offset=offset,
        )

    async def suggest_users(self, user_id: str, limit: int) -> DiscoveryResult:
        """First page of discoverable users in shuffled order."""
        return await self.discover_users(user_id, limit, 0, suggestions_only=True)

    async def get_all_user_data(
        self, user_id: str, friends_limit: int, others_limit: int
    ) -> AllUserDataResult:
        """
        Split the directory into followed accounts and public non-followed ones.

        Private accounts the subject does not follow are dropped. Both lists
        keep directory order and are truncated independently; the totals are
        the sizes before truncation.
        """
        logger.info(
            "Getting all user data",
            user_id=user_id,
            friends_limit=friends_limit,
            others_limit=others_limit,
        )

        directory, following_ids = await self._snapshot(user_id, self.all_users_page_size)
        if not directory.ok:
            return AllUserDataResult.empty(limit=others_limit)

        friends: list[UserRecord] = []
        others: list[UserRecord] = []

        for record in directory.value:
            user = normalize_user_record(record)
            if user.id == user_id:
                continue

            if user.id in following_ids:
                user.is_following = True
                friends.append(user)
            elif not user.is_profile_private:
                user.is_following = False
                others.append(user)

        logger.info(
            "Partitioned directory",
            user_id=user_id,
            friends=len(friends),
            other_users=len(others),
        )

        return AllUserDataResult(
            friends=friends[: max(friends_limit, 0)],
            other_users=others[: max(others_limit, 0)],
            total_friends_count=len(friends),
            total_other_users_count=len(others),
            limit=others_limit,
            offset=0,
        )

"""
User discovery routes.

Thin HTTP layer over AggregationEngine. Upstream outages are absorbed by the
engine, so these handlers only validate query parameters and serialize.
"""

from fastapi import APIRouter, Depends, Query, Request

from app.features.user_discovery.domain.models import AllUserDataResult, DiscoveryResult
from app.features.user_discovery.services.aggregation_engine import AggregationEngine

router = APIRouter(prefix="/api/discover", tags=["user-discovery"])

MAX_LIMIT = 1000


def get_aggregation_engine(request: Request) -> AggregationEngine:
    """Engine built during application lifespan."""
    return request.app.state.aggregation_engine


@router.get("/users/{user_id}", response_model=DiscoveryResult)
async def discover_users(
    user_id: str,
    limit: int = Query(20, ge=0, le=MAX_LIMIT),
    offset: int = Query(0, ge=0),
    suggestions_only: bool = Query(False, alias="suggestionsOnly"),
    engine: AggregationEngine = Depends(get_aggregation_engine),
) -> DiscoveryResult:
    """Users the subject does not follow yet, paginated."""
    return await engine.discover_users(user_id, limit, offset, suggestions_only)


@router.get("/users/{user_id}/suggestions", response_model=DiscoveryResult)
async def suggested_users(
    user_id: str,
    limit: int = Query(5, ge=0, le=MAX_LIMIT),
    engine: AggregationEngine = Depends(get_aggregation_engine),
) -> DiscoveryResult:
    """Short shuffled list for the sidebar."""
    return await engine.suggest_users(user_id, limit)


@router.get("/users/{user_id}/all", response_model=AllUserDataResult)
async def all_user_data(
    user_id: str,
    friends_limit: int = Query(50, ge=0, le=MAX_LIMIT, alias="friendsLimit"),
    others_limit: int = Query(20, ge=0, le=MAX_LIMIT, alias="othersLimit"),
    engine: AggregationEngine = Depends(get_aggregation_engine),
) -> AllUserDataResult:
    """Followed accounts and other public accounts in one call."""
    return await engine.get_all_user_data(user_id, friends_limit, others_limit)

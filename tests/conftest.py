import pytest

from app.features.user_discovery.domain.models import FollowedUser, UserRecord
from app.features.user_discovery.domain.normalization import normalize_user_record
from app.features.user_discovery.ports import PortUnavailableError


def make_user(user_id: str, *, private: bool = False, **extra) -> UserRecord:
    raw = {"id": user_id, "username": f"name-{user_id}", "isProfilePrivate": private}
    raw.update(extra)
    return normalize_user_record(raw)


class FakeUserDirectory:
    def __init__(self, users: list[UserRecord] | None = None, error: bool = False):
        self.users = users or []
        self.error = error
        self.page_sizes: list[int] = []

    async def list_users(self, page_size: int) -> list[UserRecord]:
        self.page_sizes.append(page_size)
        if self.error:
            raise PortUnavailableError("user-service unreachable", service="user-service")
        return [user.model_copy() for user in self.users[:page_size]]


class FakeFollowGraph:
    def __init__(self, following: list[str | None] | None = None, error: bool = False):
        self.following = following or []
        self.error = error
        self.calls: list[str] = []

    async def get_following(self, user_id: str) -> list[FollowedUser]:
        self.calls.append(user_id)
        if self.error:
            raise PortUnavailableError(
                "follow-service get_following failed (HTTP 503)",
                service="follow-service",
                status_code=503,
            )
        return [FollowedUser(id=followed_id) for followed_id in self.following]


@pytest.fixture
def scenario_directory():
    """u1 is the subject, u2 public+followed, u3 private+unfollowed, u4 public+unfollowed."""
    return FakeUserDirectory(
        [
            make_user("u1"),
            make_user("u2"),
            make_user("u3", private=True),
            make_user("u4"),
        ]
    )


@pytest.fixture
def scenario_follow_graph():
    return FakeFollowGraph(["u2"])


@pytest.fixture
def user_factory():
    return make_user


@pytest.fixture
def directory_factory():
    return FakeUserDirectory


@pytest.fixture
def follow_graph_factory():
    return FakeFollowGraph

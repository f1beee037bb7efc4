from app.features.user_discovery.domain.models import UserRecord
from app.features.user_discovery.domain.normalization import (
    DEFAULT_PROFILE_PICTURE,
    normalize_user_record,
)


def test_legacy_user_id_is_copied_to_id():
    user = normalize_user_record({"userID": "abc", "username": "sam"})

    assert user.id == "abc"
    assert user.user_id == "abc"


def test_id_is_copied_to_legacy_field():
    user = normalize_user_record({"id": "abc"})

    assert user.id == "abc"
    assert user.user_id == "abc"


def test_legacy_field_wins_when_both_are_present():
    user = normalize_user_record({"id": "new", "userID": "legacy"})

    assert user.id == user.user_id == "legacy"


def test_missing_or_empty_picture_gets_default():
    assert normalize_user_record({"id": "a"}).profile_picture == DEFAULT_PROFILE_PICTURE
    assert (
        normalize_user_record({"id": "a", "profilePicture": ""}).profile_picture
        == DEFAULT_PROFILE_PICTURE
    )
    assert (
        normalize_user_record({"id": "a", "profilePicture": "/img/a.png"}).profile_picture
        == "/img/a.png"
    )


def test_upstream_following_flag_is_not_trusted():
    user = normalize_user_record({"id": "a", "isFollowing": True})

    assert user.is_following is False


def test_counts_pass_through():
    user = normalize_user_record({"id": "a", "numFollowers": 12, "numFollowing": None})

    assert user.num_followers == 12
    assert user.num_following is None


def test_empty_record_yields_empty_identity():
    user = normalize_user_record({})

    assert user.id == ""
    assert user.user_id == ""
    assert user.profile_picture == DEFAULT_PROFILE_PICTURE
    assert user.is_profile_private is False


def test_normalizing_a_record_is_idempotent():
    once = normalize_user_record({"userID": "a", "isProfilePrivate": True})
    twice = normalize_user_record(once)

    assert isinstance(twice, UserRecord)
    assert twice == once


def test_serializes_with_wire_field_names():
    payload = normalize_user_record({"id": "a"}).model_dump(by_alias=True)

    assert payload["userID"] == "a"
    assert payload["profilePicture"] == DEFAULT_PROFILE_PICTURE
    assert payload["isProfilePrivate"] is False
    assert payload["isFollowing"] is False


def test_non_string_picture_gets_default():
    for picture in (123, ["a.png"], {"url": "a.png"}, True):
        user = normalize_user_record({"id": "a", "profilePicture": picture})

        assert user.profile_picture == DEFAULT_PROFILE_PICTURE


def test_unparseable_counts_become_none():
    user = normalize_user_record(
        {"id": "a", "numFollowers": float("inf"), "numFollowing": "many"}
    )

    assert user.num_followers is None
    assert user.num_following is None
    assert normalize_user_record({"id": "a", "numFollowers": [1]}).num_followers is None

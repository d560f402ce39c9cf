"""Tests for the profile and user repositories."""

from devconnector.models import Profile, User
from devconnector.repositories import ProfileRepository, UserRepository


def test_create_or_update_creates_once(test_session, sample_user):
    repo = ProfileRepository(test_session)

    profile, created = repo.create_or_update(sample_user.id, {"status": "Student", "skills": ["go"]})
    assert created is True
    assert profile.social == {}
    assert profile.education == []

    again, created = repo.create_or_update(sample_user.id, {"company": "Acme"})
    assert created is False
    assert again.id == profile.id
    assert again.status == "Student"
    assert again.company == "Acme"
    assert test_session.query(Profile).count() == 1


def test_create_or_update_merges_social(test_session, sample_profile):
    repo = ProfileRepository(test_session)

    profile, _ = repo.create_or_update(
        sample_profile.user_id,
        {"social": {"twitter": "https://twitter.com/new", "facebook": "https://fb.com/ada"}},
    )

    assert profile.social == {
        "twitter": "https://twitter.com/new",
        "facebook": "https://fb.com/ada",
    }


def test_get_by_user_id_loads_user(test_session, sample_profile):
    profile = ProfileRepository(test_session).get_by_user_id(sample_profile.user_id)

    assert profile is not None
    assert profile.user.email == "ada@example.com"


def test_list_with_users_in_id_order(test_session, sample_profile):
    other = User(name="Charles Babbage", email="charles@example.com")
    test_session.add(other)
    test_session.flush()
    ProfileRepository(test_session).create_or_update(other.id, {"status": "Inventor"})

    profiles = ProfileRepository(test_session).list_with_users()

    assert [p.user.name for p in profiles] == ["Ada Lovelace", "Charles Babbage"]


def test_delete_for_user(test_session, sample_profile):
    repo = ProfileRepository(test_session)

    assert repo.delete_for_user(sample_profile.user_id) is True
    assert repo.delete_for_user(sample_profile.user_id) is False


def test_user_delete_account(test_session, sample_user):
    repo = UserRepository(test_session)

    assert repo.delete_account(sample_user.id) is True
    assert repo.get_by_id(sample_user.id) is None
    assert repo.delete_account(sample_user.id) is False

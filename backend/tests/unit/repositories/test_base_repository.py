import pytest

from tutorconnect.core.exceptions import RepositoryException
from tutorconnect.models.tutor_profile import TutorProfile
from tutorconnect.repositories.factory import RepositoryFactory


@pytest.fixture
def repository(db):
    return RepositoryFactory.create_base_repository(db, TutorProfile)


def test_create_and_lookup(repository):
    profile = repository.create(user_name="Mike", is_live=True)

    assert repository.get_by_id(profile.id) is profile
    assert repository.exists(user_name="Mike")
    assert repository.count(is_live=True) == 1
    assert repository.find_one_by(user_name="Nobody") is None


def test_get_all_is_in_insertion_order(repository):
    names = ["Zoe", "Adam", "Maya"]
    for name in names:
        repository.create(user_name=name)

    assert [p.user_name for p in repository.get_all()] == names


def test_update_only_touches_given_fields(repository):
    profile = repository.create(user_name="Mike", is_live=False)

    updated = repository.update(profile.id, is_live=True, not_a_column="ignored")

    assert updated.is_live is True
    assert updated.user_name == "Mike"
    assert repository.update("missing", is_live=True) is None


def test_integrity_errors_are_wrapped(db, repository):
    repository.create(user_name="Mike")
    db.commit()

    with pytest.raises(RepositoryException):
        repository.create(user_name="Mike")

    assert repository.count() == 1

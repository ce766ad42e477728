from tutorconnect.core.ulid_helper import (
    generate_ulid,
    is_valid_ulid,
    parse_ulid,
)


def test_generated_ids_are_valid_ulids():
    value = generate_ulid()

    assert len(value) == 26
    assert is_valid_ulid(value)
    assert parse_ulid(value) is not None


def test_ids_strictly_increase_within_the_same_millisecond():
    ids = [generate_ulid() for _ in range(500)]

    assert ids == sorted(ids)
    assert len(set(ids)) == len(ids)


def test_invalid_strings_are_rejected():
    assert parse_ulid("not-a-ulid") is None
    assert is_valid_ulid("") is False

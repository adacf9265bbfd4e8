import pytest

from logingate.errors import DuplicateUsernameError


def test_create_and_find(store):
    rec = store.create_user(username="bob", email="bob@example.com", password_hash="h")
    assert len(rec.id) == 32
    assert store.find_user_by_username("bob") == rec
    assert store.find_user_by_id(rec.id) == rec


def test_missing_lookups_return_none(store):
    assert store.find_user_by_username("nobody") is None
    assert store.find_user_by_username("") is None
    assert store.find_user_by_id("") is None
    assert store.find_user_by_id("0" * 32) is None


def test_unique_username_constraint(store, count_users):
    store.create_user(username="bob", email=None, password_hash="h1")
    with pytest.raises(DuplicateUsernameError) as exc:
        store.create_user(username="bob", email=None, password_hash="h2")
    assert exc.value.username == "bob"
    assert count_users(store.db) == 1
    # The failed insert must not leave the store unusable.
    assert store.find_user_by_username("bob").password_hash == "h1"


def test_empty_email_stored_as_null(store):
    rec = store.create_user(username="carol", email="", password_hash="h")
    assert rec.email is None


def test_update_password_hash(store):
    rec = store.create_user(username="dave", email=None, password_hash="old")
    store.update_password_hash(rec.id, "new")
    assert store.find_user_by_id(rec.id).password_hash == "new"


def test_health_check(db):
    assert db.health_check()

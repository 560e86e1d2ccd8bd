"""Unit tests for auth/store.py -- the identity store gateway.

Covers:
- create_user / get_by_phone round trip, including binary hash and salt
- primary key violation surfaces as AlreadyExists and never overwrites
- find_first() equality lookup and its column whitelist
- car lookup by key across the shared schema
- favorite links: insert, uniqueness, removal, joined car listing
- foreign keys on favorite links are enforced
- User repr never shows hash or salt
"""

import pytest

from auth.models import FavoriteLink, User
from auth.passwords import hash_password
from auth.store import UserStore
from core.errors import AlreadyExists, NotFound
from fleet.store import CarStore


def _user(phone: str = "555-0100", first_name: str = "Ada", password: str = "hunter2") -> User:
    digest, salt = hash_password(password)
    return User(
        phone_number=phone,
        first_name=first_name,
        last_name="Lovelace",
        email=f"{phone}@example.com",
        password_hash=digest,
        password_salt=salt,
    )


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------


class TestUsers:
    def test_create_and_get_round_trip(self, user_store: UserStore) -> None:
        original = _user()
        created = user_store.create_user(original)
        assert created.created_at

        fetched = user_store.get_by_phone("555-0100")
        assert fetched is not None
        assert fetched.first_name == "Ada"
        assert fetched.role == "User"
        assert fetched.password_hash == original.password_hash
        assert fetched.password_salt == original.password_salt
        assert isinstance(fetched.password_hash, bytes)

    def test_get_missing_returns_none(self, user_store: UserStore) -> None:
        assert user_store.get_by_phone("000") is None

    def test_duplicate_insert_raises_already_exists(self, user_store: UserStore) -> None:
        user_store.create_user(_user(first_name="First"))
        with pytest.raises(AlreadyExists, match="User already exists"):
            user_store.create_user(_user(first_name="Second"))

        stored = user_store.get_by_phone("555-0100")
        assert stored is not None
        assert stored.first_name == "First"

    def test_find_first_by_phone(self, user_store: UserStore) -> None:
        user_store.create_user(_user())
        found = user_store.find_first(phone_number="555-0100")
        assert found is not None
        assert found.phone_number == "555-0100"

    def test_find_first_combines_criteria(self, user_store: UserStore) -> None:
        user_store.create_user(_user("555-0100", first_name="Ada"))
        user_store.create_user(_user("555-0101", first_name="Grace"))
        found = user_store.find_first(first_name="Grace", role="User")
        assert found is not None
        assert found.phone_number == "555-0101"
        assert user_store.find_first(first_name="Grace", role="Admin") is None

    def test_find_first_rejects_unknown_columns(self, user_store: UserStore) -> None:
        with pytest.raises(ValueError):
            user_store.find_first(nickname="ada")
        with pytest.raises(ValueError):
            user_store.find_first(password_hash=b"x")
        with pytest.raises(ValueError):
            user_store.find_first()

    def test_repr_hides_password_material(self, user_store: UserStore) -> None:
        created = user_store.create_user(_user())
        text = repr(created)
        assert "555-0100" in text
        assert "password_hash" not in text
        assert "password_salt" not in text
        assert repr(created.password_hash) not in text

    def test_ping(self, user_store: UserStore) -> None:
        assert user_store.ping() is True


# ---------------------------------------------------------------------------
# Cars and favorites
# ---------------------------------------------------------------------------


class TestFavoriteLinks:
    def test_find_car_shares_schema_with_car_store(self, user_store: UserStore, car_store: CarStore, car_factory) -> None:
        car_id = car_store.create_car(car_factory())
        car = user_store.find_car(car_id)
        assert car is not None
        assert car.brand == "Toyota"
        assert user_store.find_car(car_id + 1000) is None

    def test_add_and_list(self, user_store: UserStore, car_store: CarStore, car_factory) -> None:
        user_store.create_user(_user())
        car_a = car_store.create_car(car_factory())
        car_b = car_store.create_car(car_factory(brand="Fiat", model="Panda"))

        link = user_store.add_favorite_link(FavoriteLink(user_phone_number="555-0100", car_id=car_b))
        assert link.id is not None
        assert link.created_at
        user_store.add_favorite_link(FavoriteLink(user_phone_number="555-0100", car_id=car_a))

        cars = user_store.list_favorite_cars("555-0100")
        assert [c.id for c in cars] == [car_b, car_a]
        assert cars[0].brand == "Fiat"

    def test_link_to_missing_car_rejected_by_foreign_key(self, user_store: UserStore) -> None:
        user_store.create_user(_user())
        with pytest.raises(NotFound):
            user_store.add_favorite_link(FavoriteLink(user_phone_number="555-0100", car_id=424242))
        assert user_store.get_favorite_links("555-0100") == []

    def test_link_for_missing_user_rejected_by_foreign_key(
        self, user_store: UserStore, car_store: CarStore, car_factory
    ) -> None:
        car_id = car_store.create_car(car_factory())
        with pytest.raises(NotFound):
            user_store.add_favorite_link(FavoriteLink(user_phone_number="555-0199", car_id=car_id))
        assert user_store.get_favorite_links("555-0199") == []

    def test_duplicate_link_rejected(self, user_store: UserStore, car_store: CarStore, car_factory) -> None:
        user_store.create_user(_user())
        car_id = car_store.create_car(car_factory())
        user_store.add_favorite_link(FavoriteLink(user_phone_number="555-0100", car_id=car_id))

        with pytest.raises(AlreadyExists, match="Car already in favorites"):
            user_store.add_favorite_link(FavoriteLink(user_phone_number="555-0100", car_id=car_id))
        assert len(user_store.get_favorite_links("555-0100")) == 1

    def test_same_car_for_two_users(self, user_store: UserStore, car_store: CarStore, car_factory) -> None:
        user_store.create_user(_user("555-0100"))
        user_store.create_user(_user("555-0101"))
        car_id = car_store.create_car(car_factory())
        user_store.add_favorite_link(FavoriteLink(user_phone_number="555-0100", car_id=car_id))
        user_store.add_favorite_link(FavoriteLink(user_phone_number="555-0101", car_id=car_id))
        assert [c.id for c in user_store.list_favorite_cars("555-0101")] == [car_id]

    def test_remove_link(self, user_store: UserStore, car_store: CarStore, car_factory) -> None:
        user_store.create_user(_user())
        car_id = car_store.create_car(car_factory())
        user_store.add_favorite_link(FavoriteLink(user_phone_number="555-0100", car_id=car_id))

        assert user_store.remove_favorite_link("555-0100", car_id) is True
        assert user_store.remove_favorite_link("555-0100", car_id) is False
        assert user_store.list_favorite_cars("555-0100") == []

    def test_user_with_favorites(self, user_store: UserStore, car_store: CarStore, car_factory) -> None:
        assert user_store.get_user_with_favorite_cars("555-0100") is None

        user_store.create_user(_user())
        found = user_store.get_user_with_favorite_cars("555-0100")
        assert found is not None
        user, cars = found
        assert user.phone_number == "555-0100"
        assert cars == []

        car_id = car_store.create_car(car_factory())
        user_store.add_favorite_link(FavoriteLink(user_phone_number="555-0100", car_id=car_id))
        _user_again, cars = user_store.get_user_with_favorite_cars("555-0100")
        assert [c.id for c in cars] == [car_id]

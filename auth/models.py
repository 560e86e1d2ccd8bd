"""
auth/models.py -- Domain dataclasses for identity entities.

Pattern: Data class (pure data container, zero logic). Mirrors the approach
in fleet/models.py -- dataclasses own domain shape; stores and services do
the work.

Layer rule: no imports from api/.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class User:
    """A registered RentCar customer.

    phone_number is the primary key and the external identifier everywhere:
    URLs, token subject, favorite links. It never changes after registration.

    password_hash / password_salt are opaque bytes produced by
    auth.passwords.hash_password(). The hash is only meaningful together with
    its own salt, so the two always travel as a pair.
    """

    phone_number: str
    first_name: str
    last_name: str
    email: str
    role: str = "User"
    password_hash: bytes = field(default=b"", repr=False)
    password_salt: bytes = field(default=b"", repr=False)
    created_at: str | None = None


@dataclass
class FavoriteLink:
    """Join record: this user has marked this car as a favorite.

    id is a surrogate key so a single link can be removed later without
    touching the (user_phone_number, car_id) pair. None before insert.
    """

    user_phone_number: str
    car_id: int
    id: int | None = None
    created_at: str | None = None

"""
auth/store.py -- SQLAlchemy Core persistence layer for identity entities.

Pattern: Repository + Data Mapper (same as fleet/store.py).
UserStore is the repository; _row_to_user / _row_to_link are the mappers.
Service and route code never touches SQL directly.

Uniqueness:
  users.phone_number is the primary key and favorite_links carries
  UNIQUE(user_phone_number, car_id). These constraints are the real
  enforcement point for the check-then-act races in registration and
  add-to-favorites: the service-level existence check can pass in two
  concurrent requests, but only one insert can succeed. The loser's
  IntegrityError is translated to AlreadyExists here so callers see the same
  outcome as a failed pre-check.

Security:
  All queries use bound parameters. No f-strings in SQL.
  find_first() only accepts column names from a fixed whitelist.

Layer rule: no imports from api/. Imports from core/ and fleet/ (for the
cars table used by the favorites join) are allowed.
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import (
    Column,
    ForeignKey,
    Integer,
    LargeBinary,
    String,
    Table,
    UniqueConstraint,
    and_,
    select,
    text,
)
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import IntegrityError

from auth.models import FavoriteLink, User
from core.config import get_settings
from core.db import create_store_engine, metadata
from core.errors import AlreadyExists, NotFound
from fleet.models import Car
from fleet.store import cars, row_to_car

# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------

users = Table(
    "users",
    metadata,
    Column("phone_number", String(32), primary_key=True),
    Column("first_name", String(100), nullable=False),
    Column("last_name", String(100), nullable=False),
    Column("email", String(255), nullable=False),
    Column("role", String(30), nullable=False, server_default="User"),
    Column("password_hash", LargeBinary, nullable=False),
    Column("password_salt", LargeBinary, nullable=False),
    Column("created_at", String(32), nullable=False),
)

favorite_links = Table(
    "favorite_links",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("user_phone_number", String(32), ForeignKey("users.phone_number"), nullable=False),
    Column("car_id", Integer, ForeignKey("cars.id"), nullable=False),
    Column("created_at", String(32), nullable=False),
    UniqueConstraint("user_phone_number", "car_id", name="uq_user_car"),
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class UserStore:
    """Repository for User and FavoriteLink entities, plus car lookup by key.

    Usage:
        store = UserStore()
        store.create_user(User(phone_number="555-0100", first_name="Ada", ...))
        user = store.get_by_phone("555-0100")
        store.close()
    """

    # Columns find_first() may filter on. Never hash or salt.
    _QUERYABLE_COLUMNS: set = {"phone_number", "first_name", "last_name", "email", "role"}

    def __init__(self, db_url: str | None = None) -> None:
        self.engine: Engine = create_store_engine(db_url or get_settings().database_url)
        metadata.create_all(self.engine)

    # ------------------------------------------------------------------
    # User queries
    # ------------------------------------------------------------------

    def get_by_phone(self, phone_number: str) -> User | None:
        """Look up a user by primary key. Returns None if not found."""
        with self.engine.connect() as conn:
            return self._get_user(conn, phone_number)

    def find_first(self, **criteria) -> User | None:
        """Return the first user matching every column == value pair.

        Unknown column names raise ValueError. Only _QUERYABLE_COLUMNS may be
        filtered on.
        """
        if not criteria:
            raise ValueError("find_first() needs at least one criterion")
        unknown = set(criteria) - self._QUERYABLE_COLUMNS
        if unknown:
            raise ValueError(f"Unknown user columns: {unknown!r}")
        conditions = [users.c[name] == value for name, value in criteria.items()]
        query = users.select().where(and_(*conditions)).order_by(users.c.phone_number).limit(1)
        with self.engine.connect() as conn:
            row = conn.execute(query).fetchone()
        return _row_to_user(row) if row is not None else None

    def create_user(self, user: User) -> User:
        """Insert a new user and return it with created_at filled in.

        Never overwrites: a second insert for the same phone number violates
        the primary key and raises AlreadyExists.
        """
        created_at = _now_iso()
        try:
            with self.engine.connect() as conn:
                conn.execute(
                    users.insert().values(
                        phone_number=user.phone_number,
                        first_name=user.first_name,
                        last_name=user.last_name,
                        email=user.email,
                        role=user.role,
                        password_hash=user.password_hash,
                        password_salt=user.password_salt,
                        created_at=created_at,
                    )
                )
                conn.commit()
        except IntegrityError as exc:
            raise AlreadyExists("User already exists") from exc
        return User(
            phone_number=user.phone_number,
            first_name=user.first_name,
            last_name=user.last_name,
            email=user.email,
            role=user.role,
            password_hash=user.password_hash,
            password_salt=user.password_salt,
            created_at=created_at,
        )

    # ------------------------------------------------------------------
    # Car lookup
    # ------------------------------------------------------------------

    def find_car(self, car_id: int) -> Car | None:
        """Look up a car by primary key. Returns None if not found."""
        with self.engine.connect() as conn:
            row = conn.execute(cars.select().where(cars.c.id == car_id)).fetchone()
        return row_to_car(row) if row is not None else None

    # ------------------------------------------------------------------
    # Favorite links
    # ------------------------------------------------------------------

    def add_favorite_link(self, link: FavoriteLink) -> FavoriteLink:
        """Insert a favorite link and return it with id and created_at set.

        Raises AlreadyExists if the user already has this car as a favorite
        (UNIQUE(user_phone_number, car_id)). Raises NotFound if either side
        of the link is missing (foreign keys are enforced on SQLite).
        """
        created_at = _now_iso()
        try:
            with self.engine.connect() as conn:
                result = conn.execute(
                    favorite_links.insert().values(
                        user_phone_number=link.user_phone_number,
                        car_id=link.car_id,
                        created_at=created_at,
                    )
                )
                conn.commit()
        except IntegrityError as exc:
            if "FOREIGN KEY" in str(exc.orig):
                raise NotFound("User or car not found") from exc
            raise AlreadyExists("Car already in favorites") from exc
        return FavoriteLink(
            id=result.inserted_primary_key[0],
            user_phone_number=link.user_phone_number,
            car_id=link.car_id,
            created_at=created_at,
        )

    def remove_favorite_link(self, phone_number: str, car_id: int) -> bool:
        """Delete one favorite link. Returns True if a row was removed."""
        with self.engine.connect() as conn:
            result = conn.execute(
                favorite_links.delete().where(
                    (favorite_links.c.user_phone_number == phone_number) & (favorite_links.c.car_id == car_id)
                )
            )
            conn.commit()
        return result.rowcount > 0

    def get_favorite_links(self, phone_number: str) -> list[FavoriteLink]:
        """Return the raw link rows for a user, oldest first."""
        with self.engine.connect() as conn:
            rows = conn.execute(
                favorite_links.select()
                .where(favorite_links.c.user_phone_number == phone_number)
                .order_by(favorite_links.c.id)
            ).fetchall()
        return [_row_to_link(r) for r in rows]

    def list_favorite_cars(self, phone_number: str) -> list[Car]:
        """Return the cars a user has marked as favorite (empty if none).

        Does not distinguish "unknown user" from "no favorites"; use
        get_user_with_favorite_cars() when that matters.
        """
        with self.engine.connect() as conn:
            return self._favorite_cars(conn, phone_number)

    def get_user_with_favorite_cars(self, phone_number: str) -> tuple[User, list[Car]] | None:
        """Eagerly fetch a user together with their favorite cars.

        Both queries run on one connection. Returns None if the user does not
        exist.
        """
        with self.engine.connect() as conn:
            user = self._get_user(conn, phone_number)
            if user is None:
                return None
            return user, self._favorite_cars(conn, phone_number)

    # ------------------------------------------------------------------
    # Health
    # ------------------------------------------------------------------

    def ping(self) -> bool:
        """Round-trip a trivial query. Raises if the database is unreachable."""
        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True

    def close(self) -> None:
        self.engine.dispose()

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    @staticmethod
    def _get_user(conn: Connection, phone_number: str) -> User | None:
        row = conn.execute(users.select().where(users.c.phone_number == phone_number)).fetchone()
        return _row_to_user(row) if row is not None else None

    @staticmethod
    def _favorite_cars(conn: Connection, phone_number: str) -> list[Car]:
        rows = conn.execute(
            select(cars)
            .select_from(favorite_links.join(cars, favorite_links.c.car_id == cars.c.id))
            .where(favorite_links.c.user_phone_number == phone_number)
            .order_by(favorite_links.c.id)
        ).fetchall()
        return [row_to_car(r) for r in rows]


# ---------------------------------------------------------------------------
# Row mappers (Data Mapper pattern)
# ---------------------------------------------------------------------------


def _row_to_user(row) -> User:
    return User(
        phone_number=row.phone_number,
        first_name=row.first_name,
        last_name=row.last_name,
        email=row.email,
        role=row.role,
        password_hash=bytes(row.password_hash),
        password_salt=bytes(row.password_salt),
        created_at=row.created_at,
    )


def _row_to_link(row) -> FavoriteLink:
    return FavoriteLink(
        id=row.id,
        user_phone_number=row.user_phone_number,
        car_id=row.car_id,
        created_at=row.created_at,
    )

"""
fleet/store.py -- SQLAlchemy-backed persistence for the car catalog.

Uses SQLAlchemy Core (not ORM) so the dataclass in fleet/models.py remains
the authoritative domain representation. Swapping SQLite for PostgreSQL or
MySQL is a connection string change.

Pattern: Repository + Data Mapper. CarStore is the repository; row_to_car is
the mapper. auth/store.py reuses the `cars` table and row_to_car for the
favorites join, which is why both are public.

Shared schema: every table lives on core.db.metadata. create_all() only
creates tables that do not exist yet, so CarStore and UserStore can point at
the same database and be constructed in either order.

Security: all queries use bound parameters. No f-strings in SQL.

Usage:
    store = CarStore()                                  # SQLite default
    store = CarStore("postgresql://user:pw@host/db")    # PostgreSQL
    car_id = store.create_car(car)
    car = store.get_car(car_id)
    store.close()
"""

from typing import Optional

from sqlalchemy import Column, Float, Integer, String, Table, text
from sqlalchemy.engine import Engine

from core.config import get_settings
from core.db import create_store_engine, metadata
from fleet.models import Car

# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------

cars = Table(
    "cars",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("brand", String(100), nullable=False),
    Column("model", String(100), nullable=False),
    Column("year", Integer, nullable=False),
    Column("price", Float, nullable=False, server_default="0"),
    Column("multiplier", Integer, nullable=False, server_default="1"),
    Column("capacity", Integer, nullable=False, server_default="0"),
    Column("transmission", String(30), nullable=False, server_default=""),
    Column("fuel_capacity", Integer, nullable=False, server_default="0"),
    Column("city", String(100), nullable=False, server_default=""),
    Column("created_by", String(255), nullable=False, server_default=""),
    Column("created_by_email", String(255), nullable=False, server_default=""),
    Column("image_url1", String(500), nullable=False, server_default=""),
    Column("image_url2", String(500), nullable=False, server_default=""),
    Column("image_url3", String(500), nullable=False, server_default=""),
    Column("owner_phone_number", String(32)),  # users.phone_number; fleet/ does not own users
)


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class CarStore:
    def __init__(self, db_url: Optional[str] = None) -> None:
        self.engine: Engine = create_store_engine(db_url or get_settings().database_url)
        metadata.create_all(self.engine)

    def create_car(self, car: Car) -> int:
        """Insert a car and return its assigned id."""
        with self.engine.connect() as conn:
            result = conn.execute(
                cars.insert().values(
                    brand=car.brand,
                    model=car.model,
                    year=car.year,
                    price=car.price,
                    multiplier=car.multiplier,
                    capacity=car.capacity,
                    transmission=car.transmission,
                    fuel_capacity=car.fuel_capacity,
                    city=car.city,
                    created_by=car.created_by,
                    created_by_email=car.created_by_email,
                    image_url1=car.image_url1,
                    image_url2=car.image_url2,
                    image_url3=car.image_url3,
                    owner_phone_number=car.owner_phone_number,
                )
            )
            conn.commit()
            return result.inserted_primary_key[0]

    def get_car(self, car_id: int) -> Optional[Car]:
        """Look up a car by primary key. Returns None if not found."""
        with self.engine.connect() as conn:
            row = conn.execute(cars.select().where(cars.c.id == car_id)).fetchone()
        return row_to_car(row) if row is not None else None

    def list_cars(self, city: Optional[str] = None) -> list[Car]:
        """Return all cars ordered by id, optionally filtered by exact city."""
        query = cars.select().order_by(cars.c.id)
        if city:
            query = query.where(cars.c.city == city)
        with self.engine.connect() as conn:
            rows = conn.execute(query).fetchall()
        return [row_to_car(r) for r in rows]

    def ping(self) -> bool:
        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True

    def close(self) -> None:
        self.engine.dispose()


# ---------------------------------------------------------------------------
# Row mapper (Data Mapper pattern)
# ---------------------------------------------------------------------------


def row_to_car(row) -> Car:
    return Car(
        id=row.id,
        brand=row.brand,
        model=row.model,
        year=row.year,
        price=row.price,
        multiplier=row.multiplier,
        capacity=row.capacity,
        transmission=row.transmission,
        fuel_capacity=row.fuel_capacity,
        city=row.city,
        created_by=row.created_by,
        created_by_email=row.created_by_email,
        image_url1=row.image_url1,
        image_url2=row.image_url2,
        image_url3=row.image_url3,
        owner_phone_number=row.owner_phone_number,
    )

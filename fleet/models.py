"""
fleet/models.py -- Domain dataclass for rentable cars.

Pure data container. Pricing (price * multiplier) is computed elsewhere, if
at all; the catalog only stores the numbers.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class Car:
    """A car listed for rent.

    Image fields are URL strings pointing into the static file area; the
    catalog never reads or writes the files themselves.

    id is None before the record is written to the database.
    """

    brand: str
    model: str
    year: int
    price: float = 0.0
    multiplier: int = 1
    capacity: int = 0
    transmission: str = ""
    fuel_capacity: int = 0
    city: str = ""
    created_by: str = ""
    created_by_email: str = ""
    image_url1: str = ""
    image_url2: str = ""
    image_url3: str = ""
    owner_phone_number: Optional[str] = None
    id: Optional[int] = None

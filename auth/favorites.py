"""
auth/favorites.py -- The user <-> car favorites relation.

Both endpoints of a link must exist before it is written. The existence
checks and the insert are separate round-trips, so the store's
UNIQUE(user_phone_number, car_id) constraint is what actually keeps the
relation free of duplicates when identical requests race.

Layer rule: no imports from api/.
"""

from __future__ import annotations

import logging

from auth.models import FavoriteLink
from auth.store import UserStore
from core.errors import NotFound
from fleet.models import Car

logger = logging.getLogger("rentcar.favorites")


class FavoritesManager:
    def __init__(self, store: UserStore) -> None:
        self.store = store

    def add_to_favorites(self, phone_number: str, car_id: int) -> FavoriteLink:
        """Mark car_id as a favorite of the user.

        Raises NotFound if either side is missing (no link is written) and
        AlreadyExists if the link is already there.
        """
        if self.store.get_by_phone(phone_number) is None:
            raise NotFound("User not found")
        if self.store.find_car(car_id) is None:
            raise NotFound("Car not found")

        link = self.store.add_favorite_link(FavoriteLink(user_phone_number=phone_number, car_id=car_id))
        logger.info("User %s added car %d to favorites", phone_number, car_id)
        return link

    def get_favorite_cars(self, phone_number: str) -> list[Car]:
        """Return the user's favorite cars; an empty list if there are none."""
        found = self.store.get_user_with_favorite_cars(phone_number)
        if found is None:
            raise NotFound("User not found")
        _user, favorite_cars = found
        return favorite_cars

    def remove_from_favorites(self, phone_number: str, car_id: int) -> None:
        if self.store.get_by_phone(phone_number) is None:
            raise NotFound("User not found")
        if not self.store.remove_favorite_link(phone_number, car_id):
            raise NotFound("Favorite not found")
        logger.info("User %s removed car %d from favorites", phone_number, car_id)

"""Manufacturer group model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from carsales._constants import MAX_CARS
from carsales.models.car import Car


class Manufacturer(BaseModel):
    """All cars filed under one manufacturer name.

    Unlike :class:`Car` this model is mutable: the owning collection
    appends cars to it through :meth:`add_car`, which enforces the
    per-manufacturer limit.
    """

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    name: str = Field(min_length=1)
    """Manufacturer name as first entered. Compared case-insensitively."""
    cars: list[Car] = Field(default_factory=list, max_length=MAX_CARS)
    """Cars in insertion order, at most ``MAX_CARS``."""

    def matches(self, name: str) -> bool:
        """Return ``True`` when *name* refers to this manufacturer, ignoring case."""
        return self.name.lower() == name.strip().lower()

    def car_count(self) -> int:
        return len(self.cars)

    def add_car(self, car: Car, *, limit: int = MAX_CARS) -> bool:
        """Append *car* unless the group already holds *limit* cars.

        Returns ``True`` when the car was added.
        """
        if len(self.cars) >= min(limit, MAX_CARS):
            return False
        self.cars.append(car)
        return True

    def get_all_cars(self) -> tuple[Car, ...]:
        return tuple(self.cars)

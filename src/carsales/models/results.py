"""Outcome codes for adding a car to a collection."""

from __future__ import annotations

import enum


class AddCarResult(enum.IntEnum):
    """Result of :meth:`carsales.CarsCollection.add_car`.

    Hitting a capacity limit is an ordinary outcome, not an error, so it
    is reported through these values instead of an exception.
    """

    ADDED = 0
    CARS_MAXIMUM_REACHED = 1
    MANUFACTURERS_MAXIMUM_REACHED = 2

"""Bounded collection of cars grouped by manufacturer.

This is the only component that files cars into manufacturer groups and
enforces the collection-wide capacity limits.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterator

from carsales import _storage
from carsales._constants import NO_MAX_AGE
from carsales.config import CarSalesConfig
from carsales.exceptions import CarSalesFormatError, CarSalesValidationError
from carsales.models.car import Car
from carsales.models.manufacturer import Manufacturer
from carsales.models.results import AddCarResult

_logger = logging.getLogger(__name__)


def _average(cars: tuple[Car, ...], value: Callable[[Car], float]) -> float:
    if not cars:
        return 0.0
    return sum(value(car) for car in cars) / len(cars)


class CarsCollection:
    """Stores manufacturers and the cars filed under them, and performs searches.

    Usage::

        collection = CarsCollection()
        collection.add_car(Car(manufacturer="Toyota", price=15000, age=4, kilometers=62000.0))
        collection.save_cars("cars.dat")

    Every read operation flattens the manufacturer groups on demand and
    returns tuples, so callers never hold a handle into internal state.
    """

    def __init__(
        self,
        manufacturer: Manufacturer | None = None,
        *,
        config: CarSalesConfig | None = None,
    ) -> None:
        self._config = config or CarSalesConfig()
        self._manufacturers: list[Manufacturer] = []
        if manufacturer is not None:
            problem = self._group_problem(manufacturer)
            if problem is not None:
                raise CarSalesValidationError(problem)
            self._manufacturers.append(manufacturer.model_copy(deep=True))

    @property
    def config(self) -> CarSalesConfig:
        return self._config

    def _find(self, name: str) -> Manufacturer | None:
        for manufacturer in self._manufacturers:
            if manufacturer.matches(name):
                return manufacturer
        return None

    def _iter_cars(self) -> Iterator[Car]:
        for manufacturer in self._manufacturers:
            yield from manufacturer.get_all_cars()

    # ------------------------------------------------------------------
    # Insertion
    # ------------------------------------------------------------------

    def add_car(self, car: Car) -> AddCarResult:
        """File *car* under its manufacturer, creating the group if needed.

        Returns
        -------
        AddCarResult
            ``ADDED`` on success, ``CARS_MAXIMUM_REACHED`` when the
            manufacturer is full, or ``MANUFACTURERS_MAXIMUM_REACHED``
            when a new group would be needed but the collection is full.
            The collection is unchanged unless the result is ``ADDED``.
        """
        existing = self._find(car.manufacturer)

        if existing is None:
            if len(self._manufacturers) >= self._config.max_manufacturers:
                _logger.debug(
                    "Rejected %s: manufacturer limit of %d reached",
                    car.manufacturer,
                    self._config.max_manufacturers,
                )
                return AddCarResult.MANUFACTURERS_MAXIMUM_REACHED
            self._manufacturers.append(Manufacturer(name=car.manufacturer, cars=[car]))
            _logger.debug("Added manufacturer %s", car.manufacturer)
            return AddCarResult.ADDED

        if not existing.add_car(car, limit=self._config.max_cars):
            _logger.debug("Rejected car for %s: car limit of %d reached", existing.name, self._config.max_cars)
            return AddCarResult.CARS_MAXIMUM_REACHED
        return AddCarResult.ADDED

    # ------------------------------------------------------------------
    # Counting and enumeration
    # ------------------------------------------------------------------

    def cars_count(self) -> int:
        """Total number of cars across all manufacturers."""
        return sum(manufacturer.car_count() for manufacturer in self._manufacturers)

    def manufacturer_count(self) -> int:
        return len(self._manufacturers)

    def get_all_cars(self) -> tuple[Car, ...]:
        """Every car, in manufacturer order and then insertion order."""
        return tuple(self._iter_cars())

    def get_all_manufacturers(self) -> tuple[Manufacturer, ...]:
        """Copies of the manufacturer groups; changing them does not affect the collection."""
        return tuple(manufacturer.model_copy(deep=True) for manufacturer in self._manufacturers)

    # ------------------------------------------------------------------
    # Statistics
    # ------------------------------------------------------------------

    def get_average_age(self) -> float:
        return _average(self.get_all_cars(), lambda car: car.age)

    def get_average_distance(self) -> float:
        return _average(self.get_all_cars(), lambda car: car.kilometers)

    def get_average_price(self) -> float:
        return _average(self.get_all_cars(), lambda car: car.price)

    # ------------------------------------------------------------------
    # Searches
    # ------------------------------------------------------------------

    def search(
        self,
        min_price: int,
        max_price: int,
        min_distance: float,
        max_distance: float,
    ) -> tuple[Car, ...]:
        """Cars whose price and distance both fall within the inclusive ranges."""
        return tuple(
            car
            for car in self._iter_cars()
            if min_price <= car.price <= max_price and min_distance <= car.kilometers <= max_distance
        )

    def search_by_age(self, min_age: int, max_age: int = NO_MAX_AGE) -> tuple[Car, ...]:
        """Cars whose age falls within ``[min_age, max_age]``.

        A *max_age* of ``-1`` means there is no upper bound.
        """
        if max_age == NO_MAX_AGE:
            return tuple(car for car in self._iter_cars() if car.age >= min_age)
        return tuple(car for car in self._iter_cars() if min_age <= car.age <= max_age)

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def load_cars(self, path: str | os.PathLike[str]) -> None:
        """Replace the whole collection with the contents of *path*.

        Raises :class:`OSError` if the file cannot be read and
        :class:`~carsales.exceptions.CarSalesFormatError` if it cannot be
        decoded or (with ``validate_on_load``) breaks the capacity or
        uniqueness rules. The collection is unchanged on failure.
        """
        manufacturers = _storage.read_collection(path)
        if self._config.validate_on_load:
            self._check_loaded(manufacturers, os.fspath(path))
        self._manufacturers = manufacturers
        _logger.debug(
            "Loaded %d manufacturers and %d cars from %s",
            len(manufacturers),
            self.cars_count(),
            path,
        )

    def save_cars(self, path: str | os.PathLike[str]) -> None:
        """Sort manufacturers by name and write the whole collection to *path*.

        Does nothing, and touches no file, when the collection is empty.
        Raises :class:`OSError` if the file cannot be written; any
        previous file at *path* is then left as it was.
        """
        if not self._manufacturers:
            _logger.debug("Collection is empty, not writing %s", path)
            return

        # list.sort is stable: equal names keep their relative order.
        self._manufacturers.sort(key=lambda manufacturer: manufacturer.name)
        _storage.write_collection(path, self._manufacturers)
        _logger.debug(
            "Saved %d manufacturers and %d cars to %s",
            len(self._manufacturers),
            self.cars_count(),
            path,
        )

    def _group_problem(self, manufacturer: Manufacturer) -> str | None:
        """Describe why *manufacturer* cannot belong to this collection, or return ``None``."""
        if manufacturer.car_count() > self._config.max_cars:
            return f"{manufacturer.name!r} holds {manufacturer.car_count()} cars, limit is {self._config.max_cars}"
        for car in manufacturer.cars:
            if not manufacturer.matches(car.manufacturer):
                return f"car by {car.manufacturer!r} filed under {manufacturer.name!r}"
        return None

    def _check_loaded(self, manufacturers: list[Manufacturer], path: str) -> None:
        if len(manufacturers) > self._config.max_manufacturers:
            raise CarSalesFormatError(
                f"{path}: {len(manufacturers)} manufacturers exceeds limit of {self._config.max_manufacturers}",
                path=path,
            )
        seen: set[str] = set()
        for manufacturer in manufacturers:
            key = manufacturer.name.lower()
            if key in seen:
                raise CarSalesFormatError(f"{path}: duplicate manufacturer {manufacturer.name!r}", path=path)
            seen.add(key)
            problem = self._group_problem(manufacturer)
            if problem is not None:
                raise CarSalesFormatError(f"{path}: {problem}", path=path)

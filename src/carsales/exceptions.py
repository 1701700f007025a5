"""Custom exception hierarchy for carsales."""

from __future__ import annotations


class CarSalesError(Exception):
    """Base exception for all carsales errors."""


class CarSalesConfigError(CarSalesError):
    """Invalid or missing configuration."""


class CarSalesFormatError(CarSalesError):
    """A data file could not be decoded into a car collection.

    Raised for bad magic, unsupported versions, truncated or trailing
    data, and (when load validation is on) files whose contents break
    the capacity or uniqueness rules of :class:`~carsales.CarsCollection`.
    I/O failures are not wrapped; they surface as :class:`OSError`.
    """

    def __init__(self, message: str, *, path: str = "") -> None:
        self.path = path
        super().__init__(message)


class CarSalesValidationError(CarSalesError):
    """A manufacturer group handed to a collection breaks its rules.

    Raised when a collection is seeded with a group that exceeds the car
    limit or holds cars belonging to another manufacturer.
    """

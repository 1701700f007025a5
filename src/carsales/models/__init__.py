"""Data models for car sale records."""

from carsales.models._base import CarSalesBaseModel
from carsales.models.car import Car
from carsales.models.manufacturer import Manufacturer
from carsales.models.results import AddCarResult

__all__ = [
    "AddCarResult",
    "Car",
    "CarSalesBaseModel",
    "Manufacturer",
]

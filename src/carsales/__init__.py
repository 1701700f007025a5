"""carsales - Bounded collection of car sale records grouped by manufacturer."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("carsales")
except PackageNotFoundError:
    __version__ = "0+local"
from carsales._constants import MAX_CARS, MAX_MANUFACTURES, NO_MAX_AGE
from carsales.collection import CarsCollection
from carsales.config import CarSalesConfig
from carsales.exceptions import CarSalesConfigError, CarSalesError, CarSalesFormatError, CarSalesValidationError
from carsales.models import AddCarResult, Car, Manufacturer

__all__ = [
    "__version__",
    "MAX_CARS",
    "MAX_MANUFACTURES",
    "NO_MAX_AGE",
    "AddCarResult",
    "Car",
    "CarSalesConfig",
    "CarSalesConfigError",
    "CarSalesError",
    "CarSalesFormatError",
    "CarSalesValidationError",
    "CarsCollection",
    "Manufacturer",
]

"""Car model."""

from __future__ import annotations

from pydantic import AliasChoices, Field, field_validator

from carsales.models._base import CarSalesBaseModel


class Car(CarSalesBaseModel):
    """A single car offered for sale.

    Two cars are equal when all of their fields are equal.
    """

    manufacturer: str
    """Manufacturer name (e.g. ``"Toyota"``). Must not be empty."""
    price: int
    """Asking price in whole currency units."""
    age: int
    """Age of the car in years."""
    kilometers: float = Field(validation_alias=AliasChoices("kilometers", "distance"))
    """Distance travelled in km."""

    @field_validator("manufacturer")
    @classmethod
    def _require_manufacturer(cls, value: str) -> str:
        if not value:
            raise ValueError("manufacturer must be non-empty")
        return value

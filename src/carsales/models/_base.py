"""Base model shared by the carsales value types.

:class:`CarSalesBaseModel` freezes instances and strips surrounding
whitespace from string fields so manufacturer names typed by hand and
names read back from a data file compare the same way.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class CarSalesBaseModel(BaseModel):
    """Base for immutable carsales records."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        str_strip_whitespace=True,
    )

"""Collection configuration for carsales."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from carsales._constants import DEFAULT_DATA_FILE, MAX_CARS, MAX_MANUFACTURES
from carsales.exceptions import CarSalesConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _env_int(name: str, value: str) -> int:
    try:
        return int(value.strip())
    except ValueError as exc:
        raise CarSalesConfigError(f"{name} must be an integer, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class CarSalesConfig:
    """Collection configuration.

    Parameters
    ----------
    max_manufacturers : int
        Maximum number of manufacturer groups a collection holds, at most 20.
    max_cars : int
        Maximum number of cars filed under a single manufacturer, at most 20.
    data_file : str
        Default data file used by the scripts when no path is given.
    validate_on_load : bool
        Reject data files that exceed the capacity limits or contain
        duplicate manufacturer names. When ``False`` the file contents
        are trusted as-is.
    """

    max_manufacturers: int = MAX_MANUFACTURES
    max_cars: int = MAX_CARS
    data_file: str = DEFAULT_DATA_FILE
    validate_on_load: bool = True

    def __post_init__(self) -> None:
        if not 1 <= self.max_manufacturers <= MAX_MANUFACTURES:
            raise CarSalesConfigError(
                f"max_manufacturers must be between 1 and {MAX_MANUFACTURES}, got {self.max_manufacturers}"
            )
        if not 1 <= self.max_cars <= MAX_CARS:
            raise CarSalesConfigError(f"max_cars must be between 1 and {MAX_CARS}, got {self.max_cars}")

    @classmethod
    def from_env(cls, **overrides: Any) -> CarSalesConfig:
        """Create configuration from environment variables.

        Reads ``CARSALES_MAX_MANUFACTURERS``, ``CARSALES_MAX_CARS``,
        ``CARSALES_DATA_FILE`` and ``CARSALES_VALIDATE_ON_LOAD``.
        Explicit keyword arguments override environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        CarSalesConfig
            Populated configuration.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        _ENV_INT_MAP = {
            "CARSALES_MAX_MANUFACTURERS": "max_manufacturers",
            "CARSALES_MAX_CARS": "max_cars",
        }
        for env_key, field_name in _ENV_INT_MAP.items():
            val = env.get(env_key)
            if val is not None and field_name not in overrides:
                config_kwargs[field_name] = _env_int(env_key, val)

        data_file = env.get("CARSALES_DATA_FILE")
        if data_file:
            config_kwargs["data_file"] = data_file

        if "validate_on_load" not in overrides:
            config_kwargs["validate_on_load"] = _env_bool(env.get("CARSALES_VALIDATE_ON_LOAD"), True)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)

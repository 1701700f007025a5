"""Binary encoding of a whole car collection and atomic file I/O.

A collection is always written and read as one unit; there is no
partial or incremental update of a data file.
"""

from __future__ import annotations

import contextlib
import logging
import os
import struct
import tempfile
from collections.abc import Sequence
from pathlib import Path

from pydantic import ValidationError

from carsales.exceptions import CarSalesFormatError
from carsales.models.car import Car
from carsales.models.manufacturer import Manufacturer

_logger = logging.getLogger(__name__)

# Data file format (all integers little-endian):
#   Magic: b"CSCL" (4 bytes)
#   Version: uint16 LE (2 bytes)
#   Manufacturer count: uint16 LE (2 bytes)
#   Per manufacturer:
#     name: str
#     car count: uint16 LE
#     Per car: manufacturer (str), price (int64), age (int32), kilometers (float64)
#   where str is a uint16 LE byte length followed by UTF-8 bytes.
_MAGIC = b"CSCL"
_VERSION = 1
_HEADER = struct.Struct("<4sHH")
_COUNT = struct.Struct("<H")
_STR_LEN = struct.Struct("<H")
_CAR = struct.Struct("<qid")


class _Reader:
    """Sequential reader over a data file buffer."""

    def __init__(self, data: bytes) -> None:
        self._data = data
        self._offset = 0

    @property
    def remaining(self) -> int:
        return len(self._data) - self._offset

    def unpack(self, fmt: struct.Struct, what: str) -> tuple:
        if fmt.size > self.remaining:
            raise CarSalesFormatError(f"Truncated data file: expected {what} at offset {self._offset}")
        values = fmt.unpack_from(self._data, self._offset)
        self._offset += fmt.size
        return values

    def read_str(self, what: str) -> str:
        (length,) = self.unpack(_STR_LEN, f"{what} length")
        if length > self.remaining:
            raise CarSalesFormatError(f"Truncated data file: {what} extends beyond end of file")
        raw = self._data[self._offset : self._offset + length]
        self._offset += length
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise CarSalesFormatError(f"Invalid UTF-8 in {what}") from exc


def _pack_str(buf: bytearray, value: str, what: str) -> None:
    raw = value.encode("utf-8")
    if len(raw) > 0xFFFF:
        raise CarSalesFormatError(f"{what} too long to encode ({len(raw)} bytes)")
    buf += _STR_LEN.pack(len(raw))
    buf += raw


def encode_collection(manufacturers: Sequence[Manufacturer]) -> bytes:
    """Encode *manufacturers*, including every car, into the data file layout."""
    if len(manufacturers) > 0xFFFF:
        raise CarSalesFormatError(f"Too many manufacturers to encode: {len(manufacturers)}")
    buf = bytearray(_HEADER.pack(_MAGIC, _VERSION, len(manufacturers)))
    for manufacturer in manufacturers:
        _pack_str(buf, manufacturer.name, "manufacturer name")
        if len(manufacturer.cars) > 0xFFFF:
            raise CarSalesFormatError(f"Too many cars to encode for {manufacturer.name!r}: {len(manufacturer.cars)}")
        buf += _COUNT.pack(len(manufacturer.cars))
        for car in manufacturer.cars:
            _pack_str(buf, car.manufacturer, "car manufacturer")
            try:
                buf += _CAR.pack(car.price, car.age, car.kilometers)
            except struct.error as exc:
                raise CarSalesFormatError(f"Cannot encode car {car!r}: {exc}") from exc
    return bytes(buf)


def decode_collection(data: bytes) -> list[Manufacturer]:
    """Decode a data file buffer back into manufacturers.

    Raises :class:`CarSalesFormatError` when *data* is not a complete,
    well-formed version 1 file.
    """
    reader = _Reader(data)
    magic, version, count = reader.unpack(_HEADER, "header")
    if magic != _MAGIC:
        raise CarSalesFormatError(f"Bad magic: expected {_MAGIC!r}, got {magic!r}")
    if version != _VERSION:
        raise CarSalesFormatError(f"Unsupported data file version: {version}")

    manufacturers: list[Manufacturer] = []
    for _ in range(count):
        name = reader.read_str("manufacturer name")
        (car_count,) = reader.unpack(_COUNT, "car count")
        cars: list[Car] = []
        for _ in range(car_count):
            car_manufacturer = reader.read_str("car manufacturer")
            price, age, kilometers = reader.unpack(_CAR, "car fields")
            try:
                cars.append(Car(manufacturer=car_manufacturer, price=price, age=age, kilometers=kilometers))
            except ValidationError as exc:
                raise CarSalesFormatError(f"Invalid car record under {name!r}") from exc
        try:
            manufacturers.append(Manufacturer(name=name, cars=cars))
        except ValidationError as exc:
            raise CarSalesFormatError(f"Invalid manufacturer record {name!r}") from exc

    if reader.remaining:
        raise CarSalesFormatError(f"Unexpected {reader.remaining} trailing bytes after collection")
    return manufacturers


def write_collection(path: str | os.PathLike[str], manufacturers: Sequence[Manufacturer]) -> None:
    """Atomically replace *path* with the encoded *manufacturers*.

    The payload is written to a uniquely named sibling temporary file
    and moved over *path* only once fully flushed, so a failure leaves
    any previous file untouched.
    """
    payload = encode_collection(manufacturers)
    target = Path(path)
    fh = tempfile.NamedTemporaryFile(dir=target.parent, prefix=f".{target.name}.", suffix=".tmp", delete=False)
    tmp = Path(fh.name)
    try:
        with fh:
            fh.write(payload)
            fh.flush()
            os.fsync(fh.fileno())
        os.replace(tmp, target)
    finally:
        with contextlib.suppress(FileNotFoundError):
            tmp.unlink()
    _logger.debug("Wrote %d bytes to %s", len(payload), target)


def read_collection(path: str | os.PathLike[str]) -> list[Manufacturer]:
    """Read and decode the data file at *path*."""
    data = Path(path).read_bytes()
    _logger.debug("Read %d bytes from %s", len(data), path)
    try:
        return decode_collection(data)
    except CarSalesFormatError as exc:
        raise CarSalesFormatError(f"{os.fspath(path)}: {exc}", path=os.fspath(path)) from exc

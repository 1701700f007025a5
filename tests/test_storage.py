"""Tests for the binary data file codec."""

from __future__ import annotations

import struct
from pathlib import Path

import pytest

from carsales._storage import decode_collection, encode_collection, read_collection, write_collection
from carsales.exceptions import CarSalesFormatError
from carsales.models import Car, Manufacturer


def _manufacturers() -> list[Manufacturer]:
    return [
        Manufacturer(
            name="Škoda",
            cars=[
                Car(manufacturer="Škoda", price=8500, age=9, kilometers=123456.7),
                Car(manufacturer="SKODA", price=11000, age=4, kilometers=0.0),
            ],
        ),
        Manufacturer(name="Volvo", cars=[Car(manufacturer="Volvo", price=-1, age=0, kilometers=1.5)]),
    ]


def test_header_layout() -> None:
    data = encode_collection(_manufacturers())
    magic, version, count = struct.unpack_from("<4sHH", data, 0)
    assert magic == b"CSCL"
    assert version == 1
    assert count == 2


def test_decode_restores_names_and_fields() -> None:
    decoded = decode_collection(encode_collection(_manufacturers()))
    assert decoded == _manufacturers()


def test_empty_collection_encodes_header_only() -> None:
    data = encode_collection([])
    assert len(data) == 8
    assert decode_collection(data) == []


def test_bad_version_rejected() -> None:
    data = bytearray(encode_collection(_manufacturers()))
    struct.pack_into("<H", data, 4, 99)
    with pytest.raises(CarSalesFormatError, match="Unsupported data file version: 99"):
        decode_collection(bytes(data))


def test_truncated_data_rejected() -> None:
    data = encode_collection(_manufacturers())
    with pytest.raises(CarSalesFormatError, match="Truncated"):
        decode_collection(data[:-3])


def test_short_header_rejected() -> None:
    with pytest.raises(CarSalesFormatError, match="Truncated"):
        decode_collection(b"CS")


def test_trailing_bytes_rejected() -> None:
    data = encode_collection(_manufacturers()) + b"\x00"
    with pytest.raises(CarSalesFormatError, match="trailing"):
        decode_collection(data)


def test_invalid_utf8_rejected() -> None:
    data = struct.pack("<4sHH", b"CSCL", 1, 1) + struct.pack("<H", 2) + b"\xff\xfe" + struct.pack("<H", 0)
    with pytest.raises(CarSalesFormatError, match="Invalid UTF-8"):
        decode_collection(data)


def test_empty_manufacturer_name_rejected() -> None:
    data = struct.pack("<4sHH", b"CSCL", 1, 1) + struct.pack("<H", 0) + struct.pack("<H", 0)
    with pytest.raises(CarSalesFormatError, match="Invalid manufacturer record"):
        decode_collection(data)


def test_out_of_range_age_cannot_be_encoded() -> None:
    manufacturers = [Manufacturer(name="Old", cars=[Car(manufacturer="Old", price=1, age=2**40, kilometers=0.0)])]
    with pytest.raises(CarSalesFormatError, match="Cannot encode car"):
        encode_collection(manufacturers)


def test_write_then_read(tmp_path: Path) -> None:
    path = tmp_path / "cars.dat"
    write_collection(path, _manufacturers())
    assert read_collection(path) == _manufacturers()
    assert sorted(p.name for p in tmp_path.iterdir()) == ["cars.dat"]


def test_failed_encode_leaves_existing_file(tmp_path: Path) -> None:
    path = tmp_path / "cars.dat"
    path.write_bytes(b"keep me")
    manufacturers = [Manufacturer(name="Old", cars=[Car(manufacturer="Old", price=2**70, age=1, kilometers=0.0)])]

    with pytest.raises(CarSalesFormatError):
        write_collection(path, manufacturers)

    assert path.read_bytes() == b"keep me"
    assert sorted(p.name for p in tmp_path.iterdir()) == ["cars.dat"]


def test_read_error_carries_path(tmp_path: Path) -> None:
    path = tmp_path / "cars.dat"
    path.write_bytes(b"JUNKJUNK")
    with pytest.raises(CarSalesFormatError) as excinfo:
        read_collection(path)
    assert excinfo.value.path == str(path)
    assert str(path) in str(excinfo.value)


def test_group_over_car_limit_rejected() -> None:
    data = bytearray(struct.pack("<4sHH", b"CSCL", 1, 1))
    data += struct.pack("<H", 6) + b"Toyota" + struct.pack("<H", 21)
    for _ in range(21):
        data += struct.pack("<H", 6) + b"Toyota" + struct.pack("<qid", 1000, 1, 0.0)
    with pytest.raises(CarSalesFormatError, match="Invalid manufacturer record 'Toyota'"):
        decode_collection(bytes(data))

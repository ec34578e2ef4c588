"""Little-endian binary writer and reader for primitive and vector values."""

from __future__ import annotations

import os
import struct
from collections.abc import Iterable, Sequence
from typing import BinaryIO

__all__ = ["BinaryWriter", "BinaryReader"]

_BOOL = struct.Struct("<?")
_WORD = struct.Struct("<H")
_INT = struct.Struct("<i")
_UINT = struct.Struct("<I")
_FLOAT = struct.Struct("<f")
_DOUBLE = struct.Struct("<d")


def _check_path(path: str | os.PathLike[str]) -> str | os.PathLike[str]:
    if not os.fspath(path):
        raise ValueError("file path must not be empty")
    return path


def _floats(data: Iterable[float], count: int, what: str) -> bytes:
    values = tuple(float(v) for v in data)
    if len(values) != count:
        raise ValueError(f"{what} needs {count} components, got {len(values)}")
    return struct.pack(f"<{count}f", *values)


def _flatten_matrix(data: Sequence[float] | Sequence[Sequence[float]]) -> list[float]:
    items = list(data)
    if items and isinstance(items[0], (list, tuple)):
        return [float(v) for row in items for v in row]  # type: ignore[union-attr]
    return [float(v) for v in items]  # type: ignore[arg-type]


class BinaryWriter:
    """Writes values to a file, replacing any existing content."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self._file: BinaryIO | None = open(_check_path(path), "wb")

    def close(self) -> None:
        """Close the file; closing twice is harmless."""
        if self._file is not None:
            self._file.close()
            self._file = None

    def __enter__(self) -> BinaryWriter:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def _write(self, data: bytes) -> None:
        if self._file is None:
            raise ValueError("writer is closed")
        self._file.write(data)

    def write_bool(self, data: bool) -> None:
        self._write(_BOOL.pack(bool(data)))

    def write_word(self, data: int) -> None:
        self._write(_WORD.pack(data))

    def write_int(self, data: int) -> None:
        self._write(_INT.pack(data))

    def write_uint(self, data: int) -> None:
        self._write(_UINT.pack(data))

    def write_float(self, data: float) -> None:
        self._write(_FLOAT.pack(data))

    def write_double(self, data: float) -> None:
        self._write(_DOUBLE.pack(data))

    def write_vector2(self, data: Iterable[float]) -> None:
        self._write(_floats(data, 2, "vector2"))

    def write_vector3(self, data: Iterable[float]) -> None:
        self._write(_floats(data, 3, "vector3"))

    def write_vector4(self, data: Iterable[float]) -> None:
        self._write(_floats(data, 4, "vector4"))

    def write_color3f(self, data: Sequence[float]) -> None:
        """Write red, green and blue; any alpha component is dropped."""
        self._write(_floats(tuple(data)[:3], 3, "color3f"))

    def write_color4f(self, data: Iterable[float]) -> None:
        self._write(_floats(data, 4, "color4f"))

    def write_matrix(self, data: Sequence[float] | Sequence[Sequence[float]]) -> None:
        """Write a 4x4 matrix given as 16 values or as four rows, row by row."""
        self._write(_floats(_flatten_matrix(data), 16, "matrix"))

    def write_quaternion(self, data: Iterable[float]) -> None:
        self._write(_floats(data, 4, "quaternion"))

    def write_string(self, data: str) -> None:
        """Write the UTF-8 byte length as an unsigned int, then the bytes."""
        encoded = data.encode("utf-8")
        self.write_uint(len(encoded))
        self._write(encoded)

    def write_bytes(self, data: bytes) -> None:
        self._write(bytes(data))


class BinaryReader:
    """Reads values written by :class:`BinaryWriter`."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self._file: BinaryIO | None = open(_check_path(path), "rb")

    def close(self) -> None:
        """Close the file; closing twice is harmless."""
        if self._file is not None:
            self._file.close()
            self._file = None

    def __enter__(self) -> BinaryReader:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def _read(self, size: int) -> bytes:
        if self._file is None:
            raise ValueError("reader is closed")
        data = self._file.read(size)
        if len(data) != size:
            raise EOFError(f"expected {size} bytes, got {len(data)}")
        return data

    def _unpack(self, fmt: struct.Struct):
        return fmt.unpack(self._read(fmt.size))[0]

    def _read_floats(self, count: int) -> tuple[float, ...]:
        return struct.unpack(f"<{count}f", self._read(4 * count))

    def read_bool(self) -> bool:
        return self._read(1) != b"\x00"

    def read_word(self) -> int:
        return self._unpack(_WORD)

    def read_int(self) -> int:
        return self._unpack(_INT)

    def read_uint(self) -> int:
        return self._unpack(_UINT)

    def read_float(self) -> float:
        return self._unpack(_FLOAT)

    def read_double(self) -> float:
        return self._unpack(_DOUBLE)

    def read_vector2(self) -> tuple[float, float]:
        return self._read_floats(2)  # type: ignore[return-value]

    def read_vector3(self) -> tuple[float, float, float]:
        return self._read_floats(3)  # type: ignore[return-value]

    def read_vector4(self) -> tuple[float, float, float, float]:
        return self._read_floats(4)  # type: ignore[return-value]

    def read_color3f(self) -> tuple[float, float, float, float]:
        """Read red, green and blue; alpha is set to 1.0."""
        r, g, b = self._read_floats(3)
        return (r, g, b, 1.0)

    def read_color4f(self) -> tuple[float, float, float, float]:
        return self._read_floats(4)  # type: ignore[return-value]

    def read_matrix(self) -> tuple[tuple[float, ...], ...]:
        """Read a 4x4 matrix as four rows of four values."""
        values = self._read_floats(16)
        return tuple(values[row * 4 : row * 4 + 4] for row in range(4))

    def read_string(self) -> str:
        size = self.read_int()
        if size < 0:
            raise ValueError(f"invalid string length {size}")
        return self._read(size).decode("utf-8")

    def read_bytes(self, size: int) -> bytes:
        return self._read(size)
# shapecodec/core/encoded.py
"""
Encoded shapes: delta + varint coding of (lng, lat) point sequences.

Two sample formats share one encoder/decoder skeleton:
  - varint5: Google "Encoded Polyline", 5 bits per byte offset by 63,
    every byte lands in printable ASCII (63..126)
  - varint7: 7 bits per byte, high bit is the continuation flag (binary)

Both are little-endian by chunk, zig-zag signed, and delta coded against the
previous sample of the same axis.  Latitude is written before longitude.
Precision is not carried in the stream; both ends must agree on it.
"""
from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import Any, Callable, Iterable, Iterator, List, Optional, Tuple, Type, Union

from shapecodec.core.geometry import PointLL, lnglat
from shapecodec.core.settings import settings

Buffer = Union[bytes, bytearray, memoryview, str]


class MalformedStream(ValueError):
    """Encoded buffer ended before the current sample was terminated."""

    def __init__(self, position: int, message: str = "Bad encoded polyline"):
        super().__init__(f"{message} (at byte {position})")
        self.position = position


# ──────────────────────────────────────────────────────────────
# Precision
# ──────────────────────────────────────────────────────────────

# Stored shapes use 6 digits; 7 is opt-in and breaks existing data.
DIGITS_PRECISION = 7 if settings.use_7digits_default else 6
ENCODE_PRECISION = 10 ** DIGITS_PRECISION
DECODE_PRECISION = 1 / ENCODE_PRECISION


def precision_for_digits(digits: int) -> Tuple[int, float]:
    """(encode multiplier, decode multiplier) for a number of decimal digits."""
    if not 0 <= digits <= 10:
        raise ValueError(f"precision digits must be within 0..10, got {digits}")
    factor = 10 ** digits
    return factor, 1 / factor


def _round(v: float) -> int:
    # half away from zero, like C round()
    a = abs(v)
    n = math.floor(a)
    if a - n >= 0.5:
        n += 1
    return -n if v < 0 else n


# ──────────────────────────────────────────────────────────────
# Zig-zag
# ──────────────────────────────────────────────────────────────

def zigzag_encode(d: int) -> int:
    return ~(d << 1) if d < 0 else (d << 1)


def zigzag_decode(u: int) -> int:
    return ~(u >> 1) if (u & 1) else (u >> 1)


# ──────────────────────────────────────────────────────────────
# Cursor
# ──────────────────────────────────────────────────────────────

def _as_bytes(buffer: Buffer) -> Union[bytes, bytearray, memoryview]:
    if isinstance(buffer, str):
        try:
            return buffer.encode("latin-1")
        except UnicodeEncodeError as e:
            raise MalformedStream(e.start, "Non-byte character in encoded polyline") from e
    if isinstance(buffer, (bytes, bytearray)):
        return buffer
    return memoryview(buffer).cast("B")


class ByteCursor:
    """Forward-only, bounds-checked read position over an encoded buffer."""

    __slots__ = ("_buf", "_pos", "_end")

    def __init__(self, buffer: Buffer, size: Optional[int] = None):
        data = _as_bytes(buffer)
        if size is None:
            size = len(data)
        elif size < 0 or size > len(data):
            raise ValueError(f"size {size} outside buffer of {len(data)} bytes")
        self._buf = data
        self._pos = 0
        self._end = size

    @property
    def position(self) -> int:
        return self._pos

    @property
    def size(self) -> int:
        return self._end

    @property
    def remaining(self) -> int:
        return self._end - self._pos

    def empty(self) -> bool:
        return self._pos >= self._end

    def next_byte(self) -> int:
        if self._pos >= self._end:
            raise MalformedStream(self._pos)
        b = self._buf[self._pos]
        self._pos += 1
        return b


# ──────────────────────────────────────────────────────────────
# Sample codecs
# ──────────────────────────────────────────────────────────────

class SampleCodec(ABC):
    """Variable-length coding of one signed delta."""

    name: str

    @abstractmethod
    def encode_one(self, delta: int, out: bytearray) -> None:
        ...

    @abstractmethod
    def decode_one(self, cursor: ByteCursor, previous: int) -> int:
        """Decode one delta and fold it into `previous`."""
        ...


class Varint5Codec(SampleCodec):
    name = "polyline5"

    def encode_one(self, delta: int, out: bytearray) -> None:
        v = zigzag_encode(delta)
        while v >= 0x20:
            out.append((0x20 | (v & 0x1F)) + 63)
            v >>= 5
        out.append(v + 63)

    def decode_one(self, cursor: ByteCursor, previous: int) -> int:
        result = 0
        shift = 0
        while True:
            b = cursor.next_byte() - 63
            result |= (b & 0x1F) << shift
            shift += 5
            if b < 0x20:
                break
        return previous + zigzag_decode(result)


class Varint7Codec(SampleCodec):
    name = "varint7"

    def encode_one(self, delta: int, out: bytearray) -> None:
        v = zigzag_encode(delta)
        while v > 0x7F:
            out.append(0x80 | (v & 0x7F))
            v >>= 7
        out.append(v)

    def decode_one(self, cursor: ByteCursor, previous: int) -> int:
        result = 0
        shift = 0
        while True:
            byte = cursor.next_byte()
            result |= (byte & 0x7F) << shift
            shift += 7
            if not byte & 0x80:
                break
        return previous + zigzag_decode(result)


VARINT5 = Varint5Codec()
VARINT7 = Varint7Codec()


def encode7_sample(number: int, out: bytearray) -> None:
    """Append one already-scaled sample to `out` as varint7."""
    VARINT7.encode_one(number, out)


def decode7_sample(cursor: ByteCursor, previous: int) -> int:
    """Decode the next varint7 sample from `cursor` relative to `previous`."""
    return VARINT7.decode_one(cursor, previous)


# ──────────────────────────────────────────────────────────────
# Point sequence decoders
# ──────────────────────────────────────────────────────────────

class ShapeDecoder:
    """
    Lazily decodes points from an encoded buffer, one pop() at a time.

    Holds a running integer per axis; every pop() reads the latitude delta
    then the longitude delta.  Not restartable.  Always check empty()
    before pop(); popping an exhausted decoder raises MalformedStream.
    """

    codec: SampleCodec = VARINT5

    def __init__(
        self,
        buffer: Buffer,
        size: Optional[int] = None,
        precision: float = DECODE_PRECISION,
        point: Callable[[float, float], Any] = PointLL,
    ):
        self._cursor = ByteCursor(buffer, size)
        self.precision = precision
        self.point = point
        self.lat = 0
        self.lon = 0

    @property
    def size(self) -> int:
        return self._cursor.size

    def pop(self) -> Any:
        lat = self.codec.decode_one(self._cursor, self.lat)
        lon = self.codec.decode_one(self._cursor, self.lon)
        self.lat = lat
        self.lon = lon
        return self.point(lon * self.precision, lat * self.precision)

    def empty(self) -> bool:
        return self._cursor.empty()

    def __iter__(self) -> Iterator[Any]:
        while not self.empty():
            yield self.pop()


class Shape5Decoder(ShapeDecoder):
    codec = VARINT5


class Shape7Decoder(ShapeDecoder):
    codec = VARINT7


# ──────────────────────────────────────────────────────────────
# Decode dispatch
# ──────────────────────────────────────────────────────────────

def decode(
    encoded: Buffer,
    precision: float = DECODE_PRECISION,
    *,
    size: Optional[int] = None,
    container: Callable[[], Any] = list,
    point: Callable[[float, float], Any] = PointLL,
    decoder: Type[ShapeDecoder] = Shape5Decoder,
) -> Any:
    """
    Decode an encoded shape into a fresh container of points.

    `container` is any zero-arg factory whose product has append().  If the
    product also has reserve(n), it is sized up front at roughly one point
    per four bytes.
    """
    shape = decoder(encoded, size, precision, point)
    c = container()
    reserve = getattr(c, "reserve", None)
    if callable(reserve):
        reserve(shape.size // 4)
    append = c.append
    while not shape.empty():
        append(shape.pop())
    return c


def decode7(
    encoded: Buffer,
    precision: float = DECODE_PRECISION,
    *,
    size: Optional[int] = None,
    container: Callable[[], Any] = list,
    point: Callable[[float, float], Any] = PointLL,
) -> Any:
    """Varint7 variant of decode()."""
    return decode(
        encoded,
        precision,
        size=size,
        container=container,
        point=point,
        decoder=Shape7Decoder,
    )


# ──────────────────────────────────────────────────────────────
# Encode
# ──────────────────────────────────────────────────────────────

def _encode_points(points: Iterable[Any], precision: int, codec: SampleCodec) -> bytearray:
    out = bytearray()
    # offset encoding, remember the last point
    last_lon = 0
    last_lat = 0
    for p in points:
        lng, lat = lnglat(p)
        lon_i = _round(lng * precision)
        lat_i = _round(lat * precision)
        codec.encode_one(lat_i - last_lat, out)
        codec.encode_one(lon_i - last_lon, out)
        last_lon = lon_i
        last_lat = lat_i
    return out


def encode(points: Iterable[Any], precision: int = ENCODE_PRECISION) -> str:
    """
    Encode (lng, lat) points as an Encoded Polyline string.

    Scaled coordinates are expected to fit a signed 32-bit integer; valid
    lng/lat at up to 7 digits always do.
    """
    return _encode_points(points, precision, VARINT5).decode("ascii")


def encode7(points: Iterable[Any], precision: int = ENCODE_PRECISION) -> bytes:
    """Encode (lng, lat) points as varint7 bytes."""
    return bytes(_encode_points(points, precision, VARINT7))


# ──────────────────────────────────────────────────────────────
# 1-D sample series (elevation profiles etc.)
# ──────────────────────────────────────────────────────────────

def encode7_samples(values: Iterable[float], precision: int = ENCODE_PRECISION) -> bytes:
    out = bytearray()
    last = 0
    for value in values:
        scaled = _round(float(value) * precision)
        encode7_sample(scaled - last, out)
        last = scaled
    return bytes(out)


def decode7_samples(encoded: Buffer, precision: float = DECODE_PRECISION) -> List[float]:
    cursor = ByteCursor(encoded)
    values: List[float] = []
    last = 0
    while not cursor.empty():
        last = decode7_sample(cursor, last)
        values.append(last * precision)
    return values

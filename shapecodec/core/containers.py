from __future__ import annotations

from array import array
from typing import Any, Iterable, Iterator, List

from shapecodec.core.geometry import PointLL, lnglat


class CoordinateArray:
    """
    Growable (lng, lat) store backed by one flat array('d').

    Much smaller than a list of tuples for long shapes.  reserve() pre-sizes
    the backing array so decode() can append in place; len() only counts
    points actually appended.
    """

    __slots__ = ("_data", "_n")

    def __init__(self, points: Iterable[Any] = ()):
        self._data = array("d")
        self._n = 0
        self.extend(points)

    @property
    def capacity(self) -> int:
        return len(self._data) // 2

    def reserve(self, n: int) -> None:
        need = 2 * n - len(self._data)
        if need > 0:
            self._data.frombytes(bytes(need * self._data.itemsize))

    def append(self, p: Any) -> None:
        lng, lat = lnglat(p)
        i = 2 * self._n
        if i < len(self._data):
            self._data[i] = lng
            self._data[i + 1] = lat
        else:
            self._data.append(lng)
            self._data.append(lat)
        self._n += 1

    def extend(self, points: Iterable[Any]) -> None:
        for p in points:
            self.append(p)

    def to_list(self) -> List[PointLL]:
        return list(self)

    def __len__(self) -> int:
        return self._n

    def __iter__(self) -> Iterator[PointLL]:
        d = self._data
        for i in range(0, 2 * self._n, 2):
            yield PointLL(d[i], d[i + 1])

    def __getitem__(self, i):
        if isinstance(i, slice):
            return [self[j] for j in range(*i.indices(self._n))]
        if i < 0:
            i += self._n
        if not 0 <= i < self._n:
            raise IndexError("CoordinateArray index out of range")
        return PointLL(self._data[2 * i], self._data[2 * i + 1])

    def __eq__(self, other: object) -> bool:
        if isinstance(other, CoordinateArray):
            return self.to_list() == other.to_list()
        if isinstance(other, (list, tuple)):
            return self.to_list() == [PointLL(*lnglat(p)) for p in other]
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"CoordinateArray({self.to_list()!r})"

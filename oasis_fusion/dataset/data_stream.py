################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Chronological multi-map of timestamped records.

Responsibility:
    Hold the records of one dataset key ordered by timestamp, allowing any
    number of records per timestamp, and answer bound queries over the
    distinct timestamps.

Determinism:
    - Records sharing a timestamp keep insertion order.
    - Timestamps are matched by exact float equality only; derived
      comparisons are done by bisection, never by arithmetic.
"""

from __future__ import annotations

from typing import Generic
from typing import Iterator
from typing import TypeVar

from sortedcontainers import SortedDict  # type: ignore[import-untyped]


T = TypeVar("T")


class DataStream(Generic[T]):
    """Ordered timestamp -> records multi-map with O(log n) bound queries."""

    def __init__(self) -> None:
        # Each bucket is a non-empty list in insertion order
        self._buckets: SortedDict = SortedDict()
        self._size: int = 0

    def __len__(self) -> int:
        """Return the number of records, counting duplicates."""
        return self._size

    def __iter__(self) -> Iterator[tuple[float, T]]:
        """Yield (timestamp, record) pairs in chronological order."""
        for timestamp, records in self._buckets.items():
            for record in records:
                yield timestamp, record

    def __repr__(self) -> str:
        return f"DataStream(records={self._size}, times={len(self._buckets)})"

    def add(self, timestamp: float, record: T) -> None:
        """Append a record at the timestamp after any existing records."""
        bucket: list[T] | None = self._buckets.get(timestamp)
        if bucket is None:
            self._buckets[float(timestamp)] = [record]
        else:
            bucket.append(record)
        self._size += 1

    def count(self, timestamp: float) -> int:
        """Return the number of records stored at the timestamp."""
        bucket: list[T] | None = self._buckets.get(timestamp)
        return len(bucket) if bucket is not None else 0

    def count_times(self) -> int:
        """Return the number of distinct timestamps."""
        return len(self._buckets)

    def contains_time(self, timestamp: float) -> bool:
        return timestamp in self._buckets

    def records_at(self, timestamp: float) -> list[T]:
        """Return a copy of the records at the timestamp."""
        return list(self._buckets.get(timestamp, ()))

    def get(self, timestamp: float, ordinal: int) -> T | None:
        """Return the ordinal-th record at the timestamp, if any."""
        bucket: list[T] | None = self._buckets.get(timestamp)
        if bucket is None or not 0 <= ordinal < len(bucket):
            return None
        return bucket[ordinal]

    def set(self, timestamp: float, ordinal: int, record: T) -> bool:
        """Replace the ordinal-th record at the timestamp."""
        bucket: list[T] | None = self._buckets.get(timestamp)
        if bucket is None or not 0 <= ordinal < len(bucket):
            return False
        bucket[ordinal] = record
        return True

    def remove(self, timestamp: float, ordinal: int) -> bool:
        """Erase the ordinal-th record at the timestamp.

        Records after it at the same timestamp shift down one rank.
        """
        bucket: list[T] | None = self._buckets.get(timestamp)
        if bucket is None or not 0 <= ordinal < len(bucket):
            return False
        del bucket[ordinal]
        if not bucket:
            del self._buckets[timestamp]
        self._size -= 1
        return True

    def remove_all(self, timestamp: float) -> int:
        """Erase every record at the timestamp and return how many."""
        bucket: list[T] | None = self._buckets.pop(timestamp, None)
        if bucket is None:
            return 0
        self._size -= len(bucket)
        return len(bucket)

    def times(self) -> Iterator[float]:
        """Yield the distinct timestamps in increasing order."""
        return iter(self._buckets.keys())

    def times_between(self, start: float, end: float) -> Iterator[float]:
        """Yield the distinct timestamps in [start, end]."""
        return iter(self._buckets.irange(start, end, inclusive=(True, True)))

    def first_time(self) -> float | None:
        if not self._buckets:
            return None
        return float(self._buckets.keys()[0])

    def last_time(self) -> float | None:
        if not self._buckets:
            return None
        return float(self._buckets.keys()[-1])

    def lower_bound(self, timestamp: float) -> float | None:
        """Return the smallest timestamp >= the given one."""
        index: int = self._buckets.bisect_left(timestamp)
        if index >= len(self._buckets):
            return None
        return float(self._buckets.keys()[index])

    def upper_bound(self, timestamp: float) -> float | None:
        """Return the smallest timestamp > the given one."""
        index: int = self._buckets.bisect_right(timestamp)
        if index >= len(self._buckets):
            return None
        return float(self._buckets.keys()[index])

    def below(self, timestamp: float) -> float | None:
        """Return the largest timestamp < the given one."""
        index: int = self._buckets.bisect_left(timestamp)
        if index == 0:
            return None
        return float(self._buckets.keys()[index - 1])

    def below_or_equal(self, timestamp: float) -> float | None:
        """Return the largest timestamp <= the given one."""
        index: int = self._buckets.bisect_right(timestamp)
        if index == 0:
            return None
        return float(self._buckets.keys()[index - 1])

    def closest(self, timestamp: float) -> float | None:
        """Return the stored timestamp nearest to the given one.

        On an exact tie between the neighbors below and above, the upper
        neighbor wins.
        """
        count: int = len(self._buckets)
        if count == 0:
            return None

        index: int = self._buckets.bisect_left(timestamp)
        if index == count:
            return float(self._buckets.keys()[-1])

        above: float = float(self._buckets.keys()[index])
        if above == timestamp or index == 0:
            return above

        below: float = float(self._buckets.keys()[index - 1])
        if (above - timestamp) <= (timestamp - below):
            return above
        return below

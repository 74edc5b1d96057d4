################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Keyed store of chronological record streams.

Responsibility:
    Map each semantic key (a sensor or state type) to a DataStream of
    records, address single records among duplicates, answer temporal bound
    and range queries, and merge stores.

Failure reporting:
    Lookups that produce no data return None, False or an empty list and
    report a DataSetFault through the module logger and the store's
    diagnostics counters. They never raise. The only raised error is
    DataSetError for a NaN timestamp on insert.

Concurrency:
    No internal locking. Mutation must be serialized by the caller, and
    iterators or references returned by a query are only valid until the
    next mutation of the same store.
"""

from __future__ import annotations

import copy
import logging
import math
from typing import Any
from typing import Callable
from typing import Generic
from typing import Iterator
from typing import TypeVar
from typing import cast

from sortedcontainers import SortedDict  # type: ignore[import-untyped]

from oasis_fusion.config.dataset_params import DataSetParams
from oasis_fusion.dataset.data_stream import DataStream
from oasis_fusion.dataset.dataset_diagnostics import DataSetDiagnostics
from oasis_fusion.dataset.dataset_diagnostics import DataSetError
from oasis_fusion.dataset.dataset_diagnostics import DataSetFault
from oasis_fusion.dataset.unique_id import UniqueID


K = TypeVar("K")
T = TypeVar("T")

_LOG: logging.Logger = logging.getLogger(__name__)


class DataSet(Generic[K, T]):
    """Multi-valued, time-indexed keyed store.

    Keys must be totally ordered. Keys without a natural ordering, such as
    enum members, need a sort_key callable mapping them to an ordered value.
    """

    def __init__(
        self,
        params: DataSetParams | None = None,
        *,
        sort_key: Callable[[K], Any] | None = None,
    ) -> None:
        self._params: DataSetParams = params or DataSetParams.defaults()
        self._params.validate()
        self._streams: SortedDict = (
            SortedDict(sort_key) if sort_key is not None else SortedDict()
        )
        self._fault_counts: dict[DataSetFault, int] = {
            fault: 0 for fault in DataSetFault
        }

    def __iter__(self) -> Iterator[tuple[K, DataStream[T]]]:
        """Yield (key, stream) pairs in key order."""
        return iter(self._streams.items())

    def __contains__(self, key: object) -> bool:
        return key in self._streams

    def __repr__(self) -> str:
        return f"{type(self).__name__}(keys={list(self._streams.keys())!r})"

    @property
    def params(self) -> DataSetParams:
        return self._params

    ############################################################################
    # Keyed stream index
    ############################################################################

    def add_element(self, key: K, timestamp: float, record: T) -> None:
        """Append a record at (key, timestamp), keeping existing records."""
        if math.isnan(timestamp):
            raise DataSetError(f"Timestamp of {key} must not be NaN")

        stream: DataStream[T] | None = self._streams.get(key)
        if stream is None:
            stream = DataStream()
            self._streams[key] = stream
        stream.add(timestamp, record)

    def check_id(self, key: K) -> bool:
        return key in self._streams

    def check_element(self, key: K, timestamp: float, ordinal: int = 0) -> bool:
        """Return True if a record exists at (key, timestamp, ordinal)."""
        return ordinal >= 0 and self.count_element(key, timestamp) > ordinal

    def clear(self) -> None:
        self._streams.clear()

    def empty(self) -> bool:
        return not self._streams

    ############################################################################
    # Element addressing
    ############################################################################

    def get_element(self, key: K, timestamp: float, ordinal: int = 0) -> T | None:
        """Return the record at (key, timestamp, ordinal).

        The stored object itself is returned, so mutable records can be
        updated in place. Returns None if the record does not exist.
        """
        stream: DataStream[T] | None = self._streams.get(key)
        if stream is None or not 0 <= ordinal < stream.count(timestamp):
            self._report_missing_element(key, timestamp, ordinal)
            return None
        return stream.get(timestamp, ordinal)

    def set_element(self, key: K, timestamp: float, ordinal: int, record: T) -> bool:
        """Replace the record at (key, timestamp, ordinal)."""
        stream: DataStream[T] | None = self._streams.get(key)
        if stream is None or not stream.set(timestamp, ordinal, record):
            self._report_missing_element(key, timestamp, ordinal)
            return False
        return True

    def remove_element(
        self, key: K, timestamp: float, ordinal: int | None = None
    ) -> bool:
        """Remove a record, dropping the key when its stream becomes empty.

        With an ordinal, the ordinal-th record at the timestamp is erased and
        the records after it are re-ranked. Without an ordinal, all records at
        the timestamp are erased; this is only unambiguous when exactly one
        record is stored there.
        """
        stream: DataStream[T] | None = self._streams.get(key)
        if stream is None:
            self._report_missing_element(key, timestamp, ordinal)
            return False

        if ordinal is None:
            removed: int = stream.remove_all(timestamp)
            if removed == 0:
                self._report_missing_element(key, timestamp, ordinal)
                return False
            if removed > 1:
                _LOG.warning(
                    "Removed %d records of %s at %s without an ordinal",
                    removed,
                    key,
                    timestamp,
                )
        elif not stream.remove(timestamp, ordinal):
            self._report_missing_element(key, timestamp, ordinal)
            return False

        if len(stream) == 0:
            del self._streams[key]
        return True

    def get_unique_ids(self, key: K) -> Iterator[UniqueID[K]] | None:
        """Return a lazy iterator over the live IDs of a key.

        IDs are ordered by timestamp, then ordinal. Returns None if the key
        does not exist.
        """
        stream: DataStream[T] | None = self._streams.get(key)
        if stream is None:
            self._report(DataSetFault.NOT_FOUND, "There is no key %s", key)
            return None
        return self._iter_unique_ids(key, stream)

    @staticmethod
    def _iter_unique_ids(key: K, stream: DataStream[T]) -> Iterator[UniqueID[K]]:
        for timestamp in stream.times():
            for ordinal in range(stream.count(timestamp)):
                yield UniqueID(key, timestamp, ordinal)

    def count_element(self, key: K, timestamp: float) -> int:
        """Return the number of records at (key, timestamp)."""
        stream: DataStream[T] | None = self._streams.get(key)
        return stream.count(timestamp) if stream is not None else 0

    def count_elements(self, key: K) -> int:
        """Return the number of records of a key, counting duplicates."""
        stream: DataStream[T] | None = self._streams.get(key)
        return len(stream) if stream is not None else 0

    def count_times(self, key: K) -> int:
        """Return the number of records of a key, counting duplicates.

        Same as count_elements(); use count_distinct_times() for the number
        of distinct timestamps.
        """
        return self.count_elements(key)

    def count_distinct_times(self, key: K) -> int:
        """Return the number of distinct timestamps of a key."""
        stream: DataStream[T] | None = self._streams.get(key)
        return stream.count_times() if stream is not None else 0

    ############################################################################
    # Temporal queries
    ############################################################################

    def get_time_first(self, key: K) -> float | None:
        stream: DataStream[T] | None = self._get_stream(key)
        return stream.first_time() if stream is not None else None

    def get_time_last(self, key: K) -> float | None:
        stream: DataStream[T] | None = self._get_stream(key)
        return stream.last_time() if stream is not None else None

    def get_time_first_overall(self) -> float | None:
        """Return the earliest timestamp across all keys."""
        if not self._streams:
            self._report(DataSetFault.EMPTY_COLLECTION, "Dataset is empty")
            return None

        # Streams are never empty
        return min(
            cast(float, stream.first_time()) for stream in self._streams.values()
        )

    def get_time_next(self, key: K, timestamp: float) -> float | None:
        """Return the stored timestamp following a stored timestamp."""
        stream: DataStream[T] | None = self._get_stream_at(key, timestamp)
        if stream is None:
            return None
        return stream.upper_bound(timestamp)

    def get_time_prev(self, key: K, timestamp: float) -> float | None:
        """Return the distinct stored timestamp preceding a stored timestamp.

        Duplicates at the given timestamp do not affect the result.
        """
        stream: DataStream[T] | None = self._get_stream_at(key, timestamp)
        if stream is None:
            return None
        return stream.below(timestamp)

    def get_time_above_or_equal(self, key: K, timestamp: float) -> float | None:
        stream: DataStream[T] | None = self._get_stream(key)
        return stream.lower_bound(timestamp) if stream is not None else None

    def get_time_above(self, key: K, timestamp: float) -> float | None:
        stream: DataStream[T] | None = self._get_stream(key)
        return stream.upper_bound(timestamp) if stream is not None else None

    def get_time_below(self, key: K, timestamp: float) -> float | None:
        stream: DataStream[T] | None = self._get_stream(key)
        return stream.below(timestamp) if stream is not None else None

    def get_time_below_or_equal(self, key: K, timestamp: float) -> float | None:
        stream: DataStream[T] | None = self._get_stream(key)
        if stream is None:
            return None

        time_out: float | None = stream.below_or_equal(timestamp)
        if time_out is None:
            _LOG.debug("Key %s does not have any element below %s", key, timestamp)
        return time_out

    def get_time_close_to(self, key: K, timestamp: float) -> float | None:
        """Return the stored timestamp closest to the given one.

        When the neighbors below and above are equally distant, the one
        above is returned.
        """
        stream: DataStream[T] | None = self._get_stream(key)
        return stream.closest(timestamp) if stream is not None else None

    def get_elements(self, key: K, timestamp: float) -> list[T]:
        """Return all records at (key, timestamp) in insertion order."""
        stream: DataStream[T] | None = self._streams.get(key)
        records: list[T] = stream.records_at(timestamp) if stream is not None else []
        if not records:
            self._log_empty_result("get_elements", key)
        return records

    def get_elements_between(self, key: K, start: float, end: float) -> list[T]:
        """Return all records with start <= timestamp <= end.

        Records are ordered chronologically, with duplicates in insertion
        order.
        """
        stream: DataStream[T] | None = self._get_stream(key)
        if stream is None:
            return []

        if start == end:
            return self.get_elements(key, start)

        time_last: float | None = stream.below_or_equal(end)
        if time_last is None:
            _LOG.debug("Did not find upper bound of %s at %s", key, end)
            self._log_empty_result("get_elements_between", key)
            return []

        time_first: float | None = stream.lower_bound(start)
        if time_first is None:
            _LOG.debug("Did not find lower bound of %s at %s", key, start)
            self._log_empty_result("get_elements_between", key)
            return []

        if time_first > time_last:
            self._report(
                DataSetFault.INVALID_RANGE,
                "There is no element of %s between %ss and %ss",
                key,
                start,
                end,
            )
            return []

        records: list[T] = []
        for timestamp in stream.times_between(time_first, time_last):
            records.extend(stream.records_at(timestamp))
        return records

    def get_elements_of_id(self, key: K) -> list[T]:
        """Return every record of a key in chronological order."""
        stream: DataStream[T] | None = self._streams.get(key)
        records: list[T] = [record for _, record in stream] if stream else []
        if not records:
            self._log_empty_result("get_elements_of_id", key)
        return records

    def get_times_of_id(self, key: K) -> list[float] | None:
        """Return the distinct timestamps of a key."""
        stream: DataStream[T] | None = self._get_stream(key)
        if stream is None:
            return None
        return list(stream.times())

    def get_times_between(
        self, key: K, start: float, end: float
    ) -> list[float] | None:
        """Return the distinct timestamps with start <= timestamp <= end.

        Returns None if the key is absent, start > end, or either border
        cannot be resolved.
        """
        stream: DataStream[T] | None = self._get_stream(key)
        if stream is None:
            return None

        borders: tuple[float, float] | None = self._find_borders_equal(
            key, stream, start, end
        )
        if borders is None:
            _LOG.debug(
                "Could not find timestamps between %s and %s for %s", start, end, key
            )
            return None

        time_first, time_last = borders
        if time_first > time_last:
            return []
        return list(stream.times_between(time_first, time_last))

    def get_times_below_or_equal(self, key: K, end: float) -> list[float] | None:
        """Return the distinct timestamps from the first one up to end."""
        stream: DataStream[T] | None = self._get_stream(key)
        if stream is None:
            return None

        time_first: float | None = stream.first_time()
        time_last: float | None = stream.below_or_equal(end)
        if time_first is None or time_last is None:
            self._report(
                DataSetFault.NOT_FOUND,
                "Could not find timestamps of %s before %s",
                key,
                end,
            )
            return None
        return list(stream.times_between(time_first, time_last))

    def get_keys_all(self) -> list[K]:
        """Return all keys in key order."""
        keys: list[K] = list(self._streams.keys())
        if not keys:
            self._log_empty_result("get_keys_all", None)
        return keys

    def get_keys_at_time(self, timestamp: float) -> list[K]:
        """Return the keys that store the given timestamp."""
        keys: list[K] = [
            key
            for key, stream in self._streams.items()
            if stream.contains_time(timestamp)
        ]
        if not keys:
            self._log_empty_result("get_keys_at_time", None)
        return keys

    ############################################################################
    # Mutation and composition
    ############################################################################

    def merge(self, other: DataSet[K, T]) -> None:
        """Insert every record of another dataset into this one.

        Duplicates are kept. The other dataset is not modified.
        """
        # Snapshot first so merging a dataset into itself terminates
        items: list[tuple[K, float, T]] = [
            (key, timestamp, record)
            for key, stream in other
            for timestamp, record in stream
        ]
        for key, timestamp, record in items:
            if self._params.copy_on_merge:
                record = copy.deepcopy(record)
            self.add_element(key, timestamp, record)

    ############################################################################
    # Diagnostics
    ############################################################################

    def diagnostics(self) -> DataSetDiagnostics:
        """Return a snapshot of the recorded fault counts."""
        return DataSetDiagnostics.from_counts(self._fault_counts)

    def reset_diagnostics(self) -> None:
        for fault in self._fault_counts:
            self._fault_counts[fault] = 0

    ############################################################################
    # Helpers
    ############################################################################

    def _get_stream(self, key: K) -> DataStream[T] | None:
        stream: DataStream[T] | None = self._streams.get(key)
        if stream is None:
            self._report(DataSetFault.NOT_FOUND, "Key does not exist: %s", key)
        return stream

    def _get_stream_at(self, key: K, timestamp: float) -> DataStream[T] | None:
        """Return the stream of a key only if it stores the timestamp."""
        stream: DataStream[T] | None = self._streams.get(key)
        if stream is None or not stream.contains_time(timestamp):
            self._report(
                DataSetFault.NOT_FOUND, "Key %s has no element at %s", key, timestamp
            )
            return None
        return stream

    def _find_borders_equal(
        self, key: K, stream: DataStream[T], start: float, end: float
    ) -> tuple[float, float] | None:
        """Resolve inclusive range borders to stored timestamps."""
        if start > end:
            self._report(
                DataSetFault.INVALID_RANGE,
                "Start %s is greater than end %s for %s",
                start,
                end,
                key,
            )
            return None

        time_first: float | None = stream.lower_bound(start)
        if time_first is None:
            self._report(
                DataSetFault.NOT_FOUND, "There is no element of %s above %s", key, start
            )
            return None

        time_last: float | None = stream.below_or_equal(end)
        if time_last is None:
            self._report(
                DataSetFault.NOT_FOUND, "There is no element of %s below %s", key, end
            )
            return None

        return time_first, time_last

    def _report_missing_element(
        self, key: K, timestamp: float, ordinal: int | None
    ) -> None:
        self._report(
            DataSetFault.NOT_FOUND,
            "Element doesn't exist at %s type: %s number: %s",
            timestamp,
            key,
            ordinal,
        )

    def _report(self, fault: DataSetFault, message: str, *args: Any) -> None:
        if self._params.track_diagnostics:
            self._fault_counts[fault] += 1
        if self._params.log_faults:
            _LOG.warning("[%s] " + message, fault.value, *args)

    def _log_empty_result(self, query: str, key: K | None) -> None:
        level: int = (
            logging.WARNING if self._params.warn_on_empty_result else logging.DEBUG
        )
        if key is None:
            _LOG.log(level, "%s returned an empty list", query)
        else:
            _LOG.log(level, "%s returned an empty list for %s", query, key)

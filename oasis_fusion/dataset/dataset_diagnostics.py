################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Fault taxonomy and diagnostics for temporal datasets."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class DataSetError(ValueError):
    """Raised when an insert would corrupt the dataset ordering."""


class DataSetFault(enum.Enum):
    """Recoverable conditions where a dataset operation produced no data.

    Members:
        NOT_FOUND: A key, timestamp, or ordinal does not exist
        EMPTY_COLLECTION: An aggregate query has no defined answer
        INVALID_RANGE: A range query has its start border after its end
    """

    NOT_FOUND = "not_found"
    EMPTY_COLLECTION = "empty_collection"
    INVALID_RANGE = "invalid_range"


@dataclass(frozen=True)
class DataSetDiagnostics:
    """Snapshot of fault counts recorded by a dataset.

    Attributes:
        not_found: Number of NOT_FOUND faults
        empty_collection: Number of EMPTY_COLLECTION faults
        invalid_range: Number of INVALID_RANGE faults
    """

    not_found: int = 0
    empty_collection: int = 0
    invalid_range: int = 0

    def __post_init__(self) -> None:
        """Validate counter fields."""
        for name in ("not_found", "empty_collection", "invalid_range"):
            value: object = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool):
                raise ValueError(f"{name} must be an int")
            if value < 0:
                raise ValueError(f"{name} must be non-negative")

    @classmethod
    def from_counts(cls, counts: dict[DataSetFault, int]) -> DataSetDiagnostics:
        """Build a snapshot from per-fault counts."""
        return cls(
            not_found=counts.get(DataSetFault.NOT_FOUND, 0),
            empty_collection=counts.get(DataSetFault.EMPTY_COLLECTION, 0),
            invalid_range=counts.get(DataSetFault.INVALID_RANGE, 0),
        )

    def count(self, fault: DataSetFault) -> int:
        """Return the count for a single fault kind."""
        return int(getattr(self, fault.value))

    def total(self) -> int:
        """Return the number of faults of any kind."""
        return self.not_found + self.empty_collection + self.invalid_range

    def has_faults(self) -> bool:
        """Return True when any fault was recorded."""
        return self.total() > 0

    def to_dict(self) -> dict[str, int]:
        """Return a dictionary representation of the diagnostics."""
        return {
            "not_found": self.not_found,
            "empty_collection": self.empty_collection,
            "invalid_range": self.invalid_range,
        }

################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Addressing of single records inside a temporal dataset."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic
from typing import TypeVar


K = TypeVar("K")


@dataclass(frozen=True)
class UniqueID(Generic[K]):
    """Name one record among duplicates at the same key and timestamp.

    The ordinal is a positional rank among the records stored at
    (key, timestamp), in insertion order. It is not a durable handle:
    inserting or removing a record at the same (key, timestamp) re-ranks the
    other records there. Enumerate IDs again after every mutation.

    Attributes:
        key: Stream key of the record
        timestamp: Timestamp of the record in seconds
        ordinal: Zero-based rank among records sharing key and timestamp
    """

    key: K
    timestamp: float
    ordinal: int = 0

    def __str__(self) -> str:
        return f"{self.key} {self.timestamp} {self.ordinal}"

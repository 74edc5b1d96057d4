################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Tests for record addressing IDs."""

from __future__ import annotations

from oasis_fusion.dataset.unique_id import UniqueID


def test_equality_uses_all_fields() -> None:
    """IDs should only be equal when key, timestamp and ordinal match."""
    assert UniqueID("A", 1.0, 0) == UniqueID("A", 1.0)
    assert UniqueID("A", 1.0, 0) != UniqueID("A", 1.0, 1)
    assert UniqueID("A", 1.0, 0) != UniqueID("A", 2.0, 0)
    assert UniqueID("A", 1.0, 0) != UniqueID("B", 1.0, 0)


def test_hashable() -> None:
    """IDs should be usable as dict keys."""
    ids: set[UniqueID[str]] = {UniqueID("A", 1.0, 0), UniqueID("A", 1.0, 0)}
    assert len(ids) == 1


def test_str() -> None:
    """IDs should print as key, timestamp and ordinal."""
    assert str(UniqueID("position", 2.5, 1)) == "position 2.5 1"

################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Tests for merging and iterating datasets."""

from __future__ import annotations

from oasis_fusion.config.dataset_params import DataSetParams
from oasis_fusion.dataset.data_set import DataSet
from oasis_fusion.dataset.data_stream import DataStream


def test_merge_is_union() -> None:
    """Merging should keep both records at a shared timestamp."""
    dataset_a: DataSet[str, str] = DataSet()
    dataset_b: DataSet[str, str] = DataSet()
    dataset_a.add_element("X", 1.0, "from_a")
    dataset_b.add_element("X", 1.0, "from_b")
    dataset_b.add_element("Y", 2.0, "only_b")

    dataset_a.merge(dataset_b)

    assert dataset_a.count_element("X", 1.0) == 2
    assert dataset_a.get_element("X", 1.0, 0) == "from_a"
    assert dataset_a.get_element("X", 1.0, 1) == "from_b"
    assert dataset_a.get_element("Y", 2.0) == "only_b"
    assert dataset_b.count_element("X", 1.0) == 1
    assert dataset_b.get_keys_all() == ["X", "Y"]


def test_merge_copies_records() -> None:
    """Merged records should be independent of the source records."""
    dataset_a: DataSet[str, list[int]] = DataSet()
    dataset_b: DataSet[str, list[int]] = DataSet()
    dataset_b.add_element("X", 1.0, [1])
    dataset_a.merge(dataset_b)

    merged: list[int] | None = dataset_a.get_element("X", 1.0)
    assert merged is not None
    merged.append(2)
    assert dataset_b.get_element("X", 1.0) == [1]


def test_merge_without_copy_aliases_records() -> None:
    """Disabling copy_on_merge should share the record objects."""
    params: DataSetParams = DataSetParams.defaults().replace(copy_on_merge=False)
    dataset_a: DataSet[str, list[int]] = DataSet(params)
    dataset_b: DataSet[str, list[int]] = DataSet()
    record: list[int] = [1]
    dataset_b.add_element("X", 1.0, record)
    dataset_a.merge(dataset_b)
    assert dataset_a.get_element("X", 1.0) is record


def test_merge_into_self_doubles_streams() -> None:
    """Merging a dataset into itself should terminate and double it."""
    dataset: DataSet[str, str] = DataSet()
    dataset.add_element("X", 1.0, "a")
    dataset.add_element("X", 2.0, "b")
    dataset.merge(dataset)
    assert dataset.count_elements("X") == 4
    assert dataset.get_elements("X", 1.0) == ["a", "a"]


def test_iteration_order() -> None:
    """Iteration should follow key order, then chronological order."""
    dataset: DataSet[str, str] = DataSet()
    dataset.add_element("b", 2.0, "b2")
    dataset.add_element("a", 3.0, "a3")
    dataset.add_element("b", 1.0, "b1")
    dataset.add_element("b", 1.0, "b1'")

    keys: list[str] = []
    records: list[tuple[float, str]] = []
    stream: DataStream[str]
    for key, stream in dataset:
        keys.append(key)
        records.extend(stream)

    assert keys == ["a", "b"]
    assert records == [(3.0, "a3"), (1.0, "b1"), (1.0, "b1'"), (2.0, "b2")]


def test_non_empty_stream_invariant() -> None:
    """Every iterated key should have at least one record."""
    dataset: DataSet[str, int] = DataSet()
    for index in range(5):
        dataset.add_element("k", float(index), index)
        dataset.add_element("j", float(index), index)
    for index in range(5):
        assert dataset.remove_element("k", float(index), 0)

    assert not dataset.check_id("k")
    for key, stream in dataset:
        assert len(stream) > 0
        assert dataset.count_elements(key) > 0

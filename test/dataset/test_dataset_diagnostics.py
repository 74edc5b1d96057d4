################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Tests for dataset fault reporting."""

from __future__ import annotations

import logging

import pytest

from oasis_fusion.config.dataset_params import DataSetParams
from oasis_fusion.dataset.data_set import DataSet
from oasis_fusion.dataset.dataset_diagnostics import DataSetDiagnostics
from oasis_fusion.dataset.dataset_diagnostics import DataSetFault


def test_faults_are_counted() -> None:
    """Each fault kind should increment its own counter."""
    dataset: DataSet[str, int] = DataSet()
    assert dataset.get_element("A", 1.0) is None
    assert dataset.get_time_first_overall() is None
    dataset.add_element("A", 1.0, 1)
    dataset.add_element("A", 5.0, 5)
    assert dataset.get_elements_between("A", 2.0, 4.0) == []

    diagnostics: DataSetDiagnostics = dataset.diagnostics()
    assert diagnostics.not_found == 1
    assert diagnostics.empty_collection == 1
    assert diagnostics.invalid_range == 1
    assert diagnostics.count(DataSetFault.INVALID_RANGE) == 1
    assert diagnostics.total() == 3
    assert diagnostics.has_faults()

    dataset.reset_diagnostics()
    assert not dataset.diagnostics().has_faults()


def test_start_after_end_is_invalid_range() -> None:
    """A reversed range should be reported as an invalid range."""
    dataset: DataSet[str, int] = DataSet()
    dataset.add_element("A", 1.0, 1)
    assert dataset.get_times_between("A", 3.0, 1.0) is None
    assert dataset.diagnostics().invalid_range == 1


def test_predicates_do_not_report() -> None:
    """Existence checks and counters should not count as faults."""
    dataset: DataSet[str, int] = DataSet()
    assert not dataset.check_id("A")
    assert not dataset.check_element("A", 1.0)
    assert dataset.count_element("A", 1.0) == 0
    assert dataset.count_elements("A") == 0
    assert dataset.count_times("A") == 0
    assert dataset.diagnostics().total() == 0


def test_tracking_disabled() -> None:
    """Disabling tracking should keep the counters at zero."""
    params: DataSetParams = DataSetParams.defaults().replace(
        track_diagnostics=False
    )
    dataset: DataSet[str, int] = DataSet(params)
    assert dataset.get_time_first("A") is None
    assert dataset.diagnostics().total() == 0


def test_faults_are_logged(caplog: pytest.LogCaptureFixture) -> None:
    """Faults should be logged as warnings naming the fault kind."""
    dataset: DataSet[str, int] = DataSet()
    with caplog.at_level(logging.WARNING, logger="oasis_fusion.dataset.data_set"):
        assert dataset.get_time_last("A") is None
    assert any("not_found" in record.getMessage() for record in caplog.records)


def test_fault_logging_disabled(caplog: pytest.LogCaptureFixture) -> None:
    """Disabling fault logging should silence fault records."""
    params: DataSetParams = DataSetParams.defaults().replace(log_faults=False)
    dataset: DataSet[str, int] = DataSet(params)
    with caplog.at_level(logging.WARNING, logger="oasis_fusion.dataset.data_set"):
        assert dataset.get_time_last("A") is None
    assert caplog.records == []
    assert dataset.diagnostics().not_found == 1


def test_empty_result_log_level(caplog: pytest.LogCaptureFixture) -> None:
    """Empty bulk results should drop to DEBUG when not warning."""
    params: DataSetParams = DataSetParams.defaults().replace(
        warn_on_empty_result=False
    )
    dataset: DataSet[str, int] = DataSet(params)
    with caplog.at_level(logging.DEBUG, logger="oasis_fusion.dataset.data_set"):
        assert dataset.get_keys_all() == []
    assert [record.levelno for record in caplog.records] == [logging.DEBUG]


def test_diagnostics_validation() -> None:
    """Negative or non-int counters should be rejected."""
    with pytest.raises(ValueError):
        DataSetDiagnostics(not_found=-1)
    with pytest.raises(ValueError):
        DataSetDiagnostics(invalid_range=True)


def test_diagnostics_to_dict() -> None:
    """Diagnostics should export every counter."""
    diagnostics: DataSetDiagnostics = DataSetDiagnostics.from_counts(
        {DataSetFault.NOT_FOUND: 2}
    )
    assert diagnostics.to_dict() == {
        "not_found": 2,
        "empty_collection": 0,
        "invalid_range": 0,
    }


def test_times_below_or_equal_without_match_is_counted() -> None:
    """A missing upper border should be reported as not found."""
    dataset: DataSet[str, int] = DataSet()
    dataset.add_element("k", 5.0, 5)
    assert dataset.get_times_below_or_equal("k", 1.0) is None
    assert dataset.diagnostics().not_found == 1


def test_missing_key_counted_for_any_range_width() -> None:
    """A missing key should be reported whether or not start equals end."""
    dataset: DataSet[str, int] = DataSet()
    assert dataset.get_elements_between("missing", 1.0, 1.0) == []
    assert dataset.diagnostics().not_found == 1
    assert dataset.get_elements_between("missing", 1.0, 2.0) == []
    assert dataset.diagnostics().not_found == 2

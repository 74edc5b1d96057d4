################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Estimated state records and the dataset keyed by state name."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass
from typing import Any

import numpy as np

from oasis_fusion.dataset.data_set import DataSet
from oasis_fusion.dataset.validation import as_float_array


class StateType(enum.Enum):
    """Kinds of estimated states and their vector dimension."""

    POINT_1 = 1
    POINT_2 = 2
    POINT_3 = 3
    CLOCK_ERROR = 4
    ANGLE = 5
    QUATERNION = 6

    @property
    def dimension(self) -> int:
        return _STATE_DIMENSIONS[self]


_STATE_DIMENSIONS: dict[StateType, int] = {
    StateType.POINT_1: 1,
    StateType.POINT_2: 2,
    StateType.POINT_3: 3,
    # Clock offset in m and drift in m/s
    StateType.CLOCK_ERROR: 2,
    StateType.ANGLE: 1,
    # Quaternion in wxyz order
    StateType.QUATERNION: 4,
}


@dataclass
class StateData:
    """Estimated state at one timestamp.

    States are refined in place by the estimator, so the mean and
    covariance are mutable through set_mean() and set_covariance().

    Attributes:
        state_type: Kind of state
        timestamp: Time of the estimate in seconds
        mean: State vector, shape (dimension,)
        covariance: State covariance, shape (dimension, dimension)
        name: Optional state name used as the dataset key, e.g. "position"
    """

    state_type: StateType
    timestamp: float
    mean: np.ndarray
    covariance: np.ndarray
    name: str | None = None

    def __post_init__(self) -> None:
        """Validate and normalize state fields."""
        if not isinstance(self.state_type, StateType):
            raise ValueError("state_type must be a StateType")
        if math.isnan(self.timestamp):
            raise ValueError("timestamp must not be NaN")
        if self.name is not None and not isinstance(self.name, str):
            raise ValueError("name must be a str")
        self.timestamp = float(self.timestamp)
        self.set_mean(self.mean)
        self.set_covariance(self.covariance)

    @classmethod
    def zeros(
        cls, state_type: StateType, timestamp: float, name: str | None = None
    ) -> StateData:
        """Return a state with zero mean and identity covariance."""
        dimension: int = state_type.dimension
        mean: np.ndarray = np.zeros(dimension, dtype=np.float64)
        if state_type is StateType.QUATERNION:
            mean[0] = 1.0
        return cls(
            state_type=state_type,
            timestamp=timestamp,
            mean=mean,
            covariance=np.eye(dimension, dtype=np.float64),
            name=name,
        )

    def set_mean(self, mean: Any) -> None:
        """Replace the state vector."""
        dimension: int = self.state_type.dimension
        self.mean = as_float_array(mean, "mean", (dimension,))

    def set_covariance(self, covariance: Any) -> None:
        """Replace the covariance, which must be symmetric."""
        dimension: int = self.state_type.dimension
        array: np.ndarray = as_float_array(
            covariance, "covariance", (dimension, dimension)
        )
        if not np.allclose(array, array.T):
            raise ValueError("covariance must be symmetric")
        self.covariance = array


class StateDataSet(DataSet[str, StateData]):
    """Result buffer keyed by state name, e.g. "position"."""

    def add_state(self, name: str, state: StateData) -> None:
        """Store a state under a name at its own timestamp."""
        self.add_element(name, state.timestamp, state)

    def add_named_state(self, state: StateData) -> None:
        """Store a state under its own name at its own timestamp."""
        if state.name is None:
            raise ValueError("state must have a name to be stored by name")
        self.add_element(state.name, state.timestamp, state)

    def add_new_state(
        self, name: str, state_type: StateType, timestamp: float
    ) -> StateData:
        """Create, store and return a zero-initialized state."""
        state: StateData = StateData.zeros(state_type, timestamp, name=name)
        self.add_named_state(state)
        return state


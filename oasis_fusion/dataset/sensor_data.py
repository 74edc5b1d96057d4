################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Sensor measurement records and the dataset keyed by sensor type."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass

import numpy as np

from oasis_fusion.config.dataset_params import DataSetParams
from oasis_fusion.dataset.data_set import DataSet
from oasis_fusion.dataset.validation import as_float_array


class SensorType(enum.Enum):
    """Kinds of sensor streams fed into the fusion pipelines."""

    RANGE_1 = "range_1"
    PSEUDORANGE_2 = "pseudorange_2"
    PSEUDORANGE_3 = "pseudorange_3"
    ODOM_2 = "odom_2"
    ODOM_3 = "odom_3"
    IMU = "imu"
    GNSS = "gnss"


# Ordering of sensor streams when iterating a SensorDataSet
_SENSOR_ORDER: dict[SensorType, int] = {
    SensorType.RANGE_1: 0,
    SensorType.PSEUDORANGE_2: 1,
    SensorType.PSEUDORANGE_3: 2,
    SensorType.ODOM_2: 3,
    SensorType.ODOM_3: 4,
    SensorType.IMU: 5,
    SensorType.GNSS: 6,
}

# Length of the measurement vector of each sensor type
#
#   - Ranges: distance in m
#   - Odom 2D: [vx, vy, yaw rate]
#   - Odom 3D: [vx, vy, vz, wx, wy, wz]
#   - IMU: [ax, ay, az, wx, wy, wz]
#   - GNSS: ECEF position in m
#
_SENSOR_DIMENSIONS: dict[SensorType, int] = {
    SensorType.RANGE_1: 1,
    SensorType.PSEUDORANGE_2: 1,
    SensorType.PSEUDORANGE_3: 1,
    SensorType.ODOM_2: 3,
    SensorType.ODOM_3: 6,
    SensorType.IMU: 6,
    SensorType.GNSS: 3,
}


def sensor_order(sensor_type: SensorType) -> int:
    """Return the sort rank of a sensor type."""
    return _SENSOR_ORDER[sensor_type]


def sensor_dimension(sensor_type: SensorType) -> int:
    """Return the measurement vector length of a sensor type."""
    return _SENSOR_DIMENSIONS[sensor_type]


@dataclass(frozen=True)
class SensorData:
    """Single sensor measurement.

    Attributes:
        sensor_type: Kind of sensor that produced the measurement
        timestamp: Measurement time in seconds
        mean: Measured values, shape (dimension,)
        std_dev: Standard deviation of each measured value, shape (dimension,)
    """

    sensor_type: SensorType
    timestamp: float
    mean: np.ndarray
    std_dev: np.ndarray

    def __post_init__(self) -> None:
        """Validate and normalize measurement fields."""
        if not isinstance(self.sensor_type, SensorType):
            raise ValueError("sensor_type must be a SensorType")
        if math.isnan(self.timestamp):
            raise ValueError("timestamp must not be NaN")

        dimension: int = sensor_dimension(self.sensor_type)
        mean: np.ndarray = as_float_array(self.mean, "mean", (dimension,))
        std_dev: np.ndarray = as_float_array(self.std_dev, "std_dev", (dimension,))
        if np.any(std_dev < 0.0):
            raise ValueError("std_dev must be non-negative")

        object.__setattr__(self, "timestamp", float(self.timestamp))
        object.__setattr__(self, "mean", mean)
        object.__setattr__(self, "std_dev", std_dev)


class SensorDataSet(DataSet[SensorType, SensorData]):
    """Measurement buffer keyed by sensor type."""

    def __init__(self, params: DataSetParams | None = None) -> None:
        super().__init__(params, sort_key=sensor_order)

    def add_measurement(self, data: SensorData) -> None:
        """Store a measurement under its own sensor type and timestamp."""
        self.add_element(data.sensor_type, data.timestamp, data)


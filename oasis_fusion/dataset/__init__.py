################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Multi-valued, time-indexed keyed stores for sensor fusion."""

from __future__ import annotations

from oasis_fusion.dataset.data_set import DataSet
from oasis_fusion.dataset.data_stream import DataStream
from oasis_fusion.dataset.dataset_diagnostics import DataSetDiagnostics
from oasis_fusion.dataset.dataset_diagnostics import DataSetError
from oasis_fusion.dataset.dataset_diagnostics import DataSetFault
from oasis_fusion.dataset.sensor_data import SensorData
from oasis_fusion.dataset.sensor_data import SensorDataSet
from oasis_fusion.dataset.sensor_data import SensorType
from oasis_fusion.dataset.state_data import StateData
from oasis_fusion.dataset.state_data import StateDataSet
from oasis_fusion.dataset.state_data import StateType
from oasis_fusion.dataset.unique_id import UniqueID


__all__ = [
    "DataSet",
    "DataSetDiagnostics",
    "DataSetError",
    "DataSetFault",
    "DataStream",
    "SensorData",
    "SensorDataSet",
    "SensorType",
    "StateData",
    "StateDataSet",
    "StateType",
    "UniqueID",
]

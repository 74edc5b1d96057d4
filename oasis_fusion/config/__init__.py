################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Configuration for temporal datasets."""

from __future__ import annotations

from oasis_fusion.config.dataset_params import DataSetParams
from oasis_fusion.config.dataset_params import DataSetParamsError


__all__ = [
    "DataSetParams",
    "DataSetParamsError",
]

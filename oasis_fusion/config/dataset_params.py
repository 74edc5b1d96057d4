################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Configuration schema for temporal datasets."""

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import fields
from dataclasses import replace
from typing import Any


# Emit log records when a lookup does not produce data
LOG_FAULTS: bool = True
# Log empty bulk query results at WARNING instead of DEBUG
WARN_ON_EMPTY_RESULT: bool = True
# Count faults in the per-dataset diagnostics
TRACK_DIAGNOSTICS: bool = True
# Deep-copy records when merging another dataset
COPY_ON_MERGE: bool = True


class DataSetParamsError(Exception):
    """Raised when dataset parameter validation fails."""


def _require_bool(value: Any, name: str) -> None:
    """Require a strict bool value."""
    if not isinstance(value, bool):
        raise DataSetParamsError(f"{name} must be a bool")


@dataclass(frozen=True)
class DataSetParams:
    """Behavior switches for a temporal dataset."""

    # Emit log records when a lookup does not produce data
    log_faults: bool = LOG_FAULTS
    # Log empty bulk query results at WARNING instead of DEBUG
    warn_on_empty_result: bool = WARN_ON_EMPTY_RESULT
    # Count faults in the per-dataset diagnostics
    track_diagnostics: bool = TRACK_DIAGNOSTICS
    # Deep-copy records when merging another dataset
    copy_on_merge: bool = COPY_ON_MERGE

    @classmethod
    def defaults(cls) -> DataSetParams:
        """Return the default dataset parameters."""
        return cls()

    def validate(self) -> None:
        """Validate parameter types."""
        _require_bool(self.log_faults, "log_faults")
        _require_bool(self.warn_on_empty_result, "warn_on_empty_result")
        _require_bool(self.track_diagnostics, "track_diagnostics")
        _require_bool(self.copy_on_merge, "copy_on_merge")

    def replace(self, **overrides: Any) -> DataSetParams:
        """Return a modified copy of the parameters."""
        return replace(self, **overrides)

    def as_nested_dict(self) -> dict[str, Any]:
        """Return a dict representation for debugging."""
        return {field.name: getattr(self, field.name) for field in fields(self)}

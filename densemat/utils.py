# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import math
import numbers

import numpy as np

EPS_CLOSE: float = 1e-9
# cofactor expansion is O(n!), warn above this many rows
DET_WARN_SIZE: int = 8


def coerce_cell(value) -> float:
    """
    Convert one ingested cell to a float.

    Real numbers, NumPy scalars and numeric strings are converted (integers
    too large for a float become +/-inf);
    anything that cannot be read as a number (and NaN) becomes 0.0.
    """
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, numbers.Real):
        try:
            x = float(value)
        except OverflowError:
            # integers beyond float range saturate to +/-inf
            return math.inf if value > 0 else -math.inf
    elif isinstance(value, (str, bytes, numbers.Number)):
        try:
            x = float(value)
        except (TypeError, ValueError):
            return 0.0
    else:
        return 0.0
    return 0.0 if math.isnan(x) else x


def coerce_cells(values) -> np.ndarray:
    """Return a float64 vector of coerced cells."""
    return np.array([coerce_cell(v) for v in values], dtype=float)


def sign(k: int) -> float:
    """Return (-1)**k as a float."""
    return -1.0 if k & 1 else 1.0


def format_cell(x: float) -> str:
    """
    Render a cell the way a JSON array literal expects it.

    Integral values drop the fractional part, non-finite values use the
    `Infinity` / `NaN` tokens that `json.loads` understands.
    """
    if math.isnan(x):
        return "NaN"
    if math.isinf(x):
        return "Infinity" if x > 0 else "-Infinity"
    if x.is_integer() and abs(x) < 1e21:
        return str(int(x))
    return repr(float(x))

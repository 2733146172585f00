# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
densemat
========

A small dense-matrix library: rows of floats that can be resized, and a
Matrix built on them with arithmetic, cofactor determinants, adjugates,
inverses, powers and block merges.

Public API
~~~~~~~~~~
- Types
    - `Matrix`, `Row`
- Construction
    - `Matrix(*rows)`, `Matrix.unit`, `from_array`, `from_string`,
      `Matrix.from_numpy`
- Text codec
    - `Matrix.to_string`, `dumps`, `loads`

Everything else lives in sub-modules and is **not** considered part of the
stable interface.

Example
-------
>>> import densemat as dm
>>> A = dm.Matrix([4, 7], [2, 6])
>>> A.mul(A.inv()).allclose(dm.Matrix.unit(2))
True
"""

from importlib.metadata import version as _pkg_version

from .matrix import Matrix, MergeOps
from .row import Row
from .serialize import dumps, loads
from .utils import DET_WARN_SIZE, EPS_CLOSE, coerce_cell

# ---------------------------------------------------------------------
# Module-level shortcuts for the serialization entry points.
# ---------------------------------------------------------------------
from_array = Matrix.from_array
from_string = Matrix.from_string

__all__ = [
    "Matrix",
    "MergeOps",
    "Row",
    "from_array",
    "from_string",
    "dumps",
    "loads",
    "coerce_cell",
    "EPS_CLOSE",
    "DET_WARN_SIZE",
]

# ---------------------------------------------------------------------
# Version string (helps “pip show densemat”, Sphinx, etc.)
# ---------------------------------------------------------------------
try:  # installed via pip / build backend
    __version__ = _pkg_version(__name__)
except Exception:  # running from a checkout
    __version__ = "0.0.0.dev0"

# ---------------------------------------------------------------------
# Optional: lightweight default logging config so users see warnings
# only if they deliberately enable them.
# ---------------------------------------------------------------------
import logging as _logging

_logging.getLogger(__name__).addHandler(_logging.NullHandler())

# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Row
===

One horizontal line of a matrix: an ordered, resizable vector of float
cells backed by a float64 ndarray.
"""

import operator
from typing import Iterable, List

import numpy as np

from .utils import coerce_cells


class Row:
    """
    Resizable sequence of numeric cells.

    Reads past the end answer 0.0, writes past the end raise IndexError;
    the only way to grow a row is `resize` / the `cols` setter.
    """

    __slots__ = ("_cells",)

    def __init__(self, cells: Iterable = ()):
        self._cells = coerce_cells(cells)

    @classmethod
    def _wrap(cls, cells: np.ndarray) -> "Row":
        # takes ownership of an already-float vector, skips coercion
        row = cls.__new__(cls)
        row._cells = np.asarray(cells, dtype=float).reshape(-1)
        return row

    @classmethod
    def zeros(cls, n: int) -> "Row":
        return cls._wrap(np.zeros(max(int(n), 0)))

    @property
    def cols(self) -> int:
        return self._cells.shape[0]

    @cols.setter
    def cols(self, n: int):
        self.resize(n)

    def resize(self, n: int) -> None:
        """Truncate or zero-pad the row to `n` cells (negative n means 0)."""
        n = max(int(n), 0)
        m = self.cols
        if n < m:
            self._cells = self._cells[:n].copy()
        elif n > m:
            self._cells = np.concatenate([self._cells, np.zeros(n - m)])

    def __len__(self) -> int:
        return self.cols

    def __iter__(self):
        return (float(x) for x in self._cells)

    def __getitem__(self, j):
        if isinstance(j, slice):
            return Row._wrap(self._cells[j].copy())
        j = operator.index(j)
        if 0 <= j < self.cols:
            return float(self._cells[j])
        return 0.0

    def __setitem__(self, j: int, value: float):
        j = operator.index(j)
        if not 0 <= j < self.cols:
            raise IndexError(f"column {j} outside row of length {self.cols}")
        self._cells[j] = value

    def __eq__(self, other) -> bool:
        if not isinstance(other, Row):
            return NotImplemented
        return bool(np.array_equal(self._cells, other._cells))

    __hash__ = None

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.tolist()})"

    def copy(self) -> "Row":
        return Row._wrap(self._cells.copy())

    def without(self, j: int) -> "Row":
        """Return a copy with column j removed (unchanged copy if j is out of range)."""
        if 0 <= j < self.cols:
            return Row._wrap(np.delete(self._cells, j))
        return self.copy()

    def tolist(self) -> List[float]:
        return [float(x) for x in self._cells]

    def to_numpy(self) -> np.ndarray:
        return self._cells.copy()

# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Matrix
======

Dense matrix of floats stored as a list of independently resizable Rows.
Every operation except the shape setters returns a new Matrix and leaves
its operands untouched.
"""

import logging
import numbers
import operator
from collections.abc import Iterable
from typing import Callable, List, NamedTuple, Optional, Tuple

import numpy as np

from . import serialize
from .row import Row
from .utils import DET_WARN_SIZE, EPS_CLOSE, sign

logger = logging.getLogger(__name__)

Bounds = Tuple[Optional[int], Optional[int]]


class MergeOps(NamedTuple):
    left: Callable
    right: Callable
    top: Callable
    bottom: Callable


class Matrix:
    """
    Matrix(*rows)

    Each argument is one row: a sequence of numbers or a bare scalar
    (a length-1 row). Ragged input is padded with 0 up to the widest row.

    >>> Matrix([1, 2], [3, 4]).det()
    -2.0
    """

    __slots__ = ("_rows",)

    def __init__(self, *rows):
        self._rows: List[Row] = [self._ingest(r) for r in rows]
        self._rectangularize()

    @staticmethod
    def _ingest(row) -> Row:
        if isinstance(row, Row):
            return row.copy()
        if isinstance(row, np.ndarray):
            return Row(np.ravel(row))
        if isinstance(row, (str, bytes)) or not isinstance(row, Iterable):
            return Row([row])
        return Row(row)

    @classmethod
    def _from_rows(cls, rows: List[Row]) -> "Matrix":
        # takes ownership of `rows`
        M = cls.__new__(cls)
        M._rows = list(rows)
        M._rectangularize()
        return M

    @classmethod
    def _from_ndarray(cls, A: np.ndarray) -> "Matrix":
        return cls._from_rows([Row._wrap(r.copy()) for r in A])

    def _rectangularize(self) -> None:
        cols = max((r.cols for r in self._rows), default=0)
        for r in self._rows:
            r.resize(cols)

    def _block(self, n_rows: int, n_cols: int) -> np.ndarray:
        """Copy into an (n_rows, n_cols) array, truncating or zero-padding."""
        out = np.zeros((n_rows, n_cols))
        for i, row in enumerate(self._rows[:n_rows]):
            m = min(n_cols, row.cols)
            out[i, :m] = row._cells[:m]
        return out

    # ------------------------------------------------------------------
    # shape
    # ------------------------------------------------------------------
    @property
    def cols(self) -> int:
        return self._rows[0].cols if self._rows else 0

    @cols.setter
    def cols(self, n: int):
        self.resize_cols(n)

    def resize_cols(self, n: int) -> None:
        for r in self._rows:
            r.resize(n)

    @property
    def rows(self) -> int:
        return len(self._rows)

    @rows.setter
    def rows(self, n: int):
        self.resize_rows(n)

    def resize_rows(self, n: int) -> None:
        """Drop trailing rows, or append zero rows as wide as the matrix."""
        n = max(int(n), 0)
        if n < self.rows:
            del self._rows[n:]
        else:
            width = self.cols
            while self.rows < n:
                self._rows.append(Row.zeros(width))

    @property
    def size(self) -> Tuple[int, int]:
        return self.rows, self.cols

    @size.setter
    def size(self, shape: Tuple[int, int]):
        self.set_shape(*shape)

    def set_shape(self, rows: int, cols: int) -> None:
        self.resize_rows(rows)
        self.resize_cols(cols)

    @property
    def square(self) -> bool:
        return self.rows == self.cols

    @square.setter
    def square(self, value: bool):
        # a matrix cannot be made non-square
        if value:
            self.expand_to_square()

    def expand_to_square(self) -> None:
        """Pad the smaller dimension up to the larger one."""
        if self.rows > self.cols:
            self.resize_cols(self.rows)
        elif self.cols > self.rows:
            self.resize_rows(self.cols)

    @classmethod
    def unit(cls, n: int = 3) -> "Matrix":
        """n-by-n identity matrix."""
        return cls._from_ndarray(np.eye(max(int(n), 0)))

    # ------------------------------------------------------------------
    # access & comparison
    # ------------------------------------------------------------------
    def row(self, i: int) -> Row:
        """Copy of row i, or a zero row if i is outside the matrix."""
        if 0 <= i < self.rows:
            return self._rows[i].copy()
        return Row.zeros(self.cols)

    def column(self, j: int) -> List[float]:
        return [r[j] for r in self._rows]

    def element(self, i: int, j: int) -> float:
        if 0 <= i < self.rows:
            return self._rows[i][j]
        return 0.0

    def range(self, x: Bounds = (None, None), y: Bounds = (None, None)) -> "Matrix":
        """
        Sub-rectangle selected by column bounds `x` and row bounds `y`.

        A missing lower bound means 0, a missing upper bound means the
        dimension; upper bounds are inclusive.
        """
        xm, xM = x
        ym, yM = y
        x0 = 0 if xm is None else xm
        x1 = (self.cols if xM is None else xM) + 1
        y0 = 0 if ym is None else ym
        y1 = (self.rows if yM is None else yM) + 1
        return Matrix._from_rows([r[x0:x1] for r in self._rows[y0:y1]])

    def equals(self, M: "Matrix") -> bool:
        """Exact equality of shape and every cell."""
        if self.size != M.size:
            return False
        return all(a == b for a, b in zip(self._rows, M._rows))

    def allclose(self, M: "Matrix", atol: float = EPS_CLOSE) -> bool:
        """Same shape and every cell within `atol`."""
        if self.size != M.size:
            return False
        return bool(np.allclose(self.to_numpy(), M.to_numpy(), rtol=0.0, atol=atol))

    def identity(self) -> "Matrix":
        """Independent deep copy."""
        return Matrix._from_rows([r.copy() for r in self._rows])

    copy = identity

    # ------------------------------------------------------------------
    # scalar & elementwise arithmetic
    # ------------------------------------------------------------------
    def scal_map(self, op: Callable[[float], float]) -> "Matrix":
        with np.errstate(all="ignore"):
            rows = [
                Row._wrap(np.array([op(a) for a in r._cells], dtype=float))
                for r in self._rows
            ]
        return Matrix._from_rows(rows)

    def scal_add(self, n: float) -> "Matrix":
        return self.scal_map(lambda a: a + n)

    def scal_sub(self, n: float) -> "Matrix":
        return self.scal_map(lambda a: a - n)

    def scal_mul(self, n: float) -> "Matrix":
        return self.scal_map(lambda a: a * n)

    def scal_div(self, n: float) -> "Matrix":
        with np.errstate(divide="ignore"):
            factor = np.float64(1.0) / np.float64(n)
        return self.scal_mul(factor)

    def _combine(self, M: "Matrix", op) -> "Matrix":
        _check_matrix(M)
        N = self.identity()
        # only cells inside both shapes are touched, N keeps self's shape
        r = min(N.rows, M.rows)
        c = min(N.cols, M.cols)
        if M.size != self.size:
            logger.debug(
                f"elementwise op on {self.rows}x{self.cols} and "
                f"{M.rows}x{M.cols}: combining the leading {r}x{c} block only"
            )
        with np.errstate(all="ignore"):
            for i in range(r):
                cells = N._rows[i]._cells
                cells[:c] = op(cells[:c], M._rows[i]._cells[:c])
        return N

    def add(self, M: "Matrix") -> "Matrix":
        return self._combine(M, np.add)

    def sub(self, M: "Matrix") -> "Matrix":
        """Subtract M from this matrix."""
        return self._combine(M, np.subtract)

    # ------------------------------------------------------------------
    # multiplication, division, power
    # ------------------------------------------------------------------
    def mul(self, M: "Matrix") -> "Matrix":
        """
        this × M

        The result is always `self.rows` by `self.rows`. For a conformant
        product whose right operand has `self.rows` columns this is the
        usual product; otherwise cells outside either operand read as 0
        and the result is truncated or padded to that square shape.
        """
        _check_matrix(M)
        n = self.rows
        k = M.rows
        if self.cols != M.rows or M.cols != n:
            logger.warning(
                f"mul(): {self.rows}x{self.cols} × {M.rows}x{M.cols} "
                f"is not conformant with a {n}x{n} result"
            )
        with np.errstate(all="ignore"):
            P = self._block(n, k) @ M._block(k, n)
        return Matrix._from_ndarray(P)

    def div(self, M: "Matrix") -> "Matrix":
        """this × inverse(M)"""
        _check_matrix(M)
        return self.mul(M.inv())

    def pow(self, n: int) -> "Matrix":
        """
        n-th power by repeated multiplication, starting from the identity.
        Negative powers multiply by the inverse.
        """
        n = operator.index(n)
        M = Matrix.unit(self.rows)
        if n > 0:
            for _ in range(n):
                M = M.mul(self)
        elif n < 0:
            inv = self.inv()
            for _ in range(-n):
                M = M.mul(inv)
        return M

    # ------------------------------------------------------------------
    # structural algorithms
    # ------------------------------------------------------------------
    def submatrix(self, i: int, j: int) -> "Matrix":
        """
        Remove row i and column j.

        Parameters
        ----------
        i : int
            row to remove
        j : int
            column to remove
        """
        return Matrix._from_rows(
            [r.without(j) for k, r in enumerate(self._rows) if k != i]
        )

    def trans(self) -> "Matrix":
        return Matrix._from_ndarray(self.to_numpy().T)

    def _cofactor_det(self) -> float:
        n = self.rows
        if n <= 1:
            return self.element(0, 0)
        if n == 2:
            return self.element(0, 0) * self.element(1, 1) - self.element(
                1, 0
            ) * self.element(0, 1)
        total = 0.0
        for j in range(n):
            total += self.element(0, j) * self.submatrix(0, j)._cofactor_det() * sign(j)
        return total

    def det(self) -> float:
        """
        Determinant by cofactor expansion along row 0.

        O(n!) and without pivoting; meant for small matrices.
        """
        if self.rows > DET_WARN_SIZE:
            logger.warning(
                f"det(): cofactor expansion on a {self.rows}x{self.cols} matrix – O(n!)"
            )
        return float(self._cofactor_det())

    def adj(self) -> "Matrix":
        """
        Adjugate: cell (i, j) of the transpose becomes the (j, i) cofactor
        of this matrix.
        """
        A = self.trans()
        for i in range(A.rows):
            for j in range(A.cols):
                minor = self.submatrix(j, i)
                # the empty minor of a 1x1 matrix has determinant 1
                d = minor._cofactor_det() if minor.rows else 1.0
                A._rows[i]._cells[j] = sign(i + j) * d
        return A

    def inv(self) -> "Matrix":
        """
        adj / det. A singular matrix is not rejected: its inverse has
        infinite or NaN cells.
        """
        d = self.det()
        if d == 0:
            logger.warning("inv(): matrix is singular (det == 0), result is not finite")
        return self.adj().scal_div(d)

    # ------------------------------------------------------------------
    # block merge
    # ------------------------------------------------------------------
    def merge_left(self, M: "Matrix") -> "Matrix":
        return M.merge_right(self)

    def merge_right(self, M: "Matrix") -> "Matrix":
        """Place M's columns to the right of this matrix."""
        _check_matrix(M)
        N = self.identity()
        if M.rows > N.rows:
            N.resize_rows(M.rows)
        offset = self.cols
        limit = M.cols
        N.resize_cols(offset + limit)
        B = M._block(N.rows, limit)
        for i, row in enumerate(N._rows):
            row._cells[offset:] = B[i]
        return N

    def merge_top(self, M: "Matrix") -> "Matrix":
        return M.merge_bottom(self)

    def merge_bottom(self, M: "Matrix") -> "Matrix":
        """Stack M's rows below this matrix."""
        _check_matrix(M)
        return Matrix._from_rows([r.copy() for r in self._rows + M._rows])

    @property
    def merge(self) -> MergeOps:
        return MergeOps(
            left=self.merge_left,
            right=self.merge_right,
            top=self.merge_top,
            bottom=self.merge_bottom,
        )

    # ------------------------------------------------------------------
    # conversion
    # ------------------------------------------------------------------
    def tolist(self) -> List[List[float]]:
        return [r.tolist() for r in self._rows]

    def to_numpy(self) -> np.ndarray:
        return self._block(self.rows, self.cols)

    @classmethod
    def from_numpy(cls, A) -> "Matrix":
        A = np.asarray(A)
        if A.ndim > 2:
            raise ValueError(f"expected a 1-D or 2-D array, got {A.ndim}-D")
        return cls(*np.atleast_2d(A))

    @classmethod
    def from_array(cls, arr) -> "Matrix":
        return cls(*arr)

    @classmethod
    def from_string(cls, text: str) -> "Matrix":
        return cls.from_array(serialize.loads(text))

    def to_string(self) -> str:
        return serialize.dumps(r._cells for r in self._rows)

    # ------------------------------------------------------------------
    # python protocol
    # ------------------------------------------------------------------
    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.rows}x{self.cols} {self.to_string()}>"

    def __len__(self) -> int:
        return self.rows

    def __iter__(self):
        return (r.copy() for r in self._rows)

    def __getitem__(self, key):
        if isinstance(key, tuple):
            return self.element(*key)
        return self.row(key)

    def __setitem__(self, key: Tuple[int, int], value: float):
        i, j = key
        if not 0 <= i < self.rows:
            raise IndexError(f"row {i} outside matrix with {self.rows} rows")
        self._rows[i][j] = value

    def __eq__(self, other) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.equals(other)

    __hash__ = None

    def __add__(self, other):
        if isinstance(other, Matrix):
            return self.add(other)
        if isinstance(other, numbers.Real):
            return self.scal_add(other)
        return NotImplemented

    def __radd__(self, other):
        if isinstance(other, numbers.Real):
            return self.scal_add(other)
        return NotImplemented

    def __sub__(self, other):
        if isinstance(other, Matrix):
            return self.sub(other)
        if isinstance(other, numbers.Real):
            return self.scal_sub(other)
        return NotImplemented

    def __rsub__(self, other):
        if isinstance(other, numbers.Real):
            return self.scal_mul(-1).scal_add(other)
        return NotImplemented

    def __mul__(self, other):
        if isinstance(other, numbers.Real):
            return self.scal_mul(other)
        return NotImplemented

    __rmul__ = __mul__

    def __truediv__(self, other):
        if isinstance(other, Matrix):
            return self.div(other)
        if isinstance(other, numbers.Real):
            return self.scal_div(other)
        return NotImplemented

    def __matmul__(self, other):
        if isinstance(other, Matrix):
            return self.mul(other)
        return NotImplemented

    def __pow__(self, n):
        return self.pow(n)

    def __neg__(self):
        return self.scal_mul(-1)


def _check_matrix(M) -> None:
    if not isinstance(M, Matrix):
        raise TypeError(f"expected a Matrix operand, got {type(M).__name__}")

# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import logging
import math

import numpy as np
import pytest

from densemat.matrix import Matrix

logger = logging.getLogger(__name__)


def random_matrix(m, n, seed):
    rng = np.random.default_rng(seed)
    return Matrix.from_numpy(rng.standard_normal((m, n)))


# ---------------------------------------------------------------------
# scalar & elementwise
# ---------------------------------------------------------------------
def test_scalar_ops():
    M = Matrix([1, 2], [3, 4])
    assert M.scal_add(1).tolist() == [[2, 3], [4, 5]]
    assert M.scal_sub(1).tolist() == [[0, 1], [2, 3]]
    assert M.scal_mul(2).tolist() == [[2, 4], [6, 8]]
    assert M.scal_div(2).tolist() == [[0.5, 1], [1.5, 2]]
    assert M.scal_map(lambda a: a * a).tolist() == [[1, 4], [9, 16]]
    # operands are never modified
    assert M.tolist() == [[1, 2], [3, 4]]


def test_scalar_division_by_zero_is_ieee():
    N = Matrix([1, 0], [-2, 3]).scal_div(0)
    cells = N.to_numpy()
    assert cells[0, 0] == math.inf
    assert math.isnan(cells[0, 1])
    assert cells[1, 0] == -math.inf


def test_add_sub_same_shape():
    A = Matrix([1, 2], [3, 4])
    B = Matrix([5, 6], [7, 8])
    assert A.add(B).tolist() == [[6, 8], [10, 12]]
    assert B.sub(A).tolist() == [[4, 4], [4, 4]]


def test_add_with_smaller_operand_passes_cells_through():
    A = Matrix([1, 2, 3], [4, 5, 6])
    assert A.add(Matrix([10])).tolist() == [[11, 2, 3], [4, 5, 6]]


def test_add_with_larger_operand_keeps_own_shape():
    A = Matrix([1, 2])
    B = Matrix([1, 1, 1], [1, 1, 1])
    C = A.add(B)
    assert C.size == (1, 2)
    assert C.tolist() == [[2, 3]]
    assert A.sub(B).tolist() == [[0, 1]]


def test_operators():
    A = Matrix([1, 2], [3, 4])
    B = Matrix([5, 6], [7, 8])
    assert (A + B).equals(A.add(B))
    assert (A - B).equals(A.sub(B))
    assert (A + 1).equals(A.scal_add(1))
    assert (1 + A).equals(A.scal_add(1))
    assert (10 - A).tolist() == [[9, 8], [7, 6]]
    assert (2 * A).equals(A.scal_mul(2))
    assert (A / 2).equals(A.scal_div(2))
    assert (A @ B).equals(A.mul(B))
    assert (A ** 2).equals(A.pow(2))
    assert (-A).tolist() == [[-1, -2], [-3, -4]]
    with pytest.raises(TypeError):
        A * B
    with pytest.raises(TypeError):
        A.add([[1, 2]])


# ---------------------------------------------------------------------
# multiplication, division, power
# ---------------------------------------------------------------------
def test_mul_square():
    A = Matrix([1, 2], [3, 4])
    B = Matrix([5, 6], [7, 8])
    assert A.mul(B).tolist() == [[19, 22], [43, 50]]


@pytest.mark.parametrize("n", [1, 2, 4, 6])
def test_mul_by_unit_is_identity(n):
    M = random_matrix(n, n, seed=n)
    assert M.mul(Matrix.unit(M.rows)).equals(M)


def test_mul_conformant_rectangular():
    A = Matrix([1, 2, 3], [4, 5, 6])  # 2x3
    B = Matrix([7, 8], [9, 10], [11, 12])  # 3x2
    np.testing.assert_allclose(A.mul(B).to_numpy(), A.to_numpy() @ B.to_numpy())


def test_mul_result_is_square_in_left_rows(caplog):
    A = Matrix([1, 2], [3, 4])  # 2x2
    B = Matrix([1, 0, 1], [0, 1, 1])  # 2x3
    with caplog.at_level(logging.WARNING, logger="densemat.matrix"):
        C = A.mul(B)
    # the third column of the true product is dropped
    assert C.size == (2, 2)
    assert C.tolist() == [[1, 2], [3, 4]]
    assert "not conformant" in caplog.text


def test_div_is_mul_by_inverse():
    A = random_matrix(3, 3, seed=11)
    B = random_matrix(3, 3, seed=12)
    expected = A.to_numpy() @ np.linalg.inv(B.to_numpy())
    np.testing.assert_allclose(A.div(B).to_numpy(), expected, rtol=1e-9, atol=1e-9)
    assert A.div(A).allclose(Matrix.unit(3), atol=1e-9)


@pytest.mark.parametrize("k", [0, 1, 2, 5, -1, -3])
def test_pow_matches_numpy(k):
    A = random_matrix(3, 3, seed=3)
    np.testing.assert_allclose(
        A.pow(k).to_numpy(),
        np.linalg.matrix_power(A.to_numpy(), k),
        rtol=1e-7,
        atol=1e-9,
    )


def test_pow_rejects_non_integer():
    with pytest.raises(TypeError):
        Matrix([1, 2], [3, 4]).pow(1.5)


# ---------------------------------------------------------------------
# structural algorithms
# ---------------------------------------------------------------------
def test_submatrix():
    M = Matrix([1, 2, 3], [4, 5, 6], [7, 8, 9])
    S = M.submatrix(1, 0)
    assert S.tolist() == [[2, 3], [8, 9]]
    for i in range(3):
        for j in range(3):
            assert M.submatrix(i, j).size == (2, 2)


def test_trans():
    assert Matrix([1, 2, 3]).trans().tolist() == [[1], [2], [3]]
    M = random_matrix(3, 5, seed=5)
    np.testing.assert_array_equal(M.trans().to_numpy(), M.to_numpy().T)


def test_det_small():
    assert Matrix([1, 2], [3, 4]).det() == -2
    assert Matrix([7]).det() == 7
    assert Matrix([2, 0, 0], [0, 3, 0], [0, 0, 4]).det() == 24


@pytest.mark.parametrize("n", [3, 4, 5, 6])
def test_det_against_numpy(n):
    M = random_matrix(n, n, seed=100 + n)
    assert math.isclose(M.det(), np.linalg.det(M.to_numpy()), rel_tol=1e-9, abs_tol=1e-9)


@pytest.mark.parametrize("n", [2, 3, 4, 5])
def test_det_of_transpose(n):
    M = random_matrix(n, n, seed=n)
    assert math.isclose(M.trans().det(), M.det(), rel_tol=1e-9, abs_tol=1e-9)


def test_det_warns_for_large_matrices(caplog, monkeypatch):
    monkeypatch.setattr("densemat.matrix.DET_WARN_SIZE", 3)
    with caplog.at_level(logging.WARNING, logger="densemat.matrix"):
        Matrix.unit(4).det()
    assert "O(n!)" in caplog.text


def test_adj_against_numpy():
    M = random_matrix(4, 4, seed=42)
    A = M.to_numpy()
    expected = np.linalg.det(A) * np.linalg.inv(A)
    logger.debug(f"\nours:\n{M.adj()}\nnumpy:\n{expected}")
    np.testing.assert_allclose(M.adj().to_numpy(), expected, rtol=1e-8, atol=1e-10)


def test_inv_two_by_two():
    Minv = Matrix([4, 7], [2, 6]).inv()
    np.testing.assert_allclose(Minv.to_numpy(), [[0.6, -0.7], [-0.2, 0.4]], atol=1e-12)


def test_inv_one_by_one():
    assert Matrix([4]).inv().allclose(Matrix([0.25]))


@pytest.mark.parametrize("n", [1, 2, 3, 4, 5])
def test_mul_by_inverse_is_unit(n):
    M = random_matrix(n, n, seed=7 * n)
    assert M.mul(M.inv()).allclose(Matrix.unit(n), atol=1e-8)


def test_singular_inverse_is_not_finite(caplog):
    M = Matrix([1, 2], [2, 4])
    with caplog.at_level(logging.WARNING, logger="densemat.matrix"):
        Minv = M.inv()
    assert not np.all(np.isfinite(Minv.to_numpy()))
    assert "singular" in caplog.text


# ---------------------------------------------------------------------
# block merge
# ---------------------------------------------------------------------
def test_merge_bottom():
    assert Matrix([1, 2]).merge_bottom(Matrix([3, 4])).tolist() == [[1, 2], [3, 4]]


def test_merge_bottom_pads_width():
    A = Matrix([1, 2])
    B = Matrix([3, 4, 5], [6, 7, 8])
    C = A.merge_bottom(B)
    assert C.size == (A.rows + B.rows, max(A.cols, B.cols))
    assert C.tolist() == [[1, 2, 0], [3, 4, 5], [6, 7, 8]]
    assert A.merge_top(B).tolist() == [[3, 4, 5], [6, 7, 8], [1, 2, 0]]


def test_merge_right():
    A = Matrix([1, 2], [3, 4])
    B = Matrix([5], [6], [7])
    C = A.merge_right(B)
    assert C.tolist() == [[1, 2, 5], [3, 4, 6], [0, 0, 7]]
    assert A.merge_left(B).tolist() == [[5, 1, 2], [6, 3, 4], [7, 0, 0]]
    # shorter right operand leaves zeros
    assert B.merge_right(A).tolist() == [[5, 1, 2], [6, 3, 4], [7, 0, 0]]
    assert A.tolist() == [[1, 2], [3, 4]]


def test_merge_accessor():
    A = Matrix([1, 2])
    B = Matrix([3, 4])
    assert A.merge.bottom(B).equals(A.merge_bottom(B))
    assert A.merge.top(B).equals(A.merge_top(B))
    assert A.merge.right(B).tolist() == [[1, 2, 3, 4]]
    assert A.merge.left(B).tolist() == [[3, 4, 1, 2]]

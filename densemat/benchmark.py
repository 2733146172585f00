#!/usr/bin/python3
# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Time det / inv / mul against numpy.linalg on random square matrices.

    python -m densemat.benchmark --sizes 2 4 6 --repeats 5
"""

import argparse
import logging
import time

import numpy as np
import pandas as pd

from .matrix import Matrix

logger = logging.getLogger(__name__)

REPEATS = 5  # min of 5 runs leads to stable numbers
SIZES = (2, 3, 4, 5, 6)


def wall(f, *args, **kwargs):
    t0 = time.perf_counter()
    f(*args, **kwargs)
    return time.perf_counter() - t0


def run(sizes=SIZES, repeats=REPEATS, seed=0) -> pd.DataFrame:
    """
    Returns
    -------
    DataFrame with one record per (kernel, size): our time, the
    time relative to NumPy and the max abs error against NumPy.
    """
    rng = np.random.default_rng(seed)
    records = []
    for n in sizes:
        A_np = rng.standard_normal((n, n))
        B_np = rng.standard_normal((n, n))
        A = Matrix.from_numpy(A_np)
        B = Matrix.from_numpy(B_np)
        logger.debug(f"benchmarking {n}x{n}")

        t_det = min(wall(A.det) for _ in range(repeats))
        t_np = min(wall(np.linalg.det, A_np) for _ in range(repeats))
        err = abs(A.det() - np.linalg.det(A_np))
        records.append(("det", f"{n}x{n}", t_det, t_det / max(t_np, 1e-12), err))

        t_inv = min(wall(A.inv) for _ in range(repeats))
        t_np = min(wall(np.linalg.inv, A_np) for _ in range(repeats))
        err = float(np.max(np.abs(A.inv().to_numpy() - np.linalg.inv(A_np))))
        records.append(("inv", f"{n}x{n}", t_inv, t_inv / max(t_np, 1e-12), err))

        t_mul = min(wall(A.mul, B) for _ in range(repeats))
        t_np = min(wall(np.matmul, A_np, B_np) for _ in range(repeats))
        err = float(np.max(np.abs(A.mul(B).to_numpy() - A_np @ B_np)))
        records.append(("mul", f"{n}x{n}", t_mul, t_mul / max(t_np, 1e-12), err))

    return pd.DataFrame(
        records,
        columns=["kernel", "size", "sec", "sec/NumPy", "max_abs_err"],
    )


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Benchmark densemat kernels against numpy.linalg."
    )
    parser.add_argument("--sizes", type=int, nargs="+", default=list(SIZES))
    parser.add_argument("--repeats", type=int, default=REPEATS)
    parser.add_argument("--seed", type=int, default=0)
    parser.add_argument("--csv", type=str, default=None, help="also write results here")
    args = parser.parse_args(argv)

    df = run(args.sizes, args.repeats, args.seed)
    print(df.to_string(index=False))
    if args.csv:
        df.to_csv(args.csv, index=False)
    return df


if __name__ == "__main__":
    main()

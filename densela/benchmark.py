#!/usr/bin/python3
# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Wall-clock comparison of the densela kernels against NumPy.

    python -m densela.benchmark
"""

import argparse
import logging
import time
from typing import Sequence

import numpy as np
import pandas as pd

from .arithmetic import matrix_multiply, strassen
from .elimination import solve
from .utils import EPS

logger = logging.getLogger(__name__)

REPEATS = 5  # best of 5 runs leads to stable numbers
SIZES = (64, 128, 256)
COLUMNS = ["kernel", "size", "sec", "sec/NumPy", "error"]


def wall(f, *args, **kwargs):
    t0 = time.perf_counter()
    f(*args, **kwargs)
    return time.perf_counter() - t0


def best_of(repeats, f, *args, **kwargs):
    return min(wall(f, *args, **kwargs) for _ in range(repeats))


def run(sizes: Sequence[int] = SIZES, repeats: int = REPEATS, seed=0) -> pd.DataFrame:
    """
    Time standard and Strassen multiplication and LU solve on random n×n
    problems.

    ``error`` is the relative product error ‖C - C_np‖∞ / ‖C_np‖∞ for the
    multiplication kernels and the residual ratio ‖Ax - b‖∞ / ‖Ax_np - b‖∞
    for the solver.
    """
    rng = np.random.default_rng(seed)
    records = []

    for n in sizes:
        logger.info("benchmarking n=%d", n)
        A = rng.standard_normal((n, n))
        B = rng.standard_normal((n, n))
        b = rng.standard_normal(n)

        # reference
        t_np = best_of(repeats, np.matmul, A, B)
        C_ref = A @ B
        c_norm = np.linalg.norm(C_ref, np.inf)

        # a threshold above n keeps matrix_multiply on the accumulation loop
        t_std = best_of(repeats, matrix_multiply, A, B, threshold=n + 1)
        err_std = np.linalg.norm(matrix_multiply(A, B, threshold=n + 1) - C_ref, np.inf)
        records.append(("standard", f"{n}x{n}", t_std, t_std / t_np, err_std / c_norm))

        t_str = best_of(repeats, strassen, A, B)
        err_str = np.linalg.norm(strassen(A, B) - C_ref, np.inf)
        records.append(("strassen", f"{n}x{n}", t_str, t_str / t_np, err_str / c_norm))

        t_np_solve = best_of(repeats, np.linalg.solve, A, b)
        r_ref = np.linalg.norm(A @ np.linalg.solve(A, b) - b, np.inf)
        t_lu = best_of(repeats, solve, A, b, pivot=True)
        r_lu = np.linalg.norm(A @ solve(A, b, pivot=True) - b, np.inf)
        # numpy can hit an exact zero residual on small systems
        records.append(("LU-solve", f"{n}x{n}", t_lu, t_lu / t_np_solve, r_lu / max(r_ref, EPS)))

    return pd.DataFrame(records, columns=COLUMNS)


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Time densela multiplication and LU solve against NumPy."
    )
    parser.add_argument("--sizes", type=int, nargs="+", default=list(SIZES), help="Matrix sides to time")
    parser.add_argument("--repeats", type=int, default=REPEATS, help="Runs per kernel, best one is kept")
    parser.add_argument("--seed", type=int, default=0)
    parser.add_argument("--csv", type=str, default=None, help="Also write the table to this CSV file")
    parser.add_argument("-v", "--verbose", action="store_true")

    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING)

    df = run(args.sizes, args.repeats, args.seed)
    print(df.to_string(index=False))
    if args.csv:
        df.to_csv(args.csv, index=False)
    return df


if __name__ == "__main__":
    main()

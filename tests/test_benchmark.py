# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import pytest

pd = pytest.importorskip("pandas")

from densemat.benchmark import main, run  # noqa: E402


def test_run_reports_every_kernel():
    df = run(sizes=(2, 3), repeats=1, seed=0)
    assert isinstance(df, pd.DataFrame)
    assert list(df["kernel"]) == ["det", "inv", "mul", "det", "inv", "mul"]
    assert (df["max_abs_err"] < 1e-8).all()


def test_main_writes_csv(tmp_path, capsys):
    out = tmp_path / "bench.csv"
    main(["--sizes", "2", "--repeats", "1", "--csv", str(out)])
    assert "kernel" in capsys.readouterr().out
    assert len(pd.read_csv(out)) == 3

# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import pytest

pd = pytest.importorskip("pandas")

from densela.benchmark import COLUMNS, main, run  # noqa: E402


def test_benchmark_frame():
    df = run(sizes=(8, 33), repeats=1, seed=0)
    assert isinstance(df, pd.DataFrame)
    assert list(df.columns) == COLUMNS
    assert list(df["kernel"]) == ["standard", "strassen", "LU-solve"] * 2
    assert (df["sec"] > 0).all()
    mult = df[df["kernel"] != "LU-solve"]
    assert (mult["error"] < 1e-10).all()


def test_benchmark_cli_writes_csv(tmp_path, capsys):
    out = tmp_path / "bench.csv"
    df = main(["--sizes", "6", "--repeats", "1", "--csv", str(out)])
    assert "strassen" in capsys.readouterr().out
    assert pd.read_csv(out).shape == df.shape

import csv

import pytest

from rsfec.model import pipeline


def test_single_run_corrects(capsys):
    rc = pipeline.main(["--text", "HELLO WORLD", "--nsym", "4", "--errors", "2", "--seed", "3"])
    out = capsys.readouterr().out
    assert rc == 0
    assert "RS output (nsym = 4) (size = 15) =" in out
    assert "restored ascii = 'HELLO WORLD'" in out


def test_single_run_hex_input(capsys):
    rc = pipeline.main(["--hex", "40 41 42", "--nsym", "2"])
    out = capsys.readouterr().out
    assert rc == 0
    assert "input (size = 3) =\n00000000: 40 41 42" in out
    assert "repaired positions = []" in out


def test_single_run_reports_failure(capsys):
    rc = pipeline.main(["--text", "HELLO WORLD", "--nsym", "4", "--errors", "5", "--seed", "1"])
    assert rc == 1
    assert "Warning" in capsys.readouterr().err


def test_bad_input(capsys):
    with pytest.raises(SystemExit) as exc:
        pipeline.main(["--hex", "zz"])
    assert exc.value.code == 2
    assert pipeline.main(["--text", "abc", "--nsym", "0"]) == 2
    assert pipeline.main(["--text", "abc", "--errors", "99"]) == 2


def test_out_file(tmp_path):
    out = tmp_path / "cw.bin"
    assert pipeline.main(["--text", "abc", "--nsym", "4", "--out", str(out)]) == 0
    data = out.read_bytes()
    assert len(data) == 7
    assert data[:3] == b"abc"


def test_error_sweep(tmp_path, capsys):
    prefix = tmp_path / "sweep"
    rc = pipeline.main([
        "--text", "sweep me", "--nsym", "6", "--sweep-only",
        "--error-sweep", "0:4", "--trials", "5", "--sweep-save", str(prefix),
    ])
    assert rc == 0
    assert "Error sweep summary" in capsys.readouterr().out
    with open(f"{prefix}_sweep.csv", newline="") as f:
        rows = list(csv.DictReader(f))
    assert [int(r["errors"]) for r in rows] == [0, 1, 2, 3, 4]
    for r in rows[:4]:
        assert int(r["corrected"]) == 5
        assert float(r["residual_ser"]) == 0.0
    assert int(rows[4]["corrected"]) == 0


def test_parse_value_list():
    assert pipeline._parse_value_list("0:6:2", "x") == [0, 2, 4, 6]
    assert pipeline._parse_value_list("1, 3,5", "x") == [1, 3, 5]
    for bad in ("1:2:3:4", "3:1", "0:4:0", "-1,2"):
        with pytest.raises(ValueError):
            pipeline._parse_value_list(bad, "x")


def test_input_too_long_for_field(capsys):
    assert pipeline.main(["--text", "x" * 250, "--nsym", "10"]) == 2
    assert "symbol limit" in capsys.readouterr().err

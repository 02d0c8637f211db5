import pytest

from dpll.dimacs import write_dimacs
from dpll.main import main


@pytest.fixture
def cnf_file(tmp_path):
    def _write(clauses, name="formula.cnf"):
        path = tmp_path / name
        write_dimacs(clauses, str(path))
        return str(path)
    return _write


def test_reports_sat(cnf_file, capsys):
    assert main([cnf_file([[1, 2], [-1, 3], [-2, -3]])]) == 0
    out = capsys.readouterr().out
    assert "Finished with result: SAT" in out
    assert "Parsed in:" in out
    assert "Solved in:" in out
    assert "Total time:" in out


def test_reports_unsat_with_stats(cnf_file, capsys):
    assert main([cnf_file([[1, 2], [-1, 2], [1, -2], [-1, -2]]), "--stats"]) == 0
    out = capsys.readouterr().out
    assert "Finished with result: UNSAT" in out
    assert "decisions: 1" in out
    assert "backtracks: 1" in out


def test_invalid_input_exits_with_1(tmp_path, capsys):
    path = tmp_path / "broken.cnf"
    path.write_text("p cnf 2 2\n1 2 0\n")
    assert main([str(path)]) == 1
    assert "Expected 2 clauses" in capsys.readouterr().err


def test_missing_file_exits_with_1(tmp_path, capsys):
    assert main([str(tmp_path / "nope.cnf")]) == 1
    assert "error:" in capsys.readouterr().err


def test_usage_error():
    with pytest.raises(SystemExit) as exc:
        main([])
    assert exc.value.code == 2


def test_non_text_file_exits_with_1(tmp_path, capsys):
    path = tmp_path / "binary.cnf"
    path.write_bytes(b"p cnf 1 1\n\xff\xfe 1 0\n")
    assert main([str(path)]) == 1
    assert "Not a text file" in capsys.readouterr().err

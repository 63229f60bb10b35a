import shutil
import sys
from pathlib import Path

import matplotlib
import pytest

matplotlib.use("Agg")

import main  # noqa: E402

EXAMPLES = Path(__file__).resolve().parent.parent / "examples"


def _run(monkeypatch, *argv):
    monkeypatch.setattr(sys, "argv", ["main.py", *argv])
    main.main()


class TestMain:
    def test_prints_results(self, monkeypatch, capsys):
        _run(monkeypatch, str(EXAMPLES / "example1.yaml"))
        out = capsys.readouterr().out
        assert "before_start" in out
        assert "perpendicular" in out
        assert "25.0" in out

    def test_verify_and_render(self, monkeypatch, capsys, tmp_path):
        shutil.copy(EXAMPLES / "example2.yaml", tmp_path / "tri.yaml")
        monkeypatch.chdir(tmp_path)
        _run(monkeypatch, "tri.yaml", "--verify", "--render")
        out = capsys.readouterr().out
        assert "All queries agree" in out
        assert (tmp_path / "output" / "tri_above_interior.png").exists()

    def test_missing_file_exits(self, monkeypatch, capsys, tmp_path):
        with pytest.raises(SystemExit) as exc:
            _run(monkeypatch, str(tmp_path / "nope.yaml"))
        assert exc.value.code == 1
        assert "not found" in capsys.readouterr().err

    def test_degenerate_query_exits(self, monkeypatch, capsys, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text(
            "queries:\n"
            "  - kind: segment\n"
            "    name: point\n"
            "    point: [0, 1, 0]\n"
            "    a: [1, 1, 1]\n"
            "    b: [1, 1, 1]\n"
        )
        with pytest.raises(SystemExit) as exc:
            _run(monkeypatch, str(path))
        assert exc.value.code == 1
        assert "coincide" in capsys.readouterr().err

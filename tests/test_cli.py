import sys

import pytest

from briefdeck import cli


def test_run_levels_prints_thresholds(monkeypatch, capsys):
    monkeypatch.setattr(sys, "argv", ["briefdeck-levels", "--max-level", "4"])
    cli.run_levels()
    output = capsys.readouterr().out
    assert "225" in output
    assert "Points needed" in output


def test_run_draw_with_sample_catalog(monkeypatch, capsys):
    monkeypatch.delenv("BRIEFDECK_STORAGE_BACKEND", raising=False)
    monkeypatch.setattr(sys, "argv", ["briefdeck-draw", "--seed", "3"])
    cli.run_draw()
    assert "Create a" in capsys.readouterr().out


def test_run_validate_rejects_broken_catalog(monkeypatch, tmp_path):
    path = tmp_path / "broken.json"
    path.write_text('{"cards": []}', encoding="utf-8")
    monkeypatch.setattr(sys, "argv", ["briefdeck-validate", "--catalog", str(path)])
    with pytest.raises(SystemExit) as exc:
        cli.run_validate()
    assert exc.value.code == 1

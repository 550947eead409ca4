"""Tests for the unistring CLI."""
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))
from scripts.cli import main


def test_info(capsys):
    assert main(["info", "שלום中"]) == 0
    out = capsys.readouterr().out
    assert "codepoints: 5" in out
    assert "bytes:      11" in out
    assert "width:      6" in out
    assert "direction:  RTL" in out


def test_chars(capsys):
    assert main(["chars", "a中"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 2
    assert "U+0061" in lines[0] and "LTR" in lines[0]
    assert "U+4E2D" in lines[1] and "w= 2" in lines[1]


def test_ascii(capsys):
    assert main(["ascii", "déjà"]) == 0
    assert capsys.readouterr().out.strip() == "deja"


def test_split(capsys):
    assert main(["split", r"/\s*,\s*/", "a , b,c"]) == 0
    assert capsys.readouterr().out.splitlines() == ["a", "b", "c"]


def test_pad(capsys):
    assert main(["pad", "x", "4", "ab", "--start"]) == 0
    assert capsys.readouterr().out.strip() == "abax"


def test_error_exit(capsys):
    assert main(["split", "nodelim", "abc"]) == 1
    assert "error:" in capsys.readouterr().err


def test_config_locale_applied_once(isolated_config, monkeypatch, capsys):
    import scripts.cli as cli
    isolated_config.write_text("collation:\n  locale: C\n", encoding="utf-8")
    applied = []
    monkeypatch.setattr(cli, "apply_collation_locale", applied.append)
    assert main(["info", "a"]) == 0
    assert applied == ["C"]

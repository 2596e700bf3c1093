from __future__ import annotations

from pathlib import Path

import pytest

from lookup_word_definitions import load_definitions, main, render_meanings

DEFS = (
    '["cat",[{"pos":"noun","defs":["a small domesticated feline"]}]]\n'
    '["run",[{"pos":"verb","defs":["to move quickly","to flee"]},{"pos":"noun","defs":["an act of running"]}]]\n'
)


@pytest.fixture
def defs_file(tmp_path: Path) -> Path:
    path = tmp_path / "defs.json"
    path.write_text(DEFS, encoding="utf-8")
    return path


def test_load_definitions(defs_file: Path) -> None:
    mapping = load_definitions(str(defs_file))
    assert list(mapping) == ["cat", "run"]
    assert mapping["run"][1] == {"pos": "noun", "defs": ["an act of running"]}


def test_render_meanings() -> None:
    text = render_meanings([{"pos": "verb", "defs": ["to move quickly", "to flee"]}])
    assert text == "verb:\n  • to move quickly\n  • to flee"


def test_render_no_meanings() -> None:
    assert render_meanings([]) == "Valid word with no definition found"


def test_main_found(defs_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--defs", str(defs_file), "cat"]) == 0
    out = capsys.readouterr().out
    assert out == "cat\nnoun:\n  • a small domesticated feline\n"


def test_main_json(defs_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--defs", str(defs_file), "--json", "cat"]) == 0
    assert capsys.readouterr().out.strip() == (
        '["cat",[{"pos":"noun","defs":["a small domesticated feline"]}]]'
    )


def test_main_unknown_word(defs_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--defs", str(defs_file), "cat", "Dog"]) == 1
    assert "Dog: Invalid word" in capsys.readouterr().out


def test_main_missing_defs_file(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as exc_info:
        main(["--defs", str(tmp_path / "defs.json"), "cat"])
    assert "build_word_definitions.py" in str(exc_info.value.code)

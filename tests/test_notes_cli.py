from pathlib import Path

import pytest

from scripts.notes import main


@pytest.fixture
def vault(tmp_path: Path) -> str:
    return str(tmp_path / "data" / "vault.json")


def run(vault: str, *args: str) -> int:
    return main(["--vault", vault, *args])


def test_init_seeds_welcome_note_once(vault: str, capsys: pytest.CaptureFixture[str]) -> None:
    assert run(vault, "init") == 0
    assert "Vault initialized" in capsys.readouterr().out
    assert Path(vault).exists()

    assert run(vault, "init") == 0
    assert "already has 1 note(s)" in capsys.readouterr().out


def test_add_search_and_count(vault: str, capsys: pytest.CaptureFixture[str]) -> None:
    assert run(vault, "add", "Find dupes", "SELECT email FROM users #sql") == 0
    assert capsys.readouterr().out.strip() == "1"

    assert run(vault, "add", "Packing", "passport", "--category", "Checklist") == 0
    capsys.readouterr()

    assert run(vault, "search", "users") == 0
    out = capsys.readouterr().out
    assert "[SQLQuery] Find dupes  #sql" in out
    assert "Packing" not in out

    assert run(vault, "count") == 0
    assert capsys.readouterr().out.strip() == "2"


def test_due_and_rate(vault: str, capsys: pytest.CaptureFixture[str]) -> None:
    run(vault, "add", "Card", "remember me")
    capsys.readouterr()

    assert run(vault, "due") == 0
    assert "Card" in capsys.readouterr().out

    assert run(vault, "rate", "1", "easy") == 0
    assert "Next review in 1 day(s)" in capsys.readouterr().out

    assert run(vault, "due") == 0
    assert capsys.readouterr().out == ""


def test_errors_exit_nonzero(vault: str) -> None:
    assert run(vault, "rate", "7", "good") == 1
    assert run(vault, "add", "  ", "blank title") == 1


def test_invalid_rating_is_rejected_by_parser(vault: str) -> None:
    with pytest.raises(SystemExit):
        run(vault, "rate", "1", "perfect")

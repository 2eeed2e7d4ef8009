"""
CLI smoke tests against a temporary data directory.
"""

from pathlib import Path

import pytest

from src.app_shell.cli import build_parser, main

RULES = str(Path(__file__).parent.parent.parent / "rules.yaml")


@pytest.fixture(autouse=True)
def data_dir(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    monkeypatch.setenv("LEDGER_DATA_DIR", str(tmp_path))
    return tmp_path


def test_parser_requires_command() -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


def test_migrate_creates_database(data_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    main(["--rules", RULES, "migrate"])

    assert (data_dir / "ledger.db").exists()
    assert "All migrations applied." in capsys.readouterr().out


def test_mint_then_balance(capsys: pytest.CaptureFixture[str]) -> None:
    main(["--rules", RULES, "mint", "SP_ALICE", "250"])
    main(["--rules", RULES, "mint", "SP_ALICE", "50"])
    capsys.readouterr()

    main(["--rules", RULES, "balance", "SP_ALICE"])

    assert capsys.readouterr().out.strip() == "300"


def test_advance_persists_height(capsys: pytest.CaptureFixture[str]) -> None:
    main(["--rules", RULES, "advance", "--blocks", "3"])
    main(["--rules", RULES, "advance"])

    assert "Block height 4." in capsys.readouterr().out


def test_unknown_content_prints_null(capsys: pytest.CaptureFixture[str]) -> None:
    main(["--rules", RULES, "content", "7"])

    assert capsys.readouterr().out.strip() == "null"


def test_missing_rules_file_exits(tmp_path: Path) -> None:
    with pytest.raises(SystemExit):
        main(["--rules", str(tmp_path / "absent.yaml"), "migrate"])


def test_negative_mint_exits_cleanly(
    capsys: pytest.CaptureFixture[str], caplog: pytest.LogCaptureFixture
) -> None:
    with pytest.raises(SystemExit) as exc:
        main(["--rules", RULES, "mint", "SP_ALICE", "-5"])

    assert exc.value.code == 1
    assert "Cannot mint -5 to SP_ALICE" in caplog.text

    main(["--rules", RULES, "balance", "SP_ALICE"])
    assert capsys.readouterr().out.strip() == "0"


def test_backwards_advance_exits_cleanly(caplog: pytest.LogCaptureFixture) -> None:
    with pytest.raises(SystemExit) as exc:
        main(["--rules", RULES, "advance", "--blocks", "-1"])

    assert exc.value.code == 1
    assert "cannot move backwards" in caplog.text

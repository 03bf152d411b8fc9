from __future__ import annotations

from pathlib import Path

import pytest
import typer
from typer.testing import CliRunner

import makesum.cli as cli
from makesum import __version__
from makesum.runner import MakeSum


runner = CliRunner()


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch) -> Path:
    monkeypatch.setenv("PWD", str(tmp_path))
    monkeypatch.delenv("MAKESUM_SILENT", raising=False)
    monkeypatch.delenv("MAKESUM_LANG", raising=False)
    return tmp_path


def test_short_help_prints_runner_banner(workdir: Path) -> None:
    result = runner.invoke(cli.app, ["-h"], prog_name="makesum")
    assert result.exit_code == 0
    assert "Usage : makesum [OPTIONS]" in result.stdout
    assert "-d, --dir" in result.stdout


def test_long_help_wins_over_dir(workdir: Path) -> None:
    result = runner.invoke(cli.app, ["--dir", "docs", "--help"], prog_name="makesum")
    assert result.exit_code == 0
    assert "Usage : makesum" in result.stdout


def test_run_without_flags_succeeds_quietly(workdir: Path) -> None:
    result = runner.invoke(cli.app, [], prog_name="makesum")
    assert result.exit_code == 0
    assert result.stdout == ""


def test_run_resolves_dir_flag(workdir: Path, monkeypatch) -> None:
    seen: list[str | None] = []
    original = MakeSum.run

    def _run(self: MakeSum) -> bool:
        ok = original(self)
        seen.append(self.target_dir)
        return ok

    monkeypatch.setattr(MakeSum, "run", _run)

    result = runner.invoke(cli.app, ["-d", "docs"], prog_name="makesum")

    assert result.exit_code == 0
    assert seen == [f"{workdir}/docs"]


def test_main_version(capsys) -> None:
    rc = cli.main(["--version"])
    assert rc == 0
    assert capsys.readouterr().out.strip() == f"makesum {__version__}"


def test_main_missing_workdir_is_usage_error(tmp_path: Path, monkeypatch, capsys) -> None:
    monkeypatch.setenv("PWD", str(tmp_path / "missing"))
    rc = cli.main([])
    captured = capsys.readouterr()
    assert rc == 2
    assert "error:" in captured.err
    assert "doesn't exist" in captured.err


def test_main_unknown_language_is_usage_error(workdir: Path, monkeypatch, capsys) -> None:
    monkeypatch.setenv("MAKESUM_LANG", "rst")
    rc = cli.main([])
    assert rc == 2
    assert "unknown language" in capsys.readouterr().err


def test_main_unknown_option(workdir: Path, capsys) -> None:
    rc = cli.main(["--bogus"])
    err = capsys.readouterr().err
    assert rc == 2
    assert "error:" in err
    assert "--bogus" in err
    assert "Traceback" not in err


def test_main_dir_requires_value(workdir: Path, capsys) -> None:
    rc = cli.main(["-d"])
    err = capsys.readouterr().err
    assert rc == 2
    assert "error:" in err
    assert "-d" in err


def test_click_exceptions_cover_typer_raised_errors() -> None:
    assert any(isinstance(typer.BadParameter("x"), exc) for exc in cli._CLICK_EXCEPTIONS)


def test_main_maps_error_message_to_exit_code(workdir: Path, monkeypatch, capsys) -> None:
    def _run(self: MakeSum) -> bool:
        self.write_error("cannot read %s", ["README.md"])
        return True

    monkeypatch.setattr(MakeSum, "run", _run)
    rc = cli.main([])
    captured = capsys.readouterr()
    assert rc == 1
    assert "ERROR" in captured.err
    assert "README.md" in captured.err


def test_main_failed_run_exits_one(workdir: Path, monkeypatch) -> None:
    monkeypatch.setattr(MakeSum, "run", lambda self: False)
    assert cli.main([]) == 1


def test_quiet_suppresses_info(workdir: Path, monkeypatch, capsys) -> None:
    def _run(self: MakeSum) -> bool:
        self.write_info("scanning %s", [self.workdir])
        return True

    monkeypatch.setattr(MakeSum, "run", _run)

    assert cli.main([]) == 0
    assert "[ INFO ]" in capsys.readouterr().out

    assert cli.main(["--quiet"]) == 0
    assert capsys.readouterr().out == ""


def test_silent_env_suppresses_info(workdir: Path, monkeypatch, capsys) -> None:
    def _run(self: MakeSum) -> bool:
        self.write_info("hello")
        return True

    monkeypatch.setenv("MAKESUM_SILENT", "1")
    monkeypatch.setattr(MakeSum, "run", _run)
    assert cli.main([]) == 0
    assert capsys.readouterr().out == ""


def test_main_help_names_invoked_script(workdir: Path, monkeypatch, capsys) -> None:
    monkeypatch.setattr(cli.sys, "argv", ["/usr/local/bin/mksum", "-h"])
    assert cli.main() == 0
    assert "Usage : mksum [OPTIONS]" in capsys.readouterr().out


def test_main_help_under_python_m_uses_package_name(workdir: Path, monkeypatch, capsys) -> None:
    monkeypatch.setattr(cli.sys, "argv", ["/site/makesum/__main__.py", "--help"])
    assert cli.main() == 0
    assert "Usage : makesum [OPTIONS]" in capsys.readouterr().out

"""CLI parser and command behaviour tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from deadlink.cli import _build_parser, main


def test_cli_accepts_verbose_before_and_after_command() -> None:
    parser = _build_parser()
    assert parser.parse_args(["--verbose", "check", "a.md"]).verbose is True
    assert parser.parse_args(["check", "a.md", "--verbose"]).verbose is True


def test_cli_check_options() -> None:
    parser = _build_parser()
    args = parser.parse_args(
        [
            "check",
            "a.md",
            "b.txt",
            "--ignore",
            "https://x.org/**",
            "--ignore",
            "http://localhost*",
            "--prefer-get",
            "https://github.com",
            "--no-check-relative",
            "--base-uri",
            "https://example.com/",
            "--timeout",
            "5",
            "--fix",
            "--dry-run",
        ]
    )
    assert args.paths == ["a.md", "b.txt"]
    assert args.ignore == ["https://x.org/**", "http://localhost*"]
    assert args.prefer_get == ["https://github.com"]
    assert args.check_relative is False
    assert args.base_uri == "https://example.com/"
    assert args.timeout == 5.0
    assert args.fix is True
    assert args.dry_run is True


def test_cli_check_defaults_leave_config_untouched() -> None:
    args = _build_parser().parse_args(["check", "a.md"])
    assert args.check_relative is None
    assert args.ignore is None
    assert args.prefer_get is None
    assert args.timeout is None


def test_check_reports_missing_local_link(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    (tmp_path / "present.md").write_text("ok", encoding="utf-8")
    document = tmp_path / "README.md"
    document.write_text("# Docs\n\nSee [a](present.md) and\n[b](missing.md).\n", encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        main(["check", str(document)])

    assert excinfo.value.code == 1
    out = capsys.readouterr().out
    assert ":4:5  " in out
    assert "missing.md is dead." in out
    assert "1 problem(s) found" in out


def test_check_passes_for_clean_document(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    document = tmp_path / "notes.txt"
    document.write_text("No links here.\n", encoding="utf-8")

    main(["check", str(document)])

    assert capsys.readouterr().out == ""


def test_check_uses_discovered_config(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    (tmp_path / ".deadlink.yml").write_text("checkRelative: false\n", encoding="utf-8")
    document = tmp_path / "README.md"
    document.write_text("[b](missing.md)\n", encoding="utf-8")

    main(["check", str(document)])

    assert "missing.md" not in capsys.readouterr().out


def test_invalid_config_exits_with_status_two(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    config_file = tmp_path / "custom.yml"
    config_file.write_text("timeout: never\n", encoding="utf-8")
    document = tmp_path / "README.md"
    document.write_text("text\n", encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        main(["check", str(document), "--config", str(config_file)])

    assert excinfo.value.code == 2
    assert "timeout must be a number" in capsys.readouterr().err


def test_unreadable_document_exits_with_status_two(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["check", str(tmp_path / "absent.md")])
    assert excinfo.value.code == 2


def test_each_document_uses_its_nearest_config(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    lenient = tmp_path / "lenient"
    strict = tmp_path / "strict"
    lenient.mkdir()
    strict.mkdir()
    (lenient / ".deadlink.yml").write_text("checkRelative: false\n", encoding="utf-8")
    (lenient / "README.md").write_text("[a](missing.md)\n", encoding="utf-8")
    (strict / "README.md").write_text("[b](gone.md)\n", encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        main(["check", str(lenient / "README.md"), str(strict / "README.md")])

    assert excinfo.value.code == 1
    out = capsys.readouterr().out
    assert "gone.md is dead." in out
    assert "missing.md" not in out
    assert "1 problem(s) found" in out


def test_dry_run_without_fix_is_rejected(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    document = tmp_path / "README.md"
    document.write_text("text\n", encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        main(["check", str(document), "--dry-run"])

    assert excinfo.value.code == 2
    assert "--dry-run requires --fix" in capsys.readouterr().err


def test_log_file_option_writes_records(tmp_path: Path) -> None:
    document = tmp_path / "notes.txt"
    document.write_text("No links here.\n", encoding="utf-8")
    log_file = tmp_path / "logs" / "deadlink.log"

    main(["check", str(document), "--log-file", str(log_file)])

    assert "Checking links in" in log_file.read_text(encoding="utf-8")
    parser = _build_parser()
    assert parser.parse_args(["--log-file", "a.log", "check", "a.md"]).log_file == Path("a.log")
    assert parser.parse_args(["check", "a.md"]).log_file is None

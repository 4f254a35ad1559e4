from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest
import structlog

from codegen.cli import main
from codegen.errors import InputNotFoundError, MissingFieldError

ALBANIA = {"name": "Albania", "flag": "🇦🇱", "code": "AL", "dial_code": "+355"}


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("COUNTRY_CODEGEN_CONFIG", raising=False)
    monkeypatch.delenv("LOG_FILE", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.chdir(tmp_path)
    yield tmp_path
    root = logging.getLogger()
    for h in list(root.handlers):
        h.close()
    root.handlers.clear()
    structlog.reset_defaults()


def _write_input(workdir: Path, obj) -> None:
    (workdir / "countries.json").write_text(json.dumps(obj, ensure_ascii=False), encoding="utf-8")


def _events(text: str) -> list[dict]:
    return [json.loads(line) for line in text.splitlines() if line.startswith("{")]


def test_main_uses_fixed_relative_paths(workdir: Path) -> None:
    _write_input(workdir, [ALBANIA])
    assert main([]) == 0
    text = (workdir / "generated_country_list.dart").read_text(encoding="utf-8")
    assert 'dialCode: "+355",' in text


def test_main_logs_one_generated_event(workdir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _write_input(workdir, [ALBANIA, ALBANIA])
    main([])

    events = [e for e in _events(capsys.readouterr().err) if e["event"] == "countries_generated"]
    assert len(events) == 1
    assert events[0]["count"] == 2
    assert events[0]["target"] == "dart"
    assert events[0]["output"] == "generated_country_list.dart"
    assert events[0]["level"] == "info"


def test_main_logs_failure_before_raising(workdir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _write_input(workdir, [{"name": "Albania"}])
    with pytest.raises(MissingFieldError):
        main([])

    events = [e for e in _events(capsys.readouterr().err) if e["event"] == "generation_failed"]
    assert len(events) == 1
    assert events[0]["error_type"] == "MissingFieldError"
    assert "flag, code, dial_code" in events[0]["error"]
    assert not (workdir / "generated_country_list.dart").exists()


def test_main_logs_os_errors(workdir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    (workdir / "countries.json").mkdir()
    with pytest.raises(OSError):
        main([])

    events = [e for e in _events(capsys.readouterr().err) if e["event"] == "generation_failed"]
    assert len(events) == 1
    assert events[0]["error_type"] in ("IsADirectoryError", "PermissionError")


def test_main_writes_log_file_when_configured(workdir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    log_file = workdir / "logs" / "codegen.jsonl"
    monkeypatch.setenv("LOG_FILE", str(log_file))
    _write_input(workdir, [ALBANIA])
    main([])

    events = _events(log_file.read_text(encoding="utf-8"))
    assert [e["event"] for e in events] == ["countries_generated"]


def test_no_log_file_by_default(workdir: Path) -> None:
    _write_input(workdir, [])
    main([])
    assert sorted(p.name for p in workdir.iterdir()) == ["countries.json", "generated_country_list.dart"]


def test_main_propagates_errors(workdir: Path) -> None:
    with pytest.raises(InputNotFoundError):
        main([])
    assert not (workdir / "generated_country_list.dart").exists()


def test_main_takes_no_arguments(workdir: Path) -> None:
    with pytest.raises(SystemExit) as ei:
        main(["--input", "other.json"])
    assert ei.value.code == 2

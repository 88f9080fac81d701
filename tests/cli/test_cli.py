# Copyright 2026 Apishape Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the apishape CLI entry point."""

import json
import sys
from pathlib import Path

import pytest

from apishape.cli.main import main
from apishape.config import CONFIG_FILE_NAME

# ###############
# Test Helpers
# ###############

_SNAPSHOT = """\
types:
  com.example.Order:
    fields:
      - {name: id, type: long}
      - {name: note, type: String, nullable: true}
routes:
  - {path: /orders, verb: POST, handler: com.example.OrderApi.create, request: com.example.Order}
"""

_BROKEN_ROUTE = "  - {path: /broken, response: com.example.Missing}\n"


def _run(monkeypatch: pytest.MonkeyPatch, *args: str) -> int:
    monkeypatch.setattr(sys, "argv", ["apishape", *args])
    with pytest.raises(SystemExit) as exc_info:
        main()
    code = exc_info.value.code
    return code if isinstance(code, int) else 0


def _snapshot(tmp_path: Path, text: str = _SNAPSHOT) -> Path:
    path = tmp_path / "snapshot.yaml"
    path.write_text(text, encoding="utf-8")
    return path


# ###############
# Tests
# ###############


def test_main_no_args_prints_help_and_exits(monkeypatch: pytest.MonkeyPatch) -> None:
    """main() with no subcommand prints help and exits with code 0."""
    assert _run(monkeypatch) == 0


# -------- init tests --------


def test_init_writes_default_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    assert _run(monkeypatch, "init", str(tmp_path)) == 0
    content = (tmp_path / CONFIG_FILE_NAME).read_text(encoding="utf-8")
    assert "signal-precedence" in content


def test_init_fails_if_config_exists(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / CONFIG_FILE_NAME).write_text("output: x.ts\n", encoding="utf-8")
    assert _run(monkeypatch, "init", str(tmp_path)) == 1
    assert (tmp_path / CONFIG_FILE_NAME).read_text(encoding="utf-8") == "output: x.ts\n"


def test_init_fails_if_directory_does_not_exist(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    assert _run(monkeypatch, "init", str(tmp_path / "missing")) == 1


# -------- check tests --------


def test_check_clean_snapshot(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.chdir(tmp_path)
    assert _run(monkeypatch, "check", str(_snapshot(tmp_path))) == 0
    assert "No issues found." in capsys.readouterr().out


def test_check_reports_extraction_errors(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.chdir(tmp_path)
    assert _run(monkeypatch, "check", str(_snapshot(tmp_path, _SNAPSHOT + _BROKEN_ROUTE))) == 1
    err = capsys.readouterr().err
    assert "GET /broken: [UnknownType]" in err


def test_check_missing_snapshot(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    assert _run(monkeypatch, "check", str(tmp_path / "nope.yaml")) == 1


def test_check_invalid_config(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.chdir(tmp_path)
    (tmp_path / CONFIG_FILE_NAME).write_text("unknown-key: 1\n", encoding="utf-8")
    assert _run(monkeypatch, "check", str(_snapshot(tmp_path))) == 1
    assert "Invalid config" in capsys.readouterr().err


# -------- generate tests --------


def test_generate_writes_typescript(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    assert _run(monkeypatch, "generate", str(_snapshot(tmp_path))) == 0
    output = (tmp_path / "api-types.ts").read_text(encoding="utf-8")
    assert "export type Order = {\n  id: number\n  note?: string | null\n}" in output
    assert "'POST /orders': { request: Order, response: void }" in output


def test_generate_uses_config_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    config = tmp_path / "custom.yaml"
    config.write_text("output: gen/types.ts\nalias: {com.example.Order: PurchaseOrder}\n", encoding="utf-8")
    assert _run(monkeypatch, "generate", str(_snapshot(tmp_path)), "--config", str(config)) == 0
    assert "export type PurchaseOrder = {" in (tmp_path / "gen" / "types.ts").read_text(encoding="utf-8")


def test_generate_json_artifact(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    output = tmp_path / "api.json"
    assert _run(monkeypatch, "generate", str(_snapshot(tmp_path)), "-o", str(output), "--format", "json") == 0
    data = json.loads(output.read_text(encoding="utf-8"))
    assert [t["name"] for t in data["types"]] == ["Order"]


def test_generate_writes_output_despite_errors(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    snapshot = _snapshot(tmp_path, _SNAPSHOT + _BROKEN_ROUTE)
    assert _run(monkeypatch, "generate", str(snapshot)) == 1
    output = (tmp_path / "api-types.ts").read_text(encoding="utf-8")
    assert "export type Order = {" in output
    assert "/broken" not in output

#!/usr/bin/env python3
import json
from pathlib import Path
import textwrap

import pytest

import docschema.cli.__main__ as cli_main
from docschema.core.app_context import build_context


_DEFS = textwrap.dedent("""\
    records:
      - name: Task
        fields:
          - {name: ID, type: string, annotation: "-,id=auto"}
          - {name: Title, type: string, annotation: "title,unique"}
          - {name: Bad, type: string, annotation: "bad,,x"}
      - name: Broken
        fields:
          - {name: ID, type: int, annotation: "-,id"}
""")


@pytest.fixture
def defs(tmp_path: Path) -> Path:
    p = tmp_path / "defs.yaml"
    p.write_text(_DEFS, encoding="utf-8")
    return p


@pytest.fixture(autouse=True)
def _ctx(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    ctx = build_context(config={
        "render_template_paths": [],
        "output_dir": str(tmp_path / "out"),
        "logging": {"level": "ERROR"},
    })
    monkeypatch.setattr(cli_main, "get_context", lambda: ctx)
    return ctx


def test_no_command_prints_help(capsys):
    assert cli_main.main([]) == 1
    assert "usage: docschema" in capsys.readouterr().out


def test_build_reports_each_record(defs, capsys):
    rc = cli_main.main(["build", str(defs)])
    out = capsys.readouterr().out
    assert rc == 1
    assert "✓ Task: 2 field(s), identifier ID (auto)" in out
    assert "! defs.yaml:0:0: skipped field: empty directive" in out
    assert "✗ Broken: " in out
    assert "must be 'string', got 'int'" in out


def test_build_single_record_json(defs, capsys):
    rc = cli_main.main(["build", str(defs), "--record", "Task", "--json"])
    payload = json.loads(capsys.readouterr().out)
    assert rc == 0
    assert [p["record"] for p in payload] == ["Task"]
    assert payload[0]["schema"]["uniques"] == [{"field": "Title", "storage_name": "title"}]
    assert len(payload[0]["diagnostics"]) == 1


def test_build_unknown_record(defs, capsys):
    assert cli_main.main(["build", str(defs), "--record", "Nope"]) == 1
    assert "No record named Nope" in capsys.readouterr().out


def test_build_missing_file(tmp_path, capsys):
    assert cli_main.main(["build", str(tmp_path / "none.yaml")]) == 1
    out = capsys.readouterr().out
    assert "Cannot load definitions" in out
    assert "does not exist" in out


def test_render_writes_files(defs, tmp_path, capsys):
    rc = cli_main.main(["render", str(defs), "--record", "Task", "--app-version", "0.1.0"])
    assert rc == 0
    out_file = tmp_path / "out" / "task_labels_gen.py"
    assert f"✓ Task -> {out_file}" in capsys.readouterr().out
    assert "docschema 0.1.0" in out_file.read_text(encoding="utf-8")


def test_render_unknown_template(defs, capsys):
    rc = cli_main.main(["render", str(defs), "--record", "Task", "--template", "nope.j2"])
    assert rc == 1
    assert "rendering failed" in capsys.readouterr().out


def test_config_show(capsys):
    assert cli_main.main(["config", "show"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["options"]["disable_meta_fields_detection"] is False
    assert payload["config"]["logging"]["level"] == "ERROR"

"""CLI tests for treeorigin subcommands."""

import json
from pathlib import Path
import sys

import pytest

from treeorigin import cli


def _run_cli(args, monkeypatch):
    monkeypatch.setattr(sys, "argv", ["treeorigin"] + args)
    return cli.main()


def test_to_config_stdout(origins_dir, monkeypatch, capsys):
    _run_cli(["to-config", str(origins_dir / "base.origin")], monkeypatch)
    data = json.loads(capsys.readouterr().out)
    assert data == {"base_source": {"kind": "refspec", "refspec": "foo:bar/x86_64/baz"}}


def test_to_config_then_to_origin(origins_dir, monkeypatch, capsys, tmp_path):
    config_path = tmp_path / "config.json"
    _run_cli(
        ["to-config", str(origins_dir / "complex.origin"), "--output", str(config_path)],
        monkeypatch,
    )
    assert config_path.exists()

    origin_path = tmp_path / "out.origin"
    _run_cli(
        ["to-origin", str(config_path), "--local-assembly", "--output", str(origin_path)],
        monkeypatch,
    )
    text = origin_path.read_text(encoding="utf-8")
    assert text.startswith("[origin]\nbaserefspec=fedora:fedora/34/x86_64/silverblue\n")
    assert "libostree-transient" not in text

    capsys.readouterr()
    _run_cli(["check", str(origin_path)], monkeypatch)
    assert "Status: OK" in capsys.readouterr().out


def test_check_ok(origins_dir, monkeypatch, capsys):
    _run_cli(["check", str(origins_dir / "complex.origin")], monkeypatch)
    out = capsys.readouterr().out
    assert "Status: OK" in out
    assert "Issues: 0" in out


def test_check_wrong_flag_fails(origins_dir, monkeypatch, capsys, tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        _run_cli(
            ["check", str(origins_dir / "base.origin"), "--local-assembly", "--output-dir", str(tmp_path)],
            monkeypatch,
        )
    assert excinfo.value.code == 1
    out = capsys.readouterr().out
    assert "Status: FAILED" in out
    assert "UNEXPECTED_NEW_KEY" in out
    report = json.loads((tmp_path / "check.json").read_text(encoding="utf-8"))
    assert report["ok"] is False
    assert report["may_require_local_assembly"] is True


def test_check_invalid_origin(origins_dir, monkeypatch, capsys):
    with pytest.raises(SystemExit) as excinfo:
        _run_cli(["check", str(origins_dir / "conflict.origin"), "--quiet"], monkeypatch)
    assert excinfo.value.code == 1
    assert capsys.readouterr().out == ""


def test_to_config_error_exits(origins_dir, monkeypatch, capsys):
    with pytest.raises(SystemExit) as excinfo:
        _run_cli(["to-config", str(origins_dir / "conflict.origin")], monkeypatch)
    assert excinfo.value.code == 1
    assert "Error: Conflicting base source" in capsys.readouterr().err


def test_to_origin_invalid_config(monkeypatch, capsys, tmp_path):
    config_path = tmp_path / "config.json"
    config_path.write_text(json.dumps({"requested_packages": ["fish"]}), encoding="utf-8")
    with pytest.raises(SystemExit) as excinfo:
        _run_cli(["to-origin", str(config_path)], monkeypatch)
    assert excinfo.value.code == 1
    assert "base_source" in capsys.readouterr().err


def test_missing_file(monkeypatch, capsys, tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        _run_cli(["check", str(tmp_path / "nope.origin")], monkeypatch)
    assert excinfo.value.code == 1
    assert "Error:" in capsys.readouterr().err


def test_no_command_prints_help(monkeypatch, capsys):
    with pytest.raises(SystemExit) as excinfo:
        _run_cli([], monkeypatch)
    assert excinfo.value.code == 1
    assert "usage: treeorigin" in capsys.readouterr().out


def test_to_origin_output_creates_parent(origins_dir, monkeypatch, tmp_path):
    config_path = tmp_path / "config.json"
    _run_cli(
        ["to-config", str(origins_dir / "container.origin"), "--output", str(config_path)],
        monkeypatch,
    )
    origin_path = tmp_path / "nested" / "dir" / "out.origin"
    _run_cli(["to-origin", str(config_path), "--output", str(origin_path)], monkeypatch)
    text = origin_path.read_text(encoding="utf-8")
    assert text.startswith("[origin]\ncontainer-image-reference=")

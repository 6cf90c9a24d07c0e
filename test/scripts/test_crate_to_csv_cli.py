from __future__ import annotations

import csv
import json
import runpy
from pathlib import Path

import pytest

SCRIPT_PATH = Path(__file__).resolve().parents[2] / "scripts" / "crate_to_csv.py"


def _load_cli_main():
    module_globals = runpy.run_path(str(SCRIPT_PATH))
    return module_globals["main"]


@pytest.fixture
def crate_dir(tmp_path: Path) -> Path:
    crate = tmp_path / "tiny-crate"
    crate.mkdir()
    metadata = {
        "@graph": [
            {"@type": ["Person"], "name": ["Ada"], "knows": [{"@id": "#bob"}]},
            {"@id": "#bob", "name": ["Bob"]},
        ]
    }
    (crate / "ro-crate-metadata.json").write_text(json.dumps(metadata), encoding="utf-8")
    return crate


def test_cli_writes_csv_into_working_directory(
    crate_dir: Path, tmp_path: Path, monkeypatch
) -> None:
    config = tmp_path / "config.json"
    config.write_text(json.dumps({"tables": {"Person": {}}}), encoding="utf-8")
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.chdir(workdir)

    exit_code = _load_cli_main()([str(crate_dir), "--config", str(config)])

    assert exit_code == 0
    with (workdir / "tiny-crate_Person.csv").open(encoding="utf-8", newline="") as handle:
        rows = list(csv.reader(handle))
    assert rows == [["name", "knows", "knows_id"], ["Ada", "Bob", "#bob"]]


def test_cli_uses_bundled_config_by_default(crate_dir: Path, tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)

    assert _load_cli_main()([str(crate_dir)]) == 0
    assert (tmp_path / "tiny-crate_Person.csv").exists()


def test_cli_reports_invalid_directory(tmp_path: Path, monkeypatch, capsys) -> None:
    monkeypatch.chdir(tmp_path)

    exit_code = _load_cli_main()([str(tmp_path / "missing")])

    assert exit_code == 1
    assert "is not a valid directory" in capsys.readouterr().err
    assert list(tmp_path.glob("*.csv")) == []


def test_cli_reports_missing_metadata(tmp_path: Path, monkeypatch, capsys) -> None:
    empty = tmp_path / "empty"
    empty.mkdir()
    monkeypatch.chdir(tmp_path)

    exit_code = _load_cli_main()([str(empty), "-c", "unused.json"])

    assert exit_code == 1
    assert "Metadata file not found" in capsys.readouterr().err

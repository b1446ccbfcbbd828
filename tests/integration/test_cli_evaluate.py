from __future__ import annotations

import json
from pathlib import Path

import pytest
import yaml
from typer.testing import CliRunner

from specmatch.cli import app


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


def write_yaml(path: Path, payload: object) -> Path:
    path.write_text(yaml.safe_dump(payload, allow_unicode=True), encoding="utf-8")
    return path


SPECIFICATION = {
    "id": "loan-eligibility",
    "predicates": [
        {"id": "adult", "query": {"applicant.age": {"$gte": 18}}},
        {"id": "income", "query": {"applicant.income": {"$gt": 30000}}},
        {"id": "not-banned", "query": {"applicant.status": {"$ne": "BANNED"}}},
    ],
    "groups": [
        {"id": "eligible", "junction": "AND", "members": ["adult", "income", "not-banned"]},
        {"id": "any", "junction": "OR", "members": ["adult", "income"]},
    ],
}


@pytest.fixture
def spec_path(tmp_path: Path) -> Path:
    return write_yaml(tmp_path / "spec.yaml", SPECIFICATION)


def test_cli_prints_json_outcome(tmp_path: Path, runner: CliRunner, spec_path: Path) -> None:
    document_path = tmp_path / "document.json"
    document_path.write_text(
        json.dumps({"applicant": {"age": 34, "income": 52000, "status": "ACTIVE"}}),
        encoding="utf-8",
    )

    result = runner.invoke(
        app,
        [
            "--spec",
            str(spec_path),
            "--document",
            str(document_path),
            "--format",
            "json",
            "--log-level",
            "ERROR",
        ],
    )

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["specification_id"] == "loan-eligibility"
    assert payload["summary"]["matched"] == 3
    assert payload["summary"]["fully_determined"] is True
    assert [group["matched"] for group in payload["group_results"]] == [True, True]


def test_cli_text_output_and_output_file(tmp_path: Path, runner: CliRunner, spec_path: Path) -> None:
    document_path = write_yaml(tmp_path / "document.yaml", {"applicant": {"age": 17, "status": "ACTIVE"}})
    output_path = tmp_path / "out" / "outcome.json"

    result = runner.invoke(
        app,
        [
            "--spec",
            str(spec_path),
            "--document",
            str(document_path),
            "--output",
            str(output_path),
            "--log-level",
            "ERROR",
        ],
    )

    assert result.exit_code == 0, result.output
    assert "Specification: loan-eligibility" in result.stdout
    assert "[UNDETERMINED] income - Missing data at: applicant.income" in result.stdout
    assert "[not matched] eligible (AND)" in result.stdout
    assert "fully_determined=false" in result.stdout

    written = json.loads(output_path.read_text(encoding="utf-8"))
    assert written["metadata"]["specification"] == str(spec_path)
    assert written["outcome"]["summary"]["undetermined"] == 1


def test_cli_fail_on_undetermined_exits_with_code_2(
    tmp_path: Path, runner: CliRunner, spec_path: Path
) -> None:
    document_path = write_yaml(tmp_path / "document.yaml", {"applicant": {"age": 40}})

    result = runner.invoke(
        app,
        [
            "--spec",
            str(spec_path),
            "--document",
            str(document_path),
            "--fail-on-undetermined",
            "--log-level",
            "ERROR",
        ],
    )

    assert result.exit_code == 2


def test_cli_applies_config_file(tmp_path: Path, runner: CliRunner, spec_path: Path) -> None:
    document_path = write_yaml(tmp_path / "document.yaml", {"applicant": {"age": 40, "income": 40000}})
    config_path = write_yaml(
        tmp_path / "config.yaml",
        {"evaluation": {"max_workers": 2, "regex_cache_size": 16}, "logging": {"level": "error"}},
    )

    result = runner.invoke(
        app,
        ["--spec", str(spec_path), "--document", str(document_path), "--config", str(config_path)],
    )

    assert result.exit_code == 0, result.output
    assert "Summary: total=3" in result.stdout


def test_cli_rejects_invalid_config(tmp_path: Path, runner: CliRunner, spec_path: Path) -> None:
    document_path = write_yaml(tmp_path / "document.yaml", {})
    config_path = write_yaml(tmp_path / "config.yaml", {"evaluation": {"max_workers": 0}})

    result = runner.invoke(
        app,
        ["--spec", str(spec_path), "--document", str(document_path), "--config", str(config_path)],
    )

    assert result.exit_code != 0


def test_cli_rejects_invalid_specification(tmp_path: Path, runner: CliRunner) -> None:
    spec_path = write_yaml(tmp_path / "spec.yaml", {"predicates": [{"query": {}}]})
    document_path = write_yaml(tmp_path / "document.yaml", {})

    result = runner.invoke(
        app,
        ["--spec", str(spec_path), "--document", str(document_path), "--log-level", "ERROR"],
    )

    assert result.exit_code != 0


def test_cli_reports_non_utf8_document_as_bad_parameter(
    tmp_path: Path, runner: CliRunner, spec_path: Path
) -> None:
    document_path = tmp_path / "document.yaml"
    document_path.write_bytes(b"applicant: \xff\xfe\n")

    result = runner.invoke(
        app,
        ["--spec", str(spec_path), "--document", str(document_path), "--log-level", "ERROR"],
    )

    assert result.exit_code == 2
    assert not isinstance(result.exception, UnicodeDecodeError)

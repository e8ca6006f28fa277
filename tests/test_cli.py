"""
Tests for the mrstat command line interface.
"""

import json
from pathlib import Path

import pytest

from mrstat import cli
from mrstat.aggregate import apply_approvals
from mrstat.config import API_TOKEN_ENV, MRStatConfig
from mrstat.exceptions import ServerError
from mrstat.report import Report, group_merge_requests
from mrstat.testing import create_mock_merge_request
from mrstat.types.merge_requests import ApprovalStatus

TOKEN = "glpat-cli-secret-12345678"


@pytest.fixture
def config_path(tmp_path: Path, monkeypatch) -> Path:
    monkeypatch.delenv(API_TOKEN_ENV, raising=False)
    path = tmp_path / "mrstat.json"
    path.write_text(
        json.dumps(
            {"api_token": TOKEN, "project_id": 42, "authors": {"alice": 11}}
        ),
        encoding="utf-8",
    )
    return path


def _sample_report(target_branch: str) -> Report:
    mrs = [
        apply_approvals(
            create_mock_merge_request(iid=1, title="Conflicted", has_conflicts=True),
            ApprovalStatus(iid=1, approvals_required=1, approvals_left=1),
        ),
        apply_approvals(
            create_mock_merge_request(iid=2, title="Clean"),
            ApprovalStatus(iid=2, approvals_required=1, approvals_left=0),
        ),
    ]
    return group_merge_requests(target_branch, mrs)


def test_prints_report_to_stdout_only(config_path: Path, monkeypatch, capsys) -> None:
    seen: list[MRStatConfig] = []

    async def fake_build_report(config: MRStatConfig) -> Report:
        seen.append(config)
        return _sample_report(config.target_branch)

    monkeypatch.setattr(cli, "build_report", fake_build_report)

    exit_code = cli.main(["--config", str(config_path)])

    captured = capsys.readouterr()
    assert exit_code == 0
    assert seen[0].author_ids == (11,)
    assert captured.out == _sample_report("main").render() + "\n"
    assert "* *Ready to Merge*" in captured.out
    assert "has conflicts, requires approval (1)" in captured.out
    assert "piped to clipboard" in captured.err
    assert "BEGIN MARKDOWN" not in captured.out
    assert TOKEN not in captured.out + captured.err


def test_branch_option_overrides_config(config_path: Path, monkeypatch, capsys) -> None:
    async def fake_build_report(config: MRStatConfig) -> Report:
        return Report(config.target_branch)

    monkeypatch.setattr(cli, "build_report", fake_build_report)

    cli.main(["--config", str(config_path), "--branch", "release/2.0"])

    assert "*Open MRs against `release/2.0`:*" in capsys.readouterr().out


def test_details_format(config_path: Path, monkeypatch, capsys) -> None:
    async def fake_build_report(config: MRStatConfig) -> Report:
        return _sample_report(config.target_branch)

    monkeypatch.setattr(cli, "build_report", fake_build_report)

    cli.main(["--config", str(config_path), "--format", "details"])

    out = capsys.readouterr().out
    assert "Title:  Clean" in out
    assert "Title:    Conflicted" in out
    assert "Blockers: has conflicts, requires approval (1)" in out


def test_tty_output_is_wrapped_in_markers_on_stderr(
    config_path: Path, monkeypatch, capsys
) -> None:
    async def fake_build_report(config: MRStatConfig) -> Report:
        return Report(config.target_branch)

    monkeypatch.setattr(cli, "build_report", fake_build_report)
    monkeypatch.setattr(cli.sys.stdout, "isatty", lambda: True)

    cli.main(["--config", str(config_path)])

    captured = capsys.readouterr()
    assert cli.BEGIN_MARKER in captured.err
    assert cli.END_MARKER in captured.err
    assert cli.BEGIN_MARKER not in captured.out


def test_api_error_prints_no_report(config_path: Path, monkeypatch, capsys) -> None:
    async def failing_build_report(config: MRStatConfig) -> Report:
        raise ServerError(500, "statusCode=500 for GET /merge_requests/2/approvals")

    monkeypatch.setattr(cli, "build_report", failing_build_report)

    exit_code = cli.main(["--config", str(config_path)])

    captured = capsys.readouterr()
    assert exit_code == 1
    assert captured.out == ""
    assert "statusCode=500" in captured.err


def test_configuration_error_before_any_request(tmp_path: Path, monkeypatch, capsys) -> None:
    called = []

    async def fake_build_report(config: MRStatConfig) -> Report:
        called.append(config)
        return Report(config.target_branch)

    monkeypatch.setattr(cli, "build_report", fake_build_report)
    path = tmp_path / "mrstat.json"
    path.write_text(json.dumps({"project_id": 42}), encoding="utf-8")
    monkeypatch.delenv(API_TOKEN_ENV, raising=False)

    exit_code = cli.main(["--config", str(path)])

    captured = capsys.readouterr()
    assert exit_code == 1
    assert called == []
    assert captured.out == ""
    assert "missing `api_token`" in captured.err


def test_quiet_hides_progress(config_path: Path, monkeypatch, capsys) -> None:
    async def fake_build_report(config: MRStatConfig) -> Report:
        return Report(config.target_branch)

    monkeypatch.setattr(cli, "build_report", fake_build_report)

    cli.main(["--config", str(config_path), "--quiet"])

    assert "Checking for configuration file" not in capsys.readouterr().err

"""Tests for the CLI entry point."""

import json

import pytest

from lighthouse_task import main as main_module
from lighthouse_task.main import main
from lighthouse_task.schemas.common import TaskResult


def _run(argv, capsys):
    with pytest.raises(SystemExit) as exc_info:
        main(argv)
    return exc_info.value.code, capsys.readouterr().out


class TestEvaluateCommand:
    def test_success(self, lighthouse_json_path, capsys):
        code, out = _run(
            [
                "evaluate",
                "--report",
                str(lighthouse_json_path),
                "--assertions",
                "first-contentful-paint > 0.9\nuses-http2 = 1",
            ],
            capsys,
        )
        assert code == 0
        summary = json.loads(out)
        assert summary["status"] == "success"
        assert summary["success_count"] == 1
        assert summary["skipped_count"] == 1
        assert summary["errors"] == []

    def test_failure(self, lighthouse_json_path, tmp_path, capsys):
        assertions_file = tmp_path / "assertions.txt"
        assertions_file.write_text("bogus\nlargest-contentful-paint = 1\n")

        code, out = _run(
            [
                "evaluate",
                "--report",
                str(lighthouse_json_path),
                "--assertions-file",
                str(assertions_file),
            ],
            capsys,
        )
        assert code == 1
        summary = json.loads(out)
        assert summary["status"] == "failed"
        assert [error["kind"] for error in summary["errors"]] == [
            "malformed_assertion",
            "assertion_failed",
        ]
        assert [error["line"] for error in summary["errors"]] == [1, 2]

    def test_missing_report(self, tmp_path, capsys):
        code, out = _run(
            ["evaluate", "--report", str(tmp_path / "nope.json"), "--assertions", "a > 0"],
            capsys,
        )
        assert code == 1
        assert json.loads(out)["status"] == "failed"

    def test_assertions_required(self, lighthouse_json_path, capsys):
        code, out = _run(["evaluate", "--report", str(lighthouse_json_path)], capsys)
        assert code == 1
        assert "--assertions" in json.loads(out)["error"]


class TestRunCommand:
    @pytest.mark.parametrize(
        "result,expected_code",
        [(TaskResult.SUCCEEDED, 0), (TaskResult.FAILED, 1)],
    )
    def test_exit_code(self, monkeypatch, capsys, result, expected_code):
        class FakeTask:
            def run(self):
                return result

        monkeypatch.setattr(main_module, "LighthouseTask", FakeTask)
        code, _ = _run(["run"], capsys)
        assert code == expected_code

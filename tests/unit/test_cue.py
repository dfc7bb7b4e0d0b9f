"""Tests for core/cue.py."""

from __future__ import annotations

import json
import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest

from gemara_mcp.core.cue import CueRunner
from gemara_mcp.core.errors import CueError, UsageError


def _done(returncode: int = 0, stdout: str = "", stderr: str = "") -> subprocess.CompletedProcess:
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


@pytest.fixture
def runner() -> CueRunner:
    return CueRunner(binary="cue", timeout=5)


@pytest.fixture(autouse=True)
def cue_on_path():
    with patch("gemara_mcp.core.cue.shutil.which", return_value="/usr/bin/cue"):
        yield


class TestCueRunner:
    def test_from_config(self):
        runner = CueRunner.from_config({"cue": {"binary": "/opt/cue", "timeout_seconds": 9}})
        assert runner.binary == "/opt/cue"
        assert runner.timeout == 9

    def test_missing_executable(self, runner: CueRunner):
        with patch("gemara_mcp.core.cue.shutil.which", return_value=None):
            with pytest.raises(CueError, match="not found"):
                runner.validate(content="a: 1")

    def test_timeout(self, runner: CueRunner):
        with patch(
            "gemara_mcp.core.cue.subprocess.run",
            side_effect=subprocess.TimeoutExpired(cmd="cue", timeout=5),
        ):
            with pytest.raises(CueError, match="timed out"):
                runner.validate(content="a: 1")


class TestValidate:
    def test_requires_input(self, runner: CueRunner):
        with pytest.raises(UsageError, match="Either 'files' or 'content'"):
            runner.validate()

    def test_valid_content(self, runner: CueRunner):
        with patch("gemara_mcp.core.cue.subprocess.run", return_value=_done()) as mock_run:
            result = runner.validate(content="a: int & 1")
        assert result == {"valid": True, "errors": []}
        assert mock_run.call_args.args[0] == ["/usr/bin/cue", "vet", "input.cue"]

    def test_invalid_content(self, runner: CueRunner):
        with patch("gemara_mcp.core.cue.subprocess.run", return_value=_done(1, stderr="a: conflicting values\n")):
            result = runner.validate(content="a: 1 & 2")
        assert result["valid"] is False
        assert result["errors"] == ["a: conflicting values"]

    def test_files_reported_individually(self, runner: CueRunner, tmp_path: Path):
        good = tmp_path / "good.cue"
        bad = tmp_path / "bad.cue"
        good.write_text("a: 1\n", encoding="utf-8")
        bad.write_text("a: 1 & 2\n", encoding="utf-8")

        def fake_run(command, **kwargs):
            return _done(1, stderr="conflict") if command[-1].endswith("bad.cue") else _done()

        with patch("gemara_mcp.core.cue.subprocess.run", side_effect=fake_run):
            result = runner.validate(files=[str(good), str(bad)])
        assert result["valid"] is False
        assert result["errors"] == [f"{bad}: conflict"]


class TestEvaluate:
    def test_returns_result_and_value(self, runner: CueRunner):
        outputs = [_done(), _done(stdout="a: 1\n"), _done(stdout='{"a": 1}')]
        with patch("gemara_mcp.core.cue.subprocess.run", side_effect=outputs):
            result = runner.evaluate("a: 1")
        assert result == {"result": {"a": 1}, "value": "a: 1"}

    def test_expression_passed(self, runner: CueRunner):
        outputs = [_done(), _done(stdout="1\n"), _done(stdout="1")]
        with patch("gemara_mcp.core.cue.subprocess.run", side_effect=outputs) as mock_run:
            result = runner.evaluate("a: 1", expression="a")
        assert result["result"] == 1
        assert mock_run.call_args_list[1].args[0] == ["/usr/bin/cue", "eval", "-e", "a", "input.cue"]

    def test_compilation_error(self, runner: CueRunner):
        with patch("gemara_mcp.core.cue.subprocess.run", return_value=_done(1, stderr="expected operand")):
            with pytest.raises(CueError, match="Compilation error: expected operand"):
                runner.evaluate("a: ")

    def test_expression_error(self, runner: CueRunner):
        outputs = [_done(), _done(1, stderr="reference \"b\" not found")]
        with patch("gemara_mcp.core.cue.subprocess.run", side_effect=outputs):
            with pytest.raises(CueError, match="Expression error"):
                runner.evaluate("a: 1", expression="b")


class TestFormat:
    def test_reads_back_formatted_file(self, runner: CueRunner):
        def fake_run(command, cwd, **kwargs):
            (Path(cwd) / "input.cue").write_text("a: 1\n", encoding="utf-8")
            return _done()

        with patch("gemara_mcp.core.cue.subprocess.run", side_effect=fake_run):
            assert runner.format_source("a:    1") == {"formatted": "a: 1\n"}


class TestUnify:
    def test_requires_configs(self, runner: CueRunner):
        with pytest.raises(UsageError, match="At least one config"):
            runner.unify([])

    def test_compilation_error_names_config(self, runner: CueRunner):
        outputs = [_done(), _done(1, stderr="syntax error")]
        with patch("gemara_mcp.core.cue.subprocess.run", side_effect=outputs):
            with pytest.raises(CueError, match="Compilation error in config 2: syntax error"):
                runner.unify(["a: 1", "b: {"])

    def test_unified_output(self, runner: CueRunner):
        outputs = [
            _done(), _done(),
            _done(stdout="a: 1\nb: 2\n"),
            _done(stdout="a: 1\nb: 2\n"),
            _done(stdout=json.dumps({"a": 1, "b": 2})),
        ]
        with patch("gemara_mcp.core.cue.subprocess.run", side_effect=outputs) as mock_run:
            result = runner.unify(["a: 1", "b: 2"])
        assert result["json"] == {"a": 1, "b": 2}
        assert result["unified"] == "a: 1\nb: 2\n"
        assert mock_run.call_args_list[2].args[0] == ["/usr/bin/cue", "def", "config_1.cue", "config_2.cue"]


class TestExportImport:
    def test_export_yaml(self, runner: CueRunner):
        outputs = [_done(), _done(stdout="a: 1\n")]
        with patch("gemara_mcp.core.cue.subprocess.run", side_effect=outputs):
            assert runner.export("a: 1", "yaml") == {"format": "yaml", "data": {"a": 1}}

    def test_export_default_json(self, runner: CueRunner):
        outputs = [_done(), _done(stdout='{"a": 1}')]
        with patch("gemara_mcp.core.cue.subprocess.run", side_effect=outputs):
            assert runner.export("a: 1", "") == {"format": "json", "data": {"a": 1}}

    def test_export_rejects_format(self, runner: CueRunner):
        with pytest.raises(UsageError, match="Format must be"):
            runner.export("a: 1", "toml")

    def test_import_json(self, runner: CueRunner):
        with patch("gemara_mcp.core.cue.subprocess.run", return_value=_done(stdout="a: 1\n")) as mock_run:
            assert runner.import_data('{"a": 1}') == {"cue": "a: 1\n"}
        assert mock_run.call_args.args[0] == ["/usr/bin/cue", "import", "-o", "-", "input.json"]

    def test_import_rejects_format(self, runner: CueRunner):
        with pytest.raises(UsageError, match="Format must be"):
            runner.import_data("a = 1", "toml")

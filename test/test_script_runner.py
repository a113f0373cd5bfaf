"""
Tests for the plugin script runner

Real child processes use the Python interpreter in place of node, so the
tests run without a JavaScript runtime.
"""

import subprocess
import sys
from unittest.mock import MagicMock, patch

import pytest

from cynthia.exceptions import ErrorCode, ScriptRunnerError, ScriptTimeoutError
from cynthia.plugins.base import Hook, HookSet, PluginDescriptor
from cynthia.plugins.dispatcher import HookDispatcher
from cynthia.plugins.hooks import HookPoint
from cynthia.services.script_runner import NodeScriptRunner


@pytest.fixture
def python_runner():
    return NodeScriptRunner(node_binary=sys.executable, timeout=10.0)


class TestReturnDirect:
    def test_returns_second_argument_without_process(self, tmp_path):
        with patch("cynthia.services.script_runner.subprocess.run") as run:
            assert NodeScriptRunner().run(["returndirect", "<p>x</p>"], tmp_path) == "<p>x</p>"
        run.assert_not_called()

    def test_missing_second_argument_returns_empty(self, tmp_path):
        assert NodeScriptRunner().run(["returndirect"], tmp_path) == ""

    def test_empty_argv_raises(self, tmp_path):
        with pytest.raises(ScriptRunnerError):
            NodeScriptRunner().run([], tmp_path)


class TestNodeInvocation:
    def test_invokes_node_in_working_directory(self, tmp_path):
        completed = subprocess.CompletedProcess(args=[], returncode=0, stdout="out", stderr="")
        with patch("cynthia.services.script_runner.subprocess.run", return_value=completed) as run:
            result = NodeScriptRunner(node_binary="node", timeout=3).run(["append.js", "a b"], tmp_path)

        assert result == "out"
        args, kwargs = run.call_args
        assert args[0] == ["node", "append.js", "a b"]
        assert kwargs["cwd"] == tmp_path
        assert kwargs["timeout"] == 3

    def test_timeout_raises_timeout_error(self, tmp_path):
        with patch(
            "cynthia.services.script_runner.subprocess.run",
            side_effect=subprocess.TimeoutExpired(cmd="node", timeout=1),
        ):
            with pytest.raises(ScriptTimeoutError) as exc_info:
                NodeScriptRunner(timeout=1).run(["slow.js"], tmp_path)
        assert exc_info.value.error_code == ErrorCode.PLUGIN_SCRIPT_TIMEOUT
        assert exc_info.value.timeout == 1

    def test_missing_binary_raises(self, tmp_path):
        with pytest.raises(ScriptRunnerError) as exc_info:
            NodeScriptRunner(node_binary=str(tmp_path / "no-such-node")).run(["x.js"], tmp_path)
        assert not isinstance(exc_info.value, ScriptTimeoutError)

    def test_nonzero_exit_raises_with_stderr(self, tmp_path):
        completed = MagicMock(returncode=2, stdout="", stderr="TypeError: boom\n")
        with patch("cynthia.services.script_runner.subprocess.run", return_value=completed):
            with pytest.raises(ScriptRunnerError) as exc_info:
                NodeScriptRunner().run(["bad.js"], tmp_path)
        assert exc_info.value.details["stderr"] == "TypeError: boom"


class TestChildProcesses:
    def test_returns_script_output(self, python_runner, tmp_path):
        (tmp_path / "echo.py").write_text("import sys\nsys.stdout.write(sys.argv[1] + '!')\n", encoding="utf-8")
        content = '<p class="a">\'quotes\' & "more"\n</p>'
        assert python_runner.run(["echo.py", content], tmp_path) == content + "!"

    def test_runs_in_plugin_directory(self, python_runner, tmp_path):
        (tmp_path / "data.txt").write_text("local", encoding="utf-8")
        (tmp_path / "read.py").write_text("print(open('data.txt').read(), end='')\n", encoding="utf-8")
        assert python_runner.run(["read.py"], tmp_path) == "local"

    def test_script_exceeding_budget_is_stopped(self, tmp_path):
        (tmp_path / "hang.py").write_text("import time\ntime.sleep(30)\n", encoding="utf-8")
        runner = NodeScriptRunner(node_binary=sys.executable, timeout=0.5)
        with pytest.raises(ScriptTimeoutError):
            runner.run(["hang.py"], tmp_path)

    def test_output_that_is_not_utf8_raises_runner_error(self, python_runner, tmp_path):
        (tmp_path / "bytes.py").write_text("import sys\nsys.stdout.buffer.write(b'\\xff\\xfe ok')\n", encoding="utf-8")
        with pytest.raises(ScriptRunnerError) as exc_info:
            python_runner.run(["bytes.py"], tmp_path)
        assert "UTF-8" in exc_info.value.message

    def test_dispatcher_keeps_content_when_output_is_not_utf8(self, python_runner, tmp_path):
        (tmp_path / "bytes.py").write_text("import sys\nsys.stdout.buffer.write(b'\\xff\\xfe ok')\n", encoding="utf-8")
        plugin = PluginDescriptor("bytes", HookSet(on_body=Hook("js", '["bytes.py", "{{input}}"]')), directory=tmp_path)
        assert HookDispatcher(python_runner, tmp_path).apply([plugin], HookPoint.BODY, "<p>hi</p>") == "<p>hi</p>"

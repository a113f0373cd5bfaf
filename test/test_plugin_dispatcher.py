"""
Tests for the hook dispatcher

Sequential application, runner kinds, working directories and script
failure handling.
"""

import logging
from pathlib import Path

import pytest

from cynthia.exceptions import ScriptRunnerError, ScriptTimeoutError
from cynthia.plugins.base import Hook, HookSet, PluginDescriptor
from cynthia.plugins.dispatcher import HookDispatcher
from cynthia.plugins.hooks import ALL_HOOK_POINTS, HookPoint, RunnerKind

from utils.mocks import MockScriptRunner, appending_runner

PLUGINS_ROOT = Path("/srv/site/plugins")


def _plugin(name: str, point: HookPoint = HookPoint.OUTPUT, template: str | None = None, kind: str = "js"):
    template = template or f'["append", "{name}", "{{{{input}}}}"]'
    hook = Hook(kind=kind, template=template)
    hooks = {
        HookPoint.BODY: HookSet(on_body=hook),
        HookPoint.HEAD: HookSet(on_head=hook),
        HookPoint.OUTPUT: HookSet(on_output=hook),
    }[point]
    return PluginDescriptor(name=name, hooks=hooks)


class TestRunnerKind:
    def test_js_is_supported(self):
        assert RunnerKind.parse("js") is RunnerKind.JS

    @pytest.mark.parametrize("kind", ["py", "JS", "", "wasm"])
    def test_other_kinds_are_unsupported(self, kind):
        assert RunnerKind.parse(kind) is None

    def test_hook_exposes_runner(self):
        assert Hook(kind="js", template="[]").runner is RunnerKind.JS
        assert Hook(kind="lua", template="[]").runner is None


class TestHookSet:
    def test_get_by_point(self):
        body, head, output = (Hook("js", "[]") for _ in range(3))
        hooks = HookSet(on_body=body, on_head=head, on_output=output)
        assert hooks.get(HookPoint.BODY) is body
        assert hooks.get(HookPoint.HEAD) is head
        assert hooks.get(HookPoint.OUTPUT) is output

    def test_absent_hooks_are_none(self):
        assert all(HookSet().get(point) is None for point in ALL_HOOK_POINTS)


class TestHookDispatcher:
    def test_no_plugins_leaves_content_unchanged(self, mock_runner):
        dispatcher = HookDispatcher(mock_runner, PLUGINS_ROOT)
        assert dispatcher.apply([], HookPoint.BODY, "<p>x</p>") == "<p>x</p>"
        assert mock_runner.call_count == 0

    def test_plugins_run_in_order(self):
        runner = MockScriptRunner(appending_runner)
        dispatcher = HookDispatcher(runner, PLUGINS_ROOT)
        result = dispatcher.apply([_plugin("A"), _plugin("B")], HookPoint.OUTPUT, "doc:")
        assert result == "doc:AB"

    def test_each_plugin_sees_previous_output(self):
        runner = MockScriptRunner(appending_runner)
        dispatcher = HookDispatcher(runner, PLUGINS_ROOT)
        dispatcher.apply([_plugin("A"), _plugin("B"), _plugin("C")], HookPoint.OUTPUT, "")
        assert [call[0][2] for call in runner.calls] == ["", "A", "AB"]

    def test_returned_string_replaces_content(self):
        runner = MockScriptRunner(lambda args, cwd: "replaced")
        dispatcher = HookDispatcher(runner, PLUGINS_ROOT)
        assert dispatcher.apply([_plugin("A", HookPoint.BODY)], HookPoint.BODY, "original") == "replaced"

    def test_only_selected_point_runs(self, mock_runner):
        dispatcher = HookDispatcher(mock_runner, PLUGINS_ROOT)
        plugins = [_plugin("head-only", HookPoint.HEAD), _plugin("body-only", HookPoint.BODY)]
        dispatcher.apply(plugins, HookPoint.OUTPUT, "x")
        assert mock_runner.call_count == 0

    def test_runs_in_plugin_directory(self, mock_runner):
        dispatcher = HookDispatcher(mock_runner, PLUGINS_ROOT)
        dispatcher.apply([_plugin("minify", HookPoint.BODY)], HookPoint.BODY, "x")
        assert mock_runner.calls[0][1] == PLUGINS_ROOT / "minify"

    def test_explicit_plugin_directory_wins(self, mock_runner, tmp_path):
        plugin = PluginDescriptor(name="x", hooks=HookSet(on_body=Hook("js", '["returndirect", "{{input}}"]')), directory=tmp_path)
        HookDispatcher(mock_runner, PLUGINS_ROOT).apply([plugin], HookPoint.BODY, "c")
        assert mock_runner.calls[0][1] == tmp_path

    def test_sentinel_replaced_with_verbatim_content(self, mock_runner):
        content = '<p>"quoted" & \\ {{input}}</p>'
        plugin = _plugin("direct", HookPoint.BODY, template='["returndirect", "{{input}}"]')
        result = HookDispatcher(mock_runner, PLUGINS_ROOT).apply([plugin], HookPoint.BODY, content)
        assert mock_runner.calls[0][0] == ["returndirect", content]
        assert result == content

    def test_unsupported_kind_is_skipped(self, mock_runner, caplog):
        dispatcher = HookDispatcher(mock_runner, PLUGINS_ROOT)
        with caplog.at_level(logging.WARNING):
            result = dispatcher.apply([_plugin("pyplug", kind="python")], HookPoint.OUTPUT, "doc")
        assert result == "doc"
        assert mock_runner.call_count == 0
        assert "pyplug" in caplog.text
        assert "'python'" in caplog.text

    def test_unsupported_kind_does_not_stop_later_plugins(self):
        runner = MockScriptRunner(appending_runner)
        plugins = [_plugin("A"), _plugin("skip", kind="rb"), _plugin("B")]
        assert HookDispatcher(runner, PLUGINS_ROOT).apply(plugins, HookPoint.OUTPUT, "") == "AB"

    @pytest.mark.parametrize(
        "error",
        [ScriptRunnerError("exit status 1"), ScriptTimeoutError(5.0)],
    )
    def test_script_failure_keeps_content(self, error, caplog):
        def failing(args, cwd):
            raise error

        runner = MockScriptRunner(failing)
        with caplog.at_level(logging.WARNING):
            result = HookDispatcher(runner, PLUGINS_ROOT).apply([_plugin("bad")], HookPoint.OUTPUT, "doc")
        assert result == "doc"
        assert "bad" in caplog.text

    def test_script_failure_does_not_stop_later_plugins(self):
        def handler(args, cwd):
            if args[1] == "bad":
                raise ScriptRunnerError("boom")
            return appending_runner(args, cwd)

        plugins = [_plugin("A"), _plugin("bad"), _plugin("B")]
        assert HookDispatcher(MockScriptRunner(handler), PLUGINS_ROOT).apply(plugins, HookPoint.OUTPUT, "") == "AB"

    def test_malformed_template_falls_back_and_continues(self, mock_runner):
        plugin = _plugin("broken", HookPoint.BODY, template="[oops")
        result = HookDispatcher(mock_runner, PLUGINS_ROOT).apply([plugin], HookPoint.BODY, "<p>x</p>")
        assert mock_runner.calls[0][0] == ["returndirect", "<p>x</p>"]
        assert result == "<p>x</p>"

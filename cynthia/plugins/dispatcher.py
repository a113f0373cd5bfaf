"""
Hook Dispatcher

Applies one hook point of an ordered plugin list to a document. Plugins run
strictly in list order and each one receives the previous plugin's output,
so transformations compose (an injector followed by a minifier, say).

A misbehaving plugin never aborts the render: protocol errors fall back to
returndirect inside the command protocol, and script failures or timeouts
are logged here and leave the document as it was.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING

from cynthia.exceptions import ScriptRunnerError
from cynthia.plugins.hooks import HookPoint, RunnerKind
from cynthia.plugins.protocol import encode_commands

if TYPE_CHECKING:
    from cynthia.plugins.base import PluginDescriptor
    from cynthia.services.script_runner import ScriptRunner

logger = logging.getLogger(__name__)


class HookDispatcher:
    """
    Runs plugin hooks through a script runner.

    Args:
        runner:       Script runner used for "js" hooks.
        plugins_root: Directory holding one working directory per plugin.
        trace:        Log every rendered command list at debug level.
    """

    def __init__(self, runner: ScriptRunner, plugins_root: Path, trace: bool = False) -> None:
        self.runner = runner
        self.plugins_root = plugins_root
        self.trace = trace

    def apply(self, plugins: Sequence[PluginDescriptor], point: HookPoint, content: str) -> str:
        """
        Apply every plugin's hook for `point` to `content`, in order.

        Returns:
            The content after the last participating plugin has run.
        """
        for plugin in plugins:
            hook = plugin.hooks.get(point)
            if hook is None:
                continue

            argv = encode_commands(hook, content, point, plugin_name=plugin.name, trace=self.trace)

            runner = hook.runner
            if runner is RunnerKind.JS:
                content = self._run(plugin, point, argv, content)
            else:
                logger.warning(
                    "%s is using a '%s' type %s runner, which is not supported by this version of Cynthia",
                    plugin.name,
                    hook.kind,
                    point.value,
                    extra={"plugin": plugin.name, "hook": point.value},
                )

        return content

    def _run(self, plugin: PluginDescriptor, point: HookPoint, argv: list[str], content: str) -> str:
        working_directory = plugin.working_directory(self.plugins_root)
        try:
            return self.runner.run(argv, working_directory)
        except ScriptRunnerError as exc:
            logger.warning(
                "Plugin %s %s failed: %s; keeping content unchanged",
                plugin.name,
                point.value,
                exc.message,
                extra={"plugin": plugin.name, "hook": point.value, "error_code": exc.error_code.value},
            )
            return content

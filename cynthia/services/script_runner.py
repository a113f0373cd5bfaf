"""
Plugin script runner.

Runs a plugin's script as a child process in the plugin's own directory and
returns what it printed. Every call starts a fresh process, so one runner
can serve concurrent requests.
"""

import logging
import subprocess  # nosec B404 - plugin scripts run as child processes
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from cynthia.exceptions import ScriptRunnerError, ScriptTimeoutError
from cynthia.plugins.protocol import RETURN_DIRECT

logger = logging.getLogger(__name__)


class ScriptRunner(Protocol):
    """Runs a plugin script and returns its standard output."""

    def run(self, argv: Sequence[str], working_directory: Path) -> str: ...


class NodeScriptRunner:
    """
    Runs `node <argv...>` in the plugin directory.

    The first argument is the script, relative to the plugin directory. A
    command list starting with `returndirect` is answered with its second
    argument without starting a process.
    """

    def __init__(self, node_binary: str = "node", timeout: float = 30.0):
        self.node_binary = node_binary
        self.timeout = timeout

    def run(self, argv: Sequence[str], working_directory: Path) -> str:
        args = list(argv)
        if not args:
            raise ScriptRunnerError("Empty argument vector", working_directory=str(working_directory))

        if args[0] == RETURN_DIRECT:
            return args[1] if len(args) > 1 else ""

        try:
            result = subprocess.run(  # nosec B603
                [self.node_binary, *args],
                cwd=working_directory,
                capture_output=True,
                text=True,
                encoding="utf-8",
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as exc:
            raise ScriptTimeoutError(self.timeout, working_directory=str(working_directory)) from exc
        except OSError as exc:
            raise ScriptRunnerError(
                f"Could not start {self.node_binary}: {exc}",
                working_directory=str(working_directory),
            ) from exc
        except UnicodeDecodeError as exc:
            raise ScriptRunnerError(
                f"Plugin script {args[0]} wrote output that is not UTF-8: {exc}",
                working_directory=str(working_directory),
            ) from exc

        if result.returncode != 0:
            raise ScriptRunnerError(
                f"Plugin script {args[0]} exited with status {result.returncode}",
                working_directory=str(working_directory),
                stderr=result.stderr.strip(),
            )

        if result.stderr:
            logger.debug("Plugin script %s wrote to stderr: %s", args[0], result.stderr.strip())

        return result.stdout

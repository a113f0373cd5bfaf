"""
Plugin Command Protocol

A hook's template is a Handlebars string that renders to a JSON array of
strings. The array is the argument vector for the plugin's script, which
lets a plugin describe how it wants to be called without the server
knowing anything about the plugin itself:

    ["append.js", "--position", "end", "{{input}}"]

For body and output hooks `input` is bound to a random placeholder that is
unique to one render. After the JSON is decoded, any argument equal to the
placeholder becomes a `CurrentContent` argument and is replaced with the
document text verbatim, so the (possibly very large) document never passes
through the template engine or the JSON decoder.

Head hooks bind `input` to the JSON-escaped head fragment itself and get no
substitution.

A template that fails to render or decode never aborts the page: the
command list falls back to `returndirect`, which the script runner answers
without starting a process.
"""

from __future__ import annotations

import json
import logging
import secrets
from dataclasses import dataclass
from typing import Union

import chevron
from chevron.tokenizer import ChevronError

from cynthia.exceptions import CommandProtocolError
from cynthia.plugins.base import Hook
from cynthia.plugins.hooks import HookPoint

logger = logging.getLogger(__name__)

RETURN_DIRECT = "returndirect"
PLACEHOLDER_PREFIX = "cynthia-input-"

# chevron reports an empty tag (`{{}}`) as IndexError
TEMPLATE_ERRORS = (ChevronError, IndexError)


@dataclass(frozen=True)
class CurrentContent:
    """Stands for the document currently being transformed."""


@dataclass(frozen=True)
class LiteralArg:
    value: str


CommandArg = Union[CurrentContent, LiteralArg]


def new_placeholder() -> str:
    """Return a placeholder token no plugin can predict."""
    return PLACEHOLDER_PREFIX + secrets.token_hex(16)


def escape_json(text: str) -> str:
    """Escape text for embedding inside a JSON string literal, without the quotes."""
    return json.dumps(text, ensure_ascii=False)[1:-1]


def render_command_template(template: str, bound_input: str) -> str:
    """
    Render a hook template with `input` as its only variable.

    Partial tags (`{{> name}}`) render as empty text; they are never loaded
    from disk.

    Raises:
        CommandProtocolError: if the template is malformed.
    """
    try:
        return chevron.render(template, {"input": bound_input}, partials_path=None)
    except TEMPLATE_ERRORS as exc:
        raise CommandProtocolError(f"Command template failed to render: {exc}") from exc


def decode_command_list(rendered: str, placeholder: str | None = None) -> list[CommandArg]:
    """
    Decode a rendered template into tagged command arguments.

    Arguments equal to `placeholder` decode to `CurrentContent`; everything
    else is a `LiteralArg`.

    Raises:
        CommandProtocolError: if the text is not a JSON array of strings.
    """
    try:
        commands = json.loads(rendered)
    except json.JSONDecodeError as exc:
        raise CommandProtocolError(f"Command list is not valid JSON: {exc}") from exc

    if not isinstance(commands, list) or not all(isinstance(c, str) for c in commands):
        raise CommandProtocolError("Command list must be a JSON array of strings")

    return [CurrentContent() if placeholder is not None and c == placeholder else LiteralArg(c) for c in commands]


def build_argument_vector(commands: list[CommandArg], content: str) -> list[str]:
    """Replace every `CurrentContent` argument with the content, verbatim."""
    return [content if isinstance(arg, CurrentContent) else arg.value for arg in commands]


def encode_commands(
    hook: Hook,
    content: str,
    point: HookPoint,
    plugin_name: str = "",
    trace: bool = False,
) -> list[str]:
    """
    Turn a hook template and the current content into an argument vector.

    Args:
        hook:        The hook being applied.
        content:     The body, head or output document being transformed.
        point:       The pipeline point, which decides how `input` is bound.
        plugin_name: Used in diagnostics only.
        trace:       Log the rendered command list at debug level.

    Returns:
        The argument vector for the script runner.
    """
    if point.substitutes_content:
        placeholder: str | None = new_placeholder()
        bound_input = placeholder
        fallback_arg: CommandArg = CurrentContent()
    else:
        placeholder = None
        bound_input = escape_json(content)
        fallback_arg = LiteralArg(bound_input)

    try:
        rendered = render_command_template(hook.template, bound_input)
    except CommandProtocolError as exc:
        logger.warning(
            "Plugin %s %s: %s; returning content directly",
            plugin_name,
            point.value,
            exc.message,
            extra={"plugin": plugin_name, "hook": point.value},
        )
        return [RETURN_DIRECT, "f" + content]

    if trace:
        logger.debug(
            "Plugin %s %s command list: %s",
            plugin_name,
            point.value,
            rendered,
            extra={"plugin": plugin_name, "hook": point.value},
        )

    try:
        commands = decode_command_list(rendered, placeholder)
    except CommandProtocolError as exc:
        logger.warning(
            "Plugin %s %s: %s; returning content directly",
            plugin_name,
            point.value,
            exc.message,
            extra={"plugin": plugin_name, "hook": point.value},
        )
        commands = [LiteralArg(RETURN_DIRECT), fallback_arg]

    return build_argument_vector(commands, content)

"""
Plugin Descriptors

Hook: one runner kind plus the command template a plugin declares for a
      hook point.
HookSet: the hooks of one plugin, keyed by hook point.
PluginDescriptor: a named plugin, its hooks and its working directory.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from cynthia.plugins.hooks import HookPoint, RunnerKind


@dataclass(frozen=True)
class Hook:
    """
    A plugin-declared transformation.

    Attributes:
        kind:     Runner requested by the manifest, e.g. "js". Kept verbatim
                  so unsupported kinds can be reported by name.
        template: Handlebars template rendering to a JSON array of strings.
    """

    kind: str
    template: str

    @property
    def runner(self) -> RunnerKind | None:
        return RunnerKind.parse(self.kind)


@dataclass(frozen=True)
class HookSet:
    on_body: Hook | None = None
    on_head: Hook | None = None
    on_output: Hook | None = None

    def get(self, point: HookPoint) -> Hook | None:
        """Return the hook declared for a pipeline point, or None."""
        if point is HookPoint.BODY:
            return self.on_body
        if point is HookPoint.HEAD:
            return self.on_head
        return self.on_output


@dataclass(frozen=True)
class PluginDescriptor:
    """
    A loaded plugin.

    Attributes:
        name:      Plugin name; also the name of its directory under the
                   plugins root unless `directory` says otherwise.
        hooks:     Hooks the plugin participates in.
        directory: Working directory for the plugin's scripts.
    """

    name: str
    hooks: HookSet = field(default_factory=HookSet)
    directory: Path | None = None

    def working_directory(self, plugins_root: Path) -> Path:
        return self.directory if self.directory is not None else plugins_root / self.name

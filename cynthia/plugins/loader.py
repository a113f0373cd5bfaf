"""
Plugin Loader

Discovers plugins under the plugins directory. Each plugin lives in its own
subdirectory holding a `cynthia-plugin.json` manifest:

    {
        "CyntiaPluginCompat": "3",
        "name": "minify",
        "runners": {
            "modifyOutputHTML": {"type": "js", "execute": "[\"minify.js\", \"{{input}}\"]"}
        }
    }

Plugins are returned in sorted directory order, which is the order their
hooks run in.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from cynthia.plugins.base import Hook, HookSet, PluginDescriptor
from cynthia.schemas.plugin import PluginHookConfig, PluginManifest

logger = logging.getLogger(__name__)

MANIFEST_FILENAME = "cynthia-plugin.json"


def _to_hook(config: PluginHookConfig | None) -> Hook | None:
    if config is None:
        return None
    return Hook(kind=config.type, template=config.execute)


def manifest_to_descriptor(manifest: PluginManifest, directory: Path) -> PluginDescriptor:
    """Build a descriptor from a parsed manifest; the name defaults to the directory name."""
    runners = manifest.runners
    return PluginDescriptor(
        name=manifest.name or directory.name,
        hooks=HookSet(
            on_body=_to_hook(runners.modify_body_html),
            on_head=_to_hook(runners.modify_head_html),
            on_output=_to_hook(runners.modify_output_html),
        ),
        directory=directory,
    )


def load_plugin(directory: Path) -> PluginDescriptor | None:
    """
    Load the plugin in `directory`.

    Returns None if the directory has no manifest or the manifest cannot be
    parsed.
    """
    manifest_path = directory / MANIFEST_FILENAME
    if not manifest_path.is_file():
        return None
    try:
        data = json.loads(manifest_path.read_text(encoding="utf-8"))
        manifest = PluginManifest.model_validate(data)
    except (json.JSONDecodeError, OSError, ValidationError) as exc:
        logger.warning("Skipping plugin in %s: invalid manifest: %s", directory, exc)
        return None

    if manifest.runners.plugin_child_execute is not None or manifest.runners.hostedfolders:
        logger.info("Plugin %s declares child processes or hosted folders; these are not run", directory.name)

    return manifest_to_descriptor(manifest, directory)


def load_plugins(plugins_dir: Path) -> list[PluginDescriptor]:
    """Load every plugin under `plugins_dir`, in sorted directory order."""
    if not plugins_dir.is_dir():
        logger.info("No plugins directory at %s", plugins_dir)
        return []

    plugins: list[PluginDescriptor] = []
    for directory in sorted(p for p in plugins_dir.iterdir() if p.is_dir()):
        plugin = load_plugin(directory)
        if plugin is not None:
            plugins.append(plugin)
            logger.info("Plugin loaded: %s", plugin.name)

    logger.info("Plugin initialisation complete: %d plugins loaded", len(plugins))
    return plugins

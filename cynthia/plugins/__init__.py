"""
Cynthia Plugin System

Public API for the plugin system:
    Hook, HookSet, PluginDescriptor : what a plugin declares
    HookPoint, RunnerKind           : pipeline points and supported runners
    HookDispatcher                  : applies one hook point of a plugin list
    encode_commands                 : the hook command protocol
    load_plugins                    : plugin discovery
"""

from .base import Hook, HookSet, PluginDescriptor
from .dispatcher import HookDispatcher
from .hooks import BYPASS_MARKERS, HookPoint, RunnerKind
from .loader import load_plugins
from .protocol import encode_commands

__all__ = [
    "BYPASS_MARKERS",
    "Hook",
    "HookDispatcher",
    "HookPoint",
    "HookSet",
    "PluginDescriptor",
    "RunnerKind",
    "encode_commands",
    "load_plugins",
]

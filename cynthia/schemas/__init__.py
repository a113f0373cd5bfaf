"""Schemas for the files Cynthia reads and the values passed through a page render."""

from .mode import HandlebarConfig, MenuLink, ModeConfig, ModeInfo
from .page import Author, ContentSource, Dates, PageRecord
from .plugin import PluginHookConfig, PluginManifest, PluginRunners
from .render import MenuPair, RenderRequest

__all__ = [
    "Author",
    "ContentSource",
    "Dates",
    "HandlebarConfig",
    "MenuLink",
    "MenuPair",
    "ModeConfig",
    "ModeInfo",
    "PageRecord",
    "PluginHookConfig",
    "PluginManifest",
    "PluginRunners",
    "RenderRequest",
]

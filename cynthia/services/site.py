"""
Site wiring.

Builds the page pipeline for one site root from settings and renders pages
by id: one record lookup and content load, then assembly.
"""

import logging

from cynthia.config import Settings
from cynthia.plugins.base import PluginDescriptor
from cynthia.plugins.dispatcher import HookDispatcher
from cynthia.plugins.loader import load_plugins
from cynthia.schemas.render import RenderRequest
from cynthia.services.content_service import ContentService
from cynthia.services.metadata_store import JsonMetadataStore
from cynthia.services.mode_service import ModeResolver
from cynthia.services.page_assembler import PageAssembler
from cynthia.services.script_runner import NodeScriptRunner, ScriptRunner

logger = logging.getLogger(__name__)


class Site:
    def __init__(
        self,
        settings: Settings,
        runner: ScriptRunner | None = None,
        plugins: list[PluginDescriptor] | None = None,
    ):
        self.settings = settings
        self.metadata_store = JsonMetadataStore(settings.published_path)
        self.mode_resolver = ModeResolver(settings.modes_path, settings.styles_path)
        self.content_service = ContentService(settings.pages_path)
        self.runner = runner or NodeScriptRunner(settings.node_binary, settings.plugin_timeout_seconds)
        self.plugins = tuple(plugins if plugins is not None else load_plugins(settings.plugins_path))
        self.dispatcher = HookDispatcher(
            self.runner,
            settings.plugins_path,
            trace=settings.trace_plugin_commands,
        )
        self.assembler = PageAssembler(
            self.metadata_store,
            self.mode_resolver,
            self.dispatcher,
            settings.templates_path,
            settings.client_script,
            version=settings.app_version,
        )

    def render(self, page_id: str) -> str:
        """Render a page by id; content markers are returned as they are."""
        record = self.metadata_store.get(page_id)
        content = self.content_service.load(record)
        return self.assembler.assemble(
            RenderRequest(page_id=page_id, content=content, plugins=self.plugins, record=record)
        )

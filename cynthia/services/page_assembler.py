"""
Page assembler.

Turns a content fragment into a complete page:

    content markers pass through untouched
    body hooks        -> body
    metadata lookup   -> no record: return the body as is (API fragments)
    mode, stylesheet and client script
    head construction -> head hooks -> page metadata script
    template render   -> html document -> output hooks
    generator banner

Every step runs in order on the calling thread. A missing client script,
a missing template or a template that does not render fails the request
with a CynthiaError; everything else degrades with a logged warning.
"""

import json
import logging
from html import escape
from pathlib import Path
from typing import Protocol

import chevron

from cynthia import GENERATOR_NAME, __version__
from cynthia.exceptions import AssetNotFoundError, TemplateRenderError
from cynthia.plugins.dispatcher import HookDispatcher
from cynthia.plugins.hooks import BYPASS_MARKERS, HookPoint
from cynthia.plugins.protocol import TEMPLATE_ERRORS
from cynthia.schemas.mode import ModeInfo
from cynthia.schemas.page import PageRecord
from cynthia.schemas.render import RenderRequest
from cynthia.services.menu_service import render_menus
from cynthia.services.mode_service import DEFAULT_MODE

logger = logging.getLogger(__name__)

CLIENT_LIBRARY_TAG = '<script src="/jquery/jquery.min.js"></script>'
TEMPLATE_EXTENSION = ".handlebars"
BANNER = (
    "<!--\n\n"
    "Generated and hosted through {generator} v{version}, by Strawmelonjuice.\n"
    "Also see:\t<https://github.com/strawmelonjuice/CynthiaCMS-JS/blob/main/README.MD>\n\n"
    "-->\n\n\n\n\r"
)


class MetadataStore(Protocol):
    def list_records(self) -> list[PageRecord]: ...


class ModeSource(Protocol):
    def resolve(self, mode_name: str) -> ModeInfo: ...


def build_head(stylesheet: str, title: str, site_name: str) -> str:
    return (
        f"\n<style>{stylesheet}</style>\n"
        f"{CLIENT_LIBRARY_TAG}\n"
        f"<title>{escape(title, quote=False)} – {escape(site_name, quote=False)}</title>\n"
    )


def page_metadata_script(record: PageRecord) -> str:
    """Script tag exposing the page record to client scripts as `pagemetainfo`."""
    literal = json.dumps(record.to_client_json()).replace("</", "<\\/")
    return f"<script>\n\tconst pagemetainfo = JSON.parse({literal});\n</script>"


def generator_banner(version: str = __version__) -> str:
    return BANNER.format(generator=GENERATOR_NAME, version=version)


def wrap_document(rendered: str, client_script: str) -> str:
    return f"<html>\n{rendered}\n\n\n\n<script>{client_script}</script>\n\n</html>"


class PageAssembler:
    """
    Assembles pages for one site.

    Args:
        metadata_store:     Source of page records.
        mode_resolver:      Resolves mode names to stylesheet and templates.
        dispatcher:         Applies plugin hooks.
        templates_path:     Directory holding `<name>.handlebars` templates.
        client_script_path: Client script inlined at the end of every page.
    """

    def __init__(
        self,
        metadata_store: MetadataStore,
        mode_resolver: ModeSource,
        dispatcher: HookDispatcher,
        templates_path: Path,
        client_script_path: Path,
        version: str = __version__,
    ):
        self.metadata_store = metadata_store
        self.mode_resolver = mode_resolver
        self.dispatcher = dispatcher
        self.templates_path = templates_path
        self.client_script_path = client_script_path
        self.version = version

    def assemble(self, request: RenderRequest) -> str:
        """
        Assemble the page for a render request.

        Raises:
            AssetNotFoundError: if the client script or the template is missing.
            TemplateRenderError: if the template does not render.
            ModeNotFoundError: if no usable mode exists.
        """
        if request.content in BYPASS_MARKERS:
            return request.content

        plugins = request.plugins
        body = self.dispatcher.apply(plugins, HookPoint.BODY, request.content)

        record = request.record
        if record is None:
            record = self._find_record(request.page_id)
        if record is None:
            logger.debug("No page record for %s; returning body only", request.page_id)
            return body

        mode_name = record.mode or DEFAULT_MODE
        record = record.model_copy(update={"mode": mode_name})
        mode = self.mode_resolver.resolve(mode_name)
        menus = request.menus if request.menus is not None else render_menus(mode)

        stylesheet = self._read_stylesheet(mode.stylesheet_path)
        client_script = self._read_client_script()

        head = build_head(stylesheet, record.title, mode.site_name)
        head = self.dispatcher.apply(plugins, HookPoint.HEAD, head)
        head += page_metadata_script(record)

        template_name = mode.template_for(record.kind)
        rendered = self._render_template(
            template_name,
            {
                "head": head,
                "content": body,
                "menu1": menus.menu1,
                "menu2": menus.menu2,
                "infoshow": "",
            },
        )

        document = wrap_document(rendered, client_script)
        document = self.dispatcher.apply(plugins, HookPoint.OUTPUT, document)

        return generator_banner(self.version) + document

    def _find_record(self, page_id: str) -> PageRecord | None:
        for record in self.metadata_store.list_records():
            if record.id == page_id:
                return record
        return None

    def _read_stylesheet(self, path: Path) -> str:
        try:
            return path.read_text(encoding="utf-8")
        except OSError:
            logger.warning("Stylesheet %s could not be read; continuing without it", path)
            return ""

    def _read_client_script(self) -> str:
        try:
            return self.client_script_path.read_text(encoding="utf-8")
        except OSError as exc:
            raise AssetNotFoundError("client script", str(self.client_script_path)) from exc

    def _render_template(self, template_name: str, context: dict[str, str]) -> str:
        path = self.templates_path / f"{template_name}{TEMPLATE_EXTENSION}"
        try:
            source = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise AssetNotFoundError("template", str(path)) from exc

        try:
            return chevron.render(source, context, partials_path=None)
        except TEMPLATE_ERRORS as exc:
            raise TemplateRenderError(template_name, str(exc)) from exc

"""
Content source loader.

Produces the seed document body for a page from its record's content
object. Failures are not raised: they are reported with the content
markers the page pipeline passes through untouched.
"""

import logging
from html import escape
from pathlib import Path

import httpx
from markdown_it import MarkdownIt

from cynthia.plugins.hooks import CONTENT_LOCATION_ERROR, CONTENT_TYPE_ERROR, NOT_FOUND_ERROR
from cynthia.schemas.page import ContentSource, PageRecord

logger = logging.getLogger(__name__)

HTML_TYPES = {"html", "webp"}
MARKDOWN_TYPES = {"markdown", "md"}
TEXT_TYPES = {"text", "plain", "plaintext"}


class ContentService:
    def __init__(self, pages_path: Path, http_timeout: float = 10.0):
        self.pages_path = pages_path
        self.http_timeout = http_timeout
        self._markdown = MarkdownIt()

    def load(self, record: PageRecord | None) -> str:
        """Return the page body as HTML, or a content marker."""
        if record is None:
            return NOT_FOUND_ERROR

        raw = self._read(record.id, record.content)
        if raw is None:
            return CONTENT_LOCATION_ERROR

        markup_type = record.content.markup_type.lower()
        if markup_type in HTML_TYPES:
            return raw
        if markup_type in MARKDOWN_TYPES:
            return self._markdown.render(raw)
        if markup_type in TEXT_TYPES:
            return f"<pre>{escape(raw)}</pre>"

        logger.warning("Page %s has unsupported markup type '%s'", record.id, record.content.markup_type)
        return CONTENT_TYPE_ERROR

    def _read(self, page_id: str, source: ContentSource) -> str | None:
        if source.location == "inline":
            return source.data

        if source.location == "external":
            try:
                response = httpx.get(source.data, timeout=self.http_timeout, follow_redirects=True)
                response.raise_for_status()
            except httpx.HTTPError as exc:
                logger.warning("Could not fetch content for page %s from %s: %s", page_id, source.data, exc)
                return None
            return response.text

        path = self.pages_path / source.data
        try:
            return path.read_text(encoding="utf-8")
        except OSError as exc:
            logger.warning("Could not read content for page %s at %s: %s", page_id, path, exc)
            return None

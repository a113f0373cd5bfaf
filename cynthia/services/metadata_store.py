"""
Page metadata store.

Reads the published page records from `published.jsonc`, a JSON array that
may carry comments. Each call reads the file again, so a render always works
on its own snapshot.
"""

import logging
from pathlib import Path

import json5
from pydantic import ValidationError

from cynthia.exceptions import MetadataStoreError
from cynthia.schemas.page import PageRecord

logger = logging.getLogger(__name__)


class JsonMetadataStore:
    def __init__(self, path: Path):
        self.path = path

    def list_records(self) -> list[PageRecord]:
        """
        Return all published page records, in file order.

        A missing file means nothing is published yet.

        Raises:
            MetadataStoreError: if the file exists but cannot be interpreted.
        """
        if not self.path.is_file():
            logger.warning("No published pages file at %s", self.path)
            return []

        try:
            data = json5.loads(self.path.read_text(encoding="utf-8"))
        except (ValueError, OSError) as exc:
            raise MetadataStoreError(str(self.path), str(exc)) from exc

        if not isinstance(data, list):
            raise MetadataStoreError(str(self.path), "expected a list of page records")

        try:
            return [PageRecord.model_validate(item) for item in data]
        except ValidationError as exc:
            raise MetadataStoreError(str(self.path), str(exc)) from exc

    def get(self, page_id: str) -> PageRecord | None:
        """Return the first record with the given id, or None."""
        for record in self.list_records():
            if record.id == page_id:
                return record
        return None

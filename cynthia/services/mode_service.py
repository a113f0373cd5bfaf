"""
Mode resolver.

A mode is a named bundle of site name, stylesheet, post/page templates and
menu links, stored as `cynthiaFiles/modes/<name>.jsonc`. The file holds
either the mode object itself or a `[name, mode]` pair.
"""

import logging
from pathlib import Path

import json5
from pydantic import ValidationError

from cynthia.exceptions import ModeNotFoundError
from cynthia.schemas.mode import ModeConfig, ModeInfo

logger = logging.getLogger(__name__)

DEFAULT_MODE = "default"


class ModeResolver:
    def __init__(self, modes_path: Path, styles_path: Path):
        self.modes_path = modes_path
        self.styles_path = styles_path

    def resolve(self, mode_name: str) -> ModeInfo:
        """
        Resolve a mode by name.

        Unknown or unreadable modes fall back to the default mode.

        Raises:
            ModeNotFoundError: if the default mode itself cannot be loaded.
        """
        try:
            return self._load(mode_name)
        except ModeNotFoundError as exc:
            if mode_name == DEFAULT_MODE:
                raise
            logger.warning("%s; falling back to mode '%s'", exc.message, DEFAULT_MODE)
            return self._load(DEFAULT_MODE)

    def _load(self, mode_name: str) -> ModeInfo:
        if not mode_name or "/" in mode_name or "\\" in mode_name or mode_name.startswith("."):
            raise ModeNotFoundError(mode_name, "invalid mode name")

        path = self.modes_path / f"{mode_name}.jsonc"
        try:
            data = json5.loads(path.read_text(encoding="utf-8"))
        except OSError as exc:
            raise ModeNotFoundError(mode_name, f"cannot read {path}") from exc
        except ValueError as exc:
            raise ModeNotFoundError(mode_name, f"cannot parse {path}: {exc}") from exc

        if isinstance(data, list) and len(data) == 2:
            data = data[1]

        try:
            config = ModeConfig.model_validate(data)
        except ValidationError as exc:
            raise ModeNotFoundError(mode_name, str(exc)) from exc

        return ModeInfo(
            name=mode_name,
            stylesheet_path=self.styles_path / config.stylefile,
            post_template=config.handlebar.post,
            page_template=config.handlebar.page,
            site_name=config.sitename,
            menu_links=tuple(config.menulinks),
            menu2_links=tuple(config.menu2links),
        )

from dataclasses import dataclass
from typing import Optional

from cynthia.plugins.base import PluginDescriptor
from cynthia.schemas.page import PageRecord


@dataclass(frozen=True)
class MenuPair:
    """Pre-rendered menu HTML for the template's menu1 and menu2 slots."""

    menu1: str = ""
    menu2: str = ""


@dataclass(frozen=True)
class RenderRequest:
    """
    Everything one page render needs; not modified while the page is assembled.

    `record` is the page record the caller already looked up, so a render
    works on one metadata snapshot. When it is None the assembler looks the
    page up itself. When `menus` is None they are rendered from the page's
    resolved mode.
    """

    page_id: str
    content: str
    menus: Optional[MenuPair] = None
    plugins: tuple[PluginDescriptor, ...] = ()
    record: Optional[PageRecord] = None

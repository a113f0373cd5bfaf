"""Menu rendering for a mode's two link lists."""

from collections.abc import Iterable
from html import escape

from cynthia.schemas.mode import MenuLink, ModeInfo
from cynthia.schemas.render import MenuPair


def render_menu(links: Iterable[MenuLink]) -> str:
    return "".join(f'<a href="{escape(link.href)}" class="menulink">{escape(link.name)}</a>' for link in links)


def render_menus(mode: ModeInfo) -> MenuPair:
    return MenuPair(menu1=render_menu(mode.menu_links), menu2=render_menu(mode.menu2_links))

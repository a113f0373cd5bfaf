from dataclasses import dataclass, field
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class MenuLink(BaseModel):
    name: str
    href: str


class HandlebarConfig(BaseModel):
    post: str
    page: str


class ModeConfig(BaseModel):
    """Contents of a cynthiaFiles/modes/<name>.jsonc file."""

    sitename: str
    stylefile: str
    handlebar: HandlebarConfig
    menulinks: list[MenuLink] = Field(default_factory=list)
    menu2links: list[MenuLink] = Field(default_factory=list)

    model_config = ConfigDict(extra="ignore")


@dataclass(frozen=True)
class ModeInfo:
    """A resolved mode, with the stylesheet located on disk."""

    name: str
    stylesheet_path: Path
    post_template: str
    page_template: str
    site_name: str
    menu_links: tuple[MenuLink, ...] = field(default_factory=tuple)
    menu2_links: tuple[MenuLink, ...] = field(default_factory=tuple)

    def template_for(self, kind: str) -> str:
        """Template name for a record kind; anything but a post uses the page template."""
        return self.post_template if kind == "post" else self.page_template

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Author(CamelModel):
    name: str
    thumbnail: Optional[str] = None


class ContentSource(CamelModel):
    markup_type: str = Field("html", description="html, markdown or text")
    location: str = Field("inline", description="inline, external or a file in the pages directory")
    data: str = ""


class Dates(CamelModel):
    published: int
    altered: Optional[int] = None


class PageRecord(BaseModel):
    """One entry of published.jsonc."""

    id: str
    title: str
    short: Optional[str] = None
    author: Optional[Author] = None
    content: ContentSource = Field(default_factory=ContentSource)
    dates: Optional[Dates] = None
    kind: str = Field(..., alias="type", description="post or page")
    mode: Optional[str] = None
    category: Optional[str] = None
    tags: list[str] = Field(default_factory=list)
    postlist: Optional[dict[str, Any]] = None

    model_config = ConfigDict(populate_by_name=True)

    def to_client_json(self) -> str:
        """Serialize with the published.jsonc field names, as exposed to client scripts."""
        return self.model_dump_json(by_alias=True)

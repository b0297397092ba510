"""List request options and their wire encoding.

Kong lists are cursor paginated: every page carries ``data`` and, while more
entities remain, an opaque ``offset`` to send back on the next request.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from kong_admin.values import dedupe

# Page size used by list-all walks when the caller does not pick one.
LIST_ALL_PAGE_SIZE = 1000


class ListOptions(BaseModel):
    """Options for a single list request.

    Attributes:
        size: Page size; 0 lets Kong apply its default.
        offset: Server-issued cursor from a previous page.
        tags: Tags to filter on.
        match_all_tags: Require every tag (AND) instead of any tag (OR).

    Example:
        >>> opts = ListOptions(size=100, tags=["prod", "eu"], match_all_tags=True)
        >>> opts.to_query()
        {'size': 100, 'tags': 'prod,eu'}
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    size: int = Field(default=0, ge=0, description="Page size (0 = Kong default)")
    offset: str = Field(default="", description="Opaque pagination cursor")
    tags: tuple[str, ...] = Field(default=(), description="Tag filter")
    match_all_tags: bool = Field(default=False, description="AND tags instead of OR")

    @field_validator("tags", mode="before")
    @classmethod
    def dedupe_tags(cls, v: Any) -> Any:
        """Drop repeated tags, keeping first occurrences in order."""
        if v is None:
            return ()
        if isinstance(v, str):
            return (v,)
        return tuple(dedupe(v))

    def to_query(self) -> dict[str, Any]:
        """Encode the options as query parameters."""
        query: dict[str, Any] = {}
        if self.size > 0:
            query["size"] = self.size
        if self.offset:
            query["offset"] = self.offset
        if self.tags:
            separator = "," if self.match_all_tags else "/"
            query["tags"] = separator.join(self.tags)
        return query

    def next_page(self, offset: str | None) -> ListOptions | None:
        """Return options for the following page, or None when iteration is done."""
        if not offset:
            return None
        return self.model_copy(update={"offset": offset})

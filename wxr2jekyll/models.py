from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

# Names accepted by Item.read, mapped to attributes. ``wp_id`` is how the
# export itself calls the source identifier.
_READABLE_FIELDS: Dict[str, str] = {
    "title": "title",
    "author": "author",
    "date": "date",
    "slug": "slug",
    "status": "status",
    "type": "type",
    "source_id": "source_id",
    "wp_id": "source_id",
}


class Header(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: Optional[str] = None
    link: Optional[str] = None
    description: Optional[str] = None


class Item(BaseModel):
    """One post, page or other entry of a channel."""

    title: Optional[str] = None
    author: Optional[str] = None
    date: Optional[str] = None
    slug: Optional[str] = None
    status: Optional[str] = None
    type: Optional[str] = None
    source_id: Optional[str] = None
    taxonomies: Dict[str, List[str]] = Field(default_factory=dict)
    body: str = ""
    reference_urls: List[str] = Field(default_factory=list)
    resolved_uid: Optional[str] = None

    def read(self, field_name: str) -> Optional[str]:
        """Return a scalar field by name, or ``None`` for unknown names."""
        attr = _READABLE_FIELDS.get(field_name)
        if attr is None:
            return None
        return getattr(self, attr)


class Channel(BaseModel):
    model_config = ConfigDict(frozen=True)

    header: Header
    items: List[Item] = Field(default_factory=list)

"""
Assembly of the per-item Jekyll documents.

:class:`DocumentAssembler` decides whether an item is exported at all, where
it goes, and what its file contains:

1. field filters (first matching ``field: value`` pair skips the item)
2. routing by type: posts get a date-prefixed uid under ``_posts``, pages a
   plain uid at the channel root, everything else is skipped
3. taxonomy domains renamed to their display names
4. a YAML front matter that always carries the same keys
5. the body, converted by the body converter

The assembler never touches the filesystem; the export tool writes the
result.
"""

from __future__ import annotations

import posixpath
from typing import Any, Dict, List, Optional, Union

import yaml
from pydantic import BaseModel, Field

from wxr2jekyll.config import ExportConfig
from wxr2jekyll.extractors.taxonomies import remap
from wxr2jekyll.models import Header, Item
from wxr2jekyll.parsers.body_converter import BodyConverter
from wxr2jekyll.utils.errors import Reporter
from wxr2jekyll.writers.files import channel_dirname
from wxr2jekyll.writers.identifiers import IdentifierAllocator

POSTS_SUBPATH = "_posts"

# type -> (date prefix, subpath, layout)
_ROUTES = {
    "post": (True, POSTS_SUBPATH, "post"),
    "page": (False, "", "page"),
}


class SkippedItem(BaseModel):
    reason: str


class AssembledDocument(BaseModel):
    subpath: str
    uid: str
    extension: str
    front_matter: Dict[str, Any]
    taxonomies: Dict[str, List[str]] = Field(default_factory=dict)
    body: str = ""

    @property
    def filename(self) -> str:
        return f"{self.uid}.{self.extension}"

    @property
    def relative_path(self) -> str:
        return posixpath.join(self.subpath, self.filename) if self.subpath else self.filename

    def render(self) -> str:
        parts = ["---\n", _dump_yaml(self.front_matter)]
        if self.taxonomies:
            parts.append(_dump_yaml(self.taxonomies))
        parts.append("---\n\n")
        parts.append(self.body)
        return "".join(parts)


def _dump_yaml(data: Dict[str, Any]) -> str:
    return yaml.safe_dump(data, sort_keys=False, allow_unicode=True, default_flow_style=False)


class DocumentAssembler:
    def __init__(
        self,
        config: ExportConfig,
        allocator: IdentifierAllocator,
        converter: Optional[BodyConverter] = None,
        reporter: Optional[Reporter] = None,
    ) -> None:
        self.config = config
        self.allocator = allocator
        self.converter = converter or BodyConverter(config.pandoc, config.use_pandoc)
        self.reporter = reporter or Reporter(quiet=config.quiet)

    def is_filtered(self, item: Item) -> bool:
        for field, value in self.config.item_field_filter.items():
            if item.read(field) == value:
                return True
        return False

    def assemble(self, item: Item, header: Header) -> Union[AssembledDocument, SkippedItem]:
        """
        Build the document for ``item`` of the channel described by ``header``.

        Raises:
            MalformedDate: A post date does not match ``config.date_format``.
            ConversionError: The body converter failed.
        """
        if self.is_filtered(item):
            return SkippedItem(reason="field_filter")

        route = _ROUTES.get(item.type or "")
        if route is None:
            if item.type in self.config.item_type_filter:
                return SkippedItem(reason="type_filter")
            self.reporter.report_error("UNKNOWN_ITEM_TYPE", item, detail=repr(item.type))
            return SkippedItem(reason="unknown_type")

        date_prefix, subpath, layout = route
        namespace = posixpath.join(channel_dirname(header.link), subpath)
        item.resolved_uid = self.allocator.resolve(item, namespace, date_prefix=date_prefix)

        front_matter = {
            "title": item.title,
            "date": item.date,
            "author": item.author,
            "slug": item.slug,
            "status": item.status,
            "wordpress_id": item.source_id,
            "layout": layout,
        }
        taxonomies = {
            name: terms
            for name, terms in remap(item.taxonomies, self.config.taxonomies.name_mapping).items()
            if terms
        }
        body = self.converter.convert(item.body, self.config.target_format)

        return AssembledDocument(
            subpath=subpath,
            uid=item.resolved_uid,
            extension=self.config.target_format,
            front_matter=front_matter,
            taxonomies=taxonomies,
            body=body,
        )

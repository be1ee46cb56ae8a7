"""
Record extraction from WordPress eXtended RSS (WXR) exports.

:class:`WordPressExtractor` walks an export document and builds one
:class:`~wxr2jekyll.models.Channel` per ``<channel>`` node.  Scalar fields are
read through :class:`FieldSource`, which substitutes a configured default and
logs a warning when a field is missing, so a sparse export never stops the
extraction.  Only a document without a readable root is fatal.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import IO, Dict, List, Optional, Union

from wxr2jekyll.config import ExportConfig
from wxr2jekyll.extractors.taxonomies import classify
from wxr2jekyll.models import Channel, Header, Item
from wxr2jekyll.parsers.html_parser import find_reference_urls
from wxr2jekyll.utils.errors import DocumentStructureError, Reporter

Source = Union[str, IO[bytes]]


class FieldSource:
    """Named access to the child elements of one export node."""

    def __init__(
        self,
        node: ET.Element,
        namespaces: Dict[str, str],
        config: ExportConfig,
        reporter: Reporter,
    ) -> None:
        self.node = node
        self.namespaces = namespaces
        self.config = config
        self.reporter = reporter

    def read(self, field_name: str) -> Optional[str]:
        """Text of the child ``field_name`` (``prefix:tag`` allowed), or ``None``."""
        prefix, sep, _ = field_name.partition(":")
        if sep and prefix not in self.namespaces:
            return None
        element = self.node.find(field_name, self.namespaces)
        if element is None:
            return None
        return element.text or ""

    def detail_for(self, field_name: str) -> Optional[str]:
        value = self.read(field_name)
        if value is None:
            value = self.config.field_defaults.get(field_name)
            self.reporter.log_message(
                f"Error getting {field_name} value. Setting to {value!r}.", level="WARNING"
            )
        return value


class WordPressExtractor:
    def __init__(self, config: ExportConfig, reporter: Optional[Reporter] = None) -> None:
        self.config = config
        self.reporter = reporter or Reporter(quiet=config.quiet)

    def extract(self, source: Source) -> List[Channel]:
        """Parse ``source`` (a path or a binary file object) into channels.

        Raises:
            DocumentStructureError: If the document cannot be parsed or has
                no root element.
        """
        root, namespaces = self._parse(source)
        channels = []
        for channel_node in root.iter("channel"):
            fields = self._fields(channel_node, namespaces)
            header = Header(
                title=fields.detail_for("title"),
                link=fields.detail_for("link"),
                description=fields.detail_for("description"),
            )
            items = [self._extract_item(node, namespaces) for node in channel_node.findall(".//item")]
            channels.append(Channel(header=header, items=items))
        return channels

    def _parse(self, source: Source):
        namespaces: Dict[str, str] = {}
        try:
            events = ET.iterparse(source, events=("start-ns",))
            for _event, (prefix, uri) in events:
                # The default namespace would change how unprefixed tags resolve.
                if prefix:
                    namespaces.setdefault(prefix, uri)
            root = events.root
        except (ET.ParseError, OSError) as e:
            raise DocumentStructureError(f"Could not parse export {source!r}: {e}") from e
        if root is None:
            raise DocumentStructureError(f"Export {source!r} has no root element.")
        return root, namespaces

    def _fields(self, node: ET.Element, namespaces: Dict[str, str]) -> FieldSource:
        return FieldSource(node, namespaces, self.config, self.reporter)

    def _extract_item(self, node: ET.Element, namespaces: Dict[str, str]) -> Item:
        fields = self._fields(node, namespaces)
        declarations = [
            (category.get("domain"), category.text or "")
            for category in node.findall(".//category[@domain]")
        ]
        body = fields.detail_for("content:encoded") or ""
        return Item(
            title=fields.detail_for("title"),
            author=fields.detail_for("dc:creator"),
            date=fields.detail_for("wp:post_date"),
            slug=fields.detail_for("wp:post_name"),
            status=fields.detail_for("wp:status"),
            type=fields.detail_for("wp:post_type"),
            source_id=fields.detail_for("wp:post_id"),
            taxonomies=classify(declarations, self.config.taxonomies),
            body=body,
            reference_urls=self._reference_urls(body),
        )

    def _reference_urls(self, body: str) -> List[str]:
        try:
            return find_reference_urls(body)
        except Exception as e:
            self.reporter.report_error("MALFORMED_BODY", exc=e, detail=repr(body[:80]))
            return []

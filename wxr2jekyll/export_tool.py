"""
High-level orchestration of the WordPress → Jekyll export.

This module defines a :class:`JekyllExportTool` class that ties together the
extractor, the document assembler and the file/network collaborators into a
complete pipeline.  Every ``*.xml`` file found in ``config.wp_exports`` is
parsed into channels; each channel is written under
``<build_dir>/<path_infix>/<channel name>``.

Failures are contained: a malformed item is reported and skipped, an
unreadable export file is reported and the remaining files are still
processed.
"""

from __future__ import annotations

import glob
import os
from typing import List, Optional
from urllib.parse import urljoin

from wxr2jekyll.config import ExportConfig
from wxr2jekyll.extractors.wordpress_extractor import WordPressExtractor
from wxr2jekyll.models import Channel, Item
from wxr2jekyll.parsers.body_converter import BodyConverter
from wxr2jekyll.utils.errors import ConversionError, DocumentStructureError, MalformedDate, Reporter
from wxr2jekyll.writers.assembler import AssembledDocument, DocumentAssembler
from wxr2jekyll.writers.attachments import AttachmentNamer
from wxr2jekyll.writers.files import AttachmentDownloader, channel_dirname, write_file
from wxr2jekyll.writers.identifiers import IdentifierAllocator


class JekyllExportTool:
    """
    Encapsulates the state of one export run: the identifier tables, the
    attachment names issued so far and the collaborators used to convert,
    write and download.
    """

    def __init__(
        self,
        config: ExportConfig,
        *,
        reporter: Optional[Reporter] = None,
        converter: Optional[BodyConverter] = None,
        writer=write_file,
        downloader: Optional[AttachmentDownloader] = None,
    ) -> None:
        self.config = config
        self.reporter = reporter or Reporter(quiet=config.quiet, report_dir=config.report_dir)
        self.writer = writer
        self.downloader = downloader or AttachmentDownloader(self.reporter)
        self.extractor = WordPressExtractor(config, self.reporter)
        self.allocator = IdentifierAllocator(config.date_format, self.reporter)
        self.namer = AttachmentNamer()
        self.assembler = DocumentAssembler(
            config,
            self.allocator,
            converter or BodyConverter(config.pandoc, config.use_pandoc),
            self.reporter,
        )

    def log_message(self, message: str, level: str = "INFO") -> None:
        self.reporter.log_message(message, level)

    def export_files(self) -> List[str]:
        return sorted(glob.glob(os.path.join(self.config.wp_exports, "*.xml")))

    def run(self) -> int:
        """Export every file of ``config.wp_exports``; return how many failed."""
        self.log_message("Starting conversion")
        files = self.export_files()
        if not files:
            self.log_message(f"No WordPress export files (.xml) found in '{self.config.wp_exports}'.", level="WARNING")
        failed = 0
        for path in files:
            if not self.export_file(path):
                failed += 1
        self.log_message("Done.")
        return failed

    def export_file(self, path: str) -> bool:
        self.log_message(f"Parsing: {path}")
        try:
            channels = self.extractor.extract(path)
        except DocumentStructureError as e:
            self.reporter.report_error(e.code, exc=e, detail=path)
            return False
        for channel in channels:
            self.write_channel(channel)
        return True

    def channel_path(self, channel: Channel) -> str:
        return os.path.abspath(
            os.path.join(self.config.build_dir, self.config.path_infix, channel_dirname(channel.header.link))
        )

    def write_channel(self, channel: Channel) -> None:
        self.log_message(f"Writing {channel.header.title}")
        blog_path = self.channel_path(channel)
        for item in channel.items:
            try:
                document = self.assembler.assemble(item, channel.header)
            except (MalformedDate, ConversionError) as e:
                self.reporter.report_error(e.code, item, e)
                continue
            if not isinstance(document, AssembledDocument):
                continue

            path = os.path.join(blog_path, document.relative_path)
            try:
                self.writer(path, document.render())
            except OSError as e:
                self.reporter.report_error("WRITE", item, e, detail=path)
                continue
            self.reporter.report_ok("ITEM_WRITTEN", item, {"path": path})

            if self.config.download_images:
                self.download_attachments(item, channel, blog_path)

    def download_attachments(self, item: Item, channel: Channel, blog_path: str) -> None:
        target_dir = os.path.join(blog_path, self.config.attachment_dir, item.resolved_uid)
        for url in item.reference_urls:
            filename = self.namer.name_for(url, target_dir)
            self.downloader.download(urljoin(channel.header.link or "", url), os.path.join(target_dir, filename))

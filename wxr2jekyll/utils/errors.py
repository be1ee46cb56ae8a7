"""
Structured reporting of export diagnostics and progress.

The :mod:`wxr2jekyll.utils.errors` module centralizes how the exporter talks to
the user.  Ordinary progress goes to standard output, diagnostics go to
standard error, and both are silenced together in quiet mode.  When a report
directory is configured, each event is also appended to a JSON Lines file so
that a run can be reviewed afterwards.

Three public methods are provided on :class:`Reporter`:

``log_message``
    Print a ``[LEVEL] message`` line.  ``WARNING`` and ``ERROR`` lines go to
    the diagnostic stream.

``report_error``
    Record a diagnostic for an item (or for a whole export file).  An
    optional exception can be supplied and will be serialized to the log.

``report_ok``
    Record a successful step for an item.  Additional key/value information
    can be attached to the entry via the ``extra`` parameter.

The ``ERRORS`` dictionary maps event codes to human readable messages.  Codes
not present in the dictionary fall back to the code itself.
"""

from __future__ import annotations

import json
import os
import sys
from typing import Any, Dict, Optional, TextIO

# Mapping of event codes used throughout the export to descriptive messages.
# The keys include both error and success codes as the same lookup is used by
# :meth:`Reporter.report_error` and :meth:`Reporter.report_ok`.
ERRORS: Dict[str, str] = {
    "MALFORMED_BODY": "Could not parse HTML body",
    "MALFORMED_DATE": "Could not parse item date",
    "UNKNOWN_ITEM_TYPE": "Unknown item type",
    "DOCUMENT_STRUCTURE": "Export document could not be read",
    "CONVERSION": "Body conversion failed",
    "DOWNLOAD": "Failed to download attachment",
    "WRITE": "Failed to write item",
    "ITEM_WRITTEN": "Item written",
}


class ExportError(Exception):
    """Base class for errors raised while exporting an item or a file."""

    code = "EXPORT"


class MalformedDate(ExportError):
    """The item date does not match the configured date format."""

    code = "MALFORMED_DATE"


class DocumentStructureError(ExportError):
    """The export document has no readable root element."""

    code = "DOCUMENT_STRUCTURE"


class ConversionError(ExportError):
    """The body converter could not produce output for an item."""

    code = "CONVERSION"


class Reporter:
    """
    Writes progress to ``stdout`` and diagnostics to ``stderr``.

    Components receive the reporter from the export tool instead of printing
    on their own, so a single ``quiet`` flag controls everything the exporter
    prints.
    """

    def __init__(
        self,
        *,
        quiet: bool = False,
        stdout: Optional[TextIO] = None,
        stderr: Optional[TextIO] = None,
        report_dir: Optional[str] = None,
    ) -> None:
        self.quiet = quiet
        self.stdout = stdout if stdout is not None else sys.stdout
        self.stderr = stderr if stderr is not None else sys.stderr
        self.report_dir = report_dir

    def _write_jsonl(self, name: str, data: Dict[str, Any]) -> None:
        """Append ``data`` as a JSON object followed by a newline to ``name``."""
        if not self.report_dir:
            return
        os.makedirs(self.report_dir, exist_ok=True)
        with open(os.path.join(self.report_dir, name), "a", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False)
            f.write("\n")

    def log_message(self, message: str, level: str = "INFO") -> None:
        if self.quiet:
            return
        stream = self.stderr if level in ("WARNING", "ERROR") else self.stdout
        print(f"[{level}] {message}", file=stream)

    def report_error(
        self,
        code: str,
        item: Any = None,
        exc: Optional[BaseException] = None,
        *,
        detail: Optional[str] = None,
    ) -> None:
        """Log a diagnostic event.

        Parameters
        ----------
        code:
            A key identifying the type of error.  If ``code`` is present in
            :data:`ERRORS` its value will be used as the message.
        item:
            The item the diagnostic concerns, if any.  Only its
            ``source_id`` and ``title`` are referenced.
        exc:
            Optional exception instance that triggered the error.  The string
            representation of the exception will be included in the log entry.
        detail:
            Optional free text appended to the message, e.g. the field name
            or the file path.
        """
        message = ERRORS.get(code, code)
        if detail:
            message = f"{message}: {detail}"
        entry: Dict[str, Any] = {
            "code": code,
            "message": message,
            "source_id": getattr(item, "source_id", None),
            "title": getattr(item, "title", None),
        }
        if exc is not None:
            entry["error"] = str(exc)
        if not self.quiet:
            suffix = f" - {entry['title']}" if entry["title"] else ""
            if exc is not None:
                suffix += f" ({exc})"
            print(f"[ERROR] {message}{suffix}", file=self.stderr)
        self._write_jsonl("errors.jsonl", entry)

    def report_ok(self, code: str, item: Any, extra: Optional[Dict[str, Any]] = None) -> None:
        """Log a successful event for ``item``.

        ``extra`` is merged into the JSON Lines entry.
        """
        message = ERRORS.get(code, code)
        entry: Dict[str, Any] = {
            "code": code,
            "message": message,
            "source_id": getattr(item, "source_id", None),
            "title": getattr(item, "title", None),
        }
        if extra:
            entry.update(extra)
        if not self.quiet:
            print(f"[OK] {message} - {getattr(item, 'resolved_uid', None) or ''}", file=self.stdout)
        self._write_jsonl("success.jsonl", entry)

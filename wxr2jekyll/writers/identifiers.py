"""
Stable, collision-free identifiers for exported items.

An identifier ("uid") becomes the file name of the item, so within one
namespace (one output directory) no two items may share it, and asking again
for the same item must give the same answer.  :class:`IdentifierAllocator`
keeps one :class:`AllocationTable` per namespace for the lifetime of a run.
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import Dict, Optional, Set

from wxr2jekyll.models import Item
from wxr2jekyll.utils.errors import MalformedDate, Reporter

UNTITLED = "untitled"


class AllocationTable:
    def __init__(self) -> None:
        self.by_source: Dict[str, str] = {}
        self.issued: Set[str] = set()


def normalize_title(title: str) -> str:
    """
    Replace whitespace runs with ``_`` and drop one leading symbol.  Path
    separators become ``_`` and leading dots are removed, so the result is
    always a plain file name.
    """
    text = re.sub(r"\s+", "_", title)
    text = re.sub(r"^[^\w-]", "", text)
    text = re.sub(r"[\\/]", "_", text)
    return text.lstrip(".")


class IdentifierAllocator:
    def __init__(self, date_format: str, reporter: Optional[Reporter] = None) -> None:
        self.date_format = date_format
        self.reporter = reporter or Reporter()
        self._tables: Dict[str, AllocationTable] = {}

    def table(self, namespace: str) -> AllocationTable:
        if namespace not in self._tables:
            self._tables[namespace] = AllocationTable()
        return self._tables[namespace]

    def resolve(self, item: Item, namespace: str = "", date_prefix: bool = False) -> str:
        """
        Return the uid of ``item`` in ``namespace``.

        With ``date_prefix`` the uid starts with ``YYYY-MM-DD-`` taken from
        ``item.date``.  Items without a ``source_id`` are never memoized.

        Raises:
            MalformedDate: If a date prefix is requested and ``item.date``
                does not match the configured format.
        """
        table = self.table(namespace)
        if item.source_id is not None and item.source_id in table.by_source:
            return table.by_source[item.source_id]

        uid = ""
        if date_prefix:
            try:
                date = datetime.strptime(item.date or "", self.date_format)
            except ValueError as e:
                raise MalformedDate(
                    f"Date {item.date!r} does not match format {self.date_format!r}"
                ) from e
            uid += date.strftime("%Y-%m-%d") + "-"

        title = normalize_title(item.slug or item.title or "")
        if not title:
            self.reporter.log_message("Could not find a title for an entry.", level="WARNING")
            title = UNTITLED
        uid += title

        candidate = uid
        n = 0
        while candidate in table.issued:
            n += 1
            candidate = f"{uid}_{n}"

        if item.source_id is not None:
            table.by_source[item.source_id] = candidate
        table.issued.add(candidate)
        return candidate

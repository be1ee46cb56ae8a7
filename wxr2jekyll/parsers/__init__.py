"""
Parsers and converters used by the export pipeline.

This subpackage exposes ``find_reference_urls`` from
:mod:`wxr2jekyll.parsers.html_parser` and ``BodyConverter`` from
:mod:`wxr2jekyll.parsers.body_converter`.
"""

from .body_converter import BodyConverter
from .html_parser import find_reference_urls

__all__ = ["BodyConverter", "find_reference_urls"]

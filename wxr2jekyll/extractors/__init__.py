"""
Extractors for WordPress export files.

This subpackage parses WXR exports into the records used by the writers:
channels holding a header and an ordered list of items, each item carrying
its taxonomies and the URLs referenced by its body.
"""

from .taxonomies import classify, remap
from .wordpress_extractor import FieldSource, WordPressExtractor

__all__ = ["FieldSource", "WordPressExtractor", "classify", "remap"]

import io
import os
import sys

# Ensure project root is on sys.path for imports when running tests directly
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

import pytest

from wxr2jekyll.config import ExportConfig
from wxr2jekyll.extractors import wordpress_extractor
from wxr2jekyll.extractors.wordpress_extractor import WordPressExtractor
from wxr2jekyll.utils.errors import DocumentStructureError, Reporter

EXPORT = b"""<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0"
    xmlns:excerpt="http://wordpress.org/export/1.2/excerpt/"
    xmlns:content="http://purl.org/rss/1.0/modules/content/"
    xmlns:dc="http://purl.org/dc/elements/1.1/"
    xmlns:wp="http://wordpress.org/export/1.2/">
<channel>
    <title>My Blog</title>
    <link>https://example.com/blog</link>
    <description>Just a blog</description>
    <wp:category><wp:cat_name>News</wp:cat_name></wp:category>
    <item>
        <title>Hello World</title>
        <link>https://example.com/blog/hello-world/</link>
        <dc:creator>alice</dc:creator>
        <content:encoded><![CDATA[<p>Hi <img src="http://example.com/image.png" /></p><img src="/wp-content/b.jpg">]]></content:encoded>
        <wp:post_id>1</wp:post_id>
        <wp:post_date>2021-03-05 10:00:00</wp:post_date>
        <wp:post_name>hello-world</wp:post_name>
        <wp:status>publish</wp:status>
        <wp:post_type>post</wp:post_type>
        <category domain="category" nicename="news"><![CDATA[News]]></category>
        <category domain="category" nicename="uncategorized"><![CDATA[Uncategorized]]></category>
        <category domain="post_tag" nicename="a"><![CDATA[a]]></category>
        <category domain="post_tag" nicename="a"><![CDATA[a]]></category>
        <category>no domain</category>
    </item>
    <item>
        <title>About</title>
        <content:encoded></content:encoded>
        <wp:post_id>2</wp:post_id>
        <wp:post_name></wp:post_name>
        <wp:status>publish</wp:status>
        <wp:post_type>page</wp:post_type>
    </item>
</channel>
</rss>
"""


def make_extractor(**options):
    stderr = io.StringIO()
    reporter = Reporter(stdout=io.StringIO(), stderr=stderr)
    return WordPressExtractor(ExportConfig(**options), reporter), stderr


def test_header_and_items_in_document_order():
    extractor, _ = make_extractor()
    channels = extractor.extract(io.BytesIO(EXPORT))
    assert len(channels) == 1
    header = channels[0].header
    assert (header.title, header.link, header.description) == (
        "My Blog", "https://example.com/blog", "Just a blog",
    )
    assert [item.title for item in channels[0].items] == ["Hello World", "About"]


def test_item_fields():
    extractor, _ = make_extractor()
    item = extractor.extract(io.BytesIO(EXPORT))[0].items[0]
    assert item.author == "alice"
    assert item.date == "2021-03-05 10:00:00"
    assert item.slug == "hello-world"
    assert item.status == "publish"
    assert item.type == "post"
    assert item.source_id == "1"
    assert item.resolved_uid is None


def test_taxonomies_are_classified():
    extractor, _ = make_extractor()
    item = extractor.extract(io.BytesIO(EXPORT))[0].items[0]
    assert item.taxonomies == {"category": ["News"], "post_tag": ["a", "a"]}


def test_reference_urls_come_from_the_body():
    extractor, _ = make_extractor()
    item = extractor.extract(io.BytesIO(EXPORT))[0].items[0]
    assert item.reference_urls == ["http://example.com/image.png", "/wp-content/b.jpg"]


def test_missing_fields_are_defaulted_with_a_warning():
    extractor, stderr = make_extractor(field_defaults={"dc:creator": "anonymous"})
    page = extractor.extract(io.BytesIO(EXPORT))[0].items[1]
    assert page.author == "anonymous"
    assert page.date is None
    assert "Error getting dc:creator value. Setting to 'anonymous'." in stderr.getvalue()
    assert "Error getting wp:post_date value. Setting to None." in stderr.getvalue()


def test_empty_elements_read_as_empty_strings():
    extractor, stderr = make_extractor()
    page = extractor.extract(io.BytesIO(EXPORT))[0].items[1]
    assert page.slug == ""
    assert page.body == ""
    assert page.reference_urls == []
    assert "wp:post_name" not in stderr.getvalue()


def test_unparseable_body_yields_no_reference_urls(monkeypatch):
    def broken(_html):
        raise ValueError("bad markup")

    monkeypatch.setattr(wordpress_extractor, "find_reference_urls", broken)
    extractor, stderr = make_extractor()
    item = extractor.extract(io.BytesIO(EXPORT))[0].items[0]
    assert item.reference_urls == []
    assert "Could not parse HTML body" in stderr.getvalue()


def test_other_export_versions_resolve_by_prefix():
    export = EXPORT.replace(b"http://wordpress.org/export/1.2/", b"http://wordpress.org/export/1.0/")
    extractor, _ = make_extractor()
    item = extractor.extract(io.BytesIO(export))[0].items[0]
    assert item.source_id == "1"


def test_document_without_channels():
    extractor, _ = make_extractor()
    assert extractor.extract(io.BytesIO(b"<rss version='2.0'></rss>")) == []


def test_broken_document_is_fatal():
    extractor, _ = make_extractor()
    with pytest.raises(DocumentStructureError):
        extractor.extract(io.BytesIO(b"<rss><channel>"))


def test_missing_file_is_fatal(tmp_path):
    extractor, _ = make_extractor()
    with pytest.raises(DocumentStructureError):
        extractor.extract(str(tmp_path / "missing.xml"))

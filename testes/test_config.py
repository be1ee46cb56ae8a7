import json
import os
import sys

# Ensure project root is on sys.path for imports when running tests directly
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

import pytest
from pydantic import ValidationError

from wxr2jekyll.config import ExportConfig, load_config


def test_defaults():
    config = ExportConfig()
    assert config.date_format == "%Y-%m-%d %H:%M:%S"
    assert config.item_field_filter == {"status": "draft"}
    assert config.item_type_filter == frozenset({"attachment", "nav_menu_item"})
    assert config.taxonomies.name_mapping == {"category": "categories", "post_tag": "tags"}
    assert config.taxonomies.entry_filter == {"category": "Uncategorized"}
    assert config.target_format == "markdown"
    assert config.path_infix == "jekyll"


def test_missing_file_gives_defaults(tmp_path):
    assert load_config(str(tmp_path / "nope.yaml")) == ExportConfig()


def test_yaml_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "target_format: HTML\n"
        "download_images: true\n"
        "item_type_filter: [attachment]\n"
        "taxonomies:\n"
        "  filter: {post_format: ~}\n",
        encoding="utf-8",
    )
    config = load_config(str(path))
    assert config.target_format == "html"
    assert config.download_images is True
    assert config.item_type_filter == frozenset({"attachment"})
    assert config.taxonomies.excluded_domains == frozenset({"post_format"})
    assert config.taxonomies.name_mapping["post_tag"] == "tags"


def test_json_file_and_overrides(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"build_dir": "out", "quiet": False}), encoding="utf-8")
    config = load_config(str(path), quiet=True, pandoc=None)
    assert config.build_dir == "out"
    assert config.quiet is True
    assert config.pandoc == "pandoc"


def test_unknown_keys_are_rejected(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"buid_dir": "out"}), encoding="utf-8")
    with pytest.raises(ValidationError):
        load_config(str(path))


def test_config_is_frozen():
    config = ExportConfig()
    with pytest.raises(ValidationError):
        config.quiet = True


def test_field_filter_values_are_compared_as_text(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("item_field_filter:\n  wp_id: 42\n  status: draft\n", encoding="utf-8")
    config = load_config(str(path))
    assert config.item_field_filter == {"wp_id": "42", "status": "draft"}

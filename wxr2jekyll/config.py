"""
Export configuration.

:class:`ExportConfig` enumerates every option the exporter understands.  It is
a frozen pydantic model, validated once by :func:`load_config` and then passed
by reference into every component.  The configuration file may be JSON or
YAML; unknown keys are rejected so that typos surface immediately.
"""

from __future__ import annotations

import json
import os
from typing import Any, Dict, FrozenSet, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator


class TaxonomyRule(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    excluded_domains: FrozenSet[str] = Field(default=frozenset(), alias="filter")
    entry_filter: Dict[str, str] = Field(default_factory=lambda: {"category": "Uncategorized"})
    name_mapping: Dict[str, str] = Field(
        default_factory=lambda: {"category": "categories", "post_tag": "tags"}
    )

    @field_validator("excluded_domains", mode="before")
    @classmethod
    def _domains_from_keys(cls, v: Any):
        # A mapping is accepted too; only its keys matter.
        if v is None:
            return frozenset()
        if isinstance(v, dict):
            return frozenset(v.keys())
        if isinstance(v, str):
            raise ValueError("the taxonomies filter must be a list or a mapping")
        return v


class ExportConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    build_dir: str = "build"
    wp_exports: str = "wordpress-xml"
    path_infix: str = "jekyll"
    date_format: str = "%Y-%m-%d %H:%M:%S"
    download_images: bool = False
    item_field_filter: Dict[str, Optional[str]] = Field(default_factory=lambda: {"status": "draft"})
    item_type_filter: FrozenSet[str] = frozenset({"attachment", "nav_menu_item"})
    target_format: str = "markdown"
    taxonomies: TaxonomyRule = Field(default_factory=TaxonomyRule)
    field_defaults: Dict[str, str] = Field(default_factory=dict)
    attachment_dir: str = "a"
    use_pandoc: bool = False
    pandoc: str = "pandoc"
    quiet: bool = False
    report_dir: Optional[str] = None

    @field_validator("item_field_filter", mode="before")
    @classmethod
    def _filter_values_as_text(cls, v: Any):
        # Export fields are text, so YAML numbers such as ``wp_id: 42`` compare as "42".
        if isinstance(v, dict):
            return {k: val if val is None or isinstance(val, str) else str(val) for k, val in v.items()}
        return v

    @field_validator("target_format")
    @classmethod
    def _lower_format(cls, v: str) -> str:
        v = v.strip().lower()
        if not v:
            raise ValueError("target_format must not be empty")
        return v


def load_config(path: Optional[str] = None, **overrides: Any) -> ExportConfig:
    """
    Read ``path`` (JSON, or YAML for ``.yaml``/``.yml``) and build an
    :class:`ExportConfig`.  Keyword ``overrides`` win over the file, which is
    how command-line options are applied.  A missing file yields defaults.
    """
    data: Dict[str, Any] = {}
    if path and os.path.exists(path):
        with open(path, "r", encoding="utf-8") as f:
            if path.endswith((".yaml", ".yml")):
                data = yaml.safe_load(f) or {}
            else:
                data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Configuration file {path} must contain a mapping.")
    data.update({k: v for k, v in overrides.items() if v is not None})
    return ExportConfig.model_validate(data)

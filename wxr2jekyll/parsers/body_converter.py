"""
Conversion of item bodies from HTML to the target format.

``html`` is passed through untouched.  ``markdown`` is produced locally with
markdownify.  Any other format, or markdown when ``use_pandoc`` is set, is
handed to an external ``pandoc`` process.
"""

from __future__ import annotations

import subprocess

from markdownify import ATX, markdownify

from wxr2jekyll.utils.errors import ConversionError


class BodyConverter:
    def __init__(self, pandoc: str = "pandoc", use_pandoc: bool = False) -> None:
        self.pandoc = pandoc
        self.use_pandoc = use_pandoc

    def convert(self, text: str, target_format: str) -> str:
        target_format = target_format.lower()
        if target_format == "html":
            return text
        if target_format == "markdown" and not self.use_pandoc:
            return markdownify(text or "", heading_style=ATX)
        return self._run_pandoc(text, target_format)

    def _run_pandoc(self, text: str, target_format: str) -> str:
        try:
            proc = subprocess.run(
                [self.pandoc, "-f", "html", "-t", target_format],
                input=text or "",
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                check=False,
            )
        except OSError as e:
            raise ConversionError(f"Could not run {self.pandoc}: {e}") from e

        if proc.returncode != 0:
            raise ConversionError(f"{self.pandoc} returned code {proc.returncode}: {proc.stderr.strip()}")
        return proc.stdout

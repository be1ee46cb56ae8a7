from __future__ import annotations

import posixpath
from typing import Dict
from urllib.parse import urlparse


class AttachmentNamer:
    """
    Picks destination file names for referenced attachments.

    Names are unique within a namespace (a destination directory) and
    memoized per ``(namespace, url)``.  Resolving the name to a path and
    creating the directory are left to the caller.
    """

    def __init__(self) -> None:
        self._names: Dict[str, Dict[str, str]] = {}
        self._placeholder = 1

    def name_for(self, reference_url: str, namespace: str = "") -> str:
        if namespace not in self._names:
            self._names[namespace] = {}
        names = self._names[namespace]
        if reference_url in names:
            return names[reference_url]

        path = urlparse(reference_url).path
        root, ext = posixpath.splitext(posixpath.basename(path))
        if not root:
            root = str(self._placeholder)
            self._placeholder += 1

        issued = set(names.values())
        filename = f"{root}{ext}"
        infix = 0
        while filename in issued:
            infix += 1
            filename = f"{root}-{infix}{ext}"

        names[reference_url] = filename
        return filename

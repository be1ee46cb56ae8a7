from __future__ import annotations

from typing import List

from bs4 import BeautifulSoup


def find_reference_urls(html_string: str) -> List[str]:
    """
    Return the ``src`` of every ``<img>`` in ``html_string``, in document
    order.  Parsing errors propagate to the caller.
    """
    if not html_string:
        return []

    soup = BeautifulSoup(html_string, "html.parser")
    urls = []
    for img_tag in soup.find_all("img"):
        src = (img_tag.get("src") or "").strip()
        if src:
            urls.append(src)
    return urls

"""
Filesystem and network collaborators of the export pipeline.

``write_file`` stores an assembled document, creating parent directories as
needed.  :class:`AttachmentDownloader` fetches referenced attachments with a
simple rate limiter and a retry wrapper for transient HTTP errors (429 or
5xx).  Downloads are best effort: failures are reported and never raised, so
a broken image link cannot stop an export.
"""

from __future__ import annotations

import os
import re
import time
from typing import Callable, Optional

import requests

from wxr2jekyll.utils.errors import Reporter


def channel_dirname(link: Optional[str]) -> str:
    """Directory name for a channel, derived from its ``link``."""
    name = re.sub(r"^https?", "", link or "")
    return re.sub(r"[^-A-Za-z0-9_.]", "", name)


def write_file(path: str, contents: str) -> None:
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(contents)


class RateLimiter:
    """
    Simple time-based rate limiter.  Ensures that no more than ``rpm``
    requests are dispatched per minute.
    """

    def __init__(self, rpm: int = 200) -> None:
        self.rpm = max(1, rpm)
        self.interval = 60.0 / float(self.rpm)
        self._last = 0.0

    def wait(self, time_fn: Callable[[], float] = time.time, sleep_fn: Callable[[float], None] = time.sleep) -> None:
        now = time_fn()
        dt = now - self._last
        if dt < self.interval:
            sleep_fn(self.interval - dt)
        self._last = time_fn()


def with_retries(
    fn: Callable[[], requests.Response],
    *,
    max_attempts: int = 5,
    base_delay: float = 0.7,
    sleep_fn: Callable[[float], None] = time.sleep,
) -> requests.Response:
    """
    Execute a function returning a ``requests.Response``, retrying on
    status codes 429 and 5xx and on connection errors.  Backoff is
    exponential unless the server sends ``Retry-After``.

    :raises requests.RequestException: if all attempts fail.
    """
    attempt = 0
    while True:
        try:
            resp = fn()
            resp.raise_for_status()
            return resp
        except requests.HTTPError as e:
            status = e.response.status_code
            if status not in (429, 500, 502, 503, 504) or attempt >= max_attempts - 1:
                raise
            retry_after = e.response.headers.get("Retry-After")
            if retry_after and retry_after.isdigit():
                wait = float(retry_after)
            else:
                wait = base_delay * (2 ** attempt)
            sleep_fn(wait)
            attempt += 1
        except requests.RequestException:
            if attempt >= max_attempts - 1:
                raise
            sleep_fn(base_delay * (2 ** attempt))
            attempt += 1


class AttachmentDownloader:
    def __init__(
        self,
        reporter: Optional[Reporter] = None,
        *,
        session: Optional[requests.Session] = None,
        rpm: int = 120,
        timeout: float = 30.0,
        max_attempts: int = 5,
    ) -> None:
        self.reporter = reporter or Reporter()
        self.session = session or requests.Session()
        self.limiter = RateLimiter(rpm)
        self.timeout = timeout
        self.max_attempts = max_attempts

    def download(self, url: str, destination: str) -> bool:
        """Fetch ``url`` into ``destination``.  Returns ``False`` on failure."""

        def do_request() -> requests.Response:
            self.limiter.wait()
            return self.session.get(url, timeout=self.timeout)

        try:
            resp = with_retries(do_request, max_attempts=self.max_attempts)
            os.makedirs(os.path.dirname(destination) or ".", exist_ok=True)
            with open(destination, "wb") as f:
                f.write(resp.content)
        except (requests.RequestException, OSError) as e:
            self.reporter.report_error("DOWNLOAD", exc=e, detail=url)
            return False
        return True

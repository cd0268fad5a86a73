"""
Fetch Quest Helper Java quest files, from raw GitHub over HTTP or from a local checkout.
"""

import logging
import os
import time
from urllib.parse import quote, urljoin

import requests

from .config import QUEST_HELPER_RAW_BASE, USER_AGENT
from .naming import class_name_to_folder

logger = logging.getLogger(__name__)


class FetchError(Exception):
    """A quest source could not be fetched (network error, non-2xx status, missing file)."""


def quest_file_path(class_name: str) -> str:
    """CooksAssistant -> cooksassistant/CooksAssistant.java"""
    return f"{class_name_to_folder(class_name)}/{class_name}.java"


class QuestSourceFetcher:
    """GET <base>/<folder>/<ClassName>.java with retries on transient failures."""

    def __init__(
        self,
        base_url: str = QUEST_HELPER_RAW_BASE,
        session=None,
        user_agent: str = USER_AGENT,
        timeout: float = 30.0,
        retries: int = 3,
        backoff: float = 1.0,
    ):
        self.base_url = base_url
        self.session = session or requests.Session()
        self.headers = {"User-Agent": user_agent}
        self.timeout = timeout
        self.retries = max(1, retries)
        self.backoff = backoff

    def location(self, class_name: str) -> str:
        # urljoin drops the last base segment unless the base ends with a slash
        return urljoin(self.base_url.rstrip("/") + "/", quote(quest_file_path(class_name)))

    def fetch(self, class_name: str) -> str:
        """Return the Java source text; raise FetchError when every attempt fails."""
        url = self.location(class_name)
        last_error = ""
        for attempt in range(self.retries):
            try:
                response = self.session.get(url, headers=self.headers, timeout=self.timeout)
                response.raise_for_status()
                return response.text
            except requests.HTTPError as e:
                status = e.response.status_code if e.response is not None else None
                last_error = f"HTTP {status}: {url}"
                if status is not None and status < 500:
                    # Not found / forbidden will not change on retry
                    break
            except requests.RequestException as e:
                last_error = f"{type(e).__name__}: {e}"
            logger.debug("Attempt %d failed for %s: %s", attempt + 1, url, last_error)
            if attempt < self.retries - 1 and self.backoff:
                time.sleep(self.backoff * 2 ** attempt)
        raise FetchError(last_error)

    def close(self) -> None:
        self.session.close()


class LocalSourceFetcher:
    """Read <source_dir>/<folder>/<ClassName>.java from a local Quest Helper checkout."""

    def __init__(self, source_dir: str):
        self.source_dir = source_dir

    def location(self, class_name: str) -> str:
        return os.path.join(self.source_dir, *quest_file_path(class_name).split("/"))

    def fetch(self, class_name: str) -> str:
        path = self.location(class_name)
        try:
            with open(path, "r", encoding="utf-8", errors="replace") as f:
                return f.read()
        except OSError as e:
            raise FetchError(f"Could not read {path}: {e}") from e

    def close(self) -> None:
        pass

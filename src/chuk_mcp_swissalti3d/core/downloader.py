"""
HTTP downloads for the tile listing and tile files.

Transient connection failures are retried; everything else surfaces as
DownloadError. Files are written to a temporary sibling and renamed into
place, so a partially downloaded file is never visible under its final name.
"""

import logging
import os
import tempfile
from pathlib import Path

import requests
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from ..constants import DEFAULT_TIMEOUT_S, DOWNLOAD_CHUNK_BYTES, USER_AGENT, ErrorMessages
from ..errors import DownloadError

logger = logging.getLogger(__name__)


_retry_network = retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=1, max=10),
    retry=retry_if_exception_type((requests.ConnectionError, requests.Timeout)),
    reraise=True,
)


class Downloader:
    """Thin requests wrapper with a fixed timeout and user agent."""

    def __init__(self, user_agent: str = USER_AGENT, timeout: float = DEFAULT_TIMEOUT_S) -> None:
        self.user_agent = user_agent
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers["User-Agent"] = user_agent

    def download_as_string(self, url: str) -> str:
        """GET a URL and return its body as text."""
        try:
            return self._get_text(url)
        except requests.RequestException as e:
            raise DownloadError(ErrorMessages.DOWNLOAD_FAILED.format(url, e)) from e

    def download_file(self, url: str, path: str | Path) -> Path:
        """Stream a URL to ``path``, publishing it atomically."""
        target = Path(path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            self._stream_to_file(url, target)
        except (requests.RequestException, OSError) as e:
            raise DownloadError(ErrorMessages.DOWNLOAD_FAILED.format(url, e)) from e
        logger.info(f"Downloaded {url} -> {target}")
        return target

    def close(self) -> None:
        self.session.close()

    @_retry_network
    def _get_text(self, url: str) -> str:
        response = self.session.get(url, timeout=self.timeout)
        response.raise_for_status()
        return response.text

    @_retry_network
    def _stream_to_file(self, url: str, target: Path) -> None:
        fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".part", dir=target.parent)
        try:
            with os.fdopen(fd, "wb") as fh:
                with self.session.get(url, stream=True, timeout=self.timeout) as response:
                    response.raise_for_status()
                    for chunk in response.iter_content(chunk_size=DOWNLOAD_CHUNK_BYTES):
                        if chunk:
                            fh.write(chunk)
            os.replace(tmp_name, target)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

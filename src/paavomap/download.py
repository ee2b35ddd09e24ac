"""Blocking downloads into scoped temporary files."""

from __future__ import annotations

import logging
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator
from urllib.parse import unquote, urlparse

import requests

from .config import HttpConfig


_CHUNK_SIZE = 1024 * 1024

_LOGGER = logging.getLogger("paavomap.download")


def build_session(cfg: HttpConfig) -> requests.Session:
    session = requests.Session()
    session.headers.update({"User-Agent": cfg.user_agent})
    return session


def filename_from_url(url: str, fallback: str = "download") -> str:
    name = Path(unquote(urlparse(url).path)).name
    return name or fallback


@contextmanager
def fetch_to_tempfile(
    url: str,
    *,
    session: requests.Session,
    timeout_s: float,
    filename: str | None = None,
) -> Iterator[Path]:
    """Download `url` into a private temporary directory and yield the file path.

    The directory and everything in it is removed when the block exits, whether
    the body succeeded or raised. HTTP errors are raised as-is.
    """
    with tempfile.TemporaryDirectory(prefix="paavomap-") as tmp_dir:
        target = Path(tmp_dir) / (filename or filename_from_url(url))
        _LOGGER.info("Downloading %s", url)
        response = session.get(url, stream=True, timeout=timeout_s)
        try:
            response.raise_for_status()
            with target.open("wb") as fh:
                for chunk in response.iter_content(chunk_size=_CHUNK_SIZE):
                    if chunk:
                        fh.write(chunk)
        finally:
            response.close()
        _LOGGER.debug("Downloaded %d bytes to %s", target.stat().st_size, target)
        yield target

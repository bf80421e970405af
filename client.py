#!/usr/bin/env python3
"""
Docs Client - retrieval of the Bot API documentation page.

Fetches the HTML once and keeps a local copy on disk so repeated runs
don't hit the network until the cache expires.
"""

import logging
import os
import time
from typing import Optional

import httpx

from config import ScraperOptions
from docparse.document import DocumentView

logger = logging.getLogger(__name__)


class DocsClient:
    """
    HTTP client for the documentation page with a file cache.
    Construct one per run and close it when done (or use it as a context manager).
    """

    def __init__(self,
                 options: Optional[ScraperOptions] = None,
                 transport: Optional[httpx.BaseTransport] = None):
        """
        Initialize the docs client.

        Args:
            options: Scraper options (URL, cache file, TTL, timeout)
            transport: Custom httpx transport, used by tests to avoid the network
        """
        self.options = options or ScraperOptions()
        self.http = httpx.Client(
            timeout=self.options.request_timeout,
            follow_redirects=True,
            headers={"Accept": "text/html,application/xhtml+xml"},
            transport=transport,
        )

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def _cache_age(self) -> Optional[float]:
        try:
            return time.time() - os.path.getmtime(self.options.cache_file)
        except OSError:
            return None

    def _read_cache(self) -> Optional[str]:
        age = self._cache_age()
        if age is None:
            return None

        if age >= self.options.cache_ttl_seconds:
            logger.info(f"Cache expired for {self.options.cache_file} "
                        f"(age {int(age)}s > {int(self.options.cache_ttl_seconds)}s), refetching")
            return None

        logger.info(f"Using cached docs {self.options.cache_file} (age {int(age)}s)")
        with open(self.options.cache_file, "r", encoding="utf-8") as f:
            return f.read()

    def fetch_html(self) -> str:
        """
        Get the documentation HTML, from cache when fresh.

        Returns:
            Raw HTML content

        Raises:
            httpx.HTTPError: if the page cannot be downloaded
        """
        cached = self._read_cache()
        if cached is not None:
            return cached

        response = self.http.get(self.options.docs_url)
        response.raise_for_status()
        html = response.text
        logger.info(f"Fetched docs from {self.options.docs_url} ({len(response.content)} bytes)")

        with open(self.options.cache_file, "w", encoding="utf-8") as f:
            f.write(html)
        logger.info(f"Wrote cache file {self.options.cache_file}")

        return html

    def load_document(self) -> DocumentView:
        """Fetch and parse the documentation into a read-only DocumentView."""
        return DocumentView.from_html(self.fetch_html())

    def close(self):
        """Close the HTTP client."""
        self.http.close()

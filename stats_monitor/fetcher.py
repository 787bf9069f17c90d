"""
Report Fetcher

Retrieves the raw statistics report from the monitored host with a single
timed HTTP GET. No retries are made here; the poll driver simply tries again
on its next cycle.

Example:
    with ReportFetcher('http://host/_stats', timeout=5.0) as fetcher:
        raw = fetcher.fetch()
"""
import logging
from typing import Optional

import requests

from stats_monitor.errors import FetchError

logger = logging.getLogger(__name__)


class ReportFetcher:
    """Fetches raw report text from a statistics endpoint."""

    USER_AGENT = 'stats-monitor/1.0'

    def __init__(self, url: str, timeout: float = 5.0,
                 session: Optional[requests.Session] = None):
        """
        Initialize the fetcher.

        Args:
            url: Statistics endpoint
            timeout: Request timeout in seconds
            session: Optional requests session (one is created if omitted)
        """
        self.url = url
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.setdefault('User-Agent', self.USER_AGENT)

    def fetch(self) -> str:
        """
        Fetch one report.

        Returns:
            Response body with its lines joined by newlines

        Raises:
            FetchError: on network failure or any status other than 200
        """
        try:
            response = self.session.get(self.url, timeout=self.timeout)
        except requests.RequestException as e:
            logger.debug(f"Request to {self.url} failed: {e}")
            raise FetchError(f"request failed: {e}") from e

        try:
            if response.status_code != 200:
                raise FetchError(
                    f"bad status: {response.status_code} {response.reason or ''}".rstrip(),
                    status_code=response.status_code
                )
            return '\n'.join(response.text.splitlines())
        finally:
            response.close()

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def __repr__(self):
        return f"ReportFetcher(url={self.url!r}, timeout={self.timeout})"

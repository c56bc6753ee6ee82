from __future__ import annotations

import logging

import requests

from smarters.config import FetchConfig
from smarters.errors import TransportFailure, UnexpectedTransportError

logger = logging.getLogger(__name__)


class PlaylistFetcher:
    """Downloads playlist text over HTTP with one timed attempt."""

    def __init__(self, config: FetchConfig | None = None, session: requests.Session | None = None):
        self.config = config or FetchConfig()
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": self.config.user_agent})

    def fetch(self, url: str) -> str:
        logger.debug("GET %s (timeout=%s)", url, self.config.timeout)
        try:
            r = self.session.get(url, timeout=self.config.timeout, allow_redirects=True)
        except (requests.Timeout, requests.ConnectionError) as e:
            raise TransportFailure(f"Failed to load playlist: {e}") from e
        except requests.RequestException as e:
            raise UnexpectedTransportError(f"Failed to load playlist: {e}") from e

        try:
            if r.status_code != 200:
                raise TransportFailure(f"Failed to load playlist: {r.status_code}", status_code=r.status_code)
            return r.content.decode("utf-8", errors="replace")
        finally:
            r.close()

    def close(self) -> None:
        self.session.close()

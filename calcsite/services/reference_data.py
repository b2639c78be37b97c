"""
Reference rate table loading.

Rate tables are loaded once at startup, from a remote JSON document, a local
JSON file, or the bundled defaults, in that order of preference. Any failure
to fetch or parse an override is logged and the next source is tried; the
bundled defaults always succeed, so calculators are never blocked.
"""

import logging
from typing import Any, Dict

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from calcsite.config import Settings
from calcsite.models.rate_tables import (
    DEFAULT_RATE_TABLES,
    RateTables,
    load_rate_tables,
    merge_rate_tables,
    set_rate_tables,
)

logger = logging.getLogger(__name__)


class RemoteRateTableSource:
    """Fetches rate table overrides from an HTTP endpoint."""

    def __init__(self, url: str, timeout: int = 10):
        self.url = url
        self.timeout = timeout
        self.session = self._create_session()

    def _create_session(self) -> requests.Session:
        """Create a requests session with retry strategy."""
        session = requests.Session()

        retry_strategy = Retry(
            total=3,
            backoff_factor=1,
            status_forcelist=[429, 500, 502, 503, 504],
        )

        adapter = HTTPAdapter(max_retries=retry_strategy)
        session.mount("http://", adapter)
        session.mount("https://", adapter)

        return session

    def fetch(self) -> RateTables:
        """Fetch and validate rate tables.

        Raises:
            requests.RequestException: If the endpoint cannot be reached
            ValueError: If the payload is not a JSON object of valid tables
        """
        response = self.session.get(self.url, timeout=self.timeout)
        response.raise_for_status()

        payload: Dict[str, Any] = response.json()
        if not isinstance(payload, dict):
            raise ValueError("Rate tables payload must be a JSON object")

        # Accept both a bare object and an envelope of {"data": {...}}
        overrides = payload.get("data", payload)
        if not isinstance(overrides, dict):
            raise ValueError("Rate tables data must be a JSON object")
        return merge_rate_tables(overrides)


def resolve_rate_tables(settings: Settings) -> RateTables:
    """
    Load rate tables from the configured sources.

    Args:
        settings: Application settings naming the override sources

    Returns:
        The first rate tables that load successfully
    """
    if settings.rate_tables_url:
        try:
            source = RemoteRateTableSource(
                settings.rate_tables_url, timeout=settings.rate_tables_timeout
            )
            tables = source.fetch()
            logger.info(f"Loaded rate tables from {settings.rate_tables_url}")
            return tables
        except (requests.RequestException, ValueError) as e:
            logger.warning(
                f"Failed to fetch rate tables from {settings.rate_tables_url}: {e}"
            )

    if settings.rate_tables_path:
        try:
            return load_rate_tables(settings.rate_tables_path)
        except (OSError, ValueError) as e:
            logger.warning(
                f"Failed to load rate tables from {settings.rate_tables_path}: {e}"
            )

    return DEFAULT_RATE_TABLES


def initialize_rate_tables(settings: Settings) -> RateTables:
    """Resolve rate tables and install them process-wide."""
    tables = resolve_rate_tables(settings)
    set_rate_tables(tables)
    return tables

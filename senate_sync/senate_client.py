# senate_sync/senate_client.py
"""Fetch the Senate committee roster from the NY Senate Open Legislation API."""

import json
import logging
from typing import Any, Dict, List, Optional, Tuple

import requests
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
    before_sleep_log
)

from .config import (
    SENATE_API_MAX_RETRIES,
    SENATE_API_TIMEOUT_SECONDS,
    SENATE_CHAMBER,
    SyncConfig,
)
from .models import SourceCommittee

logger = logging.getLogger(__name__)

SOURCE_API = 'api'
SOURCE_FALLBACK = 'fallback'

# Used when the roster API is unreachable or returns nothing usable
FALLBACK_COMMITTEES: List[Dict[str, Any]] = [
    {
        'name': 'Agriculture',
        'chair': {'fullName': 'Michelle Hinchey'},
        'members': [
            {'fullName': 'Michelle Hinchey'},
            {'fullName': 'Patrick Gallivan'},
            {'fullName': 'Daniel Stec'},
            {'fullName': 'Robert Ortt'},
            {'fullName': 'Jacob Ashby'},
        ],
    },
    {
        'name': 'Health',
        'chair': {'fullName': 'Gustavo Rivera'},
        'members': [
            {'fullName': 'Gustavo Rivera'},
            {'fullName': 'Rachel May'},
            {'fullName': 'Samra Brouk'},
            {'fullName': 'Zellnor Myrie'},
            {'fullName': 'Monica Martinez'},
            {'fullName': 'Roxanne Persaud'},
        ],
    },
    {
        'name': 'Finance',
        'chair': {'fullName': 'Liz Krueger'},
        'members': [
            {'fullName': 'Liz Krueger'},
            {'fullName': 'James Sanders'},
            {'fullName': 'Leroy Comrie'},
            {'fullName': 'Michelle Hinchey'},
            {'fullName': 'Jeremy Cooney'},
            {'fullName': 'Toby Stavisky'},
            {'fullName': 'Jessica Ramos'},
        ],
    },
]


class SenateAPIError(Exception):
    """The roster API answered, but not with a usable committee list."""
    pass


def fallback_committees() -> List[SourceCommittee]:
    return [SourceCommittee.from_api(item) for item in FALLBACK_COMMITTEES]


class SenateClient:
    """Read-only client for the committee roster."""

    def __init__(self, config: SyncConfig, session: Optional[requests.Session] = None):
        self.config = config
        self.session = session or requests.Session()

    @property
    def committees_url(self) -> str:
        return f"{self.config.senate_api_base}/committees/{self.config.session_year}"

    @retry(
        stop=stop_after_attempt(SENATE_API_MAX_RETRIES),
        wait=wait_exponential(multiplier=1, min=1, max=10),
        retry=retry_if_exception_type((requests.exceptions.ConnectionError, requests.exceptions.Timeout)),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True
    )
    def fetch_raw_committees(self) -> List[Dict[str, Any]]:
        """
        Fetch every committee for the configured session year (all chambers).

        Raises:
            SenateAPIError: On a non-OK response or a payload without items.
            requests.exceptions.RequestException: On network failure after retries.
        """
        params = {'key': self.config.senate_api_key, 'full': 'true'}
        logger.info(f"Fetching NY Senate committees for {self.config.session_year}")
        response = self.session.get(self.committees_url, params=params, timeout=SENATE_API_TIMEOUT_SECONDS)

        if not response.ok:
            raise SenateAPIError(f"API responded with status: {response.status_code}")

        try:
            data = response.json()
        except (json.JSONDecodeError, ValueError) as e:
            raise SenateAPIError(f"Invalid JSON from roster API: {e}") from e

        if not isinstance(data, dict):
            raise SenateAPIError('API returned no committee data')
        items = (data.get('result') or {}).get('items')
        if not data.get('success') or not isinstance(items, list):
            raise SenateAPIError('API returned no committee data')
        return items

    def fetch_senate_committees(self) -> Tuple[List[SourceCommittee], str]:
        """
        Senate committees for the session, or the embedded fallback dataset.

        Returns:
            ``(committees, source)`` where source is ``'api'`` or ``'fallback'``.
        """
        if not self.config.senate_api_key:
            logger.warning('NY_SENATE_API_KEY not set, using fallback committee data')
            return fallback_committees(), SOURCE_FALLBACK

        try:
            items = self.fetch_raw_committees()
        except (SenateAPIError, requests.exceptions.RequestException) as e:
            logger.error(f"Error fetching Senate committees: {e}")
            logger.info('Using fallback committee data')
            return fallback_committees(), SOURCE_FALLBACK

        try:
            committees = [
                SourceCommittee.from_api(item)
                for item in items
                if isinstance(item, dict) and item.get('chamber') == SENATE_CHAMBER
            ]
        except (AttributeError, TypeError, ValueError) as e:
            logger.error(f"Unusable committee data from API: {e}")
            logger.info('Using fallback committee data')
            return fallback_committees(), SOURCE_FALLBACK
        committees = [c for c in committees if c.name]
        if not committees:
            logger.warning('API returned no Senate committees, using fallback')
            return fallback_committees(), SOURCE_FALLBACK

        logger.info(f"Fetched {len(committees)} Senate committees from API")
        return committees, SOURCE_API

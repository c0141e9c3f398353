# senate_sync/webflow_client.py
"""Webflow CMS collection client: paginated snapshot reads and live writes."""

import json
import logging
from typing import Any, Dict, List, Optional

import requests
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
    before_sleep_log
)

from .config import WEBFLOW_MAX_RETRIES, SyncConfig
from .models import DestinationCommittee, DestinationPerson

logger = logging.getLogger(__name__)


# --- Custom Exceptions ---
class WebflowAPIError(Exception):
    """Non-success response from the Webflow API."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class APIRateLimitError(WebflowAPIError):
    """HTTP 429 from Webflow."""
    pass


class SnapshotError(Exception):
    """A collection could not be read to completion."""
    pass


def _raise_for_response(response: requests.Response, action: str) -> None:
    if response.status_code == 429:
        logger.warning(f"Webflow rate limit hit (HTTP 429) during {action}. Backing off...")
        raise APIRateLimitError(f"{action} rate limited", status_code=429)
    if not response.ok:
        preview = response.text[:200] if response.text else ''
        raise WebflowAPIError(f"{action} failed: {response.status_code} {preview}".strip(),
                              status_code=response.status_code)


class WebflowClient:
    """Thin wrapper over the v2 collection items endpoints."""

    def __init__(self, config: SyncConfig, session: Optional[requests.Session] = None):
        self.config = config
        self.session = session or requests.Session()
        self.session.headers.update(config.webflow_headers())

    def _items_url(self, collection_id: str) -> str:
        return f"{self.config.webflow_api_base}/collections/{collection_id}/items"

    # --- Reads ---
    @retry(
        stop=stop_after_attempt(WEBFLOW_MAX_RETRIES),
        wait=wait_exponential(multiplier=1.5, min=2, max=30),
        retry=retry_if_exception_type((requests.exceptions.RequestException, APIRateLimitError)),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True
    )
    def fetch_page(self, collection_id: str, offset: int) -> List[Dict[str, Any]]:
        """Fetch one page of items starting at ``offset``."""
        params = {'limit': self.config.page_size, 'offset': offset}
        logger.debug(f"Fetching Webflow collection {collection_id} (offset {offset})")
        response = self.session.get(self._items_url(collection_id), params=params,
                                    timeout=self.config.request_timeout)
        _raise_for_response(response, f"read of collection {collection_id}")
        try:
            data = response.json()
        except (json.JSONDecodeError, ValueError) as e:
            raise WebflowAPIError(f"Invalid JSON from collection {collection_id}: {e}",
                                  status_code=response.status_code) from e
        items = data.get('items') if isinstance(data, dict) else None
        items = items or []
        if not isinstance(items, list):
            raise WebflowAPIError(f"Unexpected items payload from collection {collection_id}: {type(items)}")
        return items

    def fetch_all_items(self, collection_id: str) -> List[Dict[str, Any]]:
        """
        Read a collection to completion.

        Pages are requested until one comes back empty or shorter than the page size.

        Raises:
            SnapshotError: If any page fails after retries.
        """
        all_items: List[Dict[str, Any]] = []
        offset = 0
        limit = self.config.page_size
        while True:
            try:
                items = self.fetch_page(collection_id, offset)
            except (WebflowAPIError, requests.exceptions.RequestException) as e:
                raise SnapshotError(f"Could not read collection {collection_id} at offset {offset}: {e}") from e
            all_items.extend(items)
            if len(items) < limit:
                break
            offset += limit
        return all_items

    def fetch_members(self) -> List[DestinationPerson]:
        items = self.fetch_all_items(self.config.members_collection_id)
        logger.info(f"Fetched {len(items)} members from Webflow")
        return [DestinationPerson.from_webflow(item) for item in items]

    def fetch_committees(self) -> List[DestinationCommittee]:
        items = self.fetch_all_items(self.config.committees_collection_id)
        logger.info(f"Fetched {len(items)} committees from Webflow")
        return [DestinationCommittee.from_webflow(item) for item in items]

    # --- Writes ---
    # Writes retry only on rate limits and connection failures
    @retry(
        stop=stop_after_attempt(WEBFLOW_MAX_RETRIES),
        wait=wait_exponential(multiplier=1.5, min=2, max=30),
        retry=retry_if_exception_type((requests.exceptions.ConnectionError, APIRateLimitError)),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True
    )
    def _write(self, method: str, url: str, body: Dict[str, Any], action: str) -> Dict[str, Any]:
        response = self.session.request(method, url, data=json.dumps(body),
                                        timeout=self.config.request_timeout)
        _raise_for_response(response, action)
        try:
            return response.json()
        except (json.JSONDecodeError, ValueError):
            return {}

    def create_live_item(self, body: Dict[str, Any]) -> Dict[str, Any]:
        """POST a new published item to the committees collection."""
        url = f"{self._items_url(self.config.committees_collection_id)}/live"
        return self._write('POST', url, body, 'Create')

    def update_live_item(self, item_id: str, body: Dict[str, Any]) -> Dict[str, Any]:
        """PATCH an existing published committee item."""
        url = f"{self._items_url(self.config.committees_collection_id)}/{item_id}/live"
        return self._write('PATCH', url, body, 'Update')

# senate_sync/config.py
"""Central configuration settings for the Senate committee sync."""

import os
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping, Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# --- NY Senate Open Legislation API ---
NY_SENATE_API_BASE = 'https://legislation.nysenate.gov/api/3'
DEFAULT_SESSION_YEAR = 2025
SENATE_CHAMBER = 'SENATE'  # chamber value used by the roster API
SENATE_API_TIMEOUT_SECONDS = 30
SENATE_API_MAX_RETRIES = 3

# --- Webflow CMS ---
WEBFLOW_API_BASE = 'https://api.webflow.com/v2'
WEBFLOW_ACCEPT_VERSION = '1.0.0'
COMMITTEES_COLLECTION_ID = '685b53da44d49ae626f23712'
MEMBERS_COLLECTION_ID = '685b53f6cef66d01abebd142'
WEBFLOW_PAGE_SIZE = 100
WEBFLOW_TIMEOUT_SECONDS = 30
WEBFLOW_MAX_RETRIES = 4

# Chamber reference ids differ between the two collections' schemas
SENATE_MEMBER_CHAMBER_ID = '521c1f841fd6e3d287eb931549560714'
SENATE_COMMITTEE_CHAMBER_ID = '4ee88a351849b8218064c06630fa0bc9'

# --- Committee payload ---
COMMITTEE_SLUG_PREFIX = 'senate-'
COMMITTEE_URL_TEMPLATE = 'https://www.nysenate.gov/committees/{slug}'
COMMITTEE_DESCRIPTION_TEMPLATE = 'Senate committee: {name}'
MEETING_SCHEDULE_PLACEHOLDER = 'As scheduled'

# --- Pacing ---
DEFAULT_WRITE_DELAY_SECONDS = 0.2  # destination write-rate limit

# --- File System ---
DEFAULT_BASE_DATA_DIR = Path('data')
MAIN_LOG_FILE = 'senate_sync.log'

# Load .env from the project root (for local development)
DEFAULT_DOTENV_PATH = Path(__file__).resolve().parent.parent / '.env'


class ConfigurationError(Exception):
    """Raised when a required setting is missing or malformed."""
    pass


def _read_int(env: Mapping[str, str], key: str, default: int) -> int:
    raw = env.get(key)
    if raw is None or not str(raw).strip():
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigurationError(f"{key} must be an integer, got {raw!r}") from e


def _read_float(env: Mapping[str, str], key: str, default: float) -> float:
    raw = env.get(key)
    if raw is None or not str(raw).strip():
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ConfigurationError(f"{key} must be a number, got {raw!r}") from e


@dataclass(frozen=True)
class SyncConfig:
    """Settings for one sync run.

    Built once at the process boundary and handed to the clients and the
    orchestrator; nothing downstream reads the environment.
    """
    webflow_api_token: str
    senate_api_key: Optional[str] = None
    session_year: int = DEFAULT_SESSION_YEAR
    committees_collection_id: str = COMMITTEES_COLLECTION_ID
    members_collection_id: str = MEMBERS_COLLECTION_ID
    member_chamber_id: str = SENATE_MEMBER_CHAMBER_ID
    committee_chamber_id: str = SENATE_COMMITTEE_CHAMBER_ID
    page_size: int = WEBFLOW_PAGE_SIZE
    write_delay_seconds: float = DEFAULT_WRITE_DELAY_SECONDS
    webflow_api_base: str = WEBFLOW_API_BASE
    senate_api_base: str = NY_SENATE_API_BASE
    request_timeout: int = WEBFLOW_TIMEOUT_SECONDS

    def __post_init__(self):
        if not self.webflow_api_token or not self.webflow_api_token.strip():
            raise ConfigurationError('WEBFLOW_API_TOKEN environment variable is required')
        if self.page_size <= 0:
            raise ConfigurationError(f"page_size must be positive, got {self.page_size}")
        if self.write_delay_seconds < 0:
            raise ConfigurationError(f"write_delay_seconds cannot be negative, got {self.write_delay_seconds}")

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None,
                 dotenv_path: Optional[Path] = None) -> 'SyncConfig':
        """Build a config from environment variables.

        Args:
            env: Mapping to read instead of ``os.environ`` (no .env loading when given).
            dotenv_path: Optional .env file to load before reading ``os.environ``.

        Raises:
            ConfigurationError: If WEBFLOW_API_TOKEN is missing or an override is malformed.
        """
        if env is None:
            load_dotenv(dotenv_path=dotenv_path or DEFAULT_DOTENV_PATH)
            env = os.environ

        token = (env.get('WEBFLOW_API_TOKEN') or '').strip()
        if not token:
            raise ConfigurationError('WEBFLOW_API_TOKEN environment variable is required')

        senate_key = (env.get('NY_SENATE_API_KEY') or '').strip() or None
        if not senate_key:
            logger.warning('NY_SENATE_API_KEY not found, using fallback committee data')

        return cls(
            webflow_api_token=token,
            senate_api_key=senate_key,
            session_year=_read_int(env, 'SENATE_SESSION_YEAR', DEFAULT_SESSION_YEAR),
            committees_collection_id=env.get('WEBFLOW_COMMITTEES_COLLECTION_ID') or COMMITTEES_COLLECTION_ID,
            members_collection_id=env.get('WEBFLOW_MEMBERS_COLLECTION_ID') or MEMBERS_COLLECTION_ID,
            page_size=_read_int(env, 'WEBFLOW_PAGE_SIZE', WEBFLOW_PAGE_SIZE),
            write_delay_seconds=_read_float(env, 'SYNC_WRITE_DELAY_SECONDS', DEFAULT_WRITE_DELAY_SECONDS),
        )

    def webflow_headers(self) -> Dict[str, str]:
        """HTTP headers for every Webflow request."""
        return {
            'Authorization': f"Bearer {self.webflow_api_token}",
            'accept-version': WEBFLOW_ACCEPT_VERSION,
            'Content-Type': 'application/json',
        }

    def __repr__(self) -> str:
        # Keep credentials out of logs
        return (f"SyncConfig(session_year={self.session_year}, "
                f"committees_collection_id={self.committees_collection_id!r}, "
                f"members_collection_id={self.members_collection_id!r}, "
                f"page_size={self.page_size}, write_delay_seconds={self.write_delay_seconds}, "
                f"senate_api_key={'set' if self.senate_api_key else 'missing'})")

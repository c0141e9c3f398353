# senate_sync/slugs.py
"""Stable slugs and public URLs for committee records."""

import re
from typing import Tuple

from .config import COMMITTEE_SLUG_PREFIX, COMMITTEE_URL_TEMPLATE
from .models import SourceCommittee

_DISALLOWED_CHARS = re.compile(r'[^a-z0-9\s-]')
_WHITESPACE_RUNS = re.compile(r'\s+')
_HYPHEN_RUNS = re.compile(r'-+')


def slugify_committee_name(name: str) -> str:
    """Lower-case, drop punctuation, hyphenate whitespace, collapse and trim hyphens."""
    slug = _DISALLOWED_CHARS.sub('', (name or '').lower())
    slug = _WHITESPACE_RUNS.sub('-', slug)
    slug = _HYPHEN_RUNS.sub('-', slug)
    return slug.strip('-')


def build_committee_fields(committee: SourceCommittee) -> Tuple[str, str]:
    """Return ``(stored_slug, committee_url)`` for a committee.

    The stored slug carries the ``senate-`` namespace; the public URL uses the bare slug.
    """
    base_slug = slugify_committee_name(committee.name)
    return f"{COMMITTEE_SLUG_PREFIX}{base_slug}", COMMITTEE_URL_TEMPLATE.format(slug=base_slug)

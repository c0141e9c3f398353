# senate_sync/matching.py
"""Resolve roster member names to Webflow member record ids."""

import logging
import re
from typing import Iterable, List, Optional

from .config import SENATE_MEMBER_CHAMBER_ID
from .models import DestinationPerson

logger = logging.getLogger(__name__)

# Leading "Senator" / "Sen." title, case-insensitive
SENATOR_TITLE_REGEX = re.compile(r'^\s*(?:senator\b\.?|sen\.)\s*', re.IGNORECASE)


def clean_senator_name(raw_name: Optional[str]) -> str:
    """Strip a leading Senator/Sen. title and surrounding whitespace."""
    if not raw_name:
        return ''
    return SENATOR_TITLE_REGEX.sub('', str(raw_name), count=1).strip()


def senate_candidates(candidates: Iterable[DestinationPerson],
                      chamber_tag: str = SENATE_MEMBER_CHAMBER_ID) -> List[DestinationPerson]:
    """Candidates eligible for matching, in snapshot order."""
    return [c for c in candidates if c.chamber_tag == chamber_tag]


def match_member(raw_name: Optional[str],
                 candidates: Iterable[DestinationPerson],
                 chamber_tag: str = SENATE_MEMBER_CHAMBER_ID) -> Optional[str]:
    """
    Match a roster name to a Senate member record.

    Strategies are tried in order and the first hit wins:
    exact (case-insensitive) name, last-name substring, then first name plus
    remaining name parts as substrings. Within a strategy the first candidate
    in snapshot order wins, so ties resolve deterministically.

    Args:
        raw_name: Name as given by the roster, possibly prefixed with a title.
        candidates: Destination member records (any chamber).
        chamber_tag: Chamber id a candidate must carry to be eligible.

    Returns:
        The matched record id, or None when nothing matches.
    """
    clean_name = clean_senator_name(raw_name)
    senators = senate_candidates(candidates, chamber_tag)
    if not senators or not clean_name:
        logger.warning(f"No match found for: \"{clean_name}\"")
        return None

    match = _find_match(clean_name, senators)
    if match:
        logger.debug(f"Matched \"{clean_name}\" -> {match.display_name} ({match.id})")
        return match.id

    logger.warning(f"No match found for: \"{clean_name}\"")
    return None


def _find_match(clean_name: str, senators: List[DestinationPerson]) -> Optional[DestinationPerson]:
    name_lower = clean_name.lower()

    # Exact
    for senator in senators:
        if senator.display_name.lower() == name_lower:
            return senator

    # Last name
    tokens = name_lower.split()
    last_name = tokens[-1]
    for senator in senators:
        if last_name in senator.display_name.lower():
            return senator

    # First name + remaining parts
    if ' ' in clean_name:
        first_name = tokens[0]
        rest = ' '.join(tokens[1:])
        for senator in senators:
            display = senator.display_name.lower()
            if first_name in display and rest in display:
                return senator

    return None

# senate_sync/models.py
"""Typed records for the source roster, the Webflow snapshots and reconciliation output."""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

logger = logging.getLogger(__name__)

CHAIR_TITLE = 'CHAIR_PERSON'


@dataclass(frozen=True)
class PersonRef:
    full_name: str


@dataclass(frozen=True)
class SourceCommittee:
    """A committee as reported by the roster API for the current session."""
    name: str
    chair: Optional[PersonRef] = None
    members: Tuple[PersonRef, ...] = ()

    @classmethod
    def from_api(cls, item: Dict[str, Any]) -> 'SourceCommittee':
        """Parse a roster item.

        Accepts both the compact shape (``members: [{fullName}]``) used by the
        fallback dataset and the API's full shape
        (``committeeMembers: {items: [{fullName | member: {fullName}, title}]}``).
        A bare list under ``committeeMembers`` is read as the items; any other
        shape yields no members.
        """
        raw_members = item.get('members')
        if raw_members is None:
            committee_members = item.get('committeeMembers')
            if isinstance(committee_members, dict):
                raw_members = committee_members.get('items')
            else:
                raw_members = committee_members
        if not isinstance(raw_members, list):
            if raw_members is not None:
                logger.warning(f"Unexpected member list in committee '{item.get('name')}': {type(raw_members).__name__}")
            raw_members = []

        members = []
        chair_name = None
        for entry in raw_members:
            name = _person_name(entry)
            if not name:
                logger.debug(f"Skipping roster entry without a name in committee '{item.get('name')}': {entry}")
                continue
            members.append(PersonRef(name))
            if chair_name is None and isinstance(entry, dict) and entry.get('title') == CHAIR_TITLE:
                chair_name = name

        explicit_chair = _person_name(item.get('chair'))
        if explicit_chair:
            chair_name = explicit_chair

        return cls(
            name=str(item.get('name') or '').strip(),
            chair=PersonRef(chair_name) if chair_name else None,
            members=tuple(members),
        )


def _person_name(entry: Any) -> Optional[str]:
    if not isinstance(entry, dict):
        return None
    name = entry.get('fullName')
    if not name and isinstance(entry.get('member'), dict):
        name = entry['member'].get('fullName')
    if not name:
        return None
    name = str(name).strip()
    return name or None


@dataclass(frozen=True)
class DestinationPerson:
    id: str
    display_name: str
    chamber_tag: Optional[str]

    @classmethod
    def from_webflow(cls, item: Dict[str, Any]) -> 'DestinationPerson':
        field_data = item.get('fieldData') or {}
        return cls(
            id=str(item.get('id')),
            display_name=str(field_data.get('name') or ''),
            chamber_tag=field_data.get('chamber'),
        )


@dataclass(frozen=True)
class DestinationCommittee:
    id: str
    display_name: str
    chamber_tag: Optional[str]

    @classmethod
    def from_webflow(cls, item: Dict[str, Any]) -> 'DestinationCommittee':
        field_data = item.get('fieldData') or {}
        return cls(
            id=str(item.get('id')),
            display_name=str(field_data.get('name') or ''),
            chamber_tag=field_data.get('chamber'),
        )

    @property
    def identity(self) -> Tuple[str, Optional[str]]:
        return self.display_name.lower(), self.chamber_tag


@dataclass(frozen=True)
class CommitteeFields:
    """Payload written to the committees collection."""
    name: str
    slug: str
    chamber_tag: str
    description: str
    member_ids: Tuple[str, ...]
    committee_url: str
    chair_display_name: Optional[str]
    meeting_schedule: str

    @property
    def member_count(self) -> int:
        return len(self.member_ids)

    def to_field_data(self) -> Dict[str, Any]:
        """Webflow ``fieldData`` representation (hyphenated field slugs)."""
        return {
            'name': self.name,
            'slug': self.slug,
            'chamber': self.chamber_tag,
            'description': self.description,
            'committee-members': list(self.member_ids),
            'member-count': self.member_count,
            'committee-url': self.committee_url,
            'chair': self.chair_display_name,
            'meeting-schedule': self.meeting_schedule,
        }


@dataclass(frozen=True)
class ReconciliationResult:
    """Create-or-update decision for one committee.

    ``target_committee_id`` is None for a create, otherwise the id to update.
    """
    payload: CommitteeFields
    target_committee_id: Optional[str] = None
    unmatched_members: Tuple[str, ...] = field(default=(), compare=False)

    @property
    def is_create(self) -> bool:
        return self.target_committee_id is None

    @property
    def action(self) -> str:
        return 'create' if self.is_create else 'update'

    def to_request_body(self) -> Dict[str, Any]:
        return {'fieldData': self.payload.to_field_data()}

# senate_sync/reconcile.py
"""Pure create-or-update decisions for Senate committees.

Nothing here performs I/O: given the same roster entry and the same two
snapshots, the same result comes back, so repeated runs converge.
"""

import logging
from typing import List, Optional, Sequence

from .config import (
    COMMITTEE_DESCRIPTION_TEMPLATE,
    MEETING_SCHEDULE_PLACEHOLDER,
    SENATE_COMMITTEE_CHAMBER_ID,
    SENATE_MEMBER_CHAMBER_ID,
)
from .matching import match_member, senate_candidates
from .models import (
    CommitteeFields,
    DestinationCommittee,
    DestinationPerson,
    ReconciliationResult,
    SourceCommittee,
)
from .slugs import build_committee_fields

logger = logging.getLogger(__name__)


def find_existing_committee(name: str,
                            committee_snapshot: Sequence[DestinationCommittee],
                            chamber_tag: str = SENATE_COMMITTEE_CHAMBER_ID) -> Optional[DestinationCommittee]:
    """First committee in snapshot order with the same lower-cased name and chamber."""
    key = (name.lower(), chamber_tag)
    for existing in committee_snapshot:
        if existing.identity == key:
            return existing
    return None


def reconcile_committee(committee: SourceCommittee,
                        person_snapshot: Sequence[DestinationPerson],
                        committee_snapshot: Sequence[DestinationCommittee],
                        member_chamber_tag: str = SENATE_MEMBER_CHAMBER_ID,
                        committee_chamber_tag: str = SENATE_COMMITTEE_CHAMBER_ID) -> ReconciliationResult:
    """
    Build the payload for one committee and decide create vs. update.

    Members that resolve to no Senate record are left out. Repeated roster
    entries are matched and kept each time they appear.

    Args:
        committee: Roster entry.
        person_snapshot: Full read of the members collection.
        committee_snapshot: Full read of the committees collection.
        member_chamber_tag: Chamber id eligible member records carry.
        committee_chamber_tag: Chamber id written to, and matched on, committee records.

    Returns:
        ReconciliationResult with ``target_committee_id`` unset for a create.
    """
    senators = senate_candidates(person_snapshot, member_chamber_tag)

    member_ids: List[str] = []
    unmatched: List[str] = []
    for person in committee.members:
        member_id = match_member(person.full_name, senators, member_chamber_tag)
        if member_id:
            member_ids.append(member_id)
        else:
            unmatched.append(person.full_name)

    slug, committee_url = build_committee_fields(committee)
    payload = CommitteeFields(
        name=committee.name,
        slug=slug,
        chamber_tag=committee_chamber_tag,
        description=COMMITTEE_DESCRIPTION_TEMPLATE.format(name=committee.name),
        member_ids=tuple(member_ids),
        committee_url=committee_url,
        chair_display_name=committee.chair.full_name if committee.chair else None,
        meeting_schedule=MEETING_SCHEDULE_PLACEHOLDER,
    )

    existing = find_existing_committee(committee.name, committee_snapshot, committee_chamber_tag)
    return ReconciliationResult(
        payload=payload,
        target_committee_id=existing.id if existing else None,
        unmatched_members=tuple(unmatched),
    )


def reconcile_committees(committees: Sequence[SourceCommittee],
                         person_snapshot: Sequence[DestinationPerson],
                         committee_snapshot: Sequence[DestinationCommittee],
                         member_chamber_tag: str = SENATE_MEMBER_CHAMBER_ID,
                         committee_chamber_tag: str = SENATE_COMMITTEE_CHAMBER_ID) -> List[ReconciliationResult]:
    """Reconcile every committee, one result per input in input order."""
    results = [
        reconcile_committee(c, person_snapshot, committee_snapshot, member_chamber_tag, committee_chamber_tag)
        for c in committees
    ]
    creates = sum(1 for r in results if r.is_create)
    logger.info(f"Reconciled {len(results)} committees: {creates} to create, {len(results) - creates} to update")
    return results

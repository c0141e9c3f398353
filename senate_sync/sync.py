# senate_sync/sync.py
"""Run orchestration: snapshots, reconciliation, paced writes and the run summary."""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from .config import SyncConfig
from .models import DestinationCommittee, DestinationPerson, ReconciliationResult, SourceCommittee
from .pacing import PacedTaskQueue
from .reconcile import reconcile_committees
from .senate_client import SenateClient
from .utils import convert_to_csv, save_json
from .webflow_client import WebflowClient

logger = logging.getLogger(__name__)

RESULT_COLUMNS = ['name', 'action', 'success', 'member_count', 'source_member_count',
                  'item_id', 'unmatched_members', 'error', 'dry_run']


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class CommitteeOutcome:
    name: str
    action: str
    success: bool
    member_count: int
    source_member_count: int
    item_id: Optional[str] = None
    unmatched_members: List[str] = field(default_factory=list)
    error: Optional[str] = None
    dry_run: bool = False


@dataclass
class SyncSummary:
    source: str
    started_at: str
    finished_at: Optional[str] = None
    results: List[CommitteeOutcome] = field(default_factory=list)

    @property
    def processed(self) -> int:
        return len(self.results)

    @property
    def successful(self) -> int:
        return sum(1 for r in self.results if r.success)

    @property
    def failed(self) -> int:
        return self.processed - self.successful

    @property
    def total_members(self) -> int:
        """Member assignments in the written payloads."""
        return sum(r.member_count for r in self.results)

    @property
    def source_members(self) -> int:
        return sum(r.source_member_count for r in self.results)

    @property
    def success(self) -> bool:
        return self.failed == 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'success': self.success,
            'source': self.source,
            'processed': self.processed,
            'successful': self.successful,
            'failed': self.failed,
            'total_members': self.total_members,
            'source_members': self.source_members,
            'started_at': self.started_at,
            'finished_at': self.finished_at,
            'results': [asdict(r) for r in self.results],
        }


class CommitteeSync:
    """Sync Senate committees from the roster API into the Webflow committees collection."""

    def __init__(self, config: SyncConfig,
                 senate_client: Optional[SenateClient] = None,
                 webflow_client: Optional[WebflowClient] = None,
                 queue: Optional[PacedTaskQueue] = None,
                 dry_run: bool = False):
        self.config = config
        self.senate_client = senate_client if senate_client is not None else SenateClient(config)
        self.webflow_client = webflow_client if webflow_client is not None else WebflowClient(config)
        self.queue = queue if queue is not None else PacedTaskQueue(config.write_delay_seconds)
        self.dry_run = dry_run

    def fetch_snapshots(self) -> Tuple[List[SourceCommittee], str, List[DestinationPerson], List[DestinationCommittee]]:
        """Fetch the roster alongside the two Webflow collections.

        The Webflow collections share one HTTP session, so they are read one
        after the other on a single worker while the roster is fetched on another.

        Raises:
            SnapshotError: If either Webflow collection cannot be read completely.
        """
        logger.info('Fetching data from all sources...')
        with ThreadPoolExecutor(max_workers=2) as executor:
            source_future = executor.submit(self.senate_client.fetch_senate_committees)
            webflow_future = executor.submit(self._fetch_webflow_snapshots)
            committees, source = source_future.result()
            members, existing = webflow_future.result()

        logger.info('Data Summary:')
        logger.info(f"  Senate committees: {len(committees)} (source: {source})")
        logger.info(f"  Webflow members: {len(members)}")
        logger.info(f"  Existing committees: {len(existing)}")
        return committees, source, members, existing

    def _fetch_webflow_snapshots(self) -> Tuple[List[DestinationPerson], List[DestinationCommittee]]:
        members = self.webflow_client.fetch_members()
        existing = self.webflow_client.fetch_committees()
        return members, existing

    def write_result(self, result: ReconciliationResult) -> Dict[str, Any]:
        """Issue the create or update for one reconciled committee."""
        name = result.payload.name
        count = result.payload.member_count
        body = result.to_request_body()
        if result.is_create:
            logger.info(f"Creating committee: {name} ({count} members)")
            return self.webflow_client.create_live_item(body)
        logger.info(f"Updating committee: {name} ({count} members)")
        return self.webflow_client.update_live_item(result.target_committee_id, body)

    def run(self) -> SyncSummary:
        """Run one full sync and return its summary.

        Individual write failures are recorded; configuration and snapshot
        errors propagate to the caller.
        """
        summary = SyncSummary(source='unknown', started_at=_utc_now())
        logger.info('Starting Senate Committee Sync...')

        committees, source, members, existing = self.fetch_snapshots()
        summary.source = source

        results = reconcile_committees(
            committees, members, existing,
            member_chamber_tag=self.config.member_chamber_id,
            committee_chamber_tag=self.config.committee_chamber_id,
        )

        if self.dry_run:
            for committee, result in zip(committees, results):
                logger.info(f"[dry run] Would {result.action} committee: {result.payload.name} "
                            f"({result.payload.member_count} members)")
                summary.results.append(self._outcome(committee, result, success=True))
        else:
            for result in results:
                self.queue.submit(self.write_result, result)
            outcomes = self.queue.run(desc='Syncing committees')
            for committee, result, outcome in zip(committees, results, outcomes):
                item_id = result.target_committee_id
                if outcome.ok and isinstance(outcome.value, dict):
                    item_id = outcome.value.get('id') or item_id
                summary.results.append(self._outcome(
                    committee, result,
                    success=outcome.ok,
                    item_id=item_id,
                    error=str(outcome.error) if outcome.error else None,
                ))

        summary.finished_at = _utc_now()
        logger.info('Sync Summary:')
        logger.info(f"  Successfully processed: {summary.successful}/{summary.processed} committees")
        logger.info(f"  Total member assignments: {summary.total_members}")
        logger.info(f"Sync completed at: {summary.finished_at}")
        return summary

    def _outcome(self, committee: SourceCommittee, result: ReconciliationResult, success: bool,
                 item_id: Optional[str] = None, error: Optional[str] = None) -> CommitteeOutcome:
        return CommitteeOutcome(
            name=result.payload.name,
            action=result.action,
            success=success,
            member_count=result.payload.member_count,
            source_member_count=len(committee.members),
            item_id=item_id if item_id is not None else result.target_committee_id,
            unmatched_members=list(result.unmatched_members),
            error=error,
            dry_run=self.dry_run,
        )


def save_report(summary: SyncSummary, reports_dir: Path) -> Tuple[Path, Path]:
    """Write the run summary (JSON) and per-committee results (CSV) to ``reports_dir``."""
    stamp = datetime.now(timezone.utc).strftime('%Y%m%dT%H%M%SZ')
    json_path = reports_dir / f"sync_summary_{stamp}.json"
    csv_path = reports_dir / f"sync_results_{stamp}.csv"

    save_json(summary.to_dict(), json_path)
    rows = []
    for r in summary.results:
        row = asdict(r)
        row['unmatched_members'] = '; '.join(r.unmatched_members)
        rows.append(row)
    convert_to_csv(rows, csv_path, columns=RESULT_COLUMNS)
    return json_path, csv_path

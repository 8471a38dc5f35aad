"""
Onboarding Merger

Records a join label in the history of every already-known person in a batch
of community members. People without a record are skipped: records are
seeded separately, and the merge only enriches them.
"""

import logging
from typing import Iterable

from database.adapters.postgres_adapter import PostgresAdapter
from tcsion.models.community import MemberRecord

logger = logging.getLogger(__name__)


class OnboardingMerger:
    """
    Idempotent per-person upsert of join labels.

    ``prepend_join_label`` repeats the presence check under compare-and-set,
    so merging the same batch twice leaves the same state.
    """

    def __init__(self, store: PostgresAdapter, dry_run: bool = False):
        """
        Initialize the merger.

        Args:
            store: Onboarding store adapter
            dry_run: If True, report what would change without writing
        """
        self.store = store
        self.dry_run = dry_run

    def merge_members(self, members: Iterable[MemberRecord], join_label: str) -> int:
        """
        Prepend ``join_label`` to each known member's history.

        Args:
            members: Members observed in one community
            join_label: Label derived from the community name, e.g. "June 2024"

        Returns:
            int: Number of person records that changed (or would change in dry-run)
        """
        seen = set()
        updated = 0
        unknown = 0

        for member in members:
            person_id = member.login_id
            if person_id in seen:
                continue
            seen.add(person_id)

            record = self.store.find_person(person_id)
            if record is None:
                unknown += 1
                continue
            if join_label in record.joining_dates:
                continue

            if self.dry_run:
                logger.info(f"[DRY RUN] Would add '{join_label}' to {person_id}")
                updated += 1
                continue

            if self.store.prepend_join_label(person_id, join_label):
                updated += 1

        logger.info(
            f"Merged '{join_label}': {updated} updated, {unknown} unknown, "
            f"{len(seen) - updated - unknown} already present"
        )
        return updated

"""
Onboarding Reconciliation Service

Reconciles the onboarding store with TCS iON community membership for one
period (a month name).

For every community reported for the period, the stored snapshot decides what
happens:
- Unknown slug: new group. Pull all members, merge, create the snapshot.
- Known slug, different member count: changed group. Pull, merge, update the
  snapshot.
- Known slug, same member count: nothing to do, no member pull.

Per group the order is pull, merge, snapshot write. A group whose merge fails
keeps its old snapshot and is retried on the next run.

Failure scopes:
- A failed community-list fetch aborts the run without writing anything.
- A failed member page truncates that group's member list (see MemberPager).
- A failed group is logged and skipped; later groups still run.
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from database.adapters.postgres_adapter import PostgresAdapter
from database.models.onboarding_records import GroupSnapshot
from services.join_label import JoinLabelStrategy, derive_join_label
from services.onboarding_merger import OnboardingMerger
from tcsion.facade.tcsion_facade import TCSionFacade
from tcsion.models.community import CommunityListEntry

logger = logging.getLogger(__name__)

GROUP_NEW = "new"
GROUP_CHANGED = "changed"
GROUP_UNCHANGED = "unchanged"


def classify_group(entry: CommunityListEntry, snapshot: Optional[GroupSnapshot]) -> str:
    """
    Decide how a community list entry relates to its stored snapshot.

    Returns:
        str: GROUP_NEW, GROUP_CHANGED or GROUP_UNCHANGED
    """
    if snapshot is None:
        return GROUP_NEW
    if snapshot.member_count != entry.member_count:
        return GROUP_CHANGED
    return GROUP_UNCHANGED


class OnboardingReconciliationService:
    """
    Drives one reconciliation run per call to ``reconcile``.

    Collaborators are injected so that one facade (HTTP session) and one store
    (connection pool) are shared by every request.
    """

    def __init__(
        self,
        facade: TCSionFacade,
        store: PostgresAdapter,
        merger: Optional[OnboardingMerger] = None,
        label_strategy: JoinLabelStrategy = derive_join_label,
        dry_run: bool = False,
    ):
        """
        Initialize the reconciliation service.

        Args:
            facade: TCSionFacade for community and member lookups
            store: Onboarding store adapter
            merger: Merger used for person updates (built from ``store`` if omitted)
            label_strategy: Function deriving the join label from a community name
            dry_run: If True, log decisions without writing to the store
        """
        self.facade = facade
        self.store = store
        self.merger = merger or OnboardingMerger(store, dry_run=dry_run)
        self.label_strategy = label_strategy
        self.dry_run = dry_run

    def fetch_communities(self, period: str, sec_key: Optional[str] = None) -> Optional[List[CommunityListEntry]]:
        """
        Fetch the community list for a period.

        Returns:
            Optional[List[CommunityListEntry]]: The entries, or None if the fetch failed
        """
        try:
            communities = self.facade.get_communities(period, sec_key)
        except Exception as e:
            logger.error(f"Error fetching community data for '{period}': {e}")
            return None

        logger.info(f"Fetched {len(communities)} communities for '{period}'")
        return communities

    def process_group(self, entry: CommunityListEntry) -> Dict[str, Any]:
        """
        Reconcile a single community.

        Args:
            entry: Community as reported by the list endpoint

        Returns:
            Dict[str, Any]: Outcome with keys ``slug``, ``outcome``, ``members``
            and ``merged``
        """
        snapshot = self.store.find_group_snapshot(entry.slug)
        outcome = classify_group(entry, snapshot)

        result = {"slug": entry.slug, "outcome": outcome, "members": 0, "merged": 0}
        if outcome == GROUP_UNCHANGED:
            logger.debug(f"'{entry.slug}' unchanged at {entry.member_count} members")
            return result

        join_label = self.label_strategy(entry.name)

        if outcome == GROUP_NEW:
            logger.info(f"New community '{entry.slug}' ({entry.member_count} members, '{join_label}')")
        else:
            logger.info(
                f"Community '{entry.slug}' changed: "
                f"{snapshot.member_count} -> {entry.member_count} members ('{join_label}')"
            )

        members = self.facade.get_all_members(entry.slug)
        result["members"] = len(members)
        result["merged"] = self.merger.merge_members(members, join_label)

        if self.dry_run:
            logger.info(f"[DRY RUN] Would record '{entry.slug}' at {entry.member_count} members")
            return result

        if outcome == GROUP_NEW:
            if not self.store.create_group_snapshot(entry.slug, entry.member_count):
                # Another run recorded the slug first
                self.store.update_group_snapshot(entry.slug, entry.member_count)
        else:
            self.store.update_group_snapshot(entry.slug, entry.member_count)

        return result

    def reconcile(self, period: str, sec_key: Optional[str] = None) -> Dict[str, Any]:
        """
        Run one reconciliation for a period.

        Args:
            period: Period label (month name) forwarded to the community list
            sec_key: Optional ``mtop_sec_key`` forwarded to the community list

        Returns:
            Dict[str, Any]: Run statistics
        """
        run_start = datetime.now()
        stats = {
            "aborted": False,
            "groups_seen": 0,
            "groups_new": 0,
            "groups_changed": 0,
            "groups_unchanged": 0,
            "groups_failed": 0,
            "members_fetched": 0,
            "records_updated": 0,
        }

        logger.info(f"Starting reconciliation for '{period}' (dry run: {self.dry_run})")

        communities = self.fetch_communities(period, sec_key)
        if communities is None:
            stats["aborted"] = True
            logger.warning(f"Reconciliation for '{period}' aborted, serving stored data")
            return stats

        for entry in communities:
            stats["groups_seen"] += 1
            try:
                result = self.process_group(entry)
            except Exception:
                logger.exception(f"Error reconciling community '{entry.slug}', skipping")
                stats["groups_failed"] += 1
                continue

            stats[f"groups_{result['outcome']}"] += 1
            stats["members_fetched"] += result["members"]
            stats["records_updated"] += result["merged"]

        duration = (datetime.now() - run_start).total_seconds()
        stats["duration_seconds"] = duration

        logger.info(
            f"Reconciliation for '{period}' completed: "
            f"{stats['groups_seen']} communities "
            f"({stats['groups_new']} new, {stats['groups_changed']} changed, "
            f"{stats['groups_unchanged']} unchanged, {stats['groups_failed']} failed), "
            f"{stats['records_updated']} records updated in {duration:.2f}s"
        )
        return stats

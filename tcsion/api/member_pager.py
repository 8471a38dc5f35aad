"""
Member pager for the TCS iON member-search endpoint.

Walks ``search_members`` pages for one community until one of three exit
conditions is met:

- an empty page (normal exhaustion),
- an upstream 5xx, which the platform returns past the last page for some
  communities (soft exhaustion),
- any other failure, which truncates the member list to what was
  accumulated so far.

Upstream failures never propagate out of the pager.
"""

import logging
from typing import List, Optional

from .member_api import MemberAPI
from ..exceptions import UpstreamServerError
from ..models.community import MemberRecord

logger = logging.getLogger(__name__)

DEFAULT_MAX_PAGES = 1000


class MemberPager:
    """
    Accumulates every member of a community across paginated requests.

    Attributes:
        member_api: MemberAPI used to fetch individual pages.
        max_pages: Upper bound on pages requested for a single community.
    """

    def __init__(self, member_api: MemberAPI, max_pages: int = DEFAULT_MAX_PAGES):
        self.member_api = member_api
        self.max_pages = max_pages

    @staticmethod
    def is_exhausted(page_members: List[MemberRecord]) -> bool:
        """An empty page marks the end of the member list."""
        return len(page_members) == 0

    @staticmethod
    def is_soft_exhaustion(error: Exception) -> bool:
        """A server error is treated as the end of the list, not as a failure."""
        return isinstance(error, UpstreamServerError)

    @staticmethod
    def is_failure(error: Exception) -> bool:
        """Any error that is not soft exhaustion is a failure that truncates the list."""
        return not MemberPager.is_soft_exhaustion(error)

    def fetch_all_members(self, slug: str) -> List[MemberRecord]:
        """
        Fetch all members of a community.

        Args:
            slug: The community slug.

        Returns:
            List[MemberRecord]: Concatenation of every non-empty page fetched
            before an exit condition was reached.
        """
        members: List[MemberRecord] = []
        page = 1
        stop_reason: Optional[str] = None

        while stop_reason is None:
            if page > self.max_pages:
                logger.warning(
                    f"Reached page limit ({self.max_pages}) for '{slug}', "
                    f"keeping {len(members)} members"
                )
                stop_reason = "page_limit"
                continue

            try:
                page_members = self.member_api.search_members(slug, page)
            except Exception as e:
                if self.is_soft_exhaustion(e):
                    logger.info(f"Server error on page {page} for '{slug}', treating as end of list")
                    stop_reason = "server_error"
                elif self.is_failure(e):
                    logger.exception(f"Error fetching members for slug {slug} (page {page})")
                    stop_reason = "failed"
                continue

            if self.is_exhausted(page_members):
                stop_reason = "exhausted"
                continue

            members.extend(page_members)
            page += 1

        logger.debug(f"Fetched {len(members)} members for '{slug}' ({stop_reason})")
        return members

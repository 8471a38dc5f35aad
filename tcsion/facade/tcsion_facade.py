from typing import List, Optional

import requests

from ..api.tcsion_api import (
    DEFAULT_BASE_URL,
    DEFAULT_TIMEOUT,
    create_bearer_headers,
    create_session_headers,
)
from ..api.community_api import CommunityAPI
from ..api.member_api import MemberAPI
from ..api.member_pager import DEFAULT_MAX_PAGES, MemberPager
from ..models.community import CommunityListEntry, MemberRecord


class TCSionFacade:
    """
    Single entry point to the TCS iON endpoints used for onboarding sync.

    The community endpoint and the member-search endpoint use two distinct
    credentials: a bearer API key and a browser session cookie. Each client
    keeps its own HTTP session so cookies set by one endpoint are never sent
    to the other.
    """

    def __init__(
        self,
        api_key: str,
        session_cookie: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        max_pages: int = DEFAULT_MAX_PAGES,
        community_session: Optional[requests.Session] = None,
        member_session: Optional[requests.Session] = None,
    ):
        self.communities = CommunityAPI(
            base_url,
            create_bearer_headers(api_key),
            timeout=timeout,
            session=community_session or requests.Session(),
        )
        self.members = MemberAPI(
            base_url,
            create_session_headers(session_cookie, base_url),
            timeout=timeout,
            session=member_session or requests.Session(),
        )
        self.member_pager = MemberPager(self.members, max_pages=max_pages)

    def get_communities(self, name: str, sec_key: Optional[str] = None) -> List[CommunityListEntry]:
        return self.communities.get_communities(name, sec_key)

    def get_all_members(self, slug: str) -> List[MemberRecord]:
        return self.member_pager.fetch_all_members(slug)

from typing import List

from .tcsion_api import TCSionAPI
from ..exceptions import UpstreamMalformedError
from ..models.community import MemberRecord


class MemberAPI(TCSionAPI):
    """
    API adapter for the member-search endpoint.

    Expects session headers (see ``create_session_headers``).
    """

    def search_members(self, slug: str, page: int) -> List[MemberRecord]:
        """
        Get one page of members of a community.

        Args:
            slug: The community slug.
            page: 1-based page number.

        Returns:
            List[MemberRecord]: Members on that page; empty once pages are exhausted.

        Raises:
            UpstreamMalformedError: If the body is not a list of member objects.
        """
        params = {"c_id": slug, "req_type": "api", "page": page}
        data = self.get("LX/search/search_members", params=params)

        if not isinstance(data, list):
            raise UpstreamMalformedError(
                f"Member page {page} for '{slug}' is not a list: {type(data).__name__}"
            )
        return [MemberRecord.from_api(item) for item in data]

import logging
from typing import List, Optional

from .tcsion_api import TCSionAPI
from ..exceptions import UpstreamMalformedError
from ..models.community import CommunityListEntry

logger = logging.getLogger(__name__)


class CommunityAPI(TCSionAPI):
    """
    API adapter for the community enrolment integration endpoint.

    Expects bearer headers (see ``create_bearer_headers``).
    """

    def get_communities(self, name: str, sec_key: Optional[str] = None) -> List[CommunityListEntry]:
        """
        Get the community groups matching a period name.

        Entries that cannot be parsed are logged and left out; the remaining
        communities are still returned.

        Args:
            name: Period label used by the platform to filter communities (a month name).
            sec_key: Optional ``mtop_sec_key`` forwarded from the caller.

        Returns:
            List[CommunityListEntry]: The valid communities, in the order returned.

        Raises:
            UpstreamMalformedError: If the body is not a list.
        """
        params = {
            "mtop_sec_key": sec_key,
            "type": "community",
            "page": 1,
            "name": name,
        }
        data = self.get("LX/lms_integration/enroll_community_course.json", params=params)

        if not isinstance(data, list):
            raise UpstreamMalformedError(
                f"Community list response is not a list: {type(data).__name__}"
            )

        communities = []
        for item in data:
            try:
                communities.append(CommunityListEntry.from_api(item))
            except UpstreamMalformedError as e:
                logger.warning(f"Skipping malformed community entry: {e}")
        return communities

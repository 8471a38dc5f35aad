from .api.tcsion_api import TCSionAPI, create_bearer_headers, create_session_headers
from .api.community_api import CommunityAPI
from .api.member_api import MemberAPI
from .api.member_pager import MemberPager
from .facade.tcsion_facade import TCSionFacade

__all__ = [
        "TCSionAPI",
        "create_bearer_headers",
        "create_session_headers",
        "CommunityAPI",
        "MemberAPI",
        "MemberPager",
        "TCSionFacade",
]

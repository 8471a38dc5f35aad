from .tcsion_api import TCSionAPI, create_bearer_headers, create_session_headers
from .community_api import CommunityAPI
from .member_api import MemberAPI
from .member_pager import MemberPager

__all__ = [
    'TCSionAPI',
    'create_bearer_headers',
    'create_session_headers',
    'CommunityAPI',
    'MemberAPI',
    'MemberPager',
]

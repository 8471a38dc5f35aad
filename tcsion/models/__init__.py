from .community import CommunityListEntry, MemberRecord

__all__ = ['CommunityListEntry', 'MemberRecord']

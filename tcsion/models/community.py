"""
Data models for TCS iON community and member payloads.

Both models are ephemeral: they are parsed from API responses, consumed by the
reconciliation service and never persisted verbatim.
"""

from dataclasses import dataclass, field
from typing import Any, Dict

from ..exceptions import UpstreamMalformedError


def _require_str(data: Dict[str, Any], key: str, context: str) -> str:
    value = data.get(key)
    if not isinstance(value, str) or not value:
        raise UpstreamMalformedError(f"{context} is missing a valid '{key}': {data!r}")
    return value


@dataclass
class CommunityListEntry:
    """One community group as reported by the community-list endpoint."""

    slug: str
    member_count: int
    name: str

    @classmethod
    def from_api(cls, data: Any) -> "CommunityListEntry":
        """
        Build an entry from one element of the community-list response.

        Args:
            data: A decoded JSON object, e.g.
                {"slug": "g1", "member_count": 5, "name": "Prime - June 2024 Cohort"}

        Returns:
            CommunityListEntry: The parsed entry.

        Raises:
            UpstreamMalformedError: If the element is not an object or a field is
            missing or has the wrong type.
        """
        if not isinstance(data, dict):
            raise UpstreamMalformedError(f"Community entry is not an object: {data!r}")

        slug = _require_str(data, "slug", "Community entry")
        name = _require_str(data, "name", "Community entry")

        raw_count = data.get("member_count")
        # The platform sometimes serialises counts as strings
        if isinstance(raw_count, bool):
            raw_count = None
        elif isinstance(raw_count, float) and not raw_count.is_integer():
            raise UpstreamMalformedError(
                f"Community entry '{slug}' has a non-integral member_count: {raw_count!r}"
            )
        try:
            member_count = int(raw_count)
        except (TypeError, ValueError):
            raise UpstreamMalformedError(
                f"Community entry '{slug}' has an invalid member_count: {raw_count!r}"
            )
        if member_count < 0:
            raise UpstreamMalformedError(
                f"Community entry '{slug}' has a negative member_count: {member_count}"
            )

        return cls(slug=slug, member_count=member_count, name=name)


@dataclass
class MemberRecord:
    """A single member returned by the member-search endpoint."""

    login_id: str
    raw: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_api(cls, data: Any) -> "MemberRecord":
        if not isinstance(data, dict):
            raise UpstreamMalformedError(f"Member entry is not an object: {data!r}")
        return cls(login_id=_require_str(data, "usrloginid", "Member entry"), raw=data)

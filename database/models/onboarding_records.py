import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping


@dataclass
class PersonRecord:
    """A known person and the cohort labels they joined, newest first."""
    person_id: str
    name: str = ""
    joining_dates: List[str] = field(default_factory=list)
    version: int = 0

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "PersonRecord":
        raw_dates = row.get("joining_dates") or "[]"
        dates = json.loads(raw_dates) if isinstance(raw_dates, str) else list(raw_dates)
        return cls(
            person_id=row["person_id"],
            name=row.get("name") or "",
            joining_dates=dates,
            version=row.get("version") or 0,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialise using the field names the dashboard frontend expects."""
        return {"id": self.person_id, "name": self.name, "joiningDate": list(self.joining_dates)}


@dataclass
class GroupSnapshot:
    """Last member count observed for a community group."""
    slug: str
    member_count: int

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "GroupSnapshot":
        return cls(slug=row["slug"], member_count=int(row["member_count"]))

"""
Output record for an extraction.
"""
from dataclasses import dataclass, fields
from enum import Enum
from typing import Dict, Optional


class WorkArrangement(str, Enum):
    REMOTE = "Remote"
    HYBRID = "Hybrid"
    ON_SITE = "On-site"
    FREELANCE = "Freelance"

    def __str__(self):
        return self.value


# Python attribute -> wire key
WIRE_KEYS = {
    "position": "position",
    "company": "company",
    "location": "location",
    "work_arrangement": "workArrangement",
    "description": "description",
    "compensation": "compensation",
    "posted_date": "postedDate",
}


@dataclass(frozen=True)
class JobPosting:
    """
    Fields extracted from one job posting page.

    Every field is optional; None means "not determined", never an error.
    `posted_date` is an ISO 8601 calendar date (YYYY-MM-DD).
    """
    position: Optional[str] = None
    company: Optional[str] = None
    location: Optional[str] = None
    work_arrangement: Optional[WorkArrangement] = None
    description: Optional[str] = None
    compensation: Optional[str] = None
    posted_date: Optional[str] = None

    def to_dict(self) -> Dict[str, str]:
        """Wire form: camelCase keys, unset fields omitted."""
        data = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            if isinstance(value, WorkArrangement):
                value = value.value
            data[WIRE_KEYS[f.name]] = value
        return data

    @classmethod
    def from_dict(cls, data: Dict) -> "JobPosting":
        """Build from the wire form, ignoring unknown keys."""
        kwargs = {}
        for attr, key in WIRE_KEYS.items():
            value = data.get(key, data.get(attr))
            if value in (None, ""):
                continue
            if attr == "work_arrangement":
                try:
                    value = WorkArrangement(value)
                except ValueError:
                    continue
            kwargs[attr] = value
        return cls(**kwargs)

    def is_empty(self) -> bool:
        return not self.to_dict()

"""
Caption data recovered from (or rendered into) the heading block of a filing.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class Party:
    """A named participant with a singular procedural role."""
    name: str
    role: str

    def to_dict(self) -> dict:
        return {"name": self.name, "role": self.role}


@dataclass
class CaptionData:
    """Jurisdiction metadata and party list of a pleading caption."""
    state: str = "INDIANA"
    county: str = ""
    court: str = ""  # e.g. "MARION SUPERIOR COURT NO. 7"
    division: str = ""  # text after the "SS:" marker
    cause_number: str = ""
    has_venue_mark: bool = False
    parties: list[Party] = field(default_factory=list)

    @property
    def plaintiff(self) -> Party | None:
        return self.parties[0] if self.parties else None

    @property
    def defendants(self) -> list[Party]:
        return self.parties[1:]

    def to_dict(self) -> dict:
        return {
            "state": self.state,
            "county": self.county,
            "court": self.court,
            "division": self.division,
            "causeNumber": self.cause_number,
            "hasVenueMark": self.has_venue_mark,
            "parties": [p.to_dict() for p in self.parties],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CaptionData":
        return cls(
            state=data.get("state") or "INDIANA",
            county=data.get("county") or "",
            court=data.get("court") or "",
            division=data.get("division") or "",
            cause_number=data.get("causeNumber") or data.get("cause_number") or "",
            has_venue_mark=bool(data.get("hasVenueMark", data.get("has_venue_mark", False))),
            parties=[
                Party(name=p.get("name") or "", role=p.get("role") or "")
                for p in data.get("parties") or []
            ],
        )

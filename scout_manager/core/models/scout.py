"""Scout, report and observation models."""

from dataclasses import dataclass, field
from enum import Enum as PyEnum
from typing import Optional


class ConvictionLevel(PyEnum):
    """How strongly a scout stands behind a report."""
    NOTE = "note"
    RECOMMEND = "recommend"
    STRONG_RECOMMEND = "strong_recommend"
    TABLE_POUND = "table_pound"


@dataclass(frozen=True)
class Scout:
    """The player's scout.

    career_tier runs 1 (freelancer) to 5 (head of recruitment); board
    dynamics only apply at the top tier.
    """
    id: str
    name: str
    reputation: float = 10.0
    career_tier: int = 1
    club_id: Optional[str] = None
    primary_specialization: str = "first_team"
    attributes: dict[str, int] = field(default_factory=dict)

    @property
    def persuasion(self) -> int:
        return self.attributes.get("persuasion", 10)


@dataclass(frozen=True)
class ScoutReport:
    """A submitted scouting report on one player."""
    id: str
    player_id: str
    scout_id: str
    conviction: ConvictionLevel
    quality_score: int
    submitted_week: int
    submitted_season: int
    # Estimated attribute values keyed by attribute name
    attribute_assessments: dict[str, int] = field(default_factory=dict)
    perceived_ability_stars: Optional[float] = None
    summary: str = ""


@dataclass(frozen=True)
class Observation:
    """A single scouting session watching a player."""
    id: str
    player_id: str
    scout_id: str
    week: int
    season: int

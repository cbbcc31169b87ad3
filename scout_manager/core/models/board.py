"""Board of directors models."""

from dataclasses import dataclass
from enum import Enum as PyEnum
from typing import Optional


class BoardPersonality(PyEnum):
    """Temperament of the board the head of recruitment answers to."""
    PATIENT = "patient"
    IMPATIENT = "impatient"
    PENNY_PINCHING = "penny-pinching"
    AMBITIOUS = "ambitious"
    HANDS_OFF = "hands-off"


class BoardReactionType(PyEnum):
    PRAISE = "praise"
    WARNING = "warning"
    BUDGET_INCREASE = "budget_increase"
    BUDGET_CUT = "budget_cut"
    ULTIMATUM = "ultimatum"
    DEMOTION = "demotion"
    FIRING = "firing"


@dataclass(frozen=True)
class BoardProfile:
    """Board mood towards the scout.

    satisfaction and patience stay within 0-100 and the budget multiplier
    within 0.5-2.0 after every update.
    """
    personality: BoardPersonality
    satisfaction: float = 60.0
    patience: float = 70.0
    budget_multiplier: float = 1.0
    ultimatum_issued: bool = False
    ultimatum_deadline: Optional[int] = None
    # Seasons in which directives were issued under this board
    directive_seasons: tuple[int, ...] = ()


@dataclass(frozen=True)
class BoardReaction:
    """A single board decision for the week."""
    type: BoardReactionType
    trigger: str
    week: int
    message: str


@dataclass(frozen=True)
class DifficultyScaling:
    """Board mood translated into directive requirements."""
    ability_stars_multiplier: float = 1.0
    budget_scale: float = 1.0
    # Years added to both ends of the preferred age window
    age_year_delta: int = 0

"""Club, tactical style and manager models."""

from dataclasses import dataclass
from enum import Enum as PyEnum
from typing import Optional


class ScoutingPhilosophy(PyEnum):
    """How a club prefers to recruit."""
    WIN_NOW = "win_now"
    ACADEMY_FIRST = "academy_first"
    MARKET_SMART = "market_smart"
    GLOBAL_RECRUITER = "global_recruiter"


class TacticalIdentity(PyEnum):
    """Broad playing identity of a club."""
    POSSESSION_BASED = "possession_based"
    HIGH_PRESS = "high_press"
    COUNTER_ATTACKING = "counter_attacking"
    DIRECT_PLAY = "direct_play"
    BALANCED = "balanced"
    WING_PLAY = "wing_play"


class ManagerPreference(PyEnum):
    """How a manager weighs scouting evidence."""
    DATA_FIRST = "data_first"
    EYE_TEST = "eye_test"
    BALANCED = "balanced"


@dataclass(frozen=True)
class TacticalStyle:
    """Tactical dials of a club, each on a 1-20 scale."""
    identity: TacticalIdentity
    defensive_line: int = 10
    pressing_intensity: int = 10
    tempo: int = 10
    width: int = 10
    directness: int = 10


@dataclass(frozen=True)
class Club:
    """A football club.

    Reputation runs 1-100, the budget is the transfer budget in pounds.
    """
    id: str
    name: str
    short_name: str
    reputation: int
    budget: int
    scouting_philosophy: ScoutingPhilosophy = ScoutingPhilosophy.MARKET_SMART
    tactical_style: Optional[TacticalStyle] = None
    player_ids: tuple[str, ...] = ()
    # Division tier, 1 is the top flight
    league_tier: int = 1


@dataclass(frozen=True)
class ManagerProfile:
    """The first-team manager a scout reports to."""
    club_id: str
    name: str
    preferred_formation: str = "4-4-2"
    preference: ManagerPreference = ManagerPreference.BALANCED

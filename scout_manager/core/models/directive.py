"""Directives, club responses and system fit results."""

from dataclasses import dataclass
from enum import Enum as PyEnum
from typing import Optional

from scout_manager.core.models.player import Position


class DirectivePriority(PyEnum):
    """Urgency of a recruitment directive."""
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


PRIORITY_ORDER = {
    DirectivePriority.CRITICAL: 0,
    DirectivePriority.HIGH: 1,
    DirectivePriority.MEDIUM: 2,
    DirectivePriority.LOW: 3,
}


class PlayerRole(PyEnum):
    """Tactical roles a player can perform."""
    SHOT_STOPPER = "shot_stopper"
    SWEEPER = "sweeper"
    BALL_PLAYING_DEFENDER = "ball_playing_defender"
    NO_NONSENSE_CB = "no_nonsense_cb"
    LIBERO = "libero"
    FULL_BACK = "full_back"
    WING_BACK = "wing_back"
    INVERTED_FULL_BACK = "inverted_full_back"
    ANCHOR_MAN = "anchor_man"
    HALF_BACK = "half_back"
    DEEP_LYING_PLAYMAKER = "deep_lying_playmaker"
    BOX_TO_BOX = "box_to_box"
    MEZZALA = "mezzala"
    ADVANCED_PLAYMAKER = "advanced_playmaker"
    CARRILERO = "carrilero"
    ENGANCHE = "enganche"
    SHADOW_STRIKER = "shadow_striker"
    TREQUARTISTA = "trequartista"
    WINGER = "winger"
    INVERTED_WINGER = "inverted_winger"
    INSIDE_FORWARD = "inside_forward"
    POACHER = "poacher"
    TARGET_MAN = "target_man"
    ADVANCED_FORWARD = "advanced_forward"
    PRESSING_FORWARD = "pressing_forward"


class RoleDuty(PyEnum):
    DEFEND = "defend"
    SUPPORT = "support"
    ATTACK = "attack"


@dataclass(frozen=True)
class Directive:
    """A club's request for a player in one position this season."""
    id: str
    club_id: str
    position: Position
    priority: DirectivePriority
    budget_allocation: int
    age_range: tuple[int, int]
    min_ability_stars: float
    key_attributes: tuple[str, ...]
    season: int
    tactical_notes: str = ""
    preferred_role: Optional[PlayerRole] = None
    fulfilled: bool = False


@dataclass(frozen=True)
class DirectiveMatch:
    """Best directive for a report and how well it matched."""
    directive_id: str
    match_score: int


class ClubResponseType(PyEnum):
    """How a club reacts to a submitted report."""
    IGNORED = "ignored"
    INTERESTED = "interested"
    TRIAL = "trial"
    DOES_NOT_FIT = "does_not_fit"
    TOO_EXPENSIVE = "too_expensive"
    SIGNED = "signed"
    LOAN_SIGNED = "loan_signed"


NEGATIVE_RESPONSES = frozenset({
    ClubResponseType.IGNORED,
    ClubResponseType.DOES_NOT_FIT,
    ClubResponseType.TOO_EXPENSIVE,
})


@dataclass(frozen=True)
class ClubResponse:
    """Outcome of a club reviewing one report."""
    report_id: str
    response: ClubResponseType
    feedback: str
    reputation_delta: int
    week: int
    season: int
    directive_id: Optional[str] = None


@dataclass(frozen=True)
class SystemFitResult:
    """How well a player fits a club's tactical system."""
    player_id: str
    club_id: str
    overall_fit: int
    position_fit: int
    role_fit: int
    tactical_fit: int
    age_fit: int
    suggested_role: Optional[PlayerRole] = None
    strengths: tuple[str, ...] = ()
    weaknesses: tuple[str, ...] = ()

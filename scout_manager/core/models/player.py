"""Player model and the enums describing what a player is."""

from dataclasses import dataclass, field
from enum import Enum as PyEnum
from typing import Optional


class Position(PyEnum):
    """Player positions on the field."""
    GK = "GK"  # Goalkeeper
    CB = "CB"  # Center Back
    LB = "LB"  # Left Back
    RB = "RB"  # Right Back
    CDM = "CDM"  # Central Defensive Midfielder
    CM = "CM"  # Central Midfielder
    CAM = "CAM"  # Central Attacking Midfielder
    LW = "LW"  # Left Winger
    RW = "RW"  # Right Winger
    ST = "ST"  # Striker


# Canonical order used when walking the squad position by position
ALL_POSITIONS: tuple[Position, ...] = tuple(Position)

WIDE_POSITIONS = frozenset({Position.LB, Position.RB, Position.LW, Position.RW})


# Visible attributes (1-20 scale)
TECHNICAL_ATTRIBUTES = (
    "passing", "crossing", "dribbling", "first_touch", "shooting",
    "finishing", "heading", "tackling", "marking",
)
PHYSICAL_ATTRIBUTES = (
    "pace", "stamina", "strength", "agility", "balance", "jumping",
)
MENTAL_ATTRIBUTES = (
    "positioning", "composure", "decision_making", "vision", "anticipation",
    "off_the_ball", "work_rate", "teamwork", "pressing", "leadership",
    "defensive_awareness",
)
# Never shown in a report, only ever inferred
HIDDEN_ATTRIBUTES = (
    "professionalism", "big_game_temperament", "injury_proneness", "consistency",
)

ALL_ATTRIBUTES = (
    TECHNICAL_ATTRIBUTES + PHYSICAL_ATTRIBUTES + MENTAL_ATTRIBUTES + HIDDEN_ATTRIBUTES
)

DEFAULT_ATTRIBUTE_VALUE = 10


class PlayerTrait(PyEnum):
    """Behavioural tendencies a scout can pick up on."""
    PLACES_SHOTS = "places_shots"
    TRIES_TRICKS = "tries_tricks"
    CUTS_INSIDE = "cuts_inside"
    RUNS_WITH_BALL = "runs_with_ball"
    MOVES_INTO_CHANNELS = "moves_into_channels"
    SHOOTS_FROM_DISTANCE = "shoots_from_distance"
    TRIES_KILLER_BALLS = "tries_killer_balls"
    STAYS_BACK = "stays_back"
    DIVES_STRAIGHT_IN = "dives_straight_in"
    MARKS_PLAYER_TIGHTLY = "marks_player_tightly"
    DICTATES_TEMPO = "dictates_tempo"
    PLAYS_SHORT_PASSES = "plays_short_passes"
    SWITCHES_PLAY_TO_FLANK = "switches_play_to_flank"
    PLAYS_ONE_TWO = "plays_one_two"
    HOLDS_UP_BALL = "holds_up_ball"
    BRINGS_OTHERS_INTO_PLAY = "brings_others_into_play"
    ARRIVES_LATE_IN_BOX = "arrives_late_in_box"
    PLAYS_WITH_BACK_TO_GOAL = "plays_with_back_to_goal"
    DRIFTS_WIDE = "drifts_wide"
    DROPS_DEEP = "drops_deep"


class PersonalityArchetype(PyEnum):
    """Broad personality types, only used for transfer willingness."""
    AMBITIOUS = "ambitious"
    LOYAL = "loyal"
    PROFESSIONAL = "professional"
    MERCENARY = "mercenary"
    EASYGOING = "easygoing"


@dataclass(frozen=True)
class Player:
    """A football player as the decision core sees it.

    Ability values use the 1-200 scale, attributes the 1-20 scale and
    form runs from -3 (dreadful) to +3 (superb).
    """
    id: str
    first_name: str
    last_name: str
    position: Position
    age: int
    current_ability: int
    potential_ability: int
    market_value: int
    club_id: Optional[str] = None
    secondary_positions: tuple[Position, ...] = ()
    form: int = 0
    attributes: dict[str, int] = field(default_factory=dict)
    traits: tuple[PlayerTrait, ...] = ()
    archetype: Optional[PersonalityArchetype] = None
    # Externally supplied willingness score (0-1); derived when absent
    transfer_willingness: Optional[float] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def attribute(self, name: str) -> int:
        """Attribute value, treating unknown attributes as average."""
        return self.attributes.get(name, DEFAULT_ATTRIBUTE_VALUE)

    def plays(self, position: Position) -> bool:
        """Whether the player can be deployed at the given position."""
        return position == self.position or position in self.secondary_positions

"""Tactical identities and club tactical styles.

A club's style is either set explicitly or derived deterministically from
its scouting philosophy and reputation. The identity decides which
attributes and behaviours a recruit is judged on and which role a
directive asks for.
"""

import random
from dataclasses import dataclass

from scout_manager.core.models import (
    Club,
    PlayerRole,
    PlayerTrait,
    Position,
    ScoutingPhilosophy,
    TacticalIdentity,
    TacticalStyle,
)
from scout_manager.engine.random_utils import clamp, round_half_up, weighted_choice

TI = TacticalIdentity
T = PlayerTrait
R = PlayerRole


@dataclass(frozen=True)
class IdentityProfile:
    """Value ranges of each tactical dial for an identity."""
    defensive_line: tuple[int, int]
    pressing_intensity: tuple[int, int]
    tempo: tuple[int, int]
    width: tuple[int, int]
    directness: tuple[int, int]


IDENTITY_PROFILES = {
    TI.POSSESSION_BASED: IdentityProfile((12, 16), (12, 16), (6, 10), (10, 14), (3, 7)),
    TI.HIGH_PRESS: IdentityProfile((14, 18), (16, 20), (14, 18), (10, 14), (8, 13)),
    TI.COUNTER_ATTACKING: IdentityProfile((4, 8), (4, 8), (12, 16), (8, 12), (10, 15)),
    TI.DIRECT_PLAY: IdentityProfile((6, 10), (8, 12), (14, 18), (14, 18), (14, 18)),
    TI.BALANCED: IdentityProfile((8, 13), (8, 13), (8, 13), (8, 13), (8, 13)),
    TI.WING_PLAY: IdentityProfile((10, 14), (10, 14), (10, 14), (16, 20), (10, 14)),
}

# Identity odds when a club's style is rolled rather than derived
PHILOSOPHY_IDENTITY_WEIGHTS = {
    ScoutingPhilosophy.ACADEMY_FIRST: (
        (TI.POSSESSION_BASED, 40), (TI.HIGH_PRESS, 20), (TI.BALANCED, 20),
        (TI.WING_PLAY, 15), (TI.COUNTER_ATTACKING, 5),
    ),
    ScoutingPhilosophy.WIN_NOW: (
        (TI.HIGH_PRESS, 30), (TI.POSSESSION_BASED, 25), (TI.COUNTER_ATTACKING, 20),
        (TI.BALANCED, 15), (TI.WING_PLAY, 10),
    ),
    ScoutingPhilosophy.MARKET_SMART: (
        (TI.BALANCED, 30), (TI.COUNTER_ATTACKING, 25), (TI.HIGH_PRESS, 20),
        (TI.POSSESSION_BASED, 15), (TI.WING_PLAY, 10),
    ),
    ScoutingPhilosophy.GLOBAL_RECRUITER: (
        (TI.POSSESSION_BASED, 25), (TI.WING_PLAY, 25), (TI.BALANCED, 20),
        (TI.HIGH_PRESS, 15), (TI.DIRECT_PLAY, 10), (TI.COUNTER_ATTACKING, 5),
    ),
}

# Six attributes each identity leans on
IDENTITY_ATTRIBUTES = {
    TI.POSSESSION_BASED: ("passing", "first_touch", "composure", "vision", "decision_making", "teamwork"),
    TI.HIGH_PRESS: ("pressing", "stamina", "work_rate", "pace", "anticipation", "teamwork"),
    TI.COUNTER_ATTACKING: ("pace", "off_the_ball", "finishing", "dribbling", "anticipation", "composure"),
    TI.DIRECT_PLAY: ("strength", "heading", "jumping", "pace", "crossing", "shooting"),
    TI.BALANCED: ("passing", "tackling", "stamina", "decision_making", "positioning", "work_rate"),
    TI.WING_PLAY: ("crossing", "pace", "dribbling", "stamina", "agility", "off_the_ball"),
}

# (liked, disliked) behaviours per identity
IDENTITY_TRAITS = {
    TI.POSSESSION_BASED: (
        (T.PLAYS_SHORT_PASSES, T.DICTATES_TEMPO, T.PLAYS_ONE_TWO),
        (T.SHOOTS_FROM_DISTANCE, T.DIVES_STRAIGHT_IN),
    ),
    TI.HIGH_PRESS: (
        (T.DIVES_STRAIGHT_IN, T.MARKS_PLAYER_TIGHTLY),
        (T.STAYS_BACK, T.DROPS_DEEP),
    ),
    TI.COUNTER_ATTACKING: (
        (T.RUNS_WITH_BALL, T.MOVES_INTO_CHANNELS, T.TRIES_KILLER_BALLS),
        (T.PLAYS_SHORT_PASSES, T.DICTATES_TEMPO),
    ),
    TI.DIRECT_PLAY: (
        (T.HOLDS_UP_BALL, T.PLAYS_WITH_BACK_TO_GOAL, T.SWITCHES_PLAY_TO_FLANK),
        (T.PLAYS_SHORT_PASSES, T.TRIES_TRICKS),
    ),
    TI.BALANCED: ((), ()),
    TI.WING_PLAY: (
        (T.DRIFTS_WIDE, T.SWITCHES_PLAY_TO_FLANK),
        (T.CUTS_INSIDE,),
    ),
}

_GK, _CB, _LB, _RB = Position.GK, Position.CB, Position.LB, Position.RB
_CDM, _CM, _CAM = Position.CDM, Position.CM, Position.CAM
_LW, _RW, _ST = Position.LW, Position.RW, Position.ST

# Role a club of each identity asks for at each position
IDENTITY_ROLE_HINTS = {
    TI.POSSESSION_BASED: {
        _GK: R.SWEEPER, _CB: R.BALL_PLAYING_DEFENDER, _LB: R.INVERTED_FULL_BACK,
        _RB: R.INVERTED_FULL_BACK, _CDM: R.DEEP_LYING_PLAYMAKER,
        _CM: R.ADVANCED_PLAYMAKER, _CAM: R.ENGANCHE, _LW: R.INSIDE_FORWARD,
        _RW: R.INSIDE_FORWARD, _ST: R.ADVANCED_FORWARD,
    },
    TI.HIGH_PRESS: {
        _GK: R.SWEEPER, _CB: R.BALL_PLAYING_DEFENDER, _LB: R.WING_BACK,
        _RB: R.WING_BACK, _CDM: R.HALF_BACK, _CM: R.BOX_TO_BOX,
        _CAM: R.SHADOW_STRIKER, _LW: R.INSIDE_FORWARD, _RW: R.INSIDE_FORWARD,
        _ST: R.PRESSING_FORWARD,
    },
    TI.COUNTER_ATTACKING: {
        _GK: R.SHOT_STOPPER, _CB: R.NO_NONSENSE_CB, _LB: R.FULL_BACK,
        _RB: R.FULL_BACK, _CDM: R.ANCHOR_MAN, _CM: R.BOX_TO_BOX,
        _CAM: R.SHADOW_STRIKER, _LW: R.INSIDE_FORWARD, _RW: R.INSIDE_FORWARD,
        _ST: R.ADVANCED_FORWARD,
    },
    TI.DIRECT_PLAY: {
        _GK: R.SHOT_STOPPER, _CB: R.NO_NONSENSE_CB, _LB: R.FULL_BACK,
        _RB: R.FULL_BACK, _CDM: R.ANCHOR_MAN, _CM: R.BOX_TO_BOX,
        _CAM: R.TREQUARTISTA, _LW: R.WINGER, _RW: R.WINGER, _ST: R.TARGET_MAN,
    },
    TI.WING_PLAY: {
        _GK: R.SHOT_STOPPER, _CB: R.BALL_PLAYING_DEFENDER, _LB: R.WING_BACK,
        _RB: R.WING_BACK, _CDM: R.HALF_BACK, _CM: R.CARRILERO,
        _CAM: R.ADVANCED_PLAYMAKER, _LW: R.WINGER, _RW: R.WINGER,
        _ST: R.TARGET_MAN,
    },
}


def _midpoint(value_range: tuple[int, int]) -> int:
    return round_half_up((value_range[0] + value_range[1]) / 2)


def _style_from_profile(identity: TacticalIdentity, values) -> TacticalStyle:
    return TacticalStyle(
        identity=identity,
        defensive_line=values[0],
        pressing_intensity=values[1],
        tempo=values[2],
        width=values[3],
        directness=values[4],
    )


def derive_tactical_style(philosophy: ScoutingPhilosophy, reputation: int) -> TacticalStyle:
    """Deterministic style for a club that has none set."""
    if philosophy == ScoutingPhilosophy.ACADEMY_FIRST:
        identity = TI.POSSESSION_BASED
    elif philosophy == ScoutingPhilosophy.WIN_NOW:
        identity = TI.HIGH_PRESS if reputation >= 60 else TI.COUNTER_ATTACKING
    elif philosophy == ScoutingPhilosophy.GLOBAL_RECRUITER:
        identity = TI.WING_PLAY if reputation >= 50 else TI.BALANCED
    else:
        identity = TI.BALANCED

    profile = IDENTITY_PROFILES[identity]
    return _style_from_profile(identity, [
        _midpoint(profile.defensive_line),
        _midpoint(profile.pressing_intensity),
        _midpoint(profile.tempo),
        _midpoint(profile.width),
        _midpoint(profile.directness),
    ])


def generate_tactical_style(
    rng: random.Random,
    philosophy: ScoutingPhilosophy,
    reputation: int,
) -> TacticalStyle:
    """Roll a style for a new club, biased by philosophy and stature."""
    weights = []
    for identity, weight in PHILOSOPHY_IDENTITY_WEIGHTS[philosophy]:
        if reputation >= 70:
            if identity in (TI.POSSESSION_BASED, TI.HIGH_PRESS):
                weight *= 1.3
            elif identity in (TI.DIRECT_PLAY, TI.COUNTER_ATTACKING):
                weight *= 0.7
        if reputation < 40:
            if identity in (TI.DIRECT_PLAY, TI.COUNTER_ATTACKING):
                weight *= 1.5
            elif identity == TI.POSSESSION_BASED:
                weight *= 0.5
        weights.append((identity, weight))

    identity = weighted_choice(rng, weights) or TI.BALANCED
    profile = IDENTITY_PROFILES[identity]
    ranges = (
        profile.defensive_line,
        profile.pressing_intensity,
        profile.tempo,
        profile.width,
        profile.directness,
    )
    return _style_from_profile(
        identity, [int(clamp(rng.randint(low, high), 1, 20)) for low, high in ranges]
    )


def club_tactical_style(club: Club) -> TacticalStyle:
    """The club's explicit style, or the one its philosophy implies."""
    if club.tactical_style is not None:
        return club.tactical_style
    return derive_tactical_style(club.scouting_philosophy, club.reputation)


def has_strong_identity(club: Club) -> bool:
    return club_tactical_style(club).identity != TI.BALANCED


def preferred_role_for(club: Club, position: Position) -> PlayerRole | None:
    """Role hint for a directive, only for clubs with a clear identity."""
    if not has_strong_identity(club):
        return None
    identity = club_tactical_style(club).identity
    return IDENTITY_ROLE_HINTS.get(identity, {}).get(position)

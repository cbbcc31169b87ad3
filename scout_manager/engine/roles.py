"""Player role catalogue and role suitability.

Each role weights a handful of key and secondary attributes and likes or
dislikes certain behavioural traits. Suitability is reported on a 0-100
scale:

- 65% weighted key attribute average, 35% weighted secondary average
- +5 for each preferred trait, -5 for each conflicting trait
- +3 on an attacking duty, -3 on a defensive one
"""

from dataclasses import dataclass

from scout_manager.core.models import Player, PlayerRole, PlayerTrait, Position, RoleDuty
from scout_manager.engine.random_utils import clamp, round_half_up

T = PlayerTrait
R = PlayerRole
D = RoleDuty


@dataclass(frozen=True)
class RoleDefinition:
    role: PlayerRole
    positions: tuple[Position, ...]
    key_attributes: tuple[tuple[str, float], ...]
    secondary_attributes: tuple[tuple[str, float], ...]
    preferred_traits: tuple[PlayerTrait, ...] = ()
    conflicting_traits: tuple[PlayerTrait, ...] = ()
    duties: tuple[RoleDuty, ...] = (D.SUPPORT,)


ROLE_DEFINITIONS: tuple[RoleDefinition, ...] = (
    # Goalkeepers
    RoleDefinition(
        R.SHOT_STOPPER, (Position.GK,),
        (("positioning", 1.5), ("composure", 1.4), ("agility", 1.3),
         ("strength", 1.2), ("anticipation", 1.2)),
        (("leadership", 1.1), ("decision_making", 1.0)),
        duties=(D.DEFEND,),
    ),
    RoleDefinition(
        R.SWEEPER, (Position.GK,),
        (("pace", 1.4), ("passing", 1.4), ("anticipation", 1.3),
         ("composure", 1.3), ("first_touch", 1.2)),
        (("positioning", 1.1), ("decision_making", 1.1), ("vision", 1.0)),
        (T.PLAYS_SHORT_PASSES,), (),
        (D.DEFEND, D.SUPPORT),
    ),
    # Centre backs
    RoleDefinition(
        R.BALL_PLAYING_DEFENDER, (Position.CB,),
        (("passing", 1.4), ("composure", 1.4), ("defensive_awareness", 1.3),
         ("tackling", 1.2), ("vision", 1.2)),
        (("first_touch", 1.1), ("anticipation", 1.0), ("strength", 1.0)),
        (T.PLAYS_SHORT_PASSES, T.DICTATES_TEMPO), (T.DIVES_STRAIGHT_IN,),
        (D.DEFEND, D.SUPPORT),
    ),
    RoleDefinition(
        R.NO_NONSENSE_CB, (Position.CB,),
        (("tackling", 1.5), ("heading", 1.4), ("strength", 1.4),
         ("marking", 1.3), ("jumping", 1.2)),
        (("anticipation", 1.1), ("positioning", 1.1), ("teamwork", 1.0)),
        (T.MARKS_PLAYER_TIGHTLY, T.STAYS_BACK), (T.TRIES_TRICKS, T.RUNS_WITH_BALL),
        (D.DEFEND,),
    ),
    RoleDefinition(
        R.LIBERO, (Position.CB,),
        (("passing", 1.5), ("dribbling", 1.3), ("composure", 1.3),
         ("vision", 1.3), ("anticipation", 1.2)),
        (("tackling", 1.1), ("decision_making", 1.1), ("pace", 1.0)),
        (T.RUNS_WITH_BALL, T.DICTATES_TEMPO), (T.STAYS_BACK,),
        (D.SUPPORT, D.ATTACK),
    ),
    # Full backs
    RoleDefinition(
        R.FULL_BACK, (Position.LB, Position.RB),
        (("tackling", 1.4), ("stamina", 1.3), ("marking", 1.3),
         ("pace", 1.2), ("teamwork", 1.2)),
        (("crossing", 1.1), ("positioning", 1.0), ("anticipation", 1.0)),
        (T.STAYS_BACK, T.MARKS_PLAYER_TIGHTLY), (T.DRIFTS_WIDE, T.ARRIVES_LATE_IN_BOX),
        (D.DEFEND, D.SUPPORT),
    ),
    RoleDefinition(
        R.WING_BACK, (Position.LB, Position.RB),
        (("crossing", 1.5), ("pace", 1.4), ("stamina", 1.4),
         ("dribbling", 1.2), ("work_rate", 1.2)),
        (("agility", 1.1), ("teamwork", 1.0), ("tackling", 1.0)),
        (T.RUNS_WITH_BALL, T.DRIFTS_WIDE), (T.STAYS_BACK,),
        (D.SUPPORT, D.ATTACK),
    ),
    RoleDefinition(
        R.INVERTED_FULL_BACK, (Position.LB, Position.RB),
        (("passing", 1.4), ("composure", 1.3), ("vision", 1.3),
         ("first_touch", 1.2), ("teamwork", 1.2)),
        (("tackling", 1.1), ("anticipation", 1.0), ("decision_making", 1.0)),
        (T.PLAYS_SHORT_PASSES, T.DICTATES_TEMPO), (T.DRIFTS_WIDE, T.RUNS_WITH_BALL),
        (D.DEFEND, D.SUPPORT),
    ),
    # Defensive midfield
    RoleDefinition(
        R.ANCHOR_MAN, (Position.CDM,),
        (("tackling", 1.5), ("marking", 1.4), ("positioning", 1.4),
         ("strength", 1.3), ("teamwork", 1.2)),
        (("anticipation", 1.1), ("composure", 1.0), ("heading", 1.0)),
        (T.STAYS_BACK, T.MARKS_PLAYER_TIGHTLY),
        (T.ARRIVES_LATE_IN_BOX, T.SHOOTS_FROM_DISTANCE),
        (D.DEFEND,),
    ),
    RoleDefinition(
        R.HALF_BACK, (Position.CDM,),
        (("positioning", 1.4), ("anticipation", 1.4), ("tackling", 1.3),
         ("teamwork", 1.3), ("marking", 1.2)),
        (("passing", 1.1), ("composure", 1.0), ("decision_making", 1.0)),
        (T.DROPS_DEEP, T.STAYS_BACK), (T.ARRIVES_LATE_IN_BOX,),
        (D.DEFEND,),
    ),
    RoleDefinition(
        R.DEEP_LYING_PLAYMAKER, (Position.CDM, Position.CM),
        (("passing", 1.5), ("vision", 1.5), ("composure", 1.3),
         ("first_touch", 1.2), ("positioning", 1.2)),
        (("decision_making", 1.1), ("teamwork", 1.1), ("anticipation", 1.0)),
        (T.DICTATES_TEMPO, T.PLAYS_SHORT_PASSES, T.TRIES_KILLER_BALLS),
        (T.SHOOTS_FROM_DISTANCE, T.DIVES_STRAIGHT_IN),
        (D.DEFEND, D.SUPPORT),
    ),
    # Central midfield
    RoleDefinition(
        R.BOX_TO_BOX, (Position.CM,),
        (("stamina", 1.5), ("work_rate", 1.4), ("tackling", 1.3),
         ("passing", 1.2), ("shooting", 1.2)),
        (("teamwork", 1.1), ("strength", 1.0), ("anticipation", 1.0)),
        (T.ARRIVES_LATE_IN_BOX, T.RUNS_WITH_BALL), (T.STAYS_BACK, T.DROPS_DEEP),
        (D.SUPPORT, D.ATTACK),
    ),
    RoleDefinition(
        R.MEZZALA, (Position.CM,),
        (("dribbling", 1.4), ("passing", 1.3), ("pace", 1.3),
         ("agility", 1.2), ("shooting", 1.2)),
        (("balance", 1.1), ("vision", 1.1), ("composure", 1.0)),
        (T.RUNS_WITH_BALL, T.MOVES_INTO_CHANNELS), (T.STAYS_BACK,),
        (D.SUPPORT, D.ATTACK),
    ),
    RoleDefinition(
        R.ADVANCED_PLAYMAKER, (Position.CM, Position.CAM),
        (("passing", 1.5), ("vision", 1.5), ("first_touch", 1.3),
         ("composure", 1.3), ("decision_making", 1.2)),
        (("dribbling", 1.1), ("balance", 1.0), ("anticipation", 1.0)),
        (T.TRIES_KILLER_BALLS, T.DICTATES_TEMPO, T.PLAYS_SHORT_PASSES),
        (T.SHOOTS_FROM_DISTANCE,),
        (D.SUPPORT, D.ATTACK),
    ),
    RoleDefinition(
        R.CARRILERO, (Position.CM,),
        (("stamina", 1.4), ("teamwork", 1.4), ("work_rate", 1.3),
         ("positioning", 1.3), ("tackling", 1.2)),
        (("passing", 1.1), ("anticipation", 1.1), ("marking", 1.0)),
        (T.STAYS_BACK, T.PLAYS_SHORT_PASSES),
        (T.ARRIVES_LATE_IN_BOX, T.SHOOTS_FROM_DISTANCE),
        (D.SUPPORT,),
    ),
    # Attacking midfield
    RoleDefinition(
        R.ENGANCHE, (Position.CAM,),
        (("vision", 1.5), ("passing", 1.5), ("first_touch", 1.4),
         ("composure", 1.3), ("dribbling", 1.2)),
        (("balance", 1.1), ("decision_making", 1.0)),
        (T.DICTATES_TEMPO, T.TRIES_KILLER_BALLS), (T.STAYS_BACK, T.DIVES_STRAIGHT_IN),
        (D.SUPPORT,),
    ),
    RoleDefinition(
        R.SHADOW_STRIKER, (Position.CAM,),
        (("off_the_ball", 1.5), ("finishing", 1.4), ("anticipation", 1.3),
         ("composure", 1.3), ("pace", 1.2)),
        (("dribbling", 1.1), ("decision_making", 1.0)),
        (T.MOVES_INTO_CHANNELS, T.ARRIVES_LATE_IN_BOX), (T.STAYS_BACK, T.DROPS_DEEP),
        (D.ATTACK,),
    ),
    RoleDefinition(
        R.TREQUARTISTA, (Position.CAM,),
        (("dribbling", 1.5), ("first_touch", 1.4), ("vision", 1.4),
         ("composure", 1.3), ("balance", 1.2)),
        (("passing", 1.1), ("shooting", 1.1), ("agility", 1.0)),
        (T.TRIES_TRICKS, T.TRIES_KILLER_BALLS, T.DRIFTS_WIDE),
        (T.STAYS_BACK, T.MARKS_PLAYER_TIGHTLY),
        (D.SUPPORT, D.ATTACK),
    ),
    # Wide forwards
    RoleDefinition(
        R.WINGER, (Position.LW, Position.RW),
        (("pace", 1.5), ("crossing", 1.5), ("dribbling", 1.4),
         ("agility", 1.2), ("stamina", 1.2)),
        (("first_touch", 1.1), ("balance", 1.0)),
        (T.RUNS_WITH_BALL, T.DRIFTS_WIDE), (T.CUTS_INSIDE, T.STAYS_BACK),
        (D.SUPPORT, D.ATTACK),
    ),
    RoleDefinition(
        R.INVERTED_WINGER, (Position.LW, Position.RW),
        (("dribbling", 1.5), ("shooting", 1.4), ("agility", 1.3),
         ("pace", 1.3), ("finishing", 1.2)),
        (("balance", 1.1), ("composure", 1.0)),
        (T.CUTS_INSIDE, T.SHOOTS_FROM_DISTANCE), (T.STAYS_BACK,),
        (D.SUPPORT, D.ATTACK),
    ),
    RoleDefinition(
        R.INSIDE_FORWARD, (Position.LW, Position.RW),
        (("finishing", 1.5), ("pace", 1.4), ("off_the_ball", 1.3),
         ("dribbling", 1.3), ("composure", 1.2)),
        (("anticipation", 1.1), ("first_touch", 1.0)),
        (T.CUTS_INSIDE, T.MOVES_INTO_CHANNELS), (T.STAYS_BACK, T.DRIFTS_WIDE),
        (D.SUPPORT, D.ATTACK),
    ),
    # Strikers
    RoleDefinition(
        R.POACHER, (Position.ST,),
        (("finishing", 1.5), ("off_the_ball", 1.5), ("composure", 1.3),
         ("anticipation", 1.3), ("pace", 1.2)),
        (("first_touch", 1.1), ("heading", 1.0)),
        (T.PLACES_SHOTS, T.MOVES_INTO_CHANNELS), (T.DROPS_DEEP, T.STAYS_BACK),
        (D.ATTACK,),
    ),
    RoleDefinition(
        R.TARGET_MAN, (Position.ST,),
        (("heading", 1.5), ("jumping", 1.4), ("strength", 1.4),
         ("first_touch", 1.2), ("balance", 1.2)),
        (("finishing", 1.1), ("composure", 1.0), ("teamwork", 1.0)),
        (T.HOLDS_UP_BALL, T.BRINGS_OTHERS_INTO_PLAY, T.PLAYS_WITH_BACK_TO_GOAL),
        (T.TRIES_TRICKS,),
        (D.SUPPORT, D.ATTACK),
    ),
    RoleDefinition(
        R.ADVANCED_FORWARD, (Position.ST,),
        (("finishing", 1.4), ("dribbling", 1.3), ("first_touch", 1.3),
         ("pace", 1.3), ("composure", 1.2)),
        (("off_the_ball", 1.1), ("strength", 1.0), ("balance", 1.0)),
        (T.RUNS_WITH_BALL, T.MOVES_INTO_CHANNELS), (T.STAYS_BACK, T.DROPS_DEEP),
        (D.SUPPORT, D.ATTACK),
    ),
    RoleDefinition(
        R.PRESSING_FORWARD, (Position.ST,),
        (("work_rate", 1.5), ("pressing", 1.4), ("stamina", 1.3),
         ("pace", 1.3), ("teamwork", 1.2)),
        (("finishing", 1.1), ("anticipation", 1.1), ("strength", 1.0)),
        (T.RUNS_WITH_BALL, T.DIVES_STRAIGHT_IN), (T.DROPS_DEEP, T.STAYS_BACK),
        (D.SUPPORT, D.ATTACK),
    ),
)

_ROLES_BY_NAME = {definition.role: definition for definition in ROLE_DEFINITIONS}


def get_role_definition(role: PlayerRole) -> RoleDefinition:
    return _ROLES_BY_NAME[role]


def roles_for_position(position: Position) -> list[RoleDefinition]:
    return [d for d in ROLE_DEFINITIONS if position in d.positions]


def _weighted_average(player: Player, weighted: tuple[tuple[str, float], ...]) -> float:
    total_weight = sum(weight for _, weight in weighted)
    if total_weight <= 0:
        return 10.0
    return sum(player.attribute(attr) * weight for attr, weight in weighted) / total_weight


def calculate_role_suitability(
    player: Player,
    role: PlayerRole,
    duty: RoleDuty | None = None,
) -> int:
    """How well a player performs a role, 0-100."""
    definition = get_role_definition(role)

    key_avg = _weighted_average(player, definition.key_attributes)
    secondary_avg = _weighted_average(player, definition.secondary_attributes)
    suitability = (key_avg * 0.65 + secondary_avg * 0.35) / 20 * 100

    for trait in player.traits:
        if trait in definition.preferred_traits:
            suitability += 5
        if trait in definition.conflicting_traits:
            suitability -= 5

    if duty == RoleDuty.ATTACK:
        suitability += 3
    elif duty == RoleDuty.DEFEND:
        suitability -= 3

    return round_half_up(clamp(suitability, 0, 100))


def get_compatible_roles(
    player: Player,
    position: Position | None = None,
) -> list[tuple[PlayerRole, int]]:
    """Roles available at a position, best suited first."""
    position = position or player.position
    scored = [
        (definition.role, calculate_role_suitability(player, definition.role))
        for definition in roles_for_position(position)
    ]
    # Stable sort keeps catalogue order between equal scores
    return sorted(scored, key=lambda item: item[1], reverse=True)


def get_best_role(
    player: Player,
    position: Position | None = None,
) -> tuple[PlayerRole, int]:
    """Best role for the player at a position (their own by default)."""
    compatible = get_compatible_roles(player, position)
    if not compatible:
        return PlayerRole.BOX_TO_BOX, 0
    return compatible[0]

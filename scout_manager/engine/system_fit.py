"""System fit evaluation for first-team recruitment.

Scores how well a player fits a club's system on four dimensions:
- Position fit: does the manager's formation use the player's position?
- Role fit: how well does the player perform the role the club wants?
- Tactical fit: do the player's attributes and habits suit the club's identity?
- Age fit: is the player inside the club's preferred age window?

Evaluation is deterministic; no randomness is involved.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from scout_manager.core.models import (
    PlayerRole,
    Position,
    ScoutingPhilosophy,
    SystemFitResult,
)
from scout_manager.core.models.player import WIDE_POSITIONS
from scout_manager.engine.random_utils import clamp, round_half_up
from scout_manager.engine.roles import (
    calculate_role_suitability,
    get_best_role,
    get_role_definition,
)
from scout_manager.engine.tactics import (
    IDENTITY_ATTRIBUTES,
    IDENTITY_TRAITS,
    club_tactical_style,
)

if TYPE_CHECKING:
    from scout_manager.core.models import Club, ManagerProfile, Player, TacticalStyle


# Preferred age windows per philosophy, shared with the directive generator
PHILOSOPHY_AGE_RANGES = {
    ScoutingPhilosophy.WIN_NOW: (24, 31),
    ScoutingPhilosophy.ACADEMY_FIRST: (17, 23),
    ScoutingPhilosophy.MARKET_SMART: (21, 27),
    ScoutingPhilosophy.GLOBAL_RECRUITER: (19, 29),
}

# Positions a player could reasonably adapt to
ADJACENT_POSITIONS = {
    Position.GK: (),
    Position.CB: (Position.CDM, Position.LB, Position.RB),
    Position.LB: (Position.CB, Position.LW, Position.CDM),
    Position.RB: (Position.CB, Position.RW, Position.CDM),
    Position.CDM: (Position.CB, Position.CM),
    Position.CM: (Position.CDM, Position.CAM),
    Position.CAM: (Position.CM, Position.ST, Position.LW, Position.RW),
    Position.LW: (Position.LB, Position.CAM, Position.ST),
    Position.RW: (Position.RB, Position.CAM, Position.ST),
    Position.ST: (Position.CAM, Position.LW, Position.RW),
}


@dataclass(frozen=True)
class Formation:
    defenders: int
    midfielders: int
    forwards: int


def parse_formation(formation: str) -> Formation | None:
    """Parse "4-3-3" style notation, None when it cannot be read."""
    parts = formation.split("-")
    if len(parts) < 3:
        return None
    try:
        counts = [int(part) for part in parts]
    except ValueError:
        return None
    return Formation(counts[0], counts[1], counts[2])


def formation_positions(formation: Formation) -> set[Position]:
    """Positions a formation deploys."""
    positions = {Position.GK, Position.CB}
    if formation.defenders >= 4:
        positions.update((Position.LB, Position.RB))
    if formation.midfielders >= 2:
        positions.add(Position.CM)
    if formation.midfielders >= 3:
        positions.add(Position.CDM)
    if formation.midfielders >= 4:
        positions.add(Position.CAM)
    if formation.forwards >= 1:
        positions.add(Position.ST)
    if formation.forwards >= 3:
        positions.update((Position.LW, Position.RW))
    return positions


def age_fit(age: int, age_range: tuple[int, int], decay_per_year: float = 5) -> float:
    """Full credit inside the window, decaying per year outside it."""
    low, high = age_range
    if low <= age <= high:
        return 100
    overshoot = low - age if age < low else age - high
    return max(0, 100 - overshoot * decay_per_year)


class SystemFitEvaluator:
    """Scores a player against a club's system."""

    POSITION_WEIGHT = 0.25
    ROLE_WEIGHT = 0.30
    TACTICAL_WEIGHT = 0.25
    AGE_WEIGHT = 0.20

    PRIMARY_FIT = 100
    SECONDARY_FIT = 70
    ADJACENT_FIT = 40
    NO_FIT = 10
    UNKNOWN_FORMATION_FIT = 50

    # A tactical dial this high makes the matching attribute a requirement
    DEMANDING_DIAL = 15
    LOW_ATTRIBUTE = 11
    TRAIT_MODIFIER = 5

    def evaluate(
        self,
        player: Player,
        club: Club,
        manager: ManagerProfile,
        preferred_role: PlayerRole | None = None,
    ) -> SystemFitResult:
        suggested_role, best_suitability = get_best_role(player)
        style = club_tactical_style(club)

        position_fit = round_half_up(self.score_position_fit(player, manager.preferred_formation))
        role_fit = round_half_up(self.score_role_fit(player, preferred_role, best_suitability))
        tactical_fit = round_half_up(self.score_tactical_fit(player, style))
        age = round_half_up(age_fit(player.age, PHILOSOPHY_AGE_RANGES[club.scouting_philosophy]))

        overall = round_half_up(
            position_fit * self.POSITION_WEIGHT
            + role_fit * self.ROLE_WEIGHT
            + tactical_fit * self.TACTICAL_WEIGHT
            + age * self.AGE_WEIGHT
        )

        return SystemFitResult(
            player_id=player.id,
            club_id=club.id,
            overall_fit=int(clamp(overall, 0, 100)),
            position_fit=position_fit,
            role_fit=role_fit,
            tactical_fit=tactical_fit,
            age_fit=age,
            suggested_role=suggested_role,
            strengths=tuple(self._strengths(player, club, position_fit, role_fit, tactical_fit, age)),
            weaknesses=tuple(self._weaknesses(player, club, position_fit, role_fit, tactical_fit, age)),
        )

    def score_position_fit(self, player: Player, formation_text: str) -> float:
        formation = parse_formation(formation_text)
        if formation is None:
            return self.UNKNOWN_FORMATION_FIT

        deployed = formation_positions(formation)
        if player.position in deployed:
            return self.PRIMARY_FIT
        if any(pos in deployed for pos in player.secondary_positions):
            return self.SECONDARY_FIT
        if any(pos in deployed for pos in ADJACENT_POSITIONS[player.position]):
            return self.ADJACENT_FIT
        return self.NO_FIT

    def score_role_fit(
        self,
        player: Player,
        preferred_role: PlayerRole | None,
        best_suitability: int,
    ) -> float:
        if preferred_role is None:
            return best_suitability
        definition = get_role_definition(preferred_role)
        if not any(player.plays(pos) for pos in definition.positions):
            return best_suitability
        return calculate_role_suitability(player, preferred_role)

    def score_tactical_fit(self, player: Player, style: TacticalStyle) -> float:
        attributes = IDENTITY_ATTRIBUTES[style.identity]
        average = sum(player.attribute(attr) for attr in attributes) / len(attributes)
        score = average / 20 * 100

        # Dimensional demands of the style
        if style.pressing_intensity >= self.DEMANDING_DIAL:
            if player.attribute("stamina") < self.LOW_ATTRIBUTE:
                score -= 8
            if player.attribute("pressing") < self.LOW_ATTRIBUTE:
                score -= 8
        if style.defensive_line >= self.DEMANDING_DIAL and player.attribute("pace") < self.LOW_ATTRIBUTE:
            score -= 8
        if style.tempo >= self.DEMANDING_DIAL and player.attribute("decision_making") < self.LOW_ATTRIBUTE:
            score -= 5
        if (
            style.width >= self.DEMANDING_DIAL
            and player.position in WIDE_POSITIONS
            and player.attribute("crossing") < self.LOW_ATTRIBUTE
        ):
            score -= 5

        liked, disliked = IDENTITY_TRAITS[style.identity]
        for trait in player.traits:
            if trait in liked:
                score += self.TRAIT_MODIFIER
            if trait in disliked:
                score -= self.TRAIT_MODIFIER

        return clamp(score, 0, 100)

    def _strengths(self, player, club, position_fit, role_fit, tactical_fit, age) -> list[str]:
        strengths = []
        if position_fit >= self.PRIMARY_FIT:
            strengths.append("Natural fit for a starting slot in the manager's formation.")
        elif position_fit >= self.SECONDARY_FIT:
            strengths.append("Can cover a formation slot from a secondary position.")

        if role_fit >= 75:
            strengths.append("Well suited to the role the club wants filled.")

        identity = club_tactical_style(club).identity.value.replace("_", " ")
        if tactical_fit >= 75:
            strengths.append(f"Excellent match for the club's {identity} approach.")
        elif tactical_fit >= 55:
            strengths.append(f"Solid fit for the club's {identity} approach.")

        if age >= 90:
            strengths.append("Right in the club's preferred age window.")
        elif age >= 70:
            strengths.append("Close to the club's preferred age profile.")

        if player.attribute("professionalism") >= 16:
            strengths.append("Highly professional; should settle quickly.")
        if (
            club.scouting_philosophy == ScoutingPhilosophy.WIN_NOW
            and player.attribute("big_game_temperament") >= 15
        ):
            strengths.append("Thrives under pressure in the big games this club plays.")
        return strengths

    def _weaknesses(self, player, club, position_fit, role_fit, tactical_fit, age) -> list[str]:
        weaknesses = []
        if position_fit <= self.NO_FIT:
            weaknesses.append("No natural slot in the manager's formation.")
        elif position_fit <= self.ADJACENT_FIT:
            weaknesses.append("Would need to adapt to a neighbouring position.")

        if role_fit < 50:
            weaknesses.append("Profile does not suit the role the club wants filled.")

        if tactical_fit < 40:
            weaknesses.append("Playing style clashes with the club's tactical identity.")
        elif tactical_fit < 55:
            weaknesses.append("Only a partial fit for the club's tactical identity.")

        if age < 50:
            weaknesses.append("Well outside the club's preferred age range.")
        elif age < 70:
            weaknesses.append("Slightly outside the club's preferred age range.")

        if player.attribute("injury_proneness") >= 15:
            weaknesses.append("Injury history concerns: high injury proneness.")
        if (
            club.scouting_philosophy == ScoutingPhilosophy.WIN_NOW
            and player.attribute("consistency") <= 8
        ):
            weaknesses.append("Inconsistent performer; a risk for a club chasing immediate results.")
        return weaknesses

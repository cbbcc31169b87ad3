"""Club reaction to scouting reports and trial matches.

A report is first screened (no directive, over budget, tactical misfit);
if it survives, the club's answer is a weighted draw shaped by the scout's
persuasion, the conviction behind the report and its quality.
"""

import logging
import random
from typing import Optional

from scout_manager.core.context import squad_average_ability
from scout_manager.core.models import (
    Club,
    ClubResponse,
    ClubResponseType,
    ConvictionLevel,
    Directive,
    ManagerPreference,
    ManagerProfile,
    Player,
    Position,
    Scout,
    ScoutReport,
)
from scout_manager.engine.random_utils import clamp, weighted_choice
from scout_manager.engine.system_fit import parse_formation

logger = logging.getLogger(__name__)

DEFENDERS = frozenset({Position.CB, Position.LB, Position.RB})
MIDFIELDERS = frozenset({Position.CDM, Position.CM, Position.CAM})
WIDE_FORWARDS = frozenset({Position.LW, Position.RW})


def formation_fits_player(formation_text: str, position: Position) -> bool:
    """Whether a formation has room for the position at all.

    Unreadable formations never rule a player out.
    """
    formation = parse_formation(formation_text)
    if formation is None:
        return True
    if position == Position.GK:
        return True
    if position in DEFENDERS:
        return formation.defenders >= 3
    if position == Position.CAM:
        return formation.midfielders > 2
    if position in MIDFIELDERS:
        return formation.midfielders >= 2
    if position in WIDE_FORWARDS:
        return formation.forwards >= 3
    return formation.forwards >= 1


class ClubResponseEngine:
    """Decides how a club answers a report."""

    REPUTATION_DELTAS = {
        ClubResponseType.IGNORED: -2,
        ClubResponseType.INTERESTED: 3,
        ClubResponseType.TRIAL: 5,
        ClubResponseType.DOES_NOT_FIT: 0,
        ClubResponseType.TOO_EXPENSIVE: 1,
        ClubResponseType.SIGNED: 10,
        ClubResponseType.LOAN_SIGNED: 7,
    }

    BASE_WEIGHTS = {
        ClubResponseType.INTERESTED: 60,
        ClubResponseType.TRIAL: 25,
        ClubResponseType.SIGNED: 10,
        ClubResponseType.DOES_NOT_FIT: 5,
    }

    # (signed bonus, trial bonus)
    CONVICTION_BONUSES = {
        ConvictionLevel.NOTE: (0, 0),
        ConvictionLevel.RECOMMEND: (5, 4),
        ConvictionLevel.STRONG_RECOMMEND: (10, 8),
        ConvictionLevel.TABLE_POUND: (20, 15),
    }

    BUDGET_CEILING = 1.5
    PERSUASION_BASELINE = 10
    PERSUASION_FACTOR = 2
    HIGH_QUALITY = 70
    HIGH_QUALITY_BONUS = 10
    DATA_FIRST_MIN_QUALITY = 40

    def respond(
        self,
        rng: random.Random,
        report: ScoutReport,
        player: Player,
        club: Club,
        manager: ManagerProfile,
        directive: Optional[Directive],
        scout: Scout,
        week: int,
        season: int,
    ) -> ClubResponse:
        """Produce the club's response to a report."""
        if directive is None:
            response = ClubResponseType.IGNORED
        elif player.market_value > directive.budget_allocation * self.BUDGET_CEILING:
            response = ClubResponseType.TOO_EXPENSIVE
        elif self._does_not_fit(report, player, manager):
            response = ClubResponseType.DOES_NOT_FIT
        else:
            response = self._draw_response(rng, report, scout)

        logger.debug("Club %s responded %s to report %s", club.short_name, response.value, report.id)
        return ClubResponse(
            report_id=report.id,
            directive_id=directive.id if directive else None,
            response=response,
            feedback=self.build_feedback(response, player, club, directive),
            reputation_delta=self.REPUTATION_DELTAS[response],
            week=week,
            season=season,
        )

    def _does_not_fit(self, report: ScoutReport, player: Player, manager: ManagerProfile) -> bool:
        if not formation_fits_player(manager.preferred_formation, player.position):
            return True
        return (
            manager.preference == ManagerPreference.DATA_FIRST
            and report.quality_score < self.DATA_FIRST_MIN_QUALITY
        )

    def response_weights(self, report: ScoutReport, scout: Scout) -> dict[ClubResponseType, float]:
        weights = dict(self.BASE_WEIGHTS)

        persuasion_bonus = max(0, scout.persuasion - self.PERSUASION_BASELINE) * self.PERSUASION_FACTOR
        signed_bonus, trial_bonus = self.CONVICTION_BONUSES[report.conviction]

        weights[ClubResponseType.SIGNED] += persuasion_bonus + signed_bonus
        weights[ClubResponseType.TRIAL] += persuasion_bonus + trial_bonus
        if report.quality_score > self.HIGH_QUALITY:
            weights[ClubResponseType.SIGNED] += self.HIGH_QUALITY_BONUS

        return {response: clamp(weight, 0, 100) for response, weight in weights.items()}

    def _draw_response(self, rng: random.Random, report: ScoutReport, scout: Scout) -> ClubResponseType:
        weights = self.response_weights(report, scout)
        return weighted_choice(rng, weights.items()) or ClubResponseType.INTERESTED

    def build_feedback(
        self,
        response: ClubResponseType,
        player: Player,
        club: Club,
        directive: Optional[Directive],
    ) -> str:
        name = player.full_name
        if response == ClubResponseType.SIGNED:
            return (
                f"{club.short_name} has agreed a deal to sign {name}. "
                "Excellent recommendation, the manager is delighted."
            )
        if response == ClubResponseType.LOAN_SIGNED:
            return (
                f"{club.short_name} has signed {name} on loan. "
                "The manager sees this as a good short-term solution."
            )
        if response == ClubResponseType.TRIAL:
            return (
                f"{club.short_name} want to see {name} in a trial match before "
                "making a decision. Arrange the session."
            )
        if response == ClubResponseType.INTERESTED:
            return (
                f"{club.short_name} have added {name} to the shortlist following "
                "your report. Stay close to developments."
            )
        if response == ClubResponseType.DOES_NOT_FIT:
            profile = f" ({directive.position.value} profile)" if directive else ""
            return (
                f"The manager feels {name} does not fit the current tactical "
                f"system{profile}. No further action planned."
            )
        if response == ClubResponseType.TOO_EXPENSIVE:
            return (
                f"{name}'s market value exceeds the budget allocated for this "
                "position. The club cannot proceed at this time."
            )
        return (
            f"Your report on {name} did not align with any active manager directive. "
            "It has been noted but no action will be taken."
        )


class TrialResolver:
    """Resolves how a trial match went."""

    BASE_SIGNED = 60
    BASE_INTERESTED = 25
    BASE_DOES_NOT_FIT = 15
    FORM_FACTOR = 3
    ABOVE_AVERAGE_BONUS = 5
    WEAK_RATIO = 0.8

    def resolve(
        self,
        rng: random.Random,
        player: Player,
        club: Club,
        players: list[Player],
    ) -> ClubResponseType:
        squad_avg = squad_average_ability([p for p in players if p.club_id == club.id])

        signed = self.BASE_SIGNED
        interested = self.BASE_INTERESTED
        does_not_fit = self.BASE_DOES_NOT_FIT

        form_effect = player.form * self.FORM_FACTOR
        signed += form_effect
        does_not_fit -= form_effect

        if player.current_ability > squad_avg:
            signed += self.ABOVE_AVERAGE_BONUS
        elif player.current_ability < squad_avg * self.WEAK_RATIO:
            does_not_fit += 10
            signed -= 5

        outcome = weighted_choice(rng, [
            (ClubResponseType.SIGNED, clamp(signed, 0, 100)),
            (ClubResponseType.INTERESTED, clamp(interested, 0, 100)),
            (ClubResponseType.DOES_NOT_FIT, clamp(does_not_fit, 0, 100)),
        ])
        return outcome or ClubResponseType.INTERESTED

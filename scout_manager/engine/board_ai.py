"""Board satisfaction state machine.

Once the scout runs a recruitment department (career tier 5) the board
watches the weekly output. Satisfaction and patience rise with reports and
successful signings and fall with idle weeks, flops and unfulfilled
directives. Crossing a personality's thresholds produces one reaction per
week:

- praise or a budget increase when things go well
- a warning, an ultimatum or budget cuts when they do not
- demotion or termination when patience runs out
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, replace
from typing import Optional

from scout_manager.core.context import GameContext
from scout_manager.core.models import (
    BoardPersonality,
    BoardProfile,
    BoardReaction,
    BoardReactionType,
    DifficultyScaling,
    InboxMessage,
    MessageType,
    TransferOutcome,
)
from scout_manager.engine.random_utils import chance, clamp, generate_id, round_half_up, weighted_choice

logger = logging.getLogger(__name__)

BP = BoardPersonality
RT = BoardReactionType


@dataclass(frozen=True)
class PersonalityConfig:
    success_gain: float
    failure_loss: float
    missed_deadline_loss: float
    idle_week_loss: float
    patience_loss: float
    praise_threshold: float
    warning_threshold: float
    critical_threshold: float
    firing_threshold: float
    budget_increase: float
    budget_cut: float
    success_patience_recovery: float


@dataclass(frozen=True)
class BoardWeeklyResult:
    profile: BoardProfile
    reactions: tuple[BoardReaction, ...] = ()
    messages: tuple[InboxMessage, ...] = ()


@dataclass(frozen=True)
class BoardMeetingResult:
    profile: BoardProfile
    message: InboxMessage


def _round_one_decimal(value: float) -> float:
    return round_half_up(value * 10) / 10


class BoardAI:
    """Evaluates the board's mood and decides how it reacts."""

    PERSONALITY_CONFIGS = {
        BP.PATIENT: PersonalityConfig(5, 6, 10, 0.5, 3, 80, 35, 20, 8, 0.15, 0.10, 5),
        BP.IMPATIENT: PersonalityConfig(4, 10, 18, 2, 8, 85, 55, 35, 18, 0.10, 0.15, 3),
        BP.PENNY_PINCHING: PersonalityConfig(5, 8, 15, 1, 5, 80, 50, 30, 12, 0.08, 0.25, 4),
        BP.AMBITIOUS: PersonalityConfig(6, 9, 16, 1.5, 6, 82, 50, 28, 14, 0.20, 0.15, 4),
        BP.HANDS_OFF: PersonalityConfig(4, 5, 8, 0, 2, 85, 30, 15, 5, 0.10, 0.08, 3),
    }

    DEFAULT_SATISFACTION = 60
    DEFAULT_PATIENCE = 70
    MAX_REPORT_CREDIT = 3
    SUCCESS_BONUS = 2
    FIRING_PATIENCE = 10
    DEMOTION_CHANCE = 0.6
    ULTIMATUM_WEEKS = 8
    ULTIMATUM_MARGIN = 15
    WARNING_INTERVAL = 4
    PRAISE_INTERVAL = 6
    MIN_BUDGET_MULTIPLIER = 0.5
    MAX_BUDGET_MULTIPLIER = 2.0

    REACTION_TITLES = {
        RT.PRAISE: "Board Commendation",
        RT.WARNING: "Board Warning",
        RT.BUDGET_INCREASE: "Budget Increase Approved",
        RT.BUDGET_CUT: "Budget Reduction Notice",
        RT.ULTIMATUM: "Board Ultimatum Issued",
        RT.DEMOTION: "Demotion Notice",
        RT.FIRING: "Contract Terminated",
    }

    def __init__(self, season_length_weeks: int = 38, deadline_check_week: int = 36, board_tier: int = 5):
        self.season_length_weeks = season_length_weeks
        self.deadline_check_week = deadline_check_week
        self.board_tier = board_tier

    def generate_profile(self, rng: random.Random) -> BoardProfile:
        """A fresh board with a random temperament."""
        personality = weighted_choice(rng, [(p, 1) for p in BoardPersonality])
        return BoardProfile(
            personality=personality,
            satisfaction=self.DEFAULT_SATISFACTION,
            patience=self.DEFAULT_PATIENCE,
            budget_multiplier=1.0,
        )

    def _clamp_budget(self, multiplier: float) -> float:
        return clamp(multiplier, self.MIN_BUDGET_MULTIPLIER, self.MAX_BUDGET_MULTIPLIER)

    # ------------------------------------------------------------------
    # Satisfaction
    # ------------------------------------------------------------------

    def evaluate_satisfaction(self, rng: random.Random, context: GameContext) -> BoardProfile:
        """Apply this week's triggers to the board profile."""
        profile = context.board_profile
        if profile is None:
            return self.generate_profile(rng)

        config = self.PERSONALITY_CONFIGS[profile.personality]
        week, season = context.current_week, context.current_season
        satisfaction_delta = 0.0
        patience_delta = 0.0

        reports = context.reports_this_week()
        if reports:
            satisfaction_delta += config.success_gain * min(len(reports), self.MAX_REPORT_CREDIT)
            patience_delta += config.success_patience_recovery

        settled_this_season = [r for r in context.transfer_records if r.outcome_season == season]
        if any(r.outcome in (TransferOutcome.HIT, TransferOutcome.DECENT) for r in settled_this_season):
            satisfaction_delta += self.SUCCESS_BONUS

        if week == self.deadline_check_week:
            missed = [d for d in context.directives if d.season == season and not d.fulfilled]
            if missed:
                satisfaction_delta -= config.missed_deadline_loss * len(missed)
                patience_delta -= config.patience_loss * len(missed)

        flops = [r for r in settled_this_season if r.outcome == TransferOutcome.FLOP]
        if flops:
            satisfaction_delta -= config.failure_loss * len(flops)
            patience_delta -= config.patience_loss

        if not reports and not context.observations_this_week():
            satisfaction_delta -= config.idle_week_loss

        if (
            profile.ultimatum_issued
            and profile.ultimatum_deadline is not None
            and week >= profile.ultimatum_deadline
            and profile.satisfaction < config.critical_threshold + self.ULTIMATUM_MARGIN
        ):
            satisfaction_delta -= 10
            patience_delta -= 15

        satisfaction_delta += rng.uniform(-1, 1)

        return replace(
            profile,
            satisfaction=_round_one_decimal(clamp(profile.satisfaction + satisfaction_delta, 0, 100)),
            patience=_round_one_decimal(clamp(profile.patience + patience_delta, 0, 100)),
        )

    # ------------------------------------------------------------------
    # Reactions
    # ------------------------------------------------------------------

    def generate_reaction(
        self,
        rng: random.Random,
        profile: BoardProfile,
        context: GameContext,
    ) -> Optional[tuple[BoardReaction, BoardProfile, InboxMessage]]:
        """At most one reaction for the week, or None in the neutral zone."""
        config = self.PERSONALITY_CONFIGS[profile.personality]
        week = context.current_week
        satisfaction = profile.satisfaction
        reaction_type = None
        trigger = ""
        text = ""
        updated = profile

        if satisfaction < config.firing_threshold and profile.patience < self.FIRING_PATIENCE:
            if context.scout.career_tier > 1 and chance(rng, self.DEMOTION_CHANCE):
                reaction_type = RT.DEMOTION
                trigger = "Extreme dissatisfaction with scouting department performance"
                text = (
                    "The board has lost confidence in your leadership of the scouting department. "
                    "You have been demoted. Prove yourself worthy of this position again."
                )
            else:
                reaction_type = RT.FIRING
                trigger = "Board patience exhausted"
                text = (
                    "The board has decided to terminate your contract effective immediately. "
                    "Your track record has fallen below the minimum acceptable standard."
                )
        elif satisfaction < config.critical_threshold:
            if not profile.ultimatum_issued:
                deadline = min(week + self.ULTIMATUM_WEEKS, self.season_length_weeks)
                reaction_type = RT.ULTIMATUM
                trigger = "Board satisfaction critically low"
                text = (
                    f"The board has issued a formal ultimatum. You have until week {deadline} "
                    "to demonstrate significant improvement or face serious consequences. "
                    "Budget allocations have been reduced."
                )
                updated = replace(
                    profile,
                    ultimatum_issued=True,
                    ultimatum_deadline=deadline,
                    budget_multiplier=self._clamp_budget(profile.budget_multiplier - config.budget_cut),
                )
            else:
                reaction_type = RT.BUDGET_CUT
                trigger = "Continued underperformance during ultimatum period"
                text = (
                    "The board has further reduced your operating budget due to continued "
                    "underperformance. Immediate improvement is required."
                )
                updated = replace(
                    profile,
                    budget_multiplier=self._clamp_budget(profile.budget_multiplier - config.budget_cut * 0.5),
                )
        elif satisfaction < config.warning_threshold:
            if week % self.WARNING_INTERVAL == 0:
                reaction_type = RT.WARNING
                trigger = "Board satisfaction below expectations"
                text = (
                    "The board has expressed concern about the scouting department's recent output. "
                    "They expect to see better results in the coming weeks."
                )
        elif satisfaction > config.praise_threshold:
            if week % self.PRAISE_INTERVAL == 0:
                if chance(rng, 0.5):
                    reaction_type = RT.BUDGET_INCREASE
                    trigger = "Excellent scouting department performance"
                    text = (
                        "The board is impressed with the scouting department's work. "
                        "They have approved an increase to your operating budget."
                    )
                    updated = replace(
                        profile,
                        budget_multiplier=self._clamp_budget(profile.budget_multiplier + config.budget_increase),
                        ultimatum_issued=False,
                        ultimatum_deadline=None,
                    )
                else:
                    reaction_type = RT.PRAISE
                    trigger = "Board satisfaction high"
                    text = (
                        "The board commends your outstanding work. Keep up the excellent "
                        "performance and the department will continue to thrive."
                    )
                    updated = replace(profile, ultimatum_issued=False, ultimatum_deadline=None)

        if reaction_type is None:
            return None

        logger.info("Board reaction in week %d: %s", week, reaction_type.value)
        reaction = BoardReaction(type=reaction_type, trigger=trigger, week=week, message=text)
        message = InboxMessage(
            id=generate_id("msg", rng),
            week=week,
            season=context.current_season,
            type=(
                MessageType.FEEDBACK
                if reaction_type in (RT.PRAISE, RT.BUDGET_INCREASE)
                else MessageType.WARNING
            ),
            title=self.REACTION_TITLES[reaction_type],
            body=text,
            action_required=reaction_type in (RT.ULTIMATUM, RT.FIRING, RT.DEMOTION),
        )
        return reaction, updated, message

    # ------------------------------------------------------------------
    # Feedback into directives
    # ------------------------------------------------------------------

    def adjust_directive_difficulty(self, profile: Optional[BoardProfile]) -> DifficultyScaling:
        """How demanding next season's directives should be."""
        if profile is None:
            return DifficultyScaling()
        config = self.PERSONALITY_CONFIGS[profile.personality]
        satisfaction = profile.satisfaction

        if satisfaction > config.praise_threshold:
            multiplier = 0.85
        elif satisfaction > config.warning_threshold:
            multiplier = 1.0
        elif satisfaction > config.critical_threshold:
            multiplier = 1.15
        else:
            multiplier = 1.3

        if profile.personality == BP.AMBITIOUS:
            multiplier += min(len(profile.directive_seasons) * 0.05, 0.2)
        multiplier = clamp(multiplier, 0.8, 1.5)

        budget = profile.budget_multiplier
        if profile.personality == BP.PENNY_PINCHING:
            budget -= 0.15

        if satisfaction > config.praise_threshold:
            age_delta = 1
        elif satisfaction > 60:
            age_delta = 0
        else:
            age_delta = -1

        return DifficultyScaling(
            ability_stars_multiplier=multiplier,
            budget_scale=self._clamp_budget(budget),
            age_year_delta=age_delta,
        )

    def record_directive_season(self, profile: BoardProfile, season: int) -> BoardProfile:
        if season in profile.directive_seasons:
            return profile
        return replace(profile, directive_seasons=profile.directive_seasons + (season,))

    # ------------------------------------------------------------------
    # Meetings and weekly processing
    # ------------------------------------------------------------------

    def hold_board_meeting(self, rng: random.Random, context: GameContext) -> Optional[BoardMeetingResult]:
        """Face-to-face meeting with the board, only at the board tier."""
        profile = context.board_profile
        if profile is None or context.scout.career_tier < self.board_tier:
            return None

        config = self.PERSONALITY_CONFIGS[profile.personality]
        if profile.personality == BP.HANDS_OFF:
            satisfaction_boost, patience_boost = 2, 3
        elif profile.personality == BP.IMPATIENT:
            satisfaction_boost, patience_boost = 7, 10
        else:
            satisfaction_boost, patience_boost = 5, 8
        satisfaction_boost += rng.uniform(-1, 2)
        patience_boost += rng.uniform(-1, 2)

        updated = replace(
            profile,
            satisfaction=_round_one_decimal(clamp(profile.satisfaction + satisfaction_boost, 0, 100)),
            patience=_round_one_decimal(clamp(profile.patience + patience_boost, 0, 100)),
        )
        if profile.ultimatum_issued and profile.ultimatum_deadline is not None:
            updated = replace(
                updated,
                ultimatum_deadline=min(profile.ultimatum_deadline + 2, self.season_length_weeks),
            )

        if updated.satisfaction > config.praise_threshold:
            body = (
                "The board meeting went very well. The directors are pleased with your "
                "presentation and confident in the department's direction."
            )
        elif updated.satisfaction > config.warning_threshold:
            body = (
                "The board acknowledged your efforts and discussed upcoming expectations. "
                "They remain cautiously optimistic about the department's trajectory."
            )
        elif profile.personality == BP.HANDS_OFF:
            body = (
                "The board listened politely but seemed disengaged. They prefer to let "
                "results speak for themselves rather than holding frequent meetings."
            )
        else:
            body = (
                "The meeting was tense. The board made their displeasure clear but your "
                "willingness to discuss the situation in person has bought some goodwill."
            )

        return BoardMeetingResult(
            profile=updated,
            message=InboxMessage(
                id=generate_id("msg", rng),
                week=context.current_week,
                season=context.current_season,
                type=MessageType.FEEDBACK,
                title="Board Meeting Concluded",
                body=body,
            ),
        )

    def process_weekly(self, rng: random.Random, context: GameContext) -> Optional[BoardWeeklyResult]:
        """Weekly board pass: evaluate, then react. None below the board tier."""
        if context.scout.career_tier < self.board_tier:
            return None

        profile = self.evaluate_satisfaction(rng, context)
        outcome = self.generate_reaction(rng, profile, context)
        if outcome is None:
            return BoardWeeklyResult(profile=profile)

        reaction, profile, message = outcome
        return BoardWeeklyResult(profile=profile, reactions=(reaction,), messages=(message,))

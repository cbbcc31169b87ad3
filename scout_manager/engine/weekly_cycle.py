"""Weekly scouting cycle.

Runs the engines in a fixed order over an immutable ``GameContext`` and
returns the next context together with everything that happened:

1. Board evaluation and reaction
2. Directive refresh at the start of a season
3. Negotiation processing (deadlines, rival bids)
4. Season-end transfer snapshots and scout accountability
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, replace
from typing import Optional

from scout_manager.core.config import Settings, get_settings
from scout_manager.core.context import GameContext
from scout_manager.core.models import (
    BoardReaction,
    ClubResponse,
    ClubResponseType,
    ConvictionLevel,
    DirectiveMatch,
    InboxMessage,
    MessageType,
    NegotiationPhase,
    ScoutReport,
    SystemFitResult,
)
from scout_manager.engine.board_ai import BoardAI
from scout_manager.engine.club_response import ClubResponseEngine, TrialResolver
from scout_manager.engine.directives import DirectiveGenerator, ReportMatcher
from scout_manager.engine.negotiation import NegotiationEngine
from scout_manager.engine.random_utils import clamp, generate_id
from scout_manager.engine.system_fit import SystemFitEvaluator
from scout_manager.engine.transfer_tracker import TransferTracker

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReportSubmission:
    """Everything a single report triggered."""
    context: GameContext
    response: ClubResponse
    message: InboxMessage
    match: Optional[DirectiveMatch] = None
    fit: Optional[SystemFitResult] = None


@dataclass(frozen=True)
class WeeklyTickResult:
    context: GameContext
    messages: tuple[InboxMessage, ...] = ()
    reactions: tuple[BoardReaction, ...] = ()
    reputation_delta: float = 0


@dataclass(frozen=True)
class DealClosure:
    context: GameContext
    message: InboxMessage
    completed: bool


@dataclass(frozen=True)
class TrialResolution:
    context: GameContext
    response: ClubResponse
    message: InboxMessage


class ScoutingCycle:
    """Wires the engines together for one scout's career."""

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()
        self.directive_generator = DirectiveGenerator()
        self.matcher = ReportMatcher()
        self.fit_evaluator = SystemFitEvaluator()
        self.club_response = ClubResponseEngine()
        self.trial_resolver = TrialResolver()
        self.negotiation = NegotiationEngine()
        self.tracker = TransferTracker()
        self.board = BoardAI(
            season_length_weeks=self.settings.season_length_weeks,
            deadline_check_week=self.settings.deadline_check_week,
            board_tier=self.settings.board_tier,
        )

    # ------------------------------------------------------------------
    # Reports
    # ------------------------------------------------------------------

    def submit_report(
        self,
        rng: random.Random,
        context: GameContext,
        report: ScoutReport,
    ) -> Optional[ReportSubmission]:
        """File a report with the scout's club and record its response."""
        player = context.players.get(report.player_id)
        club = context.clubs.get(context.scout.club_id) if context.scout.club_id else None
        manager = context.manager_for(club.id) if club else None
        if player is None or club is None or manager is None:
            logger.warning("Report %s cannot be filed: missing player, club or manager", report.id)
            return None

        open_directives = [
            d for d in context.directives
            if d.club_id == club.id and d.season == context.current_season and not d.fulfilled
        ]
        match = self.matcher.match(report, player, open_directives)
        directive = next((d for d in open_directives if match and d.id == match.directive_id), None)

        fit = self.fit_evaluator.evaluate(
            player, club, manager, directive.preferred_role if directive else None
        )
        response = self.club_response.respond(
            rng, report, player, club, manager, directive, context.scout,
            context.current_week, context.current_season,
        )

        directives = context.directives
        if directive is not None and response.response in (
            ClubResponseType.SIGNED, ClubResponseType.LOAN_SIGNED
        ):
            directives = tuple(
                replace(d, fulfilled=True) if d.id == directive.id else d for d in directives
            )

        scout = replace(
            context.scout,
            reputation=clamp(context.scout.reputation + response.reputation_delta, 0, 100),
        )
        message = InboxMessage(
            id=generate_id("msg_response", rng),
            week=context.current_week,
            season=context.current_season,
            type=MessageType.FEEDBACK,
            title=f"Club Response: {player.full_name}",
            body=response.feedback,
            action_required=response.response == ClubResponseType.TRIAL,
            related_id=report.id,
            related_entity_type="report",
        )
        new_context = context.evolve(
            scout=scout,
            reports={**context.reports, report.id: report},
            directives=directives,
            club_responses=context.club_responses + (response,),
        )
        return ReportSubmission(
            context=new_context, response=response, message=message, match=match, fit=fit
        )

    def resolve_trial(
        self,
        rng: random.Random,
        context: GameContext,
        report_id: str,
    ) -> Optional[TrialResolution]:
        """Settle a trial the club granted on a report.

        Only the latest response for the report counts, so a trial can be
        resolved once.
        """
        trial = next((r for r in reversed(context.club_responses) if r.report_id == report_id), None)
        if trial is None or trial.response != ClubResponseType.TRIAL:
            return None
        report = context.reports.get(report_id)
        player = context.players.get(report.player_id) if report else None
        club = context.clubs.get(context.scout.club_id) if context.scout.club_id else None
        if player is None or club is None:
            logger.warning("Trial on report %s cannot be resolved: missing player or club", report_id)
            return None

        outcome = self.trial_resolver.resolve(rng, player, club, list(context.players.values()))
        directive = next((d for d in context.directives if d.id == trial.directive_id), None)
        response = ClubResponse(
            report_id=report_id,
            directive_id=trial.directive_id,
            response=outcome,
            feedback=self.club_response.build_feedback(outcome, player, club, directive),
            reputation_delta=self.club_response.REPUTATION_DELTAS[outcome],
            week=context.current_week,
            season=context.current_season,
        )
        logger.info("Trial for %s ended %s", player.full_name, outcome.value)

        directives = context.directives
        if directive is not None and outcome == ClubResponseType.SIGNED:
            directives = tuple(
                replace(d, fulfilled=True) if d.id == directive.id else d for d in directives
            )
        scout = replace(
            context.scout,
            reputation=clamp(context.scout.reputation + response.reputation_delta, 0, 100),
        )
        message = InboxMessage(
            id=generate_id("msg_trial", rng),
            week=context.current_week,
            season=context.current_season,
            type=MessageType.FEEDBACK,
            title=f"Trial Result: {player.full_name}",
            body=response.feedback,
            related_id=report_id,
            related_entity_type="report",
        )
        return TrialResolution(
            context=context.evolve(
                scout=scout,
                directives=directives,
                club_responses=context.club_responses + (response,),
            ),
            response=response,
            message=message,
        )

    # ------------------------------------------------------------------
    # Deals
    # ------------------------------------------------------------------

    def close_deal(
        self,
        rng: random.Random,
        context: GameContext,
        negotiation_id: str,
    ) -> Optional[DealClosure]:
        """Settle personal terms and complete an agreed negotiation."""
        negotiation = next((n for n in context.negotiations if n.id == negotiation_id), None)
        if negotiation is None or negotiation.phase != NegotiationPhase.COMPLETED:
            return None
        if any(r.id == f"tr_{negotiation.id}" for r in context.transfer_records):
            return None

        terms = self.negotiation.evaluate_personal_terms(negotiation, context)
        if terms is None:
            return None
        if not terms.accepted:
            # Fee stays agreed, the player stays put
            player = context.players[negotiation.player_id]
            message = InboxMessage(
                id=generate_id("msg_terms", rng),
                week=context.current_week,
                season=context.current_season,
                type=MessageType.NEGOTIATION,
                title=f"Personal Terms Rejected: {player.full_name}",
                body=f"{player.full_name} has turned down personal terms. The transfer will not go ahead.",
                related_id=negotiation.id,
                related_entity_type="negotiation",
            )
            return DealClosure(context=context, message=message, completed=False)

        completion = self.negotiation.complete_transfer(negotiation, context)
        if completion is None:
            return None

        report = context.reports.get(negotiation.report_id) if negotiation.report_id else None
        conviction = report.conviction if report else ConvictionLevel.NOTE
        record = self.tracker.open_record(negotiation, completion.player, conviction, context.scout.id)

        players = {**context.players, completion.player.id: completion.player}
        clubs = {
            **context.clubs,
            completion.from_club.id: completion.from_club,
            completion.to_club.id: completion.to_club,
        }
        return DealClosure(
            context=context.evolve(
                players=players,
                clubs=clubs,
                transfer_records=context.transfer_records + (record,),
            ),
            message=completion.message,
            completed=True,
        )

    # ------------------------------------------------------------------
    # Weekly pass
    # ------------------------------------------------------------------

    def advance_week(self, rng: random.Random, context: GameContext) -> WeeklyTickResult:
        """Run one pipeline pass for the current week."""
        messages: list[InboxMessage] = []
        reactions: list[BoardReaction] = []
        reputation_delta = 0

        # 1. Board
        board_result = self.board.process_weekly(rng, context)
        if board_result is not None:
            context = context.evolve(board_profile=board_result.profile)
            messages.extend(board_result.messages)
            reactions.extend(board_result.reactions)

        # 2. Directives
        context, directive_message = self._refresh_directives(rng, context)
        if directive_message is not None:
            messages.append(directive_message)

        # 3. Negotiations
        negotiations, negotiation_messages = self.negotiation.process_weekly(rng, context)
        context = context.evolve(negotiations=negotiations)
        messages.extend(negotiation_messages)

        # 4. Season end
        if context.current_week == self.settings.season_length_weeks:
            records = self.tracker.update_records(rng, context)
            settled = []
            for record in records:
                record, delta = self.tracker.apply_accountability(record)
                reputation_delta += delta
                settled.append(record)
            scout = replace(
                context.scout,
                reputation=clamp(context.scout.reputation + reputation_delta, 0, 100),
            )
            context = context.evolve(transfer_records=tuple(settled), scout=scout)

        return WeeklyTickResult(
            context=context,
            messages=tuple(messages),
            reactions=tuple(reactions),
            reputation_delta=reputation_delta,
        )

    def _refresh_directives(
        self,
        rng: random.Random,
        context: GameContext,
    ) -> tuple[GameContext, Optional[InboxMessage]]:
        club_id = context.scout.club_id
        club = context.clubs.get(club_id) if club_id else None
        manager = context.manager_for(club_id) if club_id else None
        if club is None or manager is None:
            return context, None

        season = context.current_season
        has_current = any(d.club_id == club_id and d.season == season for d in context.directives)
        if has_current:
            return context, None

        scaling = self.board.adjust_directive_difficulty(context.board_profile)
        new_directives = self.directive_generator.generate(
            rng, club, manager, list(context.players.values()), season, scaling
        )
        # Last season's directives for this club are replaced
        kept = tuple(d for d in context.directives if d.club_id != club_id)
        board_profile = context.board_profile
        if board_profile is not None:
            board_profile = self.board.record_directive_season(board_profile, season)

        context = context.evolve(directives=kept + tuple(new_directives), board_profile=board_profile)
        positions = ", ".join(
            f"{d.position.value} ({d.priority.value})" for d in new_directives
        )
        message = InboxMessage(
            id=generate_id("msg_directives", rng),
            week=context.current_week,
            season=season,
            type=MessageType.DIRECTIVE,
            title=f"New Transfer Directives: Season {season}",
            body=f"{manager.name} has set the recruitment priorities: {positions or 'none'}.",
            action_required=bool(new_directives),
            related_id=club.id,
            related_entity_type="club",
        )
        return context, message

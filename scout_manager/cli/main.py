#!/usr/bin/env python3
"""Scout Manager CLI.

Runs an auto-piloted scouting career in a seeded demo world and prints
what the board, clubs and negotiations made of it.
"""

import argparse
import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from scout_manager.core.config import get_settings
from scout_manager.core.context import GameContext
from scout_manager.core.models import (
    BoardReactionType,
    ClubResponseType,
    InboxMessage,
    NegotiationPhase,
)
from scout_manager.data.generators import generate_observation, generate_report, generate_world
from scout_manager.engine.negotiation import format_currency
from scout_manager.engine.random_utils import make_rng
from scout_manager.engine.weekly_cycle import ScoutingCycle

console = Console()
logger = logging.getLogger("scout_manager")

PURSUED_RESPONSES = (ClubResponseType.INTERESTED, ClubResponseType.TRIAL, ClubResponseType.SIGNED)


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True, show_path=False)],
    )


class CareerSimulation:
    """Plays the scout's side of the weekly loop automatically."""

    def __init__(self, seed: int):
        self.settings = get_settings()
        self.rng = make_rng(seed)
        self.cycle = ScoutingCycle(self.settings)
        self.context: GameContext = generate_world(self.rng, self.settings)
        self.inbox: list[InboxMessage] = []
        self.responses = []
        self.ended = False
        self.closed_deals: set[str] = set()

    def run(self, seasons: int, weeks: int) -> None:
        for season in range(1, seasons + 1):
            for week in range(1, weeks + 1):
                self.context = self.context.evolve(current_week=week, current_season=season)
                self.play_week()
                if self.ended:
                    return

    def play_week(self) -> None:
        context = self.context
        home_id = context.scout.club_id
        targets = [p for p in context.players.values() if p.club_id != home_id]

        # Two scouting trips a week
        observations = tuple(
            generate_observation(self.rng, context.scout, self.rng.choice(targets), context.current_week, context.current_season)
            for _ in range(2)
        )
        context = context.evolve(observations=context.observations + observations)

        # A report every other week, aimed at an open directive where possible
        if context.current_week % 2 == 0:
            context = self._file_report(context, targets)

        context = self._resolve_trials(context)
        context = self._negotiate(context)

        # Ask for a meeting once an ultimatum is on the table
        board = context.board_profile
        if board is not None and board.ultimatum_issued and context.current_week % 3 == 0:
            meeting = self.cycle.board.hold_board_meeting(self.rng, context)
            if meeting is not None:
                context = context.evolve(board_profile=meeting.profile)
                self.inbox.append(meeting.message)

        tick = self.cycle.advance_week(self.rng, context)
        self.context = tick.context
        self.inbox.extend(tick.messages)
        for reaction in tick.reactions:
            if reaction.type in (BoardReactionType.FIRING, BoardReactionType.DEMOTION):
                logger.info("Career ended in week %d: %s", reaction.week, reaction.type.value)
                self.ended = True

    def _file_report(self, context: GameContext, targets) -> GameContext:
        open_positions = {
            d.position for d in context.directives
            if d.club_id == context.scout.club_id and not d.fulfilled
        }
        wanted = [p for p in targets if p.position in open_positions] or targets
        player = self.rng.choice(wanted)
        report = generate_report(self.rng, context.scout, player, context.current_week, context.current_season)

        submission = self.cycle.submit_report(self.rng, context, report)
        if submission is None:
            return context
        self.inbox.append(submission.message)
        self.responses.append((player, submission.response, submission.fit))
        context = submission.context

        if submission.response.response in PURSUED_RESPONSES:
            negotiation = self.cycle.negotiation.initiate(
                self.rng, context, player.id, context.scout.club_id, report_id=report.id
            )
            if negotiation is not None:
                context = context.evolve(negotiations=context.negotiations + (negotiation,))
        return context

    def _resolve_trials(self, context: GameContext) -> GameContext:
        # Trials are played the week after the club asks for one
        pending = [
            r.report_id for r in context.club_responses
            if r.response == ClubResponseType.TRIAL
            and (r.season, r.week) < (context.current_season, context.current_week)
        ]
        for report_id in pending:
            resolution = self.cycle.resolve_trial(self.rng, context, report_id)
            if resolution is None:
                continue
            context = resolution.context
            self.inbox.append(resolution.message)
            player = context.players.get(context.reports[report_id].player_id)
            self.responses.append((player, resolution.response, None))
        return context

    def _negotiate(self, context: GameContext) -> GameContext:
        engine = self.cycle.negotiation
        updated = []
        for negotiation in context.negotiations:
            if negotiation.is_terminal:
                updated.append(negotiation)
                continue
            if negotiation.rounds:
                # Meet the seller part of the way
                last_offer = negotiation.rounds[-1].offer_amount
                offer = round((last_offer + negotiation.current_asking_price) / 2)
            else:
                offer = engine.recommended_offer(negotiation)
            updated.append(engine.submit_offer(self.rng, negotiation, offer, context.current_week))
        context = context.evolve(negotiations=tuple(updated))

        for negotiation in context.negotiations:
            if negotiation.phase == NegotiationPhase.COMPLETED and negotiation.id not in self.closed_deals:
                closure = self.cycle.close_deal(self.rng, context, negotiation.id)
                if closure is not None:
                    context = closure.context
                    self.closed_deals.add(negotiation.id)
                    self.inbox.append(closure.message)
        return context

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def render(self) -> None:
        context = self.context
        scout = context.scout
        club = context.clubs[scout.club_id]
        console.print(Panel(
            f"[bold]{scout.name}[/bold], head of recruitment at [bold]{club.name}[/bold]\n"
            f"Season {context.current_season}, week {context.current_week} | "
            f"Reputation {scout.reputation:.0f}",
            title="Scout Manager",
        ))

        directive_table = Table(title="Directives", show_header=True, header_style="bold")
        directive_table.add_column("Position")
        directive_table.add_column("Priority")
        directive_table.add_column("Budget", justify="right")
        directive_table.add_column("Ages")
        directive_table.add_column("Min Stars", justify="right")
        directive_table.add_column("Role")
        directive_table.add_column("Done")
        for d in context.directives:
            directive_table.add_row(
                d.position.value,
                d.priority.value,
                format_currency(d.budget_allocation),
                f"{d.age_range[0]}-{d.age_range[1]}",
                f"{d.min_ability_stars:.1f}",
                d.preferred_role.value if d.preferred_role else "-",
                "[green]yes[/]" if d.fulfilled else "no",
            )
        console.print(directive_table)

        response_table = Table(title="Club Responses", show_header=True, header_style="bold")
        response_table.add_column("Player")
        response_table.add_column("Pos")
        response_table.add_column("Fit", justify="right")
        response_table.add_column("Response")
        response_table.add_column("Rep", justify="right")
        for player, response, fit in self.responses[-12:]:
            response_table.add_row(
                player.full_name,
                player.position.value,
                str(fit.overall_fit) if fit else "-",
                response.response.value,
                f"{response.reputation_delta:+d}",
            )
        console.print(response_table)

        negotiation_table = Table(title="Negotiations", show_header=True, header_style="bold")
        negotiation_table.add_column("Player")
        negotiation_table.add_column("Seller")
        negotiation_table.add_column("Style")
        negotiation_table.add_column("Phase")
        negotiation_table.add_column("Rounds", justify="right")
        negotiation_table.add_column("Asking", justify="right")
        negotiation_table.add_column("Rivals", justify="right")
        for n in context.negotiations:
            player = context.players.get(n.player_id)
            seller = context.clubs.get(n.from_club_id)
            negotiation_table.add_row(
                player.full_name if player else n.player_id,
                seller.short_name if seller else n.from_club_id,
                n.personality.value,
                n.phase.value,
                f"{len(n.rounds)}/{n.max_rounds}",
                format_currency(n.current_asking_price),
                str(len(n.rival_bids)),
            )
        console.print(negotiation_table)

        record_table = Table(title="Transfer Records", show_header=True, header_style="bold")
        record_table.add_column("Player")
        record_table.add_column("Fee", justify="right")
        record_table.add_column("Conviction")
        record_table.add_column("Ratings")
        record_table.add_column("Outcome")
        for r in context.transfer_records:
            player = context.players.get(r.player_id)
            record_table.add_row(
                player.full_name if player else r.player_id,
                format_currency(r.fee),
                r.scout_conviction.value,
                ", ".join(str(s.rating) for s in r.season_performance) or "-",
                r.outcome.value if r.outcome else "-",
            )
        console.print(record_table)

        hit_rate = self.cycle.tracker.hit_rate(list(context.transfer_records), scout.id)
        console.print(
            f"Hit rate: {hit_rate.rate}% ({hit_rate.hits} hits, {hit_rate.flops} flops, "
            f"{hit_rate.total} tracked)"
        )

        board = context.board_profile
        if board is not None:
            console.print(Panel(
                f"Personality: {board.personality.value}\n"
                f"Satisfaction: {board.satisfaction:.1f}  Patience: {board.patience:.1f}\n"
                f"Budget multiplier: {board.budget_multiplier:.2f}"
                + (f"\n[red]Ultimatum until week {board.ultimatum_deadline}[/]" if board.ultimatum_issued else ""),
                title="Board",
            ))

        board_messages = [m for m in self.inbox if m.title.startswith(("Board", "Budget", "Demotion", "Contract"))]
        if board_messages:
            console.print("\n[bold]Board correspondence:[/]")
            for m in board_messages[-8:]:
                console.print(f"  S{m.season} W{m.week:>2}  {m.title}")
        if self.ended:
            console.print("\n[bold red]Career over: the board has acted.[/]")


def main():
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Simulate a scouting career")
    parser.add_argument(
        "--seed",
        type=int,
        default=settings.default_seed,
        help="Random seed for the world and the simulation",
    )
    parser.add_argument(
        "--weeks",
        type=int,
        default=settings.season_length_weeks,
        help="Weeks to play per season",
    )
    parser.add_argument(
        "--seasons",
        type=int,
        default=1,
        metavar="N",
        help="Number of seasons to play",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Show engine debug logging",
    )

    args = parser.parse_args()
    setup_logging("DEBUG" if args.verbose or settings.debug else settings.log_level)

    simulation = CareerSimulation(args.seed)
    with console.status("Simulating..."):
        simulation.run(args.seasons, args.weeks)
    simulation.render()


if __name__ == "__main__":
    main()

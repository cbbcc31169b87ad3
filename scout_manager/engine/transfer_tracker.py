"""Post-transfer performance tracking and scout accountability.

Every completed deal opens a record. At the end of each season the record
receives one performance snapshot; after two seasons the average rating
settles the outcome, and the scout's reputation moves once according to
how loudly they backed the player.
"""

import logging
import random
from dataclasses import dataclass, replace
from typing import Optional

from scout_manager.core.context import GameContext, squad_average_ability
from scout_manager.core.models import (
    ConvictionLevel,
    Player,
    Position,
    SeasonPerformance,
    TransferNegotiation,
    TransferOutcome,
    TransferRecord,
)
from scout_manager.engine.random_utils import clamp, round_half_up

logger = logging.getLogger(__name__)

C = ConvictionLevel
TO = TransferOutcome


@dataclass(frozen=True)
class HitRate:
    total: int
    hits: int
    flops: int
    rate: int  # percentage of resolved records that were hits


class TransferTracker:
    """Tracks how recommended signings turn out."""

    MIN_SEASONS = 2
    HIT_RATING = 70
    FLOP_RATING = 40
    MAX_APPEARANCES = 38
    WEAK_RATIO = 0.8

    APPEARANCE_RANGES = {
        Position.GK: (20, 38),
        Position.CB: (22, 38),
        Position.LB: (20, 36),
        Position.RB: (20, 36),
        Position.CDM: (22, 36),
        Position.CM: (20, 34),
        Position.CAM: (18, 34),
        Position.LW: (18, 34),
        Position.RW: (18, 34),
        Position.ST: (18, 34),
    }

    GOALS_PER_APPEARANCE = {
        Position.GK: (0.0, 0.01),
        Position.CB: (0.01, 0.05),
        Position.LB: (0.01, 0.06),
        Position.RB: (0.01, 0.06),
        Position.CDM: (0.02, 0.08),
        Position.CM: (0.04, 0.14),
        Position.CAM: (0.08, 0.22),
        Position.LW: (0.12, 0.32),
        Position.RW: (0.12, 0.32),
        Position.ST: (0.20, 0.55),
    }

    ASSISTS_PER_APPEARANCE = {
        Position.GK: (0.0, 0.01),
        Position.CB: (0.01, 0.04),
        Position.LB: (0.03, 0.12),
        Position.RB: (0.03, 0.12),
        Position.CDM: (0.03, 0.10),
        Position.CM: (0.05, 0.18),
        Position.CAM: (0.10, 0.28),
        Position.LW: (0.08, 0.22),
        Position.RW: (0.08, 0.22),
        Position.ST: (0.04, 0.14),
    }

    # Reputation change by conviction and outcome
    ACCOUNTABILITY = {
        C.NOTE: {TO.HIT: 0, TO.DECENT: 0, TO.FLOP: 0},
        C.RECOMMEND: {TO.HIT: 3, TO.DECENT: 1, TO.FLOP: -2},
        C.STRONG_RECOMMEND: {TO.HIT: 5, TO.DECENT: 1, TO.FLOP: -4},
        C.TABLE_POUND: {TO.HIT: 8, TO.DECENT: 2, TO.FLOP: -7},
    }

    def open_record(
        self,
        negotiation: TransferNegotiation,
        player: Player,
        conviction: ConvictionLevel,
        scout_id: str,
    ) -> TransferRecord:
        """Start tracking a completed transfer."""
        return TransferRecord(
            id=f"tr_{negotiation.id}",
            player_id=player.id,
            scout_id=scout_id,
            report_id=negotiation.report_id,
            from_club_id=negotiation.from_club_id,
            to_club_id=negotiation.to_club_id,
            fee=negotiation.agreed_fee,
            ability_at_transfer=player.current_ability,
            transfer_season=negotiation.season,
            scout_conviction=conviction,
        )

    def simulate_season(
        self,
        rng: random.Random,
        player: Player,
        squad: list[Player],
        season: int,
    ) -> SeasonPerformance:
        """Draw one season's performance for a player at their club."""
        squad_avg = squad_average_ability(squad)
        ability = player.current_ability

        low, high = self.APPEARANCE_RANGES[player.position]
        appearances = rng.randint(low, high)
        if ability < squad_avg * self.WEAK_RATIO:
            appearances *= 0.6
        elif ability < squad_avg:
            appearances *= 0.85
        appearances = int(clamp(round_half_up(appearances), 0, self.MAX_APPEARANCES))

        quality = clamp(ability / squad_avg, 0.4, 1.8)
        goals_low, goals_high = self.GOALS_PER_APPEARANCE[player.position]
        assists_low, assists_high = self.ASSISTS_PER_APPEARANCE[player.position]
        goals = round_half_up(appearances * rng.uniform(goals_low, goals_high) * quality)
        assists = round_half_up(appearances * rng.uniform(assists_low, assists_high) * quality)

        rating = ability / 200 * 100
        if ability > squad_avg:
            rating += 5
        elif ability < squad_avg * self.WEAK_RATIO:
            rating -= 10
        rating += player.form * 3
        rating += rng.gauss(0, 8)

        return SeasonPerformance(
            season=season,
            rating=int(clamp(round_half_up(rating), 0, 100)),
            appearances=appearances,
            goals=goals,
            assists=assists,
        )

    def classify(self, record: TransferRecord) -> TransferOutcome:
        if len(record.season_performance) < self.MIN_SEASONS:
            return TransferOutcome.TOO_EARLY
        average = sum(s.rating for s in record.season_performance) / len(record.season_performance)
        if average >= self.HIT_RATING:
            return TransferOutcome.HIT
        if average < self.FLOP_RATING:
            return TransferOutcome.FLOP
        return TransferOutcome.DECENT

    def update_record(
        self,
        rng: random.Random,
        record: TransferRecord,
        context: GameContext,
        season: int,
    ) -> TransferRecord:
        """Add this season's snapshot and classify the record."""
        if record.is_resolved:
            return record
        player = context.players.get(record.player_id)
        if player is None:
            logger.warning("Transfer record %s references missing player %s", record.id, record.player_id)
            return record
        if any(s.season == season for s in record.season_performance):
            return record

        squad = context.squad(player.club_id) if player.club_id else []
        snapshot = self.simulate_season(rng, player, squad, season)
        updated = replace(record, season_performance=record.season_performance + (snapshot,))

        outcome = self.classify(updated)
        if outcome == TransferOutcome.TOO_EARLY:
            return replace(updated, outcome=outcome)
        logger.info("Transfer record %s resolved as %s", record.id, outcome.value)
        return replace(updated, outcome=outcome, outcome_season=season)

    def update_records(
        self,
        rng: random.Random,
        context: GameContext,
        season: Optional[int] = None,
    ) -> tuple[TransferRecord, ...]:
        """Season-end pass over every record in the context."""
        season = context.current_season if season is None else season
        return tuple(
            self.update_record(rng, record, context, season) for record in context.transfer_records
        )

    def apply_accountability(self, record: TransferRecord) -> tuple[TransferRecord, int]:
        """Settle the scout's reputation change for a record, once."""
        if record.accountability_applied or not record.is_resolved:
            return record, 0
        delta = self.ACCOUNTABILITY[record.scout_conviction][record.outcome]
        return replace(record, accountability_applied=True), delta

    def hit_rate(self, records: list[TransferRecord], scout_id: Optional[str] = None) -> HitRate:
        """Share of a scout's settled transfers that turned out hits."""
        if scout_id is not None:
            records = [r for r in records if r.scout_id == scout_id]
        hits = sum(1 for r in records if r.outcome == TransferOutcome.HIT)
        flops = sum(1 for r in records if r.outcome == TransferOutcome.FLOP)
        resolved = sum(1 for r in records if r.is_resolved)
        rate = round_half_up(hits / resolved * 100) if resolved else 0
        return HitRate(total=len(records), hits=hits, flops=flops, rate=rate)

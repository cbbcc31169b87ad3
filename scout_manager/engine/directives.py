"""Manager directives and report matching.

Each season a club turns the weak spots in its squad into a short list of
directives: which position it wants filled, how urgently, at what price and
with what profile. Submitted reports are then matched against the open
directives to decide which request (if any) the report answers.
"""

import logging
import random
from typing import Optional

from scout_manager.core.context import squad_average_ability
from scout_manager.core.models import (
    ALL_POSITIONS,
    Club,
    Directive,
    DirectiveMatch,
    DirectivePriority,
    DifficultyScaling,
    ManagerProfile,
    Player,
    Position,
    PRIORITY_ORDER,
    ScoutReport,
)
from scout_manager.engine.random_utils import clamp, pick, round_half_up
from scout_manager.engine.roles import calculate_role_suitability, get_best_role
from scout_manager.engine.system_fit import PHILOSOPHY_AGE_RANGES, age_fit
from scout_manager.engine.tactics import preferred_role_for

logger = logging.getLogger(__name__)


KEY_ATTRIBUTE_POOLS = {
    Position.GK: ("positioning", "composure", "decision_making", "leadership", "defensive_awareness"),
    Position.CB: ("defensive_awareness", "heading", "strength", "composure", "positioning"),
    Position.LB: ("pace", "crossing", "stamina", "defensive_awareness", "pressing"),
    Position.RB: ("pace", "crossing", "stamina", "defensive_awareness", "pressing"),
    Position.CDM: ("defensive_awareness", "pressing", "passing", "strength", "composure"),
    Position.CM: ("passing", "stamina", "decision_making", "off_the_ball", "work_rate"),
    Position.CAM: ("passing", "dribbling", "decision_making", "off_the_ball", "first_touch"),
    Position.LW: ("pace", "dribbling", "crossing", "agility", "off_the_ball"),
    Position.RW: ("pace", "dribbling", "crossing", "agility", "off_the_ball"),
    Position.ST: ("shooting", "heading", "pace", "composure", "off_the_ball"),
}

# Positions a report can still answer a directive from
MATCH_ADJACENT_POSITIONS = {
    Position.GK: (),
    Position.CB: (Position.CDM,),
    Position.LB: (Position.CB, Position.LW),
    Position.RB: (Position.CB, Position.RW),
    Position.CDM: (Position.CB, Position.CM),
    Position.CM: (Position.CDM, Position.CAM),
    Position.CAM: (Position.CM, Position.ST, Position.LW, Position.RW),
    Position.LW: (Position.LB, Position.CAM),
    Position.RW: (Position.RB, Position.CAM),
    Position.ST: (Position.CAM,),
}


def ability_to_stars(current_ability: float) -> float:
    """Convert 1-200 ability to a 0.5-5.0 star rating in half steps."""
    stars = round_half_up(current_ability / 200 * 5 * 2) / 2
    return clamp(stars, 0.5, 5.0)


def sort_by_priority(directives: list[Directive]) -> list[Directive]:
    """Stable sort into critical, high, medium, low order."""
    return sorted(directives, key=lambda d: PRIORITY_ORDER[d.priority])


class DirectiveGenerator:
    """Builds a club's seasonal recruitment directives."""

    CRITICAL_GAP = 30
    HIGH_GAP = 20
    MEDIUM_GAP = 10

    BUDGET_SHARES = {
        DirectivePriority.CRITICAL: 0.40,
        DirectivePriority.HIGH: 0.30,
        DirectivePriority.MEDIUM: 0.20,
        DirectivePriority.LOW: 0.10,
    }

    # (minimum reputation, minimum stars), highest band first
    REPUTATION_STAR_BANDS = (
        (80, 3.5),
        (60, 3.0),
        (40, 2.5),
        (20, 2.0),
    )
    DEFAULT_MIN_STARS = 1.5

    MIN_GAPS = 2
    MAX_GAPS = 4

    URGENCY_TEXT = {
        DirectivePriority.CRITICAL: "urgently",
        DirectivePriority.HIGH: "soon",
    }

    def generate(
        self,
        rng: random.Random,
        club: Club,
        manager: ManagerProfile,
        players: list[Player],
        season: int,
        scaling: Optional[DifficultyScaling] = None,
    ) -> list[Directive]:
        """Generate a club's directives for the season, most urgent first.

        The squad is taken from ``players`` by club id. Board difficulty
        scaling, when given, tightens or loosens the star requirement,
        budget and age window.
        """
        scaling = scaling or DifficultyScaling()
        squad = [p for p in players if p.club_id == club.id]

        gap_count = rng.randint(self.MIN_GAPS, self.MAX_GAPS)
        gaps = self.identify_position_gaps(squad)[:gap_count]

        min_stars = self.min_stars_for(club.reputation, scaling.ability_stars_multiplier)
        age_range = self.age_range_for(club, scaling.age_year_delta)

        directives = []
        for index, (position, gap) in enumerate(gaps):
            priority = self.priority_for_gap(gap)
            directives.append(Directive(
                id=f"dir_{club.id[:8]}_{position.value}_s{season}_{index}",
                club_id=club.id,
                position=position,
                priority=priority,
                budget_allocation=round_half_up(
                    club.budget * self.BUDGET_SHARES[priority] * scaling.budget_scale
                ),
                age_range=age_range,
                min_ability_stars=min_stars,
                key_attributes=self.select_key_attributes(rng, position),
                preferred_role=preferred_role_for(club, position),
                season=season,
                tactical_notes=self.build_tactical_notes(manager, position, priority),
            ))

        logger.debug(
            "Generated %d directives for %s (season %d)", len(directives), club.name, season
        )
        return sort_by_priority(directives)

    def identify_position_gaps(self, squad: list[Player]) -> list[tuple[Position, float]]:
        """Positions weaker than the squad average, biggest gap first.

        A position nobody covers counts as average 0, which makes it the
        most urgent need.
        """
        squad_avg = squad_average_ability(squad)
        gaps = []
        for position in ALL_POSITIONS:
            covering = [p for p in squad if p.plays(position)]
            position_avg = (
                sum(p.current_ability for p in covering) / len(covering) if covering else 0
            )
            gap = squad_avg - position_avg
            if gap > 0:
                gaps.append((position, gap))
        # sorted() is stable so equal gaps keep canonical position order
        return sorted(gaps, key=lambda item: item[1], reverse=True)

    def priority_for_gap(self, gap: float) -> DirectivePriority:
        if gap > self.CRITICAL_GAP:
            return DirectivePriority.CRITICAL
        elif gap > self.HIGH_GAP:
            return DirectivePriority.HIGH
        elif gap > self.MEDIUM_GAP:
            return DirectivePriority.MEDIUM
        return DirectivePriority.LOW

    def min_stars_for(self, reputation: int, multiplier: float = 1.0) -> float:
        base = self.DEFAULT_MIN_STARS
        for threshold, stars in self.REPUTATION_STAR_BANDS:
            if reputation >= threshold:
                base = stars
                break
        # Keep half-star granularity after scaling
        return clamp(round_half_up(base * multiplier * 2) / 2, 0.5, 5.0)

    def age_range_for(self, club: Club, year_delta: int = 0) -> tuple[int, int]:
        low, high = PHILOSOPHY_AGE_RANGES[club.scouting_philosophy]
        low, high = low - year_delta, high + year_delta
        if low > high:
            middle = (low + high) // 2
            low = high = middle
        return low, high

    def select_key_attributes(self, rng: random.Random, position: Position) -> tuple[str, ...]:
        """Three core attributes for the position plus one drawn from the rest."""
        pool = KEY_ATTRIBUTE_POOLS[position]
        core, rest = pool[:3], pool[3:]
        if not rest:
            return tuple(core)
        return tuple(core) + (pick(rng, rest),)

    def build_tactical_notes(
        self,
        manager: ManagerProfile,
        position: Position,
        priority: DirectivePriority,
    ) -> str:
        urgency = self.URGENCY_TEXT.get(priority, "during this window")
        return (
            f"Manager requires a {position.value} {urgency}. "
            f"Formation: {manager.preferred_formation}. "
            f"Scout preference: {manager.preference.value}. "
            f"The incoming player must fit the club's {manager.preferred_formation} system "
            f"and show the tactical discipline the coaching staff demand."
        )


class ReportMatcher:
    """Finds the directive a report answers best."""

    PRIMARY_POSITION = 35
    SECONDARY_POSITION = 25
    ADJACENT_POSITION = 14

    AGE_WEIGHT = 15
    AGE_DECAY_PER_YEAR = 2
    STARS_WEIGHT = 15
    KEY_ATTRIBUTE_POINTS = 5
    KEY_ATTRIBUTE_CAP = 20
    ROLE_WEIGHT = 15
    UNSPECIFIED_ROLE_WEIGHT = 8

    MATCH_THRESHOLD = 40

    def match(
        self,
        report: ScoutReport,
        player: Player,
        directives: list[Directive],
    ) -> Optional[DirectiveMatch]:
        """Return the best open directive scoring above the threshold."""
        best: Optional[DirectiveMatch] = None
        for directive in directives:
            if directive.fulfilled:
                continue
            score = self.score(report, player, directive)
            # Strict comparison keeps the earlier directive on ties
            if score > self.MATCH_THRESHOLD and (best is None or score > best.match_score):
                best = DirectiveMatch(directive_id=directive.id, match_score=score)

        if best is None:
            logger.debug("Report %s matched no open directive", report.id)
        return best

    def score(self, report: ScoutReport, player: Player, directive: Directive) -> int:
        total = self.score_position(player, directive.position)

        total += age_fit(player.age, directive.age_range, self.AGE_DECAY_PER_YEAR) / 100 * self.AGE_WEIGHT

        stars = report.perceived_ability_stars
        if stars is None:
            stars = ability_to_stars(player.current_ability)
        if stars >= directive.min_ability_stars:
            total += self.STARS_WEIGHT

        assessed = sum(1 for attr in directive.key_attributes if attr in report.attribute_assessments)
        total += min(assessed * self.KEY_ATTRIBUTE_POINTS, self.KEY_ATTRIBUTE_CAP)

        if directive.preferred_role is not None:
            suitability = calculate_role_suitability(player, directive.preferred_role)
            total += suitability / 100 * self.ROLE_WEIGHT
        else:
            _, suitability = get_best_role(player, directive.position)
            total += suitability / 100 * self.UNSPECIFIED_ROLE_WEIGHT

        return round_half_up(total)

    def score_position(self, player: Player, position: Position) -> int:
        if player.position == position:
            return self.PRIMARY_POSITION
        if position in player.secondary_positions:
            return self.SECONDARY_POSITION
        if position in MATCH_ADJACENT_POSITIONS[player.position]:
            return self.ADJACENT_POSITION
        return 0

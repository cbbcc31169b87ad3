"""Read-only game context passed explicitly to every engine call."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Optional

from scout_manager.core.models import (
    BoardProfile,
    Club,
    ClubResponse,
    Directive,
    ManagerProfile,
    Observation,
    Player,
    Scout,
    ScoutReport,
    TransferNegotiation,
    TransferRecord,
)

DEFAULT_SQUAD_AVERAGE = 100


@dataclass(frozen=True)
class GameContext:
    """Snapshot of the world the decision core reads from.

    Engines never mutate a context; the caller builds the next snapshot
    with ``evolve`` from the values the engines return.
    """
    scout: Scout
    current_week: int
    current_season: int
    players: dict[str, Player] = field(default_factory=dict)
    clubs: dict[str, Club] = field(default_factory=dict)
    # Keyed by club id
    managers: dict[str, ManagerProfile] = field(default_factory=dict)
    reports: dict[str, ScoutReport] = field(default_factory=dict)
    observations: tuple[Observation, ...] = ()
    directives: tuple[Directive, ...] = ()
    negotiations: tuple[TransferNegotiation, ...] = ()
    transfer_records: tuple[TransferRecord, ...] = ()
    club_responses: tuple[ClubResponse, ...] = ()
    board_profile: Optional[BoardProfile] = None

    def evolve(self, **changes) -> GameContext:
        return replace(self, **changes)

    def squad(self, club_id: str) -> list[Player]:
        return [p for p in self.players.values() if p.club_id == club_id]

    def squad_average_ability(self, club_id: str) -> float:
        return squad_average_ability(self.squad(club_id))

    def manager_for(self, club_id: str) -> Optional[ManagerProfile]:
        return self.managers.get(club_id)

    def reports_this_week(self) -> list[ScoutReport]:
        return [
            r for r in self.reports.values()
            if r.submitted_week == self.current_week
            and r.submitted_season == self.current_season
        ]

    def observations_this_week(self) -> list[Observation]:
        return [
            o for o in self.observations
            if o.week == self.current_week and o.season == self.current_season
        ]


def squad_average_ability(squad: list[Player]) -> float:
    """Mean current ability of a squad, or the neutral default when empty."""
    if not squad:
        return DEFAULT_SQUAD_AVERAGE
    return sum(p.current_ability for p in squad) / len(squad)

"""Shared fixtures and builders for the engine tests."""

import random

import pytest

from scout_manager.core.context import GameContext
from scout_manager.core.models import (
    BoardPersonality,
    BoardProfile,
    Club,
    ConvictionLevel,
    ManagerProfile,
    NegotiationPersonality,
    NegotiationPhase,
    Player,
    Position,
    Scout,
    ScoutReport,
    ScoutingPhilosophy,
    TransferNegotiation,
)


def make_player(id="p1", position=Position.CM, age=24, ability=100, club_id="club_b", **kwargs) -> Player:
    """A player with every attribute at the neutral 10 unless given."""
    return Player(
        id=id,
        first_name=kwargs.pop("first_name", "Test"),
        last_name=kwargs.pop("last_name", "Player"),
        position=position,
        age=age,
        current_ability=ability,
        potential_ability=kwargs.pop("potential_ability", ability),
        market_value=kwargs.pop("market_value", 1_000_000),
        club_id=club_id,
        **kwargs,
    )


def make_club(id="club_a", reputation=60, budget=10_000_000, **kwargs) -> Club:
    return Club(
        id=id,
        name=kwargs.pop("name", f"{id.title()} FC"),
        short_name=kwargs.pop("short_name", id.title()),
        reputation=reputation,
        budget=budget,
        **kwargs,
    )


def make_report(player, id="rpt1", conviction=ConvictionLevel.RECOMMEND, quality=60, **kwargs) -> ScoutReport:
    return ScoutReport(
        id=id,
        player_id=player.id,
        scout_id=kwargs.pop("scout_id", "scout1"),
        conviction=conviction,
        quality_score=quality,
        submitted_week=kwargs.pop("week", 1),
        submitted_season=kwargs.pop("season", 1),
        **kwargs,
    )


def make_negotiation(
    asking=10_000_000,
    max_rounds=3,
    personality=NegotiationPersonality.REASONABLE,
    **kwargs,
) -> TransferNegotiation:
    return TransferNegotiation(
        id=kwargs.pop("id", "neg1"),
        player_id=kwargs.pop("player_id", "p1"),
        from_club_id=kwargs.pop("from_club_id", "club_b"),
        to_club_id=kwargs.pop("to_club_id", "club_a"),
        phase=kwargs.pop("phase", NegotiationPhase.INITIAL),
        max_rounds=max_rounds,
        deadline=kwargs.pop("deadline", 5),
        personality=personality,
        initial_asking_price=asking,
        season=kwargs.pop("season", 1),
        start_week=kwargs.pop("start_week", 1),
        **kwargs,
    )


def make_context(
    players=(),
    clubs=(),
    managers=(),
    week=1,
    season=1,
    career_tier=5,
    board_profile=None,
    **kwargs,
) -> GameContext:
    scout = Scout(
        id="scout1",
        name="Alex Reid",
        reputation=kwargs.pop("scout_reputation", 50.0),
        career_tier=career_tier,
        club_id=kwargs.pop("scout_club_id", "club_a"),
    )
    return GameContext(
        scout=scout,
        current_week=week,
        current_season=season,
        players={p.id: p for p in players},
        clubs={c.id: c for c in clubs},
        managers={m.club_id: m for m in managers},
        board_profile=board_profile,
        **kwargs,
    )


@pytest.fixture
def rng():
    return random.Random(42)


@pytest.fixture
def home_club():
    return make_club("club_a", reputation=70, budget=20_000_000, scouting_philosophy=ScoutingPhilosophy.MARKET_SMART)


@pytest.fixture
def selling_club():
    return make_club("club_b", reputation=50, budget=8_000_000)


@pytest.fixture
def home_manager():
    return ManagerProfile(club_id="club_a", name="Sam Archer", preferred_formation="4-4-2")


@pytest.fixture
def patient_board():
    return BoardProfile(personality=BoardPersonality.PATIENT)

"""Seeded generators for a small demo world.

Everything draws from the ``random.Random`` passed in, so a seed always
produces the same clubs, squads and scout.
"""

import random

from scout_manager.core.config import Settings, get_settings
from scout_manager.core.context import GameContext
from scout_manager.core.models import (
    ALL_ATTRIBUTES,
    ALL_POSITIONS,
    Club,
    ConvictionLevel,
    ManagerPreference,
    ManagerProfile,
    Observation,
    PersonalityArchetype,
    Player,
    PlayerTrait,
    Position,
    Scout,
    ScoutReport,
    ScoutingPhilosophy,
)
from scout_manager.engine.board_ai import BoardAI
from scout_manager.engine.directives import KEY_ATTRIBUTE_POOLS, ability_to_stars
from scout_manager.engine.random_utils import clamp, generate_id, pick
from scout_manager.engine.roles import roles_for_position
from scout_manager.engine.tactics import generate_tactical_style

FIRST_NAMES = [
    "James", "Oliver", "Harry", "Hugo", "Mateo", "Pablo", "Finn", "Jonas",
    "Lorenzo", "Andrea", "Louis", "Jules", "Davi", "Pedro", "Thiago", "Daan",
]
LAST_NAMES = [
    "Walker", "Hughes", "Navarro", "Ortega", "Keller", "Brandt", "Conti", "Greco",
    "Lefevre", "Moreau", "Costa", "Ribeiro", "Vermeer", "Janssen", "Okafor", "Lindqvist",
]
CLUB_TOWNS = [
    "Ashford", "Brackley", "Carrow", "Dunmore", "Eastleigh", "Fenwick",
    "Glenbrook", "Harrowgate", "Ivybridge", "Kingsmere", "Lowestoke", "Marwood",
]
CLUB_SUFFIXES = ["United", "City", "Rovers", "Athletic", "Town", "Albion"]
FORMATIONS = ["4-4-2", "4-3-3", "4-2-3-1", "3-5-2", "4-5-1", "5-3-2"]

# Roughly how a squad is spread across positions
SQUAD_TEMPLATE = [
    Position.GK, Position.GK, Position.CB, Position.CB, Position.CB, Position.LB,
    Position.RB, Position.CDM, Position.CM, Position.CM, Position.CAM, Position.LW,
    Position.RW, Position.ST, Position.ST,
]

SECONDARY_OPTIONS = {
    Position.GK: [],
    Position.CB: [Position.CDM, Position.LB, Position.RB],
    Position.LB: [Position.LW, Position.CB],
    Position.RB: [Position.RW, Position.CB],
    Position.CDM: [Position.CM, Position.CB],
    Position.CM: [Position.CDM, Position.CAM],
    Position.CAM: [Position.CM, Position.ST],
    Position.LW: [Position.RW, Position.ST],
    Position.RW: [Position.LW, Position.ST],
    Position.ST: [Position.CAM],
}


def generate_player(
    rng: random.Random,
    club_id: str | None,
    position: Position,
    ability_center: int,
) -> Player:
    """Generate a player around a target ability."""
    ability = int(clamp(round(rng.gauss(ability_center, 15)), 30, 195))
    age = rng.randint(17, 34)
    potential = int(clamp(ability + max(0, (24 - age) * rng.randint(2, 6)), ability, 200))

    # Attributes track ability, with position strengths lifted
    base = ability / 200 * 20
    strong = set(KEY_ATTRIBUTE_POOLS[position])
    role_attrs = {attr for role in roles_for_position(position) for attr, _ in role.key_attributes}
    attributes = {}
    for attr in ALL_ATTRIBUTES:
        value = base + rng.gauss(0, 2.5)
        if attr in strong or attr in role_attrs:
            value += 2
        attributes[attr] = int(clamp(round(value), 1, 20))

    secondary = ()
    options = SECONDARY_OPTIONS[position]
    if options and rng.random() < 0.4:
        secondary = (pick(rng, options),)

    traits = tuple(rng.sample(list(PlayerTrait), rng.randint(0, 2)))
    value_factor = (ability / 100) ** 3 * 5_000_000
    if age <= 23:
        value_factor *= 1.3
    elif age >= 31:
        value_factor *= 0.6

    return Player(
        id=generate_id("ply", rng),
        first_name=pick(rng, FIRST_NAMES),
        last_name=pick(rng, LAST_NAMES),
        position=position,
        age=age,
        current_ability=ability,
        potential_ability=potential,
        market_value=int(round(value_factor, -4)),
        club_id=club_id,
        secondary_positions=secondary,
        form=rng.randint(-3, 3),
        attributes=attributes,
        traits=traits,
        archetype=pick(rng, list(PersonalityArchetype)),
    )


def generate_club(rng: random.Random, index: int, squad_size: int) -> tuple[Club, ManagerProfile, list[Player]]:
    """Generate a club, its manager and its squad."""
    reputation = rng.randint(25, 90)
    philosophy = pick(rng, list(ScoutingPhilosophy))
    club_id = generate_id("club", rng)
    town = CLUB_TOWNS[index % len(CLUB_TOWNS)]
    name = f"{town} {pick(rng, CLUB_SUFFIXES)}"

    ability_center = 40 + reputation
    squad = []
    for slot in range(squad_size):
        position = SQUAD_TEMPLATE[slot] if slot < len(SQUAD_TEMPLATE) else pick(rng, list(ALL_POSITIONS))
        squad.append(generate_player(rng, club_id, position, ability_center))

    club = Club(
        id=club_id,
        name=name,
        short_name=town,
        reputation=reputation,
        budget=int(round(reputation ** 2 * 8_000, -5)),
        scouting_philosophy=philosophy,
        tactical_style=generate_tactical_style(rng, philosophy, reputation) if rng.random() < 0.7 else None,
        player_ids=tuple(p.id for p in squad),
    )
    manager = ManagerProfile(
        club_id=club_id,
        name=f"{pick(rng, FIRST_NAMES)} {pick(rng, LAST_NAMES)}",
        preferred_formation=pick(rng, FORMATIONS),
        preference=pick(rng, list(ManagerPreference)),
    )
    return club, manager, squad


def generate_world(rng: random.Random, settings: Settings | None = None) -> GameContext:
    """Build a demo world with a head of recruitment at the first club."""
    settings = settings or get_settings()
    clubs, managers, players = {}, {}, {}
    for index in range(settings.demo_clubs):
        club, manager, squad = generate_club(rng, index, settings.demo_squad_size)
        clubs[club.id] = club
        managers[club.id] = manager
        players.update({p.id: p for p in squad})

    home_club = next(iter(clubs.values()))
    scout = Scout(
        id=generate_id("scout", rng),
        name=f"{pick(rng, FIRST_NAMES)} {pick(rng, LAST_NAMES)}",
        reputation=50.0,
        career_tier=settings.demo_scout_tier,
        club_id=home_club.id,
        attributes={"persuasion": rng.randint(8, 16), "judgement": rng.randint(8, 16)},
    )
    return GameContext(
        scout=scout,
        current_week=1,
        current_season=1,
        players=players,
        clubs=clubs,
        managers=managers,
        board_profile=BoardAI().generate_profile(rng),
    )


def generate_report(
    rng: random.Random,
    scout: Scout,
    player: Player,
    week: int,
    season: int,
) -> ScoutReport:
    """A plausible report on a player, with some estimation noise."""
    assessed = rng.sample(list(KEY_ATTRIBUTE_POOLS[player.position]), rng.randint(2, 5))
    quality = int(clamp(rng.gauss(55, 15), 10, 100))
    stars = clamp(ability_to_stars(player.current_ability) + pick(rng, [-0.5, 0, 0, 0.5]), 0.5, 5.0)
    conviction = pick(rng, [
        ConvictionLevel.NOTE, ConvictionLevel.RECOMMEND,
        ConvictionLevel.RECOMMEND, ConvictionLevel.STRONG_RECOMMEND,
        ConvictionLevel.TABLE_POUND,
    ])
    return ScoutReport(
        id=generate_id("rpt", rng),
        player_id=player.id,
        scout_id=scout.id,
        conviction=conviction,
        quality_score=quality,
        submitted_week=week,
        submitted_season=season,
        attribute_assessments={
            attr: int(clamp(player.attribute(attr) + rng.randint(-2, 2), 1, 20)) for attr in assessed
        },
        perceived_ability_stars=stars,
    )


def generate_observation(rng: random.Random, scout: Scout, player: Player, week: int, season: int) -> Observation:
    return Observation(
        id=generate_id("obs", rng),
        player_id=player.id,
        scout_id=scout.id,
        week=week,
        season=season,
    )

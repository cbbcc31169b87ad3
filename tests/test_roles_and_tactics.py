"""Tests for the role catalogue and tactical identities."""

import random

import pytest

from scout_manager.core.models import (
    ALL_ATTRIBUTES,
    PlayerRole,
    PlayerTrait,
    Position,
    RoleDuty,
    ScoutingPhilosophy,
    TacticalIdentity,
)
from scout_manager.engine.roles import (
    ROLE_DEFINITIONS,
    calculate_role_suitability,
    get_best_role,
    get_compatible_roles,
    roles_for_position,
)
from scout_manager.engine.tactics import (
    IDENTITY_PROFILES,
    club_tactical_style,
    derive_tactical_style,
    generate_tactical_style,
    has_strong_identity,
    preferred_role_for,
)

from conftest import make_club, make_player


class TestRoleCatalogue:
    """Tests for the role definitions."""

    def test_every_role_defined_once(self):
        roles = [d.role for d in ROLE_DEFINITIONS]
        assert len(roles) == len(PlayerRole)
        assert set(roles) == set(PlayerRole)

    def test_every_position_has_roles(self):
        for position in Position:
            assert roles_for_position(position), position


class TestRoleSuitability:
    """Tests for role suitability scoring."""

    def test_average_player_scores_fifty(self):
        player = make_player(position=Position.CB)
        assert calculate_role_suitability(player, PlayerRole.BALL_PLAYING_DEFENDER) == 50

    def test_duty_adjustment(self):
        player = make_player(position=Position.CB)
        role = PlayerRole.BALL_PLAYING_DEFENDER
        assert calculate_role_suitability(player, role, RoleDuty.ATTACK) == 53
        assert calculate_role_suitability(player, role, RoleDuty.DEFEND) == 47
        assert calculate_role_suitability(player, role, RoleDuty.SUPPORT) == 50

    def test_traits_move_suitability(self):
        """Preferred traits add five, conflicting traits remove five."""
        liked = make_player(position=Position.CB, traits=(PlayerTrait.PLAYS_SHORT_PASSES,))
        disliked = make_player(position=Position.CB, traits=(PlayerTrait.DIVES_STRAIGHT_IN,))
        assert calculate_role_suitability(liked, PlayerRole.BALL_PLAYING_DEFENDER) == 55
        assert calculate_role_suitability(disliked, PlayerRole.BALL_PLAYING_DEFENDER) == 45

    def test_suitability_is_capped(self):
        player = make_player(
            position=Position.CB,
            attributes={attr: 20 for attr in ALL_ATTRIBUTES},
            traits=(PlayerTrait.PLAYS_SHORT_PASSES, PlayerTrait.DICTATES_TEMPO),
        )
        assert calculate_role_suitability(player, PlayerRole.BALL_PLAYING_DEFENDER) == 100

    def test_compatible_roles_sorted_best_first(self):
        player = make_player(
            position=Position.ST,
            attributes={"finishing": 18, "composure": 16, "off_the_ball": 17, "anticipation": 16},
        )
        scored = get_compatible_roles(player)
        values = [score for _, score in scored]
        assert values == sorted(values, reverse=True)
        assert all(role in {d.role for d in roles_for_position(Position.ST)} for role, _ in scored)

    def test_ties_keep_catalogue_order(self):
        """An average centre back's best role is the first centre-back role listed."""
        player = make_player(position=Position.CB)
        role, score = get_best_role(player)
        assert role == roles_for_position(Position.CB)[0].role
        assert score == 50

    def test_best_role_at_other_position(self):
        player = make_player(position=Position.CB)
        role, _ = get_best_role(player, Position.ST)
        assert role in {d.role for d in roles_for_position(Position.ST)}


class TestTacticalStyles:
    """Tests for tactical style derivation."""

    def test_balanced_style_uses_half_up_midpoints(self):
        style = derive_tactical_style(ScoutingPhilosophy.MARKET_SMART, 50)
        assert style.identity == TacticalIdentity.BALANCED
        assert style.defensive_line == 11
        assert style.pressing_intensity == 11
        assert style.tempo == 11
        assert style.width == 11
        assert style.directness == 11

    def test_academy_clubs_play_possession(self):
        style = derive_tactical_style(ScoutingPhilosophy.ACADEMY_FIRST, 30)
        assert style.identity == TacticalIdentity.POSSESSION_BASED
        assert style.defensive_line == 14
        assert style.tempo == 8
        assert style.directness == 5

    def test_win_now_identity_depends_on_reputation(self):
        assert derive_tactical_style(ScoutingPhilosophy.WIN_NOW, 60).identity == TacticalIdentity.HIGH_PRESS
        assert derive_tactical_style(ScoutingPhilosophy.WIN_NOW, 59).identity == TacticalIdentity.COUNTER_ATTACKING

    def test_global_recruiter_identity_depends_on_reputation(self):
        assert derive_tactical_style(ScoutingPhilosophy.GLOBAL_RECRUITER, 50).identity == TacticalIdentity.WING_PLAY
        assert derive_tactical_style(ScoutingPhilosophy.GLOBAL_RECRUITER, 49).identity == TacticalIdentity.BALANCED

    def test_generated_style_inside_identity_ranges(self):
        rng = random.Random(42)
        for philosophy in ScoutingPhilosophy:
            for reputation in (20, 55, 85):
                style = generate_tactical_style(rng, philosophy, reputation)
                profile = IDENTITY_PROFILES[style.identity]
                assert profile.defensive_line[0] <= style.defensive_line <= profile.defensive_line[1]
                assert profile.pressing_intensity[0] <= style.pressing_intensity <= profile.pressing_intensity[1]
                assert profile.width[0] <= style.width <= profile.width[1]

    def test_explicit_style_wins(self):
        explicit = derive_tactical_style(ScoutingPhilosophy.ACADEMY_FIRST, 50)
        club = make_club(scouting_philosophy=ScoutingPhilosophy.MARKET_SMART, tactical_style=explicit)
        assert club_tactical_style(club) is explicit
        assert has_strong_identity(club)

    def test_role_hints_only_for_strong_identities(self):
        balanced = make_club(scouting_philosophy=ScoutingPhilosophy.MARKET_SMART)
        academy = make_club(scouting_philosophy=ScoutingPhilosophy.ACADEMY_FIRST)
        assert preferred_role_for(balanced, Position.CB) is None
        assert preferred_role_for(academy, Position.CB) == PlayerRole.BALL_PLAYING_DEFENDER


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

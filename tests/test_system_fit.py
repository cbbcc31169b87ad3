"""Tests for system fit evaluation."""

import pytest

from scout_manager.core.models import (
    ManagerProfile,
    PlayerRole,
    PlayerTrait,
    Position,
    ScoutingPhilosophy,
    TacticalIdentity,
    TacticalStyle,
)
from scout_manager.engine.roles import calculate_role_suitability
from scout_manager.engine.system_fit import (
    Formation,
    SystemFitEvaluator,
    age_fit,
    formation_positions,
    parse_formation,
)

from conftest import make_club, make_player


class TestFormations:
    """Tests for formation parsing."""

    def test_parse_standard_formations(self):
        assert parse_formation("4-3-3") == Formation(4, 3, 3)
        assert parse_formation("4-2-3-1") == Formation(4, 2, 3)

    def test_unreadable_formations(self):
        assert parse_formation("4-4") is None
        assert parse_formation("diamond") is None
        assert parse_formation("a-b-c") is None

    def test_positions_deployed(self):
        deployed = formation_positions(Formation(4, 4, 2))
        assert Position.LB in deployed
        assert Position.CAM in deployed
        assert Position.ST in deployed
        assert Position.LW not in deployed
        assert Position.RW not in deployed
        assert Position.LW in formation_positions(Formation(4, 3, 3))


class TestAgeFit:
    def test_inside_window(self):
        assert age_fit(24, (21, 27)) == 100

    def test_decay_outside_window(self):
        assert age_fit(20, (21, 27)) == 95
        assert age_fit(35, (24, 31)) == 80
        assert age_fit(35, (24, 31), decay_per_year=2) == 92

    def test_never_negative(self):
        assert age_fit(60, (17, 23)) == 0


class TestSystemFitEvaluator:
    """Tests for the four-dimension fit score."""

    def setup_method(self):
        self.evaluator = SystemFitEvaluator()
        self.club = make_club(scouting_philosophy=ScoutingPhilosophy.MARKET_SMART)
        self.manager = ManagerProfile(club_id="club_a", name="Sam Archer", preferred_formation="4-4-2")

    def test_average_midfielder(self):
        """Weighted combination with half-up rounding: 25 + 15 + 12.5 + 20."""
        player = make_player(position=Position.CM, age=24)
        result = self.evaluator.evaluate(player, self.club, self.manager)

        assert result.position_fit == 100
        assert result.role_fit == 50
        assert result.tactical_fit == 50
        assert result.age_fit == 100
        assert result.overall_fit == 73
        assert result.suggested_role is not None
        assert any("formation" in s for s in result.strengths)
        assert any("tactical identity" in w for w in result.weaknesses)

    def test_position_fit_levels(self):
        formation = "4-4-2"
        assert self.evaluator.score_position_fit(make_player(position=Position.ST), formation) == 100
        secondary = make_player(position=Position.LW, secondary_positions=(Position.ST,))
        assert self.evaluator.score_position_fit(secondary, formation) == 70
        adjacent = make_player(position=Position.LW)
        assert self.evaluator.score_position_fit(adjacent, formation) == 40
        assert self.evaluator.score_position_fit(adjacent, "3-1-0") == 10
        assert self.evaluator.score_position_fit(adjacent, "diamond") == 50

    def test_preferred_role_used_when_player_can_play_it(self):
        player = make_player(position=Position.CB, traits=(PlayerTrait.PLAYS_SHORT_PASSES,))
        result = self.evaluator.evaluate(player, self.club, self.manager, PlayerRole.NO_NONSENSE_CB)
        assert result.role_fit == calculate_role_suitability(player, PlayerRole.NO_NONSENSE_CB)

    def test_preferred_role_ignored_for_other_positions(self):
        """A goalkeeping role says nothing about a centre back."""
        player = make_player(position=Position.CB, traits=(PlayerTrait.PLAYS_SHORT_PASSES,))
        with_role = self.evaluator.evaluate(player, self.club, self.manager, PlayerRole.SHOT_STOPPER)
        without_role = self.evaluator.evaluate(player, self.club, self.manager)
        assert with_role.role_fit == without_role.role_fit

    def test_demanding_style_penalties(self):
        """High press, high line and high tempo all punish average legs and decisions."""
        style = TacticalStyle(
            identity=TacticalIdentity.HIGH_PRESS,
            defensive_line=16,
            pressing_intensity=18,
            tempo=16,
            width=12,
            directness=10,
        )
        player = make_player(position=Position.CM)
        assert self.evaluator.score_tactical_fit(player, style) == 21

    def test_width_penalty_only_for_wide_players(self):
        style = TacticalStyle(identity=TacticalIdentity.WING_PLAY, width=18)
        winger = make_player(position=Position.LW)
        striker = make_player(position=Position.ST)
        assert self.evaluator.score_tactical_fit(winger, style) == 45
        assert self.evaluator.score_tactical_fit(striker, style) == 50

    def test_identity_traits(self):
        style = TacticalStyle(identity=TacticalIdentity.POSSESSION_BASED)
        liked = make_player(traits=(PlayerTrait.PLAYS_SHORT_PASSES,))
        disliked = make_player(traits=(PlayerTrait.SHOOTS_FROM_DISTANCE,))
        assert self.evaluator.score_tactical_fit(liked, style) == 55
        assert self.evaluator.score_tactical_fit(disliked, style) == 45

    def test_scores_stay_in_bounds(self):
        for age in (16, 24, 40):
            for position in Position:
                result = self.evaluator.evaluate(make_player(position=position, age=age), self.club, self.manager)
                for value in (result.overall_fit, result.position_fit, result.role_fit,
                              result.tactical_fit, result.age_fit):
                    assert 0 <= value <= 100

    def test_deterministic(self):
        player = make_player(position=Position.ST, age=29)
        first = self.evaluator.evaluate(player, self.club, self.manager)
        second = self.evaluator.evaluate(player, self.club, self.manager)
        assert first == second


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

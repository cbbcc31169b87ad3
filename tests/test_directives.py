"""Tests for directive generation and report matching."""

import random

import pytest

from scout_manager.core.models import (
    ConvictionLevel,
    DifficultyScaling,
    Directive,
    DirectivePriority,
    ManagerProfile,
    Position,
    ScoutingPhilosophy,
)
from scout_manager.engine.directives import (
    DirectiveGenerator,
    ReportMatcher,
    ability_to_stars,
    sort_by_priority,
)

from conftest import make_club, make_player, make_report


def make_directive(id="dir1", position=Position.CM, priority=DirectivePriority.HIGH, **kwargs) -> Directive:
    return Directive(
        id=id,
        club_id=kwargs.pop("club_id", "club_a"),
        position=position,
        priority=priority,
        budget_allocation=kwargs.pop("budget_allocation", 3_000_000),
        age_range=kwargs.pop("age_range", (21, 27)),
        min_ability_stars=kwargs.pop("min_ability_stars", 2.5),
        key_attributes=kwargs.pop("key_attributes", ("passing", "stamina", "decision_making", "work_rate")),
        season=kwargs.pop("season", 1),
        **kwargs,
    )


class TestHelpers:
    def test_ability_to_stars(self):
        assert ability_to_stars(100) == 2.5
        assert ability_to_stars(200) == 5.0
        assert ability_to_stars(130) == 3.5
        assert ability_to_stars(1) == 0.5

    def test_sort_by_priority(self):
        directives = [
            make_directive("low", priority=DirectivePriority.LOW),
            make_directive("critical", priority=DirectivePriority.CRITICAL),
            make_directive("medium", priority=DirectivePriority.MEDIUM),
            make_directive("high", priority=DirectivePriority.HIGH),
        ]
        ordered = [d.id for d in sort_by_priority(directives)]
        assert ordered == ["critical", "high", "medium", "low"]


class TestDirectiveGenerator:
    """Tests for seasonal directive generation."""

    def setup_method(self):
        self.generator = DirectiveGenerator()
        self.manager = ManagerProfile(club_id="club_a", name="Sam Archer", preferred_formation="4-3-3")

    def test_empty_squad_top_club(self):
        """An empty squad at a big club: every gap is critical."""
        club = make_club(reputation=85, budget=10_000_000)
        directives = self.generator.generate(random.Random(42), club, self.manager, [], season=1)

        assert 2 <= len(directives) <= 4
        for directive in directives:
            assert directive.priority == DirectivePriority.CRITICAL
            assert directive.min_ability_stars == 3.5
            assert directive.budget_allocation == 4_000_000
            assert directive.age_range == (21, 27)
            assert directive.season == 1
            assert not directive.fulfilled
        assert directives[0].position == Position.GK
        assert directives[0].id == "dir_club_a_GK_s1_0"

    def test_board_scaling_applied(self):
        club = make_club(reputation=85, budget=10_000_000)
        scaling = DifficultyScaling(ability_stars_multiplier=1.3, budget_scale=0.5, age_year_delta=-1)
        directives = self.generator.generate(random.Random(42), club, self.manager, [], 2, scaling)
        for directive in directives:
            assert directive.min_ability_stars == 4.5
            assert directive.budget_allocation == 2_000_000
            assert directive.age_range == (22, 26)

    def test_only_own_squad_counts(self):
        """Players of other clubs never fill a gap."""
        club = make_club(reputation=50)
        outsiders = [make_player(f"o{i}", position=p, ability=150, club_id="club_z") for i, p in enumerate(Position)]
        directives = self.generator.generate(random.Random(1), club, self.manager, outsiders, 1)
        assert all(d.priority == DirectivePriority.CRITICAL for d in directives)

    def test_no_gaps_no_directives(self):
        club = make_club()
        squad = [make_player(f"s{i}", position=p, ability=100, club_id="club_a") for i, p in enumerate(Position)]
        assert self.generator.generate(random.Random(42), club, self.manager, squad, 1) == []

    def test_gaps_ranked_by_size(self):
        squad = [
            make_player("gk", position=Position.GK, ability=60, club_id="club_a"),
            make_player("cb", position=Position.CB, ability=90, club_id="club_a"),
        ] + [
            make_player(f"s{i}", position=p, ability=120, club_id="club_a")
            for i, p in enumerate(Position) if p not in (Position.GK, Position.CB)
        ]
        gaps = self.generator.identify_position_gaps(squad)
        assert [position for position, _ in gaps] == [Position.GK, Position.CB]
        assert gaps[0][1] > gaps[1][1]

    def test_secondary_positions_cover_gaps(self):
        squad = [
            make_player("a", position=Position.CM, ability=100, club_id="club_a",
                        secondary_positions=(Position.CDM,)),
            make_player("b", position=Position.ST, ability=100, club_id="club_a"),
        ]
        gap_positions = [p for p, _ in self.generator.identify_position_gaps(squad)]
        assert Position.CDM not in gap_positions
        assert Position.CM not in gap_positions
        assert Position.GK in gap_positions

    @pytest.mark.parametrize("gap,priority", [
        (31, DirectivePriority.CRITICAL),
        (30, DirectivePriority.HIGH),
        (21, DirectivePriority.HIGH),
        (20, DirectivePriority.MEDIUM),
        (11, DirectivePriority.MEDIUM),
        (10, DirectivePriority.LOW),
    ])
    def test_priority_bands(self, gap, priority):
        assert self.generator.priority_for_gap(gap) == priority

    def test_min_stars_bands(self):
        assert self.generator.min_stars_for(85) == 3.5
        assert self.generator.min_stars_for(60) == 3.0
        assert self.generator.min_stars_for(45) == 2.5
        assert self.generator.min_stars_for(20) == 2.0
        assert self.generator.min_stars_for(10) == 1.5
        assert self.generator.min_stars_for(85, 0.85) == 3.0

    def test_age_window_never_inverts(self):
        club = make_club(scouting_philosophy=ScoutingPhilosophy.ACADEMY_FIRST)
        assert self.generator.age_range_for(club) == (17, 23)
        assert self.generator.age_range_for(club, 1) == (16, 24)
        assert self.generator.age_range_for(club, -4) == (20, 20)

    def test_key_attributes(self):
        attrs = self.generator.select_key_attributes(random.Random(3), Position.CB)
        assert len(attrs) == 4
        assert attrs[:3] == ("defensive_awareness", "heading", "strength")

    def test_role_hint_for_strong_identity(self):
        club = make_club(reputation=85, scouting_philosophy=ScoutingPhilosophy.ACADEMY_FIRST)
        directives = self.generator.generate(random.Random(42), club, self.manager, [], 1)
        assert all(d.preferred_role is not None for d in directives)


class TestReportMatcher:
    """Tests for matching reports to directives."""

    def setup_method(self):
        self.matcher = ReportMatcher()

    def test_good_match(self):
        """Primary position, age, stars and two key attributes: 35 + 15 + 15 + 10 + 4."""
        player = make_player(position=Position.CM, age=24)
        report = make_report(
            player,
            perceived_ability_stars=3.0,
            attribute_assessments={"passing": 12, "stamina": 11},
        )
        match = self.matcher.match(report, player, [make_directive()])
        assert match is not None
        assert match.directive_id == "dir1"
        assert match.match_score == 79

    def test_poor_report_matches_nothing(self):
        player = make_player(position=Position.GK, age=35)
        report = make_report(player, perceived_ability_stars=1.0)
        assert self.matcher.match(report, player, [make_directive()]) is None

    def test_ties_keep_first_directive(self):
        player = make_player(position=Position.CM, age=24)
        report = make_report(player, perceived_ability_stars=3.0)
        directives = [make_directive("first"), make_directive("second")]
        assert self.matcher.match(report, player, directives).directive_id == "first"

    def test_fulfilled_directives_skipped(self):
        player = make_player(position=Position.CM, age=24)
        report = make_report(player, perceived_ability_stars=3.0)
        directives = [make_directive("done", fulfilled=True), make_directive("open")]
        assert self.matcher.match(report, player, directives).directive_id == "open"

    def test_best_directive_wins(self):
        player = make_player(position=Position.ST, age=24, secondary_positions=(Position.CAM,))
        report = make_report(player, perceived_ability_stars=3.0)
        directives = [make_directive("cam", position=Position.CAM), make_directive("st", position=Position.ST)]
        assert self.matcher.match(report, player, directives).directive_id == "st"

    def test_position_scores(self):
        player = make_player(position=Position.CB, secondary_positions=(Position.LB,))
        assert self.matcher.score_position(player, Position.CB) == 35
        assert self.matcher.score_position(player, Position.LB) == 25
        assert self.matcher.score_position(player, Position.CDM) == 14
        assert self.matcher.score_position(player, Position.ST) == 0

    def test_stars_estimated_from_ability_without_perception(self):
        player = make_player(position=Position.CM, age=24, ability=100)
        report = make_report(player, conviction=ConvictionLevel.NOTE)
        strict = make_directive(min_ability_stars=3.0)
        lenient = make_directive(min_ability_stars=2.5)
        assert self.matcher.score(report, player, lenient) - self.matcher.score(report, player, strict) == 15


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

"""Tests for the board satisfaction state machine."""

import random
from dataclasses import replace

import pytest

from scout_manager.core.models import (
    BoardPersonality,
    BoardProfile,
    BoardReactionType,
    ConvictionLevel,
    Directive,
    DirectivePriority,
    MessageType,
    Observation,
    Position,
    TransferOutcome,
    TransferRecord,
)
from scout_manager.engine.board_ai import BoardAI

from conftest import make_context, make_player, make_report


def make_directive(id, season=1, fulfilled=False) -> Directive:
    return Directive(
        id=id,
        club_id="club_a",
        position=Position.CM,
        priority=DirectivePriority.HIGH,
        budget_allocation=1_000_000,
        age_range=(21, 27),
        min_ability_stars=2.5,
        key_attributes=("passing",),
        season=season,
        fulfilled=fulfilled,
    )


def make_settled_record(id, outcome, season=1) -> TransferRecord:
    return TransferRecord(
        id=id,
        player_id="p1",
        scout_id="scout1",
        from_club_id="club_b",
        to_club_id="club_a",
        fee=1_000_000,
        ability_at_transfer=100,
        transfer_season=season - 2,
        scout_conviction=ConvictionLevel.RECOMMEND,
        outcome=outcome,
        outcome_season=season,
    )


class TestSatisfaction:
    """Tests for the weekly satisfaction evaluation."""

    def setup_method(self):
        self.board = BoardAI()

    def test_missing_profile_is_generated(self):
        profile = self.board.evaluate_satisfaction(random.Random(42), make_context())
        assert profile.satisfaction == 60
        assert profile.patience == 70
        assert profile.personality in BoardPersonality

    def test_reports_raise_satisfaction(self):
        """Report credit is capped at three per week."""
        player = make_player()
        reports = {f"r{i}": make_report(player, id=f"r{i}", week=3) for i in range(5)}
        context = make_context(
            week=3,
            reports=reports,
            board_profile=BoardProfile(personality=BoardPersonality.PATIENT),
        )
        profile = self.board.evaluate_satisfaction(random.Random(42), context)
        assert 74 <= profile.satisfaction <= 76
        assert profile.patience == 75

    def test_idle_week_costs_satisfaction(self):
        context = make_context(week=3, board_profile=BoardProfile(personality=BoardPersonality.IMPATIENT))
        profile = self.board.evaluate_satisfaction(random.Random(42), context)
        assert profile.satisfaction < 60

    def test_observation_is_not_idle(self):
        observation = Observation(id="o1", player_id="p1", scout_id="scout1", week=3, season=1)
        context = make_context(
            week=3,
            observations=(observation,),
            board_profile=BoardProfile(personality=BoardPersonality.IMPATIENT),
        )
        profile = self.board.evaluate_satisfaction(random.Random(42), context)
        assert profile.satisfaction >= 59

    def test_missed_directives_at_deadline(self):
        directives = (
            make_directive("d1"),
            make_directive("d2"),
            make_directive("d3", fulfilled=True),
            make_directive("old", season=0),
        )
        context = make_context(
            week=36,
            directives=directives,
            board_profile=BoardProfile(personality=BoardPersonality.IMPATIENT),
        )
        profile = self.board.evaluate_satisfaction(random.Random(42), context)
        assert profile.patience == 54
        assert profile.satisfaction < 30

    def test_flops_hurt_and_hits_help(self):
        flop_context = make_context(
            week=38,
            scout_club_id="club_a",
            transfer_records=(make_settled_record("f", TransferOutcome.FLOP),),
            reports={"r": make_report(make_player(), id="r", week=38)},
            board_profile=BoardProfile(personality=BoardPersonality.IMPATIENT),
        )
        hit_context = flop_context.evolve(
            transfer_records=(make_settled_record("h", TransferOutcome.HIT),),
        )
        flop = self.board.evaluate_satisfaction(random.Random(1), flop_context)
        hit = self.board.evaluate_satisfaction(random.Random(1), hit_context)
        assert hit.satisfaction - flop.satisfaction == pytest.approx(12, abs=0.11)
        assert flop.patience < hit.patience

    def test_outcomes_from_earlier_seasons_ignored(self):
        context = make_context(
            week=10,
            season=3,
            transfer_records=(make_settled_record("f", TransferOutcome.FLOP, season=2),),
            board_profile=BoardProfile(personality=BoardPersonality.HANDS_OFF),
        )
        profile = self.board.evaluate_satisfaction(random.Random(42), context)
        assert profile.patience == 70

    def test_values_stay_in_bounds(self):
        board_profile = BoardProfile(personality=BoardPersonality.IMPATIENT, satisfaction=3, patience=2)
        rng = random.Random(42)
        for week in range(1, 39):
            context = make_context(week=week, board_profile=board_profile, directives=(make_directive("d1"),))
            board_profile = self.board.evaluate_satisfaction(rng, context)
            assert 0 <= board_profile.satisfaction <= 100
            assert 0 <= board_profile.patience <= 100


class TestReactions:
    """Tests for board reactions."""

    def setup_method(self):
        self.board = BoardAI()

    def test_warning_on_check_week(self):
        """Impatient board at 50 satisfaction warns every fourth week."""
        profile = BoardProfile(personality=BoardPersonality.IMPATIENT, satisfaction=50)
        reaction, updated, message = self.board.generate_reaction(
            random.Random(42), profile, make_context(week=4)
        )
        assert reaction.type == BoardReactionType.WARNING
        assert updated == profile
        assert message.type == MessageType.WARNING

    def test_no_warning_off_week(self):
        profile = BoardProfile(personality=BoardPersonality.IMPATIENT, satisfaction=50)
        assert self.board.generate_reaction(random.Random(42), profile, make_context(week=5)) is None

    def test_neutral_zone(self):
        profile = BoardProfile(personality=BoardPersonality.PATIENT, satisfaction=60)
        for week in range(1, 13):
            assert self.board.generate_reaction(random.Random(42), profile, make_context(week=week)) is None

    def test_ultimatum(self):
        profile = BoardProfile(personality=BoardPersonality.IMPATIENT, satisfaction=30)
        reaction, updated, message = self.board.generate_reaction(
            random.Random(42), profile, make_context(week=10)
        )
        assert reaction.type == BoardReactionType.ULTIMATUM
        assert updated.ultimatum_issued
        assert updated.ultimatum_deadline == 18
        assert updated.budget_multiplier == pytest.approx(0.85)
        assert message.action_required

    def test_ultimatum_deadline_capped_at_season_end(self):
        profile = BoardProfile(personality=BoardPersonality.IMPATIENT, satisfaction=30)
        _, updated, _ = self.board.generate_reaction(random.Random(42), profile, make_context(week=34))
        assert updated.ultimatum_deadline == 38

    def test_budget_cut_during_ultimatum(self):
        profile = BoardProfile(
            personality=BoardPersonality.IMPATIENT,
            satisfaction=30,
            budget_multiplier=0.85,
            ultimatum_issued=True,
            ultimatum_deadline=18,
        )
        reaction, updated, _ = self.board.generate_reaction(random.Random(42), profile, make_context(week=12))
        assert reaction.type == BoardReactionType.BUDGET_CUT
        assert updated.budget_multiplier == pytest.approx(0.775)

    def test_budget_never_below_floor(self):
        profile = BoardProfile(
            personality=BoardPersonality.PENNY_PINCHING,
            satisfaction=20,
            budget_multiplier=0.55,
            ultimatum_issued=True,
            ultimatum_deadline=20,
        )
        _, updated, _ = self.board.generate_reaction(random.Random(42), profile, make_context(week=12))
        assert updated.budget_multiplier == 0.5

    def test_firing_at_lowest_tier(self):
        profile = BoardProfile(personality=BoardPersonality.IMPATIENT, satisfaction=10, patience=5)
        reaction, _, message = self.board.generate_reaction(
            random.Random(42), profile, make_context(week=7, career_tier=1)
        )
        assert reaction.type == BoardReactionType.FIRING
        assert message.title == "Contract Terminated"

    def test_demotion_or_firing(self):
        profile = BoardProfile(personality=BoardPersonality.IMPATIENT, satisfaction=10, patience=5)
        seen = {
            self.board.generate_reaction(random.Random(seed), profile, make_context(week=7))[0].type
            for seed in range(40)
        }
        assert seen == {BoardReactionType.DEMOTION, BoardReactionType.FIRING}

    def test_low_satisfaction_with_patience_left_is_not_fatal(self):
        profile = BoardProfile(personality=BoardPersonality.IMPATIENT, satisfaction=10, patience=50)
        reaction, _, _ = self.board.generate_reaction(random.Random(42), profile, make_context(week=7))
        assert reaction.type == BoardReactionType.ULTIMATUM

    def test_praise_clears_ultimatum(self):
        profile = BoardProfile(
            personality=BoardPersonality.PATIENT,
            satisfaction=90,
            budget_multiplier=1.95,
            ultimatum_issued=True,
            ultimatum_deadline=20,
        )
        for seed in range(10):
            reaction, updated, message = self.board.generate_reaction(
                random.Random(seed), profile, make_context(week=12)
            )
            assert reaction.type in (BoardReactionType.PRAISE, BoardReactionType.BUDGET_INCREASE)
            assert not updated.ultimatum_issued
            assert updated.ultimatum_deadline is None
            assert updated.budget_multiplier <= 2.0
            assert message.type == MessageType.FEEDBACK


class TestDirectiveFeedback:
    """Tests for board-driven directive difficulty."""

    def setup_method(self):
        self.board = BoardAI()

    def test_no_board_no_scaling(self):
        scaling = self.board.adjust_directive_difficulty(None)
        assert scaling.ability_stars_multiplier == 1.0
        assert scaling.budget_scale == 1.0
        assert scaling.age_year_delta == 0

    def test_happy_board_eases_off(self):
        profile = BoardProfile(personality=BoardPersonality.PATIENT, satisfaction=90)
        scaling = self.board.adjust_directive_difficulty(profile)
        assert scaling.ability_stars_multiplier == 0.85
        assert scaling.age_year_delta == 1

    def test_ambitious_board_ratchets_up(self):
        profile = BoardProfile(
            personality=BoardPersonality.AMBITIOUS, satisfaction=50, directive_seasons=(1, 2, 3)
        )
        scaling = self.board.adjust_directive_difficulty(profile)
        assert scaling.ability_stars_multiplier == pytest.approx(1.3)
        assert scaling.age_year_delta == -1

    def test_multiplier_bounds(self):
        profile = BoardProfile(
            personality=BoardPersonality.AMBITIOUS, satisfaction=5, directive_seasons=(1, 2, 3, 4, 5, 6)
        )
        assert self.board.adjust_directive_difficulty(profile).ability_stars_multiplier == 1.5

    def test_penny_pinching_trims_budget(self):
        profile = BoardProfile(personality=BoardPersonality.PENNY_PINCHING, satisfaction=70)
        scaling = self.board.adjust_directive_difficulty(profile)
        assert scaling.budget_scale == pytest.approx(0.85)
        assert scaling.age_year_delta == 0

    def test_record_directive_season_once(self):
        profile = BoardProfile(personality=BoardPersonality.AMBITIOUS)
        profile = self.board.record_directive_season(profile, 1)
        profile = self.board.record_directive_season(profile, 1)
        assert profile.directive_seasons == (1,)


class TestMeetingsAndWeekly:
    def setup_method(self):
        self.board = BoardAI()

    def test_meeting_requires_top_tier(self):
        context = make_context(career_tier=4, board_profile=BoardProfile(personality=BoardPersonality.PATIENT))
        assert self.board.hold_board_meeting(random.Random(42), context) is None

    def test_meeting_buys_time(self):
        profile = BoardProfile(
            personality=BoardPersonality.IMPATIENT,
            satisfaction=40,
            patience=30,
            ultimatum_issued=True,
            ultimatum_deadline=37,
        )
        result = self.board.hold_board_meeting(random.Random(42), make_context(week=30, board_profile=profile))
        assert 46 <= result.profile.satisfaction <= 49
        assert result.profile.patience >= 39
        assert result.profile.ultimatum_deadline == 38

    def test_meeting_rounds_to_one_decimal(self):
        profile = BoardProfile(personality=BoardPersonality.PATIENT, satisfaction=41.3, patience=52.7)
        for seed in range(10):
            result = self.board.hold_board_meeting(random.Random(seed), make_context(board_profile=profile))
            for value in (result.profile.satisfaction, result.profile.patience):
                assert value * 10 == pytest.approx(round(value * 10), abs=1e-9)

    def test_board_tier_is_configurable(self, patient_board):
        board = BoardAI(board_tier=3)
        context = make_context(career_tier=3, board_profile=patient_board)
        assert board.process_weekly(random.Random(42), context) is not None
        assert board.hold_board_meeting(random.Random(42), context) is not None
        lower = make_context(career_tier=2, board_profile=patient_board)
        assert board.process_weekly(random.Random(42), lower) is None

    def test_weekly_only_at_top_tier(self, patient_board):
        assert self.board.process_weekly(random.Random(42), make_context(career_tier=3, board_profile=patient_board)) is None
        result = self.board.process_weekly(random.Random(42), make_context(board_profile=patient_board))
        assert result is not None
        assert len(result.reactions) == len(result.messages) <= 1

    def test_weekly_warning(self):
        profile = BoardProfile(personality=BoardPersonality.IMPATIENT, satisfaction=52)
        context = make_context(week=8, board_profile=profile)
        result = self.board.process_weekly(random.Random(42), context)
        assert [r.type for r in result.reactions] == [BoardReactionType.WARNING]
        assert replace(result.profile, satisfaction=profile.satisfaction) == profile


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

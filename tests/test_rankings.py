"""Tests for the ranking orchestrator."""

import pytest

from src.standings.models import Team, TeamStats, TieBreakMethod
from src.standings.rankings import (
    group_by_wins,
    has_residual_ties,
    rank,
    resolve_standings,
)


# ── Four-team worked example ─────────────────────────────────────────

class TestWorkedExample:
    def test_final_order(self, four_teams, four_team_games):
        result = rank(four_teams, four_team_games)
        assert [s.name for s in result.rankings] == ["Sharks", "Tigers", "Lions", "Eagles"]

    def test_balance_metrics(self, four_teams, four_team_games):
        result = rank(four_teams, four_team_games)
        by_name = {s.name: s for s in result.rankings}
        assert by_name["Sharks"].balance_metric == pytest.approx(0.3810, abs=1e-4)
        assert by_name["Tigers"].balance_metric == pytest.approx(0.2857, abs=1e-4)

    def test_reports_balance_metric_stage(self, four_teams, four_team_games):
        result = rank(four_teams, four_team_games)
        assert result.tie_break_method is TieBreakMethod.BALANCE_METRIC
        assert result.has_ties is False
        assert result.needs_earned_variant is False
        assert result.unresolved_ties is False

    def test_idempotent(self, four_teams, four_team_games):
        assert rank(four_teams, four_team_games) == rank(four_teams, four_team_games)

    def test_permutation_of_input(self, four_teams, four_team_games):
        result = rank(four_teams, four_team_games)
        assert len(result) == len(four_teams)
        assert sorted(result.team_ids()) == sorted(t.id for t in four_teams)

    def test_wins_never_increase_down_the_table(self, four_teams, four_team_games):
        wins = [s.wins for s in rank(four_teams, four_team_games).rankings]
        assert wins == sorted(wins, reverse=True)

    def test_position_of(self, four_teams, four_team_games):
        result = rank(four_teams, four_team_games)
        assert result.position_of("sharks") == 1
        assert result.position_of("eagles") == 4
        with pytest.raises(KeyError):
            result.position_of("nobody")

    def test_accepts_a_generator_of_games(self, four_teams, four_team_games):
        result = rank(four_teams, (g for g in four_team_games))
        assert result.team_ids() == ["sharks", "tigers", "lions", "eagles"]


# ── Stage selection ──────────────────────────────────────────────────

class TestTieBreakStages:
    def test_win_loss_only(self, make_teams, make_game):
        a, b, c = make_teams("A", "B", "C")
        games = [make_game(a, b, 5, 1), make_game(a, c, 5, 1), make_game(b, c, 5, 1)]
        result = rank([c, b, a], games)
        assert result.team_ids() == ["a", "b", "c"]
        assert result.tie_break_method is TieBreakMethod.WIN_LOSS

    def test_head_to_head_precedence(self, make_teams, make_game):
        a, b, c, d = make_teams("A", "B", "C", "D")
        games = [
            make_game(a, b, 2, 1),
            make_game(a, c, 0, 10),
            make_game(a, d, 1, 0),
            make_game(b, c, 15, 0),
            make_game(b, d, 15, 0),
            make_game(c, d, 0, 1),
        ]
        result = rank([a, b, c, d], games)
        by_id = {s.team_id: s for s in result.rankings}
        assert by_id["b"].balance_metric > by_id["a"].balance_metric
        assert result.team_ids() == ["a", "b", "d", "c"]
        assert result.tie_break_method is TieBreakMethod.HEAD_TO_HEAD

    def test_deepest_stage_never_regresses(self, make_teams, make_game):
        """Metric-resolved top group, head-to-head bottom group."""
        a, b, c, d, e = make_teams("A", "B", "C", "D", "E")
        games = [
            make_game(a, b, 5, 5),
            make_game(a, c, 10, 0),
            make_game(a, d, 10, 0),
            make_game(a, e, 10, 0),
            make_game(b, c, 1, 0),
            make_game(b, d, 1, 0),
            make_game(b, e, 1, 0),
            make_game(c, d, 3, 2),
            make_game(c, e, 4, 4),
            make_game(d, e, 6, 1),
        ]
        result = rank([a, b, c, d, e], games)
        assert result.team_ids() == ["a", "b", "c", "d", "e"]
        assert result.tie_break_method is TieBreakMethod.BALANCE_METRIC

    def test_three_way_cycle_uses_metric(self, make_teams, make_game):
        a, b, c = make_teams("A", "B", "C")
        games = [make_game(a, b, 3, 2), make_game(b, c, 5, 1), make_game(c, a, 4, 0)]
        result = rank([a, b, c], games)
        assert result.team_ids() == ["b", "c", "a"]
        assert result.tie_break_method is TieBreakMethod.BALANCE_METRIC

    def test_team_without_games(self, four_teams, four_team_games):
        teams = four_teams + [Team("bye", "Bye")]
        result = rank(teams, four_team_games)
        assert result.team_ids() == ["sharks", "tigers", "bye", "lions", "eagles"]
        bye = result.rankings[2]
        assert bye.balance_metric == 0.0

    def test_empty_tournament(self):
        result = rank([], [])
        assert result.rankings == ()
        assert result.tie_break_method is TieBreakMethod.WIN_LOSS


# ── Residual ties and the earned-run escalation ──────────────────────

class TestResidualTies:
    def test_identical_teams_need_earned_variant(self, make_teams, make_game):
        a, b = make_teams("A", "B")
        result = rank([a, b], [make_game(a, b, 3, 3)])
        assert result.has_ties is True
        assert result.needs_earned_variant is True
        assert result.unresolved_ties is False
        assert result.tie_break_method is TieBreakMethod.BALANCE_METRIC

    def test_earned_variant_resolves(self, make_teams, make_game):
        a, b = make_teams("A", "B")
        games = [make_game(a, b, 3, 3, earned_a=3, earned_b=1)]
        result = rank([b, a], games, use_earned_variant=True)
        assert result.team_ids() == ["a", "b"]
        assert result.tie_break_method is TieBreakMethod.EARNED_BALANCE_METRIC
        assert result.has_ties is False
        assert result.use_earned_variant is True

    def test_earned_variant_exhausted_is_unresolved(self, make_teams, make_game):
        a, b = make_teams("A", "B")
        games = [make_game(a, b, 3, 3, earned_a=2, earned_b=2)]
        result = rank([a, b], games, use_earned_variant=True)
        assert result.unresolved_ties is True
        assert result.needs_earned_variant is False
        assert result.tie_break_method is TieBreakMethod.UNRESOLVED
        assert result.team_ids() == ["a", "b"]

    def test_head_to_head_groups_are_rescanned(self, make_teams, make_game):
        a, b, c, d = make_teams("A", "B", "C", "D")
        # A and B both 1-1 with identical run totals, A won the meeting
        games = [
            make_game(a, b, 2, 1),
            make_game(a, c, 1, 2),
            make_game(b, d, 2, 1),
            make_game(c, d, 5, 0),
        ]
        result = rank([a, b, c, d], games)
        assert result.team_ids() == ["c", "a", "b", "d"]
        assert result.tie_break_method is TieBreakMethod.HEAD_TO_HEAD
        assert result.has_ties is True
        assert result.needs_earned_variant is True
        assert result.unresolved_ties is False

    def test_head_to_head_group_with_equal_earned_metric_is_unresolved(
        self, make_teams, make_game
    ):
        a, b, c, d = make_teams("A", "B", "C", "D")
        games = [
            make_game(a, b, 2, 1, earned_a=2, earned_b=1),
            make_game(a, c, 1, 2, earned_a=1, earned_b=2),
            make_game(b, d, 2, 1, earned_a=2, earned_b=1),
            make_game(c, d, 5, 0, earned_a=5, earned_b=0),
        ]
        result = rank([a, b, c, d], games, use_earned_variant=True)
        assert result.team_ids() == ["c", "a", "b", "d"]
        assert result.unresolved_ties is True
        assert result.needs_earned_variant is False
        assert result.tie_break_method is TieBreakMethod.UNRESOLVED

        escalated = resolve_standings([a, b, c, d], games)
        assert escalated.use_earned_variant is True
        assert escalated.tie_break_method is TieBreakMethod.UNRESOLVED

    def test_tolerance_boundary(self):
        close = [TeamStats("a", "A", balance_metric=0.5), TeamStats("b", "B", balance_metric=0.50005)]
        apart = [TeamStats("a", "A", balance_metric=0.5), TeamStats("b", "B", balance_metric=0.5002)]
        assert has_residual_ties(close) is True
        assert has_residual_ties(apart) is False

    def test_residual_check_uses_chosen_metric(self):
        group = [
            TeamStats("a", "A", balance_metric=1.0, earned_balance_metric=0.25),
            TeamStats("b", "B", balance_metric=1.0, earned_balance_metric=0.75),
        ]
        assert has_residual_ties(group) is True
        assert has_residual_ties(group, use_earned_variant=True) is False


# ── resolve_standings ────────────────────────────────────────────────

class TestResolveStandings:
    def test_no_escalation_when_tqb_suffices(self, four_teams, four_team_games):
        result = resolve_standings(four_teams, four_team_games)
        assert result.use_earned_variant is False
        assert result.tie_break_method is TieBreakMethod.BALANCE_METRIC

    def test_escalates_when_earned_runs_present(self, make_teams, make_game):
        a, b = make_teams("A", "B")
        games = [make_game(a, b, 3, 3, earned_a=1, earned_b=2)]
        result = resolve_standings([a, b], games)
        assert result.use_earned_variant is True
        assert result.team_ids() == ["b", "a"]
        assert result.tie_break_method is TieBreakMethod.EARNED_BALANCE_METRIC

    def test_stays_on_tqb_without_earned_runs(self, make_teams, make_game):
        a, b = make_teams("A", "B")
        result = resolve_standings([a, b], [make_game(a, b, 3, 3)])
        assert result.use_earned_variant is False
        assert result.needs_earned_variant is True


# ── group_by_wins ────────────────────────────────────────────────────

class TestGroupByWins:
    def test_descending_wins_input_order_within(self):
        stats = [
            TeamStats("a", "A", wins=1),
            TeamStats("b", "B", wins=3),
            TeamStats("c", "C", wins=1),
        ]
        groups = group_by_wins(stats)
        assert list(groups) == [3, 1]
        assert [s.team_id for s in groups[1]] == ["a", "c"]

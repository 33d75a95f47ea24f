"""Shared fixtures for the standings test suite."""

import pytest

from src.standings.models import GameRecord, Team


# ------------------------------------------------------------------
# Lightweight factories – cheap to construct, no I/O
# ------------------------------------------------------------------

@pytest.fixture
def make_teams():
    """Build Teams from names; ids are the lower-cased names."""
    def _make(*names):
        return [Team(id=name.lower(), name=name) for name in names]
    return _make


@pytest.fixture
def make_game():
    """Build a scored GameRecord with full (7-inning) defaults."""
    def _make(
        team_a: Team,
        team_b: Team,
        runs_a: int,
        runs_b: int,
        innings: str = "7",
        earned_a=None,
        earned_b=None,
        **overrides,
    ):
        fields = {
            "game_id": f"{team_a.id}-{team_b.id}",
            "team_a_id": team_a.id,
            "team_b_id": team_b.id,
            "team_a_name": team_a.name,
            "team_b_name": team_b.name,
            "runs_a": runs_a,
            "runs_b": runs_b,
            "innings_a_batting": innings,
            "innings_a_defense": innings,
            "innings_b_batting": innings,
            "innings_b_defense": innings,
            "earned_runs_a": earned_a,
            "earned_runs_b": earned_b,
        }
        fields.update(overrides)
        return GameRecord(**fields)
    return _make


# ------------------------------------------------------------------
# Four-team round robin: Tigers and Sharks 2-0-1, Eagles and Lions 0-2-1
# ------------------------------------------------------------------

@pytest.fixture
def four_teams(make_teams):
    return make_teams("Tigers", "Sharks", "Eagles", "Lions")


@pytest.fixture
def four_team_games(four_teams, make_game):
    tigers, sharks, eagles, lions = four_teams
    return [
        make_game(tigers, sharks, 4, 4),
        make_game(tigers, eagles, 6, 2),
        make_game(tigers, lions, 5, 3),
        make_game(sharks, eagles, 6, 1),
        make_game(sharks, lions, 5, 2),
        make_game(eagles, lions, 3, 3),
    ]

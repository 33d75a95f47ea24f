"""Per-team aggregation of game results and the TQB balance metric."""

import logging
from typing import Iterable, NamedTuple

from src.standings.config import OUTS_PER_INNING
from src.standings.innings import innings_to_outs
from src.standings.models import GameRecord, Team, TeamStats

logger = logging.getLogger(__name__)


class _Side(NamedTuple):
    """One game seen from a single team's perspective."""

    runs: int
    opp_runs: int
    earned_runs: int
    opp_earned_runs: int
    innings_batting: str
    innings_defense: str


def _side_for(game: GameRecord, team_id: str) -> _Side:
    if game.team_a_id == team_id:
        return _Side(
            runs=game.runs_a or 0,
            opp_runs=game.runs_b or 0,
            earned_runs=game.earned_runs_a or 0,
            opp_earned_runs=game.earned_runs_b or 0,
            innings_batting=game.innings_a_batting,
            innings_defense=game.innings_a_defense,
        )
    return _Side(
        runs=game.runs_b or 0,
        opp_runs=game.runs_a or 0,
        earned_runs=game.earned_runs_b or 0,
        opp_earned_runs=game.earned_runs_a or 0,
        innings_batting=game.innings_b_batting,
        innings_defense=game.innings_b_defense,
    )


def balance_metric(
    scored: int, allowed: int, outs_batted: int, outs_fielded: int
) -> float:
    """Runs per inning at bat minus runs per inning on defense.

    TQB = (scored / innings batted) - (allowed / innings fielded).
    Defined as 0 when either innings total is zero.
    """
    if outs_batted <= 0 or outs_fielded <= 0:
        return 0.0
    innings_batted = outs_batted / OUTS_PER_INNING
    innings_fielded = outs_fielded / OUTS_PER_INNING
    return (scored / innings_batted) - (allowed / innings_fielded)


def compute_team_stats(team: Team, games: Iterable[GameRecord]) -> TeamStats:
    """Fold every game *team* played into a TeamStats.

    Games not involving the team are ignored. Equal run totals count as a
    tie (neither a win nor a loss). Unset runs count as 0.
    """
    wins = losses = ties = 0
    runs_scored = runs_allowed = 0
    earned_scored = earned_allowed = 0
    outs_batted = outs_fielded = 0

    for game in games:
        if not game.involves(team.id):
            continue

        side = _side_for(game, team.id)

        if side.runs > side.opp_runs:
            wins += 1
        elif side.runs < side.opp_runs:
            losses += 1
        else:
            ties += 1

        runs_scored += side.runs
        runs_allowed += side.opp_runs
        earned_scored += side.earned_runs
        earned_allowed += side.opp_earned_runs
        outs_batted += innings_to_outs(side.innings_batting)
        outs_fielded += innings_to_outs(side.innings_defense)

    stats = TeamStats(
        team_id=team.id,
        name=team.name,
        wins=wins,
        losses=losses,
        ties=ties,
        runs_scored=runs_scored,
        runs_allowed=runs_allowed,
        earned_runs_scored=earned_scored,
        earned_runs_allowed=earned_allowed,
        outs_batted=outs_batted,
        outs_fielded=outs_fielded,
        balance_metric=balance_metric(
            runs_scored, runs_allowed, outs_batted, outs_fielded
        ),
        earned_balance_metric=balance_metric(
            earned_scored, earned_allowed, outs_batted, outs_fielded
        ),
    )

    logger.debug(
        "%s: %d-%d-%d, RS=%d RA=%d, outs %d/%d, TQB=%.4f ER-TQB=%.4f",
        team.name, wins, losses, ties, runs_scored, runs_allowed,
        outs_batted, outs_fielded,
        stats.balance_metric, stats.earned_balance_metric,
    )
    return stats

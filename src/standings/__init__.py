from src.standings.innings import (
    format_innings,
    innings_to_outs,
    is_valid_innings,
    outs_to_innings,
)
from src.standings.matchups import attach_earned_runs, generate_matchups
from src.standings.models import (
    GameRecord,
    RankingResult,
    Team,
    TeamStats,
    TieBreakMethod,
)
from src.standings.rankings import rank, resolve_standings
from src.standings.team_stats import balance_metric, compute_team_stats
from src.standings.tie_breaker import resolve_group

__all__ = [
    "GameRecord",
    "RankingResult",
    "Team",
    "TeamStats",
    "TieBreakMethod",
    "attach_earned_runs",
    "balance_metric",
    "compute_team_stats",
    "format_innings",
    "generate_matchups",
    "innings_to_outs",
    "is_valid_innings",
    "outs_to_innings",
    "rank",
    "resolve_group",
    "resolve_standings",
]

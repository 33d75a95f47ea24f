"""Export games and standings to CSV/JSON-ready structures."""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, Optional

import pandas as pd

from src.standings.innings import format_innings
from src.standings.models import GameRecord, RankingResult, TeamStats
from src.tournament_io.config import GAME_COLUMNS, STANDINGS_COLUMNS
from src.tournament_io.formatting import (
    format_balance_value,
    format_record,
    tie_break_method_text,
)

logger = logging.getLogger(__name__)


def _blank_if_none(value: Optional[int]):
    return "" if value is None else value


def games_to_frame(games: Iterable[GameRecord]) -> pd.DataFrame:
    """Games in the import CSV layout, so an export can be re-imported."""
    rows = [
        {
            "Team_A": game.team_a_name or game.team_a_id,
            "Team_B": game.team_b_name or game.team_b_id,
            "Runs_A": _blank_if_none(game.runs_a),
            "Runs_B": _blank_if_none(game.runs_b),
            "Earned_Runs_A": _blank_if_none(game.earned_runs_a),
            "Earned_Runs_B": _blank_if_none(game.earned_runs_b),
            "Innings_A_Batting": game.innings_a_batting,
            "Innings_A_Defense": game.innings_a_defense,
            "Innings_B_Batting": game.innings_b_batting,
            "Innings_B_Defense": game.innings_b_defense,
        }
        for game in games
    ]
    return pd.DataFrame(rows, columns=GAME_COLUMNS)


def standings_to_frame(result: RankingResult) -> pd.DataFrame:
    """Ranked table with display-formatted innings and metrics."""
    rows = [
        {
            "Rank": position,
            "Team": stats.name,
            "W": stats.wins,
            "L": stats.losses,
            "T": stats.ties,
            "RS": stats.runs_scored,
            "RA": stats.runs_allowed,
            "ER_Scored": stats.earned_runs_scored,
            "ER_Allowed": stats.earned_runs_allowed,
            "Innings_Batting": format_innings(stats.outs_batted),
            "Innings_Defense": format_innings(stats.outs_fielded),
            "TQB": format_balance_value(stats.balance_metric),
            "ER_TQB": format_balance_value(stats.earned_balance_metric),
        }
        for position, stats in enumerate(result.rankings, start=1)
    ]
    return pd.DataFrame(rows, columns=STANDINGS_COLUMNS)


def export_games_csv(games: Iterable[GameRecord], filepath: Path) -> Path:
    """Write games to *filepath* in the import layout."""
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)
    df = games_to_frame(games)
    df.to_csv(filepath, index=False)
    logger.info("Exported %d games to %s", len(df), filepath)
    return filepath


def export_standings_csv(result: RankingResult, filepath: Path) -> Path:
    """Write the ranked standings table to *filepath*."""
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)
    df = standings_to_frame(result)
    df.to_csv(filepath, index=False)
    logger.info("Exported standings for %d teams to %s", len(df), filepath)
    return filepath


def _team_to_dict(position: int, stats: TeamStats) -> dict:
    return {
        "rank": position,
        "team_id": stats.team_id,
        "name": stats.name,
        "record": format_record(stats),
        "wins": stats.wins,
        "losses": stats.losses,
        "ties": stats.ties,
        "runs_scored": stats.runs_scored,
        "runs_allowed": stats.runs_allowed,
        "earned_runs_scored": stats.earned_runs_scored,
        "earned_runs_allowed": stats.earned_runs_allowed,
        "innings_batting": format_innings(stats.outs_batted),
        "innings_defense": format_innings(stats.outs_fielded),
        "outs_batted": stats.outs_batted,
        "outs_fielded": stats.outs_fielded,
        "tqb": round(stats.balance_metric, 4),
        "er_tqb": round(stats.earned_balance_metric, 4),
    }


def standings_to_dict(
    result: RankingResult,
    tournament_name: str = "",
    language: str = "en",
) -> dict:
    """JSON-serializable standings payload with metadata."""
    return {
        "metadata": {
            "version": "1.0",
            "generated_at": datetime.now(timezone.utc).isoformat(),
            "tournament": tournament_name,
            "total_teams": len(result.rankings),
            "tie_break_method": result.tie_break_method.name,
            "tie_break_summary": tie_break_method_text(
                result.tie_break_method, language
            ),
            "use_earned_variant": result.use_earned_variant,
            "needs_earned_variant": result.needs_earned_variant,
            "unresolved_ties": result.unresolved_ties,
        },
        "standings": [
            _team_to_dict(position, stats)
            for position, stats in enumerate(result.rankings, start=1)
        ],
    }

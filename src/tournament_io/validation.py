"""Data-entry validation for teams and game results.

The ranking engine assumes clean input; these checks are what the entry
layer runs before handing games over.
"""

from typing import Iterable, List, Optional, Sequence, Tuple

from src.standings.innings import is_valid_innings
from src.standings.models import GameRecord
from src.tournament_io.config import MAX_TEAMS, MIN_TEAMS


class ValidationError(Exception):
    """Raised when teams or games fail data-entry validation."""

    pass


def _check_runs(label: str, runs: Optional[int]) -> Optional[str]:
    if runs is None:
        return f"{label}: runs required"
    if runs < 0:
        return f"{label}: runs cannot be negative"
    return None


def _check_earned(
    label: str, earned: Optional[int], runs: Optional[int], required: bool
) -> Optional[str]:
    if earned is None:
        return f"{label}: earned runs required" if required else None
    if earned < 0:
        return f"{label}: earned runs cannot be negative"
    if earned > (runs or 0):
        return f"{label}: earned runs cannot exceed total runs"
    return None


def validate_game(
    game: GameRecord, require_earned: bool = False
) -> Tuple[bool, List[str]]:
    """Validate a single game's scores and innings.

    Returns:
        (is_valid, list_of_errors)
    """
    name_a = game.team_a_name or game.team_a_id
    name_b = game.team_b_name or game.team_b_id
    errors = []

    for label, runs in ((name_a, game.runs_a), (name_b, game.runs_b)):
        error = _check_runs(label, runs)
        if error:
            errors.append(error)

    innings_fields = (
        (f"{name_a} batting", game.innings_a_batting),
        (f"{name_a} defense", game.innings_a_defense),
        (f"{name_b} batting", game.innings_b_batting),
        (f"{name_b} defense", game.innings_b_defense),
    )
    for label, innings in innings_fields:
        if not is_valid_innings(innings):
            errors.append(
                f"{label}: invalid innings {innings!r} (use X, X.1, or X.2)"
            )

    earned_fields = (
        (name_a, game.earned_runs_a, game.runs_a),
        (name_b, game.earned_runs_b, game.runs_b),
    )
    for label, earned, runs in earned_fields:
        error = _check_earned(label, earned, runs, require_earned)
        if error:
            errors.append(error)

    return (len(errors) == 0, errors)


def validate_team_names(names: Sequence[str]) -> Tuple[bool, List[str]]:
    """Check team names are present, unique, and within the size limits.

    Returns:
        (is_valid, list_of_errors)
    """
    errors = []

    if len(names) < MIN_TEAMS:
        errors.append(f"At least {MIN_TEAMS} teams are required")
    if len(names) > MAX_TEAMS:
        errors.append(f"At most {MAX_TEAMS} teams are allowed (got {len(names)})")

    seen = set()
    for position, name in enumerate(names, start=1):
        cleaned = (name or "").strip()
        if not cleaned:
            errors.append(f"Team {position}: name required")
            continue
        key = cleaned.lower()
        if key in seen:
            errors.append(f"Team {position}: duplicate name {cleaned!r}")
        seen.add(key)

    return (len(errors) == 0, errors)


def require_valid_games(
    games: Iterable[GameRecord], require_earned: bool = False
) -> None:
    """Raise ValidationError listing every problem across *games*."""
    problems = []
    for number, game in enumerate(games, start=1):
        is_valid, errors = validate_game(game, require_earned=require_earned)
        if not is_valid:
            problems.extend(f"Game {number}: {error}" for error in errors)

    if problems:
        raise ValidationError("; ".join(problems))

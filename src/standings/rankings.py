"""Ranking orchestration - win grouping, tie-breaks, and residual tie checks."""

import logging
from typing import Dict, Iterable, List, Sequence

from src.standings.config import TIE_TOLERANCE
from src.standings.models import (
    GameRecord,
    RankingResult,
    Team,
    TeamStats,
    TieBreakMethod,
)
from src.standings.team_stats import compute_team_stats
from src.standings.tie_breaker import GroupResolution, resolve_group

logger = logging.getLogger(__name__)


def group_by_wins(all_stats: Sequence[TeamStats]) -> Dict[int, List[TeamStats]]:
    """Bucket teams by win count, most wins first, input order kept inside."""
    groups: Dict[int, List[TeamStats]] = {}
    for stats in all_stats:
        groups.setdefault(stats.wins, []).append(stats)
    return {wins: groups[wins] for wins in sorted(groups, reverse=True)}


def has_residual_ties(
    ordered: Sequence[TeamStats],
    use_earned_variant: bool = False,
    tolerance: float = TIE_TOLERANCE,
) -> bool:
    """True if any two adjacent teams' metrics are within *tolerance*."""
    values = sorted(
        (stats.metric(use_earned_variant) for stats in ordered), reverse=True
    )
    return any(
        abs(values[i] - values[i + 1]) < tolerance for i in range(len(values) - 1)
    )


def rank(
    teams: Sequence[Team],
    games: Iterable[GameRecord],
    use_earned_variant: bool = False,
) -> RankingResult:
    """Rank *teams* from their *games*.

    Teams are grouped by wins (most first); each tied group is ordered by
    head-to-head, then by TQB (ER-TQB when *use_earned_variant*). Every
    group of two or more is then checked for metrics closer than
    TIE_TOLERANCE, whichever stage ordered it: with TQB this sets
    ``needs_earned_variant``, with ER-TQB it marks the standings unresolved.

    Never raises for well-typed input; malformed innings count as 0 outs.
    """
    games = list(games)
    all_stats = [compute_team_stats(team, games) for team in teams]

    final: List[TeamStats] = []
    resolutions: List[GroupResolution] = []
    for wins, group in group_by_wins(all_stats).items():
        resolution = resolve_group(group, games, use_earned_variant)
        resolutions.append(resolution)
        final.extend(resolution.teams)
        if len(group) > 1:
            logger.debug(
                "%d-win group of %d resolved by %s",
                wins, len(group), resolution.method.name,
            )

    method = TieBreakMethod.deepest(*(r.method for r in resolutions))

    has_ties = any(
        has_residual_ties(r.teams, use_earned_variant)
        for r in resolutions
        if len(r.teams) > 1
    )
    needs_earned_variant = has_ties and not use_earned_variant
    unresolved = has_ties and use_earned_variant
    if unresolved:
        method = TieBreakMethod.UNRESOLVED

    if needs_earned_variant:
        logger.info("TQB left ties in place; ER-TQB is required")
    elif unresolved:
        logger.warning(
            "ER-TQB did not resolve all ties; manual tie-break required"
        )
    logger.info(
        "Ranked %d teams over %d games (method=%s)",
        len(final), len(games), method.name,
    )

    return RankingResult(
        rankings=tuple(final),
        tie_break_method=method,
        has_ties=has_ties,
        needs_earned_variant=needs_earned_variant,
        unresolved_ties=unresolved,
        use_earned_variant=use_earned_variant,
    )


def resolve_standings(
    teams: Sequence[Team], games: Iterable[GameRecord]
) -> RankingResult:
    """Rank with TQB, escalating to ER-TQB when needed and possible.

    The escalation only happens when every game has earned runs entered
    for both sides; otherwise the TQB result is returned with
    ``needs_earned_variant`` set so the caller can collect them.
    """
    games = list(games)
    result = rank(teams, games)
    if not result.needs_earned_variant:
        return result

    if not all(game.has_earned_runs for game in games):
        logger.info("Earned runs missing for some games; returning TQB standings")
        return result

    return rank(teams, games, use_earned_variant=True)

"""Tie-break resolution for teams level on wins.

Order of precedence within a tied group:
1. Head-to-head record among the tied teams only.
2. TQB (or ER-TQB), highest first.

Residual metric ties are detected by the ranking orchestrator, not here.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

from src.standings.models import GameRecord, TeamStats, TieBreakMethod

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HeadToHeadRecord:
    """A team's wins and losses against the other members of its group."""

    stats: TeamStats
    wins: int = 0
    losses: int = 0

    @property
    def pair(self) -> Tuple[int, int]:
        return (self.wins, self.losses)


@dataclass(frozen=True)
class GroupResolution:
    """Ordered members of one tied group and the stage that ordered them."""

    teams: Tuple[TeamStats, ...]
    method: TieBreakMethod


def head_to_head_records(
    group: Sequence[TeamStats], games: Iterable[GameRecord]
) -> List[HeadToHeadRecord]:
    """Head-to-head records restricted to games between *group* members.

    Returned best first: wins descending, then losses ascending. Members
    with identical records keep their input order.
    """
    member_ids = {stats.team_id for stats in group}
    wins = {team_id: 0 for team_id in member_ids}
    losses = {team_id: 0 for team_id in member_ids}

    for game in games:
        if game.team_a_id not in member_ids or game.team_b_id not in member_ids:
            continue
        runs_a = game.runs_a or 0
        runs_b = game.runs_b or 0
        if runs_a > runs_b:
            wins[game.team_a_id] += 1
            losses[game.team_b_id] += 1
        elif runs_b > runs_a:
            wins[game.team_b_id] += 1
            losses[game.team_a_id] += 1

    records = [
        HeadToHeadRecord(stats, wins[stats.team_id], losses[stats.team_id])
        for stats in group
    ]
    return sorted(records, key=lambda r: (-r.wins, r.losses))


def head_to_head_resolves(records: Sequence[HeadToHeadRecord]) -> bool:
    """True if no two members share the same head-to-head win/loss pair.

    A three-way cycle (A beat B, B beat C, C beat A) leaves everyone 1-1
    and is therefore not resolved.
    """
    pairs = [record.pair for record in records]
    return len(set(pairs)) == len(pairs)


def resolve_group(
    group: Sequence[TeamStats],
    games: Iterable[GameRecord],
    use_earned_variant: bool = False,
) -> GroupResolution:
    """Order a group of teams that share the same number of wins.

    Args:
        group: Members of the tied group, in standings input order.
        games: Every game in the tournament (filtered internally).
        use_earned_variant: Fall back to ER-TQB instead of TQB.

    Returns:
        GroupResolution with the ordered members and the stage used.
    """
    if len(group) <= 1:
        return GroupResolution(tuple(group), TieBreakMethod.WIN_LOSS)

    records = head_to_head_records(group, games)
    if head_to_head_resolves(records):
        logger.debug(
            "Head-to-head resolved %s",
            ", ".join(f"{r.stats.name} ({r.wins}-{r.losses})" for r in records),
        )
        return GroupResolution(
            tuple(r.stats for r in records), TieBreakMethod.HEAD_TO_HEAD
        )

    method = (
        TieBreakMethod.EARNED_BALANCE_METRIC
        if use_earned_variant
        else TieBreakMethod.BALANCE_METRIC
    )
    ordered = sorted(
        group, key=lambda stats: stats.metric(use_earned_variant), reverse=True
    )
    logger.debug(
        "%s ordered %s",
        method.name,
        ", ".join(f"{s.name} ({s.metric(use_earned_variant):+.4f})" for s in ordered),
    )
    return GroupResolution(tuple(ordered), method)

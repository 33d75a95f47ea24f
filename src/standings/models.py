"""Data models for tournament standings - teams, games, and ranking output."""

from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Optional, Tuple


class TieBreakMethod(IntEnum):
    """Tie-break stages, ordered from shallowest to deepest."""

    WIN_LOSS = 0
    HEAD_TO_HEAD = 1
    BALANCE_METRIC = 2
    EARNED_BALANCE_METRIC = 3
    UNRESOLVED = 4

    @classmethod
    def deepest(cls, *methods: "TieBreakMethod") -> "TieBreakMethod":
        """Return the deepest stage among *methods* (WIN_LOSS if none)."""
        return cls(max(methods, default=cls.WIN_LOSS))


@dataclass(frozen=True)
class Team:
    """A tournament entrant."""

    id: str
    name: str


@dataclass(frozen=True)
class GameRecord:
    """One completed (or pending) game between team A and team B.

    Innings are kept as entered ("7", "6.1", "6.2"); runs and earned runs
    are None until entered.
    """

    game_id: str
    team_a_id: str
    team_b_id: str
    team_a_name: str = ""
    team_b_name: str = ""
    runs_a: Optional[int] = None
    runs_b: Optional[int] = None
    innings_a_batting: str = ""
    innings_a_defense: str = ""
    innings_b_batting: str = ""
    innings_b_defense: str = ""
    earned_runs_a: Optional[int] = None
    earned_runs_b: Optional[int] = None

    def involves(self, team_id: str) -> bool:
        return team_id in (self.team_a_id, self.team_b_id)

    @property
    def has_score(self) -> bool:
        return self.runs_a is not None and self.runs_b is not None

    @property
    def has_earned_runs(self) -> bool:
        return self.earned_runs_a is not None and self.earned_runs_b is not None

    def with_earned_runs(self, earned_a: int, earned_b: int) -> "GameRecord":
        """Copy of this game with earned runs attached."""
        return replace(self, earned_runs_a=earned_a, earned_runs_b=earned_b)


@dataclass(frozen=True)
class TeamStats:
    """Aggregated tournament statistics for one team.

    Innings are tracked as integer outs so totals stay exact; the balance
    metrics are computed from them once all games are folded in.
    """

    team_id: str
    name: str
    wins: int = 0
    losses: int = 0
    ties: int = 0
    runs_scored: int = 0
    runs_allowed: int = 0
    earned_runs_scored: int = 0
    earned_runs_allowed: int = 0
    outs_batted: int = 0
    outs_fielded: int = 0
    balance_metric: float = 0.0
    earned_balance_metric: float = 0.0

    @property
    def games_played(self) -> int:
        return self.wins + self.losses + self.ties

    def metric(self, use_earned_variant: bool = False) -> float:
        """TQB, or ER-TQB when *use_earned_variant* is set."""
        return self.earned_balance_metric if use_earned_variant else self.balance_metric


@dataclass(frozen=True)
class RankingResult:
    """Final standings for one ranking run.

    ``rankings`` is ordered best to worst (rank = index + 1).
    ``needs_earned_variant`` asks the caller to re-rank with ER-TQB;
    ``unresolved_ties`` means every automated stage was exhausted.
    """

    rankings: Tuple[TeamStats, ...]
    tie_break_method: TieBreakMethod
    has_ties: bool = False
    needs_earned_variant: bool = False
    unresolved_ties: bool = False
    use_earned_variant: bool = False

    def __len__(self) -> int:
        return len(self.rankings)

    def team_ids(self) -> list[str]:
        return [stats.team_id for stats in self.rankings]

    def position_of(self, team_id: str) -> int:
        """1-based rank of *team_id*.

        Raises:
            KeyError: if the team is not in the standings.
        """
        for index, stats in enumerate(self.rankings):
            if stats.team_id == team_id:
                return index + 1
        raise KeyError(team_id)

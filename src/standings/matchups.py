"""Round-robin matchup generation and earned-run entry."""

from typing import List, Mapping, Sequence, Tuple

from src.standings.models import GameRecord, Team


def generate_matchups(teams: Sequence[Team]) -> List[GameRecord]:
    """One unscored game per unordered pair of *teams*.

    Pairs follow input order: (0, 1), (0, 2), ..., (1, 2), ... so N teams
    yield N * (N - 1) / 2 games.
    """
    matchups = []
    for i, team_a in enumerate(teams):
        for team_b in teams[i + 1:]:
            matchups.append(
                GameRecord(
                    game_id=f"{team_a.id}-{team_b.id}",
                    team_a_id=team_a.id,
                    team_b_id=team_b.id,
                    team_a_name=team_a.name,
                    team_b_name=team_b.name,
                )
            )
    return matchups


def attach_earned_runs(
    games: Sequence[GameRecord],
    earned_runs: Mapping[str, Tuple[int, int]],
) -> List[GameRecord]:
    """New game list with earned runs (team A, team B) keyed by game id.

    Games missing from *earned_runs* are returned unchanged.

    Raises:
        KeyError: if *earned_runs* names a game that is not in *games*.
    """
    unknown = set(earned_runs) - {game.game_id for game in games}
    if unknown:
        raise KeyError(", ".join(sorted(unknown)))

    return [
        game.with_earned_runs(*earned_runs[game.game_id])
        if game.game_id in earned_runs
        else game
        for game in games
    ]

"""Compute tournament standings from a game-results CSV.

Usage:
    python -m src.tournament_io.run_rankings <games.csv> [output_dir]

Examples:
    python -m src.tournament_io.run_rankings data/games/regional.csv
    python -m src.tournament_io.run_rankings regional.csv /tmp/standings
"""

import json
import logging
import sys
from pathlib import Path

from src.logging_config import setup_logging
from src.standings.rankings import resolve_standings
from src.tournament_io.config import STANDINGS_DIR
from src.tournament_io.csv_export import export_standings_csv, standings_to_dict
from src.tournament_io.csv_import import CSVImportError, TournamentCSVImporter
from src.tournament_io.formatting import (
    format_balance_value,
    format_record,
    tie_break_method_text,
)
from src.tournament_io.validation import require_valid_games

logger = logging.getLogger(__name__)


def run_rankings(
    games_file: Path,
    output_dir: Path | None = None,
    language: str = "en",
) -> Path:
    """Import games, rank the teams, and write the standings.

    Args:
        games_file: CSV of game results.
        output_dir: Directory for output files.
            Defaults to ``data/standings/``.
        language: Language of the tie-break summary ("en" or "es").

    Returns:
        Path to the generated JSON file.

    Raises:
        FileNotFoundError: If the games file doesn't exist.
        CSVImportError: If the file can't be parsed or has bad rows.
        ValidationError: If imported games fail validation.
    """
    games_file = Path(games_file)
    if output_dir is None:
        output_dir = STANDINGS_DIR

    logger.info("Starting standings run for %s", games_file)

    # 1. Import
    logger.info("Step 1/3: Importing games...")
    imported = TournamentCSVImporter().read(games_file)
    if not imported.success:
        raise CSVImportError(
            f"{games_file.name} has {len(imported.errors)} error(s): "
            + "; ".join(imported.errors)
        )
    require_valid_games(imported.games)

    # 2. Rank
    logger.info("Step 2/3: Ranking %d teams...", len(imported.teams))
    result = resolve_standings(imported.teams, imported.games)

    # 3. Output
    logger.info("Step 3/3: Writing standings...")
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    output_file = output_dir / f"standings_{games_file.stem}.json"
    payload = standings_to_dict(
        result, tournament_name=games_file.stem, language=language
    )
    with open(output_file, "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2, ensure_ascii=False)

    export_standings_csv(result, output_dir / f"standings_{games_file.stem}.csv")

    # Update latest symlink
    latest_link = output_dir / "standings_latest.json"
    if latest_link.exists() or latest_link.is_symlink():
        latest_link.unlink()
    latest_link.symlink_to(output_file.name)

    # Summary
    metric_label = "ER-TQB" if result.use_earned_variant else "TQB"
    logger.info("Standings complete! Output: %s", output_file)
    for position, stats in enumerate(result.rankings, start=1):
        logger.info(
            "  %d. %-20s %-7s %s %s",
            position,
            stats.name,
            format_record(stats),
            metric_label,
            format_balance_value(stats.metric(result.use_earned_variant)),
        )
    logger.info("  %s", tie_break_method_text(result.tie_break_method, language))
    if result.needs_earned_variant:
        logger.warning(
            "TQB left ties; add earned runs for every game and re-run for ER-TQB"
        )

    return output_file


if __name__ == "__main__":
    setup_logging()

    if len(sys.argv) < 2:
        print(__doc__)
        sys.exit(2)

    games_file = Path(sys.argv[1])
    output_dir = Path(sys.argv[2]) if len(sys.argv) > 2 else None

    try:
        output = run_rankings(games_file, output_dir)
        print(f"Standings written: {output}")
    except Exception:
        logger.exception("Standings run failed")
        sys.exit(1)

"""CSV import of tournament game results.

One row per game, columns (case-insensitive):
    Team_A, Team_B, Runs_A, Runs_B, Earned_Runs_A, Earned_Runs_B,
    Innings_A_Batting, Innings_A_Defense, Innings_B_Batting, Innings_B_Defense

Teams are created in the order they first appear. Bad rows are skipped
and reported as "Row N", N being the line number in the file; they never
abort the whole import. Blank lines are ignored.
"""

import io
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd

from src.standings.models import GameRecord, Team
from src.tournament_io.config import (
    GAME_COLUMNS,
    MAX_TEAMS,
    MIN_TEAMS,
    OPTIONAL_GAME_COLUMNS,
)
from src.tournament_io.validation import validate_game

logger = logging.getLogger(__name__)

_SAMPLE_CSV = """\
Team_A,Team_B,Runs_A,Runs_B,Earned_Runs_A,Earned_Runs_B,Innings_A_Batting,Innings_A_Defense,Innings_B_Batting,Innings_B_Defense
Tigers,Eagles,5,3,4,2,7,6.2,6.2,7
Eagles,Sharks,2,8,1,6,7,7,7,7
Tigers,Sharks,4,4,3,3,7,7,7,7
"""


class CSVImportError(Exception):
    """Raised when a CSV file cannot be read or lacks required columns."""


@dataclass
class ImportResult:
    """Teams and games parsed from a CSV, plus any row-level errors."""

    teams: List[Team] = field(default_factory=list)
    games: List[GameRecord] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.errors


def sample_csv() -> str:
    """Example file content showing the expected layout."""
    return _SAMPLE_CSV


def _parse_int(value) -> Optional[int]:
    """Parse a whole number from CSV text; None for blank or non-integer."""
    if value is None or pd.isna(value):
        return None
    s = str(value).strip()
    if s == "":
        return None
    try:
        number = float(s)
    except ValueError:
        return None
    if not number.is_integer():
        return None
    return int(number)


class TournamentCSVImporter:
    """Reads game-result CSVs into Team and GameRecord objects."""

    def read(self, filepath: Path) -> ImportResult:
        """Read and parse a CSV file.

        Raises:
            FileNotFoundError: if *filepath* does not exist.
            CSVImportError: if the file is not readable as CSV or is
                missing required columns.
        """
        filepath = Path(filepath)
        if not filepath.exists():
            raise FileNotFoundError(f"Game file not found: {filepath}")

        logger.info("Reading games: %s", filepath.name)
        try:
            df = pd.read_csv(
                filepath,
                dtype=str,
                keep_default_na=False,
                skipinitialspace=True,
                skip_blank_lines=False,
            )
        except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
            raise CSVImportError(f"Failed to read {filepath}: {e}") from e

        return self.parse_frame(df)

    def parse_text(self, content: str) -> ImportResult:
        """Parse CSV content already held in memory."""
        try:
            df = pd.read_csv(
                io.StringIO(content),
                dtype=str,
                keep_default_na=False,
                skipinitialspace=True,
                skip_blank_lines=False,
            )
        except (pd.errors.ParserError, pd.errors.EmptyDataError) as e:
            raise CSVImportError(f"Failed to parse CSV content: {e}") from e

        return self.parse_frame(df)

    def parse_frame(self, df: pd.DataFrame) -> ImportResult:
        """Build teams and games from a raw string DataFrame."""
        df = self._normalize_columns(df)
        present = [column for column in GAME_COLUMNS if column in df.columns]
        blank = (df[present] == "").all(axis=1)

        if blank.all():
            return ImportResult(
                errors=["CSV must contain a header row and at least one data row"]
            )

        teams: Dict[str, Team] = {}
        result = ImportResult()

        for index, row in df.iterrows():
            if blank[index]:
                continue
            row_num = index + 2  # header is line 1, blank lines keep their number
            game = self._parse_row(row, row_num, teams, len(result.games), result.errors)
            if game is not None:
                result.games.append(game)

        result.teams = list(teams.values())

        if len(result.teams) < MIN_TEAMS:
            result.errors.append(f"CSV must contain at least {MIN_TEAMS} different teams")
        if len(result.teams) > MAX_TEAMS:
            result.errors.append(
                f"CSV contains more than {MAX_TEAMS} teams (maximum allowed)"
            )

        if result.errors:
            logger.warning(
                "CSV import finished with %d error(s): %s",
                len(result.errors), "; ".join(result.errors),
            )
        logger.info(
            "Loaded %d teams and %d games", len(result.teams), len(result.games)
        )
        return result

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _normalize_columns(df: pd.DataFrame) -> pd.DataFrame:
        """Map headers onto canonical names, raising if any are missing."""
        by_lower = {str(col).strip().lower(): col for col in df.columns}
        renames = {}
        missing = []
        for column in GAME_COLUMNS:
            original = by_lower.get(column.lower())
            if original is None:
                if column not in OPTIONAL_GAME_COLUMNS:
                    missing.append(column.lower())
                continue
            renames[original] = column

        if missing:
            raise CSVImportError(
                "Missing required column(s): " + ", ".join(missing)
            )

        df = df.rename(columns=renames).fillna("")
        for column in GAME_COLUMNS:
            if column in df.columns:
                df[column] = df[column].astype(str).str.strip()
        return df.reset_index(drop=True)

    @staticmethod
    def _parse_row(
        row: pd.Series,
        row_num: int,
        teams: Dict[str, Team],
        game_count: int,
        errors: List[str],
    ) -> Optional[GameRecord]:
        name_a = row["Team_A"]
        name_b = row["Team_B"]
        if not name_a or not name_b:
            errors.append(f"Row {row_num}: Missing team name(s)")
            return None
        if name_a == name_b:
            errors.append(f"Row {row_num}: {name_a} cannot play itself")
            return None

        runs_a = _parse_int(row["Runs_A"])
        runs_b = _parse_int(row["Runs_B"])
        if runs_a is None or runs_b is None:
            errors.append(f"Row {row_num}: Invalid runs values")
            return None

        earned = []
        for column in ("Earned_Runs_A", "Earned_Runs_B"):
            raw = row.get(column, "")
            value = _parse_int(raw)
            if value is None and str(raw).strip():
                errors.append(f"Row {row_num}: Invalid earned runs values")
                return None
            earned.append(value)

        pending = dict(teams)
        for name in (name_a, name_b):
            if name not in pending:
                pending[name] = Team(id=f"team-{len(pending)}", name=name)

        game = GameRecord(
            game_id=f"game-{game_count}",
            team_a_id=pending[name_a].id,
            team_b_id=pending[name_b].id,
            team_a_name=name_a,
            team_b_name=name_b,
            runs_a=runs_a,
            runs_b=runs_b,
            innings_a_batting=row["Innings_A_Batting"],
            innings_a_defense=row["Innings_A_Defense"],
            innings_b_batting=row["Innings_B_Batting"],
            innings_b_defense=row["Innings_B_Defense"],
            earned_runs_a=earned[0],
            earned_runs_b=earned[1],
        )

        is_valid, game_errors = validate_game(game)
        if not is_valid:
            errors.extend(f"Row {row_num}: {error}" for error in game_errors)
            return None

        teams.update(pending)
        return game

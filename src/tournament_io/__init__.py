from src.tournament_io.csv_export import (
    export_games_csv,
    export_standings_csv,
    games_to_frame,
    standings_to_dict,
    standings_to_frame,
)
from src.tournament_io.csv_import import (
    CSVImportError,
    ImportResult,
    TournamentCSVImporter,
    sample_csv,
)
from src.tournament_io.formatting import (
    format_balance_value,
    format_record,
    tie_break_method_text,
)
from src.tournament_io.validation import (
    ValidationError,
    require_valid_games,
    validate_game,
    validate_team_names,
)

__all__ = [
    "CSVImportError",
    "ImportResult",
    "TournamentCSVImporter",
    "ValidationError",
    "export_games_csv",
    "export_standings_csv",
    "format_balance_value",
    "format_record",
    "games_to_frame",
    "require_valid_games",
    "sample_csv",
    "standings_to_dict",
    "standings_to_frame",
    "tie_break_method_text",
    "validate_game",
    "validate_team_names",
]

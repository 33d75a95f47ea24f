from pathlib import Path

# Base project directory
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Data directories
DATA_DIR = PROJECT_ROOT / "data"
STANDINGS_DIR = DATA_DIR / "standings"

# Tournament size limits
MIN_TEAMS = 2
MAX_TEAMS = 8

# Game CSV columns (header matching is case-insensitive)
GAME_COLUMNS = [
    "Team_A", "Team_B",
    "Runs_A", "Runs_B",
    "Earned_Runs_A", "Earned_Runs_B",
    "Innings_A_Batting", "Innings_A_Defense",
    "Innings_B_Batting", "Innings_B_Defense",
]

# Earned runs are only needed once TQB leaves a tie
OPTIONAL_GAME_COLUMNS = {"Earned_Runs_A", "Earned_Runs_B"}

# Standings CSV columns
STANDINGS_COLUMNS = [
    "Rank", "Team", "W", "L", "T",
    "RS", "RA", "ER_Scored", "ER_Allowed",
    "Innings_Batting", "Innings_Defense",
    "TQB", "ER_TQB",
]

SUPPORTED_LANGUAGES = ("en", "es")

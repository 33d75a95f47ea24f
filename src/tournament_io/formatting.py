"""Display formatting for standings output."""

from src.standings.models import TeamStats, TieBreakMethod
from src.tournament_io.config import SUPPORTED_LANGUAGES

_METHOD_TEXT = {
    "en": {
        TieBreakMethod.WIN_LOSS: "Rankings determined by Win-Loss Record",
        TieBreakMethod.HEAD_TO_HEAD: "Ties resolved using Head-to-Head Results",
        TieBreakMethod.BALANCE_METRIC: "Ties resolved using TQB (Team Quality Balance)",
        TieBreakMethod.EARNED_BALANCE_METRIC: (
            "Ties resolved using ER-TQB (Earned Runs Team Quality Balance)"
        ),
        TieBreakMethod.UNRESOLVED: (
            "ER-TQB did not resolve all ties. "
            "Manual review needed for Batting Average or Coin Toss."
        ),
    },
    "es": {
        TieBreakMethod.WIN_LOSS: "Clasificación determinada por Récord de Victorias-Derrotas",
        TieBreakMethod.HEAD_TO_HEAD: "Empates resueltos usando Resultados Directos",
        TieBreakMethod.BALANCE_METRIC: (
            "Empates resueltos usando TQB (Balance de Calidad del Equipo)"
        ),
        TieBreakMethod.EARNED_BALANCE_METRIC: (
            "Empates resueltos usando ER-TQB "
            "(Balance de Calidad por Carreras Limpias)"
        ),
        TieBreakMethod.UNRESOLVED: (
            "ER-TQB no resolvió todos los empates. Se requiere revisión manual "
            "para Promedio de Bateo o Lanzamiento de Moneda."
        ),
    },
}


def format_balance_value(value: float) -> str:
    """Sign-prefixed, four-decimal TQB text (0.28571 -> "+0.2857")."""
    sign = "+" if value >= 0 else ""
    return f"{sign}{value:.4f}"


def format_record(stats: TeamStats) -> str:
    """Win-loss record, with ties appended only when there are any."""
    if stats.ties:
        return f"{stats.wins}-{stats.losses}-{stats.ties}"
    return f"{stats.wins}-{stats.losses}"


def tie_break_method_text(method: TieBreakMethod, language: str = "en") -> str:
    """Human-readable description of how the standings were decided.

    Raises:
        ValueError: if *language* is not supported.
    """
    if language not in SUPPORTED_LANGUAGES:
        raise ValueError(
            f"Unsupported language {language!r} "
            f"(expected one of {', '.join(SUPPORTED_LANGUAGES)})"
        )
    return _METHOD_TEXT[language][method]

"""Innings <-> outs conversion.

Innings are entered in baseball notation, where the digit after the point
counts outs rather than tenths: "7.2" is seven full innings plus two outs,
i.e. 23 outs. All accumulation happens in integer outs; the decimal form
is for display only.
"""

import logging
import math
import re
from typing import Union

from src.standings.config import MAX_PARTIAL_OUTS, OUTS_PER_INNING

logger = logging.getLogger(__name__)

# Data-entry grammar: whole innings with an optional .1 or .2
_ENTRY_PATTERN = re.compile(r"^(\d+)(\.([12]))?$")

# Lenient parse grammar: also accepts an explicit ".0"
_PARSE_PATTERN = re.compile(r"^(\d+)(?:\.(\d))?$")

# Float noise allowed when reading the partial-inning digit of a number
_DIGIT_EPSILON = 1e-6


def is_valid_innings(text: str) -> bool:
    """Check *text* against the data-entry grammar (X, X.1 or X.2).

    Examples:
        "7"   -> True
        "6.2" -> True
        "6.3" -> False
        "7.0" -> False
    """
    if not isinstance(text, str):
        return False
    return bool(_ENTRY_PATTERN.match(text.strip()))


def innings_to_outs(value: Union[str, int, float, None]) -> int:
    """Convert an innings value to a total number of outs.

    Malformed input (negative, unparsable, or a partial-inning digit above
    2) yields 0 instead of raising.

    Examples:
        "7.2" -> 23
        "7"   -> 21
        6.1   -> 19
    """
    if value is None or isinstance(value, bool):
        return 0

    if isinstance(value, (int, float)):
        if not math.isfinite(value) or value < 0:
            return 0
        whole = math.floor(value)
        tenths = (value - whole) * 10
        partial = round(tenths)
        if abs(tenths - partial) > _DIGIT_EPSILON:
            logger.debug("Innings value %r has more than one decimal digit", value)
            return 0
    else:
        m = _PARSE_PATTERN.match(str(value).strip())
        if not m:
            logger.debug("Unparsable innings value %r counted as 0 outs", value)
            return 0
        whole = int(m.group(1))
        partial = int(m.group(2) or 0)

    if partial > MAX_PARTIAL_OUTS:
        logger.debug("Innings value %r has an invalid partial inning", value)
        return 0

    return whole * OUTS_PER_INNING + partial


def outs_to_innings(outs: int) -> float:
    """Convert outs back to innings notation (23 -> 7.2). Display only."""
    if outs <= 0:
        return 0.0
    whole, remainder = divmod(int(outs), OUTS_PER_INNING)
    return round(whole + remainder * 0.1, 1)


def format_innings(outs: int) -> str:
    """Innings notation as text: 23 -> "7.2", 21 -> "7"."""
    if outs <= 0:
        return "0"
    whole, remainder = divmod(int(outs), OUTS_PER_INNING)
    return f"{whole}.{remainder}" if remainder else str(whole)

import logging
import logging.handlers
from pathlib import Path
from typing import Optional

DEFAULT_LOG_DIR = Path(__file__).parent.parent / "logs"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    log_level: str = "INFO",
    log_dir: Optional[Path] = None,
    log_to_file: bool = True,
) -> None:
    """Configure logging for the standings tools.

    Console output follows *log_level*; the rotating file under *log_dir*
    (``logs/standings.log`` by default) always records DEBUG so every
    tie-break decision can be traced afterwards.
    """
    root_logger = logging.getLogger()
    if root_logger.handlers:
        return  # Already configured

    level = getattr(logging, log_level.upper(), logging.INFO)
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_to_file:
        log_dir = Path(log_dir) if log_dir is not None else DEFAULT_LOG_DIR
        log_dir.mkdir(parents=True, exist_ok=True)

        # 1MB per file, keep 3 backups
        file_handler = logging.handlers.RotatingFileHandler(
            log_dir / "standings.log", maxBytes=1024 * 1024, backupCount=3,
            encoding="utf-8",
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)
        root_logger.setLevel(logging.DEBUG)
    else:
        root_logger.setLevel(level)

    logging.getLogger(__name__).info(
        "Logging initialized (level=%s, file=%s)", log_level, log_to_file
    )

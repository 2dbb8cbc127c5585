"""Loguru setup for the analytics core and the CLI.

Modules prefix their messages with a bracketed stage tag, e.g.
"[SEGMENTER] 12 laps -> 3 sets". setup_logger can narrow DEBUG output to a
few stages, so tracing one step of the pipeline does not flood the console
with the others.
"""

import re
import sys
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any

from loguru import logger

_STAGE_TAG = re.compile(r"^\[([A-Z_]+)\]")

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{file.name}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"


def stage_of(message: str) -> str | None:
    """Stage tag of a log message ("[IMPORT] ..." -> "IMPORT"), if any."""
    match = _STAGE_TAG.match(message)
    return match.group(1) if match else None


def stage_filter(stages: Iterable[str]) -> Callable[[dict[str, Any]], bool]:
    """Let DEBUG records through only for the given stages; other levels always pass."""
    wanted = {stage.strip("[]").upper() for stage in stages}

    def _filter(record: dict[str, Any]) -> bool:
        if record["level"].no > logger.level("DEBUG").no:
            return True
        return stage_of(record["message"]) in wanted

    return _filter


def setup_logger(
    level: str = "INFO",
    log_file: str | Path | None = None,
    stages: Iterable[str] | None = None,
    rotation: str = "10 MB",
    retention: str = "7 days",
) -> None:
    """Replace loguru's default handler with the SwimTracker sinks.

    Args:
        level: Minimum level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional rotating file sink; it always receives every stage
        stages: Stage tags whose DEBUG messages reach the console (None = all)
        rotation: File rotation size or interval (e.g. "10 MB", "1 day")
        retention: How long rotated files are kept (e.g. "7 days")
    """
    stages = list(stages) if stages else None
    logger.remove()

    logger.add(
        sys.stderr,
        format=CONSOLE_FORMAT,
        level=level,
        colorize=True,
        filter=stage_filter(stages) if stages else None,
    )

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_path,
            format=FILE_FORMAT,
            level=level,
            rotation=rotation,
            retention=retention,
            compression="zip",
            encoding="utf-8",
        )

    stage_note = f", stages={sorted(stages)}" if stages else ""
    logger.debug(f"Logger initialized (level={level}, file={log_file}{stage_note})")

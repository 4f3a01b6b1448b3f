"""
Session logging for FOLIO command-line runs.

Each CLI run gets its own directory under LOGS_PATH holding one loguru file sink
per context, plus a console sink. Library code never configures sinks; it only
logs through the per-context wrappers in contexts/{context}/logger.py.
"""

import os
import sys
from pathlib import Path
from typing import Dict, Optional

from dotenv import load_dotenv
from loguru import logger

from folio import __version__
from folio.utils.event_logging import LOGS_PATH
from folio.utils.timestamp import now

load_dotenv()
CONSOLE_LOG_LEVEL = os.getenv("FOLIO_LOG_LEVEL", "INFO")

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <7} | {message}"
CONSOLE_FORMAT = "{time:HH:mm:ss} | <level>{level: <7}</level> | <level>{message}</level>"

LEVEL_COLORS = {
    "SUCCESS": "<green>",
    "WARNING": "<yellow>",
    "ERROR": "<red>",
}


def session_log_dir(command: str, base: Optional[Path] = None) -> Path:
    """
    Timestamped directory for one CLI run.

    Example:
        >>> session_log_dir("export")  # doctest: +SKIP
        PosixPath('outs/logs/export_20251114_123456')
    """
    return Path(base or LOGS_PATH) / f"{command}_{now()}"


def setup_logger(
    context_name: str,
    log_dir: Path,
    extra_provenance: Optional[Dict[str, str]] = None,
    console_level: Optional[str] = None,
) -> Path:
    """
    Route loguru output to a session file and the console.

    The file sink keeps DEBUG and above; the console shows console_level and
    above (FOLIO_LOG_LEVEL, default INFO).

    Args:
        context_name: Context the session is for ("render", "export", "fetch")
        log_dir: Session directory, typically from session_log_dir()
        extra_provenance: Additional key-value pairs for the provenance header
        console_level: Override for the console threshold

    Returns:
        Path to the session log file
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / f"{context_name}.log"

    logger.remove()
    for level_name, color in LEVEL_COLORS.items():
        logger.level(level_name, color=color)

    logger.add(log_file, format=FILE_FORMAT, level="DEBUG", encoding="utf-8")
    logger.add(
        sys.stderr,
        format=CONSOLE_FORMAT,
        level=console_level or CONSOLE_LOG_LEVEL,
        colorize=True,
    )

    log_provenance(context_name, extra_provenance)
    return log_file


def log_provenance(context_name: str, extra_context: Optional[Dict[str, str]] = None) -> None:
    """Write the session header: what ran, where, and with which FOLIO version."""
    header = {
        "Context": context_name,
        "FOLIO": __version__,
        "Command": " ".join(sys.argv),
        "Working directory": str(Path.cwd()),
        "Python": sys.version.split()[0],
        **(extra_context or {}),
    }
    logger.debug("-" * 60)
    for key, value in header.items():
        logger.debug(f"{key}: {value}")
    logger.debug("-" * 60)

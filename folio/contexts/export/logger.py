"""
Export context logger.

Provides logging interface for the export context with automatic [export] prefix.
All export modules should import from this module, not from loguru directly.
"""

import os
from pathlib import Path

from dotenv import load_dotenv
from loguru import logger

from folio.utils.logger import setup_logger as _setup_logger

load_dotenv()

CONTEXT_PREFIX = "[export]"


def setup_export_logger(log_dir: Path) -> Path:
    """
    Setup logger for the export context.

    Args:
        log_dir: Directory for this export session

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="export",
        log_dir=log_dir,
        extra_provenance={"Exports path": os.getenv("FOLIO_EXPORTS_PATH", "outs/exports")},
    )


def _log_info(message: str) -> None:
    """Log info message with [export] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [export] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [export] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [export] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [export] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def _log_exception(error: BaseException, message: str) -> None:
    """Log error message with [export] prefix and the traceback of error."""
    logger.opt(exception=error).error(f"{CONTEXT_PREFIX} {message}")


def log_export_start(identifier: str, filename: str, options) -> None:
    """Log start of an export with its passthrough options."""
    _log_info(f"Starting export: {identifier}")
    _log_debug(f"  Target: {filename}")
    _log_debug(
        f"  Page: {options.page_format} {options.orientation}, margin {options.margin}{options.unit}"
    )
    _log_debug(
        f"  Images: {options.image_type} q={options.image_quality} scale={options.raster_scale}"
    )


def log_export_result(identifier: str, result) -> None:
    """
    Log export outcome.

    Args:
        identifier: Document owner identifier
        result: ExportResult from ExportJob
    """
    if result.success:
        _log_success(f"{identifier}: exported to {result.artifact_path} ({result.elapsed_s:.2f}s)")
    else:
        _log_error(f"{identifier}: export failed ({result.elapsed_s:.2f}s)")
        _log_error(f"  Cause: {result.error}")

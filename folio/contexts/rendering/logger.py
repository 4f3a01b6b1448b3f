"""
Rendering context logger.

Provides logging interface for rendering context with automatic [render] prefix.
All rendering modules should import from this module, not from loguru directly.
"""

from loguru import logger

CONTEXT_PREFIX = "[render]"


def _log_debug(message: str) -> None:
    """Log debug message with [render] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_render_summary(identifier: str, tree) -> None:
    """Log the shape of a rendered tree (section ids and node count)."""
    sections = [child.attr("id") for child in tree.children]
    _log_debug(f"Rendered {identifier}: sections={sections} nodes={tree.count()}")

"""
Editing Diffs

Applies an editor's changes to a document as one immutable diff instead of
field-by-field mutation. The whole diff is validated before anything is applied,
so a bad edit leaves no partial result behind.
"""

import copy
from collections.abc import Mapping
from typing import Any, Dict, Tuple, Union

from folio.contexts.resolution.defaults import SECTION_DEFAULTS
from folio.contexts.resolution.document import PortfolioDocument
from folio.exceptions import InvalidEditError

# Top-level scalar fields that may be edited directly
EDITABLE_TOP_LEVEL = {"theme", "isPublic", "customDomain"}


def parse_skills(text: str) -> Tuple[str, ...]:
    """
    Split the editor's comma-separated skills input.

    Example:
        >>> parse_skills("Python, Go ,, Rust")
        ('Python', 'Go', 'Rust')
    """
    return tuple(skill.strip() for skill in text.split(",") if skill.strip())


def _validate_edits(edits: Mapping) -> None:
    for section, changes in edits.items():
        if section in EDITABLE_TOP_LEVEL:
            continue
        if section not in SECTION_DEFAULTS:
            raise InvalidEditError(
                f"Unknown section '{section}'. "
                f"Valid sections: {sorted(SECTION_DEFAULTS) + sorted(EDITABLE_TOP_LEVEL)}"
            )
        if not isinstance(changes, Mapping):
            raise InvalidEditError(f"Edits for section '{section}' must be a mapping")
        unknown = set(changes) - set(SECTION_DEFAULTS[section])
        if unknown:
            raise InvalidEditError(
                f"Unknown field(s) {sorted(unknown)} in section '{section}'. "
                f"Valid fields: {sorted(SECTION_DEFAULTS[section])}"
            )


def apply_edits(
    document: Union[Mapping, PortfolioDocument, None], edits: Mapping
) -> Dict[str, Any]:
    """
    Apply an editing diff and return the new raw document.

    Args:
        document: Current raw document mapping or resolved PortfolioDocument
        edits: {section: {field: value}} for sections, {field: value} for
            top-level fields ("theme", "isPublic", "customDomain")

    Returns:
        New camelCase document mapping; the input is left untouched

    Raises:
        InvalidEditError: If any section or field in the diff is unknown
    """
    _validate_edits(edits)

    if isinstance(document, PortfolioDocument):
        updated = document.to_dict()
    else:
        updated = copy.deepcopy(dict(document or {}))

    for section, changes in edits.items():
        if section in EDITABLE_TOP_LEVEL:
            updated[section] = changes
            continue
        current = updated.get(section)
        merged = dict(current) if isinstance(current, Mapping) else {}
        for field_name, value in changes.items():
            if field_name == "skills" and isinstance(value, str):
                value = list(parse_skills(value))
            merged[field_name] = copy.deepcopy(value)
        updated[section] = merged

    return updated

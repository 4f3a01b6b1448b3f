"""
Shared utilities for FOLIO.

Common functionality used across contexts:
- Logger setup with provenance
- Pipeline event logging
- User notifications
- Timestamps
"""

from folio.utils.timestamp import now, now_exact

__all__ = ["now", "now_exact"]

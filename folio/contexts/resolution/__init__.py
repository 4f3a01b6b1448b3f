"""
Resolution Context

Responsibilities:
- Holds the resolved document data model
- Merges raw documents against the default template (section, then leaf)
- Applies editing diffs atomically

Owns: Default template, PortfolioDocument/Project records
Never: Fetches, styles or renders documents
"""

from folio.contexts.resolution.defaults import (
    DEFAULT_ABOUT,
    DEFAULT_CONTACT,
    DEFAULT_CUSTOMIZATION,
    DEFAULT_HERO,
    get_default_document,
)
from folio.contexts.resolution.document import (
    AboutSection,
    ContactSection,
    Customization,
    HeroSection,
    PortfolioDocument,
    Project,
    Testimonial,
)
from folio.contexts.resolution.editing import apply_edits, parse_skills
from folio.contexts.resolution.resolver import (
    resolve_document,
    resolve_project,
    resolve_projects,
)

__all__ = [
    # Data structures
    "PortfolioDocument",
    "HeroSection",
    "AboutSection",
    "ContactSection",
    "Customization",
    "Testimonial",
    "Project",
    # Resolution
    "resolve_document",
    "resolve_project",
    "resolve_projects",
    # Defaults
    "DEFAULT_HERO",
    "DEFAULT_ABOUT",
    "DEFAULT_CONTACT",
    "DEFAULT_CUSTOMIZATION",
    "get_default_document",
    # Editing
    "apply_edits",
    "parse_skills",
]

"""
Default values for the portfolio document.

Provides the fixed default template the resolver merges raw documents against.
Values come from the persistence schema defaults and the editor's initial state.

Each section distinguishes two kinds of leaf:
- valued leaves always resolve to a concrete value (blank -> default below)
- presence leaves resolve to None when the author did not provide them
"""

import copy
from typing import Any, Dict

DEFAULT_HERO = {
    "title": "My Portfolio",
    "subtitle": "Welcome to my portfolio",
    "backgroundImage": None,
    "backgroundColor": None,
    "ctaText": "View My Work",
    "ctaLink": "#projects",
}

DEFAULT_ABOUT = {
    "title": "About Me",
    "bio": "",
    "skills": [],
    "image": None,
}

DEFAULT_CONTACT = {
    "email": None,
    "phone": None,
    "linkedin": None,
    "github": None,
    "location": None,
}

DEFAULT_CUSTOMIZATION = {
    "primaryColor": "#3B82F6",
    "secondaryColor": "#1E40AF",
    "fontFamily": "Inter",
    "layout": "modern",
    "spacing": "comfortable",
}

# Top-level sections resolved as a whole when absent, then leaf by leaf
SECTION_DEFAULTS = {
    "hero": DEFAULT_HERO,
    "about": DEFAULT_ABOUT,
    "contact": DEFAULT_CONTACT,
    "customization": DEFAULT_CUSTOMIZATION,
}

# Leaves whose absence is meaningful (None = not provided)
PRESENCE_FIELDS = {
    "hero": {"backgroundImage", "backgroundColor"},
    "about": {"image"},
    "contact": set(DEFAULT_CONTACT),
    "customization": set(),
}

# Leaves that hold ordered sequences of strings
SEQUENCE_FIELDS = {
    "about": {"skills"},
}

DEFAULT_THEME = "light"
DEFAULT_IS_PUBLIC = True
DEFAULT_VIEWS = 0

RATING_RANGE = (1, 5)

DEFAULT_PROJECT_TITLE = "Untitled Project"


def get_default_document() -> Dict[str, Any]:
    """
    Get the complete default document template.

    Returns a fresh deep copy, so callers may mutate the result freely.

    Returns:
        Dict with every section and top-level field at its default
    """
    return {
        **{name: copy.deepcopy(template) for name, template in SECTION_DEFAULTS.items()},
        "theme": DEFAULT_THEME,
        "isPublic": DEFAULT_IS_PUBLIC,
        "views": DEFAULT_VIEWS,
        "testimonials": [],
        "customDomain": None,
        "user": None,
    }

"""
Document Resolution

Reconciles a raw, possibly partial portfolio document against the default template
and produces a fully-populated PortfolioDocument.

Resolution is two-tier:
  1. Per top-level section: an absent section resolves to its entire template.
  2. Per leaf within a present section: each blank leaf falls back to its own
     default (valued leaves) or to None (presence leaves).

Resolution never fails and is idempotent: resolving a resolved document is a no-op.
Type validation of leaf values happens upstream, in the persistence layer.
"""

from collections.abc import Mapping
from typing import Any, Dict, Iterable, Optional, Tuple, Union

from folio.contexts.resolution.defaults import (
    DEFAULT_IS_PUBLIC,
    DEFAULT_PROJECT_TITLE,
    DEFAULT_THEME,
    DEFAULT_VIEWS,
    PRESENCE_FIELDS,
    RATING_RANGE,
    SECTION_DEFAULTS,
    SEQUENCE_FIELDS,
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
from folio.contexts.resolution.logger import _log_debug, _log_warning

RawDocument = Union[Mapping, PortfolioDocument, None]


def _is_blank(value: Any) -> bool:
    """True for None and for strings that are empty after stripping."""
    return value is None or (isinstance(value, str) and not value.strip())


def _presence(value: Any) -> Optional[Any]:
    """Resolve a presence leaf: blank means "not provided"."""
    return None if _is_blank(value) else value


def _string_sequence(values: Any) -> Tuple[str, ...]:
    """Resolve an ordered string sequence, dropping blank entries."""
    if _is_blank(values) or not isinstance(values, Iterable) or isinstance(values, str):
        return ()
    return tuple(v for v in values if not _is_blank(v))


def _resolve_section(name: str, raw_section: Any) -> Dict[str, Any]:
    """
    Resolve one top-level section to a complete camelCase mapping.

    Args:
        name: Section name (a key of SECTION_DEFAULTS)
        raw_section: Raw section value (may be absent/None)

    Returns:
        Dict with every leaf of the section's template
    """
    template = SECTION_DEFAULTS[name]
    if not isinstance(raw_section, Mapping):
        _log_debug(f"Section '{name}' absent, using template")
        raw_section = {}

    presence_fields = PRESENCE_FIELDS[name]
    sequence_fields = SEQUENCE_FIELDS.get(name, set())

    resolved = {}
    for key, default in template.items():
        value = raw_section.get(key)
        if key in sequence_fields:
            resolved[key] = _string_sequence(value)
        elif key in presence_fields:
            resolved[key] = _presence(value)
        else:
            resolved[key] = default if _is_blank(value) else value
    return resolved


def _resolve_views(value: Any) -> int:
    # bool is an int subclass; a boolean counter is treated as absent
    if value is None or isinstance(value, bool) or not isinstance(value, int):
        return DEFAULT_VIEWS
    return max(0, value)


def _resolve_rating(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    low, high = RATING_RANGE
    if not low <= value <= high:
        _log_warning(f"Discarding testimonial rating outside [{low}, {high}]: {value}")
        return None
    return int(value)


def _resolve_testimonials(raw_list: Any) -> Tuple[Testimonial, ...]:
    if not isinstance(raw_list, Iterable) or isinstance(raw_list, (str, Mapping)):
        return ()

    testimonials = []
    for raw in raw_list:
        if isinstance(raw, Testimonial):
            raw = raw.to_dict()
        if not isinstance(raw, Mapping):
            continue
        name, content = raw.get("name"), raw.get("content")
        if _is_blank(name) or _is_blank(content):
            _log_warning("Skipping testimonial without name or content")
            continue
        testimonials.append(
            Testimonial(
                name=name,
                content=content,
                position=_presence(raw.get("position")),
                company=_presence(raw.get("company")),
                rating=_resolve_rating(raw.get("rating")),
            )
        )
    return tuple(testimonials)


def resolve_document(raw: RawDocument) -> PortfolioDocument:
    """
    Resolve a raw portfolio document against the default template.

    Args:
        raw: camelCase document mapping, an already-resolved PortfolioDocument, or None

    Returns:
        PortfolioDocument with every rendered leaf populated

    Example:
        >>> doc = resolve_document({"hero": {"title": "Hi"}})
        >>> doc.hero.cta_text
        'View My Work'
        >>> resolve_document(doc) == doc
        True
    """
    if isinstance(raw, PortfolioDocument):
        raw = raw.to_dict()
    if not isinstance(raw, Mapping):
        raw = {}

    hero = _resolve_section("hero", raw.get("hero"))
    about = _resolve_section("about", raw.get("about"))
    contact = _resolve_section("contact", raw.get("contact"))
    customization = _resolve_section("customization", raw.get("customization"))

    theme = raw.get("theme")
    # Explicit presence check: False must survive resolution
    is_public = raw.get("isPublic")

    owner = _presence(raw.get("user"))

    return PortfolioDocument(
        hero=HeroSection(
            title=hero["title"],
            subtitle=hero["subtitle"],
            cta_text=hero["ctaText"],
            cta_link=hero["ctaLink"],
            background_image=hero["backgroundImage"],
            background_color=hero["backgroundColor"],
        ),
        about=AboutSection(
            title=about["title"],
            bio=about["bio"],
            skills=about["skills"],
            image=about["image"],
        ),
        contact=ContactSection(**contact),
        customization=Customization(
            primary_color=customization["primaryColor"],
            secondary_color=customization["secondaryColor"],
            font_family=customization["fontFamily"],
            layout=customization["layout"],
            spacing=customization["spacing"],
        ),
        theme=DEFAULT_THEME if _is_blank(theme) else theme,
        is_public=is_public if isinstance(is_public, bool) else DEFAULT_IS_PUBLIC,
        views=_resolve_views(raw.get("views")),
        testimonials=_resolve_testimonials(raw.get("testimonials")),
        custom_domain=_presence(raw.get("customDomain")),
        owner=str(owner) if owner is not None else None,
    )


def resolve_project(raw: Union[Mapping, Project]) -> Project:
    """
    Resolve a raw project mapping to a Project record.

    Args:
        raw: camelCase project mapping or an already-resolved Project

    Returns:
        Project with blank optional links resolved to None
    """
    if isinstance(raw, Project):
        raw = raw.to_dict()

    title = raw.get("title")
    description = raw.get("description")
    project_id = _presence(raw.get("_id", raw.get("id")))

    return Project(
        title=DEFAULT_PROJECT_TITLE if _is_blank(title) else title,
        description="" if _is_blank(description) else description,
        technologies=_string_sequence(raw.get("technologies")),
        github_url=_presence(raw.get("githubUrl")),
        live_url=_presence(raw.get("liveUrl")),
        project_id=str(project_id) if project_id is not None else None,
    )


def resolve_projects(raw_list: Any) -> Tuple[Project, ...]:
    """
    Resolve a raw project list, preserving order.

    Non-mapping entries are skipped; an absent list resolves to an empty tuple.
    """
    if not isinstance(raw_list, Iterable) or isinstance(raw_list, (str, Mapping)):
        return ()
    return tuple(
        resolve_project(raw) for raw in raw_list if isinstance(raw, (Mapping, Project))
    )

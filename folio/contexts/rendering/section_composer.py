"""
Section Composition

Decides, per section and sub-element, whether it renders and with which layout
variant. Every decision is driven purely by field presence in the resolved document.
"""

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from folio.contexts.resolution.document import ContactSection, PortfolioDocument, Project

# Fixed section order; customization.layout never changes it
SECTION_ORDER = ("hero", "about", "projects", "contact")

TWO_COLUMN = "two_column"
SINGLE_COLUMN = "single_column"


@dataclass(frozen=True)
class ContactMethod:
    """
    One contact row.

    Attributes:
        kind: "email", "phone", "linkedin", "github" or "location"
        label: Visible text
        href: Link target (None for location, which is not a link)
        external: Opens in a new tab
    """

    kind: str
    label: str
    href: Optional[str] = None
    external: bool = False


@dataclass(frozen=True)
class SectionDecisions:
    """
    Render-or-skip and layout decisions for one render pass.

    Attributes:
        order: Sections in render order
        about_layout: TWO_COLUMN when about.image is present, else SINGLE_COLUMN
        contact_methods: Present contact methods, in display order
        project_count: Number of project cards in the grid (0 = empty grid)
    """

    order: Tuple[str, ...]
    about_layout: str
    contact_methods: Tuple[ContactMethod, ...]
    project_count: int

    @property
    def location(self) -> Optional[ContactMethod]:
        for method in self.contact_methods:
            if method.kind == "location":
                return method
        return None

    @property
    def link_methods(self) -> Tuple[ContactMethod, ...]:
        return tuple(m for m in self.contact_methods if m.kind != "location")


def about_layout(document: PortfolioDocument) -> str:
    """Two columns (image | text) when about.image is present, else one full-width column."""
    return TWO_COLUMN if document.about.image is not None else SINGLE_COLUMN


def contact_methods(contact: ContactSection) -> Tuple[ContactMethod, ...]:
    """Each contact method renders independently, only when present."""
    methods = []
    if contact.email is not None:
        methods.append(ContactMethod("email", contact.email, f"mailto:{contact.email}"))
    if contact.phone is not None:
        methods.append(ContactMethod("phone", contact.phone, f"tel:{contact.phone}"))
    if contact.linkedin is not None:
        methods.append(ContactMethod("linkedin", "LinkedIn", contact.linkedin, external=True))
    if contact.github is not None:
        methods.append(ContactMethod("github", "GitHub", contact.github, external=True))
    if contact.location is not None:
        methods.append(ContactMethod("location", contact.location))
    return tuple(methods)


def compose_sections(
    document: PortfolioDocument, projects: Sequence[Project] = ()
) -> SectionDecisions:
    """
    Compose section decisions for a resolved document.

    Args:
        document: Resolved PortfolioDocument
        projects: Resolved projects shown in the grid

    Returns:
        SectionDecisions
    """
    return SectionDecisions(
        order=SECTION_ORDER,
        about_layout=about_layout(document),
        contact_methods=contact_methods(document.contact),
        project_count=len(projects),
    )

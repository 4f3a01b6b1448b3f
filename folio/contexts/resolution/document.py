"""
Portfolio Document Structure

Defines the resolved, fully-populated representation of a portfolio document and the
projects rendered alongside it. Raw documents arrive as camelCase JSON mappings; these
records are what the Resolution context produces from them.

Every record is frozen and every ordered sequence is a tuple, so a resolved document
can be passed by value between contexts without defensive copies.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class HeroSection:
    """
    Hero banner at the top of the page.

    Attributes:
        title: Headline text
        subtitle: Line under the headline
        cta_text: Call-to-action button label
        cta_link: Call-to-action target (anchor or URL)
        background_image: Cover image URL (None when not provided)
        background_color: Author-chosen solid color (None when not provided)
    """

    title: str
    subtitle: str
    cta_text: str
    cta_link: str
    background_image: Optional[str] = None
    background_color: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "subtitle": self.subtitle,
            "backgroundImage": self.background_image,
            "backgroundColor": self.background_color,
            "ctaText": self.cta_text,
            "ctaLink": self.cta_link,
        }


@dataclass(frozen=True)
class AboutSection:
    """
    Biography block.

    Attributes:
        title: Section heading
        bio: Biography text
        skills: Ordered skill labels
        image: Portrait URL (None when not provided)
    """

    title: str
    bio: str
    skills: Tuple[str, ...] = ()
    image: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "bio": self.bio,
            "skills": list(self.skills),
            "image": self.image,
        }


@dataclass(frozen=True)
class ContactSection:
    """Contact methods; each is None when the author did not provide it."""

    email: Optional[str] = None
    phone: Optional[str] = None
    linkedin: Optional[str] = None
    github: Optional[str] = None
    location: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "email": self.email,
            "phone": self.phone,
            "linkedin": self.linkedin,
            "github": self.github,
            "location": self.location,
        }


@dataclass(frozen=True)
class Customization:
    """
    Visual customization knobs.

    Attributes:
        primary_color: Accent color (headings, buttons, chips)
        secondary_color: Secondary accent
        font_family: Page font family name
        layout: Visual treatment ("classic", "modern", "minimal")
        spacing: Vertical rhythm ("comfortable", "compact", "spacious")
    """

    primary_color: str
    secondary_color: str
    font_family: str
    layout: str
    spacing: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "primaryColor": self.primary_color,
            "secondaryColor": self.secondary_color,
            "fontFamily": self.font_family,
            "layout": self.layout,
            "spacing": self.spacing,
        }


@dataclass(frozen=True)
class Testimonial:
    """Endorsement nested under a document. Rating, when present, is within [1, 5]."""

    name: str
    content: str
    position: Optional[str] = None
    company: Optional[str] = None
    rating: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "content": self.content,
            "position": self.position,
            "company": self.company,
            "rating": self.rating,
        }


@dataclass(frozen=True)
class Project:
    """
    Project card content. Owned independently of the document and fetched alongside it.

    Attributes:
        title: Project name
        description: Short description
        technologies: Ordered technology labels
        github_url: Source repository link (None when not provided)
        live_url: Live demo link (None when not provided)
        project_id: Persistence identifier, used only as a stable key
    """

    title: str
    description: str
    technologies: Tuple[str, ...] = ()
    github_url: Optional[str] = None
    live_url: Optional[str] = None
    project_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "_id": self.project_id,
            "title": self.title,
            "description": self.description,
            "technologies": list(self.technologies),
            "githubUrl": self.github_url,
            "liveUrl": self.live_url,
        }


@dataclass(frozen=True)
class PortfolioDocument:
    """
    Fully-resolved portfolio document.

    Produced only by folio.contexts.resolution.resolve_document(); every leaf used by
    rendering holds a concrete value or the explicit None "not provided" sentinel.

    Attributes:
        hero: Hero banner
        about: Biography block
        contact: Contact methods
        customization: Visual knobs
        theme: "light" or "dark"
        is_public: Whether the document is visible to visitors
        views: Non-negative view counter
        testimonials: Ordered testimonials
        custom_domain: Custom domain (None when not provided)
        owner: Author account reference (None when not provided)
    """

    hero: HeroSection
    about: AboutSection
    contact: ContactSection
    customization: Customization
    theme: str = "light"
    is_public: bool = True
    views: int = 0
    testimonials: Tuple[Testimonial, ...] = field(default_factory=tuple)
    custom_domain: Optional[str] = None
    owner: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert back to the camelCase mapping shape documents are stored in."""
        return {
            "user": self.owner,
            "hero": self.hero.to_dict(),
            "about": self.about.to_dict(),
            "contact": self.contact.to_dict(),
            "customization": self.customization.to_dict(),
            "theme": self.theme,
            "isPublic": self.is_public,
            "views": self.views,
            "testimonials": [t.to_dict() for t in self.testimonials],
            "customDomain": self.custom_domain,
        }

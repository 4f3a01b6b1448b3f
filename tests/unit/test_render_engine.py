"""Unit tests for the render engine tree."""

import pytest

from folio.contexts.rendering import compose_sections, render_page, render_view
from folio.contexts.rendering.engine import CONTACT_HEADING, PROJECTS_HEADING
from folio.contexts.resolution import resolve_document, resolve_projects
from folio.contexts.styling import compute_styles


def _render(raw, raw_projects=()):
    doc = resolve_document(raw)
    projects = resolve_projects(raw_projects)
    return render_page(doc, compute_styles(doc), compose_sections(doc, projects), projects)


@pytest.mark.unit
def test_rendering_is_deterministic(full_document, raw_projects):
    """Test that identical inputs yield equal trees."""
    assert _render(full_document, raw_projects) == _render(full_document, raw_projects)


@pytest.mark.unit
def test_page_sections_in_order(full_document):
    """Test that the page holds the four sections in fixed order."""
    tree = _render(full_document)

    assert tree.kind == "page"
    assert [child.attr("id") for child in tree.children] == ["hero", "about", "projects", "contact"]


@pytest.mark.unit
def test_page_carries_theme_and_font(full_document):
    """Test page-level style attributes."""
    tree = _render(full_document)
    style = tree.style_dict()

    assert tree.attr("theme") == "light"
    assert style["font-family"] == "Georgia"
    assert style["--primary"] == "#3B82F6"


@pytest.mark.unit
def test_hero_content(full_document):
    """Test hero heading, subtitle and call-to-action button."""
    hero = _render(full_document).section("hero")

    assert hero.find_all("heading")[0].text == "Ada Lovelace"
    assert hero.find_all("paragraph")[0].text == "Analytical engines and other machines"
    button = hero.find_all("button")[0]
    assert button.text == "See the Work"
    assert button.attr("href") == "#projects"
    assert hero.attr("background_image") == "https://example.com/hero.jpg"
    assert "background-image" in hero.style_dict()


@pytest.mark.unit
def test_hero_solid_color_without_image():
    """Test that the hero falls back to the theme surface color."""
    hero = _render({"theme": "dark"}).section("hero")

    assert hero.attr("background_image") is None
    assert hero.style_dict()["background-color"] == "#2D2D2D"


@pytest.mark.unit
@pytest.mark.parametrize("layout", ["modern", "classic", "minimal"])
def test_hero_overlay_on_every_layout(full_document, layout):
    """Test that white hero text always sits on the dark overlay."""
    full_document["customization"]["layout"] = layout
    del full_document["hero"]["backgroundImage"]
    hero = _render(full_document).section("hero")

    overlays = hero.find_all("overlay")
    assert len(overlays) == 1
    assert overlays[0].style_dict()["background-color"] == "rgba(0, 0, 0, 0.5)"
    assert hero.find_all("heading")[0].style_dict()["color"] == "#FFFFFF"


@pytest.mark.unit
def test_layouts_differ_in_card_radius(full_document, raw_projects):
    """Test that each layout rounds project cards differently."""
    radii = []
    for layout in ("modern", "classic", "minimal"):
        full_document["customization"]["layout"] = layout
        card = _render(full_document, raw_projects).section("projects").find_all("card")[0]
        radii.append(card.style_dict()["border-radius"])

    assert radii == ["8px", "4px", "0px"]


@pytest.mark.unit
def test_section_padding_follows_spacing(full_document):
    """Test that sections carry the spacing padding."""
    full_document["customization"]["spacing"] = "spacious"
    about = _render(full_document).section("about")
    assert about.style_dict()["padding-top"] == "128px"


@pytest.mark.unit
def test_about_two_column(full_document):
    """Test the about grid with an image column."""
    grid = _render(full_document).section("about").find_all("grid")[0]

    assert grid.attr("columns") == 2
    assert grid.find_all("image")[0].attr("src") == "https://example.com/ada.png"
    chips = [chip.text for chip in grid.find_all("chip")]
    assert chips == ["Mathematics", "Algorithms", "Poetry"]


@pytest.mark.unit
def test_about_single_column():
    """Test the about grid without an image."""
    grid = _render({}).section("about").find_all("grid")[0]

    assert grid.attr("columns") == 1
    assert grid.find_all("image") == ()
    assert grid.children[0].attr("span") == "full"


@pytest.mark.unit
def test_skill_chips_use_tint():
    """Test that skill chips are tinted with the primary color."""
    chip = _render({"about": {"skills": ["Go"]}}).find_all("chip")[0]
    assert chip.style_dict()["background-color"] == "#3B82F620"


@pytest.mark.unit
def test_project_cards(full_document, raw_projects):
    """Test one card per project with optional links."""
    projects = _render(full_document, raw_projects).section("projects")
    cards = projects.find_all("card")

    assert projects.find_all("heading")[0].text == PROJECTS_HEADING
    assert [card.find_all("heading")[0].text for card in cards] == ["Note G", "Translation"]
    assert len(cards[0].find_all("link")) == 2
    assert cards[1].find_all("link") == ()
    assert cards[0].attr("key") == "p1"


@pytest.mark.unit
def test_empty_project_grid_still_renders():
    """Test that the projects section renders with an empty grid."""
    projects = _render({}).section("projects")
    grid = projects.find_all("grid")[0]

    assert grid.children == ()


@pytest.mark.unit
def test_contact_without_methods_is_heading_only():
    """Test that an empty contact section renders only its heading."""
    contact = _render({}).section("contact")

    assert len(contact.children) == 1
    assert contact.children[0].text == CONTACT_HEADING


@pytest.mark.unit
def test_contact_rows_and_location(full_document):
    """Test contact rows and the separate location line."""
    contact = _render(full_document).section("contact")
    rows = contact.find_all("contact_row")

    assert [row.attr("method") for row in rows] == ["email", "phone", "linkedin", "github"]
    assert rows[2].attr("external") is True
    assert rows[0].attr("external") is None
    assert contact.find_all("location")[0].text == "London"


@pytest.mark.unit
def test_render_view_bundles_pass(full_document, raw_projects):
    """Test that render_view returns every product of one pass."""
    view = render_view(full_document, raw_projects, identifier="ada")

    assert view.identifier == "ada"
    assert view.document.hero.title == "Ada Lovelace"
    assert len(view.projects) == 2
    assert view.decisions.project_count == 2
    assert view.tree == _render(full_document, raw_projects)


@pytest.mark.unit
def test_tree_count_and_walk(full_document):
    """Test the tree traversal helpers."""
    tree = _render(full_document)

    assert tree.count() == len(list(tree.walk()))
    assert tree.section("nonexistent") is None

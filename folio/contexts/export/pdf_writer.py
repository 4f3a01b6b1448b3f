"""
PDF Document Writer

The document-generation collaborator: lays a snapshot RenderNode tree out as a PDF
with reportlab platypus. Page size, orientation and margin come from ExportOptions
unchanged; colors, fonts and padding come from the tree's own inline styles, so the
PDF follows the same visual decisions as the interactive page.
"""

import os
import re
from pathlib import Path
from typing import Callable, Dict, List, Optional, Protocol
from xml.sax.saxutils import escape

from dotenv import load_dotenv
from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER, TA_LEFT
from reportlab.lib.pagesizes import A4, LEGAL, LETTER, landscape, portrait
from reportlab.lib.styles import ParagraphStyle
from reportlab.lib.units import cm, inch, mm
from reportlab.lib.utils import ImageReader
from reportlab.platypus import Flowable, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from folio.contexts.export.logger import _log_debug, _log_warning
from folio.contexts.export.options import ExportOptions
from folio.contexts.rendering.engine import RenderNode
from folio.contexts.styling.colors import parse_color
from folio.exceptions import ExportFailure

load_dotenv()
EXPORTS_PATH = Path(os.getenv("FOLIO_EXPORTS_PATH", "outs/exports"))

PAGE_SIZES = {"a4": A4, "letter": LETTER, "legal": LEGAL}
UNITS = {"in": inch, "mm": mm, "cm": cm, "pt": 1}

# CSS pixels to PDF points
PX_TO_PT = 0.75

# CSS font family (lowercase) -> (regular, bold) reportlab base fonts
FONT_FAMILIES = {
    "times": ("Times-Roman", "Times-Bold"),
    "times new roman": ("Times-Roman", "Times-Bold"),
    "georgia": ("Times-Roman", "Times-Bold"),
    "serif": ("Times-Roman", "Times-Bold"),
    "courier": ("Courier", "Courier-Bold"),
    "courier new": ("Courier", "Courier-Bold"),
    "monospace": ("Courier", "Courier-Bold"),
}
DEFAULT_FONTS = ("Helvetica", "Helvetica-Bold")

HEADING_SIZES = {1: 32, 2: 22, 3: 14}

RGBA_PATTERN = re.compile(r"rgba\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)\s*,\s*([\d.]+)\s*\)")


class DocumentWriter(Protocol):
    """Collaborator that turns a snapshot tree into an artifact file."""

    def write(self, snapshot: RenderNode, filename: str, options: ExportOptions) -> Path: ...


def to_pdf_color(value: Optional[str]) -> Optional[colors.Color]:
    """Convert a CSS hex or rgba() color to a reportlab Color (None if absent or unknown)."""
    if not value:
        return None
    match = RGBA_PATTERN.match(value)
    if match:
        r, g, b, a = match.groups()
        return colors.Color(int(r) / 255, int(g) / 255, int(b) / 255, alpha=float(a))
    try:
        parsed = parse_color(value)
    except ValueError:
        return None
    return colors.Color(*parsed.to_rgb_fractions(), alpha=parsed.alpha)


def resolve_fonts(font_family: Optional[str]) -> tuple:
    """Map a CSS font family to reportlab (regular, bold) base fonts; Helvetica otherwise."""
    if not font_family:
        return DEFAULT_FONTS
    first = font_family.split(",")[0].strip().strip("'\"").lower()
    return FONT_FAMILIES.get(first, DEFAULT_FONTS)


def composite_over(top: colors.Color, base: Optional[colors.Color]) -> colors.Color:
    """Blend a translucent color over an opaque base (white if None) into an opaque color."""
    base = base or colors.white
    alpha = top.alpha
    return colors.Color(
        top.red * alpha + base.red * (1 - alpha),
        top.green * alpha + base.green * (1 - alpha),
        top.blue * alpha + base.blue * (1 - alpha),
    )


def section_background(node: RenderNode, page_background: Optional[colors.Color]) -> Optional[colors.Color]:
    """
    Fill color for a section box.

    A section overlay darkens whatever it covers: its own background color, or the
    page background when the section has none (a hero with a cover image).
    """
    background = to_pdf_color(node.style_dict().get("background-color"))
    overlay = next((c for c in node.children if c.kind == "overlay"), None)
    if overlay is None:
        return background
    overlay_color = to_pdf_color(overlay.style_dict().get("background-color"))
    if overlay_color is None:
        return background
    return composite_over(overlay_color, background or page_background)


class LoadedImage(Flowable):
    """Draws an already-loaded ImageReader so the source is only read once."""

    def __init__(self, reader: ImageReader, width: float, height: float):
        super().__init__()
        self.reader = reader
        self.width = width
        self.height = height

    def wrap(self, avail_width, avail_height):
        return self.width, self.height

    def draw(self):
        self.canv.drawImage(self.reader, 0, 0, self.width, self.height, mask="auto")


class PageLayout:
    """
    Turns one snapshot tree into platypus flowables.

    Holds the page-level fonts and colors for a single write() call, so one
    PdfDocumentWriter can serve concurrent exports.

    Args:
        fonts: (regular, bold) reportlab base fonts
        text_color: Default text color
        page_background: Page fill color (None for unfilled)
        image_loader: Callable returning a reportlab ImageReader for a URL or path
    """

    def __init__(
        self,
        fonts: tuple,
        text_color: colors.Color,
        page_background: Optional[colors.Color],
        image_loader: Callable[[str], ImageReader],
    ):
        self.fonts = fonts
        self.text_color = text_color
        self.page_background = page_background
        self.image_loader = image_loader

    @classmethod
    def for_snapshot(cls, snapshot: RenderNode, image_loader: Callable[[str], ImageReader]) -> "PageLayout":
        page_style = snapshot.style_dict()
        return cls(
            fonts=resolve_fonts(page_style.get("font-family")),
            text_color=to_pdf_color(page_style.get("color")) or colors.black,
            page_background=to_pdf_color(page_style.get("background-color")),
            image_loader=image_loader,
        )

    # Layout helpers

    def _paragraph_style(self, node: RenderNode, size: float = 11, bold: bool = False) -> ParagraphStyle:
        style = node.style_dict()
        align = style.get("text-align")
        background = to_pdf_color(style.get("background-color"))
        return ParagraphStyle(
            name=f"folio-{node.kind}",
            fontName=self.fonts[1] if bold else self.fonts[0],
            fontSize=size,
            leading=size * 1.3,
            textColor=to_pdf_color(style.get("color")) or self.text_color,
            alignment=TA_CENTER if align == "center" else TA_LEFT,
            backColor=background,
            borderPadding=4 if background is not None else 0,
            spaceAfter=size * 0.6,
        )

    def _text(self, node: RenderNode, size: float = 11, bold: bool = False) -> Paragraph:
        return Paragraph(escape(node.text or ""), self._paragraph_style(node, size, bold))

    def _link(self, node: RenderNode, size: float = 11) -> Paragraph:
        href = node.attr("href")
        text = escape(node.text or "")
        if href:
            quoted_href = escape(href, {'"': "&quot;"})
            text = f'<link href="{quoted_href}">{text}</link>'
        return Paragraph(text, self._paragraph_style(node, size))

    def _boxed(self, flowables: List, width: float, background: Optional[colors.Color]) -> List:
        """Wrap flowables in a one-cell table, optionally filled."""
        if not flowables:
            return []
        commands = [("VALIGN", (0, 0), (-1, -1), "TOP")]
        if background is not None:
            commands.append(("BACKGROUND", (0, 0), (-1, -1), background))
        table = Table([[flowables]], colWidths=[width])
        table.setStyle(TableStyle(commands))
        return [table]

    def _grid(self, cells: List[List], columns: int, width: float, cell_width: float) -> List:
        rows = [cells[i : i + columns] for i in range(0, len(cells), columns)]
        for row in rows:
            row.extend([""] * (columns - len(row)))
        table = Table(rows, colWidths=[cell_width] * columns)
        table.setStyle(
            TableStyle(
                [
                    ("VALIGN", (0, 0), (-1, -1), "TOP"),
                    ("LEFTPADDING", (0, 0), (-1, -1), 6),
                    ("RIGHTPADDING", (0, 0), (-1, -1), 6),
                    ("BOTTOMPADDING", (0, 0), (-1, -1), 8),
                ]
            )
        )
        return [table]

    def _image(self, src: Optional[str], max_width: float) -> List:
        if not src:
            return []
        try:
            reader = self.image_loader(src)
            img_width, img_height = reader.getSize()
        except Exception as e:
            # Missing images degrade to no image; the rest of the page still exports
            _log_warning(f"Could not load image {src}: {e}")
            return []
        scale = min(1.0, max_width / img_width) if img_width else 1.0
        return [LoadedImage(reader, img_width * scale, img_height * scale)]

    def _children(self, node: RenderNode, width: float) -> List:
        flowables = []
        for child in node.children:
            flowables.extend(self.flowables(child, width))
        return flowables

    def _section(self, node: RenderNode, width: float) -> List:
        style = node.style_dict()
        padding = float(style.get("padding-top", "0px").rstrip("px") or 0) * PX_TO_PT
        inner = [Spacer(0, padding)]

        background_image = node.attr("background_image")
        if background_image:
            inner.extend(self._image(background_image, width - 12))

        inner.extend(self._children(node, width - 12))
        inner.append(Spacer(0, padding))

        return self._boxed(inner, width, section_background(node, self.page_background))

    def flowables(self, node: RenderNode, width: float) -> List:
        kind = node.kind
        if kind in ("page", "column"):
            return self._children(node, width)
        if kind == "section":
            return self._section(node, width)
        if kind == "heading":
            level = node.attr("level", 2)
            return [self._text(node, size=HEADING_SIZES.get(level, 14), bold=True)]
        if kind in ("paragraph", "location"):
            return [self._text(node)] if node.text else []
        if kind == "button":
            return [self._link(node, size=13)]
        if kind in ("link", "contact_row"):
            return [self._link(node)]
        if kind == "image":
            return self._image(node.attr("src"), width)
        if kind == "overlay":
            return []
        if kind in ("chip_list", "link_list"):
            cells = [self.flowables(child, width) for child in node.children]
            if not cells:
                return []
            columns = min(len(cells), 4)
            return self._grid(cells, columns, width, width / columns)
        if kind == "chip":
            return [self._text(node, size=9)]
        if kind == "card":
            background = to_pdf_color(node.style_dict().get("background-color"))
            return self._boxed(self._children(node, width - 12), width, background)
        if kind == "grid":
            columns = int(node.attr("columns", 1))
            if not node.children:
                return []
            if columns <= 1:
                return self._children(node, width)
            cell_width = width / columns
            cells = [self.flowables(child, cell_width - 12) for child in node.children]
            return self._grid(cells, columns, width, cell_width)

        _log_debug(f"No PDF layout for node kind '{kind}', rendering children only")
        return self._children(node, width)


class PdfDocumentWriter:
    """
    Writes snapshot trees to PDF files.

    Args:
        output_dir: Directory for artifacts (default: FOLIO_EXPORTS_PATH)
        image_loader: Callable returning a reportlab ImageReader for a URL or path
    """

    def __init__(
        self,
        output_dir: Path = None,
        image_loader: Callable[[str], ImageReader] = ImageReader,
    ):
        self.output_dir = Path(output_dir) if output_dir is not None else EXPORTS_PATH
        self.image_loader = image_loader

    def write(self, snapshot: RenderNode, filename: str, options: ExportOptions) -> Path:
        """
        Lay out the snapshot and write it to output_dir / filename.

        Args:
            snapshot: Root "page" node
            filename: Artifact file name
            options: Passthrough export options

        Returns:
            Path to the written PDF

        Raises:
            ExportFailure: If the page options are unsupported or layout fails
        """
        if options.page_format.lower() not in PAGE_SIZES:
            raise ExportFailure(f"Unsupported page format: {options.page_format}")
        if options.unit not in UNITS:
            raise ExportFailure(f"Unsupported margin unit: {options.unit}")

        page_size = PAGE_SIZES[options.page_format.lower()]
        page_size = landscape(page_size) if options.orientation == "landscape" else portrait(page_size)
        margin = options.margin * UNITS[options.unit]

        self.output_dir.mkdir(parents=True, exist_ok=True)
        output_path = self.output_dir / filename

        layout = PageLayout.for_snapshot(snapshot, self.image_loader)
        page_background = layout.page_background

        doc = SimpleDocTemplate(
            str(output_path),
            pagesize=page_size,
            leftMargin=margin,
            rightMargin=margin,
            topMargin=margin,
            bottomMargin=margin,
            title=Path(filename).stem,
        )

        def paint_background(canvas, _doc):
            if page_background is None:
                return
            canvas.saveState()
            canvas.setFillColor(page_background)
            canvas.rect(0, 0, page_size[0], page_size[1], fill=1, stroke=0)
            canvas.restoreState()

        try:
            flowables = layout.flowables(snapshot, doc.width)
            doc.build(flowables, onFirstPage=paint_background, onLaterPages=paint_background)
        except ExportFailure:
            raise
        except Exception as e:
            raise ExportFailure(f"PDF layout failed for {filename}", original_error=e) from e

        _log_debug(f"Wrote {output_path}")
        return output_path


def image_options_summary(options: ExportOptions) -> Dict[str, object]:
    """Image fidelity options as recorded in export events."""
    return {
        "image_type": options.image_type,
        "image_quality": options.image_quality,
        "raster_scale": options.raster_scale,
    }

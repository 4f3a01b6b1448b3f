"""
Export Options

Loads the export collaborator's passthrough parameters (margin, image fidelity,
raster scale, page size and orientation) from YAML with OmegaConf. These values are
handed to the document writer untouched; nothing in the export job computes them.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from omegaconf import OmegaConf

load_dotenv()
DEFAULT_OPTIONS_PATH = Path(__file__).parent / "export_options.yaml"
EXPORT_OPTIONS_PATH = Path(os.getenv("FOLIO_EXPORT_OPTIONS_PATH", str(DEFAULT_OPTIONS_PATH)))

ARTIFACT_SUFFIX = "-portfolio"
ANONYMOUS_IDENTIFIER = "anonymous"


@dataclass(frozen=True)
class ExportOptions:
    """
    Export collaborator configuration.

    Attributes:
        margin: Page margin, in `unit`
        unit: Margin unit ("in", "mm", "cm", "pt")
        image_type: Raster image encoding for embedded images
        image_quality: Raster image quality (0-1)
        raster_scale: Raster scale factor for embedded images
        page_format: Page size name ("a4", "letter", "legal")
        orientation: "portrait" or "landscape"
        timeout_s: Seconds before a running export is reported as failed
    """

    margin: float = 1.0
    unit: str = "in"
    image_type: str = "jpeg"
    image_quality: float = 0.98
    raster_scale: float = 2.0
    page_format: str = "a4"
    orientation: str = "portrait"
    timeout_s: float = 60.0


def artifact_name(identifier: Optional[str]) -> str:
    """
    Deterministic artifact name for a document owner.

    Example:
        >>> artifact_name("ada")
        'ada-portfolio'
    """
    return f"{identifier or ANONYMOUS_IDENTIFIER}{ARTIFACT_SUFFIX}"


def artifact_filename(identifier: Optional[str]) -> str:
    """Artifact file name, e.g. 'ada-portfolio.pdf'."""
    return f"{artifact_name(identifier)}.pdf"


def load_export_options(config_path: Path = None) -> ExportOptions:
    """
    Load export options from YAML.

    Keys missing from the file keep their ExportOptions defaults.

    Args:
        config_path: Optional path to the options file (defaults to
            FOLIO_EXPORT_OPTIONS_PATH, then the packaged export_options.yaml)

    Returns:
        ExportOptions
    """
    if config_path is None:
        config_path = EXPORT_OPTIONS_PATH

    raw = OmegaConf.to_container(OmegaConf.load(config_path), resolve=True) or {}
    image = raw.get("image") or {}
    defaults = ExportOptions()

    return ExportOptions(
        margin=float(raw.get("margin", defaults.margin)),
        unit=str(raw.get("unit", defaults.unit)),
        image_type=str(image.get("type", defaults.image_type)),
        image_quality=float(image.get("quality", defaults.image_quality)),
        raster_scale=float(raw.get("raster_scale", defaults.raster_scale)),
        page_format=str(raw.get("page_format", defaults.page_format)),
        orientation=str(raw.get("orientation", defaults.orientation)),
        timeout_s=float(raw.get("timeout_s", defaults.timeout_s)),
    )

"""Unit tests for export options and artifact naming."""

import pytest

from folio.contexts.export import ExportOptions, artifact_filename, artifact_name, load_export_options


@pytest.mark.unit
def test_packaged_options():
    """Test the packaged export options file."""
    options = load_export_options()

    assert options.margin == 1.0
    assert options.unit == "in"
    assert options.image_type == "jpeg"
    assert options.image_quality == 0.98
    assert options.raster_scale == 2.0
    assert options.page_format == "a4"
    assert options.orientation == "portrait"


@pytest.mark.unit
def test_partial_options_file_keeps_defaults(tmp_path):
    """Test that keys missing from a custom file keep their defaults."""
    config = tmp_path / "options.yaml"
    config.write_text("page_format: letter\nimage:\n  quality: 0.5\ntimeout_s: 5\n")

    options = load_export_options(config)

    assert options.page_format == "letter"
    assert options.image_quality == 0.5
    assert options.image_type == "jpeg"
    assert options.timeout_s == 5.0
    assert options.margin == ExportOptions().margin


@pytest.mark.unit
def test_artifact_name_from_identifier():
    """Test deterministic artifact naming."""
    assert artifact_name("ada") == "ada-portfolio"
    assert artifact_filename("ada") == "ada-portfolio.pdf"


@pytest.mark.unit
@pytest.mark.parametrize("identifier", [None, ""])
def test_artifact_name_without_identifier(identifier):
    """Test the placeholder name when no identifier is known."""
    assert artifact_name(identifier) == "anonymous-portfolio"

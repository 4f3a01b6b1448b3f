"""
FOLIO - Portfolio documents, resolved, styled and rendered

Turns an author's partially-specified portfolio document into a themed page for
visitors and into a portable PDF for offline viewing and printing.

Architecture:
- Retrieval Context: Public document fetching and outcome classification
- Resolution Context: Layered defaults and editing diffs
- Styling Context: Customization knobs to concrete visual parameters
- Rendering Context: Section composition and the renderable tree
- Export Context: Asynchronous snapshot-to-PDF jobs
"""

__version__ = "0.1.0"

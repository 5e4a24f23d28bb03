"""
Module: config

Purpose:
    Configuration dataclass for the document build pipeline. Immutable
    configuration with validation on construction.

Key Classes:
    - BuildConfig: Output formats, location and rendering options

Dependencies:
    - dataclasses (std)
    - pathlib (std)
    - layout.config.LayoutConfig

Used By:
    - controller: build_document()
    - cli: render command
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple

from docgen_toolkit.layout.config import LayoutConfig

OUTPUT_FORMATS = ("pdf", "html", "json")
DEFAULT_DPI = 96


@dataclass(frozen=True)
class BuildConfig:
    """
    Configuration for building documents (immutable).

    Attributes:
        output_dir: Directory for generated files
        formats: Output formats, any of "pdf", "html", "json"
        dpi: Pixel density for PDF px -> pt conversion
        file_stem: Output file name without suffix (default: from template name)
        show_margin_guides: Outline the page margin in HTML output
        warn_unresolved_bindings: Report bindings missing from the data
        layout: Row grouping and table sizing

    Example:
        >>> config = BuildConfig(output_dir=Path("out"), formats=("pdf", "html"))
    """

    output_dir: Path
    formats: Tuple[str, ...] = ("pdf",)
    dpi: int = DEFAULT_DPI
    file_stem: Optional[str] = None
    show_margin_guides: bool = False
    warn_unresolved_bindings: bool = True
    layout: LayoutConfig = field(default_factory=LayoutConfig)

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        object.__setattr__(self, "output_dir", Path(self.output_dir))
        if isinstance(self.formats, str):
            object.__setattr__(self, "formats", (self.formats,))
        formats = tuple(dict.fromkeys(f.lower() for f in self.formats))
        object.__setattr__(self, "formats", formats)

        if not formats:
            raise ValueError("At least one output format is required")
        unknown = [f for f in formats if f not in OUTPUT_FORMATS]
        if unknown:
            raise ValueError(f"Unknown output format(s): {', '.join(unknown)}")
        if self.dpi <= 0:
            raise ValueError(f"dpi must be positive: {self.dpi}")
        if self.file_stem is not None:
            if not self.file_stem or "/" in self.file_stem or "\\" in self.file_stem:
                raise ValueError(f"file_stem must be a plain file name: {self.file_stem!r}")

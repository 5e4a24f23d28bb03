"""
Module: output

Purpose:
    Rendering and output generation.
    Positioned elements become a target-agnostic VisualTree, which is
    then written as HTML, PDF or JSON.

Key Functions:
    - render(): Positioned elements -> VisualTree
    - render_template(): Template (+ data) -> VisualTree
    - generate_html() / write_html(): HTML preview
    - render_to_pdf() / render_pdf_bytes(): PDF via ReportLab

Dependencies:
    - reportlab: PDF generation
    - PIL: Image handling

Used By:
    - docgen_toolkit.controller
    - docgen_toolkit.cli
"""

from .visual import (
    IMAGE_PLACEHOLDER,
    NO_DATA_MARKER,
    Box,
    ImageContent,
    Justify,
    LineContent,
    TableContent,
    TextContent,
    VisualNode,
    VisualTree,
)
from .renderer import render, render_node, render_template, table_cell
from .html_writer import generate_html, write_html
from .pdf_writer import RenderError, render_pdf_bytes, render_to_pdf

__all__ = [
    # Visual tree
    "Box",
    "TextContent",
    "LineContent",
    "TableContent",
    "ImageContent",
    "Justify",
    "VisualNode",
    "VisualTree",
    "NO_DATA_MARKER",
    "IMAGE_PLACEHOLDER",
    # Rendering
    "render",
    "render_node",
    "render_template",
    "table_cell",
    # Writers
    "generate_html",
    "write_html",
    "render_to_pdf",
    "render_pdf_bytes",
    "RenderError",
]

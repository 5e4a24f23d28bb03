"""
Module: output.pdf_writer

Purpose:
    Render a VisualTree to PDF using ReportLab.
    The page becomes one PDF page sized from its pixel dimensions;
    every node is drawn at its absolute box.

Key Functions:
    - render_to_pdf(): Write a PDF file
    - render_pdf_bytes(): Render to an in-memory buffer

Key Classes:
    - RenderError: PDF could not be produced

Dependencies:
    - reportlab: PDF generation
    - PIL: Decoding data-URI images

Used By:
    - controller: "pdf" output format
"""

from __future__ import annotations

import base64
import io
import logging
from pathlib import Path
from typing import BinaryIO, Union
from urllib.parse import unquote_to_bytes

from PIL import Image
from reportlab.lib.colors import HexColor
from reportlab.lib.utils import ImageReader
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas

from docgen_toolkit.core.models.elements import FontWeight
from docgen_toolkit.layout.config import TABLE_HEADER_HEIGHT_PX, TABLE_ROW_HEIGHT_PX

from .visual import (
    IMAGE_PLACEHOLDER,
    ImageContent,
    Justify,
    LineContent,
    TableContent,
    TextContent,
    VisualNode,
    VisualTree,
)

logger = logging.getLogger(__name__)

# CSS pixels are 1/96 inch
DEFAULT_DPI = 96

FONT_REGULAR = "Helvetica"
FONT_BOLD = "Helvetica-Bold"
ELLIPSIS = "…"

TEXT_PADDING_PX = 8
CELL_PADDING_PX = 4
TABLE_FONT_SIZE_PX = 12
PLACEHOLDER_FONT_SIZE_PX = 12

TEXT_COLOR = HexColor("#0a0a0a")
MUTED_COLOR = HexColor("#737373")
BORDER_COLOR = HexColor("#e5e7eb")
HEADER_FILL = HexColor("#f5f5f5")


class RenderError(Exception):
    """Error while producing PDF output."""
    pass


def render_to_pdf(
    tree: VisualTree,
    output_path: Path,
    *,
    dpi: int = DEFAULT_DPI,
) -> Path:
    """
    Render a visual tree to a PDF file.

    Args:
        tree: Render output
        output_path: Path to write PDF
        dpi: Pixel density used for px -> pt conversion (default 96)

    Returns:
        Path written

    Raises:
        RenderError: If the PDF cannot be written

    Example:
        >>> render_to_pdf(tree, Path("output/invoice.pdf"))
    """
    output_path = Path(output_path)
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise RenderError(f"Cannot create output directory {output_path.parent}: {e}") from e

    _render(tree, str(output_path), dpi)
    logger.info(f"Rendered {len(tree)} elements to {output_path}")
    return output_path


def render_pdf_bytes(tree: VisualTree, *, dpi: int = DEFAULT_DPI) -> bytes:
    """Render a visual tree and return the PDF document as bytes."""
    buf = io.BytesIO()
    _render(tree, buf, dpi)
    return buf.getvalue()


def _render(tree: VisualTree, target: Union[str, BinaryIO], dpi: int) -> None:
    if dpi <= 0:
        raise RenderError(f"dpi must be positive: {dpi}")
    if len(tree) == 0:
        logger.warning("Empty visual tree, creating blank PDF")

    page_width_pt = _px_to_pt(tree.page.width, dpi)
    page_height_pt = _px_to_pt(tree.page.height, dpi)

    c = canvas.Canvas(target, pagesize=(page_width_pt, page_height_pt))
    for node in tree.nodes:
        _draw_node(c, node, dpi, page_height_pt)
    c.showPage()

    # Nothing touches the target until save()
    try:
        c.save()
    except OSError as e:
        raise RenderError(f"Failed to write PDF: {e}") from e


def _draw_node(
    c: canvas.Canvas,
    node: VisualNode,
    dpi: int,
    page_height_pt: float,
) -> None:
    """Dispatch one node to its drawing routine."""
    box = node.box
    x_pt = _px_to_pt(box.left, dpi)
    y_pt = _transform_y(page_height_pt, box.top, box.height, dpi)
    width_pt = _px_to_pt(box.width, dpi)
    height_pt = _px_to_pt(box.height, dpi)

    content = node.content
    if not isinstance(content, (TextContent, LineContent, TableContent, ImageContent)):
        raise TypeError(f"Unsupported content type: {type(content).__name__}")

    c.saveState()
    if isinstance(content, TextContent):
        _draw_text(c, content, x_pt, y_pt, width_pt, height_pt, dpi)
    elif isinstance(content, LineContent):
        _draw_line(c, content, x_pt, y_pt + height_pt, width_pt, dpi)
    elif isinstance(content, TableContent):
        _draw_table(c, content, x_pt, y_pt + height_pt, width_pt, dpi)
    else:
        _draw_image(c, node, content, x_pt, y_pt, width_pt, height_pt, dpi)
    c.restoreState()


def _draw_text(
    c: canvas.Canvas,
    content: TextContent,
    x_pt: float,
    y_pt: float,
    width_pt: float,
    height_pt: float,
    dpi: int,
) -> None:
    """
    Draw single-line text, vertically centred, truncated with an ellipsis.

    Args:
        x_pt: Box left in points
        y_pt: Box bottom in points
    """
    font = FONT_BOLD if content.font_weight is FontWeight.BOLD else FONT_REGULAR
    size_pt = _px_to_pt(content.font_size, dpi)
    padding_pt = _px_to_pt(TEXT_PADDING_PX, dpi)
    text = _truncate(content.text, font, size_pt, width_pt - 2 * padding_pt)
    if not text:
        return

    # Approximate cap-height centring for Helvetica
    baseline = y_pt + height_pt / 2 - size_pt * 0.35

    c.setFillColor(TEXT_COLOR)
    c.setFont(font, size_pt)
    if content.justify is Justify.CENTER:
        c.drawCentredString(x_pt + width_pt / 2, baseline, text)
    elif content.justify is Justify.END:
        c.drawRightString(x_pt + width_pt - padding_pt, baseline, text)
    else:
        c.drawString(x_pt + padding_pt, baseline, text)


def _draw_line(
    c: canvas.Canvas,
    content: LineContent,
    x_pt: float,
    top_pt: float,
    width_pt: float,
    dpi: int,
) -> None:
    """Filled bar at the top of the box, full width."""
    thickness_pt = _px_to_pt(content.thickness, dpi)
    c.setFillColor(TEXT_COLOR)
    c.rect(x_pt, top_pt - thickness_pt, width_pt, thickness_pt, stroke=0, fill=1)


def _draw_table(
    c: canvas.Canvas,
    content: TableContent,
    x_pt: float,
    top_pt: float,
    width_pt: float,
    dpi: int,
) -> None:
    """
    Draw header and body rows from the top of the box downwards.

    Columns share the width equally. Rows are drawn even when they run
    past the box bottom, matching the HTML overflow.
    """
    if not content.columns:
        return

    col_width = width_pt / len(content.columns)
    header_pt = _px_to_pt(TABLE_HEADER_HEIGHT_PX, dpi)
    row_pt = _px_to_pt(TABLE_ROW_HEIGHT_PX, dpi)
    size_pt = _px_to_pt(TABLE_FONT_SIZE_PX, dpi)
    padding_pt = _px_to_pt(CELL_PADDING_PX, dpi)

    c.setLineWidth(_px_to_pt(1, dpi))
    c.setStrokeColor(BORDER_COLOR)

    # Header
    header_bottom = top_pt - header_pt
    c.setFillColor(HEADER_FILL)
    c.rect(x_pt, header_bottom, width_pt, header_pt, stroke=1, fill=1)
    c.setFillColor(TEXT_COLOR)
    c.setFont(FONT_BOLD, size_pt)
    for i, column in enumerate(content.columns):
        cell_x = x_pt + i * col_width
        text = _truncate(column, FONT_BOLD, size_pt, col_width - 2 * padding_pt)
        c.drawCentredString(cell_x + col_width / 2, header_bottom + header_pt / 2 - size_pt * 0.35, text)

    # Body
    c.setFont(FONT_REGULAR, size_pt)
    c.setFillColor(MUTED_COLOR if content.is_placeholder else TEXT_COLOR)
    row_top = header_bottom
    for row in content.rows:
        row_bottom = row_top - row_pt
        c.rect(x_pt, row_bottom, width_pt, row_pt, stroke=1, fill=0)
        for i, cell in enumerate(row):
            cell_x = x_pt + i * col_width
            text = _truncate(cell, FONT_REGULAR, size_pt, col_width - 2 * padding_pt)
            c.drawString(cell_x + padding_pt, row_bottom + row_pt / 2 - size_pt * 0.35, text)
        row_top = row_bottom

    # Column separators
    for i in range(1, len(content.columns)):
        line_x = x_pt + i * col_width
        c.line(line_x, top_pt, line_x, row_top)


def _draw_image(
    c: canvas.Canvas,
    node: VisualNode,
    content: ImageContent,
    x_pt: float,
    y_pt: float,
    width_pt: float,
    height_pt: float,
    dpi: int,
) -> None:
    """
    Draw an image, or the placeholder marker when it has no source or
    the asset cannot be loaded.
    """
    if content.is_placeholder:
        _draw_placeholder(c, x_pt, y_pt, width_pt, height_pt, dpi)
        return

    try:
        reader = _load_image(content.src)
        c.drawImage(
            reader,
            x_pt,
            y_pt,
            width=width_pt,
            height=height_pt,
            preserveAspectRatio=content.preserve_aspect_ratio,
            anchor="c",
            mask="auto",
        )
    except (OSError, ValueError) as e:
        logger.warning(f"Could not load image for {node.element_id}: {e}")
        _draw_placeholder(c, x_pt, y_pt, width_pt, height_pt, dpi)


def _draw_placeholder(
    c: canvas.Canvas,
    x_pt: float,
    y_pt: float,
    width_pt: float,
    height_pt: float,
    dpi: int,
) -> None:
    size_pt = _px_to_pt(PLACEHOLDER_FONT_SIZE_PX, dpi)
    c.setFillColor(MUTED_COLOR)
    c.setFont(FONT_REGULAR, size_pt)
    c.drawCentredString(x_pt + width_pt / 2, y_pt + height_pt / 2 - size_pt * 0.35, IMAGE_PLACEHOLDER)


def _load_image(src: str) -> ImageReader:
    """
    Open an image source as an ImageReader.

    Data URIs are decoded with Pillow; paths and URLs are opened by
    ReportLab. Both are fully decoded before drawing starts.

    Raises:
        OSError: If the asset cannot be read or decoded
        ValueError: If a data URI is malformed
    """
    if src.startswith("data:"):
        header, sep, payload = src.partition(",")
        if not sep:
            raise ValueError("data URI has no payload")
        if header.endswith(";base64"):
            raw = base64.b64decode(payload, validate=True)
        else:
            raw = unquote_to_bytes(payload)
        img = Image.open(io.BytesIO(raw))
        img.load()
        return _pil_to_reader(img)

    reader = ImageReader(src)
    # ImageReader decodes lazily; force it so truncated files fail here
    reader.getRGBData()
    return reader


def _pil_to_reader(img: Image.Image) -> ImageReader:
    """
    Convert PIL image to ReportLab ImageReader.

    Args:
        img: PIL Image object

    Returns:
        ImageReader for use with ReportLab
    """
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    buf.seek(0)
    return ImageReader(buf)


def _truncate(text: str, font: str, size_pt: float, max_width_pt: float) -> str:
    """
    Shorten text with a trailing ellipsis until it fits max_width_pt.

    Binary-searches the longest prefix that fits; prefix width only
    grows with length.
    """
    if stringWidth(text, font, size_pt) <= max_width_pt:
        return text
    if stringWidth(ELLIPSIS, font, size_pt) > max_width_pt:
        return ""
    lo, hi = 0, len(text)
    while lo < hi:
        mid = (lo + hi + 1) // 2
        if stringWidth(text[:mid] + ELLIPSIS, font, size_pt) <= max_width_pt:
            lo = mid
        else:
            hi = mid - 1
    return text[:lo].rstrip() + ELLIPSIS


def _px_to_pt(px: float, dpi: int = DEFAULT_DPI) -> float:
    """
    Convert pixels to PDF points.

    PDF points are 1/72 inch.

    Args:
        px: Pixel value
        dpi: Dots per inch

    Returns:
        Value in PDF points
    """
    return px * 72.0 / dpi


def _transform_y(
    page_height_pt: float,
    y_px_top: float,
    height_px: float,
    dpi: int = DEFAULT_DPI,
) -> float:
    """
    Convert top-down pixel Y coordinate to bottom-up PDF Y.

    Args:
        page_height_pt: Page height in points
        y_px_top: Y position from top in pixels (absolute)
        height_px: Height of element in pixels
        dpi: Dots per inch

    Returns:
        Y position of the element's bottom edge, from page bottom, in points
    """
    y_pt_from_top = _px_to_pt(y_px_top, dpi)
    height_pt = _px_to_pt(height_px, dpi)
    return page_height_pt - y_pt_from_top - height_pt

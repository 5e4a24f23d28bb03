"""
Module: output.html_writer

Purpose:
    Serialize a visual tree to a static HTML document.
    Every node is an absolutely positioned box inside a page-sized
    container, so the browser preview matches the PDF output.

Key Functions:
    - generate_html(): VisualTree -> HTML string
    - write_html(): Write the HTML document to disk

Dependencies:
    - html (std): Escaping

Used By:
    - controller: "html" output format
    - cli: Preview output
"""

from __future__ import annotations

import logging
from html import escape
from pathlib import Path
from typing import List

from docgen_toolkit.layout.config import TABLE_HEADER_HEIGHT_PX, TABLE_ROW_HEIGHT_PX

from .visual import (
    IMAGE_PLACEHOLDER,
    ImageContent,
    LineContent,
    TableContent,
    TextContent,
    VisualNode,
    VisualTree,
)

logger = logging.getLogger(__name__)

TEXT_COLOR = "#0a0a0a"
MUTED_COLOR = "#737373"
BORDER_COLOR = "#e5e7eb"
HEADER_FILL = "#f5f5f5"
MARGIN_GUIDE_COLOR = "#93c5fd"

_JUSTIFY_CSS = {
    "start": "flex-start",
    "center": "center",
    "end": "flex-end",
}

_CELL_STYLE = f"border: 1px solid {BORDER_COLOR}; padding: 4px;"


def generate_html(tree: VisualTree, *, show_margin_guides: bool = False) -> str:
    """
    Build a complete HTML document for a visual tree.

    Args:
        tree: Render output
        show_margin_guides: Draw a dashed outline of the page margin

    Returns:
        HTML text. The same tree always produces the same text.
    """
    page = tree.page
    parts: List[str] = [_render_node(node) for node in tree.nodes]
    if show_margin_guides and page.margin > 0:
        parts.insert(0, _margin_guide(tree))

    body = "\n".join(parts)
    return (
        "<!DOCTYPE html>\n"
        "<html>\n"
        "<head>\n"
        '<meta charset="UTF-8">\n'
        "<style>\n"
        "* { margin: 0; padding: 0; box-sizing: border-box; }\n"
        "body { font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, "
        "'Helvetica Neue', Arial, sans-serif; background-color: #ffffff; }\n"
        f".page {{ position: relative; width: {_px(page.width)}px; "
        f"min-height: {_px(page.height)}px; background-color: #ffffff; }}\n"
        "</style>\n"
        "</head>\n"
        "<body>\n"
        '<div class="page">\n'
        f"{body}\n"
        "</div>\n"
        "</body>\n"
        "</html>\n"
    )


def write_html(tree: VisualTree, output_path: Path, *, show_margin_guides: bool = False) -> Path:
    """
    Write the HTML document for a tree.

    Returns:
        Path written
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(
        generate_html(tree, show_margin_guides=show_margin_guides),
        encoding="utf-8",
    )
    logger.info(f"Wrote HTML preview to {output_path}")
    return output_path


def _render_node(node: VisualNode) -> str:
    box = node.box
    content = node.content
    if isinstance(content, TextContent):
        inner = _render_text(content)
    elif isinstance(content, LineContent):
        inner = _render_line(content)
    elif isinstance(content, TableContent):
        inner = _render_table(content)
    elif isinstance(content, ImageContent):
        inner = _render_image(content)
    else:
        raise TypeError(f"Unsupported content type: {type(content).__name__}")

    return (
        f'<div data-element-id="{escape(node.element_id)}" '
        f'data-element-type="{node.element_type.value}" '
        f'style="position: absolute; left: {_px(box.left)}px; top: {_px(box.top)}px; '
        f'width: {_px(box.width)}px; height: {_px(box.height)}px;">'
        f"{inner}</div>"
    )


def _render_text(content: TextContent) -> str:
    style = (
        "width: 100%; height: 100%; display: flex; align-items: center; "
        f"padding: 0 8px; color: {TEXT_COLOR}; overflow: hidden; "
        f"font-size: {_px(content.font_size)}px; font-weight: {content.font_weight.value}; "
        f"justify-content: {_JUSTIFY_CSS[content.justify.value]};"
    )
    span_style = (
        "overflow: hidden; text-overflow: ellipsis; white-space: nowrap; max-width: 100%;"
    )
    return f'<div style="{style}"><span style="{span_style}">{escape(content.text)}</span></div>'


def _render_line(content: LineContent) -> str:
    return (
        f'<div style="width: 100%; height: {_px(content.thickness)}px; '
        f'background-color: {TEXT_COLOR};"></div>'
    )


def _render_table(content: TableContent) -> str:
    header = "".join(
        f'<th style="{_CELL_STYLE} height: {_px(TABLE_HEADER_HEIGHT_PX)}px; '
        f'background-color: {HEADER_FILL};">'
        f'{escape(column)}</th>'
        for column in content.columns
    )
    # Row heights match the grid estimate_height() sizes the table box on
    cell_style = f"{_CELL_STYLE} height: {_px(TABLE_ROW_HEIGHT_PX)}px;"
    if content.is_placeholder:
        cell_style = f"{cell_style} color: {MUTED_COLOR};"
    body = "".join(
        "<tr>" + "".join(f'<td style="{cell_style}">{escape(cell)}</td>' for cell in row) + "</tr>"
        for row in content.rows
    )
    return (
        '<div style="width: 100%; overflow: auto;">'
        '<table style="width: 100%; font-size: 12px; border-collapse: collapse;">'
        f"<thead><tr>{header}</tr></thead>"
        f"<tbody>{body}</tbody>"
        "</table></div>"
    )


def _render_image(content: ImageContent) -> str:
    wrapper = (
        "width: 100%; height: 100%; display: flex; align-items: center; "
        "justify-content: center; overflow: hidden;"
    )
    if content.is_placeholder:
        return (
            f'<div style="{wrapper}"><span style="color: {MUTED_COLOR}; font-size: 12px;">'
            f"{escape(IMAGE_PLACEHOLDER)}</span></div>"
        )
    if content.preserve_aspect_ratio:
        img_style = "max-width: 100%; max-height: 100%; object-fit: contain;"
    else:
        img_style = "width: 100%; height: 100%; object-fit: fill;"
    return (
        f'<div style="{wrapper}"><img src="{escape(content.src)}" alt="Element" '
        f'style="{img_style}" /></div>'
    )


def _margin_guide(tree: VisualTree) -> str:
    page = tree.page
    return (
        f'<div class="margin-guide" style="position: absolute; left: {_px(page.margin)}px; '
        f'top: {_px(page.margin)}px; width: {_px(page.content_width)}px; '
        f'height: {_px(page.content_height)}px; border: 1px dashed {MARGIN_GUIDE_COLOR}; '
        'pointer-events: none;"></div>'
    )


def _px(value: float) -> str:
    """Format a pixel value: integers without decimals, others to 2 places."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.2f}".rstrip("0").rstrip(".")

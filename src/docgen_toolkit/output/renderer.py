"""
Module: output.renderer

Purpose:
    Turn positioned elements into a visual tree.
    Resolves each element's displayed content against the data payload
    and places it at its repositioned box. Paint order is the
    template's element order, not row order.

Key Functions:
    - render(): Positioned elements -> VisualTree
    - render_node(): One positioned element -> VisualNode
    - render_template(): Template (+ optional data) -> VisualTree
    - table_cell(): Column lookup in a table record

Dependencies:
    - binding.resolver: Scalar/array resolution
    - layout: Repositioning for the data-bound path

Used By:
    - controller: Build pipeline
    - cli: Preview output
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Iterable, Optional

from docgen_toolkit.binding.resolver import resolve_array, resolve_scalar, to_display_text
from docgen_toolkit.core.models.elements import (
    Element,
    ImageElement,
    LineElement,
    TableElement,
    TextElement,
)
from docgen_toolkit.core.models.page import Page
from docgen_toolkit.core.models.templates import Template
from docgen_toolkit.layout import LayoutConfig, PositionedElement, place_authored, reposition

from .visual import (
    ALIGN_TO_JUSTIFY,
    NO_DATA_MARKER,
    Box,
    Content,
    ImageContent,
    LineContent,
    TableContent,
    TextContent,
    VisualNode,
    VisualTree,
)

logger = logging.getLogger(__name__)


def render(
    positioned: Iterable[PositionedElement],
    page: Page,
    data: Any,
) -> VisualTree:
    """
    Render positioned elements to a visual tree.

    Args:
        positioned: Output of reposition() or place_authored()
        page: Page geometry
        data: Runtime data payload

    Returns:
        VisualTree with one node per element, in template order

    Raises:
        TypeError: If an element is not one of the known variants
    """
    ordered = sorted(positioned, key=lambda p: p.order)
    nodes = tuple(render_node(placed, data) for placed in ordered)
    logger.debug(f"Rendered {len(nodes)} nodes")
    return VisualTree(page=page, nodes=nodes)


def render_node(placed: PositionedElement, data: Any) -> VisualNode:
    """Render one positioned element at (x, final_y) with its actual height."""
    element = placed.element
    content = _render_content(element, data)
    box = Box(
        left=element.x,
        top=placed.final_y,
        width=element.width,
        height=placed.actual_height,
    )
    return VisualNode(
        element_id=element.id,
        element_type=element.type,
        box=box,
        content=content,
    )


def render_template(
    template: Template,
    data: Optional[Any] = None,
    config: Optional[LayoutConfig] = None,
) -> VisualTree:
    """
    Render a template, repositioning only when data is supplied.

    With data=None the template is previewed at its authored
    coordinates (no height can change without data); bindings then
    render as placeholders.
    """
    if data is None:
        layout = place_authored(template.elements)
        return render(layout.placements, template.page, {})
    layout = reposition(template.elements, data, config, page=template.page)
    return render(layout.placements, template.page, data)


def table_cell(record: Any, column: str) -> str:
    """
    Look up a column value in a table record.

    Tries the lower-cased column name, then the exact name, then falls
    back to NO_DATA_MARKER. Records that are not mappings have no cells.
    """
    if not isinstance(record, Mapping):
        return NO_DATA_MARKER
    key = column.lower()
    if key in record:
        return to_display_text(record[key])
    if column in record:
        return to_display_text(record[column])
    return NO_DATA_MARKER


def _render_content(element: Element, data: Any) -> Content:
    if isinstance(element, TextElement):
        return _render_text(element, data)
    if isinstance(element, LineElement):
        return LineContent(thickness=element.thickness)
    if isinstance(element, TableElement):
        return _render_table(element, data)
    if isinstance(element, ImageElement):
        return _render_image(element)
    raise TypeError(f"Unsupported element type: {type(element).__name__}")


def _render_text(element: TextElement, data: Any) -> TextContent:
    text = resolve_scalar(element.binding, data) if element.binding else element.content
    return TextContent(
        text=text,
        font_size=element.font_size,
        font_weight=element.font_weight,
        justify=ALIGN_TO_JUSTIFY[element.align],
        bound=element.is_bound,
    )


def _render_table(element: TableElement, data: Any) -> TableContent:
    records = resolve_array(element.binding, data)
    if not records:
        return TableContent(
            columns=element.columns,
            rows=(tuple(NO_DATA_MARKER for _ in element.columns),),
            is_placeholder=True,
        )
    rows = tuple(
        tuple(table_cell(record, column) for column in element.columns)
        for record in records
    )
    return TableContent(columns=element.columns, rows=rows)


def _render_image(element: ImageElement) -> ImageContent:
    if not element.has_source:
        return ImageContent(src=None, preserve_aspect_ratio=element.maintain_aspect_ratio)
    return ImageContent(
        src=element.src,
        preserve_aspect_ratio=element.maintain_aspect_ratio,
        natural_aspect_ratio=element.natural_aspect_ratio,
    )

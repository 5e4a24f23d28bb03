"""
Module: controller

Purpose:
    Orchestrate the complete document build pipeline.
    Check bindings → Reposition → Render → Write outputs

Key Functions:
    - build_document(): Main entry point for building a document
    - build_from_store(): Build a stored template by id

Key Classes:
    - BuildResult: Complete build result
    - BuildError: Exception for build failures

Dependencies:
    - binding: Unresolved binding detection
    - layout: Repositioning
    - output: Rendering and writers

Used By:
    - docgen_toolkit.cli
"""

from __future__ import annotations

import logging
import re
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from docgen_toolkit import __version__
from docgen_toolkit.binding import find_unresolved_bindings
from docgen_toolkit.core.models.templates import Template
from docgen_toolkit.layout import LayoutResult, place_authored, reposition
from docgen_toolkit.output import (
    RenderError,
    VisualTree,
    render,
    render_to_pdf,
    write_html,
)
from docgen_toolkit.storage import TemplateStore

from .config import BuildConfig

logger = logging.getLogger(__name__)


class BuildError(Exception):
    """Error during build pipeline."""
    pass


@dataclass(frozen=True)
class BuildResult:
    """
    Complete build result (immutable).

    Attributes:
        tree: Rendered visual tree
        layout: Layout the tree was rendered from
        outputs: Written file per format ("pdf", "html", "json")
        warnings: Unresolved bindings, page overflow and similar
        metadata: Build metadata dictionary

    Example:
        >>> result = build_document(template, data, config)
        >>> print(result.outputs["pdf"])
    """

    tree: VisualTree
    layout: LayoutResult
    outputs: Dict[str, Path]
    warnings: tuple[str, ...]
    metadata: dict

    @property
    def pdf_path(self) -> Optional[Path]:
        return self.outputs.get("pdf")

    @property
    def html_path(self) -> Optional[Path]:
        return self.outputs.get("html")

    @property
    def json_path(self) -> Optional[Path]:
        return self.outputs.get("json")


def build_document(
    template: Template,
    data: Optional[Any],
    config: BuildConfig,
) -> BuildResult:
    """
    Build a document from a template and a data payload.

    Pipeline:
    1. Collect unresolved bindings (warnings only)
    2. Reposition elements for the data (authored layout when data is None)
    3. Render the visual tree
    4. Write each requested format

    Args:
        template: Template to render
        data: Runtime data payload, or None for a template-only preview
        config: Build configuration

    Returns:
        BuildResult with paths and metadata

    Raises:
        BuildError: If rendering or writing fails
    """
    warnings: List[str] = []
    start_time = time.perf_counter()

    logger.info(
        f"Starting build for template {template.id or '<unsaved>'} "
        f"({template.element_count} elements)"
    )

    # 1. Unresolved bindings
    if data is not None and config.warn_unresolved_bindings:
        for binding in find_unresolved_bindings(template.elements, data):
            message = f"Unresolved binding: {binding}"
            logger.warning(message)
            warnings.append(message)

    # 2. Layout
    if data is None:
        layout = place_authored(template.elements)
    else:
        layout = reposition(template.elements, data, config.layout, page=template.page)
    warnings.extend(layout.warnings)
    logger.info(f"Laid out {len(layout)} elements in {layout.row_count} rows")

    # 3. Render
    try:
        tree = render(layout.placements, template.page, data if data is not None else {})
    except TypeError as e:
        raise BuildError(f"Failed to render template: {e}") from e

    # 4. Write outputs
    try:
        config.output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise BuildError(f"Cannot create output directory {config.output_dir}: {e}") from e

    stem = config.file_stem or _default_stem(template)
    outputs: Dict[str, Path] = {}
    for fmt in config.formats:
        path = config.output_dir / f"{stem}.{fmt}"
        outputs[fmt] = _write_output(fmt, tree, path, config)
        logger.info(f"Wrote {fmt} output: {path}")

    elapsed = time.perf_counter() - start_time
    logger.info(f"Document build completed in {elapsed:.2f}s")

    metadata = _build_metadata(template, layout, config, elapsed)

    return BuildResult(
        tree=tree,
        layout=layout,
        outputs=outputs,
        warnings=tuple(warnings),
        metadata=metadata,
    )


def build_from_store(
    store: TemplateStore,
    template_id: str,
    user_id: str,
    data: Optional[Any],
    config: BuildConfig,
) -> BuildResult:
    """
    Build a stored template.

    Raises:
        TemplateNotFoundError: If the template is missing or not owned by user_id
        BuildError: If rendering or writing fails
    """
    record = store.get(template_id, user_id)
    logger.debug(f"Loaded template {template_id} version {record.version}")
    return build_document(record.template, data, config)


def _write_output(fmt: str, tree: VisualTree, path: Path, config: BuildConfig) -> Path:
    try:
        if fmt == "pdf":
            return render_to_pdf(tree, path, dpi=config.dpi)
        if fmt == "html":
            return write_html(tree, path, show_margin_guides=config.show_margin_guides)
        path.write_text(tree.to_json() + "\n", encoding="utf-8")
        return path
    except (RenderError, OSError) as e:
        raise BuildError(f"Failed to write {fmt} output: {e}") from e


def _default_stem(template: Template) -> str:
    """
    Derive an output file name from the template.

    Example:
        >>> _default_stem(Template("t1", "Invoice (2024)"))
        'invoice-2024'
    """
    name = template.name or template.id
    slug = re.sub(r"[^A-Za-z0-9]+", "-", name).strip("-").lower()
    return slug or "document"


def _build_metadata(
    template: Template,
    layout: LayoutResult,
    config: BuildConfig,
    elapsed: float,
) -> dict:
    """
    Build metadata dictionary for a generated document.

    The layout section lists each row band with its authored and final
    top, and max_y_shift is the furthest any element was pushed down
    (negative when rows only moved up).

    Returns:
        Metadata dictionary ready for JSON serialization
    """
    return {
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "generator_version": __version__,
        "template": {
            "id": template.id,
            "name": template.name,
            "version": template.version,
            "element_count": template.element_count,
        },
        "layout": {
            "row_count": layout.row_count,
            "content_bottom": layout.bottom,
            "page_height": template.page.height,
            "max_y_shift": max((p.y_shift for p in layout.placements), default=0),
            "rows": [
                {
                    "index": row.index,
                    "authored_top": row.authored_top,
                    "top": row.top,
                    "height": row.height,
                }
                for row in layout.rows
            ],
        },
        "formats": list(config.formats),
        "elapsed_seconds": round(elapsed, 3),
    }

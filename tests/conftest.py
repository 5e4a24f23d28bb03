import pytest
import sys
from pathlib import Path
from PIL import Image

# Add src to sys.path so we can import docgen_toolkit
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from docgen_toolkit.core.models import (  # noqa: E402
    A4_PAGE,
    FontWeight,
    ImageElement,
    LineElement,
    TableElement,
    TextAlign,
    TextElement,
    Template,
)


# Common test fixtures
@pytest.fixture
def a4_page():
    """A4 portrait page (794x1123 px)."""
    return A4_PAGE


@pytest.fixture
def invoice_elements():
    """A small invoice layout: header row, rule, items table, total."""
    return (
        TextElement("title", x=40, y=40, width=300, height=40, content="INVOICE",
                    font_size=24, font_weight=FontWeight.BOLD),
        TextElement("number", x=500, y=42, width=250, height=40,
                    binding="invoice.number", align=TextAlign.RIGHT),
        LineElement("rule", x=40, y=100, width=714, height=2, thickness=2),
        TableElement("items", x=40, y=120, width=714, height=100, min_height=100,
                     columns=("Item", "Quantity", "Total"), binding="invoice.items"),
        TextElement("total", x=500, y=240, width=250, height=40,
                    binding="invoice.total", align=TextAlign.RIGHT),
    )


@pytest.fixture
def invoice_template(invoice_elements):
    """Invoice template on an A4 page."""
    return Template(id="tpl-1", name="Invoice", page=A4_PAGE, elements=invoice_elements)


@pytest.fixture
def invoice_data():
    """Payload with three line items."""
    return {
        "invoice": {
            "number": "INV-001",
            "total": 9720,
            "items": [
                {"item": "Design", "quantity": 1, "total": 2500},
                {"item": "Development", "quantity": 40, "total": 6000},
                {"item": "Hosting", "quantity": 1, "total": 500},
            ],
        }
    }


@pytest.fixture
def sample_image(tmp_path: Path):
    """Create a simple test image (2:1 aspect ratio)."""
    img = Image.new("RGB", (200, 100), color="white")
    img_path = tmp_path / "sample.png"
    img.save(img_path)
    return img_path


@pytest.fixture
def image_element(sample_image):
    """Image element pointing at the sample image."""
    return ImageElement("logo", x=40, y=300, width=200, height=200,
                        src=str(sample_image), natural_aspect_ratio=2.0)

"""
Sample data for previewing templates.

An invoice/company payload covering the bindings used by the stock
invoice template. Used by the CLI's --sample-data flag and by editors
that show bound fields with example values.
"""

from __future__ import annotations

import copy
from typing import Any, Optional

from docgen_toolkit.binding.resolver import resolve_scalar

SAMPLE_DATA: dict[str, Any] = {
    "invoice": {
        "number": "INV-2024-001",
        "date": "2024-01-15",
        "dueDate": "2024-02-15",
        "customer": {
            "name": "Acme Corporation",
            "email": "billing@acme.com",
            "address": "123 Business St, Suite 100",
            "city": "San Francisco",
            "state": "CA",
            "zip": "94102",
        },
        "items": [
            {
                "item": "Web Design Services",
                "name": "Web Design Services",
                "description": "Homepage and landing page design",
                "quantity": 1,
                "price": 2500,
                "total": 2500,
            },
            {
                "item": "Development Hours",
                "name": "Development Hours",
                "description": "Frontend development",
                "quantity": 40,
                "price": 150,
                "total": 6000,
            },
            {
                "item": "Hosting Setup",
                "name": "Hosting Setup",
                "description": "Annual hosting and domain",
                "quantity": 1,
                "price": 500,
                "total": 500,
            },
        ],
        "subtotal": 9000,
        "tax": 720,
        "total": 9720,
        "notes": "Payment due within 30 days. Thank you for your business!",
    },
    "company": {
        "name": "Your Company Name",
        "email": "hello@yourcompany.com",
        "phone": "(555) 123-4567",
        "address": "456 Company Blvd",
        "city": "New York",
        "state": "NY",
        "zip": "10001",
        "website": "www.yourcompany.com",
    },
}


def generate_sample_data() -> dict[str, Any]:
    """Return a fresh copy of the sample payload (safe to mutate)."""
    return copy.deepcopy(SAMPLE_DATA)


def get_sample_value(binding: Optional[str]) -> str:
    """
    Resolve a binding against the sample payload.

    Returns "" for an empty binding and the {{path}} placeholder when
    the sample payload has no value at that path.
    """
    if not binding:
        return ""
    return resolve_scalar(binding, SAMPLE_DATA)

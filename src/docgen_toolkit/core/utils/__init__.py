"""
Utils Package

Serialization and utility functions.
"""

from .serialization import (
    serialize_template,
    deserialize_template,
    load_template_json,
    save_template_json,
    load_data_json,
)

__all__ = [
    "serialize_template",
    "deserialize_template",
    "load_template_json",
    "save_template_json",
    "load_data_json",
]

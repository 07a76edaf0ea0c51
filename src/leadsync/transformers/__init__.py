"""
Transformers Package

Inclusion filtering and normalization of raw lead records.
"""

from .lead_normalizer import FIELD_MAP, filter_records, include, normalize, normalize_value

__all__ = [
    "FIELD_MAP",
    "filter_records",
    "include",
    "normalize",
    "normalize_value",
]

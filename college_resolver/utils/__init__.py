"""Utility helpers."""

from .text import (
    aggressive_key,
    clean_college_name,
    exact_key,
    has_location_suffix,
    split_aliases,
)

__all__ = [
    "aggressive_key",
    "clean_college_name",
    "exact_key",
    "has_location_suffix",
    "split_aliases",
]

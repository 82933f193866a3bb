"""Extracción por texto: Locator + Extractor."""

from core.extraction.extractor import (
    SPLITTERS,
    decompose,
    depth_aware_split,
    find_matching_brace,
    find_object_range,
    naive_split,
    object_body,
    split_pair,
)
from core.extraction.locator import find_named_object_start, find_version_object_start

__all__ = [
    "SPLITTERS",
    "decompose",
    "depth_aware_split",
    "find_matching_brace",
    "find_named_object_start",
    "find_object_range",
    "find_version_object_start",
    "naive_split",
    "object_body",
    "split_pair",
]

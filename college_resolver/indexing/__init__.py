"""Index construction."""

from .canonical_grouper import CanonicalIndex, canonicalize, distinct_institutions, score_variant
from .reference_index import ReferenceIndex

__all__ = [
    "CanonicalIndex",
    "ReferenceIndex",
    "canonicalize",
    "distinct_institutions",
    "score_variant",
]

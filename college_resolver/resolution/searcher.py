"""Autocomplete search over canonical college groups."""

import logging
from collections import Counter
from typing import Optional

from ..indexing.canonical_grouper import CanonicalIndex, distinct_institutions
from ..models import CanonicalVariant
from ..utils.text import word_starts_with

logger = logging.getLogger(__name__)

LABEL_SEPARATOR = " — "


def _matches(text: str, query: str) -> bool:
    return query in text or word_starts_with(text, query)


def base_label(variant: CanonicalVariant) -> str:
    """Base name plus " — City, ST", or the bare base name without a location."""
    record = variant.record
    if record.has_location:
        return f"{variant.base_name}{LABEL_SEPARATOR}{record.location_label}"
    return variant.base_name


def full_label(variant: CanonicalVariant) -> str:
    """Label built from the record's own full name."""
    record = variant.record
    if record.has_location:
        return f"{record.name}{LABEL_SEPARATOR}{record.location_label}"
    return record.name


def disambiguate_labels(variants: list[CanonicalVariant]) -> list[str]:
    """
    Label variants so that no two labels are equal.

    Colliding base labels are upgraded to the full record name; if the
    upgraded label still collides, the record id is appended.
    """
    labels = [base_label(v) for v in variants]
    counts = Counter(labels)
    upgraded = [full_label(v) for v in variants]
    upgraded_counts = Counter(upgraded)
    unique_labels = {label for label in labels if counts[label] == 1}

    result = []
    for variant, label, upgraded_label in zip(variants, labels, upgraded):
        if counts[label] == 1:
            result.append(label)
            continue
        if upgraded_counts[upgraded_label] > 1 or upgraded_label in unique_labels:
            upgraded_label = f"{upgraded_label}{LABEL_SEPARATOR}{variant.record.id}"
        result.append(upgraded_label)
    return result


class Searcher:
    """Fuzzy, deduplicated autocomplete over canonical groups."""

    def __init__(self, canonical_index: CanonicalIndex, default_limit: int = 50):
        self.canonical_index = canonical_index
        self.default_limit = default_limit

    def search(self, query: Optional[str], limit: Optional[int] = None) -> list[str]:
        """Return up to `limit` unique display labels for the query."""
        if limit is None:
            limit = self.default_limit
        if not query or len(query.strip()) < 1 or limit < 1:
            return []

        q = query.strip().lower()
        ranked = self._rank(q, self._collect(q))
        top = ranked[:limit]
        logger.debug(f"Search \"{q}\": {len(ranked)} candidates, returning {len(top)}")
        return disambiguate_labels(top)

    def _collect(self, q: str) -> list[CanonicalVariant]:
        matched: list[CanonicalVariant] = []
        seen_ids: set[int] = set()

        for base_key, group in self.canonical_index.items():
            group_matches = _matches(base_key, q) or any(
                _matches(v.record.name.lower(), q) for v in group
            )
            if not group_matches:
                continue

            for variant in distinct_institutions(group):
                if variant.record.id not in seen_ids:
                    seen_ids.add(variant.record.id)
                    matched.append(variant)
        return matched

    @staticmethod
    def _rank(q: str, candidates: list[CanonicalVariant]) -> list[CanonicalVariant]:
        def sort_key(v: CanonicalVariant):
            base = v.base_name.lower()
            name = v.record.name.lower()
            starts = base.startswith(q) or name.startswith(q)
            contains = q in base or q in name
            location = f"{v.record.state}|{v.record.city}"
            return (
                not starts,
                not contains,
                -v.score,
                v.base_name.casefold(),
                v.base_name,
                location.casefold(),
                location,
            )

        return sorted(candidates, key=sort_key)

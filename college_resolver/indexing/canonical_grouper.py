"""Group campus variants of the same institution under a base name."""

import logging
import re
from typing import Iterable, Iterator, Optional

from ..config_loader import ScoringWeights
from ..models import CanonicalVariant, InstitutionRecord

logger = logging.getLogger(__name__)

_PARENTHETICAL_RE = re.compile(r"^(.+?)\s*\((.+?)\)$")
# Applied in order, one pass each.
_ADMIN_SUFFIX_PATTERNS = (
    re.compile(r"\s+(?:Main\s+Campus|Campus|System\s+Office|Online|Extension|Center)$", re.IGNORECASE),
    re.compile(r"\s+Graduate\s+School$", re.IGNORECASE),
    re.compile(r"\s+Medical\s+Center$", re.IGNORECASE),
    re.compile(r"\s+Hospital$", re.IGNORECASE),
)


def canonicalize(name: str) -> tuple[str, str]:
    """
    Split a name into (base_name, campus_descriptor).

    "Example University (Main Campus)" -> ("Example University", "Main Campus")
    "Example University Graduate School" -> ("Example University", "")
    "Example University Medical Center" -> ("Example University Medical", "")
    """
    clean_name = name.strip()
    campus_descriptor = ""

    match = _PARENTHETICAL_RE.match(clean_name)
    if match:
        clean_name = match.group(1).strip()
        campus_descriptor = match.group(2).strip()

    base_name = clean_name
    for pattern in _ADMIN_SUFFIX_PATTERNS:
        base_name = pattern.sub("", base_name)
    base_name = base_name.strip()
    return base_name, campus_descriptor


def score_variant(
    record: InstitutionRecord,
    base_name: str,
    campus_descriptor: str,
    weights: Optional[ScoringWeights] = None,
) -> int:
    """Score a record within its group (higher = more canonical)."""
    weights = weights or ScoringWeights()
    name = record.name.lower()
    base_lower = base_name.lower()
    descriptor = campus_descriptor.lower()
    score = 0

    if name == base_lower:
        score += weights.EXACT_BASE_NAME

    if "main campus" in name or record.name == base_name:
        score += weights.MAIN_CAMPUS

    for term in weights.DISQUALIFYING_TERMS:
        if term in name or term in descriptor:
            score += weights.DISQUALIFIER

    if len(record.name) < len(base_name) + weights.CONCISE_SLACK:
        score += weights.CONCISE_NAME

    return score


def distinct_institutions(group: Iterable[CanonicalVariant]) -> list[CanonicalVariant]:
    """Collapse a group to one variant per record id, keeping the best score."""
    best: dict[int, CanonicalVariant] = {}
    for variant in group:
        existing = best.get(variant.record.id)
        if existing is None or variant.score > existing.score:
            best[variant.record.id] = variant
    return list(best.values())


class CanonicalIndex:
    """Canonical groups keyed by lowercase base name, best variant first."""

    def __init__(self, groups: dict[str, tuple[CanonicalVariant, ...]]):
        self._groups = groups

    @classmethod
    def build(
        cls,
        records: Iterable[InstitutionRecord],
        weights: Optional[ScoringWeights] = None,
    ) -> "CanonicalIndex":
        grouped: dict[str, list[CanonicalVariant]] = {}
        for record in records:
            base_name, campus_descriptor = canonicalize(record.name)
            variant = CanonicalVariant(
                base_name=base_name,
                campus_descriptor=campus_descriptor,
                record=record,
                score=score_variant(record, base_name, campus_descriptor, weights),
            )
            grouped.setdefault(base_name.lower(), []).append(variant)

        # sorted() is stable, so ties keep dataset order
        groups = {
            key: tuple(sorted(variants, key=lambda v: v.score, reverse=True))
            for key, variants in grouped.items()
        }
        logger.info(f"Built {len(groups)} canonical college groups")
        return cls(groups)

    def get(self, base_name: str) -> tuple[CanonicalVariant, ...]:
        return self._groups.get(base_name.lower(), ())

    def items(self) -> Iterator[tuple[str, tuple[CanonicalVariant, ...]]]:
        return iter(self._groups.items())

    def __len__(self) -> int:
        return len(self._groups)

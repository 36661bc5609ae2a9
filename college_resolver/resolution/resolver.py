"""Staged college name resolver."""

import logging
from typing import Iterable, Optional

from ..config_loader import ConfidenceLevels
from ..indexing.reference_index import ReferenceIndex
from ..models import InstitutionRecord, MatchStage, Resolution
from ..utils.text import aggressive_key, clean_college_name, exact_key, has_location_suffix

logger = logging.getLogger(__name__)

# Custom entries that are not in the reference dataset.
SPECIAL_MAPPINGS: dict[str, str] = {
    "Army National Guard": "Army National Guard",
    "Marine Corps": "Marine Corps",
}


class Resolver:
    """Resolve free-text institution names against the reference index.

    Stages run in order and the first hit wins:
    special-case table, exact key, aggressive key, substring of an index
    key, scored prefix of a name or alias. Anything else is unmatched.
    """

    def __init__(
        self,
        index: ReferenceIndex,
        confidence: Optional[ConfidenceLevels] = None,
        prefix_min_length: int = 3,
        strip_label_suffix: bool = True,
        special_mappings: Optional[dict[str, str]] = None,
    ):
        self.index = index
        self.confidence = confidence or ConfidenceLevels()
        self.prefix_min_length = prefix_min_length
        self.strip_label_suffix = strip_label_suffix
        self.special_mappings = dict(SPECIAL_MAPPINGS if special_mappings is None else special_mappings)

    def resolve(self, names: Iterable[Optional[str]]) -> list[Resolution]:
        """Resolve each name independently, preserving input order."""
        return [self.resolve_one(name) for name in names]

    def resolve_one(self, name: Optional[str]) -> Resolution:
        if not name or not name.strip():
            return Resolution.unmatched(name, MatchStage.BLANK)

        trimmed = name.strip()
        if (
            self.strip_label_suffix
            and has_location_suffix(trimmed)
            and exact_key(trimmed) not in self.index
        ):
            cleaned = clean_college_name(trimmed)
            logger.debug(f"Stripped location suffix: \"{trimmed}\" -> \"{cleaned}\"")
            trimmed = cleaned or trimmed

        special = self.special_mappings.get(trimmed)
        if special:
            record = self.index.get(exact_key(special))
            return Resolution.from_record(
                name, record, special, self.confidence.SPECIAL, MatchStage.SPECIAL
            )

        record = self.index.get(exact_key(trimmed))
        if record:
            return self._matched(name, record, self.confidence.EXACT, MatchStage.EXACT)

        normalized = aggressive_key(trimmed)
        record = self.index.get(normalized)
        if record:
            logger.debug(f"Normalized match: \"{trimmed}\" -> \"{record.name}\"")
            return self._matched(name, record, self.confidence.NORMALIZED, MatchStage.NORMALIZED)

        record = self._find_substring_match(normalized)
        if record:
            logger.debug(f"Substring match: \"{trimmed}\" -> \"{record.name}\"")
            return self._matched(name, record, self.confidence.SUBSTRING, MatchStage.SUBSTRING)

        record = self._find_best_prefix_match(trimmed)
        if record:
            logger.debug(f"Prefix match: \"{trimmed}\" -> \"{record.name}\"")
            return self._matched(name, record, self.confidence.PREFIX, MatchStage.PREFIX)

        logger.info(f"No match found for: \"{trimmed}\"")
        return Resolution.unmatched(name)

    @staticmethod
    def _matched(
        name: str, record: InstitutionRecord, confidence: float, stage: MatchStage
    ) -> Resolution:
        return Resolution.from_record(name, record, record.name, confidence, stage)

    def _find_substring_match(self, normalized: str) -> Optional[InstitutionRecord]:
        """First index key (in insertion order) that contains the input."""
        if not normalized:
            return None
        for key, record in self.index.items():
            if normalized in key:
                return record
        return None

    def _find_best_prefix_match(self, name: str) -> Optional[InstitutionRecord]:
        """Best-scoring name or alias that starts with the input."""
        prefix = exact_key(name)
        if len(prefix) < self.prefix_min_length:
            return None

        candidates = [
            (term, record)
            for term, record in self.index.search_terms
            if exact_key(term).startswith(prefix)
        ]
        if not candidates:
            return None
        if len(candidates) == 1:
            return candidates[0][1]

        # max() keeps the first of equally scored candidates
        term, record = max(candidates, key=lambda c: calculate_match_score(prefix, c[0]))
        return record


def calculate_match_score(prefix: str, candidate: str) -> float:
    """Score a prefix candidate; higher is a closer match."""
    prefix_lower = prefix.lower()
    candidate_lower = exact_key(candidate)
    score = 0.0

    if candidate_lower.startswith(prefix_lower):
        score += 10

    # Shorter candidates are more specific
    score += max(0.0, 5 - (len(candidate_lower) - len(prefix_lower)) / 10)

    # Single-space split: runs of spaces count as extra (empty) words
    prefix_words = prefix_lower.split(" ")
    candidate_words = candidate_lower.split(" ")
    score += max(0, 3 - abs(len(candidate_words) - len(prefix_words)))

    if any(word == prefix_lower for word in candidate_words):
        score += 5

    return score

"""Reference index mapping normalized name keys to institution records."""

import logging
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping, Optional

from ..models import InstitutionRecord
from ..utils.text import aggressive_key, exact_key, split_aliases

logger = logging.getLogger(__name__)


class ReferenceIndex:
    """Read-only lookup of institution records by normalized name.

    Keys are the exact form (trimmed, lowercased) and the aggressively
    normalized form of every name and alias. When two institutions share
    a key the record inserted last wins.
    """

    def __init__(
        self,
        keys: Mapping[str, InstitutionRecord],
        search_terms: tuple[tuple[str, InstitutionRecord], ...],
        record_count: int,
    ):
        self._keys = MappingProxyType(dict(keys))
        self._search_terms = search_terms
        self.record_count = record_count

    @classmethod
    def build(cls, records: Iterable[InstitutionRecord]) -> "ReferenceIndex":
        """Build the index from dataset records plus custom entries."""
        keys: dict[str, InstitutionRecord] = {}
        search_terms: list[tuple[str, InstitutionRecord]] = []
        record_count = 0

        for record in records:
            record_count += 1
            cls._insert(keys, record.name, record)
            search_terms.append((record.name, record))

            for alias in split_aliases(record.alias):
                cls._insert(keys, alias, record)
                search_terms.append((alias, record))

        logger.info(f"Indexed {record_count} institutions under {len(keys)} keys")
        return cls(keys, tuple(search_terms), record_count)

    @staticmethod
    def _insert(keys: dict[str, InstitutionRecord], name: str, record: InstitutionRecord):
        exact = exact_key(name)
        if not exact:
            return
        keys[exact] = record

        aggressive = aggressive_key(name)
        if aggressive and aggressive != exact:
            keys[aggressive] = record

    def get(self, key: str) -> Optional[InstitutionRecord]:
        """Look up an already-normalized key."""
        return self._keys.get(key)

    def __contains__(self, key: str) -> bool:
        return key in self._keys

    def __len__(self) -> int:
        return len(self._keys)

    def items(self) -> Iterator[tuple[str, InstitutionRecord]]:
        """Iterate keys in insertion order."""
        return iter(self._keys.items())

    @property
    def search_terms(self) -> tuple[tuple[str, InstitutionRecord], ...]:
        """Original (un-normalized) names and aliases with their records."""
        return self._search_terms

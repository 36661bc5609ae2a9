"""College resolution service.

Builds the reference and canonical indices once and answers resolve and
search requests against them. Construction is guarded by a lock so that
concurrent first callers share a single build; after that every call is a
read over immutable structures.
"""

import logging
import time
from dataclasses import dataclass
from threading import Lock
from typing import Iterable, Optional

from .config_loader import Config
from .dataset import load_custom_entries, load_institutions
from .indexing.canonical_grouper import CanonicalIndex
from .indexing.reference_index import ReferenceIndex
from .models import InstitutionRecord, Resolution
from .resolution.resolver import Resolver
from .resolution.searcher import Searcher

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _IndexState:
    """Everything built during initialization, published in one assignment."""

    dataset_size: int
    custom_entry_count: int
    reference_index: ReferenceIndex
    canonical_index: CanonicalIndex
    resolver: Resolver
    searcher: Searcher


class CollegeResolutionService:
    """Resolve and search institution names against the reference dataset."""

    def __init__(
        self,
        config: Optional[Config] = None,
        records: Optional[Iterable[InstitutionRecord]] = None,
        custom_entries: Optional[Iterable[InstitutionRecord]] = None,
    ):
        """Initialize service.

        Args:
            config: Service configuration. Defaults to Config().
            records: Preloaded dataset records. When omitted the dataset is
                read from config.DATASET_PATH during initialization.
            custom_entries: Non-dataset entries merged in before indexing.
                Defaults to the configured file or the built-in list.
        """
        self.config = config or Config()
        self._records = list(records) if records is not None else None
        self._custom_entries = list(custom_entries) if custom_entries is not None else None
        self._state: Optional[_IndexState] = None
        self._init_error: Optional[Exception] = None
        self._lock = Lock()

    @classmethod
    def create(cls, config: Optional[Config] = None, **kwargs) -> "CollegeResolutionService":
        """Build a service and its indices eagerly."""
        service = cls(config, **kwargs)
        service.initialize()
        return service

    @property
    def is_initialized(self) -> bool:
        return self._state is not None

    def initialize(self):
        """Build indices once. Safe to call from many threads."""
        if self._state is not None:
            return
        with self._lock:
            if self._state is not None:
                return
            if self._init_error is not None:
                raise self._init_error
            try:
                self._state = self._build()
            except Exception as e:
                logger.error(f"Failed to load college data: {e}")
                self._init_error = e
                raise

    def _build(self) -> _IndexState:
        started = time.monotonic()
        records = self._records
        if records is None:
            records = load_institutions(self.config.dataset_path)
        custom_entries = self._custom_entries
        if custom_entries is None:
            custom_entries = load_custom_entries(self.config.custom_entries_path)

        all_records = [*records, *custom_entries]
        reference_index = ReferenceIndex.build(all_records)
        canonical_index = CanonicalIndex.build(all_records, self.config.SCORING)

        state = _IndexState(
            dataset_size=len(records),
            custom_entry_count=len(custom_entries),
            reference_index=reference_index,
            canonical_index=canonical_index,
            resolver=Resolver(
                reference_index,
                confidence=self.config.CONFIDENCE,
                prefix_min_length=self.config.PREFIX_MIN_LENGTH,
                strip_label_suffix=self.config.STRIP_LABEL_SUFFIX,
            ),
            searcher=Searcher(canonical_index, default_limit=self.config.SEARCH_LIMIT_DEFAULT),
        )
        logger.info(
            f"✓ Loaded {len(all_records)} colleges with {len(reference_index)} indexed entries "
            f"and {len(canonical_index)} canonical groups in {time.monotonic() - started:.2f}s"
        )
        return state

    def _ready_state(self) -> _IndexState:
        self.initialize()
        return self._state

    def resolve_colleges(self, names: Iterable[Optional[str]]) -> list[Resolution]:
        """Resolve names to canonical institutions, same length and order as input."""
        return self._ready_state().resolver.resolve(names)

    def search_colleges(self, query: Optional[str], limit: Optional[int] = None) -> list[str]:
        """Autocomplete labels for a query."""
        if limit is not None:
            limit = min(limit, self.config.SEARCH_LIMIT_MAX)
        return self._ready_state().searcher.search(query, limit)

    def get_stats(self) -> dict:
        """Get index statistics.

        Returns:
            Dict with stats
        """
        state = self._ready_state()
        return {
            "dataset_size": state.dataset_size,
            "custom_entries": state.custom_entry_count,
            "indexed_keys": len(state.reference_index),
            "search_terms": len(state.reference_index.search_terms),
            "canonical_groups": len(state.canonical_index),
        }

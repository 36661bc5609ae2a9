"""Name resolution and search."""

from .resolver import Resolver, calculate_match_score
from .searcher import Searcher, disambiguate_labels

__all__ = ["Resolver", "Searcher", "calculate_match_score", "disambiguate_labels"]

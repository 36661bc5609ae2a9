"""Resolution quality monitoring."""

import logging
from collections import Counter
from typing import List

from .models import Resolution

logger = logging.getLogger(__name__)


class ResolutionQualityChecker:
    """Summarize how well a batch of names resolved."""

    def __init__(self, unmatched_threshold_pct: float = 50.0):
        self.unmatched_threshold_pct = unmatched_threshold_pct

    def check_batch(self, resolutions: List[Resolution]) -> dict:
        """Check a batch of resolutions."""
        total = len(resolutions)
        if total == 0:
            return {"status": "ERROR", "message": "No names to resolve"}

        matched = sum(1 for r in resolutions if r.is_matched)
        unmatched = total - matched
        stats = {
            "total": total,
            "matched": matched,
            "unmatched": unmatched,
            "unmatched_pct": unmatched / total * 100,
            "stage_distribution": dict(Counter(r.match_stage.value for r in resolutions)),
            "needs_manual_mapping": sorted(
                {r.original_name for r in resolutions if not r.is_matched and r.original_name}
            ),
        }

        issues = []
        if stats["unmatched_pct"] > self.unmatched_threshold_pct:
            issues.append(
                f"High unmatched rate: {stats['unmatched_pct']:.1f}% "
                f"(threshold: {self.unmatched_threshold_pct:.0f}%)"
            )

        stats["quality_issues"] = issues
        stats["status"] = "WARNING" if issues else "OK"

        for issue in issues:
            logger.warning(issue)
        return stats

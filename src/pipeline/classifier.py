"""
DevMind — Task Classifier
Maps a free-text task spec to one variant of a closed enum by counting
which variant's keywords appear in the spec.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Mapping, Sequence, TypeVar

logger = logging.getLogger(__name__)

V = TypeVar("V", bound=Enum)

KeywordTable = Mapping[V, Sequence[str]]


def score(spec: str, keyword_table: KeywordTable) -> dict[V, int]:
    """Count distinct keywords of each variant present in the lower-cased spec."""
    lowered = spec.lower()
    return {
        variant: sum(1 for keyword in set(keywords) if keyword.lower() in lowered)
        for variant, keywords in keyword_table.items()
    }


def classify(spec: str, keyword_table: KeywordTable, default: V) -> V:
    """
    Pick the variant with the highest keyword count.

    Ties go to the variant declared first in `keyword_table`. When no keyword
    matches at all the result is `default`.
    """
    counts = score(spec, keyword_table)
    best, best_count = default, 0
    for variant, count in counts.items():
        if count > best_count:
            best, best_count = variant, count

    logger.debug("Classified as %s (scores: %s)", best.value, {v.value: c for v, c in counts.items()})
    return best

"""
Rule-based quadrant classifier.

Counts how many urgent and important keywords occur in the task text
(substring containment, case-insensitive) and maps the pair of counts to a
quadrant:

  urgent hits > 0, important hits > 0  -> 1 (do first)
  urgent hits = 0, important hits > 0  -> 2 (schedule)
  urgent hits > 0, important hits = 0  -> 3 (delegate)
  neither                              -> 4 (eliminate)

Only presence matters; counts are not weighted. Callers must reject empty
text before classifying.
"""
import logging
from typing import Dict, Iterable, List, Sequence

from .schema import Quadrant

logger = logging.getLogger(__name__)


URGENT_KEYWORDS = (
    "urgent", "asap", "immediately", "now", "today", "emergency",
    "critical", "deadline", "due", "crisis", "fire",
)

IMPORTANT_KEYWORDS = (
    "important", "strategic", "goal", "plan", "develop", "relationship",
    "health", "career", "learning", "growth", "invest", "long-term",
)


def count_hits(text: str, keywords: Iterable[str]) -> int:
    """Number of keywords contained in text (each keyword counts at most once)."""
    lower_text = text.lower()
    return sum(1 for kw in keywords if kw.lower() in lower_text)


def matched_keywords(text: str, keywords: Iterable[str]) -> List[str]:
    lower_text = text.lower()
    return [kw for kw in keywords if kw.lower() in lower_text]


def classify(
    text: str,
    urgent_keywords: Sequence[str] = URGENT_KEYWORDS,
    important_keywords: Sequence[str] = IMPORTANT_KEYWORDS,
) -> Quadrant:
    """Map free text to a quadrant."""
    urgent = count_hits(text, urgent_keywords)
    important = count_hits(text, important_keywords)

    if urgent > 0 and important > 0:
        quadrant = Quadrant.DO_FIRST
    elif urgent == 0 and important > 0:
        quadrant = Quadrant.SCHEDULE
    elif urgent > 0 and important == 0:
        quadrant = Quadrant.DELEGATE
    else:
        quadrant = Quadrant.ELIMINATE

    logger.debug("classify: urgent=%d important=%d -> %s", urgent, important, quadrant.name)
    return quadrant


def explain(
    text: str,
    urgent_keywords: Sequence[str] = URGENT_KEYWORDS,
    important_keywords: Sequence[str] = IMPORTANT_KEYWORDS,
) -> Dict[str, object]:
    """Classification plus the keywords that drove it (for `task classify --explain`)."""
    quadrant = classify(text, urgent_keywords, important_keywords)
    return {
        "quadrant": int(quadrant),
        "title": quadrant.title,
        "urgent": matched_keywords(text, urgent_keywords),
        "important": matched_keywords(text, important_keywords),
    }

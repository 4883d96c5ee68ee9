"""
Priority board persistence.

The whole item collection lives under one key as a JSON array and is
rewritten on every change. A stored value that is not valid JSON is treated
as an empty board.
"""
import json
import logging
from typing import List, Optional, Sequence

from ..kvstore import KeyValueStore
from .classifier import classify, URGENT_KEYWORDS, IMPORTANT_KEYWORDS
from .schema import PriorityItem, Quadrant, make_item_id

logger = logging.getLogger(__name__)

BOARD_KEY = "eisenhower-tasks"


def new_item(
    text: str,
    urgent_keywords: Sequence[str] = URGENT_KEYWORDS,
    important_keywords: Sequence[str] = IMPORTANT_KEYWORDS,
) -> Optional[PriorityItem]:
    """Create a classified item, or None for empty/whitespace-only text."""
    if not text or not text.strip():
        return None
    return PriorityItem(
        id=make_item_id(),
        text=text.strip(),
        category=classify(text, urgent_keywords, important_keywords),
    )


def by_quadrant(items: Sequence[PriorityItem], quadrant: Quadrant) -> List[PriorityItem]:
    """Items in one quadrant, in insertion order."""
    return [item for item in items if item.category == quadrant]


def decode_items(raw: Optional[str]) -> List[PriorityItem]:
    """Parse a stored JSON array. Bad input yields an empty list, bad entries are skipped."""
    if not raw:
        return []
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        logger.warning(f"Stored value for {BOARD_KEY} is not valid JSON, starting empty: {e}")
        return []
    if not isinstance(data, list):
        logger.warning(f"Stored value for {BOARD_KEY} is not a list, starting empty")
        return []

    items = []
    for entry in data:
        try:
            items.append(PriorityItem.from_dict(entry))
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            logger.warning(f"Skipping malformed board entry {entry!r}: {e}")
    return items


def encode_items(items: Sequence[PriorityItem]) -> str:
    return json.dumps([item.to_dict() for item in items])


class PriorityBoard:
    """Insertion-ordered task collection backed by a KeyValueStore."""

    def __init__(
        self,
        store: KeyValueStore,
        urgent_keywords: Sequence[str] = URGENT_KEYWORDS,
        important_keywords: Sequence[str] = IMPORTANT_KEYWORDS,
    ):
        self.store = store
        self.urgent_keywords = tuple(urgent_keywords)
        self.important_keywords = tuple(important_keywords)

    def load(self) -> List[PriorityItem]:
        return decode_items(self.store.get(BOARD_KEY))

    def save(self, items: Sequence[PriorityItem]) -> None:
        """Overwrite the stored collection."""
        self.store.set(BOARD_KEY, encode_items(items))

    def add(self, text: str) -> Optional[PriorityItem]:
        """Classify and append a task. Empty text is ignored (returns None)."""
        item = new_item(text, self.urgent_keywords, self.important_keywords)
        if item is None:
            return None
        items = self.load()
        items.append(item)
        self.save(items)
        logger.info(f"Added {item.id} to {item.category.title}")
        return item

    def delete(self, item_id: str) -> bool:
        """Remove an item by id. Returns False if no such item."""
        items = self.load()
        remaining = [item for item in items if item.id != item_id]
        if len(remaining) == len(items):
            return False
        self.save(remaining)
        return True

    def list_all(self, quadrant: Optional[Quadrant] = None) -> List[PriorityItem]:
        items = self.load()
        if quadrant is not None:
            return by_quadrant(items, quadrant)
        return items

    def clear(self) -> bool:
        """Drop the stored collection. Returns False if nothing was stored."""
        cleared = self.store.delete(BOARD_KEY)
        if cleared:
            logger.info(f"Cleared {BOARD_KEY}")
        return cleared

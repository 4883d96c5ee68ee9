"""
Priority matrix schema.

Quadrants follow the urgent/important grid:

              urgent        not urgent
  important   1 DO FIRST    2 SCHEDULE
  other       3 DELEGATE    4 ELIMINATE

Items are classified once at creation and never mutated afterwards.
"""
import time
import uuid
from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, Any


class Quadrant(IntEnum):
    """The four fixed priority categories."""
    DO_FIRST = 1
    SCHEDULE = 2
    DELEGATE = 3
    ELIMINATE = 4

    @property
    def title(self) -> str:
        return _QUADRANT_LABELS[self][0]

    @property
    def subtitle(self) -> str:
        return _QUADRANT_LABELS[self][1]

    @classmethod
    def from_value(cls, value: Any) -> "Quadrant":
        """Accept 1-4 (int or numeric string) or a member name like 'do_first'."""
        if isinstance(value, str) and not value.strip().isdigit():
            try:
                return cls[value.strip().upper().replace("-", "_")]
            except KeyError:
                raise ValueError(f"Unknown quadrant: {value!r}")
        return cls(int(value))


_QUADRANT_LABELS = {
    Quadrant.DO_FIRST: ("DO FIRST", "Urgent & Important"),
    Quadrant.SCHEDULE: ("SCHEDULE", "Not Urgent & Important"),
    Quadrant.DELEGATE: ("DELEGATE", "Urgent & Not Important"),
    Quadrant.ELIMINATE: ("ELIMINATE", "Not Urgent & Not Important"),
}


def make_item_id() -> str:
    """Generate a sortable unique item ID (ms-precision timestamp + random hex)."""
    ts = int(time.time() * 1000)
    rand = uuid.uuid4().hex[:8]
    return f"{ts}-{rand}"


@dataclass(frozen=True)
class PriorityItem:
    """One task on the board."""

    id: str
    text: str
    category: Quadrant

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "text": self.text,
            "quadrant": int(self.category),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PriorityItem":
        """Deserialize from the stored shape. Raises on missing or invalid fields."""
        quadrant = data.get("quadrant", data.get("category"))
        if quadrant is None:
            raise ValueError("item has no quadrant")
        return cls(
            id=str(data["id"]),
            text=str(data["text"]),
            category=Quadrant.from_value(quadrant),
        )

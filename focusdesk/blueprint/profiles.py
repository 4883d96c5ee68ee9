"""
Saved blueprint profiles.

The list is stored as one JSON array and rewritten whole on every change.
Profiles are addressed by position; deleting one keeps the order of the rest.
"""
import json
import logging
from datetime import datetime
from typing import List, Optional, Sequence

from ..kvstore import KeyValueStore
from .normalizer import normalize_instructions, DEFAULT_HEADER
from .schema import Blueprint, SavedProfile, ExportError, iso_timestamp

logger = logging.getLogger(__name__)

PROFILES_KEY = "ai-blueprints"


class ProfileStore:
    """Saved blueprints persisted under a single key."""

    def __init__(self, store: KeyValueStore, default_header: str = DEFAULT_HEADER):
        self.store = store
        self.default_header = default_header

    def load_all(self) -> List[SavedProfile]:
        """All saved profiles; an absent or unreadable value yields []."""
        raw = self.store.get(PROFILES_KEY)
        if not raw:
            return []
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning(f"Stored value for {PROFILES_KEY} is not valid JSON, starting empty: {e}")
            return []
        if not isinstance(data, list):
            logger.warning(f"Stored value for {PROFILES_KEY} is not a list, starting empty")
            return []

        profiles = []
        for entry in data:
            try:
                profiles.append(SavedProfile.from_dict(entry))
            except (KeyError, TypeError, AttributeError, ExportError) as e:
                logger.warning(f"Skipping malformed profile entry: {e}")
        return profiles

    def save_all(self, profiles: Sequence[SavedProfile]) -> None:
        self.store.set(PROFILES_KEY, json.dumps([p.to_dict() for p in profiles]))

    def clear(self) -> bool:
        """Drop every saved profile. Returns False if nothing was stored."""
        return self.store.delete(PROFILES_KEY)

    def append(self, profile: SavedProfile) -> int:
        """Add a profile at the end. Returns its index."""
        profiles = self.load_all()
        profiles.append(profile)
        self.save_all(profiles)
        return len(profiles) - 1

    def get(self, index: int) -> SavedProfile:
        profiles = self.load_all()
        _check_index(index, len(profiles))
        return profiles[index]

    def remove_at(self, index: int) -> SavedProfile:
        """Delete the profile at index and return it."""
        profiles = self.load_all()
        _check_index(index, len(profiles))
        removed = profiles.pop(index)
        self.save_all(profiles)
        logger.info(f"Deleted profile {index} ({removed.name})")
        return removed

    def save_blueprint(
        self,
        name: Optional[str],
        blueprint: Blueprint,
        now: Optional[datetime] = None,
    ) -> Optional[SavedProfile]:
        """
        Snapshot a blueprint under a name, normalizing its IR first.

        A missing or blank name aborts without saving (returns None).
        """
        profile = make_profile(name, blueprint, now=now, default_header=self.default_header)
        if profile is None:
            return None
        self.append(profile)
        return profile


def make_profile(
    name: Optional[str],
    blueprint: Blueprint,
    now: Optional[datetime] = None,
    default_header: str = DEFAULT_HEADER,
) -> Optional[SavedProfile]:
    if not name or not name.strip():
        return None
    content = Blueprint(
        ir=normalize_instructions(blueprint.ir, default_header),
        kcs=blueprint.kcs,
        kcs_format=blueprint.kcs_format,
    )
    return SavedProfile(name=name, content=content, saved_at=iso_timestamp(now))


def _check_index(index: int, size: int):
    # negative indexes would silently address from the end
    if index < 0 or index >= size:
        raise IndexError(f"No saved profile at index {index} ({size} saved)")

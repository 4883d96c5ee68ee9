"""
Application state and reducers.

State values are frozen; every user action is a pure function
(state, ...) -> new state. Reducers never touch storage. Callers load the
persisted collections into the initial state and write back the affected
collection after an action changes it.
"""
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Optional, Sequence, Tuple

from .blueprint.normalizer import DEFAULT_HEADER
from .blueprint.profiles import make_profile
from .blueprint.schema import Blueprint, SavedProfile, ExportFormat
from .matrix.board import new_item
from .matrix.classifier import URGENT_KEYWORDS, IMPORTANT_KEYWORDS
from .matrix.schema import PriorityItem

TAB_MATRIX = "matrix"
TAB_BLUEPRINT = "blueprint"
TABS = (TAB_MATRIX, TAB_BLUEPRINT)


@dataclass(frozen=True)
class BoardState:
    items: Tuple[PriorityItem, ...] = ()
    input_text: str = ""


@dataclass(frozen=True)
class OrganizerState:
    blueprint: Blueprint = field(default_factory=Blueprint)
    saved: Tuple[SavedProfile, ...] = ()


@dataclass(frozen=True)
class AppState:
    board: BoardState = field(default_factory=BoardState)
    organizer: OrganizerState = field(default_factory=OrganizerState)
    active_tab: str = TAB_MATRIX


def initial_state(
    items: Sequence[PriorityItem] = (),
    saved: Sequence[SavedProfile] = (),
) -> AppState:
    """Build the starting state from persisted collections."""
    return AppState(
        board=BoardState(items=tuple(items)),
        organizer=OrganizerState(saved=tuple(saved)),
    )


# ── Navigation ───────────────────────────────────────────────────────────────

def set_tab(state: AppState, tab: str) -> AppState:
    if tab not in TABS:
        raise ValueError(f"Unknown tab: {tab!r}")
    return replace(state, active_tab=tab)


# ── Priority matrix ─────────────────────────────────────────────────────────

def set_input(state: AppState, text: str) -> AppState:
    return replace(state, board=replace(state.board, input_text=text))


def submit_task(
    state: AppState,
    urgent_keywords: Sequence[str] = URGENT_KEYWORDS,
    important_keywords: Sequence[str] = IMPORTANT_KEYWORDS,
) -> AppState:
    """Classify the pending input and append it. Blank input leaves state unchanged."""
    item = new_item(state.board.input_text, urgent_keywords, important_keywords)
    if item is None:
        return state
    board = BoardState(items=state.board.items + (item,), input_text="")
    return replace(state, board=board)


def delete_task(state: AppState, item_id: str) -> AppState:
    items = tuple(i for i in state.board.items if i.id != item_id)
    return replace(state, board=replace(state.board, items=items))


# ── Blueprint organizer ─────────────────────────────────────────────────────

def _with_blueprint(state: AppState, **changes) -> AppState:
    blueprint = replace(state.organizer.blueprint, **changes)
    return replace(state, organizer=replace(state.organizer, blueprint=blueprint))


def edit_ir(state: AppState, text: str) -> AppState:
    return _with_blueprint(state, ir=text)


def edit_kcs(state: AppState, text: str) -> AppState:
    return _with_blueprint(state, kcs=text)


def set_kcs_format(state: AppState, fmt) -> AppState:
    if not isinstance(fmt, ExportFormat):
        fmt = ExportFormat.from_str(fmt)
    return _with_blueprint(state, kcs_format=fmt)


def import_ir(state: AppState, text: Optional[str]) -> AppState:
    """Replace the IR with imported file content. None (cancelled) is a no-op."""
    if text is None:
        return state
    return edit_ir(state, text)


def import_kcs(state: AppState, text: Optional[str]) -> AppState:
    if text is None:
        return state
    return edit_kcs(state, text)


def save_profile(
    state: AppState,
    name: Optional[str],
    now: Optional[datetime] = None,
    default_header: str = DEFAULT_HEADER,
) -> AppState:
    """Append a snapshot of the current blueprint. A blank name is a no-op."""
    profile = make_profile(name, state.organizer.blueprint, now=now, default_header=default_header)
    if profile is None:
        return state
    organizer = replace(state.organizer, saved=state.organizer.saved + (profile,))
    return replace(state, organizer=organizer)


def load_profile(state: AppState, index: int) -> AppState:
    """Make a saved profile's content the current blueprint."""
    saved = state.organizer.saved
    if index < 0 or index >= len(saved):
        raise IndexError(f"No saved profile at index {index} ({len(saved)} saved)")
    return replace(state, organizer=replace(state.organizer, blueprint=saved[index].content))


def delete_profile(state: AppState, index: int) -> AppState:
    saved = state.organizer.saved
    if index < 0 or index >= len(saved):
        raise IndexError(f"No saved profile at index {index} ({len(saved)} saved)")
    organizer = replace(state.organizer, saved=saved[:index] + saved[index + 1:])
    return replace(state, organizer=organizer)

"""Bookmark reducer and navigation state machine.

Uses python-statemachine for the bookmark cursor with:
- Two states derived from the bookmark list
- Guarded transitions (conditions)
- Transition actions that edit a private draft, never the input state

States:
    EMPTY: No bookmarks, nothing to position on (initial)
    POSITIONED: One or more bookmarks, 0 <= count < len(bookmarks)

Transitions:
    EMPTY -> EMPTY: move_slide (no-op, count kept), remove_bookmark (no-op)
    EMPTY -> POSITIONED: add_bookmark (count = 0)
    POSITIONED -> POSITIONED: move_slide (count clamped), add_bookmark,
        remove_bookmark (when bookmarks remain or index out of range)
    POSITIONED -> EMPTY: remove_bookmark (last bookmark removed, count = 0)

Reducer Contract
----------------
bookmark_reducer(state, action) is pure. For each recognized action it
builds a short-lived BookmarkNavigator over a mutable NavigationDraft copied
from the input, started in the state the input implies, sends exactly one
event and freezes the draft into a new BookmarkState. Unrecognized actions
return the input object itself.

The reducer is the single authority that keeps the cursor in bounds:
callers may request count - 1, count + 1 or any index.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from statemachine import State, StateMachine

from map_bookmarks.model.actions import ActionType, action_name
from map_bookmarks.model.bookmark import Bookmark, BookmarkState


def clamp(value: int, low: int, high: int) -> int:
    """Clamp value into [low, high]."""
    return max(low, min(value, high))


@dataclass
class NavigationDraft:
    """Mutable working copy of BookmarkState used as the machine's model.

    Note: The 'state' field is managed by python-statemachine when this
    object is passed as the model.
    """

    bookmarks: list[Bookmark] = field(default_factory=list)
    count: int = 0
    state: str | None = None

    @staticmethod
    def from_state(state: BookmarkState) -> NavigationDraft:
        return NavigationDraft(bookmarks=list(state.bookmarks), count=state.count)

    def freeze(self) -> BookmarkState:
        count = clamp(self.count, 0, len(self.bookmarks) - 1) if self.bookmarks else self.count
        return BookmarkState(bookmarks=tuple(self.bookmarks), count=count)


class BookmarkNavigator(StateMachine):
    """State machine for the bookmark cursor. See module docstring."""

    empty = State("Empty", value="empty", initial=True)
    positioned = State("Positioned", value="positioned")

    move_slide = empty.to(empty) | positioned.to(positioned, on="move_cursor")
    add_bookmark = empty.to(positioned, on="append_first") | positioned.to(positioned, on="append")
    remove_bookmark = (
        empty.to(empty)
        | positioned.to(positioned, cond="keeps_bookmarks", on="remove_at")
        | positioned.to(empty, unless="keeps_bookmarks", on="remove_last")
    )

    def __init__(self, draft: NavigationDraft) -> None:
        """Start in the state implied by the draft's bookmark list."""
        start_value = BookmarkNavigator.positioned.value if draft.bookmarks else BookmarkNavigator.empty.value
        super().__init__(model=draft, start_value=start_value)

    @property
    def draft(self) -> NavigationDraft:
        """Alias for model."""
        return self.model

    # ==========================================================================
    # Guards
    # ==========================================================================

    def in_range(self, index: int) -> bool:
        return 0 <= index < len(self.draft.bookmarks)

    def keeps_bookmarks(self, index: int) -> bool:
        """Guard: at least one bookmark remains after removing index."""
        return not self.in_range(index) or len(self.draft.bookmarks) > 1

    # ==========================================================================
    # Transition Actions
    # ==========================================================================

    def move_cursor(self, slide: int) -> None:
        """Move the cursor to slide, clamped. ("target" is reserved by python-statemachine.)"""
        self.draft.count = clamp(slide, 0, len(self.draft.bookmarks) - 1)

    def append_first(self, bookmark: Bookmark) -> None:
        self.draft.bookmarks.append(bookmark)
        self.draft.count = 0

    def append(self, bookmark: Bookmark) -> None:
        self.draft.bookmarks.append(bookmark)

    def remove_at(self, index: int) -> None:
        """Remove index if valid and keep the cursor on the same bookmark where possible."""
        if not self.in_range(index):
            return
        del self.draft.bookmarks[index]
        shifted = self.draft.count - 1 if index < self.draft.count else self.draft.count
        self.draft.count = clamp(shifted, 0, len(self.draft.bookmarks) - 1)

    def remove_last(self, index: int) -> None:
        del self.draft.bookmarks[index]
        self.draft.count = 0


# action type name -> (event, payload extractor)
_EVENTS: dict[str, tuple[str, Callable[[Any], dict[str, Any]]]] = {
    ActionType.MOVE_SLIDE.name: ("move_slide", lambda action: {"slide": action.target}),
    ActionType.ADD_BOOKMARK.name: ("add_bookmark", lambda action: {"bookmark": action.bookmark}),
    ActionType.REMOVE_BOOKMARK.name: ("remove_bookmark", lambda action: {"index": action.index}),
}

BOOKMARK_ACTION_NAMES = frozenset(_EVENTS)


def bookmark_reducer(state: BookmarkState, action: object) -> BookmarkState:
    """Apply one action to the bookmark slice.

    Args:
        state: Current bookmark state (never modified)
        action: Any action; non-bookmark actions pass through

    Returns:
        New BookmarkState, or `state` itself for unrecognized actions.
    """
    entry = _EVENTS.get(action_name(action))
    if entry is None:
        return state

    event, payload = entry
    draft = NavigationDraft.from_state(state)
    navigator = BookmarkNavigator(draft=draft)
    navigator.send(event, **payload(action))
    return draft.freeze()

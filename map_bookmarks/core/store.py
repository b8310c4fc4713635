"""Store - Composition root holding the combined {map, bookmark} state.

Implements a unidirectional data flow:
    Action -> dispatch() -> both reducers -> new AppState -> notify subscribers

Lifecycle is explicit and the store is never global:
    store = Store(map_state=..., bookmark_state=...)   # create
    unsubscribe = store.subscribe(on_change)           # subscribe*
    store.dispatch(SetView(center=(-93, 45), zoom=5))  # dispatch*
    store.teardown()                                   # teardown

Nested dispatch policy (queue and defer)
----------------------------------------
A dispatch issued while the store is reducing or notifying subscribers
(typically by a subscriber reacting to a change) is NOT run re-entrantly.
It is appended to a FIFO queue and applied once the current listener loop
has completed. Every queued action then gets its own full reduce + notify
cycle, so no subscriber is re-entered and every subscriber sees every
intermediate state in dispatch order.
"""

import logging
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass, field

from map_bookmarks.core.bookmark_reducer import bookmark_reducer
from map_bookmarks.core.map_reducer import map_reducer
from map_bookmarks.model.actions import ActionType, action_name
from map_bookmarks.model.bookmark import BookmarkState
from map_bookmarks.model.feature import InsertOutcome
from map_bookmarks.model.map_state import MapViewState

logger = logging.getLogger(__name__)

Subscriber = Callable[[], None]
Unsubscribe = Callable[[], None]


class StoreClosedError(RuntimeError):
    """Raised when dispatching to or subscribing on a torn-down store."""


@dataclass(frozen=True)
class AppState:
    """Composite state tree: one field per slice."""

    map: MapViewState = field(default_factory=MapViewState)
    bookmark: BookmarkState = field(default_factory=BookmarkState)


class Store:
    """Holds AppState, runs both reducers on dispatch, notifies subscribers.

    Example:
        store = Store()
        store.subscribe(lambda: print(store.get_state().map.center))
        store.dispatch(SetView(center=(-93, 45), zoom=5))
    """

    def __init__(
        self,
        map_state: MapViewState | None = None,
        bookmark_state: BookmarkState | None = None,
    ) -> None:
        """Create the store with explicit initial slices.

        Args:
            map_state: Initial map slice (default: empty MapViewState)
            bookmark_state: Initial bookmark slice (default: no bookmarks)
        """
        self._state = AppState(
            map=map_state if map_state is not None else MapViewState(),
            bookmark=bookmark_state if bookmark_state is not None else BookmarkState(),
        )
        self._subscribers: list[Subscriber] = []
        self._pending: deque[object] = deque()
        self._is_dispatching = False
        self._closed = False
        logger.info(f"[STORE] Created with state: {self._state}")

    # =========================================================================
    # Read
    # =========================================================================

    def get_state(self) -> AppState:
        """Current composite snapshot (frozen; held snapshots stay valid)."""
        return self._state

    @property
    def is_dispatching(self) -> bool:
        """True while reducing or notifying subscribers."""
        return self._is_dispatching

    @property
    def is_closed(self) -> bool:
        return self._closed

    @property
    def pending_count(self) -> int:
        """Number of nested dispatches waiting to be applied."""
        return len(self._pending)

    # =========================================================================
    # Write
    # =========================================================================

    def dispatch(self, action: object) -> None:
        """Apply an action to both slices and notify subscribers.

        When called during another dispatch the action is queued and applied
        after the current notification loop completes.

        Raises:
            StoreClosedError: If the store has been torn down.
        """
        if self._closed:
            raise StoreClosedError(f"Cannot dispatch {action_name(action)} to a torn-down store")

        self._pending.append(action)
        if self._is_dispatching:
            logger.debug(f"[STORE] Queued nested dispatch: {action_name(action)} (pending={len(self._pending)})")
            return

        self._is_dispatching = True
        try:
            while self._pending:
                self._apply(self._pending.popleft())
        finally:
            self._is_dispatching = False
            self._pending.clear()

    def _apply(self, action: object) -> None:
        """Run both reducers, replace state if a slice changed, notify."""
        name = action_name(action)
        logger.info(f"[STORE] Dispatch {name}")

        previous = self._state
        new_map = map_reducer(previous.map, action)
        new_bookmark = bookmark_reducer(previous.bookmark, action)

        if new_map is not previous.map or new_bookmark is not previous.bookmark:
            self._state = AppState(map=new_map, bookmark=new_bookmark)
        else:
            logger.debug(f"[STORE] {name} ignored by all reducers")

        if name == ActionType.ADD_FEATURES.name and action.source_id in new_map.features.implicit_sources:
            logger.warning(
                f"[STORE] Features for undeclared source '{action.source_id}' "
                f"({InsertOutcome.CREATED_IMPLICITLY.value})"
            )

        # Copy so subscribe/unsubscribe during notification affects the next dispatch only
        for subscriber in list(self._subscribers):
            subscriber()

    # =========================================================================
    # Subscriptions
    # =========================================================================

    def subscribe(self, callback: Subscriber) -> Unsubscribe:
        """Register a listener called after every dispatch.

        Returns:
            Function that unregisters the listener (safe to call twice).
        """
        if self._closed:
            raise StoreClosedError("Cannot subscribe to a torn-down store")

        self._subscribers.append(callback)
        cb_name = getattr(callback, "__qualname__", repr(callback))
        logger.info(f"[STORE] Subscriber added: {cb_name} (total={len(self._subscribers)})")

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)
                logger.info(f"[STORE] Subscriber removed: {cb_name}")

        return unsubscribe

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def teardown(self) -> None:
        """Drop all subscribers and refuse further dispatches."""
        self._subscribers.clear()
        self._pending.clear()
        self._closed = True
        logger.info("[STORE] Torn down")

    def __repr__(self) -> str:
        return (
            f"Store(closed={self._closed}, subscribers={len(self._subscribers)}, "
            f"map={self._state.map!r}, bookmark_count={self._state.bookmark.count})"
        )

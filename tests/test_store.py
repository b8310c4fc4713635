"""Tests for the Store.

Tests: Store, AppState, StoreClosedError
Focus: Dispatch/notify order, unsubscribe, nested dispatch, teardown
"""

import logging

import pytest

from map_bookmarks.core.store import AppState, Store, StoreClosedError
from map_bookmarks.model.actions import add_features, add_source, move_slide, set_view
from map_bookmarks.model.feature import Feature
from map_bookmarks.ui.actions import next_bookmark, previous_bookmark, zoom_to


class TestStoreBasics:
    """Store creation and get_state."""

    def test_default_state(self, store: Store) -> None:
        state = store.get_state()
        assert isinstance(state, AppState)
        assert state.map.center == (-93.0, 45.0)
        assert state.bookmark.bookmarks == ()
        assert store.is_dispatching is False
        assert store.is_closed is False

    def test_dispatch_updates_state(self, store: Store) -> None:
        store.dispatch(set_view(center=(1.0, 2.0), zoom=7))
        assert store.get_state().map.center == (1.0, 2.0)
        assert store.get_state().map.zoom == 7

    def test_held_snapshot_stays_valid(self, store_with_bookmarks: Store) -> None:
        before = store_with_bookmarks.get_state()
        store_with_bookmarks.dispatch(move_slide(2))
        store_with_bookmarks.dispatch(set_view(center=(0.0, 0.0), zoom=1))
        assert before.bookmark.count == 0
        assert before.map.center == (-93.0, 45.0)
        assert store_with_bookmarks.get_state().bookmark.count == 2

    def test_unrecognized_action_keeps_state_object(self, store: Store) -> None:
        before = store.get_state()
        store.dispatch(object())
        assert store.get_state() is before

    def test_one_action_updates_only_its_slice(self, store_with_bookmarks: Store) -> None:
        before = store_with_bookmarks.get_state()
        store_with_bookmarks.dispatch(set_view(center=(3.0, 4.0), zoom=2))
        after = store_with_bookmarks.get_state()
        assert after.bookmark is before.bookmark
        assert after.map is not before.map


class TestSubscriptions:
    """subscribe / unsubscribe / notification."""

    def test_subscriber_called_after_state_update(self, store: Store) -> None:
        seen = []
        store.subscribe(lambda: seen.append(store.get_state().map.zoom))
        store.dispatch(set_view(center=(0.0, 0.0), zoom=9))
        assert seen == [9]

    def test_subscribers_called_in_registration_order(self, store: Store) -> None:
        calls = []
        store.subscribe(lambda: calls.append("A"))
        store.subscribe(lambda: calls.append("B"))
        store.dispatch(move_slide(0))
        assert calls == ["A", "B"]

    def test_subscribers_notified_even_when_state_unchanged(self, store: Store) -> None:
        calls = []
        store.subscribe(lambda: calls.append(1))
        store.dispatch(object())
        assert calls == [1]

    def test_unsubscribe_stops_notifications(self, store: Store) -> None:
        calls = []
        unsubscribe = store.subscribe(lambda: calls.append(1))
        store.dispatch(move_slide(0))
        unsubscribe()
        store.dispatch(move_slide(0))
        assert calls == [1]
        assert store.subscriber_count == 0

    def test_unsubscribe_twice_is_safe(self, store: Store) -> None:
        unsubscribe = store.subscribe(lambda: None)
        unsubscribe()
        unsubscribe()
        assert store.subscriber_count == 0

    def test_unsubscribe_during_notification_affects_next_dispatch(self, store: Store) -> None:
        calls = []
        unsubscribe_b = None

        def a() -> None:
            calls.append("A")
            unsubscribe_b()

        def b() -> None:
            calls.append("B")

        store.subscribe(a)
        unsubscribe_b = store.subscribe(b)
        store.dispatch(move_slide(0))
        store.dispatch(move_slide(0))
        assert calls == ["A", "B", "A"]


class TestNestedDispatch:
    """Dispatch from inside a subscriber is queued and applied afterwards."""

    def test_nested_dispatch_runs_after_listener_loop(self, store: Store) -> None:
        log = []
        round_counter = {"A": 0, "B": 0}

        def a() -> None:
            round_counter["A"] += 1
            log.append(("A", round_counter["A"]))
            if round_counter["A"] == 1:
                store.dispatch(set_view(center=(1.0, 1.0), zoom=2))

        def b() -> None:
            round_counter["B"] += 1
            log.append(("B", round_counter["B"]))

        store.subscribe(a)
        store.subscribe(b)
        store.dispatch(set_view(center=(0.0, 0.0), zoom=1))

        assert log == [("A", 1), ("B", 1), ("A", 2), ("B", 2)]
        assert store.get_state().map.zoom == 2
        assert store.is_dispatching is False
        assert store.pending_count == 0

    def test_every_subscriber_sees_intermediate_state(self, store: Store) -> None:
        zooms = []

        def chain() -> None:
            zoom = store.get_state().map.zoom
            zooms.append(zoom)
            if zoom < 3:
                store.dispatch(set_view(center=(0.0, 0.0), zoom=zoom + 1))

        store.subscribe(chain)
        store.dispatch(set_view(center=(0.0, 0.0), zoom=1))
        assert zooms == [1, 2, 3]

    def test_subscriber_error_resets_dispatching_flag(self, store: Store) -> None:
        def boom() -> None:
            raise RuntimeError("subscriber failed")

        unsubscribe = store.subscribe(boom)
        with pytest.raises(RuntimeError, match="subscriber failed"):
            store.dispatch(move_slide(0))
        assert store.is_dispatching is False

        unsubscribe()
        store.dispatch(set_view(center=(5.0, 5.0), zoom=5))
        assert store.get_state().map.center == (5.0, 5.0)


class TestTeardown:
    """Explicit lifecycle."""

    def test_teardown_drops_subscribers(self, store: Store) -> None:
        store.subscribe(lambda: None)
        store.teardown()
        assert store.subscriber_count == 0
        assert store.is_closed is True

    def test_dispatch_after_teardown_raises(self, store: Store) -> None:
        store.teardown()
        with pytest.raises(StoreClosedError):
            store.dispatch(move_slide(0))

    def test_subscribe_after_teardown_raises(self, store: Store) -> None:
        store.teardown()
        with pytest.raises(StoreClosedError):
            store.subscribe(lambda: None)

    def test_state_still_readable_after_teardown(self, store: Store) -> None:
        store.dispatch(set_view(center=(1.0, 1.0), zoom=3))
        store.teardown()
        assert store.get_state().map.zoom == 3


class TestStoreLogging:
    """Diagnostics for permissive map updates."""

    def test_features_for_undeclared_source_warns(self, store: Store, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="map_bookmarks.core.store"):
            store.dispatch(add_features("nowhere", [Feature.point(lon=0.0, lat=0.0)]))
        assert "undeclared source 'nowhere'" in caplog.text
        assert store.get_state().map.features.count("nowhere") == 1

    def test_declared_source_does_not_warn(self, store: Store, caplog: pytest.LogCaptureFixture) -> None:
        """A bucket created early stops warning once its source is declared."""
        store.dispatch(add_features("late", [Feature.point(lon=0.0, lat=0.0)]))
        store.dispatch(add_source("late", {"type": "geojson"}))
        with caplog.at_level(logging.WARNING, logger="map_bookmarks.core.store"):
            store.dispatch(add_features("late", [Feature.point(lon=1.0, lat=1.0)]))
        assert "undeclared source" not in caplog.text
        assert store.get_state().map.features.count("late") == 2


class TestEndToEnd:
    """Store + orchestration scenarios."""

    def test_move_slide_below_first_bookmark_stays_at_zero(self, store_with_bookmarks: Store) -> None:
        count = store_with_bookmarks.get_state().bookmark.count
        store_with_bookmarks.dispatch(move_slide(count - 1))
        assert store_with_bookmarks.get_state().bookmark.count == 0

    @pytest.mark.parametrize("target,expected", [(1, 1), (2, 2), (5, 2)])
    def test_move_slide_on_store(self, store_with_bookmarks: Store, target: int, expected: int) -> None:
        store_with_bookmarks.dispatch(move_slide(target))
        assert store_with_bookmarks.get_state().bookmark.count == expected

    def test_zoom_to_moves_view(self, seeded_store: Store) -> None:
        zoom_to(seeded_store, (10.0, 20.0))
        state = seeded_store.get_state().map
        assert state.center == (10.0, 20.0)
        assert state.zoom == 5

    def test_next_clamps_at_last_bookmark(self, store_with_bookmarks: Store) -> None:
        for _ in range(5):
            next_bookmark(store_with_bookmarks)
        assert store_with_bookmarks.get_state().bookmark.count == 2

    def test_previous_clamps_at_first_bookmark(self, store_with_bookmarks: Store) -> None:
        previous_bookmark(store_with_bookmarks)
        previous_bookmark(store_with_bookmarks)
        assert store_with_bookmarks.get_state().bookmark.count == 0

    def test_subscriber_sees_each_step(self, store_with_bookmarks: Store) -> None:
        counts = []
        store_with_bookmarks.subscribe(lambda: counts.append(store_with_bookmarks.get_state().bookmark.count))
        next_bookmark(store_with_bookmarks)
        next_bookmark(store_with_bookmarks)
        next_bookmark(store_with_bookmarks)
        previous_bookmark(store_with_bookmarks)
        assert counts == [1, 2, 2, 1]

"""Map reducer - the only mutator of MapViewState.

Pure function: (MapViewState, Action) -> MapViewState
No side effects, no logging, no validation. Returns the input object
unchanged for any action outside the map vocabulary, which is how slices
stay isolated from each other.

Permissive:
- SET_VIEW does not range-check center or zoom
- ADD_SOURCE overwrites an existing id without merging
- ADD_LAYER appends duplicate ids and does not check the source exists
- ADD_FEATURES to an undeclared source creates the bucket implicitly and
  records it in features.implicit_sources until ADD_SOURCE declares it
"""

from collections.abc import Callable
from dataclasses import replace

from map_bookmarks.model.actions import (
    ActionType,
    AddFeatures,
    AddLayer,
    AddSource,
    SetView,
    action_name,
)
from map_bookmarks.model.map_state import MapViewState


def _set_view(state: MapViewState, action: SetView) -> MapViewState:
    return replace(state, center=action.center, zoom=action.zoom)


def _add_source(state: MapViewState, action: AddSource) -> MapViewState:
    sources = dict(state.sources)
    sources[action.source_id] = action.descriptor
    return replace(state, sources=sources, features=state.features.declare(action.source_id))


def _add_layer(state: MapViewState, action: AddLayer) -> MapViewState:
    return replace(state, layers=state.layers + (action.descriptor,))


def _add_features(state: MapViewState, action: AddFeatures) -> MapViewState:
    result = state.features.add(
        source_id=action.source_id,
        features=action.features,
        declared=action.source_id in state.sources,
    )
    return replace(state, features=result.store)


_HANDLERS: dict[str, Callable[[MapViewState, object], MapViewState]] = {
    ActionType.SET_VIEW.name: _set_view,
    ActionType.ADD_SOURCE.name: _add_source,
    ActionType.ADD_LAYER.name: _add_layer,
    ActionType.ADD_FEATURES.name: _add_features,
}

MAP_ACTION_NAMES = frozenset(_HANDLERS)


def map_reducer(state: MapViewState, action: object) -> MapViewState:
    """Apply one action to the map slice.

    Args:
        state: Current map state (never modified)
        action: Any action; non-map actions pass through

    Returns:
        New MapViewState, or `state` itself for unrecognized actions.
    """
    handler = _HANDLERS.get(action_name(action))
    if handler is None:
        return state
    return handler(state, action)

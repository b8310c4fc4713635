"""Map Bookmarks - Zoom between saved views on a live feature map.

A unidirectional state-update core for a map viewer:
- Immutable state slices for the map view and the bookmark cursor
- Pure reducers, with a state machine guarding bookmark navigation
- A store that dispatches actions and notifies subscribers
- A Streamlit/Pydeck shell that renders from the state

Modules:
    model: Data structures (Feature, FeatureStore, MapViewState, BookmarkState, actions)
    core: Reducers and the Store
    generators: Random point generation
    ui: Streamlit interface components (orchestration, renderer, panels)

Example:
    from map_bookmarks.core import Store
    from map_bookmarks.ui.actions import seed_map, next_bookmark
"""

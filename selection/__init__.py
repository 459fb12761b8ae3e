"""
selection — zaznaczenie pól do ekstrakcji.

Publiczne API:
  SelectionState(collection_set)                    — zbiór zaznaczonych id
  all_visible_selected(state, visible_ids)          -> bool
  toggle_all_visible(state, visible_ids)            -> bool
  filter_collections(collection_set, term)          -> list[DataCollection]
  visible_point_ids(collection_set, term)           -> list[str]
"""

from .state import SelectionState, all_visible_selected, toggle_all_visible
from .filtering import filter_collections, visible_point_ids

__all__ = [
    "SelectionState",
    "all_visible_selected",
    "toggle_all_visible",
    "filter_collections",
    "visible_point_ids",
]

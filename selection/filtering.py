"""selection/filtering.py — filtr tekstowy wyznaczający widoczne pola."""

from __future__ import annotations

from dataclasses import replace

from data_model import CollectionSet, DataCollection, DataPoint, DataPointId


def _matches(term: str, point: DataPoint, collection: DataCollection) -> bool:
    # wystarczy trafienie w etykietę pola ALBO nazwę kolekcji
    return term in point.label.lower() or term in collection.name.lower()


def filter_collections(collection_set: CollectionSet, term: str = "") -> list[DataCollection]:
    """
    Widok do wyświetlenia: kolekcje z samymi widocznymi polami.

    Kolekcje bez żadnego widocznego pola są pomijane. Pusty term → wszystko.
    """
    needle = term.lower()
    view: list[DataCollection] = []
    for coll in collection_set:
        points = tuple(dp for dp in coll.data_points if _matches(needle, dp, coll))
        if points:
            view.append(replace(coll, data_points=points))
    return view


def visible_point_ids(collection_set: CollectionSet, term: str = "") -> list[DataPointId]:
    """Id widocznych pól w kolejności kolekcji i pól."""
    return [dp.id for coll in filter_collections(collection_set, term) for dp in coll.data_points]

"""
validator/normalizer.py — normalizacja propozycji wyroczni przed walidacją.

normalize_collection() / normalize_point():
  - Zwracają kopię propozycji; oryginał wyroczni pozostaje nietknięty.
  - Stringi są trimowane (label, selector, attribute, nazwa kolekcji).
  - Pusty attribute → usunięty (odczyt tekstu elementu).
  - "name" jest akceptowane zamiast "collectionName".
  - Wartości nie będące słownikiem są zwracane bez zmian (odrzuci je schemat).
"""

from __future__ import annotations

from typing import Any


def normalize_collection(proposal: Any) -> Any:
    if not isinstance(proposal, dict):
        return proposal

    coll = dict(proposal)
    if "collectionName" not in coll and "name" in coll:
        coll["collectionName"] = coll.pop("name")
    coll.setdefault("collectionName", "")

    for key in ("collectionName", "repeatingElementSelector"):
        if isinstance(coll.get(key), str):
            coll[key] = coll[key].strip()

    return coll


def normalize_point(proposal: Any) -> Any:
    if not isinstance(proposal, dict):
        return proposal

    point = dict(proposal)
    for key in ("label", "selector", "attribute"):
        if isinstance(point.get(key), str):
            point[key] = point[key].strip()

    if point.get("attribute") in ("", None):
        point.pop("attribute", None)

    return point

"""
data_model — struktury danych ekstraktora tabel HTML.

Użycie:
  from data_model import CollectionSet, DataCollection, DataPoint, ...

Moduły:
  collection — DataPoint, DataCollection, CollectionSet, Row, ExtractionResult
  errors     — HarvestError i pochodne (ParseError, NoSelectionError, ...)

Mapowanie na JSON wyroczni / pliku kolekcji:
  collectionName / name     → DataCollection.name
  repeatingElementSelector  → DataCollection.repeating_selector
  dataPoints                → DataCollection.data_points
  label, selector, attribute → DataPoint
"""

from .collection import (
    CollectionId,
    DataPointId,
    Row,
    DataPoint,
    DataCollection,
    CollectionSet,
    ExtractionResult,
)
from .errors import (
    HarvestError,
    ParseError,
    FetchError,
    NoSelectionError,
    NoElementsMatchedError,
    OracleError,
    MissingCredentialError,
    InvalidCredentialError,
    QuotaExceededError,
    OracleResponseError,
)

__all__ = [
    # collection
    "CollectionId",
    "DataPointId",
    "Row",
    "DataPoint",
    "DataCollection",
    "CollectionSet",
    "ExtractionResult",
    # errors
    "HarvestError",
    "ParseError",
    "FetchError",
    "NoSelectionError",
    "NoElementsMatchedError",
    "OracleError",
    "MissingCredentialError",
    "InvalidCredentialError",
    "QuotaExceededError",
    "OracleResponseError",
]

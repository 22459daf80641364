"""Explore paginated, searchable data from public REST APIs."""

from .config import settings
from .controller import DataFetchController, parse_source
from .exceptions import ApiExplorerError, FetchError, UnknownSourceError
from .models import ErrorKind, FetchFailure, Query, Result, Source, ViewState
from .session import ExplorerSession

__all__ = [
    "settings",
    "DataFetchController",
    "ExplorerSession",
    "parse_source",
    "Query",
    "Result",
    "FetchFailure",
    "ErrorKind",
    "Source",
    "ViewState",
    "ApiExplorerError",
    "FetchError",
    "UnknownSourceError",
]

"""Data models for queries, results and the rendered view state."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .pagination import showing_range, total_pages

Item = dict[str, Any]


class Source(str, Enum):
    """Selectable remote collections."""

    POSTS = "posts"
    USERS = "users"
    PRODUCTS = "products"
    QUOTES = "quotes"

    @property
    def label(self) -> str:
        return self.value.capitalize()


class ErrorKind(str, Enum):
    """Failure taxonomy for remote requests."""

    TIMEOUT = "timeout"
    NETWORK_UNREACHABLE = "network_unreachable"
    SERVER_ERROR = "server_error"
    CLIENT_ERROR = "client_error"
    UNKNOWN = "unknown"


class Query(BaseModel):
    """One request for a page of a source, optionally filtered by text."""

    model_config = ConfigDict(frozen=True)

    source: Source
    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=12, ge=1)
    search_text: str = ""

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.page_size

    @property
    def has_search(self) -> bool:
        return bool(self.search_text)


class Result(BaseModel):
    """A page of items plus the count of all matches for the search text."""

    model_config = ConfigDict(frozen=True)

    items: list[Item] = Field(default_factory=list)
    total: int = Field(default=0, ge=0)


class FetchFailure(BaseModel):
    """Structured failure returned instead of raising past the controller."""

    model_config = ConfigDict(frozen=True)

    kind: ErrorKind
    message: str
    status: int | None = None


class ViewState(BaseModel):
    """Everything the presentation layer needs to draw the explorer."""

    source: Source
    page: int = 1
    page_size: int = 12
    search_text: str = ""  # what the user typed, settled or not
    items: list[Item] = Field(default_factory=list)
    total: int = 0
    loading: bool = False
    error: str | None = None

    @property
    def total_pages(self) -> int:
        return total_pages(self.total, self.page_size)

    @property
    def has_next_page(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_prev_page(self) -> bool:
        return self.page > 1

    @property
    def first_index(self) -> int:
        return showing_range(self.page, self.page_size, self.total)[0]

    @property
    def last_index(self) -> int:
        return showing_range(self.page, self.page_size, self.total)[1]

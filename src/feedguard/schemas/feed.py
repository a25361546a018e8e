"""Feed-related Pydantic schemas."""
from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class FeedStatus(str, Enum):
    """Lifecycle of a paginated feed as observed by list renderers."""

    IDLE = "Idle"
    LOADING_FIRST_PAGE = "LoadingFirstPage"
    LOADED = "Loaded"
    LOADING_MORE = "LoadingMore"
    EXHAUSTED = "Exhausted"
    ERROR = "Error"


class RawItem(BaseModel):
    """Server-delivered content record.

    Only ``id`` is required; unknown fields sent by the backend are kept so they
    reach the renderer untouched.
    """

    id: str = Field(..., min_length=1, description="Stable unique identifier")
    title: str | None = None
    body: str | None = Field(None, description="Free text written by the author")

    model_config = ConfigDict(frozen=True, extra="allow", coerce_numbers_to_str=True)


class ModeratedItem(BaseModel):
    """A ``RawItem`` with the redacted view of its text fields."""

    id: str
    title: str | None
    body: str | None
    # True when any text field contained a blocked term.
    flagged: bool = False
    # True when the reader asked to hide offensive items entirely.
    hidden: bool = False
    item: RawItem

    model_config = ConfigDict(frozen=True)


class Page(BaseModel):
    """One page returned by the data source."""

    items: list[RawItem] = Field(default_factory=list)
    next_cursor: str | None = Field(None, alias="nextCursor")
    exhausted: bool = False

    model_config = ConfigDict(populate_by_name=True)


class FeedView(BaseModel):
    """Snapshot of a feed handed to the list renderer."""

    name: str
    status: FeedStatus
    items: list[ModeratedItem]
    hidden_count: int = 0
    is_loading: bool = False
    show_spinner: bool = False
    show_end_of_list: bool = False
    error: str | None = None

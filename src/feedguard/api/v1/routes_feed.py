"""Feed endpoints exposing moderated, paginated list views."""
from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query, status

from feedguard.api.v1.dependencies import FeedRegistryDep
from feedguard.schemas.feed import FeedStatus, FeedView
from feedguard.services.feed import FeedRegistry, PaginatedFeed

router = APIRouter(tags=["feeds"])


def _resolve(registry: FeedRegistry, name: str, tag: str | None) -> PaginatedFeed:
    try:
        return registry.get(name, tag)
    except KeyError as err:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Feed not found") from err


@router.get("/{name}", response_model=FeedView)
async def get_feed(
    name: str,
    registry: FeedRegistryDep,
    tag: str | None = Query(None, max_length=100),
) -> FeedView:
    """Return the current view of a feed, loading its first page if needed."""
    feed = _resolve(registry, name, tag)
    if feed.status == FeedStatus.IDLE:
        await feed.load_more()
    return feed.view()


@router.post("/{name}/load-more", response_model=FeedView)
async def load_more(
    name: str,
    registry: FeedRegistryDep,
    tag: str | None = Query(None, max_length=100),
) -> FeedView:
    """Fetch the next page of a feed."""
    feed = _resolve(registry, name, tag)
    await feed.load_more()
    return feed.view()


@router.post("/{name}/refresh", response_model=FeedView)
async def refresh(
    name: str,
    registry: FeedRegistryDep,
    tag: str | None = Query(None, max_length=100),
) -> FeedView:
    """Discard accumulated items and reload the first page."""
    feed = _resolve(registry, name, tag)
    await feed.refresh()
    return feed.view()


@router.post("/{name}/retry", response_model=FeedView)
async def retry(
    name: str,
    registry: FeedRegistryDep,
    tag: str | None = Query(None, max_length=100),
) -> FeedView:
    """Retry the fetch that left the feed in the error state."""
    feed = _resolve(registry, name, tag)
    await feed.retry()
    return feed.view()


@router.delete("/{name}", status_code=status.HTTP_204_NO_CONTENT)
async def discard_feed(
    name: str,
    registry: FeedRegistryDep,
    tag: str | None = Query(None, max_length=100),
) -> None:
    """Tear down a feed whose list view was dismissed."""
    await registry.discard(name, tag)

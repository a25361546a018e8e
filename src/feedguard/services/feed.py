"""Paginated feed adapter with a renderer-facing status state machine.

Status transitions::

    Idle -> LoadingFirstPage -> Loaded | Exhausted | Error
    Loaded -> LoadingMore -> Loaded | Exhausted | Error
    Error -> (retry) -> LoadingFirstPage | LoadingMore
    any -> (refresh) -> LoadingFirstPage

At most one fetch runs per feed. Every fetch is tagged with the generation it
was started in; ``refresh`` and ``close`` start a new generation, so a page
that arrives for an older generation is dropped without touching state.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from feedguard.schemas.feed import FeedStatus, FeedView, ModeratedItem, Page, RawItem
from feedguard.schemas.settings import ModerationPolicy
from feedguard.services.moderation import moderate_item
from feedguard.services.page_source import PageSource, TransportError
from feedguard.services.policy import ModerationPolicyStore
from feedguard.services.wordlist import BlockedTermSet

__all__ = ["FeedRegistry", "FeedStatus", "PaginatedFeed"]

logger = logging.getLogger(__name__)

_FETCH_PHASES = (FeedStatus.LOADING_FIRST_PAGE, FeedStatus.LOADING_MORE)


class PaginatedFeed:
    """Accumulates pages from a cursor-based source and exposes moderated items."""

    def __init__(
        self,
        source: PageSource,
        terms: BlockedTermSet,
        policy_store: ModerationPolicyStore,
        *,
        name: str = "feed",
        scrub_contacts: bool = False,
    ) -> None:
        self.name = name
        self._source = source
        self._terms = terms
        self._policy_store = policy_store
        self._scrub_contacts = scrub_contacts

        self._status = FeedStatus.IDLE
        # Insertion order is first-seen order.
        self._items: dict[str, RawItem] = {}
        self._cursor: str | None = None
        self._failed_phase: FeedStatus | None = None
        self._error: str | None = None
        self._in_flight = False
        self._generation = 0
        self._closed = False

        self._moderated: dict[str, ModeratedItem] = {}
        self._moderated_for: ModerationPolicy | None = None

    @property
    def status(self) -> FeedStatus:
        return self._status

    @property
    def error(self) -> str | None:
        return self._error

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def raw_items(self) -> list[RawItem]:
        return list(self._items.values())

    @property
    def items(self) -> list[ModeratedItem]:
        """Moderated view of every accumulated item, hidden ones included."""
        policy = self._policy_store.policy
        if policy != self._moderated_for:
            self._moderated = {}
            self._moderated_for = policy

        view: list[ModeratedItem] = []
        for item_id, item in self._items.items():
            moderated = self._moderated.get(item_id)
            if moderated is None:
                moderated = moderate_item(
                    item,
                    self._terms,
                    policy,
                    scrub_contacts=self._scrub_contacts,
                )
                self._moderated[item_id] = moderated
            view.append(moderated)
        return view

    @property
    def visible_items(self) -> list[ModeratedItem]:
        return [item for item in self.items if not item.hidden]

    def view(self) -> FeedView:
        """Snapshot the feed for a list renderer."""
        everything = self.items
        visible = [item for item in everything if not item.hidden]
        return FeedView(
            name=self.name,
            status=self._status,
            items=visible,
            hidden_count=len(everything) - len(visible),
            is_loading=self._status == FeedStatus.LOADING_FIRST_PAGE,
            show_spinner=self._status == FeedStatus.LOADING_MORE,
            show_end_of_list=self._status == FeedStatus.EXHAUSTED and bool(visible),
            error=self._error,
        )

    async def load_more(self) -> None:
        """Fetch the next page; a no-op while a fetch is running or once exhausted.

        From ``Idle`` this loads the first page and from ``Error`` it retries
        the transition that failed.
        """
        if self._closed or self._in_flight:
            return
        if self._status == FeedStatus.IDLE:
            await self._fetch(FeedStatus.LOADING_FIRST_PAGE)
        elif self._status == FeedStatus.LOADED:
            await self._fetch(FeedStatus.LOADING_MORE)
        elif self._status == FeedStatus.ERROR:
            await self.retry()

    async def retry(self) -> None:
        """Re-run the fetch that failed, resuming from the preserved cursor."""
        if self._closed or self._in_flight or self._status != FeedStatus.ERROR:
            return
        await self._fetch(self._failed_phase or FeedStatus.LOADING_FIRST_PAGE)

    async def refresh(self) -> None:
        """Drop accumulated state and load the first page again.

        Always permitted: a fetch still running from before the refresh is
        left to finish but its result is discarded.
        """
        if self._closed:
            return
        self._reset()
        await self._fetch(FeedStatus.LOADING_FIRST_PAGE)

    def close(self) -> None:
        """Tear the feed down; in-flight results are discarded when they land."""
        self._closed = True
        self._generation += 1
        self._in_flight = False

    def _reset(self) -> None:
        self._generation += 1
        self._status = FeedStatus.IDLE
        self._items = {}
        self._cursor = None
        self._failed_phase = None
        self._error = None
        self._in_flight = False
        self._moderated = {}

    async def _fetch(self, phase: FeedStatus) -> None:
        if phase not in _FETCH_PHASES:
            raise ValueError(f"{phase} is not a fetch phase")

        generation = self._generation
        cursor = self._cursor if phase == FeedStatus.LOADING_MORE else None
        self._in_flight = True
        self._status = phase
        self._error = None

        try:
            page = await self._source(cursor)
        except TransportError as exc:
            if self._is_stale(generation):
                logger.debug("Discarding stale failure for feed %s: %s", self.name, exc)
                return
            logger.warning("Feed %s failed during %s: %s", self.name, phase.value, exc)
            self._fail(phase, str(exc))
            return
        except BaseException:
            if not self._is_stale(generation):
                self._fail(phase, "Unexpected error while fetching page")
            raise

        if self._is_stale(generation):
            logger.debug("Discarding stale page for feed %s", self.name)
            return
        self._apply(page)

    def _is_stale(self, generation: int) -> bool:
        return self._closed or generation != self._generation

    def _fail(self, phase: FeedStatus, message: str) -> None:
        self._in_flight = False
        self._status = FeedStatus.ERROR
        self._failed_phase = phase
        self._error = message

    def _apply(self, page: Page) -> None:
        for item in page.items:
            self._items.setdefault(item.id, item)

        if page.next_cursor is not None:
            self._cursor = page.next_cursor
        elif not page.exhausted:
            logger.debug("Feed %s page carried no cursor; keeping the previous one", self.name)

        self._in_flight = False
        self._failed_phase = None
        self._status = FeedStatus.EXHAUSTED if page.exhausted else FeedStatus.LOADED


class FeedRegistry:
    """One ``PaginatedFeed`` per list view, created on first access."""

    def __init__(
        self,
        source_factory: Callable[[str, str | None], PageSource],
        terms: BlockedTermSet,
        policy_store: ModerationPolicyStore,
        *,
        names: list[str] | None = None,
        scrub_contacts: bool = False,
    ) -> None:
        self._source_factory = source_factory
        self._terms = terms
        self._policy_store = policy_store
        self.names = list(names) if names is not None else None
        self._scrub_contacts = scrub_contacts
        self._feeds: dict[tuple[str, str | None], PaginatedFeed] = {}
        self._sources: dict[tuple[str, str | None], PageSource] = {}

    def get(self, name: str, tag: str | None = None) -> PaginatedFeed:
        """Return the feed for ``name`` (and search ``tag``).

        Raises:
            KeyError: If ``name`` is not a served feed.
        """
        if self.names is not None and name not in self.names:
            raise KeyError(name)

        key = (name, tag or None)
        feed = self._feeds.get(key)
        if feed is None:
            source = self._source_factory(name, tag or None)
            feed = PaginatedFeed(
                source,
                self._terms,
                self._policy_store,
                name=name if not tag else f"{name}:{tag}",
                scrub_contacts=self._scrub_contacts,
            )
            self._feeds[key] = feed
            self._sources[key] = source
        return feed

    async def discard(self, name: str, tag: str | None = None) -> None:
        """Close and forget a feed whose view went away."""
        key = (name, tag or None)
        feed = self._feeds.pop(key, None)
        source = self._sources.pop(key, None)
        if feed is not None:
            feed.close()
        await _close_source(source)

    async def close_all(self) -> None:
        for key in list(self._feeds):
            await self.discard(*key)


async def _close_source(source: PageSource | None) -> None:
    close = getattr(source, "close", None)
    if close is not None:
        await close()

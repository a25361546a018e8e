"""Main entry point for the Feedguard API."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from sqlalchemy.exc import SQLAlchemyError

from feedguard.api.v1 import api_v1
from feedguard.core.settings import settings
from feedguard.db.session import build_engine, build_session_factory, create_tables
from feedguard.repositories.settings_repo import SqlSettingsStorage
from feedguard.services.feed import FeedRegistry
from feedguard.services.page_source import PageSource, build_page_source
from feedguard.services.policy import ModerationPolicyStore
from feedguard.services.wordlist import get_blocked_terms

logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="Feedguard API",
    description="Moderated, paginated feeds for the social app client",
    version=settings.app_version,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

app.include_router(api_v1, prefix="/api/v1")


def _http_source(name: str, tag: str | None) -> PageSource:
    return build_page_source(name, tag=tag)


@app.on_event("startup")
async def on_startup() -> None:
    engine = build_engine()
    try:
        create_tables(engine)
    except SQLAlchemyError:
        # Preferences fall back to defaults; the feeds still start.
        logger.exception("Settings database unavailable at %s", settings.settings_database_url)
    app.state.engine = engine

    policy_store = ModerationPolicyStore(SqlSettingsStorage(build_session_factory(engine)))
    await policy_store.load()
    app.state.policy_store = policy_store

    app.state.feeds = FeedRegistry(
        _http_source,
        get_blocked_terms(),
        policy_store,
        names=settings.feed_names,
        scrub_contacts=settings.scrub_contact_details,
    )
    logger.info("Feedguard started with feeds: %s", ", ".join(settings.feed_names))


@app.on_event("shutdown")
async def on_shutdown() -> None:
    feeds: FeedRegistry | None = getattr(app.state, "feeds", None)
    if feeds is not None:
        await feeds.close_all()
    engine = getattr(app.state, "engine", None)
    if engine is not None:
        engine.dispose()


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=logging.DEBUG if settings.debug else logging.INFO)
    uvicorn.run("feedguard.main:app", host="0.0.0.0", port=8000, reload=settings.debug)

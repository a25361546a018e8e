"""Versioned API router wiring for v1.

This module composes the version 1 API surface by including the sub-routers
that define their own endpoints. It contains no endpoint definitions.
"""
from __future__ import annotations

from typing import Final

from fastapi import APIRouter

from . import routes_feed, routes_settings

api_v1: Final[APIRouter] = APIRouter()
api_v1.include_router(routes_feed.router, prefix="/feeds")
api_v1.include_router(routes_settings.router, prefix="/settings")

__all__ = ["api_v1"]

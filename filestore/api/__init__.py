"""API router registry used by the app factory.

Keeps route module imports and inclusion order in one place so
`filestore.main` stays focused on startup wiring.
"""

from __future__ import annotations

from fastapi import APIRouter

from . import files, health

API_PREFIX = "/api/v1"

API_ROUTERS: tuple[APIRouter, ...] = (
    health.router,
    files.router,
)

__all__ = ["API_PREFIX", "API_ROUTERS"]

"""Gatekeeper FastAPI application.

Entry point: uvicorn gatekeeper.main:app
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, RedirectResponse

from gatekeeper.auth.dependencies import GUARDED_PAGES
from gatekeeper.auth.permissions import unregistered_routes
from gatekeeper.auth.views import required_pages
from gatekeeper.config import settings
from gatekeeper.errors import GatekeeperError, LoginRequired
from gatekeeper.middleware import RequestIDMiddleware, get_request_id
from gatekeeper.preferences import PreferenceStore, Preferences
from gatekeeper.routers import console, health

logger = logging.getLogger(__name__)


def check_route_registration() -> None:
    """Every guarded page must be declared PUBLIC or given a permission."""
    missing = unregistered_routes(GUARDED_PAGES | required_pages())
    if missing:
        raise RuntimeError(f"Guarded pages missing from the route table: {missing}")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    check_route_registration()
    app.state.http_client = httpx.AsyncClient(timeout=settings.API_TIMEOUT_SECONDS)
    app.state.preferences = Preferences(PreferenceStore(settings.UI_PREFERENCES_PATH))
    logger.info("Gatekeeper started against %s", settings.API_BASE_URL)

    yield

    await app.state.http_client.aclose()


app = FastAPI(title="Gatekeeper", lifespan=lifespan)

app.add_middleware(RequestIDMiddleware)


@app.exception_handler(GatekeeperError)
async def gatekeeper_error_handler(request: Request, exc: GatekeeperError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": {
                "code": exc.code,
                "message": exc.message,
                "request_id": get_request_id(),
            }
        },
        headers={"X-Request-ID": get_request_id()},
    )


@app.exception_handler(LoginRequired)
async def login_required_handler(request: Request, exc: LoginRequired) -> RedirectResponse:
    return RedirectResponse(exc.location, status_code=303)


app.include_router(health.router)
app.include_router(console.router)

from __future__ import annotations

import uuid
from collections.abc import Awaitable, Callable
from contextlib import asynccontextmanager
from typing import Any

import anyio
import structlog
from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from menu_service.callable.auth import resolve_auth_context
from menu_service.callable.context import CallableContext
from menu_service.callable.protocol import (
    CallableRequest,
    HttpsError,
    parse_callable_body,
    result_envelope,
)
from menu_service.core.config import settings
from menu_service.core.firebase import close_firebase, get_firebase_app, init_firebase
from menu_service.core.logging import configure_logging
from menu_service.core.sentry import init_sentry
from menu_service.menu import MenuStore, add_menu_item, get_menu

configure_logging(settings.log_level)
logger = structlog.get_logger(__name__)

Handler = Callable[[Any, CallableContext, MenuStore], Awaitable[dict[str, Any]]]


def build_menu_store(backend: str | None = None) -> MenuStore:
    resolved = backend or settings.menu_store_backend
    if resolved == "memory":
        from menu_service.menu.memory import InMemoryMenuStore

        return InMemoryMenuStore()
    from menu_service.menu.firestore import FirestoreMenuStore

    return FirestoreMenuStore(get_firebase_app())


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_sentry()
    # ID token verification needs the Firebase app whatever the store backend.
    init_firebase()
    app.state.menu_store = build_menu_store()
    logger.info("service_started", store_backend=settings.menu_store_backend)
    try:
        yield
    finally:
        app.state.menu_store = None
        close_firebase()


app = FastAPI(title=settings.app_name, lifespan=lifespan)
limiter = Limiter(key_func=get_remote_address)
app.state.limiter = limiter
app.state.menu_store = None


def get_menu_store(request: Request) -> MenuStore:
    store = getattr(request.app.state, "menu_store", None)
    if store is None:
        store = build_menu_store()
        request.app.state.menu_store = store
    return store


@app.middleware("http")
async def add_request_context(request: Request, call_next):
    request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
    request.state.request_id = request_id
    with structlog.contextvars.bound_contextvars(request_id=request_id):
        response = await call_next(request)

    response.headers["x-request-id"] = request_id
    return response


@app.exception_handler(HttpsError)
async def https_error_handler(request: Request, exc: HttpsError):
    logger.warning(
        "callable_request_rejected",
        path=request.url.path,
        status=exc.status,
        error=exc.message,
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_envelope())


@app.exception_handler(RateLimitExceeded)
async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
    logger.warning("rate_limit_exceeded", path=request.url.path)
    error = HttpsError("resource-exhausted", "Rate limit exceeded. Please slow down.")
    return JSONResponse(status_code=error.http_status, content=error.to_envelope())


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("unhandled_exception", path=request.url.path)
    error = HttpsError("internal", "INTERNAL")
    return JSONResponse(status_code=error.http_status, content=error.to_envelope())


async def _read_callable_request(request: Request) -> CallableRequest:
    content_type = request.headers.get("content-type", "")
    if not content_type.startswith("application/json"):
        raise HttpsError("invalid-argument", "Bad Request")
    return parse_callable_body(await request.body())


async def _dispatch(request: Request, handler: Handler, store: MenuStore) -> JSONResponse:
    payload = await _read_callable_request(request)
    auth_context = await resolve_auth_context(request.headers.get("authorization"))
    context = CallableContext(
        auth=auth_context, request_id=getattr(request.state, "request_id", None)
    )

    with structlog.contextvars.bound_contextvars(
        caller_uid=auth_context.uid if auth_context else None
    ):
        result = await handler(payload.data, context, store)
    return JSONResponse(content=result_envelope(result))


@app.get("/health")
async def health() -> dict[str, str]:
    logger.info("health_check")
    return {"status": "ok"}


@app.get("/ready")
async def ready(store: MenuStore = Depends(get_menu_store)) -> JSONResponse:
    checks: dict[str, dict[str, str]] = {}
    status_code = 200
    try:
        with anyio.fail_after(settings.ready_check_timeout):
            await store.check()
        checks["menu_store"] = {"status": "ok"}
    except Exception as exc:  # noqa: BLE001 - narrow errors not needed for health
        checks["menu_store"] = {"status": "error", "error": str(exc) or type(exc).__name__}
        status_code = 503

    overall = "ok" if status_code == 200 else "error"
    return JSONResponse(status_code=status_code, content={"status": overall, "checks": checks})


@app.post("/getMenu", response_model=None)
async def get_menu_endpoint(
    request: Request, store: MenuStore = Depends(get_menu_store)
) -> JSONResponse:
    """
    Callable function listing every menu item.
    """
    return await _dispatch(request, get_menu, store)


@app.post("/addMenuItem", response_model=None)
@limiter.limit(settings.add_item_rate_limit)
async def add_menu_item_endpoint(
    request: Request, store: MenuStore = Depends(get_menu_store)
) -> JSONResponse:
    """
    Callable function appending a menu item. Requires a signed-in caller.
    """
    return await _dispatch(request, add_menu_item, store)

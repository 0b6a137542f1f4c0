"""Orderboard FastAPI application.

Web server that processes commands synchronously via HTTP. Each request is
wrapped in the ordering domain context.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV selects the config overlay from domain.toml; every overlay
# processes commands and events synchronously, so order change broadcasts
# fire inside the request that caused them.
import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ordering import settings
from ordering.domain import ordering
from ordering.utils.logging import add_context, clear_context

ordering.init()

logger = structlog.get_logger(__name__)

# ---------------------------------------------------------------------------
# Route-to-domain mapping
# ---------------------------------------------------------------------------
_DOMAIN_PREFIXES = ("/menu", "/carts", "/orders")


def _resolve_domain(path: str):
    """Return the domain for the given request path, or None."""
    if path.startswith(_DOMAIN_PREFIXES):
        return ordering
    return None


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Orderboard API",
    description="Menu, carts, checkout and the live staff order board",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the ordering domain context for each request."""
    domain = _resolve_domain(request.url.path)
    if domain is None:
        # No domain match: pass through (health check, docs, etc.)
        return await call_next(request)

    add_context(path=request.url.path, method=request.method)
    try:
        with domain.domain_context():
            response = await call_next(request)
        return response
    finally:
        clear_context()


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from ordering.api import (  # noqa: E402
    cart_router,
    menu_router,
    order_router,
    register_error_handlers,
    stream_router,
)

app.include_router(menu_router)
app.include_router(cart_router)
app.include_router(stream_router)
app.include_router(order_router)
register_error_handlers(app)


# ---------------------------------------------------------------------------
# Menu seeding
# ---------------------------------------------------------------------------
def seed_menu_from_settings() -> int:
    """Load ``ORDERBOARD_MENU_FILE`` into an empty menu. Returns products added."""
    path = settings.menu_file()
    if not path:
        return 0

    from ordering.menu.loader import seed_menu_file
    from ordering.menu.product import Product

    with ordering.domain_context():
        if ordering.repository_for(Product).list_menu():
            return 0
        added = len(seed_menu_file(path))
    logger.info("Menu loaded from file", path=path, products=added)
    return added


seed_menu_from_settings()


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(
        content={
            "status": "ok",
            "domains": {"ordering": {"name": ordering.name}},
            "store": settings.store_name(),
        }
    )

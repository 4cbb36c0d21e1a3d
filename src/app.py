"""Pourhouse HTTP API.

Serves every bounded context from one FastAPI process. Commands run
synchronously, inside the Protean domain that owns the route.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

from uuid import uuid4

from catalogue.api import menu_router, user_menu_router
from catalogue.domain import catalogue
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from identity.api import router as identity_router
from identity.domain import identity
from ordering.api import cart_router, delivery_router, order_router
from ordering.domain import ordering
from protean.integrations.fastapi import register_exception_handlers
from shared.logging import add_context, clear_context, get_logger
from support.api import router as support_router
from support.domain import support

logger = get_logger(__name__)

DOMAINS = (identity, catalogue, ordering, support)

# Each router is served inside the domain that owns its aggregates.
ROUTERS = (
    (identity_router, identity),
    (menu_router, catalogue),
    (user_menu_router, catalogue),
    (cart_router, ordering),
    (order_router, ordering),
    (delivery_router, ordering),
    (support_router, support),
)

# Initialised at import time so every uvicorn worker shares the registry.
# PROTEAN_ENV picks the domain.toml overlay.
for domain in DOMAINS:
    domain.init()

PREFIX_TO_DOMAIN = {router.prefix: domain for router, domain in ROUTERS}


def domain_for_path(path: str):
    for prefix, domain in PREFIX_TO_DOMAIN.items():
        if path == prefix or path.startswith(prefix + "/"):
            return domain
    return None


app = FastAPI(
    title="Pourhouse API",
    description="Drinks storefront: accounts, menus, carts, orders, delivery and support tickets",
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
register_exception_handlers(app)

for router, _ in ROUTERS:
    app.include_router(router)


@app.middleware("http")
async def request_context(request: Request, call_next):
    """Tag log lines with the request and enter the owning domain's context."""
    clear_context()
    add_context(
        request_id=request.headers.get("x-request-id") or uuid4().hex,
        method=request.method,
        path=request.url.path,
    )

    domain = domain_for_path(request.url.path)
    if domain is None:
        return await call_next(request)

    with domain.domain_context():
        response = await call_next(request)
    if response.status_code >= 500:
        logger.error("request_failed", status_code=response.status_code, domain=domain.name)
    return response


@app.get("/health")
async def health():
    return {
        "status": "ok",
        "domains": sorted(domain.name for domain in DOMAINS),
        "routes": sorted(PREFIX_TO_DOMAIN),
    }

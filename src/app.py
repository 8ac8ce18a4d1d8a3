"""Storefront availability FastAPI application.

Processes commands synchronously over HTTP, each request wrapped in the
availability domain context.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

from uuid import uuid4

from availability.domain import availability
from availability.utils.logging import add_context, clear_context
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers

availability.init()

_DOMAIN_PREFIXES = ("/products", "/inventory")

app = FastAPI(
    title="Storefront Availability API",
    description="Product and flavor stock availability for the storefront and back office",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the availability domain context and tag log lines with a request id."""
    if not request.url.path.startswith(_DOMAIN_PREFIXES):
        return await call_next(request)

    add_context(request_id=request.headers.get("x-request-id") or str(uuid4()))
    try:
        with availability.domain_context():
            return await call_next(request)
    finally:
        clear_context()


from availability.api import inventory_router, product_router  # noqa: E402

app.include_router(product_router)
app.include_router(inventory_router)


@app.get("/health")
async def health():
    return JSONResponse(content={"status": "ok", "domain": availability.name})

"""Canteen FastAPI application.

Serves the item and order API plus the ``/ws`` notification socket. Commands
are processed synchronously inside each request's domain context.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# PROTEAN_ENV selects the config overlay in canteen/domain.toml:
#   - unset        → memory providers, sync processing
#   - "production" → PostgreSQL, async event processing
from canteen.domain import canteen  # noqa: E402
from canteen.utils.db import setup_db  # noqa: E402
from canteen.utils.logging import clear_context, configure_logging  # noqa: E402
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

configure_logging()
canteen.init()
setup_db(canteen)

# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Canteen API",
    description="Canteen ordering: catalog, stock, orders and live notifications",
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
    """Push the canteen domain context for each request."""
    clear_context()
    with canteen.domain_context():
        response = await call_next(request)
    return response


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from canteen.api import item_router, order_router, register_error_handlers, ws_router  # noqa: E402

app.include_router(item_router)
app.include_router(order_router)
app.include_router(ws_router)
register_error_handlers(app)


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(content={"status": "ok", "domain": canteen.name})

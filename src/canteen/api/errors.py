"""Map engine errors onto HTTP responses."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers

from canteen.errors import InsufficientStock, InvalidRequest, InvalidTransition, NotFound, Unauthorized

ENGINE_ERRORS = (InvalidRequest, NotFound, InsufficientStock, Unauthorized, InvalidTransition)


async def engine_error_handler(request: Request, exc) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.error_type, "messages": exc.messages},
    )


def register_error_handlers(app: FastAPI) -> None:
    """Install Protean's generic handlers, then the more specific engine ones."""
    register_exception_handlers(app)
    for error in ENGINE_ERRORS:
        app.add_exception_handler(error, engine_error_handler)

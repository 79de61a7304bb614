"""FastAPI application setup module."""
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from sales_api.settings import settings
from sales_api.endpoints.countries import router as countries_router
from sales_api.endpoints.markets import router as markets_router
from sales_api.endpoints.transactions import router as transactions_router
from sales_api.endpoints.users import router as users_router
from sales_api.exceptions.api_exception import (
    APIException,
    PROCESS_NOT_FINISHED,
    PROCESS_NOT_FINISHED_MESSAGE,
    VALIDATION_FAILED,
)
from sales_api.schemas.common import ErrorResponse

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Sales Registry API",
    description="Countries, markets and sales/returns transactions with unit summaries",
    version="1.0.0",
    debug=settings.DEBUG,
)

# CORS middleware for frontend integration
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(users_router)
app.include_router(countries_router)
app.include_router(markets_router)
app.include_router(transactions_router)


_LOCATIONS = {"body", "query", "path", "header"}


def _error(status_code: int, code: int, message: str, headers=None) -> JSONResponse:
    body = ErrorResponse(code=code, message=message)
    return JSONResponse(status_code=status_code, content=body.model_dump(), headers=headers)


@app.exception_handler(APIException)
async def api_exception_handler(request: Request, exc: APIException) -> JSONResponse:
    logger.info("%s %s failed with code %s: %s", request.method, request.url.path, exc.code, exc.detail)
    return _error(exc.status_code, exc.code, exc.detail, getattr(exc, "headers", None))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report the first violated field and rule."""
    errors = exc.errors()
    first = errors[0] if errors else {}
    field = ".".join(str(part) for part in first.get("loc", ()) if part not in _LOCATIONS)
    message = f"{field}: {first.get('msg', 'invalid value')}" if field else first.get("msg", "")
    return _error(status.HTTP_422_UNPROCESSABLE_ENTITY, VALIDATION_FAILED, message)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _error(status.HTTP_400_BAD_REQUEST, PROCESS_NOT_FINISHED, PROCESS_NOT_FINISHED_MESSAGE)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}

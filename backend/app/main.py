# backend/app/main.py
import logging

from fastapi import FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from backend.app.api.v1.router import api_router
from filtervalues.core.config import settings
from filtervalues.exceptions import FilterValuesError, IncompatibleMethodError

logger = logging.getLogger(__name__)

description = """
Filter Values API scores the features of a supervised learning task. 🚀

You can:
*   **List filter methods** and the tasks and feature types they support
*   **Compute filter values** for one or more methods at once
*   Build **reports** ready for plotting
*   Queue long computations as **background jobs**
"""

app = FastAPI(
    title="Filter Values API",
    description=description,
    version="0.1.0",
    openapi_url="/api/v1/openapi.json",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix="/api/v1")


@app.get("/", tags=["Health Check"])
async def read_root():
    """Basic health check endpoint."""
    return {"status": "ok", "message": "Welcome to Filter Values API!"}


@app.exception_handler(FilterValuesError)
async def filter_values_exception_handler(request, exc: FilterValuesError):
    logger.info(f"Rejected request: {type(exc).__name__}: {exc}")
    content = {"detail": str(exc), "error": type(exc).__name__}
    if isinstance(exc, IncompatibleMethodError):
        content["methods"] = exc.methods
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=content)


@app.exception_handler(Exception)
async def generic_exception_handler(request, exc):
    logger.error(f"Unhandled Exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error."},
    )

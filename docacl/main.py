"""Main module of the FastAPI application.

This module sets up the FastAPI application, the lifespan that owns the
process-scoped authority connection pool, and the exception handlers that
turn authority failures into request failures.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from docacl import __version__
from docacl.api.middleware import add_request_id, docacl_exception_handler, log_requests
from docacl.api.v1.api import api_router
from docacl.core.config import settings
from docacl.core.exceptions import DocAclException
from docacl.core.logging import logger


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events.

    Builds the DI container (and with it the authority connection pool) on
    startup and closes the pool exactly once on shutdown.
    """
    from docacl.core.container import initialize_container, shutdown_container

    logger.info("Initializing dependency injection container...")
    initialize_container(settings)
    logger.info("Container initialized successfully")

    try:
        yield
    finally:
        logger.info("Shutting down container...")
        await shutdown_container()


app = FastAPI(
    title="docacl",
    version=__version__,
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

app.include_router(api_router)

# Register middleware
app.middleware("http")(add_request_id)
app.middleware("http")(log_requests)

# Register exception handlers
app.exception_handler(DocAclException)(docacl_exception_handler)

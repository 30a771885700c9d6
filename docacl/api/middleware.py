"""Middleware and exception handlers for the FastAPI application."""

import time
import uuid

from fastapi import Request, Response
from fastapi.responses import JSONResponse

from docacl.core.exceptions import DocAclException
from docacl.core.logging import logger
from docacl.domains.authority.exceptions import (
    ConfigurationError,
    ResolutionError,
    TransportError,
)


async def add_request_id(request: Request, call_next: callable) -> Response:
    """Middleware to generate and add a request ID to the request for tracing.

    Args:
    ----
        request (Request): The incoming request.
        call_next (callable): The next middleware in the chain.

    Returns:
    -------
        Response: The response to the incoming request.

    """
    request.state.request_id = str(uuid.uuid4())
    return await call_next(request)


async def log_requests(request: Request, call_next: callable) -> Response:
    """Middleware to log incoming requests.

    Args:
    ----
        request (Request): The incoming request.
        call_next (callable): The next middleware in the chain.

    Returns:
    -------
        Response: The response to the incoming request.

    """
    start_time = time.time()
    response = await call_next(request)
    duration = time.time() - start_time
    logger.info(
        f"Handled request {request.method} {request.url.path} in {duration:.2f} seconds. "
        f"Response code: {response.status_code}"
    )
    return response


async def docacl_exception_handler(request: Request, exc: DocAclException) -> JSONResponse:
    """Generic exception handler for all DocAclException types.

    Maps exception types to HTTP status codes. Checks base classes so that
    any subclass (e.g. PoolClosedError under ConfigurationError) is mapped
    without registering it here.

    Authority failures are reported as a bad gateway: the request is fine,
    the upstream that owns the user's tokens is not.
    """
    status_map = {
        ConfigurationError: 500,
        ResolutionError: 502,
        TransportError: 502,
    }

    logger.error(f"[API] {type(exc).__name__} while building access filter: {exc}")
    for exc_type, code in status_map.items():
        if isinstance(exc, exc_type):
            return JSONResponse(status_code=code, content={"detail": str(exc)})

    # Default for unmapped DocAclException subclasses
    return JSONResponse(status_code=500, content={"detail": str(exc)})

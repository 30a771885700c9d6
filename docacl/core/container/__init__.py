"""Dependency Injection Container Module.

This module provides the DI container and factory for wiring dependencies
across the application.

Usage:
------
    # Initialize at startup (call once from main.py lifespan)
    from docacl.core.container import initialize_container
    from docacl.core.config import settings
    initialize_container(settings)

    # Import the global container after initialization
    from docacl.core import container as container_mod
    service = container_mod.container.access_filter_service

    # Tear down at shutdown (closes the authority connection pool)
    await shutdown_container()

    # In tests (construct directly with fakes, don't use global)
    from docacl.core.container import Container
    test_container = Container(...)

Module structure:
-----------------
    container/
    ├── __init__.py      # This file - exports public API
    ├── container.py     # Container dataclass (serves)
    └── factory.py       # create_container() (builds)
"""

import threading
from typing import TYPE_CHECKING

from docacl.core.container.container import Container
from docacl.core.container.factory import create_container

if TYPE_CHECKING:
    from docacl.core.config import Settings

__all__ = [
    "Container",
    "create_container",
    "container",
    "initialize_container",
    "shutdown_container",
]


# ---------------------------------------------------------------------------
# Global container instance
# ---------------------------------------------------------------------------

container: Container | None = None
"""Global container instance.

Initialized via `initialize_container()` at application startup.

Import and use this in:
- api/deps.py: For FastAPI dependency functions

Do NOT import this in domain code. Domains receive dependencies
via constructor parameters, never by importing the container directly.
"""

_lock = threading.Lock()


def initialize_container(settings: "Settings") -> Container:
    """Initialize the global container. Idempotent.

    Concurrent or repeated calls converge on the first container built, so
    the authority connection pool is created exactly once per process.

    Args:
        settings: Application settings from core/config

    Returns:
        The global container
    """
    global container

    with _lock:
        if container is None:
            container = create_container(settings)
        return container


async def shutdown_container() -> None:
    """Close the container's resources and clear it. Idempotent."""
    global container

    with _lock:
        current, container = container, None
    if current is not None:
        await current.authority_pool.aclose()


def reset_container() -> None:
    """Reset the global container to None. For testing only.

    WARNING: Does not close the authority pool. Do not use in production code.
    """
    global container
    container = None

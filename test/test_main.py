"""
Test-specific FastAPI Application

No MongoDB connection: tests override the repository providers with
in-memory implementations before the client starts.
Uses shared app factory for common setup.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from src.platform.app_factory import create_app
from src.platform.config.di import container
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.logging.loguru_io import Logger


@asynccontextmanager
async def lifespan_for_tests(app: FastAPI) -> AsyncIterator[None]:
    """Minimal lifespan for testing - wiring only, no database."""
    Logger.base.info('🧪 [Test App] Starting up...')

    # Wire dependency injection for all modules
    container.wire(modules=WIRE_MODULES)
    Logger.base.info('🔌 [Test App] Dependency injection wired')

    yield

    # Unwire DI
    container.unwire()

    Logger.base.info('👋 [Test App] Shutdown complete')


# Create FastAPI app using shared factory
app = create_app(
    lifespan=lifespan_for_tests,
    title_suffix=' (Test)',
    description='Test Application - in-memory repositories',
)

"""
Production FastAPI Application

Owns the MongoDB client lifecycle: indexes on startup, pool closed on shutdown.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
import uvicorn

from src.platform.app_factory import create_app
from src.platform.config.di import container
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.logging.loguru_io import Logger


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifespan: startup and shutdown."""
    Logger.base.info('🚀 [Catalog Service] Starting up...')

    # Wire dependency injection for all modules
    container.wire(modules=WIRE_MODULES)
    Logger.base.info('🔌 [Catalog Service] Dependency injection wired')

    # Fail fast when MongoDB is unreachable
    mongo = container.mongo()
    await mongo.ping()
    await mongo.ensure_indexes()
    Logger.base.info('🗄️  [Catalog Service] MongoDB ready')

    Logger.base.info('✅ [Catalog Service] Ready to serve requests')

    yield

    Logger.base.info('🛑 [Catalog Service] Shutting down...')

    await mongo.close()

    # Unwire DI
    container.unwire()

    Logger.base.info('👋 [Catalog Service] Shutdown complete')


# Create FastAPI app using shared factory
app = create_app(lifespan=lifespan)


if __name__ == '__main__':
    uvicorn.run('src.main:app', host='0.0.0.0', port=8000, reload=False)

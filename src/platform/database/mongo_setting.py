"""
MongoDB client management

One AsyncMongoClient (and its connection pool) per process, owned by the DI
container and handed to the repositories at construction time.

Collections:
- products: Product documents, including binary image + thumbnails
- product_images: gallery images, indexed by (product_id, order)
"""

from typing import Any, Optional

from pymongo import ASCENDING, DESCENDING, AsyncMongoClient
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.asynchronous.database import AsyncDatabase

from src.platform.config.core_setting import Settings
from src.platform.logging.loguru_io import Logger


class MongoDatabase:
    def __init__(self, settings: Settings) -> None:
        self._settings = settings
        self._client: Optional[AsyncMongoClient] = None

    @property
    def client(self) -> AsyncMongoClient:
        # AsyncMongoClient connects lazily on first operation
        if self._client is None:
            Logger.base.info(f'🔗 [Mongo] Creating client for database {self._settings.MONGO_DATABASE}')
            self._client = AsyncMongoClient(
                self._settings.MONGO_URL,
                serverSelectionTimeoutMS=self._settings.MONGO_SERVER_SELECTION_TIMEOUT_MS,
                tz_aware=True,
            )
        return self._client

    @property
    def db(self) -> AsyncDatabase:
        return self.client[self._settings.MONGO_DATABASE]

    @property
    def products(self) -> AsyncCollection[dict[str, Any]]:
        return self.db[self._settings.MONGO_PRODUCTS_COLLECTION]

    @property
    def product_images(self) -> AsyncCollection[dict[str, Any]]:
        return self.db[self._settings.MONGO_PRODUCT_IMAGES_COLLECTION]

    async def ping(self) -> None:
        await self.client.admin.command('ping')

    async def ensure_indexes(self) -> None:
        """Create the indexes the query paths rely on (idempotent)."""
        await self.products.create_index([('created_at', DESCENDING)])
        await self.products.create_index([('price', ASCENDING)])
        await self.products.create_index([('name', ASCENDING)])
        await self.product_images.create_index([('product_id', ASCENDING), ('order', ASCENDING)])
        Logger.base.info('🗂️  [Mongo] Indexes ensured')

    async def close(self) -> None:
        if self._client is not None:
            await self._client.close()
            self._client = None
            Logger.base.info('🔌 [Mongo] Client closed')

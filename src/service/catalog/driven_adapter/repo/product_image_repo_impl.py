from typing import Any, Dict, List, Optional

from pymongo import ASCENDING, DESCENDING, UpdateOne
from pymongo.asynchronous.collection import AsyncCollection

from src.platform.logging.loguru_io import Logger
from src.service.catalog.app.interface.i_product_image_repo import IProductImageRepo
from src.service.catalog.domain.entity.product_image_entity import ProductImageEntity
from src.service.catalog.domain.value_object.thumbnail import Thumbnail, ThumbnailSize
from src.service.catalog.driven_adapter.repo.mongo_document import (
    from_binary,
    thumbnails_from_document,
    thumbnails_to_fields,
    to_binary,
    to_object_id,
)


class ProductImageRepoImpl(IProductImageRepo):
    def __init__(self, collection: AsyncCollection) -> None:
        self.collection = collection

    @Logger.io
    async def create(self, *, image: ProductImageEntity) -> ProductImageEntity:
        result = await self.collection.insert_one(
            {
                'product_id': image.product_id,
                'order': image.order,
                'image': to_binary(image.image),
                'image_content_type': image.image_content_type,
                'created_at': image.created_at,
                **thumbnails_to_fields(image.thumbnails),
            }
        )
        image.id = str(result.inserted_id)
        return image

    @Logger.io
    async def get_by_id(self, *, image_id: str) -> Optional[ProductImageEntity]:
        object_id = to_object_id(image_id)
        if object_id is None:
            return None

        document = await self.collection.find_one({'_id': object_id})
        if document is None:
            return None

        return self._document_to_entity(document)

    @Logger.io
    async def list_by_product(self, *, product_id: str) -> List[ProductImageEntity]:
        cursor = self.collection.find({'product_id': product_id}).sort(
            [('order', ASCENDING), ('_id', ASCENDING)]
        )
        return [self._document_to_entity(document) async for document in cursor]

    @Logger.io
    async def next_order(self, *, product_id: str) -> int:
        # Deletes leave gaps, so the image count is not a free rank
        document = await self.collection.find_one(
            {'product_id': product_id}, {'order': 1}, sort=[('order', DESCENDING)]
        )
        return 0 if document is None else document['order'] + 1

    @Logger.io
    async def save_thumbnails(
        self, *, image_id: str, thumbnails: Dict[ThumbnailSize, Thumbnail]
    ) -> None:
        object_id = to_object_id(image_id)
        if object_id is None or not thumbnails:
            return

        await self.collection.update_one(
            {'_id': object_id}, {'$set': thumbnails_to_fields(thumbnails)}
        )

    @Logger.io
    async def update_orders(self, *, product_id: str, ordered_image_ids: List[str]) -> None:
        operations = [
            UpdateOne({'_id': object_id, 'product_id': product_id}, {'$set': {'order': index}})
            for index, object_id in enumerate(to_object_id(i) for i in ordered_image_ids)
            if object_id is not None
        ]
        if not operations:
            return

        # Not transactional: a concurrent reader may observe a partial reorder
        await self.collection.bulk_write(operations, ordered=False)

    @Logger.io
    async def delete(self, *, image_id: str) -> bool:
        object_id = to_object_id(image_id)
        if object_id is None:
            return False

        result = await self.collection.delete_one({'_id': object_id})
        return result.deleted_count == 1

    @Logger.io
    async def delete_by_product(self, *, product_id: str) -> int:
        result = await self.collection.delete_many({'product_id': product_id})
        return result.deleted_count

    def _document_to_entity(self, document: Dict[str, Any]) -> ProductImageEntity:
        return ProductImageEntity(
            id=str(document['_id']),
            product_id=document['product_id'],
            image=from_binary(document.get('image')) or b'',
            image_content_type=document.get('image_content_type') or 'image/png',
            order=document.get('order', 0),
            thumbnails=thumbnails_from_document(document),
            created_at=document.get('created_at'),
        )

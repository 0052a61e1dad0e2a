import re
from typing import Any, Dict, List, Optional

from pymongo import ASCENDING, DESCENDING
from pymongo.asynchronous.collection import AsyncCollection

from src.platform.logging.loguru_io import Logger
from src.service.catalog.app.dto.product_query import ProductFilter
from src.service.catalog.app.interface.i_product_repo import IProductRepo
from src.service.catalog.domain.entity.product_entity import ProductEntity
from src.service.catalog.domain.enum.product_sort import ProductSort
from src.service.catalog.domain.value_object.thumbnail import Thumbnail, ThumbnailSize
from src.service.catalog.driven_adapter.repo.mongo_document import (
    empty_thumbnail_fields,
    from_binary,
    from_decimal128,
    thumbnails_from_document,
    thumbnails_to_fields,
    to_binary,
    to_decimal128,
    to_object_id,
)


def build_product_filter(product_filter: ProductFilter) -> Dict[str, Any]:
    """
    search -> case-insensitive literal substring on name OR description
    name   -> exact, case-sensitive equality on name
    """
    clauses: List[Dict[str, Any]] = []

    if product_filter.search is not None:
        pattern = re.escape(product_filter.search)
        clauses.append(
            {
                '$or': [
                    {'name': {'$regex': pattern, '$options': 'i'}},
                    {'description': {'$regex': pattern, '$options': 'i'}},
                ]
            }
        )

    if product_filter.name is not None:
        clauses.append({'name': product_filter.name})

    if not clauses:
        return {}
    if len(clauses) == 1:
        return clauses[0]
    return {'$and': clauses}


def build_product_sort(sort: ProductSort) -> List[tuple]:
    if sort is ProductSort.PRICE_ASC:
        return [('price', ASCENDING), ('_id', ASCENDING)]
    if sort is ProductSort.PRICE_DESC:
        return [('price', DESCENDING), ('_id', DESCENDING)]
    return [('created_at', DESCENDING), ('_id', DESCENDING)]


class ProductRepoImpl(IProductRepo):
    def __init__(self, collection: AsyncCollection) -> None:
        self.collection = collection

    @Logger.io
    async def create(self, *, product: ProductEntity) -> ProductEntity:
        document = self._entity_to_document(product)
        result = await self.collection.insert_one(document)
        product.id = str(result.inserted_id)
        return product

    @Logger.io
    async def get_by_id(self, *, product_id: str) -> Optional[ProductEntity]:
        object_id = to_object_id(product_id)
        if object_id is None:
            return None

        document = await self.collection.find_one({'_id': object_id})
        if document is None:
            return None

        return self._document_to_entity(document)

    @Logger.io
    async def list_all(self) -> List[ProductEntity]:
        cursor = self.collection.find({}).sort(build_product_sort(ProductSort.NEWEST))
        return [self._document_to_entity(document) async for document in cursor]

    @Logger.io
    async def update(self, *, product: ProductEntity) -> bool:
        object_id = to_object_id(product.id)
        if object_id is None:
            return False

        fields = {
            'name': product.name,
            'description': product.description,
            'price': to_decimal128(product.price),
            'image': to_binary(product.image),
            'image_content_type': product.image_content_type,
            **empty_thumbnail_fields(),
            **thumbnails_to_fields(product.thumbnails),
        }
        result = await self.collection.update_one({'_id': object_id}, {'$set': fields})
        return result.matched_count == 1

    @Logger.io
    async def delete(self, *, product_id: str) -> bool:
        object_id = to_object_id(product_id)
        if object_id is None:
            return False

        result = await self.collection.delete_one({'_id': object_id})
        return result.deleted_count == 1

    @Logger.io
    async def find(
        self,
        *,
        product_filter: ProductFilter,
        sort: Optional[ProductSort] = None,
        skip: int = 0,
        limit: Optional[int] = None,
    ) -> List[ProductEntity]:
        cursor = self.collection.find(build_product_filter(product_filter))
        if sort is not None:
            cursor = cursor.sort(build_product_sort(sort))
        if skip:
            cursor = cursor.skip(skip)
        if limit is not None:
            cursor = cursor.limit(limit)
        return [self._document_to_entity(document) async for document in cursor]

    @Logger.io
    async def count(self, *, product_filter: ProductFilter) -> int:
        return await self.collection.count_documents(build_product_filter(product_filter))

    @Logger.io
    async def distinct_names(self) -> List[str]:
        names = await self.collection.distinct('name')
        return sorted(name for name in names if isinstance(name, str))

    @Logger.io
    async def save_thumbnails(
        self, *, product_id: str, thumbnails: Dict[ThumbnailSize, Thumbnail]
    ) -> None:
        object_id = to_object_id(product_id)
        if object_id is None or not thumbnails:
            return

        await self.collection.update_one(
            {'_id': object_id}, {'$set': thumbnails_to_fields(thumbnails)}
        )

    @Logger.io
    async def set_cover_image(self, *, product_id: str, image_id: Optional[str]) -> bool:
        object_id = to_object_id(product_id)
        if object_id is None:
            return False

        result = await self.collection.update_one(
            {'_id': object_id}, {'$set': {'cover_image_id': image_id}}
        )
        return result.matched_count == 1

    @Logger.io
    async def replace_cover_image(
        self, *, product_id: str, expected_image_id: Optional[str], image_id: Optional[str]
    ) -> bool:
        object_id = to_object_id(product_id)
        if object_id is None:
            return False

        # {'cover_image_id': None} also matches documents without the field
        result = await self.collection.update_one(
            {'_id': object_id, 'cover_image_id': expected_image_id},
            {'$set': {'cover_image_id': image_id}},
        )
        return result.matched_count == 1

    def _entity_to_document(self, product: ProductEntity) -> Dict[str, Any]:
        return {
            'name': product.name,
            'description': product.description,
            'price': to_decimal128(product.price),
            'created_at': product.created_at,
            'image': to_binary(product.image),
            'image_content_type': product.image_content_type,
            'cover_image_id': product.cover_image_id,
            **thumbnails_to_fields(product.thumbnails),
        }

    def _document_to_entity(self, document: Dict[str, Any]) -> ProductEntity:
        return ProductEntity(
            id=str(document['_id']),
            name=document['name'],
            description=document.get('description') or '',
            price=from_decimal128(document.get('price', 0)),
            created_at=document.get('created_at'),
            image=from_binary(document.get('image')),
            image_content_type=document.get('image_content_type'),
            thumbnails=thumbnails_from_document(document),
            cover_image_id=document.get('cover_image_id'),
        )

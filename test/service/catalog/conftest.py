"""
Catalog test fixtures

In-memory implementations of the repository interfaces. They mirror the
MongoDB adapters closely enough for use case and API tests: ids are assigned
on insert, lookups with unknown ids return None, and stored entities are
copied so callers cannot mutate the "database" by accident.
"""

from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from decimal import Decimal
import itertools
from typing import Dict, List, Optional

import attrs
import pytest

from src.service.catalog.app.dto.product_query import ProductFilter
from src.service.catalog.app.interface.i_product_image_repo import IProductImageRepo
from src.service.catalog.app.interface.i_product_repo import IProductRepo
from src.service.catalog.app.service.thumbnail_service import ThumbnailService
from src.service.catalog.domain.entity.product_entity import ProductEntity
from src.service.catalog.domain.entity.product_image_entity import ProductImageEntity
from src.service.catalog.domain.enum.product_sort import ProductSort
from src.service.catalog.domain.value_object.thumbnail import Thumbnail, ThumbnailSize
from src.service.catalog.driven_adapter.image.pillow_thumbnail_generator import (
    PillowThumbnailGenerator,
)


def _matches(product: ProductEntity, product_filter: ProductFilter) -> bool:
    if product_filter.search is not None:
        needle = product_filter.search.lower()
        if needle not in product.name.lower() and needle not in product.description.lower():
            return False
    if product_filter.name is not None and product.name != product_filter.name:
        return False
    return True


class InMemoryProductRepo(IProductRepo):
    def __init__(self) -> None:
        self.products: Dict[str, ProductEntity] = {}
        self._ids = itertools.count(1)

    async def create(self, *, product: ProductEntity) -> ProductEntity:
        product.id = f'p{next(self._ids):04d}'
        self.products[product.id] = attrs.evolve(product)
        return product

    async def get_by_id(self, *, product_id: str) -> Optional[ProductEntity]:
        stored = self.products.get(product_id)
        return attrs.evolve(stored) if stored else None

    async def list_all(self) -> List[ProductEntity]:
        return await self.find(product_filter=ProductFilter(), sort=ProductSort.NEWEST)

    async def update(self, *, product: ProductEntity) -> bool:
        if product.id not in self.products:
            return False
        stored = self.products[product.id]
        self.products[product.id] = attrs.evolve(product, cover_image_id=stored.cover_image_id)
        return True

    async def delete(self, *, product_id: str) -> bool:
        return self.products.pop(product_id, None) is not None

    async def find(
        self,
        *,
        product_filter: ProductFilter,
        sort: Optional[ProductSort] = None,
        skip: int = 0,
        limit: Optional[int] = None,
    ) -> List[ProductEntity]:
        matches = [attrs.evolve(p) for p in self.products.values() if _matches(p, product_filter)]
        if sort in (ProductSort.PRICE_ASC, ProductSort.PRICE_DESC):
            matches.sort(key=lambda p: p.price, reverse=sort is ProductSort.PRICE_DESC)
        elif sort is not None:
            matches.sort(key=lambda p: (p.created_at, p.id), reverse=True)
        end = None if limit is None else skip + limit
        return matches[skip:end]

    async def count(self, *, product_filter: ProductFilter) -> int:
        return sum(1 for p in self.products.values() if _matches(p, product_filter))

    async def distinct_names(self) -> List[str]:
        return list({p.name for p in self.products.values()})

    async def save_thumbnails(
        self, *, product_id: str, thumbnails: Dict[ThumbnailSize, Thumbnail]
    ) -> None:
        stored = self.products[product_id]
        stored.thumbnails = {**stored.thumbnails, **thumbnails}

    async def set_cover_image(self, *, product_id: str, image_id: Optional[str]) -> bool:
        if product_id not in self.products:
            return False
        self.products[product_id].cover_image_id = image_id
        return True

    async def replace_cover_image(
        self, *, product_id: str, expected_image_id: Optional[str], image_id: Optional[str]
    ) -> bool:
        stored = self.products.get(product_id)
        if stored is None or stored.cover_image_id != expected_image_id:
            return False
        stored.cover_image_id = image_id
        return True


class InMemoryProductImageRepo(IProductImageRepo):
    def __init__(self) -> None:
        self.images: Dict[str, ProductImageEntity] = {}
        self._ids = itertools.count(1)

    async def create(self, *, image: ProductImageEntity) -> ProductImageEntity:
        image.id = f'i{next(self._ids):04d}'
        self.images[image.id] = attrs.evolve(image)
        return image

    async def get_by_id(self, *, image_id: str) -> Optional[ProductImageEntity]:
        stored = self.images.get(image_id)
        return attrs.evolve(stored) if stored else None

    async def list_by_product(self, *, product_id: str) -> List[ProductImageEntity]:
        owned = [attrs.evolve(i) for i in self.images.values() if i.product_id == product_id]
        return sorted(owned, key=lambda i: (i.order, i.id))

    async def next_order(self, *, product_id: str) -> int:
        orders = [i.order for i in self.images.values() if i.product_id == product_id]
        return max(orders) + 1 if orders else 0

    async def save_thumbnails(
        self, *, image_id: str, thumbnails: Dict[ThumbnailSize, Thumbnail]
    ) -> None:
        stored = self.images[image_id]
        stored.thumbnails = {**stored.thumbnails, **thumbnails}

    async def update_orders(self, *, product_id: str, ordered_image_ids: List[str]) -> None:
        for index, image_id in enumerate(ordered_image_ids):
            stored = self.images.get(image_id)
            if stored is not None and stored.product_id == product_id:
                stored.order = index

    async def delete(self, *, image_id: str) -> bool:
        return self.images.pop(image_id, None) is not None

    async def delete_by_product(self, *, product_id: str) -> int:
        owned = [i for i, image in self.images.items() if image.product_id == product_id]
        for image_id in owned:
            del self.images[image_id]
        return len(owned)


@pytest.fixture
def product_repo() -> InMemoryProductRepo:
    return InMemoryProductRepo()


@pytest.fixture
def product_image_repo() -> InMemoryProductImageRepo:
    return InMemoryProductImageRepo()


@pytest.fixture
def thumbnail_service(
    product_repo: InMemoryProductRepo, product_image_repo: InMemoryProductImageRepo
) -> ThumbnailService:
    return ThumbnailService(
        thumbnail_generator=PillowThumbnailGenerator(quality=85),
        product_repo=product_repo,
        product_image_repo=product_image_repo,
    )


@pytest.fixture
def seed_product(product_repo: InMemoryProductRepo) -> Callable:
    """Insert a product directly; created_at increases with every call."""
    base_time = datetime(2025, 1, 1, tzinfo=timezone.utc)
    counter = itertools.count()

    async def _seed(
        name: str,
        *,
        price: str = '10.00',
        description: str = '',
        image: Optional[bytes] = None,
        image_content_type: Optional[str] = None,
    ) -> ProductEntity:
        product = ProductEntity.create(
            name=name,
            description=description,
            price=Decimal(price),
            image=image,
            image_content_type=image_content_type,
            created_at=base_time + timedelta(minutes=next(counter)),
        )
        return await product_repo.create(product=product)

    return _seed

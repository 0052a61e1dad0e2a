"""
Product Repository Interface

Document-store contract for Product records. The store assigns ids on insert
and enforces no schema; entity invariants are upheld by the callers.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from src.service.catalog.app.dto.product_query import ProductFilter
from src.service.catalog.domain.entity.product_entity import ProductEntity
from src.service.catalog.domain.enum.product_sort import ProductSort
from src.service.catalog.domain.value_object.thumbnail import Thumbnail, ThumbnailSize


class IProductRepo(ABC):
    @abstractmethod
    async def create(self, *, product: ProductEntity) -> ProductEntity:
        """Insert and return the product with its store-assigned id."""
        pass

    @abstractmethod
    async def get_by_id(self, *, product_id: str) -> Optional[ProductEntity]:
        """None for unknown or malformed ids."""
        pass

    @abstractmethod
    async def list_all(self) -> List[ProductEntity]:
        """Every product, newest first."""
        pass

    @abstractmethod
    async def update(self, *, product: ProductEntity) -> bool:
        """Replace the mutable fields (text, price, image, thumbnails). False if gone."""
        pass

    @abstractmethod
    async def delete(self, *, product_id: str) -> bool:
        pass

    @abstractmethod
    async def find(
        self,
        *,
        product_filter: ProductFilter,
        sort: Optional[ProductSort] = None,
        skip: int = 0,
        limit: Optional[int] = None,
    ) -> List[ProductEntity]:
        """Matching products; sorted by the store when sort is given, else store order."""
        pass

    @abstractmethod
    async def count(self, *, product_filter: ProductFilter) -> int:
        pass

    @abstractmethod
    async def distinct_names(self) -> List[str]:
        pass

    @abstractmethod
    async def save_thumbnails(
        self, *, product_id: str, thumbnails: Dict[ThumbnailSize, Thumbnail]
    ) -> None:
        """Store the given thumbnails, leaving the others untouched."""
        pass

    @abstractmethod
    async def set_cover_image(self, *, product_id: str, image_id: Optional[str]) -> bool:
        """Unconditionally point the product's cover at image_id (single-document write)."""
        pass

    @abstractmethod
    async def replace_cover_image(
        self, *, product_id: str, expected_image_id: Optional[str], image_id: Optional[str]
    ) -> bool:
        """Compare-and-set on the cover reference; False when the current value differs."""
        pass

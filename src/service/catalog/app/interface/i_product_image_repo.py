from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from src.service.catalog.domain.entity.product_image_entity import ProductImageEntity
from src.service.catalog.domain.value_object.thumbnail import Thumbnail, ThumbnailSize


class IProductImageRepo(ABC):
    """Gallery image storage; is_cover is not persisted here (see ProductEntity.cover_image_id)"""

    @abstractmethod
    async def create(self, *, image: ProductImageEntity) -> ProductImageEntity:
        pass

    @abstractmethod
    async def get_by_id(self, *, image_id: str) -> Optional[ProductImageEntity]:
        pass

    @abstractmethod
    async def list_by_product(self, *, product_id: str) -> List[ProductImageEntity]:
        """Images of a product ordered by their display rank."""
        pass

    @abstractmethod
    async def next_order(self, *, product_id: str) -> int:
        """Rank after the highest one in use (0 for an empty gallery)."""
        pass

    @abstractmethod
    async def save_thumbnails(
        self, *, image_id: str, thumbnails: Dict[ThumbnailSize, Thumbnail]
    ) -> None:
        pass

    @abstractmethod
    async def update_orders(self, *, product_id: str, ordered_image_ids: List[str]) -> None:
        """Set order = position in ordered_image_ids for images of this product."""
        pass

    @abstractmethod
    async def delete(self, *, image_id: str) -> bool:
        pass

    @abstractmethod
    async def delete_by_product(self, *, product_id: str) -> int:
        pass

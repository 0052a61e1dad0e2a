from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional

import attrs

from src.service.catalog.domain.value_object.thumbnail import (
    Thumbnail,
    ThumbnailSize,
    missing_thumbnail_sizes,
)


@attrs.define
class ProductImageEntity:
    product_id: str
    image: bytes = attrs.field(repr=lambda value: f'<{len(value)} bytes>')
    image_content_type: str = 'image/png'
    order: int = 0
    # Derived from ProductEntity.cover_image_id when read, never persisted
    is_cover: bool = False
    thumbnails: Dict[ThumbnailSize, Thumbnail] = attrs.field(factory=dict)
    id: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def create(
        cls,
        *,
        product_id: str,
        image: bytes,
        image_content_type: str,
        order: int,
        thumbnails: Dict[ThumbnailSize, Thumbnail],
    ) -> 'ProductImageEntity':
        return cls(
            product_id=product_id,
            image=image,
            image_content_type=image_content_type,
            order=order,
            thumbnails=thumbnails,
            created_at=datetime.now(timezone.utc),
        )

    def missing_thumbnails(self) -> List[ThumbnailSize]:
        return missing_thumbnail_sizes(self.image, self.thumbnails)


def mark_cover(
    images: Iterable[ProductImageEntity], cover_image_id: Optional[str]
) -> List[ProductImageEntity]:
    """Set is_cover on each image from the product's single cover reference."""
    marked = []
    for image in images:
        image.is_cover = cover_image_id is not None and image.id == cover_image_id
        marked.append(image)
    return marked

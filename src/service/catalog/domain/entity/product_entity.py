from datetime import datetime, timezone
from decimal import Decimal
from typing import Dict, List, Optional

import attrs

from src.platform.exception.exceptions import DomainError
from src.service.catalog.domain.value_object.thumbnail import (
    Thumbnail,
    ThumbnailSize,
    missing_thumbnail_sizes,
)


def _validate_name(instance: object, attribute: attrs.Attribute, value: str) -> None:
    if not isinstance(value, str) or not value.strip():
        raise DomainError('Product name is required')


def _validate_price(instance: object, attribute: attrs.Attribute, value: Decimal) -> None:
    if not isinstance(value, Decimal):
        raise DomainError('Price must be a decimal amount')
    if value < 0:
        raise DomainError('Price must be non-negative')


def _binary_repr(value: Optional[bytes]) -> str:
    return 'None' if value is None else f'<{len(value)} bytes>'


@attrs.define
class ProductEntity:
    name: str = attrs.field(validator=_validate_name)
    price: Decimal = attrs.field(validator=_validate_price)
    description: str = attrs.field(default='', converter=lambda v: v or '')
    id: Optional[str] = None
    created_at: Optional[datetime] = None
    image: Optional[bytes] = attrs.field(default=None, repr=_binary_repr)
    image_content_type: Optional[str] = None
    thumbnails: Dict[ThumbnailSize, Thumbnail] = attrs.field(factory=dict)
    cover_image_id: Optional[str] = None

    @classmethod
    def create(
        cls,
        *,
        name: str,
        description: str,
        price: Decimal,
        image: Optional[bytes] = None,
        image_content_type: Optional[str] = None,
        created_at: Optional[datetime] = None,
    ) -> 'ProductEntity':
        return cls(
            name=name,
            description=description,
            price=price,
            image=image or None,
            image_content_type=image_content_type if image else None,
            created_at=created_at or datetime.now(timezone.utc),
        )

    def replace_details(self, *, name: str, description: str, price: Decimal) -> None:
        """Full replace of the mutable text fields; id and created_at never change."""
        _validate_name(self, attrs.fields(ProductEntity).name, name)
        _validate_price(self, attrs.fields(ProductEntity).price, price)
        self.name = name
        self.description = description or ''
        self.price = price

    def replace_image(self, *, image: bytes, content_type: str) -> None:
        # Thumbnails of the previous image no longer apply
        self.image = image
        self.image_content_type = content_type
        self.thumbnails = {}

    def missing_thumbnails(self) -> List[ThumbnailSize]:
        return missing_thumbnail_sizes(self.image, self.thumbnails)

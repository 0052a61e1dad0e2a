import base64
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, field_serializer

from src.service.catalog.domain.entity.product_entity import ProductEntity
from src.service.catalog.domain.entity.product_image_entity import ProductImageEntity
from src.service.catalog.domain.value_object.thumbnail import Thumbnail, ThumbnailSize


def encode_binary(data: Optional[bytes]) -> Optional[str]:
    return base64.b64encode(data).decode('ascii') if data else None


class ProductResponse(BaseModel):
    id: str
    name: str
    description: str
    price: Decimal
    created_at: Optional[datetime] = None
    image: Optional[str] = None  # base64
    image_content_type: Optional[str] = None
    thumbnail_card: Optional[str] = None
    thumbnail_card_content_type: Optional[str] = None
    thumbnail_detail: Optional[str] = None
    thumbnail_detail_content_type: Optional[str] = None
    thumbnail_slider: Optional[str] = None
    thumbnail_slider_content_type: Optional[str] = None
    cover_image_id: Optional[str] = None

    class Config:
        json_schema_extra = {
            'example': {
                'id': '665f1c2e9b1e8a3d4c5b6a79',
                'name': 'Articulated Dragon',
                'description': 'PLA print, 30 cm, fully articulated',
                'price': '24.90',
                'created_at': '2025-06-04T10:15:00Z',
                'image': 'iVBORw0KGgoAAAANSUhEUgAA...',
                'image_content_type': 'image/png',
                'thumbnail_card': 'iVBORw0KGgoAAAANSUhEUgAA...',
                'thumbnail_card_content_type': 'image/png',
                'thumbnail_detail': None,
                'thumbnail_detail_content_type': None,
                'thumbnail_slider': None,
                'thumbnail_slider_content_type': None,
                'cover_image_id': None,
            }
        }

    @field_serializer('price')
    def serialize_price(self, price: Decimal) -> str:
        # Sent as text with exactly two fractional digits
        return f'{price:.2f}'

    @classmethod
    def from_entity(cls, product: ProductEntity) -> 'ProductResponse':
        return cls(
            id=product.id or '',
            name=product.name,
            description=product.description,
            price=product.price,
            created_at=product.created_at,
            image=encode_binary(product.image),
            image_content_type=product.image_content_type,
            cover_image_id=product.cover_image_id,
            **_thumbnail_fields(product.thumbnails),
        )


class ProductImageResponse(BaseModel):
    id: str
    product_id: str
    order: int
    is_cover: bool
    image: str  # base64
    image_content_type: str
    thumbnail_card: Optional[str] = None
    thumbnail_card_content_type: Optional[str] = None
    thumbnail_detail: Optional[str] = None
    thumbnail_detail_content_type: Optional[str] = None
    thumbnail_slider: Optional[str] = None
    thumbnail_slider_content_type: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, image: ProductImageEntity) -> 'ProductImageResponse':
        return cls(
            id=image.id or '',
            product_id=image.product_id,
            order=image.order,
            is_cover=image.is_cover,
            image=encode_binary(image.image) or '',
            image_content_type=image.image_content_type,
            created_at=image.created_at,
            **_thumbnail_fields(image.thumbnails),
        )


class ProductPageResponse(BaseModel):
    items: List[ProductResponse]
    total: int
    page: int
    page_size: int


class ReorderImagesRequest(BaseModel):
    image_ids: List[str]

    class Config:
        json_schema_extra = {
            'example': {
                'image_ids': ['665f1c2e9b1e8a3d4c5b6a7b', '665f1c2e9b1e8a3d4c5b6a7a'],
            }
        }


def _thumbnail_fields(thumbnails: dict[ThumbnailSize, Thumbnail]) -> dict[str, Optional[str]]:
    fields: dict[str, Optional[str]] = {}
    for size, thumbnail in thumbnails.items():
        fields[size.field_name] = encode_binary(thumbnail.data)
        fields[f'{size.field_name}_content_type'] = thumbnail.content_type
    return fields

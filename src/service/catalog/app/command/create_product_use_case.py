"""
Create Product Use Case

Price arrives as free-form text and is parsed here, not by the HTTP layer.
When the uploaded image cannot be decoded the product is still stored with
the original bytes; the read path generates thumbnails later.
"""

from decimal import Decimal
from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import DomainError
from src.platform.logging.loguru_io import Logger
from src.service.catalog.app.dto.image_upload import ImageUpload
from src.service.catalog.app.interface.i_product_repo import IProductRepo
from src.service.catalog.app.service.thumbnail_service import ThumbnailService
from src.service.catalog.domain.entity.product_entity import ProductEntity
from src.service.catalog.domain.image_policy import PRODUCT_IMAGE_POLICY
from src.service.catalog.domain.price_parser import try_parse_price


def parse_price_or_raise(raw_price: Optional[str]) -> Decimal:
    price = try_parse_price(raw_price)
    if price is None:
        raise DomainError('Invalid price')
    return price


def ensure_product_image_allowed(image: ImageUpload) -> None:
    if not PRODUCT_IMAGE_POLICY.allows(content_type=image.content_type, filename=image.filename):
        raise DomainError('Image must be a PNG or JPEG file')


class CreateProductUseCase:
    def __init__(self, product_repo: IProductRepo, thumbnail_service: ThumbnailService) -> None:
        self.product_repo = product_repo
        self.thumbnail_service = thumbnail_service

    @classmethod
    @inject
    def depends(
        cls,
        product_repo: IProductRepo = Depends(Provide[Container.product_repo]),
        thumbnail_service: ThumbnailService = Depends(Provide[Container.thumbnail_service]),
    ) -> Self:
        return cls(product_repo=product_repo, thumbnail_service=thumbnail_service)

    @Logger.io
    async def create(
        self,
        *,
        name: str,
        description: Optional[str],
        price: Optional[str],
        image: Optional[ImageUpload] = None,
    ) -> ProductEntity:
        parsed_price = parse_price_or_raise(price)
        if image is not None:
            ensure_product_image_allowed(image)

        product = ProductEntity.create(
            name=name,
            description=description or '',
            price=parsed_price,
            image=image.data if image else None,
            image_content_type=image.content_type if image else None,
        )

        if product.image:
            product.thumbnails = await self.thumbnail_service.generate_or_empty(
                image=product.image, content_type=product.image_content_type, context='write'
            )

        created = await self.product_repo.create(product=product)
        Logger.base.info(f'✅ [CREATE_PRODUCT] Created product {created.id}')
        return created

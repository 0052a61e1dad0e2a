from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.catalog.app.command.create_product_use_case import (
    ensure_product_image_allowed,
    parse_price_or_raise,
)
from src.service.catalog.app.dto.image_upload import ImageUpload
from src.service.catalog.app.interface.i_product_repo import IProductRepo
from src.service.catalog.app.service.thumbnail_service import ThumbnailService
from src.service.catalog.domain.entity.product_entity import ProductEntity


class UpdateProductUseCase:
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
    async def update(
        self,
        *,
        product_id: str,
        name: str,
        description: Optional[str],
        price: Optional[str],
        image: Optional[ImageUpload] = None,
    ) -> ProductEntity:
        """
        Full replace of name, description and price. The image is replaced only
        when a new one is sent; otherwise the stored image and thumbnails stay.
        """
        parsed_price = parse_price_or_raise(price)
        if image is not None:
            ensure_product_image_allowed(image)

        product = await self.product_repo.get_by_id(product_id=product_id)
        if product is None:
            raise NotFoundError('Product not found')

        product.replace_details(name=name, description=description or '', price=parsed_price)

        if image is not None:
            product.replace_image(image=image.data, content_type=image.content_type)
            product.thumbnails = await self.thumbnail_service.generate_or_empty(
                image=image.data, content_type=image.content_type, context='write'
            )

        if not await self.product_repo.update(product=product):
            raise NotFoundError('Product not found')

        Logger.base.info(f'✅ [UPDATE_PRODUCT] Updated product {product_id}')
        return product

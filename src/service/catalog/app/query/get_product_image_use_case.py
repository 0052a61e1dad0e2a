from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.catalog.app.interface.i_product_image_repo import IProductImageRepo
from src.service.catalog.app.interface.i_product_repo import IProductRepo
from src.service.catalog.app.service.thumbnail_service import ThumbnailService
from src.service.catalog.domain.entity.product_image_entity import ProductImageEntity


class GetProductImageUseCase:
    def __init__(
        self,
        product_repo: IProductRepo,
        product_image_repo: IProductImageRepo,
        thumbnail_service: ThumbnailService,
    ) -> None:
        self.product_repo = product_repo
        self.product_image_repo = product_image_repo
        self.thumbnail_service = thumbnail_service

    @classmethod
    @inject
    def depends(
        cls,
        product_repo: IProductRepo = Depends(Provide[Container.product_repo]),
        product_image_repo: IProductImageRepo = Depends(Provide[Container.product_image_repo]),
        thumbnail_service: ThumbnailService = Depends(Provide[Container.thumbnail_service]),
    ) -> Self:
        return cls(
            product_repo=product_repo,
            product_image_repo=product_image_repo,
            thumbnail_service=thumbnail_service,
        )

    @Logger.io
    async def get_image(self, *, product_id: str, image_id: str) -> ProductImageEntity:
        """An image is only reachable through the product it belongs to."""
        image = await self.product_image_repo.get_by_id(image_id=image_id)
        if image is None or image.product_id != product_id:
            raise NotFoundError('Image not found')

        product = await self.product_repo.get_by_id(product_id=product_id)
        if product is None:
            raise NotFoundError('Product not found')

        [image] = await self.thumbnail_service.backfill_images([image])
        image.is_cover = image.id == product.cover_image_id
        return image

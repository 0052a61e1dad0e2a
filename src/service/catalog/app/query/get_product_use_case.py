from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.catalog.app.interface.i_product_repo import IProductRepo
from src.service.catalog.app.service.thumbnail_service import ThumbnailService
from src.service.catalog.domain.entity.product_entity import ProductEntity


class GetProductUseCase:
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
    async def get_by_id(self, *, product_id: str) -> ProductEntity:
        product = await self.product_repo.get_by_id(product_id=product_id)
        if product is None:
            raise NotFoundError('Product not found')

        [product] = await self.thumbnail_service.backfill_products([product])
        return product

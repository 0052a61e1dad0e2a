from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.catalog.app.interface.i_product_repo import IProductRepo
from src.service.catalog.app.service.thumbnail_service import ThumbnailService
from src.service.catalog.domain.entity.product_entity import ProductEntity


class ListProductsUseCase:
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
    async def list_all(self) -> List[ProductEntity]:
        """All products, newest first, with any missing thumbnails generated."""
        Logger.base.info('📋 [LIST_PRODUCTS] Loading all products')

        products = await self.product_repo.list_all()
        products = await self.thumbnail_service.backfill_products(products)

        Logger.base.info(f'✅ [LIST_PRODUCTS] Found {len(products)} products')
        return products

from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.catalog.app.interface.i_product_image_repo import IProductImageRepo
from src.service.catalog.app.interface.i_product_repo import IProductRepo


class DeleteProductUseCase:
    def __init__(self, product_repo: IProductRepo, product_image_repo: IProductImageRepo) -> None:
        self.product_repo = product_repo
        self.product_image_repo = product_image_repo

    @classmethod
    @inject
    def depends(
        cls,
        product_repo: IProductRepo = Depends(Provide[Container.product_repo]),
        product_image_repo: IProductImageRepo = Depends(Provide[Container.product_image_repo]),
    ) -> Self:
        return cls(product_repo=product_repo, product_image_repo=product_image_repo)

    @Logger.io
    async def delete(self, *, product_id: str) -> None:
        if not await self.product_repo.delete(product_id=product_id):
            raise NotFoundError('Product not found')

        # Gallery cleanup is best effort; the product is already gone
        removed = await self.product_image_repo.delete_by_product(product_id=product_id)
        Logger.base.info(f'🗑️ [DELETE_PRODUCT] Deleted product {product_id} and {removed} image(s)')

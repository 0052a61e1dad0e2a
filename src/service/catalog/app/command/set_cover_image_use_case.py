from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.catalog.app.interface.i_product_image_repo import IProductImageRepo
from src.service.catalog.app.interface.i_product_repo import IProductRepo


class SetCoverImageUseCase:
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
    async def set_cover(self, *, product_id: str, image_id: str) -> None:
        """Single write on the product, so exactly one image is the cover afterwards."""
        image = await self.product_image_repo.get_by_id(image_id=image_id)
        if image is None or image.product_id != product_id:
            raise NotFoundError('Image not found')

        if not await self.product_repo.set_cover_image(product_id=product_id, image_id=image_id):
            raise NotFoundError('Product not found')

        Logger.base.info(f'⭐ [SET_COVER] Product {product_id} cover is now {image_id}')

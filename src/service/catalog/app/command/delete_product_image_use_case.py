from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.catalog.app.interface.i_product_image_repo import IProductImageRepo
from src.service.catalog.app.interface.i_product_repo import IProductRepo


class DeleteProductImageUseCase:
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
    async def delete(self, *, product_id: str, image_id: str) -> None:
        """Deleting the cover promotes the next image by order, or clears the cover."""
        image = await self.product_image_repo.get_by_id(image_id=image_id)
        if image is None or image.product_id != product_id:
            raise NotFoundError('Image not found')

        product = await self.product_repo.get_by_id(product_id=product_id)
        if product is None:
            raise NotFoundError('Product not found')

        await self.product_image_repo.delete(image_id=image_id)

        if product.cover_image_id == image_id:
            next_cover_id = await self._next_cover_id(product_id=product_id)
            # Only promote if nobody picked another cover meanwhile
            await self.product_repo.replace_cover_image(
                product_id=product_id, expected_image_id=image_id, image_id=next_cover_id
            )
            Logger.base.info(f'⭐ [DELETE_IMAGE] Cover of product {product_id} moved to {next_cover_id}')

        Logger.base.info(f'🗑️ [DELETE_IMAGE] Deleted image {image_id} of product {product_id}')

    async def _next_cover_id(self, *, product_id: str) -> Optional[str]:
        remaining = await self.product_image_repo.list_by_product(product_id=product_id)
        return remaining[0].id if remaining else None

from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import DomainError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.catalog.app.interface.i_product_image_repo import IProductImageRepo
from src.service.catalog.app.interface.i_product_repo import IProductRepo


class ReorderProductImagesUseCase:
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
    async def reorder(self, *, product_id: str, image_ids: List[str]) -> None:
        """
        Set order = position in image_ids.

        Raises:
            NotFoundError: unknown product
            DomainError: duplicate ids, or ids that are not images of this product
        """
        product = await self.product_repo.get_by_id(product_id=product_id)
        if product is None:
            raise NotFoundError('Product not found')

        if len(set(image_ids)) != len(image_ids):
            raise DomainError('Image ids must be unique')

        images = await self.product_image_repo.list_by_product(product_id=product_id)
        known_ids = {image.id for image in images}
        foreign_ids = [image_id for image_id in image_ids if image_id not in known_ids]
        if foreign_ids:
            raise DomainError(f'Images do not belong to this product: {", ".join(foreign_ids)}')

        await self.product_image_repo.update_orders(
            product_id=product_id, ordered_image_ids=image_ids
        )
        Logger.base.info(f'🔀 [REORDER] Reordered {len(image_ids)} image(s) of product {product_id}')

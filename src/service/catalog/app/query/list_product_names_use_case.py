from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.catalog.app.interface.i_product_repo import IProductRepo


class ListProductNamesUseCase:
    def __init__(self, product_repo: IProductRepo) -> None:
        self.product_repo = product_repo

    @classmethod
    @inject
    def depends(
        cls,
        product_repo: IProductRepo = Depends(Provide[Container.product_repo]),
    ) -> Self:
        return cls(product_repo=product_repo)

    @Logger.io
    async def list_names(self) -> List[str]:
        """Distinct product names in ordinal (code point) order."""
        names = await self.product_repo.distinct_names()
        return sorted(set(names))

from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.catalog.app.dto.product_query import ProductPage, ProductQuery
from src.service.catalog.app.interface.i_product_repo import IProductRepo
from src.service.catalog.app.query.product_query_strategy import select_strategy
from src.service.catalog.app.service.thumbnail_service import ThumbnailService


class QueryProductsUseCase:
    def __init__(
        self,
        product_repo: IProductRepo,
        thumbnail_service: ThumbnailService,
        max_page_size: int = 100,
    ) -> None:
        self.product_repo = product_repo
        self.thumbnail_service = thumbnail_service
        self.max_page_size = max_page_size

    @classmethod
    @inject
    def depends(
        cls,
        product_repo: IProductRepo = Depends(Provide[Container.product_repo]),
        thumbnail_service: ThumbnailService = Depends(Provide[Container.thumbnail_service]),
    ) -> Self:
        return cls(
            product_repo=product_repo,
            thumbnail_service=thumbnail_service,
            max_page_size=settings.MAX_PAGE_SIZE,
        )

    @Logger.io
    async def query(
        self,
        *,
        search: Optional[str] = None,
        name_filter: Optional[str] = None,
        sort_by: Optional[str] = None,
        page: int = 1,
        page_size: int = 12,
    ) -> ProductPage:
        """
        Filter, sort and paginate products.

        Out-of-range page/page_size are normalised rather than rejected; a page
        past the end yields no items with the total unchanged.
        """
        query = ProductQuery.create(
            search=search,
            name_filter=name_filter,
            sort_by=sort_by,
            page=page,
            page_size=page_size,
            max_page_size=self.max_page_size,
        )
        strategy = select_strategy(query)
        Logger.base.info(
            f'🔎 [QUERY] sort={query.sort.value} page={query.page} size={query.page_size} '
            f'via {type(strategy).__name__}'
        )

        items, total = await strategy.execute(product_repo=self.product_repo, query=query)
        items = await self.thumbnail_service.backfill_products(items)

        Logger.base.info(f'✅ [QUERY] {len(items)} of {total} product(s)')
        return ProductPage(items=items, total=total, page=query.page, page_size=query.page_size)

"""
Product Query Strategies

The store sorts price and creation date natively. Name sorting must follow
case-insensitive ordinal order (code points of the name upper-cased one
character at a time), which store collations do not guarantee, so
name-sorted queries fetch every match and sort in memory. Both strategies
return (page items, unpaginated total).
"""

from abc import ABC, abstractmethod
from typing import List, Tuple

from src.service.catalog.app.dto.product_query import ProductQuery
from src.service.catalog.app.interface.i_product_repo import IProductRepo
from src.service.catalog.domain.entity.product_entity import ProductEntity


class ProductQueryStrategy(ABC):
    @abstractmethod
    async def execute(
        self, *, product_repo: IProductRepo, query: ProductQuery
    ) -> Tuple[List[ProductEntity], int]:
        pass


class NativeSortStrategy(ProductQueryStrategy):
    async def execute(
        self, *, product_repo: IProductRepo, query: ProductQuery
    ) -> Tuple[List[ProductEntity], int]:
        total = await product_repo.count(product_filter=query.product_filter)
        items = await product_repo.find(
            product_filter=query.product_filter,
            sort=query.sort,
            skip=query.skip,
            limit=query.page_size,
        )
        return items, total


class InMemoryNameSortStrategy(ProductQueryStrategy):
    async def execute(
        self, *, product_repo: IProductRepo, query: ProductQuery
    ) -> Tuple[List[ProductEntity], int]:
        matches = await product_repo.find(product_filter=query.product_filter)
        ordered = sort_by_name(matches, descending=query.sort.descending)
        return ordered[query.skip : query.skip + query.page_size], len(matches)


def ordinal_ignore_case_key(name: str) -> str:
    """
    Upper-case each character on its own, keeping the length unchanged.

    Characters whose upper case expands to several code points ('ß' -> 'SS')
    are left as they are, so the key is compared code point by code point.
    """
    return ''.join(upper if len(upper := char.upper()) == 1 else char for char in name)


def sort_by_name(products: List[ProductEntity], *, descending: bool) -> List[ProductEntity]:
    # Stable: equal names keep store order in both directions
    return sorted(
        products, key=lambda product: ordinal_ignore_case_key(product.name), reverse=descending
    )


def select_strategy(query: ProductQuery) -> ProductQueryStrategy:
    if query.sort.is_name_sort:
        return InMemoryNameSortStrategy()
    return NativeSortStrategy()

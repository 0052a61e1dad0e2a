from typing import List, Optional

import attrs

from src.service.catalog.domain.entity.product_entity import ProductEntity
from src.service.catalog.domain.enum.product_sort import ProductSort


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    return value if value is not None and value.strip() else None


@attrs.frozen
class ProductFilter:
    """search: case-insensitive substring on name OR description; name: exact match"""

    search: Optional[str] = attrs.field(default=None, converter=_blank_to_none)
    name: Optional[str] = attrs.field(default=None, converter=_blank_to_none)


@attrs.frozen
class ProductQuery:
    product_filter: ProductFilter
    sort: ProductSort
    page: int
    page_size: int

    @classmethod
    def create(
        cls,
        *,
        search: Optional[str],
        name_filter: Optional[str],
        sort_by: Optional[str],
        page: int,
        page_size: int,
        max_page_size: int,
    ) -> 'ProductQuery':
        return cls(
            product_filter=ProductFilter(search=search, name=name_filter),
            sort=ProductSort.resolve(sort_by),
            page=max(1, page),
            page_size=min(max(1, page_size), max_page_size),
        )

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.page_size


@attrs.frozen
class ProductPage:
    items: List[ProductEntity]
    total: int
    page: int
    page_size: int

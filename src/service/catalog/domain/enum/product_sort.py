from enum import Enum
from typing import Optional


class ProductSort(Enum):
    """Sort keys accepted by the product query (matched case-insensitively)"""

    NEWEST = 'newest'
    PRICE_ASC = 'price-asc'
    PRICE_DESC = 'price-desc'
    NAME_ASC = 'name-asc'
    NAME_DESC = 'name-desc'

    @classmethod
    def resolve(cls, sort_by: Optional[str]) -> 'ProductSort':
        """Unknown or missing keys fall back to NEWEST."""
        if not sort_by:
            return cls.NEWEST
        try:
            return cls(sort_by.strip().lower())
        except ValueError:
            return cls.NEWEST

    @property
    def is_name_sort(self) -> bool:
        return self in (ProductSort.NAME_ASC, ProductSort.NAME_DESC)

    @property
    def descending(self) -> bool:
        return self in (ProductSort.NEWEST, ProductSort.PRICE_DESC, ProductSort.NAME_DESC)

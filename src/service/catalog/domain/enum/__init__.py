"""Catalog Domain Enums"""

from src.service.catalog.domain.enum.product_sort import ProductSort

__all__ = ['ProductSort']

"""Application layer DTOs"""

from src.service.catalog.app.dto.image_upload import ImageUpload
from src.service.catalog.app.dto.product_query import ProductFilter, ProductPage, ProductQuery

__all__ = [
    'ImageUpload',
    'ProductFilter',
    'ProductPage',
    'ProductQuery',
]

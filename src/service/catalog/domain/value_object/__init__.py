"""Catalog Domain Value Objects"""

from src.service.catalog.domain.value_object.thumbnail import (
    Thumbnail,
    ThumbnailSize,
    missing_thumbnail_sizes,
)

__all__ = ['Thumbnail', 'ThumbnailSize', 'missing_thumbnail_sizes']

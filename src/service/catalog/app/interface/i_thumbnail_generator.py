from abc import ABC, abstractmethod
from typing import Dict, Iterable

from src.service.catalog.domain.value_object.thumbnail import Thumbnail, ThumbnailSize


class IThumbnailGenerator(ABC):
    """Image codec port: decode once, cover-crop to each square size, re-encode."""

    @abstractmethod
    def generate(
        self, *, image: bytes, content_type: str, sizes: Iterable[ThumbnailSize]
    ) -> Dict[ThumbnailSize, Thumbnail]:
        """
        Blocking, CPU-bound. Output format follows content_type
        (jpeg/jpg -> JPEG, webp -> WEBP, anything else -> PNG).

        Raises:
            ImageDecodeError: the payload is not a decodable image
        """
        pass

from enum import Enum
from typing import Dict, List, Optional

import attrs


class ThumbnailSize(Enum):
    """Square thumbnail variants, valued by edge length in pixels"""

    CARD = 220  # product cards and cart
    DETAIL = 512  # detail modal
    SLIDER = 120  # gallery slider strip

    @property
    def field_name(self) -> str:
        return f'thumbnail_{self.name.lower()}'


@attrs.frozen
class Thumbnail:
    data: bytes = attrs.field(repr=lambda value: f'<{len(value)} bytes>')
    content_type: str


def missing_thumbnail_sizes(
    image: Optional[bytes], thumbnails: Dict[ThumbnailSize, Thumbnail]
) -> List[ThumbnailSize]:
    """Sizes still to be generated; empty when there is no source image."""
    if not image:
        return []
    return [size for size in ThumbnailSize if size not in thumbnails]

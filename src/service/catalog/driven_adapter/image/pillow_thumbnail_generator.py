"""
Pillow Thumbnail Generator

Square "cover" thumbnails: scale to fill the target square and crop the
overflow around the centre, never letterbox.
"""

import io
from typing import Dict, Iterable, Tuple

from PIL import Image, ImageOps, UnidentifiedImageError

from src.platform.exception.exceptions import ImageDecodeError
from src.service.catalog.app.interface.i_thumbnail_generator import IThumbnailGenerator
from src.service.catalog.domain.value_object.thumbnail import Thumbnail, ThumbnailSize


# Modes each encoder can write directly; anything else is converted first
_ENCODABLE_MODES = {
    'JPEG': {'L', 'RGB', 'CMYK'},
    'WEBP': {'RGB', 'RGBA'},
    'PNG': {'1', 'L', 'LA', 'I', 'P', 'RGB', 'RGBA'},
}


def resolve_output_format(content_type: str) -> Tuple[str, str]:
    """Pillow format name and MIME type for a declared source content type."""
    hint = (content_type or '').lower()
    if 'jpeg' in hint or 'jpg' in hint:
        return 'JPEG', 'image/jpeg'
    if 'webp' in hint:
        return 'WEBP', 'image/webp'
    return 'PNG', 'image/png'


class PillowThumbnailGenerator(IThumbnailGenerator):
    def __init__(self, *, quality: int = 85) -> None:
        self.quality = quality

    def generate(
        self, *, image: bytes, content_type: str, sizes: Iterable[ThumbnailSize]
    ) -> Dict[ThumbnailSize, Thumbnail]:
        image_format, output_type = resolve_output_format(content_type)
        try:
            with Image.open(io.BytesIO(image)) as source:
                source.load()
                return {
                    size: Thumbnail(
                        data=self._render(source, size.value, image_format),
                        content_type=output_type,
                    )
                    for size in sizes
                }
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
            raise ImageDecodeError(f'Unable to decode image: {e}') from e

    def _render(self, source: Image.Image, edge: int, image_format: str) -> bytes:
        fitted = ImageOps.fit(source, (edge, edge), method=Image.Resampling.LANCZOS)

        if fitted.mode not in _ENCODABLE_MODES[image_format]:
            has_alpha = 'A' in fitted.getbands() or 'transparency' in fitted.info
            keep_alpha = has_alpha and image_format != 'JPEG'
            fitted = fitted.convert('RGBA' if keep_alpha else 'RGB')

        buffer = io.BytesIO()
        if image_format == 'PNG':
            fitted.save(buffer, format=image_format)
        else:
            fitted.save(buffer, format=image_format, quality=self.quality)
        return buffer.getvalue()

"""Upload allow-lists: both the declared MIME type and the file extension must match."""

import os
from typing import FrozenSet, Optional

import attrs


@attrs.frozen
class ImageUploadPolicy:
    content_types: FrozenSet[str]
    extensions: FrozenSet[str]

    def allows(self, *, content_type: Optional[str], filename: Optional[str]) -> bool:
        if not content_type or not filename:
            return False
        if content_type.lower() not in self.content_types:
            return False
        extension = os.path.splitext(filename)[1].lower()
        return extension in self.extensions


# Product main image
PRODUCT_IMAGE_POLICY = ImageUploadPolicy(
    content_types=frozenset({'image/png', 'image/jpeg', 'image/jpg'}),
    extensions=frozenset({'.png', '.jpg', '.jpeg'}),
)

# Gallery images additionally accept WEBP
GALLERY_IMAGE_POLICY = ImageUploadPolicy(
    content_types=frozenset({'image/png', 'image/jpeg', 'image/jpg', 'image/webp'}),
    extensions=frozenset({'.png', '.jpg', '.jpeg', '.webp'}),
)

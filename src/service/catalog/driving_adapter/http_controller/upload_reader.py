from typing import List, Optional

from fastapi import UploadFile

from src.platform.exception.exceptions import DomainError
from src.service.catalog.app.dto.image_upload import ImageUpload


async def read_optional_image(upload: Optional[UploadFile]) -> Optional[ImageUpload]:
    """An omitted or empty file field means 'no image'."""
    if upload is None or not upload.filename:
        return None

    data = await upload.read()
    if not data:
        return None
    return ImageUpload(data=data, content_type=upload.content_type, filename=upload.filename)


async def read_images(uploads: List[UploadFile], *, max_total_bytes: int) -> List[ImageUpload]:
    images = []
    total_bytes = 0
    for upload in uploads:
        data = await upload.read()
        total_bytes += len(data)
        if total_bytes > max_total_bytes:
            raise DomainError('Upload too large', status_code=413)
        images.append(
            ImageUpload(data=data, content_type=upload.content_type, filename=upload.filename)
        )
    return images

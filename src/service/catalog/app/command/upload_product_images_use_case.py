"""
Upload Product Images Use Case

Batch upload into a product's gallery. Files are handled independently: a
file with a disallowed type or an undecodable payload is skipped and the
rest of the batch is still stored.
"""

from typing import List, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import DomainError, ImageDecodeError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.catalog_metrics import metrics
from src.service.catalog.app.dto.image_upload import ImageUpload
from src.service.catalog.app.interface.i_product_image_repo import IProductImageRepo
from src.service.catalog.app.interface.i_product_repo import IProductRepo
from src.service.catalog.app.service.thumbnail_service import ThumbnailService
from src.service.catalog.domain.entity.product_image_entity import ProductImageEntity, mark_cover
from src.service.catalog.domain.image_policy import GALLERY_IMAGE_POLICY


class UploadProductImagesUseCase:
    def __init__(
        self,
        product_repo: IProductRepo,
        product_image_repo: IProductImageRepo,
        thumbnail_service: ThumbnailService,
    ) -> None:
        self.product_repo = product_repo
        self.product_image_repo = product_image_repo
        self.thumbnail_service = thumbnail_service

    @classmethod
    @inject
    def depends(
        cls,
        product_repo: IProductRepo = Depends(Provide[Container.product_repo]),
        product_image_repo: IProductImageRepo = Depends(Provide[Container.product_image_repo]),
        thumbnail_service: ThumbnailService = Depends(Provide[Container.thumbnail_service]),
    ) -> Self:
        return cls(
            product_repo=product_repo,
            product_image_repo=product_image_repo,
            thumbnail_service=thumbnail_service,
        )

    @Logger.io
    async def upload(self, *, product_id: str, files: List[ImageUpload]) -> List[ProductImageEntity]:
        """
        Flow:
        1. Product must exist, at least one file must be sent
        2. Per file: check type, generate thumbnails, store with the next free rank
        3. First stored image becomes the cover when the product has none

        Returns:
            The stored images (possibly empty when every file was skipped)
        """
        product = await self.product_repo.get_by_id(product_id=product_id)
        if product is None:
            raise NotFoundError('Product not found')
        if not files:
            raise DomainError('No images provided')

        start_order = await self.product_image_repo.next_order(product_id=product_id)
        created: List[ProductImageEntity] = []

        for upload in files:
            image = await self._store(
                product_id=product_id, upload=upload, order=start_order + len(created)
            )
            if image is not None:
                created.append(image)

        cover_image_id = product.cover_image_id
        if created and cover_image_id is None:
            cover_image_id = await self._promote_first_cover(
                product_id=product_id, image_id=created[0].id
            )

        Logger.base.info(
            f'✅ [UPLOAD_IMAGES] Stored {len(created)}/{len(files)} image(s) for product {product_id}'
        )
        return mark_cover(created, cover_image_id)

    async def _store(
        self, *, product_id: str, upload: ImageUpload, order: int
    ) -> Optional[ProductImageEntity]:
        if not GALLERY_IMAGE_POLICY.allows(content_type=upload.content_type, filename=upload.filename):
            Logger.base.warning(
                f'⚠️ [UPLOAD_IMAGES] Skipping {upload.filename!r}: type {upload.content_type!r} not allowed'
            )
            metrics.record_gallery_skip(reason='disallowed_type')
            return None

        try:
            thumbnails = await self.thumbnail_service.generate(
                image=upload.data, content_type=upload.content_type, context='upload'
            )
        except ImageDecodeError as e:
            Logger.base.warning(f'⚠️ [UPLOAD_IMAGES] Skipping {upload.filename!r}: {e.message}')
            metrics.record_gallery_skip(reason='decode_error')
            return None

        return await self.product_image_repo.create(
            image=ProductImageEntity.create(
                product_id=product_id,
                image=upload.data,
                image_content_type=upload.content_type,
                order=order,
                thumbnails=thumbnails,
            )
        )

    async def _promote_first_cover(self, *, product_id: str, image_id: str) -> Optional[str]:
        promoted = await self.product_repo.replace_cover_image(
            product_id=product_id, expected_image_id=None, image_id=image_id
        )
        if promoted:
            return image_id

        # A concurrent request set a cover first; report whatever won
        product = await self.product_repo.get_by_id(product_id=product_id)
        return product.cover_image_id if product else None

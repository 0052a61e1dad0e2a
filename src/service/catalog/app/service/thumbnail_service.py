"""
Thumbnail Service

Runs the (blocking) image codec off the event loop and fills in missing
thumbnails for records read from the store.

Failure contexts:
- upload: a gallery file that cannot be decoded is rejected by the caller
- write: a product image that cannot be decoded is stored without thumbnails
- backfill: a record that cannot be decoded is returned as-is
"""

import time
from functools import partial
from typing import Awaitable, Callable, Dict, Iterable, List, Optional, Protocol, Sequence

import anyio
import anyio.to_thread

from src.platform.exception.exceptions import ImageDecodeError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.catalog_metrics import metrics
from src.service.catalog.app.interface.i_product_image_repo import IProductImageRepo
from src.service.catalog.app.interface.i_product_repo import IProductRepo
from src.service.catalog.app.interface.i_thumbnail_generator import IThumbnailGenerator
from src.service.catalog.domain.entity.product_entity import ProductEntity
from src.service.catalog.domain.entity.product_image_entity import ProductImageEntity
from src.service.catalog.domain.value_object.thumbnail import Thumbnail, ThumbnailSize


class _HasThumbnails(Protocol):
    id: Optional[str]
    image: Optional[bytes]
    image_content_type: Optional[str]
    thumbnails: Dict[ThumbnailSize, Thumbnail]

    def missing_thumbnails(self) -> List[ThumbnailSize]: ...


SaveThumbnails = Callable[[str, Dict[ThumbnailSize, Thumbnail]], Awaitable[None]]


class ThumbnailService:
    def __init__(
        self,
        thumbnail_generator: IThumbnailGenerator,
        product_repo: IProductRepo,
        product_image_repo: IProductImageRepo,
    ) -> None:
        self.thumbnail_generator = thumbnail_generator
        self.product_repo = product_repo
        self.product_image_repo = product_image_repo

    async def generate(
        self,
        *,
        image: bytes,
        content_type: Optional[str],
        sizes: Optional[Sequence[ThumbnailSize]] = None,
        context: str,
    ) -> Dict[ThumbnailSize, Thumbnail]:
        """
        Raises:
            ImageDecodeError: the payload is not a decodable image
        """
        sizes = list(sizes) if sizes is not None else list(ThumbnailSize)
        started = time.perf_counter()
        try:
            thumbnails = await anyio.to_thread.run_sync(
                partial(
                    self.thumbnail_generator.generate,
                    image=image,
                    content_type=content_type or '',
                    sizes=sizes,
                )
            )
        except ImageDecodeError:
            metrics.record_thumbnail_failure(context=context)
            raise

        metrics.record_thumbnails(
            sizes=[size.name.lower() for size in thumbnails],
            context=context,
            duration=time.perf_counter() - started,
        )
        return thumbnails

    async def generate_or_empty(
        self, *, image: bytes, content_type: Optional[str], context: str
    ) -> Dict[ThumbnailSize, Thumbnail]:
        """All sizes, or an empty mapping when the image cannot be decoded."""
        try:
            return await self.generate(image=image, content_type=content_type, context=context)
        except ImageDecodeError as e:
            Logger.base.warning(f'⚠️ [THUMBNAIL] Stored without thumbnails ({context}): {e.message}')
            return {}

    @Logger.io
    async def backfill_products(self, products: List[ProductEntity]) -> List[ProductEntity]:
        await self._backfill(products, save=self._save_product_thumbnails)
        return products

    @Logger.io
    async def backfill_images(self, images: List[ProductImageEntity]) -> List[ProductImageEntity]:
        await self._backfill(images, save=self._save_image_thumbnails)
        return images

    async def _backfill(self, items: Iterable[_HasThumbnails], *, save: SaveThumbnails) -> None:
        pending = [item for item in items if item.id and item.missing_thumbnails()]
        if not pending:
            return

        Logger.base.info(f'🖼️ [BACKFILL] Generating thumbnails for {len(pending)} record(s)')
        # Fan out one task per record, join before responding
        async with anyio.create_task_group() as tg:
            for item in pending:
                tg.start_soon(self._backfill_one, item, save)

    async def _backfill_one(self, item: _HasThumbnails, save: SaveThumbnails) -> None:
        try:
            generated = await self.generate(
                image=item.image,
                content_type=item.image_content_type,
                sizes=item.missing_thumbnails(),
                context='backfill',
            )
        except ImageDecodeError as e:
            Logger.base.warning(f'⚠️ [BACKFILL] Skipping {item.id}: {e.message}')
            return

        if not generated:
            return

        await save(item.id, generated)
        item.thumbnails = {**item.thumbnails, **generated}

    async def _save_product_thumbnails(
        self, product_id: str, thumbnails: Dict[ThumbnailSize, Thumbnail]
    ) -> None:
        await self.product_repo.save_thumbnails(product_id=product_id, thumbnails=thumbnails)

    async def _save_image_thumbnails(
        self, image_id: str, thumbnails: Dict[ThumbnailSize, Thumbnail]
    ) -> None:
        await self.product_image_repo.save_thumbnails(image_id=image_id, thumbnails=thumbnails)

from typing import List, Optional

from fastapi import APIRouter, Depends, File, Response, UploadFile, status

from src.platform.config.core_setting import settings
from src.platform.logging.loguru_io import Logger
from src.service.catalog.app.command.delete_product_image_use_case import (
    DeleteProductImageUseCase,
)
from src.service.catalog.app.command.reorder_product_images_use_case import (
    ReorderProductImagesUseCase,
)
from src.service.catalog.app.command.set_cover_image_use_case import SetCoverImageUseCase
from src.service.catalog.app.command.upload_product_images_use_case import (
    UploadProductImagesUseCase,
)
from src.service.catalog.app.query.get_product_image_use_case import GetProductImageUseCase
from src.service.catalog.app.query.list_product_images_use_case import ListProductImagesUseCase
from src.service.catalog.driving_adapter.http_controller.upload_reader import read_images
from src.service.catalog.driving_adapter.schema.product_schema import (
    ProductImageResponse,
    ReorderImagesRequest,
)


router = APIRouter()


@router.get('/{product_id}/images', status_code=status.HTTP_200_OK)
@Logger.io
async def list_product_images(
    product_id: str,
    use_case: ListProductImagesUseCase = Depends(ListProductImagesUseCase.depends),
) -> List[ProductImageResponse]:
    images = await use_case.list_images(product_id=product_id)
    return [ProductImageResponse.from_entity(image) for image in images]


@router.post('/{product_id}/images', status_code=status.HTTP_200_OK)
@Logger.io
async def upload_product_images(
    product_id: str,
    images: Optional[List[UploadFile]] = File(None),
    use_case: UploadProductImagesUseCase = Depends(UploadProductImagesUseCase.depends),
) -> List[ProductImageResponse]:
    uploads = await read_images(images or [], max_total_bytes=settings.MAX_UPLOAD_BYTES)
    created = await use_case.upload(product_id=product_id, files=uploads)
    return [ProductImageResponse.from_entity(image) for image in created]


# 'reorder' is declared before '/{image_id}' routes so it is not captured by them


@router.put('/{product_id}/images/reorder', status_code=status.HTTP_204_NO_CONTENT)
@Logger.io
async def reorder_product_images(
    product_id: str,
    request: ReorderImagesRequest,
    use_case: ReorderProductImagesUseCase = Depends(ReorderProductImagesUseCase.depends),
) -> Response:
    await use_case.reorder(product_id=product_id, image_ids=request.image_ids)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get('/{product_id}/images/{image_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def get_product_image(
    product_id: str,
    image_id: str,
    use_case: GetProductImageUseCase = Depends(GetProductImageUseCase.depends),
) -> ProductImageResponse:
    image = await use_case.get_image(product_id=product_id, image_id=image_id)
    return ProductImageResponse.from_entity(image)


@router.put('/{product_id}/images/{image_id}/set-cover', status_code=status.HTTP_204_NO_CONTENT)
@Logger.io
async def set_cover_image(
    product_id: str,
    image_id: str,
    use_case: SetCoverImageUseCase = Depends(SetCoverImageUseCase.depends),
) -> Response:
    await use_case.set_cover(product_id=product_id, image_id=image_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete('/{product_id}/images/{image_id}', status_code=status.HTTP_204_NO_CONTENT)
@Logger.io
async def delete_product_image(
    product_id: str,
    image_id: str,
    use_case: DeleteProductImageUseCase = Depends(DeleteProductImageUseCase.depends),
) -> Response:
    await use_case.delete(product_id=product_id, image_id=image_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

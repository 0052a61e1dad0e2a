from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Response, UploadFile, status

from src.platform.logging.loguru_io import Logger
from src.service.catalog.app.command.create_product_use_case import CreateProductUseCase
from src.service.catalog.app.command.delete_product_use_case import DeleteProductUseCase
from src.service.catalog.app.command.update_product_use_case import UpdateProductUseCase
from src.service.catalog.app.query.get_product_use_case import GetProductUseCase
from src.service.catalog.app.query.list_product_names_use_case import ListProductNamesUseCase
from src.service.catalog.app.query.list_products_use_case import ListProductsUseCase
from src.service.catalog.app.query.query_products_use_case import QueryProductsUseCase
from src.service.catalog.driving_adapter.http_controller.upload_reader import read_optional_image
from src.service.catalog.driving_adapter.schema.product_schema import (
    ProductPageResponse,
    ProductResponse,
)


router = APIRouter()


@router.get('', status_code=status.HTTP_200_OK)
@Logger.io
async def list_products(
    use_case: ListProductsUseCase = Depends(ListProductsUseCase.depends),
) -> List[ProductResponse]:
    products = await use_case.list_all()
    return [ProductResponse.from_entity(product) for product in products]


# Static paths are declared before '/{product_id}' so they are not captured by it


@router.get('/query', status_code=status.HTTP_200_OK)
@Logger.io
async def query_products(
    search: Optional[str] = None,
    name: Optional[str] = None,
    sort_by: Optional[str] = None,
    page: int = 1,
    page_size: int = 12,
    use_case: QueryProductsUseCase = Depends(QueryProductsUseCase.depends),
) -> ProductPageResponse:
    result = await use_case.query(
        search=search, name_filter=name, sort_by=sort_by, page=page, page_size=page_size
    )
    return ProductPageResponse(
        items=[ProductResponse.from_entity(product) for product in result.items],
        total=result.total,
        page=result.page,
        page_size=result.page_size,
    )


@router.get('/names', status_code=status.HTTP_200_OK)
@Logger.io
async def list_product_names(
    use_case: ListProductNamesUseCase = Depends(ListProductNamesUseCase.depends),
) -> List[str]:
    return await use_case.list_names()


@router.get('/{product_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def get_product(
    product_id: str,
    use_case: GetProductUseCase = Depends(GetProductUseCase.depends),
) -> ProductResponse:
    product = await use_case.get_by_id(product_id=product_id)
    return ProductResponse.from_entity(product)


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_product(
    name: str = Form(''),
    description: str = Form(''),
    price: str = Form(''),
    image: Optional[UploadFile] = File(None),
    use_case: CreateProductUseCase = Depends(CreateProductUseCase.depends),
) -> ProductResponse:
    product = await use_case.create(
        name=name,
        description=description,
        price=price,
        image=await read_optional_image(image),
    )
    return ProductResponse.from_entity(product)


@router.put('/{product_id}', status_code=status.HTTP_204_NO_CONTENT)
@Logger.io
async def update_product(
    product_id: str,
    name: str = Form(''),
    description: str = Form(''),
    price: str = Form(''),
    image: Optional[UploadFile] = File(None),
    use_case: UpdateProductUseCase = Depends(UpdateProductUseCase.depends),
) -> Response:
    await use_case.update(
        product_id=product_id,
        name=name,
        description=description,
        price=price,
        image=await read_optional_image(image),
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete('/{product_id}', status_code=status.HTTP_204_NO_CONTENT)
@Logger.io
async def delete_product(
    product_id: str,
    use_case: DeleteProductUseCase = Depends(DeleteProductUseCase.depends),
) -> Response:
    await use_case.delete(product_id=product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

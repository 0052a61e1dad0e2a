"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.catalog.app.command import (
    create_product_use_case,
    delete_product_image_use_case,
    delete_product_use_case,
    reorder_product_images_use_case,
    set_cover_image_use_case,
    update_product_use_case,
    upload_product_images_use_case,
)
from src.service.catalog.app.query import (
    get_product_image_use_case,
    get_product_use_case,
    list_product_images_use_case,
    list_product_names_use_case,
    list_products_use_case,
    query_products_use_case,
)


WIRE_MODULES: list[ModuleType] = [
    create_product_use_case,
    update_product_use_case,
    delete_product_use_case,
    upload_product_images_use_case,
    set_cover_image_use_case,
    reorder_product_images_use_case,
    delete_product_image_use_case,
    list_products_use_case,
    query_products_use_case,
    get_product_use_case,
    list_product_names_use_case,
    list_product_images_use_case,
    get_product_image_use_case,
]

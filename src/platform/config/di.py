"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi.html
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import Settings
from src.platform.database.mongo_setting import MongoDatabase
from src.service.catalog.app.service.thumbnail_service import ThumbnailService
from src.service.catalog.driven_adapter.image.pillow_thumbnail_generator import (
    PillowThumbnailGenerator,
)
from src.service.catalog.driven_adapter.repo.product_image_repo_impl import ProductImageRepoImpl
from src.service.catalog.driven_adapter.repo.product_repo_impl import ProductRepoImpl


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Database (one AsyncMongoClient / connection pool per process)
    mongo = providers.Singleton(MongoDatabase, settings=config_service)

    # Repositories (stateless - share the client's pool)
    product_repo = providers.Singleton(ProductRepoImpl, collection=mongo.provided.products)
    product_image_repo = providers.Singleton(
        ProductImageRepoImpl, collection=mongo.provided.product_images
    )

    # Image pipeline
    thumbnail_generator = providers.Singleton(
        PillowThumbnailGenerator, quality=config_service.provided.THUMBNAIL_QUALITY
    )
    thumbnail_service = providers.Singleton(
        ThumbnailService,
        thumbnail_generator=thumbnail_generator,
        product_repo=product_repo,
        product_image_repo=product_image_repo,
    )


container = Container()

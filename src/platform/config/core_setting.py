import json
from pathlib import Path
from typing import Annotated, List

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


_PROJECT_ROOT = Path(__file__).resolve().parents[3]
_ENV_PATH = _PROJECT_ROOT / '.env'
_ENV_FILE = _ENV_PATH if _ENV_PATH.exists() else (_PROJECT_ROOT / '.env.example')


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_ignore_empty=True,
        extra='ignore',
    )

    PROJECT_NAME: str = 'Maker Catalog'
    VERSION: str = '0.1.0'
    DEBUG: bool = True  # Set to False in production

    # CORS (local SPA dev server by default)
    BACKEND_CORS_ORIGINS: Annotated[List[str], NoDecode] = [
        'http://localhost:4200',
        'https://localhost:4200',
        'http://127.0.0.1:4200',
        'https://127.0.0.1:4200',
    ]

    @field_validator('BACKEND_CORS_ORIGINS', mode='before')
    @classmethod
    def assemble_cors_origins(cls, v: str | List[str]) -> List[str]:
        if isinstance(v, str) and not v.startswith('['):
            return [i.strip() for i in v.split(',') if i.strip()]
        elif isinstance(v, str):
            return json.loads(v)
        elif isinstance(v, list):
            return v
        return []

    # MongoDB Configuration
    MONGO_URL: str = 'mongodb://localhost:27017'
    MONGO_DATABASE: str = 'maker_catalog'
    MONGO_PRODUCTS_COLLECTION: str = 'products'
    MONGO_PRODUCT_IMAGES_COLLECTION: str = 'product_images'
    MONGO_SERVER_SELECTION_TIMEOUT_MS: int = 5000

    # Catalog
    THUMBNAIL_QUALITY: int = 85  # JPEG/WEBP encoder quality
    MAX_PAGE_SIZE: int = 100
    MAX_UPLOAD_BYTES: int = 50_000_000  # per gallery upload request

    # Logging
    LOG_TIMEZONE: str = 'Europe/Rome'


settings = Settings()  # type: ignore

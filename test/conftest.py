"""
Test Configuration and Fixtures

This module provides:
- Test log directory (set before any application module is imported)
- Image payload factories shared by unit and API tests

Architecture:
- Unit tests (test/**/unit/): use case collaborators are AsyncMocks or in-memory repos
- API tests (test/**/api/): TestClient against test_main.app with container overrides
"""

# =============================================================================
# CRITICAL: Environment setup MUST happen before any other imports
# loguru_io_config reads TEST_LOG_DIR at import time
# =============================================================================
import os
from pathlib import Path


def _early_setup_test_environment() -> None:
    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)

    # Never reach a real server from tests
    os.environ['MONGO_URL'] = 'mongodb://localhost:1'
    os.environ['MONGO_SERVER_SELECTION_TIMEOUT_MS'] = '100'


# Call immediately to set env vars before any imports
_early_setup_test_environment()

from collections.abc import Callable  # noqa: E402
import io  # noqa: E402

from PIL import Image  # noqa: E402
import pytest  # noqa: E402


def _encode_image(
    *, image_format: str = 'PNG', size: tuple[int, int] = (64, 48), color: str = 'red'
) -> bytes:
    mode = 'RGB' if image_format == 'JPEG' else 'RGBA'
    image = Image.new(mode, size, color)
    buffer = io.BytesIO()
    image.save(buffer, format=image_format)
    return buffer.getvalue()


@pytest.fixture
def make_image() -> Callable[..., bytes]:
    """Factory for real encoded images: make_image(image_format='JPEG', size=(300, 200))"""
    return _encode_image


@pytest.fixture
def png_bytes() -> bytes:
    return _encode_image(image_format='PNG', size=(64, 48))


@pytest.fixture
def jpeg_bytes() -> bytes:
    return _encode_image(image_format='JPEG', size=(300, 200), color='blue')


@pytest.fixture
def corrupt_bytes() -> bytes:
    # PNG signature followed by garbage
    return b'\x89PNG\r\n\x1a\n' + b'not really an image' * 8

from typing import Optional

import attrs


@attrs.frozen
class ImageUpload:
    """An uploaded file, already read from the multipart stream"""

    data: bytes = attrs.field(repr=lambda value: f'<{len(value)} bytes>')
    content_type: Optional[str]
    filename: Optional[str]

"""BSON <-> entity field conversions shared by the catalog repositories."""

from decimal import Decimal
from typing import Any, Dict, Optional

from bson import Binary, Decimal128, ObjectId

from src.service.catalog.domain.value_object.thumbnail import Thumbnail, ThumbnailSize


def to_object_id(value: Optional[str]) -> Optional[ObjectId]:
    """Malformed ids map to None so lookups behave like 'not found'."""
    if value is None or not ObjectId.is_valid(value):
        return None
    return ObjectId(value)


def to_decimal128(value: Decimal) -> Decimal128:
    return Decimal128(value)


def from_decimal128(value: Any) -> Decimal:
    if isinstance(value, Decimal128):
        return value.to_decimal()
    # Documents written by other clients may carry a double or string
    return Decimal(str(value))


def to_binary(value: Optional[bytes]) -> Optional[Binary]:
    return Binary(value) if value is not None else None


def from_binary(value: Any) -> Optional[bytes]:
    return bytes(value) if value is not None else None


def thumbnails_to_fields(thumbnails: Dict[ThumbnailSize, Thumbnail]) -> Dict[str, Any]:
    fields: Dict[str, Any] = {}
    for size, thumbnail in thumbnails.items():
        fields[size.field_name] = Binary(thumbnail.data)
        fields[f'{size.field_name}_content_type'] = thumbnail.content_type
    return fields


def empty_thumbnail_fields() -> Dict[str, None]:
    fields: Dict[str, None] = {}
    for size in ThumbnailSize:
        fields[size.field_name] = None
        fields[f'{size.field_name}_content_type'] = None
    return fields


def thumbnails_from_document(document: Dict[str, Any]) -> Dict[ThumbnailSize, Thumbnail]:
    thumbnails = {}
    for size in ThumbnailSize:
        data = document.get(size.field_name)
        if not data:
            continue
        thumbnails[size] = Thumbnail(
            data=bytes(data),
            content_type=document.get(f'{size.field_name}_content_type') or 'image/png',
        )
    return thumbnails

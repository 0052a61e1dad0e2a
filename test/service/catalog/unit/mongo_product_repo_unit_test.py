"""
Unit tests for the MongoDB mapping helpers

Covers the pure parts of the MongoDB adapters: filter and sort documents,
and BSON <-> entity field conversions. The collection itself is an AsyncMock.
"""

from datetime import datetime, timezone
from decimal import Decimal
import re
from unittest.mock import AsyncMock, MagicMock

from bson import Binary, Decimal128, ObjectId
from pymongo import ASCENDING, DESCENDING
import pytest

from src.service.catalog.app.dto.product_query import ProductFilter
from src.service.catalog.domain.enum.product_sort import ProductSort
from src.service.catalog.domain.value_object.thumbnail import Thumbnail, ThumbnailSize
from src.service.catalog.driven_adapter.repo.product_image_repo_impl import ProductImageRepoImpl
from src.service.catalog.driven_adapter.repo.mongo_document import (
    from_decimal128,
    thumbnails_from_document,
    thumbnails_to_fields,
    to_object_id,
)
from src.service.catalog.driven_adapter.repo.product_repo_impl import (
    ProductRepoImpl,
    build_product_filter,
    build_product_sort,
)


pytestmark = pytest.mark.unit


class TestBuildProductFilter:
    def test_no_filter(self):
        assert build_product_filter(ProductFilter()) == {}

    def test_search_is_escaped_case_insensitive_or(self):
        result = build_product_filter(ProductFilter(search='a.b*'))

        pattern = re.escape('a.b*')
        assert result == {
            '$or': [
                {'name': {'$regex': pattern, '$options': 'i'}},
                {'description': {'$regex': pattern, '$options': 'i'}},
            ]
        }

    def test_name_is_exact_equality(self):
        assert build_product_filter(ProductFilter(name='Dragon')) == {'name': 'Dragon'}

    def test_search_and_name_are_combined_with_and(self):
        result = build_product_filter(ProductFilter(search='red', name='Dragon'))

        assert set(result) == {'$and'}
        assert {'name': 'Dragon'} in result['$and']
        assert len(result['$and']) == 2


class TestBuildProductSort:
    def test_price(self):
        assert build_product_sort(ProductSort.PRICE_ASC)[0] == ('price', ASCENDING)
        assert build_product_sort(ProductSort.PRICE_DESC)[0] == ('price', DESCENDING)

    def test_newest(self):
        assert build_product_sort(ProductSort.NEWEST)[0] == ('created_at', DESCENDING)


class TestMongoDocument:
    def test_malformed_object_id_is_none(self):
        assert to_object_id('not-an-id') is None
        assert to_object_id(None) is None

    def test_valid_object_id(self):
        object_id = ObjectId()

        assert to_object_id(str(object_id)) == object_id

    def test_decimal128_round_trip_keeps_cents(self):
        assert from_decimal128(Decimal128(Decimal('12.30'))) == Decimal('12.30')

    def test_legacy_double_price(self):
        assert from_decimal128(9.5) == Decimal('9.5')

    def test_thumbnail_fields(self):
        fields = thumbnails_to_fields(
            {ThumbnailSize.CARD: Thumbnail(data=b'card', content_type='image/jpeg')}
        )

        assert fields == {
            'thumbnail_card': Binary(b'card'),
            'thumbnail_card_content_type': 'image/jpeg',
        }

    def test_thumbnails_from_document_skips_missing_sizes(self):
        document = {
            'thumbnail_detail': Binary(b'detail'),
            'thumbnail_detail_content_type': 'image/webp',
            'thumbnail_slider': None,
        }

        thumbnails = thumbnails_from_document(document)

        assert thumbnails == {
            ThumbnailSize.DETAIL: Thumbnail(data=b'detail', content_type='image/webp')
        }


class TestProductRepoImpl:
    def setup_method(self):
        self.collection = MagicMock()
        self.collection.find_one = AsyncMock()
        self.collection.update_one = AsyncMock()
        self.repo = ProductRepoImpl(collection=self.collection)

    @pytest.mark.asyncio
    async def test_get_by_malformed_id_does_not_query(self):
        result = await self.repo.get_by_id(product_id='xyz')

        assert result is None
        self.collection.find_one.assert_not_called()

    @pytest.mark.asyncio
    async def test_get_by_id_maps_document(self):
        object_id = ObjectId()
        created_at = datetime(2025, 5, 1, tzinfo=timezone.utc)
        self.collection.find_one.return_value = {
            '_id': object_id,
            'name': 'Dragon',
            'description': None,
            'price': Decimal128('24.90'),
            'created_at': created_at,
            'image': Binary(b'raw'),
            'image_content_type': 'image/png',
            'thumbnail_card': Binary(b'card'),
            'thumbnail_card_content_type': 'image/png',
            'cover_image_id': 'abc',
        }

        product = await self.repo.get_by_id(product_id=str(object_id))

        assert product.id == str(object_id)
        assert product.description == ''
        assert product.price == Decimal('24.90')
        assert product.image == b'raw'
        assert product.cover_image_id == 'abc'
        assert list(product.thumbnails) == [ThumbnailSize.CARD]

    @pytest.mark.asyncio
    async def test_replace_cover_image_is_conditional(self):
        object_id = ObjectId()
        self.collection.update_one.return_value = MagicMock(matched_count=0)

        replaced = await self.repo.replace_cover_image(
            product_id=str(object_id), expected_image_id=None, image_id='img-1'
        )

        assert replaced is False
        self.collection.update_one.assert_awaited_once_with(
            {'_id': object_id, 'cover_image_id': None},
            {'$set': {'cover_image_id': 'img-1'}},
        )


class TestProductImageRepoImpl:
    def setup_method(self):
        self.collection = MagicMock()
        self.collection.find_one = AsyncMock()
        self.repo = ProductImageRepoImpl(collection=self.collection)

    @pytest.mark.asyncio
    async def test_next_order_follows_highest_rank(self):
        self.collection.find_one.return_value = {'_id': ObjectId(), 'order': 4}

        next_order = await self.repo.next_order(product_id='p1')

        assert next_order == 5
        self.collection.find_one.assert_awaited_once_with(
            {'product_id': 'p1'}, {'order': 1}, sort=[('order', DESCENDING)]
        )

    @pytest.mark.asyncio
    async def test_next_order_of_empty_gallery(self):
        self.collection.find_one.return_value = None

        assert await self.repo.next_order(product_id='p1') == 0

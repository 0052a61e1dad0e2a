from decimal import Decimal
import json

import pytest

from src.service.catalog.domain.entity.product_entity import ProductEntity
from src.service.catalog.driving_adapter.schema.product_schema import ProductResponse


pytestmark = pytest.mark.unit


class TestProductResponsePrice:
    @pytest.mark.parametrize(
        'price, expected',
        [
            (Decimal('12345678901234567.89'), '12345678901234567.89'),
            (Decimal('50.00'), '50.00'),
            (Decimal('7'), '7.00'),
        ],
    )
    def test_price_serializes_without_float_rounding(self, price, expected):
        response = ProductResponse.from_entity(ProductEntity(name='Dragon', price=price))

        assert json.loads(response.model_dump_json())['price'] == expected

    def test_price_stays_decimal_in_python_mode(self):
        response = ProductResponse.from_entity(
            ProductEntity(name='Dragon', price=Decimal('24.90'))
        )

        assert response.price == Decimal('24.90')

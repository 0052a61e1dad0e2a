import pytest

from src.service.catalog.app.dto.product_query import ProductFilter, ProductQuery
from src.service.catalog.domain.enum.product_sort import ProductSort


pytestmark = pytest.mark.unit


class TestProductSort:
    @pytest.mark.parametrize(
        'sort_by, expected',
        [
            ('price-asc', ProductSort.PRICE_ASC),
            ('PRICE-DESC', ProductSort.PRICE_DESC),
            (' Name-Asc ', ProductSort.NAME_ASC),
            ('name-desc', ProductSort.NAME_DESC),
            ('newest', ProductSort.NEWEST),
        ],
    )
    def test_resolve_is_case_insensitive(self, sort_by: str, expected: ProductSort):
        assert ProductSort.resolve(sort_by) is expected

    @pytest.mark.parametrize('sort_by', [None, '', 'popularity', 'price'])
    def test_unknown_falls_back_to_newest(self, sort_by):
        assert ProductSort.resolve(sort_by) is ProductSort.NEWEST

    def test_name_sorts_are_flagged(self):
        assert ProductSort.NAME_ASC.is_name_sort
        assert ProductSort.NAME_DESC.is_name_sort
        assert not ProductSort.PRICE_ASC.is_name_sort
        assert not ProductSort.NEWEST.is_name_sort

    def test_direction(self):
        assert ProductSort.NEWEST.descending
        assert ProductSort.PRICE_DESC.descending
        assert not ProductSort.PRICE_ASC.descending
        assert not ProductSort.NAME_ASC.descending


class TestProductQuery:
    def _create(self, **overrides) -> ProductQuery:
        params = dict(
            search=None, name_filter=None, sort_by=None, page=1, page_size=10, max_page_size=100
        )
        params.update(overrides)
        return ProductQuery.create(**params)

    @pytest.mark.parametrize('page', [0, -3])
    def test_non_positive_page_becomes_one(self, page: int):
        assert self._create(page=page).page == 1

    @pytest.mark.parametrize('page_size', [0, -1])
    def test_non_positive_page_size_becomes_one(self, page_size: int):
        assert self._create(page_size=page_size).page_size == 1

    def test_page_size_is_capped(self):
        assert self._create(page_size=5000, max_page_size=100).page_size == 100

    def test_skip(self):
        assert self._create(page=3, page_size=12).skip == 24

    def test_blank_filters_are_dropped(self):
        query = self._create(search='   ', name_filter='')

        assert query.product_filter == ProductFilter(search=None, name=None)

    def test_filters_are_kept_verbatim(self):
        query = self._create(search=' drag', name_filter='Dragon')

        assert query.product_filter.search == ' drag'
        assert query.product_filter.name == 'Dragon'

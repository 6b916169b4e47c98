"""
Testy QueryParams / QueryBuilder oraz budowania zapytania listy produktów.
"""

import pytest

from config.settings import PRODUCTS_TABLE, CATEGORIES_TABLE
from core.exceptions import BackendError
from core.filters import Filter, FilterOperator, QueryBuilder, QueryParams, Sort
from products.models import FilterConfiguration, SortField, SortOrder
from products.repository import ProductRepository


def test_add_filter_accepts_operator_name():
    params = QueryParams().add_filter('price', 'gte', 10).add_sort('name')

    assert params.filters == [Filter('price', FilterOperator.GTE, 10)]
    assert params.sorts == [Sort('name')]


def test_build_params_without_filters_only_sorts(fake_client):
    params = ProductRepository(fake_client).build_params(FilterConfiguration())

    assert params.filters == []
    assert params.sorts == [Sort('name', desc=False), Sort('id', desc=False)]


def test_build_params_with_all_filters(fake_client):
    filters = FilterConfiguration(
        category_id=2,
        price_min=0.0,
        price_max=100.0,
        sort_by=SortField.PRICE,
        sort_order=SortOrder.DESC,
    )

    params = ProductRepository(fake_client).build_params(filters)

    assert params.filters == [
        Filter('category_id', FilterOperator.EQ, 2),
        Filter('price', FilterOperator.GTE, 0.0),
        Filter('price', FilterOperator.LTE, 100.0),
    ]
    assert params.sorts == [Sort('price', desc=True), Sort('id')]


def test_query_builder_applies_filters_and_order(seeded_client):
    params = QueryParams().add_filter('category_id', FilterOperator.EQ, 1).add_sort('id', desc=True)

    rows = QueryBuilder(seeded_client, PRODUCTS_TABLE).apply(params).execute()

    assert [r['id'] for r in rows] == ['P-004', 'P-001']


def test_query_builder_select_fields(seeded_client):
    params = QueryParams(select_fields=['id', 'name'])

    rows = QueryBuilder(seeded_client, CATEGORIES_TABLE).apply(params).execute()

    assert rows[0] == {'id': 1, 'name': 'Sillas'}


def test_query_builder_wraps_backend_error(seeded_client):
    builder = QueryBuilder(seeded_client, PRODUCTS_TABLE)
    seeded_client.fail_next('relation "products" does not exist', code='42P01')

    with pytest.raises(BackendError) as exc_info:
        builder.execute()

    assert exc_info.value.message == 'relation "products" does not exist'

    # Po błędzie builder wraca do czystego zapytania
    assert len(builder.execute()) == 5

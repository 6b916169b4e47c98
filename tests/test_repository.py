"""
Testy repozytoriów na atrapie Supabase: filtry, kolejność, błędy.
"""

import pytest

from core.exceptions import BackendError, RecordNotFoundError
from products.models import FilterConfiguration, SortField, SortOrder
from products.repository import CategoryRepository, ProductRepository


def ids(rows):
    return [r['id'] for r in rows]


def test_list_without_filters_orders_by_name(seeded_client):
    rows = ProductRepository(seeded_client).list_filtered()

    assert ids(rows) == ['P-004', 'P-003', 'P-005', 'P-002', 'P-001']


def test_price_ties_are_broken_by_id(seeded_client):
    repo = ProductRepository(seeded_client)

    asc = repo.list_filtered(FilterConfiguration(sort_by=SortField.PRICE))
    desc = repo.list_filtered(
        FilterConfiguration(sort_by=SortField.PRICE, sort_order=SortOrder.DESC)
    )

    assert ids(asc) == ['P-003', 'P-005', 'P-001', 'P-004', 'P-002']
    assert ids(desc) == ['P-002', 'P-001', 'P-004', 'P-005', 'P-003']


def test_price_range_is_inclusive(seeded_client):
    rows = ProductRepository(seeded_client).list_filtered(
        FilterConfiguration(price_min=95.5, price_max=120.0)
    )

    assert ids(rows) == ['P-004', 'P-005', 'P-001']


def test_get_by_id_missing_raises_not_found(seeded_client):
    with pytest.raises(RecordNotFoundError) as exc_info:
        ProductRepository(seeded_client).get_by_id('NOPE')

    assert exc_info.value.code == 'RECORD_NOT_FOUND'


def test_get_by_id_other_error_is_backend_error(seeded_client):
    seeded_client.fail_next('timeout')

    with pytest.raises(BackendError) as exc_info:
        ProductRepository(seeded_client).get_by_id('P-001')

    assert not isinstance(exc_info.value, RecordNotFoundError)
    assert exc_info.value.message == 'timeout'


def test_update_strips_id_column(seeded_client):
    record = ProductRepository(seeded_client).update('P-001', {'id': 'X', 'name': 'Silla'})

    assert record == {'id': 'P-001', 'name': 'Silla', 'price': 120.0, 'category_id': 1}


def test_delete_returns_row_count(seeded_client):
    repo = ProductRepository(seeded_client)

    assert repo.delete('P-001') == 1
    assert repo.delete('P-001') == 0


def test_create_duplicate_raises_backend_error(seeded_client):
    with pytest.raises(BackendError) as exc_info:
        ProductRepository(seeded_client).create(
            {'id': 'P-001', 'name': 'Otra', 'price': 1.0, 'category_id': 1}
        )

    assert 'duplicate key' in exc_info.value.message


def test_categories_ordered_by_id(fake_client):
    rows = CategoryRepository(fake_client).list_all()

    assert rows == [
        {'id': 1, 'name': 'Sillas'},
        {'id': 2, 'name': 'Mesas'},
        {'id': 3, 'name': 'Lámparas'},
    ]

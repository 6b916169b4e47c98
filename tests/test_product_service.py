"""
Testy ProductService: lista z filtrami, CRUD, walidacja formularza, eventy.
"""

from config import messages
from core.events import EventBus, EventType
from products.models import Category, FilterConfiguration, Product, SortField, SortOrder
from products.service import create_product_service


def executed_ops(client, op):
    return [e for e in client.executed if e[1] == op]


# ============================================================
# LISTA
# ============================================================

def test_fetch_all_products_ordered_by_name(product_service):
    success, products = product_service.fetch_products()

    assert success is True
    assert [p.name for p in products] == [
        'Banco', 'Lámpara de pie', 'Mesa auxiliar', 'Mesa comedor', 'Silla de roble'
    ]
    assert all(isinstance(p, Product) for p in products)


def test_category_filter_includes_only_that_category(product_service):
    success, products = product_service.fetch_products(FilterConfiguration(category_id=2))

    assert success is True
    assert {p.id for p in products} == {'P-002', 'P-005'}
    assert all(p.category_id == 2 for p in products)


def test_price_range_filter(product_service):
    success, products = product_service.fetch_products(
        FilterConfiguration(price_min=90, price_max=200)
    )

    assert success is True
    assert all(90 <= p.price <= 200 for p in products)
    assert {p.id for p in products} == {'P-001', 'P-004', 'P-005'}


def test_inverted_price_range_returns_empty_list(product_service):
    success, products = product_service.fetch_products(
        FilterConfiguration(price_min=300, price_max=100)
    )

    assert success is True
    assert products == []


def test_sort_by_price_descending(fake_client):
    fake_client.add_product('A', 'Primero', 10, 1)
    fake_client.add_product('B', 'Segundo', 30, 1)
    fake_client.add_product('C', 'Tercero', 20, 1)
    service = create_product_service(fake_client)

    success, products = service.fetch_products(
        FilterConfiguration(sort_by=SortField.PRICE, sort_order=SortOrder.DESC)
    )

    assert success is True
    assert [p.price for p in products] == [30, 20, 10]


def test_fetch_failure_returns_backend_message(product_service, seeded_client):
    seeded_client.fail_next('connection refused')

    assert product_service.fetch_products() == (False, 'connection refused')


def test_list_categories(product_service):
    success, categories = product_service.list_categories()

    assert success is True
    assert categories[0] == Category(1, 'Sillas')
    assert len(categories) == 3


def test_list_categories_failure(product_service, seeded_client):
    seeded_client.fail_next('boom')

    assert product_service.list_categories() == (False, messages.CATEGORIES_LOAD_ERROR)


# ============================================================
# ODCZYT / TWORZENIE
# ============================================================

def test_create_then_get_returns_same_product(product_service):
    success, created = product_service.create_product(
        {'id': 'P-100', 'name': 'Estante', 'price': '199.99', 'category_id': '3'}
    )

    assert success is True
    assert created == Product('P-100', 'Estante', 199.99, 3)
    assert product_service.get_product('P-100') == (True, created)


def test_get_missing_product(product_service):
    assert product_service.get_product('NOPE') == (False, messages.PRODUCT_NOT_FOUND)


def test_get_without_id(product_service):
    assert product_service.get_product('') == (False, messages.PRODUCT_ID_MISSING)


def test_create_with_missing_field_does_not_call_backend(product_service, seeded_client):
    result = product_service.create_product({'id': 'P-100', 'name': '', 'price': '5', 'category_id': 1})

    assert result == (False, messages.FORM_INCOMPLETE)
    assert executed_ops(seeded_client, 'insert') == []


def test_create_with_whitespace_id(product_service):
    result = product_service.create_product({'id': '   ', 'name': 'X', 'price': '5', 'category_id': 1})

    assert result == (False, messages.FORM_EMPTY_ID)


def test_create_with_whitespace_name_does_not_call_backend(product_service, seeded_client):
    result = product_service.create_product({'id': 'P-9', 'name': '   ', 'price': '5', 'category_id': 1})

    assert result == (False, messages.FORM_INCOMPLETE)
    assert executed_ops(seeded_client, 'insert') == []


def test_create_with_invalid_price(product_service, seeded_client):
    result = product_service.create_product({'id': 'P-100', 'name': 'X', 'price': 'abc', 'category_id': 1})

    assert result == (False, messages.FORM_INVALID_PRICE)
    assert executed_ops(seeded_client, 'insert') == []


def test_create_with_invalid_category(product_service):
    result = product_service.create_product({'id': 'P-100', 'name': 'X', 'price': '5', 'category_id': 'sillas'})

    assert result == (False, messages.FORM_INVALID_CATEGORY)


def test_create_duplicate_id_surfaces_backend_message(product_service):
    success, message = product_service.create_product(
        {'id': 'P-001', 'name': 'Otra silla', 'price': 10, 'category_id': 1}
    )

    assert success is False
    assert 'duplicate key' in message


# ============================================================
# EDYCJA
# ============================================================

def test_partial_update_changes_only_price(product_service):
    success, message = product_service.update_product('P-001', {'price': 15})

    assert (success, message) == (True, messages.PRODUCT_UPDATED)
    assert product_service.get_product('P-001') == (True, Product('P-001', 'Silla de roble', 15.0, 1))


def test_update_ignores_id_in_patch(product_service):
    product_service.update_product('P-001', {'id': 'HACK', 'name': 'Silla nueva'})

    success, product = product_service.get_product('P-001')
    assert success is True
    assert product.name == 'Silla nueva'
    assert product_service.get_product('HACK') == (False, messages.PRODUCT_NOT_FOUND)


def test_empty_patch_is_noop(product_service, seeded_client):
    assert product_service.update_product('P-001', {}) == (True, messages.PRODUCT_UPDATED)
    assert executed_ops(seeded_client, 'update') == []


def test_update_with_empty_name(product_service):
    assert product_service.update_product('P-001', {'name': ''}) == (False, messages.FORM_EMPTY_NAME)


def test_update_with_whitespace_name(product_service, seeded_client):
    result = product_service.update_product('P-001', {'name': '   '})

    assert result == (False, messages.FORM_EMPTY_NAME)
    assert executed_ops(seeded_client, 'update') == []
    assert product_service.get_product('P-001')[1].name == 'Silla de roble'


def test_update_backend_failure(product_service, seeded_client):
    seeded_client.fail_next('permission denied for table products')

    result = product_service.update_product('P-001', {'name': 'Silla'})

    assert result == (False, 'permission denied for table products')


# ============================================================
# USUWANIE
# ============================================================

def test_delete_twice_succeeds(product_service):
    assert product_service.delete_product('P-001') == (True, messages.PRODUCT_DELETED)
    assert product_service.delete_product('P-001') == (True, messages.PRODUCT_DELETED)

    assert product_service.get_product('P-001') == (False, messages.PRODUCT_NOT_FOUND)


def test_delete_backend_failure(product_service, seeded_client):
    seeded_client.fail_next('foreign key violation')

    assert product_service.delete_product('P-001') == (False, 'foreign key violation')


# ============================================================
# EVENTY
# ============================================================

def test_mutations_publish_events(product_service):
    received = []
    EventBus().subscribe_all(lambda event: received.append(event))

    product_service.create_product({'id': 'P-100', 'name': 'Estante', 'price': 10, 'category_id': 3})
    product_service.update_product('P-100', {'price': 12})
    product_service.delete_product('P-100')

    assert [e.type for e in received] == [
        EventType.PRODUCT_CREATED,
        EventType.PRODUCT_UPDATED,
        EventType.PRODUCT_DELETED,
    ]
    assert received[1].data == {'id': 'P-100', 'price': 12.0}
    assert all(e.source == 'Product' for e in received)


def test_failed_mutation_publishes_nothing(product_service):
    received = []
    EventBus().subscribe_all(lambda event: received.append(event))

    product_service.create_product({'id': 'P-001', 'name': 'Dup', 'price': 1, 'category_id': 1})

    assert received == []

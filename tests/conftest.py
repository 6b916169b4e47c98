"""
Wspólne fixtury testów
======================
Atrapa klienta Supabase trzymająca tabele w pamięci, więc testy
nie potrzebują sieci ani pliku .env.

Obsługiwane: table().select/insert/update/delete, eq/gte/lte,
order(desc=), limit, single, execute oraz auth.sign_in_with_password,
get_session, sign_out.
"""

import copy
import os
import sys
from types import SimpleNamespace

import pytest

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config.settings import PRODUCTS_TABLE, CATEGORIES_TABLE
from core.events import EventBus
from auth.service import AuthService
from products.service import create_product_service


CATEGORIES = [
    {'id': 1, 'name': 'Sillas'},
    {'id': 2, 'name': 'Mesas'},
    {'id': 3, 'name': 'Lámparas'},
]


class FakeAPIError(Exception):
    """Odpowiednik postgrest.APIError / gotrue AuthApiError (message + code)"""

    def __init__(self, message: str, code: str = None):
        super().__init__(message)
        self.message = message
        self.code = code


class FakeQuery:
    """Łańcuchowe zapytanie na jednej tabeli"""

    def __init__(self, client: 'FakeSupabaseClient', table: str):
        self.client = client
        self.table = table
        self._op = 'select'
        self._columns = '*'
        self._payload = None
        self._conditions = []
        self._orders = []
        self._limit = None
        self._single = False

    def select(self, columns: str = '*'):
        self._op = 'select'
        self._columns = columns
        return self

    def insert(self, data):
        self._op = 'insert'
        self._payload = data
        return self

    def update(self, data):
        self._op = 'update'
        self._payload = data
        return self

    def delete(self):
        self._op = 'delete'
        return self

    def eq(self, column, value):
        self._conditions.append(lambda row: row.get(column) == value)
        return self

    def gte(self, column, value):
        self._conditions.append(lambda row: row.get(column) is not None and row[column] >= value)
        return self

    def lte(self, column, value):
        self._conditions.append(lambda row: row.get(column) is not None and row[column] <= value)
        return self

    def order(self, column, desc: bool = False):
        self._orders.append((column, desc))
        return self

    def limit(self, count: int):
        self._limit = count
        return self

    def single(self):
        self._single = True
        return self

    def execute(self):
        self.client.executed.append((self.table, self._op))
        self.client.raise_pending_error()

        rows = self.client.tables.setdefault(self.table, [])

        if self._op == 'insert':
            record = copy.deepcopy(self._payload)
            if any(r.get('id') == record.get('id') for r in rows):
                raise FakeAPIError(
                    'duplicate key value violates unique constraint "products_pkey"',
                    code='23505'
                )
            rows.append(record)
            return SimpleNamespace(data=[copy.deepcopy(record)])

        matched = [r for r in rows if all(cond(r) for cond in self._conditions)]

        if self._op == 'update':
            for row in matched:
                row.update(copy.deepcopy(self._payload))
            return SimpleNamespace(data=copy.deepcopy(matched))

        if self._op == 'delete':
            for row in matched:
                rows.remove(row)
            return SimpleNamespace(data=copy.deepcopy(matched))

        # select - stabilne sortowanie od ostatniego klucza
        result = list(matched)
        for column, desc in reversed(self._orders):
            result.sort(key=lambda r: r.get(column), reverse=desc)

        if self._limit is not None:
            result = result[:self._limit]

        if self._columns.strip() != '*':
            wanted = [c.strip() for c in self._columns.split(',')]
            result = [{c: r.get(c) for c in wanted} for r in result]

        result = copy.deepcopy(result)

        if self._single:
            if len(result) != 1:
                raise FakeAPIError(
                    'JSON object requested, multiple (or no) rows returned',
                    code='PGRST116'
                )
            return SimpleNamespace(data=result[0])

        return SimpleNamespace(data=result)


class FakeAuth:
    """Atrapa client.auth"""

    def __init__(self, client: 'FakeSupabaseClient'):
        self.client = client
        self.users = {}
        self.session = None
        self.sign_in_calls = 0
        self.get_session_calls = 0
        self.sign_out_calls = 0

    def sign_in_with_password(self, credentials):
        self.sign_in_calls += 1
        self.client.raise_pending_error()

        email = credentials.get('email')
        if self.users.get(email) != credentials.get('password'):
            raise FakeAPIError('Invalid login credentials', code='invalid_credentials')

        user = SimpleNamespace(email=email)
        self.session = SimpleNamespace(user=user, access_token='token')
        return SimpleNamespace(user=user, session=self.session)

    def get_session(self):
        self.get_session_calls += 1
        self.client.raise_pending_error()
        return self.session

    def sign_out(self):
        self.sign_out_calls += 1
        self.client.raise_pending_error()
        self.session = None


class FakeSupabaseClient:
    """Klient Supabase w pamięci"""

    def __init__(self):
        self.tables = {
            PRODUCTS_TABLE: [],
            CATEGORIES_TABLE: copy.deepcopy(CATEGORIES),
        }
        self.auth = FakeAuth(self)
        self.executed = []
        self._pending_error = None

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def fail_next(self, message: str, code: str = None):
        """Następne wywołanie (zapytanie lub auth) rzuci błąd"""
        self._pending_error = FakeAPIError(message, code)

    def raise_pending_error(self):
        error, self._pending_error = self._pending_error, None
        if error is not None:
            raise error

    def add_product(self, id, name, price, category_id):
        self.tables[PRODUCTS_TABLE].append(
            {'id': id, 'name': name, 'price': price, 'category_id': category_id}
        )


# ============================================================
# FIXTURES
# ============================================================

@pytest.fixture(autouse=True)
def reset_event_bus():
    EventBus.reset()
    yield
    # Serwisy trzymają referencję do busa, więc czyścimy też handlery
    EventBus().clear()
    EventBus.reset()


@pytest.fixture
def unconfigured_client(monkeypatch):
    """Singleton klienta bez URL Supabase"""
    import core.supabase_client as supabase_client

    monkeypatch.setattr(supabase_client, 'SUPABASE_URL', '')
    supabase_client.reset_client()
    yield supabase_client
    supabase_client.reset_client()


@pytest.fixture
def fake_client():
    return FakeSupabaseClient()


@pytest.fixture
def seeded_client(fake_client):
    """Pięć produktów w trzech kategoriach"""
    fake_client.add_product('P-001', 'Silla de roble', 120.0, 1)
    fake_client.add_product('P-002', 'Mesa comedor', 450.0, 2)
    fake_client.add_product('P-003', 'Lámpara de pie', 80.0, 3)
    fake_client.add_product('P-004', 'Banco', 120.0, 1)
    fake_client.add_product('P-005', 'Mesa auxiliar', 95.5, 2)
    return fake_client


@pytest.fixture
def product_service(seeded_client):
    return create_product_service(seeded_client)


@pytest.fixture
def auth_service(fake_client):
    fake_client.auth.users['ana@example.com'] = 'secret'
    return AuthService(fake_client)

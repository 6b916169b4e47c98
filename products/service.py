#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ProductService - Warstwa logiki biznesowej dla produktów

Odpowiedzialność:
- Lista produktów z filtrami (FilterConfiguration)
- Tworzenie, edycja, usuwanie pojedynczych produktów
- Walidacja i konwersja danych z formularzy
- Publikowanie eventów po udanych zmianach

Zasady:
- Metody publiczne nie rzucają wyjątków - zwracają (success, wynik_lub_komunikat)
- Walidacja lokalna ZAWSZE przed zapytaniem do bazy
- Bez ponawiania - błąd trafia do okna od razu

Użycie:
    from products import create_product_service

    service = create_product_service()

    success, products = service.fetch_products(FilterConfiguration(category_id=2))
    success, product = service.create_product(
        {'id': 'P-001', 'name': 'Silla', 'price': '120', 'category_id': '2'}
    )
"""

from typing import Any, Dict, List, Optional, Tuple, Union
import logging
import math

from config import messages
from core.events import EventBus, EventType, create_event
from core.exceptions import BackendError, RecordNotFoundError, error_message
from products.models import Category, FilterConfiguration, Product
from products.repository import CategoryRepository, ProductRepository

logger = logging.getLogger(__name__)


class ProductService:
    """
    Serwis produktów - główny punkt wejścia dla operacji na katalogu.

    Example:
        service = ProductService(ProductRepository(client), CategoryRepository(client))

        success, result = service.delete_product("P-001")
        if not success:
            show_error(result)
    """

    ENTITY_NAME = "Product"

    # Pola wymagane przy tworzeniu (w kolejności formularza)
    REQUIRED_FIELDS = ["id", "name", "price", "category_id"]

    # Pola, które można zmienić w edycji
    UPDATABLE_FIELDS = ["name", "price", "category_id"]

    def __init__(
        self,
        product_repo: ProductRepository,
        category_repo: CategoryRepository,
        event_bus: EventBus = None
    ):
        """
        Inicjalizacja z repozytoriami.

        Args:
            product_repo: Instancja ProductRepository
            category_repo: Instancja CategoryRepository
            event_bus: Opcjonalny EventBus (domyślnie singleton)
        """
        self.products = product_repo
        self.categories = category_repo
        self.event_bus = event_bus or EventBus()

    # =========================================================
    # READ
    # =========================================================

    def fetch_products(
        self,
        filters: FilterConfiguration = None
    ) -> Tuple[bool, Union[List[Product], str]]:
        """
        Pobierz produkty wg filtrów.

        Returns:
            (True, lista Product) lub (False, komunikat błędu)
        """
        filters = filters or FilterConfiguration()

        try:
            rows = self.products.list_filtered(filters)
            products = [Product.from_row(row) for row in rows]
        except BackendError as e:
            return False, error_message(e, messages.PRODUCTS_LOAD_ERROR)
        except (KeyError, TypeError, ValueError) as e:
            logger.error(f"[{self.ENTITY_NAME}] Malformed row: {e}")
            return False, messages.PRODUCTS_LOAD_ERROR

        logger.debug(f"[{self.ENTITY_NAME}] Fetched {len(products)} products ({filters})")
        return True, products

    def get_product(self, product_id: str) -> Tuple[bool, Union[Product, str]]:
        """
        Pobierz jeden produkt.

        Returns:
            (True, Product) lub (False, komunikat) - brak wiersza to
            "Producto no encontrado"
        """
        if not product_id:
            return False, messages.PRODUCT_ID_MISSING

        try:
            row = self.products.get_by_id(product_id)
            return True, Product.from_row(row)
        except RecordNotFoundError:
            logger.warning(f"[{self.ENTITY_NAME}] Not found: {product_id}")
            return False, messages.PRODUCT_NOT_FOUND
        except BackendError as e:
            return False, error_message(e, messages.PRODUCT_FETCH_ERROR)
        except (KeyError, TypeError, ValueError) as e:
            logger.error(f"[{self.ENTITY_NAME}] Malformed row: {e}")
            return False, messages.PRODUCT_FETCH_ERROR

    def list_categories(self) -> Tuple[bool, Union[List[Category], str]]:
        """
        Pobierz wszystkie kategorie.

        Returns:
            (True, lista Category) lub (False, komunikat)
        """
        try:
            rows = self.categories.list_all()
            return True, [Category.from_row(row) for row in rows]
        except (BackendError, KeyError, TypeError, ValueError) as e:
            logger.error(f"[Category] List failed: {e}")
            return False, messages.CATEGORIES_LOAD_ERROR

    # =========================================================
    # CREATE
    # =========================================================

    def create_product(self, data: Dict[str, Any]) -> Tuple[bool, Union[Product, str]]:
        """
        Utwórz nowy produkt.

        ID nadaje użytkownik. Wszystkie pola wymagane, cena i kategoria
        muszą dać się zamienić na liczby. Duplikat ID zgłasza baza.

        Args:
            data: {'id', 'name', 'price', 'category_id'} - wartości mogą
                  być tekstem prosto z formularza

        Returns:
            (True, utworzony Product) lub (False, komunikat)
        """
        validation_error = self._validate_product_data(data, is_new=True)
        if validation_error:
            return False, validation_error

        row = self._coerce_product_data(data, self.REQUIRED_FIELDS)
        logger.debug(f"[{self.ENTITY_NAME}] Inserting: {row}")

        try:
            created = Product.from_row(self.products.create(row))
        except BackendError as e:
            return False, error_message(e, messages.PRODUCT_CREATE_ERROR)

        self._emit(EventType.PRODUCT_CREATED, created.to_row())
        return True, created

    # =========================================================
    # UPDATE
    # =========================================================

    def update_product(self, product_id: str, data: Dict[str, Any]) -> Tuple[bool, str]:
        """
        Zaktualizuj produkt (częściowo).

        Pola pominięte w `data` nie są wysyłane do bazy.
        `id` nigdy nie jest zmieniane.

        Returns:
            (success, komunikat)
        """
        if not product_id:
            return False, messages.PRODUCT_ID_MISSING

        fields = [f for f in self.UPDATABLE_FIELDS if f in data]
        for unknown in set(data) - set(self.UPDATABLE_FIELDS) - {'id'}:
            logger.warning(f"[{self.ENTITY_NAME}] Ignoring unknown field: {unknown}")

        if not fields:
            logger.info(f"[{self.ENTITY_NAME}] Nothing to update: {product_id}")
            return True, messages.PRODUCT_UPDATED

        validation_error = self._validate_product_data(data, is_new=False)
        if validation_error:
            return False, validation_error

        changes = self._coerce_product_data(data, fields)

        try:
            self.products.update(product_id, changes)
        except BackendError as e:
            return False, error_message(e, messages.PRODUCT_UPDATE_ERROR)

        self._emit(EventType.PRODUCT_UPDATED, {'id': product_id, **changes})
        return True, messages.PRODUCT_UPDATED

    # =========================================================
    # DELETE
    # =========================================================

    def delete_product(self, product_id: str) -> Tuple[bool, str]:
        """
        Usuń produkt.

        Usunięcie nieistniejącego ID jest sukcesem (baza nie zgłasza
        błędu dla 0 usuniętych wierszy).

        Returns:
            (success, komunikat)
        """
        if not product_id:
            return False, messages.PRODUCT_ID_MISSING

        try:
            deleted = self.products.delete(product_id)
        except BackendError as e:
            return False, error_message(e, messages.PRODUCT_DELETE_ERROR)

        if not deleted:
            logger.info(f"[{self.ENTITY_NAME}] Delete matched no rows: {product_id}")

        self._emit(EventType.PRODUCT_DELETED, {'id': product_id})
        return True, messages.PRODUCT_DELETED

    # =========================================================
    # VALIDATION
    # =========================================================

    def _validate_product_data(self, data: Dict, is_new: bool) -> Optional[str]:
        """
        Waliduj dane produktu.

        Returns:
            None jeśli OK, komunikat błędu w przeciwnym razie
        """
        if is_new:
            if any(_is_missing(data.get(f)) for f in self.REQUIRED_FIELDS):
                return messages.FORM_INCOMPLETE
            if _is_blank(data['id']):
                return messages.FORM_EMPTY_ID
            if _is_blank(data['name']):
                return messages.FORM_INCOMPLETE
        elif 'name' in data and _is_blank(data['name']):
            return messages.FORM_EMPTY_NAME

        if 'price' in data and _to_float(data['price']) is None:
            return messages.FORM_INVALID_PRICE

        if 'category_id' in data and _to_int(data['category_id']) is None:
            return messages.FORM_INVALID_CATEGORY

        return None

    def _coerce_product_data(self, data: Dict, fields: List[str]) -> Dict[str, Any]:
        """Zamień zwalidowane wartości na typy kolumn"""
        row = {}
        for f in fields:
            if f == 'price':
                row[f] = _to_float(data[f])
            elif f == 'category_id':
                row[f] = _to_int(data[f])
            else:
                row[f] = str(data[f]).strip()
        return row

    # =========================================================
    # EVENTS
    # =========================================================

    def _emit(self, event_type: EventType, data: Dict[str, Any]):
        self.event_bus.publish(create_event(event_type, data, source=self.ENTITY_NAME))


def _is_missing(value) -> bool:
    """Pole nie wypełnione: None lub pusty tekst"""
    return value is None or (isinstance(value, str) and value == "")


def _is_blank(value) -> bool:
    """Brak treści: None albo same białe znaki"""
    return value is None or str(value).strip() == ""


def _to_float(value) -> Optional[float]:
    if isinstance(value, bool):
        return None
    try:
        number = float(str(value).strip().replace(",", ".")) if isinstance(value, str) else float(value)
    except (TypeError, ValueError):
        return None
    return None if math.isnan(number) or math.isinf(number) else number


def _to_int(value) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return None


# =========================================================
# FACTORY
# =========================================================

def create_product_service(client=None, event_bus: EventBus = None) -> ProductService:
    """
    Factory method do tworzenia ProductService.

    Args:
        client: Opcjonalna instancja Supabase Client
                (jeśli None - użyje get_supabase_client())
        event_bus: Opcjonalny EventBus

    Returns:
        Skonfigurowana instancja ProductService
    """
    if client is None:
        from core.supabase_client import get_supabase_client
        client = get_supabase_client()

    return ProductService(
        ProductRepository(client),
        CategoryRepository(client),
        event_bus=event_bus
    )

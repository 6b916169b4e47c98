#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ProductRepository / CategoryRepository - dostęp do tabel products i categories

Odpowiedzialność:
- CRUD na produktach
- Zapytanie listy z filtrami (kategoria, zakres cen) i sortowaniem
- Odczyt kategorii

Zasady:
- Zwraca surowe dane z bazy (dict)
- Błędy Supabase zamienia na BackendError / RecordNotFoundError
"""

from typing import Any, Dict, List

from supabase import Client

from config.settings import PRODUCTS_TABLE, CATEGORIES_TABLE
from core.base_repository import BaseRepository
from core.filters import QueryParams, FilterOperator
from products.models import FilterConfiguration, SortOrder


class ProductRepository(BaseRepository):
    """
    Repozytorium produktów.

    Example:
        repo = ProductRepository(client)
        rows = repo.list_filtered(FilterConfiguration(category_id=2))
    """

    TABLE_NAME = PRODUCTS_TABLE
    ENTITY_NAME = "Product"

    # Klucz rozstrzygający remisy przy sortowaniu
    TIEBREAK_COLUMN = "id"

    def __init__(self, client: Client):
        super().__init__(client)

    def build_params(self, filters: FilterConfiguration) -> QueryParams:
        """
        Zamień FilterConfiguration na QueryParams.

        Każdy filtr jest niezależny (AND), brak filtra = brak ograniczenia.
        Sortowanie jest zawsze dodawane, plus id jako drugi klucz.
        """
        params = QueryParams()

        if filters.category_id:
            params.add_filter('category_id', FilterOperator.EQ, filters.category_id)

        if filters.price_min is not None:
            params.add_filter('price', FilterOperator.GTE, filters.price_min)

        if filters.price_max is not None:
            params.add_filter('price', FilterOperator.LTE, filters.price_max)

        params.add_sort(filters.sort_by.value, desc=filters.sort_order is SortOrder.DESC)
        if filters.sort_by.value != self.TIEBREAK_COLUMN:
            params.add_sort(self.TIEBREAK_COLUMN)

        return params

    def list_filtered(self, filters: FilterConfiguration = None) -> List[Dict[str, Any]]:
        """Pobierz produkty spełniające filtry, w żądanej kolejności"""
        return self.list(self.build_params(filters or FilterConfiguration()))


class CategoryRepository(BaseRepository):
    """Repozytorium kategorii (tylko odczyt)"""

    TABLE_NAME = CATEGORIES_TABLE
    ENTITY_NAME = "Category"

    def list_all(self) -> List[Dict[str, Any]]:
        """Wszystkie kategorie, po id"""
        params = QueryParams(select_fields=['id', 'name'])
        params.add_sort('id')
        return self.list(params)

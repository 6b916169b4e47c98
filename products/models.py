#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Modele danych katalogu

- Product, Category: niemutowalne migawki rekordów z bazy
- FilterConfiguration: filtry listy produktów (parsowane raz, z formularza)
- CatalogState: stan listy produktów w oknie katalogu
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, Optional, Tuple

from core.exceptions import InvalidFieldValueError


@dataclass(frozen=True)
class Category:
    """Kategoria produktu (tylko odczyt)"""
    id: int
    name: str

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> 'Category':
        return cls(id=int(row['id']), name=str(row.get('name') or ''))


def category_choices(categories: Iterable[Category]) -> Dict[str, int]:
    """
    Etykiety kategorii do listy rozwijanej: {etykieta: id}.

    Powtórzona nazwa dostaje sufiks z id, np. "Mesas (#4)", żeby
    każda kategoria miała własną pozycję. Kolejność wejścia zachowana.
    """
    categories = list(categories)
    name_counts: Dict[str, int] = {}
    for category in categories:
        name_counts[category.name] = name_counts.get(category.name, 0) + 1

    choices: Dict[str, int] = {}
    for category in categories:
        if name_counts[category.name] > 1:
            label = f"{category.name} (#{category.id})"
        else:
            label = category.name
        choices[label] = category.id
    return choices


@dataclass(frozen=True)
class Product:
    """Produkt z tabeli products"""
    id: str
    name: str
    price: float
    category_id: int

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> 'Product':
        """Utwórz z wiersza Supabase (price przychodzi jako numeric)"""
        return cls(
            id=str(row['id']),
            name=str(row.get('name') or ''),
            price=float(row.get('price') or 0),
            category_id=int(row.get('category_id') or 0),
        )

    def to_row(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'price': self.price,
            'category_id': self.category_id,
        }


class SortField(Enum):
    """Kolumny, po których można sortować listę"""
    NAME = "name"
    PRICE = "price"


class SortOrder(Enum):
    """Kierunek sortowania"""
    ASC = "asc"
    DESC = "desc"

    @classmethod
    def parse(cls, value: str) -> 'SortOrder':
        """Akceptuje 'asc'/'desc' oraz pełne 'ascending'/'descending'"""
        text = (value or "").strip().lower()
        if text in ("desc", "descending"):
            return cls.DESC
        if text in ("", "asc", "ascending"):
            return cls.ASC
        raise InvalidFieldValueError('sort_order', value, "Expected asc or desc")


@dataclass(frozen=True)
class FilterConfiguration:
    """
    Filtry listy produktów.

    Wszystkie pola opcjonalne poza sortowaniem (domyślnie name / asc).
    Odwrócony zakres cen nie jest błędem - zwraca pustą listę.
    """
    category_id: Optional[int] = None
    price_min: Optional[float] = None
    price_max: Optional[float] = None
    sort_by: SortField = SortField.NAME
    sort_order: SortOrder = SortOrder.ASC

    @classmethod
    def from_form(
        cls,
        category_id: str = "",
        price_min: str = "",
        price_max: str = "",
        sort_by: str = "name",
        sort_order: str = "asc"
    ) -> 'FilterConfiguration':
        """
        Parsuj wartości tekstowe z panelu filtrów.

        Puste pola = brak filtra. Kategoria "0" też oznacza brak filtra.

        Raises:
            InvalidFieldValueError: Gdy wartość nie jest liczbą
        """
        category = _parse_optional(category_id, int, 'category_id')
        if category == 0:
            category = None

        try:
            sort_field = SortField((sort_by or "name").strip().lower())
        except ValueError:
            raise InvalidFieldValueError('sort_by', sort_by, "Expected name or price")

        return cls(
            category_id=category,
            price_min=_parse_optional(price_min, float, 'price_min'),
            price_max=_parse_optional(price_max, float, 'price_max'),
            sort_by=sort_field,
            sort_order=SortOrder.parse(sort_order),
        )


def _parse_optional(value, cast, field_name: str):
    """Zamień tekst z formularza na liczbę (None dla pustego)"""
    if value is None:
        return None
    if isinstance(value, str):
        value = value.strip().replace(",", ".") if cast is float else value.strip()
        if not value:
            return None
    try:
        return cast(value)
    except (TypeError, ValueError):
        raise InvalidFieldValueError(field_name, value, f"Expected {cast.__name__}")


class LoadStatus(Enum):
    """Etapy ładowania listy"""
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    ERRORED = "errored"


@dataclass(frozen=True)
class CatalogState:
    """
    Stan listy produktów.

    Każde przejście tworzy nowy obiekt - nie modyfikujemy pól.
    """
    products: Tuple[Product, ...] = field(default_factory=tuple)
    loading: bool = False
    error: Optional[str] = None
    status: LoadStatus = LoadStatus.IDLE

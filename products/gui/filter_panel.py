#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
FilterPanel - zwijany panel filtrów nad listą produktów

Kategoria, zakres cen, pole i kierunek sortowania. Tekst z pól
zamieniany jest na FilterConfiguration dopiero przy "Aplicar Filtros".
"""

import customtkinter as ctk
from typing import Callable, Dict, List

from config import messages
from core.exceptions import InvalidFieldValueError
from products.models import Category, FilterConfiguration, category_choices

ALL_CATEGORIES = "Todas las categorías"

SORT_FIELDS = {"Nombre": "name", "Precio": "price"}
SORT_ORDERS = {"Ascendente": "asc", "Descendente": "desc"}


class FilterPanel(ctk.CTkFrame):
    """
    Panel filtrów.

    Args:
        on_apply: callback(FilterConfiguration) po kliknięciu "Aplicar Filtros"
        on_error: callback(komunikat) gdy pola ceny nie są liczbami
    """

    def __init__(
        self,
        parent,
        on_apply: Callable[[FilterConfiguration], None],
        on_error: Callable[[str], None] = None,
        **kwargs
    ):
        super().__init__(parent, **kwargs)

        self.on_apply = on_apply
        self.on_error = on_error
        self._category_map: Dict[str, int] = {}

        self._setup_ui()

    def _setup_ui(self):
        # Kategoria
        ctk.CTkLabel(self, text="Categoría:").pack(side="left", padx=(10, 5), pady=8)
        self.category_var = ctk.StringVar(value=ALL_CATEGORIES)
        self.category_combo = ctk.CTkComboBox(
            self,
            variable=self.category_var,
            values=[ALL_CATEGORIES],
            width=170,
            state="readonly"
        )
        self.category_combo.pack(side="left", padx=5)

        # Zakres cen
        ctk.CTkLabel(self, text="Precio:").pack(side="left", padx=(15, 5))
        self.price_min_entry = ctk.CTkEntry(self, width=80, placeholder_text="Mín")
        self.price_min_entry.pack(side="left", padx=2)
        ctk.CTkLabel(self, text="-").pack(side="left")
        self.price_max_entry = ctk.CTkEntry(self, width=80, placeholder_text="Máx")
        self.price_max_entry.pack(side="left", padx=2)

        # Sortowanie
        ctk.CTkLabel(self, text="Ordenar por:").pack(side="left", padx=(15, 5))
        self.sort_by_var = ctk.StringVar(value="Nombre")
        ctk.CTkComboBox(
            self,
            variable=self.sort_by_var,
            values=list(SORT_FIELDS),
            width=100,
            state="readonly"
        ).pack(side="left", padx=5)

        self.sort_order_var = ctk.StringVar(value="Ascendente")
        ctk.CTkComboBox(
            self,
            variable=self.sort_order_var,
            values=list(SORT_ORDERS),
            width=120,
            state="readonly"
        ).pack(side="left", padx=5)

        ctk.CTkButton(
            self,
            text="Aplicar Filtros",
            width=120,
            command=self._on_apply
        ).pack(side="right", padx=10)

    def set_categories(self, categories: List[Category]):
        """Wypełnij listę kategorii"""
        self._category_map = category_choices(categories)
        self.category_combo.configure(values=[ALL_CATEGORIES] + list(self._category_map))

    def get_filters(self) -> FilterConfiguration:
        """
        Odczytaj filtry z pól.

        Raises:
            InvalidFieldValueError: Gdy cena nie jest liczbą
        """
        category_id = self._category_map.get(self.category_var.get())

        return FilterConfiguration.from_form(
            category_id="" if category_id is None else str(category_id),
            price_min=self.price_min_entry.get(),
            price_max=self.price_max_entry.get(),
            sort_by=SORT_FIELDS.get(self.sort_by_var.get(), "name"),
            sort_order=SORT_ORDERS.get(self.sort_order_var.get(), "asc"),
        )

    def _on_apply(self):
        try:
            filters = self.get_filters()
        except InvalidFieldValueError:
            if self.on_error:
                self.on_error(messages.FILTER_INVALID_PRICE)
            return

        self.on_apply(filters)

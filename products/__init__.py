#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Products Module - Moduł katalogu produktów

Architektura:
─────────────────────────────────────────────────────────────
    GUI Layer (products.gui)
         │
         ▼
    CatalogStore (products.state)   ← stan listy w oknie
         │
         ▼
    ProductService (products.service) ← główny punkt wejścia
         │
         ├────────────────────┐
         ▼                    ▼
    ProductRepository    CategoryRepository
         │                    │
         ▼                    ▼
    Supabase: products   Supabase: categories
─────────────────────────────────────────────────────────────

Użycie:
    from products import create_product_service, CatalogStore, FilterConfiguration

    service = create_product_service()
    store = CatalogStore(service)
    store.load(FilterConfiguration.from_form(price_min="10", sort_by="price"))
"""

from products.models import (
    Product,
    Category,
    FilterConfiguration,
    SortField,
    SortOrder,
    CatalogState,
    LoadStatus,
)
from products.repository import ProductRepository, CategoryRepository
from products.service import ProductService, create_product_service
from products.state import CatalogStore

__all__ = [
    # Główny punkt wejścia
    'ProductService',
    'create_product_service',
    'CatalogStore',

    # Modele
    'Product',
    'Category',
    'FilterConfiguration',
    'SortField',
    'SortOrder',
    'CatalogState',
    'LoadStatus',

    # Repozytoria
    'ProductRepository',
    'CategoryRepository',
]

#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Products GUI Module - Interfejs użytkownika dla produktów

Komponenty:
- ProductsWindow: Główne okno listy produktów z filtrami
- FilterPanel: Zwijany panel filtrów
- ProductEditDialog: Dialog edycji/dodawania produktu

Użycie:
    from products.gui import ProductsWindow

    window = ProductsWindow(parent, auth_service=auth, on_logout=show_login)
"""

from products.gui.products_window import ProductsWindow
from products.gui.filter_panel import FilterPanel
from products.gui.product_edit_dialog import ProductEditDialog

__all__ = [
    'ProductsWindow',
    'FilterPanel',
    'ProductEditDialog',
]

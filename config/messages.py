#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Komunikaty dla użytkownika (interfejs po hiszpańsku)

Wszystkie teksty wyświetlane w oknach i zwracane przez serwisy
są zebrane tutaj, żeby nie rozpraszać ich po kodzie.
"""

# ============================================================
# SESJA / LOGOWANIE
# ============================================================

LOGIN_MISSING_FIELDS = "Por favor ingrese email y contraseña"
LOGIN_INVALID_CREDENTIALS = "Credenciales inválidas"
LOGIN_FAILED = "Error al iniciar sesión. Por favor intente nuevamente."
LOGIN_UNKNOWN_ERROR = "Ocurrió un error desconocido al iniciar sesión."
LOGIN_IN_PROGRESS = "Iniciando sesión..."
NO_ACTIVE_SESSION = "No hay sesión activa"
SESSION_UNKNOWN_ERROR = "Ocurrió un error desconocido"

# Sygnał błędnych danych logowania zwracany przez Supabase Auth
BACKEND_INVALID_CREDENTIALS = "Invalid login credentials"

# ============================================================
# PRODUKTY
# ============================================================

PRODUCTS_LOAD_ERROR = "Error desconocido al cargar productos"
PRODUCTS_RELOAD_ERROR = "Error al cargar los productos"
PRODUCT_NOT_FOUND = "Producto no encontrado"
PRODUCT_FETCH_ERROR = "Error al obtener el producto"
PRODUCT_CREATE_ERROR = "Error desconocido al crear el producto"
PRODUCT_UPDATE_ERROR = "Error al actualizar el producto"
PRODUCT_DELETE_ERROR = "Error al eliminar el producto"
PRODUCT_CREATED = "Producto creado"
PRODUCT_UPDATED = "Producto actualizado"
PRODUCT_DELETED = "Producto eliminado"
PRODUCT_ID_MISSING = "ID de producto no proporcionado"

# Walidacja formularza
FORM_INCOMPLETE = "Por favor, completa todos los campos."
FORM_EMPTY_ID = "El ID no puede estar vacío."
FORM_EMPTY_NAME = "El nombre no puede estar vacío."
FORM_INVALID_PRICE = "El precio debe ser un número válido."
FORM_INVALID_CATEGORY = "Selecciona una categoría válida."
FILTER_INVALID_PRICE = "El filtro de precio debe ser un número válido."

CONFIRM_DELETE = "¿Estás seguro de que deseas eliminar el producto {name}?"

# ============================================================
# KATEGORIE
# ============================================================

CATEGORIES_LOAD_ERROR = "Error al cargar categorías"
CATEGORY_UNKNOWN = "N/A"
CATEGORY_PLACEHOLDER = "Selecciona una categoría"

# ============================================================
# WIDOKI
# ============================================================

EMPTY_TABLE = "No hay productos disponibles"
RELOADING = "Recargando productos..."

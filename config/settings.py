#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Konfiguracja aplikacji Product Catalog Desk
Katalog produktów z kategoriami (Supabase)

UWAGA: Klucze trzymaj w pliku .env, nigdy w repozytorium!
"""

import os
from dotenv import load_dotenv

# Wczytaj zmienne środowiskowe z .env
load_dotenv()

# ============================================================
# SUPABASE - KONFIGURACJA POŁĄCZENIA
# ============================================================

SUPABASE_URL = os.getenv("SUPABASE_URL", "")

# ANON KEY - logowanie hasłem wymaga klucza publicznego (RLS aktywne)
SUPABASE_KEY = os.getenv("SUPABASE_KEY", "")

# ============================================================
# TABELE
# ============================================================

PRODUCTS_TABLE = os.getenv("PRODUCTS_TABLE", "products")
CATEGORIES_TABLE = os.getenv("CATEGORIES_TABLE", "categories")

# ============================================================
# GUI - USTAWIENIA INTERFEJSU
# ============================================================

# Domyślny rozmiar okna katalogu
DEFAULT_WINDOW_SIZE = "1100x700"

# Okno logowania
LOGIN_WINDOW_SIZE = "420x480"

# Wysokość wiersza w TreeView
TREEVIEW_ROW_HEIGHT = 30

# Motyw CustomTkinter
CTK_APPEARANCE_MODE = os.getenv("CTK_APPEARANCE_MODE", "light")  # "dark", "light", "system"
CTK_COLOR_THEME = "blue"                                          # "blue", "green", "dark-blue"

# ============================================================
# LOGOWANIE
# ============================================================

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


# ============================================================
# WALIDACJA KONFIGURACJI
# ============================================================

def validate_config():
    """
    Sprawdź czy konfiguracja jest poprawna.
    Wywołaj przy starcie aplikacji.
    """
    errors = []

    if not SUPABASE_URL:
        errors.append("SUPABASE_URL nie jest ustawiony")
    elif not SUPABASE_URL.startswith(("http://", "https://")):
        errors.append("SUPABASE_URL musi zaczynać się od http:// lub https://")

    if not SUPABASE_KEY:
        errors.append("SUPABASE_KEY nie jest ustawiony")

    if not PRODUCTS_TABLE or not CATEGORIES_TABLE:
        errors.append("Nazwy tabel nie mogą być puste")

    if errors:
        raise ValueError(f"Błędy konfiguracji: {', '.join(errors)}")

    return True


if __name__ == "__main__":
    print("=" * 60)
    print("KONFIGURACJA Product Catalog Desk")
    print("=" * 60)
    print(f"Supabase URL: {SUPABASE_URL or '-'}")
    print(f"Tabele: {PRODUCTS_TABLE}, {CATEGORIES_TABLE}")
    print()

    try:
        validate_config()
        print("✅ Konfiguracja poprawna")
    except ValueError as e:
        print(f"❌ {e}")

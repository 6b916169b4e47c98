#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Centralny moduł połączenia z Supabase

Singleton pattern - jeden klient dla całej aplikacji.
Używa ANON KEY, bo sesja użytkownika pochodzi z logowania hasłem.
"""

from typing import Optional
import logging

from supabase import create_client, Client

from config.settings import SUPABASE_URL, SUPABASE_KEY, PRODUCTS_TABLE

logger = logging.getLogger(__name__)


# Globalny klient Supabase
_supabase_client: Optional[Client] = None


def get_supabase_client() -> Client:
    """
    Zwraca singleton instancję klienta Supabase.

    Sesja (po sign_in_with_password) jest trzymana przez klienta,
    więc wszystkie moduły muszą korzystać z tej samej instancji.

    Returns:
        Client: Klient Supabase

    Raises:
        ValueError: Jeśli brak konfiguracji
    """
    global _supabase_client

    if _supabase_client is None:
        if not SUPABASE_URL or not SUPABASE_KEY:
            raise ValueError(
                "[ERROR] Brak konfiguracji Supabase!\n"
                "Sprawdź SUPABASE_URL i SUPABASE_KEY w pliku .env"
            )

        _supabase_client = create_client(SUPABASE_URL, SUPABASE_KEY)
        logger.info("[Supabase] Połączono z Supabase")

    return _supabase_client


def reset_client():
    """
    Resetuj klienta (przydatne do testów).
    """
    global _supabase_client
    _supabase_client = None


def test_connection() -> bool:
    """
    Testuj połączenie z Supabase.

    Returns:
        True jeśli połączenie działa
    """
    try:
        client = get_supabase_client()

        # Prosty test - sprawdź czy można wykonać zapytanie
        client.table(PRODUCTS_TABLE).select("id").limit(1).execute()

        logger.info("[Supabase] Test połączenia zakończony sukcesem")
        return True

    except Exception as e:
        logger.error(f"[Supabase] Test połączenia nie powiódł się: {e}")
        return False


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    print("=" * 60)
    print("TEST POŁĄCZENIA Z SUPABASE")
    print("=" * 60)
    print("[OK]" if test_connection() else "[ERROR]")

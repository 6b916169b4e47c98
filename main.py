#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Product Catalog Desk
Główny plik uruchomieniowy

Uruchomienie:
    python main.py              # Logowanie, potem katalog produktów
    python main.py --products   # Od razu katalog, jeśli sesja już istnieje
    python main.py --test       # Test połączenia
    python main.py --debug      # Więcej logów
"""

import sys
import argparse
import logging
import customtkinter as ctk

from config.settings import (
    CTK_APPEARANCE_MODE, CTK_COLOR_THEME,
    LOG_LEVEL, LOG_FORMAT, validate_config
)

# Konfiguracja logowania
logging.basicConfig(
    level=getattr(logging, LOG_LEVEL, logging.INFO),
    format=LOG_FORMAT
)
logger = logging.getLogger(__name__)


def setup_ctk():
    """Konfiguracja CustomTkinter"""
    ctk.set_appearance_mode(CTK_APPEARANCE_MODE)
    ctk.set_default_color_theme(CTK_COLOR_THEME)


def run_tests():
    """Uruchom test połączenia"""
    from core import test_connection
    return 0 if test_connection() else 1


class CatalogApp:
    """
    Nawigacja między oknami.

    Trasy:
        /                 -> LoginWindow
        /products         -> ProductsWindow
        /addproduct       -> ProductEditDialog()
        /editproduct/{id} -> ProductEditDialog(product=...)

    Dialogi otwiera ProductsWindow; tutaj tylko login <-> katalog.
    """

    def __init__(self):
        from core import get_supabase_client, setup_event_logging
        from auth import create_auth_service
        from products import create_product_service

        client = get_supabase_client()
        setup_event_logging()

        self.auth = create_auth_service(client)
        self.products = create_product_service(client)

        self.root = ctk.CTk()
        self.root.withdraw()
        self.current_window = None

    def show_login(self):
        from auth.gui import LoginWindow

        self._close_current()
        self.current_window = LoginWindow(
            self.root,
            auth_service=self.auth,
            on_success=self.show_products
        )
        self.current_window.protocol("WM_DELETE_WINDOW", self.quit)

    def show_products(self):
        from products.gui import ProductsWindow

        # Katalog tylko przy aktywnej sesji
        has_session, message = self.auth.check_session()
        if not has_session:
            logger.info(f"[App] {message} - redirect to login")
            self.show_login()
            return

        self._close_current()
        self.current_window = ProductsWindow(
            self.root,
            service=self.products,
            auth_service=self.auth,
            on_logout=self.show_login
        )
        self.current_window.protocol("WM_DELETE_WINDOW", self.quit)

    def _close_current(self):
        if self.current_window is not None and self.current_window.winfo_exists():
            self.current_window.destroy()
        self.current_window = None

    def quit(self):
        self._close_current()
        self.root.quit()

    def run(self, start_with_products: bool = False) -> int:
        if start_with_products:
            self.show_products()
        else:
            self.show_login()

        self.root.mainloop()
        return 0


def main():
    """Główna funkcja"""
    parser = argparse.ArgumentParser(description="Product Catalog Desk")
    parser.add_argument('--test', action='store_true', help='Uruchom test połączenia')
    parser.add_argument('--products', action='store_true',
                        help='Pomiń logowanie, jeśli sesja już istnieje')
    parser.add_argument('--debug', action='store_true', help='Tryb debug (więcej logów)')

    args = parser.parse_args()

    # Tryb debug
    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    # Walidacja konfiguracji
    try:
        validate_config()
        logger.info("✓ Konfiguracja OK")
    except ValueError as e:
        print(f"❌ Błąd konfiguracji: {e}")
        print("\nSprawdź plik config/settings.py lub utwórz plik .env")
        return 1

    if args.test:
        return run_tests()

    setup_ctk()
    return CatalogApp().run(start_with_products=args.products)


if __name__ == "__main__":
    sys.exit(main())

#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
LoginWindow - okno logowania (email + hasło)

Funkcjonalności:
- Pola email i hasło, przełącznik pokaż/ukryj hasło
- Logowanie w wątku, przycisk zablokowany w trakcie
- Komunikat błędu pod formularzem
- Po zalogowaniu sprawdza sesję i wywołuje on_success
"""

import customtkinter as ctk
from typing import Callable, Optional
import logging
import threading

from auth.service import AuthService
from config import messages
from config.settings import LOGIN_WINDOW_SIZE

logger = logging.getLogger(__name__)


class LoginWindow(ctk.CTkToplevel):
    """
    Ekran logowania.

    Nie przechodzi sam do katalogu - po zweryfikowanej sesji woła
    on_success i to wywołujący otwiera ProductsWindow.
    """

    def __init__(
        self,
        parent,
        auth_service: AuthService,
        on_success: Callable[[], None] = None
    ):
        super().__init__(parent)

        self.auth = auth_service
        self.on_success = on_success
        self.is_busy = False
        self._password_visible = False

        self.title("Iniciar sesión")
        self.geometry(LOGIN_WINDOW_SIZE)
        self.resizable(False, False)

        self._setup_ui()
        self._setup_bindings()

        self.after(100, self.email_entry.focus_set)

    # =========================================================
    # UI SETUP
    # =========================================================

    def _setup_ui(self):
        """Zbuduj interfejs"""
        self.grid_columnconfigure(0, weight=1)

        ctk.CTkLabel(
            self,
            text="Catálogo de Productos",
            font=ctk.CTkFont(size=20, weight="bold")
        ).grid(row=0, column=0, pady=(40, 5))

        ctk.CTkLabel(
            self,
            text="Inicia sesión para continuar",
            text_color="gray50"
        ).grid(row=1, column=0, pady=(0, 25))

        form = ctk.CTkFrame(self, fg_color="transparent")
        form.grid(row=2, column=0, sticky="ew", padx=40)
        form.grid_columnconfigure(0, weight=1)

        # Email
        ctk.CTkLabel(form, text="Email", anchor="w").grid(row=0, column=0, sticky="w")
        self.email_var = ctk.StringVar()
        self.email_entry = ctk.CTkEntry(
            form,
            textvariable=self.email_var,
            placeholder_text="usuario@ejemplo.com"
        )
        self.email_entry.grid(row=1, column=0, columnspan=2, sticky="ew", pady=(2, 12))

        # Hasło + pokaż/ukryj
        ctk.CTkLabel(form, text="Contraseña", anchor="w").grid(row=2, column=0, sticky="w")
        self.password_var = ctk.StringVar()
        self.password_entry = ctk.CTkEntry(form, textvariable=self.password_var, show="•")
        self.password_entry.grid(row=3, column=0, sticky="ew", pady=(2, 12))

        self.toggle_btn = ctk.CTkButton(
            form,
            text="👁",
            width=36,
            fg_color="gray",
            command=self._toggle_password
        )
        self.toggle_btn.grid(row=3, column=1, padx=(5, 0), pady=(2, 12))

        # Błąd
        self.error_label = ctk.CTkLabel(
            self,
            text="",
            text_color="red",
            wraplength=320
        )
        self.error_label.grid(row=3, column=0, padx=40, pady=(0, 10))

        self.login_btn = ctk.CTkButton(
            self,
            text="Iniciar sesión",
            height=36,
            command=self._on_login
        )
        self.login_btn.grid(row=4, column=0, sticky="ew", padx=40, pady=10)

    def _setup_bindings(self):
        self.email_entry.bind("<Return>", lambda e: self.password_entry.focus_set())
        self.password_entry.bind("<Return>", lambda e: self._on_login())

    def _toggle_password(self):
        """Pokaż / ukryj hasło"""
        self._password_visible = not self._password_visible
        self.password_entry.configure(show="" if self._password_visible else "•")
        self.toggle_btn.configure(text="🙈" if self._password_visible else "👁")

    # =========================================================
    # LOGIN
    # =========================================================

    def _on_login(self):
        if self.is_busy:
            return

        email = self.email_var.get()
        password = self.password_var.get()

        self._set_busy(True)
        self.error_label.configure(text="")

        thread = threading.Thread(
            target=self._login_thread,
            args=(email, password),
            daemon=True
        )
        thread.start()

    def _login_thread(self, email: str, password: str):
        """Wątek logowania: login, potem weryfikacja sesji"""
        success, message = self.auth.login(email, password)
        if success:
            success, message = self.auth.check_session()

        self.after(0, lambda: self._on_login_done(success, message))

    def _on_login_done(self, success: bool, message: Optional[str]):
        if not self.winfo_exists():
            return

        self._set_busy(False)

        if not success:
            self.error_label.configure(text=message or messages.LOGIN_UNKNOWN_ERROR)
            return

        logger.info("[LoginWindow] Session verified")
        if self.on_success:
            self.on_success()

    def _set_busy(self, busy: bool):
        self.is_busy = busy
        self.login_btn.configure(
            state="disabled" if busy else "normal",
            text=messages.LOGIN_IN_PROGRESS if busy else "Iniciar sesión"
        )

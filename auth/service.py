#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
AuthService - bramka sesji przed oknami katalogu

Odpowiedzialność:
- Sprawdzenie czy istnieje aktywna sesja Supabase Auth
- Logowanie email + hasło
- Wylogowanie

Tak jak ProductService: metody publiczne nie rzucają wyjątków,
zwracają (success, komunikat).

Użycie:
    from auth import create_auth_service

    auth = create_auth_service()
    success, message = auth.login("ana@example.com", "secret")
    if success:
        success, message = auth.check_session()
"""

from typing import Optional, Tuple
import logging

from config import messages
from core.events import EventBus, EventType, create_event
from core.exceptions import (
    AuthError,
    InvalidCredentialsError,
    NotAuthenticatedError,
    error_message,
)

logger = logging.getLogger(__name__)


class AuthService:
    """
    Serwis autentykacji oparty o client.auth z supabase-py.

    Example:
        auth = AuthService(get_supabase_client())
        ok, message = auth.check_session()
    """

    def __init__(self, client, event_bus: EventBus = None):
        self.client = client
        self.event_bus = event_bus or EventBus()

    # =========================================================
    # SESSION
    # =========================================================

    def check_session(self) -> Tuple[bool, Optional[str]]:
        """
        Czy istnieje aktywna sesja.

        Returns:
            (True, None) lub (False, komunikat). Brak sesji to wynik
            negatywny, nie wyjątek.
        """
        try:
            session = self.client.auth.get_session()
        except Exception as e:
            logger.error(f"[Auth] Session check failed: {e}")
            return False, error_message(e, messages.SESSION_UNKNOWN_ERROR)

        if not session:
            logger.debug("[Auth] No active session")
            return False, messages.NO_ACTIVE_SESSION

        return True, None

    def current_user_email(self) -> Optional[str]:
        """Email zalogowanego użytkownika (None gdy brak sesji)"""
        try:
            session = self.client.auth.get_session()
        except Exception as e:
            logger.warning(f"[Auth] Cannot read session: {e}")
            return None

        user = getattr(session, 'user', None) if session else None
        return getattr(user, 'email', None)

    # =========================================================
    # LOGIN / LOGOUT
    # =========================================================

    def login(self, email: str, password: str) -> Tuple[bool, Optional[str]]:
        """
        Zaloguj email + hasło.

        Puste pola kończą się od razu komunikatem, bez zapytania do
        Supabase. Po sukcesie wywołujący sprawdza sesję (check_session)
        i dopiero wtedy przechodzi do katalogu.

        Returns:
            (True, None) lub (False, komunikat)
        """
        email = (email or "").strip()
        if not email or not password:
            return False, messages.LOGIN_MISSING_FIELDS

        try:
            self._sign_in(email, password)
        except InvalidCredentialsError:
            logger.warning(f"[Auth] Invalid credentials for {email}")
            return False, messages.LOGIN_INVALID_CREDENTIALS
        except AuthError as e:
            logger.error(f"[Auth] Login failed for {email}: {e}")
            return False, messages.LOGIN_FAILED

        logger.info(f"[Auth] Logged in: {email}")
        self.event_bus.publish(
            create_event(EventType.USER_LOGGED_IN, {'email': email}, source="Auth")
        )
        return True, None

    def logout(self) -> Tuple[bool, Optional[str]]:
        """Wyloguj bieżącą sesję"""
        email = self.current_user_email()

        try:
            self.client.auth.sign_out()
        except Exception as e:
            logger.error(f"[Auth] Logout failed: {e}")
            return False, error_message(e, messages.SESSION_UNKNOWN_ERROR)

        logger.info(f"[Auth] Logged out: {email or '-'}")
        self.event_bus.publish(
            create_event(EventType.USER_LOGGED_OUT, {'email': email}, source="Auth")
        )
        return True, None

    def _sign_in(self, email: str, password: str):
        """
        Wywołanie Supabase Auth przetłumaczone na nasze wyjątki.

        Raises:
            InvalidCredentialsError: Supabase odpowiedział
                "Invalid login credentials"
            AuthError: każdy inny błąd
        """
        try:
            response = self.client.auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except Exception as e:
            if error_message(e, "") == messages.BACKEND_INVALID_CREDENTIALS:
                raise InvalidCredentialsError(email) from e
            raise AuthError(error_message(e, messages.LOGIN_UNKNOWN_ERROR)) from e

        if not getattr(response, 'user', None):
            raise NotAuthenticatedError()

        return response


# =========================================================
# FACTORY
# =========================================================

def create_auth_service(client=None, event_bus: EventBus = None) -> AuthService:
    """
    Factory method do tworzenia AuthService.

    Args:
        client: Opcjonalna instancja Supabase Client
                (jeśli None - użyje get_supabase_client())
    """
    if client is None:
        from core.supabase_client import get_supabase_client
        client = get_supabase_client()

    return AuthService(client, event_bus=event_bus)

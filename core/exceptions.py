"""
Product Catalog - Własne wyjątki
================================
Hierarchia wyjątków dla całej aplikacji.
"""


class CatalogError(Exception):
    """Bazowy wyjątek dla wszystkich błędów katalogu"""

    def __init__(self, message: str, code: str = None, details: dict = None):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def __str__(self):
        if self.details:
            return f"[{self.code}] {self.message} | Details: {self.details}"
        return f"[{self.code}] {self.message}"


# ============================================================
# Validation Errors
# ============================================================

class ValidationError(CatalogError):
    """Błędy walidacji danych (wykryte lokalnie, bez zapytania do bazy)"""
    pass


class InvalidFieldValueError(ValidationError):
    """Nieprawidłowa wartość pola"""

    def __init__(self, field: str, value, reason: str = None):
        msg = f"Invalid value for field '{field}': {value}"
        if reason:
            msg += f" - {reason}"
        super().__init__(
            msg,
            code="INVALID_FIELD_VALUE",
            details={"field": field, "value": str(value), "reason": reason}
        )


# ============================================================
# Authentication Errors
# ============================================================

class AuthError(CatalogError):
    """Błędy autentykacji"""
    pass


class InvalidCredentialsError(AuthError):
    """Błędny email lub hasło"""

    def __init__(self, email: str = None):
        super().__init__(
            "Invalid login credentials",
            code="INVALID_CREDENTIALS",
            details={"email": email} if email else None
        )


class NotAuthenticatedError(AuthError):
    """Użytkownik nie jest zalogowany"""

    def __init__(self):
        super().__init__(
            "User is not authenticated",
            code="NOT_AUTHENTICATED"
        )


# ============================================================
# Backend Errors
# ============================================================

class BackendError(CatalogError):
    """Błąd zgłoszony przez Supabase (odczyt/zapis)"""
    pass


class RecordNotFoundError(BackendError):
    """Rekord nie został znaleziony (0 wierszy przy single())"""

    def __init__(self, entity_type: str, entity_id):
        super().__init__(
            f"{entity_type} with id '{entity_id}' not found",
            code="RECORD_NOT_FOUND",
            details={"entity_type": entity_type, "entity_id": str(entity_id)}
        )



def error_message(error: Exception, fallback: str) -> str:
    """
    Wyciągnij komunikat do pokazania użytkownikowi.

    Wyjątki Supabase (postgrest/gotrue) mają atrybut `message`,
    nasze wyjątki też. Dla pustego komunikatu zwraca fallback.
    """
    message = getattr(error, 'message', None)
    if not isinstance(message, str) or not message:
        message = str(error)
    return message or fallback

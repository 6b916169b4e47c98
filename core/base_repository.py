"""
Product Catalog - Base Repository
=================================
Bazowa klasa repozytorium z CRUD na jednej tabeli Supabase.
Wszystkie repozytoria dziedziczą po tej klasie.
"""

from abc import ABC
from typing import Any, Dict, List, Optional
import logging

from supabase import Client

from core.exceptions import BackendError, RecordNotFoundError
from core.filters import QueryParams, QueryBuilder

logger = logging.getLogger(__name__)

# Kod PostgREST dla single() bez wyników
NO_ROWS_CODE = "PGRST116"


class BaseRepository(ABC):
    """
    Bazowa klasa repozytorium.

    Zapewnia:
    - CRUD operations
    - Query builder integration
    - Mapowanie błędów Supabase na BackendError / RecordNotFoundError

    Usage:
        class CategoryRepository(BaseRepository):
            TABLE_NAME = "categories"
            ENTITY_NAME = "Category"
    """

    # Subklasy muszą zdefiniować
    TABLE_NAME: str = None
    ENTITY_NAME: str = None

    ID_COLUMN = "id"

    def __init__(self, client: Client):
        self.client = client

        # Walidacja
        if not self.TABLE_NAME:
            raise ValueError(f"{self.__class__.__name__} must define TABLE_NAME")
        if not self.ENTITY_NAME:
            self.ENTITY_NAME = self.TABLE_NAME

    # ============================================================
    # Core CRUD Operations
    # ============================================================

    def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Utwórz nowy rekord.

        Args:
            data: Dane do zapisania (razem z id, jeśli nadaje je klient)

        Returns:
            Utworzony rekord

        Raises:
            BackendError: Błąd bazy (np. duplikat klucza)
        """
        try:
            response = self.client.table(self.TABLE_NAME)\
                .insert(data)\
                .execute()
        except Exception as e:
            logger.error(f"[{self.ENTITY_NAME}] Create failed: {e}")
            raise BackendError(self._message(e)) from e

        if not response.data:
            raise BackendError(f"Failed to create {self.ENTITY_NAME}")

        record = response.data[0]
        logger.info(f"[{self.ENTITY_NAME}] Created: {record.get(self.ID_COLUMN)}")
        return record

    def get_by_id(self, id: Any) -> Dict[str, Any]:
        """
        Pobierz rekord po ID.

        Raises:
            RecordNotFoundError: Jeśli zapytanie zwróciło 0 wierszy
            BackendError: Inne błędy bazy
        """
        try:
            response = self.client.table(self.TABLE_NAME)\
                .select('*')\
                .eq(self.ID_COLUMN, id)\
                .single()\
                .execute()
        except Exception as e:
            if self._is_no_rows(e):
                raise RecordNotFoundError(self.ENTITY_NAME, id) from e
            logger.error(f"[{self.ENTITY_NAME}] Get by ID failed: {e}")
            raise BackendError(self._message(e)) from e

        if not response.data:
            raise RecordNotFoundError(self.ENTITY_NAME, id)
        return response.data

    def update(self, id: Any, data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Aktualizuj rekord (tylko przekazane pola).

        Returns:
            Zaktualizowany rekord lub None, jeśli baza nic nie zwróciła
        """
        data = {k: v for k, v in data.items() if k != self.ID_COLUMN}

        try:
            response = self.client.table(self.TABLE_NAME)\
                .update(data)\
                .eq(self.ID_COLUMN, id)\
                .execute()
        except Exception as e:
            logger.error(f"[{self.ENTITY_NAME}] Update failed: {e}")
            raise BackendError(self._message(e)) from e

        logger.info(f"[{self.ENTITY_NAME}] Updated: {id} ({', '.join(data)})")
        return response.data[0] if response.data else None

    def delete(self, id: Any) -> int:
        """
        Usuń rekord.

        Returns:
            Liczba usuniętych wierszy (0 dla nieistniejącego ID)
        """
        try:
            response = self.client.table(self.TABLE_NAME)\
                .delete()\
                .eq(self.ID_COLUMN, id)\
                .execute()
        except Exception as e:
            logger.error(f"[{self.ENTITY_NAME}] Delete failed: {e}")
            raise BackendError(self._message(e)) from e

        count = len(response.data) if response.data else 0
        logger.info(f"[{self.ENTITY_NAME}] Deleted: {id} ({count} rows)")
        return count

    # ============================================================
    # Query Methods
    # ============================================================

    def list(self, params: QueryParams = None) -> List[Dict[str, Any]]:
        """
        Pobierz listę rekordów z filtrami.

        Args:
            params: Parametry zapytania

        Returns:
            Lista rekordów
        """
        if params is None:
            params = QueryParams()

        builder = QueryBuilder(self.client, self.TABLE_NAME)
        return builder.apply(params).execute()

    # ============================================================
    # Helpers
    # ============================================================

    @staticmethod
    def _is_no_rows(error: Exception) -> bool:
        """Czy błąd oznacza brak wiersza przy single()"""
        if getattr(error, 'code', None) == NO_ROWS_CODE:
            return True
        text = str(error)
        return NO_ROWS_CODE in text or "0 rows" in text or "No rows" in text

    @staticmethod
    def _message(error: Exception) -> str:
        return getattr(error, 'message', None) or str(error)

#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
CatalogStore - stan listy produktów dla jednego okna katalogu

Przejścia: IDLE -> LOADING -> (LOADED | ERRORED), każde load() zaczyna od nowa.

Ładowania mogą się nakładać (wątki z GUI). Każde load() dostaje kolejny
numer generacji i tylko wynik z najnowszej generacji trafia do stanu;
starsze wyniki są odrzucane.
"""

from typing import Callable, List, Optional, Set
import logging
import threading

from config import messages
from products.models import CatalogState, FilterConfiguration, LoadStatus
from products.service import ProductService

logger = logging.getLogger(__name__)

StateListener = Callable[[CatalogState], None]


class CatalogStore:
    """
    Właściciel CatalogState - jedna instancja na okno.

    Example:
        store = CatalogStore(service)
        store.subscribe(lambda state: render(state))
        store.load(FilterConfiguration(sort_by=SortField.PRICE))
        store.remove("P-001")
    """

    def __init__(self, service: ProductService):
        self.service = service
        self.state = CatalogState()
        self.filters = FilterConfiguration()

        self._generation = 0
        # Usunięte od startu bieżącego ładowania - wynik pobrany przed
        # usunięciem nie może ich przywrócić
        self._removed_ids: Set[str] = set()
        self._lock = threading.Lock()
        self._listeners: List[StateListener] = []

    # =========================================================
    # SUBSCRIPTIONS
    # =========================================================

    def subscribe(self, listener: StateListener) -> None:
        """Dodaj listener wywoływany po każdej zmianie stanu"""
        self._listeners.append(listener)

    def unsubscribe(self, listener: StateListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self, state: CatalogState) -> None:
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception as e:
                logger.error(f"[CatalogStore] Listener error: {e}", exc_info=True)

    # =========================================================
    # OPERATIONS
    # =========================================================

    def load(self, filters: Optional[FilterConfiguration] = None) -> bool:
        """
        Załaduj produkty wg filtrów (None = ostatnio użyte filtry).

        Blokuje do zakończenia zapytania - GUI wywołuje to w wątku.

        Returns:
            True jeśli wynik został zapisany w stanie,
            False jeśli w międzyczasie rozpoczęto nowsze ładowanie
        """
        with self._lock:
            if filters is not None:
                self.filters = filters
            self._generation += 1
            generation = self._generation
            self._removed_ids.clear()
            active_filters = self.filters
            loading = CatalogState(
                products=self.state.products,
                loading=True,
                error=None,
                status=LoadStatus.LOADING
            )
            self.state = loading

        self._notify(loading)

        success, result = self.service.fetch_products(active_filters)

        with self._lock:
            if generation != self._generation:
                logger.debug(
                    f"[CatalogStore] Discarding stale load #{generation} "
                    f"(latest #{self._generation})"
                )
                return False

            if success:
                new_state = CatalogState(
                    products=tuple(p for p in result if p.id not in self._removed_ids),
                    loading=False,
                    error=None,
                    status=LoadStatus.LOADED
                )
            else:
                new_state = CatalogState(
                    products=(),
                    loading=False,
                    error=result or messages.PRODUCTS_RELOAD_ERROR,
                    status=LoadStatus.ERRORED
                )
            self.state = new_state

        self._notify(new_state)
        return True

    def remove(self, product_id: str) -> bool:
        """
        Usuń produkt (potwierdzenie należy do okna).

        Sukces: produkt znika z listy w pamięci, bez przeładowania.
        Błąd: ustawiony komunikat, lista bez zmian.

        Returns:
            True jeśli usunięto
        """
        success, message = self.service.delete_product(product_id)

        with self._lock:
            current = self.state
            if success:
                self._removed_ids.add(product_id)
                new_state = CatalogState(
                    products=tuple(p for p in current.products if p.id != product_id),
                    loading=current.loading,
                    error=None,
                    status=current.status
                )
            else:
                new_state = CatalogState(
                    products=current.products,
                    loading=current.loading,
                    error=message or messages.PRODUCT_DELETE_ERROR,
                    status=current.status
                )
            self.state = new_state

        self._notify(new_state)
        return success

"""
Product Catalog - Event Bus
===========================
Serwisy ogłaszają udane zmiany (produkt, sesja), a zainteresowani
(logowanie, okna) słuchają bez zależności od serwisów.

Serwisy działają w wątkach roboczych GUI, więc lista handlerów
jest chroniona lockiem. Handlery wywoływane są poza lockiem.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional
from enum import Enum
import threading
import uuid
import logging

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Typy zdarzeń katalogu"""

    # Produkty
    PRODUCT_CREATED = "product.created"
    PRODUCT_UPDATED = "product.updated"
    PRODUCT_DELETED = "product.deleted"

    # Sesja
    USER_LOGGED_IN = "system.user_logged_in"
    USER_LOGGED_OUT = "system.user_logged_out"


@dataclass
class Event:
    """Jedno zdarzenie: typ, payload i skąd przyszło"""
    type: EventType
    data: Dict[str, Any]
    source: Optional[str] = None
    timestamp: datetime = field(default_factory=datetime.now)
    event_id: str = field(default_factory=lambda: uuid.uuid4().hex)

    @property
    def short_id(self) -> str:
        return self.event_id[:8]

    def to_dict(self) -> dict:
        return {
            "event_id": self.event_id,
            "type": self.type.value,
            "source": self.source,
            "timestamp": self.timestamp.isoformat(),
            "data": self.data,
        }


EventHandler = Callable[[Event], None]


class EventBus:
    """
    Jeden bus na proces (singleton).

    Użycie:
        EventBus().subscribe(EventType.PRODUCT_DELETED, on_deleted)
        EventBus().publish(create_event(EventType.PRODUCT_DELETED, {"id": "P-1"}))
    """

    _instance = None
    _instance_lock = threading.Lock()

    def __new__(cls):
        with cls._instance_lock:
            if cls._instance is None:
                bus = super().__new__(cls)
                bus._lock = threading.Lock()
                bus._handlers = {}
                bus._global_handlers = []
                cls._instance = bus
        return cls._instance

    @classmethod
    def reset(cls):
        """Nowa instancja przy następnym EventBus() - dla testów"""
        with cls._instance_lock:
            cls._instance = None

    def subscribe(self, event_type: EventType, handler: EventHandler) -> None:
        with self._lock:
            self._handlers.setdefault(event_type, []).append(handler)
        logger.debug(f"[EventBus] + handler for {event_type.value}")

    def subscribe_all(self, handler: EventHandler) -> None:
        """Handler dostaje każde zdarzenie"""
        with self._lock:
            self._global_handlers.append(handler)

    def unsubscribe(self, event_type: EventType, handler: EventHandler) -> bool:
        """
        Returns:
            False jeśli handler nie był zapisany
        """
        with self._lock:
            handlers = self._handlers.get(event_type)
            if not handlers or handler not in handlers:
                return False
            handlers.remove(handler)
        logger.debug(f"[EventBus] - handler for {event_type.value}")
        return True

    def publish(self, event: Event) -> None:
        """
        Wywołaj handlery synchronicznie, w wątku publikującego.

        Wyjątek handlera jest logowany i nie zatrzymuje kolejnych.
        """
        with self._lock:
            targets = list(self._handlers.get(event.type, ())) + list(self._global_handlers)

        logger.debug(
            f"[EventBus] {event.type.value} #{event.short_id} -> {len(targets)} handler(s)"
        )

        for handler in targets:
            try:
                handler(event)
            except Exception as e:
                logger.error(
                    f"[EventBus] Handler {getattr(handler, '__name__', handler)} "
                    f"failed on {event.type.value}: {e}",
                    exc_info=True
                )

    def clear(self) -> None:
        with self._lock:
            self._handlers.clear()
            self._global_handlers.clear()

    def get_handler_count(self, event_type: EventType = None) -> int:
        """Liczba handlerów dla typu albo wszystkich (razem z globalnymi)"""
        with self._lock:
            if event_type is not None:
                return len(self._handlers.get(event_type, ()))
            return sum(map(len, self._handlers.values())) + len(self._global_handlers)


def create_event(
    event_type: EventType,
    data: Dict[str, Any],
    source: str = None
) -> Event:
    return Event(type=event_type, data=data, source=source)


# ============================================================
# Logowanie zdarzeń
# ============================================================

def logging_handler(event: Event) -> None:
    logger.info(
        f"[EVENT] {event.type.value} #{event.short_id} | "
        f"Source: {event.source or 'system'} | {event.data}"
    )


def setup_event_logging():
    """Loguj wszystkie zdarzenia (raz na proces)"""
    EventBus().subscribe_all(logging_handler)

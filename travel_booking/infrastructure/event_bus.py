from typing import Callable, Dict, List, Optional, Type

from travel_booking.application import interfaces as ports
from travel_booking.domain import DomainEvent
from travel_booking.logger import get_logger


class InMemoryEventBus(ports.EventBus):
    """Реализация шины событий в памяти."""

    def __init__(self, logger: Optional[ports.Logger] = None):
        self._subscribers: Dict[Type[DomainEvent], List[Callable]] = {}
        self._logger = logger or get_logger(__name__)

    def publish(self, event: DomainEvent) -> None:
        """Публикует событие всем подписчикам его типа и базовых типов."""
        handlers = [
            handler
            for event_type, type_handlers in self._subscribers.items()
            if isinstance(event, event_type)
            for handler in type_handlers
        ]
        if not handlers:
            self._logger.debug(f"No subscribers for event type {event.event_type}")
            return

        for handler in handlers:
            try:
                handler(event)
            except Exception as e:
                # Ошибка подписчика не должна отменять уже зафиксированную операцию
                self._logger.error(
                    f"Error in event handler for {event.event_type}",
                    error=str(e),
                    event=event.model_dump(mode="json"),
                )

    def subscribe(self, event_type: Type[DomainEvent], handler: Callable) -> None:
        """Подписывает обработчик на события указанного типа."""
        self._subscribers.setdefault(event_type, []).append(handler)
        self._logger.debug(f"Subscribed handler to {event_type.__name__} events")

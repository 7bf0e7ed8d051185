from dataclasses import dataclass
from functools import partial
from typing import Optional

from travel_booking.application import (
    AccountService,
    CatalogService,
    ReportService,
    ReservationService,
)
from travel_booking.application.interfaces import EventBus, Logger, UnitOfWork
from travel_booking.config import Settings
from travel_booking.domain import ReservationEvent
from travel_booking.infrastructure import FileUnitOfWork, InMemoryEventBus
from travel_booking.logger import get_logger


@dataclass
class Application:
    """Настроенные компоненты приложения."""

    settings: Settings
    uow: UnitOfWork
    event_bus: EventBus
    accounts: AccountService
    catalog: CatalogService
    reservations: ReservationService
    reports: ReportService

    def save(self) -> None:
        """Сохраняет все данные."""
        self.uow.commit()


def audit_reservation_event(event: ReservationEvent, logger: Logger) -> None:
    """Записывает событие бронирования в журнал."""
    logger.info(
        f"Reservation event: {event.event_type}",
        reservation_id=event.reservation_id,
        username=event.username,
    )


def bootstrap_app(
    settings: Optional[Settings] = None, uow: Optional[UnitOfWork] = None
) -> Application:
    """Создает и настраивает все компоненты приложения."""
    settings = settings or Settings.from_env()

    # 1. Единица работы поверх каталога с данными
    uow = uow or FileUnitOfWork(
        settings.data_dir, logger=get_logger("travel_booking.storage")
    )

    # 2. Шина событий и журнал аудита
    audit_logger = get_logger("travel_booking.audit")
    event_bus = InMemoryEventBus(logger=get_logger("travel_booking.events"))
    # partial передает логгер в обработчик
    handler = partial(audit_reservation_event, logger=audit_logger)
    event_bus.subscribe(ReservationEvent, handler)

    # 3. Сервисы приложения
    return Application(
        settings=settings,
        uow=uow,
        event_bus=event_bus,
        accounts=AccountService(uow),
        catalog=CatalogService(uow),
        reservations=ReservationService(uow, event_bus=event_bus),
        reports=ReportService(uow),
    )

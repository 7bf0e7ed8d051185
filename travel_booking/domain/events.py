from datetime import datetime, timezone
from typing import Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field


def now() -> datetime:
    """Возвращает текущую дату и время в UTC."""
    return datetime.now(timezone.utc)


class DomainEvent(BaseModel):
    """Базовый класс для всех доменных событий."""

    model_config = ConfigDict(frozen=True)

    event_id: UUID = Field(default_factory=uuid4)
    occurred_on: datetime = Field(default_factory=now)

    @property
    def event_type(self) -> str:
        return type(self).__name__


class ReservationEvent(DomainEvent):
    """Событие жизненного цикла бронирования."""

    reservation_id: int
    username: str


class ReservationRequested(ReservationEvent):
    flight_number: Optional[int] = None
    hotel_id: Optional[int] = None


class ReservationApproved(ReservationEvent):
    pass


class ReservationRejected(ReservationEvent):
    pass


class CancellationRequested(ReservationEvent):
    pass


class ReservationCancelled(ReservationEvent):
    pass


class CancellationDenied(ReservationEvent):
    pass

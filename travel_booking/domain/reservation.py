"""
Агрегат "Бронирование" и его жизненный цикл.

Бронирование относится либо к рейсу, либо к отелю и проходит через статусы:

    Pending -> Approved | Rejected
    Approved -> Cancel Requested
    Cancel Requested -> Cancelled | Approved
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, PrivateAttr, model_validator

from .events import (
    CancellationDenied,
    CancellationRequested,
    DomainEvent,
    ReservationApproved,
    ReservationCancelled,
    ReservationRejected,
    ReservationRequested,
)
from .exceptions import BusinessRuleValidationException

# Значение, которым в отчетах и списках обозначается отсутствующая ссылка
NO_REFERENCE = -1


class ReservationStatus(str, Enum):
    """Статусы бронирования. Значения сохраняются в файлы как есть."""

    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"
    CANCELLED = "Cancelled"
    CANCEL_REQUESTED = "Cancel Requested"


class Reservation(BaseModel):
    """Бронирование места на рейсе или номера в отеле."""

    reservation_id: int = Field(..., gt=0)
    username: str = Field(..., min_length=1)
    flight_number: Optional[int] = Field(None, gt=0)
    hotel_id: Optional[int] = Field(None, gt=0)
    status: ReservationStatus = ReservationStatus.PENDING

    _events: List[DomainEvent] = PrivateAttr(default_factory=list)

    @model_validator(mode="after")
    def exactly_one_target(self) -> "Reservation":
        if (self.flight_number is None) == (self.hotel_id is None):
            raise ValueError("Бронирование должно ссылаться либо на рейс, либо на отель")
        return self

    @classmethod
    def request_flight(
        cls, reservation_id: int, username: str, flight_number: int
    ) -> "Reservation":
        """Создает заявку на место на рейсе."""
        reservation = cls(
            reservation_id=reservation_id,
            username=username,
            flight_number=flight_number,
        )
        reservation._record_requested()
        return reservation

    @classmethod
    def request_hotel(
        cls, reservation_id: int, username: str, hotel_id: int
    ) -> "Reservation":
        """Создает заявку на номер в отеле."""
        reservation = cls(
            reservation_id=reservation_id,
            username=username,
            hotel_id=hotel_id,
        )
        reservation._record_requested()
        return reservation

    @property
    def is_flight(self) -> bool:
        return self.flight_number is not None

    @property
    def is_hotel(self) -> bool:
        return self.hotel_id is not None

    @property
    def flight_ref(self) -> int:
        return self.flight_number if self.flight_number is not None else NO_REFERENCE

    @property
    def hotel_ref(self) -> int:
        return self.hotel_id if self.hotel_id is not None else NO_REFERENCE

    def approve(self) -> None:
        """Одобряет заявку администратором."""
        self._transition(
            ReservationStatus.PENDING,
            ReservationStatus.APPROVED,
            "Одобрить можно только ожидающее бронирование",
        )
        self._events.append(self._event(ReservationApproved))

    def reject(self) -> None:
        """Отклоняет заявку администратором."""
        self._transition(
            ReservationStatus.PENDING,
            ReservationStatus.REJECTED,
            "Отклонить можно только ожидающее бронирование",
        )
        self._events.append(self._event(ReservationRejected))

    def request_cancellation(self) -> None:
        """Пользователь просит отменить одобренное бронирование."""
        self._transition(
            ReservationStatus.APPROVED,
            ReservationStatus.CANCEL_REQUESTED,
            "Отменить можно только одобренное бронирование",
        )
        self._events.append(self._event(CancellationRequested))

    def confirm_cancellation(self) -> None:
        """Администратор подтверждает отмену."""
        self._transition(
            ReservationStatus.CANCEL_REQUESTED,
            ReservationStatus.CANCELLED,
            "Нет запроса на отмену этого бронирования",
        )
        self._events.append(self._event(ReservationCancelled))

    def deny_cancellation(self) -> None:
        """Администратор отказывает в отмене, бронирование снова одобрено."""
        self._transition(
            ReservationStatus.CANCEL_REQUESTED,
            ReservationStatus.APPROVED,
            "Нет запроса на отмену этого бронирования",
        )
        self._events.append(self._event(CancellationDenied))

    def pull_domain_events(self) -> List[DomainEvent]:
        events = list(self._events)
        self._events.clear()
        return events

    def _transition(
        self, expected: ReservationStatus, target: ReservationStatus, message: str
    ) -> None:
        if self.status != expected:
            raise BusinessRuleValidationException(
                f"{message} (бронирование {self.reservation_id} "
                f"в статусе '{self.status.value}')"
            )
        self.status = target

    def _record_requested(self) -> None:
        self._events.append(
            ReservationRequested(
                reservation_id=self.reservation_id,
                username=self.username,
                flight_number=self.flight_number,
                hotel_id=self.hotel_id,
            )
        )

    def _event(self, event_class):
        return event_class(reservation_id=self.reservation_id, username=self.username)

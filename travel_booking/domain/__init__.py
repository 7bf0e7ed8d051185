"""
Доменная модель системы бронирования рейсов и отелей.
"""

from .availability import (
    bookable_rooms,
    bookable_seats,
    count_reservations,
    displayed_rooms,
    displayed_seats,
)
from .catalog import Flight, Hotel
from .events import (
    CancellationDenied,
    CancellationRequested,
    DomainEvent,
    ReservationApproved,
    ReservationCancelled,
    ReservationEvent,
    ReservationRejected,
    ReservationRequested,
)
from .exceptions import (
    AuthenticationException,
    BusinessRuleValidationException,
    DomainException,
    EntityNotFoundException,
)
from .reservation import NO_REFERENCE, Reservation, ReservationStatus
from .user import User

__all__ = [
    # Сущности
    "User",
    "Flight",
    "Hotel",
    "Reservation",
    "ReservationStatus",
    "NO_REFERENCE",
    # События
    "DomainEvent",
    "ReservationEvent",
    "ReservationRequested",
    "ReservationApproved",
    "ReservationRejected",
    "CancellationRequested",
    "ReservationCancelled",
    "CancellationDenied",
    # Исключения
    "DomainException",
    "BusinessRuleValidationException",
    "EntityNotFoundException",
    "AuthenticationException",
    # Доступность
    "count_reservations",
    "bookable_seats",
    "displayed_seats",
    "bookable_rooms",
    "displayed_rooms",
]

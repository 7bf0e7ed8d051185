"""
Учет доступности мест на рейсах и номеров в отелях.

Вместимость рейса или отеля не меняется при бронировании, свободные места
вычисляются по списку бронирований:

* "bookable" - вместимость минус одобренные бронирования. Используется при
  приеме новой заявки и при ее одобрении, чтобы не допустить овербукинга.
* "displayed" - вместимость минус ожидающие и одобренные бронирования, но не
  меньше нуля. Показывается пользователю при выборе рейса или отеля.
"""

from typing import Iterable, Optional

from .catalog import Flight, Hotel
from .reservation import Reservation, ReservationStatus


def count_reservations(
    reservations: Iterable[Reservation],
    *,
    status: ReservationStatus,
    flight_number: Optional[int] = None,
    hotel_id: Optional[int] = None,
) -> int:
    """Считает бронирования рейса или отеля в указанном статусе."""
    if (flight_number is None) == (hotel_id is None):
        raise ValueError("Укажите либо номер рейса, либо идентификатор отеля")

    count = 0
    for reservation in reservations:
        if reservation.status != status:
            continue
        if flight_number is not None and reservation.flight_number == flight_number:
            count += 1
        elif hotel_id is not None and reservation.hotel_id == hotel_id:
            count += 1
    return count


def bookable_seats(flight: Flight, reservations: Iterable[Reservation]) -> int:
    approved = count_reservations(
        reservations,
        status=ReservationStatus.APPROVED,
        flight_number=flight.flight_number,
    )
    return flight.seats_available - approved


def displayed_seats(flight: Flight, reservations: Iterable[Reservation]) -> int:
    reservations = list(reservations)
    taken = sum(
        count_reservations(
            reservations, status=status, flight_number=flight.flight_number
        )
        for status in (ReservationStatus.PENDING, ReservationStatus.APPROVED)
    )
    return max(0, flight.seats_available - taken)


def bookable_rooms(hotel: Hotel, reservations: Iterable[Reservation]) -> int:
    approved = count_reservations(
        reservations, status=ReservationStatus.APPROVED, hotel_id=hotel.hotel_id
    )
    return hotel.rooms_available - approved


def displayed_rooms(hotel: Hotel, reservations: Iterable[Reservation]) -> int:
    reservations = list(reservations)
    taken = sum(
        count_reservations(reservations, status=status, hotel_id=hotel.hotel_id)
        for status in (ReservationStatus.PENDING, ReservationStatus.APPROVED)
    )
    return max(0, hotel.rooms_available - taken)

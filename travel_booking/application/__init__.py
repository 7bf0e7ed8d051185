"""
Прикладной слой: сервисы приложения, DTO и порты.
"""

from .dto import AdminNotificationsDTO, FlightDTO, HotelDTO, ReservationDTO, UserDTO
from .services import AccountService, CatalogService, ReportService, ReservationService

__all__ = [
    "AccountService",
    "CatalogService",
    "ReservationService",
    "ReportService",
    "UserDTO",
    "FlightDTO",
    "HotelDTO",
    "ReservationDTO",
    "AdminNotificationsDTO",
]

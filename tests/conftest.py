"""
Общие фикстуры для тестов.
"""

import pytest

from travel_booking.application import (
    AccountService,
    CatalogService,
    ReportService,
    ReservationService,
)
from travel_booking.infrastructure import InMemoryEventBus, InMemoryUnitOfWork


@pytest.fixture
def uow() -> InMemoryUnitOfWork:
    """Чистая единица работы в памяти."""
    return InMemoryUnitOfWork()


@pytest.fixture
def event_bus() -> InMemoryEventBus:
    return InMemoryEventBus()


@pytest.fixture
def accounts(uow: InMemoryUnitOfWork) -> AccountService:
    return AccountService(uow)


@pytest.fixture
def catalog(uow: InMemoryUnitOfWork) -> CatalogService:
    return CatalogService(uow)


@pytest.fixture
def reservations(
    uow: InMemoryUnitOfWork, event_bus: InMemoryEventBus
) -> ReservationService:
    return ReservationService(uow, event_bus=event_bus)


@pytest.fixture
def reports(uow: InMemoryUnitOfWork) -> ReportService:
    return ReportService(uow)


@pytest.fixture
def seeded(accounts: AccountService, catalog: CatalogService) -> None:
    """Администратор, два пользователя, рейс на 2 места и отель на 1 номер."""
    accounts.register("admin", "secret", is_admin=True)
    accounts.register("alice", "pass1")
    accounts.register("bob", "pass2")
    catalog.add_flight(101, "Lisbon", "Porto", "08:00", "09:00", 2)
    catalog.add_hotel(7, "Sea View", "Porto", 1)

import pytest

from travel_booking.application import ReportService, ReservationService


def test_empty_report(reports: ReportService, tmp_path):
    path = reports.generate(tmp_path / "report.txt")

    assert path.read_text(encoding="utf-8") == "No reservations available.\n"


@pytest.mark.usefixtures("seeded")
def test_report_lists_all_reservations(
    reports: ReportService, reservations: ReservationService, tmp_path
):
    """Тест: в отчете отсутствующая ссылка записывается как 0."""
    flight = reservations.reserve_flight("alice", 101)
    reservations.reserve_hotel("bob", 7)
    reservations.decide_reservation(flight.reservation_id, approve=True)

    path = reports.generate(tmp_path / "reports" / "report.txt")

    assert path.read_text(encoding="utf-8").splitlines() == [
        "Reservations Report:",
        "ID | User | Flight | Hotel | Status",
        "1001 | alice | 101 | 0 | Approved",
        "1002 | bob | 0 | 7 | Pending",
    ]

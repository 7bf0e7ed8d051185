"""
Генераторы идентификаторов бронирований.
"""

from pathlib import Path
from typing import Optional, Union

from travel_booking.application import interfaces as ports
from travel_booking.logger import get_logger

# Первый выданный идентификатор будет INITIAL_LAST_ID + 1
INITIAL_LAST_ID = 1000


class InMemoryReservationIdSequence(ports.ReservationIdSequence):
    """Счетчик идентификаторов в памяти."""

    def __init__(self, last_id: int = INITIAL_LAST_ID):
        self._last_id = last_id

    @property
    def last_id(self) -> int:
        return self._last_id

    def next_id(self) -> int:
        self._last_id += 1
        self._save()
        return self._last_id

    def ensure_at_least(self, value: int) -> None:
        if value > self._last_id:
            self._last_id = value

    def _save(self) -> None:
        pass


class FileReservationIdSequence(InMemoryReservationIdSequence):
    """Счетчик, сохраняющий последний выданный идентификатор в текстовый файл.

    Каждый выданный идентификатор сразу записывается на диск, поэтому
    после перезапуска нумерация продолжается с того же места.
    """

    def __init__(
        self,
        file_path: Union[str, Path],
        initial_last_id: int = INITIAL_LAST_ID,
        logger: Optional[ports.Logger] = None,
    ):
        self._file_path = Path(file_path)
        self._logger = logger or get_logger(__name__)
        super().__init__(self._load(initial_last_id))

    @property
    def path(self) -> Path:
        return self._file_path

    def _load(self, default: int) -> int:
        if not self._file_path.exists():
            return default

        raw = self._file_path.read_text(encoding="utf-8").strip()
        try:
            return int(raw)
        except ValueError:
            self._logger.warning(
                "Некорректное содержимое файла счетчика, используется значение по умолчанию",
                path=str(self._file_path),
                content=raw,
            )
            return default

    def _save(self) -> None:
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        self._file_path.write_text(str(self._last_id), encoding="utf-8")

"""
Файловое хранение записей.

* Рейсы и отели хранятся в текстовых файлах, по одной записи в строке,
  поля разделены символом "|". Такие файлы удобно править вручную.
* Пользователи и бронирования хранятся в JSON-файлах.

Отсутствующий файл означает пустое хранилище.
"""

import json
from pathlib import Path
from typing import Generic, List, Optional, Sequence, Type, TypeVar, Union

from pydantic import BaseModel, TypeAdapter, ValidationError

from travel_booking.application.interfaces import Logger
from travel_booking.logger import get_logger

T = TypeVar("T", bound=BaseModel)

FIELD_SEPARATOR = "|"


class RecordFileError(Exception):
    """Файл с записями поврежден и не может быть прочитан."""

    pass


class JsonRecordFile(Generic[T]):
    """Записи, хранящиеся в JSON-файле в виде списка объектов."""

    def __init__(
        self,
        file_path: Union[str, Path],
        model_class: Type[T],
        logger: Optional[Logger] = None,
    ):
        """
        Инициализирует хранилище.

        Args:
            file_path: Путь к JSON-файлу с данными
            model_class: Класс модели данных
            logger: Логгер, по умолчанию логгер модуля
        """
        self._file_path = Path(file_path)
        self._adapter = TypeAdapter(List[model_class])
        self._logger = logger or get_logger(__name__)

    @property
    def path(self) -> Path:
        return self._file_path

    def read(self) -> List[T]:
        """Загружает записи из JSON-файла."""
        if not self._file_path.exists():
            self._logger.info(
                "Файл не найден, начинаем с пустого списка",
                path=str(self._file_path),
            )
            return []

        raw_data = self._file_path.read_text(encoding="utf-8")
        if not raw_data.strip():
            return []

        try:
            return self._adapter.validate_json(raw_data)
        except ValidationError as e:
            raise RecordFileError(
                f"Некорректные данные в файле {self._file_path}: {e}"
            ) from e

    def write(self, items: Sequence[T]) -> None:
        """Сохраняет записи в JSON-файл."""
        # Создаем директорию, если она не существует
        self._file_path.parent.mkdir(parents=True, exist_ok=True)

        data = [item.model_dump(mode="json") for item in items]

        # Сохраняем в файл с отступами для читаемости
        with open(self._file_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)


class DelimitedRecordFile(Generic[T]):
    """Записи, хранящиеся в текстовом файле с разделителем "|"."""

    def __init__(
        self,
        file_path: Union[str, Path],
        model_class: Type[T],
        fields: Sequence[str],
        logger: Optional[Logger] = None,
    ):
        self._file_path = Path(file_path)
        self._model_class = model_class
        self._fields = tuple(fields)
        self._logger = logger or get_logger(__name__)

    @property
    def path(self) -> Path:
        return self._file_path

    def read(self) -> List[T]:
        """Загружает записи из текстового файла.

        Чтение останавливается на первой некорректной строке, уже прочитанные
        записи сохраняются.
        """
        if not self._file_path.exists():
            self._logger.info(
                "Файл не найден, начинаем с пустого списка",
                path=str(self._file_path),
            )
            return []

        items: List[T] = []
        with open(self._file_path, "r", encoding="utf-8") as f:
            for line_number, line in enumerate(f, start=1):
                line = line.rstrip("\r\n")
                if not line.strip():
                    continue
                item = self._parse_line(line)
                if item is None:
                    self._logger.warning(
                        "Некорректная строка, чтение файла остановлено",
                        path=str(self._file_path),
                        line=line_number,
                    )
                    break
                items.append(item)
        return items

    def write(self, items: Sequence[T]) -> None:
        """Сохраняет записи в текстовый файл, перезаписывая его."""
        # Форматируем все строки до открытия файла, чтобы не обрезать его
        # при ошибке в одной из записей
        lines = [self.format_line(item) + "\n" for item in items]
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self._file_path, "w", encoding="utf-8") as f:
            f.writelines(lines)

    def format_line(self, item: T) -> str:
        values = [str(getattr(item, name)) for name in self._fields]
        for value in values:
            if FIELD_SEPARATOR in value or "\n" in value:
                raise RecordFileError(
                    f"Значение {value!r} нельзя сохранить в файл {self._file_path}"
                )
        return FIELD_SEPARATOR.join(values)

    def _parse_line(self, line: str) -> Optional[T]:
        values = line.split(FIELD_SEPARATOR)
        if len(values) != len(self._fields):
            return None
        try:
            return self._model_class(**dict(zip(self._fields, values)))
        except ValidationError:
            return None

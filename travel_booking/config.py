"""
Конфигурация приложения.

Значения берутся из переменных окружения (и файла .env, если он есть):

* TRAVEL_BOOKING_DATA_DIR - каталог с файлами данных (по умолчанию "data")
* TRAVEL_BOOKING_LOG_LEVEL - уровень логирования (по умолчанию WARNING)
* TRAVEL_BOOKING_LOG_FILE - файл для логов; если не задан, логи идут в stderr
* TRAVEL_BOOKING_REPORT_FILE - имя файла отчета по бронированиям
"""

import os
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, field_validator

ENV_PREFIX = "TRAVEL_BOOKING_"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseModel):
    """Настройки приложения."""

    data_dir: Path = Path("data")
    log_level: str = "WARNING"
    log_file: Optional[Path] = None
    report_file: str = "reservations_report.txt"

    @field_validator("log_level")
    @classmethod
    def known_log_level(cls, v: str) -> str:
        v = v.upper()
        if v not in LOG_LEVELS:
            raise ValueError(f"Неизвестный уровень логирования: {v}")
        return v

    @property
    def report_path(self) -> Path:
        return self.data_dir / self.report_file

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Создает настройки из переменных окружения."""
        if environ is None:
            load_dotenv()
            environ = os.environ

        values = {}
        for name in cls.model_fields:
            value = environ.get(ENV_PREFIX + name.upper())
            if value:
                values[name] = value
        return cls(**values)

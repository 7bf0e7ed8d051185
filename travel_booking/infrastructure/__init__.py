"""
Инфраструктурный слой: хранилища в памяти и в файлах, шина событий.
"""

from .event_bus import InMemoryEventBus
from .file_store import DelimitedRecordFile, JsonRecordFile, RecordFileError
from .id_sequence import FileReservationIdSequence, InMemoryReservationIdSequence
from .unit_of_work import FileUnitOfWork, InMemoryUnitOfWork

__all__ = [
    "InMemoryEventBus",
    "JsonRecordFile",
    "DelimitedRecordFile",
    "RecordFileError",
    "InMemoryReservationIdSequence",
    "FileReservationIdSequence",
    "InMemoryUnitOfWork",
    "FileUnitOfWork",
]

"""
Каталог: рейсы и отели, доступные для бронирования.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CatalogEntry(BaseModel):
    """Общие настройки для записей каталога."""

    model_config = ConfigDict(validate_assignment=True, str_strip_whitespace=True)

    @field_validator("*", mode="after")
    @classmethod
    def no_field_separator(cls, v):
        # Записи каталога хранятся в текстовых файлах с разделителем "|"
        if isinstance(v, str) and "|" in v:
            raise ValueError("Поле не может содержать символ '|'")
        if isinstance(v, str) and "\n" in v:
            raise ValueError("Поле не может содержать перевод строки")
        return v


class Flight(CatalogEntry):
    """Рейс."""

    flight_number: int = Field(..., gt=0)
    origin: str = Field(..., min_length=1, max_length=49)
    destination: str = Field(..., min_length=1, max_length=49)
    departure_time: str = Field(..., min_length=1, max_length=19)
    arrival_time: str = Field(..., min_length=1, max_length=19)
    seats_available: int = Field(..., ge=0)  # Вместимость рейса

    def update_details(
        self,
        origin: str,
        destination: str,
        departure_time: str,
        arrival_time: str,
        seats_available: int,
    ) -> None:
        """Заменяет все данные рейса, кроме номера."""
        updated = Flight(
            flight_number=self.flight_number,
            origin=origin,
            destination=destination,
            departure_time=departure_time,
            arrival_time=arrival_time,
            seats_available=seats_available,
        )
        # Сначала проверяем все поля целиком, чтобы не оставить рейс
        # в частично обновленном состоянии
        for name in (
            "origin",
            "destination",
            "departure_time",
            "arrival_time",
            "seats_available",
        ):
            setattr(self, name, getattr(updated, name))


class Hotel(CatalogEntry):
    """Отель."""

    hotel_id: int = Field(..., gt=0)
    name: str = Field(..., min_length=1, max_length=49)
    location: str = Field(..., min_length=1, max_length=99)
    rooms_available: int = Field(..., ge=0)  # Количество номеров в отеле

    def update_details(self, name: str, location: str, rooms_available: int) -> None:
        """Заменяет все данные отеля, кроме идентификатора."""
        updated = Hotel(
            hotel_id=self.hotel_id,
            name=name,
            location=location,
            rooms_available=rooms_available,
        )
        self.name = updated.name
        self.location = updated.location
        self.rooms_available = updated.rooms_available

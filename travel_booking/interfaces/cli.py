"""
Консольный интерфейс системы бронирования.

Тонкий слой меню поверх сервисов приложения. Функции ввода и вывода
передаются в конструктор, что позволяет тестировать меню без терминала.
"""

import argparse
import random
from contextlib import contextmanager
from typing import Callable, Iterable, List, Optional

from pydantic import ValidationError

from travel_booking.application import FlightDTO, HotelDTO, ReservationDTO
from travel_booking.bootstrap import Application, bootstrap_app
from travel_booking.config import LOG_LEVELS, Settings
from travel_booking.domain import DomainException, ReservationStatus
from travel_booking.infrastructure import RecordFileError
from travel_booking.logger import get_logger, setup_logging

logger = get_logger(__name__)

InputFunc = Callable[[str], str]
OutputFunc = Callable[[str], None]


class ConsoleUI:
    """Меню главного экрана, администратора и пользователя."""

    def __init__(
        self,
        app: Application,
        input_func: InputFunc = input,
        output_func: OutputFunc = print,
        rng: Optional[random.Random] = None,
    ):
        self._app = app
        self._input = input_func
        self._output = output_func
        self._rng = rng or random.Random()
        self.current_user: Optional[str] = None

    # Главное меню

    def run(self) -> None:
        """Запускает главное меню до выбора пункта "Выход"."""
        try:
            while self._main_menu():
                pass
        except (EOFError, KeyboardInterrupt):
            self._output("")
        self._app.save()
        self._output("Спасибо, что воспользовались нашей системой. До свидания!")

    def _main_menu(self) -> bool:
        self._output("\nДобро пожаловать в систему бронирования путешествий")
        self._output("1. Вход администратора")
        self._output("2. Вход пользователя")
        self._output("3. Регистрация")
        self._output("4. Выход")
        choice = self._ask_int("Ваш выбор: ")

        if choice == 1:
            if self._login(expect_admin=True):
                self._admin_menu()
        elif choice == 2:
            if self._login(expect_admin=False):
                self._user_menu()
        elif choice == 3:
            self._register()
        elif choice == 4:
            return False
        else:
            self._output("Неверный выбор, попробуйте еще раз.")
        return True

    def _login(self, expect_admin: bool) -> bool:
        username = self._ask("Имя пользователя: ")
        password = self._ask("Пароль: ")
        with self._errors():
            user = self._app.accounts.login(username, password, expect_admin)
            self.current_user = user.username
            return True
        return False

    def _register(self) -> None:
        username = self._ask("Имя пользователя: ")
        password = self._ask("Пароль: ")
        is_admin = self._ask_int("Учетная запись администратора? (1 - да, 0 - нет): ")
        if is_admin not in (0, 1):
            self._output("Неверный выбор, регистрация отменена.")
            return
        with self._errors():
            self._app.accounts.register(username, password, is_admin=bool(is_admin))
            self._output("Пользователь успешно зарегистрирован!")

    def _logout(self) -> None:
        self.current_user = None
        self._app.save()
        self._output("Вы вышли из системы.")

    # Меню администратора

    def _admin_menu(self) -> None:
        actions = {
            1: self._manage_flights,
            2: self._manage_hotels,
            3: self._show_all_reservations,
            4: self._manage_users,
            5: self._handle_approvals,
            6: self._handle_cancellations,
            7: self._generate_report,
        }
        while True:
            self._show_notifications()
            self._output("\nМеню администратора")
            self._output("1. Управление рейсами")
            self._output("2. Управление отелями")
            self._output("3. Все бронирования")
            self._output("4. Управление пользователями")
            self._output("5. Одобрение бронирований")
            self._output("6. Запросы на отмену")
            self._output("7. Отчет по бронированиям")
            self._output("8. Выйти из учетной записи")
            choice = self._ask_int("Ваш выбор: ")

            if choice == 8:
                self._logout()
                return
            action = actions.get(choice)
            if action is None:
                self._output("Неверный выбор, попробуйте еще раз.")
            else:
                action()

    def _show_notifications(self) -> None:
        notifications = self._app.reservations.admin_notifications()
        self._output("\n--- Уведомления администратора ---")
        self._print_by_status(ReservationStatus.PENDING, notifications.pending)
        self._print_by_status(
            ReservationStatus.CANCEL_REQUESTED, notifications.cancel_requested
        )
        self._output("--- Конец уведомлений ---")

    def _manage_flights(self) -> None:
        while True:
            self._output("\nУправление рейсами")
            self._output("1. Добавить рейс")
            self._output("2. Удалить рейс")
            self._output("3. Изменить рейс")
            self._output("4. Список рейсов")
            self._output("5. Назад")
            choice = self._ask_int("Ваш выбор: ")

            if choice == 1:
                self._add_flight()
            elif choice == 2:
                self._delete_flight()
            elif choice == 3:
                self._edit_flight()
            elif choice == 4:
                self._print_flights(self._app.catalog.list_flights())
            elif choice == 5:
                return
            else:
                self._output("Неверный выбор, попробуйте еще раз.")

    def _add_flight(self) -> None:
        number = self._ask_int("Номер рейса: ")
        if number is None:
            return
        with self._errors():
            self._app.catalog.add_flight(number, *self._ask_flight_details(""))
            self._output("Рейс успешно добавлен.")

    def _edit_flight(self) -> None:
        number = self._ask_int("Номер рейса для изменения: ")
        if number is None:
            return
        with self._errors():
            self._app.catalog.get_flight(number)
            self._app.catalog.edit_flight(number, *self._ask_flight_details("Новый "))
            self._output("Данные рейса обновлены.")

    def _ask_flight_details(self, prefix: str):
        origin = self._ask(f"{prefix}пункт отправления: ")
        destination = self._ask(f"{prefix}пункт назначения: ")
        departure = self._ask(f"{prefix}время отправления: ")
        arrival = self._ask(f"{prefix}время прибытия: ")
        seats = self._ask_int(f"{prefix}количество мест: ")
        return origin, destination, departure, arrival, -1 if seats is None else seats

    def _delete_flight(self) -> None:
        number = self._ask_int("Номер рейса для удаления: ")
        if number is None:
            return
        with self._errors():
            self._app.catalog.delete_flight(number)
            self._output(f"Рейс {number} удален.")

    def _manage_hotels(self) -> None:
        while True:
            self._output("\nУправление отелями")
            self._output("1. Добавить отель")
            self._output("2. Удалить отель")
            self._output("3. Изменить отель")
            self._output("4. Список отелей")
            self._output("5. Назад")
            choice = self._ask_int("Ваш выбор: ")

            if choice == 1:
                self._add_hotel()
            elif choice == 2:
                self._delete_hotel()
            elif choice == 3:
                self._edit_hotel()
            elif choice == 4:
                self._print_hotels(self._app.catalog.list_hotels())
            elif choice == 5:
                return
            else:
                self._output("Неверный выбор, попробуйте еще раз.")

    def _add_hotel(self) -> None:
        hotel_id = self._ask_int("Идентификатор отеля: ")
        if hotel_id is None:
            return
        with self._errors():
            self._app.catalog.add_hotel(hotel_id, *self._ask_hotel_details(""))
            self._output("Отель успешно добавлен.")

    def _edit_hotel(self) -> None:
        hotel_id = self._ask_int("Идентификатор отеля для изменения: ")
        if hotel_id is None:
            return
        with self._errors():
            self._app.catalog.get_hotel(hotel_id)
            self._app.catalog.edit_hotel(hotel_id, *self._ask_hotel_details("Новое "))
            self._output("Данные отеля обновлены.")

    def _ask_hotel_details(self, prefix: str):
        name = self._ask(f"{prefix}название: ")
        location = self._ask(f"{prefix}расположение: ")
        rooms = self._ask_int(f"{prefix}количество номеров: ")
        return name, location, -1 if rooms is None else rooms

    def _delete_hotel(self) -> None:
        hotel_id = self._ask_int("Идентификатор отеля для удаления: ")
        if hotel_id is None:
            return
        with self._errors():
            self._app.catalog.delete_hotel(hotel_id)
            self._output(f"Отель {hotel_id} удален.")

    def _show_all_reservations(self) -> None:
        reservations = self._app.reservations.all_reservations()
        self._output("\nВсе бронирования:")
        if not reservations:
            self._output("Бронирований нет.")
        for r in reservations:
            target = (
                f"Рейс: {r.flight_number}"
                if r.flight_number is not None
                else f"Отель: {r.hotel_id}"
            )
            self._output(
                f"Бронирование {r.reservation_id}, Пользователь: {r.username}, "
                f"{target}, Статус: {r.status.value}"
            )

    def _manage_users(self) -> None:
        self._output("\nЗарегистрированные пользователи:")
        for user in self._app.accounts.list_users():
            self._output(
                f"ID: {user.position}, Пользователь: {user.username}, "
                f"Администратор: {'Да' if user.is_admin else 'Нет'}"
            )
        self._output("1. Удалить пользователя")
        self._output("2. Назад")
        choice = self._ask_int("Ваш выбор: ")
        if choice == 1:
            position = self._ask_int("ID пользователя для удаления: ")
            if position is None:
                return
            with self._errors():
                username = self._app.accounts.delete_user_at(position)
                self._output(f"Пользователь {username} удален.")
        elif choice != 2:
            self._output("Неверный выбор, попробуйте еще раз.")

    def _handle_approvals(self) -> None:
        self._print_by_status(
            ReservationStatus.PENDING,
            self._app.reservations.reservations_by_status(ReservationStatus.PENDING),
        )
        reservation_id = self._ask_int(
            "ID бронирования для одобрения или отклонения (0 - выход): "
        )
        if not reservation_id:
            return
        with self._errors():
            self._app.reservations.get_reservation(reservation_id)
            decision = self._ask("Одобрить (yes) или отклонить (no)? ").lower()
            if decision == "yes":
                self._app.reservations.decide_reservation(reservation_id, approve=True)
                self._output("Бронирование одобрено.")
            elif decision == "no":
                self._app.reservations.decide_reservation(reservation_id, approve=False)
                self._output("Бронирование отклонено.")
            else:
                self._output("Неверный ввод, изменений нет.")

    def _handle_cancellations(self) -> None:
        self._print_by_status(
            ReservationStatus.CANCEL_REQUESTED,
            self._app.reservations.reservations_by_status(
                ReservationStatus.CANCEL_REQUESTED
            ),
        )
        reservation_id = self._ask_int("ID бронирования для отмены (0 - выход): ")
        if not reservation_id:
            return
        with self._errors():
            self._app.reservations.get_reservation(reservation_id)
            decision = self._ask("Подтвердить отмену (yes/no) или exit для выхода: ")
            decision = decision.lower()
            if decision == "exit":
                self._output("Выход без изменений.")
            elif decision == "yes":
                self._app.reservations.decide_cancellation(reservation_id, confirm=True)
                self._output("Отмена подтверждена.")
            elif decision == "no":
                self._app.reservations.decide_cancellation(reservation_id, confirm=False)
                self._output("В отмене отказано.")
            else:
                self._output("Неверный ввод, изменений нет.")

    def _generate_report(self) -> None:
        path = self._app.reports.generate(self._app.settings.report_path)
        self._output(f"Отчет сохранен в {path}.")

    # Меню пользователя

    def _user_menu(self) -> None:
        while True:
            recommendation = self._app.catalog.recommend_flight(self._rng)
            self._output("")
            self._output(recommendation or "Нет рейсов для рекомендации.")
            self._output(f"\nМеню пользователя - вы вошли как {self.current_user}")
            self._output("1. Поиск рейсов")
            self._output("2. Поиск отелей")
            self._output("3. Забронировать рейс")
            self._output("4. Забронировать отель")
            self._output("5. Мои бронирования")
            self._output("6. Запросить отмену (только одобренные бронирования)")
            self._output("7. Выйти из учетной записи")
            choice = self._ask_int("Ваш выбор: ")

            if choice == 1:
                self._print_flights(self._app.catalog.list_flights())
            elif choice == 2:
                self._print_hotels(self._app.catalog.list_hotels())
            elif choice == 3:
                self._reserve_flight()
            elif choice == 4:
                self._reserve_hotel()
            elif choice == 5:
                self._show_my_reservations()
            elif choice == 6:
                self._request_cancellation()
            elif choice == 7:
                self._logout()
                return
            else:
                self._output("Неверный выбор, попробуйте еще раз.")

    def _reserve_flight(self) -> None:
        self._print_flights(self._app.catalog.list_flights_for_booking())
        number = self._ask_int("Номер рейса для бронирования (0 - выход): ")
        if not number:
            self._output("Выход из бронирования.")
            return
        with self._errors():
            reservation = self._app.reservations.reserve_flight(self.current_user, number)
            self._output(
                f"Заявка на рейс принята! Номер бронирования: "
                f"{reservation.reservation_id}"
            )

    def _reserve_hotel(self) -> None:
        self._print_hotels(self._app.catalog.list_hotels_for_booking())
        hotel_id = self._ask_int("ID отеля для бронирования (0 - выход): ")
        if not hotel_id:
            self._output("Выход из бронирования.")
            return
        with self._errors():
            reservation = self._app.reservations.reserve_hotel(self.current_user, hotel_id)
            self._output(
                f"Заявка на отель принята! Номер бронирования: "
                f"{reservation.reservation_id}"
            )

    def _show_my_reservations(self) -> None:
        reservations = self._app.reservations.user_reservations(self.current_user)
        self._output(f"Бронирования пользователя {self.current_user}:")
        if not reservations:
            self._output("Бронирований не найдено.")
        for r in reservations:
            self._output(
                f"Бронирование {r.reservation_id}, Рейс: {r.flight_ref}, "
                f"Отель: {r.hotel_ref}, Статус: {r.status.value}"
            )

    def _request_cancellation(self) -> None:
        self._show_my_reservations()
        reservation_id = self._ask_int("ID бронирования для отмены (0 - выход): ")
        if not reservation_id:
            return
        with self._errors():
            self._app.reservations.request_cancellation(self.current_user, reservation_id)
            self._output("Запрос на отмену отправлен.")

    # Вывод

    def _print_flights(self, flights: List[FlightDTO]) -> None:
        if not flights:
            self._output("Рейсов нет.")
        for f in flights:
            self._output(
                f"Рейс {f.flight_number}: {f.origin} - {f.destination}, "
                f"Отправление: {f.departure_time}, Прибытие: {f.arrival_time}, "
                f"Мест: {f.seats}"
            )

    def _print_hotels(self, hotels: List[HotelDTO]) -> None:
        if not hotels:
            self._output("Отелей нет.")
        for h in hotels:
            self._output(
                f"Отель {h.hotel_id}: {h.name}, Расположение: {h.location}, "
                f"Номеров: {h.rooms}"
            )

    def _print_by_status(
        self, status: ReservationStatus, reservations: Iterable[ReservationDTO]
    ) -> None:
        reservations = list(reservations)
        self._output(f"\nБронирования со статусом '{status.value}':")
        if not reservations:
            self._output("Нет бронирований с этим статусом.")
        for r in reservations:
            self._output(
                f"Бронирование {r.reservation_id}, Пользователь: {r.username}, "
                f"Рейс: {r.flight_ref}, Отель: {r.hotel_ref}"
            )

    # Ввод

    def _ask(self, prompt: str) -> str:
        return self._input(prompt).strip()

    def _ask_int(self, prompt: str) -> Optional[int]:
        raw = self._ask(prompt)
        try:
            return int(raw)
        except ValueError:
            self._output("Ожидается целое число.")
            return None

    @contextmanager
    def _errors(self):
        """Показывает пользователю ошибки домена и валидации."""
        try:
            yield
        except DomainException as e:
            self._output(f"Ошибка: {e}")
        except ValidationError as e:
            error = e.errors()[0]
            field = ".".join(str(part) for part in error["loc"]) or "значение"
            self._output(f"Некорректные данные ({field}): {error['msg']}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="travel-booking",
        description="Консольная система бронирования рейсов и отелей",
    )
    parser.add_argument("--data-dir", help="Каталог с файлами данных")
    parser.add_argument(
        "--log-level", choices=LOG_LEVELS, type=str.upper, help="Уровень логирования"
    )
    parser.add_argument("--log-file", help="Файл для логов (по умолчанию stderr)")
    return parser


def main(
    argv: Optional[List[str]] = None,
    input_func: InputFunc = input,
    output_func: OutputFunc = print,
) -> int:
    """Точка входа консольного приложения."""
    args = build_parser().parse_args(argv)

    # Аргументы командной строки важнее переменных окружения
    overrides = {
        "data_dir": args.data_dir,
        "log_level": args.log_level,
        "log_file": args.log_file,
    }
    settings = Settings(
        **{
            **Settings.from_env().model_dump(),
            **{k: v for k, v in overrides.items() if v is not None},
        }
    )

    setup_logging(settings.log_level, settings.log_file)

    try:
        app = bootstrap_app(settings)
    except RecordFileError as e:
        logger.error("Не удалось загрузить данные", error=str(e))
        output_func(f"Ошибка загрузки данных: {e}")
        return 1

    ConsoleUI(app, input_func=input_func, output_func=output_func).run()
    return 0

"""
Доменные исключения системы бронирования путешествий.
"""


class DomainException(Exception):
    """Базовое исключение для доменных ошибок."""

    pass


class BusinessRuleValidationException(DomainException):
    """Исключение при нарушении бизнес-правил."""

    pass


class EntityNotFoundException(DomainException):
    """Запрошенная сущность не найдена."""

    pass


class AuthenticationException(DomainException):
    """Неверные учетные данные или роль пользователя."""

    pass

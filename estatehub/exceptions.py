"""Иерархия ошибок сервиса"""


class EstateHubError(Exception):
    """Базовая ошибка сервиса"""


class ValidationError(EstateHubError):
    """Некорректное значение входного параметра"""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field
        self.message = message


class NotFoundError(EstateHubError):
    """Запрошенная сущность не найдена"""


class StoreError(EstateHubError):
    """Хранилище недоступно или запрос завершился ошибкой"""

"""
Исключения генератора
"""


class SwaggerInterfaceError(Exception):
    """Базовое исключение генератора"""


class SchemaLoadError(SwaggerInterfaceError):
    """Не удалось получить или разобрать схему API"""

    def __init__(self, message: str, source: str = None):
        self.message = message
        self.source = source
        super().__init__(f"{source}: {message}" if source else message)


class InvalidOperationError(SwaggerInterfaceError):
    """Операция схемы не может быть преобразована в метод интерфейса"""

    def __init__(self, message: str, path: str, verb: str):
        self.message = message
        self.path = path
        self.verb = verb
        super().__init__(f"[{verb.upper()}] {path}: {message}")


class ConfigError(SwaggerInterfaceError):
    """Некорректная конфигурация генератора"""

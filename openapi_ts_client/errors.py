"""
Исключения генератора
"""


class GenerationError(Exception):
    """Базовая ошибка генерации клиента"""


class SpecError(GenerationError, ValueError):
    """Некорректная входная спецификация: генерация не начинается"""


class NameCollisionError(GenerationError):
    """Две операции дают одно и то же имя после очистки"""

    KINDS = {"method": "методов", "type": "типов"}

    def __init__(self, name: str, first: str, second: str, kind: str = "method"):
        self.name = name
        self.first = first
        self.second = second
        self.kind = kind
        super().__init__(
            f"Коллизия имен {self.KINDS.get(kind, kind)}: "
            f"'{first}' и '{second}' дают '{name}'"
        )

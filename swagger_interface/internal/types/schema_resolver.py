from typing import Dict

from ..utils import capitalize, is_valid_identifier


class SchemaNameResolver:
    """Резолвер имен схем для консистентности"""

    FALLBACK_PREFIX = "Model"

    def __init__(self):
        self._schema_registry: Dict[str, str] = {}

    def register_schema(self, original_name: str) -> str:
        """Регистрация определения схемы, возвращает итоговое имя модели"""
        clean_name = self.fallback_name(original_name)
        self._schema_registry[original_name] = clean_name
        return clean_name

    @classmethod
    def fallback_name(cls, name: str) -> str:
        """Имя как есть, если оно допустимо, иначе Model + Name"""
        if is_valid_identifier(name):
            return name
        return cls.FALLBACK_PREFIX + capitalize(name)

from typing import Dict, List, Optional

from .spec import ReferenceSchema, Schema

SCHEMA_REF_PREFIX = "#/components/schemas/"


class ReferenceResolver:
    """Резолвер локальных ссылок на именованные схемы"""

    def __init__(self, schemas: Dict[str, Schema]):
        self._schemas = dict(schemas)

    @staticmethod
    def ref_name(ref: str) -> Optional[str]:
        """Имя схемы из ``#/components/schemas/<Name>`` или None для чужих ссылок"""
        if not ref.startswith(SCHEMA_REF_PREFIX):
            return None

        # Экранирование JSON Pointer
        return ref[len(SCHEMA_REF_PREFIX) :].replace("~1", "/").replace("~0", "~")

    def resolve(self, schema: Schema) -> Schema:
        """
        Разрешение ссылки на один уровень.

        Неразрешимая ссылка возвращается как есть, дальше она превращается
        в ``unknown``. Рекурсивные структуры здесь не раскрываются.
        """
        if not isinstance(schema, ReferenceSchema):
            return schema

        name = self.ref_name(schema.ref)
        definition = self._schemas.get(name) if name is not None else None

        return schema if definition is None else definition

    def lookup(self, name: str) -> Optional[Schema]:
        return self._schemas.get(name)

    def has(self, name: str) -> bool:
        return name in self._schemas

    def names(self) -> List[str]:
        return list(self._schemas)

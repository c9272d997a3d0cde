"""
Синтез типов TypeScript из схем OpenAPI.

Политика - типизация по возможности: любой непонятный узел становится
``unknown``, генерация из-за одной схемы не падает.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set

from ..types.resolved import (
    BOOLEAN,
    NULL,
    NUMBER,
    STRING,
    UNKNOWN,
    ArrayType,
    LiteralUnionType,
    NamedReference,
    ObjectField,
    ObjectType,
    ResolvedType,
    intersection_of,
    union_of,
)
from ..types.schema_resolver import ReferenceResolver
from ..types.spec import (
    ArraySchema,
    BooleanSchema,
    NumberSchema,
    ObjectSchema,
    ReferenceSchema,
    Schema,
    StringSchema,
)
from ..utils.naming import sanitize_type_name

logger = logging.getLogger(__name__)

_LITERAL_TYPES = (str, int, float, bool, type(None))


@dataclass
class TypeCache:
    """
    Арена именованных типов одной генерации.

    ``definitions`` - исходное имя схемы -> синтезированный тип,
    ``in_progress`` - схемы, которые синтезируются прямо сейчас.
    """

    definitions: Dict[str, ResolvedType] = field(default_factory=dict)
    in_progress: Set[str] = field(default_factory=set)
    type_names: Dict[str, str] = field(default_factory=dict)

    def type_name(self, schema_name: str) -> str:
        if schema_name not in self.type_names:
            self.type_names[schema_name] = sanitize_type_name(schema_name)
        return self.type_names[schema_name]

    def is_known(self, schema_name: str) -> bool:
        return schema_name in self.definitions or schema_name in self.in_progress


class TypeSynthesizer:
    """Рекурсивное преобразование схема -> ResolvedType"""

    def __init__(self, resolver: ReferenceResolver, cache: Optional[TypeCache] = None):
        self.resolver = resolver
        self.cache = cache if cache is not None else TypeCache()

    def synthesize(self, schema: Optional[Schema]) -> ResolvedType:
        if schema is None:
            return UNKNOWN

        if isinstance(schema, ReferenceSchema):
            return self._reference(schema)

        resolved = self._shape(schema)
        if schema.nullable:
            resolved = union_of([resolved, NULL])

        return resolved

    def _shape(self, schema: Schema) -> ResolvedType:
        if schema.enum:
            literal_union = self._enum(schema.enum)
            if literal_union is not None:
                return literal_union

        variants = schema.one_of + schema.any_of
        if variants:
            return union_of([self.synthesize(variant) for variant in variants])

        if schema.all_of:
            parts = [self.synthesize(part) for part in schema.all_of]
            if isinstance(schema, ObjectSchema) and schema.properties:
                parts.append(self._object(schema))
            return intersection_of(parts)

        if isinstance(schema, StringSchema):
            # format не влияет на тип
            return STRING
        if isinstance(schema, NumberSchema):
            return NUMBER
        if isinstance(schema, BooleanSchema):
            return BOOLEAN
        if isinstance(schema, ArraySchema):
            return ArrayType(self.synthesize(schema.items))
        if isinstance(schema, ObjectSchema):
            return self._object(schema)

        return UNKNOWN

    @staticmethod
    def _enum(values: List[Any]) -> Optional[LiteralUnionType]:
        """Литералы в порядке объявления, повторы схлопываются"""
        literals = []
        seen = set()

        for value in values:
            if not isinstance(value, _LITERAL_TYPES):
                continue
            marker = json.dumps(value)
            if marker not in seen:
                seen.add(marker)
                literals.append(value)

        return LiteralUnionType(tuple(literals)) if literals else None

    def _object(self, schema: ObjectSchema) -> ObjectType:
        required = set(schema.required)
        fields = tuple(
            ObjectField(
                name=name,
                type=self.synthesize(property_schema),
                required=name in required,
                description=getattr(property_schema, "description", None),
            )
            for name, property_schema in schema.properties.items()
        )

        extra = schema.additional_properties
        if extra is True:
            index_signature = UNKNOWN
        elif extra is False:
            index_signature = None
        else:
            index_signature = self.synthesize(extra)

        return ObjectType(fields=fields, index_signature=index_signature)

    def _reference(self, schema: ReferenceSchema) -> ResolvedType:
        name = self.resolver.ref_name(schema.ref)
        if name is None or not self.resolver.has(name):
            logger.warning("Ссылка %s не разрешена, тип unknown", schema.ref)
            return UNKNOWN

        reference = NamedReference(self.cache.type_name(name))

        # Повторный визит - только ссылка: так рвутся циклы
        if self.cache.is_known(name):
            return reference

        self.cache.in_progress.add(name)
        try:
            definition = self.synthesize(self.resolver.resolve(schema))
        finally:
            self.cache.in_progress.discard(name)

        if definition == reference:
            # Схема-псевдоним самой себя
            definition = UNKNOWN

        self.cache.definitions[name] = definition
        return reference


def synthesize(
    schema: Optional[Schema], resolver: ReferenceResolver, cache: TypeCache
) -> ResolvedType:
    return TypeSynthesizer(resolver, cache).synthesize(schema)

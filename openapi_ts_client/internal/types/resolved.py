"""
Дерево типов, полученное из схем, и его отрисовка в выражения TypeScript.

``render(None)`` дает однострочное выражение, ``render(n)`` - многострочное
с отступом уровня ``n`` (для объявлений ``export type``).
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from ..utils.naming import property_key

INDENT = "  "


def _pad(level: int) -> str:
    return INDENT * level


def doc_text(text: str) -> str:
    """Текст для JSDoc без закрывающего ``*/``"""
    return " ".join(text.replace("*/", "*\\/").split())


def literal(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    return json.dumps(value)


class ResolvedType:
    """Узел дерева типов"""

    def render(self, indent: Optional[int] = None) -> str:
        raise NotImplementedError

    def __str__(self) -> str:
        return self.render()


@dataclass(frozen=True)
class UnknownType(ResolvedType):
    def render(self, indent: Optional[int] = None) -> str:
        return "unknown"


@dataclass(frozen=True)
class PrimitiveType(ResolvedType):
    kind: str

    def render(self, indent: Optional[int] = None) -> str:
        return self.kind


@dataclass(frozen=True)
class LiteralUnionType(ResolvedType):
    values: Tuple[Any, ...]

    def render(self, indent: Optional[int] = None) -> str:
        return " | ".join(literal(value) for value in self.values)


@dataclass(frozen=True)
class NamedReference(ResolvedType):
    name: str

    def render(self, indent: Optional[int] = None) -> str:
        return self.name


@dataclass(frozen=True)
class UnionType(ResolvedType):
    members: Tuple[ResolvedType, ...]

    def render(self, indent: Optional[int] = None) -> str:
        return " | ".join(member.render(indent) for member in self.members)


@dataclass(frozen=True)
class IntersectionType(ResolvedType):
    members: Tuple[ResolvedType, ...]

    def render(self, indent: Optional[int] = None) -> str:
        parts = []
        for member in self.members:
            rendered = member.render(indent)
            if _is_compound(member):
                rendered = f"({rendered})"
            parts.append(rendered)
        return " & ".join(parts)


@dataclass(frozen=True)
class ArrayType(ResolvedType):
    items: ResolvedType

    def render(self, indent: Optional[int] = None) -> str:
        inner = self.items.render(indent)
        if _is_compound(self.items) or isinstance(self.items, IntersectionType):
            return f"Array<{inner}>"
        return f"{inner}[]"


@dataclass(frozen=True)
class ObjectField:
    name: str
    type: ResolvedType
    required: bool
    description: Optional[str] = None

    def render(self, indent: Optional[int] = None) -> str:
        marker = "" if self.required else "?"
        return f"{property_key(self.name)}{marker}: {self.type.render(indent)}"


@dataclass(frozen=True)
class ObjectType(ResolvedType):
    """
    Объект с полями.

    ``index_signature`` - тип дополнительных ключей; объект без полей
    и без сигнатуры остается открытым ``Record<string, unknown>``.
    """

    fields: Tuple[ObjectField, ...] = ()
    index_signature: Optional[ResolvedType] = None

    @property
    def has_required(self) -> bool:
        return any(item.required for item in self.fields)

    def render(self, indent: Optional[int] = None) -> str:
        if not self.fields:
            signature = self.index_signature or UNKNOWN
            return f"Record<string, {signature.render(indent)}>"

        members = [(item.render(_child(indent)), item.description) for item in self.fields]

        extra = None
        if isinstance(self.index_signature, UnknownType):
            members.append(("[key: string]: unknown", None))
        elif self.index_signature is not None:
            extra = f"Record<string, {self.index_signature.render(indent)}>"

        if indent is None:
            body = "{ " + "; ".join(member for member, _ in members) + " }"
        else:
            lines = ["{"]
            for member, description in members:
                if description:
                    lines.append(f"{_pad(indent + 1)}/** {doc_text(description)} */")
                lines.append(f"{_pad(indent + 1)}{member};")
            lines.append(f"{_pad(indent)}}}")
            body = "\n".join(lines)

        return f"{body} & {extra}" if extra else body


def _child(indent: Optional[int]) -> Optional[int]:
    return None if indent is None else indent + 1


def _is_compound(resolved: ResolvedType) -> bool:
    if isinstance(resolved, UnionType):
        return len(resolved.members) > 1
    if isinstance(resolved, LiteralUnionType):
        return len(resolved.values) > 1
    if isinstance(resolved, ObjectType):
        # {...} & Record<...>
        return bool(resolved.fields) and not isinstance(
            resolved.index_signature, (UnknownType, type(None))
        )
    return False


UNKNOWN = UnknownType()
STRING = PrimitiveType("string")
NUMBER = PrimitiveType("number")
BOOLEAN = PrimitiveType("boolean")
NULL = PrimitiveType("null")


def union_of(members: List[ResolvedType]) -> ResolvedType:
    """Объединение с раскрытием вложенных объединений и без повторов"""
    flat: List[ResolvedType] = []
    seen = set()

    for member in members:
        parts = member.members if isinstance(member, UnionType) else (member,)
        for part in parts:
            rendered = part.render()
            if rendered not in seen:
                seen.add(rendered)
                flat.append(part)

    if not flat:
        return UNKNOWN
    if len(flat) == 1:
        return flat[0]
    return UnionType(tuple(flat))


def intersection_of(members: List[ResolvedType]) -> ResolvedType:
    if not members:
        return UNKNOWN
    if len(members) == 1:
        return members[0]
    return IntersectionType(tuple(members))


@dataclass(frozen=True)
class EndpointTypes:
    """Типы одного эндпоинта, готовые к отрисовке метода"""

    path: ObjectType
    query: Optional[ObjectType]
    headers: Optional[ObjectType]
    cookies: Optional[ObjectType]
    body: Optional[ResolvedType]
    body_required: bool
    success: ResolvedType
    error_statuses: Tuple[int, ...] = ()


@dataclass(frozen=True)
class ResolvedTypes:
    """Результат синтеза: именованные типы и типы эндпоинтов"""

    definitions: Dict[str, ResolvedType] = field(default_factory=dict)
    endpoint_types: Tuple[EndpointTypes, ...] = ()

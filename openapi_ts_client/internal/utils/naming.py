"""Очистка и уникальность идентификаторов генерируемого кода"""

import json
import re
from typing import TYPE_CHECKING, Dict, Iterable, List

from ...errors import NameCollisionError

if TYPE_CHECKING:
    from ..types.models import Endpoint

_NON_WORD = re.compile(r"[^A-Za-z0-9_]")
_NON_TYPE_CHAR = re.compile(r"[^A-Za-z0-9_$]")
_CAMEL_BOUNDARY = re.compile(r"([a-z])([A-Z])")
_TS_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")

# Члены класса клиента, которые может перекрыть операция
RESERVED_MEMBER_NAMES = {"constructor"}

# Встроенные типы TypeScript и типы рантайма клиента
RESERVED_TYPE_NAMES = {
    "any",
    "bigint",
    "boolean",
    "never",
    "null",
    "number",
    "object",
    "string",
    "symbol",
    "undefined",
    "unknown",
    "void",
    "ApiError",
    "ApiResult",
    "ApiSuccess",
    "HttpError",
    "RequestInterceptor",
    "ResponseInterceptor",
    # Глобальные типы, на которые ссылается рантайм клиента
    "Array",
    "Error",
    "JSON",
    "Math",
    "Object",
    "Promise",
    "Record",
    "RequestInit",
    "Response",
    "String",
    "URLSearchParams",
}


def sanitize_method_name(raw_name: str) -> str:
    """
    Имя метода клиента из operationId.

    Единственный источник имен: и клиент, и пример использования
    получают имена только через эту функцию.

    Examples:
        >>> sanitize_method_name("listPets")
        'list_pets'
        >>> sanitize_method_name("2fa-verify")
        '_2fa_verify'
    """
    name = _NON_WORD.sub("_", raw_name)
    if name[:1].isdigit():
        name = f"_{name}"
    name = _CAMEL_BOUNDARY.sub(r"\1_\2", name).lower()

    if not name:
        return "_"
    if name in RESERVED_MEMBER_NAMES:
        return f"{name}_"
    return name


def ensure_unique_method_names(endpoints: Iterable["Endpoint"]) -> List[str]:
    """Имена методов в порядке эндпоинтов, коллизия - ошибка генерации"""
    seen: Dict[str, str] = {}
    names = []

    for endpoint in endpoints:
        name = sanitize_method_name(endpoint.operation_id)
        if name in seen:
            raise NameCollisionError(name, seen[name], endpoint.label)
        seen[name] = endpoint.label
        names.append(name)

    return names


def sanitize_type_name(raw_name: str) -> str:
    """Допустимое имя псевдонима типа TypeScript"""
    name = _NON_TYPE_CHAR.sub("_", raw_name) or "Schema"
    if name[0].isdigit():
        name = f"_{name}"
    if name in RESERVED_TYPE_NAMES:
        name = f"{name}_"
    return name


def ensure_unique_type_names(
    raw_names: Iterable[str], reserved: Iterable[str] = ()
) -> Dict[str, str]:
    """Соответствие исходное имя схемы -> имя типа, коллизия - ошибка генерации"""
    owners = {name: f"{name} (класс клиента)" for name in reserved}
    result = {}

    for raw_name in raw_names:
        name = sanitize_type_name(raw_name)
        if name in owners:
            raise NameCollisionError(name, owners[name], raw_name, kind="type")
        owners[name] = raw_name
        result[raw_name] = name

    return result


def class_name_from_title(title: str) -> str:
    """
    Имя класса клиента из ``info.title``.

    Examples:
        >>> class_name_from_title("Swagger Petstore")
        'SwaggerPetstoreClient'
        >>> class_name_from_title("Govt API")
        'GovtAPIClient'
    """
    words = [word for word in re.split(r"[^A-Za-z0-9]+", title or "") if word]
    name = "".join(word[:1].upper() + word[1:] for word in words)

    if not name:
        return "ApiClient"
    if name[0].isdigit():
        name = f"Api{name}"
    return name if name.endswith("Client") else f"{name}Client"


def is_identifier(name: str) -> bool:
    return bool(_TS_IDENTIFIER.match(name))


def property_key(name: str) -> str:
    """Ключ свойства в объектном типе, в кавычках если это не идентификатор"""
    return name if is_identifier(name) else json.dumps(name)


def property_access(owner: str, name: str) -> str:
    return f"{owner}.{name}" if is_identifier(name) else f"{owner}[{json.dumps(name)}]"

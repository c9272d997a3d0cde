"""
Сборка исходного кода TypeScript клиента.

Каждая функция отвечает за один вид объявления и возвращает строку,
итоговый файл собирается из блоков ``CodeFile``.
"""

import json
import re
from typing import Dict, List, Optional, Sequence

from ..types.models import CodeBlock, CodeFile, Endpoint
from ..types.resolved import (
    INDENT,
    EndpointTypes,
    ObjectType,
    ResolvedType,
    ResolvedTypes,
    doc_text,
)
from ..utils.naming import ensure_unique_method_names, property_access
from .templates import templates

PATH_PLACEHOLDER = re.compile(r"\{([^{}]+)\}")

# location параметра -> имя группы аргументов метода
PARAMETER_GROUPS = {
    "path": "path",
    "query": "query",
    "header": "headers",
    "cookie": "cookies",
}

_METHOD_PAD = INDENT
_BODY_PAD = INDENT * 2


def emit_header() -> str:
    return templates.runtime


def emit_type_declaration(name: str, resolved: ResolvedType) -> str:
    return f"export type {name} = {resolved.render(0)};"


def emit_type_declarations(definitions: Dict[str, ResolvedType]) -> str:
    """Объявления именованных типов, отсортированные по имени"""
    return "\n\n".join(
        emit_type_declaration(name, definitions[name]) for name in sorted(definitions)
    )


def _template_literal_text(text: str) -> str:
    return text.replace("\\", "\\\\").replace("`", "\\`").replace("${", "\\${")


def emit_url(path: str) -> str:
    """Шаблонная строка URL с подстановкой параметров пути"""
    parts = ["${this.baseUrl}"]
    position = 0

    for match in PATH_PLACEHOLDER.finditer(path):
        parts.append(_template_literal_text(path[position : match.start()]))
        parts.append(
            "${encodeURIComponent(String("
            + property_access("path", match.group(1))
            + "))}"
        )
        position = match.end()

    parts.append(_template_literal_text(path[position:]))
    return "`" + "".join(parts) + "`"


def _returns(types: EndpointTypes) -> str:
    """Аргументы ApiResult: тип успеха и коды ошибок"""
    success = types.success.render()
    if not types.error_statuses:
        return success
    return f"{success}, {' | '.join(str(code) for code in types.error_statuses)}"


def _group(name: str, group: Optional[ObjectType], required: bool) -> Optional[str]:
    if group is None:
        return None

    declaration = f"{name}: {group.render(2)}"
    return declaration if required else f"{declaration} = {{}}"


def emit_parameters(types: EndpointTypes) -> List[str]:
    """Группы параметров метода: path, query, body, headers, cookies"""
    groups = [
        _group("path", types.path if types.path.fields else None, True),
        _group("query", types.query, bool(types.query and types.query.has_required)),
    ]

    if types.body is not None:
        body_type = types.body.render(2)
        groups.append(
            f"body: {body_type}"
            if types.body_required
            else f"body: {body_type} | undefined = undefined"
        )

    groups.append(
        _group("headers", types.headers, bool(types.headers and types.headers.has_required))
    )
    groups.append(
        _group("cookies", types.cookies, bool(types.cookies and types.cookies.has_required))
    )

    return [group for group in groups if group is not None]


def emit_method_doc(endpoint: Endpoint) -> str:
    lines = []
    if endpoint.summary:
        lines.extend([doc_text(endpoint.summary), ""])
    if endpoint.description:
        lines.extend([doc_text(endpoint.description), ""])

    lines.append(doc_text(f"{endpoint.method.upper()} {endpoint.path}"))
    lines.append(doc_text(f"operationId: {endpoint.operation_id}"))

    if endpoint.tags:
        lines.append(doc_text(f"Tags: {', '.join(endpoint.tags)}"))
    if endpoint.deprecated:
        lines.append("@deprecated")

    for param in endpoint.parameters:
        if param.description:
            group = PARAMETER_GROUPS[param.location]
            lines.append(doc_text(f"@param {group}.{param.name} - {param.description}"))

    body = "\n".join(
        f"{_METHOD_PAD} * {line}" if line else f"{_METHOD_PAD} *" for line in lines
    )
    return f"{_METHOD_PAD}/**\n{body}\n{_METHOD_PAD} */"


def emit_method(method_name: str, endpoint: Endpoint, types: EndpointTypes) -> str:
    """Метод клиента для одного эндпоинта"""
    returns = _returns(types)
    parameters = emit_parameters(types)

    if parameters:
        signature = (
            f"{_METHOD_PAD}{method_name}(\n"
            + "".join(f"{_BODY_PAD}{parameter},\n" for parameter in parameters)
            + f"{_METHOD_PAD}): Promise<ApiResult<{returns}>> {{"
        )
    else:
        signature = f"{_METHOD_PAD}{method_name}(): Promise<ApiResult<{returns}>> {{"

    url = emit_url(endpoint.path)
    if types.query is not None:
        url += " + buildQuery(query)"

    body = [f"const url = {url};"]
    if types.headers is not None:
        body.append("const requestHeaders = toHeaderRecord(headers);")
    else:
        body.append("const requestHeaders: Record<string, string> = {};")

    if types.cookies is not None:
        body.append("const cookieHeader = toCookieHeader(cookies);")
        body.append("if (cookieHeader) requestHeaders['Cookie'] = cookieHeader;")

    payload = "body" if types.body is not None else "undefined"
    body.append(
        f"return this.sendRequest<{returns}>"
        f"({json.dumps(endpoint.method.upper())}, url, {payload}, requestHeaders);"
    )

    lines = [emit_method_doc(endpoint), signature]
    lines.extend(f"{_BODY_PAD}{line}" for line in body)
    lines.append(f"{_METHOD_PAD}}}")
    return "\n".join(lines)


def emit_client_class(class_name: str, base_url: str, methods: Sequence[str]) -> str:
    parts = [
        templates.client_class_open.format(
            class_name=class_name, base_url=json.dumps(base_url)
        ),
        templates.client_runtime_methods,
        *methods,
    ]
    return "\n\n".join(parts) + "\n" + templates.client_class_close.format(
        class_name=class_name
    )


def emit(
    class_name: str,
    base_url: str,
    endpoints: Sequence[Endpoint],
    resolved_types: ResolvedTypes,
) -> str:
    """
    Полный исходный код клиента.

    Порядок методов совпадает с порядком эндпоинтов, типы отсортированы
    по имени, поэтому одинаковый вход дает побайтно одинаковый выход.
    """
    method_names = ensure_unique_method_names(endpoints)
    methods = [
        emit_method(name, endpoint, types)
        for name, endpoint, types in zip(
            method_names, endpoints, resolved_types.endpoint_types
        )
    ]

    code_file = CodeFile(file_name=f"{class_name}.ts")
    code_file.add_code_block(CodeBlock(order=3, code=emit_header()))
    code_file.add_code_block(
        CodeBlock(order=2, code=emit_type_declarations(resolved_types.definitions))
    )
    code_file.add_code_block(
        CodeBlock(order=1, code=emit_client_class(class_name, base_url, methods))
    )

    return str(code_file)

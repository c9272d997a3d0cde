"""
Получение спецификации из строки: URL эндпоинта или путь к JSON файлу.

Для URL настоящая спецификация не скачивается - по форме адреса
собирается минимальный документ с одним GET эндпоинтом.
"""

import json
import logging
import math
import re
from pathlib import Path
from typing import Any, Dict, Iterable, Union

import httpx

from ...errors import SpecError
from ..types.spec import Spec

logger = logging.getLogger(__name__)

# Параметры, которые одно реальное API требует всегда
LEGACY_REQUIRED_QUERY_NAMES = frozenset({"key", "layer", "x", "y"})


def is_url(value: str) -> bool:
    try:
        url = httpx.URL(value)
    except (httpx.InvalidURL, TypeError):
        return False
    return url.scheme in ("http", "https") and bool(url.host)


def _infer_query_type(value: str) -> str:
    if value in ("true", "false"):
        return "boolean"

    if "_" in value:
        return "string"

    try:
        number = float(value)
    except ValueError:
        return "string"

    if not math.isfinite(number):
        return "string"
    return "integer" if number.is_integer() else "number"


def _query_parameter(
    name: str, value: str, required_names: Iterable[str]
) -> Dict[str, Any]:
    param_type = _infer_query_type(value.strip())
    placeholder = value.startswith("[") and value.endswith("]")

    schema: Dict[str, Any] = {"type": param_type}
    if not placeholder:
        if param_type == "integer":
            schema["default"] = int(float(value))
        elif param_type == "number":
            schema["default"] = float(value)
        elif param_type == "boolean":
            schema["default"] = value == "true"

    return {
        "name": name,
        "in": "query",
        "required": placeholder or name in required_names,
        "schema": schema,
        "description": f"Query parameter: {name}",
    }


def spec_from_url(
    url_string: str, required_names: Iterable[str] = frozenset()
) -> Dict[str, Any]:
    """Минимальная спецификация по форме URL эндпоинта"""
    url = httpx.URL(url_string)
    required_names = frozenset(required_names)

    base_url = f"{url.scheme}://{url.host}" + (f":{url.port}" if url.port else "")
    segments = [segment for segment in url.path.split("/") if segment]
    path = "/"
    if segments:
        # Последний сегмент - эндпоинт, остальное - базовый URL
        path += segments[-1]
        if len(segments) > 1:
            base_url += "/" + "/".join(segments[:-1])

    parameters = [
        _query_parameter(name, value, required_names)
        for name, value in url.params.multi_items()
    ]

    host_parts = url.host.split(".")
    api_name = host_parts[-2] if len(host_parts) > 1 else "API"

    logger.debug("Спецификация собрана по URL %s: %s %s", url_string, base_url, path)

    return {
        "openapi": "3.0.0",
        "info": {
            "title": f"{api_name[:1].upper() + api_name[1:]} API",
            "version": "1.0.0",
            "description": f"Auto-generated API client for {url.host}",
        },
        "servers": [{"url": base_url}],
        "paths": {
            path: {
                "get": {
                    "operationId": re.sub(r"[^a-zA-Z0-9]", "", path) or "getData",
                    "summary": f"GET {path}",
                    "description": f"Query endpoint at {path}",
                    "parameters": parameters,
                    "responses": {
                        "200": {
                            "description": "Successful response",
                            "content": {
                                "application/json": {
                                    "schema": {
                                        "type": "object",
                                        "additionalProperties": True,
                                    }
                                }
                            },
                        },
                        "400": {"description": "Bad request"},
                        "401": {"description": "Unauthorized"},
                        "500": {"description": "Server error"},
                    },
                }
            }
        },
    }


def load_spec_file(file_path: Union[str, Path]) -> Dict[str, Any]:
    path = Path(file_path).expanduser().resolve()
    if not path.exists():
        raise SpecError(f"Файл не найден: {path}")

    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise SpecError(f"Некорректный JSON в {path}: {e}") from e
    except OSError as e:
        raise SpecError(f"Не удалось прочитать {path}: {e}") from e


def load_spec(
    source: Union[str, Path, Dict[str, Any], Spec],
    legacy_required_params: bool = False,
) -> Union[Dict[str, Any], Spec]:
    """
    Приведение входа к документу.

    Словарь и Spec возвращаются без изменений, URL превращается
    в синтезированную спецификацию, остальное читается как файл.
    """
    if isinstance(source, (dict, Spec)):
        return source

    if isinstance(source, str) and is_url(source):
        logger.info("Обнаружен URL, спецификация собирается по шаблону эндпоинта")
        required = LEGACY_REQUIRED_QUERY_NAMES if legacy_required_params else ()
        return spec_from_url(source, required)

    return load_spec_file(source)

"""
HTTP интерфейс генератора.

``GET /`` отдает форму, ``POST /api/generate`` принимает
``{apiKey?, spec?, customUrl?}`` и возвращает код клиента.
"""

import json
import logging
from typing import Any, Dict, Union

import httpx
from aiohttp import web

from .errors import GenerationError
from .generator import generate_client_artifacts
from .internal.generator.templates import templates
from .internal.parser.source import is_url

logger = logging.getLogger(__name__)

FETCH_TIMEOUT = 30.0

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


async def fetch_spec_document(url: str) -> Union[Dict[str, Any], str]:
    """
    Загрузка спецификации по ссылке.

    Если ответ не JSON, возвращается сам URL: тогда спецификация
    собирается по форме адреса эндпоинта.
    """
    async with httpx.AsyncClient(timeout=FETCH_TIMEOUT, follow_redirects=True) as client:
        response = await client.get(url)

    try:
        return response.json()
    except ValueError:
        logger.info("Ответ %s не JSON, используется форма URL", url)
        return url


def _error(status: int, message: str) -> web.Response:
    return web.json_response({"error": message}, status=status)


@web.middleware
async def cors_middleware(request: web.Request, handler):
    if request.method == "OPTIONS":
        response = web.Response(status=200)
    else:
        response = await handler(request)

    response.headers.update(CORS_HEADERS)
    return response


async def index(request: web.Request) -> web.Response:
    return web.Response(text=templates.index_html, content_type="text/html")


async def generate_client(request: web.Request) -> web.Response:
    try:
        payload = await request.json()
    except ValueError:
        return _error(400, "Тело запроса должно быть JSON")

    if not isinstance(payload, dict):
        return _error(400, "Тело запроса должно быть JSON объектом")

    spec = payload.get("spec")
    custom_url = payload.get("customUrl")

    if isinstance(spec, str) and spec:
        try:
            spec = json.loads(spec)
        except ValueError:
            return _error(400, "'spec' не является корректным JSON")

    if spec:
        # Строка или список здесь были бы прочитаны как путь к файлу
        if not isinstance(spec, dict):
            return _error(400, "'spec' должен быть JSON объектом")
        spec_input = spec
    elif custom_url:
        if not isinstance(custom_url, str) or not is_url(custom_url):
            return _error(400, "'customUrl' должен быть http(s) URL")
        try:
            spec_input = await fetch_spec_document(custom_url)
        except httpx.HTTPError as e:
            logger.warning("Не удалось загрузить %s: %s", custom_url, e)
            return _error(502, f"Не удалось загрузить спецификацию {custom_url}: {e}")
        if not isinstance(spec_input, dict) and spec_input != custom_url:
            return _error(400, f"Ответ {custom_url} не является JSON объектом")
    else:
        return _error(400, "Передайте OpenAPI документ в 'spec' или URL в 'customUrl'")

    try:
        result = generate_client_artifacts(
            spec_input,
            include_example=False,
            api_key=payload.get("apiKey") or None,
            output_file_name="api-client.ts",
        )
    except GenerationError as e:
        return _error(400, str(e))

    return web.json_response(
        {
            "clientCode": result.client,
            "fileName": f"{result.class_name.lower()}-client.ts",
            "className": result.class_name,
        }
    )


def create_app() -> web.Application:
    app = web.Application(middlewares=[cors_middleware])
    app.router.add_get("/", index)
    app.router.add_post("/api/generate", generate_client)
    return app


def run_server(port: int = 3000, host: str = "localhost"):
    print(f"🚀 Генератор доступен на http://{host}:{port}")
    web.run_app(create_app(), host=host, port=port, print=None)

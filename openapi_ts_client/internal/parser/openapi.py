import logging
from typing import Any, Dict, List, Optional, Tuple

import jsonref
from pydantic import ValidationError

from ...errors import SpecError
from ..types.models import Endpoint
from ..types.schema_resolver import ReferenceResolver
from ..types.spec import Schema, Spec
from .endpoints import extract_endpoints

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.example.com"

# Ссылки на схемы остаются именованными, из них получаются объявления типов
SCHEMA_REF_PREFIX = "#/components/schemas/"


def _refuse_external(uri: str):
    raise ValueError(f"внешние ссылки не поддерживаются: {uri}")


def _unproxy(node: Any, chain: Tuple[str, ...] = ()) -> Any:
    """Замена прокси jsonref их содержимым, кроме ссылок на схемы"""
    if isinstance(node, jsonref.JsonRef):
        reference = node.__reference__
        ref = reference["$ref"]
        if ref.startswith(SCHEMA_REF_PREFIX):
            return {key: _unproxy(value, chain) for key, value in reference.items()}

        if ref in chain:
            logger.warning("Циклическая ссылка %s", ref)
            return {"$ref": ref}

        try:
            target = node.__subject__
        except (jsonref.JsonRefError, RecursionError) as e:
            logger.warning("Не удалось разрешить ссылку %s: %s", ref, e)
            return {"$ref": ref}

        return _unproxy(target, chain + (ref,))

    if isinstance(node, dict):
        return {key: _unproxy(value, chain) for key, value in node.items()}

    if isinstance(node, list):
        return [_unproxy(item, chain) for item in node]

    return node


def resolve_refs(document: Dict[str, Any]) -> Dict[str, Any]:
    """
    Раскрытие ``$ref`` на параметры, тела запросов, ответы и любые узлы
    документа, включая цепочки ссылок.

    Неразрешенная ссылка остается как есть и отбрасывается моделью.
    """
    proxied = jsonref.replace_refs(document, loader=_refuse_external, lazy_load=True)
    return _unproxy(proxied)


def parse_spec(document: Any) -> Spec:
    """Проверка и нормализация сырого документа в модель Spec"""
    if isinstance(document, Spec):
        return document

    if not isinstance(document, dict):
        raise SpecError("OpenAPI документ должен быть JSON объектом")

    if not isinstance(document.get("paths"), dict):
        raise SpecError("В OpenAPI документе нет объекта 'paths'")

    try:
        return Spec.model_validate(resolve_refs(document))
    except ValidationError as e:
        raise SpecError(f"Некорректный OpenAPI документ: {e}") from e


class OpenApiParser:
    """Парсер OpenAPI спецификации"""

    def __init__(self, openapi_dict: Any):
        self.spec = parse_spec(openapi_dict)
        self.resolver = ReferenceResolver(self.spec.components.schemas)

    def extract_endpoints(self) -> List[Endpoint]:
        return extract_endpoints(self.spec)

    def get_base_url(self) -> str:
        """Первый сервер считается основным, завершающий ``/`` отбрасывается"""
        if self.spec.servers:
            return self.spec.servers[0].url.rstrip("/") or "/"
        return DEFAULT_BASE_URL

    def get_schemas(self) -> Dict[str, Schema]:
        return self.spec.components.schemas

    @property
    def title(self) -> Optional[str]:
        return self.spec.info.title

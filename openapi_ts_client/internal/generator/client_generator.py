import logging
import re
from typing import Dict, List, Optional, Sequence, Tuple

from ..parser.openapi import OpenApiParser
from ..parser.source import LEGACY_REQUIRED_QUERY_NAMES
from ..types.models import Endpoint
from ..types.resolved import (
    STRING,
    UNKNOWN,
    EndpointTypes,
    ObjectField,
    ObjectType,
    ResolvedType,
    ResolvedTypes,
    union_of,
)
from ..types.spec import MediaType, Parameter
from ..utils.naming import class_name_from_title, ensure_unique_type_names
from .emitter import PATH_PLACEHOLDER, emit
from .type_synthesizer import TypeCache, TypeSynthesizer

logger = logging.getLogger(__name__)

JSON_MEDIA_TYPE = "application/json"
ERROR_STATUS = re.compile(r"^[45]\d\d$")


def pick_media_type(content: Dict[str, MediaType]) -> Optional[MediaType]:
    """
    Типизируемый вариант содержимого.

    ``application/json``, затем любой ``*json*`` тип, затем первый
    по алфавиту, так выбор не зависит от порядка ключей документа.
    """
    if JSON_MEDIA_TYPE in content:
        return content[JSON_MEDIA_TYPE]

    candidates = sorted(name for name in content if "json" in name) or sorted(content)
    return content[candidates[0]] if candidates else None


def error_statuses(endpoint: Endpoint) -> Tuple[int, ...]:
    """Объявленные числовые коды 4xx/5xx по возрастанию"""
    return tuple(
        sorted(int(code) for code in endpoint.responses if ERROR_STATUS.match(code))
    )


class ClientGenerator:
    """Генератор TypeScript клиента из OpenAPI"""

    def __init__(self, parser: OpenApiParser, legacy_required_params: bool = False):
        self.parser = parser
        self.legacy_required_params = legacy_required_params

    def generate_class_name(self) -> str:
        return class_name_from_title(self.parser.title)

    def generate(self, endpoints: Optional[Sequence[Endpoint]] = None) -> str:
        """Основная генерация: исходный код клиента одной строкой"""
        if endpoints is None:
            endpoints = self.parser.extract_endpoints()

        class_name = self.generate_class_name()
        resolved_types = self.resolve_types(endpoints, class_name)

        logger.info(
            "Клиент %s: %d эндпоинтов, %d именованных типов",
            class_name,
            len(endpoints),
            len(resolved_types.definitions),
        )

        return emit(class_name, self.parser.get_base_url(), endpoints, resolved_types)

    def resolve_types(
        self, endpoints: Sequence[Endpoint], class_name: str
    ) -> ResolvedTypes:
        """Синтез типов всех эндпоинтов с отдельным кэшем на каждый вызов"""
        synthesizer = TypeSynthesizer(self.parser.resolver, TypeCache())
        endpoint_types = tuple(
            self._endpoint_types(endpoint, synthesizer) for endpoint in endpoints
        )

        definitions = synthesizer.cache.definitions
        type_names = ensure_unique_type_names(sorted(definitions), reserved=(class_name,))

        return ResolvedTypes(
            definitions={type_names[name]: definitions[name] for name in definitions},
            endpoint_types=endpoint_types,
        )

    def is_required(self, param: Parameter) -> bool:
        if param.location == "path":
            return True
        if self.legacy_required_params and param.name in LEGACY_REQUIRED_QUERY_NAMES:
            return True
        return param.required

    def _endpoint_types(
        self, endpoint: Endpoint, synthesizer: TypeSynthesizer
    ) -> EndpointTypes:
        body, body_required = self._body_type(endpoint, synthesizer)

        return EndpointTypes(
            path=self._path_group(endpoint, synthesizer),
            query=self._parameter_group(endpoint, "query", synthesizer),
            headers=self._parameter_group(endpoint, "header", synthesizer),
            cookies=self._parameter_group(endpoint, "cookie", synthesizer),
            body=body,
            body_required=body_required,
            success=self._success_type(endpoint, synthesizer),
            error_statuses=error_statuses(endpoint),
        )

    def _field(self, param: Parameter, synthesizer: TypeSynthesizer) -> ObjectField:
        return ObjectField(
            name=param.name,
            type=synthesizer.synthesize(param.schema_),
            required=self.is_required(param),
            description=param.description,
        )

    def _parameter_group(
        self, endpoint: Endpoint, location: str, synthesizer: TypeSynthesizer
    ) -> Optional[ObjectType]:
        params = endpoint.parameters_in(location)
        if not params:
            return None
        return ObjectType(fields=tuple(self._field(param, synthesizer) for param in params))

    def _path_group(self, endpoint: Endpoint, synthesizer: TypeSynthesizer) -> ObjectType:
        """Объявленные параметры пути и плейсхолдеры шаблона без объявления"""
        fields: List[ObjectField] = [
            self._field(param, synthesizer) for param in endpoint.parameters_in("path")
        ]
        declared = {item.name for item in fields}

        for name in PATH_PLACEHOLDER.findall(endpoint.path):
            if name not in declared:
                logger.debug("Плейсхолдер {%s} в %s не объявлен", name, endpoint.label)
                declared.add(name)
                fields.append(ObjectField(name=name, type=STRING, required=True))

        return ObjectType(fields=tuple(fields))

    @staticmethod
    def _body_type(
        endpoint: Endpoint, synthesizer: TypeSynthesizer
    ) -> Tuple[Optional[ResolvedType], bool]:
        request_body = endpoint.request_body
        if request_body is None:
            return None, False

        media = pick_media_type(request_body.content)
        body = synthesizer.synthesize(media.schema_ if media else None)
        return body, request_body.required

    @staticmethod
    def _success_type(endpoint: Endpoint, synthesizer: TypeSynthesizer) -> ResolvedType:
        """Объединение типов всех 2xx ответов, без схем - unknown"""
        members = []

        for code in sorted(endpoint.responses):
            if not code.startswith("2"):
                continue
            media = pick_media_type(endpoint.responses[code].content)
            if media is not None and media.schema_ is not None:
                members.append(synthesizer.synthesize(media.schema_))

        if not members:
            logger.debug("У %s нет схемы успешного ответа", endpoint.label)
            return UNKNOWN

        return union_of(members)

"""
Генерация файла ``*-example.ts`` с примером использования клиента.

Пример охватывает первые эндпоинты спецификации и показывает настройку
клиента, интерцепторы и разбор ApiResult по ``_tag``.
"""

import json
import posixpath
from typing import List, Optional, Sequence

from ..parser.openapi import OpenApiParser
from ..types.models import Endpoint
from ..types.spec import (
    ArraySchema,
    BooleanSchema,
    NumberSchema,
    ObjectSchema,
    Parameter,
)
from ..utils.naming import property_key, sanitize_method_name
from .emitter import PATH_PLACEHOLDER
from .templates import templates

EXAMPLE_ENDPOINTS_LIMIT = 3

API_KEY_PARAM_NAMES = (
    "key",
    "api_key",
    "apikey",
    "api-key",
    "token",
    "access_token",
    "access-token",
    "accesstoken",
    "auth",
    "auth_token",
    "auth-token",
    "authtoken",
    "api_token",
    "api-token",
    "apitoken",
)

DEFAULT_CLIENT_FILE_NAME = "generated-client.js"


def is_api_key_param(param: Parameter) -> bool:
    return param.location == "query" and param.name.lower() in API_KEY_PARAM_NAMES


class ExampleGenerator:
    """Генератор примера использования клиента"""

    def __init__(self, parser: OpenApiParser, class_name: str):
        self.parser = parser
        self.class_name = class_name
        self.client_file_name = DEFAULT_CLIENT_FILE_NAME

    def set_client_file_name(self, file_name: str) -> None:
        """Имя файла клиента для импорта: ``out/petstore.ts`` -> ``petstore.js``"""
        base_name = posixpath.basename(file_name.replace("\\", "/")) or file_name
        if base_name.endswith(".ts"):
            base_name = base_name[: -len(".ts")] + ".js"
        self.client_file_name = base_name

    @property
    def example_file_name(self) -> str:
        stem = self.client_file_name
        if stem.endswith(".js"):
            stem = stem[: -len(".js")]
        return f"{stem}-example.ts"

    @staticmethod
    def detect_api_key_query_param(endpoints: Sequence[Endpoint]) -> Optional[str]:
        for endpoint in endpoints:
            for param in endpoint.parameters:
                if is_api_key_param(param):
                    return param.name
        return None

    def generate(
        self,
        api_key: Optional[str] = None,
        endpoints: Optional[Sequence[Endpoint]] = None,
    ) -> str:
        if endpoints is None:
            endpoints = self.parser.extract_endpoints()

        key_param = self.detect_api_key_query_param(endpoints)

        parts = [
            templates.example_header.format(
                class_name=self.class_name,
                example_file_name=self.example_file_name,
                client_file_name=self.client_file_name,
                api_key_note=(
                    "The API key is already included."
                    if api_key
                    else "Set the API_KEY environment variable or put your key below."
                ),
            )
        ]

        if key_param is not None:
            key_value = (
                json.dumps(api_key)
                if api_key
                else "process.env.API_KEY || 'YOUR_API_KEY_HERE'"
            )
            parts.append(
                f"// The API expects the key in the '{key_param}' query parameter\n"
                f"const API_KEY = {key_value};\n"
            )

        parts.append(self._client_setup(api_key, key_param is None))
        parts.append(
            "async function examples() {\n  try {\n"
            + "\n\n".join(
                self._endpoint_example(endpoint, key_param)
                for endpoint in endpoints[:EXAMPLE_ENDPOINTS_LIMIT]
            )
        )

        return "\n".join(parts) + "\n" + templates.example_footer

    def _client_setup(self, api_key: Optional[str], key_in_constructor: bool) -> str:
        lines = [
            "const client = new {}({{".format(self.class_name),
            f"  baseUrl: {json.dumps(self.parser.get_base_url())},",
        ]

        if key_in_constructor:
            lines.append(
                f"  apiKey: {json.dumps(api_key)},"
                if api_key
                else "  // apiKey: process.env.API_KEY,"
            )

        lines.extend(
            [
                "  maxRetries: 3,",
                "});",
                "",
                "client.addRequestInterceptor((request) => {",
                "  console.log('Making request:', request);",
                "  return request;",
                "});",
                "",
                "client.addResponseInterceptor((response, data) => {",
                "  console.log('Received response:', response.status, data);",
                "  return data;",
                "});",
                "",
            ]
        )
        return "\n".join(lines)

    def _example_value(self, param: Parameter) -> str:
        schema = self.parser.resolver.resolve(param.schema_) if param.schema_ else None

        enum = getattr(schema, "enum", None)
        if enum:
            return json.dumps(enum[0])
        if isinstance(schema, NumberSchema):
            return "123" if param.location == "path" else "10"
        if isinstance(schema, BooleanSchema):
            return "true"
        if isinstance(schema, ArraySchema):
            return "[]"
        if isinstance(schema, ObjectSchema):
            return "{}"
        return '"example-value"' if param.location == "path" else '"value"'

    def _members(self, params: List[Parameter], key_param: Optional[str]) -> List[str]:
        members = []
        for param in params:
            value = "API_KEY" if param.name == key_param else self._example_value(param)
            members.append(f"{property_key(param.name)}: {value}")
        return members

    def _arguments(self, endpoint: Endpoint, key_param: Optional[str]) -> List[str]:
        """
        Аргументы вызова в порядке групп метода.

        Группа, которая есть в сигнатуре, но не нужна примеру, передается
        как ``undefined``, хвостовые такие группы опускаются.
        """
        path_members = self._members(endpoint.parameters_in("path"), key_param)
        declared = {param.name for param in endpoint.parameters_in("path")}
        for name in PATH_PLACEHOLDER.findall(endpoint.path):
            if name not in declared:
                declared.add(name)
                path_members.append(f'{property_key(name)}: "example-value"')

        groups = []
        if path_members:
            groups.append(path_members)
        if endpoint.parameters_in("query"):
            groups.append(self._members(endpoint.parameters_in("query"), key_param))
        if endpoint.request_body is not None:
            groups.append("{ /* request body */ }")
        for location in ("header", "cookie"):
            if endpoint.parameters_in(location):
                required = [
                    param for param in endpoint.parameters_in(location) if param.required
                ]
                groups.append(self._members(required, key_param))

        arguments: List[Optional[str]] = []
        for group in groups:
            if isinstance(group, str):
                arguments.append(group)
            else:
                arguments.append("{ " + ", ".join(group) + " }" if group else None)

        while arguments and arguments[-1] is None:
            arguments.pop()
        return [argument or "undefined" for argument in arguments]

    def _endpoint_example(self, endpoint: Endpoint, key_param: Optional[str]) -> str:
        method_name = sanitize_method_name(endpoint.operation_id)
        arguments = ", ".join(self._arguments(endpoint, key_param))
        title = " ".join((endpoint.summary or endpoint.operation_id).split())

        return "\n".join(
            [
                f"    // {title}",
                "    {",
                f"      const result = await client.{method_name}({arguments});",
                "      if (result._tag === 'Success') {",
                "        console.log('Success:', result.data);",
                "      } else {",
                "        console.error('API Error:', result.status, result.message);",
                "      }",
                "    }",
            ]
        )

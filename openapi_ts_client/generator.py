"""
Главный модуль генератора - чистый интерфейс
"""

import logging
from dataclasses import dataclass
from pathlib import PurePath
from typing import Any, Dict, List, Optional, Union

from .internal.generator.client_generator import ClientGenerator
from .internal.generator.example_generator import ExampleGenerator
from .internal.parser.openapi import OpenApiParser
from .internal.parser.source import load_spec
from .internal.types.models import CodeBlock, Endpoint, Project
from .internal.types.spec import Spec

logger = logging.getLogger(__name__)

SpecInput = Union[str, PurePath, Dict[str, Any], Spec]


def example_file_name(output_file: str) -> str:
    """``petstore-client.ts`` -> ``petstore-client-example.ts``"""
    stem = output_file[: -len(".ts")] if output_file.endswith(".ts") else output_file
    return f"{stem}-example.ts"


@dataclass
class GeneratedClient:
    """Результат генерации"""

    class_name: str
    client: str
    endpoints: List[Endpoint]
    base_url: str
    example: Optional[str] = None

    def to_project(self, output_file: str) -> Project:
        """Файлы для записи на диск: клиент и, если есть, пример"""
        project = Project(name=self.class_name)
        project.add_file(output_file).add_code_block(CodeBlock(code=self.client))

        if self.example is not None:
            project.add_file(example_file_name(output_file)).add_code_block(
                CodeBlock(code=self.example)
            )

        return project


class ApiClientGenerator:
    """Чистый интерфейс для генерации TypeScript клиентов"""

    def __init__(self, openapi_spec: SpecInput, legacy_required_params: bool = False):
        self.parser = OpenApiParser(
            load_spec(openapi_spec, legacy_required_params=legacy_required_params)
        )
        self.client_generator = ClientGenerator(
            self.parser, legacy_required_params=legacy_required_params
        )

    @property
    def class_name(self) -> str:
        return self.client_generator.generate_class_name()

    def generate(
        self,
        include_example: bool = True,
        api_key: Optional[str] = None,
        output_file_name: Optional[str] = None,
    ) -> GeneratedClient:
        """Генерация клиента и примера использования"""
        endpoints = self.parser.extract_endpoints()
        client = self.client_generator.generate(endpoints)

        example = None
        if include_example:
            example_generator = ExampleGenerator(self.parser, self.class_name)
            if output_file_name:
                example_generator.set_client_file_name(output_file_name)
            example = example_generator.generate(api_key, endpoints)

        return GeneratedClient(
            class_name=self.class_name,
            client=client,
            example=example,
            endpoints=endpoints,
            base_url=self.parser.get_base_url(),
        )


def generate_client_artifacts(
    spec_input: SpecInput,
    include_example: bool = True,
    api_key: Optional[str] = None,
    output_file_name: Optional[str] = None,
    legacy_required_params: bool = False,
) -> GeneratedClient:
    """Создание TypeScript клиента из спецификации, пути к файлу или URL"""
    generator = ApiClientGenerator(
        spec_input, legacy_required_params=legacy_required_params
    )
    return generator.generate(
        include_example=include_example,
        api_key=api_key,
        output_file_name=output_file_name,
    )

"""
Общие фикстуры тестов
"""

import copy
import json
import math

import pytest

from openapi_ts_client.internal.types.resolved import (
    ArrayType,
    IntersectionType,
    LiteralUnionType,
    NamedReference,
    ObjectType,
    PrimitiveType,
    UnionType,
    UnknownType,
)

PETSTORE_SPEC = {
    "openapi": "3.0.0",
    "info": {"title": "Swagger Petstore", "version": "1.0.0"},
    "servers": [{"url": "http://petstore.swagger.io/v1"}],
    "paths": {
        "/pets": {
            "get": {
                "operationId": "listPets",
                "summary": "List all pets",
                "tags": ["pets"],
                "parameters": [
                    {
                        "name": "limit",
                        "in": "query",
                        "required": False,
                        "description": "How many items to return at one time (max 100)",
                        "schema": {"type": "integer", "format": "int32"},
                    }
                ],
                "responses": {
                    "200": {
                        "description": "A paged array of pets",
                        "content": {
                            "application/json": {
                                "schema": {
                                    "type": "array",
                                    "items": {"$ref": "#/components/schemas/Pet"},
                                }
                            }
                        },
                    },
                    "default": {
                        "description": "unexpected error",
                        "content": {
                            "application/json": {
                                "schema": {"$ref": "#/components/schemas/Error"}
                            }
                        },
                    },
                },
            },
            "post": {
                "operationId": "createPets",
                "summary": "Create a pet",
                "tags": ["pets"],
                "requestBody": {
                    "required": True,
                    "content": {
                        "application/json": {
                            "schema": {"$ref": "#/components/schemas/Pet"}
                        }
                    },
                },
                "responses": {"201": {"description": "Null response"}},
            },
        },
        "/pets/{petId}": {
            "get": {
                "operationId": "showPetById",
                "summary": "Info for a specific pet",
                "tags": ["pets"],
                "parameters": [
                    {
                        "name": "petId",
                        "in": "path",
                        "required": True,
                        "description": "The id of the pet to retrieve",
                        "schema": {"type": "string"},
                    }
                ],
                "responses": {
                    "200": {
                        "description": "Expected response to a valid request",
                        "content": {
                            "application/json": {
                                "schema": {"$ref": "#/components/schemas/Pet"}
                            }
                        },
                    },
                    "404": {"description": "Pet not found"},
                },
            }
        },
    },
    "components": {
        "schemas": {
            "Pet": {
                "type": "object",
                "required": ["id", "name"],
                "properties": {
                    "id": {"type": "integer", "format": "int64"},
                    "name": {"type": "string"},
                    "tag": {"type": "string"},
                },
            },
            "Error": {
                "type": "object",
                "required": ["code", "message"],
                "properties": {
                    "code": {"type": "integer", "format": "int32"},
                    "message": {"type": "string"},
                },
            },
        }
    },
}


@pytest.fixture
def petstore_spec():
    return copy.deepcopy(PETSTORE_SPEC)


@pytest.fixture
def petstore_file(tmp_path, petstore_spec):
    path = tmp_path / "petstore.json"
    path.write_text(json.dumps(petstore_spec), encoding="utf-8")
    return path


def _is_number(value) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def accepts(resolved, value, definitions) -> bool:
    """Структурная проверка: подходит ли JSON значение под синтезированный тип"""
    if isinstance(resolved, UnknownType):
        return True

    if isinstance(resolved, PrimitiveType):
        return {
            "string": lambda: isinstance(value, str),
            "number": lambda: _is_number(value),
            "boolean": lambda: isinstance(value, bool),
            "null": lambda: value is None,
        }[resolved.kind]()

    if isinstance(resolved, LiteralUnionType):
        return any(
            type(value) is type(item) and value == item for item in resolved.values
        )

    if isinstance(resolved, NamedReference):
        return accepts(definitions[resolved.name], value, definitions)

    if isinstance(resolved, UnionType):
        return any(accepts(member, value, definitions) for member in resolved.members)

    if isinstance(resolved, IntersectionType):
        return all(accepts(member, value, definitions) for member in resolved.members)

    if isinstance(resolved, ArrayType):
        return isinstance(value, list) and all(
            accepts(resolved.items, item, definitions) for item in value
        )

    if isinstance(resolved, ObjectType):
        if not isinstance(value, dict):
            return False

        fields = {item.name: item for item in resolved.fields}
        for name, item in fields.items():
            if name not in value:
                if item.required:
                    return False
            elif not accepts(item.type, value[name], definitions):
                return False

        # Типизация структурная: лишние ключи проверяются только сигнатурой
        if resolved.index_signature is None:
            return True
        return all(
            accepts(resolved.index_signature, value[key], definitions)
            for key in value
            if key not in fields
        )

    raise AssertionError(f"Неизвестный узел {resolved!r}")


@pytest.fixture(name="accepts")
def accepts_fixture():
    return accepts

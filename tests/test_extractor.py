"""
Тесты извлечения эндпоинтов
"""

import pytest

from openapi_ts_client.internal.parser.endpoints import generate_operation_id
from openapi_ts_client.internal.parser.openapi import OpenApiParser
from openapi_ts_client.internal.types.spec import ReferenceSchema


class TestExtractEndpoints:
    """Тесты нормализации операций"""

    def test_path_then_method_order(self):
        """Тест порядка: пути документа, внутри пути get, post, put, patch, delete"""
        parser = OpenApiParser(
            {
                "paths": {
                    "/b": {"delete": {"responses": {}}, "get": {"responses": {}}},
                    "/a": {"patch": {"responses": {}}, "post": {"responses": {}}},
                }
            }
        )

        labels = [(e.method, e.path) for e in parser.extract_endpoints()]

        assert labels == [
            ("get", "/b"),
            ("delete", "/b"),
            ("post", "/a"),
            ("patch", "/a"),
        ]

    def test_operation_parameter_shadows_path_parameter(self):
        """Тест приоритета параметров операции над параметрами пути"""
        parser = OpenApiParser(
            {
                "paths": {
                    "/items": {
                        "parameters": [
                            {"name": "id", "in": "query", "required": False},
                            {"name": "trace", "in": "header"},
                        ],
                        "get": {
                            "parameters": [
                                {"name": "id", "in": "query", "required": True}
                            ],
                            "responses": {},
                        },
                    }
                }
            }
        )

        endpoint = parser.extract_endpoints()[0]
        ids = [p for p in endpoint.parameters if p.name == "id"]

        assert len(ids) == 1
        assert ids[0].required is True
        assert [p.key for p in endpoint.parameters] == [
            ("trace", "header"),
            ("id", "query"),
        ]

    def test_same_name_different_location_kept(self):
        """Тест: одинаковое имя в разных местах - разные параметры"""
        parser = OpenApiParser(
            {
                "paths": {
                    "/items/{id}": {
                        "parameters": [{"name": "id", "in": "path", "required": True}],
                        "get": {
                            "parameters": [{"name": "id", "in": "query"}],
                            "responses": {},
                        },
                    }
                }
            }
        )

        endpoint = parser.extract_endpoints()[0]
        assert [p.key for p in endpoint.parameters] == [("id", "path"), ("id", "query")]

    def test_generated_operation_id(self):
        """Тест operationId по методу и пути"""
        parser = OpenApiParser(
            {"paths": {"/users/{id}/posts": {"get": {"responses": {}}}}}
        )

        assert parser.extract_endpoints()[0].operation_id == "getUsersIdPosts"

    @pytest.mark.parametrize(
        "method, path, expected",
        [
            ("post", "/users/{id}/posts", "postUsersIdPosts"),
            ("get", "/", "get"),
            ("delete", "/v1/items/{item_id}", "deleteV1ItemsItem_id"),
        ],
    )
    def test_generate_operation_id(self, method, path, expected):
        """Тест генерации operationId"""
        assert generate_operation_id(method, path) == expected

    def test_component_parameter_refs_inlined(self):
        """Тест раскрытия ссылок на components.parameters и requestBodies"""
        parser = OpenApiParser(
            {
                "paths": {
                    "/pets": {
                        "post": {
                            "parameters": [
                                {"$ref": "#/components/parameters/Limit"},
                                {"$ref": "#/components/parameters/Missing"},
                            ],
                            "requestBody": {"$ref": "#/components/requestBodies/Pet"},
                            "responses": {
                                "200": {"$ref": "#/components/responses/Ok"}
                            },
                        }
                    }
                },
                "components": {
                    "parameters": {
                        "Limit": {
                            "name": "limit",
                            "in": "query",
                            "schema": {"type": "integer"},
                        }
                    },
                    "requestBodies": {
                        "Pet": {
                            "required": True,
                            "content": {"application/json": {"schema": {}}},
                        }
                    },
                    "responses": {"Ok": {"description": "fine"}},
                },
            }
        )

        endpoint = parser.extract_endpoints()[0]

        assert [p.name for p in endpoint.parameters] == ["limit"]
        assert endpoint.request_body.required is True
        assert endpoint.responses["200"].description == "fine"

    def test_chained_refs_resolved(self):
        """Тест цепочки ссылок: параметр ссылается на параметр"""
        parser = OpenApiParser(
            {
                "paths": {
                    "/pets": {
                        "parameters": [{"$ref": "#/components/parameters/Tenant"}],
                        "get": {
                            "parameters": [
                                {"$ref": "#/components/parameters/PageSize"},
                                {"$ref": "#/components/parameters/Loop"},
                                {"$ref": "shared.json#/components/parameters/Remote"},
                            ],
                            "responses": {"200": {"$ref": "#/components/responses/Pets"}},
                        },
                    }
                },
                "components": {
                    "parameters": {
                        "PageSize": {"$ref": "#/components/parameters/Limit"},
                        "Limit": {
                            "name": "limit",
                            "in": "query",
                            "schema": {"$ref": "#/components/schemas/Limit"},
                        },
                        "Tenant": {"$ref": "#/components/parameters/TenantHeader"},
                        "TenantHeader": {"name": "X-Tenant", "in": "header", "required": True},
                        "Loop": {"$ref": "#/components/parameters/Loop"},
                    },
                    "responses": {
                        "Pets": {"$ref": "#/components/responses/PetList"},
                        "PetList": {
                            "description": "pets",
                            "content": {
                                "application/json": {
                                    "schema": {"$ref": "#/components/schemas/Pet"}
                                }
                            },
                        },
                    },
                    "schemas": {
                        "Limit": {"type": "integer"},
                        "Pet": {"type": "object"},
                    },
                },
            }
        )

        endpoint = parser.extract_endpoints()[0]

        assert sorted(p.name for p in endpoint.parameters) == ["X-Tenant", "limit"]
        limit = next(p for p in endpoint.parameters if p.name == "limit")
        # Ссылки на схемы остаются именованными
        assert isinstance(limit.schema_, ReferenceSchema)
        assert limit.schema_.ref == "#/components/schemas/Limit"

        response = endpoint.responses["200"]
        assert response.description == "pets"
        assert response.content["application/json"].schema_.ref == "#/components/schemas/Pet"


    def test_endpoint_metadata(self, petstore_spec):
        """Тест переноса метаданных операции"""
        petstore_spec["paths"]["/pets"]["get"]["deprecated"] = True
        endpoint = OpenApiParser(petstore_spec).extract_endpoints()[0]

        assert endpoint.operation_id == "listPets"
        assert endpoint.summary == "List all pets"
        assert endpoint.tags == ("pets",)
        assert endpoint.deprecated is True
        assert endpoint.label == "listPets (GET /pets)"


class TestOpenApiParser:
    """Тесты фасада парсера"""

    def test_base_url_from_first_server(self, petstore_spec):
        """Тест базового URL из первого сервера"""
        petstore_spec["servers"].append({"url": "http://other"})
        assert OpenApiParser(petstore_spec).get_base_url() == "http://petstore.swagger.io/v1"

    def test_default_base_url(self):
        """Тест базового URL по умолчанию"""
        assert OpenApiParser({"paths": {}}).get_base_url() == "https://api.example.com"

    def test_schemas(self, petstore_spec):
        """Тест доступа к схемам"""
        parser = OpenApiParser(petstore_spec)

        assert sorted(parser.get_schemas()) == ["Error", "Pet"]
        assert parser.title == "Swagger Petstore"

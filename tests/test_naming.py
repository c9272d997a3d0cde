"""
Тесты очистки идентификаторов
"""

import pytest

from openapi_ts_client.errors import NameCollisionError
from openapi_ts_client.internal.parser.openapi import OpenApiParser
from openapi_ts_client.internal.utils.naming import (
    class_name_from_title,
    ensure_unique_method_names,
    ensure_unique_type_names,
    property_access,
    property_key,
    sanitize_method_name,
    sanitize_type_name,
)


class TestMethodNames:
    """Тесты имен методов"""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("listPets", "list_pets"),
            ("showPetById", "show_pet_by_id"),
            ("get_user", "get_user"),
            ("get-user by id", "get_user_by_id"),
            ("2faVerify", "_2fa_verify"),
            ("vectorjson", "vectorjson"),
            ("constructor", "constructor_"),
        ],
    )
    def test_sanitize_method_name(self, raw, expected):
        """Тест очистки operationId"""
        assert sanitize_method_name(raw) == expected

    def test_collision_names_both_operations(self):
        """Тест коллизии getUser и get_user"""
        parser = OpenApiParser(
            {
                "paths": {
                    "/users/{id}": {"get": {"operationId": "getUser", "responses": {}}},
                    "/user": {"get": {"operationId": "get_user", "responses": {}}},
                }
            }
        )

        with pytest.raises(NameCollisionError) as error:
            ensure_unique_method_names(parser.extract_endpoints())

        assert error.value.name == "get_user"
        assert "getUser (GET /users/{id})" in str(error.value)
        assert "get_user (GET /user)" in str(error.value)

    def test_unique_names_in_endpoint_order(self, petstore_spec):
        """Тест имен без коллизий"""
        endpoints = OpenApiParser(petstore_spec).extract_endpoints()

        assert ensure_unique_method_names(endpoints) == [
            "list_pets",
            "create_pets",
            "show_pet_by_id",
        ]


class TestTypeNames:
    """Тесты имен типов"""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("Pet", "Pet"),
            ("pet.Owner", "pet_Owner"),
            ("1Thing", "_1Thing"),
            ("string", "string_"),
            ("ApiResult", "ApiResult_"),
            ("Promise", "Promise_"),
            ("Record", "Record_"),
            ("Response", "Response_"),
            ("RequestInit", "RequestInit_"),
            ("Array", "Array_"),
            ("URLSearchParams", "URLSearchParams_"),
            ("", "Schema"),
        ],
    )
    def test_sanitize_type_name(self, raw, expected):
        """Тест допустимых имен типов"""
        assert sanitize_type_name(raw) == expected

    def test_type_name_collision(self):
        """Тест коллизии имен типов"""
        with pytest.raises(NameCollisionError, match="Коллизия имен типов"):
            ensure_unique_type_names(["a.b", "a_b"])

    def test_class_name_reserved(self):
        """Тест конфликта схемы с именем класса клиента"""
        with pytest.raises(NameCollisionError):
            ensure_unique_type_names(["PetClient"], reserved=("PetClient",))

    def test_type_name_mapping(self):
        """Тест соответствия исходных имен"""
        assert ensure_unique_type_names(["Pet", "pet-owner"]) == {
            "Pet": "Pet",
            "pet-owner": "pet_owner",
        }


class TestOtherNames:
    """Тесты имени класса и ключей свойств"""

    @pytest.mark.parametrize(
        "title, expected",
        [
            ("Swagger Petstore", "SwaggerPetstoreClient"),
            ("Govt API", "GovtAPIClient"),
            ("my-service client", "MyServiceClient"),
            ("", "ApiClient"),
            (None, "ApiClient"),
            ("3D API", "Api3DAPIClient"),
        ],
    )
    def test_class_name(self, title, expected):
        """Тест имени класса из info.title"""
        assert class_name_from_title(title) == expected

    def test_property_key(self):
        """Тест кавычек для ключей"""
        assert property_key("petId") == "petId"
        assert property_key("$value") == "$value"
        assert property_key("X-Request-Id") == '"X-Request-Id"'
        assert property_key("1st") == '"1st"'

    def test_property_access(self):
        """Тест обращения к свойству"""
        assert property_access("path", "petId") == "path.petId"
        assert property_access("path", "pet-id") == 'path["pet-id"]'

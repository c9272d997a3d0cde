"""
Тесты для системы конфигурации
"""

import os
import tempfile

from openapi_ts_client.config import CONFIG_FILE_NAME, GeneratorConfig


class MockArgs:
    """Аргументы командной строки для merge_with_args"""

    def __init__(self, **kwargs):
        self.source = None
        self.output = None
        self.api_key = None
        self.no_example = False
        self.legacy_required_params = False
        self.__dict__.update(kwargs)


class TestGeneratorConfig:
    """Тесты конфигурации генератора"""

    def test_config_creation(self):
        """Тест создания конфигурации"""
        config = GeneratorConfig(url="specs/petstore.json", output="petstore-client.ts")

        assert config.url == "specs/petstore.json"
        assert config.output == "petstore-client.ts"

    def test_config_save_and_load(self):
        """Тест сохранения и загрузки конфигурации"""
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = os.path.join(temp_dir, "test_openapi.toml")

            original_config = GeneratorConfig(
                url="http://api.example.com/openapi.json",
                output="example-client.ts",
                include_example=False,
                legacy_required_params=True,
            )
            original_config.save_to_file(config_path)

            loaded_config = GeneratorConfig.from_file(config_path)

            assert loaded_config == original_config
            # None значения не пишутся
            with open(config_path, encoding="utf-8") as f:
                assert "api_key" not in f.read()

    def test_config_in_search_dir(self, tmp_path):
        """Тест поиска конфига в директории"""
        GeneratorConfig(url="petstore.json").save_to_file(str(tmp_path / CONFIG_FILE_NAME))

        loaded_config = GeneratorConfig.from_file("missing.toml", search_dir=str(tmp_path))

        assert loaded_config.url == "petstore.json"

    def test_config_file_not_exists(self):
        """Тест загрузки несуществующего конфига"""
        config = GeneratorConfig.from_file("nonexistent.toml")
        assert config is None

    def test_broken_config_file(self, tmp_path):
        """Тест некорректного toml"""
        config_path = tmp_path / "broken.toml"
        config_path.write_text("url = ", encoding="utf-8")

        assert GeneratorConfig.from_file(str(config_path)) is None

    def test_config_merge_with_args(self):
        """Тест объединения конфига с аргументами"""
        config = GeneratorConfig(
            url="http://localhost:8000/openapi.json", output="original-client.ts"
        )

        merged = config.merge_with_args(
            MockArgs(source="http://api.new.com/openapi.json", no_example=True)
        )

        assert merged.url == "http://api.new.com/openapi.json"  # Переписан из args
        assert merged.output == "original-client.ts"  # Остался из config
        assert merged.include_example is False
        assert merged.legacy_required_params is False

    def test_merge_keeps_config_flags(self):
        """Тест флагов конфига при пустых аргументах"""
        config = GeneratorConfig(api_key="secret", legacy_required_params=True)

        merged = config.merge_with_args(MockArgs())

        assert merged.api_key == "secret"
        assert merged.include_example is True
        assert merged.legacy_required_params is True

    def test_default_values(self):
        """Тест значений по умолчанию"""
        config = GeneratorConfig()

        assert config.url is None
        assert config.output is None
        assert config.api_key is None
        assert config.include_example is True
        assert config.legacy_required_params is False

"""
Конфигурация для генерации TypeScript клиента
"""

import logging
import os
from dataclasses import asdict, dataclass
from typing import Optional

import toml

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "openapi.toml"


@dataclass
class GeneratorConfig:
    """Конфигурация генератора клиента"""

    url: Optional[str] = None
    output: Optional[str] = None
    api_key: Optional[str] = None
    include_example: bool = True
    legacy_required_params: bool = False

    @classmethod
    def from_file(
        cls, config_path: str = CONFIG_FILE_NAME, search_dir: str = None
    ) -> Optional["GeneratorConfig"]:
        """Загрузка конфигурации из файла"""
        # Если указана директория для поиска, ищем конфиг там
        if search_dir and os.path.isdir(search_dir):
            config_in_dir = os.path.join(search_dir, CONFIG_FILE_NAME)
            if os.path.exists(config_in_dir):
                config_path = config_in_dir

        if not os.path.exists(config_path):
            return None

        try:
            config_data = toml.load(config_path)
        except (OSError, toml.TomlDecodeError) as e:
            logger.warning("Не удалось прочитать %s: %s", config_path, e)
            return None

        return cls(
            url=config_data.get("url"),
            output=config_data.get("output"),
            api_key=config_data.get("api_key"),
            include_example=bool(config_data.get("include_example", True)),
            legacy_required_params=bool(
                config_data.get("legacy_required_params", False)
            ),
        )

    def save_to_file(self, config_path: str = CONFIG_FILE_NAME) -> None:
        """Сохранение конфигурации в файл"""
        # toml не умеет None
        config_data = {
            key: value for key, value in asdict(self).items() if value is not None
        }

        with open(config_path, "w", encoding="utf-8") as f:
            toml.dump(config_data, f)

    def merge_with_args(self, args) -> "GeneratorConfig":
        """Объединение с аргументами командной строки, аргументы важнее"""
        return GeneratorConfig(
            url=getattr(args, "source", None) or self.url,
            output=getattr(args, "output", None) or self.output,
            api_key=getattr(args, "api_key", None) or self.api_key,
            include_example=self.include_example
            and not getattr(args, "no_example", False),
            legacy_required_params=self.legacy_required_params
            or getattr(args, "legacy_required_params", False),
        )

import argparse
import logging
import os
import sys
from typing import List, Optional

import httpx

from openapi_ts_client.config import CONFIG_FILE_NAME, GeneratorConfig
from openapi_ts_client.errors import GenerationError
from openapi_ts_client.generator import GeneratedClient, generate_client_artifacts
from openapi_ts_client.internal.parser.source import is_url
from openapi_ts_client.internal.types.models import Project

DEFAULT_PORT = 3000


def confirm_choice(message: str) -> bool:
    """Запрос подтверждения у пользователя"""
    while True:
        choice = input(f"{message} (y/n): ").lower().strip()
        if choice in ["y", "yes", "да", ""]:
            return True
        elif choice in ["n", "no", "нет"]:
            return False
        print("Введите y/n")


def default_output_file_name(source: str) -> str:
    """
    Имя файла клиента по источнику спецификации.

    Examples:
        >>> default_output_file_name("https://data.linz.govt.nz/v1/vector.json?x=1")
        'govt-client.ts'
        >>> default_output_file_name("specs/petstore.json")
        'petstore-client.ts'
    """
    if is_url(source):
        host_parts = httpx.URL(source).host.split(".")
        domain = host_parts[-2] if len(host_parts) > 1 else "api"
        return f"{domain}-client.ts"

    file_name = os.path.basename(source.replace("\\", "/")) or "api"
    if file_name.endswith(".json"):
        file_name = file_name[: -len(".json")]
    return f"{file_name}-client.ts"


def _save_project_files(project: Project, force: bool = False) -> List[str]:
    """Сохранение файлов проекта, существующие файлы перезаписываются после подтверждения"""
    written = []

    for code_file in project.files:
        path = code_file.file_name
        if os.path.exists(path) and not force:
            if not confirm_choice(f"Файл {path} существует. Перезаписать?"):
                print(f"⏭️ Пропущен {path}")
                continue

        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        with open(path, "w", encoding="utf-8") as f:
            f.write(str(code_file))
        written.append(path)

    return written


def _print_quick_start(result: GeneratedClient, output_file: str, api_key: Optional[str]):
    import_path = output_file[: -len(".ts")] if output_file.endswith(".ts") else output_file

    print("\n🚀 Быстрый старт:")
    print(f"   import {{ {result.class_name} }} from './{import_path}';")
    print(f"   const client = new {result.class_name}({{ baseUrl: '{result.base_url}' }});")
    if api_key:
        print("   client.setApiKey('your-api-key');")


def generate_and_write(config: GeneratorConfig, output_file: str, force: bool = False) -> GeneratedClient:
    """Генерация клиента по конфигурации и запись файлов"""
    if not config.url:
        raise GenerationError("Источник спецификации не указан")

    if is_url(config.url):
        print(f"🌐 Генерация клиента по URL эндпоинта {config.url}")
    else:
        print(f"📥 Чтение OpenAPI спецификации {config.url}")

    print("⚙️ Генерация кода...")
    result = generate_client_artifacts(
        config.url,
        include_example=config.include_example,
        api_key=config.api_key,
        output_file_name=output_file,
        legacy_required_params=config.legacy_required_params,
    )

    project = result.to_project(output_file)
    print(f"💾 Сохранение {len(project.files)} файлов...")
    written = _save_project_files(project, force=force)

    print(f"✅ Готово! Сгенерировано эндпоинтов: {len(result.endpoints)}")
    for path in written:
        print(f"   📄 {os.path.abspath(path)}")

    if result.example is not None:
        _print_quick_start(result, output_file, config.api_key)

    return result


def interactive_menu():
    """Интерактивный режим: источник, ключ API и имя файла по умолчанию"""
    print("🎯 OpenAPI TypeScript Client Generator")

    source = input("🔗 Введите URL эндпоинта или путь к OpenAPI JSON: ").strip()
    if not source:
        print("❌ Источник не указан")
        sys.exit(1)

    api_key = input("🔑 Введите API ключ (Enter - пропустить): ").strip()
    output_file = default_output_file_name(source)

    try:
        generate_and_write(GeneratorConfig(url=source, api_key=api_key or None), output_file)
    except (GenerationError, OSError) as e:
        print(f"❌ Ошибка генерации: {e}")
        sys.exit(1)


def _configure_logging(verbose: bool):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def generate(argv: Optional[List[str]] = None):
    """Универсальная команда генерации TypeScript клиента"""
    parser = argparse.ArgumentParser(
        description="Генерация TypeScript клиента из OpenAPI"
    )
    parser.add_argument(
        "source", nargs="?", help="URL эндпоинта или путь к OpenAPI JSON файлу"
    )
    parser.add_argument("output", nargs="?", help="Файл для сгенерированного клиента")
    parser.add_argument("api_key", nargs="?", help="API ключ для файла с примером")
    parser.add_argument(
        "--no-example", action="store_true", help="Не генерировать файл с примером"
    )
    parser.add_argument(
        "--legacy-required-params",
        action="store_true",
        help="Считать query параметры key, layer, x, y обязательными",
    )
    parser.add_argument(
        "--init-config", action="store_true", help="Создать конфиг файл openapi.toml"
    )
    parser.add_argument(
        "--force", action="store_true", help="Перезаписывать файлы без подтверждения"
    )
    parser.add_argument("--verbose", action="store_true", help="Подробный лог")
    parser.add_argument(
        "--serve", action="store_true", help="Запустить HTTP интерфейс генератора"
    )
    parser.add_argument("--port", type=int, help=f"Порт HTTP интерфейса ({DEFAULT_PORT})")

    args = parser.parse_args(argv)

    # Проверка на интерактивный режим (нет аргументов)
    if not any(vars(args).values()):
        interactive_menu()
        return

    _configure_logging(args.verbose)

    if args.serve:
        from openapi_ts_client.server import run_server

        run_server(port=args.port or DEFAULT_PORT)
        return

    # Инициализация конфига
    if args.init_config:
        config = GeneratorConfig().merge_with_args(args)
        config.save_to_file()
        print(f"✅ Создан конфиг файл {CONFIG_FILE_NAME}")
        return

    file_config = GeneratorConfig.from_file()
    if file_config:
        print(f"📋 Используется конфиг из {CONFIG_FILE_NAME}")
        final_config = file_config.merge_with_args(args)
    else:
        final_config = GeneratorConfig().merge_with_args(args)

    if not final_config.url:
        print("❌ Ошибка: Укажите источник спецификации или создайте конфиг с --init-config")
        sys.exit(1)

    output_file = final_config.output or default_output_file_name(final_config.url)

    try:
        generate_and_write(final_config, output_file, force=args.force)
    except (GenerationError, OSError) as e:
        print(f"❌ Ошибка генерации: {e}")
        sys.exit(1)


if __name__ == "__main__":
    generate()

import argparse
import glob
import logging
import os
import sys
from typing import List, Tuple

from swagger_interface.config import CONFIG_FILE_NAME, GeneratorConfig
from swagger_interface.errors import SwaggerInterfaceError, ConfigError
from swagger_interface.generator import ApiInterfaceGenerator
from swagger_interface.internal.generator.client_generator import ClientGenerator
from swagger_interface.internal.parser.swagger import load_document
from swagger_interface.internal.tracking import RecordingErrorTracking
from swagger_interface.internal.types.models import Project

logger = logging.getLogger(__name__)


def find_client_packages(root: str = ".") -> List[Tuple[str, GeneratorConfig]]:
    """Поиск сгенерированных пакетов по swagger.toml файлам"""
    packages = []

    for config_file in glob.glob(
        os.path.join(root, "**", CONFIG_FILE_NAME), recursive=True
    ):
        config = GeneratorConfig.from_file(config_file)
        if config and config.source:
            packages.append((os.path.dirname(config_file), config))

    return packages


def _generate_client_core(
    config: GeneratorConfig, error_tracking: RecordingErrorTracking
) -> Project:
    """Ядро генерации - только генерация без сохранения"""
    if not config.source:
        raise ConfigError("Источник схемы не указан в конфигурации")

    print(f"🚀 Генерация интерфейса из {config.source}")
    print("📥 Загрузка схемы...")
    document = load_document(config.source, error_tracking)

    print("⚙️ Генерация кода...")
    result = ApiInterfaceGenerator(document, config, error_tracking).generate()

    if result.is_empty:
        logger.warning("Схема %s не дала ни одного типа или метода", config.source)
        print("⚠️ Не сгенерировано ни одного метода, модели или enum")
    if error_tracking.failures:
        print(f"⚠️ Пропущено фрагментов схемы: {len(error_tracking.failures)}")

    return ClientGenerator(result, config).generate()


def _save_project_files(project: Project, target_path: str):
    """Сохранение файлов проекта"""
    print(f"💾 Сохранение {len(project.files)} файлов...")

    for code_model in project.files:
        path = os.path.join(target_path, code_model.file_name)
        os.makedirs(os.path.dirname(path), exist_ok=True)

        with open(path, "w", encoding="utf-8") as f:
            f.write(str(code_model))

    print("✅ Генерация завершена успешно!")
    print(f"📦 Интерфейс создан в: {os.path.abspath(target_path)}")


def _generate_client(config: GeneratorConfig, target_path: str) -> int:
    error_tracking = RecordingErrorTracking()
    project = _generate_client_core(config, error_tracking)
    _save_project_files(project, target_path)
    return len(error_tracking.failures)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Генерация типизированного интерфейса из Swagger схемы"
    )
    parser.add_argument("--source", type=str, help="URL или путь к Swagger JSON")
    parser.add_argument("--dirname", type=str, help="Директория для генерации")
    parser.add_argument("--package", type=str, help="Имя пакета")
    parser.add_argument("--component", type=str, help="Префикс имени интерфейса")
    parser.add_argument("--module", type=str, help="Имя атрибута интерфейса в клиенте")
    parser.add_argument(
        "--header",
        action="append",
        help="Заголовок метода: operationId=Header: value (можно повторять)",
    )
    parser.add_argument(
        "--init-config", action="store_true", help="Создать конфиг файл swagger.toml"
    )
    parser.add_argument(
        "--all",
        action="store_true",
        help="Перегенерировать все пакеты с swagger.toml в текущей директории",
    )
    parser.add_argument("--verbose", action="store_true", help="Подробный лог")
    return parser


def main(argv: List[str] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.all:
            packages = find_client_packages()
            if not packages:
                print("❌ Пакеты с swagger.toml не найдены")
                return 1
            for package_dir, package_config in packages:
                print(f"\n📍 Пакет: {package_dir}")
                _generate_client(package_config, package_dir)
            return 0

        file_config = GeneratorConfig.from_file(search_dir=args.dirname)
        if file_config:
            print(f"📋 Используется конфиг {CONFIG_FILE_NAME}")
        final_config = (file_config or GeneratorConfig()).merge_with_args(args)
        final_config.dirname = final_config.dirname or "api_interface"

        if args.init_config:
            final_config.save_to_file()
            print(f"✅ Создан конфиг файл {CONFIG_FILE_NAME}")
            return 0

        if not final_config.source:
            print("❌ Ошибка: Укажите --source или создайте конфиг с --init-config")
            return 1

        print(f"📁 Директория: {final_config.dirname}")
        _generate_client(final_config, final_config.dirname)

    except SwaggerInterfaceError as e:
        print(f"❌ Ошибка генерации: {e}")
        return 1

    return 0


def generate():
    """Консольная команда swagger-interface"""
    sys.exit(main())


if __name__ == "__main__":
    generate()

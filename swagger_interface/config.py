"""
Конфигурация генерации интерфейса
"""

import os
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import toml

from .errors import ConfigError

CONFIG_FILE_NAME = "swagger.toml"


@dataclass
class GeneratorConfig:
    """Конфигурация генератора интерфейса из Swagger схемы"""

    source: Optional[str] = None
    package_name: Optional[str] = None
    component_name: str = "Api"
    module_name: str = "api"
    dirname: Optional[str] = None
    # operationId -> список заголовков вида "Name: value"
    header_overrides: Dict[str, List[str]] = field(default_factory=dict)

    @property
    def interface_name(self) -> str:
        return f"{self.component_name}ApiInterface"

    @classmethod
    def from_file(
        cls, config_path: str = CONFIG_FILE_NAME, search_dir: str = None
    ) -> Optional["GeneratorConfig"]:
        """Загрузка конфигурации из файла, None если файла нет"""
        if search_dir and os.path.isdir(search_dir):
            config_in_dir = os.path.join(search_dir, CONFIG_FILE_NAME)
            if os.path.exists(config_in_dir):
                config_path = config_in_dir

        if not os.path.exists(config_path):
            return None

        try:
            config_data = toml.load(config_path)
        except (toml.TomlDecodeError, OSError) as error:
            raise ConfigError(f"Не удалось прочитать {config_path}: {error}") from error

        return cls.from_dict(config_data)

    @classmethod
    def from_dict(cls, config_data: Dict) -> "GeneratorConfig":
        headers = config_data.get("headers", {})
        if not isinstance(headers, dict):
            raise ConfigError("[headers] должен быть таблицей operationId -> список")

        header_overrides = {}
        for operation_id, values in headers.items():
            if isinstance(values, str):
                values = [values]
            header_overrides[operation_id] = [str(value) for value in values]

        return cls(
            source=config_data.get("source"),
            package_name=config_data.get("package_name"),
            component_name=config_data.get("component_name", "Api"),
            module_name=config_data.get("module_name", "api"),
            dirname=config_data.get("dirname", "api_interface"),
            header_overrides=header_overrides,
        )

    def to_dict(self) -> Dict:
        config_data = {
            "source": self.source,
            "package_name": self.package_name,
            "component_name": self.component_name,
            "module_name": self.module_name,
            "dirname": self.dirname,
            "headers": self.header_overrides,
        }
        # toml не умеет None
        return {key: value for key, value in config_data.items() if value is not None}

    def save_to_file(self, config_path: str = CONFIG_FILE_NAME) -> None:
        """Сохранение конфигурации в файл"""
        with open(config_path, "w") as f:
            toml.dump(self.to_dict(), f)

    def merge_with_args(self, args) -> "GeneratorConfig":
        """Объединение с аргументами командной строки"""
        header_overrides = dict(self.header_overrides)
        header_overrides.update(parse_header_args(getattr(args, "header", None)))

        return GeneratorConfig(
            source=args.source or self.source,
            package_name=args.package or self.package_name,
            component_name=args.component or self.component_name,
            module_name=args.module or self.module_name,
            dirname=args.dirname or self.dirname,
            header_overrides=header_overrides,
        )


def parse_header_args(values: Optional[List[str]]) -> Dict[str, List[str]]:
    """
    Разбор аргументов --header вида operationId=Header: value.

    Повторяющиеся operationId накапливают заголовки.
    """
    header_overrides: Dict[str, List[str]] = {}
    for value in values or []:
        operation_id, separator, header = value.partition("=")
        if not separator or not operation_id.strip() or not header.strip():
            raise ConfigError(f"Ожидается operationId=Header: value, получено {value!r}")
        header_overrides.setdefault(operation_id.strip(), []).append(header.strip())
    return header_overrides

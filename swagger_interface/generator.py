"""
Главный модуль генератора - чистый интерфейс
"""

import logging

from .config import GeneratorConfig
from .internal.generator.client_generator import ClientGenerator
from .internal.generator.enum_extractor import EnumExtractor
from .internal.generator.interface_generator import InterfaceGenerator
from .internal.generator.model_generator import ModelGenerator
from .internal.generator.type_resolver import TypeResolver
from .internal.parser.swagger import load_document
from .internal.tracking import ErrorTracking, NoopErrorTracking
from .internal.types.descriptors import GenerationResult
from .internal.types.models import Project
from .internal.types.schema import SchemaDocument
from .internal.types.schema_resolver import SchemaNameResolver

logger = logging.getLogger(__name__)


class ApiInterfaceGenerator:
    """Генерация моделей, enum и интерфейса из разобранной схемы"""

    def __init__(
        self,
        document: SchemaDocument,
        config: GeneratorConfig = None,
        error_tracking: ErrorTracking = None,
    ):
        self.document = document
        self.config = config or GeneratorConfig()
        self.error_tracking = (
            NoopErrorTracking() if error_tracking is None else error_tracking
        )

    def generate(self) -> GenerationResult:
        """Один прогон генерации; каждый вызов строит результат заново"""
        enums = EnumExtractor(self.document, self.error_tracking).extract()

        type_resolver = TypeResolver(
            self.document.definitions, enum_names=[enum.name for enum in enums]
        )
        models, model_names = ModelGenerator(
            self.document, type_resolver, SchemaNameResolver()
        ).generate()

        interface = InterfaceGenerator(
            self.document,
            type_resolver,
            model_names,
            header_overrides=self.config.header_overrides,
            error_tracking=self.error_tracking,
        ).generate(self.config.interface_name)

        logger.info(
            "Сгенерировано: %d методов, %d моделей, %d enum",
            len(interface.methods),
            len(models),
            len(enums),
        )

        return GenerationResult(
            interface=interface, models=models, enums=enums, model_names=model_names
        )

    def render(self) -> Project:
        """Генерация и рендер в исходники Python клиента"""
        return ClientGenerator(self.generate(), self.config).generate()


def generate_interface(
    config: GeneratorConfig, error_tracking: ErrorTracking = None
) -> GenerationResult:
    """Загрузка схемы из config.source и генерация дескрипторов"""
    error_tracking = (
        NoopErrorTracking() if error_tracking is None else error_tracking
    )
    document = load_document(config.source, error_tracking)
    return ApiInterfaceGenerator(document, config, error_tracking).generate()

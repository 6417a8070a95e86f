import logging
from typing import Dict, FrozenSet, List, Tuple

from ..types.descriptors import ModelDefinition, ModelField
from ..types.schema import SchemaDocument, SchemaModel, SchemaProperty
from ..types.schema_resolver import SchemaNameResolver
from .type_resolver import TypeResolver

logger = logging.getLogger(__name__)


class ModelGenerator:
    """Генерация моделей данных из definitions"""

    def __init__(
        self,
        document: SchemaDocument,
        type_resolver: TypeResolver,
        schema_resolver: SchemaNameResolver = None,
    ):
        self.document = document
        self.type_resolver = type_resolver
        self.schema_resolver = schema_resolver or SchemaNameResolver()

    def generate(self) -> Tuple[List[ModelDefinition], List[str]]:
        """Модели в порядке документа и список их итоговых имен"""
        models = []
        model_names = []

        for key, definition in self.document.definitions.items():
            name = self.schema_resolver.register_schema(key)
            if name != key:
                logger.debug("Определение %r переименовано в %s", key, name)

            fields = [
                ModelField(name=field_name, type=self.type_resolver.resolve(prop))
                for field_name, prop in self.flatten_properties(definition).items()
            ]
            models.append(ModelDefinition(name=name, fields=fields))
            model_names.append(name)

        return models, model_names

    def flatten_properties(
        self, model: SchemaModel, visited: FrozenSet[str] = frozenset()
    ) -> Dict[str, SchemaProperty]:
        """
        Эффективный набор свойств модели.

        Для allOf свойства компонентов объединяются в порядке перечисления,
        более поздние одноименные поля перезаписывают ранние. Компоненты-ссылки
        раскрываются через definitions, циклические ссылки пропускаются.
        """
        if model.ref is not None:
            target = self.document.definitions.get(model.ref)
            if target is None or model.ref in visited:
                logger.debug("Компонент allOf %s не раскрыт", model.ref)
                return {}
            return self.flatten_properties(target, visited | {model.ref})

        if not model.is_composed:
            return dict(model.properties)

        properties: Dict[str, SchemaProperty] = {}
        for component in model.all_of:
            properties.update(self.flatten_properties(component, visited))
        return properties

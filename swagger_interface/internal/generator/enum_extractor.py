import logging
from typing import List

from ..tracking import ErrorTracking, NoopErrorTracking, safe_report
from ..types.descriptors import EnumConstant, EnumDefinition
from ..types.schema import (
    ParameterLocation,
    PropertyKind,
    SchemaDocument,
    SchemaProperty,
)
from ..types.schema_resolver import SchemaNameResolver
from ..utils import capitalize
from .type_resolver import INTEGER_SWAGGER_TYPE, STRING_SWAGGER_TYPE

logger = logging.getLogger(__name__)


class EnumExtractor:
    """
    Сбор перечислений из схемы.

    Первый проход - enum у path-параметров операций, второй - enum
    в свойствах определений (строковые inline enum и ссылки на
    определения с x-enumNames). Результат без дубликатов, в порядке
    первого появления.
    """

    def __init__(
        self, document: SchemaDocument, error_tracking: ErrorTracking = None
    ):
        self.document = document
        self.error_tracking = (
            NoopErrorTracking() if error_tracking is None else error_tracking
        )
        self._enums: List[EnumDefinition] = []

    def extract(self) -> List[EnumDefinition]:
        self._enums = []
        self._add_path_parameter_enums()
        self._add_model_enums()
        return list(self._enums)

    def _add_path_parameter_enums(self):
        for path, verb, operation in self.document.operations():
            try:
                for parameter in operation.parameters:
                    if parameter.location == ParameterLocation.PATH and parameter.enum:
                        self._add(
                            self._literal_enum(capitalize(parameter.name), parameter.enum)
                        )
            except Exception as error:
                safe_report(self.error_tracking, error)

    def _add_model_enums(self):
        for definition in self.document.definitions.values():
            for key, prop in definition.properties.items():
                try:
                    if prop.kind == PropertyKind.REF:
                        self._add_referenced_enum(prop)
                    elif prop.type == STRING_SWAGGER_TYPE and prop.enum:
                        self._add(self._literal_enum(capitalize(key), prop.enum))
                except Exception as error:
                    logger.debug("Enum для свойства %s пропущен: %s", key, error)

    def _add_referenced_enum(self, prop: SchemaProperty):
        enum_name = SchemaNameResolver.fallback_name(prop.ref)
        if self._has_name(enum_name):
            return

        model = self.document.definitions.get(prop.ref)
        if model is None or not model.enum:
            return
        if not model.enum_names:
            raise ValueError(f"У enum {prop.ref} нет x-enumNames")

        if model.type == INTEGER_SWAGGER_TYPE:
            values = [int(value) for value in model.enum]
        else:
            values = [str(value) for value in model.enum]

        self._add(
            EnumDefinition(
                name=enum_name,
                constants=[
                    EnumConstant(name=name, value=value)
                    for name, value in zip(model.enum_names, values)
                ],
            )
        )

    @staticmethod
    def _literal_enum(name: str, literals: list) -> EnumDefinition:
        return EnumDefinition(
            name=name,
            constants=[
                EnumConstant(name=str(literal), value=str(literal)) for literal in literals
            ],
        )

    def _has_name(self, name: str) -> bool:
        return any(enum.name == name for enum in self._enums)

    def _add(self, enum: EnumDefinition):
        """Первый встреченный enum с таким именем побеждает"""
        if enum in self._enums or self._has_name(enum.name):
            return
        self._enums.append(enum)

import logging
from typing import Dict, Iterable, Optional

from ..types.descriptors import PrimitiveType, ResolvedType
from ..types.schema import PropertyKind, SchemaModel, SchemaProperty
from ..types.schema_resolver import SchemaNameResolver
from ..utils import capitalize

logger = logging.getLogger(__name__)

ARRAY_SWAGGER_TYPE = "array"
INTEGER_SWAGGER_TYPE = "integer"
NUMBER_SWAGGER_TYPE = "number"
STRING_SWAGGER_TYPE = "string"
BOOLEAN_SWAGGER_TYPE = "boolean"


def resolve_scalar(
    schema_type: Optional[str], schema_format: Optional[str] = None
) -> ResolvedType:
    """Тип по имени swagger-типа и формату, без учета nullable"""
    if schema_type == INTEGER_SWAGGER_TYPE:
        if schema_format == "int64":
            return ResolvedType.of_primitive(PrimitiveType.INT64)
        return ResolvedType.of_primitive(PrimitiveType.INT32)
    if schema_type == NUMBER_SWAGGER_TYPE:
        return ResolvedType.of_primitive(PrimitiveType.DOUBLE)
    if schema_type == STRING_SWAGGER_TYPE:
        return ResolvedType.of_primitive(PrimitiveType.STRING)
    if schema_type == BOOLEAN_SWAGGER_TYPE:
        return ResolvedType.of_primitive(PrimitiveType.BOOL)
    if schema_type == ARRAY_SWAGGER_TYPE:
        # массив без описания элементов
        return ResolvedType.list_of(ResolvedType.of_primitive(PrimitiveType.STRING))

    # Неизвестный тип - ссылка на тип с таким именем
    return ResolvedType.reference(capitalize(schema_type or "object"))


class TypeResolver:
    """
    Сопоставляет свойства и параметры схемы с ResolvedType.

    Никогда не бросает исключений: непонятные узлы превращаются
    в ссылку на тип с наиболее вероятным именем.
    """

    def __init__(
        self,
        definitions: Dict[str, SchemaModel] = None,
        enum_names: Iterable[str] = (),
    ):
        self.definitions = definitions or {}
        self.enum_names = set(enum_names)

    def resolve(self, prop: SchemaProperty) -> ResolvedType:
        if prop.kind == PropertyKind.REF:
            resolved = self._resolve_ref(prop.ref or "")
        elif prop.kind == PropertyKind.ARRAY:
            resolved = self.resolve_array(prop.items)
        elif prop.kind == PropertyKind.PRIMITIVE:
            resolved = resolve_scalar(prop.type, prop.format)
        elif prop.kind == PropertyKind.OBJECT:
            resolved = resolve_scalar(prop.type or "object")
        else:
            raise AssertionError(f"Неизвестный вид свойства: {prop.kind}")

        return resolved.with_nullable(not prop.required)

    def resolve_array(self, items: Optional[SchemaProperty]) -> ResolvedType:
        """list-of(элемент); элементы никогда не nullable"""
        return ResolvedType.list_of(self.resolve_item(items))

    def resolve_item(self, items: Optional[SchemaProperty]) -> ResolvedType:
        if items is None:
            return ResolvedType.of_primitive(PrimitiveType.STRING)

        if items.kind == PropertyKind.REF:
            # Для элементов массива подстановки enum нет
            return ResolvedType.reference(items.ref or "")
        if items.kind == PropertyKind.ARRAY:
            return self.resolve_array(items.items)
        if items.type == INTEGER_SWAGGER_TYPE:
            if items.format == "int64":
                return ResolvedType.of_primitive(PrimitiveType.INT64)
            return ResolvedType.of_primitive(PrimitiveType.INT32)
        if items.type == NUMBER_SWAGGER_TYPE:
            if items.format == "float":
                return ResolvedType.of_primitive(PrimitiveType.FLOAT)
            return ResolvedType.of_primitive(PrimitiveType.DOUBLE)

        return resolve_scalar(items.type or "object", items.format)

    def _resolve_ref(self, name: str) -> ResolvedType:
        if SchemaNameResolver.fallback_name(name) in self.enum_names:
            backing = self.definitions.get(name)
            if backing is not None and backing.enum:
                return resolve_scalar(backing.type, backing.format)
            logger.debug("У enum %s нет определения со значениями", name)

        return ResolvedType.reference(name)

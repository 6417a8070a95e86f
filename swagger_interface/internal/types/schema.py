"""
Модель разобранной схемы API (Swagger 2.0 / OpenAPI 3)

Все объекты неизменяемы: документ собирается парсером один раз и дальше
только читается генераторами.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict


class PropertyKind(str, Enum):
    REF = "ref"
    ARRAY = "array"
    PRIMITIVE = "primitive"
    OBJECT = "object"


class ParameterLocation(str, Enum):
    PATH = "path"
    QUERY = "query"
    BODY = "body"
    HEADER = "header"
    FORM_DATA = "formData"
    OTHER = "other"

    @classmethod
    def from_raw(cls, value: Optional[str]) -> "ParameterLocation":
        for location in cls:
            if location.value == value:
                return location
        return cls.OTHER


class SchemaProperty(BaseModel):
    """Узел схемы свойства: ссылка, массив, примитив или объект"""

    model_config = ConfigDict(frozen=True)

    kind: PropertyKind
    type: Optional[str] = None
    format: Optional[str] = None
    required: bool = False
    ref: Optional[str] = None
    items: Optional["SchemaProperty"] = None
    enum: Optional[List[Any]] = None


class SchemaModel(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Optional[str] = None
    format: Optional[str] = None
    properties: Dict[str, SchemaProperty] = {}
    enum: Optional[List[Any]] = None
    # x-enumNames / x-enum-varnames
    enum_names: Optional[List[str]] = None
    all_of: List["SchemaModel"] = []
    # простое имя, если компонент allOf задан через $ref
    ref: Optional[str] = None

    @property
    def is_composed(self) -> bool:
        return bool(self.all_of)


class Parameter(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    location: ParameterLocation = ParameterLocation.OTHER
    type: Optional[str] = None
    format: Optional[str] = None
    required: bool = False
    enum: Optional[List[Any]] = None
    items: Optional[SchemaProperty] = None
    schema_: Optional[SchemaProperty] = None


class ResponseSpec(BaseModel):
    model_config = ConfigDict(frozen=True)

    description: Optional[str] = None
    schema_: Optional[SchemaProperty] = None


class Operation(BaseModel):
    model_config = ConfigDict(frozen=True)

    verb: str
    operation_id: Optional[str] = None
    parameters: List[Parameter] = []
    responses: Dict[str, ResponseSpec] = {}
    summary: Optional[str] = None
    deprecated: bool = False


class SchemaDocument(BaseModel):
    """Корневой объект схемы"""

    model_config = ConfigDict(frozen=True)

    definitions: Dict[str, SchemaModel] = {}
    paths: Dict[str, Dict[str, Operation]] = {}

    @property
    def is_empty(self) -> bool:
        return not self.definitions and not self.paths

    def operations(self):
        """Обход операций в порядке документа: пути, затем методы"""
        for path, verbs in self.paths.items():
            for verb, operation in verbs.items():
                yield path, verb, operation


SchemaProperty.model_rebuild()
SchemaModel.model_rebuild()

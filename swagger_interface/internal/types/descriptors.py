"""
Дескрипторы результата генерации

Чистые данные без поведения: их можно отрендерить в любой синтаксис.
"""

from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict


class TypeKind(str, Enum):
    PRIMITIVE = "primitive"
    REFERENCE = "reference"
    LIST = "list"
    DEFERRED = "deferred"


class PrimitiveType(str, Enum):
    INT32 = "int32"
    INT64 = "int64"
    FLOAT = "float"
    DOUBLE = "double"
    STRING = "string"
    BOOL = "bool"
    # "нет данных" для отложенного результата
    UNIT = "unit"


class HttpVerb(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"

    @classmethod
    def from_raw(cls, value: str) -> "HttpVerb":
        """Неизвестный метод трактуется как GET"""
        upper = (value or "").upper()
        for verb in cls:
            if verb.value in upper:
                return verb
        return cls.GET


class BindingLocation(str, Enum):
    PATH = "path"
    QUERY = "query"
    BODY = "body"


class ResolvedType(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: TypeKind
    primitive: Optional[PrimitiveType] = None
    name: Optional[str] = None
    item: Optional["ResolvedType"] = None
    nullable: bool = False

    @classmethod
    def of_primitive(cls, primitive: PrimitiveType, nullable: bool = False):
        return cls(kind=TypeKind.PRIMITIVE, primitive=primitive, nullable=nullable)

    @classmethod
    def reference(cls, name: str, nullable: bool = False):
        return cls(kind=TypeKind.REFERENCE, name=name, nullable=nullable)

    @classmethod
    def list_of(cls, item: "ResolvedType", nullable: bool = False):
        return cls(kind=TypeKind.LIST, item=item, nullable=nullable)

    @classmethod
    def deferred(cls, payload: "ResolvedType"):
        return cls(kind=TypeKind.DEFERRED, item=payload)

    @classmethod
    def no_payload(cls):
        return cls.deferred(cls.of_primitive(PrimitiveType.UNIT))

    def with_nullable(self, nullable: bool) -> "ResolvedType":
        return self.model_copy(update={"nullable": nullable})

    @property
    def is_no_payload(self) -> bool:
        return (
            self.kind == TypeKind.DEFERRED
            and self.item is not None
            and self.item.primitive == PrimitiveType.UNIT
        )

    def referenced_names(self) -> List[str]:
        if self.kind == TypeKind.REFERENCE:
            return [self.name]
        if self.item is not None:
            return self.item.referenced_names()
        return []


ResolvedType.model_rebuild()


class EnumConstant(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    value: Union[int, str]


class EnumDefinition(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    constants: List[EnumConstant] = []


class ModelField(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    type: ResolvedType


class ModelDefinition(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    fields: List[ModelField] = []

    def field(self, name: str) -> Optional[ModelField]:
        for model_field in self.fields:
            if model_field.name == name:
                return model_field
        return None


class MethodParameter(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    wire_name: str
    type: ResolvedType
    location: BindingLocation


class MethodDefinition(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    verb: HttpVerb
    path: str
    parameters: List[MethodParameter] = []
    return_type: ResolvedType
    headers: List[str] = []
    summary: Optional[str] = None
    deprecated: bool = False


class InterfaceDefinition(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    methods: List[MethodDefinition] = []

    def method(self, name: str) -> Optional[MethodDefinition]:
        for method in self.methods:
            if method.name == name:
                return method
        return None


class GenerationResult(BaseModel):
    """Три коллекции, которые передаются в рендер"""

    model_config = ConfigDict(frozen=True, protected_namespaces=())

    interface: InterfaceDefinition
    models: List[ModelDefinition] = []
    enums: List[EnumDefinition] = []
    model_names: List[str] = []

    @property
    def is_empty(self) -> bool:
        return not (self.interface.methods or self.models or self.enums)

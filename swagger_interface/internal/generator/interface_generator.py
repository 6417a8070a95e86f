import logging
from typing import Dict, Iterable, List, Optional

from ...errors import InvalidOperationError
from ..tracking import ErrorTracking, NoopErrorTracking, safe_report
from ..types.descriptors import (
    BindingLocation,
    HttpVerb,
    InterfaceDefinition,
    MethodDefinition,
    MethodParameter,
    PrimitiveType,
    ResolvedType,
)
from ..types.schema import (
    Operation,
    Parameter,
    ParameterLocation,
    PropertyKind,
    SchemaDocument,
)
from ..types.schema_resolver import SchemaNameResolver
from ..utils import capitalize, flatten_parameter_name
from .type_resolver import (
    ARRAY_SWAGGER_TYPE,
    BOOLEAN_SWAGGER_TYPE,
    STRING_SWAGGER_TYPE,
    TypeResolver,
    resolve_scalar,
)

logger = logging.getLogger(__name__)

OK_RESPONSE = "200"


class InterfaceGenerator:
    """Генерация RPC интерфейса: один метод на операцию схемы"""

    def __init__(
        self,
        document: SchemaDocument,
        type_resolver: TypeResolver,
        model_names: Iterable[str],
        header_overrides: Dict[str, List[str]] = None,
        error_tracking: ErrorTracking = None,
    ):
        self.document = document
        self.type_resolver = type_resolver
        self.model_names = set(model_names)
        self.header_overrides = header_overrides or {}
        self.error_tracking = (
            NoopErrorTracking() if error_tracking is None else error_tracking
        )

    def generate(self, interface_name: str) -> InterfaceDefinition:
        methods = []

        for path, verb, operation in self.document.operations():
            try:
                methods.append(self.generate_method(path, verb, operation))
            except Exception as error:
                logger.debug("Операция %s %s пропущена: %s", verb, path, error)
                safe_report(self.error_tracking, error)

        return InterfaceDefinition(name=interface_name, methods=methods)

    def generate_method(
        self, path: str, verb: str, operation: Operation
    ) -> MethodDefinition:
        if not operation.operation_id:
            raise InvalidOperationError("не указан operationId", path, verb)

        parameters = []
        for parameter in operation.parameters:
            method_parameter = self._method_parameter(parameter)
            if method_parameter is not None:
                parameters.append(method_parameter)

        return MethodDefinition(
            name=operation.operation_id,
            verb=HttpVerb.from_raw(verb),
            path=path.removeprefix("/"),
            parameters=parameters,
            return_type=self._return_type(operation),
            headers=list(self.header_overrides.get(operation.operation_id, [])),
            summary=operation.summary,
            deprecated=operation.deprecated,
        )

    def _method_parameter(self, parameter: Parameter) -> Optional[MethodParameter]:
        if parameter.location == ParameterLocation.BODY:
            location = BindingLocation.BODY
            resolved = self._body_type(parameter)
        elif parameter.location == ParameterLocation.QUERY:
            location = BindingLocation.QUERY
            if parameter.type == ARRAY_SWAGGER_TYPE:
                resolved = self._query_array_type(parameter)
            else:
                resolved = resolve_scalar(parameter.type, parameter.format)
        elif parameter.location == ParameterLocation.PATH:
            location = BindingLocation.PATH
            resolved = resolve_scalar(parameter.type, parameter.format)
        else:
            logger.debug(
                "Параметр %s (%s) не поддерживается", parameter.name, parameter.location
            )
            return None

        return MethodParameter(
            name=flatten_parameter_name(parameter.name),
            wire_name=parameter.name,
            type=resolved.with_nullable(not parameter.required),
            location=location,
        )

    def _body_type(self, parameter: Parameter) -> ResolvedType:
        schema = parameter.schema_

        if schema is not None and schema.kind == PropertyKind.REF:
            return ResolvedType.reference(
                SchemaNameResolver.fallback_name(capitalize(schema.ref or ""))
            )
        if schema is not None and schema.kind == PropertyKind.ARRAY:
            return self.type_resolver.resolve_array(schema.items)
        if schema is not None and schema.type == STRING_SWAGGER_TYPE:
            return ResolvedType.of_primitive(PrimitiveType.STRING)
        if schema is not None and schema.type == BOOLEAN_SWAGGER_TYPE:
            return ResolvedType.of_primitive(PrimitiveType.BOOL)

        # Инлайн схема без ссылки - тип с именем параметра
        return ResolvedType.reference(capitalize(parameter.name))

    @staticmethod
    def _query_array_type(parameter: Parameter) -> ResolvedType:
        items = parameter.items
        if items is None:
            return ResolvedType.list_of(ResolvedType.of_primitive(PrimitiveType.STRING))
        return ResolvedType.list_of(resolve_scalar(items.type, items.format))

    def _return_type(self, operation: Operation) -> ResolvedType:
        """
        Тип ответа по схеме ответа 200.

        Ссылка на сгенерированную модель или массив таких ссылок дают
        отложенный результат с моделью, все остальное - без данных.
        """
        response = operation.responses.get(OK_RESPONSE)
        schema = response.schema_ if response is not None else None
        if schema is None:
            return ResolvedType.no_payload()

        if schema.kind == PropertyKind.REF:
            name = SchemaNameResolver.fallback_name(schema.ref or "")
            if name in self.model_names:
                return ResolvedType.deferred(ResolvedType.reference(name))
        elif schema.kind == PropertyKind.ARRAY:
            items = schema.items
            if items is not None and items.kind == PropertyKind.REF:
                name = SchemaNameResolver.fallback_name(items.ref or "")
                if name in self.model_names:
                    return ResolvedType.deferred(
                        ResolvedType.list_of(ResolvedType.reference(name))
                    )

        logger.debug(
            "Ответ %s не ссылается на известную модель", operation.operation_id
        )
        return ResolvedType.no_payload()

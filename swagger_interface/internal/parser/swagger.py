"""
Загрузка и разбор Swagger / OpenAPI документа в SchemaDocument
"""

import logging
import os
import pathlib
from typing import Any, Dict, List, Optional

import httpx
import jsonref
from jsonref import JsonRef, JsonRefError

from ...errors import SchemaLoadError
from ..tracking import ErrorTracking, NoopErrorTracking, safe_report
from ..types.schema import (
    Operation,
    Parameter,
    ParameterLocation,
    PropertyKind,
    ResponseSpec,
    SchemaDocument,
    SchemaModel,
    SchemaProperty,
)

logger = logging.getLogger(__name__)

HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch")
ENUM_NAME_EXTENSIONS = ("x-enumNames", "x-enum-varnames")
JSON_CONTENT_TYPE = "application/json"


def simple_ref(ref: str) -> str:
    """#/definitions/Pet -> Pet"""
    return ref.rsplit("/", 1)[-1]


def ref_name(node: Any) -> Optional[str]:
    """Простое имя $ref, если узел является ссылкой"""
    # JsonRef проверяем первым: isinstance(proxy, dict) загружает цель ссылки
    if isinstance(node, JsonRef):
        return simple_ref(node.__reference__["$ref"])
    if isinstance(node, dict) and isinstance(node.get("$ref"), str):
        return simple_ref(node["$ref"])
    return None


class SwaggerParser:
    """Парсер Swagger 2.0 (и основных конструкций OpenAPI 3) в SchemaDocument"""

    def __init__(
        self, raw_document: Dict[str, Any], error_tracking: ErrorTracking = None
    ):
        self.raw_document = raw_document or {}
        self.error_tracking = (
            NoopErrorTracking() if error_tracking is None else error_tracking
        )

    def parse(self) -> SchemaDocument:
        """Разбор документа; битые определения и операции пропускаются"""
        return SchemaDocument(
            definitions=self._parse_definitions(),
            paths=self._parse_paths(),
        )

    def _section(self, name: str, getter) -> Dict[str, Any]:
        """Раздел верхнего уровня; не-объект или битая ссылка дают пустой раздел"""
        try:
            section = getter() or {}
            if not isinstance(section, dict):
                raise SchemaLoadError(f"раздел {name} должен быть объектом")
        except Exception as error:
            logger.warning("Раздел %s пропущен: %s", name, error)
            safe_report(self.error_tracking, error)
            return {}
        return section

    def _parse_definitions(self) -> Dict[str, SchemaModel]:
        raw_definitions = self._section(
            "definitions",
            lambda: self.raw_document.get("definitions")
            or (self.raw_document.get("components") or {}).get("schemas"),
        )

        definitions = {}
        for name, node in raw_definitions.items():
            try:
                definitions[name] = self.parse_model(node)
            except Exception as error:
                logger.debug("Определение %s пропущено: %s", name, error)
                safe_report(self.error_tracking, error)

        return definitions

    def _parse_paths(self) -> Dict[str, Dict[str, Operation]]:
        paths = {}
        raw_paths = self._section("paths", lambda: self.raw_document.get("paths"))
        for path, path_item in raw_paths.items():
            operations = {}
            try:
                shared_parameters = path_item.get("parameters") or []
                verbs = [verb for verb in path_item.keys() if verb in HTTP_METHODS]
            except Exception as error:
                safe_report(self.error_tracking, error)
                continue

            for verb in verbs:
                try:
                    operations[verb] = self.parse_operation(
                        verb, path_item[verb], shared_parameters
                    )
                except Exception as error:
                    logger.debug("Операция %s %s пропущена: %s", verb, path, error)
                    safe_report(self.error_tracking, error)

            paths[path] = operations

        return paths

    def parse_operation(
        self, verb: str, node: Dict[str, Any], shared_parameters: List = None
    ) -> Operation:
        parameters = [self.parse_parameter(p) for p in node.get("parameters") or []]

        # Параметры уровня пути, не переопределенные в операции
        declared = {(p.name, p.location) for p in parameters}
        for raw_parameter in shared_parameters or []:
            parameter = self.parse_parameter(raw_parameter)
            if (parameter.name, parameter.location) not in declared:
                parameters.append(parameter)

        request_body = node.get("requestBody")
        if request_body:
            schema = self._content_schema(request_body.get("content"))
            parameters.append(
                Parameter(
                    name="body",
                    location=ParameterLocation.BODY,
                    required=bool(request_body.get("required", False)),
                    schema_=self.parse_property(schema) if schema is not None else None,
                )
            )

        responses = {}
        for status_code, response in (node.get("responses") or {}).items():
            schema = response.get("schema")
            if schema is None:
                schema = self._content_schema(response.get("content"))
            responses[str(status_code)] = ResponseSpec(
                description=response.get("description"),
                schema_=self.parse_property(schema) if schema is not None else None,
            )

        return Operation(
            verb=verb,
            operation_id=node.get("operationId"),
            parameters=parameters,
            responses=responses,
            summary=node.get("summary"),
            deprecated=bool(node.get("deprecated", False)),
        )

    def parse_parameter(self, node: Dict[str, Any]) -> Parameter:
        location = ParameterLocation.from_raw(node.get("in"))
        schema = node.get("schema")

        if location == ParameterLocation.BODY:
            return Parameter(
                name=node["name"],
                location=location,
                required=bool(node.get("required", False)),
                schema_=self.parse_property(schema) if schema is not None else None,
            )

        # В OpenAPI 3 тип параметра лежит в schema
        source = node
        if "type" not in node and schema is not None and ref_name(schema) is None:
            source = schema

        items = source.get("items")
        return Parameter(
            name=node["name"],
            location=location,
            type=self._type_name(source.get("type")),
            format=source.get("format"),
            required=bool(node.get("required", False)),
            enum=source.get("enum"),
            items=self.parse_property(items, required=True) if items is not None else None,
        )

    def parse_model(self, node: Any) -> SchemaModel:
        name = ref_name(node)
        if name is not None:
            return SchemaModel(ref=name)

        if node.get("allOf"):
            components = [self.parse_model(component) for component in node["allOf"]]
            if node.get("properties"):
                components.append(self.parse_model({**node, "allOf": None}))
            return SchemaModel(type=self._type_name(node.get("type")), all_of=components)

        required = set(node.get("required") or [])
        properties = {
            key: self.parse_property(value, required=key in required)
            for key, value in (node.get("properties") or {}).items()
        }

        enum_names = None
        for extension in ENUM_NAME_EXTENSIONS:
            if node.get(extension):
                enum_names = [str(name) for name in node[extension]]
                break

        return SchemaModel(
            type=self._type_name(node.get("type")),
            format=node.get("format"),
            properties=properties,
            enum=node.get("enum"),
            enum_names=enum_names,
        )

    def parse_property(self, node: Any, required: bool = False) -> SchemaProperty:
        name = ref_name(node)
        if name is not None:
            return SchemaProperty(
                kind=PropertyKind.REF, type="ref", ref=name, required=required
            )

        if isinstance(node, bool) or not node:
            # `additionalProperties: true` и пустые схемы
            return SchemaProperty(kind=PropertyKind.OBJECT, type="object", required=required)

        schema_type = self._type_name(node.get("type"))

        if schema_type == "array":
            items = node.get("items")
            return SchemaProperty(
                kind=PropertyKind.ARRAY,
                type="array",
                required=required,
                items=self.parse_property(items, required=True) if items is not None else None,
            )

        if schema_type is None or schema_type == "object":
            return SchemaProperty(
                kind=PropertyKind.OBJECT, type="object", required=required
            )

        return SchemaProperty(
            kind=PropertyKind.PRIMITIVE,
            type=schema_type,
            format=node.get("format"),
            required=required,
            enum=node.get("enum"),
        )

    @staticmethod
    def _type_name(raw_type: Any) -> Optional[str]:
        """OpenAPI 3.1 допускает список типов: берем первый не-null"""
        if isinstance(raw_type, list):
            raw_type = next((t for t in raw_type if t != "null"), None)
        return raw_type

    @staticmethod
    def _content_schema(content: Optional[Dict[str, Any]]) -> Any:
        if not content:
            return None
        media = content.get(JSON_CONTENT_TYPE) or next(iter(content.values()))
        return (media or {}).get("schema")


def load_raw_document(source: str, timeout: float = 30.0) -> Dict[str, Any]:
    """Загрузка JSON документа по URL или из файла, $ref остаются ленивыми"""
    if not source:
        raise SchemaLoadError("источник схемы не указан")

    try:
        if source.startswith(("http://", "https://")):
            response = httpx.get(source, timeout=timeout, follow_redirects=True)
            response.raise_for_status()
            text = response.text
            base_uri = source
        elif os.path.exists(source):
            with open(source, "r", encoding="utf-8") as f:
                text = f.read()
            base_uri = pathlib.Path(source).absolute().as_uri()
        else:
            raise SchemaLoadError("файл не найден", source)

        document = jsonref.loads(text, base_uri=base_uri)
    except (httpx.HTTPError, OSError, ValueError, JsonRefError) as error:
        raise SchemaLoadError(str(error), source) from error

    if not isinstance(document, dict):
        raise SchemaLoadError("корень документа должен быть объектом", source)

    return document


def load_document(
    source: str, error_tracking: ErrorTracking = None, timeout: float = 30.0
) -> SchemaDocument:
    """Получение SchemaDocument; при любой ошибке загрузки - пустой документ"""
    error_tracking = (
        NoopErrorTracking() if error_tracking is None else error_tracking
    )

    try:
        raw_document = load_raw_document(source, timeout)
    except SchemaLoadError as error:
        logger.warning("Не удалось загрузить схему: %s", error)
        safe_report(error_tracking, error)
        return SchemaDocument()

    return SwaggerParser(raw_document, error_tracking).parse()

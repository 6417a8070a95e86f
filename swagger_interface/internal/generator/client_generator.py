import logging
from typing import Dict, Optional, Set

import toml
from pydantic import BaseModel

from ...config import GeneratorConfig
from ..types.descriptors import (
    BindingLocation,
    EnumDefinition,
    GenerationResult,
    MethodDefinition,
    ModelDefinition,
    PrimitiveType,
    ResolvedType,
    TypeKind,
)
from ..types.models import (
    Class,
    CodeBlock,
    CodeFile,
    Function,
    Parameter,
    Project,
    Variable,
)
from ..types.schema_resolver import SchemaNameResolver
from ..utils import (
    clean_class_name,
    clean_enum_attribute_name,
    clean_parameter_name,
)
from .templates import templates

logger = logging.getLogger(__name__)

PRIMITIVE_ANNOTATIONS = {
    PrimitiveType.INT32: "int",
    PrimitiveType.INT64: "int",
    PrimitiveType.FLOAT: "float",
    PrimitiveType.DOUBLE: "float",
    PrimitiveType.STRING: "str",
    PrimitiveType.BOOL: "bool",
    PrimitiveType.UNIT: "None",
}

TYPING_IMPORT = "from typing import Any, List, Optional"


class ClientGenerator:
    """Рендер дескрипторов генерации в исходники Python клиента"""

    def __init__(self, result: GenerationResult, config: GeneratorConfig = None):
        self.result = result
        self.config = config or GeneratorConfig()
        self.project = Project(name=self.config.package_name or "api")
        # имя в дескрипторах -> имя класса в сгенерированном коде
        self._enum_classes: Dict[str, str] = {}
        self._model_classes: Dict[str, str] = {}
        self.interface_class_name = clean_class_name(result.interface.name)

    def generate(self) -> Project:
        """Основная генерация"""
        self._generate_enums()
        self._generate_models()
        self._generate_interface()
        self._create_base_files()
        return self.project

    def _create_base_files(self):
        interface_name = self.interface_class_name
        module_name = clean_parameter_name(self.config.module_name)

        self.project.add_file("common.py").add_code_block(CodeBlock(code=templates.common))
        self.project.add_file("client.py").add_code_block(
            CodeBlock(
                code=templates.client.format(
                    interface_name=interface_name, module_name=module_name
                )
            )
        )
        self.project.add_file("__init__.py").add_code_block(
            CodeBlock(code=templates.package_init.format(interface_name=interface_name))
        )

        if self.config.source:
            self.project.add_file("swagger.toml").add_code_block(
                CodeBlock(code=toml.dumps(self.config.to_dict()))
            )

    def _generate_enums(self):
        enums_file = self.project.add_file("enums.py")
        enums_file.imports.append("from enum import Enum")

        for enum in self.result.enums:
            class_name = clean_class_name(enum.name)
            if class_name in enums_file.classes:
                logger.debug("Enum %s уже сгенерирован", class_name)
                continue

            self._enum_classes[enum.name] = class_name
            enums_file.add_class(self._enum_class(class_name, enum))

    @staticmethod
    def _enum_class(class_name: str, enum: EnumDefinition):
        is_int = bool(enum.constants) and all(
            isinstance(constant.value, int) for constant in enum.constants
        )

        members = []
        used_names: Set[str] = set()
        for constant in enum.constants:
            attr_name = clean_enum_attribute_name(constant.name)
            original_attr_name, counter = attr_name, 2
            while attr_name in used_names:
                attr_name = f"{original_attr_name}_{counter}"
                counter += 1
            used_names.add(attr_name)

            members.append(Parameter(name=attr_name, default=repr(constant.value)))

        return Class(
            name=class_name,
            inherits=["int" if is_int else "str", "Enum"],
            parameters=members,
        )

    def _generate_models(self):
        models_file = self.project.add_file("models.py")
        models_file.imports.extend(
            [
                "from __future__ import annotations",
                "",
                TYPING_IMPORT,
                "",
                "from pydantic import BaseModel, ConfigDict, Field",
            ]
        )

        taken = set(self._enum_classes.values())
        for model in self.result.models:
            class_name = clean_class_name(model.name)
            if class_name in self._enum_classes.values() and not model.fields:
                # определение-перечисление уже сгенерировано как enum
                logger.debug("Модель %s совпадает с enum, пропущена", class_name)
                continue
            if class_name in self._enum_classes.values():
                renamed = SchemaNameResolver.FALLBACK_PREFIX + class_name
                while renamed in taken:
                    renamed = f"{renamed}_"
                logger.warning(
                    "Модель %s совпадает с enum, класс переименован в %s",
                    class_name,
                    renamed,
                )
                class_name = renamed
            elif class_name in taken:
                continue
            taken.add(class_name)
            self._model_classes[model.name] = class_name

        used_enums: Set[str] = set()
        for model in self.result.models:
            class_name = self._model_classes.get(model.name)
            if class_name is None or class_name in models_file.classes:
                continue
            self._add_model_class(models_file, class_name, model, used_enums)

        enum_imports = sorted(used_enums & set(self._enum_classes.values()))
        if enum_imports:
            models_file.imports.append(f"from .enums import {', '.join(enum_imports)}")

        rebuild = "\n".join(f"{name}.model_rebuild()" for name in models_file.classes)
        if rebuild:
            models_file.add_code_block(CodeBlock(code=rebuild, order=-100))

    def _add_model_class(
        self, models_file: CodeFile, class_name: str, model: ModelDefinition, used_enums
    ):
        model_class = models_file.add_class(class_name, inherits=["BaseModel"])
        model_class.code_blocks.append(
            CodeBlock(
                code="model_config = ConfigDict(populate_by_name=True, protected_namespaces=())"
            )
        )

        used_names: Set[str] = set()
        for model_field in model.fields:
            field_name = clean_parameter_name(model_field.name)
            if hasattr(BaseModel, field_name) or field_name.startswith("_"):
                field_name = f"{field_name.lstrip('_')}_field"
            while field_name in used_names:
                field_name = f"{field_name}_"
            used_names.add(field_name)

            var_type = self.annotation(model_field.type, used_enums)
            if field_name != model_field.name:
                default = (
                    f"Field(default=None, alias={model_field.name!r})"
                    if model_field.type.nullable
                    else f"Field(alias={model_field.name!r})"
                )
            else:
                default = "None" if model_field.type.nullable else None

            model_class.parameters.append(
                Parameter(name=field_name, var_type=var_type, default=default)
            )

    def _generate_interface(self):
        interface = self.result.interface
        interface_file = self.project.add_file("interface.py")

        used_types: Set[str] = set()
        interface_class = interface_file.add_class(
            self.interface_class_name,
            inherits=["ApiInterface"],
            description=f"Методы API {self.config.component_name}",
        )

        for method in interface.methods:
            function = self._method_function(method, used_types)
            base_name, counter = function.name, 2
            while function.name in interface_class.functions:
                function.name = f"{base_name}_{counter}"
                counter += 1
            interface_class.add_function(function)

        verbs = sorted({method.verb.value.lower() for method in interface.methods})
        has_headers = any(method.headers for method in interface.methods)
        common_names = ["ApiInterface"] + verbs + (["headers"] if has_headers else [])

        interface_file.imports.extend(
            [
                "from __future__ import annotations",
                "",
                TYPING_IMPORT,
                "",
                f"from .common import {', '.join(common_names)}",
            ]
        )

        enum_imports = sorted(used_types & set(self._enum_classes.values()))
        model_imports = sorted(used_types & set(self._model_classes.values()))
        if enum_imports:
            interface_file.imports.append(f"from .enums import {', '.join(enum_imports)}")
        if model_imports:
            interface_file.imports.append(f"from .models import {', '.join(model_imports)}")

    def _method_function(self, method: MethodDefinition, used_types: Set[str]) -> Function:
        parameters = [Parameter(name="self")]
        path_params: Dict[str, str] = {}
        query: Dict[str, str] = {}
        body: Optional[str] = None

        used_names = {"self"}
        for method_parameter in method.parameters:
            name = clean_parameter_name(method_parameter.name)
            while name in used_names:
                name = f"{name}_"
            used_names.add(name)

            parameters.append(
                Parameter(
                    name=name,
                    var_type=self.annotation(method_parameter.type, used_types),
                    default="None" if method_parameter.type.nullable else None,
                )
            )

            if method_parameter.location == BindingLocation.PATH:
                path_params[name] = method_parameter.wire_name
            elif method_parameter.location == BindingLocation.QUERY:
                query[name] = method_parameter.wire_name
            else:
                body = name

        decorator_args = [repr(method.path)]
        if path_params:
            decorator_args.append(f"path_params={path_params!r}")
        if query:
            decorator_args.append(f"query={query!r}")
        if body:
            decorator_args.append(f"body={body!r}")

        payload = method.return_type
        if payload.kind == TypeKind.DEFERRED:
            payload = payload.item
        response_model = self._response_model(payload, used_types)
        if response_model:
            decorator_args.append(f"response_model={response_model}")
            if payload.kind == TypeKind.LIST:
                decorator_args.append("many=True")

        decorators = [f"@{method.verb.value.lower()}({', '.join(decorator_args)})"]
        if method.headers:
            decorators.append(f"@headers({', '.join(repr(h) for h in method.headers)})")

        description = method.summary or ""
        if method.deprecated:
            description = (description + "\n\nDeprecated.").strip()

        return Function(
            name=clean_parameter_name(method.name),
            parameters=parameters,
            response=str(self.annotation(payload, used_types)) if payload else "None",
            async_def=True,
            decorators=decorators,
            description=description or None,
        )

    def _response_model(self, payload: Optional[ResolvedType], used_types: Set[str]) -> Optional[str]:
        if payload is None:
            return None
        target = payload.item if payload.kind == TypeKind.LIST else payload
        if target is None or target.kind != TypeKind.REFERENCE:
            return None
        class_name = self._class_name(target.name)
        if class_name not in self._model_classes.values():
            return None
        used_types.add(class_name)
        return class_name

    def _class_name(self, name: str) -> Optional[str]:
        """Имя класса для ссылки на тип; None если такой тип не генерировался"""
        for candidate in (name, SchemaNameResolver.fallback_name(name)):
            if candidate in self._model_classes:
                return self._model_classes[candidate]
            if candidate in self._enum_classes:
                return self._enum_classes[candidate]
        return None

    def annotation(self, resolved: ResolvedType, used_types: Set[str] = None) -> Variable:
        """ResolvedType -> аннотация типа Python"""
        used_types = used_types if used_types is not None else set()

        if resolved.kind == TypeKind.PRIMITIVE:
            var_type = Variable(value=PRIMITIVE_ANNOTATIONS[resolved.primitive])
        elif resolved.kind == TypeKind.REFERENCE:
            class_name = self._class_name(resolved.name or "")
            if class_name is None:
                logger.debug("Тип %s не сгенерирован, используется Any", resolved.name)
                var_type = Variable(value="Any")
            else:
                used_types.add(class_name)
                var_type = Variable(value=class_name)
        elif resolved.kind == TypeKind.LIST:
            var_type = Variable(
                value=[self.annotation(resolved.item, used_types)], wrap_name="List"
            )
        else:
            # Отложенный результат раскрывается в тип async метода
            return self.annotation(resolved.item, used_types)

        if resolved.nullable and str(var_type) not in ("Any", "None"):
            return Variable(value=[var_type], wrap_name="Optional")
        return var_type


def render_files(project: Project) -> Dict[str, str]:
    """Имя файла -> исходный текст"""
    return {code_file.file_name: str(code_file) for code_file in project.files}


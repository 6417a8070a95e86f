"""
Тесты для генератора интерфейса
"""

import logging

import pytest

from swagger_interface import ApiInterfaceGenerator, GeneratorConfig
from swagger_interface.internal.parser.swagger import SwaggerParser
from swagger_interface.internal.tracking import (
    LoggingErrorTracking,
    RecordingErrorTracking,
)
from swagger_interface.internal.types.descriptors import (
    GenerationResult,
    PrimitiveType,
    ResolvedType,
)
from swagger_interface.internal.types.schema import SchemaDocument


def operation(operation_id):
    return {
        "operationId": operation_id,
        "responses": {"200": {"description": "OK"}},
    }


class FailingErrorTracking:
    """Трекер, который сам падает на каждой ошибке"""

    def __init__(self):
        self.calls = 0

    def report(self, failure):
        self.calls += 1
        raise RuntimeError("tracker is down")


class TestApiInterfaceGenerator:
    """Тесты основной функциональности генератора"""

    def test_petstore_generation(self, petstore_document):
        """Тест полной генерации по схеме зоомагазина"""
        config = GeneratorConfig(component_name="Pet")
        result = ApiInterfaceGenerator(petstore_document, config).generate()

        assert isinstance(result, GenerationResult)
        assert result.interface.name == "PetApiInterface"
        assert len(result.interface.methods) == 6
        assert [model.name for model in result.models] == [
            "Category",
            "Pet",
            "PetSize",
            "Model2fa",
        ]
        assert result.model_names == ["Category", "Pet", "PetSize", "Model2fa"]
        assert [enum.name for enum in result.enums] == ["Kind", "Status", "PetSize"]

    def test_enum_reference_resolved_in_models(self, petstore_document):
        """Ссылка на enum с x-enumNames заменяется базовым примитивом"""
        result = ApiInterfaceGenerator(petstore_document).generate()

        pet = result.models[1]
        assert pet.field("size").type == ResolvedType.of_primitive(
            PrimitiveType.INT32, nullable=True
        )

    def test_every_reference_is_known(self, petstore_document):
        """Каждая ссылка в моделях указывает на модель или enum"""
        result = ApiInterfaceGenerator(petstore_document).generate()
        known = set(result.model_names) | {enum.name for enum in result.enums}

        for model in result.models:
            for model_field in model.fields:
                for name in model_field.type.referenced_names():
                    assert name in known

    def test_empty_document(self):
        """Пустая схема дает пустой результат без ошибок"""
        error_tracking = RecordingErrorTracking()
        result = ApiInterfaceGenerator(SchemaDocument(), error_tracking=error_tracking).generate()

        assert result.is_empty
        assert result.interface.methods == []
        assert error_tracking.failures == []

    def test_generation_is_repeatable(self, petstore_document):
        """Повторный вызов дает тот же результат"""
        generator = ApiInterfaceGenerator(petstore_document)

        assert generator.generate() == generator.generate()

    def test_header_overrides(self, petstore_document):
        """Заголовки из конфигурации прикрепляются к своему методу"""
        config = GeneratorConfig(header_overrides={"getPetById": ["Accept: text/plain"]})
        result = ApiInterfaceGenerator(petstore_document, config).generate()

        assert result.interface.method("getPetById").headers == ["Accept: text/plain"]
        assert result.interface.method("findPets").headers == []


class TestFailureIsolation:
    """Ошибки в отдельных фрагментах схемы не прерывают генерацию"""

    @pytest.fixture
    def raw_with_malformed_operation(self):
        paths = {
            f"/resource{index}": {"get": operation(f"getResource{index}")}
            for index in range(9)
        }
        # без operationId
        paths["/broken"] = {"get": {"responses": {"200": {"description": "OK"}}}}
        return {"paths": paths}

    def test_malformed_operation_is_reported(self, raw_with_malformed_operation):
        """Тест: 9 корректных операций и одна битая"""
        error_tracking = RecordingErrorTracking()
        document = SwaggerParser(raw_with_malformed_operation, error_tracking).parse()

        result = ApiInterfaceGenerator(document, error_tracking=error_tracking).generate()

        assert len(result.interface.methods) == 9
        assert len(error_tracking.failures) == 1

    def test_failing_tracker_does_not_abort(self, raw_with_malformed_operation):
        """Сбой самого трекера не прерывает генерацию"""
        error_tracking = FailingErrorTracking()
        document = SwaggerParser(raw_with_malformed_operation).parse()

        result = ApiInterfaceGenerator(document, error_tracking=error_tracking).generate()

        assert len(result.interface.methods) == 9
        assert error_tracking.calls == 1

    def test_malformed_definition_is_skipped(self):
        """Битое определение пропускается, остальные генерируются"""
        raw = {
            "definitions": {
                "Good": {"type": "object", "properties": {"id": {"type": "integer"}}},
                "Bad": {"type": "object", "properties": "not a mapping"},
            }
        }
        error_tracking = RecordingErrorTracking()
        document = SwaggerParser(raw, error_tracking).parse()

        result = ApiInterfaceGenerator(document, error_tracking=error_tracking).generate()

        assert [model.name for model in result.models] == ["Good"]
        assert len(error_tracking.failures) == 1

    def test_empty_recorder_is_not_replaced(self):
        """Пустой трекер передается компонентам как есть"""
        error_tracking = RecordingErrorTracking()

        assert SwaggerParser({}, error_tracking).error_tracking is error_tracking
        assert (
            ApiInterfaceGenerator(SchemaDocument(), error_tracking=error_tracking).error_tracking
            is error_tracking
        )

    def test_logging_tracker_writes_warning(self, caplog, raw_with_malformed_operation):
        """LoggingErrorTracking пишет пропуски в лог"""
        document = SwaggerParser(raw_with_malformed_operation).parse()

        with caplog.at_level(logging.WARNING):
            ApiInterfaceGenerator(
                document, error_tracking=LoggingErrorTracking()
            ).generate()

        assert "/broken" in caplog.text

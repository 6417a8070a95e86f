"""
Тесты сбора перечислений
"""

from swagger_interface.internal.generator.enum_extractor import EnumExtractor
from swagger_interface.internal.parser.swagger import SwaggerParser
from swagger_interface.internal.tracking import RecordingErrorTracking
from swagger_interface.internal.types.descriptors import EnumConstant, EnumDefinition


def extract(raw, error_tracking=None):
    document = SwaggerParser(raw).parse()
    return EnumExtractor(document, error_tracking).extract()


class TestEnumExtractor:
    """Тесты EnumExtractor"""

    def test_petstore_enums_in_order(self, petstore_document):
        enums = EnumExtractor(petstore_document).extract()

        assert [enum.name for enum in enums] == ["Kind", "Status", "PetSize"]

    def test_path_parameter_enum(self, petstore_document):
        enums = EnumExtractor(petstore_document).extract()

        assert enums[0] == EnumDefinition(
            name="Kind",
            constants=[
                EnumConstant(name="dog", value="dog"),
                EnumConstant(name="cat", value="cat"),
            ],
        )

    def test_integer_enum_with_names(self, petstore_document):
        enums = EnumExtractor(petstore_document).extract()
        pet_size = enums[2]

        assert [(c.name, c.value) for c in pet_size.constants] == [
            ("Small", 1),
            ("Medium", 2),
            ("Large", 3),
        ]
        assert all(isinstance(c.value, int) for c in pet_size.constants)

    def test_string_enum_with_names_keeps_string_values(self):
        raw = {
            "definitions": {
                "Color": {
                    "type": "string",
                    "enum": ["r", "g"],
                    "x-enum-varnames": ["Red", "Green"],
                },
                "Paint": {
                    "type": "object",
                    "properties": {"color": {"$ref": "#/definitions/Color"}},
                },
            }
        }

        enums = extract(raw)

        assert enums == [
            EnumDefinition(
                name="Color",
                constants=[
                    EnumConstant(name="Red", value="r"),
                    EnumConstant(name="Green", value="g"),
                ],
            )
        ]

    def test_enum_without_names_is_skipped_silently(self):
        raw = {
            "definitions": {
                "Level": {"type": "integer", "enum": [1, 2]},
                "Task": {
                    "type": "object",
                    "properties": {"level": {"$ref": "#/definitions/Level"}},
                },
            }
        }
        error_tracking = RecordingErrorTracking()

        assert extract(raw, error_tracking) == []
        assert error_tracking.failures == []

    def test_non_string_inline_enum_is_ignored(self):
        raw = {
            "definitions": {
                "Task": {
                    "type": "object",
                    "properties": {"priority": {"type": "integer", "enum": [1, 2]}},
                }
            }
        }

        assert extract(raw) == []

    def test_duplicates_are_removed(self):
        raw = {
            "definitions": {
                "Order": {
                    "type": "object",
                    "properties": {"status": {"type": "string", "enum": ["new", "done"]}},
                },
                "Invoice": {
                    "type": "object",
                    "properties": {"status": {"type": "string", "enum": ["new", "done"]}},
                },
            }
        }

        enums = extract(raw)

        assert len(enums) == 1
        assert enums[0].name == "Status"

    def test_first_enum_with_same_name_wins(self):
        raw = {
            "definitions": {
                "Order": {
                    "type": "object",
                    "properties": {"status": {"type": "string", "enum": ["new"]}},
                },
                "Invoice": {
                    "type": "object",
                    "properties": {"status": {"type": "string", "enum": ["paid"]}},
                },
            }
        }

        enums = extract(raw)

        assert len(enums) == 1
        assert enums[0].constants == [EnumConstant(name="new", value="new")]

    def test_invalid_enum_name_gets_fallback(self):
        raw = {
            "definitions": {
                "2fa-mode": {
                    "type": "string",
                    "enum": ["sms"],
                    "x-enumNames": ["Sms"],
                },
                "Settings": {
                    "type": "object",
                    "properties": {"mode": {"$ref": "#/definitions/2fa-mode"}},
                },
            }
        }

        enums = extract(raw)

        assert [enum.name for enum in enums] == ["Model2fa-mode"]

    def test_empty_document(self):
        assert extract({}) == []

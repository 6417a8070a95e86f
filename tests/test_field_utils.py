"""
Тесты утилит для имен
"""

import logging

import pytest

from swagger_interface.internal.types.schema_resolver import SchemaNameResolver
from swagger_interface.internal.utils import (
    capitalize,
    clean_class_name,
    clean_enum_attribute_name,
    clean_parameter_name,
    flatten_parameter_name,
    is_valid_identifier,
)


class TestNames:
    """Тесты преобразования имен"""

    def test_capitalize_keeps_tail(self):
        assert capitalize("petStatus") == "PetStatus"
        assert capitalize("HTTPCode") == "HTTPCode"
        assert capitalize("") == ""

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("petId", "petId"),
            ("foo.bar", "fooBar"),
            ("page.size", "pageSize"),
            ("a.b.c", "aBC"),
        ],
    )
    def test_flatten_parameter_name(self, name, expected):
        assert flatten_parameter_name(name) == expected

    def test_flatten_many_dots_warns(self, caplog):
        with caplog.at_level(logging.WARNING):
            flatten_parameter_name("filter.owner.name")

        assert "filter.owner.name" in caplog.text

    def test_is_valid_identifier(self):
        assert is_valid_identifier("Pet")
        assert not is_valid_identifier("2fa")
        assert not is_valid_identifier("class")
        assert not is_valid_identifier("pet-store")
        assert not is_valid_identifier("")

    def test_clean_class_name(self):
        assert clean_class_name("Pet") == "Pet"
        assert clean_class_name("pet-store") == "PetStore"
        assert clean_class_name("2fa") == "Model2fa"

    def test_clean_parameter_name(self):
        assert clean_parameter_name("api-key") == "api_key"
        assert clean_parameter_name("from") == "from_field"
        assert clean_parameter_name("1st") == "param_1st"

    def test_clean_enum_attribute_name(self):
        assert clean_enum_attribute_name("in progress") == "IN_PROGRESS"
        assert clean_enum_attribute_name("1") == "VALUE_1"
        assert clean_enum_attribute_name("") == "EMPTY"


class TestSchemaNameResolver:
    """Тесты SchemaNameResolver"""

    def test_valid_name_is_kept(self):
        assert SchemaNameResolver().register_schema("Pet") == "Pet"

    def test_invalid_name_gets_prefix(self):
        assert SchemaNameResolver().register_schema("2fa") == "Model2fa"
        assert SchemaNameResolver.fallback_name("import") == "ModelImport"

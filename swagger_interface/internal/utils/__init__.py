"""Утилиты для генератора"""

from .field_utils import (
    capitalize,
    clean_class_name,
    clean_enum_attribute_name,
    clean_parameter_name,
    flatten_parameter_name,
    is_valid_identifier,
)

__all__ = [
    "capitalize",
    "clean_class_name",
    "clean_enum_attribute_name",
    "clean_parameter_name",
    "flatten_parameter_name",
    "is_valid_identifier",
]

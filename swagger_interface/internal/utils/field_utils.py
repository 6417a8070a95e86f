"""Утилиты для работы с именами типов, полей и параметров"""

import keyword
import logging
import re

logger = logging.getLogger(__name__)


def capitalize(name: str) -> str:
    """
    Делает заглавной только первую букву, остальные не трогает.

    В отличие от str.capitalize() не переводит хвост в нижний регистр.

    Examples:
        >>> capitalize("petStatus")
        'PetStatus'
        >>> capitalize("")
        ''
    """
    return name[:1].upper() + name[1:]


def is_valid_identifier(name: str) -> bool:
    """Можно ли использовать имя как идентификатор Python без изменений"""
    return bool(name) and name.isidentifier() and not keyword.iskeyword(name)


def flatten_parameter_name(name: str) -> str:
    """
    Преобразует имя вида foo.bar в fooBar для идентификатора привязки.

    Все сегменты после первого пишутся с заглавной буквы.

    Examples:
        >>> flatten_parameter_name("foo.bar")
        'fooBar'
        >>> flatten_parameter_name("petId")
        'petId'
    """
    segments = name.split(".")
    if len(segments) > 2:
        logger.warning("Имя параметра %r содержит больше одной точки", name)
    return "".join(
        capitalize(segment) if index > 0 else segment
        for index, segment in enumerate(segments)
    )


def clean_class_name(name: str) -> str:
    """Очистка имени типа для использования как имя класса Python"""
    if is_valid_identifier(name):
        return name

    clean = re.sub(r"[^a-zA-Z0-9_]", "_", name)
    parts = [capitalize(part) for part in clean.split("_") if part]
    clean = "".join(parts)

    if clean and clean[0].isdigit():
        clean = f"Model{clean}"
    if not is_valid_identifier(clean):
        clean = f"{clean}Model" if clean else "Model"

    return clean


def clean_parameter_name(name: str) -> str:
    """Очистка имени поля или параметра для использования в Python"""
    name = "".join(c if c.isalnum() or c == "_" else "_" for c in name)
    # Убираем множественные подчеркивания
    while "__" in name:
        name = name.replace("__", "_")
    name = name.strip("_")

    if name and name[0].isdigit():
        name = f"param_{name}"
    if not name:
        name = "param"
    if keyword.iskeyword(name):
        name = f"{name}_field"

    return name


def clean_enum_attribute_name(value: str) -> str:
    """Очистка значения enum для использования как имя атрибута Python"""
    if not value:
        return "EMPTY"
    if value.isspace():
        return "SPACE"

    name = "".join(c.upper() if c.isalnum() else "_" for c in value)
    while "__" in name:
        name = name.replace("__", "_")
    name = name.strip("_")

    if name and name[0].isdigit():
        name = f"VALUE_{name}"
    if not name:
        return "VALUE"

    return name

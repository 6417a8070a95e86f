"""Генератор типизированного интерфейса из Swagger схемы"""

from .config import GeneratorConfig
from .generator import ApiInterfaceGenerator, generate_interface

__all__ = ["ApiInterfaceGenerator", "GeneratorConfig", "generate_interface"]

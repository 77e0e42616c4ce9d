"""
TypeScript code generator module.

Generates TypeScript classes, interfaces and enums from Python dataclasses.
"""

from .generator import (
    ConversionState,
    TypeScriptify,
    create_generator,
    create_interface_generator,
)
from .builder import TypeScriptClassBuilder
from .enums import EnumElement, EnumRegistry
from .types import TS_KIND_MAP, TypeScriptTypeMapper

__all__ = [
    "TypeScriptify",
    "ConversionState",
    "TypeScriptClassBuilder",
    "TypeScriptTypeMapper",
    "TS_KIND_MAP",
    "EnumElement",
    "EnumRegistry",
    # Factory functions
    "create_generator",
    "create_interface_generator",
]

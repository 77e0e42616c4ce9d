"""
tsgen code generation module.

Generates TypeScript definitions from Python dataclasses.
"""

from .core import (
    CodeGenerator,
    ConfigError,
    EnumRegistrationError,
    FieldDescriptor,
    FieldOptions,
    FieldTag,
    GenerationResult,
    GeneratorConfig,
    GeneratorError,
    Kind,
    StructType,
    TypeDescriptor,
    UnsupportedTypeError,
    describe,
    generate_code,
    load_config,
    load_custom_code,
    ts_field,
)
from .languages import TypeScriptify, create_generator, create_interface_generator


def quick_generate(*types, enums=(), **options) -> str:
    """
    Quick code generation for a handful of types.

    Args:
        *types: Dataclasses to convert
        enums: Enum collections to register
        **options: Generator options

    Returns:
        Generated code string
    """
    generator = create_generator(**options)
    for values in enums:
        generator.add_enum(values)
    for tp in types:
        generator.add(tp)

    result = generate_code(generator)
    if result.success:
        return result.code
    raise result.exception


__all__ = [
    "CodeGenerator",
    "GenerationResult",
    "GeneratorConfig",
    "TypeScriptify",
    "Kind",
    "TypeDescriptor",
    "FieldDescriptor",
    "FieldTag",
    "FieldOptions",
    "StructType",
    "GeneratorError",
    "UnsupportedTypeError",
    "EnumRegistrationError",
    "ConfigError",
    "describe",
    "ts_field",
    "generate_code",
    "load_config",
    "load_custom_code",
    "create_generator",
    "create_interface_generator",
    "quick_generate",
]
